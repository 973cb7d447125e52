"""FastAPI application entry point.

Start with:
    uvicorn eglaw.main:app --reload --host 0.0.0.0 --port 8000
"""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from eglaw.api.routes import API_VERSION, router
from eglaw.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Egyptian Statute Parser",
    description=(
        "Turns extracted text of Egyptian laws (pdftotext or OCR output) into "
        "structured acts with article-level provisions and definitions."
    ),
    version=API_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log request method, path, status and elapsed time."""
    start = time.time()
    response = await call_next(request)
    logger.info(
        f"{request.method} {request.url.path} - {response.status_code} - "
        f"{time.time() - start:.3f}s"
    )
    return response


app.include_router(router, prefix="/api")
