"""Statute parsing API endpoints.

The /acts route runs the full pipeline on text supplied by the caller:
  normalize -> find headings -> assemble provisions -> resolve title
"""

import asyncio
import logging

from fastapi import APIRouter, HTTPException

from eglaw.api.models import (
    ActRequest,
    ActResponse,
    HealthResponse,
    NormalizeRequest,
    NormalizeResponse,
)
from eglaw.ingestion.acts import BuildOptions, LawMetadata, build_act
from eglaw.ingestion.normalizer import normalize_text

router = APIRouter()
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


async def _run_sync(func, *args):
    """Run a synchronous function in the default thread-pool executor."""
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(None, func, *args)


@router.post("/acts", response_model=ActResponse)
async def create_act(request: ActRequest):
    """Parse a statute's text into an act with provisions and definitions."""
    metadata = LawMetadata(**request.metadata.model_dump())
    options = BuildOptions(**request.options.model_dump())

    try:
        act = await _run_sync(
            build_act, metadata, request.raw_text, request.source_reference, options
        )
    except Exception as e:
        logger.error(f"Error building act: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))

    if act is None:
        raise HTTPException(
            status_code=422,
            detail="No article sections (مادة/Article) with content found in the text",
        )
    return ActResponse(**act.to_dict())


@router.post("/normalize", response_model=NormalizeResponse)
async def normalize(request: NormalizeRequest):
    """Fold presentation forms, digits and bidi marks into plain text."""
    try:
        text = await _run_sync(normalize_text, request.text)
    except Exception as e:
        logger.error(f"Error normalizing text: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
    return NormalizeResponse(text=text, line_count=len(text.split("\n")) if text else 0)


@router.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return HealthResponse(status="ok", version=API_VERSION)
