"""Text extraction for statute source files (PDF, HTML, plain text).

PDFs are read page by page with pdfplumber and the pages are joined with
a form feed, which the normalizer treats as a line break. Plain-text files
are how OCR output and pdftotext dumps enter the pipeline.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import pdfplumber
from bs4 import BeautifulSoup

from eglaw.config import settings

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = {".pdf", ".html", ".htm", ".txt"}

PAGE_SEPARATOR = "\f"


@dataclass
class ParsedPage:
    """A single page of extracted text."""
    page_number: int  # 1-indexed
    text: str


@dataclass
class ParsedDocument:
    """Extracted text of one source file."""
    file_path: str
    file_name: str
    pages: list[ParsedPage] = field(default_factory=list)
    full_text: str = ""
    total_pages: int = 0


def parse_pdf(file_path: str) -> ParsedDocument:
    """Extract a PDF's text layer with pdfplumber, one page at a time."""
    path = Path(file_path)
    pages: list[ParsedPage] = []

    with pdfplumber.open(file_path) as pdf:
        for i, page in enumerate(pdf.pages):
            text = page.extract_text() or ""
            pages.append(ParsedPage(page_number=i + 1, text=text))

    empty = sum(1 for p in pages if not p.text.strip())
    logger.debug(f"Extracted {len(pages)} pages from {path.name} ({empty} without text)")

    return ParsedDocument(
        file_path=str(path.resolve()),
        file_name=path.name,
        pages=pages,
        full_text=PAGE_SEPARATOR.join(p.text for p in pages),
        total_pages=len(pages),
    )


def parse_html(file_path: str) -> ParsedDocument:
    """Extract visible text from an HTML page (gazette detail pages)."""
    path = Path(file_path)

    with open(file_path, "r", encoding="utf-8", errors="replace") as f:
        soup = BeautifulSoup(f.read(), "html.parser")

    for tag in soup(["script", "style"]):
        tag.decompose()

    full_text = soup.get_text(separator="\n")
    pages = [ParsedPage(page_number=1, text=full_text)] if full_text.strip() else []

    return ParsedDocument(
        file_path=str(path.resolve()),
        file_name=path.name,
        pages=pages,
        full_text=full_text,
        total_pages=1,
    )


def parse_txt(file_path: str) -> ParsedDocument:
    """Read a text dump; form feeds (as written by pdftotext) split pages."""
    path = Path(file_path)
    full_text = path.read_text(encoding="utf-8", errors="replace")

    pages = [
        ParsedPage(page_number=i + 1, text=text)
        for i, text in enumerate(full_text.split(PAGE_SEPARATOR))
    ]

    return ParsedDocument(
        file_path=str(path.resolve()),
        file_name=path.name,
        pages=pages,
        full_text=full_text,
        total_pages=len(pages),
    )


def parse_file(file_path: str) -> ParsedDocument:
    """Dispatch to the appropriate parser based on file extension."""
    ext = Path(file_path).suffix.lower()

    if ext == ".pdf":
        return parse_pdf(file_path)
    elif ext in (".html", ".htm"):
        return parse_html(file_path)
    elif ext == ".txt":
        return parse_txt(file_path)
    else:
        raise ValueError(f"Unsupported file type: {ext} ({file_path})")


def has_meaningful_text(text: str, min_chars: Optional[int] = None) -> bool:
    """True when *text* has more than *min_chars* non-whitespace characters.

    Scanned PDFs without a text layer come back empty or as a handful of
    stray glyphs; those need OCR before they can be parsed.
    """
    threshold = min_chars if min_chars is not None else settings.MIN_MEANINGFUL_TEXT_CHARS
    return len(re.sub(r"\s+", "", text or "")) > threshold
