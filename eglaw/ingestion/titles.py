"""Act title resolution.

A title parsed from the body text ("قانون رقم 136 لسنة 2019 بإصدار ...")
carries more context than one synthesized from metadata, but extraction is
unreliable: the first match can be a citation of another law, and some PDFs
bundle several laws. A parsed title is therefore only trusted when it names
the expected law number and year.
"""

import logging
import re
from functools import lru_cache
from typing import Optional

from eglaw.config import settings
from eglaw.ingestion.normalizer import collapse_whitespace, normalize_digits, normalize_text

logger = logging.getLogger(__name__)

# "Law number <N> of year <YYYY>"
LAW_TITLE_PHRASE = r"قانون\s+رقم\s+[0-9]+\s+لسنة\s+[0-9]{4}"


@lru_cache(maxsize=8)
def _title_pattern(tail_max_chars: int) -> re.Pattern:
    return re.compile(LAW_TITLE_PHRASE + r"[^\n]{0," + str(tail_max_chars) + r"}")


def canonical_title(law_number: str, law_year: str) -> str:
    """Synthesize the generic title from structured metadata."""
    return f"قانون رقم {normalize_digits(law_number).strip()} لسنة {normalize_digits(law_year).strip()}"


def find_title_candidates(raw_text: str, tail_max_chars: Optional[int] = None) -> list[str]:
    """Return every "قانون رقم N لسنة YYYY ..." phrase in the text, in order."""
    tail = tail_max_chars if tail_max_chars is not None else settings.TITLE_TAIL_MAX_CHARS
    text = normalize_text(raw_text)
    return [collapse_whitespace(m.group(0)) for m in _title_pattern(tail).finditer(text)]


def _contains_number(text: str, value: str) -> bool:
    if not value:
        return False
    return re.search(r"(?<!\d)" + re.escape(value) + r"(?!\d)", text) is not None


def title_matches_law(title: str, law_number: str, law_year: str) -> bool:
    """True if *title* names both the expected law number and year."""
    title = normalize_digits(title)
    return (
        _contains_number(title, normalize_digits(law_number).strip())
        and _contains_number(title, normalize_digits(law_year).strip())
    )


def resolve_title(
    raw_text: str,
    law_number: str,
    law_year: str,
    prefer_canonical: Optional[bool] = None,
) -> str:
    """Choose the display title for an act.

    The first parsed candidate that names this law wins. Otherwise the
    canonical title is used when *prefer_canonical* is set; when it is not,
    the first parsed candidate (if any) is used as-is.
    """
    if prefer_canonical is None:
        prefer_canonical = settings.PREFER_CANONICAL_TITLE

    candidates = find_title_candidates(raw_text)
    canonical = canonical_title(law_number, law_year)

    for candidate in candidates:
        if title_matches_law(candidate, law_number, law_year):
            return candidate

    if candidates:
        logger.debug(
            f"Parsed title '{candidates[0][:60]}' does not name law "
            f"{law_number}/{law_year}"
        )

    if prefer_canonical or not candidates:
        return canonical
    return candidates[0]
