"""Article heading recognition for Egyptian statute text.

Scans normalized text line by line and reports the lines that open a new
article ("المادة 12", "مادة (3 مكرر)", "المادة الأولى", "Article 7").

Recognition is a fixed, ordered list of independent recognizers; the first
one that returns a label wins. In permissive mode (text that came out of
OCR) a list of known OCR misreadings is corrected before recognition, the
end anchor of the numeric heading is relaxed and a bare ordinal line is
accepted as a heading.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from eglaw.config import settings
from eglaw.ingestion.normalizer import collapse_whitespace, normalize_codepoints
from eglaw.utils.ordinals import resolve_ordinal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Heading:
    """A recognized article heading."""
    label: str        # "12", "12 مكرر", "12 مكرر أ", "3"
    line_index: int   # 0-indexed line in the normalized text


@dataclass(frozen=True)
class SegmenterConfig:
    """Mode flag and OCR thresholds for one segmentation run."""
    permissive: bool = False
    max_heading_chars: int = field(
        default_factory=lambda: settings.PERMISSIVE_HEADING_MAX_CHARS
    )
    bare_ordinal_max_chars: int = field(
        default_factory=lambda: settings.BARE_ORDINAL_MAX_CHARS
    )


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

# "مادة" / "ماده", with or without the definite article.
ARTICLE_WORD = r"(?:ال)?(?:مادة|ماده)"

# Repetition marker ("bis") used for articles inserted without renumbering.
BIS_MARKER = "مكرر"

# Digits, optional bis marker, optional single-letter sub-suffix ("12 مكرر أ").
_NUMERIC_LABEL = (
    r"([0-9]+(?:\s*" + BIS_MARKER + r"(?:\s*[\u0623-\u064a](?![\u0621-\u064a]))?)?)"
)

_NUMERIC_HEADING = (
    r"^[\W_]*\(?\s*" + ARTICLE_WORD + r"\s*\)?\s*\(?\s*" + _NUMERIC_LABEL + r"\s*\)?"
)

_STRICT_NUMERIC_RE = re.compile(_NUMERIC_HEADING + r"[\W_]*$")
_PERMISSIVE_NUMERIC_RE = re.compile(_NUMERIC_HEADING)

_ORDINAL_HEADING_RE = re.compile(
    r"^[\W_]*\(?\s*" + ARTICLE_WORD + r"\s*([^\d\s][\u0600-\u06ff\s]{2,30})\s*\)?[\W_]*$"
)

_ENGLISH_HEADING_RE = re.compile(r"^Article\s*(\d+[A-Za-z]*)", re.IGNORECASE)

# Known OCR misreadings, corrected in permissive mode before recognition.
OCR_CORRECTIONS: list[tuple[re.Pattern, str]] = [
    # The single-dot "الحادة" is the usual misread of "المادة".
    (re.compile(r"\bالحادة\b"), "المادة"),
]


# ---------------------------------------------------------------------------
# Recognizers, tried in order
# ---------------------------------------------------------------------------

def _numeric_heading(line: str, config: SegmenterConfig) -> Optional[str]:
    if config.permissive:
        if len(line) > config.max_heading_chars:
            return None
        match = _PERMISSIVE_NUMERIC_RE.match(line)
    else:
        match = _STRICT_NUMERIC_RE.match(line)
    if not match:
        return None
    return collapse_whitespace(match.group(1))


def _ordinal_heading(line: str, config: SegmenterConfig) -> Optional[str]:
    match = _ORDINAL_HEADING_RE.match(line)
    if not match:
        return None
    return resolve_ordinal(match.group(1))


def _bare_ordinal(line: str, config: SegmenterConfig) -> Optional[str]:
    # OCR sometimes drops the article word but keeps the ordinal.
    if not config.permissive or len(line) > config.bare_ordinal_max_chars:
        return None
    return resolve_ordinal(line)


def _english_heading(line: str, config: SegmenterConfig) -> Optional[str]:
    match = _ENGLISH_HEADING_RE.match(line)
    if not match:
        return None
    return match.group(1).strip()


RECOGNIZERS: list[Callable[[str, SegmenterConfig], Optional[str]]] = [
    _numeric_heading,
    _ordinal_heading,
    _bare_ordinal,
    _english_heading,
]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def prepare_line(line: str, permissive: bool = False) -> str:
    """Normalize a single line for recognition, applying OCR corrections."""
    prepared = collapse_whitespace(normalize_codepoints(line))
    if permissive:
        for pattern, replacement in OCR_CORRECTIONS:
            prepared = pattern.sub(replacement, prepared)
    return prepared


def parse_heading_label(line: str, config: Optional[SegmenterConfig] = None) -> Optional[str]:
    """Return the article label if *line* is an article heading, else None."""
    config = config or SegmenterConfig()
    prepared = prepare_line(line, config.permissive)
    if not prepared:
        return None

    for recognizer in RECOGNIZERS:
        label = recognizer(prepared, config)
        if label:
            return label
    return None


def find_headings(
    lines: Sequence[str],
    permissive: bool = False,
    max_heading_chars: Optional[int] = None,
    bare_ordinal_max_chars: Optional[int] = None,
) -> list[Heading]:
    """Locate every article heading in a sequence of normalized lines.

    Args:
        lines: Normalized text split into lines.
        permissive: True when the text came from OCR.
        max_heading_chars: Longest line accepted as a relaxed numeric heading
            in permissive mode (default from settings).
        bare_ordinal_max_chars: Longest line accepted as a bare ordinal
            heading in permissive mode (default from settings).

    Returns:
        Headings in line order. Duplicate labels are kept; an empty list
        means the text is not structured as a statute.
    """
    overrides = {}
    if max_heading_chars is not None:
        overrides["max_heading_chars"] = max_heading_chars
    if bare_ordinal_max_chars is not None:
        overrides["bare_ordinal_max_chars"] = bare_ordinal_max_chars
    config = SegmenterConfig(permissive=permissive, **overrides)

    headings: list[Heading] = []
    for i, line in enumerate(lines):
        label = parse_heading_label(line, config)
        if label:
            headings.append(Heading(label=label, line_index=i))

    logger.debug(
        f"Found {len(headings)} article headings in {len(lines)} lines "
        f"(permissive={permissive})"
    )
    return headings
