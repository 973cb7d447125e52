"""Provision assembly and definition extraction.

Turns the heading list produced by ``headings.find_headings`` into
article-level provisions: each article's body runs from the line after its
heading to the line before the next heading. Every provision gets a stable,
identifier-safe ``ref`` that is unique within the document, and any
definitional clauses in its body are extracted as term/definition pairs.
"""

import logging
import re
from collections import Counter
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Sequence

from eglaw.config import settings
from eglaw.ingestion.headings import BIS_MARKER, Heading
from eglaw.ingestion.normalizer import normalize_digits

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Provision:
    """One article of a statute."""
    ref: str          # "art12", "art12-bis", "art5-2"
    section: str      # heading label, e.g. "12 مكرر"
    title: str        # display label, e.g. "مادة 12 مكرر"
    content: str


@dataclass(frozen=True)
class Definition:
    """A defined term found inside a provision."""
    term: str
    definition: str
    source_provision: str   # ref of the owning provision


# Lexical markers of a definitional clause: "is meant", "means", "the intended meaning".
DEFINITION_MARKERS: tuple[str, ...] = ("يقصد", "تعني", "المقصود")

PROVISION_TITLE_PREFIX = "مادة"


# ---------------------------------------------------------------------------
# Reference slugs
# ---------------------------------------------------------------------------

def build_provision_ref(section: str, ordinal: int) -> str:
    """Derive the base ref for a heading label.

    "12" -> "art12", "12 مكرر" -> "art12-bis". A label that reduces to
    nothing falls back to the heading's position ("art<ordinal>").
    """
    core = normalize_digits(section).lower().replace(BIS_MARKER, "bis")
    core = re.sub(r"\s+", "-", core)
    core = re.sub(r"[^a-z0-9-]", "", core)
    core = re.sub(r"-+", "-", core).strip("-")
    return f"art{core}" if core else f"art{ordinal}"


def _allocate_ref(base_ref: str, seen_refs: Counter) -> str:
    """Make *base_ref* unique against the refs already handed out."""
    seen_refs[base_ref] += 1
    occurrence = seen_refs[base_ref]
    return base_ref if occurrence == 1 else f"{base_ref}-{occurrence}"


# ---------------------------------------------------------------------------
# Definitions
# ---------------------------------------------------------------------------

@lru_cache(maxsize=16)
def _definition_pattern(term_max_chars: int, min_chars: int, max_chars: int) -> re.Pattern:
    return re.compile(
        r"(يقصد\s*(?:به|بكلمة|بعبارة)?\s*[^\n،:]{1," + str(term_max_chars) + r"})"
        r"[،:\-]\s*"
        r"([^\n]{" + str(min_chars) + "," + str(max_chars) + r"})"
    )


def extract_definitions(
    content: str,
    source_provision: str,
    term_max_chars: Optional[int] = None,
    min_chars: Optional[int] = None,
    max_chars: Optional[int] = None,
) -> list[Definition]:
    """Extract "يقصد ب...: ..." style definitions from a provision body.

    Only runs when the body contains one of ``DEFINITION_MARKERS``. The
    term is the marker phrase up to the separator (comma, colon or dash);
    the definition runs to the end of that line.
    """
    if not any(marker in content for marker in DEFINITION_MARKERS):
        return []

    min_chars = min_chars if min_chars is not None else settings.DEFINITION_MIN_CHARS
    pattern = _definition_pattern(
        term_max_chars if term_max_chars is not None else settings.DEFINITION_TERM_MAX_CHARS,
        min_chars,
        max_chars if max_chars is not None else settings.DEFINITION_MAX_CHARS,
    )

    definitions: list[Definition] = []
    for match in pattern.finditer(content):
        term = match.group(1).strip()
        definition = match.group(2).strip()
        if len(term) > 2 and len(definition) > min_chars:
            definitions.append(Definition(
                term=term,
                definition=definition,
                source_provision=source_provision,
            ))
    return definitions


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------

def _slice_body(lines: Sequence[str], start: int, end: int) -> str:
    """Join lines[start:end] with blank boundary lines trimmed."""
    block = list(lines[start:end])
    while block and not block[0].strip():
        block.pop(0)
    while block and not block[-1].strip():
        block.pop()
    return "\n".join(block).strip()


def assemble_provisions(
    lines: Sequence[str],
    headings: Sequence[Heading],
    min_content_chars: Optional[int] = None,
) -> tuple[list[Provision], list[Definition]]:
    """Slice normalized lines into provisions and collect their definitions.

    Args:
        lines: Normalized text split into lines.
        headings: Headings in line order, as returned by ``find_headings``.
        min_content_chars: Bodies shorter than this are treated as stray
            heading matches and dropped (default from settings).

    Returns:
        (provisions, definitions), both in document order.
    """
    min_chars = min_content_chars if min_content_chars is not None else settings.MIN_PROVISION_CHARS

    provisions: list[Provision] = []
    definitions: list[Definition] = []
    seen_refs: Counter = Counter()

    for i, heading in enumerate(headings):
        end_line = headings[i + 1].line_index if i + 1 < len(headings) else len(lines)
        content = _slice_body(lines, heading.line_index + 1, end_line)
        if len(content) < min_chars:
            continue

        ref = _allocate_ref(build_provision_ref(heading.label, i + 1), seen_refs)
        provisions.append(Provision(
            ref=ref,
            section=heading.label,
            title=f"{PROVISION_TITLE_PREFIX} {heading.label}",
            content=content,
        ))
        definitions.extend(extract_definitions(content, ref))

    dropped = len(headings) - len(provisions)
    if dropped:
        logger.debug(f"Dropped {dropped}/{len(headings)} headings with near-empty bodies")

    return provisions, definitions
