"""Codepoint normalization for extracted Arabic legal text.

PDF extractors and OCR engines emit Arabic in presentation forms,
ligatures, mixed digit systems and with bidirectional control marks
sprinkled through the text. All of that breaks word matching, so every
string is folded into plain base-form Arabic with ASCII digits before
any heading or title pattern is applied.

The whole codec is one static translation table applied with
``str.translate``: unmapped characters pass through unchanged, so the
normalizer never fails on an unknown glyph.
"""

import re
import unicodedata
from typing import Optional

# ---------------------------------------------------------------------------
# Presentation forms
# Every positional shape (isolated / initial / medial / final) in the two
# Arabic presentation blocks decomposes to its base letters in reading order,
# so single letters fold to one codepoint and ligatures (Lam-Alef, Lam-Meem,
# Allah, ...) expand to their constituents.
# ---------------------------------------------------------------------------

PRESENTATION_BLOCKS: tuple[tuple[int, int], ...] = (
    (0xFB50, 0xFDFF),  # Arabic Presentation Forms-A
    (0xFE70, 0xFEFF),  # Arabic Presentation Forms-B
)

POSITIONAL_TAGS = ("<isolated>", "<initial>", "<medial>", "<final>")

# Applied after the decomposition table.
PRESENTATION_OVERRIDES: dict[int, str] = {
    # Farsi Yeh is typeset as Yeh in Egyptian gazettes
    0xFBFC: "ي", 0xFBFD: "ي", 0xFBFE: "ي", 0xFBFF: "ي",
}

TATWEEL = 0x0640

BIDI_CONTROLS: tuple[int, ...] = (
    0x061C,  # Arabic letter mark
    0x200E, 0x200F,  # LRM, RLM
    0x202A, 0x202B, 0x202C, 0x202D, 0x202E,  # embeddings and overrides
    0x2066, 0x2067, 0x2068, 0x2069,  # isolates
    0xFEFF,  # byte-order mark / zero-width no-break space
)

# Decimal digit blocks mapped to ASCII by offset from the block base.
DIGIT_BLOCKS: tuple[int, ...] = (
    0x0660,  # Arabic-Indic
    0x06F0,  # Extended Arabic-Indic
)


def _presentation_table() -> dict[int, str]:
    table: dict[int, str] = {}
    for first, last in PRESENTATION_BLOCKS:
        for code in range(first, last + 1):
            parts = unicodedata.decomposition(chr(code)).split()
            if not parts or parts[0] not in POSITIONAL_TAGS:
                continue
            base = "".join(chr(int(part, 16)) for part in parts[1:])
            # Harakat forms decompose to a space or Tatweel carrier plus the mark.
            table[code] = base.replace(chr(TATWEEL), "").lstrip(" ")
    table.update(PRESENTATION_OVERRIDES)
    return table


def _digit_table() -> dict[int, str]:
    return {base + offset: str(offset) for base in DIGIT_BLOCKS for offset in range(10)}


def _build_translation_table() -> dict[int, Optional[str]]:
    table: dict[int, Optional[str]] = {}
    table.update(_presentation_table())
    table.update(_digit_table())
    table[TATWEEL] = None
    for code in BIDI_CONTROLS:
        table[code] = None
    return table


_TRANSLATION_TABLE = _build_translation_table()
_DIGIT_TABLE = _digit_table()
_BIDI_TABLE: dict[int, None] = {code: None for code in BIDI_CONTROLS}

_LINE_BREAKS = re.compile(r"\r\n?|\f")
_WHITESPACE_RUN = re.compile(r"\s+")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def normalize_digits(value: str) -> str:
    """Map Arabic-Indic and Extended Arabic-Indic digits to ASCII."""
    return value.translate(_DIGIT_TABLE)


def strip_bidi_controls(value: str) -> str:
    """Delete directional marks, embeddings, isolates and the BOM."""
    return value.translate(_BIDI_TABLE)


def normalize_codepoints(value: str) -> str:
    """Apply the full codepoint codec to a string.

    Presentation forms fold to base letters, ligatures decompose, Tatweel
    and bidi controls are deleted and digits become ASCII. Idempotent.
    """
    return value.translate(_TRANSLATION_TABLE)


def collapse_whitespace(value: str) -> str:
    """Collapse whitespace runs to a single space and trim the ends."""
    return _WHITESPACE_RUN.sub(" ", value).strip()


def normalize_text(raw: str) -> str:
    """Normalize raw extracted text.

    Carriage returns and form feeds (page breaks from pdftotext) become
    newlines so the text splits cleanly into lines; every character then
    goes through the codepoint codec. Line content is otherwise untouched.
    """
    return normalize_codepoints(_LINE_BREAKS.sub("\n", raw))


def normalize_lines(raw: str) -> list[str]:
    """Normalize raw text and split it into lines."""
    return normalize_text(raw).split("\n")
