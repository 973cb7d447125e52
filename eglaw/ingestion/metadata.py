"""Metadata helpers for Egyptian laws.

Normalizes the loosely formatted values that accompany a law on listing
and detail pages (dates, status labels, titles) into the fields an act
record carries, and builds stable act ids and short names.
"""

import re
from datetime import date
from typing import Literal, Optional

from eglaw.ingestion.normalizer import collapse_whitespace, normalize_digits, strip_bidi_controls

LawStatus = Literal["in_force", "amended", "repealed", "not_yet_in_force"]

STATUSES: tuple[str, ...] = ("in_force", "amended", "repealed", "not_yet_in_force")

# ---------------------------------------------------------------------------
# Status keywords, checked in order (the first hit wins).
# "not yet in force" must be tested before "in force".
# ---------------------------------------------------------------------------

STATUS_KEYWORDS: list[tuple[str, tuple[str, ...]]] = [
    ("not_yet_in_force", ("not yet", "غير نافذ")),
    ("repealed", ("ملغ", "repeal")),
    ("amended", ("معدل", "amend")),
    ("in_force", ("ساري", "active", "in force")),
]

# ---------------------------------------------------------------------------
# Arabic month names (with the spellings seen in Egyptian sources)
# ---------------------------------------------------------------------------

ARABIC_MONTHS: dict[str, int] = {
    "يناير": 1,
    "فبراير": 2,
    "مارس": 3,
    "أبريل": 4, "إبريل": 4, "ابريل": 4,
    "مايو": 5,
    "يونيو": 6, "يونية": 6,
    "يوليو": 7, "يوليه": 7,
    "أغسطس": 8, "اغسطس": 8,
    "سبتمبر": 9,
    "أكتوبر": 10, "اكتوبر": 10,
    "نوفمبر": 11,
    "ديسمبر": 12,
}

_DAY_MONTH_NAME_YEAR = re.compile(r"(\d{1,2})\s+\S+\s+(\d{4})")
_YEAR_MONTH_DAY = re.compile(r"^(\d{4})/(\d{1,2})/(\d{1,2})$")
_DAY_MONTH_YEAR = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})")

# Law number / year references inside a title, most specific first.
LAW_REFERENCE_PATTERNS: list[re.Pattern] = [
    re.compile(r"رقم\s+(\d+)\s+لسنة\s+(\d{4})"),
    re.compile(r"بالقانون\s+(?:رقم\s+)?(\d+)\s+لسنة\s+(\d{4})"),
    re.compile(r"(\d+)\s+لسنة\s+(\d{4})"),
]


# ---------------------------------------------------------------------------
# Core functions
# ---------------------------------------------------------------------------

def _iso_date(year: str, month: str, day: str) -> Optional[str]:
    try:
        return date(int(year), int(month), int(day)).isoformat()
    except ValueError:
        return None


def normalize_date(value: Optional[str]) -> Optional[str]:
    """Normalize a date string to ``YYYY-MM-DD``.

    Accepts "2019/08/19", "2019.08.19", "2019-08-19", "19/08/2019" and
    "19 أغسطس 2019", with Arabic-Indic digits and bidi marks tolerated.
    Returns None for anything else, including impossible dates.
    """
    if not value:
        return None
    clean = collapse_whitespace(normalize_digits(strip_bidi_controls(value)))

    for month_name, month in ARABIC_MONTHS.items():
        if month_name in clean:
            match = _DAY_MONTH_NAME_YEAR.search(clean)
            if match:
                return _iso_date(match.group(2), str(month), match.group(1))

    isoish = clean.replace(".", "/").replace("-", "/")
    match = _YEAR_MONTH_DAY.match(isoish)
    if match:
        return _iso_date(match.group(1), match.group(2), match.group(3))

    match = _DAY_MONTH_YEAR.search(isoish)
    if match:
        return _iso_date(match.group(3), match.group(2), match.group(1))

    return None


def infer_status(text: Optional[str]) -> str:
    """Map a free-text status label (Arabic or English) to a status value.

    Defaults to "in_force" when no keyword is recognized.
    """
    normalized = (text or "").lower()
    for status, keywords in STATUS_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return status
    return "in_force"


def infer_law_number_year(title: str) -> Optional[tuple[str, str]]:
    """Extract (law number, year) from a title such as "قانون رقم 72 لسنة 2017"."""
    normalized = normalize_digits(title)
    for pattern in LAW_REFERENCE_PATTERNS:
        match = pattern.search(normalized)
        if match:
            return match.group(1), match.group(2)
    return None


def make_short_name(law_number: str, law_year: str) -> str:
    return f"Law {normalize_digits(law_number).strip()}/{normalize_digits(law_year).strip()}"


def make_act_id(law_number: str, law_year: str, suffix: Optional[str] = None) -> str:
    """Build the stable act id, e.g. "eg-law-136-2019" or "eg-law-136-2019-ocr"."""
    number = re.sub(r"[^0-9]", "", normalize_digits(law_number)) or law_number.strip()
    year = re.sub(r"[^0-9]", "", normalize_digits(law_year)) or "unknown"
    base_id = f"eg-law-{number}-{year}"
    return f"{base_id}-{suffix}" if suffix else base_id
