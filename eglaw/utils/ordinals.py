"""Arabic ordinal words used as article numbers.

Official Gazette exports often number articles with words
("المادة الأولى") instead of digits. Lookups go through a token
normalization that absorbs the usual spelling variance: diacritics,
hamza-carrying alefs, alef maksura vs. yeh and taa marbuta vs. haa.
"""

import re
from typing import Optional

# Ordinal word (any common spelling) -> article number
ORDINAL_WORDS: dict[str, str] = {
    "الأول": "1",
    "الأولى": "1",
    "الثاني": "2",
    "الثانية": "2",
    "الثائية": "2",  # frequent OCR misread of the noon
    "الثالث": "3",
    "الثالثة": "3",
    "الرابع": "4",
    "الرابعة": "4",
    "الخامس": "5",
    "الخامسة": "5",
    "السادس": "6",
    "السادسة": "6",
    "السابع": "7",
    "السابعة": "7",
    "الثامن": "8",
    "الثامنة": "8",
    "التاسع": "9",
    "التاسعة": "9",
    "العاشر": "10",
    "العاشرة": "10",
}

_DIACRITICS = re.compile(r"[\u064b-\u0652]")
_HAMZA_ALEFS = re.compile(r"[أإآ]")
# Arabic letters, ASCII digits and Latin letters survive; everything else goes.
_NON_ALPHANUMERIC = re.compile(r"[^\u0621-\u063a\u0641-\u064a\u0671-\u06d30-9A-Za-z]")


def normalize_token(value: str) -> str:
    """Reduce a word or phrase to its spelling-insensitive lookup key."""
    value = _DIACRITICS.sub("", value)
    value = _HAMZA_ALEFS.sub("ا", value)
    value = value.replace("ى", "ي").replace("ة", "ه")
    return _NON_ALPHANUMERIC.sub("", value)


_ORDINAL_LOOKUP: dict[str, str] = {
    normalize_token(word): number for word, number in ORDINAL_WORDS.items()
}


def resolve_ordinal(text: str) -> Optional[str]:
    """Return the numeral for an ordinal word phrase, or None.

    The whole phrase must resolve: "الفصل الأول" (chapter one) is not
    an article ordinal and returns None.
    """
    key = normalize_token(text)
    if not key:
        return None
    return _ORDINAL_LOOKUP.get(key)
