"""Tests for article heading recognition."""

from unittest.mock import patch

import pytest

from eglaw.config import settings
from eglaw.ingestion.headings import (
    Heading,
    SegmenterConfig,
    find_headings,
    parse_heading_label,
    prepare_line,
)
from eglaw.utils.ordinals import normalize_token, resolve_ordinal

STRICT = SegmenterConfig(permissive=False)
PERMISSIVE = SegmenterConfig(permissive=True)


# ---------------------------------------------------------------------------
# Numeric headings
# ---------------------------------------------------------------------------

class TestNumericHeadings:
    @pytest.mark.parametrize("line, label", [
        ("المادة 12", "12"),
        ("مادة 3", "3"),
        ("ماده 4", "4"),
        ("المادة (2)", "2"),
        ("( المادة 7 )", "7"),
        ("مادة (3 مكرر)", "3 مكرر"),
        ("المادة 12 مكرر أ", "12 مكرر أ"),
        ("المادة ١٤", "14"),
        ("- المادة 9 -", "9"),
    ])
    def test_strict_labels(self, line, label):
        assert parse_heading_label(line, STRICT) == label

    def test_presentation_forms_recognized(self):
        line = "\ufe8d\ufedf\ufee4\ufe8e\ufea9\ufe93 ٥"
        assert parse_heading_label(line, STRICT) == "5"

    def test_strict_rejects_trailing_text(self):
        assert parse_heading_label("المادة 5 من هذا القانون تنص على", STRICT) is None

    def test_permissive_accepts_trailing_noise(self):
        assert parse_heading_label("المادة 5 من هذا القانون تنص على", PERMISSIVE) == "5"

    def test_permissive_rejects_long_lines(self):
        line = "المادة 5 " + "كلام مشوش من التعرف الضوئي " * 3
        assert len(line) > 50
        assert parse_heading_label(line, PERMISSIVE) is None

    def test_mid_sentence_reference_is_not_heading(self):
        line = "تسري أحكام المادة 5 على الشركات"
        assert parse_heading_label(line, STRICT) is None
        assert parse_heading_label(line, PERMISSIVE) is None


# ---------------------------------------------------------------------------
# Ordinal headings
# ---------------------------------------------------------------------------

class TestOrdinalHeadings:
    @pytest.mark.parametrize("line, label", [
        ("المادة الأولى", "1"),
        ("المادة الاولي", "1"),
        ("المادة الثالثة", "3"),
        ("مادة العاشرة", "10"),
        ("المادة (الثانية)", "2"),
    ])
    def test_ordinal_labels(self, line, label):
        assert parse_heading_label(line, STRICT) == label

    def test_unknown_word_is_not_heading(self):
        assert parse_heading_label("المادة السابقة", STRICT) is None

    def test_bare_ordinal_only_in_permissive_mode(self):
        assert parse_heading_label("الثانية", STRICT) is None
        assert parse_heading_label("الثانية", PERMISSIVE) == "2"

    def test_bare_ordinal_needs_whole_line(self):
        assert parse_heading_label("الفصل الأول", PERMISSIVE) is None

    def test_bare_ordinal_length_limit(self):
        config = SegmenterConfig(permissive=True, bare_ordinal_max_chars=5)
        assert parse_heading_label("الثانية", config) is None


class TestOrdinals:
    def test_normalize_token_absorbs_spelling(self):
        assert normalize_token("الأولى") == normalize_token("الاولي")
        assert normalize_token("الثانية") == normalize_token("الثانيه")

    def test_ocr_variant(self):
        assert resolve_ordinal("الثائية") == "2"

    def test_diacritics_ignored(self):
        assert resolve_ordinal("الرَّابِعَة") == "4"

    def test_empty(self):
        assert resolve_ordinal("") is None
        assert resolve_ordinal("()") is None


# ---------------------------------------------------------------------------
# OCR corrections and English headings
# ---------------------------------------------------------------------------

class TestOcrCorrections:
    def test_misread_article_word_fixed_in_permissive_mode(self):
        assert prepare_line("الحادة 4", permissive=True) == "المادة 4"
        assert parse_heading_label("الحادة 4", PERMISSIVE) == "4"

    def test_not_corrected_in_strict_mode(self):
        assert prepare_line("الحادة 4") == "الحادة 4"
        assert parse_heading_label("الحادة 4", STRICT) is None


class TestEnglishHeadings:
    @pytest.mark.parametrize("line, label", [
        ("Article 7", "7"),
        ("ARTICLE 12a", "12a"),
        ("article 3 - Scope", "3"),
    ])
    def test_english_labels(self, line, label):
        assert parse_heading_label(line, STRICT) == label


# ---------------------------------------------------------------------------
# find_headings
# ---------------------------------------------------------------------------

class TestFindHeadings:
    def test_headings_in_line_order(self):
        lines = ["تمهيد", "المادة 1", "نص", "المادة الثانية", "نص", "Article 3", "نص"]
        assert find_headings(lines) == [
            Heading(label="1", line_index=1),
            Heading(label="2", line_index=3),
            Heading(label="3", line_index=5),
        ]

    def test_duplicate_labels_kept(self):
        lines = ["المادة 5", "نص", "المادة 5", "نص"]
        assert [h.label for h in find_headings(lines)] == ["5", "5"]

    def test_no_headings(self):
        assert find_headings(["نص عادي بلا مواد", ""]) == []

    def test_empty_input(self):
        assert find_headings([]) == []

    def test_permissive_flag_enables_ocr_fallbacks(self):
        lines = ["الحادة 1", "نص المادة", "الثانية", "نص المادة"]
        assert find_headings(lines) == []
        assert [h.label for h in find_headings(lines, permissive=True)] == ["1", "2"]

    def test_threshold_override(self):
        lines = ["المادة 5 نص طويل بعض الشيء"]
        assert find_headings(lines, permissive=True, max_heading_chars=10) == []
        assert [h.label for h in find_headings(lines, permissive=True)] == ["5"]

    def test_config_defaults_follow_settings(self):
        line = "المادة 5 نص طويل بعض الشيء"
        with patch.object(settings, "PERMISSIVE_HEADING_MAX_CHARS", 10), \
                patch.object(settings, "BARE_ORDINAL_MAX_CHARS", 5):
            config = SegmenterConfig(permissive=True)
            assert config.max_heading_chars == 10
            assert config.bare_ordinal_max_chars == 5
            assert parse_heading_label(line, config) is None
            assert find_headings([line], permissive=True) == []
        assert parse_heading_label(line, SegmenterConfig(permissive=True)) == "5"
