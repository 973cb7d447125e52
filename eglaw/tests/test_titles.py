"""Tests for act title resolution."""

from eglaw.ingestion.titles import (
    canonical_title,
    find_title_candidates,
    resolve_title,
    title_matches_law,
)

INVESTMENT_TITLE = "قانون رقم 136 لسنة 2019 بإصدار قانون تنظيم الاستثمار"


class TestCandidates:
    def test_finds_title_with_arabic_indic_digits(self, statute_text):
        assert find_title_candidates(statute_text) == [INVESTMENT_TITLE]

    def test_candidates_in_document_order(self):
        text = (
            "بعد الاطلاع على قانون رقم 8 لسنة 1997 بشأن ضمانات الاستثمار\n"
            "قانون رقم 72 لسنة 2017 بإصدار قانون الاستثمار"
        )
        assert find_title_candidates(text) == [
            "قانون رقم 8 لسنة 1997 بشأن ضمانات الاستثمار",
            "قانون رقم 72 لسنة 2017 بإصدار قانون الاستثمار",
        ]

    def test_tail_is_bounded(self):
        text = "قانون رقم 5 لسنة 2020 " + "ب" * 300
        candidate = find_title_candidates(text)[0]
        assert candidate.endswith("ب" * 10)
        assert len(candidate) < 220

    def test_no_candidates(self):
        assert find_title_candidates("المادة 1\nنص") == []


class TestTitleValidation:
    def test_matches_number_and_year(self):
        assert title_matches_law(INVESTMENT_TITLE, "136", "2019")

    def test_rejects_partial_number(self):
        # "13" appears inside "136" but is a different law
        assert not title_matches_law(INVESTMENT_TITLE, "13", "2019")

    def test_rejects_wrong_year(self):
        assert not title_matches_law(INVESTMENT_TITLE, "136", "2020")

    def test_arabic_indic_metadata(self):
        assert title_matches_law(INVESTMENT_TITLE, "١٣٦", "٢٠١٩")


class TestResolveTitle:
    def test_parsed_title_accepted(self, statute_text):
        assert resolve_title(statute_text, "136", "2019") == INVESTMENT_TITLE

    def test_mismatch_falls_back_to_canonical(self, statute_text):
        assert resolve_title(statute_text, "9", "2023") == "قانون رقم 9 لسنة 2023"

    def test_mismatch_without_canonical_preference(self, statute_text):
        title = resolve_title(statute_text, "9", "2023", prefer_canonical=False)
        assert title == INVESTMENT_TITLE

    def test_first_matching_candidate_wins(self):
        text = (
            "بعد الاطلاع على قانون رقم 8 لسنة 1997 بشأن ضمانات الاستثمار\n"
            "قانون رقم 72 لسنة 2017 بإصدار قانون الاستثمار"
        )
        assert resolve_title(text, "72", "2017") == "قانون رقم 72 لسنة 2017 بإصدار قانون الاستثمار"

    def test_no_candidates_uses_canonical(self):
        assert resolve_title("نص بلا عنوان", "5", "2020", prefer_canonical=False) == (
            canonical_title("5", "2020")
        )

    def test_canonical_title_normalizes_digits(self):
        assert canonical_title("٥", "٢٠٢٠") == "قانون رقم 5 لسنة 2020"
