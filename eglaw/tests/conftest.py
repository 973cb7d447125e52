"""Shared pytest fixtures for eglaw tests."""

import json
from pathlib import Path

import pytest
from dotenv import load_dotenv

from eglaw.ingestion.acts import LawMetadata

# Load .env from the repo root so settings overrides apply in all tests
load_dotenv(Path(__file__).resolve().parents[2] / ".env")


# Investment law excerpt: Arabic-Indic digits in the title, numeric, bracketed,
# bis and ordinal headings, and one definitional clause.
SAMPLE_STATUTE = "\n".join([
    "قانون رقم ١٣٦ لسنة ٢٠١٩ بإصدار قانون تنظيم الاستثمار",
    "باسم الشعب",
    "رئيس الجمهورية",
    "المادة 1",
    "يقصد بالاستثمار: توظيف المال لإنشاء مشروع استثماري أو توسيعه أو تطويره.",
    "المادة (2)",
    "تسري أحكام هذا القانون على جميع الشركات العاملة في جمهورية مصر العربية.",
    "مادة 2 مكرر",
    "يعمل بهذا الحكم اعتبارا من تاريخ النشر في الجريدة الرسمية.",
    "المادة الثالثة",
    "ينشر هذا القانون في الجريدة الرسمية ويعمل به من اليوم التالي لتاريخ نشره.",
])

# OCR output: "المادة" misread as "الحادة" and a heading with the article word dropped.
SAMPLE_OCR_STATUTE = "\n".join([
    "الحادة 1",
    "يسري هذا القانون على جميع العاملين بالجهاز الإداري للدولة.",
    "الثانية",
    "ينشر هذا القانون في الجريدة الرسمية.",
])

SOURCE_URL = "https://example.org/laws/136-2019.pdf"


def _make_law_metadata(
    law_number: str = "136",
    law_year: str = "2019",
    **overrides,
) -> LawMetadata:
    """Build LawMetadata for the sample investment law."""
    fields = {
        "law_number": law_number,
        "law_year": law_year,
        "title_en": "Investment Law",
        "status": "in_force",
        "issued_date": "2019-08-19",
        "detail_url": "https://example.org/laws/136-2019",
    }
    fields.update(overrides)
    return LawMetadata(**fields)


@pytest.fixture
def statute_text():
    return SAMPLE_STATUTE


@pytest.fixture
def ocr_statute_text():
    return SAMPLE_OCR_STATUTE


@pytest.fixture
def source_url():
    return SOURCE_URL


@pytest.fixture
def law_metadata():
    """Return a factory for building LawMetadata."""
    return _make_law_metadata


@pytest.fixture
def write_manifest(tmp_path):
    """Return a helper that writes source files and a manifest under tmp_path.

    Usage: write_manifest([(entry_dict, file_name, file_text), ...])
    """
    def _write(entries: list[tuple[dict, str, str]]) -> Path:
        manifest = []
        for entry, file_name, file_text in entries:
            if file_name and file_text is not None:
                (tmp_path / file_name).write_text(file_text, encoding="utf-8")
            manifest.append({**entry, "source_file": file_name})
        manifest_path = tmp_path / "manifest.json"
        manifest_path.write_text(json.dumps(manifest, ensure_ascii=False), encoding="utf-8")
        return manifest_path

    return _write
