"""Act construction: the entry point of the statute pipeline.

``build_act`` runs the full chain on one document's raw text:
normalize -> find headings -> assemble provisions -> resolve title, and
packages the result with the law's metadata into an ``Act`` record.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from eglaw.ingestion.headings import find_headings
from eglaw.ingestion.metadata import make_act_id, make_short_name
from eglaw.ingestion.normalizer import normalize_lines
from eglaw.ingestion.provisions import Definition, Provision, assemble_provisions
from eglaw.ingestion.titles import resolve_title

logger = logging.getLogger(__name__)

ACT_TYPE = "statute"


@dataclass
class LawMetadata:
    """Structured facts about a law, supplied by the caller (listing page or manifest)."""
    law_number: str
    law_year: str
    title_en: Optional[str] = None
    title_ar: Optional[str] = None
    short_name: Optional[str] = None
    status: str = "in_force"
    issued_date: Optional[str] = None       # YYYY-MM-DD
    effective_date: Optional[str] = None    # YYYY-MM-DD
    description: Optional[str] = None
    detail_url: Optional[str] = None


@dataclass
class BuildOptions:
    """Per-document switches for ``build_act``."""
    permissive: bool = False                # text came from OCR
    prefer_canonical_title: Optional[bool] = None   # None -> settings default
    id_suffix: Optional[str] = None         # disambiguates two documents of one law
    title_en_override: Optional[str] = None
    short_name_override: Optional[str] = None
    url_override: Optional[str] = None


@dataclass(frozen=True)
class Act:
    """A parsed statute, ready to be written as a seed document."""
    id: str
    title: str
    short_name: str
    status: str
    url: str
    provisions: tuple[Provision, ...] = field(default_factory=tuple)
    definitions: tuple[Definition, ...] = field(default_factory=tuple)
    type: str = ACT_TYPE
    title_en: Optional[str] = None
    issued_date: Optional[str] = None
    in_force_date: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> dict:
        """Serialize to the seed JSON shape. Empty optional fields are omitted."""
        record = {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "title_en": self.title_en,
            "short_name": self.short_name,
            "status": self.status,
            "issued_date": self.issued_date,
            "in_force_date": self.in_force_date,
            "url": self.url,
            "description": self.description,
        }
        record = {key: value for key, value in record.items() if value is not None}
        record["provisions"] = [
            {
                "provision_ref": p.ref,
                "section": p.section,
                "title": p.title,
                "content": p.content,
            }
            for p in self.provisions
        ]
        record["definitions"] = [
            {
                "term": d.term,
                "definition": d.definition,
                "source_provision": d.source_provision,
            }
            for d in self.definitions
        ]
        return record


def _describe(description: Optional[str], source_reference: str) -> str:
    if description:
        return f"{description} [PDF: {source_reference}]"
    return f"Source PDF: {source_reference}"


def build_act(
    metadata: LawMetadata,
    raw_text: str,
    source_reference: str,
    options: Optional[BuildOptions] = None,
) -> Optional[Act]:
    """Parse one statute document into an ``Act``.

    Args:
        metadata: Number, year and descriptive fields of the law.
        raw_text: Extracted text of the document (pdftotext or OCR output).
        source_reference: Where the text came from (usually the PDF URL).
        options: Mode switches and overrides; defaults to strict mode.

    Returns:
        The act, or None when the text contains no article headings or no
        article with a usable body. None is a normal outcome for scanned
        documents whose text layer is empty or unstructured.
    """
    options = options or BuildOptions()
    law_label = f"{metadata.law_number}/{metadata.law_year}"

    lines = normalize_lines(raw_text)
    headings = find_headings(lines, permissive=options.permissive)
    if not headings:
        logger.info(f"No article headings found for law {law_label} ({source_reference})")
        return None

    provisions, definitions = assemble_provisions(lines, headings)
    if not provisions:
        logger.info(
            f"All {len(headings)} headings had empty bodies for law {law_label} "
            f"({source_reference})"
        )
        return None

    # A known Arabic title from the listing beats anything parsed from the body.
    title = metadata.title_ar or resolve_title(
        raw_text,
        metadata.law_number,
        metadata.law_year,
        prefer_canonical=options.prefer_canonical_title,
    )

    act = Act(
        id=make_act_id(metadata.law_number, metadata.law_year, options.id_suffix),
        title=title,
        title_en=options.title_en_override or metadata.title_en or None,
        short_name=(
            options.short_name_override
            or metadata.short_name
            or make_short_name(metadata.law_number, metadata.law_year)
        ),
        status=metadata.status,
        issued_date=metadata.issued_date,
        in_force_date=metadata.effective_date,
        url=options.url_override or metadata.detail_url or source_reference,
        description=_describe(metadata.description, source_reference),
        provisions=tuple(provisions),
        definitions=tuple(definitions),
    )
    logger.info(
        f"Built {act.id}: {len(act.provisions)} provisions, "
        f"{len(act.definitions)} definitions"
    )
    return act
