"""Pydantic request/response models for the API layer."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


class LawMetadataIn(BaseModel):
    """Structured facts about the law being parsed."""

    law_number: str = Field(..., min_length=1, description="Law number, e.g. '136'")
    law_year: str = Field(..., min_length=4, max_length=4, description="Four-digit year")
    title_en: Optional[str] = None
    title_ar: Optional[str] = None
    short_name: Optional[str] = None
    status: Literal["in_force", "amended", "repealed", "not_yet_in_force"] = "in_force"
    issued_date: Optional[str] = None
    effective_date: Optional[str] = None
    description: Optional[str] = None
    detail_url: Optional[str] = None

    @field_validator("law_number", "law_year", mode="before")
    @classmethod
    def coerce_number_to_str(cls, v: object) -> object:
        """Accept JSON numbers for law number and year."""
        return str(v) if isinstance(v, int) else v


class BuildOptionsIn(BaseModel):
    """Mode switches and overrides for act construction."""

    permissive: bool = Field(False, description="Text came from OCR")
    prefer_canonical_title: Optional[bool] = None
    id_suffix: Optional[str] = None
    title_en_override: Optional[str] = None
    short_name_override: Optional[str] = None
    url_override: Optional[str] = None


class ActRequest(BaseModel):
    """Request body for the /acts endpoint."""

    metadata: LawMetadataIn
    raw_text: str = Field(..., description="Extracted text of the statute document")
    source_reference: str = Field(..., min_length=1, description="Source PDF URL or path")
    options: BuildOptionsIn = BuildOptionsIn()


class ProvisionOut(BaseModel):
    provision_ref: str
    section: str
    title: str
    content: str


class DefinitionOut(BaseModel):
    term: str
    definition: str
    source_provision: str


class ActResponse(BaseModel):
    """A parsed statute, in seed document shape."""

    id: str
    type: str = "statute"
    title: str
    title_en: Optional[str] = None
    short_name: str
    status: str
    issued_date: Optional[str] = None
    in_force_date: Optional[str] = None
    url: str
    description: Optional[str] = None
    provisions: list[ProvisionOut] = []
    definitions: list[DefinitionOut] = []


class NormalizeRequest(BaseModel):
    """Request body for the /normalize endpoint."""

    text: str = Field(..., max_length=2_000_000)


class NormalizeResponse(BaseModel):
    text: str
    line_count: int


class HealthResponse(BaseModel):
    """Response body for the /health endpoint."""

    status: str = "ok"
    version: str = ""
