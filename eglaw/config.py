from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):

    # API Settings
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"

    # Data locations for batch ingestion
    RAW_DATA_DIR: str = "./data/source"
    SEED_DIR: str = "./data/seed"

    # Heading recognition (OCR workarounds, tuned on observed gazette scans)
    PERMISSIVE_HEADING_MAX_CHARS: int = 50
    BARE_ORDINAL_MAX_CHARS: int = 40

    # Provision assembly
    MIN_PROVISION_CHARS: int = 10
    DEFINITION_TERM_MAX_CHARS: int = 80
    DEFINITION_MIN_CHARS: int = 8
    DEFINITION_MAX_CHARS: int = 600

    # Title resolution
    TITLE_TAIL_MAX_CHARS: int = 180
    PREFER_CANONICAL_TITLE: bool = True

    # Extraction
    MIN_MEANINGFUL_TEXT_CHARS: int = 100

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
