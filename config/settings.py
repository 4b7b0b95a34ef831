"""DHARMA runtime configuration.

Every field can be set as a ``DHARMA_<FIELD>`` environment variable or
in a ``.env`` file.  The analysis core never reads these values itself;
:mod:`src.main` passes them in when it builds the analyzer.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Validated settings; unknown ``DHARMA_*`` keys are ignored."""

    model_config = SettingsConfigDict(
        env_prefix="DHARMA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # ── App ────────────────────────────────────────────────────────────
    env: Literal["development", "production"] = "development"

    # ── API ────────────────────────────────────────────────────────────
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: str = ""

    # ── Logging ────────────────────────────────────────────────────────
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"

    # ── Analysis ───────────────────────────────────────────────────────
    min_text_length: int = Field(default=50, ge=0)
    max_text_length: int = Field(default=50_000, gt=0)

    # Empty string means the bundled src/data/legal_sections.json
    knowledge_base_path: str = ""
    section_confidence_cap: float = Field(default=0.9, gt=0.0, le=1.0)

    # ── Derived ────────────────────────────────────────────────────────

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


# Module-level singleton: import ``settings`` everywhere.
settings = Settings()
