# This project was developed with assistance from AI tools.
"""
Application configuration.

All settings read from environment variables with sensible local dev defaults.
Financing knobs are grouped so the negotiation flow can be tuned per deployment
without code changes.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve project root .env regardless of CWD
_PROJECT_ROOT = Path(__file__).resolve().parents[2]
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Application settings -- single source of truth for env-driven config."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -- App --
    APP_NAME: str = "seller-finance"
    DEBUG: bool = False

    # -- CORS --
    ALLOWED_HOSTS: list[str] = ["http://localhost:5173"]

    # -- Installment collection --
    DEFAULT_INSTALLMENTS: int = Field(
        default=24,
        gt=0,
        description="Installment count used when the user leaves the prompt empty.",
    )
    MAX_INSTALLMENTS: int = Field(
        default=360,
        gt=0,
        description="Largest installment count the conversation accepts.",
    )
    MIN_DOWN_PAYMENT: float = Field(
        default=1000,
        ge=0,
        description="Smallest non-zero down payment; smaller amounts are treated as typos.",
    )

    # -- Alternative matching --
    ALTERNATIVE_TOLERANCE: float = Field(
        default=5000,
        ge=0,
        description="Half-width of the band around a desired installment (currency units).",
    )
    MAX_ALTERNATIVES: int = Field(default=5, gt=0)
    DELIVERY_TIE_WINDOW: float = Field(
        default=1000,
        ge=0,
        description="Distance gap under which the longer delivery duration ranks first.",
    )

    # -- Negotiation proposals --
    TERM_EXTENSION_MONTHS: int = Field(default=12, gt=0)
    DOWN_PAYMENT_STEP: float = Field(default=50000, gt=0)
    DOWN_PAYMENT_CEILING_RATIO: float = Field(
        default=0.5,
        gt=0,
        le=1,
        description="Down payment search stops at this share of the property price.",
    )


settings = Settings()
