"""Application settings, read from the environment (prefix ``PHARMOMS_``)
or a ``.env`` file in the working directory."""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


class Settings(BaseSettings):

    # Runtime
    environment: str = Field(default="development")
    debug: bool = Field(default=False)
    data_dir: Path = Field(default=_DEFAULT_DATA_DIR)

    # Logging
    log_level: str = Field(default="INFO")
    json_logs: bool = Field(default=False)

    # Pricing
    currency: str = Field(default="INR")
    delivery_fee: Decimal = Field(default=Decimal("50"), ge=0)
    free_delivery_threshold: Decimal = Field(default=Decimal("499"), ge=0)
    tax_rate: Decimal = Field(default=Decimal("0.18"), ge=0)
    tax_quantum: Decimal = Field(default=Decimal("0.01"), gt=0)

    # Order numbers
    order_number_prefix: str = Field(default="ORD")
    order_number_attempts: int = Field(default=5, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="PHARMOMS_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
