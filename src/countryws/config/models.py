"""Pydantic configuration sections with code-baked defaults.

Sparse TOML contract: defaults live here, ``countryws.toml`` only holds
overrides.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

DEFAULT_NAMESPACE = "urn:countryws:countries"


class StorageConfig(BaseModel):
    """[storage] section."""

    model_config = {"frozen": True}

    backend: Literal["sqlite", "memory"] = "sqlite"
    path: Path = Path("countryws.db")
    seed_on_start: bool = True


class SoapConfig(BaseModel):
    """[soap] section."""

    model_config = {"frozen": True}

    namespace: str = Field(default=DEFAULT_NAMESPACE, min_length=1)
    pretty: bool = False
