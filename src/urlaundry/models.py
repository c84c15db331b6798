"""Pydantic models for cleaner results."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CleanResult(BaseModel):
    """Cleaned URL plus the query parameter names that survived, in policy order."""

    model_config = ConfigDict(frozen=True)

    url: str
    preserved_params: tuple[str, ...] = ()
