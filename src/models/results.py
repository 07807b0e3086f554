"""Fail-soft load results."""

from typing import Any, Optional
from pydantic import BaseModel, Field


class LoadResult(BaseModel):
    """
    Outcome of a list read.

    A failed read still carries an empty item list so callers can render,
    but error is set so "nothing found" and "could not load" stay distinct.
    """
    items: list[Any] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @classmethod
    def failure(cls, error: Exception | str) -> "LoadResult":
        return cls(items=[], error=str(error))
