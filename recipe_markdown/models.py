from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, conint


class RawRecipe(BaseModel):
    """What an extractor found on the page, before any cleanup."""

    title: str = ""
    ingredients: List[str] = []
    instructions: List[str] = []
    serves: Optional[str] = None
    total_time_min: Optional[conint(ge=0)] = None
    source_url: str = ""
    extraction: str = "json-ld"


class RenderedRecipe(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    markdown: str
    serves: Optional[str] = None
    total_time_min: Optional[conint(ge=0)] = None
