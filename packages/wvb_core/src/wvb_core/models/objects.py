from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field

SIDECAR_KEY = "_additional"


class AdditionalInfo(BaseModel):
    id: str = ""
    score: float = 0.0


class ObjectRow(BaseModel):
    properties: dict[str, Any] = Field(default_factory=dict)
    additional: AdditionalInfo = Field(default_factory=AdditionalInfo)

    @property
    def id(self) -> str:
        return self.additional.id

    @property
    def score(self) -> float:
        return self.additional.score

    def flatten(self) -> dict[str, Any]:
        return {**self.properties, SIDECAR_KEY: self.additional.model_dump()}


class SortConfig(BaseModel):
    property: str
    order: Literal["asc", "desc"] = "asc"


class SearchType(str, Enum):
    BM25 = "bm25"
    VECTOR = "vector"
    HYBRID = "hybrid"


class SearchRequest(BaseModel):
    query: str
    collection_name: str
    search_type: SearchType = SearchType.BM25
    limit: int = Field(default=10, ge=1)
    properties: list[str] | None = None
