from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from wvb_core.models import SearchType, SortConfig


class EndpointResponse(BaseModel):
    endpoint: str
    configured: bool


class PageRequest(BaseModel):
    properties: list[str] = Field(default_factory=list)
    sort: SortConfig | None = None
    limit: int | None = Field(default=None, ge=1)
    offset: int = Field(default=0, ge=0)


class PageResponse(BaseModel):
    objects: list[dict[str, Any]]
    offset: int
    limit: int
    next_offset: int
    has_more: bool


class SearchBody(BaseModel):
    query: str
    collection_name: str
    search_type: SearchType = SearchType.BM25
    limit: int | None = Field(default=None, ge=1)
    properties: list[str] | None = None


class SearchResponse(BaseModel):
    objects: list[dict[str, Any]]


class CreateCollectionResponse(BaseModel):
    name: str


class ObjectBody(BaseModel):
    properties: dict[str, Any] = Field(default_factory=dict)


class CreateObjectResponse(BaseModel):
    id: str


class DeleteObjectsRequest(BaseModel):
    ids: list[str]


class OkResponse(BaseModel):
    ok: bool = True
