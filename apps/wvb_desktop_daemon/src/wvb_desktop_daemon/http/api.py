from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from wvb_core.models import CollectionSchemaInput, ConnectionSettings, SearchRequest

from wvb_desktop_daemon.http.auth import require_auth
from wvb_desktop_daemon.http.schemas import (
    CreateCollectionResponse,
    CreateObjectResponse,
    DeleteObjectsRequest,
    EndpointResponse,
    ObjectBody,
    OkResponse,
    PageRequest,
    PageResponse,
    SearchBody,
    SearchResponse,
)


def build_api_router() -> APIRouter:
    router = APIRouter(prefix="/api/v1", dependencies=[Depends(require_auth)])

    @router.get("/settings", response_model=ConnectionSettings)
    def get_settings(request: Request) -> ConnectionSettings:
        return request.app.state.ctx.settings_store.get_settings()

    @router.put("/settings", response_model=EndpointResponse)
    def save_settings(payload: ConnectionSettings, request: Request) -> EndpointResponse:
        ctx = request.app.state.ctx
        ctx.settings_store.save_settings(payload)
        connection = ctx.state.initialize()
        return EndpointResponse(endpoint=ctx.state.current_endpoint(), configured=connection.is_configured)

    @router.get("/endpoint", response_model=EndpointResponse)
    def endpoint(request: Request) -> EndpointResponse:
        ctx = request.app.state.ctx
        connection = ctx.state.initialize()
        return EndpointResponse(endpoint=ctx.state.current_endpoint(), configured=connection.is_configured)

    @router.get("/collections")
    def list_collections(request: Request) -> list[dict[str, Any]]:
        ctx = request.app.state.ctx
        return [c.model_dump(by_alias=True) for c in ctx.client.list_collections()]

    @router.post("/collections", response_model=CreateCollectionResponse)
    def create_collection(payload: CollectionSchemaInput, request: Request) -> CreateCollectionResponse:
        ctx = request.app.state.ctx
        return CreateCollectionResponse(name=ctx.client.create_collection(payload))

    @router.get("/collections/{name}")
    def get_collection(name: str, request: Request) -> dict[str, Any]:
        ctx = request.app.state.ctx
        collection = ctx.client.get_collection(name)
        if collection is None:
            raise HTTPException(status_code=404, detail="Collection not found")
        return collection.model_dump(by_alias=True)

    @router.delete("/collections/{name}", response_model=OkResponse)
    def delete_collection(name: str, request: Request) -> OkResponse:
        ctx = request.app.state.ctx
        ctx.client.delete_collection(name)
        return OkResponse()

    @router.post("/collections/{name}/page", response_model=PageResponse)
    def get_page(name: str, payload: PageRequest, request: Request) -> PageResponse:
        ctx = request.app.state.ctx
        limit = payload.limit or ctx.settings.page_size
        rows = ctx.client.get_page(name, payload.properties, payload.sort, limit=limit, offset=payload.offset)
        return PageResponse(
            objects=[row.flatten() for row in rows],
            offset=payload.offset,
            limit=limit,
            next_offset=payload.offset + len(rows),
            has_more=len(rows) == limit,
        )

    @router.post("/search", response_model=SearchResponse)
    def search(payload: SearchBody, request: Request) -> SearchResponse:
        ctx = request.app.state.ctx
        search_request = SearchRequest(
            query=payload.query,
            collection_name=payload.collection_name,
            search_type=payload.search_type,
            limit=payload.limit or ctx.settings.search_limit,
            properties=payload.properties,
        )
        return SearchResponse(objects=[row.flatten() for row in ctx.client.search(search_request)])

    @router.post("/collections/{name}/objects", response_model=CreateObjectResponse)
    def create_object(name: str, payload: ObjectBody, request: Request) -> CreateObjectResponse:
        ctx = request.app.state.ctx
        return CreateObjectResponse(id=ctx.client.create_object(name, payload.properties))

    @router.get("/collections/{name}/objects/{object_id}")
    def get_object(name: str, object_id: str, request: Request) -> dict[str, Any]:
        ctx = request.app.state.ctx
        properties = ctx.client.get_object_by_id(name, object_id)
        if properties is None:
            raise HTTPException(status_code=404, detail="Object not found")
        return properties

    @router.patch("/collections/{name}/objects/{object_id}", response_model=OkResponse)
    def update_object(name: str, object_id: str, payload: ObjectBody, request: Request) -> OkResponse:
        ctx = request.app.state.ctx
        ctx.client.update_object(name, object_id, payload.properties)
        return OkResponse()

    @router.post("/collections/{name}/objects/delete", response_model=OkResponse)
    def delete_objects(name: str, payload: DeleteObjectsRequest, request: Request) -> OkResponse:
        ctx = request.app.state.ctx
        ctx.client.delete_objects(name, payload.ids)
        return OkResponse()

    return router
