from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from wvb_core.errors import TransportError, ValidationError, WVBCoreError
from wvb_core.models import (
    CollectionDescriptor,
    CollectionSchemaInput,
    ObjectRow,
    PropertyDescriptor,
    SchemaClass,
    SearchRequest,
    SortConfig,
)
from wvb_core.ports import StoreTransport
from wvb_core.services import (
    ConnectionState,
    build_count_query,
    build_get_query,
    build_object_payload,
    build_schema_payload,
    build_search_query,
    object_path,
    parse_count,
    parse_created_id,
    parse_get_rows,
    parse_object_properties,
    parse_schema,
    schema_path,
)

logger = logging.getLogger(__name__)


class StoreClient:
    """Access API over the store's schema, GraphQL and object endpoints.

    Every operation reloads the connection from settings and fails with
    ``ConfigurationError`` before touching the network when no url is set.
    Errors are logged with their context and re-raised unchanged.
    """

    def __init__(self, state: ConnectionState, transport: StoreTransport) -> None:
        self._state = state
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return self._state.current_endpoint()

    @contextmanager
    def _reported(self, operation: str, **context: Any) -> Iterator[None]:
        try:
            yield
        except WVBCoreError as exc:
            details = " ".join(f"{key}={value}" for key, value in context.items())
            logger.error(
                "%s failed [%s endpoint=%s]: %s",
                operation,
                details,
                self._state.current_endpoint(),
                exc,
            )
            raise

    def _ready(self) -> str:
        self._state.initialize()
        return self._state.require_url()

    def _schema(self) -> list[SchemaClass]:
        return parse_schema(self._transport.get(schema_path()))

    def _count(self, collection: str) -> int:
        try:
            return parse_count(self._transport.graphql(build_count_query(collection)), collection)
        except Exception as exc:  # counts are best effort
            logger.warning("Error fetching count for collection %r, using 0: %s", collection, exc)
            return 0

    def _describe(self, entry: SchemaClass) -> CollectionDescriptor:
        return CollectionDescriptor(
            name=entry.name,
            description=entry.description,
            count=self._count(entry.name),
            properties=entry.properties,
        )

    def list_collections(self) -> list[CollectionDescriptor]:
        with self._reported("list_collections"):
            url = self._ready()
            classes = self._schema()
            logger.info("Listing %d collections at %s", len(classes), url)
            return [self._describe(entry) for entry in classes]

    def get_collection(self, name: str) -> CollectionDescriptor | None:
        with self._reported("get_collection", collection=name):
            self._ready()
            for entry in self._schema():
                if entry.name == name:
                    return self._describe(entry)
            return None

    def get_page(
        self,
        collection: str,
        properties: Sequence[str | PropertyDescriptor],
        sort: SortConfig | None = None,
        *,
        limit: int,
        offset: int,
    ) -> list[ObjectRow]:
        with self._reported("get_page", collection=collection, limit=limit, offset=offset):
            self._ready()
            document = build_get_query(collection, properties, sort, limit, offset)
            logger.debug("Executing GraphQL query for %s:\n%s", collection, document)
            return parse_get_rows(self._transport.graphql(document), collection)

    def search(self, request: SearchRequest) -> list[ObjectRow]:
        collection = request.collection_name
        with self._reported("search", collection=collection, search_type=request.search_type.value):
            self._ready()
            if not request.query.strip():
                raise ValidationError("Search query must not be empty")

            entry = next((c for c in self._schema() if c.name == collection), None)
            if entry is None:
                logger.warning("Collection %r not in schema, search returns identity and score only", collection)
            return_properties = entry.properties if entry is not None else []

            document = build_search_query(request, return_properties)
            logger.debug("Executing search query for %s:\n%s", collection, document)
            return parse_get_rows(self._transport.graphql(document), collection)

    def create_collection(self, schema: CollectionSchemaInput) -> str:
        with self._reported("create_collection", collection=schema.class_name):
            self._ready()
            payload = build_schema_payload(schema)
            self._transport.post(schema_path(), payload)
            logger.info("Created collection %s with %d properties", payload["class"], len(payload["properties"]))
            return payload["class"]

    def delete_collection(self, name: str) -> None:
        with self._reported("delete_collection", collection=name):
            self._ready()
            self._transport.delete(schema_path(name))
            logger.info("Deleted collection %s", name)

    def create_object(self, collection: str, properties: dict[str, Any]) -> str:
        with self._reported("create_object", collection=collection):
            self._ready()
            payload = self._transport.post(object_path(), build_object_payload(collection, properties))
            object_id = parse_created_id(payload)
            logger.info("Created object %s in %s", object_id, collection)
            return object_id

    def update_object(self, collection: str, object_id: str, properties: dict[str, Any]) -> None:
        with self._reported("update_object", collection=collection, id=object_id):
            self._ready()
            self._transport.patch(object_path(object_id), build_object_payload(collection, properties))
            logger.info("Updated object %s in %s", object_id, collection)

    def delete_objects(self, collection: str, object_ids: Iterable[str]) -> None:
        """Delete ``object_ids`` one request at a time, in order.

        The first failure stops the loop; objects before it stay deleted and
        the raised ``TransportError.path`` names the object that failed.
        """
        ids = list(object_ids)
        with self._reported("delete_objects", collection=collection, count=len(ids)):
            self._ready()
            if not ids:
                raise ValidationError("No object ids given")
            for index, object_id in enumerate(ids):
                try:
                    self._transport.delete(object_path(object_id))
                except TransportError:
                    logger.warning(
                        "Stopped deleting from %s at object %s after %d of %d deletions",
                        collection,
                        object_id,
                        index,
                        len(ids),
                    )
                    raise
            logger.info("Deleted %d objects from %s", len(ids), collection)

    def get_object_by_id(self, collection: str, object_id: str) -> dict[str, Any] | None:
        with self._reported("get_object_by_id", collection=collection, id=object_id):
            self._ready()
            payload = self._transport.get(object_path(object_id), allow_missing=True)
            if payload is None:
                logger.info("Object %s not found in %s", object_id, collection)
                return None
            return parse_object_properties(payload)
