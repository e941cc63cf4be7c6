"""GraphQL documents and REST payloads for the store.

Identifiers (collection names, property names, sort paths) are checked
against the GraphQL name grammar before they are placed in a document, and
free text is always emitted as an escaped string literal.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Sequence
from typing import Any
from urllib.parse import quote

from wvb_core.errors import ValidationError
from wvb_core.models import (
    SIDECAR_KEY,
    CollectionSchemaInput,
    PropertyDescriptor,
    PropertyInput,
    SearchRequest,
    SearchType,
    SortConfig,
)

_NAME_RE = re.compile(r"[_A-Za-z][_0-9A-Za-z]*")

CANONICAL_TYPES = {
    "string": "text",
    "text": "text",
    "int": "int",
    "number": "number",
    "boolean": "boolean",
    "date": "date",
}
DEFAULT_TYPE = "text"

_INDENT = "  "


def graphql_name(value: str, *, kind: str = "name") -> str:
    if not isinstance(value, str) or not _NAME_RE.fullmatch(value):
        raise ValidationError(f"Invalid {kind} {value!r}: expected letters, digits and underscores")
    return value


def graphql_string(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _string_list(values: Iterable[str]) -> str:
    return "[" + ", ".join(graphql_string(v) for v in values) + "]"


def _property_names(properties: Iterable[str | PropertyDescriptor]) -> list[str]:
    names = []
    for prop in properties:
        name = prop.name if isinstance(prop, PropertyDescriptor) else prop
        names.append(graphql_name(name, kind="property name"))
    return names


def _get_document(collection: str, arguments: list[str], sidecar: list[str], fields: list[str]) -> str:
    args = f"({', '.join(arguments)})" if arguments else ""
    lines = [
        "{",
        f"{_INDENT}Get {{",
        f"{_INDENT * 2}{collection}{args} {{",
        f"{_INDENT * 3}{SIDECAR_KEY} {{",
        *(f"{_INDENT * 4}{field}" for field in sidecar),
        f"{_INDENT * 3}}}",
        *(f"{_INDENT * 3}{field}" for field in fields),
        f"{_INDENT * 2}}}",
        f"{_INDENT}}}",
        "}",
    ]
    return "\n".join(lines)


def sort_directive(sort: SortConfig) -> str:
    path = graphql_name(sort.property, kind="sort path")
    return f"sort: {{path: {_string_list([path])}, order: {sort.order}}}"


def pagination_directive(limit: int, offset: int) -> str:
    if limit < 1:
        raise ValidationError(f"limit must be at least 1, got {limit}")
    if offset < 0:
        raise ValidationError(f"offset must not be negative, got {offset}")
    return f"limit: {limit}, offset: {offset}"


def build_get_query(
    collection: str,
    properties: Sequence[str | PropertyDescriptor],
    sort: SortConfig | None,
    limit: int,
    offset: int,
) -> str:
    name = graphql_name(collection, kind="collection name")
    arguments = []
    if sort is not None:
        arguments.append(sort_directive(sort))
    arguments.append(pagination_directive(limit, offset))
    return _get_document(name, arguments, ["id"], _property_names(properties))


def build_count_query(collection: str) -> str:
    name = graphql_name(collection, kind="collection name")
    lines = [
        "{",
        f"{_INDENT}Aggregate {{",
        f"{_INDENT * 2}{name} {{",
        f"{_INDENT * 3}meta {{",
        f"{_INDENT * 4}count",
        f"{_INDENT * 3}}}",
        f"{_INDENT * 2}}}",
        f"{_INDENT}}}",
        "}",
    ]
    return "\n".join(lines)


def search_directive(request: SearchRequest) -> str:
    if request.search_type is SearchType.VECTOR:
        # nearText has no property restriction
        return f"nearText: {{concepts: {_string_list([request.query])}}}"

    query = graphql_string(request.query)
    restrict = _property_names(request.properties or [])
    keyword = "bm25" if request.search_type is SearchType.BM25 else "hybrid"
    if restrict:
        return f"{keyword}: {{query: {query}, properties: {_string_list(restrict)}}}"
    return f"{keyword}: {{query: {query}}}"


def build_search_query(
    request: SearchRequest,
    return_properties: Sequence[str | PropertyDescriptor],
) -> str:
    """Build a ranked ``Get`` for ``request``.

    ``return_properties`` is every property of the collection; the request's
    own ``properties`` only narrow what the search matches against.
    """
    name = graphql_name(request.collection_name, kind="collection name")
    if request.limit < 1:
        raise ValidationError(f"limit must be at least 1, got {request.limit}")
    arguments = [search_directive(request), f"limit: {request.limit}"]
    return _get_document(name, arguments, ["id", "score"], _property_names(return_properties))


def map_data_type(token: str) -> str:
    value = (token or "string").strip().lower()
    if value.endswith("[]"):
        base = value.removesuffix("[]")
        return f"{CANONICAL_TYPES.get(base, DEFAULT_TYPE)}[]"
    return CANONICAL_TYPES.get(value, DEFAULT_TYPE)


def capitalize_class_name(name: str) -> str:
    return name[:1].upper() + name[1:]


def _clean_property(prop: PropertyInput) -> dict[str, Any] | None:
    name = prop.name.strip()
    if not name:
        return None
    payload: dict[str, Any] = {
        "name": name,
        "dataType": [map_data_type(prop.data_type[0] if prop.data_type else "string")],
    }
    description = (prop.description or "").strip()
    if description:
        payload["description"] = description
    return payload


def build_schema_payload(schema: CollectionSchemaInput) -> dict[str, Any]:
    class_name = schema.class_name.strip()
    if not class_name:
        raise ValidationError("Collection name is required")

    properties = [p for p in (_clean_property(prop) for prop in schema.properties) if p is not None]
    if not properties:
        raise ValidationError("At least one property with a name is required")

    payload: dict[str, Any] = {"class": capitalize_class_name(class_name)}
    description = (schema.description or "").strip()
    if description:
        payload["description"] = description
    payload["properties"] = properties
    return payload


def build_object_payload(collection: str, properties: dict[str, Any]) -> dict[str, Any]:
    return {"class": collection, "properties": properties}


def schema_path(collection: str | None = None) -> str:
    if collection is None:
        return "/v1/schema"
    return f"/v1/schema/{quote(collection, safe='')}"


def object_path(object_id: str | None = None) -> str:
    if object_id is None:
        return "/v1/objects"
    return f"/v1/objects/{quote(object_id, safe='')}"
