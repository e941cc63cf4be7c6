from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from wvb_core.errors import ProtocolError
from wvb_core.models import SIDECAR_KEY, AdditionalInfo, ObjectRow, SchemaClass

logger = logging.getLogger(__name__)


def graphql_errors(payload: Any) -> list[str]:
    if not isinstance(payload, dict):
        return []
    errors = payload.get("errors")
    if not isinstance(errors, list):
        return []
    messages = []
    for error in errors:
        if isinstance(error, dict) and error.get("message"):
            messages.append(str(error["message"]))
        elif isinstance(error, str):
            messages.append(error)
    return messages


def parse_schema(payload: Any) -> list[SchemaClass]:
    if not isinstance(payload, dict):
        raise ProtocolError("Schema response is not a JSON object")
    classes = payload.get("classes")
    if classes is None:
        return []
    if not isinstance(classes, list):
        raise ProtocolError("Schema response field 'classes' is not a list")
    try:
        return [SchemaClass.model_validate(entry) for entry in classes]
    except PydanticValidationError as exc:
        raise ProtocolError(f"Malformed schema entry: {exc}") from exc


def parse_count(payload: Any, collection: str) -> int:
    try:
        entries = payload["data"]["Aggregate"][collection]
        count = int(entries[0]["meta"]["count"])
    except (KeyError, IndexError, TypeError, ValueError):
        logger.debug("No usable count in aggregate response for %s", collection)
        return 0
    return max(count, 0)


def _parse_row(row: Any, collection: str) -> ObjectRow:
    if not isinstance(row, dict):
        raise ProtocolError(f"Row in {collection!r} result is not an object")
    sidecar = row.get(SIDECAR_KEY)
    properties = {key: value for key, value in row.items() if key != SIDECAR_KEY}
    try:
        if isinstance(sidecar, dict):
            additional = AdditionalInfo(id=sidecar.get("id") or "", score=sidecar.get("score") or 0)
        else:
            additional = AdditionalInfo()
    except PydanticValidationError as exc:
        raise ProtocolError(f"Malformed {SIDECAR_KEY} in {collection!r} result: {exc}") from exc
    return ObjectRow(properties=properties, additional=additional)


def parse_get_rows(payload: Any, collection: str) -> list[ObjectRow]:
    errors = graphql_errors(payload)
    data = payload.get("data") if isinstance(payload, dict) else None
    get = data.get("Get") if isinstance(data, dict) else None

    if not isinstance(get, dict) or collection not in get:
        detail = "; ".join(errors) if errors else f"missing data.Get.{collection}"
        raise ProtocolError(f"Invalid response structure from store: {detail}")

    rows = get[collection]
    if rows is None:
        if errors:
            raise ProtocolError(f"Query for {collection!r} failed: {'; '.join(errors)}")
        return []
    if not isinstance(rows, list):
        raise ProtocolError(f"data.Get.{collection} is not a list")
    return [_parse_row(row, collection) for row in rows]


def parse_object_properties(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ProtocolError("Object response is not a JSON object")
    properties = payload.get("properties")
    if properties is None:
        return {}
    if not isinstance(properties, dict):
        raise ProtocolError("Object 'properties' is not an object")
    return properties


def parse_created_id(payload: Any) -> str:
    object_id = payload.get("id") if isinstance(payload, dict) else None
    if not isinstance(object_id, str) or not object_id:
        raise ProtocolError("Create response carries no object id")
    return object_id
