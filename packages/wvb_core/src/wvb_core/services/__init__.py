from wvb_core.services.connection import NOT_CONFIGURED, ConnectionState, normalize_url
from wvb_core.services.normalizer import (
    graphql_errors,
    parse_count,
    parse_created_id,
    parse_get_rows,
    parse_object_properties,
    parse_schema,
)
from wvb_core.services.query_builder import (
    build_count_query,
    build_get_query,
    build_object_payload,
    build_schema_payload,
    build_search_query,
    map_data_type,
    object_path,
    schema_path,
)

__all__ = [
    "NOT_CONFIGURED",
    "ConnectionState",
    "build_count_query",
    "build_get_query",
    "build_object_payload",
    "build_schema_payload",
    "build_search_query",
    "graphql_errors",
    "map_data_type",
    "normalize_url",
    "object_path",
    "parse_count",
    "parse_created_id",
    "parse_get_rows",
    "parse_object_properties",
    "parse_schema",
    "schema_path",
]
