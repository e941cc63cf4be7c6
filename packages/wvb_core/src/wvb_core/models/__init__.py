from wvb_core.models.connection import Connection, ConnectionSettings
from wvb_core.models.objects import (
    SIDECAR_KEY,
    AdditionalInfo,
    ObjectRow,
    SearchRequest,
    SearchType,
    SortConfig,
)
from wvb_core.models.schema import (
    CollectionDescriptor,
    CollectionSchemaInput,
    PropertyDescriptor,
    PropertyInput,
    SchemaClass,
)

__all__ = [
    "SIDECAR_KEY",
    "AdditionalInfo",
    "CollectionDescriptor",
    "CollectionSchemaInput",
    "Connection",
    "ConnectionSettings",
    "ObjectRow",
    "PropertyDescriptor",
    "PropertyInput",
    "SchemaClass",
    "SearchRequest",
    "SearchType",
    "SortConfig",
]
