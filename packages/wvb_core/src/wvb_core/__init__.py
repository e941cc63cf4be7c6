from wvb_core.models import (
    CollectionDescriptor,
    CollectionSchemaInput,
    ConnectionSettings,
    ObjectRow,
    PropertyDescriptor,
    PropertyInput,
    SearchRequest,
    SearchType,
    SortConfig,
)

__all__ = [
    "CollectionDescriptor",
    "CollectionSchemaInput",
    "ConnectionSettings",
    "ObjectRow",
    "PropertyDescriptor",
    "PropertyInput",
    "SearchRequest",
    "SearchType",
    "SortConfig",
]
