from wvb_core.pipelines.store import StoreClient

__all__ = [
    "StoreClient",
]
