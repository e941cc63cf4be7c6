from wvb_core.ports.settings import SettingsStore
from wvb_core.ports.transport import StoreTransport

__all__ = [
    "SettingsStore",
    "StoreTransport",
]
