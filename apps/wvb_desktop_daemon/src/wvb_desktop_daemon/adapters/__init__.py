from wvb_desktop_daemon.adapters.http_transport import RequestsTransport, error_message
from wvb_desktop_daemon.adapters.settings_store import JsonSettingsStore

__all__ = [
    "JsonSettingsStore",
    "RequestsTransport",
    "error_message",
]
