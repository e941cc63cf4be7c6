from __future__ import annotations

import logging

from wvb_core.errors import ConfigurationError
from wvb_core.models import Connection
from wvb_core.ports import SettingsStore

logger = logging.getLogger(__name__)

NOT_CONFIGURED = "URL not configured"


def normalize_url(url: str) -> str:
    value = url.strip()
    if not value:
        return ""
    if not value.lower().startswith(("http://", "https://")):
        value = f"http://{value}"
    return value.rstrip("/")


class ConnectionState:
    """Current store endpoint and credential, reloaded from the settings store.

    The pair is swapped with a single assignment so readers never observe a
    url from one load combined with a credential from another.
    """

    def __init__(self, settings_store: SettingsStore) -> None:
        self._settings_store = settings_store
        self._connection = Connection()

    @property
    def connection(self) -> Connection:
        return self._connection

    def initialize(self) -> Connection:
        settings = self._settings_store.get_settings()
        connection = Connection(url=normalize_url(settings.url), credential=settings.credential)
        self._connection = connection
        logger.debug(
            "Connection initialized: url=%s has_credential=%s",
            connection.url[:20] + "..." if len(connection.url) > 20 else connection.url or "(empty)",
            bool(connection.credential),
        )
        return connection

    def current_endpoint(self) -> str:
        return self._connection.url or NOT_CONFIGURED

    def require_url(self) -> str:
        connection = self._connection
        if not connection.is_configured:
            raise ConfigurationError("Store URL is not configured. Please set it in Settings.")
        return connection.url
