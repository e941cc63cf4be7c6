from __future__ import annotations

from dataclasses import dataclass

from wvb_core.pipelines import StoreClient
from wvb_core.ports import SettingsStore
from wvb_core.services import ConnectionState

from wvb_desktop_daemon.config import Settings


@dataclass
class AppContext:
    settings: Settings
    auth_token: str
    settings_store: SettingsStore
    state: ConnectionState
    client: StoreClient
