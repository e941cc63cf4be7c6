from typing import Protocol

from wvb_core.models import ConnectionSettings


class SettingsStore(Protocol):
    def get_settings(self) -> ConnectionSettings: ...

    def save_settings(self, settings: ConnectionSettings) -> None: ...
