from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from wvb_core.models import ConnectionSettings
from wvb_core.pipelines import StoreClient
from wvb_core.services import ConnectionState


class MemorySettingsStore:
    def __init__(self, settings: ConnectionSettings | None = None) -> None:
        self.settings = settings or ConnectionSettings()
        self.loads = 0

    def get_settings(self) -> ConnectionSettings:
        self.loads += 1
        return self.settings

    def save_settings(self, settings: ConnectionSettings) -> None:
        self.settings = settings


class FakeTransport:
    """Records calls; answers from ``routes`` keyed by (method, path).

    A route value that is an exception is raised, a callable is called with
    the payload, anything else is returned as the decoded body.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, Any]] = []
        self.routes: dict[tuple[str, str], Any] = {}
        self.graphql_handler: Callable[[str], Any] = lambda document: {}

    def _dispatch(self, method: str, path: str, payload: Any = None) -> Any:
        self.calls.append((method, path, payload))
        result = self.routes.get((method, path), {})
        if isinstance(result, Exception):
            raise result
        if callable(result):
            return result(payload)
        return result

    def get(self, path: str, *, allow_missing: bool = False) -> Any:
        return self._dispatch("GET", path)

    def post(self, path: str, payload: dict[str, Any]) -> Any:
        return self._dispatch("POST", path, payload)

    def patch(self, path: str, payload: dict[str, Any]) -> Any:
        return self._dispatch("PATCH", path, payload)

    def delete(self, path: str) -> Any:
        return self._dispatch("DELETE", path)

    def graphql(self, document: str) -> Any:
        self.calls.append(("GRAPHQL", "/v1/graphql", document))
        return self.graphql_handler(document)

    def documents(self) -> list[str]:
        return [payload for method, _, payload in self.calls if method == "GRAPHQL"]


@pytest.fixture
def settings_store() -> MemorySettingsStore:
    return MemorySettingsStore(ConnectionSettings(url="localhost:8080", credential="key"))


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def state(settings_store: MemorySettingsStore) -> ConnectionState:
    return ConnectionState(settings_store)


@pytest.fixture
def client(state: ConnectionState, transport: FakeTransport) -> StoreClient:
    return StoreClient(state, transport)
