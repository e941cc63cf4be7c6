from __future__ import annotations

import json
import re
from http import HTTPStatus
from typing import Any
from uuid import uuid4

import pytest
import requests
from fastapi.testclient import TestClient
from wvb_core.models import ConnectionSettings
from wvb_core.pipelines import StoreClient
from wvb_core.services import ConnectionState

from wvb_desktop_daemon.adapters import JsonSettingsStore, RequestsTransport
from wvb_desktop_daemon.config import Settings
from wvb_desktop_daemon.http import create_app

BASE_URL = "http://store.test:8080"
TOKEN = "secret-token"


def _make_response(status: int, body: Any = None, reason: str | None = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.reason = reason if reason is not None else HTTPStatus(status).phrase
    response.encoding = "utf-8"
    if body is None:
        response._content = b""
    elif isinstance(body, str):
        response._content = body.encode("utf-8")
    else:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    return response


class FakeStore:
    """Just enough of the store's REST and GraphQL surface for the client."""

    def __init__(self) -> None:
        self.classes: list[dict[str, Any]] = []
        self.objects: dict[str, dict[str, Any]] = {}
        self.requests: list[dict[str, Any]] = []
        self.failures: dict[tuple[str, str], requests.Response | Exception] = {}

    def request(self, method: str, url: str, headers=None, json=None, timeout=None) -> requests.Response:
        assert url.startswith(BASE_URL), url
        path = url[len(BASE_URL):]
        self.requests.append({"method": method, "path": path, "headers": headers or {}, "json": json})

        failure = self.failures.get((method, path))
        if isinstance(failure, Exception):
            raise failure
        if failure is not None:
            return failure
        return self._route(method, path, json)

    def _route(self, method: str, path: str, payload: Any) -> requests.Response:
        if path == "/v1/schema":
            if method == "GET":
                return _make_response(200, {"classes": self.classes})
            self.classes.append(payload)
            return _make_response(200, payload)
        if path.startswith("/v1/schema/") and method == "DELETE":
            name = path.rsplit("/", 1)[1]
            self.classes = [c for c in self.classes if c["class"] != name]
            return _make_response(200)
        if path == "/v1/objects" and method == "POST":
            object_id = str(uuid4())
            self.objects[object_id] = {"id": object_id, **payload}
            return _make_response(200, self.objects[object_id])
        if path.startswith("/v1/objects/"):
            return self._object(method, path.rsplit("/", 1)[1], payload)
        if path == "/v1/graphql":
            return _make_response(200, self._graphql(payload["query"]))
        return _make_response(404)

    def _object(self, method: str, object_id: str, payload: Any) -> requests.Response:
        stored = self.objects.get(object_id)
        if stored is None:
            return _make_response(404)
        if method == "GET":
            return _make_response(200, stored)
        if method == "PATCH":
            stored["properties"] = {**stored["properties"], **payload["properties"]}
            return _make_response(204)
        del self.objects[object_id]
        return _make_response(204)

    def _rows(self, name: str) -> list[dict[str, Any]]:
        return [o for o in self.objects.values() if o["class"] == name]

    def _graphql(self, document: str) -> dict[str, Any]:
        aggregate = re.search(r"Aggregate \{\s*(\w+)", document)
        if aggregate:
            name = aggregate.group(1)
            return {"data": {"Aggregate": {name: [{"meta": {"count": len(self._rows(name))}}]}}}
        name = re.search(r"Get \{\s*(\w+)", document).group(1)
        with_score = "score" in document
        rows = []
        for stored in self._rows(name):
            sidecar = {"id": stored["id"]}
            if with_score:
                sidecar["score"] = "0.5"
            rows.append({**stored["properties"], "_additional": sidecar})
        limit = re.search(r"limit: (\d+)", document)
        offset = re.search(r"offset: (\d+)", document)
        start = int(offset.group(1)) if offset else 0
        end = start + int(limit.group(1)) if limit else None
        return {"data": {"Get": {name: rows[start:end]}}}


class MemorySettingsStore:
    def __init__(self, settings: ConnectionSettings) -> None:
        self.settings = settings

    def get_settings(self) -> ConnectionSettings:
        return self.settings

    def save_settings(self, settings: ConnectionSettings) -> None:
        self.settings = settings


@pytest.fixture
def make_response():
    return _make_response


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def settings_store() -> MemorySettingsStore:
    return MemorySettingsStore(ConnectionSettings(url="store.test:8080/", credential="store-key"))


@pytest.fixture
def state(settings_store: MemorySettingsStore) -> ConnectionState:
    return ConnectionState(settings_store)


@pytest.fixture
def transport(state: ConnectionState, fake_store: FakeStore) -> RequestsTransport:
    return RequestsTransport(state, session=fake_store)


@pytest.fixture
def store_client(state: ConnectionState, transport: RequestsTransport) -> StoreClient:
    return StoreClient(state, transport)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(app_data_dir=str(tmp_path / "data"), daemon_state_dir=str(tmp_path / "state"), auth_token=TOKEN)


@pytest.fixture
def api(settings: Settings, fake_store: FakeStore) -> TestClient:
    app = create_app(settings=settings, auth_token=TOKEN, session=fake_store)
    client = TestClient(app)
    client.headers["Authorization"] = f"Bearer {TOKEN}"
    return client


@pytest.fixture
def configured_api(api: TestClient, settings: Settings) -> TestClient:
    JsonSettingsStore(str(settings.connection_settings_path)).save_settings(
        ConnectionSettings(url=BASE_URL, credential="store-key")
    )
    return api
