from __future__ import annotations

import logging
from typing import Any

import requests
from wvb_core.errors import ConfigurationError, ProtocolError, TransportError
from wvb_core.models import Connection
from wvb_core.services import ConnectionState

logger = logging.getLogger(__name__)

MAX_ERROR_BODY = 500


def _message_from_json(body: Any) -> str | None:
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if error:
        if isinstance(error, list):
            first = error[0]
            if isinstance(first, dict) and first.get("message"):
                return str(first["message"])
        elif isinstance(error, str):
            return error
        elif isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        return None
    message = body.get("message")
    if isinstance(message, str) and message:
        return message
    return None


def error_message(response: requests.Response) -> str:
    """Best-effort human readable message for a failed store response.

    Structured JSON errors win. A non-JSON body shorter than
    ``MAX_ERROR_BODY`` is appended to the reason phrase; anything else
    leaves the reason phrase alone.
    """
    fallback = response.reason or f"HTTP {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        if text and len(text) < MAX_ERROR_BODY:
            return f"{fallback}. {text}"
        return fallback
    return _message_from_json(body) or fallback


class RequestsTransport:
    """One independent ``requests`` call per store operation."""

    def __init__(
        self,
        state: ConnectionState,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        self._state = state
        self._http = session or requests
        self._timeout = timeout

    @staticmethod
    def _headers(connection: Connection) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if connection.credential:
            headers["Authorization"] = f"Bearer {connection.credential}"
        return headers

    def _request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
        *,
        allow_missing: bool = False,
    ) -> Any:
        connection = self._state.connection
        if not connection.is_configured:
            raise ConfigurationError("Store URL is not configured. Please set it in Settings.")

        try:
            response = self._http.request(
                method,
                f"{connection.url}{path}",
                headers=self._headers(connection),
                json=payload,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"Could not reach store: {exc}", method=method, path=path) from exc

        if allow_missing and response.status_code == 404:
            return None
        if not 200 <= response.status_code < 300:
            message = error_message(response)
            logger.debug("%s %s failed with status %s: %s", method, path, response.status_code, message)
            raise TransportError(message, status=response.status_code, method=method, path=path)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise ProtocolError(f"{method} {path} returned a non-JSON body") from exc

    def get(self, path: str, *, allow_missing: bool = False) -> Any:
        return self._request("GET", path, allow_missing=allow_missing)

    def post(self, path: str, payload: dict[str, Any]) -> Any:
        return self._request("POST", path, payload)

    def patch(self, path: str, payload: dict[str, Any]) -> Any:
        return self._request("PATCH", path, payload)

    def delete(self, path: str) -> Any:
        return self._request("DELETE", path)

    def graphql(self, document: str) -> Any:
        return self._request("POST", "/v1/graphql", {"query": document})
