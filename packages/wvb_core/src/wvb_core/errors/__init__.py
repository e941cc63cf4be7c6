from __future__ import annotations


class WVBCoreError(Exception):
    """Base class for domain exceptions."""


class ConfigurationError(WVBCoreError):
    """The store endpoint is not configured."""


class ValidationError(WVBCoreError):
    """Caller input rejected before any network call."""


class TransportError(WVBCoreError):
    """The store answered with a non-2xx status, or could not be reached.

    ``status`` is ``None`` when no HTTP response was received at all.
    """

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        method: str | None = None,
        path: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.method = method
        self.path = path

    def __str__(self) -> str:
        if self.status is None:
            return self.message
        return f"{self.message} (HTTP {self.status} {self.method} {self.path})"


class ProtocolError(WVBCoreError):
    """The store answered 2xx but the body is not in the expected shape."""
