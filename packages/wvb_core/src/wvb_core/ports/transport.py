from typing import Any, Protocol


class StoreTransport(Protocol):
    def get(self, path: str, *, allow_missing: bool = False) -> Any: ...

    def post(self, path: str, payload: dict[str, Any]) -> Any: ...

    def patch(self, path: str, payload: dict[str, Any]) -> Any: ...

    def delete(self, path: str) -> Any: ...

    def graphql(self, document: str) -> Any: ...
