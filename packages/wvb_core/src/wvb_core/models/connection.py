from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ConnectionSettings(BaseModel):
    url: str = ""
    credential: str = ""


class Connection(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str = ""
    credential: str = ""

    @property
    def is_configured(self) -> bool:
        return bool(self.url.strip())
