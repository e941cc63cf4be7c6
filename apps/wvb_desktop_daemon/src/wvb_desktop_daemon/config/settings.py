from __future__ import annotations

import secrets
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_host: str = "127.0.0.1"
    app_port: int = 0
    app_data_dir: str = "./data"
    auth_token: str | None = None
    log_level: str = "INFO"

    # seed values for the connection settings file until the user saves one
    store_url: str = ""
    store_api_key: str = ""
    request_timeout: float | None = None

    page_size: int = Field(default=250, ge=1)
    search_limit: int = Field(default=10, ge=1)

    daemon_state_dir: str = Field(default="~/.weaviate-browser")

    @property
    def data_dir(self) -> Path:
        return Path(self.app_data_dir).resolve()

    @property
    def connection_settings_path(self) -> Path:
        return self.data_dir / "connection.json"

    @property
    def daemon_state_path(self) -> Path:
        return Path(self.daemon_state_dir).expanduser() / "daemon.json"

    def ensure_dirs(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.daemon_state_path.parent.mkdir(parents=True, exist_ok=True)

    def resolved_auth_token(self) -> str:
        return self.auth_token or secrets.token_urlsafe(32)
