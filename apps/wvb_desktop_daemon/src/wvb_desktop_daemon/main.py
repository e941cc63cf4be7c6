from __future__ import annotations

import json
import logging
import os
import socket
from pathlib import Path
from typing import Any

import uvicorn
from dotenv import load_dotenv

from wvb_desktop_daemon.config import Settings
from wvb_desktop_daemon.http import create_app

logger = logging.getLogger(__name__)

SERVICE_NAME = "weaviate-browser-daemon"


def _find_free_port(host: str) -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind((host, 0))
        return int(sock.getsockname()[1])


def runtime_info(settings: Settings, port: int, token: str) -> dict[str, Any]:
    """What the desktop shell needs to reach this daemon and find its files."""
    base_url = f"http://{settings.app_host}:{port}"
    return {
        "service": SERVICE_NAME,
        "pid": os.getpid(),
        "port": port,
        "token": token,
        "base_url": base_url,
        "api_url": f"{base_url}/api/v1",
        "connection_settings": str(settings.connection_settings_path),
    }


def _write_daemon_state(path: Path, payload: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=True, indent=2), encoding="utf-8")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main() -> None:
    load_dotenv()
    settings = Settings()
    configure_logging(settings.log_level)
    settings.ensure_dirs()

    token = settings.resolved_auth_token()
    port = settings.app_port if settings.app_port > 0 else _find_free_port(settings.app_host)
    info = runtime_info(settings, port, token)

    _write_daemon_state(settings.daemon_state_path, info)
    # first stdout line is the handshake; the shell parses it as JSON
    print(json.dumps(info, ensure_ascii=True), flush=True)
    logger.info("Serving store browser API at %s, settings in %s", info["api_url"], info["connection_settings"])

    app = create_app(settings=settings, auth_token=token)
    uvicorn.run(app, host=settings.app_host, port=port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
