from __future__ import annotations

from typing import Any

import requests
from fastapi import FastAPI, HTTPException, Request
from wvb_core.models import ConnectionSettings
from wvb_core.pipelines import StoreClient
from wvb_core.services import ConnectionState

from wvb_desktop_daemon.adapters import JsonSettingsStore, RequestsTransport
from wvb_desktop_daemon.config import Settings
from wvb_desktop_daemon.http.api import build_api_router
from wvb_desktop_daemon.http.context import AppContext
from wvb_desktop_daemon.http.errors import register_exception_handlers

LOOPBACK_HOSTS = frozenset({"127.0.0.1", "::1", "localhost"})


def create_app(
    settings: Settings | None = None,
    auth_token: str | None = None,
    session: requests.Session | None = None,
) -> FastAPI:
    cfg = settings or Settings()
    cfg.ensure_dirs()
    token = auth_token or cfg.resolved_auth_token()

    settings_store = JsonSettingsStore(
        str(cfg.connection_settings_path),
        defaults=ConnectionSettings(url=cfg.store_url, credential=cfg.store_api_key),
    )
    state = ConnectionState(settings_store)
    transport = RequestsTransport(state, session=session, timeout=cfg.request_timeout)

    ctx = AppContext(
        settings=cfg,
        auth_token=token,
        settings_store=settings_store,
        state=state,
        client=StoreClient(state, transport),
    )

    app = FastAPI(title="Weaviate Browser Daemon", version="0.1.0")
    app.state.ctx = ctx
    app.include_router(build_api_router())
    register_exception_handlers(app)

    @app.get("/healthz")
    def healthz() -> dict[str, Any]:
        connection = app.state.ctx.state.initialize()
        return {"status": "ok", "store_configured": connection.is_configured}

    @app.get("/api/v1/session")
    def session_token(request: Request) -> dict[str, str]:
        # hands the bearer token to the local desktop shell only
        client = request.client.host if request.client else ""
        if client not in LOOPBACK_HOSTS:
            raise HTTPException(status_code=403, detail="Session token is only served to loopback clients")
        return {"token": app.state.ctx.auth_token}

    return app
