from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from wvb_core.errors import ConfigurationError, ProtocolError, TransportError, ValidationError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ConfigurationError)
    async def handle_configuration_error(_: Request, exc: ConfigurationError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"error": "configuration", "detail": str(exc)})

    @app.exception_handler(ValidationError)
    async def handle_validation_error(_: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"error": "validation", "detail": str(exc)})

    @app.exception_handler(TransportError)
    async def handle_transport_error(_: Request, exc: TransportError) -> JSONResponse:
        return JSONResponse(
            status_code=502,
            content={
                "error": "transport",
                "detail": exc.message,
                "upstream_status": exc.status,
                "path": exc.path,
            },
        )

    @app.exception_handler(ProtocolError)
    async def handle_protocol_error(_: Request, exc: ProtocolError) -> JSONResponse:
        logger.error("Unexpected store response: %s", exc)
        return JSONResponse(status_code=502, content={"error": "protocol", "detail": str(exc)})
