from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ... import __version__
from ...api import ApiError, router
from ...api.serializers import error_response
from ...config import AppSettings, get_settings
from ...data import EventStore
from ...domain import MalformedDateError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _validation_error(_: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(error_response(str(exc), str(exc)), status_code=400)

    @app.exception_handler(MalformedDateError)
    async def _malformed_date(_: Request, exc: MalformedDateError) -> JSONResponse:
        return JSONResponse(error_response("Invalid datetime", str(exc)), status_code=400)

    @app.exception_handler(NotFoundError)
    async def _not_found(_: Request, exc: NotFoundError) -> JSONResponse:
        logger.info("Event %s not found", exc.event_id)
        return JSONResponse(error_response("Event not found", f"No event with id {exc.event_id}"), status_code=404)

    @app.exception_handler(RequestValidationError)
    async def _bad_request(_: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(error_response("Invalid request", str(exc.errors())), status_code=400)

    @app.exception_handler(ApiError)
    async def _api_error(_: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(error_response(exc.error, exc.message), status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            body = error_response("Not Found", "The requested endpoint does not exist")
        else:
            body = error_response("Request failed", str(exc.detail))
        return JSONResponse(body, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def _internal_error(_: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error")
        return JSONResponse(error_response("Internal Server Error", str(exc)), status_code=500)


def create_app(settings: Optional[AppSettings] = None, store: Optional[EventStore] = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title=f"{settings.ui.app_name} API", version=__version__)
    app.state.settings = settings
    app.state.store = store or EventStore(settings.storage.data_file)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.server.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def _access_log(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
        return response

    _register_error_handlers(app)
    app.include_router(router)

    @app.get("/health")
    async def health() -> dict:
        return {
            "status": "OK",
            "message": f"{settings.ui.app_name} backend is running!",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/")
    async def root() -> dict:
        return {
            "message": f"Welcome to {settings.ui.app_name} API",
            "version": __version__,
            "endpoints": {"events": "/api/events", "health": "/health"},
        }

    return app


app = create_app()


def run_local_server(host: Optional[str] = None, port: Optional[int] = None) -> None:
    import asyncio

    from hypercorn.asyncio import serve
    from hypercorn.config import Config

    settings = get_settings()
    config = Config()
    config.bind = [f"{host or settings.server.host}:{port or settings.server.port}"]
    logger.info("Serving events API on %s", config.bind[0])
    asyncio.run(serve(app, config))
