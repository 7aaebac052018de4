"""FastAPI application for the GotoPhoto server.

Run with ``uvicorn --factory gotophoto.server.app:create_app``.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from gotophoto.application.ports.storage_port import StoragePort
from gotophoto.config import GotoPhotoConfig
from gotophoto.domain.exceptions import ValidationError
from gotophoto.infrastructure.storage import create_storage
from gotophoto.server.dependencies import AppState, get_state
from gotophoto.server.models import HealthResponse
from gotophoto.server.routes import api, locations, photolocations

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"

_CODE_MAP = {
    400: "VALIDATION_ERROR",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    422: "INVALID_REQUEST",
    500: "INTERNAL_ERROR",
}


def _error_body(status_code: int, message: str, details: dict | None = None) -> dict:
    return {
        "error": {
            "code": _CODE_MAP.get(status_code, "ERROR"),
            "message": message,
            "details": details or {},
        }
    }


def create_app(
    config: GotoPhotoConfig | None = None,
    storage: StoragePort | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Loaded configuration. Read from disk when omitted.
        storage: Storage adapter to serve from. Built from *config* when
            omitted, which fails with ConfigurationError if no valid
            backend is selected.
    """
    load_dotenv()
    if config is None:
        config = GotoPhotoConfig.load()

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    if config.debug:
        logging.getLogger("gotophoto").setLevel(logging.DEBUG)

    if storage is None:
        storage = create_storage(config)
    logger.info("Serving with %s", type(storage).__name__)

    app = FastAPI(
        title="GotoPhoto",
        version="0.1.0",
        description="Locations and the photos taken at them",
        debug=config.debug,
    )
    app.state.gotophoto = AppState(
        config=config,
        storage=storage,
        templates=Jinja2Templates(directory=str(TEMPLATES_DIR)),
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.status_code, str(exc.detail)),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        fields = [".".join(str(part) for part in err["loc"]) for err in exc.errors()]
        return JSONResponse(
            status_code=422,
            content=_error_body(422, "Invalid request parameters", {"fields": fields}),
        )

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(request: Request, exc: ValidationError):
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
        details = {"fields": exc.fields} if hasattr(exc, "fields") else {}
        return JSONResponse(status_code=400, content=_error_body(400, str(exc), details))

    @app.get("/", include_in_schema=False)
    def index() -> RedirectResponse:
        return RedirectResponse("/locations/", status_code=302)

    app.include_router(locations.router)
    app.include_router(photolocations.router)
    app.include_router(api.router)

    @app.get("/health")
    def health_check(request: Request) -> HealthResponse:
        state = get_state(request)
        return HealthResponse(
            status="ok",
            version="0.1.0",
            backend=state.config.gotophoto_backend,
            uptime_seconds=round(time.time() - state.start_time, 1),
        )

    return app
