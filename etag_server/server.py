"""FastAPI application wiring.

  - order routes from :mod:`etag_server.routes`
  - ``/healthz``
  - an exception guard: any unhandled fault becomes
    ``500 {"code": "InternalServerError", "message": "An error has occurred."}``
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request, Response
from starlette.middleware.cors import CORSMiddleware

from . import __version__
from .config import Settings, load_settings
from .errors import internal_server_error
from .responses import error_response, ok
from .routes import register_routes
from .state import OrderStore


log = logging.getLogger("etag_server.server")


def create_app(store: Optional[OrderStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(
        title="ETag Server",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.store = store if store is not None else OrderStore()  # type: ignore[attr-defined]
    app.state.settings = settings  # type: ignore[attr-defined]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    @app.middleware("http")
    async def _exception_guard(request: Request, call_next):
        try:
            response: Response = await call_next(request)
            return response
        except Exception as exc:  # noqa: BLE001
            log.exception("Unhandled error on %s %s", request.method, request.url.path)
            return error_response(internal_server_error(exc, debug=settings.debug))

    @app.get("/healthz")
    async def healthz():
        return ok({"status": "ok"})

    register_routes(app)

    return app


app = create_app()
