"""Application entrypoint for the FastAPI service."""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI
from sqlalchemy.orm import sessionmaker

from app.api import pages
from app.api.errors import register_exception_handlers
from app.api.middleware import RouteGuardMiddleware, lead_lookup
from app.api.v1.router import get_api_router
from app.auth.session import SessionResolver
from app.core.config import get_config
from app.core.startup import bootstrap
from app.database.db import get_session_factory
from app.services.signature_store import SignatureStore


def create_app(
    session_factory: sessionmaker | None = None,
    signature_store: SignatureStore | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    ``session_factory`` and ``signature_store`` default to the configured
    database and signature directory; tests pass their own.
    """
    cfg = get_config()
    app = FastAPI(title=cfg.APP_NAME, version=cfg.APP_VERSION)
    app.state.session_factory = session_factory or get_session_factory()
    app.state.signature_store = signature_store or SignatureStore(cfg.SIGNATURE_STORE_PATH)

    register_exception_handlers(app)
    app.add_middleware(
        RouteGuardMiddleware,
        resolve_session=SessionResolver(secret=cfg.JWT_SECRET, cookie_name=cfg.SESSION_COOKIE_NAME),
        lead_exists=lead_lookup(app.state.session_factory),
    )
    app.include_router(get_api_router())
    app.include_router(pages.router)

    @app.get("/")
    def root() -> dict:
        return {"service": cfg.APP_NAME, "version": cfg.APP_VERSION, "api_prefix": cfg.API_PREFIX}

    return app


# Expose ASGI app for `uvicorn app.main:app`.
app = create_app()


if __name__ == "__main__":
    bootstrap()
    cfg = get_config()
    uvicorn.run("app.main:app", host=cfg.API_HOST, port=cfg.API_PORT)
