"""
FastAPI application entry point for the contacts service.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from contacts_api.auth import SESSION_COOKIE, setup_providers
from contacts_api.auth import router as auth_router
from contacts_api.config import Settings, get_settings
from contacts_api.errors import register_exception_handlers
from contacts_api.routes import router as contacts_router

LOG_FORMAT = "%(name)s %(levelname)s %(asctime)s %(message)s"
CORS_MAX_AGE = 12 * 60 * 60


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        datefmt="%m/%d/%Y %I:%M:%S %p",
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Contacts API", version="1.0.0")
    app.state.settings = settings
    app.state.oauth = setup_providers(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "Content-Type", "Authorization"],
        max_age=CORS_MAX_AGE,
    )
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie=SESSION_COOKIE,
        same_site="lax",
    )
    register_exception_handlers(app)

    app.include_router(contacts_router, prefix=settings.api_prefix)
    app.include_router(auth_router, prefix=settings.api_prefix)

    @app.get("/health", include_in_schema=False)
    def health():
        return {"status": "ok"}

    return app


app = create_app()
