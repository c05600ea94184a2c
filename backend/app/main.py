"""FastAPI entrypoint for the Facturago backend."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from facturago.logging_config import setup_logging

from .config import get_settings
from .middleware import APIKeyMiddleware
from .routers import documents, images, pricing, settings as settings_router


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="Facturago API", version="1.0.0")
    allow_origins = settings.cors_origins or ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(APIKeyMiddleware)

    app.include_router(settings_router.router, prefix="/api")
    app.include_router(documents.router, prefix="/api")
    app.include_router(pricing.router, prefix="/api")
    app.include_router(images.router, prefix="/api")

    @app.get("/", tags=["info"])
    def root() -> dict[str, str]:
        return {"message": "Facturago API", "version": "1.0.0", "docs": "/docs"}

    @app.get("/health", tags=["health"])
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
