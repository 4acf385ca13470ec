"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi_pagination import add_pagination

from app.config import get_settings
from app.infra.logging_config import LoggingConfig, get_logger
from app.routers import chat_router, leads_router, templates_router


def create_app(testing: bool = False) -> FastAPI:
    LoggingConfig()
    logger = get_logger("main")
    settings = get_settings()

    app = FastAPI(title=settings.app_name)
    app.include_router(templates_router.router)
    app.include_router(chat_router.router)
    app.include_router(leads_router.router)
    add_pagination(app)

    @app.get("/health", tags=["system"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    logger.info(
        "Application created (environment=%s, testing=%s)", settings.environment, testing
    )
    return app


app = create_app()
