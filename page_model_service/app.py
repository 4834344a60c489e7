"""Page Model Service - server render pass API for page models.

Fetches page models from the delivery API on behalf of the server-side
renderer, returns the hand-off state for the client pass and proxies
component property updates.
"""

from __future__ import annotations

from dishka import make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from page_model_service.api.health_routes import router as health_router
from page_model_service.api.page_model_routes import router as page_model_router
from page_model_service.config import settings
from page_model_service.di import PageModelProvider, PageRenderProvider
from page_model_service.logging_utils import configure_service_logging, create_service_logger
from page_model_service.middleware import CorrelationIDMiddleware

# Configure structured logging
configure_service_logging(
    settings.SERVICE_NAME,
    environment=settings.ENVIRONMENT.value,
    log_level=settings.LOG_LEVEL,
)
logger = create_service_logger("page_model.app")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.SERVICE_NAME,
        version="0.1.0",
        description="Page Model Service - page model fetch, hand-off and component updates",
        docs_url="/docs" if settings.is_development() else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.is_development() else None,
    )

    app.add_middleware(CorrelationIDMiddleware)

    app.include_router(health_router)
    app.include_router(page_model_router, prefix="/page-model", tags=["Page Model"])

    container = make_async_container(
        PageModelProvider(),
        PageRenderProvider(),
        FastapiProvider(),
    )
    setup_dishka(container, app)
    app.state.di_container = container

    logger.info(
        "Page Model Service configured",
        render_mode=settings.RENDER_MODE.value,
        transfer_state=settings.TRANSFER_STATE,
    )

    return app


# Create application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "page_model_service.app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development(),
        log_level=settings.LOG_LEVEL.lower(),
    )
