"""Health routes for Page Model Service."""

from __future__ import annotations

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter

from page_model_service.protocols import ApiUrlResolverProtocol

router = APIRouter()


@router.get("/healthz", tags=["Health"])
@inject
async def health_check(api_urls: FromDishka[ApiUrlResolverProtocol]) -> dict[str, str | dict]:
    """Health check reporting the configured delivery API endpoints."""
    urls = api_urls.get_api_urls()
    return {
        "service": "page_model_service",
        "status": "healthy",
        "message": "Page Model Service is healthy",
        "version": "0.1.0",
        "dependencies": {
            "delivery_api": {
                "live": urls.live.base_url,
                "preview": urls.preview.base_url,
            }
        },
    }
