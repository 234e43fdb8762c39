from fastapi import APIRouter

from image_cdn.web.config import Settings
from image_cdn.web.routers.images import router as images_router
from image_cdn.web.routers.listing import router as listing_router


def create_api_router(settings: Settings) -> APIRouter:
    """Listing first so a bare name route can never shadow it."""
    api_router = APIRouter()

    api_router.include_router(
        listing_router,
        prefix=settings.listing_path,
    )

    api_router.include_router(
        images_router,
        prefix=settings.url_prefix,
    )

    return api_router


__all__ = ["create_api_router"]
