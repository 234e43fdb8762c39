from fastapi import APIRouter

from image_cdn.web.deps import BaseUrlDep, SettingsDep
from image_cdn.web.utils.files import list_images

router = APIRouter(
    tags=["listing"],
)


@router.get("")
async def images_list(settings: SettingsDep, base_url: BaseUrlDep) -> dict:
    """Return a JSON listing of the images in the image directory."""
    images = await list_images(
        settings.image_root,
        f"{base_url}{settings.url_prefix}",
        extensions=settings.allowed_extensions,
        include_size=settings.include_size,
    )
    body = {
        "images": [image.to_dict() for image in images],
        "count": len(images),
    }
    if settings.public_base_url:
        body["server"] = settings.public_base_url
    return body


__all__ = ["router"]
