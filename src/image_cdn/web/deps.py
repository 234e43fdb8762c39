from typing import Annotated

from fastapi import Depends, Request

from image_cdn.web.config import Settings


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was built with."""
    return request.app.state.settings


def get_base_url(request: Request) -> str:
    """Scheme and host used for absolute URLs, without a trailing slash."""
    settings = get_app_settings(request)
    if settings.public_base_url:
        return settings.public_base_url
    return str(request.base_url).rstrip("/")


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
BaseUrlDep = Annotated[str, Depends(get_base_url)]

__all__ = ["BaseUrlDep", "SettingsDep", "get_app_settings", "get_base_url"]
