"""Error types raised by the image routes and the handlers that render them."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ImageCDNError(Exception):
    """Base class for errors that map onto a JSON error response."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Server error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.error, "message": self.message}


class InvalidImageNameError(ImageCDNError):
    """Raised when a requested name could address a path outside the image directory."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid image name"

    def __init__(self, name: str) -> None:
        super().__init__("Image name contains invalid characters")
        self.name = name


class ImageNotFoundError(ImageCDNError):
    """Raised when a well-formed name has no backing file."""

    status_code = status.HTTP_404_NOT_FOUND
    error = "Image not found"

    def __init__(self, name: str) -> None:
        super().__init__(f"Image '{name}' does not exist")
        self.name = name


class DirectoryUnreadableError(ImageCDNError):
    """Raised when the image directory cannot be enumerated."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Server error"

    def __init__(self) -> None:
        super().__init__("Could not read images directory")


def available_routes(app: FastAPI) -> dict[str, str]:
    settings = app.state.settings
    return {
        "home": "GET /",
        "getImage": f"GET {settings.url_prefix}/:imageName",
        "listImages": f"GET {settings.listing_path}",
    }


def route_not_found(request: Request) -> JSONResponse:
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "Route not found",
            "message": f"Route {path} does not exist",
            "availableRoutes": available_routes(request.app),
        },
    )


async def _handle_cdn_error(request: Request, exc: ImageCDNError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            "%s %s failed: %s",
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc.__cause__ or exc,
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def _handle_http_error(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    # Only routing raises these: no route (404) or wrong method (405).
    if exc.status_code in (
        status.HTTP_404_NOT_FOUND,
        status.HTTP_405_METHOD_NOT_ALLOWED,
    ):
        return route_not_found(request)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "Request failed", "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "message": "Something went wrong on the server",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ImageCDNError, _handle_cdn_error)
    app.add_exception_handler(StarletteHTTPException, _handle_http_error)
    app.add_exception_handler(Exception, _handle_unexpected)


__all__ = [
    "DirectoryUnreadableError",
    "ImageCDNError",
    "ImageNotFoundError",
    "InvalidImageNameError",
    "available_routes",
    "register_exception_handlers",
    "route_not_found",
]
