from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version
from os import getenv

from fastapi import FastAPI, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.staticfiles import StaticFiles

from image_cdn.web.config import Settings, get_settings
from image_cdn.web.constants import DEFAULT_HOST, DEFAULT_PORT, ROOT_MESSAGE
from image_cdn.web.deps import BaseUrlDep
from image_cdn.web.errors import register_exception_handlers
from image_cdn.web.middleware import JSONGZipMiddleware
from image_cdn.web.routers import create_api_router
from image_cdn.web.utils.files import ensure_image_dir

logger = logging.getLogger(__name__)

try:
    __version__ = version("image_cdn")
except PackageNotFoundError:
    __version__ = "0.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    root = settings.image_root
    if await run_in_threadpool(ensure_image_dir, root):
        logger.info("Created image directory %s", root)
    logger.info("Serving images from %s", root)
    logger.info("Access images: %s/image_name", settings.url_prefix)
    logger.info("List images: %s", settings.listing_path)
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the image server application.

    Args:
        settings: Configuration for this instance. Defaults to the values
            read from the environment by `get_settings`.

    Returns:
        The configured FastAPI application.

    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="Image CDN",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.static_files = StaticFiles(directory=settings.image_root, check_dir=False)

    # Compress JSON responses larger than 500 bytes
    app.add_middleware(
        JSONGZipMiddleware,
        paths=("/", settings.listing_path),
        minimum_size=500,
    )

    if settings.log_requests:

        @app.middleware("http")
        async def log_request(request: Request, call_next) -> Response:
            response = await call_next(request)
            logger.info(
                "%s %s -> %d",
                request.method,
                request.url.path,
                response.status_code,
            )
            return response

    register_exception_handlers(app)

    @app.get("/")
    async def index(base_url: BaseUrlDep) -> dict:
        """Describe the available endpoints."""
        return {
            "message": ROOT_MESSAGE,
            "endpoints": {
                "getImage": f"GET {settings.url_prefix}/:imageName",
                "listImages": f"GET {settings.listing_path}",
                "example": f"{base_url}{settings.url_prefix}/your-image.jpg",
            },
        }

    app.include_router(
        create_api_router(settings),
    )

    return app


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run(
    *,
    port: int | None = None,
    host: str | None = None,
    reload: bool = False,
    settings: Settings | None = None,
) -> None:
    """
    Start the image server.

    Args:
        port: The port number to run the server on (keyword-only).
            Defaults to the PORT environment variable if set, otherwise 3000.
        host: The host address to bind the server to (keyword-only).
            Defaults to '127.0.0.1' if not specified.
        reload: Enable auto-reload when code changes are detected (keyword-only).
            Settings are then read from the environment by the reloaded process.
        settings: Configuration for the app. Defaults to `get_settings()`.

    Example:
        >>> run()  # Runs on 127.0.0.1:3000
        >>> run(port=8000, host='0.0.0.0')  # Runs on 0.0.0.0:8000

    """
    env_port = getenv("PORT")
    if env_port and not port:
        port = int(env_port)
    if port is None:
        port = DEFAULT_PORT

    if not host:
        host = DEFAULT_HOST

    if settings is None:
        settings = get_settings()
    configure_logging(settings.log_level)

    import uvicorn  # noqa: PLC0415

    if reload:
        uvicorn.run(
            "image_cdn.web:create_app",
            factory=True,
            host=host,
            port=port,
            reload=True,
        )
        return

    uvicorn.run(create_app(settings), host=host, port=port)


__all__ = ["configure_logging", "create_app", "run"]
