"""Image CDN: serve a directory of images over HTTP."""

from pathlib import Path

from image_cdn.web import create_app
from image_cdn.web import run as start_api
from image_cdn.web.config import Settings, get_settings


def build_settings(
    *,
    image_dir: Path | None = None,
    prefix: str | None = None,
    include_size: bool = False,
) -> Settings:
    """Environment settings with the command line overrides applied."""
    overrides: dict = {}
    if image_dir is not None:
        overrides["image_dir"] = image_dir
    if prefix is not None:
        overrides["url_prefix"] = prefix
    if include_size:
        overrides["include_size"] = True
    if not overrides:
        return get_settings()
    return Settings(**overrides)


def main() -> None:
    """
    Main entry point for the image-cdn CLI.

    Parses command-line arguments and starts the web server.
    """
    import argparse  # noqa: PLC0415

    parser = argparse.ArgumentParser(
        "image-cdn",
        description="Image CDN: serve a directory of images over HTTP",
    )

    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to run the web server on (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to run the web server on (default: 3000 or PORT env var)",
    )
    parser.add_argument(
        "--image-dir",
        type=Path,
        default=None,
        help="Directory holding the images (default: ./images or IMAGE_CDN_IMAGE_DIR)",
    )
    parser.add_argument(
        "--prefix",
        type=str,
        default=None,
        help="URL prefix for single images, '' to serve from the root (default: /cdn)",
    )
    parser.add_argument(
        "--include-size",
        action="store_true",
        help="Include file sizes in the image listing",
    )

    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for the web server",
    )

    args = parser.parse_args()

    settings = build_settings(
        image_dir=args.image_dir,
        prefix=args.prefix,
        include_size=args.include_size,
    )

    return start_api(
        port=args.port,
        host=args.host,
        reload=args.reload,
        settings=settings,
    )


__all__ = ["Settings", "build_settings", "create_app", "main"]
