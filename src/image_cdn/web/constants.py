ALLOWED_EXTENSIONS = (
    ".jpg",
    ".jpeg",
    ".png",
    ".gif",
    ".webp",
    ".bmp",
    ".svg",
)
"""Image extensions exposed by the server, compared case-insensitively"""

OPTIONAL_EXTENSIONS = (".ico",)

ROOT_MESSAGE = "CDN Server is running"

DEFAULT_PORT = 3000
DEFAULT_HOST = "127.0.0.1"
DEFAULT_MAX_AGE = 60 * 60 * 24  # one day


__all__ = [
    "ALLOWED_EXTENSIONS",
    "DEFAULT_HOST",
    "DEFAULT_MAX_AGE",
    "DEFAULT_PORT",
    "OPTIONAL_EXTENSIONS",
    "ROOT_MESSAGE",
]
