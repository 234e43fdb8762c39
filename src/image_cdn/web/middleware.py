from collections.abc import Iterable

from fastapi.middleware.gzip import GZipMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send


class JSONGZipMiddleware:
    """
    Compress responses of the JSON routes only.

    Image bodies are sent as stored: they are already compressed and their
    ETag describes the bytes on disk.
    """

    def __init__(self, app: ASGIApp, *, paths: Iterable[str], minimum_size: int = 500) -> None:
        self.app = app
        self.paths = frozenset(paths)
        self.gzip = GZipMiddleware(app, minimum_size=minimum_size)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"] in self.paths:
            await self.gzip(scope, receive, send)
            return
        await self.app(scope, receive, send)


__all__ = ["JSONGZipMiddleware"]
