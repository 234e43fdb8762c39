import os

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from image_cdn.web.deps import SettingsDep
from image_cdn.web.errors import route_not_found
from image_cdn.web.utils.files import resolve_image_file

router = APIRouter(
    tags=["images"],
)


@router.api_route("/{name:path}", methods=["GET", "HEAD"])
async def get_image(name: str, request: Request, settings: SettingsDep) -> Response:
    """
    Serve one file from the image directory.

    The name is validated before the filesystem is touched and the file must
    exist before it is handed to the app's `StaticFiles`, which takes care of
    content type, ETag, Last-Modified and 304 answers to conditional requests.
    """
    # The bare prefix and the listing token are routes, not file names.
    if not name or name == settings.listing_token:
        return route_not_found(request)

    path = await resolve_image_file(settings.image_root, name)
    stat_result = await run_in_threadpool(os.stat, path)

    response = request.app.state.static_files.file_response(
        path,
        stat_result,
        request.scope,
    )
    response.headers["Cache-Control"] = f"public, max-age={settings.cache_max_age}"
    return response


__all__ = ["router"]
