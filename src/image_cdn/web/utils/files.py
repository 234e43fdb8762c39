from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import asdict, dataclass
from pathlib import Path

from fastapi.concurrency import run_in_threadpool

from image_cdn.web.constants import ALLOWED_EXTENSIONS
from image_cdn.web.errors import (
    DirectoryUnreadableError,
    ImageNotFoundError,
    InvalidImageNameError,
)

logger = logging.getLogger(__name__)

FORBIDDEN_SEQUENCES = ("..", "/", "\\")


@dataclass(frozen=True)
class ImageReference:
    """One entry of the listing response."""

    name: str
    url: str
    size: int | None = None

    def to_dict(self) -> dict:
        data = asdict(self)
        if self.size is None:
            del data["size"]
        return data


def ensure_image_dir(root: Path) -> bool:
    """Create the image directory if needed. Returns True when it was created."""
    if root.is_dir():
        return False
    root.mkdir(parents=True, exist_ok=True)
    return True


def image_path(root: Path, name: str) -> Path | None:
    """Return the canonical path of `name`, or None if it resolves outside `root`."""
    base = root.resolve()
    target = (base / name).resolve()
    try:
        target.relative_to(base)
    except ValueError:
        return None
    if target == base:
        return None
    return target


def image_exists(root: Path, name: str) -> bool:
    """Whether `root/name` is a regular file inside the image directory."""
    try:
        target = image_path(root, name)
        return target is not None and target.is_file()
    except (OSError, ValueError):
        return False


def iter_directory(root: Path) -> Iterator[Path]:
    """Yield the direct children of `root` in filesystem order."""
    # iterdir() is lazy; list it so a missing directory fails here.
    yield from list(root.iterdir())


def file_size(path: Path) -> int:
    return path.stat().st_size


def has_allowed_extension(name: str, extensions: Iterable[str] = ALLOWED_EXTENSIONS) -> bool:
    return name.lower().endswith(tuple(extensions))


def validate_image_name(name: str) -> None:
    """Reject names that could address anything other than a direct child."""
    if any(seq in name for seq in FORBIDDEN_SEQUENCES):
        raise InvalidImageNameError(name)


async def resolve_image_file(root: Path, name: str) -> Path:
    """
    Validate `name` and make sure a file backs it.

    Validation runs before any filesystem access. The existence check runs in
    the threadpool so a slow disk only delays this request.

    Raises:
        InvalidImageNameError: the name contains `..`, `/` or `\\`.
        ImageNotFoundError: there is no readable file for the name.

    """
    validate_image_name(name)
    if not await run_in_threadpool(image_exists, root, name):
        raise ImageNotFoundError(name)
    return (root / name).resolve()


def _collect_images(
    root: Path,
    base_url: str,
    extensions: tuple[str, ...],
    include_size: bool,
) -> list[ImageReference]:
    try:
        entries = list(iter_directory(root))
    except OSError as exc:
        raise DirectoryUnreadableError() from exc

    images: list[ImageReference] = []
    for entry in entries:
        if not has_allowed_extension(entry.name, extensions):
            continue
        try:
            target = image_path(root, entry.name)
            if target is None or not target.is_file():
                continue
            size = file_size(target) if include_size else None
        except OSError:
            # Removed between enumeration and stat.
            logger.debug("Skipping %s: no longer readable", entry.name)
            continue
        images.append(
            ImageReference(
                name=entry.name,
                url=f"{base_url}/{entry.name}",
                size=size,
            ),
        )
    return images


async def list_images(
    root: Path,
    base_url: str,
    *,
    extensions: tuple[str, ...] = ALLOWED_EXTENSIONS,
    include_size: bool = False,
) -> list[ImageReference]:
    """Return a reference for every image directly under `root`, in directory order."""
    return await run_in_threadpool(
        _collect_images,
        root,
        base_url,
        extensions,
        include_size,
    )


__all__ = [
    "ImageReference",
    "ensure_image_dir",
    "file_size",
    "has_allowed_extension",
    "image_exists",
    "image_path",
    "iter_directory",
    "list_images",
    "resolve_image_file",
    "validate_image_name",
]
