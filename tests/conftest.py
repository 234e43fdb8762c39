from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from image_cdn.web import create_app
from image_cdn.web.config import Settings

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def image_dir(tmp_path: Path) -> Path:
    root = tmp_path / "images"
    root.mkdir()
    (root / "a.png").write_bytes(PNG_BYTES)
    (root / "b.txt").write_text("not an image")
    (root / "c.JPG").write_bytes(b"jpeg-data")
    return root


@pytest.fixture
def make_client(image_dir: Path):
    clients = []

    def _make(**overrides) -> TestClient:
        overrides.setdefault("image_dir", image_dir)
        raise_errors = overrides.pop("raise_server_exceptions", True)
        app = create_app(Settings(**overrides))
        client = TestClient(app, raise_server_exceptions=raise_errors)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
