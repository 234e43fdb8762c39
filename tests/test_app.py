import logging
from pathlib import Path

from fastapi.testclient import TestClient

from image_cdn.web import create_app
from image_cdn.web.config import Settings
from image_cdn.web.routers import listing


def test_root_describes_endpoints(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {
        "message": "CDN Server is running",
        "endpoints": {
            "getImage": "GET /cdn/:imageName",
            "listImages": "GET /cdn-list",
            "example": "http://testserver/cdn/your-image.jpg",
        },
    }


def test_unknown_route_returns_json_404(client):
    response = client.get("/does/not/exist?x=1")
    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "Route not found"
    assert "/does/not/exist?x=1" in body["message"]
    assert body["availableRoutes"] == {
        "home": "GET /",
        "getImage": "GET /cdn/:imageName",
        "listImages": "GET /cdn-list",
    }


def test_unsupported_method_is_an_unknown_route(client):
    response = client.post("/cdn/a.png")
    assert response.status_code == 404
    assert response.json()["error"] == "Route not found"


def test_unhandled_error_is_generic(make_client, monkeypatch, caplog):
    async def _explode(*args, **kwargs):
        raise RuntimeError("disk controller on fire")

    monkeypatch.setattr(listing, "list_images", _explode)
    client = make_client(raise_server_exceptions=False)

    with caplog.at_level(logging.ERROR, logger="image_cdn"):
        response = client.get("/cdn-list")

    assert response.status_code == 500
    assert response.json() == {
        "error": "Internal server error",
        "message": "Something went wrong on the server",
    }
    assert "disk controller" not in response.text
    assert "disk controller on fire" in caplog.text


def test_unreadable_directory_is_logged(client, image_dir: Path, caplog):
    image_dir.rename(image_dir.with_name("moved"))

    with caplog.at_level(logging.ERROR, logger="image_cdn"):
        response = client.get("/cdn-list")

    assert response.status_code == 500
    assert "Could not read images directory" in caplog.text
    assert str(image_dir) not in response.text


def test_requests_are_logged(client, caplog):
    with caplog.at_level(logging.INFO, logger="image_cdn"):
        client.get("/cdn/missing.png")
    assert "GET /cdn/missing.png -> 404" in caplog.text


def test_request_logging_can_be_disabled(make_client, caplog):
    client = make_client(log_requests=False)
    with caplog.at_level(logging.INFO, logger="image_cdn"):
        client.get("/")
    assert "GET / -> 200" not in caplog.text


def test_startup_creates_missing_directory(tmp_path: Path):
    root = tmp_path / "nested" / "images"
    app = create_app(Settings(image_dir=root))

    with TestClient(app) as client:
        assert root.is_dir()
        assert client.get("/cdn-list").json() == {"images": [], "count": 0}
