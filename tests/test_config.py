from pathlib import Path

import pytest
from pydantic import ValidationError

from image_cdn import build_settings
from image_cdn.web.config import Settings
from image_cdn.web.constants import ALLOWED_EXTENSIONS


def test_defaults():
    settings = Settings()
    assert settings.image_dir == Path("images")
    assert settings.url_prefix == "/cdn"
    assert settings.listing_path == "/cdn-list"
    assert settings.listing_token == "cdn-list"
    assert settings.public_base_url is None
    assert settings.include_size is False
    assert settings.allowed_extensions == ALLOWED_EXTENSIONS


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("cdn", "/cdn"), ("/cdn/", "/cdn"), ("/", ""), ("", ""), ("static/img", "/static/img")],
)
def test_prefix_is_normalized(raw, expected):
    assert Settings(url_prefix=raw).url_prefix == expected


def test_empty_listing_path_is_rejected():
    with pytest.raises(ValidationError):
        Settings(listing_path="/")


def test_environment_overrides(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("IMAGE_CDN_IMAGE_DIR", str(tmp_path))
    monkeypatch.setenv("IMAGE_CDN_URL_PREFIX", "")
    monkeypatch.setenv("IMAGE_CDN_INCLUDE_SIZE", "true")
    monkeypatch.setenv("IMAGE_CDN_PUBLIC_BASE_URL", "https://cdn.example.com/")

    settings = Settings()
    assert settings.image_root == tmp_path.resolve()
    assert settings.url_prefix == ""
    assert settings.include_size is True
    assert settings.public_base_url == "https://cdn.example.com"


def test_ico_extension_is_opt_in():
    assert ".ico" in Settings(include_ico=True).allowed_extensions


def test_build_settings_applies_cli_overrides(tmp_path: Path):
    settings = build_settings(image_dir=tmp_path, prefix="", include_size=True)
    assert settings.image_dir == tmp_path
    assert settings.url_prefix == ""
    assert settings.include_size is True
