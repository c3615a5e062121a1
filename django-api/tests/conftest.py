"""Pytest configuration and shared fixtures."""

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def local_images(settings, tmp_path):
    settings.IMAGE_STORE = "local"
    settings.MEDIA_ROOT = str(tmp_path / "media")


@pytest.fixture
def image_file() -> SimpleUploadedFile:
    return SimpleUploadedFile("banner.png", b"\x89PNG\r\n\x1a\nnot-really-a-png", content_type="image/png")
