import cloudinary.api
import cloudinary.exceptions
import cloudinary.uploader
import pytest

from storefront.config import settings
from storefront.services.storage_providers.cloudinary_provider import CloudinaryStorageProvider


@pytest.fixture
def provider(monkeypatch):
    monkeypatch.setattr(settings, "cloudinary_cloud_name", "demo")
    monkeypatch.setattr(settings, "cloudinary_api_key", "key")
    monkeypatch.setattr(settings, "cloudinary_api_secret", "secret")
    return CloudinaryStorageProvider(bucket="images")


@pytest.fixture
def unconfigured(monkeypatch):
    monkeypatch.setattr(settings, "cloudinary_cloud_name", None)
    monkeypatch.setattr(settings, "cloudinary_api_key", None)
    monkeypatch.setattr(settings, "cloudinary_api_secret", None)
    return CloudinaryStorageProvider(bucket="images")


@pytest.mark.parametrize("path, expected", [
    ("products/1700000000000-abc123.png", ("images/products/1700000000000-abc123", "image", "png")),
    ("/general/photo.JPG", ("images/general/photo", "image", "jpg")),
    ("pdfs/catalogue.pdf", ("images/pdfs/catalogue.pdf", "raw", None)),
])
def test_locate_maps_paths_to_resources(provider, path, expected):
    assert provider._locate(path) == expected


def test_upload_uses_resource_type_per_file_kind(provider, monkeypatch):
    calls = []

    def fake_upload(data, **options):
        calls.append(options)
        return {"secure_url": f"https://res.cloudinary.com/demo/{options['public_id']}"}

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)

    image_url = provider.upload(b"png", "products/a.png", "image/png")
    pdf_url = provider.upload(b"%PDF", "pdfs/b.pdf", "application/pdf")

    assert image_url == "https://res.cloudinary.com/demo/images/products/a"
    assert pdf_url == "https://res.cloudinary.com/demo/images/pdfs/b.pdf"
    assert [(c["public_id"], c["resource_type"]) for c in calls] == [
        ("images/products/a", "image"),
        ("images/pdfs/b.pdf", "raw"),
    ]


def test_upload_failure_returns_none(provider, monkeypatch):
    def failing_upload(data, **options):
        raise cloudinary.exceptions.Error("quota exceeded")

    monkeypatch.setattr(cloudinary.uploader, "upload", failing_upload)

    assert provider.upload(b"png", "products/a.png", "image/png") is None


def test_delete(provider, monkeypatch):
    calls = []

    def fake_destroy(public_id, resource_type):
        calls.append((public_id, resource_type))
        return {"result": "ok" if public_id.endswith(".pdf") else "not found"}

    monkeypatch.setattr(cloudinary.uploader, "destroy", fake_destroy)

    assert provider.delete("pdfs/b.pdf") is True
    assert provider.delete("products/missing.png") is False
    assert calls == [("images/pdfs/b.pdf", "raw"), ("images/products/missing", "image")]


def test_public_url(provider):
    assert "/raw/upload/" in provider.get_public_url("pdfs/b.pdf")
    assert provider.get_public_url("pdfs/b.pdf").endswith("images/pdfs/b.pdf")
    assert provider.get_public_url("products/a.png").endswith("images/products/a.png")


def _resource(public_id, resource_type, created_at, size=100, fmt=None):
    return {
        "public_id": public_id,
        "resource_type": resource_type,
        "format": fmt,
        "bytes": size,
        "created_at": created_at,
        "asset_id": f"asset-{public_id}",
        "secure_url": f"https://res.cloudinary.com/demo/{public_id}",
    }


def test_list_files_pages_and_limits_depth(provider, monkeypatch):
    pages = {
        ("image", None): {
            "resources": [
                _resource("images/logo", "image", "2024-01-01T00:00:00Z", fmt="png"),
                _resource("images/products/a", "image", "2024-01-03T00:00:00Z", size=300, fmt="jpg"),
                _resource("images/products/archive/old", "image", "2024-01-04T00:00:00Z", fmt="png"),
            ],
            "next_cursor": "page-2",
        },
        ("image", "page-2"): {
            "resources": [_resource("images/banners/hero", "image", "2024-01-02T00:00:00Z", fmt="webp")],
        },
        ("raw", None): {
            "resources": [_resource("images/pdfs/catalogue.pdf", "raw", "2024-01-05T00:00:00Z", size=2048)],
        },
    }
    calls = []

    def fake_resources(**options):
        calls.append(options)
        return pages[(options["resource_type"], options.get("next_cursor"))]

    monkeypatch.setattr(cloudinary.api, "resources", fake_resources)

    files = provider.list_files()

    # Newest first; the two-folder-deep object is left out
    assert [f["name"] for f in files] == [
        "pdfs/catalogue.pdf",
        "products/a.jpg",
        "banners/hero.webp",
        "logo.png",
    ]
    assert files[1]["size"] == 300
    assert files[0]["metadata"]["resource_type"] == "raw"
    assert len(calls) == 3
    assert all(c["prefix"] == "images/" and c["type"] == "upload" for c in calls)
    assert calls[1]["next_cursor"] == "page-2"


def test_check_connection(provider, monkeypatch):
    monkeypatch.setattr(cloudinary.api, "ping", lambda: {"status": "ok"})
    assert provider.check_connection() is True

    def failing_ping():
        raise cloudinary.exceptions.Error("unreachable")

    monkeypatch.setattr(cloudinary.api, "ping", failing_ping)
    assert provider.check_connection() is False


def test_unconfigured_provider(unconfigured):
    assert unconfigured.upload(b"png", "products/a.png", "image/png") is None
    assert unconfigured.delete("products/a.png") is False
    assert unconfigured.check_connection() is False
    with pytest.raises(RuntimeError, match="not configured"):
        unconfigured.list_files()
