import re

import pytest

from storefront.config import settings
from storefront.services.upload_service import build_object_path, format_bytes

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def test_upload_image(admin_client, storage):
    response = admin_client.post(
        "/api/upload",
        files={"file": ("photo.PNG", PNG, "image/png")},
        data={"folder": "products"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert re.match(r"^products/\d{13}-[a-z0-9]{6}\.png$", body["path"])
    assert body["url"] == f"https://cdn.test/images/{body['path']}"
    assert storage.objects[body["path"]]["data"] == PNG


def test_upload_image_default_folder(admin_client):
    response = admin_client.post("/api/upload", files={"file": ("a.jpg", b"jpeg", "image/jpeg")})

    assert response.json()["path"].startswith("general/")


def test_upload_rejects_other_types(admin_client, storage):
    response = admin_client.post("/api/upload", files={"file": ("notes.txt", b"hello", "text/plain")})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid file type. Only JPEG, PNG, GIF, WebP allowed."}
    assert storage.objects == {}


def test_upload_rejects_large_images(admin_client, monkeypatch):
    monkeypatch.setattr(settings, "max_image_upload_bytes", 1024 * 1024)

    response = admin_client.post(
        "/api/upload",
        files={"file": ("big.png", b"\x00" * (1024 * 1024 + 1), "image/png")},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "File too large. Maximum 1MB allowed."


def test_upload_without_file(admin_client):
    response = admin_client.post("/api/upload", data={"folder": "products"})

    assert response.status_code == 400
    assert response.json() == {"error": "No file provided"}


def test_upload_storage_failure(admin_client, storage):
    storage.fail_uploads = True

    response = admin_client.post("/api/upload", files={"file": ("a.png", PNG, "image/png")})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to upload file"}


def test_upload_pdf(admin_client):
    ok = admin_client.post("/api/upload/pdf", files={"file": ("Catalogue.pdf", b"%PDF-1.4", "application/pdf")})
    wrong = admin_client.post("/api/upload/pdf", files={"file": ("a.png", PNG, "image/png")})

    assert ok.status_code == 200
    assert re.match(r"^pdfs/\d{13}-[a-z0-9]{6}\.pdf$", ok.json()["path"])
    assert wrong.status_code == 400
    assert wrong.json() == {"error": "Only PDF files allowed"}


def test_delete_upload(admin_client, storage):
    path = admin_client.post("/api/upload", files={"file": ("a.png", PNG, "image/png")}).json()["path"]

    response = admin_client.delete(f"/api/upload?path={path}")

    assert response.json() == {"success": True}
    assert path not in storage.objects


def test_delete_upload_errors(admin_client):
    assert admin_client.delete("/api/upload").json() == {"error": "No path provided"}

    missing = admin_client.delete("/api/upload?path=general/missing.png")
    assert missing.status_code == 500
    assert missing.json() == {"error": "Failed to delete file"}


def test_storage_list_totals(admin_client):
    admin_client.post("/api/upload", files={"file": ("a.png", b"\x00" * 1024, "image/png")})
    admin_client.post("/api/upload/pdf", files={"file": ("b.pdf", b"\x00" * 512, "application/pdf")})

    body = admin_client.get("/api/storage/list").json()

    assert body["bucket"] == "images"
    assert body["totalFiles"] == 2
    assert body["totalSize"] == 1536
    assert body["totalSizeFormatted"] == "1.5 KB"
    # Newest first
    assert body["files"][0]["name"].startswith("pdfs/")


def test_upload_routes_require_admin(client):
    assert client.post("/api/upload", files={"file": ("a.png", PNG, "image/png")}).status_code == 401
    assert client.get("/api/storage/list").status_code == 401


@pytest.mark.parametrize("size, expected", [
    (0, "0 Bytes"),
    (500, "500 Bytes"),
    (1024, "1 KB"),
    (1536, "1.5 KB"),
    (5 * 1024 * 1024, "5 MB"),
    (3 * 1024 ** 3 + 1024 ** 3 // 4, "3.25 GB"),
])
def test_format_bytes(size, expected):
    assert format_bytes(size) == expected


def test_object_path_strips_slashes():
    assert build_object_path("/banners/", "webp").startswith("banners/")
