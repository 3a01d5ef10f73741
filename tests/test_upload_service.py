from __future__ import annotations

import io

import pytest
from PIL import Image

from conftest import MemoryStorage, make_image
from bizcard.repositories.blob_storage import LocalBlobStorage
from bizcard.services.errors import UploadFailure
from bizcard.services.upload_service import AvatarUploader


def _uploader(storage, now: float = 1700000000.5) -> AvatarUploader:
    return AvatarUploader(storage, bucket="avatars", max_bytes=2 * 1024 * 1024, clock=lambda: now)


def test_upload_stores_under_user_and_timestamp(memory_storage):
    url = _uploader(memory_storage).upload("u1", "me.PNG", "image/png", make_image("PNG"))
    assert url == "https://blobs.example.com/avatars/avatars/u1-1700000000500.png"
    assert ("avatars", "avatars/u1-1700000000500.png") in memory_storage.objects


def test_upload_shrinks_large_images(memory_storage):
    _uploader(memory_storage).upload("u1", "photo.jpg", "image/jpeg", make_image("JPEG", (2000, 1000)))
    stored = memory_storage.objects[("avatars", "avatars/u1-1700000000500.jpg")]
    image = Image.open(io.BytesIO(stored))
    assert image.format == "JPEG"
    assert max(image.size) <= 800


def test_missing_extension_uses_content_type(memory_storage):
    url = _uploader(memory_storage).upload("u1", "blob", "image/jpeg", make_image("JPEG"))
    assert url.endswith("u1-1700000000500.jpg")


@pytest.mark.parametrize(
    "content_type, data",
    [
        ("image/gif", b"GIF89a...."),
        ("image/png", b""),
        ("image/png", b"not really a png"),
        ("image/jpeg", b"\x89PNG\r\n\x1a\n" + b"0" * 32),
    ],
)
def test_rejected_uploads(memory_storage, content_type, data):
    uploader = _uploader(memory_storage)
    with pytest.raises(UploadFailure):
        uploader.upload("u1", "x.png", content_type, data)
    assert memory_storage.objects == {}


def test_oversized_upload_rejected(memory_storage):
    uploader = AvatarUploader(memory_storage, bucket="avatars", max_bytes=16)
    with pytest.raises(UploadFailure):
        uploader.upload("u1", "big.png", "image/png", make_image("PNG"))


def test_storage_failure_becomes_upload_failure():
    uploader = _uploader(MemoryStorage(fail_on_store=True))
    with pytest.raises(UploadFailure):
        uploader.upload("u1", "me.png", "image/png", make_image("PNG"))


def test_huge_dimensions_rejected_before_decoding(memory_storage):
    buffer = io.BytesIO()
    Image.new("1", (8000, 8000)).save(buffer, format="PNG")
    with pytest.raises(UploadFailure, match="too large"):
        _uploader(memory_storage).upload("u1", "wide.png", "image/png", buffer.getvalue())
    assert memory_storage.objects == {}


def test_decompression_bomb_becomes_upload_failure(memory_storage, monkeypatch):
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)
    with pytest.raises(UploadFailure):
        _uploader(memory_storage).upload("u1", "bomb.png", "image/png", make_image("PNG", (100, 100)))
    assert memory_storage.objects == {}


def test_local_storage_serves_under_static_uploads(tmp_path):
    storage = LocalBlobStorage(str(tmp_path), public_base="https://cards.example.com")
    storage.store("avatars", "avatars/u1-1.png", b"data", "image/png")
    assert (tmp_path / "avatars" / "avatars" / "u1-1.png").read_bytes() == b"data"
    assert storage.public_url("avatars", "avatars/u1-1.png") == "https://cards.example.com/static/uploads/avatars/avatars/u1-1.png"


def test_local_storage_refuses_paths_outside_bucket(tmp_path):
    storage = LocalBlobStorage(str(tmp_path))
    with pytest.raises(ValueError):
        storage.store("avatars", "../escape.png", b"data", "image/png")
