from io import BytesIO

import pytest
from PIL import Image

from app.application.services.image_service import ImageService
from app.exceptions import InvalidProfileImageException


def _image_bytes(fmt: str) -> bytes:
    buf = BytesIO()
    Image.new("RGB", (4, 4), color=(200, 10, 10)).save(buf, format=fmt)
    return buf.getvalue()


class DummyUpload:
    def __init__(self, filename: str, data: bytes, content_type: str = "image/png"):
        self.filename = filename
        self.content_type = content_type
        self.file = BytesIO(data)


@pytest.mark.parametrize("filename,fmt", [("a.png", "PNG"), ("b.JPG", "JPEG"), ("c.gif", "GIF")])
def test_upload_stores_valid_image(storage, filename, fmt):
    data = _image_bytes(fmt)
    svc = ImageService(storage_repo=storage)

    path = svc.upload_profile_image(DummyUpload(filename, data))

    assert path == f"profiles/{filename}"
    assert storage.files[path] == data


def test_upload_strips_client_directories(storage):
    svc = ImageService(storage_repo=storage)
    path = svc.upload_profile_image(DummyUpload("../../etc/a.png", _image_bytes("PNG")))
    assert path == "profiles/a.png"


def test_upload_rejects_unsupported_extension(storage):
    svc = ImageService(storage_repo=storage)
    with pytest.raises(InvalidProfileImageException):
        svc.upload_profile_image(DummyUpload("notes.txt", _image_bytes("PNG")))
    assert storage.files == {}


def test_upload_rejects_non_image_bytes(storage):
    svc = ImageService(storage_repo=storage)
    with pytest.raises(InvalidProfileImageException):
        svc.upload_profile_image(DummyUpload("fake.png", b"not an image"))


def test_upload_rejects_format_not_allowed(storage):
    svc = ImageService(storage_repo=storage)
    with pytest.raises(InvalidProfileImageException):
        svc.upload_profile_image(DummyUpload("bitmap.png", _image_bytes("BMP")))


def test_upload_rejects_oversized_file(storage):
    svc = ImageService(storage_repo=storage, max_file_size=16)
    with pytest.raises(InvalidProfileImageException):
        svc.upload_profile_image(DummyUpload("big.png", _image_bytes("PNG")))


@pytest.mark.parametrize("filename,fmt", [("x.gif", "PNG"), ("photo.png", "JPEG"), ("anim.jpg", "GIF")])
def test_upload_rejects_content_that_disagrees_with_extension(storage, filename, fmt):
    svc = ImageService(storage_repo=storage)
    with pytest.raises(InvalidProfileImageException):
        svc.upload_profile_image(DummyUpload(filename, _image_bytes(fmt)))
    assert storage.files == {}
