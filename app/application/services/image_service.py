import io
import logging
import os
from typing import BinaryIO, Optional, Protocol
from dataclasses import dataclass
from PIL import Image, UnidentifiedImageError

from ..ports.storage_repo import StorageRepository
from ...media_utils import MediaType, media_type_for_path
from ...exceptions import InvalidProfileImageException

logger = logging.getLogger(__name__)

# Pillow format expected for each accepted profile image extension
IMAGE_FORMATS_BY_MEDIA_TYPE = {
    MediaType.JPEG: "JPEG",
    MediaType.PNG: "PNG",
    MediaType.GIF: "GIF",
}


class UploadedFile(Protocol):
    filename: Optional[str]
    content_type: Optional[str]
    file: BinaryIO


@dataclass
class ImageService:
    storage_repo: StorageRepository
    subdir: str = "profiles"
    max_file_size: int = 10 * 1024 * 1024

    def upload_profile_image(self, upload: UploadedFile) -> str:
        """Validate an uploaded profile image and store it; returns the stored path.

        The decoded image format must match the filename extension.
        """
        filename = os.path.basename(upload.filename or "")
        media_type = media_type_for_path(filename)
        expected_format = IMAGE_FORMATS_BY_MEDIA_TYPE.get(media_type)
        if expected_format is None:
            raise InvalidProfileImageException()

        data = upload.file.read()
        if not data:
            raise InvalidProfileImageException("Profile image is empty.")
        if len(data) > self.max_file_size:
            raise InvalidProfileImageException(f"Profile image must be smaller than {self.max_file_size // (1024 * 1024)}MB.")

        try:
            with Image.open(io.BytesIO(data)) as image:
                image_format = image.format
        except (UnidentifiedImageError, OSError):
            raise InvalidProfileImageException("Profile image is not a readable image file.")
        if image_format != expected_format:
            raise InvalidProfileImageException(
                f"Profile image content ({image_format}) does not match its .{filename.rsplit('.', 1)[-1].lower()} extension."
            )

        path = self.storage_repo.save_bytes(self.subdir, filename, data)
        logger.info(f"Stored profile image {filename} ({len(data)} bytes)")
        return path
