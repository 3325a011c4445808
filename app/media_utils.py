from enum import Enum
from typing import Optional


class MediaType(str, Enum):
    JPEG = "image/jpeg"
    PNG = "image/png"
    GIF = "image/gif"
    UNRECOGNIZED = "unrecognized"

    @property
    def is_image(self) -> bool:
        return self is not MediaType.UNRECOGNIZED


_EXTENSION_MEDIA_TYPES = {
    "jpg": MediaType.JPEG,
    "jpeg": MediaType.JPEG,
    "png": MediaType.PNG,
    "gif": MediaType.GIF,
}


def extract_extension(path: Optional[str]) -> str:
    """Return the text after the last '.' in path, or '' when there is no dot."""
    if not path:
        return ""
    dot = path.rfind(".")
    if dot < 0:
        return ""
    return path[dot + 1:]


def media_type_for_path(path: Optional[str]) -> MediaType:
    """Map a stored file path to an image media type by its extension (case-insensitive)."""
    return _EXTENSION_MEDIA_TYPES.get(extract_extension(path).lower(), MediaType.UNRECOGNIZED)
