# gallery_app/errors.py
from __future__ import annotations


class GalleryError(Exception):
    """Base class for gallery errors."""


class EncodeError(GalleryError):
    """An uploaded file could not be read or a payload is not a data URI."""


class DuplicatePhotoError(GalleryError):
    """A record with the same id is already in the catalog."""

    def __init__(self, photo_id: str) -> None:
        super().__init__(f"Photo '{photo_id}' is already in the catalog.")
        self.photo_id = photo_id
