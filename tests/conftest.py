"""Shared fixtures for the gallery tests."""

import io
import itertools
from datetime import datetime, timedelta, timezone

import pytest
from PIL import Image

from gallery_app.catalog import Catalog
from gallery_app.encoder import encode
from gallery_app.models import PhotoRecord
from gallery_app.state import GalleryState


BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def png_bytes(color=(200, 30, 30), size=(4, 4)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


def make_photo(photo_id, title="Photo", description="", tags=(), category="Other", **extra):
    return PhotoRecord(
        id=photo_id,
        image_data=extra.pop("image_data", encode(b"fake-image", "image/jpeg")),
        title=title,
        description=description,
        tags=tags,
        category=category,
        created_at=extra.pop("created_at", BASE_TIME),
        **extra,
    )


class FakeGateway:
    """Records calls and answers with canned results."""

    def __init__(self, analysis=None, edit=None, on_edit=None):
        self.analysis_result = analysis
        self.edit_result = edit
        self.on_edit = on_edit
        self.analyze_calls = []
        self.edit_calls = []

    async def analyze(self, image_data):
        self.analyze_calls.append(image_data)
        return self.analysis_result

    async def edit(self, image_data, instruction):
        self.edit_calls.append((image_data, instruction))
        if self.on_edit is not None:
            self.on_edit()
        return self.edit_result


@pytest.fixture
def photo_a():
    return make_photo(
        "a",
        title="Morning Mist",
        description="A serene mountain landscape covered in morning fog.",
        tags=("nature", "mountains", "fog"),
        category="Nature",
    )


@pytest.fixture
def photo_b():
    return make_photo(
        "b",
        title="Neon Nights",
        description="The vibrant streets of a futuristic city at night.",
        tags=("city", "neon", "lights"),
        category="Architecture",
        created_at=BASE_TIME + timedelta(hours=1),
    )


@pytest.fixture
def catalog(photo_a, photo_b):
    return Catalog([photo_a, photo_b])


@pytest.fixture
def state(catalog):
    return GalleryState(catalog=catalog)


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"photo-{next(counter)}"
