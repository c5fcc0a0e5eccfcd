# gallery_app/seed.py
from __future__ import annotations

from typing import List

from services.image_service import generate_placeholder_image

from .encoder import encode
from .models import PhotoRecord


_SEED_PHOTOS = [
    {
        "title": "Morning Mist",
        "description": "A serene mountain landscape covered in morning fog.",
        "tags": ("nature", "mountains", "fog"),
        "category": "Nature",
        "colors": ((46, 74, 62), (226, 236, 230)),
    },
    {
        "title": "Neon Nights",
        "description": "The vibrant streets of a futuristic city at night.",
        "tags": ("city", "neon", "lights"),
        "category": "Architecture",
        "colors": ((30, 12, 54), (255, 92, 205)),
    },
]


def seed_photos() -> List[PhotoRecord]:
    """
    Starter photos shown in a fresh session, newest first.
    Images are generated placeholders so nothing is fetched over the network.
    """
    photos: List[PhotoRecord] = []
    for entry in _SEED_PHOTOS:
        bg, fg = entry["colors"]
        png = generate_placeholder_image(entry["title"], bg_color=bg, fg_color=fg)
        photos.append(
            PhotoRecord(
                image_data=encode(png, "image/png"),
                title=entry["title"],
                description=entry["description"],
                tags=entry["tags"],
                category=entry["category"],
            )
        )
    return photos
