# gallery_app/models.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Tuple, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


PLACEHOLDER_TITLE = "New Photo"
PLACEHOLDER_DESCRIPTION = "Uploaded from device"
PLACEHOLDER_CATEGORY = "Other"
PLACEHOLDER_TAGS: Tuple[str, ...] = ("uploaded",)

# Smart categories offered on the Albums tab. The category field itself is open.
ALBUM_CATEGORIES: Tuple[str, ...] = ("Nature", "Architecture", "People", "Other")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_photo_id() -> str:
    return str(uuid4())


class ViewTab(str, Enum):
    GRID = "grid"
    ALBUMS = "albums"


class PhotoRecord(BaseModel):
    """A single photo in the gallery, with its inline image payload."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_photo_id)
    image_data: str = Field(
        ...,
        description="Inline image payload as a data URI (data:<mime>;base64,...).",
    )

    title: str = PLACEHOLDER_TITLE
    description: str = PLACEHOLDER_DESCRIPTION
    tags: Tuple[str, ...] = ()
    category: str = PLACEHOLDER_CATEGORY

    created_at: datetime = Field(default_factory=_utcnow)
    ai_generated: bool = False

    def matches(self, needle: str) -> bool:
        """
        True if the already-lowercased `needle` is a substring of the title,
        description, category or any tag (all compared lowercased).
        """
        if needle in self.title.lower():
            return True
        if needle in self.description.lower():
            return True
        if needle in self.category.lower():
            return True
        return any(needle in tag.lower() for tag in self.tags)


class AiAnalysis(BaseModel):
    """Descriptive metadata returned by the analysis model."""

    title: str
    description: str
    tags: Tuple[str, ...] = ()
    category: str

    @field_validator("tags", mode="before")
    @classmethod
    def _best_effort_tags(cls, value: Any) -> Tuple[str, ...]:
        # The model is asked for five tags; any count is accepted.
        if not isinstance(value, (list, tuple)):
            return ()
        return tuple(
            item.strip() for item in value if isinstance(item, str) and item.strip()
        )


# ---------------------------------------------------------------------------
# Gateway results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GatewayError:
    """The remote call failed (transport, service or configuration)."""

    message: str
    cause: Optional[BaseException] = None


@dataclass(frozen=True)
class AnalysisOk:
    analysis: AiAnalysis


@dataclass(frozen=True)
class AnalysisMalformed:
    """The service answered, but not with a usable analysis."""

    reason: str
    raw: str = ""


@dataclass(frozen=True)
class EditOk:
    image_data: str


@dataclass(frozen=True)
class EditAbsent:
    """The edit response contained no image part."""


AnalysisResult = Union[AnalysisOk, AnalysisMalformed, GatewayError]
EditResult = Union[EditOk, EditAbsent, GatewayError]
