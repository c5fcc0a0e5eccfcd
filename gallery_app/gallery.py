# gallery_app/gallery.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Optional

from loguru import logger

from .ai_gateway import AiGateway
from .encoder import encode_file
from .errors import EncodeError
from .models import (
    PLACEHOLDER_CATEGORY,
    PLACEHOLDER_DESCRIPTION,
    PLACEHOLDER_TAGS,
    PLACEHOLDER_TITLE,
    AnalysisOk,
    EditAbsent,
    EditOk,
    PhotoRecord,
    new_photo_id,
)
from .state import GalleryState


ANALYSIS_FAILED_NOTICE = "Failed to analyze image. It has been added with default info."
UPLOAD_FAILED_NOTICE = "Could not read the selected file. Nothing was uploaded."
EDIT_FAILED_NOTICE = "AI editing failed. Please try again."
BUSY_NOTICE = "Please wait for the current request to finish."


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------


class OutcomeStatus(str, Enum):
    OK = "ok"
    FALLBACK = "fallback"  # upload kept, analysis unavailable
    NO_IMAGE = "no_image"  # edit answered without an image
    FAILED = "failed"
    BUSY = "busy"
    SKIPPED = "skipped"


@dataclass
class Outcome:
    """Result of one user action, with an optional message for the user."""

    status: OutcomeStatus
    photo: Optional[PhotoRecord] = None
    notice: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.OK


def edited_description(description: str, instruction: str) -> str:
    return f"{description} (AI Edited: {instruction})"


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------


class GalleryController:
    """
    Runs the upload and magic-edit flows against one GalleryState.

    Gateway results are matched here; nothing from the gateway is raised
    to the caller, and every failure comes back with a notice.
    """

    def __init__(
        self,
        state: GalleryState,
        gateway: AiGateway,
        id_factory: Callable[[], str] = new_photo_id,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self.state = state
        self.gateway = gateway
        self._id_factory = id_factory
        self._clock = clock

    # ------------------------------------------------------------------
    # Upload
    # ------------------------------------------------------------------

    async def upload(self, source: Any, mime_type: Optional[str] = None) -> Outcome:
        view = self.state.view
        if view.uploading:
            return Outcome(OutcomeStatus.BUSY, notice=BUSY_NOTICE)

        view.uploading = True
        try:
            try:
                image_data = encode_file(source, mime_type)
            except EncodeError as e:
                logger.error("Upload aborted: {}", e)
                return Outcome(OutcomeStatus.FAILED, notice=UPLOAD_FAILED_NOTICE)

            result = await self.gateway.analyze(image_data)

            if isinstance(result, AnalysisOk):
                analysis = result.analysis
                photo = PhotoRecord(
                    id=self._id_factory(),
                    image_data=image_data,
                    title=analysis.title,
                    description=analysis.description,
                    tags=analysis.tags,
                    category=analysis.category,
                    created_at=self._clock(),
                )
                status, notice = OutcomeStatus.OK, None
            else:
                logger.warning("Analysis unavailable, using default info: {}", result)
                # Reuse the payload encoded above; the file is not read twice.
                photo = PhotoRecord(
                    id=self._id_factory(),
                    image_data=image_data,
                    title=PLACEHOLDER_TITLE,
                    description=PLACEHOLDER_DESCRIPTION,
                    tags=PLACEHOLDER_TAGS,
                    category=PLACEHOLDER_CATEGORY,
                    created_at=self._clock(),
                )
                status, notice = OutcomeStatus.FALLBACK, ANALYSIS_FAILED_NOTICE

            self.state.catalog.insert(photo)
            logger.info("Added photo {} '{}' ({})", photo.id, photo.title, status.value)
            return Outcome(status, photo=photo, notice=notice)
        finally:
            view.uploading = False

    # ------------------------------------------------------------------
    # Magic edit
    # ------------------------------------------------------------------

    def open_editor(self) -> None:
        if self.state.selected is not None:
            self.state.view.editing = True

    def cancel_edit(self) -> None:
        self.state.view.editing = False

    async def apply_edit(self, instruction: str) -> Outcome:
        view = self.state.view
        photo = self.state.selected
        if photo is None or not (instruction or "").strip():
            return Outcome(OutcomeStatus.SKIPPED)
        if view.edit_busy:
            return Outcome(OutcomeStatus.BUSY, notice=BUSY_NOTICE)

        view.edit_busy = True
        try:
            result = await self.gateway.edit(photo.image_data, instruction)
        finally:
            view.edit_busy = False

        if isinstance(result, EditOk):
            # The photo may have changed or gone while the request was out.
            current = self.state.catalog.get(photo.id)
            if current is None:
                logger.info("Photo {} was deleted during the edit, dropping result", photo.id)
                return Outcome(OutcomeStatus.SKIPPED)
            edited = current.model_copy(
                update={
                    "image_data": result.image_data,
                    "ai_generated": True,
                    "description": edited_description(current.description, instruction),
                }
            )
            self.state.catalog.update_by_id(edited.id, edited)
            if view.selected_id == edited.id:
                view.editing = False
            logger.info("Applied AI edit to photo {}", edited.id)
            return Outcome(OutcomeStatus.OK, photo=edited)

        if isinstance(result, EditAbsent):
            logger.warning("AI edit of photo {} returned no image", photo.id)
            return Outcome(OutcomeStatus.NO_IMAGE, photo=photo, notice=EDIT_FAILED_NOTICE)

        logger.error("AI edit of photo {} failed: {}", photo.id, result.message)
        return Outcome(OutcomeStatus.FAILED, photo=photo, notice=EDIT_FAILED_NOTICE)

    # ------------------------------------------------------------------
    # Other record changes
    # ------------------------------------------------------------------

    def update(self, photo: PhotoRecord) -> bool:
        """Replace a photo with an edited copy; it stays selected (same id)."""
        return self.state.catalog.update_by_id(photo.id, photo)

    def delete(self, photo_id: str) -> bool:
        removed = self.state.delete_photo(photo_id)
        if removed:
            logger.info("Deleted photo {}", photo_id)
        return removed
