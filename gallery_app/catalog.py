# gallery_app/catalog.py
from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Tuple

from loguru import logger

from .errors import DuplicatePhotoError
from .models import PhotoRecord


class Catalog:
    """
    In-memory, newest-first collection of PhotoRecord.

    The catalog is the only owner of its records. Records are frozen, so
    callers change a photo by building a copy and passing it to
    update_by_id(); insert/update_by_id/delete_by_id are the only mutations.
    """

    def __init__(self, records: Optional[Iterable[PhotoRecord]] = None) -> None:
        self._records: List[PhotoRecord] = []
        for record in records or ():
            if record.id in self:
                raise DuplicatePhotoError(record.id)
            self._records.append(record)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def insert(self, record: PhotoRecord) -> None:
        """Prepend `record`; it becomes index 0."""
        if record.id in self:
            raise DuplicatePhotoError(record.id)
        self._records.insert(0, record)
        logger.debug("Inserted photo {} ({} total)", record.id, len(self._records))

    def update_by_id(self, photo_id: str, new_record: PhotoRecord) -> bool:
        """
        Replace the record with `photo_id` by `new_record`, keeping its position.

        Returns False (and changes nothing) if no record matches. The stored
        created_at always survives the update.
        """
        if new_record.id != photo_id:
            raise ValueError(
                f"Replacement record id '{new_record.id}' does not match '{photo_id}'."
            )
        for index, current in enumerate(self._records):
            if current.id == photo_id:
                if new_record.created_at != current.created_at:
                    new_record = new_record.model_copy(
                        update={"created_at": current.created_at}
                    )
                self._records[index] = new_record
                logger.debug("Updated photo {}", photo_id)
                return True
        logger.debug("Update skipped, photo {} not in catalog", photo_id)
        return False

    def delete_by_id(self, photo_id: str) -> bool:
        """Remove the record with `photo_id`. Unknown ids are a no-op."""
        for index, current in enumerate(self._records):
            if current.id == photo_id:
                del self._records[index]
                logger.debug("Deleted photo {} ({} left)", photo_id, len(self._records))
                return True
        return False

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def filter(self, query: str) -> Iterator[PhotoRecord]:
        """
        Lazily yield the records matching `query`, in catalog order. The
        order is fixed when iteration starts; later changes are not seen.

        Case-insensitive substring match on title, description, category
        and tags. A blank query yields everything.
        """
        records = tuple(self._records)
        if not query or not query.strip():
            yield from records
            return
        needle = query.lower()
        for record in records:
            if record.matches(needle):
                yield record

    def get(self, photo_id: Optional[str]) -> Optional[PhotoRecord]:
        if photo_id is None:
            return None
        for record in self._records:
            if record.id == photo_id:
                return record
        return None

    def records(self) -> Tuple[PhotoRecord, ...]:
        return tuple(self._records)

    def count_by_category(self, category: str) -> int:
        return sum(1 for record in self._records if record.category == category)

    def __contains__(self, photo_id: object) -> bool:
        return any(record.id == photo_id for record in self._records)

    def __iter__(self) -> Iterator[PhotoRecord]:
        return iter(tuple(self._records))

    def __len__(self) -> int:
        return len(self._records)
