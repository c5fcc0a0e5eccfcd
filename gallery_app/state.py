# gallery_app/state.py
"""Gallery state container: the catalog plus what the user is looking at.

One GalleryState lives per browser session (in st.session_state) and is
handed to the rendering code by reference.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .catalog import Catalog
from .models import ALBUM_CATEGORIES, PhotoRecord, ViewTab


@dataclass
class ViewState:
    """Ephemeral UI state. Defaults: grid tab, nothing selected, empty search."""

    active_tab: ViewTab = ViewTab.GRID
    selected_id: Optional[str] = None
    search_query: str = ""

    # Busy flags are scoped to their own control.
    uploading: bool = False
    editing: bool = False
    edit_busy: bool = False


@dataclass
class GalleryState:
    catalog: Catalog = field(default_factory=Catalog)
    view: ViewState = field(default_factory=ViewState)

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def visible_photos(self) -> List[PhotoRecord]:
        """Photos for the grid, re-derived from the catalog and search query."""
        return list(self.catalog.filter(self.view.search_query))

    @property
    def selected(self) -> Optional[PhotoRecord]:
        return self.catalog.get(self.view.selected_id)

    def album_counts(self) -> Dict[str, int]:
        return {name: self.catalog.count_by_category(name) for name in ALBUM_CATEGORIES}

    # ------------------------------------------------------------------
    # View changes
    # ------------------------------------------------------------------

    def select(self, photo_id: Optional[str]) -> None:
        if photo_id is not None and photo_id not in self.catalog:
            photo_id = None
        if photo_id != self.view.selected_id:
            self.view.editing = False
        self.view.selected_id = photo_id

    def clear_selection(self) -> None:
        self.select(None)

    def set_tab(self, tab: ViewTab) -> None:
        self.view.active_tab = ViewTab(tab)

    def set_query(self, query: Optional[str]) -> None:
        self.view.search_query = query or ""

    def open_album(self, category: str) -> None:
        """Albums tab: searching by the category name and going back to the grid."""
        self.set_query(category)
        self.set_tab(ViewTab.GRID)

    # ------------------------------------------------------------------
    # Catalog changes that touch the view
    # ------------------------------------------------------------------

    def delete_photo(self, photo_id: str) -> bool:
        removed = self.catalog.delete_by_id(photo_id)
        if self.view.selected_id == photo_id:
            self.clear_selection()
        return removed
