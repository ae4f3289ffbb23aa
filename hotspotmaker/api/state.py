"""Shared application state (injected into routes)."""
from pathlib import Path
from typing import List, Optional, Tuple

from hotspotmaker.config import META_IMAGE, META_SPOTS
from hotspotmaker.core.codec import FormRows
from hotspotmaker.core.section_store import (
    add_entry,
    delete_entry,
    get_entry,
    get_meta,
    load_sections,
    replace_hotspots,
    update_title,
)
from hotspotmaker.models.section import SectionEntry


class AppState:
    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = path
        self._entries: List[SectionEntry] = []

    def get_entries(self) -> List[SectionEntry]:
        return self._entries

    def load_sections(self) -> None:
        self._entries = load_sections(self.path)

    def get_entry(self, section_id: int) -> SectionEntry | None:
        return get_entry(self._entries, section_id)

    def add_entry(self, title: str) -> SectionEntry:
        return add_entry(self._entries, title, self.path)

    def update_title(self, section_id: int, title: str) -> SectionEntry | None:
        return update_title(self._entries, section_id, title, self.path)

    def delete_entry(self, section_id: int) -> bool:
        return delete_entry(self._entries, section_id, self.path)

    def replace_hotspots(
        self,
        section_id: int,
        *,
        image_url: str | None = None,
        rows: FormRows | None = None,
    ) -> SectionEntry | None:
        return replace_hotspots(
            self._entries, section_id, image_url=image_url, rows=rows, path=self.path
        )

    def lookup(self, section_id: int) -> Tuple[str | None, str | None] | None:
        """(image_url, spots_blob) for embed rendering, or None if unknown."""
        if self.get_entry(section_id) is None:
            return None
        return (
            get_meta(self._entries, section_id, META_IMAGE),
            get_meta(self._entries, section_id, META_SPOTS),
        )


_state = AppState()


def get_state() -> AppState:
    return _state
