"""Stored section entries and the decoded hotspot section."""
from dataclasses import dataclass, field
from typing import Dict, List

from hotspotmaker.models.hotspot import Hotspot


@dataclass
class SectionEntry:
    """Stored entry: id, title and its string meta (image URL, spots blob)."""
    section_id: int
    title: str
    created_at: str
    meta: Dict[str, str] = field(default_factory=dict)


@dataclass
class HotspotSection:
    """Per-entry record: background image plus ordered hotspots."""
    section_id: int
    title: str
    created_at: str
    image_url: str = ""
    spots: List[Hotspot] = field(default_factory=list)
