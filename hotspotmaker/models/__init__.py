"""Data models for hotspots and sections."""
from hotspotmaker.models.hotspot import Hotspot
from hotspotmaker.models.section import HotspotSection, SectionEntry

__all__ = [
    "Hotspot",
    "HotspotSection",
    "SectionEntry",
]
