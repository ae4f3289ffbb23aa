"""Persist and load hotspot sections and their meta (JSON)."""
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from hotspotmaker.config import META_IMAGE, META_SPOTS, SECTIONS_PATH
from hotspotmaker.core.codec import FormRows, decode, encode
from hotspotmaker.core.sanitize import sanitize_text_field, sanitize_url
from hotspotmaker.models.section import HotspotSection, SectionEntry

logger = logging.getLogger(__name__)


def _path(path: Optional[Path] = None) -> Path:
    p = path or SECTIONS_PATH
    p.parent.mkdir(parents=True, exist_ok=True)
    return p


def load_sections(path: Optional[Path] = None) -> List[SectionEntry]:
    """Load all section entries from disk. Missing or corrupt file gives []."""
    p = _path(path)
    if not p.exists():
        return []
    try:
        data = json.loads(p.read_text())
    except (ValueError, OSError) as e:
        logger.warning("Could not read %s: %s", p, e)
        return []
    if not isinstance(data, dict):
        return []
    out = []
    items = data.get("sections", [])
    if not isinstance(items, list):
        logger.warning("Ignoring %s: \"sections\" is not a list", p)
        return []
    for item in items:
        try:
            meta = item.get("meta") or {}
            out.append(
                SectionEntry(
                    section_id=int(item["section_id"]),
                    title=item["title"],
                    created_at=item["created_at"],
                    meta={str(k): str(v) for k, v in meta.items()},
                )
            )
        except (KeyError, TypeError, ValueError, AttributeError):
            continue
    return out


def save_sections(entries: List[SectionEntry], path: Optional[Path] = None) -> None:
    """Save all section entries to disk (whole-file rewrite)."""
    p = _path(path)
    data = {
        "sections": [
            {
                "section_id": e.section_id,
                "title": e.title,
                "created_at": e.created_at,
                "meta": e.meta,
            }
            for e in entries
        ]
    }
    p.write_text(json.dumps(data, indent=2))


def get_entry(entries: List[SectionEntry], section_id: int) -> Optional[SectionEntry]:
    """Return entry by section_id or None."""
    for e in entries:
        if e.section_id == section_id:
            return e
    return None


def add_entry(
    entries: List[SectionEntry],
    title: str,
    path: Optional[Path] = None,
) -> SectionEntry:
    """Append a new, empty section and save. Ids start at 1 and are never reused while higher ids exist."""
    section_id = max((e.section_id for e in entries), default=0) + 1
    created_at = datetime.now(timezone.utc).isoformat()
    e = SectionEntry(
        section_id=section_id,
        title=sanitize_text_field(title),
        created_at=created_at,
    )
    entries.append(e)
    save_sections(entries, path)
    logger.info("Created hotspot section %d", section_id)
    return e


def update_title(
    entries: List[SectionEntry],
    section_id: int,
    title: str,
    path: Optional[Path] = None,
) -> Optional[SectionEntry]:
    """Rename a section; save. Returns updated entry or None."""
    e = get_entry(entries, section_id)
    if e is None:
        return None
    e.title = sanitize_text_field(title)
    save_sections(entries, path)
    return e


def delete_entry(
    entries: List[SectionEntry],
    section_id: int,
    path: Optional[Path] = None,
) -> bool:
    """Remove a section together with all of its meta; save. Returns True if found."""
    for i, e in enumerate(entries):
        if e.section_id == section_id:
            entries.pop(i)
            save_sections(entries, path)
            logger.info("Deleted hotspot section %d", section_id)
            return True
    return False


def get_meta(entries: List[SectionEntry], section_id: int, key: str) -> Optional[str]:
    """Stored meta value for a section, or None if the section or key is absent."""
    e = get_entry(entries, section_id)
    if e is None:
        return None
    return e.meta.get(key)


def set_meta(
    entries: List[SectionEntry],
    section_id: int,
    key: str,
    value: str,
    path: Optional[Path] = None,
) -> bool:
    """Store one meta value; save. Returns False for an unknown section."""
    e = get_entry(entries, section_id)
    if e is None:
        return False
    e.meta[key] = value
    save_sections(entries, path)
    return True


def replace_hotspots(
    entries: List[SectionEntry],
    section_id: int,
    image_url: Optional[str] = None,
    rows: Optional[FormRows] = None,
    path: Optional[Path] = None,
) -> Optional[SectionEntry]:
    """Save action: overwrite the image and/or the whole hotspot list.

    None leaves that part untouched. Hotspots are never patched; submitted
    rows always replace the stored list. Last write wins.
    """
    e = get_entry(entries, section_id)
    if e is None:
        return None
    if image_url is not None:
        e.meta[META_IMAGE] = sanitize_url(image_url)
    if rows is not None:
        e.meta[META_SPOTS] = encode(rows)
    save_sections(entries, path)
    logger.info("Saved hotspots for section %d", section_id)
    return e


def to_section(entry: SectionEntry) -> HotspotSection:
    """Decode an entry's meta into a HotspotSection."""
    return HotspotSection(
        section_id=entry.section_id,
        title=entry.title,
        created_at=entry.created_at,
        image_url=entry.meta.get(META_IMAGE) or "",
        spots=decode(entry.meta.get(META_SPOTS)),
    )
