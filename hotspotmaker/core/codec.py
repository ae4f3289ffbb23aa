"""Hotspot record codec: submitted form rows -> normalized hotspots -> JSON blob, and back."""
import json
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from hotspotmaker.core.sanitize import sanitize_text_field, sanitize_url, to_int
from hotspotmaker.models.hotspot import Hotspot

logger = logging.getLogger(__name__)


@dataclass
class FormRows:
    """Parallel per-field lists as submitted by the authoring form; index i is one row."""
    x: List[Any] = field(default_factory=list)
    y: List[Any] = field(default_factory=list)
    title: List[Any] = field(default_factory=list)
    text: List[Any] = field(default_factory=list)
    icon: Optional[List[Any]] = None

    @classmethod
    def from_spots(cls, spots: Sequence[Hotspot]) -> "FormRows":
        """Rows that would re-submit the given hotspots unchanged."""
        return cls(
            x=["" if s.x is None else str(s.x) for s in spots],
            y=["" if s.y is None else str(s.y) for s in spots],
            title=[s.title or "" for s in spots],
            text=[s.text or "" for s in spots],
            icon=[s.icon or "" for s in spots],
        )


def _at(values: Optional[Sequence[Any]], i: int) -> Any:
    if values is None or i >= len(values):
        return None
    return values[i]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def normalize_rows(rows: FormRows) -> List[Hotspot]:
    """Build hotspots from form rows; rows with an empty x are dropped, order is kept."""
    spots = []
    for i, x in enumerate(rows.x):
        if _is_blank(x):
            continue
        spots.append(
            Hotspot(
                x=to_int(x),
                y=to_int(_at(rows.y, i)),
                title=sanitize_text_field(_at(rows.title, i)),
                text=sanitize_text_field(_at(rows.text, i)),
                icon=sanitize_url(_at(rows.icon, i) or ""),
            )
        )
    return spots


def dump_spots(spots: Sequence[Hotspot]) -> str:
    """Serialize hotspots to the stored blob (compact JSON array)."""
    return json.dumps([s.to_dict() for s in spots], separators=(",", ":"))


def encode(rows: FormRows) -> str:
    """Normalize submitted rows and serialize them."""
    return dump_spots(normalize_rows(rows))


def _decode_item(item: dict) -> Hotspot:
    x, y = item.get("x"), item.get("y")
    title, text = item.get("title"), item.get("text")
    icon = item.get("icon")
    return Hotspot(
        x=None if x is None else to_int(x),
        y=None if y is None else to_int(y),
        title=None if title is None else str(title),
        text=None if text is None else str(text),
        icon=str(icon) if icon else "",
    )


def decode(raw: Optional[str]) -> List[Hotspot]:
    """Tolerant read of a stored blob. Missing, corrupt or non-list data gives []."""
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError, ValueError) as e:
        logger.warning("Ignoring unparseable hotspot data: %s", e)
        return []
    if not isinstance(data, list):
        logger.warning("Ignoring hotspot data of type %s (expected list)", type(data).__name__)
        return []
    return [_decode_item(item) for item in data if isinstance(item, dict)]
