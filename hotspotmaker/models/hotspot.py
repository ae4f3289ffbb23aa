"""Hotspot value type."""
from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass
class Hotspot:
    """One positioned, labeled point on the image. x/y are percentages (0-100, not enforced)."""
    x: Optional[int]
    y: Optional[int]
    title: Optional[str]
    text: Optional[str]
    icon: str = ""

    def to_dict(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "title": self.title,
            "text": self.text,
            "icon": self.icon,
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Hotspot":
        """Build from a mapping as-is; missing keys stay None."""
        return cls(
            x=data.get("x"),
            y=data.get("y"),
            title=data.get("title"),
            text=data.get("text"),
            icon=data.get("icon") or "",
        )
