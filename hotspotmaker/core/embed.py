"""Embed references: [hotspot id="123"] -> rendered hotspot markup."""
import re
from typing import Any, Callable, Optional, Tuple

from hotspotmaker.core.codec import decode
from hotspotmaker.core.renderer import render_display

SHORTCODE_TAG = "hotspot"

# [hotspot id="12"], [hotspot id='12'], [hotspot id=12], extra attributes ignored
_SHORTCODE = re.compile(r"\[hotspot(?P<attrs>(?:\s[^\]]*)?)\]")
_ID_ATTR = re.compile(r"""(?:^|\s)id\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s\]"']+))""")
_POSITIVE_INT = re.compile(r"^\s*\+?([0-9]+)\s*$")

# id -> (image_url, spots_blob), or None when there is no such section
SectionLookup = Callable[[int], Optional[Tuple[Optional[str], Optional[str]]]]


def shortcode_for(section_id: int) -> str:
    """Copyable embed reference for a section."""
    return f'[{SHORTCODE_TAG} id="{section_id}"]'


def parse_entry_id(raw: Any) -> Optional[int]:
    """Positive integer id, or None for anything non-numeric, zero or negative."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw > 0 else None
    if not isinstance(raw, str):
        return None
    match = _POSITIVE_INT.match(raw)
    if not match:
        return None
    value = int(match.group(1))
    return value if value > 0 else None


def parse_shortcode_id(attrs: str) -> Optional[str]:
    """Raw id attribute value from a shortcode's attribute text."""
    match = _ID_ATTR.search(attrs or "")
    if not match:
        return None
    return next(g for g in match.groups() if g is not None)


def render_embed(raw_id: Any, lookup: SectionLookup) -> str:
    """Resolve an id to display markup; "" for invalid ids, unknown or empty sections."""
    section_id = parse_entry_id(raw_id)
    if section_id is None:
        return ""
    found = lookup(section_id)
    if found is None:
        return ""
    image_url, blob = found
    return render_display(image_url or "", decode(blob))


def expand_embeds(content: str, lookup: SectionLookup) -> str:
    """Replace every embed reference in content with its rendered markup."""
    if not content or f"[{SHORTCODE_TAG}" not in content:
        return content or ""

    def _replace(match: "re.Match[str]") -> str:
        return render_embed(parse_shortcode_id(match.group("attrs")), lookup)

    return _SHORTCODE.sub(_replace, content)
