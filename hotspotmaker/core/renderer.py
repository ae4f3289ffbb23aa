"""Markup for embedded hotspot images and for the authoring form."""
from collections.abc import Mapping
from typing import Any, List, Optional

from hotspotmaker.core.sanitize import esc_attr, esc_html, esc_url, to_int
from hotspotmaker.models.hotspot import Hotspot
from hotspotmaker.models.section import HotspotSection

DEFAULT_GLYPH = "+"
IMAGE_ALT = "Hotspot Image"


def _as_hotspot(item: Any) -> Optional[Hotspot]:
    if isinstance(item, Hotspot):
        return item
    if isinstance(item, Mapping):
        return Hotspot.from_mapping(item)
    return None


def is_renderable(spot: Any) -> bool:
    """True if x, y, title and text are all present (icon is optional)."""
    spot = _as_hotspot(spot)
    if spot is None:
        return False
    return None not in (spot.x, spot.y, spot.title, spot.text)


def is_section_renderable(image_url: str, spots: Any) -> bool:
    """True if there is an image and at least one renderable hotspot."""
    if not image_url or not isinstance(spots, (list, tuple)):
        return False
    return any(is_renderable(s) for s in spots)


def _render_marker(spot: Hotspot) -> str:
    if spot.icon:
        icon = f'<img src="{esc_url(spot.icon)}" class="hotspot-icon-img" alt="" />'
    else:
        icon = f'<span class="hotspot-icon">{DEFAULT_GLYPH}</span>'
    return (
        f'<div class="hotspot-item" style="top:{to_int(spot.y)}%;left:{to_int(spot.x)}%;">'
        f"{icon}"
        '<div class="hotspot-tooltip">'
        f"<strong>{esc_html(spot.title)}</strong>"
        f"<p>{esc_html(spot.text)}</p>"
        "</div>"
        "</div>"
    )


def render_display(image_url: str, spots: Any) -> str:
    """Embeddable markup for an image with its hotspots.

    Returns "" (no container at all) when the image is missing or spots is
    empty or not a list. Hotspots missing x, y, title or text are skipped.
    """
    if not image_url or not spots or not isinstance(spots, (list, tuple)):
        return ""
    markers = []
    for item in spots:
        spot = _as_hotspot(item)
        if spot is None or not is_renderable(spot):
            continue
        markers.append(_render_marker(spot))
    return (
        '<div class="hotspot-wrapper">'
        f'<img src="{esc_url(image_url)}" class="hotspot-bg" alt="{IMAGE_ALT}">'
        + "".join(markers)
        + "</div>"
    )


# ── Authoring form ──────────────────────────────────────────────────────────

_ROW_SCRIPT = """<script>
(function () {
  var container = document.getElementById('hotspot-container');
  document.getElementById('add-hotspot').addEventListener('click', function () {
    var row = container.querySelector('.hotspot-row').cloneNode(true);
    row.querySelectorAll('input').forEach(function (input) { input.value = ''; });
    container.appendChild(row);
  });
  container.addEventListener('click', function (event) {
    if (!event.target.classList.contains('remove-hotspot')) return;
    if (container.querySelectorAll('.hotspot-row').length > 1) {
      event.target.closest('.hotspot-row').remove();
    } else {
      alert('At least one hotspot is required.');
    }
  });
})();
</script>"""


def _render_row(spot: Optional[Hotspot] = None) -> str:
    def value(v: Any) -> str:
        return esc_attr("" if v is None else v)

    s = spot or Hotspot(x=None, y=None, title=None, text=None)
    return (
        '<div class="hotspot-row">'
        f'<input type="number" name="hotspot_x[]" value="{value(s.x)}" placeholder="X (%)">'
        f'<input type="number" name="hotspot_y[]" value="{value(s.y)}" placeholder="Y (%)">'
        f'<input type="text" name="hotspot_title[]" value="{value(s.title)}" placeholder="Title">'
        f'<input type="text" name="hotspot_text[]" value="{value(s.text)}" placeholder="Description">'
        f'<input type="text" name="hotspot_icon[]" value="{value(s.icon)}" placeholder="Icon Image URL">'
        '<button type="button" class="button remove-hotspot">Remove</button>'
        "</div>"
    )


def render_authoring_form(section: HotspotSection, action: str) -> str:
    """Edit form: image URL, preview, one row per hotspot (at least one row), add/remove script."""
    preview = ""
    if section.image_url:
        preview = (
            "<p><strong>Preview:</strong></p>"
            f'<img src="{esc_url(section.image_url)}" class="hotspot-preview">'
        )
    spots: List[Hotspot] = list(section.spots)
    rows = "".join(_render_row(s) for s in spots) if spots else _render_row()
    return (
        f'<form method="post" action="{esc_attr(action)}" class="hotspot-form">'
        f"<h2>{esc_html(section.title)}</h2>"
        "<p><strong>Background Image URL</strong></p>"
        f'<input type="text" name="hotspot_image" value="{esc_attr(section.image_url)}" '
        'placeholder="Paste image URL">'
        "<p>Click Update to view the image</p>"
        "<hr>"
        f"{preview}"
        "<h3>Hotspots</h3>"
        f'<div id="hotspot-container">{rows}</div>'
        '<button type="button" class="button" id="add-hotspot">Add Hotspot</button>'
        "<p><small>X and Y values should be between 0-100 (percentage based positioning).</small></p>"
        '<button type="submit" class="button button-primary">Update</button>'
        "</form>"
        f"{_ROW_SCRIPT}"
    )


def render_form_page(section: HotspotSection, action: str, stylesheet: str = "/static/style.css") -> str:
    """Standalone HTML page wrapping the authoring form."""
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n<meta charset="UTF-8">\n'
        f"<title>Edit Hotspot Section: {esc_html(section.title)}</title>\n"
        f'<link rel="stylesheet" href="{esc_attr(stylesheet)}">\n'
        "</head>\n<body>\n"
        f"{render_authoring_form(section, action)}\n"
        "</body>\n</html>"
    )
