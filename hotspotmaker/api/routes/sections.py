"""Hotspot section CRUD, hotspot save (JSON and authoring form)."""
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import BaseModel

from hotspotmaker import config
from hotspotmaker.api.state import AppState, get_state
from hotspotmaker.core.codec import FormRows
from hotspotmaker.core.embed import shortcode_for
from hotspotmaker.core.renderer import is_section_renderable, render_form_page
from hotspotmaker.core.section_store import to_section
from hotspotmaker.models.section import SectionEntry


def require_editor(
    token: Optional[str] = None,
    x_admin_token: Optional[str] = Header(default=None),
) -> None:
    """Editing is allowed when no admin token is configured or the caller presents it."""
    expected = config.ADMIN_TOKEN
    if not expected:
        return
    if (x_admin_token or token) != expected:
        raise HTTPException(status_code=403, detail="Not allowed to edit hotspot sections")


router = APIRouter(dependencies=[Depends(require_editor)])


class CreateSectionBody(BaseModel):
    title: str = ""


class UpdateSectionBody(BaseModel):
    title: Optional[str] = None


class SaveHotspotsBody(BaseModel):
    image_url: Optional[str] = None
    x: Optional[List[Any]] = None
    y: Optional[List[Any]] = None
    title: Optional[List[Any]] = None
    text: Optional[List[Any]] = None
    icon: Optional[List[Any]] = None


def _entry_to_dict(e: SectionEntry) -> dict:
    return {
        "section_id": e.section_id,
        "title": e.title,
        "created_at": e.created_at,
        "shortcode": shortcode_for(e.section_id),
    }


def _section_to_dict(e: SectionEntry) -> dict:
    section = to_section(e)
    out = _entry_to_dict(e)
    out.update(
        image_url=section.image_url,
        spots=[s.to_dict() for s in section.spots],
        renderable=is_section_renderable(section.image_url, section.spots),
    )
    return out


def _rows_or_none(
    x: Optional[list],
    y: Optional[list],
    title: Optional[list],
    text: Optional[list],
    icon: Optional[list],
) -> Optional[FormRows]:
    """Rows are only saved when x, y, title and text were all submitted."""
    if x is None or y is None or title is None or text is None:
        return None
    return FormRows(x=list(x), y=list(y), title=list(title), text=list(text), icon=icon)


def _get_or_404(state: AppState, section_id: int) -> SectionEntry:
    e = state.get_entry(section_id)
    if e is None:
        raise HTTPException(status_code=404, detail="Hotspot section not found")
    return e


@router.get("/")
def list_sections(state: AppState = Depends(get_state)):
    """List all hotspot sections with their embed shortcode."""
    return [_entry_to_dict(e) for e in state.get_entries()]


@router.post("/")
def create_section(
    body: CreateSectionBody,
    state: AppState = Depends(get_state),
):
    """Create an empty hotspot section."""
    e = state.add_entry(body.title)
    return _section_to_dict(e)


@router.get("/{section_id}")
def get_section(section_id: int, state: AppState = Depends(get_state)):
    """Section with its image and decoded hotspots."""
    return _section_to_dict(_get_or_404(state, section_id))


@router.patch("/{section_id}")
def update_section(
    section_id: int,
    body: UpdateSectionBody,
    state: AppState = Depends(get_state),
):
    """Rename a section."""
    e = _get_or_404(state, section_id)
    if body.title is not None:
        e = state.update_title(section_id, body.title)
    return _section_to_dict(e)


@router.delete("/{section_id}", status_code=204)
def delete_section(section_id: int, state: AppState = Depends(get_state)):
    """Delete a section and its hotspots."""
    if not state.delete_entry(section_id):
        raise HTTPException(status_code=404, detail="Hotspot section not found")


@router.put("/{section_id}/hotspots")
def save_hotspots(
    section_id: int,
    body: SaveHotspotsBody,
    state: AppState = Depends(get_state),
):
    """Replace the image and/or the whole hotspot list from parallel row arrays."""
    _get_or_404(state, section_id)
    rows = _rows_or_none(body.x, body.y, body.title, body.text, body.icon)
    e = state.replace_hotspots(section_id, image_url=body.image_url, rows=rows)
    return _section_to_dict(e)


@router.get("/{section_id}/form", response_class=HTMLResponse)
def edit_form(section_id: int, request: Request, state: AppState = Depends(get_state)):
    """Authoring form for a section."""
    e = _get_or_404(state, section_id)
    action = str(request.url)
    return HTMLResponse(render_form_page(to_section(e), action))


@router.post("/{section_id}/form")
async def submit_form(
    section_id: int,
    request: Request,
    state: AppState = Depends(get_state),
):
    """Authoring form submission: hotspot_image plus hotspot_x[] ... hotspot_icon[] rows."""
    _get_or_404(state, section_id)
    form = await request.form()
    rows = _rows_or_none(
        form.getlist("hotspot_x[]") if "hotspot_x[]" in form else None,
        form.getlist("hotspot_y[]") if "hotspot_y[]" in form else None,
        form.getlist("hotspot_title[]") if "hotspot_title[]" in form else None,
        form.getlist("hotspot_text[]") if "hotspot_text[]" in form else None,
        form.getlist("hotspot_icon[]") if "hotspot_icon[]" in form else None,
    )
    image_url = form.get("hotspot_image")
    state.replace_hotspots(
        section_id,
        image_url=image_url if isinstance(image_url, str) else None,
        rows=rows,
    )
    return RedirectResponse(url=str(request.url), status_code=303)
