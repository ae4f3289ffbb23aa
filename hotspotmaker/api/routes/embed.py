"""Public rendering: a section by id, and embed references inside content."""
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from hotspotmaker.api.state import AppState, get_state
from hotspotmaker.core.embed import expand_embeds, render_embed

router = APIRouter()


class RenderContentBody(BaseModel):
    content: str = ""


@router.get("/hotspot/{section_id}", response_class=HTMLResponse)
def display_section(section_id: str, state: AppState = Depends(get_state)):
    """Display markup for [hotspot id="..."]; empty body for invalid ids or empty sections."""
    return HTMLResponse(render_embed(section_id, state.lookup))


@router.post("/api/embed/render")
def render_content(body: RenderContentBody, state: AppState = Depends(get_state)):
    """Expand every hotspot embed reference in a piece of content."""
    return {"html": expand_embeds(body.content, state.lookup)}
