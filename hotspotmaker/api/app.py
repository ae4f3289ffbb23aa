"""FastAPI app, CORS, static assets and route registration."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(name)s: %(message)s",
)

from hotspotmaker.api.state import AppState, get_state
from hotspotmaker.config import CORS_ORIGINS, STATIC_DIR, ensure_data_dir

# Import routes after state to avoid circular imports
from hotspotmaker.api.routes import embed, sections

__all__ = ["app", "AppState", "get_state"]

_state = get_state()


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_data_dir()
    _state.load_sections()
    logging.getLogger(__name__).info(
        "Loaded %d hotspot section(s)", len(_state.get_entries())
    )
    yield


app = FastAPI(
    title="Hotspot Maker API",
    description="Interactive hotspots on images, embeddable by shortcode",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
app.include_router(sections.router, prefix="/api/sections", tags=["sections"])
app.include_router(embed.router, tags=["embed"])
