"""Core: record codec, renderer, embed references, section store."""
from hotspotmaker.core.codec import FormRows, decode, encode
from hotspotmaker.core.embed import expand_embeds, render_embed
from hotspotmaker.core.renderer import render_authoring_form, render_display

__all__ = [
    "FormRows",
    "decode",
    "encode",
    "expand_embeds",
    "render_authoring_form",
    "render_display",
    "render_embed",
]
