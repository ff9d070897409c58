"""Renderers converting layout trees to plain text and HTML."""

from blocktree.render.base import Fragment, RendererRegistry
from blocktree.render.context import render_context_text
from blocktree.render.html import HTML_RENDERERS, render_html
from blocktree.render.text import TEXT_RENDERERS, render_text

__all__ = [
    "Fragment",
    "HTML_RENDERERS",
    "TEXT_RENDERERS",
    "RendererRegistry",
    "render_context_text",
    "render_html",
    "render_text",
]
