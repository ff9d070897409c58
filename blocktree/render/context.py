"""Context rendering: a node's text prefixed with its ancestor chain."""

from __future__ import annotations

from blocktree.core.blocks import Block, RenderOptions
from blocktree.render.text import render_text


def render_context_text(node: Block, include_section_info: bool = True) -> str:
    """
    Render a node with the titles and text of its enclosing blocks.

    Args:
        node: Node to render
        include_section_info: If True, prefix the text with the parent chain

    Returns:
        Text such as "Chapter 2 > 2.1 Safety\\n<node text>"
    """
    text = ""
    if include_section_info:
        text += node.parent_text() + "\n"

    if node.is_chunk:
        text += render_text(node, RenderOptions.full())
    else:
        text += render_text(node, RenderOptions())
    return text
