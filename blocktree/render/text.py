"""
Plain text rendering of layout trees.

Tables are rendered in a markdown-like layout: cells are separated by
" | " and header rows are followed by a "---" separator line.
"""

from __future__ import annotations

from blocktree.core.blocks import (
    Block,
    BlockTag,
    RenderOptions,
    Section,
    Table,
    TableCell,
    TableHeaderRow,
    TableRow,
)
from blocktree.render.base import Fragment, RendererRegistry

CELL_SEPARATOR = " | "
HEADER_SEPARATOR = "---"

# Each rendered child goes on its own line after its parent
TEXT_RENDERERS = RendererRegistry("text", child_prefix="\n")


def render_text(node: Block, options: RenderOptions | None = None) -> str:
    """Render a node (and optionally its children) as plain text."""
    return TEXT_RENDERERS.render(node, options or RenderOptions())


@TEXT_RENDERERS.register(BlockTag.ROOT.value)
def _text_root(node: Block, options: RenderOptions) -> Fragment:
    return Fragment("")


@TEXT_RENDERERS.register(BlockTag.PARA.value, BlockTag.LIST_ITEM.value)
def _text_para(node: Block, options: RenderOptions) -> Fragment:
    return Fragment(node.sentences_text, descend=options.include_children)


@TEXT_RENDERERS.register(BlockTag.HEADER.value)
def _text_section(node: Section, options: RenderOptions) -> Fragment:
    return Fragment(node.title, descend=options.include_children)


@TEXT_RENDERERS.register(BlockTag.TABLE.value)
def _text_table(node: Table, options: RenderOptions) -> Fragment:
    lines = [render_text(header) for header in node.headers]
    lines.extend(render_text(row) for row in node.rows)
    return Fragment("\n".join(lines))


@TEXT_RENDERERS.register(BlockTag.TABLE_ROW.value)
def _text_row(node: TableRow, options: RenderOptions) -> Fragment:
    return Fragment(CELL_SEPARATOR.join(render_text(cell) for cell in node.cells))


@TEXT_RENDERERS.register(BlockTag.TABLE_HEADER.value)
def _text_header_row(node: TableHeaderRow, options: RenderOptions) -> Fragment:
    cell_text = CELL_SEPARATOR.join(render_text(cell) for cell in node.cells)
    separator = CELL_SEPARATOR.join(HEADER_SEPARATOR for _ in node.cells)
    return Fragment(cell_text + "\n" + separator)


@TEXT_RENDERERS.register(BlockTag.TABLE_CELL.value)
def _text_cell(node: TableCell, options: RenderOptions) -> Fragment:
    if node.cell_node is not None:
        return Fragment(render_text(node.cell_node))
    return Fragment(node.cell_value)
