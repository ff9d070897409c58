"""
HTML rendering of layout trees.

Sentence text is HTML-escaped. Nested lists are wrapped in ``<ul>``;
sections become ``<h1>``..``<hN>`` according to their level.
"""

from __future__ import annotations

import html

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

HTML_RENDERERS = RendererRegistry("html")


def render_html(node: Block, options: RenderOptions | None = None) -> str:
    """Render a node (and optionally its children) as HTML."""
    return HTML_RENDERERS.render(node, options or RenderOptions())


def _escape(text: str) -> str:
    return html.escape(text, quote=False)


def _wrap_item(element: str, node: Block, options: RenderOptions) -> Fragment:
    opening = f"<{element}>" + _escape(node.sentences_text)
    if options.include_children and node.children:
        return Fragment(opening + "<ul>", f"</ul></{element}>", descend=True)
    return Fragment(opening + f"</{element}>")


@HTML_RENDERERS.register(BlockTag.ROOT.value)
def _html_root(node: Block, options: RenderOptions) -> Fragment:
    return Fragment("")


@HTML_RENDERERS.register(BlockTag.PARA.value)
def _html_para(node: Block, options: RenderOptions) -> Fragment:
    return _wrap_item("p", node, options)


@HTML_RENDERERS.register(BlockTag.LIST_ITEM.value)
def _html_list_item(node: Block, options: RenderOptions) -> Fragment:
    return _wrap_item("li", node, options)


@HTML_RENDERERS.register(BlockTag.HEADER.value)
def _html_section(node: Section, options: RenderOptions) -> Fragment:
    heading = f"h{node.level + 1}"
    return Fragment(
        f"<{heading}>{_escape(node.title)}</{heading}>",
        descend=options.include_children,
    )


@HTML_RENDERERS.register(BlockTag.TABLE.value)
def _html_table(node: Table, options: RenderOptions) -> Fragment:
    html_str = "<table>"
    html_str += "".join(render_html(header) for header in node.headers)
    html_str += "".join(render_html(row) for row in node.rows)
    return Fragment(html_str + "</table>")


@HTML_RENDERERS.register(BlockTag.TABLE_HEADER.value)
def _html_header_row(node: TableHeaderRow, options: RenderOptions) -> Fragment:
    return Fragment("<th>" + "".join(render_html(cell) for cell in node.cells) + "</th>")


@HTML_RENDERERS.register(BlockTag.TABLE_ROW.value)
def _html_row(node: TableRow, options: RenderOptions) -> Fragment:
    return Fragment("<tr>" + "".join(render_html(cell) for cell in node.cells) + "</tr>")


@HTML_RENDERERS.register(BlockTag.TABLE_CELL.value)
def _html_cell(node: TableCell, options: RenderOptions) -> Fragment:
    if node.cell_node is not None:
        cell_html = render_html(node.cell_node)
    else:
        cell_html = _escape(node.cell_value)

    if node.col_span > 1:
        return Fragment(f"<td colSpan='{node.col_span}'>{cell_html}</td>")
    return Fragment(f"<td>{cell_html}</td>")
