"""
blocktree - section hierarchy reconstruction for layout parser output.

A layout parser reports a PDF as a flat list of paragraphs, headers, list
items and tables. blocktree rebuilds the document tree from it and renders
it as text or HTML.
"""

from blocktree.core.blocks import (
    Block,
    BlockTag,
    ListItem,
    Paragraph,
    RenderOptions,
    Root,
    Section,
    Table,
    TableCell,
    TableHeaderRow,
    TableRow,
)
from blocktree.document import Document
from blocktree.hierarchy.builder import (
    BlockTreeError,
    LayoutTreeBuilder,
    UnsupportedBlockError,
)

__version__ = "0.1.0"

__all__ = [
    "Block",
    "BlockTag",
    "BlockTreeError",
    "Document",
    "LayoutTreeBuilder",
    "ListItem",
    "Paragraph",
    "RenderOptions",
    "Root",
    "Section",
    "Table",
    "TableCell",
    "TableHeaderRow",
    "TableRow",
    "UnsupportedBlockError",
    "__version__",
]
