"""Core data models for blocktree."""

from blocktree.core.blocks import (
    CHUNK_TAGS,
    Block,
    BlockTag,
    BlockTreeError,
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

__all__ = [
    "CHUNK_TAGS",
    "Block",
    "BlockTag",
    "BlockTreeError",
    "ListItem",
    "Paragraph",
    "RenderOptions",
    "Root",
    "Section",
    "Table",
    "TableCell",
    "TableHeaderRow",
    "TableRow",
]
