"""
Hierarchy module - core of blocktree.

This module builds layout trees from flat block lists and walks them.
"""

from blocktree.hierarchy.builder import (
    BlockTreeError,
    LayoutTreeBuilder,
    UnsupportedBlockError,
)
from blocktree.hierarchy.traversal import (
    chunks,
    collect,
    iter_children,
    paragraphs,
    sections,
    tables,
)

__all__ = [
    "BlockTreeError",
    "LayoutTreeBuilder",
    "UnsupportedBlockError",
    "chunks",
    "collect",
    "iter_children",
    "paragraphs",
    "sections",
    "tables",
]
