"""
Tree traversal and queries.

The walk never descends below a chunk node (paragraph, list item or table):
a paragraph owning a nested list counts as one chunk, not as a paragraph
plus its list items.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from blocktree.core.blocks import CHUNK_TAGS, Block, BlockTag


def iter_children(node: Block) -> Iterator[Block]:
    """Yield descendants of a node in document order (DFS), stopping at chunks."""
    stack = list(reversed(node.children))
    while stack:
        child = stack.pop()
        yield child
        if not child.is_chunk:
            stack.extend(reversed(child.children))


def collect(node: Block, predicate: Callable[[Block], bool]) -> list[Block]:
    """Get all descendants of a node matching a predicate."""
    return [child for child in iter_children(node) if predicate(child)]


def sections(node: Block) -> list[Block]:
    """Get all sections (headers) under a node, nested ones included."""
    return collect(node, lambda n: n.tag == BlockTag.HEADER.value)


def paragraphs(node: Block) -> list[Block]:
    return collect(node, lambda n: n.tag == BlockTag.PARA.value)


def tables(node: Block) -> list[Block]:
    return collect(node, lambda n: n.tag == BlockTag.TABLE.value)


def chunks(node: Block) -> list[Block]:
    """
    Get all chunks under a node.

    Chunks split a document into paragraphs, lists and tables without any
    prior knowledge of its structure.
    """
    return collect(node, lambda n: n.tag in CHUNK_TAGS)
