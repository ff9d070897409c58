"""
Layout tree builder.

Builds a rooted layout tree from the flat block list of a layout parser.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from blocktree.core.blocks import (
    Block,
    BlockTag,
    BlockTreeError,
    ListItem,
    Paragraph,
    Root,
    Section,
    Table,
)

logger = logging.getLogger(__name__)


class UnsupportedBlockError(BlockTreeError):
    """Raised when a block record carries a tag the builder does not know."""

    def __init__(self, tag: Any, block_index: int | None = None) -> None:
        self.tag = tag
        self.block_index = block_index
        location = f" at block {block_index}" if block_index is not None else ""
        super().__init__(f"Unsupported block type: {tag!r}{location}")


# Top-level block tags and the node variant built for each
NODE_TYPES: dict[str, type[Block]] = {
    BlockTag.PARA.value: Paragraph,
    BlockTag.HEADER.value: Section,
    BlockTag.LIST_ITEM.value: ListItem,
    BlockTag.TABLE.value: Table,
}


class LayoutTreeBuilder:
    """
    Builds layout trees from block records.

    Nesting is inferred from level hints alone, using two stacks that
    live for a single build:

    - the header stack places each section under the nearest open section
      with a lower level;
    - the list stack places each list item under the nearest open list
      item (or anchoring paragraph) with a lower level. It is cleared by
      any block that is not a list item.

    Paragraphs and tables always go under the innermost open section.
    """

    @staticmethod
    def create_node(block_json: dict[str, Any], block_index: int | None = None) -> Block:
        """
        Create the node variant for a top-level block record.

        Raises:
            UnsupportedBlockError: If the record's tag is not supported
            BlockTreeError: If the record or a nested row or cell record
                is malformed
        """
        tag = block_json.get("tag")
        node_type = NODE_TYPES.get(tag) if isinstance(tag, str) else None
        if node_type is None:
            raise UnsupportedBlockError(tag, block_index)
        try:
            return node_type.from_json(block_json)
        except BlockTreeError as exc:
            if block_index is None:
                raise
            raise BlockTreeError(f"Block {block_index} ({tag}): {exc}") from exc

    @staticmethod
    def build(blocks: Sequence[dict[str, Any]]) -> Root:
        """
        Build a layout tree from a list of block records.

        Args:
            blocks: Block records in document order

        Returns:
            Root node of the tree

        Raises:
            BlockTreeError: If a record is malformed or has an unsupported
                tag. No tree is returned.
        """
        root = Root()
        parent_stack: list[Block] = [root]
        list_stack: list[Block] = []
        parent: Block = root
        prev_node: Block = root

        for index, block_json in enumerate(blocks):
            if not isinstance(block_json, dict):
                raise BlockTreeError(f"Block {index} is not a JSON object")

            node = LayoutTreeBuilder.create_node(block_json, index)

            if node.tag != BlockTag.LIST_ITEM.value:
                list_stack.clear()

            if node.tag == BlockTag.HEADER.value:
                LayoutTreeBuilder._attach_section(node, parent, parent_stack)
                parent = node
            elif node.tag == BlockTag.LIST_ITEM.value:
                LayoutTreeBuilder._attach_list_item(node, prev_node, parent, list_stack)
            else:
                parent.add_child(node)

            prev_node = node

        logger.debug(
            "Built layout tree from %d blocks (%d top-level nodes)",
            len(blocks),
            len(root.children),
        )
        return root

    @staticmethod
    def _attach_section(node: Block, parent: Block, parent_stack: list[Block]) -> None:
        """Attach a section under the nearest open section with a lower level."""
        if node.level > parent.level:
            parent.add_child(node)
        else:
            while len(parent_stack) > 1 and parent_stack[-1].level >= node.level:
                parent_stack.pop()
            parent_stack[-1].add_child(node)
        parent_stack.append(node)

    @staticmethod
    def _attach_list_item(
        node: Block,
        prev_node: Block,
        parent: Block,
        list_stack: list[Block],
    ) -> None:
        """Attach a list item, opening or closing nested lists by level."""
        if prev_node.tag == BlockTag.PARA.value and prev_node.level == node.level:
            # A paragraph introduces a list at its own level
            list_stack.append(prev_node)
        elif prev_node.tag == BlockTag.LIST_ITEM.value:
            if node.level > prev_node.level:
                list_stack.append(prev_node)
            elif node.level < prev_node.level:
                while list_stack and LayoutTreeBuilder._closes(list_stack[-1], node):
                    list_stack.pop()

        if list_stack:
            list_stack[-1].add_child(node)
        else:
            parent.add_child(node)

    @staticmethod
    def _closes(open_node: Block, node: Block) -> bool:
        """
        Check if a list item closes an open list entry.

        Deeper entries always close. A list item at the same level closes
        too, so the new item becomes its sibling; an anchoring paragraph
        at the same level stays open.
        """
        if open_node.level > node.level:
            return True
        return open_node.tag == BlockTag.LIST_ITEM.value and open_node.level == node.level

    @staticmethod
    def debug(root: Block) -> str:
        """
        Get an indented outline of a layout tree for debugging.

        One line per node: depth marker, tag, child count and text.
        """
        lines: list[str] = []
        stack = [(child, 0) for child in reversed(root.children)]

        while stack:
            node, depth = stack.pop()
            text = node.to_text().replace("\n", " ")
            lines.append(f"{'-' * depth} {node.tag} ({len(node.children)}) {text}")
            stack.extend((child, depth + 1) for child in reversed(node.children))

        outline = "\n".join(lines)
        logger.debug("Layout tree:\n%s", outline)
        return outline
