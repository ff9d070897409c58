"""
Block model for blocktree.

This module defines the node variants of a layout tree. A layout parser
reports a document as a flat list of block records::

    {
        "tag": "para" | "header" | "list_item" | "table",
        "level": 0,
        "page_idx": 0,
        "block_idx": 3,
        "top": 144.2,
        "left": 72.0,
        "bbox": [72.0, 144.2, 540.0, 160.8],
        "sentences": ["First sentence.", "Second sentence."],
    }

Table records also carry ``name`` and ``table_rows``. A row record has a
``type`` discriminator (``table_header``, ``full_row`` or a body row) and
either ``cells`` or, for full rows, the cell fields directly. A cell record
has ``col_span`` and ``cell_value``, which is a string or a nested
paragraph-shaped record.

Nodes are built from these records by the tree builder and linked into a
single rooted tree through ``add_child``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class BlockTag(str, Enum):
    """Tags of all node variants in a layout tree."""

    ROOT = "root"
    PARA = "para"
    HEADER = "header"
    LIST_ITEM = "list_item"
    TABLE = "table"
    TABLE_ROW = "table_row"
    TABLE_HEADER = "table_header"
    TABLE_CELL = "table_cell"


# Nodes the traversal treats as atomic units
CHUNK_TAGS = frozenset(
    {BlockTag.PARA.value, BlockTag.LIST_ITEM.value, BlockTag.TABLE.value}
)

# The root sits below every real level so any header nests under it
ROOT_LEVEL = -1


class BlockTreeError(ValueError):
    """Base exception for errors building a layout tree."""


@dataclass(frozen=True)
class RenderOptions:
    """
    Options for rendering a node to text or HTML.

    Attributes:
        include_children: Append the rendering of the node's children.
        recurse: Flag handed down to children as their own
            ``include_children`` and ``recurse``.
    """

    include_children: bool = False
    recurse: bool = False

    @classmethod
    def full(cls) -> RenderOptions:
        """Render a node together with its whole subtree."""
        return cls(include_children=True, recurse=True)

    def for_children(self) -> RenderOptions:
        return RenderOptions(include_children=self.recurse, recurse=self.recurse)


def _int_field(data: dict[str, Any], key: str, default: int) -> int:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise BlockTreeError(f"{key} must be an integer, got {value!r}")
    return value


def _sentences(value: Any) -> list[str]:
    # A bare string is one sentence, not a sequence of characters
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise BlockTreeError(f"sentences must be a list, got {type(value).__name__}")
    return [str(sentence) for sentence in value]


def _records(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    """Get a list of nested records, checking each is a JSON object."""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise BlockTreeError(f"{key} must be a list, got {type(value).__name__}")
    for index, record in enumerate(value):
        if not isinstance(record, dict):
            raise BlockTreeError(f"{key}[{index}] is not a JSON object")
    return value


def _common_fields(block_json: dict[str, Any] | None) -> dict[str, Any]:
    """
    Read the fields shared by all block records, defaulting missing ones.

    Raises:
        BlockTreeError: If the level or sentences have the wrong shape
    """
    data = block_json or {}
    return {
        "level": _int_field(data, "level", 0),
        "page_idx": data.get("page_idx"),
        "block_idx": data.get("block_idx"),
        "top": data.get("top"),
        "left": data.get("left"),
        "bbox": data.get("bbox"),
        "sentences": _sentences(data.get("sentences")),
        "block_json": block_json,
    }


@dataclass(eq=False)
class Block:
    """
    A node in the layout tree.

    Every node carries its tag, level hint and opaque positional metadata.
    Children are owned by the node; ``parent`` is a back-reference used
    only to look up ancestors.
    """

    tag: str
    level: int = 0
    page_idx: int | None = None
    block_idx: int | None = None
    top: float | None = None
    left: float | None = None
    bbox: list[float] | None = None
    sentences: list[str] = field(default_factory=list)
    children: list[Block] = field(default_factory=list)
    parent: Block | None = None
    block_json: dict[str, Any] | None = None

    @classmethod
    def from_json(cls, block_json: dict[str, Any]) -> Block:
        """Create a generic node from a block record."""
        tag = block_json.get("tag")
        if not isinstance(tag, str):
            raise BlockTreeError(f"Block record has no tag: {tag!r}")
        return cls(tag=tag, **_common_fields(block_json))

    def add_child(self, node: Block) -> None:
        """Append a child node and point it back at this node."""
        self.children.append(node)
        node.parent = self

    @property
    def sentences_text(self) -> str:
        return "\n".join(self.sentences)

    @property
    def is_chunk(self) -> bool:
        return self.tag in CHUNK_TAGS

    def parent_chain(self) -> list[Block]:
        """
        Get the ancestors of this node.

        Ordered from the outermost ancestor to the immediate parent. The
        synthetic root is not part of the chain.
        """
        chain = []
        parent = self.parent
        while parent is not None and parent.tag != BlockTag.ROOT.value:
            chain.append(parent)
            parent = parent.parent
        chain.reverse()
        return chain

    def parent_text(self) -> str:
        """
        Get the text of the ancestor chain.

        Section titles are joined with " > ", followed by the text of any
        enclosing paragraphs and list items, one per line.

        Example: "Chapter 2 > 2.1 Safety\\nThe following rules apply:"
        """
        header_texts = []
        para_texts = []
        for ancestor in self.parent_chain():
            if ancestor.tag == BlockTag.HEADER.value:
                header_texts.append(ancestor.to_text())
            elif ancestor.tag in (BlockTag.PARA.value, BlockTag.LIST_ITEM.value):
                para_texts.append(ancestor.to_text())

        text = " > ".join(header_texts)
        if para_texts:
            text += "\n" + "\n".join(para_texts)
        return text

    def to_text(self, options: RenderOptions | None = None) -> str:
        from blocktree.render import render_text

        return render_text(self, options or RenderOptions())

    def to_html(self, options: RenderOptions | None = None) -> str:
        from blocktree.render import render_html

        return render_html(self, options or RenderOptions())

    def to_context_text(self, include_section_info: bool = True) -> str:
        """
        Get the text of this node with the surrounding section context.

        Chunk nodes (paragraphs, list items, tables) are rendered with their
        whole subtree. Other nodes are rendered on their own.
        """
        from blocktree.render import render_context_text

        return render_context_text(self, include_section_info)

    # Queries (see blocktree.hierarchy.traversal)

    def sections(self) -> list[Block]:
        from blocktree.hierarchy.traversal import sections

        return sections(self)

    def paragraphs(self) -> list[Block]:
        from blocktree.hierarchy.traversal import paragraphs

        return paragraphs(self)

    def tables(self) -> list[Block]:
        from blocktree.hierarchy.traversal import tables

        return tables(self)

    def chunks(self) -> list[Block]:
        from blocktree.hierarchy.traversal import chunks

        return chunks(self)

    def to_dict(self, include_children: bool = True) -> dict[str, Any]:
        """
        Convert to dictionary for JSON export.

        Args:
            include_children: If True, recursively include children
        """
        result: dict[str, Any] = {
            "tag": self.tag,
            "level": self.level,
            "page_idx": self.page_idx,
            "block_idx": self.block_idx,
            "bbox": self.bbox,
            "text": self.to_text(),
            "child_count": len(self.children),
        }

        if include_children:
            # Walk with an explicit stack; level hints can nest arbitrarily deep
            stack = [(self, result)]
            while stack:
                node, node_dict = stack.pop()
                node_dict["children"] = []
                for child in node.children:
                    child_dict = child.to_dict(include_children=False)
                    node_dict["children"].append(child_dict)
                    stack.append((child, child_dict))

        return result

    def __repr__(self) -> str:
        preview = self.sentences_text.replace("\n", " ")[:40]
        return (
            f"<{type(self).__name__} tag={self.tag} level={self.level} "
            f"'{preview}' children={len(self.children)}>"
        )


@dataclass(eq=False, repr=False)
class Root(Block):
    """Synthetic container at the top of every layout tree."""

    tag: str = BlockTag.ROOT.value
    level: int = ROOT_LEVEL


@dataclass(eq=False, repr=False)
class Paragraph(Block):
    """A block of text. May own nested list items. Tag 'para'."""

    tag: str = BlockTag.PARA.value

    @classmethod
    def from_json(cls, block_json: dict[str, Any]) -> Paragraph:
        return cls(**_common_fields(block_json))


@dataclass(eq=False, repr=False)
class Section(Block):
    """A section header. Owns its sub-sections and content. Tag 'header'."""

    tag: str = BlockTag.HEADER.value
    title: str = ""

    @classmethod
    def from_json(cls, block_json: dict[str, Any]) -> Section:
        section = cls(**_common_fields(block_json))
        section.title = section.sentences_text
        return section


@dataclass(eq=False, repr=False)
class ListItem(Block):
    """A list item. Owns nested list items at deeper levels. Tag 'list_item'."""

    tag: str = BlockTag.LIST_ITEM.value

    @classmethod
    def from_json(cls, block_json: dict[str, Any]) -> ListItem:
        return cls(**_common_fields(block_json))


@dataclass(eq=False, repr=False)
class TableCell(Block):
    """
    A cell of a table row.

    The value is either a literal string or, when the layout parser reports
    structured content, a nested Paragraph.
    """

    tag: str = BlockTag.TABLE_CELL.value
    col_span: int = 1
    cell_value: str = ""
    cell_node: Paragraph | None = None

    @classmethod
    def from_json(cls, block_json: dict[str, Any]) -> TableCell:
        cell = cls(**_common_fields(block_json))
        cell.col_span = _int_field(block_json, "col_span", 1)

        value = block_json.get("cell_value")
        if isinstance(value, dict):
            cell.cell_node = Paragraph.from_json(value)
        elif value is not None:
            cell.cell_value = str(value)
        return cell


@dataclass(eq=False, repr=False)
class TableRow(Block):
    """A body row of a table."""

    tag: str = BlockTag.TABLE_ROW.value
    cells: list[TableCell] = field(default_factory=list)

    @classmethod
    def from_json(cls, block_json: dict[str, Any]) -> TableRow:
        row = cls(**_common_fields(block_json))
        if block_json.get("type") == "full_row":
            # A full row spans the table; the row record is its only cell
            row.cells = [TableCell.from_json(block_json)]
        else:
            row.cells = [TableCell.from_json(c) for c in _records(block_json, "cells")]
        return row


@dataclass(eq=False, repr=False)
class TableHeaderRow(Block):
    """A header row of a table. Rendered with a markdown separator in text."""

    tag: str = BlockTag.TABLE_HEADER.value
    cells: list[TableCell] = field(default_factory=list)

    @classmethod
    def from_json(cls, block_json: dict[str, Any]) -> TableHeaderRow:
        row = cls(**_common_fields(block_json))
        row.cells = [TableCell.from_json(c) for c in _records(block_json, "cells")]
        return row


@dataclass(eq=False, repr=False)
class Table(Block):
    """
    A table. Tag 'table'.

    Header rows and body rows are kept apart from the generic children
    list, which tables do not use.
    """

    tag: str = BlockTag.TABLE.value
    name: str | None = None
    headers: list[TableHeaderRow] = field(default_factory=list)
    rows: list[TableRow] = field(default_factory=list)

    @classmethod
    def from_json(cls, block_json: dict[str, Any]) -> Table:
        table = cls(**_common_fields(block_json))
        table.name = block_json.get("name")

        for row_json in _records(block_json, "table_rows"):
            if row_json.get("type") == "table_header":
                table.headers.append(TableHeaderRow.from_json(row_json))
            else:
                table.rows.append(TableRow.from_json(row_json))

        return table

    def to_dict(self, include_children: bool = True) -> dict[str, Any]:
        result = super().to_dict(include_children)
        result["name"] = self.name
        result["header_count"] = len(self.headers)
        result["row_count"] = len(self.rows)
        return result
