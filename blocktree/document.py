"""
Document facade.

A Document owns the layout tree built from a layout parser's block list and
exposes the queries and whole-document renderers.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from blocktree.core.blocks import Block, BlockTag, RenderOptions, Root
from blocktree.hierarchy.builder import BlockTreeError, LayoutTreeBuilder


class Document:
    """
    A document reconstructed from layout parser blocks.

    Example:
        doc = Document(blocks)
        for chunk in doc.chunks():
            print(chunk.to_context_text())
    """

    def __init__(self, blocks_json: Sequence[dict[str, Any]]) -> None:
        self.json = blocks_json
        self.root_node: Root = LayoutTreeBuilder.build(blocks_json)

    @classmethod
    def from_response(cls, response_json: dict[str, Any]) -> Document:
        """
        Create a document from a layout parser response envelope.

        The blocks are read from ``return_dict.result.blocks``.

        Raises:
            BlockTreeError: If the envelope has no block list
        """
        try:
            blocks = response_json["return_dict"]["result"]["blocks"]
        except (KeyError, TypeError) as exc:
            raise BlockTreeError("Response has no return_dict.result.blocks") from exc
        if not isinstance(blocks, list):
            raise BlockTreeError("return_dict.result.blocks is not a list")
        return cls(blocks)

    def chunks(self) -> list[Block]:
        return self.root_node.chunks()

    def tables(self) -> list[Block]:
        return self.root_node.tables()

    def sections(self) -> list[Block]:
        return self.root_node.sections()

    def paragraphs(self) -> list[Block]:
        return self.root_node.paragraphs()

    def top_level_sections(self) -> list[Block]:
        """Get the sections directly under the root."""
        return [
            node for node in self.root_node.children if node.tag == BlockTag.HEADER.value
        ]

    def to_text(self) -> str:
        """Get the text of the document, section by section."""
        return "\n".join(
            section.to_text(RenderOptions.full()) for section in self.top_level_sections()
        )

    def to_html(self) -> str:
        """Get the HTML of the document, section by section."""
        html_str = "<html>"
        for section in self.top_level_sections():
            html_str += section.to_html(RenderOptions.full())
        return html_str + "</html>"

    def get_statistics(self) -> dict[str, int]:
        """Get node counts for the document."""
        return {
            "block_count": len(self.json),
            "section_count": len(self.sections()),
            "paragraph_count": len(self.paragraphs()),
            "table_count": len(self.tables()),
            "chunk_count": len(self.chunks()),
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert the whole tree to a dictionary."""
        return {
            "statistics": self.get_statistics(),
            "root": self.root_node.to_dict(include_children=True),
        }

    def __repr__(self) -> str:
        return (
            f"<Document blocks={len(self.json)} "
            f"sections={len(self.sections())} chunks={len(self.chunks())}>"
        )
