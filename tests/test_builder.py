"""Tests for LayoutTreeBuilder."""

from __future__ import annotations

from typing import Any

import pytest

from blocktree.core.blocks import Block, Paragraph, Root, Section, Table
from blocktree.hierarchy.builder import (
    BlockTreeError,
    LayoutTreeBuilder,
    UnsupportedBlockError,
)


# ===================================================================
# Helpers
# ===================================================================


def _header(text: str, level: int = 0) -> dict[str, Any]:
    return {"tag": "header", "level": level, "sentences": [text]}


def _para(text: str, level: int = 0) -> dict[str, Any]:
    return {"tag": "para", "level": level, "sentences": [text]}


def _item(text: str, level: int = 0) -> dict[str, Any]:
    return {"tag": "list_item", "level": level, "sentences": [text]}


def _table(name: str = "t") -> dict[str, Any]:
    return {
        "tag": "table",
        "name": name,
        "table_rows": [{"type": "table_data_row", "cells": [{"col_span": 1, "cell_value": "x"}]}],
    }


def _texts(nodes: list[Block]) -> list[str]:
    return [node.sentences_text for node in nodes]


def _walk(node: Block) -> list[Block]:
    nodes = []
    for child in node.children:
        nodes.append(child)
        nodes.extend(_walk(child))
    return nodes


# ===================================================================
# Basics
# ===================================================================


class TestBuildBasic:
    """Tests for basic tree building."""

    def test_empty_blocks(self):
        root = LayoutTreeBuilder.build([])
        assert isinstance(root, Root)
        assert root.children == []

    def test_content_without_headers_goes_to_root(self):
        root = LayoutTreeBuilder.build([_para("p1"), _para("p2"), _table()])
        assert [child.tag for child in root.children] == ["para", "para", "table"]

    def test_node_variants(self):
        root = LayoutTreeBuilder.build([_header("H"), _para("p"), _table()])
        section = root.children[0]
        assert isinstance(section, Section)
        assert isinstance(section.children[0], Paragraph)
        assert isinstance(section.children[1], Table)

    def test_every_node_has_one_parent(self, reference_blocks):
        root = LayoutTreeBuilder.build(reference_blocks)
        nodes = _walk(root)
        assert len(nodes) == len(reference_blocks)
        assert len({id(node) for node in nodes}) == len(nodes)
        for node in nodes:
            assert node.parent is not None
            assert node in node.parent.children

    def test_parent_chains_end_at_root(self, reference_blocks):
        root = LayoutTreeBuilder.build(reference_blocks)
        for node in _walk(root):
            current = node
            steps = 0
            while current.parent is not None:
                current = current.parent
                steps += 1
                assert steps <= len(reference_blocks)
            assert current is root


# ===================================================================
# Header stack
# ===================================================================


class TestHeaderNesting:
    """Tests for section nesting by level."""

    def test_sibling_headers(self):
        root = LayoutTreeBuilder.build([_header("A"), _header("B"), _header("C")])
        assert _texts(root.children) == ["A", "B", "C"]

    def test_deeper_header_nests(self):
        root = LayoutTreeBuilder.build([_header("Chapter", 0), _header("Section", 1)])
        chapter = root.children[0]
        assert _texts(chapter.children) == ["Section"]

    def test_shallower_header_pops_back(self):
        root = LayoutTreeBuilder.build(
            [
                _header("1", 0),
                _header("1.1", 1),
                _header("1.1.1", 2),
                _header("2", 0),
            ]
        )
        assert _texts(root.children) == ["1", "2"]
        one = root.children[0]
        assert _texts(one.children) == ["1.1"]
        assert _texts(one.children[0].children) == ["1.1.1"]

    def test_pop_to_intermediate_level(self):
        root = LayoutTreeBuilder.build(
            [
                _header("1", 0),
                _header("1.1", 1),
                _header("1.1.1", 2),
                _header("1.2", 1),
            ]
        )
        one = root.children[0]
        assert _texts(one.children) == ["1.1", "1.2"]

    def test_equal_level_displaces(self):
        root = LayoutTreeBuilder.build([_header("A", 1), _header("B", 1)])
        assert _texts(root.children) == ["A", "B"]

    def test_first_header_at_deep_level(self):
        root = LayoutTreeBuilder.build([_header("Deep", 3), _header("Top", 0)])
        assert _texts(root.children) == ["Deep", "Top"]

    def test_skipped_levels_still_nest(self):
        root = LayoutTreeBuilder.build([_header("A", 0), _header("B", 3), _header("C", 2)])
        a = root.children[0]
        assert _texts(a.children) == ["B", "C"]

    def test_content_goes_to_latest_section(self):
        root = LayoutTreeBuilder.build(
            [
                _header("1", 0),
                _para("intro"),
                _header("1.1", 1),
                _para("detail"),
                _table(),
                _header("2", 0),
                _para("next"),
            ]
        )
        one, two = root.children
        assert [c.tag for c in one.children] == ["para", "header"]
        assert [c.tag for c in one.children[1].children] == ["para", "table"]
        assert _texts(two.children) == ["next"]

    def test_header_descendant_iff_higher_level(self):
        blocks = [_header("A", 1), _header("B", 2), _header("C", 1), _header("D", 0)]
        root = LayoutTreeBuilder.build(blocks)
        a, c, d = root.children[0], root.children[1], root.children[2]
        assert _texts(a.children) == ["B"]
        assert c.children == []
        assert _texts([a, c, d]) == ["A", "C", "D"]


# ===================================================================
# List stack
# ===================================================================


class TestListNesting:
    """Tests for list item nesting."""

    def test_paragraph_anchors_list_at_same_level(self):
        root = LayoutTreeBuilder.build([_para("Intro:"), _item("one"), _item("two")])
        intro = root.children[0]
        assert len(root.children) == 1
        assert _texts(intro.children) == ["one", "two"]

    def test_paragraph_at_other_level_does_not_anchor(self):
        root = LayoutTreeBuilder.build([_para("Intro:", 0), _item("one", 1)])
        assert _texts(root.children) == ["Intro:", "one"]

    def test_list_without_anchor_goes_to_section(self):
        root = LayoutTreeBuilder.build([_header("H"), _item("one"), _item("two")])
        section = root.children[0]
        assert _texts(section.children) == ["one", "two"]

    def test_deeper_item_nests_under_previous(self):
        root = LayoutTreeBuilder.build([_item("a", 0), _item("a.1", 1), _item("a.2", 1)])
        a = root.children[0]
        assert len(root.children) == 1
        assert _texts(a.children) == ["a.1", "a.2"]

    def test_shallower_item_closes_nested_list(self):
        root = LayoutTreeBuilder.build(
            [
                _item("a", 0),
                _item("a.1", 1),
                _item("a.1.i", 2),
                _item("b", 0),
            ]
        )
        assert _texts(root.children) == ["a", "b"]
        a = root.children[0]
        assert _texts(a.children) == ["a.1"]
        assert _texts(a.children[0].children) == ["a.1.i"]

    def test_shallower_item_returns_to_anchor_paragraph(self):
        root = LayoutTreeBuilder.build(
            [
                _para("Steps:"),
                _item("one"),
                _item("one.a", 1),
                _item("two"),
            ]
        )
        steps = root.children[0]
        assert _texts(steps.children) == ["one", "two"]
        assert _texts(steps.children[0].children) == ["one.a"]

    def test_non_list_block_resets_list(self):
        root = LayoutTreeBuilder.build(
            [
                _header("H"),
                _item("a", 0),
                _item("a.1", 1),
                _table(),
                _item("b", 1),
            ]
        )
        section = root.children[0]
        assert [c.tag for c in section.children] == ["list_item", "table", "list_item"]
        assert _texts(section.children[0].children) == ["a.1"]

    def test_list_after_table_does_not_nest_in_table(self):
        root = LayoutTreeBuilder.build([_table(), _item("a")])
        table = root.children[0]
        assert table.children == []
        assert [c.tag for c in root.children] == ["table", "list_item"]

    def test_list_item_descendants_are_deeper(self):
        root = LayoutTreeBuilder.build(
            [
                _item("a", 0),
                _item("a.1", 1),
                _item("a.1.i", 2),
                _item("a.2", 1),
                _item("b", 0),
                _item("b.1", 1),
            ]
        )
        for node in _walk(root):
            for descendant in _walk(node):
                assert descendant.level > node.level

    def test_paragraphs_ignore_list_stack(self):
        root = LayoutTreeBuilder.build([_header("H"), _item("a"), _item("a.1", 1), _para("after")])
        section = root.children[0]
        assert _texts(section.children) == ["a", "after"]


# ===================================================================
# Errors
# ===================================================================


class TestErrors:
    """Tests for rejected input."""

    def test_unknown_tag_raises(self):
        with pytest.raises(UnsupportedBlockError) as exc_info:
            LayoutTreeBuilder.build([_para("ok"), {"tag": "figure", "sentences": []}])
        assert exc_info.value.tag == "figure"
        assert exc_info.value.block_index == 1
        assert "figure" in str(exc_info.value)

    def test_missing_tag_raises(self):
        with pytest.raises(UnsupportedBlockError):
            LayoutTreeBuilder.build([{"sentences": ["no tag"]}])

    def test_unsupported_is_block_tree_error(self):
        assert issubclass(UnsupportedBlockError, BlockTreeError)
        assert issubclass(BlockTreeError, ValueError)

    def test_non_object_block_raises(self):
        with pytest.raises(BlockTreeError, match="not a JSON object"):
            LayoutTreeBuilder.build(["para"])

    def test_malformed_table_row_raises(self):
        blocks = [_para("ok"), {"tag": "table", "table_rows": ["oops"]}]
        with pytest.raises(BlockTreeError, match=r"Block 1 \(table\): table_rows\[0\]"):
            LayoutTreeBuilder.build(blocks)

    def test_malformed_cell_raises(self):
        table = _table()
        table["table_rows"][0]["cells"] = ["x"]
        with pytest.raises(BlockTreeError, match="Block 0"):
            LayoutTreeBuilder.build([table])

    def test_bad_level_raises(self):
        with pytest.raises(BlockTreeError, match="level"):
            LayoutTreeBuilder.build([{"tag": "header", "level": 1.5, "sentences": ["x"]}])

    def test_synthetic_tags_are_not_accepted_as_input(self):
        with pytest.raises(UnsupportedBlockError):
            LayoutTreeBuilder.build([{"tag": "root"}])
        with pytest.raises(UnsupportedBlockError):
            LayoutTreeBuilder.build([{"tag": "table_cell"}])


# ===================================================================
# Debug outline
# ===================================================================


class TestDebug:
    """Tests for the debug outline."""

    def test_outline_lines(self):
        root = LayoutTreeBuilder.build([_header("Chapter"), _para("Body"), _item("Point")])
        outline = LayoutTreeBuilder.debug(root)
        assert outline.splitlines() == [
            " header (1) Chapter",
            "- para (1) Body",
            "-- list_item (0) Point",
        ]

    def test_empty_tree(self):
        assert LayoutTreeBuilder.debug(Root()) == ""

    def test_siblings_in_document_order(self):
        root = LayoutTreeBuilder.build([_header("A"), _para("a1"), _header("B"), _para("b1")])
        assert LayoutTreeBuilder.debug(root).splitlines() == [
            " header (1) A",
            "- para (0) a1",
            " header (1) B",
            "- para (0) b1",
        ]

    def test_deep_tree(self):
        depth = 1500
        root = LayoutTreeBuilder.build([_header(f"H{n}", level=n) for n in range(depth)])
        lines = LayoutTreeBuilder.debug(root).splitlines()
        assert len(lines) == depth
        assert lines[-1] == f"{'-' * (depth - 1)} header (0) H{depth - 1}"
