"""
Pytest configuration and fixtures for blocktree tests.
"""

from __future__ import annotations

from typing import Any

import pytest


@pytest.fixture
def reference_blocks() -> list[dict[str, Any]]:
    """Block list of a small four-section document with a table and a list."""
    return [
        {
            "tag": "header",
            "level": 0,
            "page_idx": 0,
            "block_idx": 0,
            "top": 72.0,
            "left": 72.0,
            "bbox": [72.0, 72.0, 300.0, 90.0],
            "sentences": ["Sample Document"],
        },
        {
            "tag": "para",
            "level": 0,
            "page_idx": 0,
            "block_idx": 1,
            "sentences": ["First Paragraph", "It has two sentences."],
        },
        {
            "tag": "para",
            "level": 0,
            "page_idx": 0,
            "block_idx": 2,
            "sentences": ["Another paragraph in the first section."],
        },
        {
            "tag": "header",
            "level": 0,
            "page_idx": 0,
            "block_idx": 3,
            "sentences": ["Second Heading"],
        },
        {
            "tag": "table",
            "level": 0,
            "page_idx": 0,
            "block_idx": 4,
            "name": "table_1",
            "table_rows": [
                {
                    "type": "table_header",
                    "cells": [
                        {"col_span": 1, "cell_value": "Column A"},
                        {"col_span": 1, "cell_value": "Column B"},
                    ],
                },
                {
                    "type": "table_data_row",
                    "cells": [
                        {"col_span": 1, "cell_value": "1"},
                        {"col_span": 1, "cell_value": "2"},
                    ],
                },
            ],
        },
        {
            "tag": "header",
            "level": 0,
            "page_idx": 1,
            "block_idx": 5,
            "sentences": ["Third Heading"],
        },
        {
            "tag": "para",
            "level": 0,
            "page_idx": 1,
            "block_idx": 6,
            "sentences": ["The list below has two items:"],
        },
        {
            "tag": "list_item",
            "level": 0,
            "page_idx": 1,
            "block_idx": 7,
            "sentences": ["Item one"],
        },
        {
            "tag": "list_item",
            "level": 0,
            "page_idx": 1,
            "block_idx": 8,
            "sentences": ["Item two"],
        },
        {
            "tag": "para",
            "level": 0,
            "page_idx": 1,
            "block_idx": 9,
            "sentences": ["Closing paragraph."],
        },
        {
            "tag": "header",
            "level": 0,
            "page_idx": 1,
            "block_idx": 10,
            "sentences": ["Third Paragraph"],
        },
    ]


@pytest.fixture
def parser_response(reference_blocks: list[dict[str, Any]]) -> dict[str, Any]:
    """Layout parser response envelope around the reference blocks."""
    return {
        "status": 200,
        "return_dict": {
            "page_dim": [612, 792],
            "num_pages": 2,
            "result": {"blocks": reference_blocks},
        },
    }


@pytest.fixture
def sample_pdf_content() -> bytes:
    """Sample PDF bytes for upload tests (minimal PDF header)."""
    return b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\ntrailer\n<< /Root 1 0 R >>\n%%EOF"
