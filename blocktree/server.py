"""FastAPI server for blocktree.

Builds layout trees from posted block lists and returns them as JSON, text
or HTML. Endpoints are registered on an ``APIRouter`` so that a larger
application can mount them under a prefix.

The standalone ``app`` object includes the router directly::

    uvicorn blocktree.server:app --reload --port 8430
"""

from __future__ import annotations

import logging
from typing import Any, Literal

from fastapi import APIRouter, FastAPI, HTTPException
from pydantic import BaseModel, Field

from blocktree import __version__
from blocktree.document import Document
from blocktree.hierarchy.builder import BlockTreeError

logger = logging.getLogger(__name__)

router = APIRouter()

app = FastAPI(
    title="blocktree API",
    description="Section hierarchy reconstruction for layout parser output",
    version=__version__,
)


# ============================================================================
# Pydantic Models for API
# ============================================================================


class BlocksRequest(BaseModel):
    """Request model carrying a layout parser block list."""

    blocks: list[dict[str, Any]] = Field(default_factory=list)


class RenderRequest(BlocksRequest):
    format: Literal["text", "html"] = "text"


class ChunksRequest(BlocksRequest):
    include_section_info: bool = True


def _build_document(blocks: list[dict[str, Any]]) -> Document:
    try:
        return Document(blocks)
    except BlockTreeError as exc:
        logger.warning("Rejected block list: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc


# ============================================================================
# Endpoints
# ============================================================================


@router.get("/api/health")
async def health_check() -> dict[str, Any]:
    return {"status": "ok", "version": __version__}


@router.post("/api/document/tree")
async def build_tree(request: BlocksRequest) -> dict[str, Any]:
    """Build the layout tree and return it as a dictionary."""
    document = _build_document(request.blocks)
    return document.to_dict()


@router.post("/api/document/render")
async def render_document(request: RenderRequest) -> dict[str, Any]:
    """Render the whole document as text or HTML."""
    document = _build_document(request.blocks)
    content = document.to_html() if request.format == "html" else document.to_text()
    return {"format": request.format, "content": content}


@router.post("/api/document/chunks")
async def get_chunks(request: ChunksRequest) -> list[dict[str, Any]]:
    """Get the document's chunks with their section context."""
    document = _build_document(request.blocks)
    return [
        {
            "tag": chunk.tag,
            "page_idx": chunk.page_idx,
            "text": chunk.to_text(),
            "context_text": chunk.to_context_text(request.include_section_info),
        }
        for chunk in document.chunks()
    ]


app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host="127.0.0.1", port=8430)
