"""
Client for the layout parser service.

Documents are uploaded as a multipart form (field ``file``) and the
service answers with a JSON envelope holding the block list at
``return_dict.result.blocks``.
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from pydantic import BaseModel, ValidationError

from blocktree.config import ReaderConfig
from blocktree.loaders.base import ParserServiceError
from blocktree.loaders.transport import send

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


class ParseResult(BaseModel):
    blocks: list[dict[str, Any]]


class ParseReturnDict(BaseModel):
    result: ParseResult


class ParseResponse(BaseModel):
    """Envelope returned by the layout parser."""

    return_dict: ParseReturnDict


class ParserClient:
    """
    Uploads documents to the layout parser and returns their blocks.

    Failures are never retried here beyond ``config.max_attempts``; a
    failed call surfaces as ParserServiceError. A session the client opens
    itself is closed by ``close()`` or on leaving a ``with`` block.
    """

    def __init__(
        self,
        config: ReaderConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or ReaderConfig()
        self._owns_session = session is None
        self._session = session or requests.Session()

    @property
    def api_url(self) -> str:
        return self.config.parser_api_url

    def close(self) -> None:
        """Close the HTTP session if this client opened it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> ParserClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def submit_for_parsing(self, contents: bytes, file_name: str = "document.pdf") -> list[dict[str, Any]]:
        """
        Upload document bytes and get the block list.

        Args:
            contents: Raw PDF bytes
            file_name: Name sent with the upload

        Returns:
            Block records in document order

        Raises:
            ParserServiceError: On connection errors, error statuses or a
                malformed response
        """
        logger.info("Submitting %s (%d bytes) to %s", file_name, len(contents), self.api_url)
        response = send(
            self._session.post,
            self.api_url,
            self.config,
            ParserServiceError,
            "Could not reach the layout parser",
            source=file_name,
            files={"file": (file_name, contents, PDF_CONTENT_TYPE)},
        )

        if not response.ok:
            raise ParserServiceError(
                f"Layout parser returned status {response.status_code}",
                source=file_name,
                details=response.text[:500],
                status_code=response.status_code,
            )

        return self.extract_blocks(response, file_name)

    @staticmethod
    def extract_blocks(response: requests.Response, file_name: str | None = None) -> list[dict[str, Any]]:
        """Get the block list out of a parser response."""
        try:
            payload = response.json()
        except ValueError as exc:
            raise ParserServiceError(
                "Layout parser returned invalid JSON",
                source=file_name,
                details=str(exc),
                status_code=response.status_code,
            ) from exc

        try:
            parsed = ParseResponse.model_validate(payload)
        except ValidationError as exc:
            raise ParserServiceError(
                "Layout parser response has no return_dict.result.blocks",
                source=file_name,
                details=str(exc),
                status_code=response.status_code,
            ) from exc

        blocks = parsed.return_dict.result.blocks
        logger.info("Layout parser returned %d blocks for %s", len(blocks), file_name)
        return blocks
