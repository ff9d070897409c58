"""
Layout PDF reader.

Reads a PDF through the layout parser and returns a Document with the
reconstructed section hierarchy.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import requests

from blocktree.config import ReaderConfig
from blocktree.document import Document
from blocktree.loaders.parser_client import ParserClient
from blocktree.loaders.source import fetch, source_file_name


class LayoutReader:
    """
    Reads PDFs and understands the hierarchical layout of their sections,
    paragraphs, lists and tables.

    Example:
        with LayoutReader("http://localhost:5010/api/parseDocument?renderFormat=all") as reader:
            doc = reader.read_pdf("https://example.com/report.pdf")
        print(doc.to_text())
    """

    def __init__(
        self,
        parser_api_url: str | None = None,
        config: ReaderConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or ReaderConfig()
        if parser_api_url is not None:
            self.config = replace(self.config, parser_api_url=parser_api_url)
        self._owns_session = session is None
        self._session = session or requests.Session()
        self.client = ParserClient(self.config, session=self._session)

    def close(self) -> None:
        """Close the HTTP session if this reader opened it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> LayoutReader:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def read_pdf(self, path_or_url: str | Path, contents: bytes | None = None) -> Document:
        """
        Read a PDF into a Document.

        Args:
            path_or_url: Local path or http(s) URL of the PDF. When
                ``contents`` is given it only names the upload.
            contents: PDF bytes already in memory

        Raises:
            FetchError: If the PDF cannot be read or downloaded
            ParserServiceError: If the layout parser call fails
            BlockTreeError: If the returned blocks cannot be built into a tree
        """
        locator = str(path_or_url)
        if contents is None:
            contents = fetch(locator, self.config, self._session)

        blocks = self.client.submit_for_parsing(contents, source_file_name(locator))
        return Document(blocks)
