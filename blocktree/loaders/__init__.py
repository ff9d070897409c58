"""Loaders fetching documents and calling the layout parser."""

from blocktree.loaders.base import FetchError, LayoutReaderError, ParserServiceError
from blocktree.loaders.parser_client import ParserClient, ParseResponse
from blocktree.loaders.reader import LayoutReader
from blocktree.loaders.source import fetch, is_url, source_file_name

__all__ = [
    "FetchError",
    "LayoutReader",
    "LayoutReaderError",
    "ParseResponse",
    "ParserClient",
    "ParserServiceError",
    "fetch",
    "is_url",
    "source_file_name",
]
