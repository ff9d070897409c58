"""
Source document fetching.

A source is either a local file path or an http(s) URL. Remote documents
are downloaded with a browser User-Agent, since some hosts refuse
non-browser clients.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from urllib.parse import urlparse

import requests

from blocktree.config import ReaderConfig
from blocktree.loaders.base import FetchError
from blocktree.loaders.transport import send

logger = logging.getLogger(__name__)

REMOTE_SCHEMES = ("http", "https")
DEFAULT_FILE_NAME = "document.pdf"


def is_url(source: str) -> bool:
    """Check if a source locator is an http(s) URL."""
    return urlparse(source).scheme in REMOTE_SCHEMES


def source_file_name(source: str) -> str:
    """Get the file name to upload a source under."""
    if is_url(source):
        name = PurePosixPath(urlparse(source).path).name
    else:
        name = Path(source).name
    return name or DEFAULT_FILE_NAME


def fetch(
    source: str | Path,
    config: ReaderConfig | None = None,
    session: requests.Session | None = None,
) -> bytes:
    """
    Get the raw bytes of a source document.

    Args:
        source: Local path or http(s) URL
        config: Reader settings (timeout, user agent, retries)
        session: HTTP session to download with. A one-off session is
            opened and closed when omitted.

    Returns:
        Document bytes

    Raises:
        FetchError: If the file is missing or the download fails
    """
    cfg = config or ReaderConfig()
    locator = str(source)

    if is_url(locator):
        if session is not None:
            return _download(locator, cfg, session)
        with requests.Session() as own_session:
            return _download(locator, cfg, own_session)

    path = Path(locator)
    if not path.is_file():
        raise FetchError(f"File not found: {locator}", source=locator)
    try:
        return path.read_bytes()
    except OSError as exc:
        raise FetchError(f"Could not read file: {locator}", source=locator, details=str(exc)) from exc


def _download(url: str, config: ReaderConfig, session: requests.Session) -> bytes:
    logger.info("Downloading %s", url)
    response = send(
        session.get,
        url,
        config,
        FetchError,
        f"Could not download {url}",
        source=url,
        headers={"User-Agent": config.user_agent},
    )

    if response.status_code != 200:
        raise FetchError(
            f"Download of {url} failed with status {response.status_code}",
            source=url,
        )

    logger.info("Downloaded %d bytes from %s", len(response.content), url)
    return response.content
