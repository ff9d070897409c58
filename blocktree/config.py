"""
Configuration for reading documents through a layout parser.

Values come from keyword arguments or, via ``ReaderConfig.from_env()``,
from ``BLOCKTREE_*`` environment variables.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_PARSER_API_URL = "http://localhost:5010/api/parseDocument?renderFormat=all"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/77.0.3865.90 Safari/537.36"
)


@dataclass
class ReaderConfig:
    """Settings for fetching documents and calling the layout parser.

    Attributes:
        parser_api_url: Endpoint receiving the multipart PDF upload.
        timeout: Seconds to wait for a download or parser response.
        user_agent: User-Agent header sent when downloading remote PDFs.
        max_attempts: Attempts per HTTP call; 1 disables retries.
        retry_base_delay: Initial delay in seconds between attempts.
    """

    parser_api_url: str = DEFAULT_PARSER_API_URL
    timeout: float = 120.0
    user_agent: str = DEFAULT_USER_AGENT
    max_attempts: int = 1
    retry_base_delay: float = 1.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ReaderConfig:
        """Create a config from BLOCKTREE_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ.

        Raises:
            ValueError: If a numeric variable cannot be parsed.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            parser_api_url=env.get("BLOCKTREE_PARSER_API_URL", defaults.parser_api_url),
            timeout=float(env.get("BLOCKTREE_TIMEOUT", defaults.timeout)),
            user_agent=env.get("BLOCKTREE_USER_AGENT", defaults.user_agent),
            max_attempts=int(env.get("BLOCKTREE_MAX_ATTEMPTS", defaults.max_attempts)),
            retry_base_delay=float(
                env.get("BLOCKTREE_RETRY_BASE_DELAY", defaults.retry_base_delay)
            ),
        )
