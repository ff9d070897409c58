"""
HTTP calls to remote collaborators.

Every download and parser upload goes through ``send``: it applies the
reader's timeout, repeats the call on connection errors and timeouts while
``config.max_attempts`` allows, and turns any ``requests`` failure into the
caller's loader error.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

import requests

from blocktree.config import ReaderConfig
from blocktree.loaders.base import LayoutReaderError

logger = logging.getLogger(__name__)

# Failures worth another attempt; anything else fails the call at once
TRANSIENT_ERRORS = (requests.ConnectionError, requests.Timeout)


def backoff_delay(attempt: int, config: ReaderConfig) -> float:
    """Get the pause after failed attempt number *attempt* (1-based)."""
    return config.retry_base_delay * 2 ** (attempt - 1)


def send(
    method: Callable[..., requests.Response],
    url: str,
    config: ReaderConfig,
    error_type: type[LayoutReaderError],
    message: str,
    source: str | None = None,
    **request_kwargs: Any,
) -> requests.Response:
    """
    Send one HTTP request, retrying transient failures.

    Args:
        method: Bound session method such as ``session.get``
        url: Request URL
        config: Reader settings (timeout, attempts, base delay)
        error_type: Loader error raised when the request fails
        message: Message of the raised error
        source: Document the request is for, recorded on the error
        **request_kwargs: Extra arguments for ``method``

    Returns:
        The response, whatever its status code

    Raises:
        LayoutReaderError: An ``error_type`` instance once the attempts are
            used up or on a non-transient ``requests`` error
    """
    attempt = 1
    while True:
        try:
            return method(url, timeout=config.timeout, **request_kwargs)
        except TRANSIENT_ERRORS as exc:
            if attempt >= config.max_attempts:
                raise error_type(message, source=source, details=str(exc)) from exc
            delay = backoff_delay(attempt, config)
            logger.warning(
                "Request to %s failed on attempt %d/%d (%s). Retrying in %.1fs.",
                url,
                attempt,
                config.max_attempts,
                exc,
                delay,
            )
            time.sleep(delay)
            attempt += 1
        except requests.RequestException as exc:
            raise error_type(message, source=source, details=str(exc)) from exc
