"""
Media size probe.

Asset records often lack a file size. The preview reads it from the
`Content-Length` of the media URL instead. The caller can stop waiting at
any time by setting a `threading.Event`; the request already sent keeps
running in a daemon thread and its result is discarded.
"""

import logging
import threading
from concurrent.futures import wait
from typing import Optional

import requests

from ..utils.concurrency import DaemonThreadPoolExecutor
from .config import NETWORK_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 0.05

_executor = DaemonThreadPoolExecutor(max_workers=4, thread_name_prefix='MediaProbe')


def _content_length(url: str, session: requests.Session, timeout: float, owns_session: bool = False) -> int:
    try:
        with session.get(url, stream=True, timeout=timeout) as response:
            try:
                return int(response.headers.get('content-length') or 0)
            except ValueError:
                return 0
    finally:
        if owns_session:
            session.close()


def probe_media_size(
    url: str,
    cancel_event: Optional[threading.Event] = None,
    session: Optional[requests.Session] = None,
    timeout: float = NETWORK_TIMEOUT_SECONDS
) -> Optional[int]:
    """
    Size in bytes of the media at `url`.

    Args:
        url: Media URL
        cancel_event: Set it to stop waiting
        session: Optional requests session
        timeout: Socket timeout for the probe request

    Returns:
        The Content-Length (0 when the header is missing), or None when the
        caller cancelled before the answer arrived.

    Raises:
        ValueError: If url is empty
    """
    if not url:
        raise ValueError("Invalid payload: url is required")

    # a session created here is closed by the worker once the request ends
    owns_session = session is None
    future = _executor.submit(
        _content_length, url, session or requests.Session(), timeout, owns_session
    )

    while True:
        if cancel_event is not None and cancel_event.is_set():
            logger.debug(f"Media size probe cancelled for {url}")
            return None
        done, _ = wait([future], timeout=POLL_INTERVAL_SECONDS)
        if done:
            return future.result()
