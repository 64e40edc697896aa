"""
Resource fetcher: the single entry point every client call goes through.

Turns a relative REST path (or an absolute link found in an API payload)
into a request target and runs it through the rate limiter and the retrying
transport.
"""

import logging
import re
from typing import Any, Optional

import requests

from .config import DEFAULT_RATE_LIMIT, RATE_LIMIT_INTERVAL_SECONDS
from .errors import ConfigurationError
from .rate_limiter import RateLimiter
from .transport import RetryingTransport, RetryPolicy

logger = logging.getLogger(__name__)

# scheme ":" prefix, e.g. "https:" (RFC 3986)
ABSOLUTE_URL_RE = re.compile(r'^[a-zA-Z][a-zA-Z\d+\-.]*?:')


def is_absolute_url(url: str) -> bool:
    return bool(ABSOLUTE_URL_RE.match(url))


def join_url(api_host: str, path: str) -> str:
    """Join a relative path onto the host, normalizing the slash between them."""
    return f"{api_host.rstrip('/')}/{path.lstrip('/')}"


class ResourceFetcher:
    def __init__(
        self,
        api_host: str,
        token: str,
        rate_limit: int = DEFAULT_RATE_LIMIT,
        limiter: Optional[RateLimiter] = None,
        transport: Optional[RetryingTransport] = None,
        session: Optional[requests.Session] = None,
        policy: Optional[RetryPolicy] = None
    ):
        """
        Raises:
            ConfigurationError: If the host or the token is missing
        """
        if not api_host:
            raise ConfigurationError("missing apiHost")
        if not token:
            raise ConfigurationError("missing token")

        self.api_host = api_host.rstrip('/')
        self.limiter = limiter or RateLimiter(rate_limit, RATE_LIMIT_INTERVAL_SECONDS)
        self.transport = transport or RetryingTransport(token, session=session, policy=policy)

        logger.info(f"Initialized ResourceFetcher for {self.api_host} ({self.limiter.limit} req/s)")

    def resolve(self, url: str) -> str:
        return url if is_absolute_url(url) else join_url(self.api_host, url)

    def fetch(self, url: Optional[str]) -> Any:
        """
        Fetch a relative path or absolute URL and return its JSON payload.

        Returns None for an empty url or an unparsable body.
        """
        if not url:
            return None
        return self.transport.get(self.resolve(url), throttle=self.limiter.acquire)

    def close(self):
        self.transport.close()
