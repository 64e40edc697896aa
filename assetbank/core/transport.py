"""
Retrying HTTP Transport
=======================

Executes GET requests against the Asset Bank REST API and returns parsed
JSON. Failed attempts are classified (see `errors.classify_failure`) and
transient ones are retried with exponential backoff:

- 429 and 408 are retried, like 5xx and network errors.
- Any other 4xx is terminal and raised after the first attempt.
- A 2xx response whose body is not JSON resolves to None with a warning.
  Callers must read None as "no usable payload", not as a failure.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import requests

from ..utils.logger import log_api_request, log_api_response
from .config import (
    MAX_RETRIES,
    NETWORK_TIMEOUT_SECONDS,
    RETRY_BACKOFF_FACTOR,
    RETRY_DELAY_SECONDS,
)
from .errors import ApiError, NetworkError, RateLimitError, classify_failure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    retries: int = MAX_RETRIES
    min_delay: float = RETRY_DELAY_SECONDS
    factor: float = RETRY_BACKOFF_FACTOR
    max_delay: Optional[float] = None

    def delay_for(self, retry_number: int) -> float:
        """Backoff before the given 1-based retry."""
        delay = self.min_delay * (self.factor ** (retry_number - 1))
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay


def retry_call(
    attempt_fn: Callable[[int], Any],
    policy: RetryPolicy,
    sleep: Callable[[float], None] = time.sleep,
    description: str = "request"
) -> Any:
    """
    Run `attempt_fn(attempt_number)` until it succeeds or the policy gives up.

    The last error is raised when every attempt failed; a terminal failure
    is raised immediately.
    """
    attempt = 1
    while True:
        try:
            return attempt_fn(attempt)
        except Exception as e:
            failure = classify_failure(e)
            retries_left = policy.retries - (attempt - 1)

            if failure.is_terminal:
                logger.warning(f"{description} failed with terminal error, not retrying: {e}")
                raise
            if retries_left <= 0:
                logger.error(f"{description} failed after {attempt} attempts: {e}")
                raise

            delay = policy.delay_for(attempt)
            logger.warning(
                f"{description} attempt {attempt} failed ({e}). "
                f"Retrying in {delay:.2f}s, {retries_left} retries left"
            )
            sleep(delay)
            attempt += 1


class RetryingTransport:
    """
    Single-request executor with bounded retries.

    The optional `throttle` passed to `get` runs before every attempt, which
    is how the resource fetcher routes retries through the rate limiter too.
    """

    def __init__(
        self,
        token: str,
        session: Optional[requests.Session] = None,
        timeout: float = NETWORK_TIMEOUT_SECONDS,
        policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        self.token = token
        self.timeout = timeout
        self.policy = policy or RetryPolicy()
        self._sleep = sleep
        self.session = session or requests.Session()
        self.session.headers.update({
            'Content-Type': 'application/json',
            'Accept': 'application/json',
        })

    def _headers(self) -> Dict[str, str]:
        return {'Authorization': f"Bearer {self.token}"}

    def send(self, url: str, attempt: int = 1) -> Any:
        """Perform one GET and return the parsed body (None when unparsable)."""
        headers = self._headers()
        log_api_request(logger, "GET", url, headers, attempt=attempt)

        start_time = time.time()
        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise NetworkError(url, str(e)) from e
        elapsed = time.time() - start_time

        if not 200 <= response.status_code < 300:
            log_api_response(logger, response.status_code, elapsed_time=elapsed)
            if response.status_code == 429:
                raise RateLimitError(url)
            raise ApiError(response.status_code, url)

        try:
            payload = response.json()
        except ValueError as e:
            logger.warning(f"Unparsable JSON body from {url}: {e}")
            return None

        log_api_response(logger, response.status_code, payload, elapsed)
        return payload

    def get(self, url: str, throttle: Optional[Callable[[], None]] = None) -> Any:
        """
        GET `url` with retries.

        Args:
            url: Absolute request URL; a falsy value returns None without I/O
            throttle: Called before every attempt (e.g. RateLimiter.acquire)
        """
        if not url:
            return None

        def attempt_fn(attempt: int) -> Any:
            if throttle is not None:
                throttle()
            return self.send(url, attempt)

        return retry_call(attempt_fn, self.policy, self._sleep, description=f"GET {url}")

    def close(self):
        self.session.close()
