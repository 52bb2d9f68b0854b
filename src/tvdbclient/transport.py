"""HTTP transport with bounded retry on transient failures."""
import logging
from itertools import takewhile
from typing import Dict, Iterable, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from tvdbclient.errors import NetworkError

logger = logging.getLogger(__name__)

DEFAULT_RETRY_STATUS_CODES = (500, 502, 503, 504)
DEFAULT_RETRY_METHODS = ("GET", "POST")


class BoundedRetry(Retry):
    """Retry whose waits grow from ``backoff_factor`` up to ``backoff_max``.

    The n-th consecutive retry waits ``backoff_factor * 2 ** (n - 1)``
    seconds, the first one included, and never longer than ``backoff_max``.
    """

    def get_backoff_time(self) -> float:
        consecutive_errors = len(list(
            takewhile(lambda entry: entry.redirect_location is None, reversed(self.history))
        ))
        if consecutive_errors < 1:
            return 0
        return min(self.backoff_max, self.backoff_factor * 2 ** (consecutive_errors - 1))


class Transport:
    """Sends raw HTTP requests over a pooled session.

    Connection errors and the configured status codes are retried by the
    mounted adapter with exponential backoff. Authentication is not handled
    here; a 401 is returned to the caller like any other response.
    """

    def __init__(self,
                 retry_max: int = 3,
                 retry_wait_min: float = 1.0,
                 retry_wait_max: float = 5.0,
                 retry_status_codes: Iterable[int] = DEFAULT_RETRY_STATUS_CODES,
                 retry_methods: Iterable[str] = DEFAULT_RETRY_METHODS,
                 timeout: float = 30.0):
        self.timeout = timeout
        self.retry = BoundedRetry(
            total=retry_max,
            connect=retry_max,
            read=retry_max,
            status=retry_max,
            backoff_factor=retry_wait_min,
            backoff_max=retry_wait_max,
            status_forcelist=tuple(retry_status_codes),
            allowed_methods=frozenset(m.upper() for m in retry_methods),
            raise_on_status=False,
            respect_retry_after_header=False
        )
        self.session = requests.Session()
        adapter = HTTPAdapter(max_retries=self.retry)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)
        self.session.headers.update({"Accept": "application/json"})

    def send(self,
             method: str,
             url: str,
             headers: Optional[Dict[str, str]] = None,
             data: Optional[bytes] = None) -> requests.Response:
        """Send a request and return the final response.

        Raises:
            NetworkError: if no response could be obtained after all retries
        """
        logger.debug(f"{method} {url}")
        try:
            return self.session.request(
                method,
                url,
                headers=headers,
                data=data,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Request failed: {method} {url}: {e}")
            raise NetworkError(f"error sending request: {e}", method, url) from e

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
