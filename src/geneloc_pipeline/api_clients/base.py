"""Cached HTTP client for annotation service queries."""

import logging
import time
from pathlib import Path
from typing import Any, Callable, Optional

import requests
import requests_cache
from requests.exceptions import ConnectionError, HTTPError, Timeout
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from geneloc_pipeline.config.schema import PipelineConfig

logger = logging.getLogger(__name__)

# Decides whether a fetched response may be stored in the cache
ResponseFilter = Callable[[requests.Response], bool]

CACHE_NAME = "annotation_cache"


class CachedAPIClient:
    """
    Annotation service client backed by a persistent SQLite response cache.

    Queries are sent as GET or form-encoded POST (BioMart XML queries for
    long gene lists do not fit in a URL). Both methods are cached, keyed on
    URL and body. A response is only stored when ``cache_filter`` accepts
    it, so error payloads served with HTTP 200 are fetched again next time.
    Network failures and 429/5xx answers are retried with exponential
    backoff; only responses that reached the network count against the
    rate limit.
    """

    def __init__(
        self,
        cache_dir: Path,
        rate_limit: int = 5,
        max_retries: int = 5,
        cache_ttl: int = 86400,
        timeout: int = 120,
        cache_filter: Optional[ResponseFilter] = None,
    ):
        """
        Args:
            cache_dir: Directory holding the SQLite cache
            rate_limit: Maximum uncached requests per second
            max_retries: Attempts per request before the error is re-raised
            cache_ttl: Seconds a stored response stays valid (0 = forever)
            timeout: Per-request timeout in seconds
            cache_filter: Predicate on a fresh response; False keeps it
                out of the cache
        """
        self.cache_dir = Path(cache_dir)
        self.rate_limit = rate_limit
        self.max_retries = max_retries
        self.timeout = timeout
        self.cache_filter = cache_filter

        self.cache_dir.mkdir(parents=True, exist_ok=True)

        self.session = requests_cache.CachedSession(
            cache_name=str(self.cache_dir / CACHE_NAME),
            backend="sqlite",
            expire_after=cache_ttl if cache_ttl > 0 else None,
            allowable_methods=("GET", "POST"),
            filter_fn=self._is_cacheable,
        )

    def _is_cacheable(self, response: requests.Response) -> bool:
        if self.cache_filter is None:
            return True
        accepted = self.cache_filter(response)
        if not accepted:
            logger.warning(f"Not caching rejected response from {response.url}")
        return accepted

    def _send(self, method: str, url: str, **kwargs) -> requests.Response:
        """Send one request with retry, then pause if it missed the cache."""

        @retry(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=1, min=2, max=60),
            retry=retry_if_exception_type((HTTPError, Timeout, ConnectionError)),
            reraise=True,
        )
        def _attempt() -> requests.Response:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            if response.status_code == 429:
                logger.warning(f"Rate limited by {url} (429), backing off")
            response.raise_for_status()
            return response

        response = _attempt()

        if not getattr(response, "from_cache", False):
            time.sleep(1 / self.rate_limit)

        return response

    def get(self, url: str, params: dict[str, Any] | None = None) -> requests.Response:
        """GET ``url`` with query parameters."""
        return self._send("GET", url, params=params)

    def post(self, url: str, data: dict[str, Any]) -> requests.Response:
        """POST ``data`` form-encoded to ``url``."""
        return self._send("POST", url, data=data)

    @classmethod
    def from_config(
        cls,
        config: PipelineConfig,
        cache_filter: Optional[ResponseFilter] = None,
    ) -> "CachedAPIClient":
        """Build a client from the ``api`` section and ``cache_dir``."""
        return cls(
            cache_dir=config.cache_dir,
            rate_limit=config.api.rate_limit_per_second,
            max_retries=config.api.max_retries,
            cache_ttl=config.api.cache_ttl_seconds,
            timeout=config.api.timeout_seconds,
            cache_filter=cache_filter,
        )

    def cache_stats(self) -> dict[str, Any]:
        """Location and size of the SQLite cache file."""
        cache_path = self.cache_dir / f"{CACHE_NAME}.sqlite"
        exists = cache_path.exists()
        return {
            "cache_path": str(cache_path),
            "cache_exists": exists,
            "cache_size_bytes": cache_path.stat().st_size if exists else 0,
        }
