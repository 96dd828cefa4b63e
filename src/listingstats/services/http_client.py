"""HTTP transport shared by all sources."""

import hashlib
import json
import logging
from typing import Any, Dict, Optional

import requests
from diskcache import Cache
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..core.config import settings
from ..core.constants import CacheConstants

logger = logging.getLogger(__name__)


class HttpClient:
    """requests.Session with retries and an optional on-disk page cache."""

    def __init__(self, cache: Optional[Cache] = None, timeout: Optional[float] = None):
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": settings.user_agent})
        self.timeout = timeout or settings.request_timeout
        self.cache = cache
        self.cache_ttl = settings.page_cache_ttl_hours * 3600

    def _cache_key(self, url: str, params: Optional[Dict[str, Any]]) -> str:
        raw = url + "?" + json.dumps(params or {}, sort_keys=True)
        return hashlib.sha1(raw.encode("utf-8")).hexdigest()

    @retry(
        stop=stop_after_attempt(settings.max_retries),
        wait=wait_exponential(multiplier=settings.retry_delay, max=settings.retry_backoff * 10),
        retry=retry_if_exception_type(requests.RequestException),
        reraise=True,
    )
    def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> str:
        response = self.session.get(url, params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.text

    def get_text(self, url: str, params: Optional[Dict[str, Any]] = None) -> str:
        """Fetch a page body, serving it from the page cache when possible."""
        key = self._cache_key(url, params)
        if self.cache is not None:
            hit = self.cache.get(key)
            if hit is not None:
                logger.debug(f"Page cache hit {key[:CacheConstants.CACHE_KEY_LENGTH]} for {url}")
                return hit

        body = self._get(url, params)
        if self.cache is not None:
            self.cache.set(key, body, expire=self.cache_ttl)
        return body

    def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Fetch and decode a JSON document."""
        return json.loads(self.get_text(url, params))


def open_page_cache(enabled: Optional[bool] = None) -> Optional[Cache]:
    """Page cache at ``settings.page_cache_dir``, or None when disabled."""
    if enabled is None:
        enabled = settings.use_page_cache
    if not enabled:
        return None
    return Cache(settings.page_cache_dir)
