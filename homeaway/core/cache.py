"""In-process cache of rendered public views, keyed by request path."""

import logging
import time
from typing import Any, Optional

from homeaway.core.config import settings

logger = logging.getLogger(__name__)

# Insertion ordered, so the first key is always the oldest entry
_cache: dict[str, dict[str, Any]] = {}


def _path_of(key: str) -> str:
    return key.split("?", 1)[0]


def _purge_expired(now: float) -> None:
    expired = [key for key, entry in _cache.items() if now > entry["expires_at"]]
    for key in expired:
        _cache.pop(key, None)


def get_cached_view(key: str) -> Optional[Any]:
    entry = _cache.get(key)
    if not entry:
        return None
    if time.time() > entry["expires_at"]:
        _cache.pop(key, None)
        return None
    return entry["value"]


def set_cached_view(
    key: str,
    value: Any,
    ttl: Optional[int] = None,
    max_entries: Optional[int] = None,
) -> None:
    """Store a view. Expired entries are swept first; past `max_entries` the oldest go."""
    ttl = settings.VIEW_CACHE_TTL_SECONDS if ttl is None else ttl
    max_entries = settings.VIEW_CACHE_MAX_ENTRIES if max_entries is None else max_entries
    if ttl <= 0:
        return

    now = time.time()
    _purge_expired(now)
    _cache.pop(key, None)
    while _cache and len(_cache) >= max_entries:
        _cache.pop(next(iter(_cache)))

    _cache[key] = {
        "value": value,
        "expires_at": now + ttl,
    }


def cached_view_count() -> int:
    return len(_cache)


def revalidate_path(path: str) -> int:
    """Drop every cached view of `path`, whatever its query string. Returns the number dropped."""
    stale = [key for key in _cache if _path_of(key) == path]
    for key in stale:
        _cache.pop(key, None)
    if stale:
        logger.debug(f"Revalidated {path}: dropped {len(stale)} cached view(s)")
    return len(stale)


def clear_view_cache() -> None:
    _cache.clear()
