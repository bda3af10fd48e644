"""
In-process cache of search responses.

Identical searches within the TTL are served without spending vendor credits.
Single-instance only, like the rate limiter. Continuations (requests carrying
a thread_id) are never cached: the vendor returns the next page each time.
"""

import hashlib
import json
import threading

from cachetools import TTLCache

from merraine.config import settings

search_cache: TTLCache = TTLCache(maxsize=settings.search_cache_size, ttl=settings.search_cache_ttl)

# TTLCache is not thread-safe and sync handlers run on the threadpool
cache_lock = threading.Lock()


def cache_key(params: dict) -> str:
    """Stable key for a search payload."""
    encoded = json.dumps(params, sort_keys=True, default=str)
    return hashlib.sha256(encoded.encode()).hexdigest()


def is_cacheable(params: dict) -> bool:
    return not params.get("thread_id")


def get_cached(key: str):
    with cache_lock:
        return search_cache.get(key)


def store_cached(key: str, value) -> None:
    with cache_lock:
        search_cache[key] = value
