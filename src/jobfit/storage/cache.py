"""
Content-addressable cache for expensive inputs (scraped pages and the like).

Entries are keyed by ``(namespace, sha256(content)[:16])`` and expire after
``settings.cache_ttl_hours``. Uses Redis when ``REDIS_HOST`` is configured;
falls back to one JSON file per entry under ``settings.cache_dir`` otherwise.
An unreadable or expired entry is treated as a miss.
"""
import hashlib
import json
import time
from pathlib import Path
from typing import Any, Optional, Union

import redis as redis_lib
from loguru import logger

from jobfit.utils.config import settings

_REDIS_PREFIX = "jobfit:cache:"


def hash_key(content: str) -> str:
    return hashlib.sha256(content.encode("utf-8")).hexdigest()[:16]


class ContentCache:
    """TTL cache keyed by a hash of the cached content's source text.

    File layout: ``<cache_dir>/<namespace>_<hash>.json`` holding
    ``{"timestamp", "namespace", "key_hash", "data"}``.
    Redis layout: ``jobfit:cache:<namespace>:<hash>`` with a native TTL.
    """

    def __init__(
        self,
        cache_dir: Optional[Union[str, Path]] = None,
        ttl_hours: Optional[float] = None,
        use_redis: bool = True,
    ):
        self.cache_dir = Path(cache_dir) if cache_dir is not None else Path(settings.cache_dir)
        ttl = ttl_hours if ttl_hours is not None else settings.cache_ttl_hours
        self.ttl_seconds = int(ttl * 3600)
        self.redis_client = self._init_redis() if use_redis else None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _init_redis(self):
        """Return a connected Redis client, or None if REDIS_HOST is unset."""
        redis_host = settings.redis_host
        if not redis_host:
            return None
        try:
            client = redis_lib.Redis(host=redis_host, port=settings.redis_port, socket_timeout=3)
            client.ping()
            logger.info(f"✅ Cache backend: Redis {redis_host}:{settings.redis_port}")
            return client
        except Exception as e:
            logger.warning(f"⚠️ Redis init failed, using file cache: {e}")
            return None

    def _path_for(self, namespace: str, key: str) -> Path:
        return self.cache_dir / f"{namespace}_{key}.json"

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------

    def get(self, namespace: str, content: str) -> Optional[Any]:
        """Return the cached value for ``content`` in ``namespace``, or None."""
        key = hash_key(content)

        if self.redis_client is not None:
            try:
                raw = self.redis_client.get(f"{_REDIS_PREFIX}{namespace}:{key}")
                if raw is None:
                    return None
                logger.debug(f"⚡ Cache hit ({namespace})")
                return json.loads(raw)["data"]
            except Exception as e:
                logger.warning(f"⚠️ Redis cache read error: {e}")
                return None

        path = self._path_for(namespace, key)
        if not path.exists():
            return None
        try:
            entry = json.loads(path.read_text(encoding="utf-8"))
            if time.time() - entry["timestamp"] > self.ttl_seconds:
                return None
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"⚠️ Ignoring unreadable cache entry {path.name}: {e}")
            return None

        logger.debug(f"⚡ Cache hit ({namespace})")
        return entry["data"]

    def set(self, namespace: str, content: str, data: Any) -> None:
        """Store a JSON-serialisable ``data`` under ``content``'s hash."""
        key = hash_key(content)
        entry = {
            "timestamp": time.time(),
            "namespace": namespace,
            "key_hash": key,
            "data": data,
        }

        if self.redis_client is not None:
            try:
                self.redis_client.setex(
                    f"{_REDIS_PREFIX}{namespace}:{key}", self.ttl_seconds, json.dumps(entry)
                )
                return
            except Exception as e:
                logger.warning(f"⚠️ Redis cache write error, writing file instead: {e}")

        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self._path_for(namespace, key).write_text(json.dumps(entry), encoding="utf-8")


_default_cache: Optional[ContentCache] = None


def get_default_cache() -> ContentCache:
    global _default_cache
    if _default_cache is None:
        _default_cache = ContentCache()
    return _default_cache


def get_cached(namespace: str, content: str) -> Optional[Any]:
    return get_default_cache().get(namespace, content)


def set_cache(namespace: str, content: str, data: Any) -> None:
    get_default_cache().set(namespace, content, data)
