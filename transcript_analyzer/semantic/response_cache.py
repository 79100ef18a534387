"""Disk-backed cache for semantic analysis responses."""

from __future__ import annotations

import hashlib
import json
import os
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from logging import Logger
from pathlib import Path
from typing import Any, TypeAlias

from transcript_analyzer.utils.logger import get_logger

logger: Logger = get_logger(__name__)

ComputeResponseCallable: TypeAlias = Callable[[], dict[str, Any]]


@dataclass(frozen=True)
class ResponseCacheEntry:
    """Cache lookup result for one request fingerprint."""

    payload: dict[str, Any]
    cache_key: str
    cache_path: Path
    cache_hit: bool
    invalidated_stale_entry: bool = False


class ResponseCache:
    """Caches JSON responses on disk for a bounded time-to-live."""

    def __init__(
        self,
        cache_dir: Path,
        ttl_seconds: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initializes cache location and expiry.

        Args:
            cache_dir: Root directory used for cache entries.
            ttl_seconds: Age after which an entry is recomputed.
            clock: Time source returning epoch seconds.
        """
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds must be zero or greater.")
        self._cache_dir: Path = cache_dir
        self._ttl_seconds: int = ttl_seconds
        self._clock = clock
        self._cache_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def fingerprint(request: dict[str, Any]) -> str:
        """Returns a deterministic key for one request description."""
        serialized: str = json.dumps(request, sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(serialized.encode("utf-8")).hexdigest()

    def get_or_compute(
        self,
        *,
        request: dict[str, Any],
        compute: ComputeResponseCallable,
    ) -> ResponseCacheEntry:
        """Returns a fresh cached response or computes and stores it.

        Args:
            request: JSON-serializable description of the request (URL,
                version, body) used as the cache key.
            compute: Callback performing the request on a cache miss.

        Returns:
            Cache result containing the response payload and cache-hit metadata.
        """
        cache_key: str = self.fingerprint(request)
        cache_path: Path = self._cache_dir / cache_key[:2] / f"{cache_key}.json"

        invalidated_stale_entry = False
        if cache_path.exists():
            try:
                stored_at, payload = self._read_cache_entry(cache_path)
            except (OSError, ValueError, KeyError, TypeError) as err:
                invalidated_stale_entry = True
                logger.warning(
                    "Invalid response cache entry at %s; recomputing. Error: %s",
                    cache_path,
                    err,
                )
                cache_path.unlink(missing_ok=True)
            else:
                age = self._clock() - stored_at
                if age < self._ttl_seconds:
                    logger.debug("Response cache hit for %s", cache_key)
                    return ResponseCacheEntry(
                        payload=payload,
                        cache_key=cache_key,
                        cache_path=cache_path,
                        cache_hit=True,
                    )
                invalidated_stale_entry = True
                logger.debug(
                    "Response cache entry %s expired after %.0f seconds",
                    cache_key,
                    age,
                )
                cache_path.unlink(missing_ok=True)

        payload = compute()
        self._write_cache_entry(cache_path, payload)
        return ResponseCacheEntry(
            payload=payload,
            cache_key=cache_key,
            cache_path=cache_path,
            cache_hit=False,
            invalidated_stale_entry=invalidated_stale_entry,
        )

    def _read_cache_entry(self, path: Path) -> tuple[float, dict[str, Any]]:
        """Reads and validates one cache entry."""
        with path.open(encoding="utf-8") as handle:
            entry = json.load(handle)
        stored_at = float(entry["stored_at"])
        payload = entry["payload"]
        if not isinstance(payload, dict):
            raise ValueError("Response cache payload is not an object.")
        return stored_at, payload

    def _write_cache_entry(self, path: Path, payload: dict[str, Any]) -> None:
        """Atomically writes one cache entry to disk."""
        path.parent.mkdir(parents=True, exist_ok=True)
        # Unique per writer; parallel requests may share a key.
        tmp_path: Path = path.with_name(
            f"{path.name}.{os.getpid()}.{threading.get_ident()}.tmp"
        )
        try:
            with tmp_path.open("w", encoding="utf-8") as handle:
                json.dump({"stored_at": self._clock(), "payload": payload}, handle)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, path)
        finally:
            if tmp_path.exists():
                tmp_path.unlink(missing_ok=True)
