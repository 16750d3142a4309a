# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""
Credential-scoped client cache.

Constructing a Bedrock runtime client requires a credential lookup against the
host platform, so clients are cached per execution scope for a fixed window.
Expired entries are skipped lazily on lookup and can be purged with sweep().

When two callers miss on the same key at the same time, both invoke their
factory and the last write wins. The factory runs outside the lock.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 300  # 5 minutes


@dataclass(frozen=True)
class CacheKey:
    """Execution-scope fingerprint for a cached client."""

    node_id: str
    node_type: str
    execution_id: str

    @classmethod
    def from_context(cls, context: Any) -> "CacheKey":
        """Derive a key from anything carrying node_id, node_type and execution_id."""
        return cls(
            node_id=context.node_id,
            node_type=context.node_type,
            execution_id=context.execution_id,
        )

    def __str__(self) -> str:
        return f"{self.node_id}_{self.node_type}_{self.execution_id}"


@dataclass(frozen=True)
class CacheEntry:
    client: Any
    timestamp: float


class ClientCache:
    """
    Time-bounded mapping from CacheKey to a constructed client handle.

    The cache never inspects the handles it stores. An entry is valid while
    ``clock() - entry.timestamp < ttl``; an entry exactly ``ttl`` old is expired.
    """

    def __init__(
        self,
        ttl: float = CACHE_TTL_SECONDS,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Args:
            ttl: Validity window in seconds
            clock: Zero-argument callable returning the current time in seconds
                (defaults to time.monotonic)
        """
        self.ttl = ttl
        self._clock = clock or time.monotonic
        self._entries: Dict[CacheKey, CacheEntry] = {}
        self._lock = threading.Lock()

    def get_or_create(self, key: CacheKey, factory: Callable[[], Any]) -> Any:
        """
        Return the cached client for key, constructing one with factory on a miss.

        Raises:
            Exception: Whatever factory raises; nothing is stored in that case.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and self._clock() - entry.timestamp < self.ttl:
                logger.debug(f"Using cached client: {key}")
                return entry.client

        client = factory()

        with self._lock:
            self._entries[key] = CacheEntry(client=client, timestamp=self._clock())
        logger.debug(f"Cached new client: {key}")
        return client

    def sweep(self) -> None:
        """Remove every entry whose age is at least the TTL."""
        with self._lock:
            now = self._clock()
            expired = [
                key
                for key, entry in self._entries.items()
                if now - entry.timestamp >= self.ttl
            ]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug(f"Removed {len(expired)} expired clients from cache")

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            return key in self._entries
