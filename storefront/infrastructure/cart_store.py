from __future__ import annotations

import threading
import time
import zlib
from typing import Dict, Optional, Tuple

from storefront.domain.entities.cart import ShoppingCart
from storefront.logging_config import CartStats
from storefront.repositories.carts import CartStore

_NO_EXPIRY = float("inf")


class _Shard:
    """One lock-guarded slice of the key space."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.entries: Dict[str, Tuple[float, ShoppingCart]] = {}


class InMemoryCartStore(CartStore):
    """Thread-safe in-memory cart store.

    - Keys are spread over ``shards`` dictionaries, each guarded by its own
      lock, so operations on different keys rarely contend.
    - Every operation runs entirely under its shard's lock, which makes it
      atomic for that key. ``replace`` is a plain overwrite: the last call
      to finish wins.
    - With ``ttl_seconds`` set, entries expire that long after their last
      write (``time.monotonic()``); expired entries behave as absent.

    Carts are not durable; the store lives as long as the instance.
    """

    def __init__(
        self,
        *,
        shards: int = 16,
        ttl_seconds: Optional[float] = None,
        stats: Optional[CartStats] = None,
    ) -> None:
        if shards <= 0:
            raise ValueError("shards must be positive")
        if ttl_seconds is not None and ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._shards = tuple(_Shard() for _ in range(shards))
        self._ttl = float(ttl_seconds) if ttl_seconds is not None else None
        self.stats = stats if stats is not None else CartStats()

    @classmethod
    def from_settings(cls, stats: Optional[CartStats] = None) -> "InMemoryCartStore":
        from storefront.config.settings import settings

        return cls(shards=settings.cart_shards, ttl_seconds=settings.cart_ttl_seconds, stats=stats)

    def _shard(self, key: str) -> _Shard:
        # crc32 rather than hash() so the key->shard map is stable across runs
        return self._shards[zlib.crc32(key.encode("utf-8")) % len(self._shards)]

    def _expiry(self) -> float:
        return _NO_EXPIRY if self._ttl is None else time.monotonic() + self._ttl

    @staticmethod
    def _live(item: Tuple[float, ShoppingCart] | None) -> Optional[ShoppingCart]:
        if item is None:
            return None
        expiry, cart = item
        if expiry != _NO_EXPIRY and time.monotonic() >= expiry:
            return None
        return cart

    def get(self, key: str) -> Optional[ShoppingCart]:
        shard = self._shard(key)
        with shard.lock:
            cart = self._live(shard.entries.get(key))
            if cart is None:
                # Drop expired entries eagerly
                shard.entries.pop(key, None)
        if cart is None:
            self.stats.record_miss()
        else:
            self.stats.record_hit()
        return cart

    def replace(self, cart: ShoppingCart) -> ShoppingCart:
        shard = self._shard(cart.id)
        with shard.lock:
            shard.entries[cart.id] = (self._expiry(), cart)
        return cart

    def delete(self, key: str) -> bool:
        shard = self._shard(key)
        with shard.lock:
            item = shard.entries.pop(key, None)
        return self._live(item) is not None

    def __len__(self) -> int:
        total = 0
        for shard in self._shards:
            with shard.lock:
                total += sum(1 for item in shard.entries.values() if self._live(item) is not None)
        return total
