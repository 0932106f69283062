"""Redis-based host store implementation."""

from typing import List, Optional

import redis
from redis import Redis

from ...core.exceptions import BackendError, QuotaExceededError
from .base import HostStore


class RedisHostStore(HostStore):
    """Redis-backed host store.

    Values live in the hash ``<namespace>:items``. Insertion order is kept
    in the sorted set ``<namespace>:order``, scored from the counter
    ``<namespace>:seq``, so ``key(index)`` is stable between mutations.
    """

    def __init__(
        self,
        redis_url: str,
        namespace: str = "synaptic",
        max_entries: Optional[int] = None,
        client: Optional[Redis] = None,
    ) -> None:
        self.redis_url = redis_url
        self.namespace = namespace
        self.max_entries = max_entries
        self._redis: Optional[Redis] = client

        self._items_key = f"{namespace}:items"
        self._order_key = f"{namespace}:order"
        self._seq_key = f"{namespace}:seq"

    def _client(self) -> Redis:
        if self._redis is None:
            try:
                self._redis = redis.from_url(self.redis_url, decode_responses=True)
            except (redis.RedisError, ValueError) as e:
                raise BackendError(f"Failed to connect to Redis: {e}", self.name)
            self.logger.debug("Redis host store connected", url=self.redis_url)
        return self._redis

    def close(self) -> None:
        """Close Redis connection."""
        if self._redis:
            self._redis.close()
            self._redis = None
            self.logger.debug("Redis host store closed")

    def get_item(self, key: str) -> Optional[str]:
        try:
            return self._client().hget(self._items_key, key)
        except redis.RedisError as e:
            raise BackendError(f"Failed to read '{key}' from Redis: {e}", self.name)

    def set_item(self, key: str, value: str) -> None:
        client = self._client()
        try:
            if not client.hexists(self._items_key, key):
                if self.max_entries is not None and client.hlen(self._items_key) >= self.max_entries:
                    raise QuotaExceededError(self.name, self.max_entries)
                client.zadd(self._order_key, {key: client.incr(self._seq_key)})
            client.hset(self._items_key, key, value)
        except redis.RedisError as e:
            raise BackendError(f"Failed to write '{key}' to Redis: {e}", self.name)

    def remove_item(self, key: str) -> None:
        try:
            pipe = self._client().pipeline()
            pipe.hdel(self._items_key, key)
            pipe.zrem(self._order_key, key)
            pipe.execute()
        except redis.RedisError as e:
            raise BackendError(f"Failed to remove '{key}' from Redis: {e}", self.name)

    def key(self, index: int) -> Optional[str]:
        if index < 0:
            return None

        try:
            keys = self._client().zrange(self._order_key, index, index)
        except redis.RedisError as e:
            raise BackendError(f"Failed to read key #{index} from Redis: {e}", self.name)

        return keys[0] if keys else None

    def keys(self) -> List[str]:
        try:
            return self._client().zrange(self._order_key, 0, -1)
        except redis.RedisError as e:
            raise BackendError(f"Failed to list Redis keys: {e}", self.name)

    @property
    def length(self) -> int:
        try:
            return self._client().hlen(self._items_key)
        except redis.RedisError as e:
            raise BackendError(f"Failed to count Redis entries: {e}", self.name)

    def clear(self) -> None:
        try:
            self._client().delete(self._items_key, self._order_key, self._seq_key)
        except redis.RedisError as e:
            raise BackendError(f"Failed to clear Redis store: {e}", self.name)
