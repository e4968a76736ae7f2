"""
External session store.

Session state is kept outside the process so that any instance of the
counter service can serve any request.  ``SessionStore`` describes the
operations the service layer needs; ``RedisSessionStore`` implements
them on top of a Redis hash per session:

    <prefix>sessions:<session id>  ->  {"counter": "<n>"}

Every write refreshes the key's TTL, so a session expires once it has
been idle for the configured timeout.  Redis failures are converted to
``SessionStoreError`` so that the API layer never depends on the
client library.
"""

import logging
from typing import Optional, Protocol

from redis import asyncio as redis_asyncio
from redis.exceptions import RedisError

from .config import Settings
from .exceptions import SessionStoreError

logger = logging.getLogger(__name__)

COUNTER_FIELD = "counter"


class SessionStore(Protocol):
    """Operations on the counter attribute of externally stored sessions."""

    async def get(self, session_id: str) -> Optional[int]:
        """Return the stored counter, or ``None`` if the session does not exist."""
        ...

    async def set(self, session_id: str, counter: int, ttl: int) -> None:
        """Store ``counter`` for the session and extend its lifetime to ``ttl`` seconds."""
        ...

    async def increment(self, session_id: str, ttl: int) -> int:
        """Atomically advance the counter and return the value it had before."""
        ...


def create_redis_client(settings: Settings) -> redis_asyncio.Redis:
    """Build an asyncio Redis client with timeouts taken from ``settings``.

    The client connects lazily, so creating it never blocks startup.
    """
    return redis_asyncio.Redis.from_url(
        settings.redis_url,
        socket_timeout=settings.redis_socket_timeout,
        socket_connect_timeout=settings.redis_connect_timeout,
        decode_responses=True,
    )


class RedisSessionStore:
    """``SessionStore`` backed by one Redis hash per session."""

    def __init__(self, client: redis_asyncio.Redis, key_prefix: str = "cloudnative:session:"):
        self.client = client
        self.key_prefix = key_prefix

    def session_key(self, session_id: str) -> str:
        return f"{self.key_prefix}sessions:{session_id}"

    async def get(self, session_id: str) -> Optional[int]:
        try:
            raw = await self.client.hget(self.session_key(session_id), COUNTER_FIELD)
        except RedisError as exc:
            raise SessionStoreError(f"Failed to read session {session_id}: {exc}", session_id) from exc
        if raw is None:
            return None
        try:
            return int(raw)
        except (TypeError, ValueError) as exc:
            raise SessionStoreError(
                f"Session {session_id} holds a non-integer counter: {raw!r}", session_id
            ) from exc

    async def set(self, session_id: str, counter: int, ttl: int) -> None:
        key = self.session_key(session_id)
        # Both commands run in one MULTI/EXEC so the counter never lands without its TTL.
        pipe = self.client.pipeline(transaction=True)
        pipe.hset(key, mapping={COUNTER_FIELD: str(counter)})
        pipe.expire(key, ttl)
        try:
            await pipe.execute()
        except RedisError as exc:
            raise SessionStoreError(f"Failed to write session {session_id}: {exc}", session_id) from exc

    async def increment(self, session_id: str, ttl: int) -> int:
        key = self.session_key(session_id)
        pipe = self.client.pipeline(transaction=True)
        pipe.hincrby(key, COUNTER_FIELD, 1)
        pipe.expire(key, ttl)
        try:
            value, _ = await pipe.execute()
        except RedisError as exc:
            raise SessionStoreError(f"Failed to increment session {session_id}: {exc}", session_id) from exc
        return int(value) - 1

    async def close(self) -> None:
        """Release the connection pool of the underlying client."""
        await self.client.aclose()
        logger.info("Session store connection closed")
