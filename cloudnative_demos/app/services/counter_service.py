"""
Service layer for the stateless counter.

``CounterService`` returns the current counter of a session and
advances it for the next request.  The counter is never held by the
service: it is read from and written back to the injected
``SessionStore`` on every call, so every instance sharing the store
gives the same view of a session.

By default the value is read and then written, which means two
concurrent requests for the same session may both observe ``v`` and
the last write wins.  Setting ``atomic`` switches to the store's
atomic increment.
"""

import logging

from cloudnative_demos.app.core.session_store import SessionStore

logger = logging.getLogger(__name__)


class CounterService:
    """Per-session counter kept in an external session store."""

    def __init__(self, store: SessionStore, host_name: str, session_ttl: int, atomic: bool = False):
        self.store = store
        self.host_name = host_name
        self.session_ttl = session_ttl
        self.atomic = atomic

    async def next_value(self, session_id: str) -> int:
        """Return the session's counter and persist its successor.

        A session unknown to the store starts at ``0``.  Store failures
        propagate as ``SessionStoreError``.
        """
        if self.atomic:
            return await self.store.increment(session_id, self.session_ttl)

        value = await self.store.get(session_id)
        if value is None:
            logger.debug("Creating session %s", session_id)
            value = 0
        await self.store.set(session_id, value + 1, self.session_ttl)
        return value

    def describe(self, value: int) -> str:
        return f"Counter value from {self.host_name}: {value}"

    async def increment(self, session_id: str) -> str:
        """Advance the session's counter and return the response text."""
        value = await self.next_value(session_id)
        logger.debug("Session %s counter value %d", session_id, value)
        return self.describe(value)
