"""Shared fixtures for the demo service tests."""

import socket
from typing import Dict, List, Optional, Set, Tuple

import pytest
from fastapi.testclient import TestClient
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from cloudnative_demos.app.core.config import Settings
from cloudnative_demos.app.core.session_store import RedisSessionStore
from cloudnative_demos.app.main import create_counter_app

TEST_HOST = "node-1.cluster.local"


class FakePipeline:
    """Queues commands and applies them all or none on ``execute``."""

    def __init__(self, redis: "FakeRedis"):
        self.redis = redis
        self.commands: List[Tuple[str, tuple, dict]] = []

    def __getattr__(self, name: str):
        def queue(*args, **kwargs):
            self.commands.append((name, args, kwargs))
            return self

        return queue

    async def execute(self) -> list:
        commands, self.commands = self.commands, []
        self.redis._check(*(name for name, _, _ in commands))
        return [getattr(self.redis, f"_{name}")(*args, **kwargs) for name, args, kwargs in commands]


class FakeRedis:
    """In-memory stand-in for the hash commands used by the session store."""

    def __init__(self):
        self._hashes: Dict[str, Dict[str, str]] = {}
        self.ttls: Dict[str, int] = {}
        self.fail = False
        # Commands that raise even when the connection is up.
        self.failing_commands: Set[str] = set()
        self.closed = False

    def _check(self, *commands: str):
        if self.fail:
            raise RedisConnectionError("Connection refused")
        for command in commands:
            if command in self.failing_commands:
                raise RedisTimeoutError(f"Timeout running {command.upper()}")

    def _hset(self, key: str, mapping: Dict[str, str]) -> int:
        fields = self._hashes.setdefault(key, {})
        added = sum(1 for k in mapping if k not in fields)
        fields.update({k: str(v) for k, v in mapping.items()})
        return added

    def _hincrby(self, key: str, field: str, increment: int) -> int:
        fields = self._hashes.setdefault(key, {})
        value = int(fields.get(field, 0)) + increment
        fields[field] = str(value)
        return value

    def _expire(self, key: str, seconds: int) -> bool:
        self.ttls[key] = seconds
        return key in self._hashes

    async def hget(self, key: str, field: str) -> Optional[str]:
        self._check("hget")
        return self._hashes.get(key, {}).get(field)

    async def hset(self, key: str, mapping: Dict[str, str]) -> int:
        self._check("hset")
        return self._hset(key, mapping)

    async def hincrby(self, key: str, field: str, increment: int) -> int:
        self._check("hincrby")
        return self._hincrby(key, field, increment)

    async def expire(self, key: str, seconds: int) -> bool:
        self._check("expire")
        return self._expire(key, seconds)

    def pipeline(self, transaction: bool = True) -> FakePipeline:
        return FakePipeline(self)

    async def aclose(self) -> None:
        self.closed = True

    def hash(self, key: str) -> Dict[str, str]:
        return dict(self._hashes.get(key, {}))


@pytest.fixture
def settings() -> Settings:
    return Settings(redis_key_prefix="test:", session_timeout_seconds=60, log_level="DEBUG")


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def store(fake_redis, settings) -> RedisSessionStore:
    return RedisSessionStore(fake_redis, settings.redis_key_prefix)


@pytest.fixture
def local_host(monkeypatch):
    """Make the local host resolve to ``TEST_HOST`` without touching DNS."""
    monkeypatch.setattr(socket, "gethostname", lambda: "node-1")
    monkeypatch.setattr(socket, "gethostbyname", lambda name: "10.0.0.5")
    monkeypatch.setattr(socket, "gethostbyaddr", lambda address: (TEST_HOST, [], [address]))
    return TEST_HOST


@pytest.fixture
def counter_app(settings, store, local_host):
    return create_counter_app(settings, store=store)


@pytest.fixture
def client(counter_app):
    with TestClient(counter_app) as test_client:
        yield test_client
