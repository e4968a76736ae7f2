import pytest

from cloudnative_demos.app.core.exceptions import SessionStoreError
from cloudnative_demos.app.services.counter_service import CounterService


@pytest.mark.asyncio
async def test_next_value_reads_then_writes(store, fake_redis):
    service = CounterService(store, "host-a", session_ttl=30)

    assert await service.next_value("s1") == 0
    assert await service.next_value("s1") == 1
    assert fake_redis.hash("test:sessions:s1") == {"counter": "2"}
    assert fake_redis.ttls["test:sessions:s1"] == 30


@pytest.mark.asyncio
async def test_increment_formats_response(store):
    service = CounterService(store, "host-a", session_ttl=30)

    assert await service.increment("s1") == "Counter value from host-a: 0"
    assert await service.increment("s1") == "Counter value from host-a: 1"


@pytest.mark.asyncio
async def test_atomic_mode_uses_store_increment(store, fake_redis):
    service = CounterService(store, "host-a", session_ttl=30, atomic=True)

    assert [await service.next_value("s1") for _ in range(3)] == [0, 1, 2]
    assert fake_redis.hash("test:sessions:s1") == {"counter": "3"}


@pytest.mark.asyncio
async def test_service_keeps_no_counter_state(store, fake_redis):
    service = CounterService(store, "host-a", session_ttl=30)
    await service.next_value("s1")
    before = dict(vars(service))

    await service.next_value("s1")

    assert vars(service) == before


@pytest.mark.asyncio
async def test_store_failure_propagates(store, fake_redis):
    service = CounterService(store, "host-a", session_ttl=30)
    fake_redis.fail = True

    with pytest.raises(SessionStoreError):
        await service.next_value("s1")
