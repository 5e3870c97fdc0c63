"""Unit tests for ConnectionRegistry: one live connection per endpoint."""

import asyncio

import pytest

from xrpl_agent.core.errors import LedgerConnectionError

TESTNET = "wss://s.altnet.rippletest.net:51233/"
DEVNET = "wss://s.devnet.rippletest.net:51233/"


@pytest.mark.asyncio
async def test_acquire_twice_returns_same_instance(registry, factory):
    first = await registry.acquire(TESTNET)
    second = await registry.acquire(TESTNET)
    assert first is second
    assert len(factory.created) == 1
    assert factory.connect_calls == 1


@pytest.mark.asyncio
async def test_release_then_acquire_creates_new_instance(registry):
    first = await registry.acquire(TESTNET)
    await registry.release(TESTNET)
    second = await registry.acquire(TESTNET)
    assert second is not first
    assert not first.is_connected()
    assert second.is_connected()


@pytest.mark.asyncio
async def test_release_disconnects_and_removes(registry):
    client = await registry.acquire(TESTNET)
    await registry.release(TESTNET)
    assert client.disconnect_calls == 1
    assert TESTNET not in registry
    assert not registry.is_live(TESTNET)


@pytest.mark.asyncio
async def test_release_unknown_endpoint_is_noop(registry):
    await registry.release("wss://nowhere.example/")
    assert registry.endpoints == []


@pytest.mark.asyncio
async def test_endpoints_are_independent(registry):
    a = await registry.acquire(TESTNET)
    b = await registry.acquire(DEVNET)
    assert a is not b
    await registry.release(TESTNET)
    assert registry.is_live(DEVNET)
    assert not registry.is_live(TESTNET)


@pytest.mark.asyncio
async def test_stale_connection_is_reconnected_in_place(registry, factory):
    client = await registry.acquire(TESTNET)
    client.connected = False  # dropped by the server

    again = await registry.acquire(TESTNET)
    assert again is client
    assert client.connect_calls == 2
    assert len(factory.created) == 1


@pytest.mark.asyncio
async def test_failed_connect_raises_and_removes_entry(registry, factory):
    factory.fail_connect = True
    with pytest.raises(LedgerConnectionError, match="Could not connect"):
        await registry.acquire(TESTNET)
    assert TESTNET not in registry

    # The next caller starts from scratch
    factory.fail_connect = False
    client = await registry.acquire(TESTNET)
    assert client.is_connected()
    assert len(factory.created) == 2


@pytest.mark.asyncio
async def test_failed_connect_is_a_builtin_connection_error(registry, factory):
    factory.fail_connect = True
    with pytest.raises(ConnectionError):
        await registry.acquire(TESTNET)


@pytest.mark.asyncio
async def test_concurrent_first_acquire_creates_one_connection(registry, factory):
    clients = await asyncio.gather(*(registry.acquire(TESTNET) for _ in range(5)))
    assert all(c is clients[0] for c in clients)
    assert len(factory.created) == 1


@pytest.mark.asyncio
async def test_context_manager_closes_everything(factory):
    from xrpl_agent.core.registry import ConnectionRegistry

    async with ConnectionRegistry(factory) as registry:
        a = await registry.acquire(TESTNET)
        b = await registry.acquire(DEVNET)
    assert not a.is_connected()
    assert not b.is_connected()
    assert registry.endpoints == []


@pytest.mark.asyncio
async def test_release_after_repeated_acquire_tears_down(registry, factory):
    first = await registry.acquire(TESTNET)
    assert await registry.acquire(TESTNET) is first

    await registry.release(TESTNET)
    assert not first.is_connected()
    assert TESTNET not in registry

    second = await registry.acquire(TESTNET)
    assert second is not first
    assert len(factory.created) == 2


@pytest.mark.asyncio
async def test_lease_shares_connection_until_last_lease_ends(registry, factory):
    async with registry.lease(TESTNET) as outer:
        async with registry.lease(TESTNET) as inner:
            assert inner is outer
            assert registry.leases(TESTNET) == 2
        assert outer.is_connected()
        assert registry.leases(TESTNET) == 1
    assert not outer.is_connected()
    assert TESTNET not in registry
    assert len(factory.created) == 1


@pytest.mark.asyncio
async def test_concurrent_leases_share_one_connection(registry, factory):
    async def use():
        async with registry.lease(TESTNET) as client:
            await asyncio.sleep(0)
            return client

    clients = await asyncio.gather(*(use() for _ in range(5)))
    assert all(c is clients[0] for c in clients)
    assert len(factory.created) == 1
    assert registry.endpoints == []


@pytest.mark.asyncio
async def test_lease_keeps_acquired_connection_open(registry):
    client = await registry.acquire(TESTNET)
    async with registry.lease(TESTNET) as leased:
        assert leased is client
    assert registry.is_live(TESTNET)

    await registry.release(TESTNET)
    assert not client.is_connected()


@pytest.mark.asyncio
async def test_release_during_lease_leaves_replacement_alone(registry, factory):
    async with registry.lease(TESTNET) as old:
        await registry.release(TESTNET)
        assert not old.is_connected()
        replacement = await registry.acquire(TESTNET)
    assert replacement is not old
    assert replacement.is_connected()
    assert registry.is_live(TESTNET)


@pytest.mark.asyncio
async def test_lease_ends_when_body_raises(registry):
    with pytest.raises(RuntimeError):
        async with registry.lease(TESTNET):
            raise RuntimeError("boom")
    assert TESTNET not in registry


@pytest.mark.asyncio
async def test_release_drops_endpoint_lock(registry):
    for endpoint in (TESTNET, DEVNET):
        await registry.acquire(endpoint)
        await registry.release(endpoint)
    assert registry._locks == {}
