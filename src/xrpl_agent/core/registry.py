"""
ConnectionRegistry: one reusable ledger connection per network endpoint.

The registry is an explicit object, constructed once and handed to the
submission engine, toolkit and workflows, so tests can inject fake clients.

``acquire`` returns the endpoint's connection and ``release`` disconnects it
and drops it from the registry. Internal callers use ``lease`` instead: a
scoped hold on the connection that is counted, so concurrent submissions to
the same endpoint share one connection and the last lease to end tears it
down. A connection taken with ``acquire`` stays open after its leases end,
until ``release``.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

from xrpl_agent.core.client import LedgerClient, XrplClient
from xrpl_agent.core.errors import LedgerConnectionError

logger = logging.getLogger("xrpl_agent.registry")

ClientFactory = Callable[[str], LedgerClient]


class ConnectionRegistry:
    """
    Maps a network endpoint to a single live LedgerClient.

    Usage:
        registry = ConnectionRegistry()
        client = await registry.acquire("wss://s.altnet.rippletest.net:51233/")
        await client.request("server_info")
        await registry.release("wss://s.altnet.rippletest.net:51233/")

        async with registry.lease("wss://s.altnet.rippletest.net:51233/") as client:
            await client.request("fee")
    """

    def __init__(self, client_factory: ClientFactory | None = None) -> None:
        self._factory: ClientFactory = client_factory or XrplClient
        self._connections: dict[str, LedgerClient] = {}
        self._leases: dict[str, int] = {}
        # Endpoints taken with acquire(); they outlive their leases
        self._held: set[str] = set()
        # Single-flight guard: one create/connect in progress per endpoint
        self._locks: dict[str, asyncio.Lock] = {}
        self._waiting: dict[str, int] = {}

    async def acquire(self, network: str) -> LedgerClient:
        """
        Return the connection for ``network``, connecting it if needed.
        Repeated calls return the same object until ``release``.

        Raises:
            LedgerConnectionError: if connecting fails. The endpoint is removed
                from the registry, never left half-open.
        """
        client = await self._checkout(network)
        self._held.add(network)
        return client

    async def release(self, network: str) -> None:
        """
        Disconnect the connection for ``network`` and remove it, whatever
        leases are outstanding. No-op if nothing is cached.
        """
        client = self._connections.pop(network, None)
        self._leases.pop(network, None)
        self._held.discard(network)
        if not self._waiting.get(network):
            self._locks.pop(network, None)
        if client is None:
            return
        await client.disconnect()
        logger.info(f"Disconnected from XRP Ledger at {network}")

    @asynccontextmanager
    async def lease(self, network: str) -> AsyncIterator[LedgerClient]:
        """
        Hold the connection for ``network`` for the duration of the block.

        The connection is released when the last lease ends, unless it was
        taken with ``acquire``. A lease on a connection that was released
        meanwhile ends without touching its replacement.
        """
        client = await self._checkout(network)
        self._leases[network] = self._leases.get(network, 0) + 1
        try:
            yield client
        finally:
            await self._return_lease(network, client)

    async def close_all(self) -> None:
        """Disconnect every cached endpoint."""
        for network in list(self._connections):
            await self.release(network)

    def is_live(self, network: str) -> bool:
        """True if a connected client is cached for ``network``."""
        client = self._connections.get(network)
        return client is not None and client.is_connected()

    def leases(self, network: str) -> int:
        return self._leases.get(network, 0)

    @property
    def endpoints(self) -> list[str]:
        return list(self._connections)

    def __contains__(self, network: object) -> bool:
        return network in self._connections

    async def _checkout(self, network: str) -> LedgerClient:
        self._waiting[network] = self._waiting.get(network, 0) + 1
        try:
            lock = self._locks.setdefault(network, asyncio.Lock())
            async with lock:
                return await self._connect(network)
        finally:
            self._waiting[network] -= 1
            if not self._waiting[network]:
                del self._waiting[network]

    async def _connect(self, network: str) -> LedgerClient:
        client = self._connections.get(network)
        if client is None:
            client = self._factory(network)
            self._connections[network] = client
            logger.info(f"Connecting to XRP Ledger at {network}")
        elif client.is_connected():
            return client
        else:
            logger.info(f"Reconnecting to XRP Ledger at {network}")

        try:
            await client.connect()
        except Exception as e:
            self._drop(network, client)
            if isinstance(e, LedgerConnectionError):
                raise
            raise LedgerConnectionError(
                f"Could not connect to {network}: {e}", network
            ) from e

        logger.info(f"Connected to XRP Ledger at {network}")
        return client

    async def _return_lease(self, network: str, client: LedgerClient) -> None:
        if self._connections.get(network) is not client:
            return
        remaining = self._leases.get(network, 0) - 1
        if remaining > 0:
            self._leases[network] = remaining
            return
        self._leases.pop(network, None)
        if network not in self._held:
            await self.release(network)

    def _drop(self, network: str, client: LedgerClient) -> None:
        if self._connections.get(network) is client:
            del self._connections[network]
            self._leases.pop(network, None)
            self._held.discard(network)

    async def __aenter__(self) -> ConnectionRegistry:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.close_all()
