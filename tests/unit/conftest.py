"""
Shared fixtures for unit tests.

FakeLedgerClient stands in for XrplClient: it records every call and never
touches the network. Account generation is offline (xrpl-py keypairs).
"""

import asyncio
import itertools

import pytest

from xrpl_agent.core.models import AccountKeys
from xrpl_agent.core.registry import ConnectionRegistry
from xrpl_agent.core.submission import SubmissionEngine
from xrpl_agent.core.wallet import generate_account


class FakeLedgerClient:
    """In-memory LedgerClient. Behavior is controlled through its factory."""

    def __init__(self, url, factory):
        self.url = url
        self._factory = factory
        self.connected = False
        self.connect_calls = 0
        self.disconnect_calls = 0
        self.submitted = []
        self.blobs = []
        self.requests = []
        self.funded = []

    async def connect(self):
        self.connect_calls += 1
        if self._factory.fail_connect:
            raise OSError("connection refused")
        self.connected = True

    def is_connected(self):
        return self.connected

    async def disconnect(self):
        self.disconnect_calls += 1
        self.connected = False

    async def submit_and_wait(self, txn, wallet, autofill=True):
        self.submitted.append({"txn": txn, "signer": wallet.address, "autofill": autofill})
        if self._factory.delay_for is not None:
            await asyncio.sleep(self._factory.delay_for(txn))
        return self._factory.respond(txn)

    async def submit_blob_and_wait(self, tx_blob):
        self.blobs.append(tx_blob)
        return self._factory.respond({"TransactionType": "Blob"})

    async def request(self, method, **params):
        self.requests.append((method, params))
        return self._factory.responses.get(method, {})

    async def fund_wallet(self, seed=None, amount=None):
        if self._factory.fail_funding:
            raise OSError("faucet unavailable")
        account = generate_account()
        self.funded.append(account.address)
        return AccountKeys(address=account.address, seed=account.seed, balance_xrp="10")


class FakeClientFactory:
    """
    Client factory for ConnectionRegistry that records every client it creates.

    Attributes:
        engine_result: result code returned for every submission
        fail_on: callable(txn) -> Exception | None, raised from submissions
        delay_for: callable(txn) -> seconds, awaited before a submission finalizes
        finalized: transactions that finalized successfully, in completion order
    """

    def __init__(self):
        self.created = []
        self.fail_connect = False
        self.fail_funding = False
        self.engine_result = "tesSUCCESS"
        self.fail_on = None
        self.delay_for = None
        self.finalized = []
        self.responses = {}
        self._hashes = itertools.count(1)

    def __call__(self, url):
        client = FakeLedgerClient(url, self)
        self.created.append(client)
        return client

    @property
    def connect_calls(self):
        return sum(c.connect_calls for c in self.created)

    @property
    def submissions(self):
        return [s for c in self.created for s in c.submitted]

    def respond(self, txn):
        if self.fail_on is not None:
            error = self.fail_on(txn)
            if error is not None:
                raise error
        self.finalized.append(txn)
        return {
            "hash": f"{next(self._hashes):064X}",
            "meta": {"TransactionResult": self.engine_result},
            "validated": True,
            "ledger_index": 1000,
            "tx_json": txn,
        }


@pytest.fixture
def factory():
    return FakeClientFactory()


@pytest.fixture
def registry(factory):
    return ConnectionRegistry(factory)


@pytest.fixture
def engine(registry):
    return SubmissionEngine(registry)


@pytest.fixture
def alice():
    return generate_account()


@pytest.fixture
def bob():
    return generate_account()
