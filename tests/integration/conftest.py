"""
Integration tests talk to the public XRPL testnet and its faucet.

They are skipped unless XRPL_INTEGRATION=1 is set.

Run:  XRPL_INTEGRATION=1 pytest tests/integration/ -v -m integration
"""

import os

import pytest

TESTNET = os.getenv("XRPL_NETWORK", "wss://s.altnet.rippletest.net:51233/")


def pytest_collection_modifyitems(config, items):
    if os.getenv("XRPL_INTEGRATION") == "1":
        return
    skip = pytest.mark.skip(reason="set XRPL_INTEGRATION=1 to run live network tests")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def testnet():
    return TESTNET
