"""
Ledger transport: the narrow interface the submission pipeline calls through,
and its xrpl-py implementation.

Consensus, signing and the wire protocol all live in xrpl-py. This module only
adapts it to five verbs (connect, is-connected, submit, submit-blob,
disconnect) plus the read-only request and faucet calls the tools need.

Docs: https://xrpl.org/docs/references/http-websocket-apis
"""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any, Protocol, runtime_checkable

import httpx
from xrpl.asyncio.clients import AsyncJsonRpcClient, AsyncWebsocketClient
from xrpl.asyncio.transaction import XRPLReliableSubmissionException, submit_and_wait
from xrpl.constants import XRPLException
from xrpl.models.requests import GenericRequest
from xrpl.models.transactions.transaction import Transaction
from xrpl.wallet import Wallet

from xrpl_agent.core.errors import LedgerConnectionError, LedgerRequestError, SubmissionError
from xrpl_agent.core.currency import drops_to_xrp_str
from xrpl_agent.core.models import AccountKeys

logger = logging.getLogger("xrpl_agent.client")

# Public test network faucets, keyed by a fragment of the endpoint URL
FAUCET_HOSTS: dict[str, str] = {
    "altnet": "https://faucet.altnet.rippletest.net/accounts",
    "testnet": "https://faucet.altnet.rippletest.net/accounts",
    "devnet": "https://faucet.devnet.rippletest.net/accounts",
}
DEFAULT_FUND_AMOUNT_XRP = "10"


@runtime_checkable
class LedgerClient(Protocol):
    """Connection to one ledger endpoint. Finality is awaited here, not polled by callers."""

    url: str

    async def connect(self) -> None: ...

    def is_connected(self) -> bool: ...

    async def disconnect(self) -> None: ...

    async def submit_and_wait(
        self, txn: dict[str, Any], wallet: Wallet, autofill: bool = True
    ) -> dict[str, Any]: ...

    async def submit_blob_and_wait(self, tx_blob: str) -> dict[str, Any]: ...

    async def request(self, method: str, **params: Any) -> dict[str, Any]: ...

    async def fund_wallet(
        self, seed: str | None = None, amount: str | None = None
    ) -> AccountKeys: ...


def faucet_url_for(network: str) -> str | None:
    """Return the faucet URL for a test network endpoint, or None for mainnet."""
    lowered = network.lower()
    for fragment, url in FAUCET_HOSTS.items():
        if fragment in lowered:
            return url
    return None


class XrplClient:
    """
    xrpl-py backed LedgerClient.

    Uses a WebSocket connection for ``ws://`` / ``wss://`` endpoints and
    JSON-RPC for ``http://`` / ``https://`` endpoints.

    Usage:
        client = XrplClient("wss://s.altnet.rippletest.net:51233/")
        await client.connect()
        result = await client.submit_and_wait(payment_json, wallet)
        await client.disconnect()
    """

    def __init__(self, url: str, timeout: float = 30.0, poll_interval: float = 1.0) -> None:
        self.url = url
        self._timeout = timeout
        self._poll_interval = poll_interval
        self._websocket = url.startswith(("ws://", "wss://"))
        if self._websocket:
            self._client: AsyncWebsocketClient | AsyncJsonRpcClient = AsyncWebsocketClient(url)
        else:
            self._client = AsyncJsonRpcClient(url)
        self._rpc_ready = False

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    async def connect(self) -> None:
        if not self._websocket:
            self._rpc_ready = True
            return
        try:
            await self._client.open()
        except Exception as e:
            raise LedgerConnectionError(f"Could not connect to {self.url}: {e}", self.url) from e

    def is_connected(self) -> bool:
        if self._websocket:
            return self._client.is_open()
        return self._rpc_ready

    async def disconnect(self) -> None:
        if self._websocket:
            if self._client.is_open():
                await self._client.close()
        else:
            self._rpc_ready = False

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    async def submit_and_wait(
        self, txn: dict[str, Any], wallet: Wallet, autofill: bool = True
    ) -> dict[str, Any]:
        """Sign with ``wallet``, submit and wait for a validated ledger."""
        try:
            transaction = Transaction.from_xrpl(txn)
        except XRPLException as e:
            raise SubmissionError(f"Malformed {txn.get('TransactionType')} transaction: {e}") from e
        try:
            response = await submit_and_wait(
                transaction, self._client, wallet=wallet, autofill=autofill
            )
        except XRPLReliableSubmissionException as e:
            raise SubmissionError(f"Transaction failed to finalize: {e}") from e
        except XRPLException as e:
            raise SubmissionError(f"Transaction rejected: {e}") from e
        return response.result

    async def submit_blob_and_wait(self, tx_blob: str) -> dict[str, Any]:
        """Submit a pre-signed blob and wait for a validated ledger."""
        try:
            response = await submit_and_wait(tx_blob, self._client)
        except XRPLReliableSubmissionException as e:
            raise SubmissionError(f"Signed transaction failed to finalize: {e}") from e
        except XRPLException as e:
            raise SubmissionError(f"Signed transaction rejected: {e}") from e
        return response.result

    # ------------------------------------------------------------------
    # Read-only requests
    # ------------------------------------------------------------------

    async def request(self, method: str, **params: Any) -> dict[str, Any]:
        """Send any public API method, e.g. ``request("account_info", account=...)``."""
        response = await self._client.request(GenericRequest(method=method, **params))
        if not response.is_successful():
            error = response.result.get("error", "unknown")
            message = response.result.get("error_message") or error
            raise LedgerRequestError(f"{method} failed on {self.url}: {message}")
        return response.result

    # ------------------------------------------------------------------
    # Faucet
    # ------------------------------------------------------------------

    async def fund_wallet(
        self, seed: str | None = None, amount: str | None = None
    ) -> AccountKeys:
        """
        Fund a wallet from the test network faucet and wait until the ledger shows it.

        Args:
            seed: fund the wallet for this seed; a new wallet is generated if omitted
            amount: XRP to request, rounded up to a whole number (default 10)

        Returns:
            AccountKeys: address, seed and funded balance
        """
        faucet_url = faucet_url_for(self.url)
        if faucet_url is None:
            raise LedgerRequestError(f"No faucet is available for {self.url} (mainnet?)")

        wallet = Wallet.from_seed(seed) if seed else Wallet.create()
        xrp_amount = str(max(1, math.ceil(float(amount)))) if amount else DEFAULT_FUND_AMOUNT_XRP
        starting_balance = await self._get_balance_drops(wallet.address)

        logger.info(f"Funding {wallet.address} with {xrp_amount} XRP from {faucet_url}")
        async with httpx.AsyncClient(timeout=self._timeout) as http:
            response = await http.post(
                faucet_url,
                json={"destination": wallet.address, "xrpAmount": xrp_amount},
            )
        if response.status_code != 200:
            raise LedgerRequestError(
                f"Faucet request failed: {response.status_code}: {response.text}"
            )

        balance = await self._wait_for_funding(wallet.address, starting_balance)
        logger.info(f"Funded {wallet.address}: balance {drops_to_xrp_str(balance)} XRP")
        return AccountKeys(
            address=wallet.address,
            seed=wallet.seed,
            public_key=wallet.public_key,
            balance_xrp=drops_to_xrp_str(balance),
        )

    async def _get_balance_drops(self, address: str) -> int | None:
        try:
            result = await self.request("account_info", account=address, ledger_index="validated")
        except LedgerRequestError:
            return None
        return int(result["account_data"]["Balance"])

    async def _wait_for_funding(self, address: str, starting_balance: int | None) -> int:
        attempts = max(1, int(self._timeout / self._poll_interval))
        for _ in range(attempts):
            await asyncio.sleep(self._poll_interval)
            balance = await self._get_balance_drops(address)
            if balance is not None and balance != starting_balance:
                return balance
        raise LedgerRequestError(f"Faucet funding for {address} was not confirmed in time")

    def __repr__(self) -> str:
        return f"XrplClient(url={self.url!r}, connected={self.is_connected()})"
