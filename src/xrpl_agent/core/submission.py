"""
SubmissionEngine: drives one transaction through submit-and-await-finality.

The connection lease always ends before the result or error is returned,
whether the submission succeeded, was rejected or raised.
"""

from __future__ import annotations

import logging
from typing import Any

from xrpl_agent.core.errors import AuthenticationError, SubmissionError, XrplAgentError
from xrpl_agent.core.models import SubmissionResult
from xrpl_agent.core.registry import ConnectionRegistry
from xrpl_agent.core.wallet import Credential

logger = logging.getLogger("xrpl_agent.submission")


class SubmissionEngine:
    """
    Submit a transaction with a seed, or a pre-signed blob.

    Usage:
        engine = SubmissionEngine(registry)
        result = await engine.submit(network, txn={...}, seed="sEd...")
        result = await engine.submit(network, signature="1200...")
    """

    def __init__(self, registry: ConnectionRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> ConnectionRegistry:
        return self._registry

    async def submit(
        self,
        network: str,
        txn: dict[str, Any] | None = None,
        seed: str | None = None,
        signature: str | None = None,
    ) -> SubmissionResult:
        """
        Submit and wait for the transaction to reach a validated ledger.

        Args:
            network: endpoint to submit to
            txn: transaction JSON, required with ``seed``
            seed: signs ``txn`` locally; Sequence, Fee and LastLedgerSequence
                are autofilled by the server
            signature: pre-signed transaction blob, submitted unchanged

        Returns:
            SubmissionResult: hash, engine result and raw response

        Raises:
            AuthenticationError: neither (seed and txn) nor signature, or both
                seed and signature. Raised before any connection is acquired.
            SubmissionError: the ledger rejected the transaction or it did not
                finalize with a tes* result. The connection is already released.
        """
        if seed and signature:
            raise AuthenticationError(
                "Provide either seed or signature for transaction authentication, not both."
            )
        if not (seed and txn is not None) and not signature:
            raise AuthenticationError("No transaction or signature provided to submit.")

        credential = Credential.resolve(seed, signature)
        wallet = credential.signing_wallet() if credential.has_seed else None

        try:
            async with self._registry.lease(network) as client:
                if wallet is not None:
                    logger.info(
                        f"Submitting {txn.get('TransactionType')} from {wallet.address} to {network}"
                    )
                    raw = await client.submit_and_wait(txn, wallet, autofill=True)
                else:
                    logger.info(f"Submitting pre-signed transaction to {network}")
                    raw = await client.submit_blob_and_wait(signature)
        except XrplAgentError:
            raise
        except Exception as e:
            raise SubmissionError(f"Submission to {network} failed: {e}") from e

        result = SubmissionResult.from_response(raw)
        if result.engine_result is not None and not result.engine_result.startswith("tes"):
            raise SubmissionError(
                f"Transaction {result.hash} finished with {result.engine_result}", result
            )
        logger.info(f"Transaction {result.hash} finalized: {result.engine_result}")
        return result
