"""
Token issuance workflow: a four-stage state machine.

    PROVISION_ACCOUNTS -> CONFIGURE_ISSUER -> ESTABLISH_TRUST_LINES -> MINT_TOKENS -> COMPLETED

Stages run strictly in order. A failing stage raises WorkflowStageError
carrying the context accumulated before it; later stages never run and
nothing already committed to the ledger is rolled back.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable

from pydantic import ValidationError

from xrpl_agent.core.errors import TransactionBuildError, WorkflowStageError
from xrpl_agent.core.models import AccountKeys
from xrpl_agent.core.registry import ConnectionRegistry
from xrpl_agent.core.submission import SubmissionEngine
from xrpl_agent.transactions.account_set import AccountSetKind
from xrpl_agent.transactions.base import TransactionKind
from xrpl_agent.transactions.payment import PaymentKind
from xrpl_agent.transactions.trust_set import TrustSetKind
from xrpl_agent.workflows.models import TokenIssuanceInput, TxnResult, WorkflowContext

logger = logging.getLogger("xrpl_agent.workflow")


class Stage(str, Enum):
    PROVISION_ACCOUNTS = "provision-accounts"
    CONFIGURE_ISSUER = "configure-issuer"
    ESTABLISH_TRUST_LINES = "establish-trust-lines"
    MINT_TOKENS = "mint-tokens"
    COMPLETED = "completed"


STAGE_ORDER: tuple[Stage, ...] = (
    Stage.PROVISION_ACCOUNTS,
    Stage.CONFIGURE_ISSUER,
    Stage.ESTABLISH_TRUST_LINES,
    Stage.MINT_TOKENS,
    Stage.COMPLETED,
)


def next_stage(stage: Stage) -> Stage:
    """The stage that follows ``stage``. COMPLETED is terminal."""
    if stage is Stage.COMPLETED:
        raise ValueError("COMPLETED is a terminal stage")
    return STAGE_ORDER[STAGE_ORDER.index(stage) + 1]


async def _settle(*aws: Awaitable[Any]) -> list[Any]:
    """
    Await every operation, then raise the first failure. Siblings of a failed
    operation run to completion; none is cancelled.
    """
    results = await asyncio.gather(*aws, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)


class TokenIssuanceWorkflow:
    """
    Issue a token on a test network: fund an issuer and N holders, configure
    the issuer, open a trust line from every holder, then mint to each holder.

    Usage:
        async with ConnectionRegistry() as registry:
            workflow = TokenIssuanceWorkflow(registry)
            context = await workflow.run({
                "network": "wss://s.altnet.rippletest.net:51233/",
                "trustline": {"currency": "GOLD", "trustline_limit": "1000000"},
                "issuer_settings": {"domain": "example.com", "flags": ["asfDefaultRipple"]},
                "holders": 3,
                "mint_amount": "1000",
            })
    """

    def __init__(
        self,
        registry: ConnectionRegistry,
        engine: SubmissionEngine | None = None,
    ) -> None:
        self._registry = registry
        self._engine = engine or SubmissionEngine(registry)
        self._account_set = AccountSetKind()
        self._trust_set = TrustSetKind()
        self._payment = PaymentKind()
        self._handlers: dict[Stage, Callable[[WorkflowContext], Awaitable[WorkflowContext]]] = {
            Stage.PROVISION_ACCOUNTS: self._provision_accounts,
            Stage.CONFIGURE_ISSUER: self._configure_issuer,
            Stage.ESTABLISH_TRUST_LINES: self._establish_trust_lines,
            Stage.MINT_TOKENS: self._mint_tokens,
        }

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    async def transition(
        self, stage: Stage, context: WorkflowContext
    ) -> tuple[Stage, WorkflowContext]:
        """Run ``stage`` and return the next stage with the extended context."""
        handler = self._handlers.get(stage)
        if handler is None:
            raise ValueError(f"No transition out of stage '{stage.value}'")

        logger.info(f"Token issuance: starting stage {stage.value}")
        try:
            extended = await handler(context)
        except Exception as e:
            logger.error(f"Token issuance: stage {stage.value} failed: {e}")
            raise WorkflowStageError(stage, context, e) from e

        return next_stage(stage), extended.with_completed(stage.value)

    async def run(self, inputs: TokenIssuanceInput | dict[str, Any]) -> WorkflowContext:
        """Run every stage from PROVISION_ACCOUNTS to COMPLETED."""
        if not isinstance(inputs, TokenIssuanceInput):
            try:
                inputs = TokenIssuanceInput.model_validate(inputs)
            except ValidationError as e:
                raise TransactionBuildError(f"Invalid token issuance input:\n{e}") from None

        stage = Stage.PROVISION_ACCOUNTS
        context = WorkflowContext(inputs=inputs)
        while stage is not Stage.COMPLETED:
            stage, context = await self.transition(stage, context)

        logger.info(
            f"Token issuance complete on {inputs.network}: "
            f"{len(context.txn_results)} transactions"
        )
        return context

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    async def _provision_accounts(self, context: WorkflowContext) -> WorkflowContext:
        network = context.inputs.network
        count = context.inputs.holders + 1
        async with self._registry.lease(network) as client:
            accounts: list[AccountKeys] = await _settle(
                *(client.fund_wallet() for _ in range(count))
            )

        issuer, *holders = accounts
        logger.info(f"Funded issuer {issuer.address} and {len(holders)} holders")
        return context.with_accounts(issuer, holders)

    async def _configure_issuer(self, context: WorkflowContext) -> WorkflowContext:
        issuer = context.issuer
        settings = context.inputs.issuer_settings
        results: list[TxnResult] = []

        # one transaction per change; AccountSet takes a single SetFlag
        if settings.domain:
            results.append(await self._submit(
                context, self._account_set,
                {"Account": issuer.address, "Domain": settings.domain},
                issuer.seed, f"Set domain {settings.domain}",
            ))
        for name in settings.flags or []:
            results.append(await self._submit(
                context, self._account_set,
                {"Account": issuer.address, "SetFlag": name},
                issuer.seed, f"Set flag {name}",
            ))
        return context.with_results(results)

    async def _establish_trust_lines(self, context: WorkflowContext) -> WorkflowContext:
        issuer = context.issuer
        trustline = context.inputs.trustline
        results = await _settle(*(
            self._submit(
                context, self._trust_set,
                {
                    "Account": holder.address,
                    "LimitAmount": {
                        "currency": trustline.currency,
                        "value": trustline.trustline_limit,
                        "issuer": issuer.address,
                    },
                },
                holder.seed, f"Created trust line from {holder.address} to {issuer.address}",
            )
            for holder in context.holders
        ))
        return context.with_results(list(results))

    async def _mint_tokens(self, context: WorkflowContext) -> WorkflowContext:
        issuer = context.issuer
        inputs = context.inputs
        results: list[TxnResult] = []
        for holder in context.holders:
            results.append(await self._submit(
                context, self._payment,
                {
                    "Account": issuer.address,
                    "Destination": holder.address,
                    "Amount": {
                        "currency": inputs.trustline.currency,
                        "value": inputs.mint_amount,
                        "issuer": issuer.address,
                    },
                },
                issuer.seed, f"Minted tokens to {holder.address}",
            ))
        return context.with_results(results)

    async def _submit(
        self,
        context: WorkflowContext,
        kind: TransactionKind[Any],
        raw: dict[str, Any],
        seed: str,
        description: str,
    ) -> TxnResult:
        txn = kind.prepare(raw)
        result = await self._engine.submit(context.inputs.network, txn=txn.to_xrpl(), seed=seed)
        return TxnResult(
            description=description,
            hash=result.hash,
            status=result.engine_result or "N/A",
        )
