"""
Transaction pipeline: build -> validate -> submit, shared by every
ledger-mutating tool.

Each transaction kind is a TransactionKind subclass that declares its input
model and implements ``build`` (normalize raw input into a submittable
transaction) and optionally ``validate`` (reject bad field values). Build and
validate are pure: they never touch the network.

A TransactionTool wraps one kind with the authentication envelope
``{network, seed?, signature?, txn}`` and hands the result to the
SubmissionEngine.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, Field, ValidationError

from xrpl_agent.core.errors import (
    AuthenticationError,
    TransactionBuildError,
    TransactionValidationError,
)
from xrpl_agent.core.models import SubmissionResult
from xrpl_agent.core.submission import SubmissionEngine

InputT = TypeVar("InputT", bound=BaseModel)


@dataclass(frozen=True)
class TransactionDescriptor:
    """
    A built transaction, tagged by kind. Immutable: accessors return copies.

    Usage:
        txn = TransactionDescriptor.create("Payment", {"Account": "r...", ...})
        txn["Destination"]
        txn.to_xrpl()  # dict ready for submission
    """

    transaction_type: str
    _values: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def create(cls, transaction_type: str, values: dict[str, Any]) -> TransactionDescriptor:
        cleaned = {
            k: copy.deepcopy(v)
            for k, v in values.items()
            if v is not None and k != "TransactionType"
        }
        return cls(transaction_type=transaction_type, _values=cleaned)

    def get(self, key: str, default: Any = None) -> Any:
        return copy.deepcopy(self._values.get(key, default))

    def __getitem__(self, key: str) -> Any:
        return copy.deepcopy(self._values[key])

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def to_xrpl(self) -> dict[str, Any]:
        """Return the transaction JSON for submission."""
        return {"TransactionType": self.transaction_type, **copy.deepcopy(self._values)}


class TransactionKind(Generic[InputT]):
    """
    Base class for one transaction kind.

    Subclasses set the class attributes and override ``build`` and/or
    ``validate``. The default build dumps the parsed input unchanged.
    """

    transaction_type: ClassVar[str]
    tool_id: ClassVar[str]
    description: ClassVar[str]
    input_model: ClassVar[type[BaseModel]]

    def parse(self, raw: dict[str, Any] | BaseModel) -> InputT:
        """Parse raw tool input with the kind's input model."""
        if isinstance(raw, self.input_model):
            return raw  # type: ignore[return-value]
        if isinstance(raw, BaseModel):
            raw = raw.model_dump(exclude_none=True)
        try:
            return self.input_model.model_validate(raw)  # type: ignore[return-value]
        except ValidationError as e:
            raise TransactionBuildError(
                f"Invalid {self.transaction_type} input: {e.error_count()} error(s)\n{e}"
            ) from None

    def build(self, params: InputT) -> TransactionDescriptor:
        return self.descriptor(params.model_dump(exclude_none=True))

    def validate(self, txn: TransactionDescriptor) -> None:
        """Raise TransactionValidationError if the built transaction is invalid."""
        return None

    def descriptor(self, values: dict[str, Any]) -> TransactionDescriptor:
        return TransactionDescriptor.create(self.transaction_type, values)

    def prepare(self, raw: dict[str, Any] | BaseModel) -> TransactionDescriptor:
        """Parse, build and validate. No network access."""
        params = self.parse(raw)
        try:
            txn = self.build(params)
        except TransactionBuildError:
            raise
        except (ValueError, TypeError, KeyError) as e:
            raise TransactionBuildError(f"Could not build {self.transaction_type}: {e}") from e
        self.validate(txn)
        return txn

    def _reject(self, message: str) -> None:
        raise TransactionValidationError(f"{self.transaction_type}: {message}")


class TransactionToolInput(BaseModel):
    """Authentication envelope shared by every transaction tool."""

    network: str = Field(
        ...,
        description='Network to submit the transaction to, e.g. "wss://s.altnet.rippletest.net:51233/"',
    )
    seed: str | None = Field(
        None, description="Seed for the account on testnet or devnet, never mainnet"
    )
    signature: str | None = Field(
        None,
        description=(
            "Signed transaction blob, typically provided for mainnet but also usable "
            "on testnet or devnet"
        ),
    )
    txn: dict[str, Any] | None = Field(
        None, description="Transaction fields. Required when signing with a seed."
    )


class TransactionTool:
    """
    A callable tool for one transaction kind: ``{id, description, input_schema, execute}``.

    Usage:
        tool = TransactionTool(PaymentKind(), engine)
        result = await tool.execute({"network": ..., "seed": ..., "txn": {...}})
    """

    def __init__(self, kind: TransactionKind[Any], engine: SubmissionEngine) -> None:
        self.kind = kind
        self._engine = engine

    @property
    def id(self) -> str:
        return self.kind.tool_id

    @property
    def description(self) -> str:
        return self.kind.description

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON schema of the tool input, with the kind's fields under ``txn``."""
        envelope = TransactionToolInput.model_json_schema()
        txn_schema = self.kind.input_model.model_json_schema()
        defs = txn_schema.pop("$defs", {})
        properties = dict(envelope["properties"])
        properties["txn"] = {**txn_schema, "description": f"{self.kind.transaction_type} fields"}
        schema: dict[str, Any] = {
            "type": "object",
            "properties": properties,
            "required": ["network"],
        }
        if defs:
            schema["$defs"] = defs
        return schema

    def parse_input(self, payload: dict[str, Any] | TransactionToolInput) -> TransactionToolInput:
        if isinstance(payload, TransactionToolInput):
            return payload
        try:
            return TransactionToolInput.model_validate(payload)
        except ValidationError as e:
            raise TransactionBuildError(f"Invalid tool input for {self.id}:\n{e}") from None

    def prepare(
        self, payload: dict[str, Any] | TransactionToolInput
    ) -> tuple[TransactionToolInput, TransactionDescriptor | None]:
        """
        Check authentication, then build and validate the transaction.

        Returns the parsed envelope and the built descriptor, or None for a
        pre-signed blob (which is opaque and never rebuilt).
        """
        envelope = self.parse_input(payload)
        if not envelope.seed and not envelope.signature:
            raise AuthenticationError(
                "Either seed or signature must be provided for transaction authentication."
            )
        if envelope.seed and envelope.signature:
            raise AuthenticationError(
                "Provide either seed or signature for transaction authentication, not both."
            )
        if envelope.signature:
            return envelope, None
        if envelope.txn is None:
            raise TransactionBuildError(f"{self.id}: 'txn' is required when signing with a seed.")
        return envelope, self.kind.prepare(envelope.txn)

    async def execute(self, payload: dict[str, Any] | TransactionToolInput) -> SubmissionResult:
        envelope, txn = self.prepare(payload)
        if txn is None:
            return await self._engine.submit(envelope.network, signature=envelope.signature)
        return await self._engine.submit(envelope.network, txn=txn.to_xrpl(), seed=envelope.seed)

    def __repr__(self) -> str:
        return f"TransactionTool(id={self.id!r})"


def create_transaction_tool(kind: TransactionKind[Any], engine: SubmissionEngine) -> TransactionTool:
    """Factory: specialize the shared pipeline for one transaction kind."""
    return TransactionTool(kind, engine)
