"""
Credentials: how a submission is authorized.

A submission carries exactly one of:
  - a seed, from which a signing keypair is derived locally
    (intended for testnet / devnet)
  - a signature, a transaction blob signed elsewhere (e.g. by a hardware
    wallet for mainnet), submitted as-is

Seeds never leave this module in logs or reprs. The agent only ever sees
addresses and transaction hashes.
"""

from __future__ import annotations

from xrpl.constants import CryptoAlgorithm
from xrpl.wallet import Wallet

from xrpl_agent.core.errors import AuthenticationError
from xrpl_agent.core.models import AccountKeys

_ALGORITHMS = {
    "ed25519": CryptoAlgorithm.ED25519,
    "secp256k1": CryptoAlgorithm.SECP256K1,
}


class Credential:
    """
    Authentication for one submission.

    Usage:
        cred = Credential.resolve(seed="sEd...", signature=None)
        wallet = cred.signing_wallet()
    """

    def __init__(self, seed: str | None = None, signature: str | None = None) -> None:
        self._seed = seed
        self.signature = signature

    @classmethod
    def resolve(cls, seed: str | None, signature: str | None) -> Credential:
        """
        Build a credential, enforcing that exactly one of seed / signature is set.

        Raises:
            AuthenticationError: if both or neither are provided
        """
        if seed and signature:
            raise AuthenticationError(
                "Provide either seed or signature for transaction authentication, not both."
            )
        if not seed and not signature:
            raise AuthenticationError(
                "Either seed or signature must be provided for transaction authentication."
            )
        return cls(seed=seed or None, signature=signature or None)

    @property
    def kind(self) -> str:
        return "seed" if self._seed else "signature"

    @property
    def has_seed(self) -> bool:
        return self._seed is not None

    def signing_wallet(self) -> Wallet:
        """Derive the signing wallet from the seed."""
        if self._seed is None:
            raise AuthenticationError("This credential holds a signature, not a seed.")
        try:
            return Wallet.from_seed(self._seed)
        except Exception as e:
            raise AuthenticationError(f"Invalid seed: {type(e).__name__}") from None

    def __repr__(self) -> str:
        return f"Credential(kind={self.kind!r})"


def generate_account(algorithm: str = "ed25519") -> AccountKeys:
    """
    Create a new keypair offline. The account is not funded and does not
    exist on any ledger until it receives enough XRP.

    Args:
        algorithm: "ed25519" (default) or "secp256k1"
    """
    try:
        algo = _ALGORITHMS[algorithm]
    except KeyError:
        raise ValueError(
            f"Unsupported algorithm '{algorithm}'. Use one of: {sorted(_ALGORITHMS)}"
        ) from None
    wallet = Wallet.create(algorithm=algo)
    return AccountKeys(address=wallet.address, seed=wallet.seed, public_key=wallet.public_key)
