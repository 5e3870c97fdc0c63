"""
Safety layer for AI agent actions on the XRP Ledger.

Protects against runaway agents, misconfigured bots, and seeds leaking onto
mainnet. All state-changing XrplToolkit actions pass through SafetyConfig
validation before execution.
"""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass, field

from xrpl_agent.core.errors import XrplAgentError

# Endpoints containing any of these are test networks
TEST_NETWORK_HINTS = ("altnet", "testnet", "devnet", "localhost", "127.0.0.1")


def is_test_network(network: str) -> bool:
    lowered = network.lower()
    return any(hint in lowered for hint in TEST_NETWORK_HINTS)


class SafetyViolation(XrplAgentError):
    """Raised when an agent action violates the configured safety rules."""

    layer = "safety"


@dataclass
class SafetyConfig:
    """
    Configuration for agent rate limits and operational boundaries.

    Args:
        rate_limit_per_hour:  Max number of state-changing actions per hour
        dry_run:              If True, build and validate transactions but never submit them
        allowed_networks:     Endpoints the agent may use. Empty allows any endpoint.
        allow_mainnet_seed:   If False, seed-signed submissions to mainnet are refused;
                              mainnet accepts pre-signed blobs only
        max_holders:          Upper bound on holder accounts in one token issuance run
    """
    rate_limit_per_hour: int = 20
    dry_run: bool = False
    allowed_networks: list[str] = field(default_factory=list)
    allow_mainnet_seed: bool = False
    max_holders: int = 10

    # Internal tracking (not user-facing)
    _action_timestamps: deque = field(default_factory=deque, repr=False)

    def validate_rate_limit(self) -> None:
        """Check that the agent hasn't exceeded the hourly action rate."""
        cutoff = time.time() - 3600  # 1 hour ago

        while self._action_timestamps and self._action_timestamps[0] < cutoff:
            self._action_timestamps.popleft()

        if len(self._action_timestamps) >= self.rate_limit_per_hour:
            raise SafetyViolation(
                f"Rate limit exceeded: {self.rate_limit_per_hour} actions/hour."
            )

    def validate_network(self, network: str, uses_seed: bool = False) -> None:
        """
        Validate the target endpoint. Raises SafetyViolation if it is not allowed.

        Args:
            network: endpoint URL
            uses_seed: True when the action signs locally with a seed
        """
        if self.allowed_networks and network not in self.allowed_networks:
            raise SafetyViolation(
                f"Network '{network}' is not in the allowed networks list: {self.allowed_networks}"
            )
        if uses_seed and not self.allow_mainnet_seed and not is_test_network(network):
            raise SafetyViolation(
                f"Refusing to sign with a seed on '{network}'. Mainnet submissions must "
                "use a pre-signed signature."
            )

    def validate_holder_count(self, holders: int) -> None:
        if holders > self.max_holders:
            raise SafetyViolation(
                f"Requested {holders} holders exceeds the limit of {self.max_holders}."
            )

    def record_action(self) -> None:
        """Record a completed action for rate limiting."""
        self._action_timestamps.append(time.time())

    def get_status(self) -> dict[str, int | bool | list[str]]:
        """Return current safety status for agent awareness."""
        return {
            "actions_last_hour": len(self._action_timestamps),
            "actions_remaining_this_hour": max(0, self.rate_limit_per_hour - len(self._action_timestamps)),
            "dry_run": self.dry_run,
            "allow_mainnet_seed": self.allow_mainnet_seed,
            "allowed_networks": list(self.allowed_networks),
            "max_holders": self.max_holders,
        }
