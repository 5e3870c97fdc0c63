#!/usr/bin/env python3
"""
Example 08: Safety config demo.

Demonstrates how the SafetyConfig layer protects against runaway agents,
seed-signed mainnet submissions and unapproved endpoints.

Usage:
    python examples/08_safety_demo.py
"""

from xrpl_agent.tools.safety import SafetyConfig, SafetyViolation

TESTNET = "wss://s.altnet.rippletest.net:51233/"
MAINNET = "wss://xrplcluster.com/"

# Create a strict safety config
safety = SafetyConfig(
    rate_limit_per_hour=3,
    allowed_networks=[TESTNET, MAINNET],
    max_holders=5,
    dry_run=True,  # no real transactions
)

print("=== Safety Config Demo ===")
print()

# Test 1: Seed-signed testnet submission (passes)
print("[Test 1] Sign with a seed on testnet")
try:
    safety.validate_network(TESTNET, uses_seed=True)
    safety.validate_rate_limit()
    safety.record_action()
    print("  -> PASSED (testnet accepts local signing)")
except SafetyViolation as e:
    print(f"  -> BLOCKED: {e}")

# Test 2: Seed-signed mainnet submission (blocked)
print()
print("[Test 2] Sign with a seed on mainnet")
try:
    safety.validate_network(MAINNET, uses_seed=True)
    print("  -> PASSED")
except SafetyViolation as e:
    print(f"  -> BLOCKED: {e}")

# Test 3: Pre-signed blob on mainnet (passes)
print()
print("[Test 3] Submit a pre-signed blob on mainnet")
try:
    safety.validate_network(MAINNET, uses_seed=False)
    print("  -> PASSED (pre-signed blobs never expose a seed)")
except SafetyViolation as e:
    print(f"  -> BLOCKED: {e}")

# Test 4: Endpoint outside the allow list (blocked)
print()
print("[Test 4] Use an endpoint that is not allow-listed")
try:
    safety.validate_network("wss://s.devnet.rippletest.net:51233/")
    print("  -> PASSED")
except SafetyViolation as e:
    print(f"  -> BLOCKED: {e}")

# Test 5: Too many holders for one token issuance (blocked)
print()
print("[Test 5] Issue a token to 8 holders (limit = 5)")
try:
    safety.validate_holder_count(8)
    print("  -> PASSED")
except SafetyViolation as e:
    print(f"  -> BLOCKED: {e}")

# Test 6: Rate limiting
print()
print("[Test 6] Rapid-fire actions (rate limit = 3/hour)")
for i in range(3):
    try:
        safety.validate_rate_limit()
        safety.record_action()
        print(f"  Action {i+1}: PASSED")
    except SafetyViolation as e:
        print(f"  Action {i+1}: BLOCKED ({e})")

# Show final status
print()
print("=== Current Status ===")
status = safety.get_status()
for key, value in status.items():
    print(f"  {key}: {value}")
