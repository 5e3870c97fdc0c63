"""
Unit tests for the Safety layer.
These run without network access (pure Python logic).
"""

import pytest

from xrpl_agent.tools.safety import SafetyConfig, SafetyViolation, is_test_network

TESTNET = "wss://s.altnet.rippletest.net:51233/"
MAINNET = "wss://xrplcluster.com/"


def test_rate_limit():
    cfg = SafetyConfig(rate_limit_per_hour=3)
    for _ in range(3):
        cfg.validate_rate_limit()
        cfg.record_action()
    with pytest.raises(SafetyViolation, match="Rate limit"):
        cfg.validate_rate_limit()


def test_network_whitelist_blocks():
    cfg = SafetyConfig(allowed_networks=[TESTNET])
    with pytest.raises(SafetyViolation, match="not in the allowed"):
        cfg.validate_network("wss://s.devnet.rippletest.net:51233/")


def test_empty_whitelist_allows_any():
    SafetyConfig().validate_network(MAINNET)  # should not raise


def test_seed_on_mainnet_refused_by_default():
    cfg = SafetyConfig()
    with pytest.raises(SafetyViolation, match="pre-signed"):
        cfg.validate_network(MAINNET, uses_seed=True)


def test_signature_on_mainnet_allowed():
    SafetyConfig().validate_network(MAINNET, uses_seed=False)


def test_seed_on_mainnet_allowed_when_opted_in():
    SafetyConfig(allow_mainnet_seed=True).validate_network(MAINNET, uses_seed=True)


def test_seed_on_testnet_allowed():
    SafetyConfig().validate_network(TESTNET, uses_seed=True)


def test_holder_count_limit():
    cfg = SafetyConfig(max_holders=5)
    cfg.validate_holder_count(5)
    with pytest.raises(SafetyViolation, match="exceeds the limit"):
        cfg.validate_holder_count(6)


def test_is_test_network():
    assert is_test_network(TESTNET)
    assert is_test_network("wss://testnet.xrpl-labs.com/")
    assert is_test_network("ws://localhost:6006")
    assert not is_test_network(MAINNET)


def test_get_status_returns_correct_structure():
    cfg = SafetyConfig(rate_limit_per_hour=10)
    cfg.record_action()
    cfg.record_action()
    status = cfg.get_status()
    assert status["actions_last_hour"] == 2
    assert status["actions_remaining_this_hour"] == 8
    assert status["dry_run"] is False


def test_dry_run_field():
    cfg = SafetyConfig(dry_run=True)
    assert cfg.get_status()["dry_run"] is True


def test_safety_violation_layer():
    assert SafetyViolation("x").to_dict()["layer"] == "safety"
