"""
Unit tests for core data models and credentials.
"""

import pytest

from xrpl_agent.core.errors import AuthenticationError, SubmissionError, WorkflowStageError
from xrpl_agent.core.models import SubmissionResult
from xrpl_agent.core.wallet import Credential, generate_account


def test_submission_result_from_v1_response():
    result = SubmissionResult.from_response({
        "hash": "ABC",
        "meta": {"TransactionResult": "tesSUCCESS"},
        "validated": True,
        "ledger_index": 42,
    })
    assert result.hash == "ABC"
    assert result.succeeded
    assert result.ledger_index == 42


def test_submission_result_from_v2_response():
    result = SubmissionResult.from_response({
        "tx_json": {"hash": "DEF", "TransactionType": "Payment"},
        "meta": {"TransactionResult": "tecUNFUNDED_PAYMENT"},
        "validated": True,
    })
    assert result.hash == "DEF"
    assert result.engine_result == "tecUNFUNDED_PAYMENT"
    assert not result.succeeded


def test_submission_result_summary():
    result = SubmissionResult(hash="ABC", engine_result="tesSUCCESS", validated=True)
    assert result.to_agent_summary() == "tesSUCCESS (validated) hash=ABC"


def test_account_keys_repr_hides_seed():
    account = generate_account()
    assert account.seed not in repr(account)
    assert account.address.startswith("r")


def test_generate_account_secp256k1():
    account = generate_account("secp256k1")
    assert account.seed.startswith("s")
    assert not account.seed.startswith("sEd")


def test_generate_account_rejects_unknown_algorithm():
    with pytest.raises(ValueError, match="Unsupported algorithm"):
        generate_account("rsa")


def test_credential_requires_exactly_one():
    with pytest.raises(AuthenticationError):
        Credential.resolve(None, None)
    with pytest.raises(AuthenticationError):
        Credential.resolve("sEd...", "1200")


def test_credential_derives_wallet_from_seed():
    account = generate_account()
    credential = Credential.resolve(account.seed, None)
    assert credential.kind == "seed"
    assert credential.signing_wallet().address == account.address
    assert account.seed not in repr(credential)


def test_signature_credential_has_no_wallet():
    credential = Credential.resolve(None, "1200")
    assert credential.kind == "signature"
    with pytest.raises(AuthenticationError):
        credential.signing_wallet()


def test_error_layers():
    assert SubmissionError("x").to_dict()["layer"] == "submit"
    error = WorkflowStageError("mint-tokens", None, SubmissionError("tecPATH_DRY"))
    data = error.to_dict()
    assert data["stage"] == "mint-tokens"
    assert data["cause"]["layer"] == "submit"
