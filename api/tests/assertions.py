"""
Custom Assertions for API Testing

Provides reusable assertion functions for validating Cardano-specific data.
"""

import re


def assert_valid_transaction_hash(tx_hash: str):
    """Assert that a string is a valid transaction hash"""
    assert len(tx_hash) == 64, f"Transaction hash must be 64 characters, got {len(tx_hash)}"
    assert re.match(r"^[0-9a-f]{64}$", tx_hash), f"Invalid transaction hash format: {tx_hash}"


def assert_valid_policy_id(policy_id: str):
    """Assert that a string is a valid policy ID"""
    assert len(policy_id) == 56, f"Policy ID must be 56 characters, got {len(policy_id)}"
    assert re.match(r"^[0-9a-f]{56}$", policy_id), f"Invalid policy ID format: {policy_id}"


def assert_valid_token_name(token_name: str):
    """Assert that a string is a valid inspection token name"""
    assert re.match(r"^[0-9a-f]{32}$", token_name), f"Invalid token name format: {token_name}"


def assert_successful_response(response, expected_keys: list[str] | None = None):
    """Assert that an API response is successful and contains expected keys"""
    assert response.status_code == 200, f"Expected 200, got {response.status_code}: {response.text}"

    data = response.json()

    if expected_keys:
        for key in expected_keys:
            assert key in data, f"Missing key '{key}' in response: {data.keys()}"

    return data


def assert_error_response(response, expected_status: int, error_message_contains: str | None = None):
    """Assert that an API response is an error with expected status and message"""
    assert response.status_code == expected_status, (
        f"Expected {expected_status}, got {response.status_code}: {response.text}"
    )

    data = response.json()
    assert "error" in data, f"Error response missing 'error' field: {data}"

    if error_message_contains:
        error = data["error"].lower()
        assert error_message_contains.lower() in error, (
            f"Expected '{error_message_contains}' in error message, got: {data['error']}"
        )

    return data


def assert_valid_mint_response(data: dict):
    """Assert that a mint response has valid structure"""
    required_keys = ["txHash", "assetId", "policyId", "tokenName"]
    for key in required_keys:
        assert key in data, f"Missing key '{key}' in mint response"

    assert_valid_transaction_hash(data["txHash"])
    assert_valid_policy_id(data["policyId"])
    assert_valid_token_name(data["tokenName"])
    assert data["assetId"] == data["policyId"] + data["tokenName"].encode("utf-8").hex()
