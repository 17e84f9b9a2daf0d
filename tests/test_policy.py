"""
Tests for minting policy resolution
"""

import pycardano as pc
import pytest

from inspection_nft.exceptions import IdentityError
from inspection_nft.policy import PolicyResolver, parse_address


class TestPolicyResolver:
    """Single-signature policy derived from the wallet address"""

    def test_policy_id_is_script_hash(self, wallet, wallet_address):
        policy = PolicyResolver().resolve(wallet_address)
        expected_script = pc.ScriptPubkey(wallet.payment_vkey_hash)
        assert policy.script == expected_script
        assert policy.policy_id == expected_script.hash().payload.hex()
        assert policy.key_hash == wallet.payment_vkey_hash
        assert len(policy.policy_id) == 56

    def test_resolution_is_idempotent(self, wallet_address):
        resolver = PolicyResolver()
        assert resolver.resolve(wallet_address).policy_id == resolver.resolve(wallet_address).policy_id

    def test_fresh_resolvers_agree(self, wallet_address):
        assert PolicyResolver().resolve(wallet_address) == PolicyResolver().resolve(wallet_address)

    def test_bech32_string_and_address_agree(self, wallet_address):
        resolver = PolicyResolver()
        assert resolver.resolve(str(wallet_address)).policy_id == resolver.resolve(wallet_address).policy_id

    def test_staking_part_does_not_change_policy(self, wallet):
        stake_hash = pc.PaymentSigningKey.generate().to_verification_key().hash()
        base_address = pc.Address(wallet.payment_vkey_hash, stake_hash, network=pc.Network.TESTNET)
        resolver = PolicyResolver()
        assert resolver.resolve(base_address).policy_id == resolver.resolve(wallet.get_address()).policy_id

    def test_different_keys_different_policies(self, wallet_address):
        other_hash = pc.PaymentSigningKey.generate().to_verification_key().hash()
        other_address = pc.Address(other_hash, network=pc.Network.TESTNET)
        resolver = PolicyResolver()
        assert resolver.resolve(other_address).policy_id != resolver.resolve(wallet_address).policy_id

    def test_script_address_rejected(self):
        script_address = pc.Address(pc.ScriptHash(bytes(28)), network=pc.Network.TESTNET)
        with pytest.raises(IdentityError):
            PolicyResolver().resolve(script_address)

    def test_unparseable_address_rejected(self):
        with pytest.raises(IdentityError, match="Invalid address"):
            PolicyResolver().resolve("not_an_address")


def test_parse_address_passthrough(wallet_address):
    assert parse_address(wallet_address) is wallet_address
