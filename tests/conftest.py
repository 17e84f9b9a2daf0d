"""
Pytest configuration for inspection NFT core tests

Keys, addresses and UTxOs are generated locally; no test talks to a network.
"""

import pycardano as pc
import pytest

from inspection_nft import InspectionRecord, PolicyResolver, SigningWallet


@pytest.fixture
def sample_record():
    """Inspection record used throughout the examples"""
    return InspectionRecord(
        vehicle_number="AB1234CD",
        inspection_date="2025-03-19T10:30:00Z",
        inspector_id="12345",
        mileage="10000",
        status="PASSED",
        pdf_url="https://bitcoin.org/bitcoin.pdf",
    )


@pytest.fixture
def payment_skey():
    return pc.PaymentSigningKey.generate()


@pytest.fixture
def wallet(payment_skey):
    """Enterprise-address testnet wallet"""
    return SigningWallet(payment_skey, "testnet")


@pytest.fixture
def wallet_address(wallet):
    return wallet.get_address()


@pytest.fixture
def policy(wallet_address):
    return PolicyResolver().resolve(wallet_address)


def make_utxo(address: pc.Address, coin: int, index: int = 0, tx_byte: str = "a", multi_asset=None) -> pc.UTxO:
    """UTxO at address holding coin lovelace (and optional tokens)"""
    tx_in = pc.TransactionInput(pc.TransactionId(bytes.fromhex(tx_byte * 64)), index)
    amount = pc.Value(coin, multi_asset) if multi_asset else pc.Value(coin)
    return pc.UTxO(tx_in, pc.TransactionOutput(address, amount))


@pytest.fixture
def utxo_factory(wallet_address):
    """Create UTxOs at the wallet address"""

    def factory(coin: int, index: int = 0, tx_byte: str = "a", multi_asset=None) -> pc.UTxO:
        return make_utxo(wallet_address, coin, index, tx_byte, multi_asset)

    return factory
