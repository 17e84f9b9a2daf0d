"""
Settings and Startup Tests

The service refuses to start without a BlockFrost key and exactly one
wallet key source.
"""

import pycardano as pc
import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from api.config import Settings
from api.enums import NetworkType


TEST_MNEMONIC = "test walk nut penalty hip pave soap entry language right filter choice"

SETTINGS_ENV_VARS = ["BLOCKFROST_API_KEY", "WALLET_MNEMONIC", "WALLET_SKEY_PATH", "NETWORK", "REQUEST_TIMEOUT_SECONDS"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer .env values out of settings validation"""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(name.lower(), raising=False)


@pytest.fixture
def skey_file(tmp_path):
    path = tmp_path / "payment.skey"
    pc.PaymentSigningKey.generate().save(str(path))
    return path


class TestSettings:
    def test_mnemonic_settings(self):
        settings = Settings(_env_file=None, blockfrost_api_key="previewKey", wallet_mnemonic=TEST_MNEMONIC)

        assert settings.network == NetworkType.TESTNET
        assert settings.request_timeout_seconds == 120.0
        assert settings.mint_output_lovelace == 1_500_000
        assert settings.min_fee_lovelace == 200_000
        assert settings.reject_duplicate_mints is True

    def test_skey_settings(self, skey_file):
        settings = Settings(_env_file=None, blockfrost_api_key="previewKey", wallet_skey_path=skey_file)
        assert settings.wallet_skey_path == skey_file

    def test_settings_from_environment(self, monkeypatch):
        monkeypatch.setenv("BLOCKFROST_API_KEY", "mainnetKey")
        monkeypatch.setenv("WALLET_MNEMONIC", TEST_MNEMONIC)
        monkeypatch.setenv("NETWORK", "mainnet")
        monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "30")

        settings = Settings(_env_file=None)

        assert settings.network == NetworkType.MAINNET
        assert settings.request_timeout_seconds == 30.0

    def test_missing_blockfrost_key(self):
        with pytest.raises(ValidationError, match="blockfrost_api_key"):
            Settings(_env_file=None, wallet_mnemonic=TEST_MNEMONIC)

    def test_empty_blockfrost_key(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, blockfrost_api_key="", wallet_mnemonic=TEST_MNEMONIC)

    def test_missing_wallet(self):
        with pytest.raises(ValidationError, match="exactly one"):
            Settings(_env_file=None, blockfrost_api_key="previewKey")

    def test_two_wallet_sources(self, skey_file):
        with pytest.raises(ValidationError, match="exactly one"):
            Settings(
                _env_file=None,
                blockfrost_api_key="previewKey",
                wallet_mnemonic=TEST_MNEMONIC,
                wallet_skey_path=skey_file,
            )

    def test_missing_skey_file(self, tmp_path):
        with pytest.raises(ValidationError, match="does not exist"):
            Settings(_env_file=None, blockfrost_api_key="previewKey", wallet_skey_path=tmp_path / "missing.skey")

    def test_unknown_network(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, blockfrost_api_key="k", wallet_mnemonic=TEST_MNEMONIC, network="preprod")

    def test_non_positive_timeout(self):
        with pytest.raises(ValidationError):
            Settings(
                _env_file=None, blockfrost_api_key="k", wallet_mnemonic=TEST_MNEMONIC, request_timeout_seconds=0
            )


def test_startup_fails_without_configuration(monkeypatch):
    """The lifespan aborts application startup when credentials are missing"""
    from api import main

    monkeypatch.setattr(main, "get_settings", lambda: Settings(_env_file=None))

    with pytest.raises(ValidationError):
        with TestClient(main.app):
            pass
