"""
Cardano Signing Wallet

Loads the single key that pays for and authorizes inspection mints.
Key material comes either from a BIP39 mnemonic or from a cardano-cli
payment signing key file.
"""

from pathlib import Path
from typing import Optional, Union

import pycardano as pc


SigningKey = Union[pc.ExtendedSigningKey, pc.PaymentSigningKey]


class SigningWallet:
    """Wallet holding one payment signing key and its address"""

    def __init__(
        self,
        payment_skey: SigningKey,
        network: str = "testnet",
        staking_vkey_hash: Optional[pc.VerificationKeyHash] = None,
    ):
        """
        Initialize wallet from an already loaded signing key

        Args:
            payment_skey: Payment signing key
            network: Network type ("testnet" or "mainnet")
            staking_vkey_hash: Optional stake key hash for a base address
        """
        self.network = network
        self.cardano_network = pc.Network.TESTNET if network == "testnet" else pc.Network.MAINNET
        self.payment_skey = payment_skey
        self.payment_vkey_hash = payment_skey.to_verification_key().hash()

        # Minting pays from and returns change to the main address
        self.address = pc.Address(
            payment_part=self.payment_vkey_hash,
            staking_part=staking_vkey_hash,
            network=self.cardano_network,
        )

    @classmethod
    def from_mnemonic(cls, wallet_mnemonic: str, network: str = "testnet") -> "SigningWallet":
        """
        Derive the wallet from a BIP39 mnemonic (CIP-1852 account 0, index 0)

        Args:
            wallet_mnemonic: BIP39 mnemonic phrase
            network: Network type ("testnet" or "mainnet")
        """
        hdwallet = pc.crypto.bip32.HDWallet.from_mnemonic(wallet_mnemonic)
        payment_key = hdwallet.derive_from_path("m/1852'/1815'/0'/0/0")
        staking_key = hdwallet.derive_from_path("m/1852'/1815'/0'/2/0")

        payment_skey = pc.ExtendedSigningKey.from_hdwallet(payment_key)
        staking_skey = pc.ExtendedSigningKey.from_hdwallet(staking_key)

        return cls(payment_skey, network, staking_skey.to_verification_key().hash())

    @classmethod
    def from_skey_file(cls, skey_path: Union[str, Path], network: str = "testnet") -> "SigningWallet":
        """
        Load the wallet from a cardano-cli payment .skey file (enterprise address)

        Args:
            skey_path: Path to the signing key JSON envelope
            network: Network type ("testnet" or "mainnet")
        """
        payment_skey = pc.PaymentSigningKey.load(str(skey_path))
        return cls(payment_skey, network)

    def get_address(self) -> pc.Address:
        return self.address

    def get_signing_key(self) -> SigningKey:
        return self.payment_skey

    def get_payment_key_hash(self) -> str:
        """Hex payment key hash, used as the wallet identity"""
        return self.payment_vkey_hash.payload.hex()
