"""
UTxO Source

Supplies the spendable outputs and the change address for one mint.
UTxOs are fetched fresh on every call; nothing is cached between requests.
"""

from typing import List, Protocol

import pycardano as pc

from .wallet import SigningWallet


class UtxoSource(Protocol):
    """Interface consumed by the minting pipeline"""

    def utxos(self) -> List[pc.UTxO]:
        ...

    def change_address(self) -> pc.Address:
        ...


class WalletUtxoSource:
    """Lists the UTxOs sitting at the signing wallet's address"""

    def __init__(self, wallet: SigningWallet, context: pc.ChainContext):
        self.wallet = wallet
        self.context = context

    def utxos(self) -> List[pc.UTxO]:
        """Current UTxO snapshot at the wallet address, oldest reference first"""
        return sorted_utxos(self.context.utxos(self.wallet.get_address()))

    def change_address(self) -> pc.Address:
        return self.wallet.get_address()


def sorted_utxos(utxos: List[pc.UTxO]) -> List[pc.UTxO]:
    return sorted(
        utxos,
        key=lambda u: (u.input.transaction_id.payload, u.input.index),
    )


def total_lovelace(utxos: List[pc.UTxO]) -> int:
    """Sum of the ADA held by a set of UTxOs"""
    return sum(u.output.amount.coin for u in utxos)
