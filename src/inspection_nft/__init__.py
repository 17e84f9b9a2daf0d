"""
Inspection NFT Core Library

Deterministic identities, minting transactions and indexer queries for
vehicle inspection NFTs on Cardano, separated from the HTTP interface.
"""

from .chain_context import CardanoChainContext
from .identity import derive_identity, derive_token_name
from .minting import IssuedAssetRegistry, MintingPipeline
from .policy import PolicyResolver
from .query import IndexerQuery
from .transactions import ChainSubmitter, TransactionAssembler, WalletSigner
from .types import AssetIdentity, InspectionRecord, MintResult
from .utxo_source import WalletUtxoSource
from .wallet import SigningWallet


__all__ = [
    "AssetIdentity",
    "CardanoChainContext",
    "ChainSubmitter",
    "IndexerQuery",
    "InspectionRecord",
    "IssuedAssetRegistry",
    "MintResult",
    "MintingPipeline",
    "PolicyResolver",
    "SigningWallet",
    "TransactionAssembler",
    "WalletSigner",
    "WalletUtxoSource",
    "derive_identity",
    "derive_token_name",
]
