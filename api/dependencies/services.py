"""
Service Dependencies

Builds the chain context, signing wallet, minting pipeline and indexer
queries once per process and exposes them as FastAPI dependencies.
"""

import logging
from dataclasses import dataclass

from api.config import Settings, get_settings
from inspection_nft import (
    CardanoChainContext,
    ChainSubmitter,
    IndexerQuery,
    IssuedAssetRegistry,
    MintingPipeline,
    PolicyResolver,
    SigningWallet,
    TransactionAssembler,
    WalletSigner,
    WalletUtxoSource,
)


logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Process-wide collaborators shared by all requests"""

    settings: Settings
    chain_context: CardanoChainContext
    wallet: SigningWallet
    pipeline: MintingPipeline
    query: IndexerQuery


# Global state, set by the application lifespan
_services: Services | None = None


def build_services(settings: Settings) -> Services:
    """
    Wire the minting pipeline and indexer queries from settings

    Args:
        settings: Validated settings (credentials guaranteed present)

    Returns:
        Services container
    """
    network = settings.network.value
    chain_context = CardanoChainContext(network, settings.blockfrost_api_key)

    if settings.wallet_mnemonic:
        wallet = SigningWallet.from_mnemonic(settings.wallet_mnemonic, network)
    else:
        wallet = SigningWallet.from_skey_file(settings.wallet_skey_path, network)

    context = chain_context.get_context()
    pipeline = MintingPipeline(
        wallet=wallet,
        utxo_source=WalletUtxoSource(wallet, context),
        assembler=TransactionAssembler(
            context,
            mint_output_lovelace=settings.mint_output_lovelace,
            min_fee_lovelace=settings.min_fee_lovelace,
        ),
        signer=WalletSigner(wallet.get_signing_key()),
        submitter=ChainSubmitter(context),
        policy_resolver=PolicyResolver(),
        registry=IssuedAssetRegistry() if settings.reject_duplicate_mints else None,
        request_timeout=settings.request_timeout_seconds,
        explorer_url=chain_context.get_explorer_url,
    )

    return Services(
        settings=settings,
        chain_context=chain_context,
        wallet=wallet,
        pipeline=pipeline,
        query=IndexerQuery(chain_context.get_api()),
    )


def init_services(settings: Settings) -> Services:
    global _services
    _services = build_services(settings)
    logger.info(
        f"Minting wallet {_services.wallet.address} on {settings.network.value}, "
        f"policy {_services.pipeline.resolve_policy_id()}"
    )
    return _services


def reset_services() -> None:
    global _services
    _services = None


def get_services() -> Services:
    """
    Get or initialize the shared services.

    Raises:
        pydantic.ValidationError: If required settings are missing
    """
    if _services is None:
        return init_services(get_settings())
    return _services


def get_minting_pipeline() -> MintingPipeline:
    return get_services().pipeline


def get_indexer_query() -> IndexerQuery:
    return get_services().query


def get_request_timeout() -> float:
    return get_services().settings.request_timeout_seconds
