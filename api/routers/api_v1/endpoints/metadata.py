"""
Metadata Endpoints

Mint vehicle inspection NFTs and read back the metadata stored with a
transaction.
"""

import logging

from fastapi import APIRouter, Depends, Path

from api.dependencies.services import get_indexer_query, get_minting_pipeline, get_request_timeout
from api.schemas.inspection import (
    TX_HASH_PATTERN,
    DuplicateMintResponse,
    ErrorResponse,
    InspectionMetadataRequest,
    MintResponse,
    TransactionMetadataItem,
)
from api.utils.errors import error_response, query_error_response, timeout_response
from inspection_nft import IndexerQuery, MintingPipeline
from inspection_nft.exceptions import (
    DuplicateMintError,
    MintingError,
    PipelineTimeoutError,
    QueryError,
    ValidationError,
)
from inspection_nft.minting import run_with_timeout


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/metadata",
    response_model=MintResponse,
    summary="Submit inspection metadata and mint NFT",
    description="Derive the inspection's asset identity, then build, sign and submit a transaction minting it.",
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid fields"},
        409: {"model": DuplicateMintResponse, "description": "Inspection already minted"},
        500: {"model": ErrorResponse, "description": "Minting failed"},
        504: {"model": ErrorResponse, "description": "Minting timed out"},
    },
)
async def submit_metadata(
    request: InspectionMetadataRequest,
    pipeline: MintingPipeline = Depends(get_minting_pipeline),
):
    """
    Mint one NFT carrying the inspection record as CIP-25 metadata.

    The token name is content-addressed: the same vehicle number, inspection
    date and inspector id always map to the same asset id.
    """
    try:
        result = await pipeline.mint(request.to_record())
    except ValidationError as e:
        return error_response(400, e.message, e.detail)
    except DuplicateMintError as e:
        return error_response(409, "Inspection already minted", e.message, txHash=e.tx_hash, assetId=e.asset_id)
    except PipelineTimeoutError as e:
        return timeout_response("Minting timed out", e)
    except MintingError as e:
        logger.error(f"Failed to mint NFT for {request.vehicle_number}: {e.message}")
        return error_response(500, "Failed to mint NFT", e.detail or e.message)

    return MintResponse(**result.to_dict())


@router.get(
    "/metadata",
    include_in_schema=False,
)
async def get_transaction_metadata_without_hash():
    return error_response(400, "Transaction hash is required")


@router.get(
    "/metadata/{tx_hash}",
    response_model=list[TransactionMetadataItem],
    summary="Retrieve metadata for a transaction",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid transaction hash"},
        404: {"model": ErrorResponse, "description": "Transaction not found by the indexer"},
        500: {"model": ErrorResponse, "description": "Failed to retrieve metadata"},
    },
)
async def get_transaction_metadata(
    tx_hash: str = Path(..., description="Transaction hash (64 hex characters)", pattern=TX_HASH_PATTERN),
    query: IndexerQuery = Depends(get_indexer_query),
    timeout: float = Depends(get_request_timeout),
):
    """
    Get every metadata label attached to a transaction, in indexer order.
    """
    try:
        return await run_with_timeout(query.get_metadata_by_tx, tx_hash.lower(), timeout=timeout)
    except PipelineTimeoutError as e:
        return timeout_response("Metadata query timed out", e)
    except QueryError as e:
        return query_error_response("Failed to retrieve transaction metadata", e)
