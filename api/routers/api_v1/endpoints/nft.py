"""
NFT Endpoints

Asset details and on-chain metadata for minted inspection NFTs.
"""

from fastapi import APIRouter, Depends, Path

from api.dependencies.services import get_indexer_query, get_request_timeout
from api.schemas.inspection import ASSET_ID_PATTERN, ErrorResponse
from api.utils.errors import error_response, query_error_response, timeout_response
from inspection_nft import IndexerQuery
from inspection_nft.exceptions import PipelineTimeoutError, QueryError
from inspection_nft.minting import run_with_timeout


router = APIRouter()


@router.get("/nft", include_in_schema=False)
async def get_nft_without_asset_id():
    return error_response(400, "Asset ID is required")


@router.get(
    "/nft/{asset_id}",
    summary="Get NFT details",
    description="Asset details from the indexer combined with the metadata of the minting transaction.",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid asset ID"},
        404: {"model": ErrorResponse, "description": "Asset not found by the indexer"},
        500: {"model": ErrorResponse, "description": "Failed to query asset"},
    },
)
async def get_nft(
    asset_id: str = Path(
        ...,
        description="Asset ID: concatenation of policy_id and hex-encoded asset name",
        pattern=ASSET_ID_PATTERN,
    ),
    query: IndexerQuery = Depends(get_indexer_query),
    timeout: float = Depends(get_request_timeout),
) -> dict:
    try:
        return await run_with_timeout(query.get_asset_info, asset_id.lower(), timeout=timeout)
    except PipelineTimeoutError as e:
        return timeout_response("Asset query timed out", e)
    except QueryError as e:
        return query_error_response("Failed to retrieve asset", e)
