from fastapi import APIRouter

from api.routers.api_v1.endpoints import metadata, nft


api_router = APIRouter()

api_router.include_router(metadata.router, tags=["Metadata"])
api_router.include_router(nft.router, tags=["NFT"])
