import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse


# Load environment variables from .env file
PROJECT_ROOT = Path(__file__).parent.parent
ENV_FILE = PROJECT_ROOT / ".env"
load_dotenv(ENV_FILE)

from api.config import API_DESCRIPTION, API_PREFIX, API_TITLE, API_VERSION, get_settings
from api.dependencies.services import get_minting_pipeline, init_services, reset_services
from api.routers.api_v1.api import api_router
from api.utils.errors import validation_exception_handler
from inspection_nft import MintingPipeline


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup fails when the BlockFrost key or the wallet key is not configured.
    """
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    logger.info(f"Starting {API_TITLE} v{API_VERSION} ({settings.environment})")
    init_services(settings)
    logger.info(f"API Documentation: http://127.0.0.1:{settings.api_port}/docs")

    yield  # Application runs here

    reset_services()
    logger.info("API shut down")


app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    lifespan=lifespan,
)

app.add_exception_handler(RequestValidationError, validation_exception_handler)


@app.get("/")
async def root():
    """Basic HTML response."""
    body = (
        "<html>"
        "<body style='padding: 10px;'>"
        f"<h1>Welcome to the {API_TITLE}</h1>"
        "<div>"
        "Check the docs: <a href='/docs'>here</a>"
        "</div>"
        "</body>"
        "</html>"
    )

    return HTMLResponse(content=body)


@app.get("/health")
async def health_check(pipeline: MintingPipeline = Depends(get_minting_pipeline)):
    """
    Health check endpoint.

    Returns:
        - status: "healthy" when the minting policy resolves
        - network: Configured network
        - wallet_address: Address paying for mints
        - policy_id: Policy every inspection NFT is minted under
        - api_version: API version
    """
    health_status = {
        "status": "healthy",
        "api_version": API_VERSION,
        "network": pipeline.wallet.network,
        "wallet_address": str(pipeline.wallet.get_address()),
    }

    try:
        health_status["policy_id"] = pipeline.resolve_policy_id()
        return JSONResponse(content=health_status, status_code=200)
    except Exception as e:
        health_status["status"] = "unhealthy"
        health_status["error"] = str(e)
        return JSONResponse(content=health_status, status_code=503)


app.include_router(api_router, prefix=API_PREFIX)
