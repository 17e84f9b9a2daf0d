"""
Pytest configuration for API tests

Fixtures and configuration for FastAPI endpoint testing.
The minting pipeline and the indexer are replaced through dependency
overrides, so the application lifespan (and its credential checks) never
runs here.
"""

import pytest
from fastapi.testclient import TestClient

from api.dependencies.services import get_indexer_query, get_minting_pipeline, get_request_timeout
from api.main import app
from api.tests.mocks import MockBlockfrostAPI, MockMintingPipeline
from inspection_nft import IndexerQuery


@pytest.fixture
def mock_pipeline():
    """Minting pipeline double with a configurable mint outcome"""
    return MockMintingPipeline()


@pytest.fixture
def mock_blockfrost():
    """In-memory BlockFrost API holding transaction metadata and assets"""
    return MockBlockfrostAPI()


@pytest.fixture
def request_timeout():
    return 5.0


@pytest.fixture
def client(mock_pipeline, mock_blockfrost, request_timeout):
    """Create FastAPI test client with service dependencies overridden"""
    app.dependency_overrides[get_minting_pipeline] = lambda: mock_pipeline
    app.dependency_overrides[get_indexer_query] = lambda: IndexerQuery(mock_blockfrost)
    app.dependency_overrides[get_request_timeout] = lambda: request_timeout

    # No context manager: the lifespan would build real services from settings
    test_client = TestClient(app)
    yield test_client

    app.dependency_overrides.clear()
