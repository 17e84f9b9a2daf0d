"""
Tests for indexer metadata and asset queries
"""

from unittest.mock import MagicMock

import pytest
from blockfrost import ApiError

from inspection_nft.exceptions import QueryError
from inspection_nft.query import IndexerQuery


TX_HASH = "d" * 64
ASSET_ID = "e" * 56 + "ab" * 32


def api_error(status_code: int, message: str = "The requested component has not been found.") -> ApiError:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = {"status_code": status_code, "error": "Not Found", "message": message}
    return ApiError(response)


@pytest.fixture
def api():
    return MagicMock()


class TestMetadataByTx:
    def test_returns_labels_in_order(self, api):
        api.transaction_metadata.return_value = [
            {"label": "721", "json_metadata": {"version": "1.0"}},
            {"label": "674", "json_metadata": {"msg": ["hello"]}},
        ]

        result = IndexerQuery(api).get_metadata_by_tx(TX_HASH)

        assert [item["label"] for item in result] == ["721", "674"]
        assert result[0]["json_metadata"] == {"version": "1.0"}
        api.transaction_metadata.assert_called_once_with(TX_HASH, return_type="json")

    def test_no_metadata(self, api):
        api.transaction_metadata.return_value = []
        assert IndexerQuery(api).get_metadata_by_tx(TX_HASH) == []

    def test_upstream_status_preserved(self, api):
        api.transaction_metadata.side_effect = api_error(404)

        with pytest.raises(QueryError) as exc_info:
            IndexerQuery(api).get_metadata_by_tx(TX_HASH)

        assert exc_info.value.status_code == 404
        assert "not been found" in exc_info.value.detail

    def test_transport_failure_has_no_status(self, api):
        api.transaction_metadata.side_effect = ConnectionError("connection refused")

        with pytest.raises(QueryError) as exc_info:
            IndexerQuery(api).get_metadata_by_tx(TX_HASH)

        assert exc_info.value.status_code is None


class TestAssetInfo:
    def test_asset_with_mint_metadata(self, api):
        api.asset.return_value = {
            "asset": ASSET_ID,
            "policy_id": "e" * 56,
            "quantity": "1",
            "initial_mint_tx_hash": TX_HASH,
        }
        api.transaction_metadata.return_value = [{"label": "721", "json_metadata": {"version": "1.0"}}]

        result = IndexerQuery(api).get_asset_info(ASSET_ID)

        assert result["asset"] == ASSET_ID
        assert result["quantity"] == "1"
        assert result["mint_tx_metadata"] == [{"label": "721", "json_metadata": {"version": "1.0"}}]
        api.transaction_metadata.assert_called_once_with(TX_HASH, return_type="json")

    def test_asset_without_mint_tx(self, api):
        api.asset.return_value = {"asset": ASSET_ID, "initial_mint_tx_hash": None}

        result = IndexerQuery(api).get_asset_info(ASSET_ID)

        assert result["mint_tx_metadata"] == []
        api.transaction_metadata.assert_not_called()

    def test_unknown_asset(self, api):
        api.asset.side_effect = api_error(404)

        with pytest.raises(QueryError) as exc_info:
            IndexerQuery(api).get_asset_info(ASSET_ID)

        assert exc_info.value.status_code == 404

    def test_mint_metadata_failure_propagates(self, api):
        api.asset.return_value = {"asset": ASSET_ID, "initial_mint_tx_hash": TX_HASH}
        api.transaction_metadata.side_effect = api_error(500, "Internal Server Error")

        with pytest.raises(QueryError) as exc_info:
            IndexerQuery(api).get_asset_info(ASSET_ID)

        assert exc_info.value.status_code == 500
