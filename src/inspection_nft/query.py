"""
Indexer Queries

Read-only access to minted metadata and asset information through the
BlockFrost API. Every call reflects the current indexer state; results
are never cached and failed calls are never retried.
"""

import logging
from typing import Any, Dict, List

from blockfrost import ApiError, BlockFrostApi

from .exceptions import QueryError


logger = logging.getLogger(__name__)


class IndexerQuery:
    """Metadata and asset lookups against BlockFrost"""

    def __init__(self, api: BlockFrostApi):
        self.api = api

    def get_metadata_by_tx(self, tx_hash: str) -> List[Dict[str, Any]]:
        """
        Get the metadata attached to a transaction

        Args:
            tx_hash: Transaction hash (hex)

        Returns:
            List of {"label": str, "json_metadata": Any} in indexer order

        Raises:
            QueryError: Upstream non-2xx (status preserved) or transport failure
        """
        result = self._call("transaction_metadata", tx_hash)
        return [
            {"label": item.get("label"), "json_metadata": item.get("json_metadata")}
            for item in result
        ]

    def get_asset_info(self, asset_id: str) -> Dict[str, Any]:
        """
        Get asset details together with the metadata of its first mint

        Args:
            asset_id: policy_id + hex asset name

        Returns:
            BlockFrost asset object plus "mint_tx_metadata" (list, possibly empty)

        Raises:
            QueryError: Upstream non-2xx (status preserved) or transport failure
        """
        asset_info = dict(self._call("asset", asset_id))

        mint_tx_hash = asset_info.get("initial_mint_tx_hash")
        asset_info["mint_tx_metadata"] = self.get_metadata_by_tx(mint_tx_hash) if mint_tx_hash else []
        return asset_info

    def _call(self, method: str, argument: str) -> Any:
        try:
            return getattr(self.api, method)(argument, return_type="json")
        except ApiError as e:
            status_code = getattr(e, "status_code", None)
            message = getattr(e, "message", None) or str(e)
            logger.warning(f"BlockFrost {method}({argument}) returned {status_code}: {message}")
            raise QueryError(
                f"BlockFrost API returned status {status_code}",
                status_code=status_code,
                detail=message,
            ) from e
        except Exception as e:
            logger.error(f"BlockFrost {method}({argument}) failed: {str(e)}")
            raise QueryError(f"BlockFrost request failed: {str(e)}", detail=str(e)) from e
