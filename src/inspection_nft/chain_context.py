"""
Cardano Chain Context Management

Network configuration and BlockFrost connection setup shared by the
minting pipeline and the indexer queries.
"""

from typing import Optional

from blockfrost import ApiUrls, BlockFrostApi
import pycardano as pc


class CardanoChainContext:
    """Manages Cardano chain context and network configuration"""

    def __init__(self, network: str = "testnet", blockfrost_api_key: Optional[str] = None):
        """
        Initialize chain context

        Args:
            network: Network type ("testnet" for preview, or "mainnet")
            blockfrost_api_key: BlockFrost project id

        Raises:
            ValueError: If the network is unknown or the API key is missing
        """
        if network not in ("testnet", "mainnet"):
            raise ValueError(f"Unknown network: {network}")
        if not blockfrost_api_key:
            raise ValueError("BlockFrost API key required for chain context")

        self.network = network
        self.blockfrost_api_key = blockfrost_api_key

        if network == "testnet":
            self.base_url = ApiUrls.preview.value
            self.cardanoscan = "https://preview.cardanoscan.io"
        else:
            self.base_url = ApiUrls.mainnet.value
            self.cardanoscan = "https://cardanoscan.io"

        self.api = BlockFrostApi(project_id=blockfrost_api_key, base_url=self.base_url)
        self.context = pc.BlockFrostChainContext(project_id=blockfrost_api_key, base_url=self.base_url)

    def get_context(self) -> pc.ChainContext:
        """Get the PyCardano chain context used for building and submitting"""
        return self.context

    def get_api(self) -> BlockFrostApi:
        """Get the BlockFrost API instance used for indexer queries"""
        return self.api

    def get_explorer_url(self, tx_id: str) -> str:
        """
        Get explorer URL for transaction

        Args:
            tx_id: Transaction ID

        Returns:
            Explorer URL for the transaction
        """
        return f"{self.cardanoscan}/transaction/{tx_id}"
