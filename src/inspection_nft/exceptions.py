"""
Inspection NFT Exceptions

Error taxonomy shared by the minting pipeline, the indexer queries and the API layer.
"""

from typing import Any, Optional


class InspectionNFTError(Exception):
    """Base exception for inspection NFT errors"""

    def __init__(self, message: str, detail: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(InspectionNFTError):
    """Missing or malformed request fields"""

    pass


class DuplicateMintError(InspectionNFTError):
    """An asset with the same identity was already minted by this process"""

    def __init__(self, asset_id: str, tx_hash: str):
        super().__init__(f"Asset {asset_id} was already minted in transaction {tx_hash}")
        self.asset_id = asset_id
        self.tx_hash = tx_hash


# ============================================================================
# Minting pipeline errors
# ============================================================================


class MintingError(InspectionNFTError):
    """Base exception for minting pipeline failures"""

    pass


class IdentityError(MintingError):
    """Address cannot be parsed into a verification key credential"""

    pass


class InsufficientFundsError(MintingError):
    """Not enough funds to cover the minted output and the fee"""

    pass


class MetadataError(MintingError):
    """Metadata envelope would be rejected by the ledger"""

    pass


class AssemblyError(MintingError):
    """Transaction builder failed for a reason other than funds"""

    pass


class SigningError(MintingError):
    """Wallet key cannot satisfy the minting policy"""

    pass


class SubmissionError(MintingError):
    """Network or ledger rejected the signed transaction"""

    def __init__(self, message: str, detail: Optional[Any] = None, conflict: bool = False):
        super().__init__(message, detail)
        # Inputs already spent by another transaction; retryable after a UTxO refresh
        self.conflict = conflict


class PipelineTimeoutError(MintingError):
    """Request exceeded its time budget"""

    pass


# ============================================================================
# Indexer errors
# ============================================================================


class QueryError(InspectionNFTError):
    """Indexer returned a non-2xx response or could not be reached"""

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Optional[Any] = None):
        super().__init__(message, detail)
        self.status_code = status_code
