"""
Inspection Schemas

Pydantic models for inspection minting and metadata query requests and responses.
Field aliases keep the camelCase wire names used by inspection clients.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from inspection_nft import InspectionRecord


# Path parameter patterns
TX_HASH_PATTERN = r"^[0-9a-fA-F]{64}$"
ASSET_ID_PATTERN = r"^[0-9a-fA-F]{56,120}$"


# ============================================================================
# Mint Request/Response Schemas
# ============================================================================


class InspectionMetadataRequest(BaseModel):
    """Inspection record to mint as an NFT"""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    vehicle_number: str = Field(alias="vehicleNumber", min_length=1, description="Vehicle registration number")
    inspection_date: str = Field(alias="inspectionDate", min_length=1, description="ISO-8601 inspection timestamp")
    inspector_id: str = Field(alias="inspectorId", min_length=1, description="Inspector identifier")
    mileage: str = Field(min_length=1, description="Odometer reading")
    status: str = Field(min_length=1, description="Inspection result, e.g. PASSED")
    pdf_url: str = Field(alias="pdfurl", min_length=1, description="URL of the inspection report PDF")

    def to_record(self) -> InspectionRecord:
        return InspectionRecord(
            vehicle_number=self.vehicle_number,
            inspection_date=self.inspection_date,
            inspector_id=self.inspector_id,
            mileage=self.mileage,
            status=self.status,
            pdf_url=self.pdf_url,
        )


class MintResponse(BaseModel):
    """Response for a successful mint"""

    txHash: str = Field(description="Submitted transaction hash")
    assetId: str = Field(description="Asset identifier (policy_id + hex asset name)")
    policyId: str = Field(description="Policy ID (script hash)")
    tokenName: str = Field(description="Token name (32 hex characters)")
    explorerUrl: str | None = Field(None, description="Blockchain explorer URL")


# ============================================================================
# Query Schemas
# ============================================================================


class TransactionMetadataItem(BaseModel):
    """One metadata label attached to a transaction"""

    label: str = Field(description="Metadata label, e.g. 721")
    json_metadata: Any = Field(None, description="Metadata content under the label")


# ============================================================================
# Error Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Error body returned by every endpoint"""

    error: str = Field(description="Human-readable error message")
    details: Any = Field(None, description="Upstream or validation detail, if any")
    upstreamStatus: int | None = Field(None, description="Indexer HTTP status for query failures")


class DuplicateMintResponse(ErrorResponse):
    """Error body for an inspection that was already minted"""

    txHash: str = Field(description="Transaction that minted the asset")
    assetId: str = Field(description="Asset identifier")
