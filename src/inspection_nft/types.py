"""
Inspection NFT Types

Plain data carriers passed between the minting pipeline stages.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

import pycardano as pc

from .exceptions import ValidationError


@dataclass(frozen=True)
class InspectionRecord:
    """Vehicle inspection submitted for minting"""

    vehicle_number: str
    inspection_date: str  # ISO-8601, kept verbatim
    inspector_id: str
    mileage: str
    status: str
    pdf_url: str

    def __post_init__(self):
        missing = [name for name, value in self.__dict__.items() if not isinstance(value, str) or not value.strip()]
        if missing:
            raise ValidationError("Missing required fields", detail=missing)

    def to_metadata(self) -> Dict[str, str]:
        """Record fields under their on-chain (camelCase) names"""
        return {
            "vehicleNumber": self.vehicle_number,
            "inspectionDate": self.inspection_date,
            "inspectorId": self.inspector_id,
            "mileage": self.mileage,
            "status": self.status,
            "pdfUrl": self.pdf_url,
        }


@dataclass(frozen=True)
class AssetIdentity:
    """Content-addressed identity of one inspection NFT"""

    token_name: str
    token_name_hex: str
    policy_id: str
    asset_id: str

    @property
    def asset_name(self) -> pc.AssetName:
        return pc.AssetName(self.token_name.encode("utf-8"))


@dataclass(frozen=True)
class MintingPolicy:
    """Single-signature native script and the policy id it hashes to"""

    script: pc.NativeScript
    policy_id: str
    key_hash: pc.VerificationKeyHash

    @property
    def script_hash(self) -> pc.ScriptHash:
        return pc.ScriptHash(bytes.fromhex(self.policy_id))


@dataclass
class UnsignedTransaction:
    """Balanced, fee-paid transaction body awaiting the wallet signature"""

    body: pc.TransactionBody
    witness_set: pc.TransactionWitnessSet
    auxiliary_data: Optional[pc.AuxiliaryData]
    policy: MintingPolicy

    @property
    def tx_hash(self) -> str:
        return self.body.hash().hex()

    @property
    def fee(self) -> int:
        return int(self.body.fee)


@dataclass(frozen=True)
class MintResult:
    """Outcome of a successful mint request"""

    tx_hash: str
    identity: AssetIdentity
    explorer_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "txHash": self.tx_hash,
            "assetId": self.identity.asset_id,
            "policyId": self.identity.policy_id,
            "tokenName": self.identity.token_name,
            "explorerUrl": self.explorer_url,
        }
