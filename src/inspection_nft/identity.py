"""
Asset Identity Derivation

Content-addressed token names for inspection NFTs. The same
(vehicle, date, inspector) triple always yields the same token name.
"""

import hashlib

from .types import AssetIdentity, InspectionRecord


# 16 bytes of the digest, rendered as 32 hex characters
TOKEN_NAME_LENGTH = 32


def derive_token_name(record: InspectionRecord) -> str:
    """
    Derive the token name for an inspection

    Args:
        record: Inspection record

    Returns:
        First 32 lowercase hex characters of
        sha256("<vehicleNumber>-<inspectionDate>-<inspectorId>")
    """
    seed = f"{record.vehicle_number}-{record.inspection_date}-{record.inspector_id}"
    return hashlib.sha256(seed.encode("utf-8")).hexdigest()[:TOKEN_NAME_LENGTH]


def token_name_to_hex(token_name: str) -> str:
    """Hex encoding of the token name's UTF-8 bytes, as used on chain"""
    return token_name.encode("utf-8").hex()


def derive_identity(record: InspectionRecord, policy_id: str) -> AssetIdentity:
    """
    Derive the full asset identity under a minting policy

    Args:
        record: Inspection record
        policy_id: Hex policy id of the minting script

    Returns:
        AssetIdentity with asset_id = policy_id + token_name_hex
    """
    token_name = derive_token_name(record)
    token_name_hex = token_name_to_hex(token_name)
    return AssetIdentity(
        token_name=token_name,
        token_name_hex=token_name_hex,
        policy_id=policy_id,
        asset_id=policy_id + token_name_hex,
    )
