"""
Inspection NFT Metadata

Builds the CIP-25 envelope (label 721) carried by every inspection mint and
turns it into PyCardano auxiliary data.

Reference:
- CIP-25: https://cips.cardano.org/cips/cip25/
- Cardano Metadata: https://developers.cardano.org/docs/transaction-metadata/
"""

from typing import Any, Dict, List, Union

import pycardano as pc

from .exceptions import MetadataError
from .types import AssetIdentity, InspectionRecord


NFT_METADATA_LABEL = 721
CIP25_VERSION = "1.0"
DISPLAY_NAME_PREFIX = "CarInspection-"

# Metadata validation constants
MAX_METADATA_SIZE = 16_384  # 16KB max per transaction
MAX_STRING_BYTES = 64  # Ledger limit per metadata string


def split_metadata_string(text: str, max_bytes: int = MAX_STRING_BYTES) -> Union[str, List[str]]:
    """
    Split a string into chunks of at most max_bytes UTF-8 bytes.

    Strings already within the limit are returned unchanged. Longer ones become
    a list of chunks, the CIP-25 convention for long URIs. Multi-byte
    characters are never cut in half.
    """
    if len(text.encode("utf-8")) <= max_bytes:
        return text

    chunks = []
    current = ""
    current_bytes = 0
    for char in text:
        char_bytes = len(char.encode("utf-8"))
        if current_bytes + char_bytes > max_bytes:
            chunks.append(current)
            current, current_bytes = "", 0
        current += char
        current_bytes += char_bytes
    if current:
        chunks.append(current)
    return chunks


def display_name(identity: AssetIdentity) -> str:
    """Human-readable NFT name shown by wallets and explorers"""
    return f"{DISPLAY_NAME_PREFIX}{identity.token_name}"


def build_envelope(record: InspectionRecord, identity: AssetIdentity) -> Dict[int, Any]:
    """
    Build the CIP-25 metadata envelope for one inspection NFT

    Args:
        record: Inspection record
        identity: Derived asset identity

    Returns:
        {721: {policy_id: {token_name: {...record fields, name}}, "version": "1.0"}}
    """
    fields: Dict[str, Any] = {
        key: split_metadata_string(value) for key, value in record.to_metadata().items()
    }
    fields["name"] = display_name(identity)

    return {
        NFT_METADATA_LABEL: {
            identity.policy_id: {identity.token_name: fields},
            "version": CIP25_VERSION,
        }
    }


def convert_metadata_keys(metadata: Dict[Any, Any]) -> Dict[Any, Any]:
    """
    Convert string labels to integers for PyCardano metadata.

    PyCardano requires the top-level metadata labels to be integers. Nested
    keys are left alone: a token name made only of digits must stay a string.

    Example:
        >>> convert_metadata_keys({"721": {"1": "x"}})
        {721: {'1': 'x'}}
    """
    return {(int(k) if isinstance(k, str) and k.isdigit() else k): v for k, v in metadata.items()}


def prepare_auxiliary_data(envelope: Dict[Any, Any]) -> pc.AuxiliaryData:
    """
    Turn a metadata envelope into auxiliary data ready to attach to a transaction

    Raises:
        MetadataError: If PyCardano rejects the structure or the CBOR
            encoding exceeds MAX_METADATA_SIZE
    """
    if not envelope:
        raise MetadataError("Metadata envelope is empty")

    try:
        metadata_obj = pc.Metadata(convert_metadata_keys(envelope))
        auxiliary_data = pc.AuxiliaryData(pc.AlonzoMetadata(metadata=metadata_obj))
        cbor_size = len(auxiliary_data.to_cbor())
    except Exception as e:
        raise MetadataError("Invalid metadata", detail=str(e)) from e

    if cbor_size > MAX_METADATA_SIZE:
        raise MetadataError(
            f"Metadata size ({cbor_size} bytes) exceeds maximum ({MAX_METADATA_SIZE} bytes)"
        )

    return auxiliary_data
