"""
Minting Policy Resolution

Builds the single-signature native script that authorizes minting under the
wallet's payment key and hashes it into the policy id.
"""

import logging
from typing import Dict, Union

import pycardano as pc

from .exceptions import IdentityError
from .types import MintingPolicy


logger = logging.getLogger(__name__)


def parse_address(address: Union[str, pc.Address]) -> pc.Address:
    """
    Parse a bech32 address

    Raises:
        IdentityError: If the string is not a valid Cardano address
    """
    if isinstance(address, pc.Address):
        return address
    try:
        return pc.Address.from_primitive(address)
    except Exception as e:
        raise IdentityError(f"Invalid address: {address}", detail=str(e)) from e


class PolicyResolver:
    """Resolves and caches minting policies per signing address"""

    def __init__(self):
        self._cache: Dict[str, MintingPolicy] = {}

    def resolve(self, signing_address: Union[str, pc.Address]) -> MintingPolicy:
        """
        Resolve the minting policy bound to an address's payment credential

        Args:
            signing_address: Bech32 string or pycardano Address

        Returns:
            MintingPolicy with the native script and its hex policy id

        Raises:
            IdentityError: If the address is invalid or not key-based
        """
        key = str(signing_address)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        address = parse_address(signing_address)
        payment_part = address.payment_part
        if not isinstance(payment_part, pc.VerificationKeyHash):
            raise IdentityError(
                f"Address {key} has no verification key credential",
                detail=type(payment_part).__name__,
            )

        script = pc.ScriptPubkey(payment_part)
        policy = MintingPolicy(
            script=script,
            policy_id=script.hash().payload.hex(),
            key_hash=payment_part,
        )
        self._cache[key] = policy
        logger.debug(f"Resolved policy {policy.policy_id} for {key}")
        return policy
