"""
Shared Enums

Single source of truth for enums used across settings, API schemas,
and business logic.
"""

from enum import Enum


class NetworkType(str, Enum):
    """Blockchain network types"""

    TESTNET = "testnet"  # preview
    MAINNET = "mainnet"
