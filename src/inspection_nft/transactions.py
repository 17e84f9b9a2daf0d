"""
Inspection NFT Transactions

Assembly, signing and submission of the single-NFT minting transaction.
Fee calculation and balancing are delegated to the PyCardano builder.
"""

import logging
from typing import Any, Dict, List, Optional

import pycardano as pc
from blockfrost import ApiError
from pycardano.exception import (
    InsufficientUTxOBalanceException,
    TransactionFailedException,
    UTxOSelectionException,
)

from .exceptions import AssemblyError, InsufficientFundsError, SigningError, SubmissionError
from .metadata import prepare_auxiliary_data
from .types import MintingPolicy, UnsignedTransaction
from .utxo_source import total_lovelace
from .wallet import SigningKey


logger = logging.getLogger(__name__)


# Lovelace kept with the minted NFT in the change output
DEFAULT_MINT_OUTPUT_LOVELACE = 1_500_000
DEFAULT_MIN_FEE_LOVELACE = 200_000
# Extra ADA gathered during input selection so the builder can balance
SELECTION_MARGIN_LOVELACE = 1_000_000

# Ledger rejections that mean another transaction spent our inputs first
CONFLICT_MARKERS = ("BadInputsUTxO", "ValueNotConservedUTxO", "already been spent")


def select_inputs(utxos: List[pc.UTxO], target_lovelace: int) -> List[pc.UTxO]:
    """
    Pick inputs from the supplied UTxOs until target_lovelace is covered.

    ADA-only outputs are used first, largest first, so earlier NFTs are not
    dragged into every new change output. Token-bearing outputs are only
    added when ADA-only ones do not cover the target.

    Args:
        utxos: Candidate UTxOs (nothing outside this list is ever used)
        target_lovelace: Amount to cover

    Returns:
        Selected UTxOs, possibly all of them
    """
    ada_only = [u for u in utxos if not u.output.amount.multi_asset]
    with_tokens = [u for u in utxos if u.output.amount.multi_asset]

    selected = []
    covered = 0
    for utxo in sorted(ada_only, key=lambda u: u.output.amount.coin, reverse=True) + with_tokens:
        if covered >= target_lovelace:
            break
        selected.append(utxo)
        covered += utxo.output.amount.coin
    return selected


class TransactionAssembler:
    """Builds the unsigned minting transaction for one inspection NFT"""

    def __init__(
        self,
        context: pc.ChainContext,
        mint_output_lovelace: int = DEFAULT_MINT_OUTPUT_LOVELACE,
        min_fee_lovelace: int = DEFAULT_MIN_FEE_LOVELACE,
    ):
        """
        Initialize assembler

        Args:
            context: PyCardano chain context (protocol parameters for fee calculation)
            mint_output_lovelace: ADA that must accompany the minted NFT
            min_fee_lovelace: Lower bound for the transaction fee
        """
        self.context = context
        self.mint_output_lovelace = mint_output_lovelace
        self.min_fee_lovelace = min_fee_lovelace

    @property
    def required_lovelace(self) -> int:
        """Smallest UTxO total that can pay for a mint"""
        return self.mint_output_lovelace + self.min_fee_lovelace

    def assemble(
        self,
        policy: MintingPolicy,
        token_name_hex: str,
        metadata_envelope: Dict[Any, Any],
        change_address: pc.Address,
        utxos: List[pc.UTxO],
    ) -> UnsignedTransaction:
        """
        Assemble an unsigned, balanced minting transaction

        Args:
            policy: Minting policy (native script + policy id)
            token_name_hex: Hex-encoded on-chain asset name
            metadata_envelope: CIP-25 envelope keyed by label 721
            change_address: Receiver of the NFT and any leftover value
            utxos: The only UTxOs the transaction may spend

        Returns:
            UnsignedTransaction with body, partial witness set and metadata

        Raises:
            MetadataError: Envelope rejected before any network use
            InsufficientFundsError: UTxOs cannot cover the mint and fee
            AssemblyError: Any other builder failure
        """
        auxiliary_data = prepare_auxiliary_data(metadata_envelope)

        available = total_lovelace(utxos)
        if available < self.required_lovelace:
            raise InsufficientFundsError(
                f"Insufficient funds: need {self.required_lovelace} lovelace, have {available}",
                detail={"required": self.required_lovelace, "available": available},
            )

        try:
            asset_name = pc.AssetName(bytes.fromhex(token_name_hex))
        except ValueError as e:
            raise AssemblyError(f"Invalid token name hex: {token_name_hex}", detail=str(e)) from e

        builder = pc.TransactionBuilder(self.context)

        # Mint one token under the policy, witnessed by its native script
        builder.mint = pc.MultiAsset({policy.script_hash: pc.Asset({asset_name: 1})})
        builder.native_scripts = [policy.script]

        # Metadata under label 721
        builder.auxiliary_data = auxiliary_data

        # Inputs come only from the supplied snapshot
        for utxo in select_inputs(utxos, self.required_lovelace + SELECTION_MARGIN_LOVELACE):
            builder.add_input(utxo)

        # Balance, pay the fee and route change (and the NFT) to change_address
        try:
            tx_body = builder.build(change_address=change_address)
        except (UTxOSelectionException, InsufficientUTxOBalanceException) as e:
            raise InsufficientFundsError(f"Insufficient funds: {str(e)}", detail=str(e)) from e
        except Exception as e:
            raise AssemblyError(f"Failed to build minting transaction: {str(e)}", detail=str(e)) from e

        # Scripts only; the vkey witness is added by the signer
        witness_set = builder.build_witness_set()

        unsigned = UnsignedTransaction(
            body=tx_body,
            witness_set=witness_set,
            auxiliary_data=auxiliary_data,
            policy=policy,
        )
        logger.debug(f"Assembled mint {unsigned.tx_hash} with {len(tx_body.inputs)} inputs, fee {unsigned.fee}")
        return unsigned


class WalletSigner:
    """Signs minting transactions with the wallet's payment key"""

    def __init__(self, signing_key: SigningKey):
        self.signing_key = signing_key

    def sign(self, unsigned: UnsignedTransaction) -> pc.Transaction:
        """
        Add the wallet's vkey witness to an unsigned transaction

        Raises:
            SigningError: If the key does not match the policy's key hash
        """
        verification_key = self.signing_key.to_verification_key()
        if verification_key.hash() != unsigned.policy.key_hash:
            raise SigningError(
                "Signing key does not match the minting policy",
                detail={
                    "expected_key_hash": unsigned.policy.key_hash.payload.hex(),
                    "signing_key_hash": verification_key.hash().payload.hex(),
                },
            )

        try:
            signature = self.signing_key.sign(unsigned.body.hash())
            vkey_witness = pc.VerificationKeyWitness(verification_key, signature)
        except Exception as e:
            raise SigningError(f"Failed to sign transaction: {str(e)}", detail=str(e)) from e

        witness_set = pc.TransactionWitnessSet(
            vkey_witnesses=[vkey_witness],
            native_scripts=unsigned.witness_set.native_scripts,
        )

        # Transaction(body, witness_set, valid=True, auxiliary_data=None)
        return pc.Transaction(unsigned.body, witness_set, True, unsigned.auxiliary_data)


def is_conflict(message: str) -> bool:
    return any(marker in message for marker in CONFLICT_MARKERS)


class ChainSubmitter:
    """Broadcasts signed transactions through the chain context"""

    def __init__(self, context: pc.ChainContext):
        self.context = context

    def submit(self, signed_tx: pc.Transaction) -> str:
        """
        Submit a signed transaction to the network

        Returns:
            Transaction ID (hex)

        Raises:
            SubmissionError: Network failure or ledger rejection
        """
        try:
            self.context.submit_tx(signed_tx)
        except (TransactionFailedException, ApiError) as e:
            message = str(e)
            raise SubmissionError(
                f"Error submitting transaction: {message}",
                detail=message,
                conflict=is_conflict(message),
            ) from e
        except Exception as e:
            raise SubmissionError(f"Error submitting transaction: {str(e)}", detail=str(e)) from e

        tx_id: Optional[pc.TransactionId] = signed_tx.id
        if not tx_id:
            raise SubmissionError("Transaction submission failed - no transaction ID")
        return tx_id.payload.hex()
