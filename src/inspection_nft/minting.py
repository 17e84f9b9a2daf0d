"""
Inspection NFT Minting Pipeline

Runs one mint end to end: policy → identity → UTxOs → assembly →
signing → submission. Mints for the same signing identity are admitted one
at a time so two requests never build against the same UTxO snapshot.
"""

import asyncio
import functools
import logging
from typing import Any, Callable, Dict, Optional, TypeVar

from .exceptions import DuplicateMintError, MintingError, PipelineTimeoutError
from .identity import derive_identity
from .metadata import build_envelope
from .policy import PolicyResolver
from .transactions import ChainSubmitter, TransactionAssembler, WalletSigner
from .types import InspectionRecord, MintResult
from .utxo_source import UtxoSource
from .wallet import SigningWallet


logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_REQUEST_TIMEOUT_SECONDS = 120.0


async def run_with_timeout(func: Callable[..., T], *args: Any, timeout: float) -> T:
    """
    Run a blocking collaborator call in a worker thread with a time budget

    Raises:
        PipelineTimeoutError: If the call does not finish within timeout seconds
    """
    try:
        return await asyncio.wait_for(asyncio.to_thread(func, *args), timeout=timeout)
    except asyncio.TimeoutError as e:
        raise PipelineTimeoutError(f"{getattr(func, '__name__', 'call')} timed out after {timeout}s") from e


class IssuedAssetRegistry:
    """In-process record of asset ids minted since startup"""

    def __init__(self):
        self._issued: Dict[str, str] = {}

    def get(self, asset_id: str) -> Optional[str]:
        return self._issued.get(asset_id)

    def record(self, asset_id: str, tx_hash: str) -> None:
        self._issued[asset_id] = tx_hash

    def __len__(self) -> int:
        return len(self._issued)


class MintingPipeline:
    """Orchestrates inspection NFT mints for one signing wallet"""

    def __init__(
        self,
        wallet: SigningWallet,
        utxo_source: UtxoSource,
        assembler: TransactionAssembler,
        signer: WalletSigner,
        submitter: ChainSubmitter,
        policy_resolver: Optional[PolicyResolver] = None,
        registry: Optional[IssuedAssetRegistry] = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        explorer_url: Optional[Callable[[str], str]] = None,
    ):
        """
        Initialize pipeline

        Args:
            wallet: Wallet whose key pays for and authorizes mints
            utxo_source: Fresh UTxO snapshots and change address
            assembler: Builds unsigned transactions
            signer: Adds the wallet signature
            submitter: Broadcasts signed transactions
            policy_resolver: Policy cache (one is created when omitted)
            registry: Issued asset registry; None disables duplicate rejection
            request_timeout: Time budget per mint in seconds, queueing included
            explorer_url: Optional tx id → explorer link formatter
        """
        self.wallet = wallet
        self.utxo_source = utxo_source
        self.assembler = assembler
        self.signer = signer
        self.submitter = submitter
        self.policy_resolver = policy_resolver or PolicyResolver()
        self.registry = registry
        self.request_timeout = request_timeout
        self.explorer_url = explorer_url
        self._locks: Dict[str, asyncio.Lock] = {}

    def _lock_for(self, identity_key: str) -> asyncio.Lock:
        lock = self._locks.get(identity_key)
        if lock is None:
            lock = self._locks[identity_key] = asyncio.Lock()
        return lock

    def resolve_policy_id(self) -> str:
        return self.policy_resolver.resolve(self.wallet.get_address()).policy_id

    async def mint(self, record: InspectionRecord) -> MintResult:
        """
        Mint the NFT for one inspection

        Args:
            record: Validated inspection record

        Returns:
            MintResult with the transaction id and asset identity

        Raises:
            DuplicateMintError: Asset already minted by this process
            MintingError: Any pipeline stage failure (never retried)
        """
        progress = {"stage": "queued"}
        try:
            return await asyncio.wait_for(self._mint(record, progress), timeout=self.request_timeout)
        except asyncio.TimeoutError as e:
            stage = progress["stage"]
            message = f"Mint request timed out after {self.request_timeout}s during {stage}"
            if stage == "submit":
                message += "; the transaction may still reach the ledger"
            logger.error(message)
            raise PipelineTimeoutError(message, detail={"stage": stage}) from e

    async def _mint(self, record: InspectionRecord, progress: Dict[str, str]) -> MintResult:
        lock = self._lock_for(self.wallet.get_payment_key_hash())
        await lock.acquire()
        lock_handed_off = False
        try:
            progress["stage"] = "policy"
            policy = self.policy_resolver.resolve(self.wallet.get_address())
            identity = derive_identity(record, policy.policy_id)

            if self.registry is not None:
                existing_tx = self.registry.get(identity.asset_id)
                if existing_tx:
                    logger.warning(f"Rejected duplicate mint of {identity.asset_id} (tx {existing_tx})")
                    raise DuplicateMintError(identity.asset_id, existing_tx)

            envelope = build_envelope(record, identity)
            logger.info(f"Minting {identity.asset_id} for vehicle {record.vehicle_number}")

            progress["stage"] = "utxos"
            try:
                utxos = await asyncio.to_thread(self.utxo_source.utxos)
            except Exception as e:
                raise MintingError(f"Failed to fetch UTxOs: {str(e)}", detail=str(e)) from e

            progress["stage"] = "assemble"
            unsigned = await asyncio.to_thread(
                self.assembler.assemble,
                policy,
                identity.token_name_hex,
                envelope,
                self.utxo_source.change_address(),
                utxos,
            )

            progress["stage"] = "sign"
            signed = await asyncio.to_thread(self.signer.sign, unsigned)

            progress["stage"] = "submit"
            submission = asyncio.ensure_future(asyncio.to_thread(self.submitter.submit, signed))
            try:
                tx_hash = await asyncio.shield(submission)
            except asyncio.CancelledError:
                # The submission cannot be recalled: it keeps the wallet lock
                # and records its asset once it settles.
                submission.add_done_callback(
                    functools.partial(self._settle_submission, lock, identity.asset_id)
                )
                lock_handed_off = True
                raise

            if self.registry is not None:
                self.registry.record(identity.asset_id, tx_hash)

            logger.info(f"Minted {identity.asset_id} in transaction {tx_hash}")
            return MintResult(
                tx_hash=tx_hash,
                identity=identity,
                explorer_url=self.explorer_url(tx_hash) if self.explorer_url else None,
            )
        finally:
            if not lock_handed_off:
                lock.release()

    def _settle_submission(self, lock: asyncio.Lock, asset_id: str, submission: "asyncio.Future[str]") -> None:
        """Finish a submission whose request already timed out"""
        try:
            if submission.cancelled():
                logger.error(f"Submission of {asset_id} was cancelled; outcome unknown")
            elif submission.exception() is not None:
                logger.error(f"Late submission of {asset_id} failed: {submission.exception()}")
            else:
                tx_hash = submission.result()
                if self.registry is not None:
                    self.registry.record(asset_id, tx_hash)
                logger.warning(f"Minted {asset_id} in transaction {tx_hash} after the request timed out")
        finally:
            lock.release()
