"""
chain.py - In-memory star registry chain.
"""

import logging
import time
from threading import RLock
from typing import Any, Callable, Dict, List, Optional

from .blocks import Block
from .exceptions import (
    ChainIntegrityError,
    ChainValidationFailure,
    SignatureInvalid,
    SubmissionFailed,
    TimeWindowExpired,
)
from .metrics import BLOCKS_ADMITTED, CHAIN_HEIGHT, STAR_SUBMISSIONS, VALIDATION_ERRORS
from .signatures import verify_message

logger = logging.getLogger(__name__)

GENESIS_DATA = {"data": "Genesis Block"}
SUBMISSION_WINDOW_SECONDS = 5 * 60
MESSAGE_SUFFIX = "starRegistry"


class Blockchain:
    """
    Manages an append-only chain of Blocks with integrity checks.

    Args:
        submission_window_seconds: Maximum age of an ownership message accepted by submit_star.
        clock: Callable returning the current time in seconds since epoch.
        verifier: Callable ``(message, address, signature) -> bool`` used to check signatures.
    """

    def __init__(
        self,
        submission_window_seconds: int = SUBMISSION_WINDOW_SECONDS,
        clock: Callable[[], float] = time.time,
        verifier: Callable[[str, str, str], bool] = verify_message,
    ) -> None:
        self.chain: List[Block] = []
        self.height = -1
        self.submission_window_seconds = submission_window_seconds
        self.clock = clock
        self.verifier = verifier
        self.lock = RLock()
        self.initialize_chain()

    def _now_ms(self) -> int:
        return int(self.clock() * 1000)

    def _now_seconds(self) -> int:
        return int(self.clock())

    def initialize_chain(self) -> None:
        """
        Create the genesis block if the chain is empty.
        """
        if self.height == -1:
            block = Block(GENESIS_DATA)
            self._add_block(block)
            logger.info(f"Genesis block created with hash {block.hash}")

    def get_chain_height(self) -> int:
        return self.height

    def _add_block(self, block: Block) -> Block:
        """
        Finalize height, time and hashes of ``block`` and append it to the chain.

        Raises ChainIntegrityError if the existing chain does not validate.
        """
        with self.lock:
            block.height = len(self.chain)
            block.time = self._now_ms()
            if self.chain:
                block.previous_block_hash = self.chain[-1].hash
            block.hash = block.compute_hash()

            errors = self.validate_chain()
            if errors:
                logger.warning(f"Refusing block {block.height}: chain has {len(errors)} error(s)")
                raise ChainIntegrityError(errors)

            self.chain.append(block)
            self.height += 1
            BLOCKS_ADMITTED.inc()
            CHAIN_HEIGHT.set(self.height)
            logger.info(f"Block {block.height} added with hash {block.hash}")
            return block

    def request_message_ownership_verification(self, address: str) -> str:
        """
        Build the message a wallet owner must sign before submitting a star.
        """
        return f"{address}:{self._now_seconds()}:{MESSAGE_SUFFIX}"

    def submit_star(self, address: str, message: str, signature: str, star: Any) -> Block:
        """
        Register a star owned by ``address`` as a new block.

        The message must have been issued less than the submission window ago
        and be signed by ``address``. Every failure is raised as SubmissionFailed.
        """
        try:
            message_time = int(message.split(":")[1])
            elapsed = self._now_seconds() - message_time
            if elapsed >= self.submission_window_seconds:
                raise TimeWindowExpired(
                    f"Time between current time and message time needs to be less than "
                    f"{self.submission_window_seconds} seconds (elapsed {elapsed})."
                )
            if not self.verifier(message, address, signature):
                raise SignatureInvalid("Message could not be verified.")
            block = Block({"owner": address, "star": star})
            self._add_block(block)
        except Exception as e:
            STAR_SUBMISSIONS.labels(outcome=type(e).__name__).inc()
            logger.warning(f"Star submission from {address} rejected: {type(e).__name__}: {e}")
            raise SubmissionFailed(reason=type(e).__name__) from e
        STAR_SUBMISSIONS.labels(outcome="admitted").inc()
        return block

    def get_block_by_hash(self, block_hash: str) -> List[Block]:
        """
        Return all blocks whose hash equals ``block_hash``.
        """
        return [block for block in self.chain if block.hash == block_hash]

    def get_block_by_height(self, height: int) -> Optional[Block]:
        """
        Return the block at ``height``, or None if there is none.
        """
        return next((block for block in self.chain if block.height == height), None)

    def get_stars_by_wallet_address(self, address: str) -> List[Dict[str, Any]]:
        """
        Return the decoded star payloads owned by ``address`` in chain order.
        """
        decoded = (block.get_data() for block in self.chain)
        return [data for data in decoded if isinstance(data, dict) and data.get("owner") == address]

    def validate_chain(self) -> List[str]:
        """
        Validate linkage and contents of every non-genesis block.

        Returns the list of error descriptions; an empty list means the chain is valid.
        """
        error_log: List[str] = []
        with self.lock:
            try:
                for index, block in enumerate(self.chain):
                    if index == 0:
                        continue
                    previous = self.chain[index - 1]
                    if block.previous_block_hash != previous.hash:
                        error_log.append(
                            f"Block {index} Hash Mismatch :: PreviousBlockHash {block.previous_block_hash}, "
                            f"Required PreviousBlockHash {previous.hash}"
                        )
                    if not block.validate():
                        error_log.append(f"Block {index} Invalid :: Hash ({block.hash})")
            except Exception as e:
                logger.error(f"Chain validation aborted: {e}")
                raise ChainValidationFailure("Could not validate chain.") from e
        VALIDATION_ERRORS.set(len(error_log))
        return error_log
