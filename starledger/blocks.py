"""
blocks.py - Block definition for the star registry chain.
"""
import hashlib
import json
from typing import Any, Dict, Optional

from .codec import decode, encode
from .exceptions import SerializationFailure

GENESIS_SENTINEL = "** Genesis Block **"


class Block:
    """
    A ledger record holding an encoded payload, linked to its predecessor via hash.

    Height, time, previous hash and hash are left unset at construction and
    filled in by the chain on admission.
    """

    def __init__(self, data: Any):
        self.hash: Optional[str] = None
        self.height: int = 0
        self.body: str = encode(data)
        self.time: int = 0
        self.previous_block_hash: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hash": self.hash,
            "height": self.height,
            "body": self.body,
            "time": self.time,
            "previousBlockHash": self.previous_block_hash,
        }

    def compute_hash(self) -> str:
        """
        Compute the SHA-256 hash of the block state, excluding the hash itself.
        """
        block_content = self.to_dict()
        block_content.pop("hash")
        try:
            block_bytes = json.dumps(block_content, sort_keys=True).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationFailure(f"Block state is not serializable: {e}") from e
        return hashlib.sha256(block_bytes).hexdigest()

    def validate(self) -> bool:
        """
        Return True if the stored hash still matches the block contents.

        The stored hash is left untouched.
        """
        return self.compute_hash() == self.hash

    def get_data(self) -> Any:
        """
        Decode the block body. The genesis block yields GENESIS_SENTINEL.
        """
        data = decode(self.body)
        if self.height == 0:
            return GENESIS_SENTINEL
        return data

    def __repr__(self) -> str:
        return f"Block(height={self.height}, hash={self.hash!r})"
