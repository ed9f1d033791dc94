"""
starledger - In-memory star registry ledger.

This package provides hash-chained blocks, the chain that admits and validates
them, and the wallet signature helpers used to register stars.
"""

from .blocks import GENESIS_SENTINEL, Block
from .chain import SUBMISSION_WINDOW_SECONDS, Blockchain
from .codec import decode, encode
from .exceptions import (
    ChainIntegrityError,
    ChainValidationFailure,
    SerializationFailure,
    SignatureInvalid,
    StarLedgerError,
    SubmissionFailed,
    TimeWindowExpired,
)
from .metrics import start_metrics_server
from .signatures import (
    address_from_public_key,
    generate_keypair,
    public_key_from_private,
    sign_message,
    verify_message,
)

__all__ = [
    "Block",
    "Blockchain",
    "GENESIS_SENTINEL",
    "SUBMISSION_WINDOW_SECONDS",
    "encode",
    "decode",
    "StarLedgerError",
    "SerializationFailure",
    "TimeWindowExpired",
    "SignatureInvalid",
    "SubmissionFailed",
    "ChainValidationFailure",
    "ChainIntegrityError",
    "start_metrics_server",
    "generate_keypair",
    "public_key_from_private",
    "address_from_public_key",
    "sign_message",
    "verify_message",
]

__version__ = "0.1.0"
