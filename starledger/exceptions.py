"""
exceptions.py - Custom exceptions for the starledger package.
"""
from typing import List, Optional


class StarLedgerError(Exception):
    """Base exception for ledger errors."""
    pass


class SerializationFailure(StarLedgerError):
    """Raised when a payload or block state cannot be encoded or decoded."""
    pass


class TimeWindowExpired(StarLedgerError):
    """Raised when an ownership message is older than the submission window."""
    pass


class SignatureInvalid(StarLedgerError):
    """Raised when a message signature does not verify for the given address."""
    pass


class ChainValidationFailure(StarLedgerError):
    """Raised when the chain could not be traversed for validation."""
    pass


class ChainIntegrityError(StarLedgerError):
    """Raised when admission is refused because the existing chain is invalid."""

    def __init__(self, errors: List[str]):
        super().__init__(f"Chain failed validation with {len(errors)} error(s).")
        self.errors = errors


class SubmissionFailed(StarLedgerError):
    """
    Generic failure surfaced to callers of the star submission workflow.

    The specific cause is kept on ``reason`` and ``__cause__`` for diagnostics
    but is not part of the message.
    """

    MESSAGE = "There was an issue submitting your star."

    def __init__(self, reason: Optional[str] = None):
        super().__init__(self.MESSAGE)
        self.reason = reason
