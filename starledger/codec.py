"""
codec.py - Transport-safe payload encoding (hex-encoded JSON).
"""
import binascii
import json
from typing import Any

from .exceptions import SerializationFailure


def encode(data: Any) -> str:
    """
    Encode a JSON-serializable object into a hex string.
    """
    try:
        return json.dumps(data).encode("utf-8").hex()
    except (TypeError, ValueError) as e:
        raise SerializationFailure(f"Payload is not serializable: {e}") from e


def decode(token: str) -> Any:
    """
    Decode a hex string produced by ``encode`` back into the original object.
    """
    try:
        return json.loads(binascii.unhexlify(token).decode("utf-8"))
    except (TypeError, ValueError, binascii.Error) as e:
        raise SerializationFailure(f"Body is not validly encoded: {e}") from e
