"""
signatures.py - Wallet keys and message signatures on secp256k1.

Signatures are 65-byte compact recoverable signatures (one header byte followed
by r and s), base64 encoded. Verification recovers the public key from the
signature and compares the derived address with the claimed one, so a caller
only needs the wallet address to check ownership of a message.
"""
import base64
import binascii
import hashlib
from typing import Tuple

from ecdsa import SECP256k1, SigningKey, VerifyingKey
from ecdsa.util import sigdecode_string, sigencode_string_canonize

MESSAGE_MAGIC = b"\x18Bitcoin Signed Message:\n"
COMPACT_HEADER_BASE = 31  # 27 + 4 for compressed public keys


def _varint(n: int) -> bytes:
    if n < 0xFD:
        return bytes([n])
    if n <= 0xFFFF:
        return b"\xfd" + n.to_bytes(2, "little")
    if n <= 0xFFFFFFFF:
        return b"\xfe" + n.to_bytes(4, "little")
    return b"\xff" + n.to_bytes(8, "little")


def message_digest(message: str) -> bytes:
    """
    Double SHA-256 of the magic-prefixed, length-prefixed message.
    """
    payload = message.encode("utf-8")
    data = MESSAGE_MAGIC + _varint(len(payload)) + payload
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


def generate_keypair() -> Tuple[str, str]:
    """
    Returns (private_hex, public_hex), the public key in compressed form.
    """
    priv = SigningKey.generate(curve=SECP256k1)
    pub = priv.get_verifying_key()
    return priv.to_string().hex(), pub.to_string("compressed").hex()


def public_key_from_private(private_hex: str) -> str:
    priv = SigningKey.from_string(bytes.fromhex(private_hex), curve=SECP256k1)
    return priv.get_verifying_key().to_string("compressed").hex()


def address_from_public_key(public_hex: str) -> str:
    """
    Address = sha256(compressed_public_key_bytes)[:40].
    """
    pub_bytes = bytes.fromhex(public_hex)
    return hashlib.sha256(pub_bytes).hexdigest()[:40]


def _address_of(key: VerifyingKey) -> str:
    return address_from_public_key(key.to_string("compressed").hex())


def _recover_keys(raw_signature: bytes, digest: bytes) -> list:
    return VerifyingKey.from_public_key_recovery_with_digest(
        raw_signature,
        digest,
        SECP256k1,
        hashfunc=hashlib.sha256,
        sigdecode=sigdecode_string,
    )


def recovery_id_for(r: int, s: int, digest: bytes, public_key: VerifyingKey) -> int:
    """
    Recovery id of a signature: bit 0 is the parity of R.y, bit 1 is set when R.x overflowed the order.

    R is rebuilt from the public key as (e/s)G + (r/s)Q.
    """
    n = SECP256k1.order
    s_inv = pow(s, -1, n)
    e = int.from_bytes(digest, "big")
    point = SECP256k1.generator * (e * s_inv % n) + public_key.pubkey.point * (r * s_inv % n)
    return (point.y() & 1) | (2 if point.x() >= n else 0)


def sign_message(message: str, private_hex: str) -> str:
    """
    Sign a message with a hex private key, returning a base64 compact signature.
    """
    priv = SigningKey.from_string(bytes.fromhex(private_hex), curve=SECP256k1)
    digest = message_digest(message)
    raw = priv.sign_digest_deterministic(
        digest, hashfunc=hashlib.sha256, sigencode=sigencode_string_canonize
    )
    r, s = sigdecode_string(raw, SECP256k1.order)
    recovery_id = recovery_id_for(r, s, digest, priv.get_verifying_key())
    header = bytes([COMPACT_HEADER_BASE + recovery_id])
    return base64.b64encode(header + raw).decode("ascii")


def verify_message(message: str, address: str, signature: str) -> bool:
    """
    Return True if ``signature`` over ``message`` was produced by ``address``.
    """
    try:
        raw = base64.b64decode(signature, validate=True)
    except (binascii.Error, ValueError, TypeError):
        return False
    if len(raw) == 65:
        if not 27 <= raw[0] <= 34:
            return False
        raw = raw[1:]
    if len(raw) != 64:
        return False
    try:
        candidates = _recover_keys(raw, message_digest(message))
    except Exception:
        return False
    return any(_address_of(key) == address for key in candidates)
