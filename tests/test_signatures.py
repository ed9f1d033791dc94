import base64

import pytest
from ecdsa import SECP256k1, VerifyingKey
from ecdsa.ellipticcurve import Point, PointJacobi
from ecdsa.util import sigdecode_string

from starledger.signatures import (
    address_from_public_key,
    generate_keypair,
    message_digest,
    public_key_from_private,
    sign_message,
    verify_message,
)

MESSAGE = "address:1700000000:starRegistry"


def test_keypair_and_address():
    private_hex, public_hex = generate_keypair()
    assert len(private_hex) == 64
    # compressed public key: prefix byte + 32 bytes
    assert len(public_hex) == 66
    assert public_key_from_private(private_hex) == public_hex
    address = address_from_public_key(public_hex)
    assert len(address) == 40
    int(address, 16)


def test_sign_and_verify(wallet):
    signature = sign_message(MESSAGE, wallet["private_key"])
    assert len(base64.b64decode(signature)) == 65
    assert verify_message(MESSAGE, wallet["address"], signature)


def test_signing_is_deterministic(wallet):
    assert sign_message(MESSAGE, wallet["private_key"]) == sign_message(MESSAGE, wallet["private_key"])


def test_verify_rejects_other_address(wallet, other_wallet):
    signature = sign_message(MESSAGE, wallet["private_key"])
    assert not verify_message(MESSAGE, other_wallet["address"], signature)


def test_verify_rejects_altered_message(wallet):
    signature = sign_message(MESSAGE, wallet["private_key"])
    assert not verify_message(MESSAGE.replace("1700000000", "1700000001"), wallet["address"], signature)


def test_verify_accepts_signature_without_header(wallet):
    raw = base64.b64decode(sign_message(MESSAGE, wallet["private_key"]))
    assert verify_message(MESSAGE, wallet["address"], base64.b64encode(raw[1:]).decode())


@pytest.mark.parametrize("signature", ["", "not base64!!", base64.b64encode(b"short").decode(), None])
def test_verify_rejects_malformed_signatures(wallet, signature):
    assert verify_message(MESSAGE, wallet["address"], signature) is False


def test_message_digest_length_prefix():
    assert message_digest("a") != message_digest("a\x00")
    assert len(message_digest("x" * 300)) == 32


def _recover_from_header(signature, message):
    """Compact-signature recovery that lifts R from r using the header's recovery id."""
    raw = base64.b64decode(signature)
    recovery_id = raw[0] - 31
    n = SECP256k1.order
    p = SECP256k1.curve.p()
    r, s = sigdecode_string(raw[1:], n)
    x = r + n * (recovery_id >> 1)
    beta = pow((x ** 3 + 7) % p, (p + 1) // 4, p)
    y = beta if beta % 2 == recovery_id % 2 else p - beta
    point_r = PointJacobi.from_affine(Point(SECP256k1.curve, x, y, n))
    e = int.from_bytes(message_digest(message), "big")
    q = (point_r * s + SECP256k1.generator * (-e % n)) * pow(r, -1, n)
    return q.x(), q.y()


@pytest.mark.parametrize("suffix", ["", "a", "b", "c"])
def test_header_carries_recovery_id(wallet, suffix):
    message = MESSAGE + suffix
    signature = sign_message(message, wallet["private_key"])
    assert base64.b64decode(signature)[0] in (31, 32, 33, 34)
    point = VerifyingKey.from_string(bytes.fromhex(wallet["public_key"]), curve=SECP256k1).pubkey.point
    assert _recover_from_header(signature, message) == (point.x(), point.y())


def test_header_out_of_range_rejected(wallet):
    raw = base64.b64decode(sign_message(MESSAGE, wallet["private_key"]))
    tampered = base64.b64encode(bytes([0]) + raw[1:]).decode()
    assert not verify_message(MESSAGE, wallet["address"], tampered)
