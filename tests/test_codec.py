import pytest

from starledger.codec import decode, encode
from starledger.exceptions import SerializationFailure


def test_encode_is_hex_json():
    token = encode({"data": "Genesis Block"})
    assert token == '{"data": "Genesis Block"}'.encode("utf-8").hex()


@pytest.mark.parametrize("value", [
    {"owner": "abc", "star": {"dec": "68° 52' 56.9", "ra": "16h 29m 1.0s", "story": "Found it"}},
    ["a", 1, None, True],
    "plain string",
])
def test_roundtrip(value):
    assert decode(encode(value)) == value


def test_encode_rejects_unserializable():
    with pytest.raises(SerializationFailure):
        encode({"bad": object()})


@pytest.mark.parametrize("token", ["zz", "abc", "7b", None])
def test_decode_rejects_invalid_tokens(token):
    with pytest.raises(SerializationFailure):
        decode(token)
