import pytest

from starledger.blocks import GENESIS_SENTINEL, Block
from starledger.codec import encode
from starledger.exceptions import SerializationFailure


def _sealed_block(data, height=1):
    block = Block(data)
    block.height = height
    block.time = 1_700_000_000_000
    block.previous_block_hash = "0" * 64
    block.hash = block.compute_hash()
    return block


def test_new_block_defaults():
    block = Block({"owner": "addr", "star": {"story": "x"}})
    assert block.hash is None
    assert block.height == 0
    assert block.time == 0
    assert block.previous_block_hash is None
    assert block.body == encode({"owner": "addr", "star": {"story": "x"}})


def test_unserializable_data_is_rejected():
    with pytest.raises(SerializationFailure):
        Block({"star": {1, 2, 3}})


def test_hash_ignores_stored_hash():
    block = _sealed_block({"owner": "addr"})
    first = block.hash
    block.hash = "something else"
    assert block.compute_hash() == first


def test_validate_intact_block():
    block = _sealed_block({"owner": "addr"})
    assert block.validate() is True
    # repeated validation keeps agreeing
    assert block.validate() is True


def test_validate_detects_tampering_without_rewriting_hash():
    block = _sealed_block({"owner": "addr", "star": "original"})
    stored = block.hash
    block.body = encode({"owner": "addr", "star": "forged"})
    assert block.validate() is False
    assert block.hash == stored
    assert block.validate() is False


def test_validate_detects_changed_height_or_time():
    block = _sealed_block({"owner": "addr"})
    block.time += 1
    assert block.validate() is False


def test_get_data_decodes_body():
    block = _sealed_block({"owner": "addr", "star": "s"}, height=3)
    assert block.get_data() == {"owner": "addr", "star": "s"}


def test_genesis_decodes_to_sentinel():
    block = _sealed_block({"data": "Genesis Block"}, height=0)
    assert block.get_data() == GENESIS_SENTINEL


def test_get_data_rejects_corrupt_body():
    block = _sealed_block({"owner": "addr"})
    block.body = "not hex"
    with pytest.raises(SerializationFailure):
        block.get_data()


def test_to_dict_wire_keys():
    block = _sealed_block({"owner": "addr"})
    assert set(block.to_dict()) == {"hash", "height", "body", "time", "previousBlockHash"}
