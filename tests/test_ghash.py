import pytest

from gcmcipher.ghash import GHash

ONE = bytes([0x80]) + bytes(15)
X = bytes([0x40]) + bytes(15)
ZERO = bytes(16)
KEY = bytes.fromhex("66e94bd4ef8a2c3b884cfa59ca342b2e")
BLOCK_A = bytes.fromhex("0388dace60b6a392f328c2b971b2fe78")
BLOCK_B = bytes.fromhex("42831ec2217774244b7221b784d0d49c")


def _hash(key, *blocks):
    g = GHash(key)
    g.update(list(blocks))
    return g.finalize()


def _xor(a, b):
    return bytes(x ^ y for x, y in zip(a, b))


def test_fresh_state_is_zero():
    assert GHash(KEY).finalize() == ZERO


def test_identity_key_returns_block():
    assert _hash(ONE, BLOCK_A) == BLOCK_A


def test_identity_key_two_blocks_xor():
    assert _hash(ONE, BLOCK_A, BLOCK_B) == _xor(BLOCK_A, BLOCK_B)


def test_zero_key_annihilates():
    assert _hash(ZERO, BLOCK_A, BLOCK_B) == ZERO


def test_multiply_by_x_shifts():
    assert _hash(X, ONE) == X


def test_multiply_by_x_reduces():
    top = bytes(15) + b"\x01"
    assert _hash(X, top) == bytes([0xE1]) + bytes(15)


def test_single_block_commutes():
    assert _hash(KEY, BLOCK_A) == _hash(BLOCK_A, KEY)


def test_linear_in_block():
    combined = _hash(KEY, _xor(BLOCK_A, BLOCK_B))
    assert combined == _xor(_hash(KEY, BLOCK_A), _hash(KEY, BLOCK_B))


def test_update_accepts_concatenated_bytes():
    g = GHash(KEY)
    g.update(BLOCK_A + BLOCK_B)
    assert g.finalize() == _hash(KEY, BLOCK_A, BLOCK_B)


def test_update_padded_matches_zero_padding():
    data = BLOCK_A + BLOCK_B[:5]
    padded = GHash(KEY)
    padded.update_padded(data)
    assert padded.finalize() == _hash(KEY, BLOCK_A, BLOCK_B[:5] + bytes(11))


def test_update_padded_empty_is_noop():
    g = GHash(KEY)
    g.update_padded(b"")
    assert g.finalize() == ZERO


def test_copy_is_independent():
    g = GHash(KEY)
    g.update([BLOCK_A])
    clone = g.copy()
    clone.update([BLOCK_B])
    assert g.finalize() == _hash(KEY, BLOCK_A)
    assert clone.finalize() == _hash(KEY, BLOCK_A, BLOCK_B)


def test_finalize_does_not_change_state():
    g = GHash(KEY)
    g.update([BLOCK_A])
    first = g.finalize()
    assert g.finalize() == first


def test_bad_key_length():
    with pytest.raises(ValueError):
        GHash(bytes(15))


def test_bad_block_length():
    with pytest.raises(ValueError):
        GHash(KEY).update([bytes(15)])


def test_bad_concatenated_length():
    with pytest.raises(ValueError):
        GHash(KEY).update(bytes(17))