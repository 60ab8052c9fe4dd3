from morphozoic.core.rng import LegacyRandom, to_int32
from morphozoic.field.hashing import float_bits


def test_matches_java_util_random_sequence():
    rng = LegacyRandom(0)
    assert rng.next_int() == -1155484576
    assert rng.next_int() == -723955400
    rng = LegacyRandom(42)
    assert rng.next_int() == -1170105035
    assert rng.next_int() == 234785527


def test_negative_seed_is_sign_extended():
    assert LegacyRandom(-7).next_int() == 1155869324


def test_set_seed_restarts_sequence():
    rng = LegacyRandom(42)
    first = [rng.next_int() for _ in range(3)]
    rng.set_seed(42)
    assert [rng.next_int() for _ in range(3)] == first


def test_to_int32_wraps():
    assert to_int32(0xFFFFFFFF) == -1
    assert to_int32(0x7FFFFFFF) == 2147483647
    assert to_int32(1 << 32) == 0


def test_float_bits():
    assert float_bits(1.0) == 0x3F800000
    assert float_bits(0.5) == 0x3F000000
    assert float_bits(-2.0) == to_int32(0xC0000000)
