import os
import sys

import pytest

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sns_lookup.errors import ErrorType, IntegerOverflowError, InvalidLengthError
from sns_lookup.int_codec import Numberu32, Numberu64


@pytest.mark.parametrize("value", [0, 1, 0xFFFFFFFF])
def test_u32_roundtrip(value):
    encoded = Numberu32.encode(value)
    assert len(encoded) == 4
    assert Numberu32.decode(encoded) == value


def test_u32_little_endian_padding():
    assert Numberu32.encode(1) == b"\x01\x00\x00\x00"
    assert Numberu32.encode(0x0102) == b"\x02\x01\x00\x00"
    assert Numberu32.decode(b"\x00\x00\x00\x01") == 0x01000000


def test_u32_overflow():
    with pytest.raises(IntegerOverflowError) as exc:
        Numberu32.encode(0x1_0000_0000)
    assert exc.value.type == ErrorType.Overflow
    with pytest.raises(IntegerOverflowError):
        Numberu32.encode(-1)


def test_u32_invalid_length():
    with pytest.raises(InvalidLengthError) as exc:
        Numberu32.decode(b"\x00\x00\x00")
    assert exc.value.type == ErrorType.InvalidLength


def test_u64():
    assert Numberu64.encode(1) == b"\x01" + b"\x00" * 7
    assert Numberu64.decode(Numberu64.encode(2 ** 64 - 1)) == 2 ** 64 - 1
    with pytest.raises(IntegerOverflowError):
        Numberu64.encode(2 ** 64)
    with pytest.raises(InvalidLengthError):
        Numberu64.decode(b"\x00" * 4)
