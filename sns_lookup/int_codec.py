"""Fixed width little-endian unsigned integers (u32 / u64)."""

from construct import Int32ul, Int64ul

from .errors import IntegerOverflowError, InvalidLengthError


class FixedWidthUInt:
    """
    Codec for one integer width. Use the module level `Numberu32` and
    `Numberu64` instances rather than building new ones.
    """

    def __init__(self, width: int, layout, name: str):
        self.width = width
        self.layout = layout
        self.name = name
        self.max_value = (1 << (8 * width)) - 1

    def encode(self, value: int) -> bytes:
        if value < 0 or value > self.max_value:
            raise IntegerOverflowError(f"{value} does not fit in {self.name}")
        return self.layout.build(value)

    def decode(self, buffer: bytes) -> int:
        if len(buffer) != self.width:
            raise InvalidLengthError(f"Invalid buffer length for {self.name}: {len(buffer)}")
        return self.layout.parse(bytes(buffer))

    def __repr__(self):
        return f"FixedWidthUInt({self.name})"


Numberu32 = FixedWidthUInt(4, Int32ul, "u32")
Numberu64 = FixedWidthUInt(8, Int64ul, "u64")
