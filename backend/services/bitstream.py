"""Bit-level access to EPC tag memory.

EPC fields are packed big-endian and MSB-first with no byte alignment, so a
12-byte SGTIN-96 tag is read as one 96-bit stream:

    header(8) | filter(3) | partition(3) | company prefix | item ref | serial(38)

BitReader and BitWriter each own a single cursor and are created per
decode/encode call.
"""

from services.exceptions import FieldOverflow, InsufficientBits, InvalidBitWidth

MAX_FIELD_BITS = 64


def _check_width(n: int) -> None:
    if n < 1 or n > MAX_FIELD_BITS:
        raise InvalidBitWidth(f"Field width must be 1..{MAX_FIELD_BITS} bits, requested {n}")


class BitReader:
    """Sequential MSB-first reader over a fixed byte buffer."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._value = int.from_bytes(self._data, "big")
        self.total_bits = len(self._data) * 8
        self.position = 0

    def read_bits(self, n: int) -> int:
        """Read the next n bits as an unsigned integer.

        Args:
            n: Field width in bits (1..64).

        Returns:
            Unsigned value of the field.

        Raises:
            InvalidBitWidth: If n is outside 1..64.
            InsufficientBits: If fewer than n bits remain.
        """
        _check_width(n)
        available = self.bits_remaining()
        if n > available:
            raise InsufficientBits(f"Not enough bits to read: requested {n}, available {available}")

        shift = self.total_bits - self.position - n
        value = (self._value >> shift) & ((1 << n) - 1)
        self.position += n
        return value

    def skip_bits(self, n: int) -> None:
        """Move the cursor by n bits, clamped to the buffer."""
        self.position = min(max(self.position + n, 0), self.total_bits)

    def bits_remaining(self) -> int:
        return self.total_bits - self.position


class BitWriter:
    """Append-only MSB-first bit sequence."""

    def __init__(self) -> None:
        self._value = 0
        self.position = 0

    def write_bits(self, value: int, n: int) -> None:
        """Append value as an n-bit unsigned field.

        Raises:
            InvalidBitWidth: If n is outside 1..64.
            FieldOverflow: If value is negative or needs more than n bits.
        """
        _check_width(n)
        if value < 0 or value >> n:
            raise FieldOverflow(f"Value {value} does not fit in {n} bits")

        self._value = (self._value << n) | value
        self.position += n

    def to_bytes(self) -> bytes:
        # Zero-fill the last partial byte
        pad = -self.position % 8
        return (self._value << pad).to_bytes((self.position + pad) // 8, "big")

    def to_hex(self) -> str:
        return self.to_bytes().hex().upper()
