"""Error taxonomy for the EPC codec.

Every failure raised by the codec derives from EpcError so callers (and the
HTTP layer) can handle the whole family with a single except clause.
"""


class EpcError(ValueError):
    """Base class for all EPC encode/decode failures."""


class MalformedHexInput(EpcError):
    """Input contains characters that are not hex digits."""


class UnsupportedLength(EpcError):
    """Raw tag buffer is not exactly 96 bits."""

    def __init__(self, length: int) -> None:
        super().__init__(f"Unsupported EPC length: {length} bytes")
        self.length = length


class UnknownHeader(EpcError):
    """First byte of the tag matches no known scheme."""

    def __init__(self, header: int) -> None:
        super().__init__(f"Unsupported 96-bit EPC header: 0x{header:02X}")
        self.header = header


class HeaderMismatch(EpcError):
    """A codec was handed a tag carrying another scheme's header."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Header mismatch: expected 0x{expected:02X} got 0x{actual:02X}")
        self.expected = expected
        self.actual = actual


class InvalidPartitionIndex(EpcError):
    """Partition value has no row in the scheme's table."""


class InvalidPrefixLength(EpcError):
    """Company prefix digit count is outside 6..12."""


class InvalidBitWidth(EpcError):
    """Requested field width is outside 1..64 bits."""


class InsufficientBits(EpcError):
    """Field extends past the end of the buffer (corrupt or truncated tag)."""


class FieldOverflow(EpcError):
    """Value does not fit in its bit or digit width."""


class MalformedDigits(EpcError):
    """A field that must be a decimal digit string is not."""


class MalformedUrn(EpcError):
    """URN has an unknown scheme prefix or the wrong number of components."""


class UnsupportedApplicationIdentifier(EpcError):
    """Encode request uses an AI other than 01, 00, 414 or 8003."""


class UnsupportedScheme(EpcError):
    """Scheme name does not match any codec."""
