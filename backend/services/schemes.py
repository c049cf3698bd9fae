"""Bit layouts for the six 96-bit EPC schemes.

Partitioned schemes (SGTIN, SSCC, SGLN, GRAI, GIAI):

    header(8) | filter(3) | partition(3) | company prefix | secondary field | trailing field

The partition row fixes the widths of the company prefix and the secondary
field. The trailing field is the 38-bit serial, except for SSCC where the
serial reference absorbs the serial and 21 zero bits remain.

GID-96 has a flat layout:

    header(8) | general manager(28) | object class(24) | serial(36)

Codecs are stateless; module-level instances are shared by every call.
"""

import logging
from typing import Union

from models import (
    GiaiIdentifier,
    GidIdentifier,
    GraiIdentifier,
    PartitionedIdentifier,
    Scheme,
    SglnIdentifier,
    SgtinIdentifier,
    SsccIdentifier,
)
from services.bitstream import BitReader, BitWriter
from services.check_digit import SSCC_STEM_DIGITS, GTIN_STEM_DIGITS, gtin14_from_stem, sscc18_from_stem
from services.exceptions import FieldOverflow, HeaderMismatch, MalformedDigits, UnsupportedLength
from services.partitions import (
    GIAI_PARTITIONS,
    GRAI_PARTITIONS,
    SGLN_PARTITIONS,
    SGTIN_PARTITIONS,
    SSCC_PARTITIONS,
    PartitionTable,
    select_by_index,
    select_by_prefix_length,
)
from services.urn import build_urn

logger = logging.getLogger(__name__)

TAG_BYTES = 12
TAG_BITS = TAG_BYTES * 8

HEADER_BITS = 8
FILTER_BITS = 3
PARTITION_BITS = 3
SERIAL_BITS = 38
SSCC_RESERVED_BITS = 21

GID_MANAGER_BITS = 28
GID_CLASS_BITS = 24
GID_SERIAL_BITS = 36


def format_digits(value: int, width: int, field: str) -> str:
    """Render an unsigned field as exactly width decimal digits.

    Raises:
        FieldOverflow: If the value needs more than width digits.
    """
    if value >= 10 ** width:
        raise FieldOverflow(f"{field} value {value} exceeds {width} digits")
    return f"{value:0{width}d}"


def parse_digits(digits: str, width: int, field: str) -> int:
    """Parse a decimal field that must fit in width digits."""
    if not digits.isdigit() or not digits.isascii():
        raise MalformedDigits(f"{field} must be a decimal digit string, got {digits!r}")
    value = int(digits)
    if value >= 10 ** width:
        raise FieldOverflow(f"{field} value {value} exceeds {width} digits")
    return value


def parse_number(digits: str, field: str) -> int:
    """Parse an unpadded decimal field; the bit writer enforces the width."""
    if not digits.isdigit() or not digits.isascii():
        raise MalformedDigits(f"{field} must be a decimal digit string, got {digits!r}")
    return int(digits)


def check_tag_length(raw: bytes) -> None:
    if len(raw) != TAG_BYTES:
        raise UnsupportedLength(len(raw))


class PartitionedCodec:
    """Codec for a partitioned 96-bit scheme.

    Subclasses set the class attributes and build the scheme's identifier.
    """

    scheme: Scheme
    header: int
    urn_scheme: str
    partitions: PartitionTable
    secondary_field: str
    reference_attr: str
    trailing_bits: int = SERIAL_BITS

    def decode(self, raw: bytes) -> PartitionedIdentifier:
        """Decode a 12-byte tag.

        Args:
            raw: Tag memory (EPC bank, without PC/CRC words).

        Returns:
            The scheme's identifier model.

        Raises:
            UnsupportedLength: If raw is not 12 bytes.
            HeaderMismatch: If the header is not this scheme's.
            InvalidPartitionIndex: If the partition value has no row.
            FieldOverflow: If a numeric field is wider than its digit count.
        """
        check_tag_length(raw)
        reader = BitReader(raw)

        header = reader.read_bits(HEADER_BITS)
        if header != self.header:
            raise HeaderMismatch(self.header, header)

        filter_value = reader.read_bits(FILTER_BITS)
        row = select_by_index(self.partitions, reader.read_bits(PARTITION_BITS))

        company_prefix = format_digits(
            reader.read_bits(row.company_prefix_bits), row.company_prefix_digits, "company prefix"
        )
        secondary = format_digits(
            reader.read_bits(row.other_field_bits), row.other_field_digits, self.secondary_field
        )
        trailing = reader.read_bits(self.trailing_bits)

        identifier = self._build(
            header=header,
            filter_value=filter_value,
            partition=row.index,
            company_prefix=company_prefix,
            secondary=secondary,
            trailing=trailing,
        )
        logger.debug(f"Decoded {self.scheme.value} → {identifier.urn}")
        return identifier

    def encode(self, filter_value: int, company_prefix: str, reference: str, serial: str = "0") -> bytes:
        """Pack fields into a 12-byte tag.

        The partition is chosen from the company prefix digit count.

        Raises:
            InvalidPrefixLength: If the company prefix is not 6..12 digits.
            MalformedDigits: If a field is not a digit string.
            FieldOverflow: If a value does not fit its field.
        """
        row = select_by_prefix_length(self.partitions, len(company_prefix))

        writer = BitWriter()
        writer.write_bits(self.header, HEADER_BITS)
        writer.write_bits(filter_value, FILTER_BITS)
        writer.write_bits(row.index, PARTITION_BITS)
        writer.write_bits(
            parse_digits(company_prefix, row.company_prefix_digits, "company prefix"), row.company_prefix_bits
        )
        writer.write_bits(
            parse_digits(reference, row.other_field_digits, self.secondary_field), row.other_field_bits
        )
        writer.write_bits(self._trailing_value(serial), self.trailing_bits)

        raw = writer.to_bytes()
        logger.debug(f"Encoded {self.scheme.value} {company_prefix}.{reference}.{serial} → {raw.hex().upper()}")
        return raw

    def _trailing_value(self, serial: str) -> int:
        return parse_number(serial, "serial")

    def _build(
        self,
        header: int,
        filter_value: int,
        partition: int,
        company_prefix: str,
        secondary: str,
        trailing: int,
    ) -> PartitionedIdentifier:
        raise NotImplementedError


class Sgtin96Codec(PartitionedCodec):
    scheme = Scheme.SGTIN_96
    header = 0x30
    urn_scheme = "sgtin"
    partitions = SGTIN_PARTITIONS
    secondary_field = "item reference"
    reference_attr = "item_reference"

    def _build(self, header, filter_value, partition, company_prefix, secondary, trailing):
        # The item reference leads with the GTIN indicator digit
        stem = (secondary[0] + company_prefix + secondary[1:]).zfill(GTIN_STEM_DIGITS)
        serial = str(trailing)
        return SgtinIdentifier(
            header=header,
            filter=filter_value,
            partition=partition,
            company_prefix=company_prefix,
            item_reference=secondary,
            serial=serial,
            urn=build_urn(self.urn_scheme, company_prefix, secondary, serial),
            gtin14=gtin14_from_stem(stem),
        )


class Sscc96Codec(PartitionedCodec):
    scheme = Scheme.SSCC_96
    header = 0x31
    urn_scheme = "sscc"
    partitions = SSCC_PARTITIONS
    secondary_field = "serial reference"
    reference_attr = "serial_reference"
    trailing_bits = SSCC_RESERVED_BITS

    def encode(self, filter_value: int, company_prefix: str, reference: str, serial: str = "0") -> bytes:
        # Extension digit + serial reference must fit what the prefix leaves of the 17-digit stem
        row = select_by_prefix_length(self.partitions, len(company_prefix))
        significant = SSCC_STEM_DIGITS - row.company_prefix_digits
        if parse_number(reference, self.secondary_field) >= 10 ** significant:
            raise FieldOverflow(f"serial reference {reference} exceeds {significant} digits")
        return super().encode(filter_value, company_prefix, reference, serial)

    def _trailing_value(self, serial: str) -> int:
        return 0

    def _build(self, header, filter_value, partition, company_prefix, secondary, trailing):
        significant = SSCC_STEM_DIGITS - len(company_prefix)
        padding, reference = secondary[:-significant], secondary[-significant:]
        if padding.strip("0"):
            raise FieldOverflow(f"serial reference {secondary} exceeds {significant} digits")

        stem = reference[0] + company_prefix + reference[1:]
        return SsccIdentifier(
            header=header,
            filter=filter_value,
            partition=partition,
            company_prefix=company_prefix,
            serial_reference=secondary,
            sscc=sscc18_from_stem(stem),
            urn=build_urn(self.urn_scheme, company_prefix.lstrip("0") or "0", secondary.lstrip("0") or "0"),
        )


class Sgln96Codec(PartitionedCodec):
    scheme = Scheme.SGLN_96
    header = 0x32
    urn_scheme = "sgln"
    partitions = SGLN_PARTITIONS
    secondary_field = "location reference"
    reference_attr = "location_reference"

    def _build(self, header, filter_value, partition, company_prefix, secondary, trailing):
        extension = str(trailing)
        return SglnIdentifier(
            header=header,
            filter=filter_value,
            partition=partition,
            company_prefix=company_prefix,
            location_reference=secondary,
            serial=extension,
            urn=build_urn(self.urn_scheme, company_prefix, secondary, extension),
        )


class Grai96Codec(PartitionedCodec):
    scheme = Scheme.GRAI_96
    header = 0x33
    urn_scheme = "grai"
    partitions = GRAI_PARTITIONS
    secondary_field = "asset type"
    reference_attr = "asset_type"

    def _build(self, header, filter_value, partition, company_prefix, secondary, trailing):
        serial = str(trailing)
        return GraiIdentifier(
            header=header,
            filter=filter_value,
            partition=partition,
            company_prefix=company_prefix,
            asset_type=secondary,
            serial=serial,
            urn=build_urn(self.urn_scheme, company_prefix, secondary, serial),
        )


class Giai96Codec(PartitionedCodec):
    scheme = Scheme.GIAI_96
    header = 0x34
    urn_scheme = "giai"
    partitions = GIAI_PARTITIONS
    secondary_field = "asset reference"
    reference_attr = "reference"

    def _build(self, header, filter_value, partition, company_prefix, secondary, trailing):
        serial = str(trailing)
        return GiaiIdentifier(
            header=header,
            filter=filter_value,
            partition=partition,
            company_prefix=company_prefix,
            reference=secondary,
            serial=serial,
            urn=build_urn(self.urn_scheme, company_prefix, secondary, serial),
        )


class Gid96Codec:
    """Codec for GID-96 (no filter, no partition)."""

    scheme = Scheme.GID_96
    header = 0x35
    urn_scheme = "gid"

    def decode(self, raw: bytes) -> GidIdentifier:
        check_tag_length(raw)
        reader = BitReader(raw)

        header = reader.read_bits(HEADER_BITS)
        if header != self.header:
            raise HeaderMismatch(self.header, header)

        general_manager = str(reader.read_bits(GID_MANAGER_BITS))
        object_class = str(reader.read_bits(GID_CLASS_BITS))
        serial = str(reader.read_bits(GID_SERIAL_BITS))

        identifier = GidIdentifier(
            header=header,
            general_manager=general_manager,
            object_class=object_class,
            serial=serial,
            urn=build_urn(self.urn_scheme, general_manager, object_class, serial),
        )
        logger.debug(f"Decoded {self.scheme.value} → {identifier.urn}")
        return identifier

    def encode(self, general_manager: str, object_class: str, serial: str = "0") -> bytes:
        writer = BitWriter()
        writer.write_bits(self.header, HEADER_BITS)
        writer.write_bits(parse_number(general_manager, "general manager"), GID_MANAGER_BITS)
        writer.write_bits(parse_number(object_class, "object class"), GID_CLASS_BITS)
        writer.write_bits(parse_number(serial, "serial"), GID_SERIAL_BITS)
        return writer.to_bytes()


SchemeCodec = Union[PartitionedCodec, Gid96Codec]

SGTIN_96 = Sgtin96Codec()
SSCC_96 = Sscc96Codec()
SGLN_96 = Sgln96Codec()
GRAI_96 = Grai96Codec()
GIAI_96 = Giai96Codec()
GID_96 = Gid96Codec()

CODECS: tuple[SchemeCodec, ...] = (SGTIN_96, SSCC_96, SGLN_96, GRAI_96, GIAI_96, GID_96)

CODECS_BY_SCHEME: dict[Scheme, SchemeCodec] = {codec.scheme: codec for codec in CODECS}
