"""Tests for the GS1 partition tables."""

import pytest

from services.exceptions import InvalidPartitionIndex, InvalidPrefixLength
from services.partitions import (
    PREFIX_LENGTHS,
    SSCC_PARTITIONS,
    STANDARD_PARTITIONS,
    PartitionTable,
    select_by_index,
    select_by_prefix_length,
)
from services.schemes import (
    CODECS,
    FILTER_BITS,
    GID_CLASS_BITS,
    GID_MANAGER_BITS,
    GID_SERIAL_BITS,
    HEADER_BITS,
    PARTITION_BITS,
    TAG_BITS,
    PartitionedCodec,
)

PARTITIONED_CODECS = [codec for codec in CODECS if isinstance(codec, PartitionedCodec)]
TABLES = {"standard": STANDARD_PARTITIONS, "sscc": SSCC_PARTITIONS}


class TestTableShape:
    """Every row must describe a complete 96-bit tag."""

    @pytest.mark.parametrize("codec", PARTITIONED_CODECS, ids=lambda c: c.scheme.value)
    def test_rows_fill_96_bits(self, codec: PartitionedCodec) -> None:
        for row in codec.partitions:
            total = (
                HEADER_BITS
                + FILTER_BITS
                + PARTITION_BITS
                + row.company_prefix_bits
                + row.other_field_bits
                + codec.trailing_bits
            )
            assert total == TAG_BITS, f"{codec.scheme.value} partition {row.index}"

    def test_gid_layout_fills_96_bits(self) -> None:
        assert HEADER_BITS + GID_MANAGER_BITS + GID_CLASS_BITS + GID_SERIAL_BITS == TAG_BITS

    @pytest.mark.parametrize("table", list(TABLES.values()), ids=list(TABLES))
    def test_indices_are_positional(self, table: PartitionTable) -> None:
        assert [row.index for row in table] == list(range(7))

    @pytest.mark.parametrize("table", list(TABLES.values()), ids=list(TABLES))
    def test_prefix_digits_decrease(self, table: PartitionTable) -> None:
        """Prefix digits go 12 down to 6 while the other field grows."""
        assert [row.company_prefix_digits for row in table] == list(range(12, 5, -1))
        other = [row.other_field_digits for row in table]
        assert other == sorted(other)

    def test_standard_digit_totals(self) -> None:
        """Company prefix plus secondary field always span 13 digits."""
        for row in STANDARD_PARTITIONS:
            assert row.company_prefix_digits + row.other_field_digits == 13

    def test_sscc_digit_totals(self) -> None:
        for row in SSCC_PARTITIONS:
            assert row.company_prefix_digits + row.other_field_digits == 18

    @pytest.mark.parametrize("table", list(TABLES.values()), ids=list(TABLES))
    def test_largest_decimal_fits_bits(self, table: PartitionTable) -> None:
        """The widest decimal value of each field must fit its bits."""
        for row in table:
            assert 10**row.company_prefix_digits - 1 < 2**row.company_prefix_bits
            assert 10**row.other_field_digits - 1 < 2**row.other_field_bits


class TestLookup:
    """Test cases for partition row selection."""

    def test_select_by_index(self) -> None:
        row = select_by_index(STANDARD_PARTITIONS, 5)
        assert row.company_prefix_bits == 24
        assert row.other_field_bits == 20
        assert row.company_prefix_digits == 7

    @pytest.mark.parametrize("index", [-1, 7])
    def test_select_by_invalid_index(self, index: int) -> None:
        with pytest.raises(InvalidPartitionIndex):
            select_by_index(STANDARD_PARTITIONS, index)

    @pytest.mark.parametrize("digits", list(PREFIX_LENGTHS))
    def test_select_by_prefix_length(self, digits: int) -> None:
        """Prefix lengths 6..12 map to partitions 6..0."""
        assert select_by_prefix_length(STANDARD_PARTITIONS, digits).index == 12 - digits
        assert select_by_prefix_length(SSCC_PARTITIONS, digits).index == 12 - digits

    @pytest.mark.parametrize("digits", [0, 5, 13])
    def test_select_by_invalid_prefix_length(self, digits: int) -> None:
        with pytest.raises(InvalidPrefixLength):
            select_by_prefix_length(STANDARD_PARTITIONS, digits)
