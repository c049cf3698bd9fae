"""GS1 partition tables for the 96-bit EPC schemes.

The 3-bit partition value tells a decoder how the bits after the filter are
split between the company prefix and the scheme's secondary field
(item reference, location reference, asset type, ...).

    ┌─────────┬──────────────┬───────────────┐
    │PARTITION│COMPANY PREFIX│SECONDARY FIELD│
    │    3    │    20-40     │  4-24 / 21-41 │
    └─────────┴──────────────┴───────────────┘
"""

from typing import NamedTuple

from services.exceptions import InvalidPartitionIndex, InvalidPrefixLength


class PartitionRow(NamedTuple):
    """Bit and digit allocation for one partition value."""

    index: int
    company_prefix_bits: int
    other_field_bits: int
    company_prefix_digits: int
    other_field_digits: int


PartitionTable = tuple[PartitionRow, ...]

# Company prefix lengths a partition table can express
PREFIX_LENGTHS = range(6, 13)


def _build_table(rows: list[tuple[int, int, int, int]]) -> PartitionTable:
    return tuple(PartitionRow(index, *row) for index, row in enumerate(rows))


# (company prefix bits, other field bits, company prefix digits, other field digits)
STANDARD_PARTITIONS: PartitionTable = _build_table([
    (40, 4, 12, 1),
    (37, 7, 11, 2),
    (34, 10, 10, 3),
    (30, 14, 9, 4),
    (27, 17, 8, 5),
    (24, 20, 7, 6),
    (20, 24, 6, 7),
])

# SSCC has no serial field, the serial reference takes the extra bits
SSCC_PARTITIONS: PartitionTable = _build_table([
    (40, 21, 12, 6),
    (37, 24, 11, 7),
    (34, 27, 10, 8),
    (30, 31, 9, 9),
    (27, 34, 8, 10),
    (24, 37, 7, 11),
    (20, 41, 6, 12),
])

SGTIN_PARTITIONS = STANDARD_PARTITIONS
SGLN_PARTITIONS = STANDARD_PARTITIONS
GRAI_PARTITIONS = STANDARD_PARTITIONS
GIAI_PARTITIONS = STANDARD_PARTITIONS


def select_by_index(table: PartitionTable, index: int) -> PartitionRow:
    """Look up a row by the partition value read from a tag."""
    if not 0 <= index < len(table):
        raise InvalidPartitionIndex(f"Invalid partition: {index}")
    return table[index]


def select_by_prefix_length(table: PartitionTable, digits: int) -> PartitionRow:
    """Look up the row whose company prefix has the given digit count."""
    for row in table:
        if row.company_prefix_digits == digits:
            return row
    raise InvalidPrefixLength(f"Invalid Company Prefix length: {digits}")
