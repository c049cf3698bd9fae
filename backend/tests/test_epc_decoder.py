"""Tests for the EPC decoder service.

Tests hex normalization, header dispatch and batch decoding.
"""

import pytest

from services.epc_decoder import (
    batch_decode_epcs,
    decode_bytes,
    decode_hex,
    hex_to_bytes,
    is_valid_epc,
    normalize_epc,
    select_codec,
)
from services.exceptions import MalformedHexInput, UnknownHeader, UnsupportedLength
from services.schemes import GID_96, SGTIN_96

SGTIN_HEX = "3034257BF7194E4000001A85"


class TestNormalizeEpc:
    """Test cases for EPC normalization."""

    def test_normalize_uppercase(self) -> None:
        """Should convert to uppercase."""
        assert normalize_epc("3034257bf7194e4000001a85") == SGTIN_HEX

    def test_normalize_removes_0x_prefix(self) -> None:
        """Should remove 0x prefix."""
        assert normalize_epc("0x3034257BF7194E4000001A85") == SGTIN_HEX
        assert normalize_epc("0X3034257BF7194E4000001A85") == SGTIN_HEX

    def test_normalize_strips_whitespace(self) -> None:
        """Should strip whitespace."""
        assert normalize_epc("  3034257BF7194E4000001A85  ") == SGTIN_HEX

    def test_normalize_pads_odd_length(self) -> None:
        """Odd-length input gets a leading zero."""
        assert normalize_epc("abc") == "0ABC"

    def test_normalize_empty(self) -> None:
        """Should handle empty string."""
        assert normalize_epc("") == ""

    def test_hex_to_bytes_rejects_non_hex(self) -> None:
        with pytest.raises(MalformedHexInput):
            hex_to_bytes("3034257BF7194E4000001AZZ")


class TestDispatch:
    """Test cases for header-based codec selection."""

    @pytest.mark.parametrize(
        "header,scheme",
        [
            (0x30, "sgtin-96"),
            (0x31, "sscc-96"),
            (0x32, "sgln-96"),
            (0x33, "grai-96"),
            (0x34, "giai-96"),
            (0x35, "gid-96"),
        ],
    )
    def test_header_selects_scheme(self, header: int, scheme: str) -> None:
        identifier = decode_bytes(bytes([header]) + bytes(11))

        assert identifier.scheme == scheme
        assert identifier.header == header

    @pytest.mark.parametrize("header", [0x00, 0x2F, 0x36, 0xE2, 0xFF])
    def test_unknown_header(self, header: int) -> None:
        with pytest.raises(UnknownHeader) as exc_info:
            decode_bytes(bytes([header]) + bytes(11))

        assert exc_info.value.header == header

    @pytest.mark.parametrize("length", [0, 1, 11, 13, 96])
    def test_unsupported_length(self, length: int) -> None:
        """Only 12-byte buffers are accepted, whatever the header."""
        with pytest.raises(UnsupportedLength) as exc_info:
            decode_bytes(bytes([0x30] * length))

        assert exc_info.value.length == length

    def test_length_checked_before_header(self) -> None:
        with pytest.raises(UnsupportedLength):
            select_codec(bytes([0xFF] * 13))

    def test_select_codec(self) -> None:
        assert select_codec(bytes.fromhex(SGTIN_HEX)) is SGTIN_96
        assert select_codec(bytes([0x35]) + bytes(11)) is GID_96


class TestDecodeHex:
    """Test cases for hex string decoding."""

    def test_decode_reference_tag(self) -> None:
        identifier = decode_hex(SGTIN_HEX)
        assert identifier.urn == "urn:epc:id:sgtin:0614141.812345.6789"

    def test_decode_accepts_prefix_and_case(self) -> None:
        assert decode_hex("0x3034257bf7194e4000001a85").urn == "urn:epc:id:sgtin:0614141.812345.6789"

    def test_decode_empty(self) -> None:
        with pytest.raises(UnsupportedLength):
            decode_hex("")

    def test_decode_short_tag(self) -> None:
        """A 64-bit tag is not decodable."""
        with pytest.raises(UnsupportedLength):
            decode_hex("3034257BF7194E40")


class TestIsValidEpc:
    """Test cases for EPC validation."""

    def test_valid_epc(self) -> None:
        assert is_valid_epc(SGTIN_HEX) is True

    def test_invalid_epc(self) -> None:
        """Should reject invalid input."""
        assert is_valid_epc("") is False
        assert is_valid_epc("not-hex") is False
        assert is_valid_epc("3034257BF7194E40") is False
        assert is_valid_epc("FF34257BF7194E4000001A85") is False

    def test_known_header_with_bad_fields(self) -> None:
        """A recognised header is not enough; the fields must decode too."""
        # SGTIN header, partition 7
        assert is_valid_epc("303C00000000000000000000") is False
        # SGTIN partition 0 with a 13-digit company prefix
        assert is_valid_epc("3023FFFFFFFFFC0000000000") is False


class TestBatchDecode:
    """Test cases for batch decoding."""

    def test_results_in_input_order(self) -> None:
        items = batch_decode_epcs([SGTIN_HEX, "zz", "360000000000000000000000"])

        assert [item.epc for item in items] == [SGTIN_HEX, "zz", "360000000000000000000000"]
        assert [item.ok for item in items] == [True, False, False]
        assert items[0].identifier.urn == "urn:epc:id:sgtin:0614141.812345.6789"
        assert items[1].error["code"] == "MalformedHexInput"
        assert items[2].error["code"] == "UnknownHeader"
        assert items[2].identifier is None

    def test_empty_batch(self) -> None:
        assert batch_decode_epcs([]) == []
