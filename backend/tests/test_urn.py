"""Tests for URN translation and parsing."""

import pytest

from services.exceptions import InvalidPrefixLength, MalformedDigits, MalformedUrn
from services.urn import (
    build_urn,
    grai_to_urn,
    parse_urn,
    sgln_to_urn,
    sgtin_to_urn,
    split_urn,
    sscc_to_urn,
)


class TestTranslators:
    """Test cases for barcode key → URN translation."""

    def test_sgtin(self) -> None:
        """The indicator digit leads the item reference."""
        assert sgtin_to_urn("80614141123458", "6789", 7) == "urn:epc:id:sgtin:0614141.812345.6789"

    def test_sgtin_pads_gtin13(self) -> None:
        assert sgtin_to_urn("0614141123452", "1", 7) == "urn:epc:id:sgtin:0614141.012345.1"

    def test_sgtin_prefix_length_12(self) -> None:
        assert sgtin_to_urn("80614141123458", "1", 12) == "urn:epc:id:sgtin:061414112345.8.1"

    def test_sscc(self) -> None:
        """The extension digit leads the serial reference."""
        assert sscc_to_urn("106141411234567897", 7) == "urn:epc:id:sscc:0614141.1123456789.0"

    def test_sgln(self) -> None:
        assert sgln_to_urn("0614141123452", "123", 7) == "urn:epc:id:sgln:0614141.012345.123"

    def test_grai(self) -> None:
        assert grai_to_urn("00614141123452", "12345", 7) == "urn:epc:id:grai:0614141.012345.12345"

    def test_sgln_prefix_length_12(self) -> None:
        """A 12-digit prefix leaves a single-digit zero location reference."""
        assert sgln_to_urn("0614141123452", "1", 12) == "urn:epc:id:sgln:061414112345.0.1"

    def test_grai_prefix_length_12(self) -> None:
        assert grai_to_urn("00614141123452", "5", 12) == "urn:epc:id:grai:061414112345.0.5"

    @pytest.mark.parametrize("length", [5, 13])
    def test_invalid_prefix_length(self, length: int) -> None:
        with pytest.raises(InvalidPrefixLength):
            sgtin_to_urn("80614141123458", "1", length)

    def test_non_digit_key(self) -> None:
        with pytest.raises(MalformedDigits):
            sgln_to_urn("06141411234AB", "1", 7)

    def test_key_too_long(self) -> None:
        with pytest.raises(MalformedDigits):
            sgtin_to_urn("806141411234580", "1", 7)


class TestParseUrn:
    """Test cases for URN parsing."""

    def test_sgtin(self) -> None:
        parsed = parse_urn("urn:epc:id:sgtin:0614141.812345.6789")

        assert parsed.scheme == "sgtin"
        assert parsed.company_prefix == "0614141"
        assert parsed.reference == "812345"
        assert parsed.serial == "6789"
        assert parsed.gtin14 == "06141418123456"

    def test_prefix_is_case_insensitive(self) -> None:
        parsed = parse_urn("URN:EPC:ID:SGLN:0614141.12345.0")

        assert parsed.scheme == "sgln"
        assert parsed.gtin14 is None

    @pytest.mark.parametrize("scheme", ["sgln", "grai", "giai"])
    def test_other_schemes(self, scheme: str) -> None:
        parsed = parse_urn(f"urn:epc:id:{scheme}:0614141.12345.1")
        assert parsed.scheme == scheme
        assert parsed.reference == "12345"

    @pytest.mark.parametrize(
        "urn",
        [
            "urn:epc:id:sgtin:0614141.812345",
            "urn:epc:id:sgtin:0614141.812345.6789.1",
            "urn:epc:id:sscc:0614141.1123456789",
            "urn:epc:id:gid:1.2.3",
            "urn:epc:tag:sgtin-96:1.0614141.812345.6789",
            "0614141.812345.6789",
            "urn:epc:id:sgtin",
        ],
    )
    def test_malformed(self, urn: str) -> None:
        with pytest.raises(MalformedUrn):
            parse_urn(urn)


class TestSplitUrn:
    """Test cases for generic URN splitting."""

    def test_split(self) -> None:
        assert split_urn("urn:epc:id:gid:1.2.3") == ("gid", ["1", "2", "3"])

    def test_build_then_split(self) -> None:
        urn = build_urn("sscc", "614141", "1123456789")
        assert split_urn(urn) == ("sscc", ["614141", "1123456789"])
