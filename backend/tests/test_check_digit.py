"""Tests for the GS1 mod-10 check digit."""

import pytest

from services.check_digit import (
    gs1_check_digit,
    gtin14_from_stem,
    has_valid_check_digit,
    sscc18_from_stem,
)


class TestCheckDigit:
    """Test cases for check digit calculation."""

    @pytest.mark.parametrize(
        "stem,expected",
        [
            ("0000000000000", 0),
            ("0614141123451", 7),
            ("8061414112345", 8),
            ("0061414112345", 2),
            ("0614141812345", 6),
        ],
    )
    def test_known_stems(self, stem: str, expected: int) -> None:
        assert gs1_check_digit(stem) == expected

    def test_ignores_non_digits(self) -> None:
        """Separators in a printed barcode should not change the result."""
        assert gs1_check_digit("806-1414 112345") == 8

    def test_result_is_single_digit(self) -> None:
        for stem in ("1", "99", "1234567890123", "99999999999999999"):
            assert 0 <= gs1_check_digit(stem) <= 9

    def test_gtin14_from_stem(self) -> None:
        assert gtin14_from_stem("0614141123451") == "06141411234517"

    def test_gtin14_pads_short_stem(self) -> None:
        assert gtin14_from_stem("614141123451") == "06141411234517"

    def test_sscc18_from_stem(self) -> None:
        assert sscc18_from_stem("10614141123456789") == "106141411234567897"


class TestHasValidCheckDigit:
    """Test cases for full-key validation."""

    def test_valid(self) -> None:
        assert has_valid_check_digit("00614141123452") is True
        assert has_valid_check_digit("80614141123458") is True

    def test_invalid(self) -> None:
        assert has_valid_check_digit("00614141123453") is False

    def test_too_short(self) -> None:
        assert has_valid_check_digit("5") is False
        assert has_valid_check_digit("") is False
