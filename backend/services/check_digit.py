"""GS1 mod-10 check digit.

Weights alternate 3,1,3,1... starting from the rightmost digit of the stem.
The same calculation covers GTIN-14 (13-digit stem) and SSCC-18 (17-digit
stem).
"""

import re

_NON_DIGIT = re.compile(r"\D")

GTIN_STEM_DIGITS = 13
SSCC_STEM_DIGITS = 17


def gs1_check_digit(digits: str) -> int:
    """Calculate the GS1 check digit for a stem.

    Non-digit characters are stripped before summing.

    Args:
        digits: Stem without its check digit.

    Returns:
        Check digit 0-9.

    Examples:
        >>> gs1_check_digit("8061414112345")
        8
    """
    clean = _NON_DIGIT.sub("", digits)
    total = sum(int(d) * (3 if i % 2 == 0 else 1) for i, d in enumerate(reversed(clean)))
    return (10 - total % 10) % 10


def append_check_digit(stem: str, width: int) -> str:
    """Left-pad a stem to width digits and append its check digit."""
    clean = _NON_DIGIT.sub("", stem).zfill(width)
    return clean + str(gs1_check_digit(clean))


def gtin14_from_stem(stem: str) -> str:
    return append_check_digit(stem, GTIN_STEM_DIGITS)


def sscc18_from_stem(stem: str) -> str:
    return append_check_digit(stem, SSCC_STEM_DIGITS)


def has_valid_check_digit(code: str) -> bool:
    """Check a full GS1 key whose last digit is its check digit."""
    clean = _NON_DIGIT.sub("", code)
    if len(clean) < 2:
        return False
    return gs1_check_digit(clean[:-1]) == int(clean[-1])
