"""EPC pure identity URNs.

Converts GS1 barcode keys into `urn:epc:id:<scheme>:<a>.<b>.<c>` form and
parses such URNs back into their components. Nothing here depends on the
bit layout of the binary encodings.

Translators slice the zero-padded barcode key at the boundary given by the
company prefix length:

    GTIN-14  [indicator][company prefix][item ref][check]  → cp . indicator+item ref . serial
    SSCC-18  [extension][company prefix][serial ref][check] → cp . extension+serial ref . 0
    GLN-13   [company prefix][location ref][check]          → cp . location ref . extension
    GRAI     [0][company prefix][asset type][check]         → cp . asset type . serial

Location references and asset types are zero-padded to the partition width
(13 digits minus the prefix); a 12-digit prefix gives "0".
"""

import logging

from models import EpcUrn
from services.check_digit import GTIN_STEM_DIGITS, gtin14_from_stem
from services.exceptions import InvalidPrefixLength, MalformedDigits, MalformedUrn
from services.partitions import PREFIX_LENGTHS

logger = logging.getLogger(__name__)

URN_PREFIX = "urn:epc:id:"

# Schemes accepted by parse_urn
PARSEABLE_SCHEMES = ("sgtin", "sgln", "grai", "giai")


def build_urn(scheme: str, *components: str) -> str:
    """Join components into a pure identity URN."""
    return f"{URN_PREFIX}{scheme}:{'.'.join(components)}"


def _pad_key(code: str, width: int, label: str) -> str:
    code = code.strip()
    if not code.isdigit() or not code.isascii() or len(code) > width:
        raise MalformedDigits(f"{label} must be at most {width} digits, got {code!r}")
    return code.zfill(width)


def _check_prefix_length(company_prefix_length: int) -> None:
    if company_prefix_length not in PREFIX_LENGTHS:
        raise InvalidPrefixLength(f"Invalid Company Prefix length: {company_prefix_length}")


def sgtin_to_urn(gtin: str, serial: str, company_prefix_length: int) -> str:
    """Build an SGTIN URN from a GTIN (8, 12, 13 or 14 digits) and serial.

    Examples:
        >>> sgtin_to_urn("80614141123458", "6789", 7)
        'urn:epc:id:sgtin:0614141.812345.6789'
    """
    _check_prefix_length(company_prefix_length)
    gtin = _pad_key(gtin, 14, "GTIN")
    end = 1 + company_prefix_length
    return build_urn("sgtin", gtin[1:end], gtin[0] + gtin[end:13], serial)


def sscc_to_urn(sscc: str, company_prefix_length: int) -> str:
    """Build an SSCC URN; the serial component is always 0."""
    _check_prefix_length(company_prefix_length)
    sscc = _pad_key(sscc, 18, "SSCC")
    end = 1 + company_prefix_length
    return build_urn("sscc", sscc[1:end], sscc[0] + sscc[end:17], "0")


def sgln_to_urn(gln: str, extension: str, company_prefix_length: int) -> str:
    _check_prefix_length(company_prefix_length)
    gln = _pad_key(gln, 13, "GLN")
    location = gln[company_prefix_length:12].zfill(13 - company_prefix_length)
    return build_urn("sgln", gln[:company_prefix_length], location, extension)


def grai_to_urn(grai: str, serial: str, company_prefix_length: int) -> str:
    _check_prefix_length(company_prefix_length)
    grai = _pad_key(grai, 14, "GRAI")
    end = 1 + company_prefix_length
    asset_type = grai[end:13].zfill(13 - company_prefix_length)
    return build_urn("grai", grai[1:end], asset_type, serial)


def split_urn(urn: str) -> tuple[str, list[str]]:
    """Split any pure identity URN into its scheme and dotted components.

    Raises:
        MalformedUrn: If the URN does not start with urn:epc:id:.
    """
    urn = urn.strip()
    if not urn.lower().startswith(URN_PREFIX):
        raise MalformedUrn(f"Not an EPC pure identity URN: {urn!r}")

    scheme, sep, rest = urn[len(URN_PREFIX):].partition(":")
    if not sep or not rest:
        raise MalformedUrn(f"Missing URN components: {urn!r}")
    return scheme.lower(), rest.split(".")


def parse_urn(urn: str) -> EpcUrn:
    """Parse an SGTIN, SGLN, GRAI or GIAI URN.

    SGTIN URNs additionally carry a GTIN-14 derived from a 13-digit stem in
    which the company prefix is left-padded so that it and the item reference
    fill 13 digits.

    Args:
        urn: URN string, e.g. "urn:epc:id:sgtin:0614141.812345.6789".

    Returns:
        EpcUrn with the three components.

    Raises:
        MalformedUrn: On an unsupported scheme or a component count other than 3.
    """
    scheme, parts = split_urn(urn)
    if scheme not in PARSEABLE_SCHEMES:
        raise MalformedUrn(f"Unsupported URN scheme: {scheme}")
    if len(parts) != 3:
        raise MalformedUrn(f"Invalid {scheme.upper()} URN format: expected 3 components, got {len(parts)}")

    company_prefix, reference, serial = parts
    gtin14 = None
    if scheme == "sgtin":
        cp_digits = "".join(c for c in company_prefix if c.isdigit())
        item_digits = "".join(c for c in reference if c.isdigit())
        stem = cp_digits.zfill(max(0, GTIN_STEM_DIGITS - len(item_digits))) + item_digits
        gtin14 = gtin14_from_stem(stem)

    logger.debug(f"Parsed URN {urn.strip()}")
    return EpcUrn(
        scheme=scheme,
        company_prefix=company_prefix,
        reference=reference,
        serial=serial,
        urn=urn.strip(),
        gtin14=gtin14,
    )
