"""EPC encoder: GS1 barcodes and URN fields to 96-bit tag hex.

Flow for barcode input:
1. The Application Identifier picks the scheme (01 SGTIN, 00 SSCC, 414 SGLN, 8003 GRAI)
2. The barcode is translated to a pure identity URN using the company prefix length
3. The URN components are bit-packed by the scheme's codec
"""

import logging
from typing import Union

from models import ApplicationIdentifier, GidIdentifier, Identifier, Scheme
from services.check_digit import has_valid_check_digit
from services.exceptions import UnsupportedApplicationIdentifier, UnsupportedScheme
from services.schemes import CODECS_BY_SCHEME, GID_96, PartitionedCodec
from services.urn import grai_to_urn, parse_urn, sgln_to_urn, sgtin_to_urn, split_urn, sscc_to_urn

logger = logging.getLogger(__name__)

AI_SCHEMES: dict[ApplicationIdentifier, Scheme] = {
    ApplicationIdentifier.GTIN: Scheme.SGTIN_96,
    ApplicationIdentifier.SSCC: Scheme.SSCC_96,
    ApplicationIdentifier.GLN: Scheme.SGLN_96,
    ApplicationIdentifier.GRAI: Scheme.GRAI_96,
}

URN_SCHEMES: dict[str, Scheme] = {
    "sgtin": Scheme.SGTIN_96,
    "sscc": Scheme.SSCC_96,
    "sgln": Scheme.SGLN_96,
    "grai": Scheme.GRAI_96,
    "giai": Scheme.GIAI_96,
}

DEFAULT_FILTER = 1


def _partitioned_codec(scheme: Union[Scheme, str]) -> PartitionedCodec:
    try:
        codec = CODECS_BY_SCHEME[Scheme(scheme)]
    except ValueError as e:
        raise UnsupportedScheme(f"Unsupported scheme: {scheme}") from e
    if not isinstance(codec, PartitionedCodec):
        raise UnsupportedScheme(f"{codec.scheme.value} has no partition layout, use encode_gid")
    return codec


def encode_fields(
    scheme: Union[Scheme, str],
    filter_value: int,
    company_prefix: str,
    reference: str,
    serial: str = "0",
) -> str:
    """Bit-pack URN-level fields into EPC hex.

    Args:
        scheme: Partitioned scheme, e.g. "sgtin-96".
        filter_value: Filter value 0-7.
        company_prefix: Company prefix digits (6-12, selects the partition).
        reference: Secondary field digits (item ref, serial ref, location ref, ...).
        serial: Serial digits (ignored by SSCC-96).

    Returns:
        Uppercase 24-character hex.

    Examples:
        >>> encode_fields("sgtin-96", 1, "0614141", "812345", "6789")
        '3034257BF7194E4000001A85'
    """
    codec = _partitioned_codec(scheme)
    return codec.encode(filter_value, company_prefix, reference, serial).hex().upper()


def encode_gid(general_manager: str, object_class: str, serial: str) -> str:
    """Bit-pack GID-96 fields into EPC hex."""
    return GID_96.encode(general_manager, object_class, serial).hex().upper()


def encode_urn(urn: str, filter_value: int = DEFAULT_FILTER) -> str:
    """Encode an SGTIN, SGLN, GRAI or GIAI URN into EPC hex."""
    parsed = parse_urn(urn)
    return encode_fields(URN_SCHEMES[parsed.scheme], filter_value, parsed.company_prefix, parsed.reference, parsed.serial)


def encode_identifier(identifier: Identifier) -> bytes:
    """Re-encode a decoded identifier into its 12-byte tag."""
    if isinstance(identifier, GidIdentifier):
        return GID_96.encode(identifier.general_manager, identifier.object_class, identifier.serial)

    codec = _partitioned_codec(identifier.scheme)
    # SSCC carries no serial
    serial = getattr(identifier, "serial", "0")
    return codec.encode(identifier.filter, identifier.company_prefix, getattr(identifier, codec.reference_attr), serial)


def barcode_to_urn(ai: Union[ApplicationIdentifier, str], code: str, serial: str, company_prefix_length: int) -> str:
    """Translate a GS1 barcode into its pure identity URN.

    Raises:
        UnsupportedApplicationIdentifier: If ai is not 01, 00, 414 or 8003.
    """
    try:
        ai = ApplicationIdentifier(ai)
    except ValueError as e:
        raise UnsupportedApplicationIdentifier(f"Unsupported Application Identifier: {ai}") from e

    if not has_valid_check_digit(code):
        logger.warning(f"Barcode {code} (AI {ai.value}) has an invalid check digit")

    if ai == ApplicationIdentifier.GTIN:
        return sgtin_to_urn(code, serial, company_prefix_length)
    if ai == ApplicationIdentifier.SSCC:
        return sscc_to_urn(code, company_prefix_length)
    if ai == ApplicationIdentifier.GLN:
        return sgln_to_urn(code, serial, company_prefix_length)
    return grai_to_urn(code, serial, company_prefix_length)


def from_barcode(
    ai: Union[ApplicationIdentifier, str],
    code: str,
    serial: str,
    company_prefix_length: int,
    filter_value: int = DEFAULT_FILTER,
) -> str:
    """Convert a GS1 barcode and serial into a 96-bit EPC hex string.

    Args:
        ai: Application Identifier ("01" GTIN, "00" SSCC, "414" GLN, "8003" GRAI).
        code: Barcode digits including check digit.
        serial: Serial number, or GLN extension for AI 414. Unused for SSCC.
        company_prefix_length: Digits in the GS1 company prefix (6-12).
        filter_value: Filter value (default 1 = point of sale).

    Returns:
        Uppercase 24-character hex.

    Examples:
        >>> from_barcode("01", "80614141123458", "6789", 7)
        '3034257BF7194E4000001A85'
    """
    urn = barcode_to_urn(ai, code, serial, company_prefix_length)
    _, parts = split_urn(urn)
    # A dotted serial stays in one piece and is rejected by the codec
    company_prefix, reference, urn_serial = parts[0], parts[1], ".".join(parts[2:])

    ai = ApplicationIdentifier(ai)
    epc = encode_fields(AI_SCHEMES[ai], filter_value, company_prefix, reference, urn_serial)
    logger.info(f"Encoded AI ({ai.value}) {code} → {epc}")
    return epc
