"""EPC decoder for 96-bit RFID tags.

This module is the decode entry point: it turns the EPC bank read from a tag
(hex string or raw bytes) into a structured identifier.

The header byte selects the scheme:
- 0x30 SGTIN-96, 0x31 SSCC-96, 0x32 SGLN-96
- 0x33 GRAI-96, 0x34 GIAI-96, 0x35 GID-96

Flow:
1. Hex input is normalized (whitespace, 0x prefix, odd length)
2. Buffer length is checked (exactly 12 bytes)
3. Header byte is peeked and the matching codec selected
4. Codec unpacks the fields and builds the URN
"""

import logging
import re

from models import BatchDecodeItem, Identifier
from services.exceptions import EpcError, MalformedHexInput, UnknownHeader
from services.schemes import CODECS, SchemeCodec, check_tag_length

logger = logging.getLogger(__name__)

CODECS_BY_HEADER: dict[int, SchemeCodec] = {codec.header: codec for codec in CODECS}

_HEX_PREFIX = re.compile(r"^0x", re.IGNORECASE)
_HEX_DIGITS = re.compile(r"^[0-9A-Fa-f]*$")


def normalize_epc(epc: str) -> str:
    """Normalize EPC hex to an even-length uppercase string.

    Args:
        epc: Raw EPC string, optionally prefixed with 0x.

    Returns:
        Normalized uppercase hex without prefix.

    Examples:
        >>> normalize_epc(" 0x3034257bf7194e4000001a85 ")
        '3034257BF7194E4000001A85'
    """
    if not epc:
        return ""

    epc = _HEX_PREFIX.sub("", epc.strip())
    if len(epc) % 2:
        epc = "0" + epc
    return epc.upper()


def hex_to_bytes(epc: str) -> bytes:
    """Convert EPC hex to raw bytes.

    Raises:
        MalformedHexInput: If the string contains non-hex characters.
    """
    normalized = normalize_epc(epc)
    if not _HEX_DIGITS.match(normalized):
        raise MalformedHexInput(f"Invalid hex input: {epc!r}")
    return bytes.fromhex(normalized)


def select_codec(raw: bytes) -> SchemeCodec:
    """Pick the codec for a 12-byte tag from its header byte.

    Raises:
        UnsupportedLength: If raw is not 12 bytes.
        UnknownHeader: If no codec owns the header byte.
    """
    check_tag_length(raw)
    header = raw[0]
    codec = CODECS_BY_HEADER.get(header)
    if codec is None:
        raise UnknownHeader(header)
    return codec


def decode_bytes(raw: bytes) -> Identifier:
    """Decode a raw 96-bit tag."""
    return select_codec(raw).decode(raw)


def decode_hex(epc: str) -> Identifier:
    """Decode an EPC hex string.

    Args:
        epc: EPC in hex (case-insensitive, optional 0x prefix).

    Returns:
        Identifier of the matching scheme.

    Examples:
        >>> decode_hex("3034257BF7194E4000001A85").urn
        'urn:epc:id:sgtin:0614141.812345.6789'
    """
    identifier = decode_bytes(hex_to_bytes(epc))
    logger.debug(f"Decoded EPC {epc} → {identifier.urn}")
    return identifier


def is_valid_epc(epc: str) -> bool:
    """Check if string is a decodable 96-bit EPC.

    Args:
        epc: String to validate

    Returns:
        True if the tag decodes under the scheme its header selects
    """
    if not epc:
        return False

    try:
        decode_bytes(hex_to_bytes(epc))
    except EpcError:
        return False
    return True


def batch_decode_epcs(epcs: list[str]) -> list[BatchDecodeItem]:
    """Decode multiple EPCs, reporting failures per item.

    Args:
        epcs: List of EPC strings

    Returns:
        One result per input, in input order
    """
    results = []
    for epc in epcs:
        try:
            identifier = decode_hex(epc)
        except EpcError as e:
            logger.warning(f"Failed to decode EPC {epc}: {e}")
            results.append(
                BatchDecodeItem(epc=epc, ok=False, error={"code": type(e).__name__, "message": str(e)})
            )
        else:
            results.append(BatchDecodeItem(epc=epc, ok=True, identifier=identifier))
    return results
