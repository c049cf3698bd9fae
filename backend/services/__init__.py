"""Services package for the EPC Codec Service."""

from services.epc_decoder import batch_decode_epcs, decode_bytes, decode_hex, is_valid_epc, normalize_epc
from services.epc_encoder import encode_fields, encode_gid, encode_identifier, encode_urn, from_barcode
from services.exceptions import EpcError
from services.urn import parse_urn

__all__ = [
    "decode_hex",
    "decode_bytes",
    "is_valid_epc",
    "normalize_epc",
    "batch_decode_epcs",
    "encode_fields",
    "encode_gid",
    "encode_urn",
    "encode_identifier",
    "from_barcode",
    "parse_urn",
    "EpcError",
]
