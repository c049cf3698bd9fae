"""EPC API Router for the EPC Codec Service.

Handles tag decoding, barcode/field encoding and URN parsing endpoints.

Data Flow:
- Decode: EPC hex → header byte selects scheme → structured identifier + URN
- Encode: GS1 barcode (AI + digits) or URN fields → 96-bit EPC hex
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException

from config import get_config
from models import (
    BatchDecodeRequest,
    BatchDecodeResponse,
    DecodeRequest,
    EncodeFieldsRequest,
    EncodeRequest,
    EncodeResponse,
    EpcUrn,
    Identifier,
    Scheme,
    UrnRequest,
)
from services.epc_decoder import batch_decode_epcs, decode_hex
from services.epc_encoder import encode_fields, encode_gid, from_barcode
from services.urn import parse_urn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/epc", tags=["epc"])


async def verify_token(x_epc_token: Annotated[str | None, Header()] = None) -> None:
    """Verify authentication token if auth is enabled.

    Args:
        x_epc_token: Token from request header.

    Raises:
        HTTPException: If auth is enabled and token is invalid.
    """
    config = get_config()
    if config.auth.enabled:
        if not x_epc_token or x_epc_token != config.auth.token:
            raise HTTPException(status_code=401, detail="Invalid or missing authentication token")


@router.post("/decode", response_model=Identifier)
async def decode_epc_endpoint(
    request: DecodeRequest,
    _: Annotated[None, Depends(verify_token)],
) -> Identifier:
    """Decode a 96-bit EPC hex string.

    The header byte selects the scheme; the response shape depends on it.
    """
    identifier = decode_hex(request.epc)
    logger.info(f"Decoded EPC {request.epc} → {identifier.urn}")
    return identifier


@router.post("/decode/batch", response_model=BatchDecodeResponse)
async def decode_batch_endpoint(
    request: BatchDecodeRequest,
    _: Annotated[None, Depends(verify_token)],
) -> BatchDecodeResponse:
    """Decode several EPCs; failures are reported per item."""
    config = get_config()
    if len(request.epcs) > config.codec.max_batch_size:
        raise HTTPException(
            status_code=413,
            detail=f"Batch of {len(request.epcs)} EPCs exceeds limit of {config.codec.max_batch_size}",
        )

    items = batch_decode_epcs(request.epcs)
    decoded = sum(1 for item in items if item.ok)
    logger.info(f"Batch decoded {decoded}/{len(items)} EPCs")

    return BatchDecodeResponse(items=items, decoded=decoded, failed=len(items) - decoded)


@router.post("/encode", response_model=EncodeResponse)
async def encode_barcode_endpoint(
    request: EncodeRequest,
    _: Annotated[None, Depends(verify_token)],
) -> EncodeResponse:
    """Encode a GS1 barcode into a 96-bit EPC.

    Supported Application Identifiers: 01 (GTIN → SGTIN-96), 00 (SSCC → SSCC-96),
    414 (GLN → SGLN-96), 8003 (GRAI → GRAI-96).
    """
    # Use config default if filter not explicitly provided in request
    config = get_config()
    filter_value = request.filter if request.filter is not None else config.codec.default_filter

    epc = from_barcode(
        ai=request.application_identifier,
        code=request.code,
        serial=request.serial,
        company_prefix_length=request.company_prefix_length,
        filter_value=filter_value,
    )
    return EncodeResponse(ok=True, epc=epc, urn=decode_hex(epc).urn)


@router.post("/encode/fields", response_model=EncodeResponse)
async def encode_fields_endpoint(
    request: EncodeFieldsRequest,
    _: Annotated[None, Depends(verify_token)],
) -> EncodeResponse:
    """Encode pre-split URN fields into a 96-bit EPC.

    For GID-96, company_prefix is the general manager number and reference
    the object class; filter is ignored.
    """
    if request.scheme == Scheme.GID_96:
        epc = encode_gid(request.company_prefix, request.reference, request.serial)
    else:
        config = get_config()
        filter_value = request.filter if request.filter is not None else config.codec.default_filter
        epc = encode_fields(request.scheme, filter_value, request.company_prefix, request.reference, request.serial)

    # Report the canonical URN as a decoder would print it
    urn = decode_hex(epc).urn
    logger.info(f"Encoded {request.scheme.value} fields → {epc}")

    return EncodeResponse(ok=True, epc=epc, urn=urn)


@router.post("/urn", response_model=EpcUrn)
async def parse_urn_endpoint(
    request: UrnRequest,
    _: Annotated[None, Depends(verify_token)],
) -> EpcUrn:
    """Parse an SGTIN, SGLN, GRAI or GIAI pure identity URN."""
    return parse_urn(request.urn)
