"""Pydantic models for the EPC Codec Service.

Decoded identifiers, encode/decode request and response schemas following
OpenAPI documentation standards.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field


class Scheme(str, Enum):
    """96-bit EPC tag families."""

    SGTIN_96 = "sgtin-96"
    SSCC_96 = "sscc-96"
    SGLN_96 = "sgln-96"
    GRAI_96 = "grai-96"
    GIAI_96 = "giai-96"
    GID_96 = "gid-96"


class ApplicationIdentifier(str, Enum):
    """GS1 Application Identifiers accepted for barcode-driven encoding."""

    GTIN = "01"
    SSCC = "00"
    GLN = "414"
    GRAI = "8003"


# --- Decoded Identifiers ---


class EpcIdentifier(BaseModel):
    """Fields common to every decoded tag."""

    header: int = Field(..., description="EPC header byte")
    urn: str = Field(..., description="Pure identity URN")


class PartitionedIdentifier(EpcIdentifier):
    """Identifier whose layout is driven by a partition table."""

    filter: int = Field(..., ge=0, le=7, description="Filter value")
    partition: int = Field(..., ge=0, le=6, description="Partition value")
    company_prefix: str = Field(..., description="GS1 company prefix, zero-padded")


class SgtinIdentifier(PartitionedIdentifier):
    """Serialised Global Trade Item Number."""

    scheme: Literal["sgtin-96"] = "sgtin-96"
    item_reference: str = Field(..., description="Indicator digit followed by item reference")
    serial: str
    gtin14: str = Field(..., description="GTIN-14 including check digit")


class SsccIdentifier(PartitionedIdentifier):
    """Serial Shipping Container Code."""

    scheme: Literal["sscc-96"] = "sscc-96"
    serial_reference: str = Field(..., description="Extension digit followed by serial reference")
    sscc: str = Field(..., description="SSCC-18 including check digit")


class SglnIdentifier(PartitionedIdentifier):
    """Global Location Number with extension."""

    scheme: Literal["sgln-96"] = "sgln-96"
    location_reference: str
    serial: str = Field(..., description="GLN extension")


class GraiIdentifier(PartitionedIdentifier):
    """Global Returnable Asset Identifier."""

    scheme: Literal["grai-96"] = "grai-96"
    asset_type: str
    serial: str


class GiaiIdentifier(PartitionedIdentifier):
    """Global Individual Asset Identifier."""

    scheme: Literal["giai-96"] = "giai-96"
    reference: str
    serial: str


class GidIdentifier(EpcIdentifier):
    """General Identifier (no filter or partition)."""

    scheme: Literal["gid-96"] = "gid-96"
    general_manager: str
    object_class: str
    serial: str


Identifier = Annotated[
    Union[
        SgtinIdentifier,
        SsccIdentifier,
        SglnIdentifier,
        GraiIdentifier,
        GiaiIdentifier,
        GidIdentifier,
    ],
    Field(discriminator="scheme"),
]


class EpcUrn(BaseModel):
    """Components of a parsed pure identity URN."""

    scheme: str = Field(..., description="URN scheme, e.g. 'sgtin'")
    company_prefix: str
    reference: str = Field(..., description="Item reference, location reference, asset type or asset reference")
    serial: str
    urn: str
    gtin14: Optional[str] = Field(default=None, description="Derived GTIN-14 (SGTIN only)")


# --- Request Models ---


class DecodeRequest(BaseModel):
    """Request body for decoding a single tag."""

    epc: str = Field(..., min_length=1, description="EPC hex string, optional 0x prefix")


class BatchDecodeRequest(BaseModel):
    """Request body for decoding several tags at once."""

    epcs: list[str] = Field(..., min_length=1, description="EPC hex strings")


class EncodeRequest(BaseModel):
    """Request body for encoding a GS1 barcode into an EPC.

    The company prefix length tells the encoder where the company prefix ends
    inside the barcode digits.
    """

    application_identifier: ApplicationIdentifier = Field(..., description="GS1 AI: 01, 00, 414 or 8003")
    code: str = Field(..., min_length=1, description="Barcode digits including check digit")
    serial: str = Field(default="0", description="Serial number / GLN extension")
    company_prefix_length: int = Field(..., ge=6, le=12, description="Digits in the GS1 company prefix")
    filter: Optional[int] = Field(default=None, ge=0, le=7, description="Filter value (uses config default if not provided)")


class EncodeFieldsRequest(BaseModel):
    """Request body for encoding pre-split EPC fields."""

    scheme: Scheme
    company_prefix: str = Field(..., min_length=1, description="Company prefix (general manager for GID)")
    reference: str = Field(..., min_length=1, description="Secondary field (object class for GID)")
    serial: str = Field(default="0")
    filter: Optional[int] = Field(default=None, ge=0, le=7, description="Filter value (uses config default if not provided)")


class UrnRequest(BaseModel):
    """Request body for URN parsing."""

    urn: str = Field(..., min_length=1)


# --- Response Models ---


class EncodeResponse(BaseModel):
    """Response for an encode request."""

    ok: bool = True
    epc: str = Field(..., description="Uppercase 96-bit EPC hex")
    urn: str = Field(..., description="Pure identity URN of the encoded tag")


class BatchDecodeItem(BaseModel):
    """Outcome of decoding one tag in a batch."""

    epc: str
    ok: bool
    identifier: Optional[Identifier] = None
    error: Optional[dict[str, str]] = None


class BatchDecodeResponse(BaseModel):
    """Response for a batch decode request."""

    items: list[BatchDecodeItem]
    decoded: int
    failed: int


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    ok: bool = True
    uptime_seconds: int = 0
    schemes: list[Scheme] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: dict[str, str] = Field(..., description="Error details with code and message")
