"""Configuration API Router for the EPC Codec Service.

Exposes the active configuration (auth token masked) and a reload hook.
HTTP host/port/CORS changes only take effect after a restart.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from config import ServiceConfig, get_config, reload_config
from routers.epc import verify_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/config", tags=["config"], dependencies=[Depends(verify_token)])

MASK = "***"


class ConfigResponse(BaseModel):
    ok: bool = True
    config: dict[str, Any]


class ReloadResponse(BaseModel):
    ok: bool = True
    message: str
    default_filter: int


def _masked(config: ServiceConfig) -> dict[str, Any]:
    data = config.model_dump()
    if data["auth"]["token"]:
        data["auth"]["token"] = MASK
    return data


@router.get("", response_model=ConfigResponse)
async def get_current_config() -> ConfigResponse:
    """Return the HTTP, codec and auth sections in effect."""
    return ConfigResponse(config=_masked(get_config()))


@router.post("/reload", response_model=ReloadResponse)
async def reload_config_endpoint() -> ReloadResponse:
    """Re-read the config file; the old settings stay active on failure."""
    try:
        config = reload_config()
    except (OSError, ValueError) as e:
        logger.error(f"Config reload failed: {e}")
        raise HTTPException(status_code=500, detail=f"Config reload failed: {e}") from e

    logger.info(f"Config reloaded (default_filter={config.codec.default_filter})")
    return ReloadResponse(message="Configuration reloaded", default_filter=config.codec.default_filter)
