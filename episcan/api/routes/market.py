"""시장 개요 API"""

import logging

from fastapi import APIRouter, HTTPException

from episcan.models.market import MarketSummary
from episcan.scan.market_overview import build_market_overview

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/overview", response_model=MarketSummary)
async def get_market_overview():
    """뇌전증 시장 개요"""
    try:
        return await build_market_overview()
    except Exception as e:
        logger.error(f"Error building market overview: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
