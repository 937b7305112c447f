"""분석 API"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from episcan.api.deps import get_cms_client
from episcan.ingest.cms import CMSClient
from episcan.map.competitors import CompetitorType, competitors_by_type
from episcan.models.competitor import (
    CompetitorTrendChart,
    MarketShareContext,
    MarketShareResponse,
)
from episcan.scan.market_share import (
    MARKET_SHARE_DISCLAIMER,
    analyze_implantation_trends,
    analyze_reimbursement_trends,
    collect_device_market_data,
    estimate_market_share,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/marketshare", response_model=MarketShareResponse)
async def get_market_share(
    refractory: Optional[int] = Query(None, gt=0, description="난치성 뇌전증 인구"),
    cms: CMSClient = Depends(get_cms_client),
):
    """디바이스 경쟁사 시장 점유율 (Medicare Part B 시술 건수 기준)"""
    device_competitors = competitors_by_type(CompetitorType.DEVICE)

    try:
        records = await collect_device_market_data(cms, device_competitors)
        share = estimate_market_share(records, refractory_population=refractory)
    except Exception as e:
        logger.error(f"Error generating market share analytics: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))

    response = MarketShareResponse.model_validate(share)
    response.context = MarketShareContext(
        disclaimer=MARKET_SHARE_DISCLAIMER,
        competitors=[
            {"name": c.name, "treatment": c.treatment, "cptCodes": c.cpt_codes}
            for c in device_competitors
        ],
        data_points=len(records),
    )
    return response


@router.get("/implantations", response_model=CompetitorTrendChart)
async def get_implantation_trends(cms: CMSClient = Depends(get_cms_client)):
    """디바이스 경쟁사 연도별 시술 건수"""
    try:
        records = await collect_device_market_data(cms)
        return analyze_implantation_trends(records)
    except Exception as e:
        logger.error(f"Error generating implantation analytics: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/reimbursements", response_model=CompetitorTrendChart)
async def get_reimbursement_trends(cms: CMSClient = Depends(get_cms_client)):
    """디바이스 경쟁사 연도별 평균 상환액"""
    try:
        records = await collect_device_market_data(cms)
        return analyze_reimbursement_trends(records)
    except Exception as e:
        logger.error(f"Error generating reimbursement analytics: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
