"""경쟁사 API"""

from fastapi import APIRouter, HTTPException

from episcan.map.competitors import COMPETITORS, Competitor, get_competitor
from episcan.models.competitor import CompetitorInfo

router = APIRouter()


def _to_info(competitor: Competitor) -> CompetitorInfo:
    return CompetitorInfo(
        name=competitor.name,
        type=competitor.type.value,
        treatment=competitor.treatment,
        cik=competitor.cik,
        has_sec_data=competitor.has_sec_data,
    )


@router.get("", response_model=list[CompetitorInfo])
def list_competitors():
    """경쟁사 목록"""
    return [_to_info(c) for c in COMPETITORS]


@router.get("/{name}", response_model=CompetitorInfo)
def get_competitor_detail(name: str):
    """경쟁사 단건 조회 (대소문자 무시)"""
    competitor = get_competitor(name)
    if competitor is None:
        raise HTTPException(status_code=404, detail="Competitor not found")
    return _to_info(competitor)
