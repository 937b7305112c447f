"""경쟁사 목록 화면 로직

경쟁사 목록 + 점유율 데이터를 행으로 합치고, 유형/치료법/검색어 필터와
정렬을 적용한 뒤 주요 경쟁사와 초기 단계 경쟁사로 나눈다.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from episcan.models.competitor import CompetitorRow
from episcan.parse.values import coerce_float

# 유형별 기본 성장률 (%)
BASE_GROWTH = {
    "device": 8.1,
    "drug": 6.3,
    "early-stage": 15.5,
}
DEFAULT_GROWTH = 5.0
GROWTH_VARIANCE = 2.0  # ±2%

SORT_OPTIONS = ("name", "marketShare", "growth")
TYPE_OPTIONS = ("all", "device", "drug", "early-stage")
TREATMENT_OPTIONS = ("all", "vagus", "deep brain", "responsive", "cenobamate")

EARLY_STAGE = "early-stage"


@dataclass
class CompetitorFilters:
    """목록 필터 상태"""

    search: str = ""
    type: str = "all"
    treatment: str = "all"
    sort: str = "name"

    def __post_init__(self):
        self.search = (self.search or "").strip().lower()
        self.type = self.type or "all"
        self.treatment = self.treatment or "all"
        if self.sort not in SORT_OPTIONS:
            self.sort = "name"


def calculate_growth(competitor_type: str, rng: random.Random | None = None) -> float:
    """유형별 기본 성장률 ± 무작위 편차 (소수점 1자리)"""
    base = BASE_GROWTH.get(competitor_type)
    if base is None:
        return DEFAULT_GROWTH
    rng = rng or random.Random()
    variance = (rng.random() * 2 - 1) * GROWTH_VARIANCE
    return round(base + variance, 1)


def build_competitor_rows(
    competitors: list[dict[str, Any]],
    market_share: Optional[dict[str, Any]] = None,
    rng: random.Random | None = None,
) -> list[CompetitorRow]:
    """경쟁사 API 응답 + 점유율 응답 → 화면 행"""
    shares = (market_share or {}).get("shares") or {}
    rng = rng or random.Random()

    rows = []
    for competitor in competitors:
        name = competitor.get("name") or ""
        competitor_type = competitor.get("type") or ""
        market_info = shares.get(name) or {}
        rows.append(
            CompetitorRow(
                name=name,
                type=competitor_type,
                treatment=competitor.get("treatment") or "",
                market_share=coerce_float(market_info.get("competitorPercentage")),
                growth=calculate_growth(competitor_type, rng),
                has_sec_data=bool(competitor.get("hasSecData")),
            )
        )
    return rows


def apply_filters(rows: list[CompetitorRow], filters: CompetitorFilters) -> list[CompetitorRow]:
    """유형 → 치료법 → 검색어 필터 후 정렬"""
    filtered = list(rows)

    if filters.type != "all":
        filtered = [r for r in filtered if r.type == filters.type]

    if filters.treatment != "all":
        treatment = filters.treatment.lower()
        filtered = [r for r in filtered if treatment in r.treatment.lower()]

    if filters.search:
        filtered = [
            r for r in filtered
            if filters.search in r.name.lower() or filters.search in r.treatment.lower()
        ]

    if filters.sort == "marketShare":
        filtered.sort(key=lambda r: -r.market_share)
    elif filters.sort == "growth":
        filtered.sort(key=lambda r: -r.growth)
    else:
        filtered.sort(key=lambda r: r.name.casefold())
    return filtered


def split_competitors(rows: list[CompetitorRow]) -> tuple[list[CompetitorRow], list[CompetitorRow]]:
    """(주요 경쟁사, 초기 단계 경쟁사)"""
    main = [r for r in rows if r.type != EARLY_STAGE]
    early = [r for r in rows if r.type == EARLY_STAGE]
    return main, early


def market_share_display(row: CompetitorRow) -> str:
    return f"{row.market_share:.1f}%" if row.market_share else "N/A"


def type_label(row: CompetitorRow) -> str:
    if row.type == EARLY_STAGE:
        return "Early-Stage"
    return "Device" if row.type == "device" else "Drug"


def growth_status(growth: float) -> str:
    """성장률 배지 등급 (high ≥ 7, medium ≥ 4)"""
    if growth >= 7:
        return "high"
    if growth >= 4:
        return "medium"
    return "low"


def threat_level(growth: float) -> str:
    """초기 단계 경쟁사 위협 수준 (High ≥ 15, Low < 10)"""
    if growth >= 15:
        return "High"
    if growth < 10:
        return "Low"
    return "Medium"


def market_share_chart(market_share: dict[str, Any]) -> dict[str, list]:
    """점유율 파이 차트 데이터 (점유율 0 이하 제외)"""
    labels, data = [], []
    for name, info in (market_share.get("shares") or {}).items():
        share = coerce_float((info or {}).get("competitorPercentage"))
        if share > 0:
            labels.append(name)
            data.append(share)
    return {"labels": labels, "data": data}


def growth_chart(rows: list[CompetitorRow]) -> dict[str, list]:
    """성장률 막대 차트 데이터"""
    return {
        "labels": [r.name for r in rows],
        "data": [r.growth for r in rows],
    }


@dataclass
class CompetitorListView:
    """경쟁사 목록 화면 상태

    error가 있으면 목록 전체 실패(재시도 배너), chart_error는 차트만 실패.
    """

    filters: CompetitorFilters = field(default_factory=CompetitorFilters)
    main: list[CompetitorRow] = field(default_factory=list)
    early_stage: list[CompetitorRow] = field(default_factory=list)
    share_chart: Optional[dict[str, list]] = None
    growth_chart: Optional[dict[str, list]] = None
    error: Optional[str] = None
    chart_error: bool = False
    last_updated: Optional[datetime] = None
