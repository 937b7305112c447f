"""디바이스 시장 점유율 추정 및 연도별 추세

Medicare Part B 시술(이식) 건수 기준. 가장 최근 연도의 경쟁사별 시술 건수를
전체 대비 비율로 환산하고, 난치성 뇌전증 인구 대비 침투율을 함께 계산한다.
같은 데이터로 경쟁사별 연도 시술 건수와 가중 평균 상환액 추세도 만든다.
"""

from __future__ import annotations

import logging
from typing import Any

from episcan.config import settings
from episcan.ingest.cms import CMSClient
from episcan.map.competitors import Competitor, CompetitorType, competitors_by_type

logger = logging.getLogger(__name__)

DEFAULT_LATEST_YEAR = 2022

MARKET_SHARE_DISCLAIMER = (
    "Market share estimates are based on Medicare claims data only "
    "and may not represent the entire market"
)


def estimate_market_share(
    records: list[dict[str, Any]],
    refractory_population: int | None = None,
) -> dict[str, Any]:
    """경쟁사별 점유율 추정

    Args:
        records: [{competitor, year, implantations, ...}]
        refractory_population: 난치성 뇌전증 환자 수

    Returns:
        {shares, totalMarket, latestYear, estimatedPenetration, refractoryPopulation}
    """
    population = refractory_population or settings.REFRACTORY_POPULATION
    logger.info(f"Estimating market share from {len(records)} CMS records")

    years = sorted({r["year"] for r in records if r.get("year") is not None})
    latest_year = max(years) if years else DEFAULT_LATEST_YEAR

    implants: dict[str, float] = {}
    for record in records:
        if record.get("year") != latest_year:
            continue
        competitor = record.get("competitor")
        if competitor and record.get("implantations") is not None:
            implants[competitor] = implants.get(competitor, 0) + record["implantations"]

    total = sum(implants.values())

    shares = {
        competitor: {
            "competitorPercentage": f"{count / total * 100:.2f}" if total > 0 else "0.00",
            "refractoryShare": f"{count / population * 100:.4f}",
            "implantations": count,
            "year": latest_year,
        }
        for competitor, count in implants.items()
    }

    logger.info(f"Market share calculation: total implants = {total}")
    return {
        "shares": shares,
        "totalMarket": total,
        "latestYear": latest_year,
        "estimatedPenetration": f"{total / population * 100:.2f}",
        "refractoryPopulation": population,
    }


def _trend_buckets(
    records: list[dict[str, Any]],
    competitors: list[str] | None,
) -> dict[str, dict[int, Any]]:
    """디바이스 경쟁사 이름으로 미리 채운 경쟁사 → 연도 버킷"""
    names = competitors if competitors is not None else [
        c.name for c in competitors_by_type(CompetitorType.DEVICE)
    ]
    buckets: dict[str, dict[int, Any]] = {name: {} for name in names}
    for record in records:
        competitor = record.get("competitor")
        if competitor and competitor not in buckets:
            logger.warning(f"Initializing missing competitor in trends: {competitor}")
            buckets[competitor] = {}
    return buckets


def analyze_implantation_trends(
    records: list[dict[str, Any]],
    competitors: list[str] | None = None,
    years: list[int] | None = None,
) -> dict[str, Any]:
    """경쟁사별 연도 시술 건수

    Returns:
        {labels: [연도], datasets: [{label: "<경쟁사> Implantations", data}]}
    """
    years = years or settings.MARKET_SHARE_YEARS
    logger.info(f"Analyzing implantation trends from {len(records)} CMS records")

    counts = _trend_buckets(records, competitors)
    for record in records:
        competitor = record.get("competitor")
        year = record.get("year")
        implantations = record.get("implantations")
        if not competitor or not year or implantations is None:
            logger.warning(f"Skipping incomplete CMS entry: {record}")
            continue
        counts[competitor][year] = counts[competitor].get(year, 0) + implantations

    return {
        "labels": list(years),
        "datasets": [
            {"label": f"{name} Implantations", "data": [by_year.get(y, 0) for y in years]}
            for name, by_year in counts.items()
        ],
    }


def analyze_reimbursement_trends(
    records: list[dict[str, Any]],
    competitors: list[str] | None = None,
    years: list[int] | None = None,
) -> dict[str, Any]:
    """경쟁사별 연도 평균 상환액 (시술 건수 가중 평균, 소수점 2자리)

    Returns:
        {labels: [연도], datasets: [{label: "<경쟁사> Avg Reimbursement", data}]}
    """
    years = years or settings.MARKET_SHARE_YEARS
    logger.info(f"Analyzing reimbursement trends from {len(records)} CMS records")

    # 연도별 (지급액 합, 시술 건수 합)
    totals = _trend_buckets(records, competitors)
    for record in records:
        competitor = record.get("competitor")
        year = record.get("year")
        avg_payment = record.get("avgPayment")
        implantations = record.get("implantations")
        if not competitor or not year or avg_payment is None or implantations is None:
            continue
        payments, services = totals[competitor].get(year, (0.0, 0.0))
        totals[competitor][year] = (payments + avg_payment * implantations, services + implantations)

    datasets = []
    for name, by_year in totals.items():
        data = []
        for y in years:
            payments, services = by_year.get(y, (0.0, 0.0))
            data.append(round(payments / services, 2) if services > 0 else 0)
        datasets.append({"label": f"{name} Avg Reimbursement", "data": data})

    return {"labels": list(years), "datasets": datasets}


async def collect_device_market_data(
    cms: CMSClient,
    competitors: list[Competitor] | None = None,
    years: list[int] | None = None,
) -> list[dict[str, Any]]:
    """디바이스 경쟁사 CPT 코드별 Part B 시술 데이터 수집"""
    competitors = competitors if competitors is not None else competitors_by_type(CompetitorType.DEVICE)
    years = years or settings.MARKET_SHARE_YEARS

    records: list[dict[str, Any]] = []
    for comp in competitors:
        logger.info(f"Processing market data for {comp.name}")
        for code in comp.cpt_codes:
            for year in years:
                try:
                    data = await cms.fetch_part_b_services(code, year)
                except Exception as e:
                    logger.error(f"Error fetching CMS data for {code}-{year}: {e}")
                    continue

                if not data:
                    logger.warning(f"No data found for {comp.name}, code {code}, year {year}")
                    continue

                for row in data:
                    records.append({
                        "competitor": comp.name,
                        "year": row.get("year") or year,
                        "implantations": row.get("implantations") or 0,
                        "avgPayment": row.get("avgPayment") or 0,
                        "totalPayment": row.get("totalPayment") or 0,
                        "providerCount": row.get("providerCount") or 0,
                        "hcpcsCode": row.get("hcpcsCode") or code,
                    })
    return records
