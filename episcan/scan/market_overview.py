"""뇌전증 시장 개요 집계기

로컬 파일과 외부 API 데이터를 고정 연도 버킷(기본 2020~2024)에 누적하여
시장 규모 추세, 비용 카테고리 점유율, 예측, 경쟁사 지표를 계산한다.

모든 처리는 이미 메모리에 올라온 데이터셋에 대한 단일 패스 누적이다.
숫자 필드를 해석할 수 없으면 0으로 기여한다.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, TypeVar

import httpx

from episcan.config import settings
from episcan.ingest.cms import CMSClient
from episcan.ingest.external import ExternalSignalsClient
from episcan.ingest.local import LOCAL_SOURCES, LocalFileLoader
from episcan.ingest.log_sink import ContentLogSink, FileLogSink
from episcan.map.classifier import (
    CDC_CAUSE_FIELD,
    COMPETITOR_PAYMENT_RULES,
    EMA_DHPC_SUBSTANCE_FIELD,
    EMA_SHORTAGE_INN_FIELD,
    EPILEPSY_DRUGS,
    INPATIENT_DIAGNOSIS_FIELD,
    PART_B_COST_RULES,
    PART_B_KEYWORD_CODES,
    PIPELINE_SPONSORS,
    classify,
    classify_all,
    is_cdc_epilepsy_cause,
    is_inpatient_epilepsy,
    matches_epilepsy_drug,
    sponsor_matches,
)
from episcan.models.market import ChartSeries, ForecastSeries, MarketSummary, TrendSeries
from episcan.parse.values import coerce_float, coerce_int, normalize_year, year_of_date

logger = logging.getLogger(__name__)

T = TypeVar("T")

SHARE_LABELS = ["Drugs", "Devices", "Diagnostics", "Other"]
SHARE_KEYS = ["drugs", "devices", "diagnostics", "other"]

INPATIENT_COST_FIELD = "Average Cost per Stay (Actual)"


def _rows(data: Any) -> list[dict[str, Any]]:
    """리스트가 아닌 데이터셋은 기여하지 않음"""
    if not isinstance(data, list):
        return []
    return [row for row in data if isinstance(row, dict)]


class MarketOverviewAggregator:
    """연도 버킷 누적기

    사용법:
        agg = MarketOverviewAggregator()
        agg.add_who_deaths(rows)
        agg.add_part_d(rows)
        ...
        summary = agg.summary()
    """

    def __init__(
        self,
        years: list[str] | None = None,
        forecast_years: list[str] | None = None,
        growth_rate: float | None = None,
        fallback_share: dict[str, float] | None = None,
        death_cost_proxy: float | None = None,
        nih_funding_column: str | None = None,
        nih_funding_offset: int | None = None,
    ):
        self.years = list(years or settings.TREND_YEARS)
        self.forecast_years = list(forecast_years or settings.FORECAST_YEARS)
        self.growth_rate = growth_rate or settings.FORECAST_GROWTH_RATE
        self.fallback_share = dict(fallback_share or settings.FALLBACK_SHARE)
        self.death_cost_proxy = (
            settings.DEATH_COST_PROXY_BILLIONS if death_cost_proxy is None else death_cost_proxy
        )
        self.nih_funding_column = nih_funding_column or settings.NIH_FUNDING_COLUMN
        self.nih_funding_offset = (
            settings.NIH_FUNDING_COLUMN_OFFSET if nih_funding_offset is None else nih_funding_offset
        )

        self._index = {year: i for i, year in enumerate(self.years)}
        n = len(self.years)

        # 연도 버킷
        self.market_size = [0.0] * n
        self.epilepsy_deaths = [0.0] * n
        self.nih_funding = [0.0] * n
        self.patent_trends = [0] * n
        self.competitor_payments = {rule.category: [0.0] * n for rule in COMPETITOR_PAYMENT_RULES}

        # 점유율 계산용 비용 합계 (연도 무관)
        self.drug_cost = 0.0
        self.device_cost = 0.0
        self.diagnostic_cost = 0.0

        # 스칼라 지표
        self.hospital_costs = 0.0
        self.drug_safety_issues = 0
        self.drug_shortages = 0
        self.pipeline: dict[str, int] = {sponsor: 0 for sponsor in PIPELINE_SPONSORS}
        self.adverse_events: dict[str, int] = {}

    def year_index(self, value: Any) -> Optional[int]:
        """연도 값 → 버킷 인덱스 (집계 구간 밖이면 None)"""
        year = normalize_year(value)
        if year is None:
            return None
        return self._index.get(year)

    # ──────────────────────────────────────────────
    # 사망 / 연구비
    # ──────────────────────────────────────────────

    def add_who_deaths(self, data: Any) -> None:
        """WHO Mortality Database - 전체 연령 사망자"""
        for record in _rows(data):
            idx = self.year_index(record.get("Year"))
            if idx is None or record.get("Age Group") != "[All]":
                continue
            deaths = coerce_float(record.get("Number"))
            self.epilepsy_deaths[idx] += deaths
            self.market_size[idx] += deaths * self.death_cost_proxy

    def add_cdc_underlying_cause(self, data: Any) -> None:
        """CDC WONDER - 사망원인 GR113-048 (Epilepsy)"""
        for record in _rows(data):
            idx = self.year_index(record.get("Year"))
            if idx is None or not is_cdc_epilepsy_cause(record.get(CDC_CAUSE_FIELD)):
                continue
            deaths = coerce_int(record.get("Deaths"))
            self.epilepsy_deaths[idx] += deaths
            self.market_size[idx] += deaths * self.death_cost_proxy

    def add_nih_funding(self, data: Any) -> None:
        """NIH RePORT RCDC - Epilepsy 카테고리 연구비 (백만 달러 단위)"""
        rows = _rows(data)
        column = self.nih_funding_column

        categories = [row.get(column) for row in rows]
        logger.info(f"NIH Funding Categories: {categories[:20]}")

        epilepsy_record = next(
            (
                row for row in rows
                if isinstance(row.get(column), str) and "epilepsy" in row[column].lower()
            ),
            None,
        )
        if epilepsy_record is None:
            logger.warning("No Epilepsy record found in NIH funding data")
            return

        logger.info(f"Found Epilepsy record in NIH funding data: {epilepsy_record}")
        for idx in range(len(self.years)):
            key = f"{column}_{self.nih_funding_offset + idx}"
            funding = coerce_float(epilepsy_record.get(key))
            self.nih_funding[idx] = funding * 1e6  # 백만 → 달러
            self.market_size[idx] += funding / 1e3  # 백만 → 십억

    # ──────────────────────────────────────────────
    # 경쟁사 지급 / Medicare 비용
    # ──────────────────────────────────────────────

    def add_open_payments(self, data: Any) -> None:
        """CMS Open Payments - 경쟁사별 연도 지급액"""
        for payment in _rows(data):
            idx = self.year_index(year_of_date(payment.get("Date_of_Payment")))
            if idx is None:
                continue
            amount = coerce_float(payment.get("Total_Amount_of_Payment_USDollars"))
            for competitor in classify_all(payment, COMPETITOR_PAYMENT_RULES):
                self.competitor_payments[competitor][idx] += amount

    def add_part_d(self, data: Any) -> None:
        """Medicare Part D - 약제 비용"""
        for record in _rows(data):
            cost = coerce_float(record.get("Tot_Drug_Cst"))
            self.drug_cost += cost
            idx = self.year_index(record.get("Year"))
            if idx is not None:
                self.market_size[idx] += cost / 1e9

    def add_part_b(self, data: Any) -> None:
        """Medicare Part B - 디바이스/진단 행위 비용"""
        for record in _rows(data):
            payment = coerce_float(record.get("Tot_Medicare_Pymt_Amt"))

            category = classify(record, PART_B_COST_RULES)
            if category == "devices":
                self.device_cost += payment
            elif category == "diagnostics":
                self.diagnostic_cost += payment

            idx = self.year_index(record.get("Year"))
            if idx is not None:
                self.market_size[idx] += payment / 1e9

    def add_part_b_drug_spending(self, data: Any) -> None:
        """Medicare Part B - 약제 지출"""
        for record in _rows(data):
            spending = coerce_float(record.get("Total_Spending"))
            self.drug_cost += spending
            idx = self.year_index(record.get("Year"))
            if idx is not None:
                self.market_size[idx] += spending / 1e9

    def add_inpatient_stays(self, data: Any) -> None:
        """CMS 입원 추세 - G40 진단 입원 비용 (마지막 연도에 합산)"""
        rows = _rows(data)
        logger.info(f"CMS Inpatient Data Sample: {rows[:3]}")

        total = 0.0
        for record in rows:
            if not is_inpatient_epilepsy(record.get(INPATIENT_DIAGNOSIS_FIELD)):
                continue
            cost = coerce_float(record.get(INPATIENT_COST_FIELD))
            logger.info(f"Found epilepsy inpatient record: {record} (cost={cost})")
            total += cost

        self.hospital_costs += total
        if self.market_size:
            self.market_size[-1] += total / 1e9

    # ──────────────────────────────────────────────
    # 안전성 / 파이프라인 / 특허
    # ──────────────────────────────────────────────

    def add_ema_dhpc(self, data: Any) -> None:
        """EMA DHPC - 뇌전증 약물 안전성 통신 건수"""
        rows = _rows(data)
        logger.info(
            f"EMA DHPC Active Substances: {[r.get(EMA_DHPC_SUBSTANCE_FIELD) for r in rows[:10]]}"
        )
        self.drug_safety_issues += sum(
            1 for r in rows if matches_epilepsy_drug(r.get(EMA_DHPC_SUBSTANCE_FIELD))
        )

    def add_ema_shortages(self, data: Any) -> None:
        """EMA 공급 부족 - 뇌전증 약물 건수"""
        rows = _rows(data)
        logger.info(
            f"EMA Shortages Active Substances: {[r.get(EMA_SHORTAGE_INN_FIELD) for r in rows[:10]]}"
        )
        self.drug_shortages += sum(
            1 for r in rows if matches_epilepsy_drug(r.get(EMA_SHORTAGE_INN_FIELD))
        )

    def add_clinical_trials(self, studies: Any) -> None:
        """CT.gov - 스폰서별 임상시험 수"""
        for study in _rows(studies):
            for sponsor in self.pipeline:
                if sponsor_matches(study, sponsor):
                    self.pipeline[sponsor] += 1

    def add_adverse_events(self, events: Any) -> None:
        """openFDA - 약물별 이상사례 건수"""
        for event in _rows(events):
            term = event.get("term")
            if not isinstance(term, str):
                continue
            drug = term.lower()
            self.adverse_events[drug] = self.adverse_events.get(drug, 0) + coerce_int(event.get("count"))

    def add_patents(self, patents: Any) -> None:
        """USPTO - 등록 연도별 특허 건수"""
        for patent in _rows(patents):
            idx = self.year_index(year_of_date(patent.get("issueDate")))
            if idx is not None:
                self.patent_trends[idx] += 1

    # ──────────────────────────────────────────────
    # 결과 계산
    # ──────────────────────────────────────────────

    def compute_share(self) -> list[float]:
        """비용 카테고리 점유율 [drugs, devices, diagnostics, other]

        시장 규모 합 또는 카테고리 비용 합이 0이면 fallback 분포를 사용한다.
        """
        total = self.drug_cost + self.device_cost + self.diagnostic_cost
        if sum(self.market_size) <= 0 or total <= 0:
            return [float(self.fallback_share[key]) for key in SHARE_KEYS]

        drugs = round(self.drug_cost / total * 100, 1)
        devices = round(self.device_cost / total * 100, 1)
        diagnostics = round(self.diagnostic_cost / total * 100, 1)
        other = round(100 - drugs - devices - diagnostics, 1)
        return [drugs, devices, diagnostics, other]

    def compute_forecast(self) -> list[float]:
        """마지막 연도 시장 규모에서 복리 성장 예측 (소수점 1자리)"""
        base = self.market_size[-1] if self.market_size else 0.0
        if base <= 0:
            return [0.0] * len(self.forecast_years)

        values = []
        for _ in self.forecast_years:
            base *= self.growth_rate
            values.append(round(base, 1))
        return values

    def summary(self) -> MarketSummary:
        return MarketSummary(
            share=ChartSeries(labels=list(SHARE_LABELS), values=self.compute_share()),
            trends=TrendSeries(
                years=list(self.years),
                market_size=list(self.market_size),
                epilepsy_deaths=list(self.epilepsy_deaths),
                nih_funding=list(self.nih_funding),
                patent_trends=list(self.patent_trends),
            ),
            forecast=ForecastSeries(years=list(self.forecast_years), values=self.compute_forecast()),
            regional=ChartSeries(
                labels=list(settings.REGIONAL_LABELS),
                values=list(settings.REGIONAL_VALUES),
            ),
            competitor_payments={k: list(v) for k, v in self.competitor_payments.items()},
            pipeline=dict(self.pipeline),
            adverse_events=dict(self.adverse_events),
            drug_safety_issues=self.drug_safety_issues,
            drug_shortages=self.drug_shortages,
            hospital_costs=round(self.hospital_costs / 1e9, 2),
        )


# =============================================================================
# 전체 실행
# =============================================================================

async def get_or_set_cache(key: str, callback: Callable[[], Awaitable[T]]) -> T:
    """캐시 자리 (항상 callback 실행)"""
    return await callback()


def _count(data: Any) -> int:
    return len(data) if isinstance(data, (list, dict)) else 0


async def build_market_overview(
    data_dir: Path | str | None = None,
    sink: ContentLogSink | None = None,
    live: bool | None = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    aggregator: MarketOverviewAggregator | None = None,
) -> MarketSummary:
    """로컬 파일 + 외부 API → 시장 개요

    Args:
        data_dir: 로컬 입력 파일 디렉토리 (기본: settings.DATA_DIR)
        sink: 파일 내용 로그 싱크 (기본: settings.CONTENT_LOG_FILE)
        live: openFDA/CT.gov/USPTO 실제 호출 여부 (기본: settings)
        transport: httpx 트랜스포트 (테스트용)
        aggregator: 연도/상수를 바꾼 집계기
    """

    async def _build() -> MarketSummary:
        logger.info("Fetching and processing enhanced market overview data for epilepsy")

        log_sink = sink or FileLogSink(settings.CONTENT_LOG_FILE)
        log_sink.reset()

        # 1. 로컬 파일 (동시 로드)
        loader = LocalFileLoader(data_dir=data_dir, sink=log_sink)
        local = await loader.load_all(LOCAL_SOURCES)

        # 2. 외부 API (순차 호출, 실패 시 빈 목록)
        async with ExternalSignalsClient(live=live, transport=transport) as signals:
            adverse_events = await signals.fetch_adverse_events(EPILEPSY_DRUGS)
            clinical_trials = await signals.fetch_pipeline_studies(PIPELINE_SPONSORS)
            patents = await signals.fetch_patents()

        async with CMSClient(transport=transport) as cms:
            part_d = await cms.fetch_part_d(EPILEPSY_DRUGS)
            part_b = await cms.fetch_part_b(PART_B_KEYWORD_CODES)
            part_b_drug = await cms.fetch_part_b_drug_spending(EPILEPSY_DRUGS)

        counts = {key: _count(value) for key, value in local.items()}
        counts.update(
            fda_adverse=len(adverse_events),
            clinical_trials=len(clinical_trials),
            uspto=len(patents),
            part_b=len(part_b),
            part_d=len(part_d),
            part_b_drug=len(part_b_drug),
        )
        logger.info(f"Data fetch and load complete: {counts}")

        # 3. 집계
        agg = aggregator or MarketOverviewAggregator()
        agg.add_who_deaths(local.get("who_deaths"))
        agg.add_cdc_underlying_cause(local.get("cdc_underlying_cause"))
        agg.add_nih_funding(local.get("nih_funding"))
        agg.add_open_payments(local.get("open_payments"))
        agg.add_part_d(part_d)
        agg.add_part_b(part_b)
        agg.add_part_b_drug_spending(part_b_drug)
        agg.add_inpatient_stays(local.get("cms_inpatient"))
        agg.add_ema_dhpc(local.get("ema_dhpc"))
        agg.add_ema_shortages(local.get("ema_shortages"))
        agg.add_clinical_trials(clinical_trials)
        agg.add_adverse_events(adverse_events)
        agg.add_patents(patents)

        summary = agg.summary()
        logger.info("Enhanced market overview processed successfully")
        return summary

    return await get_or_set_cache("market_overview", _build)
