"""시장 개요 데이터 모델"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """JSON 키를 camelCase로 직렬화하는 베이스 모델"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChartSeries(CamelModel):
    """라벨/값 쌍 (점유율, 지역 분포)"""

    labels: list[str]
    values: list[float]


class TrendSeries(CamelModel):
    """연도 버킷별 추세"""

    years: list[str]
    market_size: list[float] = Field(..., description="시장 규모 (십억 달러)")
    epilepsy_deaths: list[float] = Field(..., description="사망자 수")
    nih_funding: list[float] = Field(..., description="NIH 연구비 (달러)")
    patent_trends: list[int] = Field(..., description="특허 건수")


class ForecastSeries(CamelModel):
    """시장 규모 예측"""

    years: list[str]
    values: list[float]


class MarketSummary(CamelModel):
    """뇌전증 시장 개요"""

    share: ChartSeries
    trends: TrendSeries
    forecast: ForecastSeries
    regional: ChartSeries
    competitor_payments: dict[str, list[float]] = Field(default_factory=dict)
    pipeline: dict[str, int] = Field(default_factory=dict)
    adverse_events: dict[str, int] = Field(default_factory=dict)
    drug_safety_issues: int = 0
    drug_shortages: int = 0
    hospital_costs: float = Field(0.0, description="입원 비용 (십억 달러, 소수점 2자리)")

    def to_json_dict(self) -> dict:
        """API 응답용 dict (camelCase)"""
        return self.model_dump(by_alias=True)
