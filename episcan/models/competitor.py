"""경쟁사 데이터 모델"""

from typing import Optional

from pydantic import Field

from .market import CamelModel


class CompetitorInfo(CamelModel):
    """경쟁사 목록 API 항목"""

    name: str
    type: str
    treatment: str
    cik: Optional[str] = None
    has_sec_data: bool = False


class CompetitorShare(CamelModel):
    """경쟁사별 시술 건수 점유율"""

    competitor_percentage: str
    refractory_share: str
    implantations: float
    year: int


class MarketShareContext(CamelModel):
    """점유율 응답 부가 정보"""

    disclaimer: str
    competitors: list[dict] = Field(default_factory=list)
    data_points: int = 0


class MarketShareResponse(CamelModel):
    """디바이스 점유율 추정 결과"""

    shares: dict[str, CompetitorShare] = Field(default_factory=dict)
    total_market: float = 0
    latest_year: int
    estimated_penetration: str
    refractory_population: int
    context: Optional[MarketShareContext] = None


class CompetitorRow(CamelModel):
    """경쟁사 목록 화면의 한 행"""

    name: str
    type: str
    treatment: str
    market_share: float = 0.0
    growth: float = 0.0
    has_sec_data: bool = False


class TrendDataset(CamelModel):
    """경쟁사 한 곳의 연도별 값"""

    label: str
    data: list[float]


class CompetitorTrendChart(CamelModel):
    """경쟁사별 연도 추세 차트 (시술 건수, 평균 상환액)"""

    labels: list[int]
    datasets: list[TrendDataset] = Field(default_factory=list)
