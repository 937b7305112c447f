"""데이터 모델"""

from .market import (
    CamelModel,
    ChartSeries,
    TrendSeries,
    ForecastSeries,
    MarketSummary,
)
from .competitor import (
    CompetitorInfo,
    CompetitorShare,
    MarketShareContext,
    MarketShareResponse,
    CompetitorRow,
    TrendDataset,
    CompetitorTrendChart,
)

__all__ = [
    "CamelModel",
    "ChartSeries",
    "TrendSeries",
    "ForecastSeries",
    "MarketSummary",
    "CompetitorInfo",
    "CompetitorShare",
    "MarketShareContext",
    "MarketShareResponse",
    "CompetitorRow",
    "TrendDataset",
    "CompetitorTrendChart",
]
