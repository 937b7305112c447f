"""경쟁사 목록 화면"""

from .competitor_list import (
    CompetitorFilters,
    CompetitorListView,
    calculate_growth,
    build_competitor_rows,
    apply_filters,
    split_competitors,
    market_share_display,
    type_label,
    growth_status,
    threat_level,
    market_share_chart,
    growth_chart,
)
from .api_client import CompetitorAPIClient, CompetitorDataError, load_competitor_view

__all__ = [
    "CompetitorFilters",
    "CompetitorListView",
    "calculate_growth",
    "build_competitor_rows",
    "apply_filters",
    "split_competitors",
    "market_share_display",
    "type_label",
    "growth_status",
    "threat_level",
    "market_share_chart",
    "growth_chart",
    "CompetitorAPIClient",
    "CompetitorDataError",
    "load_competitor_view",
]
