"""집계 모듈"""

from .market_overview import (
    MarketOverviewAggregator,
    build_market_overview,
    get_or_set_cache,
)
from .market_share import (
    estimate_market_share,
    analyze_implantation_trends,
    analyze_reimbursement_trends,
    collect_device_market_data,
    MARKET_SHARE_DISCLAIMER,
)

__all__ = [
    "MarketOverviewAggregator",
    "build_market_overview",
    "get_or_set_cache",
    "estimate_market_share",
    "analyze_implantation_trends",
    "analyze_reimbursement_trends",
    "collect_device_market_data",
    "MARKET_SHARE_DISCLAIMER",
]
