"""경쟁사 목록 화면용 백엔드 API 클라이언트"""

from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import Any, Optional

import httpx

from episcan.config import settings
from episcan.ingest.base import BaseClient
from episcan.presentation.competitor_list import (
    CompetitorFilters,
    CompetitorListView,
    apply_filters,
    build_competitor_rows,
    growth_chart,
    market_share_chart,
    split_competitors,
)

logger = logging.getLogger(__name__)


class CompetitorDataError(Exception):
    """경쟁사 목록 조회 실패 (화면 전체 실패)"""


class CompetitorAPIClient(BaseClient):
    """/api/competitors, /api/analytics/marketshare 클라이언트"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(timeout=timeout or settings.HTTP_TIMEOUT, transport=transport)
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")

    async def fetch_competitors(self) -> list[dict[str, Any]]:
        """경쟁사 목록 (2xx 외 응답, 빈 목록은 CompetitorDataError)"""
        try:
            response = await self.client.get(f"{self.base_url}/api/competitors")
        except httpx.HTTPError as e:
            raise CompetitorDataError(str(e)) from e

        if not response.is_success:
            raise CompetitorDataError(f"HTTP error! status: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise CompetitorDataError(f"Invalid JSON: {e}") from e

        if not data or not isinstance(data, list):
            raise CompetitorDataError("No competitor data found")
        return data

    async def fetch_market_share(self) -> Optional[dict[str, Any]]:
        """점유율 데이터 (실패 시 None)"""
        data = await self.request(f"{self.base_url}/api/analytics/marketshare")
        if not isinstance(data, dict):
            logger.warning("Market share data could not be loaded")
            return None
        return data


async def load_competitor_view(
    client: CompetitorAPIClient,
    filters: CompetitorFilters | None = None,
    rng: random.Random | None = None,
) -> CompetitorListView:
    """경쟁사 목록 화면 상태 생성

    경쟁사 목록 실패는 화면 오류, 점유율 실패는 차트 오류로만 처리한다.
    """
    view = CompetitorListView(filters=filters or CompetitorFilters())

    try:
        competitors = await client.fetch_competitors()
    except CompetitorDataError as e:
        logger.error(f"Error fetching competitors: {e}")
        view.error = f"Failed to load competitor data: {e}"
        return view

    market_share = await client.fetch_market_share()

    rows = build_competitor_rows(competitors, market_share, rng)
    view.main, view.early_stage = split_competitors(apply_filters(rows, view.filters))

    if market_share is None:
        view.chart_error = True
    else:
        view.share_chart = market_share_chart(market_share)
        view.growth_chart = growth_chart(view.main)

    view.last_updated = datetime.now()
    return view
