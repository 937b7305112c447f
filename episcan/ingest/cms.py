"""CMS data-api 클라이언트

Medicare Part D 처방, Part B 행위(디바이스/진단), Part B 약제 지출 데이터셋.
API 문서: https://data.cms.gov/api-docs
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import httpx

from episcan.config import settings
from episcan.ingest.base import BaseClient
from episcan.parse.values import coerce_float, coerce_int

logger = logging.getLogger(__name__)

# Part B 서비스 조회 페이지네이션
FIRST_PAGE_SIZE = 100
NEXT_PAGE_SIZE = 500
MAX_SERVICE_RECORDS = 2000
PAGE_DELAY = 0.1


class CMSClient(BaseClient):
    """CMS data-api 클라이언트"""

    def __init__(
        self,
        base_url: str | None = None,
        page_size: int | None = None,
        timeout: float | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(timeout=timeout or settings.HTTP_TIMEOUT, transport=transport)
        self.base_url = (base_url or settings.CMS_BASE_URL).rstrip("/")
        self.page_size = page_size or settings.CMS_PAGE_SIZE

    def dataset_url(self, uuid: str) -> str:
        return f"{self.base_url}/{uuid}/data"

    async def fetch_dataset(self, uuid: str, keywords: list[str]) -> list[dict[str, Any]]:
        """키워드 검색 (리스트가 아닌 응답은 빈 목록)"""
        data = await self.request(
            self.dataset_url(uuid),
            params={"keyword": "|".join(keywords), "size": self.page_size},
        )
        return data if isinstance(data, list) else []

    async def fetch_part_d(self, drugs: list[str]) -> list[dict[str, Any]]:
        """Medicare Part D 약제 비용 (Tot_Drug_Cst)"""
        return await self.fetch_dataset(settings.CMS_PART_D_UUID, drugs)

    async def fetch_part_b(self, hcpcs_codes: list[str]) -> list[dict[str, Any]]:
        """Medicare Part B 행위 비용 (Tot_Medicare_Pymt_Amt)"""
        return await self.fetch_dataset(settings.CMS_PART_B_UUID, hcpcs_codes)

    async def fetch_part_b_drug_spending(self, drugs: list[str]) -> list[dict[str, Any]]:
        """Medicare Part B 약제 지출 (Total_Spending)"""
        return await self.fetch_dataset(settings.CMS_PART_B_DRUG_UUID, drugs)

    async def fetch_part_b_services(self, hcpcs_code: str, year: int) -> list[dict[str, Any]]:
        """HCPCS 코드/연도별 Part B 시술 건수 (페이지네이션)

        Returns:
            [{year, implantations, avgPayment, totalPayment, providerCount,
              hcpcsCode, hcpcsDescription}]
        """
        url = self.dataset_url(settings.CMS_PART_B_UUID)
        records: list[dict[str, Any]] = []
        offset = 0

        logger.info(f"[CMS] Part B 조회: HCPCS={hcpcs_code}, year={year}")

        while len(records) < MAX_SERVICE_RECORDS:
            batch_size = FIRST_PAGE_SIZE if not records else NEXT_PAGE_SIZE
            page = await self.request(
                url,
                headers={"Accept": "application/json"},
                params={
                    "filter[HCPCS_Cd]": hcpcs_code,
                    "filter[Year]": year,
                    "size": batch_size,
                    "offset": offset,
                },
            )
            if not isinstance(page, list) or not page:
                break

            for row in page:
                record = self._parse_service_row(row, hcpcs_code, year)
                if record is not None:
                    records.append(record)

            if len(page) < batch_size:
                break
            offset += batch_size
            await asyncio.sleep(PAGE_DELAY)

        if not records:
            logger.warning(f"[CMS] No data found for HCPCS {hcpcs_code}, year {year}")
        return records[:MAX_SERVICE_RECORDS]

    @staticmethod
    def _parse_service_row(row: dict[str, Any], hcpcs_code: str, year: int) -> Optional[dict[str, Any]]:
        """Part B 행 정규화 (음수 값 행은 제외)"""
        services = coerce_float(row.get("Tot_Srvcs") or row.get("total_services"))
        avg_payment = coerce_float(
            row.get("Avg_Mdcr_Pymt_Amt") or row.get("average_medicare_payment_amt")
        )
        if services < 0 or avg_payment < 0:
            return None

        return {
            "year": int(year),
            "implantations": services,
            "avgPayment": avg_payment,
            "totalPayment": services * avg_payment,
            "providerCount": coerce_int(row.get("Tot_Rndrng_Prvdrs") or row.get("provider_count")),
            "hcpcsCode": hcpcs_code,
            "hcpcsDescription": row.get("HCPCS_Desc") or row.get("hcpcs_description") or "",
        }
