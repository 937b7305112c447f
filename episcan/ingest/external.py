"""외부 시그널 수집 (openFDA 이상사례, ClinicalTrials.gov, USPTO 특허)

기본값은 고정 fixture 데이터를 반환하며, USE_LIVE_EXTERNAL_APIS가 켜져 있을 때만
실제 API를 호출한다. 실제 호출이 실패하면 빈 목록을 반환한다.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Optional

import httpx

from episcan.config import settings
from episcan.ingest.base import BaseClient
from episcan.map.classifier import matches_epilepsy_drug

logger = logging.getLogger(__name__)


# =============================================================================
# Fixture 데이터
# =============================================================================

FDA_ADVERSE_FIXTURE = [
    {"term": "levetiracetam", "count": 50},
    {"term": "lamotrigine", "count": 30},
]

CLINICAL_TRIALS_FIXTURE = [
    {"protocolSection": {"sponsorCollaboratorsModule": {"leadSponsor": {"name": "Medtronic"}}}},
    {"protocolSection": {"sponsorCollaboratorsModule": {"leadSponsor": {"name": "LivaNova"}}}},
]

USPTO_FIXTURE = [
    {"issueDate": "2020-01-01"},
    {"issueDate": "2021-01-01"},
    {"issueDate": "2022-01-01"},
]


class ExternalSignalsClient(BaseClient):
    """openFDA / CT.gov / PatentsView 클라이언트"""

    def __init__(
        self,
        live: bool | None = None,
        timeout: float | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(timeout=timeout or settings.HTTP_TIMEOUT, transport=transport)
        self.live = settings.USE_LIVE_EXTERNAL_APIS if live is None else live

    async def fetch_adverse_events(self, drugs: list[str]) -> list[dict[str, Any]]:
        """약물별 이상사례 보고 건수 [{term, count}]"""
        if not self.live:
            return copy.deepcopy(FDA_ADVERSE_FIXTURE)

        params: dict[str, Any] = {
            "search": "patient.drug.openfda.generic_name:(" + "+".join(drugs) + ")",
            "count": "patient.drug.openfda.generic_name.exact",
        }
        if settings.FDA_API_KEY:
            params["api_key"] = settings.FDA_API_KEY

        data = await self.request(f"{settings.FDA_BASE_URL}/drug/event.json", params=params)
        if not isinstance(data, dict):
            return []
        results = data.get("results") or []

        # count 쿼리는 병용 약물도 함께 반환하므로 뇌전증 약물만 남김
        return [r for r in results if matches_epilepsy_drug(r.get("term"))]

    async def fetch_pipeline_studies(
        self,
        sponsors: list[str],
        condition: str = "Epilepsy",
        page_size: int = 100,
    ) -> list[dict[str, Any]]:
        """스폰서별 임상시험 목록 (CT.gov v2 study 구조)"""
        if not self.live:
            return copy.deepcopy(CLINICAL_TRIALS_FIXTURE)

        studies: list[dict[str, Any]] = []
        seen: set[str] = set()

        for sponsor in sponsors:
            data = await self.request(
                settings.CT_GOV_BASE_URL,
                params={
                    "format": "json",
                    "query.cond": condition,
                    "query.spons": sponsor,
                    "pageSize": page_size,
                },
            )
            if not isinstance(data, dict):
                continue

            for study in data.get("studies", []):
                nct_id = (
                    study.get("protocolSection", {})
                    .get("identificationModule", {})
                    .get("nctId", "")
                )
                if nct_id and nct_id in seen:
                    continue
                if nct_id:
                    seen.add(nct_id)
                studies.append(study)

        logger.info(f"CT.gov 총 {len(studies)}건 수집 (sponsors={len(sponsors)})")
        return studies

    async def fetch_patents(self, keyword: str = "epilepsy", size: int = 1000) -> list[dict[str, Any]]:
        """특허 목록 [{issueDate}]"""
        if not self.live:
            return copy.deepcopy(USPTO_FIXTURE)

        if not settings.PATENTSVIEW_API_KEY:
            logger.warning("PATENTSVIEW_API_KEY 미설정 - 특허 조회 건너뜀")
            return []

        data = await self.request(
            settings.PATENTSVIEW_BASE_URL,
            method="POST",
            headers={"X-Api-Key": settings.PATENTSVIEW_API_KEY},
            json={
                "q": {"_text_any": {"patent_abstract": keyword}},
                "f": ["patent_id", "patent_date"],
                "o": {"size": size},
            },
        )
        if not isinstance(data, dict):
            return []

        return [
            {"patentId": p.get("patent_id"), "issueDate": p.get("patent_date")}
            for p in data.get("patents") or []
        ]
