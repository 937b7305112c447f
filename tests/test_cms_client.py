"""CMS data-api 클라이언트 테스트"""

import httpx
import pytest

from episcan.config import settings
from episcan.ingest.base import BaseClient
from episcan.ingest.cms import FIRST_PAGE_SIZE, NEXT_PAGE_SIZE, CMSClient


class TestBaseClient:
    """공통 요청 처리"""

    @pytest.mark.asyncio
    async def test_request_failure_returns_none(self, failing_transport):
        async with BaseClient(transport=failing_transport) as client:
            assert await client.request("https://example.org/x") is None

    @pytest.mark.asyncio
    async def test_invalid_json_returns_none(self):
        transport = httpx.MockTransport(lambda r: httpx.Response(200, text="<html>"))
        async with BaseClient(transport=transport) as client:
            assert await client.request("https://example.org/x") is None

    def test_client_outside_context(self):
        with pytest.raises(RuntimeError):
            BaseClient().client


class TestFetchDataset:
    """키워드 검색"""

    @pytest.mark.asyncio
    async def test_keyword_params(self, json_transport):
        seen = []

        def handler(request):
            seen.append(request)
            return [{"Tot_Drug_Cst": "100"}]

        async with CMSClient(transport=json_transport(handler)) as cms:
            rows = await cms.fetch_part_d(["levetiracetam", "lamotrigine"])

        assert rows == [{"Tot_Drug_Cst": "100"}]
        request = seen[0]
        assert request.url.path.endswith(f"/{settings.CMS_PART_D_UUID}/data")
        assert request.url.params["keyword"] == "levetiracetam|lamotrigine"
        assert request.url.params["size"] == str(settings.CMS_PAGE_SIZE)

    @pytest.mark.asyncio
    async def test_non_list_response_is_empty(self, json_transport):
        async with CMSClient(transport=json_transport(lambda r: {"message": "error"})) as cms:
            assert await cms.fetch_part_b(["64568"]) == []

    @pytest.mark.asyncio
    async def test_http_error_is_empty(self, failing_transport):
        async with CMSClient(transport=failing_transport) as cms:
            assert await cms.fetch_part_b_drug_spending(["topiramate"]) == []


class TestPartBServices:
    """HCPCS/연도별 시술 건수"""

    @pytest.mark.asyncio
    async def test_single_page(self, json_transport):
        def handler(request):
            assert request.url.params["filter[HCPCS_Cd]"] == "64568"
            assert request.url.params["filter[Year]"] == "2022"
            return [
                {
                    "Tot_Srvcs": "120",
                    "Avg_Mdcr_Pymt_Amt": "1500.5",
                    "Tot_Rndrng_Prvdrs": "40",
                    "HCPCS_Desc": "Implantation of vagus nerve stimulator",
                },
                {"Tot_Srvcs": "-1", "Avg_Mdcr_Pymt_Amt": "10"},
            ]

        async with CMSClient(transport=json_transport(handler)) as cms:
            records = await cms.fetch_part_b_services("64568", 2022)

        assert records == [
            {
                "year": 2022,
                "implantations": 120.0,
                "avgPayment": 1500.5,
                "totalPayment": 120.0 * 1500.5,
                "providerCount": 40,
                "hcpcsCode": "64568",
                "hcpcsDescription": "Implantation of vagus nerve stimulator",
            }
        ]

    @pytest.mark.asyncio
    async def test_pagination(self, monkeypatch, json_transport):
        """첫 페이지 100건, 이후 500건 단위"""
        monkeypatch.setattr("episcan.ingest.cms.PAGE_DELAY", 0)
        requests = []

        def handler(request):
            size = int(request.url.params["size"])
            offset = int(request.url.params["offset"])
            requests.append((size, offset))
            count = size if offset == 0 else 3
            return [{"Tot_Srvcs": "1", "Avg_Mdcr_Pymt_Amt": "2"}] * count

        async with CMSClient(transport=json_transport(handler)) as cms:
            records = await cms.fetch_part_b_services("95816", 2021)

        assert requests == [(FIRST_PAGE_SIZE, 0), (NEXT_PAGE_SIZE, FIRST_PAGE_SIZE)]
        assert len(records) == FIRST_PAGE_SIZE + 3

    @pytest.mark.asyncio
    async def test_empty(self, json_transport):
        async with CMSClient(transport=json_transport(lambda r: [])) as cms:
            assert await cms.fetch_part_b_services("61885", 2020) == []
