"""API 의존성 - 외부 클라이언트 생성"""

from typing import AsyncIterator

from episcan.ingest.cms import CMSClient
from episcan.presentation.api_client import CompetitorAPIClient


async def get_cms_client() -> AsyncIterator[CMSClient]:
    """요청 단위 CMS 클라이언트"""
    async with CMSClient() as client:
        yield client


async def get_competitor_client() -> AsyncIterator[CompetitorAPIClient]:
    """경쟁사 목록 화면이 사용하는 백엔드 클라이언트"""
    async with CompetitorAPIClient() as client:
        yield client
