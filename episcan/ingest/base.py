"""API 클라이언트 베이스 클래스"""

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class BaseClient:
    """httpx 기반 비동기 API 클라이언트

    request()는 실패 시 예외 대신 None을 반환한다.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self._client = httpx.AsyncClient(
            timeout=self.timeout,
            transport=self.transport,
            follow_redirects=True,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError(f"{type(self).__name__} must be used as async context manager")
        return self._client

    async def request(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[dict[str, str]] = None,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        """JSON 요청 (HTTP/네트워크/디코딩 실패 시 None)"""
        try:
            response = await self.client.request(
                method,
                url,
                headers=headers or {},
                params=params or {},
                json=json,
            )
            response.raise_for_status()
            return response.json()
        except Exception as e:
            logger.error(f"API request failed for {url}: {e}")
            return None
