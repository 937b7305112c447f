"""EpiScan API 메인"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from episcan import __version__
from episcan.api.routes import analytics, competitors, dashboard, market
from episcan.config import settings

# 로깅 설정
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


app = FastAPI(
    title="EpiScan API",
    description="뇌전증 시장 개요 및 경쟁사 분석 API",
    version=__version__,
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["Content-Type"],
)

# 라우터 등록
app.include_router(competitors.router, prefix="/api/competitors", tags=["Competitors"])
app.include_router(analytics.router, prefix="/api/analytics", tags=["Analytics"])
app.include_router(market.router, prefix="/api/market", tags=["Market"])
app.include_router(dashboard.router, tags=["Dashboard"])


@app.get("/")
def root():
    """API 상태"""
    return {
        "service": "EpiScan API",
        "version": __version__,
        "status": "running",
    }


@app.get("/health")
def health():
    """헬스체크"""
    return {"status": "healthy"}
