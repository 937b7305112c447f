"""프로젝트 설정"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """EpiScan 설정"""

    # 프로젝트 경로
    BASE_DIR: Path = Path(__file__).parent.parent.parent
    DATA_DIR: Path = BASE_DIR / "data"

    # 입력 파일 내용 로그 (각 파일의 처음 몇 줄)
    CONTENT_LOG_FILE: Path = BASE_DIR / "fileContentsLog.txt"
    CONTENT_LOG_SAMPLE_SIZE: int = 3

    # 집계 구간
    TREND_YEARS: list[str] = ["2020", "2021", "2022", "2023", "2024"]
    FORECAST_YEARS: list[str] = ["2025", "2026", "2027", "2028", "2029", "2030"]
    FORECAST_GROWTH_RATE: float = 1.068  # CAGR 6.8%

    # 비용 데이터가 없을 때 사용하는 점유율 (drugs/devices/diagnostics/other)
    FALLBACK_SHARE: dict[str, float] = {
        "drugs": 82.5,
        "devices": 10.2,
        "diagnostics": 5.3,
        "other": 2.0,
    }

    # 사망 1건당 시장 규모 대리값 ($10K, 단위: 십억 달러)
    DEATH_COST_PROXY_BILLIONS: float = 0.01

    # 지역별 분포 (추정치)
    REGIONAL_LABELS: list[str] = ["North America", "Europe", "Asia Pacific", "Rest of World"]
    REGIONAL_VALUES: list[float] = [45, 30, 20, 5]

    # NIH RCDC 펀딩 시트 - 첫 집계 연도(2020)가 _15 컬럼
    NIH_FUNDING_COLUMN: str = (
        "Estimates of Funding for Various Research, Condition, and Disease Categories (RCDC)"
    )
    NIH_FUNDING_COLUMN_OFFSET: int = 15

    # CMS data-api
    CMS_BASE_URL: str = "https://data.cms.gov/data-api/v1/dataset"
    CMS_PART_B_UUID: str = "6fea9d79-0129-4e4c-b1b8-23cd86a4f435"  # Physician & Other Practitioners
    CMS_PART_D_UUID: str = "9552739e-3d05-4c1b-8eff-ecabf391e2e5"  # Part D Prescribers
    CMS_PART_B_DRUG_UUID: str = "76a714ad-3a2c-43ac-b76d-9dadf8f7d890"  # Part B Drug Spending
    CMS_PAGE_SIZE: int = 1000

    # 외부 API (openFDA, ClinicalTrials.gov, USPTO)
    USE_LIVE_EXTERNAL_APIS: bool = False
    FDA_API_KEY: Optional[str] = None
    FDA_BASE_URL: str = "https://api.fda.gov"
    CT_GOV_BASE_URL: str = "https://clinicaltrials.gov/api/v2/studies"
    PATENTSVIEW_API_KEY: Optional[str] = None
    PATENTSVIEW_BASE_URL: str = "https://search.patentsview.org/api/v1/patent/"
    HTTP_TIMEOUT: float = 30.0

    # 디바이스 점유율 추정
    MARKET_SHARE_YEARS: list[int] = [2020, 2021, 2022]
    REFRACTORY_POPULATION: int = 1_000_000

    # API 서버
    API_HOST: str = "127.0.0.1"
    API_PORT: int = 8000

    # 경쟁사 목록 페이지가 호출하는 백엔드
    API_BASE_URL: str = "http://localhost:8000"

    # 로깅
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # 추가 환경변수 무시


settings = Settings()
