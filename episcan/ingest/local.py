"""로컬 데이터 파일 로더

엑셀(xlsx), 구분자 텍스트(CSV/TSV), JSON 파일을 행 목록으로 읽는다.
파일 단위로 실패를 흡수하여 빈 목록을 반환하며, 각 파일의 처음 몇 행은
주입된 ContentLogSink에 기록한다.
"""

from __future__ import annotations

import asyncio
import csv
import io
import json
import logging
import math
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import pandas as pd

from episcan.config import settings
from episcan.ingest.log_sink import ContentLogSink, NullLogSink

logger = logging.getLogger(__name__)


class SourceKind(str, Enum):
    """입력 파일 형식"""

    EXCEL = "excel"
    CSV = "csv"
    JSON = "json"


# 파일명에 포함되면 탭 구분자 사용
TAB_DELIMITED_MARKERS = ("Underlying Cause of Death", "WHOMortalityDatabase")

# 파일명에 포함되면 첫 시트 대신 지정 시트 사용
SHEET_OVERRIDES = {
    "FSNationalTrendsInpatientStays": "Trends in Inpatient Stays",
}


@dataclass(frozen=True)
class DataSource:
    """로컬 입력 파일 정의"""

    key: str
    filename: str
    kind: SourceKind

    @property
    def delimiter(self) -> str:
        if any(marker in self.filename for marker in TAB_DELIMITED_MARKERS):
            return "\t"
        return ","

    @property
    def sheet_name(self) -> Optional[str]:
        for marker, sheet in SHEET_OVERRIDES.items():
            if marker in self.filename:
                return sheet
        return None


LOCAL_SOURCES = [
    DataSource("ema_dhpc", "medicines_output_dhpc_en.xlsx", SourceKind.EXCEL),
    DataSource("ema_shortages", "medicines_output_shortages_en.xlsx", SourceKind.EXCEL),
    DataSource("ema_post_auth", "medicines_output_post_authorisation_en.xlsx", SourceKind.EXCEL),
    DataSource(
        "who_deaths",
        "WHOMortalityDatabase_Deaths_sex_age_a_country_area_year_Epilepsy_18th March 2025 17.48.csv",
        SourceKind.CSV,
    ),
    DataSource(
        "cdc_underlying_cause",
        "Underlying Cause of Death, 2018-2023, Single Race.txt",
        SourceKind.CSV,
    ),
    DataSource("nih_funding", "RCDCFundingSummary_03182025.xlsx", SourceKind.EXCEL),
    DataSource(
        "cms_inpatient",
        "FSNationalTrendsInpatientStays-dy21Deliverable-08Apr2024.xlsx",
        SourceKind.EXCEL,
    ),
    DataSource("cms_rcdc_funding", "RCDCFundingSummary_03182025.xlsx", SourceKind.EXCEL),
    DataSource("open_payments", "data.csv", SourceKind.CSV),
]


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and value == ""


def _header_text(value: Any) -> str:
    if _is_blank(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def make_headers(cells: list[Any]) -> list[str]:
    """헤더 행을 컬럼 키로 변환

    중복 이름은 `_1`, `_2` 접미어를 붙이고, 빈 헤더는 `__EMPTY` 계열로 채운다.
    접미어를 붙인 이름이 이미 쓰였으면 쓰이지 않은 번호가 나올 때까지 올린다.
    """
    seen: dict[str, int] = {}
    used: set[str] = set()
    headers = []
    for cell in cells:
        name = _header_text(cell) or "__EMPTY"
        count = seen.get(name, 0)
        header = name
        while header in used:
            count += 1
            header = f"{name}_{count}"
        seen[name] = count
        used.add(header)
        headers.append(header)
    return headers


def rows_from_grid(grid: list[list[Any]]) -> list[dict[str, Any]]:
    """첫 행을 헤더로 하는 행 dict 목록 (빈 셀 생략, 빈 행 제외)"""
    if not grid:
        return []

    headers = make_headers(grid[0])
    rows = []
    for values in grid[1:]:
        row = {
            header: value
            for header, value in zip(headers, values)
            if not _is_blank(value)
        }
        if row:
            rows.append(row)
    return rows


def parse_delimited(raw: str, delimiter: str = ",") -> list[dict[str, str]]:
    """구분자 텍스트 파싱

    - 헤더/값 앞뒤 공백 제거
    - 빈 줄 건너뜀
    - 컬럼 수가 헤더와 다른 줄은 건너뜀
    """
    reader = csv.reader(io.StringIO(raw), delimiter=delimiter)

    header: Optional[list[str]] = None
    rows = []
    for line in reader:
        if not line or all(not cell.strip() for cell in line):
            continue
        cells = [cell.strip() for cell in line]
        if header is None:
            header = cells
            continue
        if len(cells) != len(header):
            continue
        rows.append(dict(zip(header, cells)))
    return rows


class LocalFileLoader:
    """로컬 데이터 파일 로더"""

    def __init__(
        self,
        data_dir: Path | str | None = None,
        sink: ContentLogSink | None = None,
        sample_size: int | None = None,
    ):
        self.data_dir = Path(data_dir) if data_dir else settings.DATA_DIR
        self.sink = sink or NullLogSink()
        self.sample_size = sample_size or settings.CONTENT_LOG_SAMPLE_SIZE

    async def load(self, source: DataSource) -> Any:
        """단일 파일 로드 (실패 시 빈 목록)"""
        try:
            data, sample = await asyncio.to_thread(self._read, source)
        except Exception as e:
            logger.error(f"Error reading file {source.filename}: {e}")
            return []

        self.sink.append(sample)
        return data

    async def load_all(self, sources: list[DataSource] | None = None) -> dict[str, Any]:
        """여러 파일 동시 로드

        모든 파일이 끝날 때까지 기다리며, 실패한 파일은 빈 목록으로 채워진다.
        """
        sources = sources if sources is not None else LOCAL_SOURCES
        results = await asyncio.gather(*(self.load(source) for source in sources))
        return {source.key: result for source, result in zip(sources, results)}

    def _read(self, source: DataSource) -> tuple[Any, str]:
        """파일 읽기 + 로그용 샘플 생성 (워커 스레드에서 실행)"""
        path = self.data_dir / source.filename

        if source.kind == SourceKind.EXCEL:
            rows = self.read_excel(path, source.sheet_name)
            first_rows = "\n".join(
                json.dumps(row, ensure_ascii=False, default=str)
                for row in rows[: self.sample_size]
            )
            sample = f"File: {source.filename}\nFirst {self.sample_size} rows (Excel):\n{first_rows}\n---"
            return rows, sample

        raw = path.read_text(encoding="utf-8-sig", errors="replace")
        lines = "\n".join(raw.split("\n")[: self.sample_size])
        sample = f"File: {source.filename}\nFirst {self.sample_size} lines:\n{lines}\n---"

        if source.kind == SourceKind.JSON:
            return json.loads(raw), sample
        return parse_delimited(raw, delimiter=source.delimiter), sample

    @staticmethod
    def read_excel(path: Path, sheet_name: Optional[str] = None) -> list[dict[str, Any]]:
        """엑셀 시트를 행 dict 목록으로 변환 (기본: 첫 시트)"""
        df = pd.read_excel(
            path,
            sheet_name=sheet_name if sheet_name is not None else 0,
            header=None,
            dtype=object,
        )
        grid = df.astype(object).where(pd.notna(df), None).values.tolist()
        return rows_from_grid(grid)
