"""원본 셀 값 변환 유틸리티

스프레드시트/CSV/API 응답의 값은 문자열, 정수, 실수, NaN, None이 섞여 들어온다.
숫자 필드는 선행 숫자 접두어만 해석하고, 해석할 수 없으면 0으로 처리한다.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any, Optional

_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")

_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y-%m-%dT%H:%M:%S",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M:%S",
    "%Y/%m/%d",
    "%d/%m/%Y",
    "%Y%m%d",
)


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def coerce_float(value: Any) -> float:
    """실수 변환 (실패 시 0.0)

    "1,234" → 1.0, "12abc" → 12.0, "n/a" → 0.0
    """
    if _is_missing(value) or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else 0.0

    match = _FLOAT_PREFIX.match(str(value))
    if not match:
        return 0.0
    result = float(match.group(1))
    return result if math.isfinite(result) else 0.0


def coerce_int(value: Any) -> int:
    """정수 변환 (실패 시 0, 소수점 이하 버림)"""
    if _is_missing(value) or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0

    match = _INT_PREFIX.match(str(value))
    return int(match.group(1)) if match else 0


def normalize_year(value: Any) -> Optional[str]:
    """연도 필드를 문자열로 정규화

    엑셀에서 읽은 2022.0 같은 값도 "2022"로 맞춘다.
    """
    if _is_missing(value) or isinstance(value, bool):
        return None
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    text = str(value).strip()
    return text or None


def year_of_date(value: Any) -> Optional[str]:
    """날짜 값에서 연도 추출 (해석 불가 시 None)"""
    if _is_missing(value):
        return None
    if isinstance(value, (datetime, date)):
        return str(value.year)

    text = str(value).strip()
    if not text:
        return None

    try:
        return str(datetime.fromisoformat(text.replace("Z", "+00:00")).year)
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            return str(datetime.strptime(text, fmt).year)
        except ValueError:
            continue
    return None
