"""파서 모듈"""

from .values import coerce_float, coerce_int, normalize_year, year_of_date

__all__ = [
    "coerce_float",
    "coerce_int",
    "normalize_year",
    "year_of_date",
]
