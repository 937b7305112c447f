"""분류 규칙 및 경쟁사 매핑"""

from .classifier import (
    RowRule,
    classify,
    classify_all,
    contains_any,
    starts_with_any,
    in_code_set,
    EPILEPSY_DRUGS,
    matches_epilepsy_drug,
    DEVICE_HCPCS,
    DIAGNOSTIC_HCPCS,
    PART_B_KEYWORD_CODES,
    PART_B_COST_RULES,
    COMPETITOR_PAYMENT_RULES,
    PIPELINE_SPONSORS,
)
from .competitors import (
    Competitor,
    CompetitorType,
    COMPETITORS,
    get_competitor,
    competitors_by_type,
)

__all__ = [
    "RowRule",
    "classify",
    "classify_all",
    "contains_any",
    "starts_with_any",
    "in_code_set",
    "EPILEPSY_DRUGS",
    "matches_epilepsy_drug",
    "DEVICE_HCPCS",
    "DIAGNOSTIC_HCPCS",
    "PART_B_KEYWORD_CODES",
    "PART_B_COST_RULES",
    "COMPETITOR_PAYMENT_RULES",
    "PIPELINE_SPONSORS",
    "Competitor",
    "CompetitorType",
    "COMPETITORS",
    "get_competitor",
    "competitors_by_type",
]
