"""카테고리 분류 규칙 테이블

데이터셋별 행 분류 기준을 (카테고리 → 판정 함수) 테이블로 선언한다.
- ICD-10 코드 접두어 (CDC WONDER 사망원인, CMS 입원 진단)
- HCPCS 코드 집합 (Part B 디바이스/진단)
- 약물명 부분일치 (EMA DHPC/공급부족)
- 제조사/스폰서명 부분일치 (Open Payments, ClinicalTrials.gov)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional


# =============================================================================
# 판정 함수 팩토리
# =============================================================================

Predicate = Callable[[Any], bool]


def contains_any(terms: Iterable[str], case_sensitive: bool = False) -> Predicate:
    """문자열이 terms 중 하나를 포함하는지 판정"""
    terms = tuple(terms)
    needles = terms if case_sensitive else tuple(t.lower() for t in terms)

    def predicate(value: Any) -> bool:
        if not isinstance(value, str):
            return False
        text = value.strip() if case_sensitive else value.lower().strip()
        return any(needle in text for needle in needles)

    return predicate


def starts_with_any(prefixes: Iterable[str]) -> Predicate:
    """문자열이 접두어 중 하나로 시작하는지 판정"""
    prefixes = tuple(prefixes)

    def predicate(value: Any) -> bool:
        return isinstance(value, str) and value.startswith(prefixes)

    return predicate


def in_code_set(codes: Iterable[str]) -> Predicate:
    """코드 집합 포함 여부 판정"""
    codes = frozenset(codes)

    def predicate(value: Any) -> bool:
        return value is not None and str(value).strip() in codes

    return predicate


@dataclass(frozen=True)
class RowRule:
    """단일 필드 기반 행 분류 규칙"""

    category: str
    field: str
    predicate: Predicate

    def matches(self, row: Mapping[str, Any]) -> bool:
        return self.predicate(row.get(self.field))


def classify(row: Mapping[str, Any], rules: Iterable[RowRule]) -> Optional[str]:
    """첫 번째로 일치하는 규칙의 카테고리 반환"""
    for rule in rules:
        if rule.matches(row):
            return rule.category
    return None


def classify_all(row: Mapping[str, Any], rules: Iterable[RowRule]) -> list[str]:
    """일치하는 모든 카테고리 반환 (중복 허용 규칙용)"""
    return [rule.category for rule in rules if rule.matches(row)]


# =============================================================================
# 약물
# =============================================================================

EPILEPSY_DRUGS = [
    "levetiracetam",
    "lamotrigine",
    "valproate",
    "carbamazepine",
    "topiramate",
    "oxcarbazepine",
]

matches_epilepsy_drug = contains_any(EPILEPSY_DRUGS)

# EMA 엑셀 리포트 컬럼
EMA_DHPC_SUBSTANCE_FIELD = "Active substances"
EMA_SHORTAGE_INN_FIELD = "International non-proprietary name (INN) or common name"


# =============================================================================
# HCPCS (Medicare Part B)
# =============================================================================

DEVICE_HCPCS = frozenset({"61885", "64568", "L8680"})  # VNS 이식/교체
DIAGNOSTIC_HCPCS = frozenset({"95812", "95813", "95816", "95819"})  # EEG

# Part B 조회 키워드 (L8680은 조회 대상 아님)
PART_B_KEYWORD_CODES = ["61885", "64568", "95812", "95813", "95816", "95819"]

PART_B_COST_RULES = [
    RowRule("devices", "HCPCS_Cd", in_code_set(DEVICE_HCPCS)),
    RowRule("diagnostics", "HCPCS_Cd", in_code_set(DIAGNOSTIC_HCPCS)),
]


# =============================================================================
# ICD-10
# =============================================================================

# CDC WONDER ICD-10 113 Cause List: GR113-048 (Epilepsy)
CDC_CAUSE_FIELD = "ICD-10 113 Cause List Code"
CDC_EPILEPSY_PREFIXES = ("GR113-048",)
is_cdc_epilepsy_cause = starts_with_any(CDC_EPILEPSY_PREFIXES)

# CMS 입원 진단명에 G40 (Epilepsy and recurrent seizures) 포함
INPATIENT_DIAGNOSIS_FIELD = "Diagnosis"
INPATIENT_EPILEPSY_CODES = ("G40",)
is_inpatient_epilepsy = contains_any(INPATIENT_EPILEPSY_CODES, case_sensitive=True)


# =============================================================================
# 경쟁사
# =============================================================================

OPEN_PAYMENTS_COMPANY_FIELD = "Applicable_Manufacturer_or_Applicable_GPO_Making_Payment_Name"

# 한 제조사명이 여러 경쟁사에 동시에 걸릴 수 있으므로 classify_all 사용
COMPETITOR_PAYMENT_RULES = [
    RowRule("Medtronic", OPEN_PAYMENTS_COMPANY_FIELD, contains_any(["medtronic"])),
    RowRule("LivaNova", OPEN_PAYMENTS_COMPANY_FIELD, contains_any(["livanova"])),
]

PIPELINE_SPONSORS = ["Medtronic", "LivaNova"]


def lead_sponsor_name(study: Mapping[str, Any]) -> str:
    """CT.gov v2 study에서 lead sponsor 이름 추출"""
    proto = study.get("protocolSection") or {}
    sponsors = proto.get("sponsorCollaboratorsModule") or {}
    lead = sponsors.get("leadSponsor") or {}
    name = lead.get("name")
    return name if isinstance(name, str) else ""


def sponsor_matches(study: Mapping[str, Any], sponsor: str) -> bool:
    """lead sponsor 이름에 경쟁사명이 포함되는지 (대소문자 구분)"""
    return sponsor in lead_sponsor_name(study)
