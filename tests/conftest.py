"""공통 pytest 설정 및 fixture

- 샘플 데이터셋 (WHO, CDC WONDER, NIH RCDC, Open Payments, CMS)
- httpx MockTransport 헬퍼
"""

import json
from typing import Any, Callable

import httpx
import pytest

from episcan.config import settings


NIH_COLUMN = settings.NIH_FUNDING_COLUMN


def make_json_transport(handler: Callable[[httpx.Request], Any]) -> httpx.MockTransport:
    """handler 반환값을 JSON 200 응답으로 감싸는 트랜스포트

    handler가 httpx.Response를 반환하면 그대로 사용한다.
    """

    def _handle(request: httpx.Request) -> httpx.Response:
        result = handler(request)
        if isinstance(result, httpx.Response):
            return result
        return httpx.Response(200, content=json.dumps(result), headers={"Content-Type": "application/json"})

    return httpx.MockTransport(_handle)


@pytest.fixture
def json_transport():
    """make_json_transport 팩토리"""
    return make_json_transport


@pytest.fixture
def failing_transport():
    """모든 요청에 500 응답"""
    return httpx.MockTransport(lambda request: httpx.Response(500, text="Internal Server Error"))


# ── 공통 fixture ──

@pytest.fixture
def who_rows():
    """WHO Mortality Database 샘플"""
    return [
        {"Year": "2022", "Age Group": "[All]", "Number": "100"},
        {"Year": "2022", "Age Group": "[0-4]", "Number": "7"},
        {"Year": "2019", "Age Group": "[All]", "Number": "90"},
        {"Year": "2024", "Age Group": "[All]", "Number": "not reported"},
    ]


@pytest.fixture
def cdc_rows():
    """CDC WONDER Underlying Cause of Death 샘플"""
    return [
        {"Year": "2020", "ICD-10 113 Cause List Code": "GR113-048", "Deaths": "1,234"},
        {"Year": "2021", "ICD-10 113 Cause List Code": "GR113-048", "Deaths": "2500"},
        {"Year": "2021", "ICD-10 113 Cause List Code": "GR113-019", "Deaths": "9999"},
        {"Year": "2018", "ICD-10 113 Cause List Code": "GR113-048", "Deaths": "2000"},
    ]


@pytest.fixture
def nih_rows():
    """NIH RCDC 펀딩 시트 샘플 (백만 달러)"""
    epilepsy = {NIH_COLUMN: "Epilepsy"}
    for i, amount in enumerate(["200", "210", "220.5", "230", "240"]):
        epilepsy[f"{NIH_COLUMN}_{15 + i}"] = amount
    return [
        {NIH_COLUMN: "Acute Respiratory Distress Syndrome", f"{NIH_COLUMN}_15": "50"},
        epilepsy,
    ]


@pytest.fixture
def open_payments_rows():
    """CMS Open Payments 샘플"""
    return [
        {
            "Applicable_Manufacturer_or_Applicable_GPO_Making_Payment_Name": "Medtronic USA, Inc.",
            "Total_Amount_of_Payment_USDollars": "150.50",
            "Date_of_Payment": "03/14/2021",
        },
        {
            "Applicable_Manufacturer_or_Applicable_GPO_Making_Payment_Name": "LivaNova USA, Inc.",
            "Total_Amount_of_Payment_USDollars": "99",
            "Date_of_Payment": "2023-07-01",
        },
        {
            "Applicable_Manufacturer_or_Applicable_GPO_Making_Payment_Name": "Medtronic Neuro",
            "Total_Amount_of_Payment_USDollars": "500",
            "Date_of_Payment": "12/31/2019",
        },
        {
            "Applicable_Manufacturer_or_Applicable_GPO_Making_Payment_Name": "Abbott",
            "Total_Amount_of_Payment_USDollars": "1000",
            "Date_of_Payment": "01/01/2022",
        },
    ]


@pytest.fixture
def part_b_rows():
    """Medicare Part B 샘플 (디바이스 + 진단)"""
    return [
        {"Year": "2022", "HCPCS_Cd": "64568", "Tot_Medicare_Pymt_Amt": "3000000000"},
        {"Year": "2022", "HCPCS_Cd": "95816", "Tot_Medicare_Pymt_Amt": "1000000000"},
        {"Year": "2023", "HCPCS_Cd": "99213", "Tot_Medicare_Pymt_Amt": "500000000"},
    ]


@pytest.fixture
def competitor_payload():
    """/api/competitors 응답"""
    return [
        {"name": "LivaNova", "type": "device", "treatment": "Vagus Nerve Stimulation", "cik": "0001639691", "hasSecData": True},
        {"name": "Medtronic", "type": "device", "treatment": "Deep Brain Stimulation", "cik": "0001613103", "hasSecData": True},
        {"name": "XCOPRI", "type": "drug", "treatment": "Cenobamate", "cik": "0001815957", "hasSecData": True},
        {"name": "Precisis AG", "type": "early-stage", "treatment": "EASEE", "cik": None, "hasSecData": False},
        {"name": "Epi-Minder", "type": "early-stage", "treatment": "Seizure Monitoring", "cik": None, "hasSecData": False},
    ]


@pytest.fixture
def market_share_payload():
    """/api/analytics/marketshare 응답"""
    return {
        "shares": {
            "LivaNova": {"competitorPercentage": "60.00", "refractoryShare": "0.6000", "implantations": 6000, "year": 2022},
            "Medtronic": {"competitorPercentage": "40.00", "refractoryShare": "0.4000", "implantations": 4000, "year": 2022},
            "NeuroPace": {"competitorPercentage": "0.00", "refractoryShare": "0.0000", "implantations": 0, "year": 2022},
        },
        "totalMarket": 10000,
        "latestYear": 2022,
        "estimatedPenetration": "1.00",
        "refractoryPopulation": 1000000,
    }
