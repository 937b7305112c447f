"""경쟁사 설정"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class CompetitorType(str, Enum):
    """경쟁사 유형"""

    DEVICE = "device"
    DRUG = "drug"
    EARLY_STAGE = "early-stage"


@dataclass(frozen=True)
class Competitor:
    """경쟁사 정의"""

    name: str
    type: CompetitorType
    treatment: str
    keywords: list[str] = field(default_factory=list)
    cpt_codes: list[str] = field(default_factory=list)
    short_name: str = ""
    company: str = ""
    cik: Optional[str] = None  # SEC CIK (비상장사는 None)

    @property
    def has_sec_data(self) -> bool:
        return bool(self.cik)


COMPETITORS = [
    Competitor(
        name="LivaNova",
        type=CompetitorType.DEVICE,
        treatment="Vagus Nerve Stimulation",
        short_name="VNS",
        cpt_codes=["64568", "61885"],
        keywords=["Vagus Nerve Stimulation", "VNS"],
        cik="0001639691",
    ),
    Competitor(
        name="Medtronic",
        type=CompetitorType.DEVICE,
        treatment="Deep Brain Stimulation",
        short_name="DBS",
        cpt_codes=["61863", "61864", "61885", "61886"],
        keywords=["Deep Brain Stimulation", "DBS"],
        cik="0001613103",
    ),
    Competitor(
        name="NeuroPace",
        type=CompetitorType.DEVICE,
        treatment="Responsive Neurostimulation",
        short_name="RNS",
        cpt_codes=["61850", "61860", "61863", "61885", "61889"],
        keywords=["Responsive Neurostimulation", "RNS"],
        cik="0001750346",
    ),
    Competitor(
        name="XCOPRI",
        type=CompetitorType.DRUG,
        treatment="Cenobamate",
        company="SK Biopharmaceuticals",
        keywords=["Cenobamate", "XCOPRI"],
        cik="0001815957",  # 모회사 SK Biopharmaceuticals
    ),
    Competitor(
        name="Precisis AG",
        type=CompetitorType.EARLY_STAGE,
        treatment="EASEE",
        keywords=["EASEE epilepsy"],
    ),
    Competitor(
        name="Epi-Minder",
        type=CompetitorType.EARLY_STAGE,
        treatment="Seizure Monitoring",
        keywords=["Epi-Minder epilepsy"],
    ),
    Competitor(
        name="Flow Medical",
        type=CompetitorType.EARLY_STAGE,
        treatment="Depression Device",
        keywords=["Flow Medical epilepsy"],
    ),
]


def get_competitor(name: str) -> Optional[Competitor]:
    """이름으로 경쟁사 조회 (대소문자 무시)"""
    name_lower = name.lower()
    for competitor in COMPETITORS:
        if competitor.name.lower() == name_lower:
            return competitor
    return None


def competitors_by_type(competitor_type: CompetitorType) -> list[Competitor]:
    """유형별 경쟁사 목록"""
    return [c for c in COMPETITORS if c.type == competitor_type]
