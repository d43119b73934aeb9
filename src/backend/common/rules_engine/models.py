from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class DepositType(str, Enum):
    DEPOSIT = "DEPOSIT"
    MIGRATION = "MIGRATION"


class ValidationLevel(str, Enum):
    STAND_ALONE = "STAND_ALONE"
    WITH_DATA_STATION_CONTEXT = "WITH_DATA_STATION_CONTEXT"


class RuleStatus(str, Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"


class RuleResult(BaseModel):
    """Outcome of a single check, as returned to the engine."""

    status: RuleStatus
    messages: List[str] = Field(default_factory=list)

    @classmethod
    def ok(cls) -> "RuleResult":
        return cls(status=RuleStatus.SUCCESS)

    @classmethod
    def error(cls, *messages: str) -> "RuleResult":
        return cls(status=RuleStatus.FAILED, messages=list(messages))

    @classmethod
    def skip_dependencies(cls) -> "RuleResult":
        return cls(status=RuleStatus.SKIPPED)


class RuleVerdict(BaseModel):
    number: str
    status: RuleStatus
    messages: List[str] = Field(default_factory=list)


class RuleViolation(BaseModel):
    rule: str
    violation: str


class RuleRunReport(BaseModel):
    run_id: str
    generated_at: datetime
    bag_name: str
    deposit_type: DepositType
    level: ValidationLevel

    results: List[RuleVerdict] = Field(default_factory=list)
    totals: Dict[RuleStatus, int] = Field(default_factory=dict)

    @property
    def is_compliant(self) -> bool:
        return not any(res.status == RuleStatus.FAILED for res in self.results)

    def violations(self) -> List[RuleViolation]:
        return [
            RuleViolation(rule=res.number, violation="\n".join(res.messages))
            for res in self.results
            if res.status == RuleStatus.FAILED
        ]

    def get(self, number: str) -> Optional[RuleVerdict]:
        for res in self.results:
            if res.number == number:
                return res
        return None
