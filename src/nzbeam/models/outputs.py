"""
Output data models for beam design options and check reports.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .inputs import FinalReinforcement


def main_bar_prefix(grade_name: str) -> str:
    """Bar designation prefix, e.g. HD for grade 500 deformed bars."""
    return "HD" if "500" in grade_name else "D"


def stirrup_prefix(grade_name: str) -> str:
    return "HR" if "500" in grade_name else "R"


class CheckStatus(str, Enum):
    """Status of a single check line."""
    PASS = "pass"
    FAIL = "fail"
    INFO = "info"


class CheckResult(BaseModel):
    """One line of a detailed or SLS check report."""
    model_config = ConfigDict(frozen=True)

    check_name: str
    value: str
    limit: str = "-"
    status: CheckStatus
    notes: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.status != CheckStatus.FAIL


class SLSCheckError(BaseModel):
    """Returned instead of a result list when the SLS solve is infeasible."""
    model_config = ConfigDict(frozen=True)

    error: str


class DesignOption(BaseModel):
    """A feasible reinforcement layout proposed by the option generator."""
    model_config = ConfigDict(frozen=True)

    key: str
    db: float  # mm
    n: int
    as_provided: float  # mm²
    ds: float  # mm
    legs: int
    ss: float  # mm
    m_util: float  # M* / φMn
    v_util: float  # V* / φVn
    warnings: List[str] = Field(default_factory=list)

    @property
    def combined_utilization(self) -> float:
        return self.m_util + self.v_util

    def to_reinforcement(self) -> FinalReinforcement:
        """Promote this option to the caller's final reinforcement."""
        return FinalReinforcement(n=self.n, db=self.db, ds=self.ds, ss=self.ss, legs=self.legs)

    def bar_label(self, grade_name: str = "500E") -> str:
        return f"{self.n} x {main_bar_prefix(grade_name)}{self.db:g}"

    def stirrup_label(self, grade_name: str = "300E") -> str:
        return f"{stirrup_prefix(grade_name)}{self.ds:g} @ {self.ss:g}mm ({self.legs} legs)"


def overall_status(results: List[CheckResult]) -> CheckStatus:
    """FAIL if any line fails, otherwise PASS."""
    if any(r.status == CheckStatus.FAIL for r in results):
        return CheckStatus.FAIL
    return CheckStatus.PASS
