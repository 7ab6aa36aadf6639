"""Execution result models."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ResultStatus(str, Enum):
    PASS = 'PASS'
    FAIL = 'FAIL'

    @classmethod
    def parse(cls, value) -> 'ResultStatus':
        """Accept a status in any letter case, or a boolean meaning passed."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return cls.PASS if value else cls.FAIL
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"Unknown result status: {value!r}")


@dataclass
class TestResult:
    """Result of a single test method execution."""
    __test__ = False

    suite: str
    method: str
    assertions: int = 0
    time: float = 0.0
    status: ResultStatus = ResultStatus.PASS
    failure_message: Optional[str] = None

    def __post_init__(self):
        if self.assertions < 0:
            raise ValueError(f"Assertion count cannot be negative: {self.assertions}")
        if not math.isfinite(self.time) or self.time < 0:
            raise ValueError(f"Duration must be a finite, non-negative number: {self.time}")
        self.status = ResultStatus.parse(self.status)

    @property
    def passed(self) -> bool:
        return self.status is ResultStatus.PASS
