from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Tuple, Union

from .context import SCOPE_DIMENSIONS, ValidationContext
from .models import DepositType, RuleResult, ValidationLevel


class BagCheck(ABC):
    @abstractmethod
    def validate(self, bag_dir: Path) -> RuleResult:  # pragma: no cover
        raise NotImplementedError

    def __call__(self, bag_dir: Path) -> RuleResult:
        return self.validate(bag_dir)


Check = Union[BagCheck, Callable[[Path], RuleResult]]


@dataclass(frozen=True)
class NumberedRule:
    number: str
    check: Check
    dependencies: Tuple[str, ...] = ()
    deposit_type: Optional[DepositType] = None
    level: Optional[ValidationLevel] = None

    def __post_init__(self):
        if not self.number:
            raise ValueError("Rule must define a number")
        if self.check is None:
            raise ValueError(f"Rule {self.number} must define a check")
        # Accept any iterable of numbers but store it immutably.
        object.__setattr__(self, "dependencies", tuple(self.dependencies))

    def applies_to(self, ctx: ValidationContext) -> bool:
        return all(dim.matches(getattr(self, dim.attribute), ctx) for dim in SCOPE_DIMENSIONS)

    @property
    def check_name(self) -> str:
        check = self.check
        return getattr(check, "__name__", None) or type(check).__name__
