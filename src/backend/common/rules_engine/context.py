from __future__ import annotations

import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple, Type

from .models import DepositType, ValidationLevel


@dataclass(frozen=True)
class ValidationContext:
    deposit_type: DepositType
    level: ValidationLevel = ValidationLevel.STAND_ALONE

    def __str__(self) -> str:
        return f"deposit type {self.deposit_type.value}, level {self.level.value}"


@dataclass(frozen=True)
class ScopeDimension:
    """One scoping axis: the attribute name shared by rules and contexts, and its legal values."""

    attribute: str
    values: Type[Enum]

    def matches(self, scope: Optional[Enum], context: ValidationContext) -> bool:
        # An unset scope applies to every value of the dimension.
        return scope is None or scope == getattr(context, self.attribute)


SCOPE_DIMENSIONS: Tuple[ScopeDimension, ...] = (
    ScopeDimension("deposit_type", DepositType),
    ScopeDimension("level", ValidationLevel),
)


def all_contexts(dimensions: Tuple[ScopeDimension, ...] = SCOPE_DIMENSIONS) -> Iterator[ValidationContext]:
    for combo in itertools.product(*(list(dim.values) for dim in dimensions)):
        yield ValidationContext(**{dim.attribute: value for dim, value in zip(dimensions, combo)})
