from __future__ import annotations

from typing import Iterable, List, Sequence

from .context import ValidationContext


class RuleEngineConfigurationError(Exception):
    """The rule collection can never be executed consistently."""


class DuplicateRuleError(RuleEngineConfigurationError):
    def __init__(self, number: str, context: ValidationContext):
        self.number = number
        self.context = context
        super().__init__(f"Rule {number} is defined more than once for {context}")


class UnresolvedDependencyError(RuleEngineConfigurationError):
    def __init__(self, number: str, missing: str, context: ValidationContext):
        self.number = number
        self.missing = missing
        self.context = context
        super().__init__(f"Rule {number} depends on rule {missing}, which does not exist for {context}")


class DependencyCycleError(RuleEngineConfigurationError):
    def __init__(self, numbers: Iterable[str], context: ValidationContext):
        self.numbers: List[str] = list(numbers)
        self.context = context
        super().__init__(f"Rules {', '.join(self.numbers)} cannot be ordered (dependency cycle) for {context}")


class BagNotFoundError(Exception):
    pass


class RuleViolationError(Exception):
    """Raised by a check to report one or more violations."""

    def __init__(self, *messages: str):
        self.messages: Sequence[str] = messages
        super().__init__("; ".join(messages))


class RuleSkippedError(Exception):
    """Raised by a check whose precondition is not met (e.g. optional file absent)."""
