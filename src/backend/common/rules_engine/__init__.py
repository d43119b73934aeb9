"""Dependency-ordered rules engine for bag compliance checks.

This package contains the engine and the built-in checks:
- Rules are numbered, scoped by deposit type and validation level, and depend on each other by number.
- No HTTP or request handling lives here.
"""

from .context import ValidationContext
from .errors import (
    BagNotFoundError,
    DependencyCycleError,
    DuplicateRuleError,
    RuleEngineConfigurationError,
    RuleSkippedError,
    RuleViolationError,
    UnresolvedDependencyError,
)
from .models import (
    DepositType,
    RuleResult,
    RuleRunReport,
    RuleStatus,
    RuleVerdict,
    ValidationLevel,
)
from .rule import BagCheck, NumberedRule
from .runner import RuleEngine
from .service import RuleEngineService

# Import built-in rule sets so they self-register with the global registry.
from . import rule_sets as _builtin_rule_sets  # noqa: F401
