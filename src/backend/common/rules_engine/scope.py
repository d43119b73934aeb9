from __future__ import annotations

from typing import Iterable, List

from .context import ValidationContext
from .rule import NumberedRule


def matches(rule: NumberedRule, ctx: ValidationContext) -> bool:
    return rule.applies_to(ctx)


def effective_rules(rules: Iterable[NumberedRule], ctx: ValidationContext) -> List[NumberedRule]:
    """Rules applicable to `ctx`, in their original order."""
    return [rule for rule in rules if matches(rule, ctx)]
