from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable, Optional, Sequence

from .context import ValidationContext, all_contexts
from .errors import DuplicateRuleError, UnresolvedDependencyError
from .rule import NumberedRule
from .scheduler import order_rules
from .scope import effective_rules

logger = logging.getLogger(__name__)


def validate_rule_configuration(
    rules: Sequence[NumberedRule],
    contexts: Optional[Iterable[ValidationContext]] = None,
) -> None:
    """Check every context, not only the one a request will use.

    Raises the first `RuleEngineConfigurationError` found.
    """
    for ctx in contexts if contexts is not None else all_contexts():
        effective = effective_rules(rules, ctx)

        counts = Counter(rule.number for rule in effective)
        for rule in effective:
            if counts[rule.number] > 1:
                raise DuplicateRuleError(rule.number, ctx)

        numbers = set(counts)
        for rule in effective:
            for dep in rule.dependencies:
                if dep not in numbers:
                    raise UnresolvedDependencyError(rule.number, dep, ctx)

        order_rules(effective, ctx)
        logger.debug("Rule configuration valid for %s (%d rules)", ctx, len(effective))
