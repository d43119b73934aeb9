from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Sequence

from .context import ValidationContext
from .errors import RuleSkippedError, RuleViolationError
from .models import RuleResult, RuleStatus, RuleVerdict
from .rule import NumberedRule
from .scheduler import order_rules
from .scope import effective_rules
from .validation import validate_rule_configuration

logger = logging.getLogger(__name__)


class RuleEngine:
    """Runs the applicable rules of a collection against one bag, in dependency order."""

    def validate_rule_configuration(self, rules: Sequence[NumberedRule]) -> None:
        validate_rule_configuration(rules)

    def validate_rules(
        self,
        bag_dir: Path,
        rules: Sequence[NumberedRule],
        ctx: ValidationContext,
    ) -> List[RuleVerdict]:
        ordered = order_rules(effective_rules(rules, ctx), ctx)

        statuses: Dict[str, RuleStatus] = {}
        results: List[RuleVerdict] = []
        for rule in ordered:
            if any(statuses.get(dep) != RuleStatus.SUCCESS for dep in rule.dependencies):
                verdict = RuleVerdict(number=rule.number, status=RuleStatus.SKIPPED)
            else:
                result = self._run_check(rule, bag_dir)
                verdict = RuleVerdict(number=rule.number, status=result.status, messages=result.messages)

            logger.debug("Rule %s: %s", rule.number, verdict.status.value)
            statuses[rule.number] = verdict.status
            results.append(verdict)
        return results

    def _run_check(self, rule: NumberedRule, bag_dir: Path) -> RuleResult:
        try:
            result = rule.check(bag_dir)
        except RuleViolationError as exc:
            return RuleResult.error(*exc.messages)
        except RuleSkippedError:
            return RuleResult.skip_dependencies()
        except Exception as exc:
            # One broken check must not drop the verdicts of the rules after it.
            logger.exception("Rule %s raised an unexpected error", rule.number)
            return RuleResult.error(str(exc) or type(exc).__name__)

        if result is None:
            return RuleResult.ok()
        if not isinstance(result, RuleResult):
            return RuleResult.error(f"Check for rule {rule.number} returned {type(result).__name__}, not a RuleResult")
        return result
