"""Dependency ordering for an effective rule set.

Edges run from a dependency to its dependents. Ordering is Kahn's
algorithm with ties broken by input position, so the same rule list
always yields the same order.
"""

from __future__ import annotations

import heapq
from typing import Dict, List, Sequence

from .context import ValidationContext
from .errors import DependencyCycleError, DuplicateRuleError, UnresolvedDependencyError
from .rule import NumberedRule


def build_dependency_graph(rules: Sequence[NumberedRule], ctx: ValidationContext) -> Dict[str, List[str]]:
    """Adjacency map `number -> dependent numbers` for rules that already apply to `ctx`."""
    graph: Dict[str, List[str]] = {}
    for rule in rules:
        if rule.number in graph:
            raise DuplicateRuleError(rule.number, ctx)
        graph[rule.number] = []

    for rule in rules:
        for dep in rule.dependencies:
            if dep not in graph:
                raise UnresolvedDependencyError(rule.number, dep, ctx)
            graph[dep].append(rule.number)
    return graph


def order_rules(rules: Sequence[NumberedRule], ctx: ValidationContext) -> List[NumberedRule]:
    graph = build_dependency_graph(rules, ctx)
    position = {rule.number: idx for idx, rule in enumerate(rules)}
    by_number = {rule.number: rule for rule in rules}

    # A rule listing the same dependency twice still only waits for it once.
    pending = {rule.number: len(set(rule.dependencies)) for rule in rules}
    ready = [position[number] for number, count in pending.items() if count == 0]
    heapq.heapify(ready)

    ordered: List[NumberedRule] = []
    while ready:
        rule = rules[heapq.heappop(ready)]
        ordered.append(rule)
        for dependent in dict.fromkeys(graph[rule.number]):
            pending[dependent] -= 1
            if pending[dependent] == 0:
                heapq.heappush(ready, position[dependent])

    if len(ordered) != len(rules):
        stuck = [number for number in by_number if pending[number] > 0]
        raise DependencyCycleError(stuck, ctx)
    return ordered
