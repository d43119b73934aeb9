from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Tuple

from ..bag.bag_info import BagItMetadataReader
from ..bag.files import FileService
from .rule import NumberedRule


@dataclass(frozen=True)
class RuleServices:
    """Collaborators the built-in checks are constructed with."""

    file_service: FileService = field(default_factory=FileService)
    reader: BagItMetadataReader = field(default_factory=BagItMetadataReader)
    organizational_identifier_prefixes: Tuple[str, ...] = ()


RuleSetFactory = Callable[[RuleServices], List[NumberedRule]]


class RuleSetRegistry:
    def __init__(self):
        self._factories: Dict[str, RuleSetFactory] = {}

    def register(self, name: str, factory: RuleSetFactory) -> None:
        if not name:
            raise ValueError("Rule set must have a name")
        if name in self._factories:
            raise ValueError(f"Duplicate rule set registered: {name}")
        self._factories[name] = factory

    def build(self, name: str, services: RuleServices | None = None) -> List[NumberedRule]:
        if name not in self._factories:
            raise KeyError(f"Unknown rule set: {name}")
        return list(self._factories[name](services or RuleServices()))

    def names(self) -> Iterable[str]:
        return self._factories.keys()


registry = RuleSetRegistry()


def register_rule_set(name: str) -> Callable[[RuleSetFactory], RuleSetFactory]:
    def _decorator(factory: RuleSetFactory) -> RuleSetFactory:
        registry.register(name, factory)
        return factory

    return _decorator
