from __future__ import annotations

import argparse
import json
from typing import Any, List, Optional, Sequence

from pydantic import BaseModel, Field

from .registry import registry
from .rule import NumberedRule

# Ensure built-in rule sets are imported/registered when generating a catalog.
from . import rule_sets as _builtin_rule_sets  # noqa: F401


class RuleCatalogEntry(BaseModel):
    number: str
    check: str
    module: str
    dependencies: List[str] = Field(default_factory=list)
    deposit_type: Optional[str] = None
    level: Optional[str] = None


def build_catalog(rules: Sequence[NumberedRule]) -> List[RuleCatalogEntry]:
    entries: List[RuleCatalogEntry] = []
    for rule in rules:
        entries.append(
            RuleCatalogEntry(
                number=rule.number,
                check=rule.check_name,
                module=getattr(type(rule.check), "__module__", ""),
                dependencies=list(rule.dependencies),
                deposit_type=rule.deposit_type.value if rule.deposit_type else None,
                level=rule.level.value if rule.level else None,
            )
        )
    return entries


def _dump_json(catalog: list[dict[str, Any]]) -> str:
    return json.dumps(catalog, indent=2, sort_keys=True)


def _dump_yaml(catalog: list[dict[str, Any]]) -> str:
    import yaml

    return yaml.safe_dump(catalog, sort_keys=False)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Print the rules of a registered rule set.")
    parser.add_argument(
        "--rule-set",
        choices=sorted(registry.names()),
        default="datastation",
        help="Rule set to describe (default: datastation).",
    )
    parser.add_argument(
        "--format",
        choices=("yaml", "json"),
        default="yaml",
        help="Output format (default: yaml).",
    )
    args = parser.parse_args(argv)

    catalog = [e.model_dump() for e in build_catalog(registry.build(args.rule_set))]
    if args.format == "json":
        print(_dump_json(catalog))
    else:
        print(_dump_yaml(catalog))


if __name__ == "__main__":
    main()
