from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path


def _ensure_backend_on_path() -> None:
    backend_dir = Path(__file__).resolve().parents[1]
    if str(backend_dir) not in sys.path:
        sys.path.insert(0, str(backend_dir))


def render_markdown(report) -> str:
    lines = [
        f"# Bag Validation {report.bag_name}",
        "",
        f"Generated at: {report.generated_at.isoformat()}",
        f"Deposit type: {report.deposit_type.value}",
        f"Level: {report.level.value}",
        f"Compliant: {'yes' if report.is_compliant else 'no'}",
        "",
        "## Totals",
    ]
    for status, count in report.totals.items():
        lines.append(f"- {_status_text(status)}: {count}")
    lines.append("")
    lines.append("## Results")
    for res in report.results:
        lines.append(f"- {res.number}: {_status_text(res.status)}")
        for message in res.messages:
            lines.append(f"  - {message}")
    return "\n".join(lines) + "\n"


def _status_text(value: object) -> str:
    if hasattr(value, "value"):
        return str(getattr(value, "value"))
    return str(value)


def main(argv: list[str] | None = None) -> int:
    _ensure_backend_on_path()

    from common.rules_engine.errors import BagNotFoundError
    from common.rules_engine.models import DepositType, ValidationLevel
    from common.rules_engine.registry import RuleServices, registry
    from common.rules_engine.service import RuleEngineService

    parser = argparse.ArgumentParser(description="Validate a bag directory and write the rule report.")
    parser.add_argument("bag", help="Path to the bag directory.")
    parser.add_argument(
        "--deposit-type",
        choices=[t.value for t in DepositType],
        default=DepositType.DEPOSIT.value,
    )
    parser.add_argument(
        "--level",
        choices=[lvl.value for lvl in ValidationLevel],
        default=ValidationLevel.STAND_ALONE.value,
    )
    parser.add_argument(
        "--rule-set",
        choices=sorted(registry.names()),
        default="datastation",
    )
    parser.add_argument(
        "--org-id-prefix",
        action="append",
        default=[],
        help="Accepted Has-Organizational-Identifier prefix (repeatable).",
    )
    parser.add_argument("--format", choices=("json", "markdown"), default="markdown")
    parser.add_argument("--out", default=None, help="Output file (defaults to stdout).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each rule verdict.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    services = RuleServices(organizational_identifier_prefixes=tuple(args.org_id_prefix))
    service = RuleEngineService(registry.build(args.rule_set, services))
    try:
        report = service.validate_bag(
            Path(args.bag).resolve(),
            DepositType(args.deposit_type),
            ValidationLevel(args.level),
        )
    except BagNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    if args.format == "json":
        text = json.dumps(report.model_dump(mode="json"), indent=2)
    else:
        text = render_markdown(report)

    if args.out:
        Path(args.out).write_text(text)
    else:
        print(text)
    return 0 if report.is_compliant else 1


if __name__ == "__main__":
    raise SystemExit(main())
