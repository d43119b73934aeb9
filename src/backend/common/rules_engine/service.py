from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Sequence

from ..bag.files import FileService
from .context import ValidationContext
from .errors import BagNotFoundError
from .models import DepositType, RuleRunReport, RuleStatus, ValidationLevel
from .rule import NumberedRule
from .runner import RuleEngine

logger = logging.getLogger(__name__)


class RuleEngineService:
    """Entry point for validating bags against one fixed rule collection.

    The collection is checked for every context on construction, so an
    inconsistent configuration fails at startup instead of mid-request.
    """

    def __init__(
        self,
        rule_set: Sequence[NumberedRule],
        file_service: Optional[FileService] = None,
        engine: Optional[RuleEngine] = None,
    ):
        self._rules = tuple(rule_set)
        self._file_service = file_service or FileService()
        self._engine = engine or RuleEngine()
        self._engine.validate_rule_configuration(self._rules)
        logger.info("Rule configuration validated (%d rules)", len(self._rules))

    @property
    def rules(self) -> Sequence[NumberedRule]:
        return self._rules

    def validate_bag(
        self,
        path: Path,
        deposit_type: DepositType = DepositType.DEPOSIT,
        level: ValidationLevel = ValidationLevel.STAND_ALONE,
    ) -> RuleRunReport:
        logger.info("Validating bag on path '%s', deposit type is %s, level is %s", path, deposit_type.value, level.value)

        if not self._file_service.is_readable(path) or not self._file_service.is_directory(path):
            logger.warning("Path %s could not be found or is not readable", path)
            raise BagNotFoundError(f"Bag on path '{path}' could not be found or read")

        ctx = ValidationContext(deposit_type=deposit_type, level=level)
        results = self._engine.validate_rules(path, self._rules, ctx)

        totals: Dict[RuleStatus, int] = {}
        for res in results:
            totals[res.status] = totals.get(res.status, 0) + 1

        return RuleRunReport(
            run_id=str(uuid.uuid4()),
            generated_at=datetime.now(timezone.utc),
            bag_name=path.name,
            deposit_type=deposit_type,
            level=level,
            results=results,
            totals=totals,
        )
