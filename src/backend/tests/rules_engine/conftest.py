import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import common...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import pytest

from common.rules_engine.context import ValidationContext
from common.rules_engine.models import DepositType, RuleResult, ValidationLevel
from common.rules_engine.rule import NumberedRule


class RecordingCheck:
    """Check double that remembers every bag it was called with."""

    def __init__(self, result=None, raises=None):
        self.result = result if result is not None else RuleResult.ok()
        self.raises = raises
        self.calls = []

    def __call__(self, bag_dir):
        self.calls.append(bag_dir)
        if self.raises is not None:
            raise self.raises
        return self.result


@pytest.fixture
def deposit_ctx() -> ValidationContext:
    return ValidationContext(deposit_type=DepositType.DEPOSIT, level=ValidationLevel.STAND_ALONE)


@pytest.fixture
def migration_ctx() -> ValidationContext:
    return ValidationContext(deposit_type=DepositType.MIGRATION, level=ValidationLevel.STAND_ALONE)


@pytest.fixture
def make_check():
    def _make(*, result=None, raises=None) -> RecordingCheck:
        return RecordingCheck(result=result, raises=raises)

    return _make


@pytest.fixture
def make_rule(make_check):
    def _make(number, *dependencies, check=None, deposit_type=None, level=None) -> NumberedRule:
        return NumberedRule(
            number,
            check if check is not None else make_check(),
            tuple(dependencies),
            deposit_type=deposit_type,
            level=level,
        )

    return _make
