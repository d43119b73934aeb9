import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import api...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.validate import Validator, get_validator
from common.bag.files import FileService
from common.rules_engine.config import ServiceConfig
from common.rules_engine.registry import RuleServices, registry
from common.rules_engine.service import RuleEngineService


@pytest.fixture
def validator(tmp_path) -> Validator:
    temp_dir = tmp_path / "extract"
    temp_dir.mkdir()
    config = ServiceConfig(rule_set="datastation", profile_version="1.0.0", temp_dir=temp_dir)
    file_service = FileService(temp_dir=temp_dir)
    rules = registry.build(config.rule_set, RuleServices(file_service=file_service))
    return Validator(config, file_service, RuleEngineService(rules, file_service))


@pytest.fixture
def client(validator) -> TestClient:
    app = create_app(validate_on_startup=False)
    app.dependency_overrides[get_validator] = lambda: validator
    return TestClient(app)
