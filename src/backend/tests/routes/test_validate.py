import io
import json
import zipfile

from fastapi.testclient import TestClient

from api.app import create_app
from api.validate import Validator, get_validator
from common.bag.files import FileService
from common.rules_engine.config import ServiceConfig
from common.rules_engine.models import RuleResult
from common.rules_engine.rule import NumberedRule
from common.rules_engine.service import RuleEngineService


def _zip_dir(bag_dir) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for path in sorted(bag_dir.rglob("*")):
            archive.write(path, path.relative_to(bag_dir.parent).as_posix())
    return buffer.getvalue()


def test_validate_location_compliant(client, make_bag):
    bag = make_bag()
    resp = client.post(
        "/validate",
        json={"bag_location": str(bag), "package_type": "DEPOSIT", "level": "WITH_DATA_STATION_CONTEXT"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["is_compliant"] is True
    assert body["rule_violations"] == []
    assert body["bag_location"] == str(bag)
    assert body["name"] == bag.name
    assert body["information_package_type"] == "DEPOSIT"
    assert body["level"] == "WITH_DATA_STATION_CONTEXT"
    assert body["profile_version"] == "1.0.0"


def test_validate_location_reports_violations(client, make_bag):
    bag = make_bag(payload={"data/original-metadata.zip": "x"})
    resp = client.post(
        "/validate",
        json={"bag_location": str(bag), "level": "WITH_DATA_STATION_CONTEXT"},
    )
    body = resp.json()
    assert body["is_compliant"] is False
    assert [v["rule"] for v in body["rule_violations"]] == ["4.4"]
    assert "original-metadata.zip" in body["rule_violations"][0]["violation"]


def test_missing_bag_is_bad_request(client, tmp_path):
    resp = client.post("/validate", json={"bag_location": str(tmp_path / "missing")})
    assert resp.status_code == 400
    assert "could not be found" in resp.json()["detail"]


def test_missing_bag_location_is_bad_request(client):
    resp = client.post("/validate", json={"package_type": "DEPOSIT"})
    assert resp.status_code == 400


def test_invalid_package_type_is_rejected(client, tmp_path):
    resp = client.post("/validate", json={"bag_location": str(tmp_path), "package_type": "SOMETHING"})
    assert resp.status_code == 422


def test_unexpected_error_is_internal_server_error(tmp_path):
    class BrokenService(RuleEngineService):
        def validate_bag(self, path, deposit_type, level):
            raise RuntimeError("boom")

    config = ServiceConfig(rule_set="datastation", profile_version="1.0.0", temp_dir=None)
    service = BrokenService([NumberedRule("1", lambda bag_dir: RuleResult.ok())])
    app = create_app(validate_on_startup=False)
    app.dependency_overrides[get_validator] = lambda: Validator(config, FileService(), service)
    resp = TestClient(app).post("/validate", json={"bag_location": str(tmp_path)})
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Internal server error"


def test_validate_zip(client, make_bag, validator):
    data = _zip_dir(make_bag(name="zipped-bag"))
    resp = client.post(
        "/validate/zip",
        params={"level": "WITH_DATA_STATION_CONTEXT"},
        content=data,
        headers={"Content-Type": "application/zip"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "zipped-bag"
    assert body["is_compliant"] is True
    assert body["bag_location"] is None
    # Extraction directory is cleaned up after the request.
    assert list(validator.config.temp_dir.iterdir()) == []


def test_validate_zip_defaults_to_data_station_context(client, make_bag):
    data = _zip_dir(make_bag(name="zipped-bag", payload={"data/original-metadata.zip": "x"}))
    resp = client.post("/validate/zip", content=data, headers={"Content-Type": "application/zip"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["level"] == "WITH_DATA_STATION_CONTEXT"
    assert body["is_compliant"] is False
    assert [v["rule"] for v in body["rule_violations"]] == ["4.4"]


def test_validate_zip_without_directory_is_bad_request(client):
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("loose.txt", "no bag here")
    resp = client.post("/validate/zip", content=buffer.getvalue(), headers={"Content-Type": "application/zip"})
    assert resp.status_code == 400


def test_validate_zip_rejects_garbage(client):
    resp = client.post("/validate/zip", content=b"not a zip", headers={"Content-Type": "application/zip"})
    assert resp.status_code == 400


def test_zip_entries_outside_target_are_refused(client, validator):
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("../evil.txt", "escape")
    resp = client.post("/validate/zip", content=buffer.getvalue(), headers={"Content-Type": "application/zip"})
    assert resp.status_code == 400
    assert list(validator.config.temp_dir.iterdir()) == []


def test_form_with_bag_location(client, make_bag):
    bag = make_bag()
    command = {"bag_location": str(bag), "package_type": "DEPOSIT", "level": "STAND_ALONE"}
    resp = client.post("/validate/form", data={"command": json.dumps(command)})
    assert resp.status_code == 200
    body = resp.json()
    assert body["is_compliant"] is True
    assert body["bag_location"] == str(bag)
    assert body["level"] == "STAND_ALONE"


def test_form_validates_zip_part_when_location_is_null(client, make_bag, validator):
    data = _zip_dir(make_bag(name="uploaded-bag", payload={"data/original-metadata.zip": "x"}))
    command = {"bag_location": None, "package_type": "DEPOSIT", "level": "WITH_DATA_STATION_CONTEXT"}
    resp = client.post(
        "/validate/form",
        data={"command": json.dumps(command)},
        files={"zip": ("bag.zip", data, "application/zip")},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "uploaded-bag"
    assert body["bag_location"] is None
    assert [v["rule"] for v in body["rule_violations"]] == ["4.4"]
    assert list(validator.config.temp_dir.iterdir()) == []


def test_form_without_location_or_zip_is_bad_request(client):
    resp = client.post("/validate/form", data={"command": json.dumps({"package_type": "DEPOSIT"})})
    assert resp.status_code == 400


def test_form_with_malformed_command_is_bad_request(client):
    resp = client.post("/validate/form", data={"command": "{not json"})
    assert resp.status_code == 400
