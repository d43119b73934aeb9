from __future__ import annotations

import io
import logging
import zipfile
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field, ValidationError

from common.bag.files import FileService
from common.rules_engine.config import ServiceConfig, get_service_config
from common.rules_engine.errors import BagNotFoundError
from common.rules_engine.models import DepositType, RuleViolation, ValidationLevel
from common.rules_engine.registry import RuleServices, registry
from common.rules_engine.service import RuleEngineService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/validate", tags=["validate"])


class ValidateCommand(BaseModel):
    bag_location: Optional[str] = None
    package_type: DepositType = DepositType.DEPOSIT
    level: ValidationLevel = ValidationLevel.STAND_ALONE


class ValidateOk(BaseModel):
    bag_location: Optional[str] = None
    name: str
    profile_version: str
    information_package_type: DepositType
    level: ValidationLevel
    is_compliant: bool
    rule_violations: List[RuleViolation] = Field(default_factory=list)


class Validator:
    """Binds a configured service to request handling."""

    def __init__(self, config: ServiceConfig, file_service: FileService, service: RuleEngineService):
        self.config = config
        self.file_service = file_service
        self.service = service

    def validate_path(self, bag_dir: Path, deposit_type: DepositType, level: ValidationLevel) -> ValidateOk:
        report = self.service.validate_bag(bag_dir, deposit_type, level)
        result = ValidateOk(
            name=report.bag_name,
            profile_version=self.config.profile_version,
            information_package_type=report.deposit_type,
            level=report.level,
            is_compliant=report.is_compliant,
            rule_violations=report.violations(),
        )
        logger.debug("Validation result: %s", result)
        return result

    def validate_zip(self, data: bytes, deposit_type: DepositType, level: ValidationLevel) -> ValidateOk:
        try:
            temp_dir = self.file_service.extract_zip_file(io.BytesIO(data))
        except (zipfile.BadZipFile, ValueError) as exc:
            raise BagNotFoundError(f"Request body could not be extracted as a zip file: {exc}") from exc
        try:
            bag_dir = self.file_service.get_first_directory(temp_dir)
            if bag_dir is None:
                raise BagNotFoundError("Extracted zip does not contain a directory")
            return self.validate_path(bag_dir, deposit_type, level)
        finally:
            try:
                self.file_service.delete_directory_and_contents(temp_dir)
            except OSError:
                logger.error("Error cleaning up temporary directory %s", temp_dir)


@lru_cache(maxsize=1)
def get_validator() -> Validator:
    config = get_service_config()
    file_service = FileService(temp_dir=config.temp_dir)
    services = RuleServices(
        file_service=file_service,
        organizational_identifier_prefixes=config.organizational_identifier_prefixes,
    )
    rules = registry.build(config.rule_set, services)
    return Validator(config, file_service, RuleEngineService(rules, file_service))


@router.post("", response_model=ValidateOk)
def validate_bag_location(command: ValidateCommand, validator: Validator = Depends(get_validator)):
    logger.info("Received request to validate bag: %s", command)
    if command.bag_location is None:
        raise HTTPException(status_code=400, detail="Request could not be processed: bag_location is required")
    try:
        result = validator.validate_path(Path(command.bag_location), command.package_type, command.level)
    except BagNotFoundError as exc:
        logger.error("Bag not found: %s", exc)
        raise HTTPException(status_code=400, detail=f"Request could not be processed: {exc}")
    except Exception:
        logger.exception("Internal server error")
        raise HTTPException(status_code=500, detail="Internal server error")
    # Lost during validation; echo it back.
    result.bag_location = command.bag_location
    return result


@router.post("/zip", response_model=ValidateOk)
async def validate_zip(
    request: Request,
    level: Optional[ValidationLevel] = Query(None),
    validator: Validator = Depends(get_validator),
):
    level = level or ValidationLevel.WITH_DATA_STATION_CONTEXT
    logger.info("Received request to validate zip file with level = %s", level.value)
    data = await request.body()
    try:
        return await run_in_threadpool(validator.validate_zip, data, DepositType.DEPOSIT, level)
    except BagNotFoundError as exc:
        logger.error("Bag not found: %s", exc)
        raise HTTPException(status_code=400, detail=f"Request could not be processed: {exc}")
    except Exception:
        logger.exception("Internal server error")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/form", response_model=ValidateOk)
async def validate_form(
    command: str = Form(...),
    zip_file: Optional[UploadFile] = File(None, alias="zip"),
    validator: Validator = Depends(get_validator),
):
    """Multipart variant: a JSON `command` part plus an optional `zip` part, used when bag_location is null."""
    try:
        parsed = ValidateCommand.model_validate_json(command)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=f"Request could not be processed: {exc}")
    logger.info("Received multipart request to validate bag: %s", parsed)
    try:
        if parsed.bag_location is not None:
            result = await run_in_threadpool(
                validator.validate_path, Path(parsed.bag_location), parsed.package_type, parsed.level
            )
            result.bag_location = parsed.bag_location
            return result
        if zip_file is None:
            raise BagNotFoundError("Either bag_location or a zip part must be provided")
        data = await zip_file.read()
        return await run_in_threadpool(validator.validate_zip, data, parsed.package_type, parsed.level)
    except BagNotFoundError as exc:
        logger.error("Bag not found: %s", exc)
        raise HTTPException(status_code=400, detail=f"Request could not be processed: {exc}")
    except Exception:
        logger.exception("Internal server error")
        raise HTTPException(status_code=500, detail="Internal server error")
