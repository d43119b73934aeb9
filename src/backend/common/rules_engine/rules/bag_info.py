from __future__ import annotations

import re
import uuid
from datetime import datetime
from pathlib import Path
from typing import Sequence

import bagit

from ...bag.bag_info import BagItMetadataReader
from ...bag.files import FileService
from ..errors import RuleViolationError
from ..models import RuleResult
from ..rule import BagCheck

_URN_UUID_PREFIX = "urn:uuid:"
_ISO_DATETIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[+-]\d{2}:?\d{2})?$")


class BagInfoExistsAndIsWellformed(BagCheck):
    def __init__(self, reader: BagItMetadataReader, file_service: FileService):
        self.reader = reader
        self.file_service = file_service

    def validate(self, bag_dir: Path) -> RuleResult:
        if not self.file_service.is_file(bag_dir / "bag-info.txt"):
            return RuleResult.error("bag-info.txt does not exist")
        try:
            self.reader.read_bag_info(bag_dir)
        except (bagit.BagError, UnicodeDecodeError) as exc:
            return RuleResult.error(f"bag-info.txt exists but is malformed: {exc}")
        return RuleResult.ok()


class BagInfoContainsExactlyOneOf(BagCheck):
    def __init__(self, key: str, reader: BagItMetadataReader):
        self.key = key
        self.reader = reader

    def validate(self, bag_dir: Path) -> RuleResult:
        count = len(self.reader.read_bag_info(bag_dir).values(self.key))
        if count != 1:
            return RuleResult.error(f"bag-info.txt must contain exactly one '{self.key}' element; number found: {count}")
        return RuleResult.ok()


class BagInfoContainsAtMostOneOf(BagCheck):
    def __init__(self, key: str, reader: BagItMetadataReader):
        self.key = key
        self.reader = reader

    def validate(self, bag_dir: Path) -> RuleResult:
        count = len(self.reader.read_bag_info(bag_dir).values(self.key))
        if count > 1:
            return RuleResult.error(f"bag-info.txt may contain at most one element: '{self.key}'")
        return RuleResult.ok()


class BagInfoCreatedElementIsIso8601Date(BagCheck):
    def __init__(self, reader: BagItMetadataReader):
        self.reader = reader

    def validate(self, bag_dir: Path) -> RuleResult:
        created = self.reader.read_bag_info(bag_dir).first("Created") or ""
        if not _ISO_DATETIME_RE.match(created):
            raise RuleViolationError(f"Date '{created}' is not valid")
        try:
            datetime.fromisoformat(created.replace("Z", "+00:00"))
        except ValueError:
            raise RuleViolationError(f"Date '{created}' is not valid")
        return RuleResult.ok()


class BagInfoIsVersionOfIsValidUrnUuid(BagCheck):
    def __init__(self, reader: BagItMetadataReader):
        self.reader = reader

    def validate(self, bag_dir: Path) -> RuleResult:
        value = self.reader.read_bag_info(bag_dir).first("Is-Version-Of")
        if value is None:
            return RuleResult.ok()
        if not value.startswith(_URN_UUID_PREFIX):
            return RuleResult.error(f"bag-info.txt Is-Version-Of value must be a valid urn:uuid: '{value}'")
        try:
            uuid.UUID(value[len(_URN_UUID_PREFIX):])
        except ValueError:
            return RuleResult.error(f"bag-info.txt Is-Version-Of value must be a valid urn:uuid: '{value}'")
        return RuleResult.ok()


class OrganizationalIdentifierPrefixIsValid(BagCheck):
    """Has-Organizational-Identifier, when present, starts with one of the configured prefixes."""

    def __init__(self, reader: BagItMetadataReader, prefixes: Sequence[str]):
        self.reader = reader
        self.prefixes = tuple(prefixes)

    def validate(self, bag_dir: Path) -> RuleResult:
        value = self.reader.read_bag_info(bag_dir).first("Has-Organizational-Identifier")
        if value is None:
            return RuleResult.ok()
        if not any(value.startswith(prefix) for prefix in self.prefixes):
            return RuleResult.error(f"No valid prefix given for value of 'Has-Organizational-Identifier': {value}")
        return RuleResult.ok()
