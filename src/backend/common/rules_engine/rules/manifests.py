from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import bagit

from ...bag.bag_info import BagItMetadataReader, is_payload_path
from ...bag.files import FileService
from ..models import RuleResult
from ..rule import BagCheck

logger = logging.getLogger(__name__)


class BagIsValid(BagCheck):
    """The bag is a valid BagIt bag and its payload manifests only list payload files."""

    def __init__(self, reader: BagItMetadataReader, file_service: FileService):
        self.reader = reader
        self.file_service = file_service

    def validate(self, bag_dir: Path) -> RuleResult:
        if not self.file_service.is_file(bag_dir / "bagit.txt"):
            return RuleResult.error("Bag is not valid: bagit.txt not found")
        try:
            bag = self.reader.open_bag(bag_dir)
        except bagit.BagError as exc:
            return RuleResult.error(f"Bag is not valid: {exc}")

        outside = [
            f"Bag is not valid: '{entry}' in {manifest} is not a payload file"
            for manifest, entries in sorted(self.reader.payload_manifest_paths(bag).items())
            for entry in entries
            if not is_payload_path(entry)
        ]
        if outside:
            return RuleResult.error(*outside)

        try:
            bag.validate()
        except bagit.BagValidationError as exc:
            logger.debug("Bag %s failed BagIt validation: %s", bag_dir, exc)
            details = [f"Bag is not valid: {detail}" for detail in getattr(exc, "details", None) or []]
            return RuleResult.error(*(details or [f"Bag is not valid: {exc}"]))
        except bagit.BagError as exc:
            return RuleResult.error(f"Bag is not valid: {exc}")
        return RuleResult.ok()


class ContainsNotJustMD5Manifest(BagCheck):
    def __init__(self, reader: BagItMetadataReader):
        self.reader = reader

    def validate(self, bag_dir: Path) -> RuleResult:
        if self.reader.payload_manifest_algorithms(bag_dir) == ["md5"]:
            return RuleResult.error("The bag contains no SHA-family manifest, only MD5")
        return RuleResult.ok()
