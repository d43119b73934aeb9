from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ...bag.files import FileService
from ..models import RuleResult
from ..rule import BagCheck


class ContainsDir(BagCheck):
    def __init__(self, dir: Path, file_service: FileService):
        self.dir = Path(dir)
        self.file_service = file_service

    def validate(self, bag_dir: Path) -> RuleResult:
        if not self.file_service.is_directory(bag_dir / self.dir):
            return RuleResult.error(f"Path '{self.dir}' is not a directory")
        return RuleResult.ok()


class ContainsFile(BagCheck):
    def __init__(self, file: Path, file_service: FileService):
        self.file = Path(file)
        self.file_service = file_service

    def validate(self, bag_dir: Path) -> RuleResult:
        if not self.file_service.is_file(bag_dir / self.file):
            return RuleResult.error(f"Mandatory file '{self.file}' not found in bag")
        return RuleResult.ok()


class ContainsNothingElseThan(BagCheck):
    """Every file and directory under `dir` must be one of `allowed` (paths relative to `dir`)."""

    def __init__(self, dir: Path, allowed: Iterable[str], file_service: FileService):
        self.dir = Path(dir)
        self.allowed = frozenset(allowed)
        self.file_service = file_service

    def validate(self, bag_dir: Path) -> RuleResult:
        base = bag_dir / self.dir
        extra = [
            p.as_posix()
            for p in self.file_service.get_all_files_and_directories(base)
            if p.as_posix() not in self.allowed
        ]
        if extra:
            return RuleResult.error(f"Directory '{self.dir}' contains files or directories that are not allowed: {extra}")
        return RuleResult.ok()


class MustNotContain(BagCheck):
    def __init__(self, dir: Path, forbidden: Iterable[str], file_service: FileService):
        self.dir = Path(dir)
        self.forbidden = tuple(forbidden)
        self.file_service = file_service

    def validate(self, bag_dir: Path) -> RuleResult:
        base = bag_dir / self.dir
        found = [name for name in self.forbidden if self.file_service.exists(base / name)]
        if found:
            return RuleResult.error(f"Directory '{self.dir}' contains forbidden files or directories: {found}")
        return RuleResult.ok()


class OptionalFileIsUtf8Decodable(BagCheck):
    def __init__(self, file: Path, file_service: FileService):
        self.file = Path(file)
        self.file_service = file_service

    def validate(self, bag_dir: Path) -> RuleResult:
        target = bag_dir / self.file
        if not self.file_service.exists(target):
            return RuleResult.skip_dependencies()
        try:
            self.file_service.read_bytes(target).decode("utf-8")
        except UnicodeDecodeError as exc:
            return RuleResult.error(f"Input not valid UTF-8: {exc.reason} at byte {exc.start}")
        return RuleResult.ok()
