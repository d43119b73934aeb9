from __future__ import annotations

import logging
import os
import shutil
import tempfile
import zipfile
from pathlib import Path
from typing import BinaryIO, List, Optional

logger = logging.getLogger(__name__)


class FileService:
    def __init__(self, temp_dir: Optional[Path] = None):
        self._temp_dir = temp_dir

    def is_readable(self, path: Path) -> bool:
        return path.exists() and os.access(path, os.R_OK)

    def is_directory(self, path: Path) -> bool:
        return path.is_dir()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def exists(self, path: Path) -> bool:
        return path.exists()

    def read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()

    def get_all_files(self, path: Path) -> List[Path]:
        """Files below `path`, relative to it, sorted."""
        return sorted(p.relative_to(path) for p in path.rglob("*") if p.is_file())

    def get_all_files_and_directories(self, path: Path) -> List[Path]:
        return sorted(p.relative_to(path) for p in path.rglob("*"))

    def extract_zip_file(self, stream: BinaryIO) -> Path:
        target = Path(tempfile.mkdtemp(prefix="bag-", dir=self._temp_dir))
        try:
            with zipfile.ZipFile(stream) as archive:
                root = target.resolve()
                for member in archive.namelist():
                    dest = (target / member).resolve()
                    if dest != root and root not in dest.parents:
                        raise ValueError(f"Zip entry escapes the extraction directory: {member}")
                archive.extractall(target)
        except BaseException:
            self.delete_directory_and_contents(target)
            raise
        logger.debug("Extracted zip to %s", target)
        return target

    def get_first_directory(self, path: Path) -> Optional[Path]:
        dirs = sorted(p for p in path.iterdir() if p.is_dir())
        return dirs[0] if dirs else None

    def delete_directory_and_contents(self, path: Path) -> None:
        shutil.rmtree(path, ignore_errors=False)
