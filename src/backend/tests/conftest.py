import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import common...` work,
# even when pytest's rootdir is the repository root (repo-level pytest.ini).
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import hashlib
from pathlib import Path

import pytest


def _write_manifest(bag_dir: Path, algorithm: str) -> None:
    lines = []
    for path in sorted((bag_dir / "data").rglob("*")):
        if path.is_file():
            digest = hashlib.new(algorithm, path.read_bytes()).hexdigest()
            lines.append(f"{digest}  {path.relative_to(bag_dir).as_posix()}")
    (bag_dir / f"manifest-{algorithm}.txt").write_text("\n".join(lines) + "\n")


@pytest.fixture
def make_bag(tmp_path):
    """Build a minimal bag that passes the built-in common rules."""

    def _make(
        *,
        name: str = "bag",
        bag_info: str = "Created: 2024-05-01T10:15:00.000+02:00\n",
        payload=None,
        metadata=("dataset.xml", "files.xml"),
        algorithms=("sha256",),
        extra_files=None,
    ) -> Path:
        bag_dir = tmp_path / name
        (bag_dir / "data").mkdir(parents=True)
        (bag_dir / "metadata").mkdir()
        (bag_dir / "bagit.txt").write_text("BagIt-Version: 1.0\nTag-File-Character-Encoding: UTF-8\n")
        if bag_info is not None:
            (bag_dir / "bag-info.txt").write_text(bag_info)
        for rel, content in (payload or {"data/file.txt": "hello"}).items():
            target = bag_dir / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
        for meta in metadata:
            (bag_dir / "metadata" / meta).write_text("<xml/>")
        for rel, content in (extra_files or {}).items():
            target = bag_dir / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content)
        for alg in algorithms:
            _write_manifest(bag_dir, alg)
        return bag_dir

    return _make
