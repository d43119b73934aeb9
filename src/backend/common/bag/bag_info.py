from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

import bagit

PAYLOAD_DIR = "data"


@dataclass
class BagInfo:
    """bag-info.txt elements as loaded by bagit. A repeated key maps to a list."""

    elements: Dict[str, Union[str, List[str]]] = field(default_factory=dict)

    def values(self, key: str) -> List[str]:
        value = self.elements.get(key)
        if value is None:
            return []
        if isinstance(value, list):
            return [" ".join(v.split()) for v in value]
        return [" ".join(value.split())]

    def first(self, key: str) -> Optional[str]:
        found = self.values(key)
        return found[0] if found else None


class BagItMetadataReader:
    """Thin layer over `bagit.Bag` for the checks that need tag-file or manifest data."""

    def open_bag(self, bag_dir: Path) -> bagit.Bag:
        return bagit.Bag(str(bag_dir))

    def read_bag_info(self, bag_dir: Path) -> BagInfo:
        return BagInfo(elements=dict(self.open_bag(bag_dir).info))

    def payload_manifest_algorithms(self, bag_dir: Path) -> List[str]:
        return sorted(self.open_bag(bag_dir).algorithms)

    def payload_manifest_paths(self, bag: bagit.Bag) -> Dict[str, List[str]]:
        """Manifest file name -> entry paths, as written in the payload manifests."""
        paths: Dict[str, List[str]] = {}
        for manifest in bag.manifest_files():
            with open(manifest, encoding=bag.encoding) as handle:
                entries = []
                for line in handle:
                    parts = line.strip().split(None, 1)
                    if len(parts) == 2:
                        entries.append(os.path.normpath(parts[1].lstrip("*")))
            paths[os.path.basename(manifest)] = entries
        return paths


def is_payload_path(entry_path: str) -> bool:
    return entry_path.startswith(PAYLOAD_DIR + os.sep)
