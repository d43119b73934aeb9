from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

from .registry import registry


load_dotenv()


@dataclass(frozen=True)
class ServiceConfig:
    rule_set: str
    profile_version: str
    temp_dir: Optional[Path]
    organizational_identifier_prefixes: Tuple[str, ...] = ()


def get_service_config() -> ServiceConfig:
    """
    Load service configuration from environment variables:
      BAG_VALIDATOR_RULE_SET, BAG_VALIDATOR_PROFILE_VERSION, BAG_VALIDATOR_TEMP_DIR,
      BAG_VALIDATOR_ORG_ID_PREFIXES (comma separated)
    """
    # Rule sets register themselves on import.
    from . import rule_sets as _builtin_rule_sets  # noqa: F401

    rule_set = os.getenv("BAG_VALIDATOR_RULE_SET", "datastation").strip().lower()
    if rule_set not in registry.names():
        raise ValueError(f"BAG_VALIDATOR_RULE_SET must be one of {sorted(registry.names())}, got '{rule_set}'.")

    profile_version = os.getenv("BAG_VALIDATOR_PROFILE_VERSION", "1.0.0").strip() or "1.0.0"

    temp_dir = _optional_dir("BAG_VALIDATOR_TEMP_DIR")
    prefixes = tuple(p.strip() for p in os.getenv("BAG_VALIDATOR_ORG_ID_PREFIXES", "").split(",") if p.strip())
    return ServiceConfig(
        rule_set=rule_set,
        profile_version=profile_version,
        temp_dir=temp_dir,
        organizational_identifier_prefixes=prefixes,
    )


def _optional_dir(name: str) -> Optional[Path]:
    value = os.getenv(name, "").strip()
    if not value:
        return None
    path = Path(value)
    if not path.is_dir():
        raise ValueError(f"{name} must point to an existing directory: {value}")
    return path
