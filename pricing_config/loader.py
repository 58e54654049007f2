"""
Configuration Loader (``pricing_config.loader``).

Responsibility
--------------
Loads a pricing policy YAML file and parses it into the typed
``pricing_config.schema`` dataclasses.  Runtime callers go through
``pricing_config.get_active_config()`` instead of calling this directly.

Invariants enforced
-------------------
* Every parsed object is a frozen dataclass from ``schema.py``.
* Numeric fields are parsed to ``Decimal``; unusable values are kept as
  ``None`` so the validator can report them together.
* ``compute_checksum`` produces a deterministic SHA-256 hash of the raw
  document for configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing ``config_id``  -> ``KeyError`` propagates.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from pricing_config.schema import (
    PricingPolicy,
    ProjectDefaults,
    WarningThresholds,
)
from pricing_kernel.domain.pricing_types import coerce_role_weights
from pricing_kernel.domain.warning_rules import DEFAULT_ROLE_WEIGHTS
from pricing_kernel.domain.values import to_decimal


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_int(value: Any) -> int | None:
    """Parse an integral count; ``None`` when the value is not a whole number."""
    number = to_decimal(value)
    if number is None or number != number.to_integral_value():
        return None
    return int(number)


def parse_warning_thresholds(data: dict[str, Any]) -> WarningThresholds:
    """Parse ``WarningThresholds``; absent keys keep their defaults."""
    defaults = WarningThresholds()
    return WarningThresholds(
        party_dominance_pct=to_decimal(data.get("party_dominance_pct", defaults.party_dominance_pct)),
        role_weight_deviation=to_decimal(data.get("role_weight_deviation", defaults.role_weight_deviation)),
        min_deliverables=parse_int(data.get("min_deliverables", defaults.min_deliverables)),
        high_client_rate=to_decimal(data.get("high_client_rate", defaults.high_client_rate)),
        low_client_rate=to_decimal(data.get("low_client_rate", defaults.low_client_rate)),
        hours_per_day=to_decimal(data.get("hours_per_day", defaults.hours_per_day)),
        hours_tolerance=to_decimal(data.get("hours_tolerance", defaults.hours_tolerance)),
        excluded_parties=tuple(
            str(p) for p in data.get("excluded_parties", defaults.excluded_parties)
        ),
    )


def parse_project_defaults(data: dict[str, Any]) -> ProjectDefaults:
    """Parse ``ProjectDefaults``; absent keys keep their defaults."""
    defaults = ProjectDefaults()
    return ProjectDefaults(
        client_rate=to_decimal(data.get("client_rate", defaults.client_rate)),
        sold_days=to_decimal(data.get("sold_days", defaults.sold_days)),
        account_manager_party=str(data.get("account_manager_party", defaults.account_manager_party)),
        status=str(data.get("status", defaults.status)),
    )


def parse_policy(data: dict[str, Any]) -> PricingPolicy:
    """
    Parse a ``PricingPolicy`` from a dict.

    Preconditions:
        - ``data`` must contain ``config_id``.
    Postconditions:
        - Returns a ``PricingPolicy`` whose ``checksum`` identifies ``data``.
        - Absent sections keep the built-in defaults.
    Raises:
        KeyError: if ``config_id`` is missing.
    """
    return PricingPolicy(
        config_id=str(data["config_id"]),
        version=parse_int(data.get("version", 1)) or 0,
        default_role_weights=coerce_role_weights(
            data.get("default_role_weights", DEFAULT_ROLE_WEIGHTS)
        ),
        warnings=parse_warning_thresholds(data.get("warnings") or {}),
        project_defaults=parse_project_defaults(data.get("project_defaults") or {}),
        checksum=compute_checksum(data),
    )


def load_policy(path: Path) -> PricingPolicy:
    """Load and parse a pricing policy file."""
    return parse_policy(load_yaml_file(path))


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Postconditions:
        - Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
