"""
pricing_config -- single public entrypoint for pricing configuration.

Responsibility:
    Provides the way to obtain the pricing policy at runtime through
    ``get_active_config()``: the reference role-weight table, warning
    thresholds, new-project defaults and canonical party names.  YAML
    loading is internal tooling and never exposed to the engines.

Invariants enforced:
    - The returned policy has passed ``validate_policy``.
    - The account-manager uplift is NOT part of the policy.
    - Deterministic: the same YAML always produces the same checksum.

Failure modes:
    - ``FileNotFoundError`` -- the policy file does not exist.
    - ``yaml.YAMLError`` -- the file is not valid YAML.
    - ``InvalidPricingConfigError`` -- structural validation failures.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``PRICING_CONFIG_TRACE`` log entry with the config id, version and
    checksum, tying advisory warnings back to the policy that produced
    them.
"""

from __future__ import annotations

import functools
from pathlib import Path

from pricing_config.loader import load_policy
from pricing_config.schema import (
    PricingPolicy,
    ProjectDefaults,
    WarningThresholds,
)
from pricing_config.validator import ConfigValidationResult, validate_policy
from pricing_kernel.exceptions import InvalidPricingConfigError
from pricing_kernel.logging_config import get_logger

_logger = get_logger("config")

DEFAULT_POLICY_PATH = Path(__file__).parent / "defaults" / "pricing.yaml"


def get_active_config(config_path: Path | None = None) -> PricingPolicy:
    """Load, validate and return the pricing policy.

    Args:
        config_path: Override path to a policy YAML file.  Defaults to
            the packaged ``pricing_config/defaults/pricing.yaml``.

    Returns:
        PricingPolicy -- validated, frozen.

    Raises:
        FileNotFoundError: If the policy file does not exist.
        InvalidPricingConfigError: If validation fails.
    """
    path = Path(config_path) if config_path is not None else DEFAULT_POLICY_PATH
    policy = load_policy(path)

    validation = validate_policy(policy)
    if not validation.is_valid:
        _logger.error("pricing_config_invalid", extra={
            "config_path": str(path),
            "errors": validation.errors,
        })
        raise InvalidPricingConfigError(str(path), validation.errors)

    _logger.info(
        "PRICING_CONFIG_TRACE",
        extra={
            "trace_type": "PRICING_CONFIG_TRACE",
            "config_id": policy.config_id,
            "config_version": policy.version,
            "checksum": policy.checksum,
            "config_path": str(path),
            "default_role_count": len(policy.default_role_weights),
        },
    )
    return policy


@functools.lru_cache(maxsize=1)
def default_policy() -> PricingPolicy:
    """The packaged default policy, loaded once per process."""
    return get_active_config()


__all__ = [
    "ConfigValidationResult",
    "DEFAULT_POLICY_PATH",
    "PricingPolicy",
    "ProjectDefaults",
    "WarningThresholds",
    "default_policy",
    "get_active_config",
    "validate_policy",
]
