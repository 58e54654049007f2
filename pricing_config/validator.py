"""
Configuration Validator (``pricing_config.validator``).

Responsibility
--------------
Checks a parsed ``PricingPolicy`` for structural problems before it is
handed to the engines.  All problems are collected in one pass.

Failure modes
-------------
* Validation errors (``ConfigValidationResult.errors``) -> the policy
  MUST NOT be used; ``get_active_config()`` raises
  ``InvalidPricingConfigError``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from pricing_config.schema import PricingPolicy


@dataclass
class ConfigValidationResult:
    """
    Result of policy validation.

    ``is_valid`` returns ``True`` only when ``errors`` is empty.
    """

    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)


def validate_policy(policy: PricingPolicy) -> ConfigValidationResult:
    """Validate a pricing policy, accumulating every problem found."""
    result = ConfigValidationResult()

    for role, weight in policy.default_role_weights.items():
        if weight is None:
            result.add_error(f"default_role_weights.{role} must be a number")
        elif weight <= Decimal("0"):
            result.add_error(f"default_role_weights.{role} must be greater than zero")

    thresholds = policy.warnings
    for name in (
        "party_dominance_pct",
        "role_weight_deviation",
        "high_client_rate",
        "low_client_rate",
        "hours_per_day",
        "hours_tolerance",
    ):
        value = getattr(thresholds, name)
        if value is None:
            result.add_error(f"warnings.{name} must be a number")
        elif value < Decimal("0"):
            result.add_error(f"warnings.{name} cannot be negative")

    if thresholds.min_deliverables is None or thresholds.min_deliverables < 0:
        result.add_error("warnings.min_deliverables must be a whole number >= 0")

    if (
        thresholds.low_client_rate is not None
        and thresholds.high_client_rate is not None
        and thresholds.low_client_rate >= thresholds.high_client_rate
    ):
        result.add_error("warnings.low_client_rate must be below warnings.high_client_rate")

    defaults = policy.project_defaults
    if defaults.client_rate is None or defaults.client_rate <= Decimal("0"):
        result.add_error("project_defaults.client_rate must be greater than zero")
    if defaults.sold_days is None or defaults.sold_days <= Decimal("0"):
        result.add_error("project_defaults.sold_days must be greater than zero")
    if not defaults.account_manager_party.strip():
        result.add_error("project_defaults.account_manager_party is required")

    return result
