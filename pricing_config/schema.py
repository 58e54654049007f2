"""
PricingPolicy schema.

Frozen dataclasses for the pricing policy document.  YAML is parsed into
these types by ``pricing_config.loader`` and checked by
``pricing_config.validator`` before ``get_active_config()`` hands the
policy out.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from pricing_kernel.domain.warning_rules import DEFAULT_ROLE_WEIGHTS, WarningThresholds


@dataclass(frozen=True)
class ProjectDefaults:
    """Field values for a newly created project."""

    client_rate: Decimal | None = Decimal("950")
    sold_days: Decimal | None = Decimal("45")
    account_manager_party: str = "RPG"
    status: str = "Active"


@dataclass(frozen=True)
class PricingPolicy:
    """
    The runtime pricing policy.

    ``default_role_weights`` is the reference table the role-deviation
    warning compares against; it is not the table used for pricing.
    """

    config_id: str
    version: int
    default_role_weights: dict[str, Decimal | None] = field(
        default_factory=lambda: dict(DEFAULT_ROLE_WEIGHTS)
    )
    warnings: WarningThresholds = field(default_factory=WarningThresholds)
    project_defaults: ProjectDefaults = field(default_factory=ProjectDefaults)
    checksum: str = ""
