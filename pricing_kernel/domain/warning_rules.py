"""
Advisory warning rules -- reference role weights and thresholds.

The built-in defaults here are what the warnings engine compares against
when the caller does not inject a policy.  ``pricing_config`` loads the
same values from YAML so deployments can override them.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType

DEFAULT_ROLE_WEIGHTS = MappingProxyType({
    "Sales": Decimal("1.8"),
    "Solution Architect": Decimal("1.4"),
    "Project Management": Decimal("1.2"),
    "Development": Decimal("1.0"),
    "QA": Decimal("0.8"),
    "Junior": Decimal("0.6"),
})


@dataclass(frozen=True)
class WarningThresholds:
    """Limits used by the advisory warnings."""

    party_dominance_pct: Decimal | None = Decimal("90")
    role_weight_deviation: Decimal | None = Decimal("0.5")
    min_deliverables: int | None = 3
    high_client_rate: Decimal | None = Decimal("2000")
    low_client_rate: Decimal | None = Decimal("300")
    hours_per_day: Decimal | None = Decimal("8")
    hours_tolerance: Decimal | None = Decimal("0.2")
    excluded_parties: tuple[str, ...] = ("total", "Joint")
