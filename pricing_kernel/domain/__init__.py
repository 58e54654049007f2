"""
Pure domain layer.

Immutable pricing inputs and derived model types with NO dependencies on
I/O or configuration.  The clock interface lives here so services can
receive it by injection.
"""

from pricing_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from pricing_kernel.domain.pricing_types import (
    JOINT_PARTY,
    PROAPTUS_PARTY,
    RPG_PARTY,
    Deliverable,
    ModelTotals,
    PartyAllocation,
    PartyChartPoint,
    PricedDeliverable,
    PricingInputs,
    PricingModel,
    RoleTotals,
    coerce_role_weights,
)
from pricing_kernel.domain.values import (
    decimal_or,
    format_number,
    is_blank,
    to_decimal,
    to_fixed,
    to_wire,
)
from pricing_kernel.domain.warning_rules import DEFAULT_ROLE_WEIGHTS, WarningThresholds

__all__ = [
    # Parties
    "RPG_PARTY",
    "PROAPTUS_PARTY",
    "JOINT_PARTY",
    # Inputs
    "Deliverable",
    "PricingInputs",
    "coerce_role_weights",
    # Model
    "PricedDeliverable",
    "PartyAllocation",
    "PartyChartPoint",
    "RoleTotals",
    "ModelTotals",
    "PricingModel",
    # Warning rules
    "DEFAULT_ROLE_WEIGHTS",
    "WarningThresholds",
    # Time
    "Clock",
    "SystemClock",
    "DeterministicClock",
    # Values
    "to_decimal",
    "decimal_or",
    "format_number",
    "to_fixed",
    "is_blank",
    "to_wire",
]
