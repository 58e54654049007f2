"""
Pricing Input Validation Engine (``pricing_engines.validation``).

Responsibility
--------------
Pure checks over the pricing calculator's inputs:

* Blocking validation -- structural problems that must be fixed before a
  project is saved or submitted, returned as human-readable messages.
* Advisory warnings -- non-blocking observations about the inputs and the
  computed party allocations (dominant party, unusual role weights, very
  few deliverables, out-of-range day rate, hours/days mismatch).

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O, ZERO clock reads.
Reference role weights and thresholds are injected by the caller (see
``pricing_config``) and default to ``pricing_kernel.domain.warning_rules``.

Invariants enforced
-------------------
* Every applicable rule is reported; checks never short-circuit.
* Warnings never affect ``ValidationResult.is_valid`` or the model.
* All functions are deterministic: same inputs = same outputs.

Failure modes
-------------
* Returns messages (not exceptions) for every business rule violation.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from pricing_kernel.domain.pricing_types import (
    Deliverable,
    PricingInputs,
    coerce_role_weights,
)
from pricing_kernel.domain.values import (
    ZERO,
    format_number,
    is_blank,
    to_decimal,
    to_fixed,
)
from pricing_kernel.domain.warning_rules import DEFAULT_ROLE_WEIGHTS, WarningThresholds
from pricing_kernel.logging_config import get_logger

logger = get_logger("engines.validation")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of blocking validation; valid iff there are no errors."""

    errors: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def to_dict(self) -> dict[str, Any]:
        return {"isValid": self.is_valid, "errors": list(self.errors)}


def _as_inputs(inputs: PricingInputs | Mapping[str, Any]) -> PricingInputs:
    if isinstance(inputs, PricingInputs):
        return inputs
    return PricingInputs.from_dict(inputs)


def _as_deliverables(
    deliverables: Iterable[Deliverable | Mapping[str, Any]],
) -> tuple[Deliverable, ...]:
    return tuple(
        d if isinstance(d, Deliverable) else Deliverable.from_dict(d)
        for d in deliverables
    )


def _label(name: str | None) -> str:
    return "" if name is None else str(name)


# ---------------------------------------------------------------------------
# Blocking validation
# ---------------------------------------------------------------------------


def validate_inputs(
    inputs: PricingInputs | Mapping[str, Any],
    deliverables: Iterable[Deliverable | Mapping[str, Any]] | None = None,
    role_weights: Mapping[str, Any] | None = None,
) -> ValidationResult:
    """Collect every blocking problem with the pricing inputs.

    Args:
        inputs: Pricing inputs (typed or JSON-shaped).
        deliverables: Deliverables to check.  Defaults to
            ``inputs.deliverables``.
        role_weights: Role-weight table to check.  Defaults to
            ``inputs.role_weights``.

    Returns:
        ValidationResult whose ``errors`` lists every violated rule in
        check order.
    """
    inputs = _as_inputs(inputs)
    items = inputs.deliverables if deliverables is None else _as_deliverables(deliverables)
    weights = coerce_role_weights(inputs.role_weights if role_weights is None else role_weights)

    errors: list[str] = []

    client_rate = to_decimal(inputs.client_rate)
    sold_days = to_decimal(inputs.sold_days)

    if client_rate is None or client_rate <= ZERO:
        errors.append("Client rate must be greater than zero")

    if sold_days is None or sold_days <= ZERO:
        errors.append("Sold days must be greater than zero")

    for role, weight in weights.items():
        if weight is not None and weight < ZERO:
            errors.append(f"{role} weight cannot be negative")

    for position, deliverable in enumerate(items, start=1):
        label = _label(deliverable.name)
        if is_blank(deliverable.name):
            errors.append(f"Deliverable {position} must have a name")
        days = to_decimal(deliverable.days)
        if days is None or days <= ZERO:
            errors.append(f'Deliverable "{label}" must have days > 0')
        if not deliverable.owner:
            errors.append(f'Deliverable "{label}" must have an owner assigned')
        if is_blank(deliverable.role):
            errors.append(f'Deliverable "{label}" must have a role assigned')

    if not items:
        errors.append("At least one deliverable is required")

    if errors:
        logger.info("validation_failed", extra={
            "error_count": len(errors),
            "deliverable_count": len(items),
        })

    return ValidationResult(errors=tuple(errors))


# ---------------------------------------------------------------------------
# Advisory warnings
# ---------------------------------------------------------------------------


def party_display_name(party: str) -> str:
    """Display form of a party key: ``rpg`` -> ``RPG``, else first letter capitalized."""
    if party == "rpg":
        return "RPG"
    return party[:1].upper() + party[1:]


def _percentage_of(allocation: Any) -> Decimal | None:
    if isinstance(allocation, Mapping):
        return to_decimal(allocation.get("percentage"))
    return to_decimal(getattr(allocation, "percentage", None))


def get_validation_warnings(
    inputs: PricingInputs | Mapping[str, Any],
    party_allocations: Mapping[str, Any] | None,
    deliverables: Iterable[Deliverable | Mapping[str, Any]] | None = None,
    role_weights: Mapping[str, Any] | None = None,
    *,
    default_role_weights: Mapping[str, Any] | None = None,
    thresholds: WarningThresholds | None = None,
) -> list[str]:
    """Collect every advisory warning for the inputs and computed allocations.

    Args:
        inputs: Pricing inputs (typed or JSON-shaped).
        party_allocations: Party key -> allocation (``PartyAllocation`` or a
            mapping with a ``percentage`` entry), usually
            ``PricingModel.party_allocations``.
        deliverables: Defaults to ``inputs.deliverables``.
        role_weights: Defaults to ``inputs.role_weights``.
        default_role_weights: Reference table for the deviation rule.
            Defaults to ``DEFAULT_ROLE_WEIGHTS``.  Only roles present in
            both tables are compared.
        thresholds: Warning limits.  Defaults to ``WarningThresholds()``.

    Returns:
        List of warning messages; empty when nothing is noteworthy.
    """
    inputs = _as_inputs(inputs)
    items = inputs.deliverables if deliverables is None else _as_deliverables(deliverables)
    weights = coerce_role_weights(inputs.role_weights if role_weights is None else role_weights)
    reference = coerce_role_weights(
        DEFAULT_ROLE_WEIGHTS if default_role_weights is None else default_role_weights
    )
    limits = thresholds or WarningThresholds()

    warnings: list[str] = []

    # Dominant party
    if party_allocations and limits.party_dominance_pct is not None:
        for party, allocation in party_allocations.items():
            if party is None or party in limits.excluded_parties:
                continue
            percentage = _percentage_of(allocation)
            if percentage is not None and percentage > limits.party_dominance_pct:
                warnings.append(
                    f"{party_display_name(str(party))} has {to_fixed(percentage, 2)}% of revenue"
                    " - consider rebalancing the work allocation"
                )

    # Role weights far from the reference table
    if limits.role_weight_deviation is not None:
        for role, weight in weights.items():
            default_weight = reference.get(role)
            if weight is None or default_weight is None or default_weight == ZERO:
                continue
            deviation = abs(weight - default_weight) / default_weight
            if deviation > limits.role_weight_deviation:
                warnings.append(
                    f"{role} weight ({format_number(weight)}) deviates significantly"
                    f" from default ({format_number(default_weight)})"
                )

    if limits.min_deliverables is not None and len(items) < limits.min_deliverables:
        warnings.append(
            "Consider breaking down work into more granular deliverables for better tracking"
        )

    client_rate = to_decimal(inputs.client_rate)
    if client_rate is not None:
        if limits.high_client_rate is not None and client_rate > limits.high_client_rate:
            warnings.append(
                f"Client rate is extremely high (>£{format_number(limits.high_client_rate)}/day)"
                " - verify this is correct"
            )
        if limits.low_client_rate is not None and client_rate < limits.low_client_rate:
            warnings.append(
                f"Client rate is very low (<£{format_number(limits.low_client_rate)}/day)"
                " - verify this is correct"
            )

    # Rough hours/days reconciliation
    sold_days = to_decimal(inputs.sold_days)
    total_hours = to_decimal(inputs.total_hours)
    if (
        sold_days
        and total_hours
        and limits.hours_per_day is not None
        and limits.hours_tolerance is not None
    ):
        expected_hours = sold_days * limits.hours_per_day
        if abs(total_hours - expected_hours) > expected_hours * limits.hours_tolerance:
            expected = to_fixed(expected_hours, 0)
            warnings.append(
                f"Total hours ({format_number(total_hours)}) differs significantly from"
                f" expected ({expected} hours for {format_number(sold_days)} days)"
            )

    if warnings:
        logger.info("validation_warnings_raised", extra={
            "warning_count": len(warnings),
        })

    return warnings
