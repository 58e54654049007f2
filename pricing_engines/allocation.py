"""
Module: pricing_engines.allocation
Responsibility:
    Convert priced deliverables, per-role rate multipliers and an
    account-manager designation into a normalized revenue split between
    the parties that own the deliverables.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import pricing_kernel.domain and pricing_kernel.logging_config.

Invariants enforced:
    - Conservation: the parties' final revenues sum to the contracted
      total revenue (client rate x sold days) whenever any party has
      non-zero adjusted revenue.
    - Pricing: every deliverable's revenue equals
      days x client rate x role weight, exactly (Decimal arithmetic).
    - Totality: never raises for a well-typed input.  Missing days become
      0, an unknown role weighs 1, a zero adjusted total yields zero
      percentages rather than a division error.
    - Purity: no clock access, no I/O, inputs are never mutated.

Failure modes:
    - None.  Input legality is reported by pricing_engines.validation.

Audit relevance:
    The model records every intermediate figure (weighted price, uplift
    factor, adjusted revenue, share) so a revenue split can be explained
    line by line.  Identical inputs always produce an identical model.

Usage:
    from pricing_engines.allocation import compute_model
    from pricing_kernel.domain import PricingInputs

    model = compute_model(PricingInputs.from_dict({
        "clientRate": 1000,
        "soldDays": 50,
        "deliverables": [
            {"id": 1, "name": "Build", "role": "Development", "days": 10, "owner": "Proaptus"},
        ],
        "accountManagerParty": "RPG",
        "roleWeights": {"Development": 1.5},
    }))
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from pricing_engines.tracer import traced_engine
from pricing_kernel.domain.pricing_types import (
    Deliverable,
    PartyAllocation,
    PartyChartPoint,
    PricedDeliverable,
    PricingInputs,
    PricingModel,
    RoleTotals,
)
from pricing_kernel.domain.values import HUNDRED, ONE, ZERO, decimal_or, to_decimal
from pricing_kernel.logging_config import get_logger

logger = get_logger("engines.allocation")

# Account-management premium on the designated party's adjusted revenue.
# Fixed business rule; not part of the pricing policy.
ACCOUNT_MANAGER_UPLIFT = Decimal("1.1")
NO_UPLIFT = ONE

NEUTRAL_ROLE_WEIGHT = ONE


def resolve_role_weight(
    role_weights: Mapping[str, Any],
    role: str | None,
) -> Decimal:
    """Weight for ``role``, or the neutral weight when the role is unknown.

    An explicit weight of 0 is a legal weight and is returned as is; only
    an absent role or a non-numeric weight falls back to 1.
    """
    if role is None:
        return NEUTRAL_ROLE_WEIGHT
    return decimal_or(role_weights.get(role), NEUTRAL_ROLE_WEIGHT)


def price_deliverable(
    deliverable: Deliverable,
    client_rate: Decimal,
    role_weights: Mapping[str, Any],
) -> PricedDeliverable:
    """Weighted price of one deliverable: days x client rate x role weight."""
    days = decimal_or(deliverable.days, ZERO)
    role_weight = resolve_role_weight(role_weights, deliverable.role)
    effective_rate = client_rate * role_weight
    return PricedDeliverable(
        deliverable=deliverable,
        days=days,
        role_weight=role_weight,
        effective_rate=effective_rate,
        revenue=days * effective_rate,
    )


class RevenueAllocationEngine:
    """
    Allocate a fixed contract revenue across deliverable owners.

    Contract:
        Pure function of its inputs.  No I/O, no database access.
    Guarantees:
        - Parties are discovered from the distinct owners present in the
          deliverables, in first-seen order; a party with no deliverables
          never appears.
        - Only the party equal to ``account_manager_party`` receives the
          10% uplift; a designation matching no owner is a no-op.
        - Normalization re-bases the uplifted weighted prices onto the
          contracted total revenue, so the deal value is always fully
          distributed.
    Non-goals:
        - Does not validate inputs; see ``pricing_engines.validation``.
        - Does not format currency or persist results.
    """

    @traced_engine("allocation", "1.0", fingerprint_fields=("inputs",))
    def compute_model(self, inputs: PricingInputs | Mapping[str, Any]) -> PricingModel:
        """
        Compute the full pricing model.

        Args:
            inputs: ``PricingInputs`` or its JSON-shaped dict form.

        Returns:
            PricingModel with priced deliverables, party allocations and
            chart projections.
        """
        if not isinstance(inputs, PricingInputs):
            inputs = PricingInputs.from_dict(inputs)

        client_rate = decimal_or(inputs.client_rate, ZERO)
        sold_days = decimal_or(inputs.sold_days, ZERO)
        role_weights = dict(inputs.role_weights or {})

        # Fixed pool to divide; not derived from deliverable days
        total_revenue = client_rate * sold_days

        priced = tuple(
            price_deliverable(d, client_rate, role_weights)
            for d in inputs.deliverables
        )
        if not priced:
            logger.debug("pricing_model_no_deliverables", extra={
                "total_revenue": str(total_revenue),
            })

        total_weighted_revenue = sum((p.revenue for p in priced), ZERO)
        total_days = sum((p.days for p in priced), ZERO)

        allocations, total_adjusted_revenue = self._allocate_parties(
            priced,
            account_manager_party=inputs.account_manager_party,
            total_revenue=total_revenue,
        )

        party_chart_data = tuple(
            PartyChartPoint(
                name=party,
                value=allocation.final_revenue,
                percentage=allocation.share,
            )
            for party, allocation in allocations.items()
        )

        model = PricingModel(
            client_rate=client_rate,
            sold_days=sold_days,
            total_revenue=total_revenue,
            total_days=total_days,
            account_manager_party=inputs.account_manager_party,
            role_weights=role_weights,
            deliverables=priced,
            total_weighted_revenue=total_weighted_revenue,
            total_adjusted_revenue=total_adjusted_revenue,
            party_allocations=allocations,
            party_chart_data=party_chart_data,
            role_data=self._role_totals(priced, role_weights),
        )

        logger.info("pricing_model_computed", extra={
            "client_rate": str(client_rate),
            "sold_days": str(sold_days),
            "total_revenue": str(total_revenue),
            "total_weighted_revenue": str(total_weighted_revenue),
            "deliverable_count": len(priced),
            "party_count": len(allocations),
            "account_manager_party": inputs.account_manager_party,
        })
        return model

    def _allocate_parties(
        self,
        priced: tuple[PricedDeliverable, ...],
        account_manager_party: str | None,
        total_revenue: Decimal,
    ) -> tuple[dict[str | None, PartyAllocation], Decimal]:
        """Group by owner, apply the uplift, normalize onto ``total_revenue``.

        Postconditions:
            - Sum of ``final_revenue`` == ``total_revenue`` when the
              returned adjusted total is positive; otherwise every share
              is 0.
        """
        groups: dict[str | None, list[PricedDeliverable]] = {}
        for item in priced:
            groups.setdefault(item.owner, []).append(item)

        adjusted: dict[str | None, tuple[Decimal, Decimal, Decimal]] = {}
        for party, items in groups.items():
            revenue = sum((i.revenue for i in items), ZERO)
            is_account_manager = (
                account_manager_party is not None and party == account_manager_party
            )
            uplift = ACCOUNT_MANAGER_UPLIFT if is_account_manager else NO_UPLIFT
            adjusted[party] = (revenue, uplift, revenue * uplift)

        total_adjusted = sum((a for _, _, a in adjusted.values()), ZERO)

        allocations: dict[str | None, PartyAllocation] = {}
        for party, items in groups.items():
            revenue, uplift, adjusted_revenue = adjusted[party]
            if total_adjusted > ZERO:
                normalized_share = adjusted_revenue / total_adjusted
            else:
                normalized_share = ZERO
            allocations[party] = PartyAllocation(
                party=party,
                days=sum((i.days for i in items), ZERO),
                revenue=revenue,
                deliverables=tuple(items),
                uplift_factor=uplift,
                adjusted_revenue=adjusted_revenue,
                percentage=normalized_share * HUNDRED,
                final_revenue=normalized_share * total_revenue,
            )

        if total_adjusted <= ZERO and groups:
            logger.info("pricing_model_zero_adjusted_revenue", extra={
                "party_count": len(groups),
            })

        return allocations, total_adjusted

    def _role_totals(
        self,
        priced: tuple[PricedDeliverable, ...],
        role_weights: Mapping[str, Any],
    ) -> dict[str, RoleTotals]:
        """Days and revenue per role of the weight table, in table order.

        Deliverables whose role is not in the table are not attributed.
        """
        days: dict[str, Decimal] = {role: ZERO for role in role_weights}
        revenue: dict[str, Decimal] = {role: ZERO for role in role_weights}
        for item in priced:
            if item.role in days:
                days[item.role] += item.days
                revenue[item.role] += item.revenue
        return {
            role: RoleTotals(
                role=role,
                weight=to_decimal(weight),
                days=days[role],
                revenue=revenue[role],
            )
            for role, weight in role_weights.items()
        }


_default_engine = RevenueAllocationEngine()


def compute_model(inputs: PricingInputs | Mapping[str, Any]) -> PricingModel:
    """Compute the pricing model with the module's default engine."""
    return _default_engine.compute_model(inputs)
