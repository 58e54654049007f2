"""
Pricing Types (``pricing_kernel.domain.pricing_types``).

Responsibility
--------------
Frozen dataclass value objects for the revenue allocation calculator:
deliverables, the pricing inputs handed to the allocation engine, and the
derived pricing model it returns (priced deliverables, per-party
allocations, chart projections).

Architecture position
---------------------
**Kernel > Domain** -- pure data definitions with ZERO I/O.  Consumed by
``pricing_engines`` and ``pricing_modules``.

Invariants enforced
-------------------
* All models are ``frozen=True`` (immutable after construction).
* All rate/day/revenue fields use ``Decimal`` -- NEVER ``float``.
* ``PricingModel.party_allocations`` iterates in first-seen owner order.

Failure modes
-------------
* None at construction.  Missing or non-numeric caller values are kept as
  ``None`` so the validator can report them; the engine substitutes its
  neutral defaults.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from pricing_kernel.domain.values import ZERO, to_decimal, to_wire

RPG_PARTY = "RPG"
PROAPTUS_PARTY = "Proaptus"
JOINT_PARTY = "Joint"


def coerce_role_weights(raw: Mapping[str, Any] | None) -> dict[str, Decimal | None]:
    """Coerce a caller role-weight mapping, keeping insertion order.

    Non-numeric weights are kept as ``None`` so that lookups fall back to
    the neutral weight instead of failing.
    """
    if not raw:
        return {}
    return {str(role): to_decimal(weight) for role, weight in raw.items()}


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Deliverable:
    """
    A unit of contracted work to be priced.

    Contract:
        Snapshot of one line of the deliverables form.  Every field except
        the id may be missing; legality is the validator's concern.
    Non-goals:
        - ``acceptance_criteria`` is carried for callers and never used in
          calculation.
    """

    deliverable_id: str | int | None
    name: str | None = None
    owner: str | None = None
    role: str | None = None
    days: Decimal | None = None
    acceptance_criteria: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Deliverable:
        """Build from the JSON shape (``id``, ``acceptanceCriteria``, ...)."""
        return cls(
            deliverable_id=data.get("id"),
            name=data.get("name"),
            owner=data.get("owner"),
            role=data.get("role"),
            days=to_decimal(data.get("days")),
            acceptance_criteria=data.get("acceptanceCriteria") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.deliverable_id,
            "name": self.name,
            "owner": self.owner,
            "role": self.role,
            "days": to_wire(self.days),
            "acceptanceCriteria": self.acceptance_criteria,
        }


@dataclass(frozen=True)
class PricingInputs:
    """
    Aggregate argument to the allocation engine.

    ``sold_days`` drives total revenue and need not reconcile with the sum
    of deliverable days: deliverables apportion an already-fixed revenue
    pool, they do not compute it.
    """

    client_rate: Decimal | None
    sold_days: Decimal | None
    deliverables: tuple[Deliverable, ...] = ()
    account_manager_party: str | None = None
    role_weights: dict[str, Decimal | None] = field(default_factory=dict)
    total_hours: Decimal | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PricingInputs:
        """Build from the JSON shape used by the calculator form."""
        return cls(
            client_rate=to_decimal(data.get("clientRate")),
            sold_days=to_decimal(data.get("soldDays")),
            deliverables=tuple(
                item if isinstance(item, Deliverable) else Deliverable.from_dict(item)
                for item in data.get("deliverables") or ()
            ),
            account_manager_party=data.get("accountManagerParty"),
            role_weights=coerce_role_weights(data.get("roleWeights")),
            total_hours=to_decimal(data.get("totalHours")),
        )


# ---------------------------------------------------------------------------
# Derived model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PricedDeliverable:
    """
    A deliverable augmented with its weighted price.

    Guarantees:
        - ``revenue == days * effective_rate`` and
          ``effective_rate == client_rate * role_weight``.
        - ``days`` is the input days with a missing value replaced by 0.
    """

    deliverable: Deliverable
    days: Decimal
    role_weight: Decimal
    effective_rate: Decimal
    revenue: Decimal

    @property
    def deliverable_id(self) -> str | int | None:
        return self.deliverable.deliverable_id

    @property
    def name(self) -> str | None:
        return self.deliverable.name

    @property
    def owner(self) -> str | None:
        return self.deliverable.owner

    @property
    def role(self) -> str | None:
        return self.deliverable.role

    def to_dict(self) -> dict[str, Any]:
        payload = self.deliverable.to_dict()
        payload.update(
            days=float(self.days),
            roleWeight=float(self.role_weight),
            effectiveRate=float(self.effective_rate),
            revenue=float(self.revenue),
        )
        return payload


@dataclass(frozen=True)
class PartyAllocation:
    """
    Revenue allocation for one party (one distinct deliverable owner).

    Guarantees:
        - ``adjusted_revenue == revenue * uplift_factor``.
        - ``final_revenue == percentage / 100 * total_revenue`` of the model.
    """

    party: str | None
    days: Decimal = ZERO
    revenue: Decimal = ZERO
    deliverables: tuple[PricedDeliverable, ...] = ()
    uplift_factor: Decimal = Decimal("1")
    adjusted_revenue: Decimal = ZERO
    percentage: Decimal = ZERO
    final_revenue: Decimal = ZERO

    @property
    def share(self) -> Decimal:
        """Alias of ``percentage``."""
        return self.percentage

    @classmethod
    def empty(cls, party: str) -> PartyAllocation:
        """Zero allocation for a party that owns no deliverables."""
        return cls(party=party)

    def to_dict(self) -> dict[str, Any]:
        return {
            "days": float(self.days),
            "revenue": float(self.revenue),
            "deliverables": [d.to_dict() for d in self.deliverables],
            "upliftFactor": float(self.uplift_factor),
            "adjustedRevenue": float(self.adjusted_revenue),
            "percentage": float(self.percentage),
            "share": float(self.percentage),
            "finalRevenue": float(self.final_revenue),
        }


@dataclass(frozen=True)
class PartyChartPoint:
    """One slice of the party revenue chart."""

    name: str | None
    value: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class RoleTotals:
    """Days and weighted revenue attributed to one role of the weight table."""

    role: str
    weight: Decimal | None
    days: Decimal = ZERO
    revenue: Decimal = ZERO


@dataclass(frozen=True)
class ModelTotals:
    """Headline totals: deliverable days and contracted revenue."""

    days: Decimal
    revenue: Decimal


@dataclass(frozen=True)
class PricingModel:
    """
    Complete output of the allocation engine.

    Contract:
        Pure value.  Recomputing from identical inputs yields an equal
        model.
    Guarantees:
        - ``total_revenue == client_rate * sold_days``.
        - Sum of ``final_revenue`` over ``party_allocations`` equals
          ``total_revenue`` whenever ``total_adjusted_revenue > 0``.
    """

    client_rate: Decimal
    sold_days: Decimal
    total_revenue: Decimal
    total_days: Decimal
    account_manager_party: str | None
    role_weights: dict[str, Decimal | None]
    deliverables: tuple[PricedDeliverable, ...]
    total_weighted_revenue: Decimal
    total_adjusted_revenue: Decimal
    party_allocations: dict[str | None, PartyAllocation]
    party_chart_data: tuple[PartyChartPoint, ...]
    role_data: dict[str, RoleTotals]

    def allocation_for(self, party: str) -> PartyAllocation:
        """Allocation for ``party``, or a zero allocation when it owns nothing."""
        return self.party_allocations.get(party) or PartyAllocation.empty(party)

    @property
    def rpg(self) -> PartyAllocation:
        return self.allocation_for(RPG_PARTY)

    @property
    def proaptus(self) -> PartyAllocation:
        return self.allocation_for(PROAPTUS_PARTY)

    @property
    def joint(self) -> PartyAllocation:
        return self.allocation_for(JOINT_PARTY)

    @property
    def total(self) -> ModelTotals:
        return ModelTotals(days=self.total_days, revenue=self.total_revenue)

    def to_dict(self) -> dict[str, Any]:
        """JSON-shaped projection with the calculator's field names."""
        return {
            "clientRate": float(self.client_rate),
            "soldDays": float(self.sold_days),
            "totalRevenue": float(self.total_revenue),
            "totalDays": float(self.total_days),
            "accountManagerParty": self.account_manager_party,
            "roleWeights": {k: to_wire(v) for k, v in self.role_weights.items()},
            "deliverables": [d.to_dict() for d in self.deliverables],
            "totalWeightedRevenue": float(self.total_weighted_revenue),
            "partyAllocations": {
                party: allocation.to_dict()
                for party, allocation in self.party_allocations.items()
            },
            "partyChartData": [
                {"name": p.name, "value": float(p.value), "percentage": float(p.percentage)}
                for p in self.party_chart_data
            ],
            "roleData": {
                role: {
                    "days": float(t.days),
                    "revenue": float(t.revenue),
                    "weight": to_wire(t.weight),
                }
                for role, t in self.role_data.items()
            },
            "rpg": self.rpg.to_dict(),
            "proaptus": self.proaptus.to_dict(),
            "joint": self.joint.to_dict(),
            "total": {"days": float(self.total_days), "revenue": float(self.total_revenue)},
        }
