"""
Project Comparison and Revenue Summary (``pricing_engines.comparison``).

Responsibility
--------------
* Compare the revenue split of every project in a library under one
  shared role-weight table.
* Summarize a computed model into headline figures: total revenue,
  value-days (days weighted by role), blended day rate and per-party rows.

Architecture position
---------------------
**Engines layer** -- pure functional core built on
``pricing_engines.allocation``.  ZERO I/O.

Failure modes
-------------
* None.  Projects with missing figures price to zero like any other
  allocation input.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any

from pricing_engines.allocation import compute_model
from pricing_kernel.domain.pricing_types import (
    PROAPTUS_PARTY,
    RPG_PARTY,
    PricingInputs,
    PricingModel,
    coerce_role_weights,
)
from pricing_kernel.domain.values import ONE, ZERO
from pricing_kernel.logging_config import get_logger

logger = get_logger("engines.comparison")


@dataclass(frozen=True)
class ProjectComparisonRow:
    """One project's headline figures in a library comparison."""

    project_id: str | None
    name: str | None
    sold_days: Decimal
    total_revenue: Decimal
    rpg_share: Decimal
    proaptus_share: Decimal


@dataclass(frozen=True)
class PartySummary:
    """Per-party row of a revenue summary."""

    party: str | None
    days: Decimal
    share: Decimal
    final_revenue: Decimal
    has_uplift: bool


@dataclass(frozen=True)
class RevenueSummary:
    """Headline figures of a computed pricing model."""

    total_revenue: Decimal
    total_days: Decimal
    value_days: Decimal
    blended_rate: Decimal
    parties: tuple[PartySummary, ...]


def compare_projects(
    projects: Iterable[Any],
    role_weights: Mapping[str, Any],
    default_account_manager: str = RPG_PARTY,
) -> tuple[ProjectComparisonRow, ...]:
    """Price every project with the shared ``role_weights`` table.

    Args:
        projects: Library projects -- objects exposing ``to_inputs`` (see
            ``pricing_modules.projects.Project``) or JSON-shaped dicts.
        role_weights: The role-weight table applied to every project.
        default_account_manager: Party that receives the uplift when a
            project names none.

    Returns:
        One row per project, in library order.
    """
    weights = coerce_role_weights(role_weights)
    rows: list[ProjectComparisonRow] = []

    for project in projects:
        if isinstance(project, Mapping):
            project_id = project.get("id")
            name = project.get("name")
            inputs = PricingInputs.from_dict({**project, "roleWeights": weights})
        else:
            project_id = project.project_id
            name = project.name
            inputs = project.to_inputs(weights)

        if not inputs.account_manager_party:
            inputs = replace(inputs, account_manager_party=default_account_manager)

        model = compute_model(inputs)
        rows.append(
            ProjectComparisonRow(
                project_id=project_id,
                name=name,
                sold_days=model.sold_days,
                total_revenue=model.total_revenue,
                rpg_share=model.allocation_for(RPG_PARTY).percentage,
                proaptus_share=model.allocation_for(PROAPTUS_PARTY).percentage,
            )
        )

    logger.info("project_comparison_completed", extra={
        "project_count": len(rows),
        "role_count": len(weights),
    })
    return tuple(rows)


def summarize_revenue(model: PricingModel) -> RevenueSummary:
    """Headline figures for a model.

    Value-days weight each deliverable's days by its role weight; the
    blended rate is total revenue per value-day (0 when there are none).
    """
    value_days = sum((d.days * d.role_weight for d in model.deliverables), ZERO)
    blended_rate = model.total_revenue / value_days if value_days != ZERO else ZERO
    parties = tuple(
        PartySummary(
            party=party,
            days=allocation.days,
            share=allocation.share,
            final_revenue=allocation.final_revenue,
            has_uplift=allocation.uplift_factor > ONE,
        )
        for party, allocation in model.party_allocations.items()
    )
    return RevenueSummary(
        total_revenue=model.total_revenue,
        total_days=model.total_days,
        value_days=value_days,
        blended_rate=blended_rate,
        parties=parties,
    )
