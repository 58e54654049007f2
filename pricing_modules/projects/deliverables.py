"""
Deliverable list editing (``pricing_modules.projects.deliverables``).

Pure operations over a project's deliverables.  Every function returns a
new tuple and leaves its argument untouched, so a model computed from the
old list stays valid.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import fields, replace
from decimal import Decimal
from typing import Any

from pricing_kernel.domain.pricing_types import Deliverable
from pricing_kernel.domain.values import ZERO, decimal_or, to_decimal
from pricing_kernel.exceptions import DeliverableNotFoundError
from pricing_kernel.logging_config import get_logger

logger = get_logger("modules.projects.deliverables")

_EDITABLE_FIELDS = frozenset(
    f.name for f in fields(Deliverable) if f.name != "deliverable_id"
)


def next_deliverable_id(deliverables: Iterable[Deliverable]) -> int:
    """One past the largest integer id in use (1 for an empty list)."""
    numeric = [d.deliverable_id for d in deliverables if isinstance(d.deliverable_id, int)]
    return max(numeric, default=0) + 1


def add_deliverable(
    deliverables: tuple[Deliverable, ...],
    deliverable: Deliverable,
) -> tuple[Deliverable, ...]:
    """Append ``deliverable`` to the list."""
    return deliverables + (deliverable,)


def find_deliverable(
    deliverables: Iterable[Deliverable],
    deliverable_id: str | int,
) -> Deliverable | None:
    """The deliverable with ``deliverable_id``, or None."""
    for deliverable in deliverables:
        if deliverable.deliverable_id == deliverable_id:
            return deliverable
    return None


def update_deliverable(
    deliverables: tuple[Deliverable, ...],
    deliverable_id: str | int,
    **changes: Any,
) -> tuple[Deliverable, ...]:
    """Replace fields of one deliverable, preserving list order.

    Raises:
        DeliverableNotFoundError: if no deliverable has ``deliverable_id``.
        TypeError: if ``changes`` names a field that cannot be edited.
    """
    unknown = set(changes) - _EDITABLE_FIELDS
    if unknown:
        raise TypeError(f"Cannot edit deliverable fields: {sorted(unknown)}")
    if "days" in changes:
        changes["days"] = to_decimal(changes["days"])

    if find_deliverable(deliverables, deliverable_id) is None:
        logger.warning("deliverable_update_missing", extra={
            "deliverable_id": str(deliverable_id),
        })
        raise DeliverableNotFoundError(str(deliverable_id))

    return tuple(
        replace(d, **changes) if d.deliverable_id == deliverable_id else d
        for d in deliverables
    )


def remove_deliverable(
    deliverables: tuple[Deliverable, ...],
    deliverable_id: str | int,
) -> tuple[Deliverable, ...]:
    """Drop the deliverable with ``deliverable_id``; unknown ids are a no-op."""
    return tuple(d for d in deliverables if d.deliverable_id != deliverable_id)


def deliverables_for_owner(
    deliverables: Iterable[Deliverable],
    owner: str,
) -> tuple[Deliverable, ...]:
    return tuple(d for d in deliverables if d.owner == owner)


def deliverables_for_role(
    deliverables: Iterable[Deliverable],
    role: str,
) -> tuple[Deliverable, ...]:
    return tuple(d for d in deliverables if d.role == role)


def total_days(deliverables: Iterable[Deliverable]) -> Decimal:
    """Sum of deliverable days; missing days count as 0."""
    return sum((decimal_or(d.days, ZERO) for d in deliverables), ZERO)
