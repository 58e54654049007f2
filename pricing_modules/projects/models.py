"""
Project Domain Models (``pricing_modules.projects.models``).

Responsibility
--------------
Frozen dataclass value objects for the pricing project library: the
project record (metadata, commercial terms and deliverables) and the
shared role-weight table with its most recent change record.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.  Consumed by
``PricingProjectService`` and ``pricing_engines.comparison``.  The JSON
field names of the stored project library are accepted by ``from_dict``
and produced by ``to_dict``.

Invariants enforced
-------------------
* All models are ``frozen=True`` (immutable after construction).
* Commercial figures use ``Decimal`` -- NEVER ``float`` -- internally.
* ``RoleWeightSet.current`` preserves the table's insertion order.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from pricing_kernel.domain.pricing_types import (
    Deliverable,
    PricingInputs,
    coerce_role_weights,
)
from pricing_kernel.domain.values import to_decimal, to_wire


@dataclass(frozen=True)
class RoleWeightChange:
    """When, why and with what note the role weights last changed."""

    changed_on: str = ""
    reason: str = ""
    comment: str = ""


@dataclass(frozen=True)
class RoleWeightSet:
    """The shared role-weight table and its most recent change."""

    current: dict[str, Decimal | None] = field(default_factory=dict)
    last_changed: RoleWeightChange = field(default_factory=RoleWeightChange)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> RoleWeightSet:
        """Accept both the ``{current, lastChanged}`` document and a bare table."""
        if not data:
            return cls()
        if "current" not in data:
            return cls(current=coerce_role_weights(data))
        changed = data.get("lastChanged") or {}
        return cls(
            current=coerce_role_weights(data.get("current")),
            last_changed=RoleWeightChange(
                changed_on=changed.get("date") or "",
                reason=changed.get("reason") or "",
                comment=changed.get("comment") or "",
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "current": {role: to_wire(w) for role, w in self.current.items()},
            "lastChanged": {
                "date": self.last_changed.changed_on,
                "reason": self.last_changed.reason,
                "comment": self.last_changed.comment,
            },
        }


@dataclass(frozen=True)
class Project:
    """
    A pricing project from the project library.

    Contract:
        Snapshot of one saved project.  ``account_manager`` is the person,
        ``account_manager_party`` the party that receives the uplift.
    Non-goals:
        - Does not carry a role-weight table; the library shares one.
    """

    project_id: str
    name: str = ""
    description: str = ""
    background: str = ""
    client_name: str = ""
    overview: str = ""
    start_date: str = ""
    end_date: str = ""
    project_code: str = ""
    account_manager: str = ""
    account_manager_party: str | None = "RPG"
    status: str = "Active"
    client_rate: Decimal | None = None
    sold_days: Decimal | None = None
    total_hours: Decimal | None = None
    deliverables: tuple[Deliverable, ...] = ()
    last_modified: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Project:
        """Build from the stored JSON shape; absent text fields become empty."""
        return cls(
            project_id=str(data["id"]),
            name=data.get("name") or "",
            description=data.get("description") or "",
            background=data.get("background") or "",
            client_name=data.get("clientName") or "",
            overview=data.get("overview") or "",
            start_date=data.get("startDate") or "",
            end_date=data.get("endDate") or "",
            project_code=data.get("projectCode") or "",
            account_manager=data.get("accountManager") or "",
            account_manager_party=data.get("accountManagerParty"),
            status=data.get("status") or "Active",
            client_rate=to_decimal(data.get("clientRate")),
            sold_days=to_decimal(data.get("soldDays")),
            total_hours=to_decimal(data.get("totalHours")),
            deliverables=tuple(
                Deliverable.from_dict(d) for d in data.get("deliverables") or ()
            ),
            last_modified=data.get("lastModified") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.project_id,
            "name": self.name,
            "description": self.description,
            "background": self.background,
            "clientName": self.client_name,
            "overview": self.overview,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "projectCode": self.project_code,
            "accountManager": self.account_manager,
            "accountManagerParty": self.account_manager_party,
            "status": self.status,
            "clientRate": to_wire(self.client_rate),
            "soldDays": to_wire(self.sold_days),
            "deliverables": [d.to_dict() for d in self.deliverables],
            "lastModified": self.last_modified,
        }
        if self.total_hours is not None:
            payload["totalHours"] = float(self.total_hours)
        return payload

    def to_inputs(self, role_weights: Mapping[str, Any] | None = None) -> PricingInputs:
        """Pricing inputs for this project under the given role-weight table."""
        return PricingInputs(
            client_rate=self.client_rate,
            sold_days=self.sold_days,
            deliverables=self.deliverables,
            account_manager_party=self.account_manager_party,
            role_weights=coerce_role_weights(role_weights),
            total_hours=self.total_hours,
        )
