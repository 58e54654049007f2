"""
Pricing Project Service (``pricing_modules.projects.service``).

Responsibility
--------------
Orchestrates project-level pricing operations -- creating projects from
the policy defaults, editing deliverables, revising the shared role-weight
table, evaluating a project (validation, allocation model and advisory
warnings) and comparing the project library -- by delegating every
calculation to ``pricing_engines``.

Architecture position
---------------------
**Modules layer** -- thin glue.  ``PricingProjectService`` is the sole
public entry point for project operations.  It is the only layer that
reads ``pricing_config`` and the only one that records dates (through an
injected ``Clock``).

Invariants enforced
-------------------
* Evaluation never raises on bad project data: validation errors are
  returned next to the model, which is computed regardless.
* Role weights are only revised with a non-blank reason and with
  non-negative numeric weights.
* Projects are immutable; every edit returns a new ``Project`` stamped
  with ``last_modified``.

Failure modes
-------------
* ``MissingChangeReasonError`` -- role weights revised without a reason.
* ``InvalidRoleWeightError`` -- a revised weight is negative or not a number.
* ``DeliverableNotFoundError`` -- updating a deliverable that does not exist.

Audit relevance
---------------
Structured log events are emitted for every evaluation, role-weight
revision and project creation, bound to the project id through
``LogContext``.

Usage::

    service = PricingProjectService()
    project = service.new_project("Data platform discovery")
    project = service.add_deliverable(project, name="Discovery", owner="RPG",
                                      role="Sales", days=5)
    evaluation = service.evaluate(project, role_weights)
    evaluation.model.rpg.final_revenue
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any

from pricing_config import PricingPolicy, default_policy
from pricing_engines.allocation import compute_model
from pricing_engines.comparison import (
    ProjectComparisonRow,
    RevenueSummary,
    compare_projects,
    summarize_revenue,
)
from pricing_engines.validation import (
    ValidationResult,
    get_validation_warnings,
    validate_inputs,
)
from pricing_kernel.domain.clock import Clock, SystemClock
from pricing_kernel.domain.pricing_types import (
    Deliverable,
    PricingInputs,
    PricingModel,
)
from pricing_kernel.domain.values import ZERO, is_blank, to_decimal
from pricing_kernel.exceptions import InvalidRoleWeightError, MissingChangeReasonError
from pricing_kernel.logging_config import LogContext, get_logger
from pricing_modules.projects import deliverables as deliverable_ops
from pricing_modules.projects.models import Project, RoleWeightChange, RoleWeightSet

logger = get_logger("modules.projects.service")

_FIXED_PROJECT_FIELDS = frozenset({"project_id", "last_modified"})


def generate_project_id() -> str:
    """A new random (version 4) UUID string for a project."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class PricingEvaluation:
    """Everything the calculator shows for one set of inputs."""

    model: PricingModel
    validation: ValidationResult
    warnings: tuple[str, ...]

    @property
    def is_valid(self) -> bool:
        return self.validation.is_valid

    def summary(self) -> RevenueSummary:
        return summarize_revenue(self.model)


class PricingProjectService:
    """
    Project operations over the pure pricing engines.

    Contract
    --------
    * ``evaluate`` returns a ``PricingEvaluation``; callers inspect
      ``evaluation.is_valid`` before trusting the figures.
    * Editing methods return new ``Project`` values and never mutate.

    Guarantees
    ----------
    * The role-deviation warning compares against the policy's reference
      table, and every threshold comes from the policy.
    * Clock is injectable for deterministic testing.

    Non-goals
    ---------
    * Does NOT persist projects or role weights; storage is the caller's.
    """

    def __init__(
        self,
        policy: PricingPolicy | None = None,
        clock: Clock | None = None,
    ):
        self._policy = policy or default_policy()
        self._clock = clock or SystemClock()

    @property
    def policy(self) -> PricingPolicy:
        return self._policy

    def _timestamp(self) -> str:
        return self._clock.now().isoformat()

    # =========================================================================
    # Projects
    # =========================================================================

    def new_project(self, name: str, project_id: str | None = None) -> Project:
        """Create an empty project carrying the policy's new-project defaults."""
        defaults = self._policy.project_defaults
        project = Project(
            project_id=project_id or generate_project_id(),
            name=name,
            account_manager_party=defaults.account_manager_party,
            status=defaults.status,
            client_rate=defaults.client_rate,
            sold_days=defaults.sold_days,
            last_modified=self._timestamp(),
        )
        logger.info("project_created", extra={
            "project_id": project.project_id,
            "client_rate": str(project.client_rate),
            "sold_days": str(project.sold_days),
        })
        return project

    def update_project(self, project: Project, **changes: Any) -> Project:
        """Replace project fields and stamp ``last_modified`` from the clock.

        Raises:
            TypeError: if ``changes`` names ``project_id`` or ``last_modified``.
        """
        fixed = set(changes) & _FIXED_PROJECT_FIELDS
        if fixed:
            raise TypeError(f"Cannot edit project fields: {sorted(fixed)}")
        for key in ("client_rate", "sold_days", "total_hours"):
            if key in changes:
                changes[key] = to_decimal(changes[key])
        return replace(project, **changes, last_modified=self._timestamp())

    # =========================================================================
    # Deliverables
    # =========================================================================

    def add_deliverable(
        self,
        project: Project,
        *,
        name: str = "",
        owner: str | None = None,
        role: str | None = None,
        days: Any = None,
        acceptance_criteria: str = "",
    ) -> Project:
        """Append a deliverable with the next free integer id."""
        deliverable = Deliverable(
            deliverable_id=deliverable_ops.next_deliverable_id(project.deliverables),
            name=name,
            owner=owner,
            role=role,
            days=to_decimal(days),
            acceptance_criteria=acceptance_criteria,
        )
        return replace(
            project,
            deliverables=deliverable_ops.add_deliverable(project.deliverables, deliverable),
            last_modified=self._timestamp(),
        )

    def update_deliverable(
        self,
        project: Project,
        deliverable_id: str | int,
        **changes: Any,
    ) -> Project:
        return replace(
            project,
            deliverables=deliverable_ops.update_deliverable(
                project.deliverables, deliverable_id, **changes
            ),
            last_modified=self._timestamp(),
        )

    def remove_deliverable(self, project: Project, deliverable_id: str | int) -> Project:
        """Remove a deliverable; an unknown id leaves the deliverables unchanged."""
        return replace(
            project,
            deliverables=deliverable_ops.remove_deliverable(
                project.deliverables, deliverable_id
            ),
            last_modified=self._timestamp(),
        )

    # =========================================================================
    # Role weights
    # =========================================================================

    def revise_role_weights(
        self,
        current: RoleWeightSet,
        new_weights: Mapping[str, Any],
        reason: str,
        comment: str = "",
    ) -> RoleWeightSet:
        """
        Replace the shared role-weight table, recording why.

        Raises:
            MissingChangeReasonError: ``reason`` is blank.
            InvalidRoleWeightError: a weight is negative or not a number.
        """
        if is_blank(reason):
            raise MissingChangeReasonError()

        revised: dict[str, Decimal | None] = {}
        for role, raw in new_weights.items():
            weight = to_decimal(raw)
            if weight is None or weight < ZERO:
                raise InvalidRoleWeightError(role, raw)
            revised[role] = weight

        changed = RoleWeightSet(
            current=revised,
            last_changed=RoleWeightChange(
                changed_on=self._timestamp(),
                reason=reason,
                comment=comment or "",
            ),
        )
        logger.info("role_weights_revised", extra={
            "reason": reason,
            "role_count": len(revised),
            "changed_roles": sorted(
                role for role in revised if current.current.get(role) != revised[role]
            ),
        })
        return changed

    # =========================================================================
    # Evaluation
    # =========================================================================

    def evaluate_inputs(self, inputs: PricingInputs | Mapping[str, Any]) -> PricingEvaluation:
        """Validate, compute and warn for a bare set of calculator inputs."""
        if not isinstance(inputs, PricingInputs):
            inputs = PricingInputs.from_dict(inputs)

        validation = validate_inputs(inputs)
        model = compute_model(inputs)
        warnings = get_validation_warnings(
            inputs,
            model.party_allocations,
            default_role_weights=self._policy.default_role_weights,
            thresholds=self._policy.warnings,
        )

        logger.info("pricing_evaluated", extra={
            "is_valid": validation.is_valid,
            "error_count": len(validation.errors),
            "warning_count": len(warnings),
            "total_revenue": str(model.total_revenue),
        })
        return PricingEvaluation(
            model=model,
            validation=validation,
            warnings=tuple(warnings),
        )

    def evaluate(
        self,
        project: Project,
        role_weights: RoleWeightSet | Mapping[str, Any] | None = None,
    ) -> PricingEvaluation:
        """
        Evaluate a project under a role-weight table.

        ``role_weights`` defaults to the policy's reference table.
        """
        with LogContext.bind(project_id=project.project_id):
            return self.evaluate_inputs(project.to_inputs(self._weights(role_weights)))

    def compare(
        self,
        projects: Iterable[Project | Mapping[str, Any]],
        role_weights: RoleWeightSet | Mapping[str, Any] | None = None,
    ) -> tuple[ProjectComparisonRow, ...]:
        """Compare the library under one role-weight table."""
        return compare_projects(
            projects,
            self._weights(role_weights),
            default_account_manager=self._policy.project_defaults.account_manager_party,
        )

    def _weights(
        self,
        role_weights: RoleWeightSet | Mapping[str, Any] | None,
    ) -> Mapping[str, Any]:
        if role_weights is None:
            return self._policy.default_role_weights
        if isinstance(role_weights, RoleWeightSet):
            return role_weights.current
        return role_weights
