"""
Projects Module (``pricing_modules.projects``).

Responsibility
--------------
Project library glue for the revenue allocation calculator: project
records and their deliverables, the shared role-weight table with its
change history, and a service facade that evaluates and compares
projects through ``pricing_engines``.

Architecture position
---------------------
**Modules layer** -- data models plus a service facade.  Reads the
pricing policy from ``pricing_config``; all arithmetic is delegated to
the engines.

Failure modes
-------------
* ``MissingChangeReasonError`` / ``InvalidRoleWeightError`` on role
  weight revisions.
* ``DeliverableNotFoundError`` when updating an unknown deliverable.
"""

from pricing_modules.projects.models import Project, RoleWeightChange, RoleWeightSet
from pricing_modules.projects.service import (
    PricingEvaluation,
    PricingProjectService,
    generate_project_id,
)

__all__ = [
    "PricingEvaluation",
    "PricingProjectService",
    "Project",
    "RoleWeightChange",
    "RoleWeightSet",
    "generate_project_id",
]
