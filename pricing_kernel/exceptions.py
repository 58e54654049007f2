"""
Typed Exception Hierarchy for the Pricing Kernel.

The allocation and validation engines never raise for bad data: the engine
degrades to neutral defaults and the validator returns a list of messages.
The exceptions below cover the remaining failure surfaces -- configuration
loading and the edit operations on projects and role-weight tables.

Every exception carries a ``code`` class attribute (machine-readable, stable
across message wording changes) and stores its context as attributes so the
structured log formatter can lift them into ``exc_*`` fields.

    PricingKernelError (base)
    |
    +-- ConfigError
    |   +-- InvalidPricingConfigError
    |
    +-- RoleWeightError
    |   +-- InvalidRoleWeightError
    |   +-- MissingChangeReasonError
    |
    +-- DeliverableError
        +-- DeliverableNotFoundError

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Config          | INVALID_PRICING_CONFIG      | Policy YAML is structurally invalid
----------------|-----------------------------|-----------------------------------------
Role weight     | INVALID_ROLE_WEIGHT         | Revised weight is negative/non-numeric
                | MISSING_CHANGE_REASON       | Revision submitted without a reason
----------------|-----------------------------|-----------------------------------------
Deliverable     | DELIVERABLE_NOT_FOUND       | Edit targets an unknown deliverable id
"""


class PricingKernelError(Exception):
    """
    Base exception for all pricing kernel errors.

    All subclasses must have a ``code`` class attribute for machine-readable
    error identification.
    """

    code: str = "PRICING_KERNEL_ERROR"


# Configuration exceptions


class ConfigError(PricingKernelError):
    """Base exception for pricing configuration errors."""

    code: str = "CONFIG_ERROR"


class InvalidPricingConfigError(ConfigError):
    """Pricing policy document failed structural validation."""

    code: str = "INVALID_PRICING_CONFIG"

    def __init__(self, source: str, problems: list[str]):
        self.source = source
        self.problems = list(problems)
        super().__init__(
            f"Invalid pricing configuration in {source}: " + "; ".join(self.problems)
        )


# Role weight exceptions


class RoleWeightError(PricingKernelError):
    """Base exception for role-weight table edits."""

    code: str = "ROLE_WEIGHT_ERROR"


class InvalidRoleWeightError(RoleWeightError):
    """A revised role weight is negative or not a number."""

    code: str = "INVALID_ROLE_WEIGHT"

    def __init__(self, role: str, weight: object):
        self.role = role
        self.weight = str(weight)
        super().__init__(f"Invalid weight for role '{role}': {weight!r}")


class MissingChangeReasonError(RoleWeightError):
    """Role weights were revised without stating a reason."""

    code: str = "MISSING_CHANGE_REASON"

    def __init__(self) -> None:
        super().__init__("A reason is required when changing role weights")


# Deliverable exceptions


class DeliverableError(PricingKernelError):
    """Base exception for deliverable list edits."""

    code: str = "DELIVERABLE_ERROR"


class DeliverableNotFoundError(DeliverableError):
    """No deliverable with the given id exists in the list."""

    code: str = "DELIVERABLE_NOT_FOUND"

    def __init__(self, deliverable_id: str):
        self.deliverable_id = deliverable_id
        super().__init__(f"Deliverable not found: {deliverable_id}")
