"""
Module: pricing_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    calculation engines.  This is the canonical import surface for
    ``pricing_modules`` and other callers.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import pricing_kernel (and sibling engine modules).
    MUST NOT import pricing_config or pricing_modules.

Invariants enforced:
    - Purity: engines never read the clock or touch storage.
    - Decimal-only arithmetic for rates, days and revenues.
    - Determinism: identical inputs always produce identical outputs.
    - Totality: the allocation engine never raises; data problems are
      reported by the validation engine as messages.

Audit relevance:
    Allocation runs are traced via ``@traced_engine`` (see
    ``pricing_engines.tracer``), emitting PRICING_ENGINE_TRACE records
    with engine name, version, input fingerprint and duration.

Usage:
    from pricing_engines import compute_model, validate_inputs, get_validation_warnings

    validation = validate_inputs(inputs)
    model = compute_model(inputs)
    warnings = get_validation_warnings(inputs, model.party_allocations)
"""

from pricing_engines.allocation import (
    ACCOUNT_MANAGER_UPLIFT,
    NEUTRAL_ROLE_WEIGHT,
    RevenueAllocationEngine,
    compute_model,
    price_deliverable,
    resolve_role_weight,
)
from pricing_engines.comparison import (
    PartySummary,
    ProjectComparisonRow,
    RevenueSummary,
    compare_projects,
    summarize_revenue,
)
from pricing_engines.tracer import compute_input_fingerprint, traced_engine
from pricing_engines.validation import (
    ValidationResult,
    get_validation_warnings,
    party_display_name,
    validate_inputs,
)

__all__ = [
    # Allocation
    "ACCOUNT_MANAGER_UPLIFT",
    "NEUTRAL_ROLE_WEIGHT",
    "RevenueAllocationEngine",
    "compute_model",
    "price_deliverable",
    "resolve_role_weight",
    # Validation
    "ValidationResult",
    "validate_inputs",
    "get_validation_warnings",
    "party_display_name",
    # Comparison
    "ProjectComparisonRow",
    "PartySummary",
    "RevenueSummary",
    "compare_projects",
    "summarize_revenue",
    # Tracing
    "traced_engine",
    "compute_input_fingerprint",
]
