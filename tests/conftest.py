"""
Pytest fixtures for the pricing test suite.

Provides:
- Logging reset between tests
- A log capture helper that parses the structured JSON output
- Common pricing inputs used across engine and module tests
"""

import json
import logging
from datetime import datetime, timezone
from decimal import Decimal
from io import StringIO

import pytest

from pricing_kernel.domain.clock import DeterministicClock
from pricing_kernel.domain.pricing_types import Deliverable, PricingInputs
from pricing_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


class CapturedLogs:
    """Structured log records written while the fixture is active."""

    def __init__(self, stream: StringIO):
        self._stream = stream

    @property
    def records(self) -> list[dict]:
        lines = self._stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    def messages(self) -> list[str]:
        return [r["message"] for r in self.records]

    def named(self, message: str) -> list[dict]:
        return [r for r in self.records if r["message"] == message]


@pytest.fixture
def captured_logs() -> CapturedLogs:
    """Route the pricing_kernel logger hierarchy to an in-memory JSON stream."""
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    configure_logging(handler=handler, level=logging.DEBUG)
    return CapturedLogs(stream)


@pytest.fixture
def deterministic_clock() -> DeterministicClock:
    return DeterministicClock(datetime(2025, 3, 14, 9, 30, 0, tzinfo=timezone.utc))


@pytest.fixture
def three_deliverables() -> tuple[Deliverable, ...]:
    return (
        Deliverable(1, "Discovery", "RPG", "Sales", Decimal("5")),
        Deliverable(2, "Build", "Proaptus", "Development", Decimal("20")),
        Deliverable(3, "Testing", "Proaptus", "QA", Decimal("5")),
    )


@pytest.fixture
def two_party_inputs(three_deliverables) -> PricingInputs:
    return PricingInputs(
        client_rate=Decimal("1000"),
        sold_days=Decimal("30"),
        deliverables=three_deliverables,
        account_manager_party="RPG",
        role_weights={
            "Sales": Decimal("1.8"),
            "Development": Decimal("1.0"),
            "QA": Decimal("0.8"),
        },
    )
