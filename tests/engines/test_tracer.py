"""
Tests for the engine tracing decorator.
"""

from decimal import Decimal

from pricing_engines.tracer import compute_input_fingerprint, traced_engine
from pricing_kernel.domain.pricing_types import Deliverable


@traced_engine("sample", "2.1", fingerprint_fields=("rate", "days"))
def _sample_engine(rate, days, note=""):
    return rate * days


class TestInputFingerprint:

    def test_sixteen_hex_characters(self):
        fp = compute_input_fingerprint(("rate",), {"rate": Decimal("1000")})

        assert len(fp) == 16
        int(fp, 16)

    def test_deterministic(self):
        args = {"rate": Decimal("1000"), "days": Decimal("5")}

        assert compute_input_fingerprint(("rate", "days"), args) == compute_input_fingerprint(
            ("rate", "days"), dict(args)
        )

    def test_equal_decimals_share_fingerprint(self):
        assert compute_input_fingerprint(("rate",), {"rate": Decimal("1000")}) == (
            compute_input_fingerprint(("rate",), {"rate": Decimal("1000.00")})
        )

    def test_mapping_key_order_ignored(self):
        a = compute_input_fingerprint(("w",), {"w": {"QA": 1, "Sales": 2}})
        b = compute_input_fingerprint(("w",), {"w": {"Sales": 2, "QA": 1}})

        assert a == b

    def test_dataclass_fields_included(self):
        a = compute_input_fingerprint(("d",), {"d": Deliverable(1, "Build", "RPG", "QA", Decimal("2"))})
        b = compute_input_fingerprint(("d",), {"d": Deliverable(1, "Build", "RPG", "QA", Decimal("3"))})

        assert a != b

    def test_unlisted_fields_ignored(self):
        a = compute_input_fingerprint(("rate",), {"rate": 1, "note": "x"})
        b = compute_input_fingerprint(("rate",), {"rate": 1, "note": "y"})

        assert a == b


class TestTracedEngine:

    def test_returns_wrapped_result(self):
        assert _sample_engine(Decimal("2"), Decimal("3")) == Decimal("6")

    def test_preserves_function_name(self):
        assert _sample_engine.__name__ == "_sample_engine"

    def test_trace_record(self, captured_logs):
        _sample_engine(Decimal("2"), days=Decimal("3"))

        record = captured_logs.named("PRICING_ENGINE_TRACE")[0]
        assert record["trace_type"] == "PRICING_ENGINE_TRACE"
        assert record["engine_name"] == "sample"
        assert record["engine_version"] == "2.1"
        assert record["function"] == "_sample_engine"
        assert record["duration_ms"] >= 0
        assert record["logger"] == "pricing_kernel.engines.tracer"

    def test_positional_and_keyword_calls_share_fingerprint(self, captured_logs):
        _sample_engine(Decimal("2"), Decimal("3"))
        _sample_engine(rate=Decimal("2"), days=Decimal("3"), note="ignored")

        first, second = captured_logs.named("PRICING_ENGINE_TRACE")
        assert first["input_fingerprint"] == second["input_fingerprint"]
