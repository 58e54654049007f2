"""Tests for the pricing policy configuration layer.

Verifies that the packaged YAML policy loads, validates and agrees with
the built-in warning defaults, and that broken policies are rejected with
every problem reported at once.
"""
from __future__ import annotations

from dataclasses import fields
from decimal import Decimal

import pytest
import yaml

from pricing_config import (
    DEFAULT_POLICY_PATH,
    PricingPolicy,
    ProjectDefaults,
    default_policy,
    get_active_config,
    validate_policy,
)
from pricing_config.loader import compute_checksum, parse_int, parse_policy
from pricing_kernel.domain.warning_rules import DEFAULT_ROLE_WEIGHTS, WarningThresholds
from pricing_kernel.exceptions import InvalidPricingConfigError


def _write_policy(tmp_path, data: dict):
    path = tmp_path / "pricing.yaml"
    path.write_text(yaml.safe_dump(data))
    return path


class TestPackagedPolicy:
    """The shipped pricing.yaml."""

    def test_loads_and_validates(self):
        policy = get_active_config()

        assert policy.config_id == "pricing-default"
        assert policy.version == 1
        assert validate_policy(policy).is_valid

    def test_role_weights_match_builtin_defaults(self):
        policy = get_active_config()

        assert policy.default_role_weights == dict(DEFAULT_ROLE_WEIGHTS)
        assert list(policy.default_role_weights) == list(DEFAULT_ROLE_WEIGHTS)

    def test_thresholds_match_builtin_defaults(self):
        assert get_active_config().warnings == WarningThresholds()

    def test_project_defaults(self):
        defaults = get_active_config().project_defaults

        assert defaults == ProjectDefaults()
        assert defaults.client_rate == Decimal("950")
        assert defaults.sold_days == Decimal("45")
        assert defaults.account_manager_party == "RPG"
        assert defaults.status == "Active"

    def test_policy_sections(self):
        assert {f.name for f in fields(PricingPolicy)} == {
            "config_id",
            "version",
            "default_role_weights",
            "warnings",
            "project_defaults",
            "checksum",
        }

    def test_checksum_is_sha256_hex(self):
        checksum = get_active_config().checksum

        assert len(checksum) == 64
        int(checksum, 16)

    def test_default_policy_is_cached(self):
        assert default_policy() is default_policy()

    def test_default_path_points_at_package_file(self):
        assert DEFAULT_POLICY_PATH.name == "pricing.yaml"
        assert DEFAULT_POLICY_PATH.exists()

    def test_config_trace_logged(self, captured_logs):
        policy = get_active_config()

        record = captured_logs.named("PRICING_CONFIG_TRACE")[0]
        assert record["config_id"] == "pricing-default"
        assert record["checksum"] == policy.checksum
        assert record["default_role_count"] == 6


class TestPolicyOverrides:
    """Loading policies from an explicit path."""

    def test_partial_policy_keeps_defaults(self, tmp_path):
        path = _write_policy(tmp_path, {
            "config_id": "tight",
            "warnings": {"high_client_rate": 1500},
        })
        policy = get_active_config(path)

        assert policy.warnings.high_client_rate == Decimal("1500")
        assert policy.warnings.low_client_rate == Decimal("300")
        assert policy.default_role_weights == dict(DEFAULT_ROLE_WEIGHTS)
        assert policy.project_defaults == ProjectDefaults()

    def test_custom_role_table(self, tmp_path):
        path = _write_policy(tmp_path, {
            "config_id": "custom",
            "default_role_weights": {"Architect": 2.0, "Tester": 0.7},
        })
        policy = get_active_config(path)

        assert policy.default_role_weights == {
            "Architect": Decimal("2.0"),
            "Tester": Decimal("0.7"),
        }

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            get_active_config(tmp_path / "absent.yaml")

    def test_missing_config_id(self):
        with pytest.raises(KeyError):
            parse_policy({"version": 2})

    def test_invalid_policy_reports_every_problem(self, tmp_path):
        path = _write_policy(tmp_path, {
            "config_id": "broken",
            "default_role_weights": {"Sales": -1, "QA": "lots"},
            "warnings": {
                "high_client_rate": 100,
                "low_client_rate": 300,
                "min_deliverables": 2.5,
            },
            "project_defaults": {"sold_days": 0},
        })

        with pytest.raises(InvalidPricingConfigError) as excinfo:
            get_active_config(path)

        problems = excinfo.value.problems
        assert "default_role_weights.Sales must be greater than zero" in problems
        assert "default_role_weights.QA must be a number" in problems
        assert "warnings.min_deliverables must be a whole number >= 0" in problems
        assert "warnings.low_client_rate must be below warnings.high_client_rate" in problems
        assert "project_defaults.sold_days must be greater than zero" in problems
        assert excinfo.value.code == "INVALID_PRICING_CONFIG"

    def test_invalid_policy_logged(self, tmp_path, captured_logs):
        path = _write_policy(tmp_path, {
            "config_id": "broken",
            "warnings": {"hours_tolerance": -0.1},
        })

        with pytest.raises(InvalidPricingConfigError):
            get_active_config(path)

        record = captured_logs.named("pricing_config_invalid")[0]
        assert record["errors"] == ["warnings.hours_tolerance cannot be negative"]


class TestChecksum:

    def test_deterministic(self):
        data = {"config_id": "a", "warnings": {"x": 1, "y": 2}}

        assert compute_checksum(data) == compute_checksum(
            {"warnings": {"y": 2, "x": 1}, "config_id": "a"}
        )

    def test_changes_with_content(self):
        assert compute_checksum({"config_id": "a"}) != compute_checksum({"config_id": "b"})


class TestParseInt:

    def test_whole_numbers(self):
        assert parse_int(3) == 3
        assert parse_int("4") == 4
        assert parse_int(5.0) == 5

    def test_rejects_fractions_and_text(self):
        assert parse_int(2.5) is None
        assert parse_int("many") is None
        assert parse_int(None) is None
