"""
Tests for project comparison and revenue summaries.
"""

from decimal import Decimal

from pricing_engines.allocation import compute_model
from pricing_engines.comparison import compare_projects, summarize_revenue
from pricing_kernel.domain.pricing_types import Deliverable, PricingInputs
from pricing_modules.projects.models import Project

ROLE_WEIGHTS = {"Sales": Decimal("1.5"), "Development": Decimal("1.0")}


def _project(project_id, account_manager_party="RPG", rpg_days="5", proaptus_days="10"):
    return Project(
        project_id=project_id,
        name=f"Project {project_id}",
        account_manager_party=account_manager_party,
        client_rate=Decimal("1000"),
        sold_days=Decimal("20"),
        deliverables=(
            Deliverable(1, "Discovery", "RPG", "Development", Decimal(rpg_days)),
            Deliverable(2, "Build", "Proaptus", "Sales", Decimal(proaptus_days)),
        ),
    )


class TestCompareProjects:
    """Library comparison under one role-weight table."""

    def test_one_row_per_project_in_order(self):
        rows = compare_projects([_project("a"), _project("b")], ROLE_WEIGHTS)

        assert [r.project_id for r in rows] == ["a", "b"]
        assert [r.name for r in rows] == ["Project a", "Project b"]

    def test_row_figures_match_model(self):
        project = _project("a")
        row = compare_projects([project], ROLE_WEIGHTS)[0]
        model = compute_model(project.to_inputs(ROLE_WEIGHTS))

        assert row.sold_days == Decimal("20")
        assert row.total_revenue == Decimal("20000")
        assert row.rpg_share == model.rpg.percentage
        assert row.proaptus_share == model.proaptus.percentage

    def test_missing_account_manager_defaults_to_rpg(self):
        with_default = compare_projects([_project("a", account_manager_party=None)], ROLE_WEIGHTS)
        explicit = compare_projects([_project("a", account_manager_party="RPG")], ROLE_WEIGHTS)

        assert with_default[0].rpg_share == explicit[0].rpg_share

    def test_custom_default_account_manager(self):
        rows = compare_projects(
            [_project("a", account_manager_party="")],
            ROLE_WEIGHTS,
            default_account_manager="Proaptus",
        )
        explicit = compare_projects([_project("a", account_manager_party="Proaptus")], ROLE_WEIGHTS)

        assert rows[0].proaptus_share == explicit[0].proaptus_share

    def test_json_shaped_projects(self):
        rows = compare_projects(
            [{
                "id": "p-1",
                "name": "Stored",
                "clientRate": 1000,
                "soldDays": 20,
                "deliverables": [
                    {"id": 1, "name": "Build", "owner": "Proaptus", "role": "Sales", "days": 10},
                ],
            }],
            {"Sales": 1.5},
        )

        assert rows[0].project_id == "p-1"
        assert rows[0].proaptus_share == Decimal("100")
        assert rows[0].rpg_share == Decimal("0")

    def test_absent_party_share_is_zero(self):
        project = Project(
            project_id="solo",
            client_rate=Decimal("500"),
            sold_days=Decimal("4"),
            deliverables=(Deliverable(1, "Build", "RPG", "Development", Decimal("4")),),
        )
        row = compare_projects([project], ROLE_WEIGHTS)[0]

        assert row.rpg_share == Decimal("100")
        assert row.proaptus_share == Decimal("0")

    def test_comparison_is_logged(self, captured_logs):
        compare_projects([_project("a"), _project("b")], ROLE_WEIGHTS)

        record = captured_logs.named("project_comparison_completed")[0]
        assert record["project_count"] == 2
        assert record["role_count"] == 2


class TestSummarizeRevenue:
    """Headline figures for a computed model."""

    def test_value_days_and_blended_rate(self):
        model = compute_model(_project("a").to_inputs(ROLE_WEIGHTS))
        summary = summarize_revenue(model)

        # 5 x 1.0 + 10 x 1.5
        assert summary.value_days == Decimal("20")
        assert summary.blended_rate == Decimal("1000")
        assert summary.total_revenue == Decimal("20000")
        assert summary.total_days == Decimal("15")

    def test_party_rows(self):
        model = compute_model(_project("a").to_inputs(ROLE_WEIGHTS))
        summary = summarize_revenue(model)

        assert [p.party for p in summary.parties] == ["RPG", "Proaptus"]
        assert summary.parties[0].has_uplift
        assert not summary.parties[1].has_uplift
        assert summary.parties[0].final_revenue == model.rpg.final_revenue

    def test_no_value_days(self):
        summary = summarize_revenue(compute_model(PricingInputs(
            client_rate=Decimal("1000"),
            sold_days=Decimal("10"),
        )))

        assert summary.value_days == Decimal("0")
        assert summary.blended_rate == Decimal("0")
        assert summary.parties == ()
