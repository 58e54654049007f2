"""
Tests for deliverable list editing.
"""

from decimal import Decimal

import pytest

from pricing_kernel.domain.pricing_types import Deliverable
from pricing_kernel.exceptions import DeliverableNotFoundError
from pricing_modules.projects.deliverables import (
    add_deliverable,
    deliverables_for_owner,
    deliverables_for_role,
    find_deliverable,
    next_deliverable_id,
    remove_deliverable,
    total_days,
    update_deliverable,
)


class TestDeliverableEditing:
    """Pure list operations."""

    def setup_method(self):
        self.items = (
            Deliverable(1, "Discovery", "RPG", "Sales", Decimal("5")),
            Deliverable(2, "Build", "Proaptus", "Development", Decimal("20")),
            Deliverable(3, "Testing", "Proaptus", "QA", Decimal("5")),
        )

    def test_add_appends(self):
        extra = Deliverable(4, "Handover", "RPG", "Project Management", Decimal("2"))
        result = add_deliverable(self.items, extra)

        assert result[-1] is extra
        assert len(self.items) == 3

    def test_update_replaces_fields_in_place(self):
        result = update_deliverable(self.items, 2, days="25", owner="RPG")

        assert [d.deliverable_id for d in result] == [1, 2, 3]
        assert result[1].days == Decimal("25")
        assert result[1].owner == "RPG"
        assert result[1].name == "Build"
        assert self.items[1].days == Decimal("20")

    def test_update_unknown_id_raises(self):
        with pytest.raises(DeliverableNotFoundError) as excinfo:
            update_deliverable(self.items, 42, name="Ghost")

        assert str(excinfo.value) == "Deliverable not found: 42"
        assert excinfo.value.code == "DELIVERABLE_NOT_FOUND"

    def test_update_rejects_id_change(self):
        with pytest.raises(TypeError):
            update_deliverable(self.items, 1, deliverable_id=9)

    def test_update_non_numeric_days_kept_for_validation(self):
        result = update_deliverable(self.items, 1, days="soon")

        assert result[0].days is None

    def test_remove(self):
        result = remove_deliverable(self.items, 2)

        assert [d.deliverable_id for d in result] == [1, 3]

    def test_remove_unknown_id_is_noop(self):
        assert remove_deliverable(self.items, 42) == self.items

    def test_find(self):
        assert find_deliverable(self.items, 3).name == "Testing"
        assert find_deliverable(self.items, 99) is None

    def test_filters(self):
        assert [d.deliverable_id for d in deliverables_for_owner(self.items, "Proaptus")] == [2, 3]
        assert [d.deliverable_id for d in deliverables_for_role(self.items, "Sales")] == [1]

    def test_total_days_treats_missing_as_zero(self):
        items = self.items + (Deliverable(4, "Unsized", "RPG", "QA", None),)

        assert total_days(items) == Decimal("30")

    def test_next_id(self):
        assert next_deliverable_id(self.items) == 4
        assert next_deliverable_id(()) == 1
        assert next_deliverable_id((Deliverable("legacy-a"),)) == 1
