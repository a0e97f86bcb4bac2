"""
Tests for the employee record model.

Validates:
- Gross pay rule per category and the flat tax / net identity
- Category-restricted mutations and UNSUPPORTED_OPERATION on mismatch
- Leave ledger atomicity and conservation
- Performance history and average rating
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from payroll_kernel.domain.employee import (
    ContractTerms,
    EmployeeCategory,
)
from payroll_kernel.exceptions import (
    InvalidCountError,
    InvalidLeaveRequestError,
    InvalidRatingError,
    UnsupportedOperationError,
)

# =============================================================================
# Pay rules
# =============================================================================


class TestGrossPay:
    def test_manager_includes_team_bonus(self, manager):
        assert manager.terms.team_bonus == Decimal("2500")
        assert manager.gross_pay() == Decimal("10500")

    def test_developer_bonus_derived_from_projects(self, developer):
        assert developer.terms.bonus == Decimal("400")
        assert developer.gross_pay() == Decimal("6400")

    def test_part_time_is_rate_times_hours(self, part_timer):
        assert part_timer.gross_pay() == Decimal("2000")

    def test_intern_rate_is_fixed(self, intern):
        assert intern.terms.hourly_rate == Decimal("15.00")
        assert intern.gross_pay() == Decimal("1800")

    def test_completed_contract_pays_full_amount(self, contractor):
        assert contractor.gross_pay() == Decimal("15000")

    def test_contract_in_progress_pays_half(self, employee_factory):
        employee = employee_factory(
            ContractTerms(contract_amount=Decimal("15000"), contract_end_date="2024-12-31")
        )
        assert employee.gross_pay() == Decimal("7500")

    def test_pay_is_recomputed_after_mutation(self, part_timer):
        part_timer.log_hours(20)
        assert part_timer.gross_pay() == Decimal("2500")


class TestTax:
    @pytest.mark.parametrize(
        "fixture_name", ["manager", "developer", "part_timer", "intern", "contractor"]
    )
    def test_flat_tax_and_net(self, request, fixture_name):
        employee = request.getfixturevalue(fixture_name)
        gross = employee.gross_pay()
        assert employee.tax() == gross * Decimal("0.10")
        assert employee.net_pay() == gross - employee.tax()

    def test_tax_of_explicit_amount(self, manager):
        assert manager.tax(Decimal("100")) == Decimal("10")

    def test_payslip_snapshot(self, manager):
        slip = manager.payslip()
        assert slip.employee_id == "M001"
        assert slip.category == "Manager"
        assert slip.gross == Decimal("10500")
        assert slip.tax == Decimal("1050")
        assert slip.net == Decimal("9450")


class TestCategory:
    def test_category_follows_terms(self, manager, developer, part_timer, intern, contractor):
        assert manager.category is EmployeeCategory.MANAGER
        assert developer.category is EmployeeCategory.DEVELOPER
        assert part_timer.category is EmployeeCategory.PART_TIME
        assert intern.category is EmployeeCategory.INTERN
        assert contractor.category is EmployeeCategory.CONTRACT

    def test_labels(self, part_timer, contractor):
        assert part_timer.category_label() == "Part-Time Employee"
        assert contractor.category_label() == "Contract Employee"

    def test_intern_experience_forced_to_zero(self, intern):
        assert intern.experience_years == 0

    def test_unknown_terms_rejected(self, employee_factory):
        with pytest.raises(TypeError):
            employee_factory(object())

    def test_base_salary(self, manager, part_timer, intern, contractor):
        assert manager.base_salary() == Decimal("8000")
        assert part_timer.base_salary() == Decimal("4000")
        assert intern.base_salary() == Decimal("2400")
        assert contractor.base_salary() == Decimal("15000")


# =============================================================================
# Category-restricted mutations
# =============================================================================


class TestGiveRaise:
    def test_manager_raise(self, manager):
        assert manager.give_raise(10) == Decimal("8800")
        assert manager.gross_pay() == Decimal("11300")

    def test_developer_raise_with_string_percentage(self, developer):
        developer.give_raise("5")
        assert developer.terms.monthly_salary == Decimal("6300")

    def test_negative_raise_lowers_salary(self, manager):
        manager.give_raise(-50)
        assert manager.terms.monthly_salary == Decimal("4000")

    @pytest.mark.parametrize("fixture_name", ["part_timer", "intern", "contractor"])
    def test_raise_not_applicable(self, request, fixture_name):
        employee = request.getfixturevalue(fixture_name)
        before = employee.gross_pay()
        with pytest.raises(UnsupportedOperationError) as exc_info:
            employee.give_raise(10)
        assert exc_info.value.operation == "give_raise"
        assert employee.gross_pay() == before

    def test_bad_percentage_leaves_salary(self, manager):
        with pytest.raises(ValueError):
            manager.give_raise("ten")
        assert manager.terms.monthly_salary == Decimal("8000")


class TestBonus:
    def test_manager_bonus_overwrites(self, manager):
        manager.set_bonus(1000)
        manager.set_bonus(300)
        assert manager.terms.bonus == Decimal("300")
        assert manager.gross_pay() == Decimal("10800")

    def test_developer_bonus_not_settable(self, developer):
        with pytest.raises(UnsupportedOperationError):
            developer.set_bonus(1000)
        assert developer.terms.bonus == Decimal("400")


class TestCompleteProject:
    def test_increments_projects_and_bonus(self, developer):
        assert developer.complete_project() == Decimal("600")
        assert developer.terms.projects_completed == 3
        assert developer.gross_pay() == Decimal("6600")

    def test_not_applicable_to_manager(self, manager):
        with pytest.raises(UnsupportedOperationError):
            manager.complete_project()


class TestLogHours:
    def test_part_time(self, part_timer):
        assert part_timer.log_hours(10) == 90

    def test_intern(self, intern):
        intern.log_hours(-20)
        assert intern.gross_pay() == Decimal("1500")

    def test_not_applicable_to_developer(self, developer):
        with pytest.raises(UnsupportedOperationError):
            developer.log_hours(5)

    @pytest.mark.parametrize("hours", [2.5, "3", True, None])
    def test_non_integer_hours_rejected(self, part_timer, hours):
        with pytest.raises(InvalidCountError) as exc_info:
            part_timer.log_hours(hours)
        assert exc_info.value.field == "hours"
        assert part_timer.terms.hours_worked == 80
        assert part_timer.gross_pay() == Decimal("2000")


class TestCompleteContract:
    def test_completion_is_irreversible(self, employee_factory):
        employee = employee_factory(
            ContractTerms(contract_amount=Decimal("1000"), contract_end_date="2025-06-30")
        )
        assert employee.complete_contract() == Decimal("1000")
        employee.complete_contract()
        assert employee.terms.is_completed is True

    def test_not_applicable_to_intern(self, intern):
        with pytest.raises(UnsupportedOperationError):
            intern.complete_contract()


# =============================================================================
# Leave
# =============================================================================


class TestApplyLeave:
    def test_initial_balance(self, manager):
        assert manager.leave_balance == 20
        assert manager.leaves_taken == 0

    def test_approved_moves_days(self, manager):
        assert manager.apply_leave(5) is True
        assert manager.leave_balance == 15
        assert manager.leaves_taken == 5

    def test_exact_balance_approved(self, manager):
        assert manager.apply_leave(20) is True
        assert manager.leave_balance == 0

    def test_exceeding_balance_rejected_without_change(self, manager):
        manager.apply_leave(15)
        assert manager.apply_leave(6) is False
        assert manager.leave_balance == 5
        assert manager.leaves_taken == 15

    def test_negative_days_rejected(self, manager):
        with pytest.raises(InvalidLeaveRequestError):
            manager.apply_leave(-3)
        assert manager.leave_balance == 20
        assert manager.leaves_taken == 0

    @pytest.mark.parametrize("days", ["3", 2.0, False])
    def test_non_integer_days_rejected(self, manager, days):
        with pytest.raises(InvalidCountError):
            manager.apply_leave(days)
        assert manager.leave_balance == 20
        assert manager.leaves_taken == 0


# =============================================================================
# Performance
# =============================================================================


class TestPerformanceReviews:
    def test_average_of_empty_history_is_zero(self, developer):
        assert developer.average_rating() == 0

    def test_average_rating(self, developer):
        for rating in (5, 3, 4):
            developer.add_performance_review(rating, "review", "2024-01-01", "Alice")
        assert developer.average_rating() == Decimal("4")

    def test_history_keeps_insertion_order(self, developer):
        developer.add_performance_review(2, "first", "2024-06-01", "Alice")
        developer.add_performance_review(5, "second", "2023-01-01", "Alice")
        assert [r.review for r in developer.performance_history] == ["first", "second"]

    @pytest.mark.parametrize("rating", [0, 6, -1])
    def test_invalid_rating_leaves_history(self, developer, rating):
        with pytest.raises(InvalidRatingError):
            developer.add_performance_review(rating, "bad", "2024-01-01", "Alice")
        assert developer.performance_history == []


def test_mutations_are_logged(captured_logs, developer):
    developer.complete_project()
    logs = captured_logs()
    record = next(r for r in logs if r["message"] == "project_completed")
    assert record["employee_id"] == "D001"
    assert record["projects_completed"] == 3
