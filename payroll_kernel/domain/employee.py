"""
Employee record model and pay rules (``payroll_kernel.domain.employee``).

Responsibility
--------------
The employee entity: shared identity, demographic, employment and leave
fields plus one category payload (``terms``) that selects the pay rule and
the set of category-restricted mutations.

Architecture position
---------------------
**Kernel > Domain** -- no I/O. Records are built by the flat-file codec,
held by ``PayrollLedger`` and mutated through the methods below, which the
service facade calls.

Invariants enforced
-------------------
* The category is derived from the payload type; a record cannot carry a
  payload of one category while claiming another.
* Pay and tax are recomputed from current state on every call.
* ``tax == gross * TAX_RATE`` for every category.
* ``leave_balance + leaves_taken`` only moves through ``apply_leave`` and
  an application is all-or-nothing.
* A rating outside 1..5 is rejected before a ``PerformanceRecord`` exists.
* Category-restricted mutations raise ``UnsupportedOperationError`` before
  touching state.

Failure modes
-------------
* ``UnsupportedOperationError`` -- raise, bonus, project, hours or contract
  call on the wrong category.
* ``InvalidRatingError`` -- review rating outside 1..5.
* ``InvalidLeaveRequestError`` -- negative leave day count.
* ``InvalidCountError`` -- hours or leave days that are not an ``int``.
* ``ValueError`` -- non-numeric percentage or amount.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from payroll_kernel.domain.dtos import PaySlip
from payroll_kernel.domain.performance import PerformanceRecord, validate_rating
from payroll_kernel.domain.values import (
    CONTRACT_IN_PROGRESS_SHARE,
    INITIAL_LEAVE_BALANCE,
    INTERN_HOURLY_RATE,
    PROJECT_BONUS,
    STANDARD_MONTHLY_HOURS,
    TAX_RATE,
    TEAM_BONUS_PER_MEMBER,
    ZERO,
    to_decimal,
)
from payroll_kernel.exceptions import (
    InvalidCountError,
    InvalidLeaveRequestError,
    UnsupportedOperationError,
)
from payroll_kernel.logging_config import get_logger

logger = get_logger("domain.employee")


def _whole_number(field_name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidCountError(field_name, value)
    return value


class EmployeeCategory(str, Enum):
    """Employment categories. Values are the flat-file record keywords."""

    MANAGER = "MANAGER"
    DEVELOPER = "DEVELOPER"
    PART_TIME = "PARTTIME"
    INTERN = "INTERN"
    CONTRACT = "CONTRACT"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    EmployeeCategory.MANAGER: "Manager",
    EmployeeCategory.DEVELOPER: "Developer",
    EmployeeCategory.PART_TIME: "Part-Time Employee",
    EmployeeCategory.INTERN: "Intern",
    EmployeeCategory.CONTRACT: "Contract Employee",
}


# =============================================================================
# Category payloads
# =============================================================================


@dataclass
class ManagerTerms:
    """Salaried manager. Team bonus is fixed when the record is built."""

    monthly_salary: Decimal
    team_size: int
    bonus: Decimal = ZERO
    team_bonus: Decimal = field(init=False)

    def __post_init__(self) -> None:
        self.team_bonus = TEAM_BONUS_PER_MEMBER * self.team_size


@dataclass
class DeveloperTerms:
    """Salaried developer. Bonus is 200 per completed project."""

    monthly_salary: Decimal
    language: str
    projects_completed: int
    bonus: Decimal = field(init=False)

    def __post_init__(self) -> None:
        self.bonus = PROJECT_BONUS * self.projects_completed


@dataclass
class HourlyTerms:
    hourly_rate: Decimal
    hours_worked: int


@dataclass
class InternTerms:
    """Hourly intern at the fixed intern rate."""

    university: str
    mentor: str
    hours_worked: int
    hourly_rate: Decimal = field(default=INTERN_HOURLY_RATE, init=False)


@dataclass
class ContractTerms:
    contract_amount: Decimal
    contract_end_date: str
    is_completed: bool = False


EmployeeTerms = ManagerTerms | DeveloperTerms | HourlyTerms | InternTerms | ContractTerms

_CATEGORY_BY_TERMS: dict[type, EmployeeCategory] = {
    ManagerTerms: EmployeeCategory.MANAGER,
    DeveloperTerms: EmployeeCategory.DEVELOPER,
    HourlyTerms: EmployeeCategory.PART_TIME,
    InternTerms: EmployeeCategory.INTERN,
    ContractTerms: EmployeeCategory.CONTRACT,
}


# =============================================================================
# Employee record
# =============================================================================


@dataclass(eq=False)
class EmployeeRecord:
    """
    One employee, created once at load time and mutated in place.

    Equality is identity: two records with the same ``employee_id`` are
    still different ledger entries.
    """

    employee_id: str
    name: str
    age: int
    address: str
    department: str
    join_date: str
    experience_years: int
    terms: EmployeeTerms
    leave_balance: int = INITIAL_LEAVE_BALANCE
    leaves_taken: int = 0
    performance_history: list[PerformanceRecord] = field(default_factory=list)

    def __post_init__(self) -> None:
        if type(self.terms) not in _CATEGORY_BY_TERMS:
            raise TypeError(f"Unknown employee terms: {type(self.terms).__name__}")
        if isinstance(self.terms, InternTerms):
            self.experience_years = 0

        logger.debug(
            "employee_created",
            extra={
                "employee_id": self.employee_id,
                "category": self.category.value,
                "department": self.department,
            },
        )

    @property
    def category(self) -> EmployeeCategory:
        return _CATEGORY_BY_TERMS[type(self.terms)]

    def category_label(self) -> str:
        return self.category.label

    # -------------------------------------------------------------------------
    # Pay and tax
    # -------------------------------------------------------------------------

    def gross_pay(self) -> Decimal:
        """Pay before tax under the rule of this employee's category."""
        match self.terms:
            case ManagerTerms() as terms:
                return terms.monthly_salary + terms.bonus + terms.team_bonus
            case DeveloperTerms() as terms:
                return terms.monthly_salary + terms.bonus
            case HourlyTerms() | InternTerms() as terms:
                return terms.hourly_rate * terms.hours_worked
            case ContractTerms() as terms:
                if terms.is_completed:
                    return terms.contract_amount
                return terms.contract_amount * CONTRACT_IN_PROGRESS_SHARE
        raise TypeError(f"Unknown employee terms: {type(self.terms).__name__}")

    def tax(self, gross: Decimal | None = None) -> Decimal:
        """Flat tax on ``gross`` (defaults to current gross pay)."""
        if gross is None:
            gross = self.gross_pay()
        return gross * TAX_RATE

    def net_pay(self) -> Decimal:
        gross = self.gross_pay()
        return gross - self.tax(gross)

    def base_salary(self) -> Decimal:
        """Nominal monthly base: salary, 160 hours at the hourly rate, or the contract."""
        match self.terms:
            case ManagerTerms() | DeveloperTerms() as terms:
                return terms.monthly_salary
            case HourlyTerms() | InternTerms() as terms:
                return terms.hourly_rate * STANDARD_MONTHLY_HOURS
            case ContractTerms() as terms:
                return terms.contract_amount
        raise TypeError(f"Unknown employee terms: {type(self.terms).__name__}")

    def payslip(self) -> PaySlip:
        gross = self.gross_pay()
        tax = self.tax(gross)
        return PaySlip(
            employee_id=self.employee_id,
            name=self.name,
            category=self.category_label(),
            department=self.department,
            gross=gross,
            tax=tax,
            net=gross - tax,
        )

    # -------------------------------------------------------------------------
    # Category-restricted mutations
    # -------------------------------------------------------------------------

    def give_raise(self, percentage: Decimal | int | str) -> Decimal:
        """
        Raise the monthly salary by ``percentage`` percent.

        Negative percentages are accepted and lower the salary.
        Returns the new monthly salary.
        """
        match self.terms:
            case ManagerTerms() | DeveloperTerms() as terms:
                pct = to_decimal(percentage)
                terms.monthly_salary += terms.monthly_salary * pct / 100
                logger.info(
                    "raise_applied",
                    extra={
                        "employee_id": self.employee_id,
                        "percentage": str(pct),
                        "monthly_salary": str(terms.monthly_salary),
                    },
                )
                return terms.monthly_salary
            case _:
                raise self._unsupported("give_raise")

    def set_bonus(self, amount: Decimal | int | str) -> Decimal:
        """Replace a manager's bonus. Returns the new gross pay."""
        match self.terms:
            case ManagerTerms() as terms:
                terms.bonus = to_decimal(amount)
                logger.info(
                    "bonus_set",
                    extra={"employee_id": self.employee_id, "bonus": str(terms.bonus)},
                )
                return self.gross_pay()
            case _:
                raise self._unsupported("set_bonus")

    def complete_project(self) -> Decimal:
        """Count one more completed project for a developer. Returns the new bonus."""
        match self.terms:
            case DeveloperTerms() as terms:
                terms.projects_completed += 1
                terms.bonus += PROJECT_BONUS
                logger.info(
                    "project_completed",
                    extra={
                        "employee_id": self.employee_id,
                        "projects_completed": terms.projects_completed,
                        "bonus": str(terms.bonus),
                    },
                )
                return terms.bonus
            case _:
                raise self._unsupported("complete_project")

    def log_hours(self, hours: int) -> int:
        """Add ``hours`` to an hourly worker's total. Returns the new total."""
        match self.terms:
            case HourlyTerms() | InternTerms() as terms:
                terms.hours_worked += _whole_number("hours", hours)
                logger.info(
                    "hours_logged",
                    extra={
                        "employee_id": self.employee_id,
                        "hours": hours,
                        "hours_worked": terms.hours_worked,
                    },
                )
                return terms.hours_worked
            case _:
                raise self._unsupported("log_hours")

    def complete_contract(self) -> Decimal:
        """Mark a contract completed (irreversible). Returns the new gross pay."""
        match self.terms:
            case ContractTerms() as terms:
                terms.is_completed = True
                logger.info(
                    "contract_completed",
                    extra={"employee_id": self.employee_id},
                )
                return self.gross_pay()
            case _:
                raise self._unsupported("complete_contract")

    def _unsupported(self, operation: str) -> UnsupportedOperationError:
        logger.warning(
            "operation_not_applicable",
            extra={
                "employee_id": self.employee_id,
                "category": self.category.value,
                "operation": operation,
            },
        )
        return UnsupportedOperationError(
            self.employee_id, self.category_label(), operation
        )

    # -------------------------------------------------------------------------
    # Leave and performance
    # -------------------------------------------------------------------------

    def apply_leave(self, days: int) -> bool:
        """
        Take ``days`` of leave if the balance covers all of them.

        Returns True and moves the days from balance to taken, or False
        with nothing changed.
        """
        if _whole_number("days", days) < 0:
            raise InvalidLeaveRequestError(self.employee_id, days)
        if days > self.leave_balance:
            logger.info(
                "leave_rejected",
                extra={
                    "employee_id": self.employee_id,
                    "days": days,
                    "leave_balance": self.leave_balance,
                },
            )
            return False
        self.leave_balance -= days
        self.leaves_taken += days
        logger.info(
            "leave_approved",
            extra={
                "employee_id": self.employee_id,
                "days": days,
                "leave_balance": self.leave_balance,
            },
        )
        return True

    def add_performance_review(
        self, rating: int, review: str, date: str, reviewed_by: str
    ) -> PerformanceRecord:
        validate_rating(rating)
        record = PerformanceRecord(
            rating=rating, review=review, date=date, reviewed_by=reviewed_by
        )
        self.performance_history.append(record)
        logger.info(
            "performance_review_added",
            extra={
                "employee_id": self.employee_id,
                "rating": rating,
                "review_count": len(self.performance_history),
            },
        )
        return record

    def average_rating(self) -> Decimal:
        """Mean rating over the whole history; 0 when there are no reviews."""
        if not self.performance_history:
            return ZERO
        total = sum(r.rating for r in self.performance_history)
        return Decimal(total) / len(self.performance_history)
