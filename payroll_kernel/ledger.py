"""
PayrollLedger -- the in-memory set of loaded employees and its queries.

Responsibility:
    Owns the employee records in load order and answers lookups, filters,
    aggregations and rankings over them. Mutations of individual employees
    belong to ``EmployeeRecord``; the ledger only adds records.

Architecture position:
    Kernel -- pure in-memory state, no I/O. Filled by ``PayrollService.load``
    from the codec's output.

Invariants enforced:
    - Iteration order is insertion order.
    - ID lookups scan in insertion order; with duplicate IDs the first
      inserted record wins.
    - Rankings are stable: equal keys keep insertion order.
    - Department grouping uses the raw department string.

Non-goals:
    - Not safe for concurrent callers.
    - Does NOT reject duplicate IDs (see ``duplicate_ids``).
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator
from decimal import Decimal

from payroll_kernel.domain.dtos import DepartmentSummary, PaySlip
from payroll_kernel.domain.employee import EmployeeRecord
from payroll_kernel.domain.values import ZERO
from payroll_kernel.exceptions import EmployeeNotFoundError
from payroll_kernel.logging_config import get_logger

logger = get_logger("ledger")

DEFAULT_TOP_EARNERS = 10


class PayrollLedger:
    """Insertion-ordered collection of ``EmployeeRecord``."""

    def __init__(self, employees: Iterable[EmployeeRecord] = ()):
        self._employees: list[EmployeeRecord] = []
        self._seen_ids: set[str] = set()
        self.extend(employees)

    def add(self, employee: EmployeeRecord) -> None:
        """Append ``employee``; a repeated ID is kept and logged once per insert."""
        if employee.employee_id in self._seen_ids:
            logger.warning(
                "duplicate_employee_id",
                extra={"employee_id": employee.employee_id},
            )
        self._seen_ids.add(employee.employee_id)
        self._employees.append(employee)

    def extend(self, employees: Iterable[EmployeeRecord]) -> None:
        for employee in employees:
            self.add(employee)

    def __len__(self) -> int:
        return len(self._employees)

    def __iter__(self) -> Iterator[EmployeeRecord]:
        return iter(self._employees)

    def employees(self) -> tuple[EmployeeRecord, ...]:
        return tuple(self._employees)

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def find_by_id(self, employee_id: str) -> EmployeeRecord | None:
        """First record with ``employee_id`` in insertion order, or None."""
        for employee in self._employees:
            if employee.employee_id == employee_id:
                return employee
        return None

    def require(self, employee_id: str) -> EmployeeRecord:
        """Like ``find_by_id`` but raises ``EmployeeNotFoundError`` on a miss."""
        employee = self.find_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return employee

    def find_by_name(self, text: str) -> tuple[EmployeeRecord, ...]:
        """Case-sensitive substring match on the name."""
        return tuple(e for e in self._employees if text in e.name)

    def filter_by_department(self, department: str) -> tuple[EmployeeRecord, ...]:
        return tuple(e for e in self._employees if e.department == department)

    def duplicate_ids(self) -> tuple[str, ...]:
        """IDs held by more than one record, in order of first appearance."""
        counts = Counter(e.employee_id for e in self._employees)
        return tuple(eid for eid, n in counts.items() if n > 1)

    # -------------------------------------------------------------------------
    # Aggregations
    # -------------------------------------------------------------------------

    def total_payroll(self) -> Decimal:
        """Sum of gross pay over every employee."""
        return sum((e.gross_pay() for e in self._employees), ZERO)

    def payslips(self) -> tuple[PaySlip, ...]:
        return tuple(e.payslip() for e in self._employees)

    def department_stats(self) -> tuple[DepartmentSummary, ...]:
        """Head count and gross payroll per department, ordered by department name."""
        counts: dict[str, int] = {}
        totals: dict[str, Decimal] = {}
        for employee in self._employees:
            dept = employee.department
            counts[dept] = counts.get(dept, 0) + 1
            totals[dept] = totals.get(dept, ZERO) + employee.gross_pay()
        return tuple(
            DepartmentSummary(
                department=dept,
                employee_count=counts[dept],
                total_gross_pay=totals[dept],
            )
            for dept in sorted(counts)
        )

    # -------------------------------------------------------------------------
    # Rankings
    # -------------------------------------------------------------------------

    def top_earners(self, n: int = DEFAULT_TOP_EARNERS) -> tuple[EmployeeRecord, ...]:
        """At most ``n`` employees by descending gross pay; ties keep load order."""
        if n <= 0:
            return ()
        ranked = sorted(self._employees, key=lambda e: e.gross_pay(), reverse=True)
        return tuple(ranked[:n])

    def by_experience_descending(self) -> tuple[EmployeeRecord, ...]:
        """All employees by descending years of experience; ties keep load order."""
        return tuple(
            sorted(self._employees, key=lambda e: e.experience_years, reverse=True)
        )
