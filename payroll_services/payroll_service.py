"""
PayrollService -- facade over the ledger for the menu layer.

Responsibility:
    The operations an interactive front end calls: load the employee file,
    look employees up, compute payslips and aggregates, apply mutations and
    export the report. Every typed payroll error is turned into a
    ``PayrollOperationResult`` status; nothing in the taxonomy escapes as an
    exception.

Architecture position:
    Services layer, above the kernel. Composes ``PayrollLedger`` (state and
    queries), ``PayrollFormatCodec`` (loading) and the export renderer.
    Rendering results for a console is the caller's job.

Failure modes (as result statuses):
    - NOT_FOUND: no employee with the ID, or an empty name/department search.
    - REJECTED: invalid rating, negative or uncovered leave, bad number.
    - NOT_APPLICABLE: category-restricted mutation on another category.
    - FAILED: source unreadable, sample or export destination unwritable.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any

from payroll_config import LedgerConfig, load_ledger_config
from payroll_ingestion.codec import PayrollFormatCodec
from payroll_ingestion.domain.types import LoadManifest
from payroll_ingestion.export import export_report
from payroll_kernel.domain.dtos import DepartmentSummary, PaySlip, PerformanceSummary
from payroll_kernel.domain.employee import EmployeeRecord
from payroll_kernel.exceptions import (
    EmployeeNotFoundError,
    InvalidInputError,
    StorageError,
    UnsupportedOperationError,
)
from payroll_kernel.ledger import PayrollLedger
from payroll_kernel.logging_config import LogContext, configure_logging, get_logger

logger = get_logger("services.payroll")


class OperationStatus(str, Enum):
    SUCCEEDED = "succeeded"
    NOT_FOUND = "not_found"
    REJECTED = "rejected"
    NOT_APPLICABLE = "not_applicable"
    FAILED = "failed"


@dataclass(frozen=True)
class PayrollOperationResult:
    """Result of one facade operation."""

    status: OperationStatus
    operation: str
    employee_id: str | None = None
    value: Any = None
    message: str | None = None
    error_code: str | None = None

    @property
    def is_success(self) -> bool:
        return self.status == OperationStatus.SUCCEEDED


_STATUS_BY_ERROR: tuple[tuple[type[Exception], OperationStatus], ...] = (
    (EmployeeNotFoundError, OperationStatus.NOT_FOUND),
    (UnsupportedOperationError, OperationStatus.NOT_APPLICABLE),
    (InvalidInputError, OperationStatus.REJECTED),
    (StorageError, OperationStatus.FAILED),
)


class PayrollService:
    """
    Operations on one in-memory ledger.

    Contract:
        Construct with a ``LedgerConfig`` (defaults if omitted), call
        ``load`` once, then query and mutate. ``load`` replaces the ledger
        contents rather than appending to them.

    Non-goals:
        - Not safe for concurrent callers.
        - Does NOT print or format anything for a console.
    """

    def __init__(
        self,
        config: LedgerConfig | None = None,
        ledger: PayrollLedger | None = None,
        codec: PayrollFormatCodec | None = None,
    ):
        self._config = config or LedgerConfig()
        self._ledger = ledger if ledger is not None else PayrollLedger()
        self._codec = codec or PayrollFormatCodec(
            max_reported_errors=self._config.max_reported_errors
        )

    @classmethod
    def from_config_file(cls, path: Path | str | None = None) -> PayrollService:
        """Load settings, configure logging at the configured level, build the service."""
        config = load_ledger_config(path)
        configure_logging(level=config.log_level_number)
        return cls(config=config)

    @property
    def config(self) -> LedgerConfig:
        return self._config

    @property
    def ledger(self) -> PayrollLedger:
        return self._ledger

    # -------------------------------------------------------------------------
    # Loading and export
    # -------------------------------------------------------------------------

    def load(self, path: Path | str | None = None) -> PayrollOperationResult:
        """
        Load the employee file (writing the sample file if it is missing).

        On success ``value`` is the ``LoadManifest``; malformed lines are
        counted there and do not fail the load.
        """
        source = Path(path) if path is not None else self._config.data_file
        try:
            result = self._codec.load(source)
        except StorageError as exc:
            return self._failure("load", None, exc)

        with LogContext.bind(source_file=str(source), operation="load"):
            self._ledger = PayrollLedger(result.records)
        manifest: LoadManifest = result.manifest
        return PayrollOperationResult(
            status=OperationStatus.SUCCEEDED,
            operation="load",
            value=manifest,
            message=f"{manifest.loaded} employees loaded",
        )

    def export(self, path: Path | str | None = None) -> PayrollOperationResult:
        """Write the plain-text report; ``value`` is the number of employees written."""
        target = Path(path) if path is not None else self._config.export_file
        try:
            count = export_report(target, self._config.company_name, self._ledger)
        except StorageError as exc:
            return self._failure("export", None, exc)
        return PayrollOperationResult(
            status=OperationStatus.SUCCEEDED,
            operation="export",
            value=count,
            message=f"Report exported to {target}",
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list_employees(self) -> tuple[EmployeeRecord, ...]:
        return self._ledger.employees()

    def search_by_id(self, employee_id: str) -> PayrollOperationResult:
        return self._run("search_by_id", employee_id, lambda e: e)

    def search_by_name(self, text: str) -> PayrollOperationResult:
        return self._matches("search_by_name", self._ledger.find_by_name(text), text)

    def filter_by_department(self, department: str) -> PayrollOperationResult:
        return self._matches(
            "filter_by_department", self._ledger.filter_by_department(department), department
        )

    def payslip(self, employee_id: str) -> PayrollOperationResult:
        return self._run("payslip", employee_id, lambda e: e.payslip())

    def all_payslips(self) -> tuple[PaySlip, ...]:
        return self._ledger.payslips()

    def total_payroll(self) -> Decimal:
        return self._ledger.total_payroll()

    def department_stats(self) -> tuple[DepartmentSummary, ...]:
        return self._ledger.department_stats()

    def top_earners(self, n: int | None = None) -> tuple[EmployeeRecord, ...]:
        return self._ledger.top_earners(self._config.top_earners_limit if n is None else n)

    def employees_by_experience(self) -> tuple[EmployeeRecord, ...]:
        return self._ledger.by_experience_descending()

    def performance_history(self, employee_id: str) -> PayrollOperationResult:
        return self._run(
            "performance_history",
            employee_id,
            lambda e: PerformanceSummary(
                employee_id=e.employee_id,
                name=e.name,
                reviews=tuple(e.performance_history),
                average_rating=e.average_rating(),
            ),
        )

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def apply_leave(self, employee_id: str, days: int) -> PayrollOperationResult:
        result = self._run("apply_leave", employee_id, lambda e: e.apply_leave(days))
        if result.is_success and result.value is False:
            return replace(
                result,
                status=OperationStatus.REJECTED,
                message="Insufficient leave balance",
                error_code="INSUFFICIENT_LEAVE_BALANCE",
            )
        return result

    def add_review(
        self,
        employee_id: str,
        rating: int,
        review: str,
        date: str,
        reviewed_by: str,
    ) -> PayrollOperationResult:
        return self._run(
            "add_review",
            employee_id,
            lambda e: e.add_performance_review(rating, review, date, reviewed_by),
        )

    def give_raise(self, employee_id: str, percentage: Decimal | int | str) -> PayrollOperationResult:
        return self._run("give_raise", employee_id, lambda e: e.give_raise(percentage))

    def set_bonus(self, employee_id: str, amount: Decimal | int | str) -> PayrollOperationResult:
        return self._run("set_bonus", employee_id, lambda e: e.set_bonus(amount))

    def complete_project(self, employee_id: str) -> PayrollOperationResult:
        return self._run("complete_project", employee_id, lambda e: e.complete_project())

    def log_hours(self, employee_id: str, hours: int) -> PayrollOperationResult:
        return self._run("log_hours", employee_id, lambda e: e.log_hours(hours))

    def complete_contract(self, employee_id: str) -> PayrollOperationResult:
        return self._run("complete_contract", employee_id, lambda e: e.complete_contract())

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _run(
        self,
        operation: str,
        employee_id: str,
        action: Callable[[EmployeeRecord], Any],
    ) -> PayrollOperationResult:
        with LogContext.bind(employee_id=employee_id, operation=operation):
            try:
                employee = self._ledger.require(employee_id)
                value = action(employee)
            except (EmployeeNotFoundError, UnsupportedOperationError, InvalidInputError) as exc:
                return self._failure(operation, employee_id, exc)
            except ValueError as exc:
                logger.info(
                    "operation_rejected",
                    extra={"reason": str(exc)},
                )
                return PayrollOperationResult(
                    status=OperationStatus.REJECTED,
                    operation=operation,
                    employee_id=employee_id,
                    message=str(exc),
                    error_code="INVALID_INPUT",
                )
        return PayrollOperationResult(
            status=OperationStatus.SUCCEEDED,
            operation=operation,
            employee_id=employee_id,
            value=value,
        )

    @staticmethod
    def _matches(
        operation: str, matches: tuple[EmployeeRecord, ...], key: str
    ) -> PayrollOperationResult:
        if not matches:
            return PayrollOperationResult(
                status=OperationStatus.NOT_FOUND,
                operation=operation,
                value=(),
                message=f"No employees match {key!r}",
                error_code=EmployeeNotFoundError.code,
            )
        return PayrollOperationResult(
            status=OperationStatus.SUCCEEDED, operation=operation, value=matches
        )

    @staticmethod
    def _failure(
        operation: str, employee_id: str | None, exc: Exception
    ) -> PayrollOperationResult:
        status = next(
            (s for error_type, s in _STATUS_BY_ERROR if isinstance(exc, error_type)),
            OperationStatus.FAILED,
        )
        logger.info(
            "operation_failed",
            extra={
                "status": status.value,
                "error_code": getattr(exc, "code", None),
                "reason": str(exc),
            },
        )
        return PayrollOperationResult(
            status=status,
            operation=operation,
            employee_id=employee_id,
            message=str(exc),
            error_code=getattr(exc, "code", None),
        )
