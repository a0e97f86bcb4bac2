"""
Plain-text employee report (``payroll_ingestion.export``).

One block per employee with ID, name, category, department and a
``Salary`` line. The salary shown is GROSS pay, before tax, even though
the label says salary. The report is for reading only; it cannot be parsed
back by ``PayrollFormatCodec``.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from payroll_kernel.domain.employee import EmployeeRecord
from payroll_kernel.domain.values import format_money
from payroll_kernel.exceptions import DestinationUnwritableError
from payroll_kernel.logging_config import LogContext, get_logger

logger = get_logger("ingestion.export")

HEADER_RULE = "=" * 43
BLOCK_RULE = "-" * 43


def render_report(company_name: str, employees: Iterable[EmployeeRecord]) -> str:
    lines = [f"EMPLOYEE REPORT - {company_name}", HEADER_RULE, ""]
    for employee in employees:
        lines.extend(
            (
                f"ID: {employee.employee_id}",
                f"Name: {employee.name}",
                f"Type: {employee.category_label()}",
                f"Department: {employee.department}",
                f"Salary: ${format_money(employee.gross_pay())}",
                BLOCK_RULE,
            )
        )
    return "\n".join(lines) + "\n"


def export_report(
    target_path: Path | str,
    company_name: str,
    employees: Iterable[EmployeeRecord],
) -> int:
    """
    Write the report to ``target_path`` and return the number of employees in it.

    Raises:
        DestinationUnwritableError: if the file cannot be written. Nothing
            is written in that case.
    """
    target_path = Path(target_path)
    employees = tuple(employees)
    with LogContext.bind(operation="export"):
        content = render_report(company_name, employees)
        try:
            target_path.write_text(content, encoding="utf-8")
        except OSError as exc:
            logger.error(
                "report_export_failed",
                extra={"path": str(target_path), "reason": str(exc)},
            )
            raise DestinationUnwritableError(target_path, str(exc)) from exc
        logger.info(
            "report_exported",
            extra={"path": str(target_path), "employee_count": len(employees)},
        )
    return len(employees)
