"""
Data Transfer Objects for the payroll kernel.

Frozen dataclasses handed across layer boundaries: codec to service,
ledger to the report renderer, service to the menu layer. None of them
hold references back into mutable ledger state; amounts are snapshots
taken at the time the DTO was built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from payroll_kernel.domain.performance import PerformanceRecord


@dataclass(frozen=True)
class ValidationError:
    """
    A single validation error.

    Contract:
        Carries a machine-readable code, human-readable message, optional
        field name and optional details dict.

    Non-goals:
        - Does NOT raise exceptions -- it IS the error representation.
    """

    code: str
    message: str
    field: str | None = None
    details: dict[str, Any] | None = None


@dataclass(frozen=True)
class PaySlip:
    """Gross, tax and net pay for one employee at the time of the call."""

    employee_id: str
    name: str
    category: str
    department: str
    gross: Decimal
    tax: Decimal
    net: Decimal


@dataclass(frozen=True)
class DepartmentSummary:
    """Head count and gross payroll of one department."""

    department: str
    employee_count: int
    total_gross_pay: Decimal


@dataclass(frozen=True)
class PerformanceSummary:
    """Review history of one employee and its average rating."""

    employee_id: str
    name: str
    reviews: tuple[PerformanceRecord, ...] = field(default_factory=tuple)
    average_rating: Decimal = Decimal("0")
