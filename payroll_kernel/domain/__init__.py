"""
payroll_kernel.domain -- Pure types and value objects.

ZERO I/O.
"""

from payroll_kernel.domain.dtos import (
    DepartmentSummary,
    PaySlip,
    PerformanceSummary,
    ValidationError,
)
from payroll_kernel.domain.employee import (
    ContractTerms,
    DeveloperTerms,
    EmployeeCategory,
    EmployeeRecord,
    HourlyTerms,
    InternTerms,
    ManagerTerms,
)
from payroll_kernel.domain.performance import PerformanceRecord

__all__ = [
    "ContractTerms",
    "DepartmentSummary",
    "DeveloperTerms",
    "EmployeeCategory",
    "EmployeeRecord",
    "HourlyTerms",
    "InternTerms",
    "ManagerTerms",
    "PaySlip",
    "PerformanceRecord",
    "PerformanceSummary",
    "ValidationError",
]
