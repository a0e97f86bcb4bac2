"""
Services composing the payroll kernel with ingestion and configuration.

The kernel never imports from this package; orchestration that needs the
codec, the report export or ``LedgerConfig`` lives here.
"""

from payroll_services.payroll_service import (
    OperationStatus,
    PayrollOperationResult,
    PayrollService,
)

__all__ = [
    "OperationStatus",
    "PayrollOperationResult",
    "PayrollService",
]
