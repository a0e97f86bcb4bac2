"""
Typed exception hierarchy for the payroll kernel.

Every error has its own class, a machine-readable ``code`` class attribute,
and carries its context as attributes rather than only in the message.
Callers catch by type; log formatters and the service facade read ``code``
and the structured fields.

    PayrollError (base)
    |
    +-- RecordError
    |   +-- MalformedRecordError
    |
    +-- EmployeeNotFoundError
    |
    +-- InvalidInputError
    |   +-- InvalidRatingError
    |   +-- InvalidLeaveRequestError
    |   +-- InvalidCountError
    |
    +-- UnsupportedOperationError
    |
    +-- StorageError
        +-- SourceUnreadableError
        +-- DestinationUnwritableError

Category        | Code                    | When Raised
----------------|-------------------------|-------------------------------------
Record          | MALFORMED_RECORD        | Keyword line with bad/missing fields
Lookup          | EMPLOYEE_NOT_FOUND      | No employee with the given ID
Input           | INVALID_RATING          | Review rating outside 1..5
                | INVALID_LEAVE_REQUEST   | Negative leave day count
                | INVALID_COUNT           | Hours or days that are not a whole number
Operation       | UNSUPPORTED_OPERATION   | Category-restricted call, wrong category
Storage         | SOURCE_UNREADABLE       | Source file exists but cannot be read
                | DESTINATION_UNWRITABLE  | Export/sample file cannot be written

A missing source file is not an error: the loader writes the sample file
and parses that instead.
"""

from __future__ import annotations

from pathlib import Path


class PayrollError(Exception):
    """
    Base exception for all payroll kernel errors.

    All subclasses carry a ``code`` class attribute.
    """

    code: str = "PAYROLL_ERROR"


# Record-related exceptions


class RecordError(PayrollError):
    """Base exception for flat-file record errors."""

    code: str = "RECORD_ERROR"


class MalformedRecordError(RecordError):
    """A record line matched a keyword but its fields could not be read."""

    code: str = "MALFORMED_RECORD"

    def __init__(
        self,
        record_type: str,
        reason: str,
        line_number: int | None = None,
        field: str | None = None,
    ):
        self.record_type = record_type
        self.reason = reason
        self.line_number = line_number
        self.field = field
        where = f" at line {line_number}" if line_number is not None else ""
        super().__init__(f"Malformed {record_type} record{where}: {reason}")


# Lookup exceptions


class EmployeeNotFoundError(PayrollError):
    """No employee in the ledger has the given ID."""

    code: str = "EMPLOYEE_NOT_FOUND"

    def __init__(self, employee_id: str):
        self.employee_id = employee_id
        super().__init__(f"Employee not found: {employee_id}")


# Input exceptions


class InvalidInputError(PayrollError):
    """Base exception for rejected caller input. State is left unchanged."""

    code: str = "INVALID_INPUT"


class InvalidRatingError(InvalidInputError):
    """Performance rating outside the 1..5 scale."""

    code: str = "INVALID_RATING"

    def __init__(self, rating: int):
        self.rating = rating
        super().__init__(f"Rating must be between 1 and 5, got {rating}")


class InvalidLeaveRequestError(InvalidInputError):
    """Leave request with a negative number of days."""

    code: str = "INVALID_LEAVE_REQUEST"

    def __init__(self, employee_id: str, days: int):
        self.employee_id = employee_id
        self.days = days
        super().__init__(
            f"Leave request for {employee_id} must be non-negative, got {days} days"
        )


class InvalidCountError(InvalidInputError):
    """Hours or leave days given as something other than a whole number."""

    code: str = "INVALID_COUNT"

    def __init__(self, field: str, value: object):
        self.field = field
        self.value = value
        super().__init__(f"{field} must be a whole number, got {value!r}")


# Operation exceptions


class UnsupportedOperationError(PayrollError):
    """
    Category-restricted operation invoked on an employee of another category.

    Raised before any state is touched.
    """

    code: str = "UNSUPPORTED_OPERATION"

    def __init__(self, employee_id: str, category: str, operation: str):
        self.employee_id = employee_id
        self.category = category
        self.operation = operation
        super().__init__(
            f"Operation '{operation}' is not applicable to {category} {employee_id}"
        )


# Storage exceptions


class StorageError(PayrollError):
    """Base exception for flat-file storage errors."""

    code: str = "STORAGE_ERROR"


class DestinationUnwritableError(StorageError):
    """An export or sample-file destination could not be written."""

    code: str = "DESTINATION_UNWRITABLE"

    def __init__(self, path: Path | str, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot write {self.path}: {reason}")


class SourceUnreadableError(StorageError):
    """The employee file exists but could not be opened or decoded."""

    code: str = "SOURCE_UNREADABLE"

    def __init__(self, path: Path | str, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot read {self.path}: {reason}")
