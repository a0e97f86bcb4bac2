"""
payroll_ingestion.domain.types -- Pure frozen dataclasses for the employee file loader.

ZERO I/O. Imports only from payroll_kernel.

Reuses:
    - ValidationError from payroll_kernel.domain.dtos
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from payroll_kernel.domain.dtos import ValidationError
from payroll_kernel.domain.employee import EmployeeRecord


class LineStatus(str, Enum):
    """Per-line outcome of decoding one line of the employee file."""

    PARSED = "parsed"  # Keyword line, record built
    REJECTED = "rejected"  # Keyword line with malformed or missing fields
    SKIPPED = "skipped"  # Blank, comment, or unknown leading token


@dataclass(frozen=True)
class ParsedLine:
    """Result of decoding a single line: a record, an error, or nothing."""

    line_number: int  # 1-indexed
    status: LineStatus
    record: EmployeeRecord | None = None
    error: ValidationError | None = None

    @property
    def is_ok(self) -> bool:
        return self.status == LineStatus.PARSED


@dataclass(frozen=True)
class LoadManifest:
    """Counts and first errors of one load of the employee file."""

    source: str
    loaded: int = 0
    rejected: int = 0
    skipped: int = 0
    errors: tuple[ValidationError, ...] = ()  # First N rejections only
    bootstrapped: bool = False  # Sample file was written before parsing

    @property
    def is_clean(self) -> bool:
        return self.rejected == 0


@dataclass(frozen=True)
class LoadResult:
    """Records decoded from a file plus the manifest describing the load."""

    records: tuple[EmployeeRecord, ...]
    manifest: LoadManifest
