"""
payroll_ingestion.domain -- Pure result types for the employee file loader.

ZERO I/O. Imports only from payroll_kernel.
"""

from payroll_ingestion.domain.types import LineStatus, LoadManifest, LoadResult, ParsedLine

__all__ = [
    "LineStatus",
    "LoadManifest",
    "LoadResult",
    "ParsedLine",
]
