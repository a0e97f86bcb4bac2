"""
Ledger configuration schema (``payroll_config.schema``).

Frozen dataclass holding the settings the ledger reads at startup. The
defaults reproduce the behaviour of running without a configuration file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_COMPANY_NAME = "TechCorp Solutions"
DEFAULT_DATA_FILE = Path("employees.txt")
DEFAULT_EXPORT_FILE = Path("employee_report.txt")

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass(frozen=True)
class LedgerConfig:
    """
    Settings for one ledger session.

    ``data_file`` is read by ``PayrollService.load`` when no path is given;
    ``export_file`` likewise for ``export``.
    """

    company_name: str = DEFAULT_COMPANY_NAME
    data_file: Path = field(default=DEFAULT_DATA_FILE)
    export_file: Path = field(default=DEFAULT_EXPORT_FILE)
    top_earners_limit: int = 10
    max_reported_errors: int = 10
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not self.company_name.strip():
            raise ValueError("company_name must not be empty")
        if self.top_earners_limit < 1:
            raise ValueError(
                f"top_earners_limit must be positive, got {self.top_earners_limit}"
            )
        if self.max_reported_errors < 0:
            raise ValueError(
                f"max_reported_errors must be non-negative, got {self.max_reported_errors}"
            )
        level = self.log_level.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(VALID_LOG_LEVELS)}, got '{self.log_level}'"
            )
        object.__setattr__(self, "log_level", level)
        object.__setattr__(self, "data_file", Path(self.data_file))
        object.__setattr__(self, "export_file", Path(self.export_file))

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)
