"""
Ledger configuration (``payroll_config``).

``load_ledger_config()`` is the single entry point: pass a YAML path, or
nothing for the built-in defaults.
"""

from payroll_config.loader import load_ledger_config, parse_ledger_config
from payroll_config.schema import LedgerConfig

__all__ = [
    "LedgerConfig",
    "load_ledger_config",
    "parse_ledger_config",
]
