"""
Configuration Loader (``payroll_config.loader``).

Responsibility
--------------
Loads a YAML settings file and parses it into a ``LedgerConfig``.

Invariants enforced
-------------------
* Unknown keys are rejected; a typo never silently falls back to a default.
* Relative paths in the file resolve against the directory of the YAML
  file, not the process working directory.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown key, wrong type or invalid value  -> ``ValueError``.
"""

from __future__ import annotations

from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from payroll_config.schema import LedgerConfig

_KNOWN_KEYS = frozenset(f.name for f in fields(LedgerConfig))
_PATH_KEYS = ("data_file", "export_file")
_INT_KEYS = ("top_earners_limit", "max_reported_errors")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the top level is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at top level, got {type(data).__name__}")
    return data


def parse_ledger_config(data: dict[str, Any], base_dir: Path | None = None) -> LedgerConfig:
    """Build a ``LedgerConfig`` from a parsed mapping (``ledger:`` section or flat)."""
    section = data.get("ledger", data)
    if not isinstance(section, dict):
        raise ValueError("'ledger' section must be a mapping")

    unknown = set(section) - _KNOWN_KEYS
    if unknown:
        raise ValueError(f"Unknown ledger config keys: {sorted(unknown)}")

    kwargs: dict[str, Any] = dict(section)
    for key in _PATH_KEYS:
        if key in kwargs:
            path = Path(str(kwargs[key]))
            if base_dir is not None and not path.is_absolute():
                path = base_dir / path
            kwargs[key] = path
    for key in _INT_KEYS:
        if key in kwargs and (isinstance(kwargs[key], bool) or not isinstance(kwargs[key], int)):
            raise ValueError(f"{key} must be an integer, got {kwargs[key]!r}")
    if "company_name" in kwargs:
        kwargs["company_name"] = str(kwargs["company_name"])
    if "log_level" in kwargs:
        kwargs["log_level"] = str(kwargs["log_level"])

    return LedgerConfig(**kwargs)


def load_ledger_config(path: Path | str | None = None) -> LedgerConfig:
    """
    Load settings from ``path``, or return the defaults when ``path`` is None.
    """
    if path is None:
        return LedgerConfig()
    path = Path(path)
    return parse_ledger_config(load_yaml_file(path), base_dir=path.parent)
