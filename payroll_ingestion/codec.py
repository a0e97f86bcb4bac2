"""
Employee flat-file codec (``payroll_ingestion.codec``).

Responsibility
--------------
Decodes the line-oriented employee file into ``EmployeeRecord`` values,
encodes records back into the same grammar, and writes the fixed sample
file when the source does not exist.

Record grammar (``|`` fields may contain spaces, the others may not)::

    MANAGER   <id> <age> <exp> |<name>|<address>|<dept>|<joined>| <salary> <teamSize>
    DEVELOPER <id> <age> <exp> |<name>|<address>|<dept>|<joined>|<language>| <salary> <projects>
    PARTTIME  <id> <age> <exp> |<name>|<address>|<dept>|<joined>| <rate> <hours>
    INTERN    <id> <age>       |<name>|<address>|<dept>|<joined>|<university>|<mentor>| <hours>
    CONTRACT  <id> <age> <exp> |<name>|<address>|<dept>|<joined>|<endDate>| <amount> <0|1>

Architecture position
---------------------
**Ingestion** -- file I/O plus pure line decoding. Depends on the kernel
domain; nothing in the kernel depends on it.

Invariants enforced
-------------------
* A line is split at its first and last ``|``: whitespace tokens before,
  verbatim text fields between, whitespace tokens after. Each part must
  have exactly the count its keyword declares.
* Lines that are blank, ``#`` comments, or start with an unknown token are
  skipped without an error.
* A malformed keyword line never stops the load; it becomes a rejected
  ``ParsedLine``.

Failure modes
-------------
* ``SourceUnreadableError`` -- source exists but cannot be read as UTF-8.
* ``DestinationUnwritableError`` -- the sample file cannot be written.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any

from payroll_kernel.domain.dtos import ValidationError
from payroll_kernel.domain.employee import (
    ContractTerms,
    DeveloperTerms,
    EmployeeCategory,
    EmployeeRecord,
    EmployeeTerms,
    HourlyTerms,
    InternTerms,
    ManagerTerms,
)
from payroll_kernel.exceptions import (
    DestinationUnwritableError,
    MalformedRecordError,
    SourceUnreadableError,
)
from payroll_kernel.logging_config import LogContext, get_logger
from payroll_ingestion.domain.types import LineStatus, LoadManifest, LoadResult, ParsedLine

logger = get_logger("ingestion.codec")

FIELD_SEPARATOR = "|"
COMMENT_PREFIX = "#"
DEFAULT_MAX_REPORTED_ERRORS = 10

SAMPLE_LINES: tuple[str, ...] = (
    "# Employee Data File",
    "MANAGER M001 35 10 |Alice Johnson|123 Main St|Engineering|2020-01-15| 8000 5",
    "DEVELOPER D001 28 5 |Bob Smith|456 Oak Ave|Engineering|2021-06-01|C++| 6000 2",
    "PARTTIME P001 45 15 |David Brown|321 Elm St|Support|2022-01-01| 25.0 80",
    "INTERN I001 22 |Emma Davis|654 Maple Dr|Engineering|2024-09-01|Tech University|Bob Smith| 120",
    "CONTRACT C001 40 8 |Frank Miller|987 Cedar Ln|Marketing|2024-01-01|2024-12-31| 15000 1",
)
SAMPLE_FILE_CONTENT = "\n".join(SAMPLE_LINES) + "\n"

_INTEGER = re.compile(r"[+-]?\d+")
_DECIMAL = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)")

_INTEGER_FIELDS = frozenset(
    {"age", "experience_years", "team_size", "projects_completed", "hours_worked"}
)
_MONEY_FIELDS = frozenset({"monthly_salary", "hourly_rate", "contract_amount"})
_FLAG_FIELDS = frozenset({"is_completed"})

_BASE_TEXT = ("name", "address", "department", "join_date")


@dataclass(frozen=True)
class RecordLayout:
    """Field names of the three parts of one record type's line."""

    prefix: tuple[str, ...]
    text: tuple[str, ...]
    suffix: tuple[str, ...]


RECORD_LAYOUTS: dict[EmployeeCategory, RecordLayout] = {
    EmployeeCategory.MANAGER: RecordLayout(
        prefix=("employee_id", "age", "experience_years"),
        text=_BASE_TEXT,
        suffix=("monthly_salary", "team_size"),
    ),
    EmployeeCategory.DEVELOPER: RecordLayout(
        prefix=("employee_id", "age", "experience_years"),
        text=_BASE_TEXT + ("language",),
        suffix=("monthly_salary", "projects_completed"),
    ),
    EmployeeCategory.PART_TIME: RecordLayout(
        prefix=("employee_id", "age", "experience_years"),
        text=_BASE_TEXT,
        suffix=("hourly_rate", "hours_worked"),
    ),
    EmployeeCategory.INTERN: RecordLayout(
        prefix=("employee_id", "age"),
        text=_BASE_TEXT + ("university", "mentor"),
        suffix=("hours_worked",),
    ),
    EmployeeCategory.CONTRACT: RecordLayout(
        prefix=("employee_id", "age", "experience_years"),
        text=_BASE_TEXT + ("contract_end_date",),
        suffix=("contract_amount", "is_completed"),
    ),
}

_KEYWORDS: dict[str, EmployeeCategory] = {c.value: c for c in EmployeeCategory}


# -----------------------------------------------------------------------------
# Field conversion
# -----------------------------------------------------------------------------


def _convert(keyword: str, name: str, token: str) -> Any:
    if name in _INTEGER_FIELDS:
        if not _INTEGER.fullmatch(token):
            raise MalformedRecordError(keyword, f"{name} is not an integer: {token!r}", field=name)
        try:
            return int(token)
        except ValueError as exc:
            # int() refuses strings past sys.get_int_max_str_digits()
            raise MalformedRecordError(keyword, f"{name}: {exc}", field=name) from exc
    if name in _MONEY_FIELDS:
        if not _DECIMAL.fullmatch(token):
            raise MalformedRecordError(keyword, f"{name} is not a number: {token!r}", field=name)
        try:
            return Decimal(token)
        except (ValueError, ArithmeticError) as exc:
            raise MalformedRecordError(keyword, f"{name}: {exc}", field=name) from exc
    if name in _FLAG_FIELDS:
        if token not in ("0", "1"):
            raise MalformedRecordError(keyword, f"{name} must be 0 or 1: {token!r}", field=name)
        return token == "1"
    return token


def _split_line(keyword: str, line: str, layout: RecordLayout) -> dict[str, Any]:
    head, sep, rest = line.partition(FIELD_SEPARATOR)
    if not sep:
        raise MalformedRecordError(keyword, "missing '|' delimited fields")
    body, sep, tail = rest.rpartition(FIELD_SEPARATOR)
    if not sep:
        raise MalformedRecordError(keyword, "missing closing '|'")

    prefix = head.split()[1:]
    text = body.split(FIELD_SEPARATOR)
    suffix = tail.split()

    for part, names, tokens in (
        ("prefix", layout.prefix, prefix),
        ("text", layout.text, text),
        ("suffix", layout.suffix, suffix),
    ):
        if len(tokens) != len(names):
            raise MalformedRecordError(
                keyword,
                f"expected {len(names)} {part} field(s) {list(names)}, got {len(tokens)}",
            )

    values: dict[str, Any] = {}
    for names, tokens in ((layout.prefix, prefix), (layout.text, text), (layout.suffix, suffix)):
        for name, token in zip(names, tokens):
            values[name] = _convert(keyword, name, token)
    return values


def _build_terms(category: EmployeeCategory, v: dict[str, Any]) -> EmployeeTerms:
    match category:
        case EmployeeCategory.MANAGER:
            return ManagerTerms(monthly_salary=v["monthly_salary"], team_size=v["team_size"])
        case EmployeeCategory.DEVELOPER:
            return DeveloperTerms(
                monthly_salary=v["monthly_salary"],
                language=v["language"],
                projects_completed=v["projects_completed"],
            )
        case EmployeeCategory.PART_TIME:
            return HourlyTerms(hourly_rate=v["hourly_rate"], hours_worked=v["hours_worked"])
        case EmployeeCategory.INTERN:
            return InternTerms(
                university=v["university"], mentor=v["mentor"], hours_worked=v["hours_worked"]
            )
        case EmployeeCategory.CONTRACT:
            return ContractTerms(
                contract_amount=v["contract_amount"],
                contract_end_date=v["contract_end_date"],
                is_completed=v["is_completed"],
            )


# -----------------------------------------------------------------------------
# Codec
# -----------------------------------------------------------------------------


class PayrollFormatCodec:
    """Reads and writes the employee flat-file format."""

    def __init__(self, max_reported_errors: int = DEFAULT_MAX_REPORTED_ERRORS):
        self.max_reported_errors = max_reported_errors

    # --- decoding -------------------------------------------------------------

    def decode_record(self, line: str) -> EmployeeRecord | None:
        """
        Decode one line into a record.

        Returns None for blank, comment and non-keyword lines.
        Raises MalformedRecordError for keyword lines that do not fit.
        """
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIX):
            return None
        keyword = stripped.split(maxsplit=1)[0]
        category = _KEYWORDS.get(keyword)
        if category is None:
            return None

        values = _split_line(keyword, stripped, RECORD_LAYOUTS[category])
        return EmployeeRecord(
            employee_id=values["employee_id"],
            name=values["name"],
            age=values["age"],
            address=values["address"],
            department=values["department"],
            join_date=values["join_date"],
            experience_years=values.get("experience_years", 0),
            terms=_build_terms(category, values),
        )

    def decode_line(self, line: str, line_number: int) -> ParsedLine:
        """Decode one line into a per-line result; never raises for bad content."""
        try:
            record = self.decode_record(line)
        except MalformedRecordError as exc:
            exc.line_number = line_number
            return ParsedLine(
                line_number=line_number,
                status=LineStatus.REJECTED,
                error=ValidationError(
                    code=exc.code,
                    message=exc.reason,
                    field=exc.field,
                    details={"line_number": line_number, "record_type": exc.record_type},
                ),
            )
        if record is None:
            return ParsedLine(line_number=line_number, status=LineStatus.SKIPPED)
        return ParsedLine(line_number=line_number, status=LineStatus.PARSED, record=record)

    def decode_lines(self, lines: Iterable[str]) -> Iterator[ParsedLine]:
        for line_number, line in enumerate(lines, start=1):
            yield self.decode_line(line.rstrip("\r\n"), line_number)

    def read(self, source_path: Path) -> Iterator[ParsedLine]:
        """Stream per-line results from an existing file."""
        try:
            with source_path.open("r", encoding="utf-8-sig") as f:
                yield from self.decode_lines(f)
        except FileNotFoundError:
            raise
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceUnreadableError(source_path, str(exc)) from exc

    def load(self, source_path: Path | str) -> LoadResult:
        """
        Decode the whole file, writing the sample file first if it is absent.

        Postconditions:
            - ``manifest.loaded == len(records)``.
            - At most ``max_reported_errors`` errors are kept in the manifest;
              ``manifest.rejected`` counts all of them.
        """
        source_path = Path(source_path)
        with LogContext.bind(source_file=str(source_path), operation="load"):
            bootstrapped = False
            if not source_path.exists():
                logger.warning("employee_file_missing", extra={"path": str(source_path)})
                self.write_sample(source_path)
                bootstrapped = True

            records: list[EmployeeRecord] = []
            errors: list[ValidationError] = []
            rejected = skipped = 0
            for parsed in self.read(source_path):
                if parsed.status == LineStatus.PARSED:
                    records.append(parsed.record)
                elif parsed.status == LineStatus.SKIPPED:
                    skipped += 1
                else:
                    rejected += 1
                    logger.warning(
                        "record_line_rejected",
                        extra={
                            "line_number": parsed.line_number,
                            "reason": parsed.error.message,
                            "error_code": parsed.error.code,
                        },
                    )
                    if len(errors) < self.max_reported_errors:
                        errors.append(parsed.error)

            manifest = LoadManifest(
                source=str(source_path),
                loaded=len(records),
                rejected=rejected,
                skipped=skipped,
                errors=tuple(errors),
                bootstrapped=bootstrapped,
            )
            logger.info(
                "employee_file_loaded",
                extra={
                    "loaded": manifest.loaded,
                    "rejected": manifest.rejected,
                    "skipped": manifest.skipped,
                    "bootstrapped": bootstrapped,
                },
            )
            return LoadResult(records=tuple(records), manifest=manifest)

    # --- encoding -------------------------------------------------------------

    def encode_record(self, employee: EmployeeRecord) -> str:
        """Render a record as one line of the flat-file grammar."""
        layout = RECORD_LAYOUTS[employee.category]
        values = self._field_values(employee)
        prefix = " ".join(values[name] for name in layout.prefix)
        text = FIELD_SEPARATOR.join(values[name] for name in layout.text)
        suffix = " ".join(values[name] for name in layout.suffix)
        return (
            f"{employee.category.value} {prefix} "
            f"{FIELD_SEPARATOR}{text}{FIELD_SEPARATOR} {suffix}"
        )

    def encode_records(self, employees: Iterable[EmployeeRecord]) -> str:
        return "".join(self.encode_record(e) + "\n" for e in employees)

    @staticmethod
    def _field_values(employee: EmployeeRecord) -> dict[str, str]:
        values = {
            "employee_id": employee.employee_id,
            "age": str(employee.age),
            "experience_years": str(employee.experience_years),
            "name": employee.name,
            "address": employee.address,
            "department": employee.department,
            "join_date": employee.join_date,
        }
        for name, value in vars(employee.terms).items():
            if isinstance(value, bool):
                values[name] = "1" if value else "0"
            else:
                values[name] = str(value)
        return values

    # --- sample bootstrap -----------------------------------------------------

    def write_sample(self, target_path: Path | str) -> Path:
        """Write the fixed five-record sample file to ``target_path``."""
        target_path = Path(target_path)
        try:
            target_path.write_text(SAMPLE_FILE_CONTENT, encoding="utf-8")
        except OSError as exc:
            logger.error(
                "sample_file_unwritable",
                extra={"path": str(target_path), "reason": str(exc)},
            )
            raise DestinationUnwritableError(target_path, str(exc)) from exc
        logger.info("sample_file_created", extra={"path": str(target_path)})
        return target_path
