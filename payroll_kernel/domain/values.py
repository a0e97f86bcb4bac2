"""
Values -- money helpers and payroll constants.

Responsibility:
    The single place where money enters the system (``to_decimal``) and where
    it is rounded for presentation (``round_money``), plus the fixed rates
    the pay rules share.

Architecture position:
    Kernel > Domain -- pure functions, zero I/O. Imported by the employee
    model, the codec and the export report.

Invariants enforced:
    - Money is always ``Decimal``; floats are converted through ``str`` so
      ``25.0`` becomes ``Decimal("25.0")`` and never a binary approximation.
    - Non-finite amounts (NaN, Infinity) are rejected.
    - Arithmetic stays exact; rounding happens only when a value is shown.

Failure modes:
    - ValueError on a value that is not a finite number.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

MONEY_DECIMAL_PLACES = 2
DEFAULT_ROUNDING = ROUND_HALF_UP

TAX_RATE = Decimal("0.10")
TEAM_BONUS_PER_MEMBER = Decimal("500")
PROJECT_BONUS = Decimal("200")
INTERN_HOURLY_RATE = Decimal("15.00")
CONTRACT_IN_PROGRESS_SHARE = Decimal("0.5")
STANDARD_MONTHLY_HOURS = 160
INITIAL_LEAVE_BALANCE = 20

ZERO = Decimal("0")


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """
    Convert a caller-supplied amount or percentage to ``Decimal``.

    Preconditions: value is a Decimal, int, float, or numeric string.
    Postconditions: Returns a finite Decimal, not rounded.

    Raises:
        ValueError: If value is not a finite number.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as e:
            raise ValueError(f"Invalid amount: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Amount must be finite: {value!r}")
    return amount


def round_money(
    value: Decimal,
    decimal_places: int = MONEY_DECIMAL_PLACES,
    rounding: str = DEFAULT_ROUNDING,
) -> Decimal:
    """
    Round a monetary value to ``decimal_places`` for presentation.

    Postconditions: Returns value quantized with the given rounding mode.
    """
    quantizer = Decimal(1).scaleb(-decimal_places)
    return value.quantize(quantizer, rounding=rounding)


def format_money(value: Decimal) -> str:
    """Render an amount as a two-decimal fixed-point string."""
    return f"{round_money(value):.2f}"
