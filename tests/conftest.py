"""
Pytest fixtures for the payroll ledger test suite.

Provides:
- Structured logging setup and JSON log capture
- Employee record builders for every category
- A populated ledger and service over the sample employee file
"""

import json
import logging
from decimal import Decimal
from io import StringIO
from pathlib import Path

import pytest

from payroll_ingestion.codec import SAMPLE_FILE_CONTENT
from payroll_kernel.domain.employee import (
    ContractTerms,
    DeveloperTerms,
    EmployeeRecord,
    HourlyTerms,
    InternTerms,
    ManagerTerms,
)
from payroll_kernel.ledger import PayrollLedger
from payroll_kernel.logging_config import (
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from payroll_services.payroll_service import PayrollService
from payroll_config import LedgerConfig


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture
def captured_logs():
    """
    Capture payroll_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, manager):
            manager.give_raise(10)
            logs = captured_logs()
            assert any(r["message"] == "raise_applied" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("payroll_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Employee builders
# =============================================================================


def make_employee(
    terms,
    employee_id: str = "E001",
    name: str = "Test Employee",
    department: str = "Engineering",
    experience_years: int = 3,
    age: int = 30,
) -> EmployeeRecord:
    return EmployeeRecord(
        employee_id=employee_id,
        name=name,
        age=age,
        address="1 Test St",
        department=department,
        join_date="2023-01-01",
        experience_years=experience_years,
        terms=terms,
    )


@pytest.fixture
def employee_factory():
    """Build an ``EmployeeRecord`` around the given terms."""
    return make_employee


@pytest.fixture
def manager() -> EmployeeRecord:
    """Manager earning 8000 with a team of 5 (gross 10500)."""
    return make_employee(
        ManagerTerms(monthly_salary=Decimal("8000"), team_size=5),
        employee_id="M001",
        name="Alice Johnson",
        experience_years=10,
    )


@pytest.fixture
def developer() -> EmployeeRecord:
    """Developer earning 6000 with 2 projects (gross 6400)."""
    return make_employee(
        DeveloperTerms(monthly_salary=Decimal("6000"), language="C++", projects_completed=2),
        employee_id="D001",
        name="Bob Smith",
        experience_years=5,
    )


@pytest.fixture
def part_timer() -> EmployeeRecord:
    """Part-timer at 25.0 for 80 hours (gross 2000)."""
    return make_employee(
        HourlyTerms(hourly_rate=Decimal("25.0"), hours_worked=80),
        employee_id="P001",
        name="David Brown",
        department="Support",
        experience_years=15,
    )


@pytest.fixture
def intern() -> EmployeeRecord:
    """Intern for 120 hours at the fixed rate (gross 1800)."""
    return make_employee(
        InternTerms(university="Tech University", mentor="Bob Smith", hours_worked=120),
        employee_id="I001",
        name="Emma Davis",
        experience_years=4,
    )


@pytest.fixture
def contractor() -> EmployeeRecord:
    """Completed contract of 15000 (gross 15000)."""
    return make_employee(
        ContractTerms(
            contract_amount=Decimal("15000"),
            contract_end_date="2024-12-31",
            is_completed=True,
        ),
        employee_id="C001",
        name="Frank Miller",
        department="Marketing",
        experience_years=8,
    )


@pytest.fixture
def ledger(manager, developer, part_timer, intern, contractor) -> PayrollLedger:
    return PayrollLedger([manager, developer, part_timer, intern, contractor])


# =============================================================================
# Files and service
# =============================================================================


@pytest.fixture
def sample_file(tmp_path) -> Path:
    path = tmp_path / "employees.txt"
    path.write_text(SAMPLE_FILE_CONTENT, encoding="utf-8")
    return path


@pytest.fixture
def service(tmp_path) -> PayrollService:
    config = LedgerConfig(
        data_file=tmp_path / "employees.txt",
        export_file=tmp_path / "report.txt",
    )
    return PayrollService(config=config)


@pytest.fixture
def loaded_service(service, sample_file) -> PayrollService:
    result = service.load(sample_file)
    assert result.is_success
    return service
