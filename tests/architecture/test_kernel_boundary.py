"""
Kernel boundary.

payroll_kernel/** may NOT import payroll_ingestion, payroll_config or
payroll_services. The kernel never depends upward; the codec, the report
and configuration are composed with it only in payroll_services.

These tests read source code via AST and import nothing.
"""

import ast
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _python_files(package: str) -> list[Path]:
    return sorted((PROJECT_ROOT / package).rglob("*.py"))


def _extract_imports(filepath: Path) -> list[tuple[int, str]]:
    """Extract (line_number, module_string) for all imports in a file."""
    tree = ast.parse(filepath.read_text(encoding="utf-8"), filename=str(filepath))
    results: list[tuple[int, str]] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                results.append((node.lineno, alias.name))
        elif isinstance(node, ast.ImportFrom):
            if node.module:
                results.append((node.lineno, node.module))
    return results


def _violations(package: str, forbidden: tuple[str, ...]) -> list[str]:
    found: list[str] = []
    for filepath in _python_files(package):
        for lineno, module in _extract_imports(filepath):
            for prefix in forbidden:
                if module == prefix or module.startswith(f"{prefix}."):
                    found.append(
                        f"  {filepath.relative_to(PROJECT_ROOT)}:{lineno} imports '{module}'"
                    )
    return found


class TestKernelNoUpwardDependencies:
    FORBIDDEN_PREFIXES = (
        "payroll_ingestion",
        "payroll_config",
        "payroll_services",
    )

    def test_kernel_has_source_files(self):
        assert _python_files("payroll_kernel")

    def test_kernel_does_not_import_forbidden_packages(self):
        violations = _violations("payroll_kernel", self.FORBIDDEN_PREFIXES)
        assert not violations, (
            "Kernel boundary violation: payroll_kernel/** must not import "
            "upward packages:\n" + "\n".join(violations)
        )


class TestLowerLayersDoNotImportServices:
    def test_ingestion_does_not_import_services(self):
        violations = _violations("payroll_ingestion", ("payroll_services",))
        assert not violations, "\n".join(violations)

    def test_config_does_not_import_services_or_kernel(self):
        violations = _violations("payroll_config", ("payroll_services", "payroll_kernel"))
        assert not violations, "\n".join(violations)
