"""
Payroll Kernel

An in-memory employee payroll ledger with:
- Category-specific pay rules (manager, developer, part-time, intern, contract)
- Flat 10% tax and derived net pay
- Leave ledger and performance history per employee
- Search, filtering, department statistics and rankings
"""

__version__ = "0.1.0"
