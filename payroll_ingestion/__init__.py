"""
payroll_ingestion -- Employee flat-file reading, sample bootstrap and report export.

Architecture:
    payroll_ingestion/ is a top-level package. It depends on the kernel
    domain; the kernel domain does not import from ingestion.
"""
