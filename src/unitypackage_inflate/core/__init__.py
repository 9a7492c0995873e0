"""Core types and reporting utilities.

This package contains the asset record model shared by the reader and
the materializer, report rendering, and JSON schema validation.
"""

from .report import build_report
from .types import (
    AssetRecord,
    EntryWarning,
    InflateResult,
    InflationReport,
    MaterializeResult,
    ReadResult,
    WriteFailure,
)
from .validator import collect_report_errors, validate_report

__all__ = [
    "AssetRecord",
    "EntryWarning",
    "InflateResult",
    "InflationReport",
    "MaterializeResult",
    "ReadResult",
    "WriteFailure",
    "build_report",
    "collect_report_errors",
    "validate_report",
]
