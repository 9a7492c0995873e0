"""Conversion of inflation results into JSON reports."""

from .types import FailureEntry, InflateResult, InflationReport, WarningEntry


def build_report(result: InflateResult) -> InflationReport:
    """Render an InflateResult as a report conforming to the JSON schema.

    Args:
        result: Outcome of inflating one package

    Returns:
        Report dictionary; written paths are relative to the output root
    """
    written = sorted(
        path.relative_to(result.output_root).as_posix()
        if path.is_relative_to(result.output_root)
        else path.as_posix()
        for path in result.written
    )

    warnings = [
        WarningEntry(entry=warning.entry, reason=warning.reason)
        for warning in result.warnings
    ]

    failures = [
        FailureEntry(
            identifier=failure.identifier,
            destination=failure.destination,
            reason=failure.reason,
        )
        for failure in result.failures
    ]

    report: InflationReport = {
        'package': str(result.package),
        'output_root': str(result.output_root),
        'status': 'ok' if result.ok else 'failed',
        'asset_count': result.asset_count,
        'skipped': result.skipped,
        'written': written,
        'warnings': warnings,
        'failures': failures,
        'error': result.error,
    }

    return report
