"""Schema checks for inflation reports.

Reports are checked against the bundled JSON Schema before they reach
stdout. Errors are grouped by the package they belong to so the CLI can
name the offending archive.
"""

import json
from collections.abc import Sequence
from functools import lru_cache
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError, best_match

from .types import InflationReport

# Shipped inside the package: unitypackage_inflate/schemas/report.schema.json
SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "report.schema.json"


@lru_cache(maxsize=1)
def report_validator() -> Draft202012Validator:
    """Build the validator for the bundled schema, once per process."""
    with SCHEMA_PATH.open("r", encoding="utf-8") as f:
        schema: dict[str, Any] = json.load(f)
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def _owner(reports: Sequence[InflationReport], error: ValidationError) -> str:
    if not error.path:
        return "root"
    index = error.path[0]
    if isinstance(index, int) and index < len(reports):
        package = reports[index].get("package")
        if isinstance(package, str):
            return package
    return f"#{index}"


def collect_report_errors(reports: Sequence[InflationReport]) -> dict[str, list[str]]:
    """Return schema violations keyed by package path.

    Errors that cannot be tied to a report carrying a package path are
    keyed by "#<index>", or "root" for the list itself.
    """
    errors: dict[str, list[str]] = {}
    for error in report_validator().iter_errors(reports):
        location = ".".join(str(p) for p in list(error.path)[1:])
        message = f"{location}: {error.message}" if location else error.message
        errors.setdefault(_owner(reports, error), []).append(message)
    return errors


def validate_report(reports: Sequence[InflationReport]) -> None:
    """Validate a list of reports against the JSON Schema.

    Raises:
        ValidationError: The most relevant violation, if any
    """
    error = best_match(report_validator().iter_errors(reports))
    if error is not None:
        raise error
