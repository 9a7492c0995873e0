"""Unitypackage Inflate.

This package extracts .unitypackage archives (gzip-compressed tar streams
of identifier-keyed asset records) into plain directory trees that
downstream tools can consume directly.
"""

# Core library interface
from .pipeline import inflate_package, inflate_package_safely, inflate_packages
from .reader import read_assets, read_package, split_entry_name
from .materializer import (
    derive_output_root,
    materialize,
    meta_path_for,
    package_stem,
    preview_path_for,
)

# Core utilities
from .core import AssetRecord, EntryWarning, InflateResult, ReadResult, WriteFailure
from .core import build_report, collect_report_errors, validate_report
from .config import InflateConfig, configure, get_config
from .errors import InflateError, InvalidPackageError, PackageReadError

# CLI interface
from .cli import main

__version__ = "0.1.0"

__all__ = [
    # Primary library interface
    "inflate_package",
    "inflate_package_safely",
    "inflate_packages",
    "read_assets",
    "read_package",
    "split_entry_name",
    "derive_output_root",
    "materialize",
    "meta_path_for",
    "package_stem",
    "preview_path_for",
    # Core utilities
    "AssetRecord",
    "EntryWarning",
    "InflateResult",
    "ReadResult",
    "WriteFailure",
    "build_report",
    "collect_report_errors",
    "validate_report",
    # Configuration and errors
    "InflateConfig",
    "configure",
    "get_config",
    "InflateError",
    "InvalidPackageError",
    "PackageReadError",
    "main",
]
