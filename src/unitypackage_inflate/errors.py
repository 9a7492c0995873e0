"""Exceptions raised for package-level (fatal) failures.

Entry-level and write-level problems are not exceptions; they are returned
as EntryWarning and WriteFailure values so one bad entry never aborts the
rest of a package.
"""

from pathlib import Path


class InflateError(Exception):
    """Base class for errors that abort inflation of a single package."""

    def __init__(self, package: Path | str, message: str):
        self.package = Path(package)
        self.message = message
        super().__init__(message)


class InvalidPackageError(InflateError):
    """The input path does not carry the recognized package extension."""


class PackageReadError(InflateError):
    """The package file, its gzip stream, or its tar structure is unreadable."""
