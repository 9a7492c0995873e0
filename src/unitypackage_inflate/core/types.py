"""Type definitions for unitypackage inflation.

This module defines the partial asset records rebuilt from a package's tar
stream, the value objects that carry per-entry warnings and per-write
failures out of the reader and materializer, and TypedDict classes that
mirror the JSON schema in schemas/report.schema.json.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import TypedDict

# Data kinds: the second path component of a tar entry
KIND_PAYLOAD = "asset"
KIND_META = "asset.meta"
KIND_PATHNAME = "pathname"
KIND_PREVIEW = "preview.png"

DATA_KINDS = (KIND_PAYLOAD, KIND_META, KIND_PATHNAME, KIND_PREVIEW)


@dataclass
class AssetRecord:
    """One asset reassembled from the entries sharing an identifier.

    Every field except the identifier starts absent (None) and is filled in
    as matching entries stream in. A later entry of the same kind replaces
    the earlier value.

    Attributes:
        identifier: Opaque grouping key (first component of the entry name)
        logical_path: Relative destination path from the ``pathname`` entry
        payload: Raw bytes from the ``asset`` entry
        sidecar_metadata: Text from the ``asset.meta`` entry
        preview: Raw PNG bytes from the ``preview.png`` entry
    """

    identifier: str
    logical_path: str | None = None
    payload: bytes | None = None
    sidecar_metadata: str | None = None
    preview: bytes | None = None

    @property
    def routable(self) -> bool:
        """True once a ``pathname`` entry has been seen."""
        return self.logical_path is not None

    @property
    def has_content(self) -> bool:
        return (
            self.payload is not None
            or self.sidecar_metadata is not None
            or self.preview is not None
        )


@dataclass(frozen=True)
class EntryWarning:
    """A tar entry that was skipped without aborting the package."""

    entry: str  # Raw tar member name
    reason: str


@dataclass(frozen=True)
class WriteFailure:
    """An artifact that could not be written to the output directory."""

    identifier: str
    destination: str  # Logical destination, relative to the output root
    reason: str


@dataclass
class ReadResult:
    """Everything the reader recovered from one package."""

    assets: dict[str, AssetRecord] = field(default_factory=dict)
    warnings: list[EntryWarning] = field(default_factory=list)


@dataclass
class MaterializeResult:
    """Outcome of writing one package's assets to disk."""

    written: list[Path] = field(default_factory=list)
    failures: list[WriteFailure] = field(default_factory=list)
    skipped: int = 0  # Records without a logical path


@dataclass
class InflateResult:
    """Isolated per-package outcome handed back to the driver.

    Attributes:
        package: Path of the input package
        output_root: Directory the package inflates into
        asset_count: Number of distinct identifiers read
        skipped: Records dropped for lack of a logical path
        warnings: Entries skipped while reading
        written: Files written under output_root
        failures: Artifacts that could not be written
        error: Fatal error message, None if the package was read
    """

    package: Path
    output_root: Path
    asset_count: int = 0
    skipped: int = 0
    warnings: list[EntryWarning] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)
    failures: list[WriteFailure] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and not self.failures


class WarningEntry(TypedDict):
    """Skipped tar entry as rendered in the report."""

    entry: str
    reason: str


class FailureEntry(TypedDict):
    """Failed artifact write as rendered in the report."""

    identifier: str
    destination: str
    reason: str


class InflationReport(TypedDict):
    """JSON report for one inflated package."""

    package: str  # Path of the input package
    output_root: str  # Directory the package was inflated into
    status: str  # "ok" or "failed"
    asset_count: int  # Distinct identifiers found in the package
    skipped: int  # Records without a pathname entry, not written
    written: list[str]  # Files written, relative to output_root
    warnings: list[WarningEntry]
    failures: list[FailureEntry]
    error: str | None  # Fatal error message, if any
