"""Archive reader for .unitypackage files.

A package is a gzip-compressed tar stream in which every entry lives under
a directory named after an opaque identifier:

    <identifier>/asset         raw payload bytes
    <identifier>/asset.meta    sidecar metadata (text)
    <identifier>/pathname      destination path of the payload (text)
    <identifier>/preview.png   thumbnail image bytes

Entries belonging to one identifier may appear anywhere in the stream, so
the reader only groups them into AssetRecord objects. Nothing is written
to disk here, and nothing is printed: skipped entries are returned as
EntryWarning values for the caller to report.
"""

import gzip
import tarfile
import zlib
from pathlib import Path, PurePosixPath
from typing import BinaryIO

from .core.types import (
    DATA_KINDS,
    KIND_META,
    KIND_PATHNAME,
    KIND_PAYLOAD,
    AssetRecord,
    EntryWarning,
    ReadResult,
)
from .errors import PackageReadError

# Errors that mean the compressed stream or tar framing is broken
STREAM_ERRORS = (OSError, EOFError, tarfile.TarError, zlib.error)

# Errors confined to a single member; the stream itself is still readable
ENTRY_ERRORS = (tarfile.ExtractError,)


def split_entry_name(name: str) -> tuple[str, str | None]:
    """Split a tar member name into (identifier, data kind).

    Example:
        "0b5f.../pathname" -> ("0b5f...", "pathname")
        "0b5f.../"         -> ("0b5f...", None)

    Args:
        name: Member name as stored in the tar header

    Returns:
        The identifier and the data kind, or None when the member is the
        identifier's own directory entry

    Raises:
        ValueError: If the first component is not a plain name
    """
    parts = PurePosixPath(name).parts
    if not parts or parts[0] in ("/", ".."):
        raise ValueError(f"Invalid identifier in entry path: {name!r}")

    identifier = parts[0]
    data_kind = parts[1] if len(parts) > 1 else None
    return identifier, data_kind


def decode_pathname(raw: bytes) -> str:
    """Decode a ``pathname`` entry into a logical path.

    Some Unity versions append a newline and a ``00`` line after the path;
    only the first line is the path.

    Raises:
        UnicodeDecodeError: If the entry is not valid UTF-8
    """
    text = raw.decode("utf-8")
    return text.split("\n", 1)[0].rstrip("\r")


def read_assets(stream: BinaryIO) -> ReadResult:
    """Group the entries of a gzip-compressed tar stream by identifier.

    The stream is consumed sequentially and never seeked, so pipes and
    other non-seekable sources work.

    Args:
        stream: Readable binary stream positioned at the gzip header

    Returns:
        ReadResult mapping identifiers to their AssetRecord, plus a warning
        for every entry that was skipped

    Raises:
        tarfile.TarError, OSError, EOFError, zlib.error: If the stream cannot
            be decompressed or its tar structure cannot be read
    """
    result = ReadResult()

    # Decompressing outside tarfile makes a truncated stream raise EOFError
    with gzip.GzipFile(fileobj=stream, mode="rb") as gz, tarfile.open(
        fileobj=gz, mode="r|", encoding="utf-8"
    ) as archive:
        for member in archive:
            name = member.name

            try:
                name.encode("utf-8")
            except UnicodeEncodeError:
                result.warnings.append(
                    EntryWarning(name, "Entry path is not valid UTF-8")
                )
                continue

            try:
                identifier, data_kind = split_entry_name(name)
            except ValueError as e:
                result.warnings.append(EntryWarning(name, str(e)))
                continue

            # Directory entry for the identifier itself
            if data_kind is None:
                continue

            if data_kind not in DATA_KINDS:
                result.warnings.append(
                    EntryWarning(name, f"Unknown data type '{data_kind}'")
                )
                continue

            if not member.isfile():
                result.warnings.append(EntryWarning(name, "Entry is not a regular file"))
                continue

            try:
                content = _read_member(archive, member)
                text = None
                if data_kind == KIND_META:
                    text = content.decode("utf-8")
                elif data_kind == KIND_PATHNAME:
                    text = decode_pathname(content)
            except UnicodeDecodeError as e:
                result.warnings.append(EntryWarning(name, f"Entry is not valid UTF-8 text: {e}"))
                continue
            except ENTRY_ERRORS as e:
                result.warnings.append(EntryWarning(name, f"Failed to read entry: {e}"))
                continue

            record = result.assets.get(identifier)
            if record is None:
                record = AssetRecord(identifier=identifier)
                result.assets[identifier] = record

            # Last write wins for repeated (identifier, data kind) pairs
            if data_kind == KIND_PAYLOAD:
                record.payload = content
            elif data_kind == KIND_META:
                record.sidecar_metadata = text
            elif data_kind == KIND_PATHNAME:
                record.logical_path = text
            else:
                record.preview = content

    return result


def read_package(path: Path) -> ReadResult:
    """Read every asset record from a package file.

    Args:
        path: Path to the .unitypackage file

    Returns:
        ReadResult for the package

    Raises:
        PackageReadError: If the file cannot be opened, decompressed or
            parsed as a tar archive
    """
    try:
        with path.open("rb") as stream:
            return read_assets(stream)
    except STREAM_ERRORS as e:
        raise PackageReadError(path, f"{type(e).__name__}: {e}") from e


def _read_member(archive: tarfile.TarFile, member: tarfile.TarInfo) -> bytes:
    """Read the full content of the current member of a streaming archive."""
    fileobj = archive.extractfile(member)
    if fileobj is None:
        raise tarfile.ExtractError(f"No data for entry {member.name!r}")
    with fileobj:
        return fileobj.read()
