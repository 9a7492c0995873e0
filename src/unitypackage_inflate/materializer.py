"""Asset materialization onto the filesystem.

Each routable AssetRecord produces up to three files under the output root:

    <logical_path>                      payload bytes
    <logical_path>.meta                 sidecar metadata text
    <dir>/<stem>_preview_image.png      preview bytes

Write errors are collected per artifact; one failed write never prevents
the remaining writes.
"""

from collections.abc import Mapping
from pathlib import Path, PurePosixPath

from .core.types import AssetRecord, MaterializeResult, WriteFailure

PACKAGE_EXTENSION = ".unitypackage"

PREVIEW_SUFFIX = "_preview_image.png"


def package_stem(name: str, extension: str = PACKAGE_EXTENSION) -> str | None:
    """Return a package file name without its extension.

    Example:
        "Props.unitypackage" -> "Props"
        ".unitypackage"      -> None
        "Props.zip"          -> None

    Returns:
        The base name, or None when name lacks the extension or nothing
        is left once it is removed
    """
    if not extension or not name.endswith(extension):
        return None
    return name[: -len(extension)] or None


def derive_output_root(package_path: Path, extension: str = PACKAGE_EXTENSION) -> Path:
    """Return the directory a package inflates into.

    Example:
        "downloads/Props.unitypackage" -> "downloads/Props"

    Paths that are not packages keep their last suffix stripped, and paths
    without a usable name (".", "/", ".unitypackage") come back unchanged,
    so error results can always name a directory.

    Args:
        package_path: Path to the package file
        extension: Package extension to strip

    Returns:
        Sibling directory with the same base name and no extension
    """
    stem = package_stem(package_path.name, extension)
    if stem is not None:
        return package_path.with_name(stem)
    if package_path.suffix and package_path.stem:
        return package_path.with_suffix("")
    return package_path


def meta_path_for(logical_path: PurePosixPath | str) -> PurePosixPath:
    """Destination of the sidecar metadata: ``.meta`` appended to the full name.

    Example:
        "foo/bar.png" -> "foo/bar.png.meta"
        "foo/README"  -> "foo/README.meta"
    """
    path = PurePosixPath(logical_path)
    return path.with_name(path.name + ".meta")


def preview_path_for(logical_path: PurePosixPath | str) -> PurePosixPath:
    """Destination of the preview image, next to the payload.

    Example:
        "foo/bar.png" -> "foo/bar_preview_image.png"
    """
    path = PurePosixPath(logical_path)
    return path.with_name(f"{path.stem}{PREVIEW_SUFFIX}")


def resolve_route(logical_path: str, output_root: Path) -> PurePosixPath:
    """Check a pathname entry and return it as a relative POSIX path.

    Symlinks already present under output_root are followed, so a route
    through a link pointing elsewhere is rejected as well.

    Raises:
        ValueError: If the path is empty, absolute, has no file name, or
            lands outside output_root once resolved
    """
    if not logical_path.strip():
        raise ValueError("Empty logical path")

    route = PurePosixPath(logical_path)
    if route.is_absolute():
        raise ValueError(f"Logical path {logical_path!r} is absolute")
    if not route.name:
        raise ValueError(f"Logical path {logical_path!r} has no file name")

    root = output_root.resolve()
    if not root.joinpath(*route.parts).resolve().is_relative_to(root):
        raise ValueError(f"Logical path {logical_path!r} escapes {output_root}")
    return route


def write_artifact(destination: Path, content: bytes | str) -> None:
    """Write content to a file, creating parent directories first.

    Text is written as UTF-8 without newline translation so metadata stays
    byte-identical to the archived entry.

    Raises:
        OSError: If a directory or the file cannot be created or written
    """
    destination.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, str):
        destination.write_text(content, encoding="utf-8", newline="")
    else:
        destination.write_bytes(content)


def materialize(assets: Mapping[str, AssetRecord], output_root: Path) -> MaterializeResult:
    """Write every routable asset under output_root.

    Records are processed in identifier order. Records without a logical
    path are skipped silently. When several identifiers share a logical
    path, the lowest identifier is written and every later one is reported
    as a failure instead.

    Args:
        assets: Identifier to AssetRecord mapping from the reader
        output_root: Directory to write into (created on demand)

    Returns:
        MaterializeResult listing written files and failed writes
    """
    result = MaterializeResult()
    claimed: dict[str, str] = {}

    for identifier in sorted(assets):
        record = assets[identifier]

        if not record.routable:
            result.skipped += 1
            continue

        # A bare pathname with nothing to write is legal
        if not record.has_content:
            continue

        try:
            route = resolve_route(record.logical_path, output_root)
        except ValueError as e:
            result.failures.append(WriteFailure(identifier, record.logical_path, str(e)))
            continue

        owner = claimed.setdefault(route.as_posix(), identifier)
        if owner != identifier:
            result.failures.append(
                WriteFailure(
                    identifier,
                    route.as_posix(),
                    f"Duplicate logical path, already written for {owner}",
                )
            )
            continue

        artifacts: list[tuple[PurePosixPath, bytes | str]] = []
        if record.payload is not None:
            artifacts.append((route, record.payload))
        if record.sidecar_metadata is not None:
            artifacts.append((meta_path_for(route), record.sidecar_metadata))
        if record.preview is not None:
            artifacts.append((preview_path_for(route), record.preview))

        for relative, content in artifacts:
            destination = output_root.joinpath(*relative.parts)
            try:
                write_artifact(destination, content)
            except OSError as e:
                result.failures.append(
                    WriteFailure(identifier, relative.as_posix(), f"{type(e).__name__}: {e}")
                )
                continue
            result.written.append(destination)

    return result
