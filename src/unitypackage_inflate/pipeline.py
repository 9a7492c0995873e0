"""Inflation pipeline for .unitypackage files.

This module wires the reader and the materializer together for one
package, and fans several packages out over a process pool. Each package
is handled by an independent task whose InflateResult is the only thing
shared with the caller.
"""

from collections.abc import Sequence
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path

from .config import InflateConfig, get_config
from .core.types import InflateResult
from .errors import InflateError, InvalidPackageError
from .materializer import derive_output_root, materialize, package_stem
from .reader import read_package


def inflate_package(path: Path | str, config: InflateConfig | None = None) -> InflateResult:
    """Inflate a single package next to itself.

    The whole tar stream is read before anything is written, since the
    pathname entry routing an asset can come after its content.

    Args:
        path: Path to the .unitypackage file
        config: Optional configuration (defaults to get_config())

    Returns:
        InflateResult with warnings, written files and write failures

    Raises:
        InvalidPackageError: If the path lacks the package extension or has
            no name in front of it
        PackageReadError: If the package cannot be read
    """
    config = config or get_config()
    package = Path(path)

    # Checked before the file is opened or any directory is created
    if not package.name.endswith(config.extension):
        raise InvalidPackageError(package, f"Invalid file type. Expected {config.extension}")
    if package_stem(package.name, config.extension) is None:
        raise InvalidPackageError(package, f"Missing package name before {config.extension}")

    output_root = derive_output_root(package, config.extension)

    read_result = read_package(package)
    materialized = materialize(read_result.assets, output_root)

    return InflateResult(
        package=package,
        output_root=output_root,
        asset_count=len(read_result.assets),
        skipped=materialized.skipped,
        warnings=read_result.warnings,
        written=materialized.written,
        failures=materialized.failures,
    )


def inflate_package_safely(
    path: Path | str, config: InflateConfig | None = None
) -> InflateResult:
    """Inflate a package, turning fatal errors into a failed result.

    This is the unit of work submitted to the process pool.
    """
    config = config or get_config()
    package = Path(path)

    try:
        return inflate_package(package, config)
    except InflateError as e:
        return failed_result(package, config, e.message)


def failed_result(package: Path, config: InflateConfig, message: str) -> InflateResult:
    """Build the result reported for a package that could not be inflated."""
    return InflateResult(
        package=package,
        output_root=derive_output_root(package, config.extension),
        error=message,
    )


def inflate_packages(
    paths: Sequence[Path | str], config: InflateConfig | None = None
) -> list[InflateResult]:
    """Inflate several packages, one task per package.

    Packages run in parallel on a fixed-size process pool. A failure in
    one package, expected or not, never affects another.

    Args:
        paths: Package paths to inflate
        config: Optional configuration (defaults to get_config())

    Returns:
        One InflateResult per path, in input order
    """
    config = config or get_config()
    packages = [Path(p) for p in paths]

    if config.max_workers == 1 or len(packages) <= 1:
        results = []
        for package in packages:
            try:
                results.append(inflate_package_safely(package, config))
            except Exception as e:
                results.append(failed_result(package, config, f"{type(e).__name__}: {e}"))
        return results

    pooled: list[InflateResult | None] = [None] * len(packages)

    with ProcessPoolExecutor(max_workers=config.max_workers) as executor:
        future_to_index = {
            executor.submit(inflate_package_safely, package, config): i
            for i, package in enumerate(packages)
        }

        for future in as_completed(future_to_index):
            index = future_to_index[future]
            package = packages[index]
            try:
                pooled[index] = future.result()
            except Exception as e:
                # Worker died or raised something unexpected
                pooled[index] = failed_result(package, config, f"{type(e).__name__}: {e}")

    return [result for result in pooled if result is not None]
