"""Configuration for package inflation."""

import os
from dataclasses import dataclass
from typing import Final

from .materializer import PACKAGE_EXTENSION

WORKERS_ENV_VAR: Final[str] = "UNITYPACKAGE_INFLATE_WORKERS"
"""Environment variable that overrides the default worker count."""


def default_workers() -> int:
    """One worker per CPU, at least one."""
    return os.cpu_count() or 1


def parse_workers(value: str | int) -> int:
    """Coerce a worker count from the environment or the command line.

    Raises:
        ValueError: If value is not an integer of at least 1
    """
    try:
        workers = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Worker count must be an integer, got {value!r}") from None

    if workers < 1:
        raise ValueError(f"Worker count must be at least 1, got {workers}")
    return workers


@dataclass(frozen=True)
class InflateConfig:
    """Runtime configuration for inflating packages.

    Attributes:
        max_workers: Size of the process pool used for multiple packages
        extension: File extension a package must carry
    """

    max_workers: int
    extension: str = PACKAGE_EXTENSION

    def __post_init__(self) -> None:
        object.__setattr__(self, "max_workers", parse_workers(self.max_workers))


_CONFIG: InflateConfig | None = None


def get_config() -> InflateConfig:
    """Return the cached configuration, building it on first use."""
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _build_config()
    return _CONFIG


def configure(*, max_workers: int | None = None) -> InflateConfig:
    """Rebuild the cached configuration with optional overrides."""
    global _CONFIG
    _CONFIG = _build_config(max_workers=max_workers)
    return _CONFIG


def _build_config(*, max_workers: int | None = None) -> InflateConfig:
    if max_workers is not None:
        return InflateConfig(max_workers=max_workers)

    env_value = os.environ.get(WORKERS_ENV_VAR)
    if env_value:
        return InflateConfig(max_workers=parse_workers(env_value))

    return InflateConfig(max_workers=default_workers())
