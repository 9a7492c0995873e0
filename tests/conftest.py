"""Shared fixtures for building .unitypackage archives in tests."""

import io
import tarfile
from pathlib import Path

import pytest

# An entry is (name, content); content None means a directory entry
Entry = tuple[str, bytes | None]


def package_bytes(entries: list[Entry]) -> bytes:
    """Build a gzip-compressed tar stream from entries, in the given order."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as archive:
        for name, content in entries:
            info = tarfile.TarInfo(name=name)
            if content is None:
                info.type = tarfile.DIRTYPE
                info.mode = 0o755
                archive.addfile(info)
            else:
                info.size = len(content)
                archive.addfile(info, io.BytesIO(content))
    return buffer.getvalue()


def asset_entries(
    identifier: str,
    pathname: str,
    payload: bytes | None = None,
    meta: str | None = None,
    preview: bytes | None = None,
) -> list[Entry]:
    """Entries Unity writes for one asset, in Unity's usual order."""
    entries: list[Entry] = [(identifier, None)]
    if payload is not None:
        entries.append((f"{identifier}/asset", payload))
    if meta is not None:
        entries.append((f"{identifier}/asset.meta", meta.encode("utf-8")))
    entries.append((f"{identifier}/pathname", pathname.encode("utf-8")))
    if preview is not None:
        entries.append((f"{identifier}/preview.png", preview))
    return entries


@pytest.fixture
def sample_entries() -> list[Entry]:
    """A small package: a texture with preview, a script, and a folder."""
    return [
        *asset_entries(
            "3f1c9a0e5b7d4e2f8a6b1c0d9e8f7a6b",
            "Assets/Textures/brick.png",
            payload=b"\x89PNG\r\n\x1a\nbrick",
            meta="fileFormatVersion: 2\nguid: 3f1c9a0e5b7d4e2f8a6b1c0d9e8f7a6b\n",
            preview=b"\x89PNG\r\n\x1a\nthumb",
        ),
        *asset_entries(
            "a0b1c2d3e4f5a6b7c8d9e0f1a2b3c4d5",
            "Assets/Scripts/Player.cs",
            payload=b"public class Player {}\n",
            meta="fileFormatVersion: 2\nguid: a0b1c2d3e4f5a6b7c8d9e0f1a2b3c4d5\n",
        ),
        *asset_entries(
            "ffeeddccbbaa99887766554433221100",
            "Assets/Textures",
            meta="fileFormatVersion: 2\nfolderAsset: yes\n",
        ),
    ]


@pytest.fixture
def write_package(tmp_path: Path):
    """Write a package file under tmp_path and return its path."""

    def _write(entries: list[Entry], name: str = "Sample.unitypackage") -> Path:
        path = tmp_path / name
        path.write_bytes(package_bytes(entries))
        return path

    return _write
