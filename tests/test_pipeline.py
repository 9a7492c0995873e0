"""Tests for the inflation pipeline."""

from pathlib import Path

import pytest

from conftest import asset_entries
from unitypackage_inflate import pipeline
from unitypackage_inflate.config import InflateConfig
from unitypackage_inflate.errors import InvalidPackageError, PackageReadError
from unitypackage_inflate.pipeline import (
    inflate_package,
    inflate_package_safely,
    inflate_packages,
)

SERIAL = InflateConfig(max_workers=1)


class TestInflatePackage:
    """Tests for inflating a single package."""

    def test_inflates_next_to_package(self, write_package, sample_entries) -> None:
        """Test the full output tree of a small package."""
        package = write_package(sample_entries, name="Props.unitypackage")

        result = inflate_package(package, SERIAL)

        root = package.parent / "Props"
        assert result.ok
        assert result.output_root == root
        assert result.asset_count == 3
        assert (root / "Assets" / "Textures" / "brick.png").read_bytes() == (
            b"\x89PNG\r\n\x1a\nbrick"
        )
        assert (root / "Assets" / "Textures" / "brick.png.meta").exists()
        assert (root / "Assets" / "Textures" / "brick_preview_image.png").exists()
        assert (root / "Assets" / "Scripts" / "Player.cs").read_text() == (
            "public class Player {}\n"
        )
        assert (root / "Assets" / "Scripts" / "Player.cs.meta").exists()
        assert (root / "Assets" / "Textures.meta").read_text() == (
            "fileFormatVersion: 2\nfolderAsset: yes\n"
        )
        assert len(result.written) == 6

    def test_pathname_after_content_still_routes(self, write_package) -> None:
        """Test that a pathname arriving last still places earlier content."""
        package = write_package(
            [
                ("guid/asset", b"payload"),
                ("guid/preview.png", b"thumb"),
                ("guid/pathname", b"Assets/Late.bin"),
            ]
        )

        result = inflate_package(package, SERIAL)

        assert result.ok
        assert (result.output_root / "Assets" / "Late.bin").read_bytes() == b"payload"
        assert (result.output_root / "Assets" / "Late_preview_image.png").exists()

    def test_entry_warnings_do_not_fail_package(self, write_package) -> None:
        package = write_package(
            [
                *asset_entries("guid", "Assets/a.txt", payload=b"a"),
                ("guid/unknown.bin", b"?"),
            ]
        )

        result = inflate_package(package, SERIAL)

        assert result.ok
        assert len(result.warnings) == 1

    def test_wrong_extension_creates_nothing(self, tmp_path: Path) -> None:
        """Test that non-package paths fail before any filesystem access."""
        package = tmp_path / "Props.zip"

        with pytest.raises(InvalidPackageError, match="Expected .unitypackage"):
            inflate_package(package, SERIAL)

        assert list(tmp_path.iterdir()) == []

    def test_corrupted_package_is_fatal(self, tmp_path: Path) -> None:
        package = tmp_path / "Broken.unitypackage"
        package.write_bytes(b"definitely not gzip")

        with pytest.raises(PackageReadError):
            inflate_package(package, SERIAL)

        assert not (tmp_path / "Broken").exists()

    def test_safely_returns_error_result(self, tmp_path: Path) -> None:
        result = inflate_package_safely(tmp_path / "Props.tar.gz", SERIAL)

        assert not result.ok
        assert "Invalid file type" in result.error

    def test_missing_package_name_is_rejected(self, tmp_path: Path) -> None:
        """Test that a bare extension has no name to inflate into."""
        package = tmp_path / ".unitypackage"
        package.write_bytes(b"")

        with pytest.raises(InvalidPackageError, match="Missing package name"):
            inflate_package(package, SERIAL)

        assert list(tmp_path.iterdir()) == [package]


class TestInflatePackages:
    """Tests for inflating several packages."""

    @pytest.mark.parametrize("workers", [1, 2])
    def test_fatal_error_is_isolated(self, write_package, sample_entries, tmp_path, workers) -> None:
        """Test that a corrupted package does not stop a good one."""
        good = write_package(sample_entries, name="Good.unitypackage")
        broken = tmp_path / "Broken.unitypackage"
        broken.write_bytes(b"\x1f\x8bcorrupted header")

        results = inflate_packages([broken, good], InflateConfig(max_workers=workers))

        assert [r.package for r in results] == [broken, good]
        assert not results[0].ok
        assert results[0].error is not None
        assert results[1].ok
        assert (tmp_path / "Good" / "Assets" / "Scripts" / "Player.cs").exists()

    @pytest.mark.parametrize("workers", [1, 2])
    def test_unnamed_paths_are_isolated(
        self, write_package, sample_entries, tmp_path, workers
    ) -> None:
        """Test that paths without a package name fail alone."""
        good = write_package(sample_entries, name="Good.unitypackage")
        bare = tmp_path / ".unitypackage"
        bare.write_bytes(b"")

        results = inflate_packages([bare, Path("."), good], InflateConfig(max_workers=workers))

        assert [r.package for r in results] == [bare, Path("."), good]
        assert "Missing package name" in results[0].error
        assert results[0].output_root == bare
        assert "Invalid file type" in results[1].error
        assert results[1].output_root == Path(".")
        assert results[2].ok
        assert (tmp_path / "Good" / "Assets" / "Scripts" / "Player.cs").exists()

    def test_unexpected_error_is_isolated(
        self, monkeypatch, write_package, sample_entries, tmp_path
    ) -> None:
        """Test that a bug in one package does not abort the serial loop."""
        good = write_package(sample_entries, name="Good.unitypackage")
        bad = write_package(sample_entries, name="Bad.unitypackage")
        real_materialize = pipeline.materialize

        def materialize(assets, output_root):
            if output_root.name == "Bad":
                raise RuntimeError("boom")
            return real_materialize(assets, output_root)

        monkeypatch.setattr(pipeline, "materialize", materialize)

        results = inflate_packages([bad, good], SERIAL)

        assert results[0].error == "RuntimeError: boom"
        assert results[1].ok

    def test_skipped_records_are_counted(self, write_package) -> None:
        package = write_package(
            [
                *asset_entries("guid", "Assets/a.txt", payload=b"a"),
                ("orphan/asset", b"no route"),
            ]
        )

        (result,) = inflate_packages([package], SERIAL)

        assert result.ok
        assert result.asset_count == 2
        assert result.skipped == 1

    def test_empty_input(self) -> None:
        assert inflate_packages([], SERIAL) == []
