"""Unit tests for filesystem storage adapter."""

from pathlib import Path

import pytest

from depotfiler.adapters.storage.filesystem import FilesystemAdapter, validate_name


class TestValidateName:
    """Tests for validate_name."""

    def test_normal_name_accepted(self) -> None:
        validate_name("2025_07_31_Depotauszug_Depot.pdf")

    @pytest.mark.parametrize("name", ["", ".", ".."])
    def test_rejects_special_names(self, name: str) -> None:
        with pytest.raises(ValueError, match="Invalid filename"):
            validate_name(name)

    @pytest.mark.parametrize("name", ["a/b.pdf", "..\\x.pdf", "a\x00.pdf"])
    def test_rejects_separators(self, name: str) -> None:
        with pytest.raises(ValueError, match="path separator"):
            validate_name(name)

    def test_rejects_long_names(self) -> None:
        with pytest.raises(ValueError, match="longer than"):
            validate_name("A" * 252 + ".pdf")


class TestFilesystemAdapter:
    """Tests for FilesystemAdapter."""

    def test_rename(self, tmp_path: Path) -> None:
        src = tmp_path / "scan.pdf"
        src.write_bytes(b"data")
        adapter = FilesystemAdapter(tmp_path)

        dest = adapter.rename(src, "2025_07_31_Depotauszug_Depot.pdf")

        assert dest == tmp_path / "2025_07_31_Depotauszug_Depot.pdf"
        assert dest.read_bytes() == b"data"
        assert not src.exists()

    def test_rename_in_subfolder(self, tmp_path: Path) -> None:
        sub = tmp_path / "2025"
        sub.mkdir()
        src = sub / "scan.pdf"
        src.touch()

        dest = FilesystemAdapter(tmp_path).rename(src, "new.pdf")

        assert dest == sub / "new.pdf"

    def test_collision_gets_suffix(self, tmp_path: Path) -> None:
        (tmp_path / "target.pdf").write_bytes(b"first")
        (tmp_path / "target_1.pdf").write_bytes(b"second")
        src = tmp_path / "scan.pdf"
        src.write_bytes(b"third")

        dest = FilesystemAdapter(tmp_path).rename(src, "target.pdf")

        assert dest == tmp_path / "target_2.pdf"
        assert (tmp_path / "target.pdf").read_bytes() == b"first"
        assert (tmp_path / "target_1.pdf").read_bytes() == b"second"

    def test_same_name_unchanged(self, tmp_path: Path) -> None:
        src = tmp_path / "2025_07_31_Depotauszug_Depot.pdf"
        src.touch()

        dest = FilesystemAdapter(tmp_path).rename(src, src.name)

        assert dest == src
        assert src.exists()

    def test_plan_does_not_move(self, tmp_path: Path) -> None:
        src = tmp_path / "scan.pdf"
        src.touch()

        dest = FilesystemAdapter(tmp_path).plan(src, "new.pdf")

        assert dest == tmp_path / "new.pdf"
        assert src.exists()
        assert not dest.exists()

    def test_rejects_path_outside_root(self, tmp_path: Path) -> None:
        root = tmp_path / "inbox"
        root.mkdir()
        outside = tmp_path / "other.pdf"
        outside.touch()

        with pytest.raises(ValueError, match="outside"):
            FilesystemAdapter(root).rename(outside, "new.pdf")
        assert outside.exists()

    def test_rejects_symlink_escaping_root(self, tmp_path: Path) -> None:
        root = tmp_path / "inbox"
        root.mkdir()
        target = tmp_path / "secret.pdf"
        target.touch()
        link = root / "link.pdf"
        link.symlink_to(target)

        with pytest.raises(ValueError, match="outside"):
            FilesystemAdapter(root).rename(link, "new.pdf")

    def test_rejects_unsafe_name(self, tmp_path: Path) -> None:
        src = tmp_path / "scan.pdf"
        src.touch()

        with pytest.raises(ValueError):
            FilesystemAdapter(tmp_path).rename(src, "../escape.pdf")
        assert src.exists()
