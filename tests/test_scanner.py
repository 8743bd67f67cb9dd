"""
Unit tests for FileScannerImpl.
Verifies recursive discovery, symlink policy, multiple roots and root error handling.
"""
import os
import pytest
from pathlib import Path
from dupfinder.core.scanner import FileScannerImpl
from dupfinder.core.models import WarningKind


def symlinks_supported(tmp_path: Path) -> bool:
    try:
        (tmp_path / ".probe_target").write_bytes(b"")
        (tmp_path / ".probe_link").symlink_to(tmp_path / ".probe_target")
    except (OSError, NotImplementedError):
        return False
    (tmp_path / ".probe_link").unlink()
    (tmp_path / ".probe_target").unlink()
    return True


class TestFileScannerImpl:
    def test_scans_all_regular_files(self, test_files, temp_dir):
        """Every regular file is reported, including empty ones."""
        scanner = FileScannerImpl([str(temp_dir)])
        files = list(scanner.scan())

        assert {f.path for f in files} == {str(p) for p in test_files.values()}
        assert scanner.warnings == []

    def test_sizes_are_reported(self, test_files, temp_dir):
        files = {f.path: f.size for f in FileScannerImpl([str(temp_dir)]).scan()}
        assert files[str(test_files["dup2_a"])] == 2048
        assert files[str(test_files["empty"])] == 0

    def test_scans_subdirectories_recursively(self, test_files, temp_dir):
        files = list(FileScannerImpl([str(temp_dir)]).scan())
        subdir_files = [f for f in files if "subdir" in f.path]
        assert len(subdir_files) == 1
        assert subdir_files[0].path == str(test_files["sub_dup"])

    def test_scan_is_lazy(self, test_files, temp_dir):
        """scan() returns a generator; nothing is walked before iteration."""
        scan = FileScannerImpl([str(temp_dir)]).scan()
        first = next(scan)
        assert os.path.isfile(first.path)

    def test_multiple_roots(self, tmp_path):
        (tmp_path / "one").mkdir()
        (tmp_path / "two").mkdir()
        (tmp_path / "one" / "a").write_bytes(b"1")
        (tmp_path / "two" / "b").write_bytes(b"2")

        files = list(FileScannerImpl([str(tmp_path / "one"), str(tmp_path / "two")]).scan())

        assert sorted(f.path for f in files) == [str(tmp_path / "one" / "a"), str(tmp_path / "two" / "b")]

    def test_missing_root_is_warning_not_failure(self, tmp_path):
        (tmp_path / "ok").mkdir()
        (tmp_path / "ok" / "file").write_bytes(b"data")
        missing = str(tmp_path / "missing")

        scanner = FileScannerImpl([missing, str(tmp_path / "ok")])
        files = list(scanner.scan())

        assert [f.path for f in files] == [str(tmp_path / "ok" / "file")]
        assert len(scanner.warnings) == 1
        assert scanner.warnings[0].kind is WarningKind.ROOT_UNAVAILABLE
        assert scanner.warnings[0].path == missing

    def test_file_as_root_is_warning(self, tmp_path):
        target = tmp_path / "plain.txt"
        target.write_bytes(b"x")

        scanner = FileScannerImpl([str(target)])

        assert list(scanner.scan()) == []
        assert scanner.warnings[0].raw_message == "not a directory"

    @pytest.mark.skipif(not hasattr(os, "geteuid") or os.geteuid() == 0,
                        reason="permission bits are not enforced for root")
    def test_unreadable_root_is_warning(self, tmp_path):
        locked = tmp_path / "locked"
        locked.mkdir()
        (locked / "secret").write_bytes(b"x")
        locked.chmod(0)
        try:
            scanner = FileScannerImpl([str(locked)])
            assert list(scanner.scan()) == []
            assert scanner.warnings[0].kind is WarningKind.ROOT_UNAVAILABLE
        finally:
            locked.chmod(0o755)

    def test_unreadable_subdirectory_is_warning(self, tmp_path, monkeypatch):
        """A subdirectory that cannot be listed is skipped and recorded, the rest is still scanned."""
        (tmp_path / "a").write_bytes(b"x")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "b").write_bytes(b"x")
        locked = os.path.join(str(tmp_path), "sub")
        real_scandir = os.scandir

        def fake_scandir(path=None):
            if path == locked:
                raise PermissionError(13, "Permission denied", path)
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", fake_scandir)
        scanner = FileScannerImpl([str(tmp_path)])
        files = list(scanner.scan())

        assert [f.path for f in files] == [str(tmp_path / "a")]
        assert [(w.path, w.kind, w.raw_message) for w in scanner.warnings] == [
            (locked, WarningKind.DIRECTORY_UNAVAILABLE, "Permission denied")]

    def test_stopped_flag_ends_scan(self, test_files, temp_dir):
        assert list(FileScannerImpl([str(temp_dir)]).scan(stopped_flag=lambda: True)) == []

    def test_progress_callback_reports_scan_stage(self, test_files, temp_dir):
        calls = []
        list(FileScannerImpl([str(temp_dir)]).scan(progress_callback=lambda *args: calls.append(args)))
        assert calls[-1] == ("Building file list", len(test_files), None)


class TestSymlinkPolicy:
    def test_symlinks_skipped_by_default(self, tmp_path):
        if not symlinks_supported(tmp_path):
            pytest.skip("symlinks not supported")
        real = tmp_path / "real.txt"
        real.write_bytes(b"content")
        (tmp_path / "link.txt").symlink_to(real)

        files = list(FileScannerImpl([str(tmp_path)]).scan())

        assert [f.path for f in files] == [str(real)]

    def test_symlinks_followed_when_enabled(self, tmp_path):
        if not symlinks_supported(tmp_path):
            pytest.skip("symlinks not supported")
        real = tmp_path / "real.txt"
        real.write_bytes(b"content")
        link = tmp_path / "link.txt"
        link.symlink_to(real)

        files = list(FileScannerImpl([str(tmp_path)], follow_symlinks=True).scan())

        assert sorted(f.path for f in files) == sorted([str(real), str(link)])
        assert all(f.size == 7 for f in files)

    def test_directory_symlink_not_descended_by_default(self, tmp_path):
        if not symlinks_supported(tmp_path):
            pytest.skip("symlinks not supported")
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "file.txt").write_bytes(b"x")
        root = tmp_path / "root"
        root.mkdir()
        (root / "linked").symlink_to(outside, target_is_directory=True)

        assert list(FileScannerImpl([str(root)]).scan()) == []
        followed = list(FileScannerImpl([str(root)], follow_symlinks=True).scan())
        assert [f.path for f in followed] == [str(root / "linked" / "file.txt")]

    def test_dangling_symlink_skipped_when_following(self, tmp_path):
        if not symlinks_supported(tmp_path):
            pytest.skip("symlinks not supported")
        (tmp_path / "dangling").symlink_to(tmp_path / "nowhere")
        (tmp_path / "real").write_bytes(b"x")

        files = list(FileScannerImpl([str(tmp_path)], follow_symlinks=True).scan())

        assert [f.path for f in files] == [str(tmp_path / "real")]

    def test_symlink_cycle_terminates(self, tmp_path):
        """A link back to an ancestor must not loop forever when following links."""
        if not symlinks_supported(tmp_path):
            pytest.skip("symlinks not supported")
        root = tmp_path / "root"
        (root / "sub").mkdir(parents=True)
        (root / "sub" / "file.txt").write_bytes(b"x")
        (root / "sub" / "back").symlink_to(root, target_is_directory=True)

        files = list(FileScannerImpl([str(root)], follow_symlinks=True).scan())

        assert [f.path for f in files] == [str(root / "sub" / "file.txt")]
