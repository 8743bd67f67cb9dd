"""
Integration tests for DeduplicationCommand, the orchestration layer between the CLI and core.
"""
from dupfinder import DeduplicationCommand, ScanParams


class TestDeduplicationCommand:
    def test_execute_returns_result(self, test_files, temp_dir):
        command = DeduplicationCommand()
        result = command.execute(ScanParams(roots=[str(temp_dir)]))

        assert len(result.groups) == 2
        assert result.stats.total_time >= 0
        assert "size" in result.stats.stage_stats
        assert "hash" in result.stats.stage_stats
        assert command.get_last_result() is result

    def test_empty_directory_is_not_an_error(self, temp_dir):
        result = DeduplicationCommand().execute(ScanParams(roots=[str(temp_dir)]))
        assert result.groups == []
        assert result.warnings == []

    def test_execute_invokes_progress_callback(self, test_files, temp_dir):
        stages = set()

        def progress(stage, current, total):
            stages.add(stage)

        DeduplicationCommand().execute(ScanParams(roots=[str(temp_dir)]), progress_callback=progress)

        assert stages == {"Building file list", "Size grouping", "Hashing"}

    def test_execute_respects_stopped_flag(self, test_files, temp_dir):
        result = DeduplicationCommand().execute(ScanParams(roots=[str(temp_dir)]), stopped_flag=lambda: True)
        assert result.groups == []
        assert result.stats.files_scanned == 0

    def test_injected_hasher_is_used(self, test_files, temp_dir, counting_hasher):
        DeduplicationCommand(hasher=counting_hasher).execute(ScanParams(roots=[str(temp_dir)]))
        assert len(counting_hasher.calls) == 6

    def test_no_previous_result(self):
        assert DeduplicationCommand().get_last_result() is None
