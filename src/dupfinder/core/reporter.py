"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/reporter.py
Text report of duplicate groups.

    size: <bytes>
    <path1>
    <path2>
    <blank line>
"""

import sys
from typing import Iterable, List, TextIO

from dupfinder.core.models import DuplicateGroup


class ReportWriter:
    @staticmethod
    def format_group(group: DuplicateGroup) -> List[str]:
        return [f"size: {group.size}"] + sorted(group.paths)

    @staticmethod
    def format_report(groups: Iterable[DuplicateGroup]) -> str:
        """Groups ordered by size, then by first path; one blank line after each block."""
        lines = []
        for group in sorted(groups, key=DuplicateGroup.sort_key):
            lines.extend(ReportWriter.format_group(group))
            lines.append("")
        return "\n".join(lines) + ("\n" if lines else "")

    @staticmethod
    def write(groups: Iterable[DuplicateGroup], stream: TextIO = None) -> None:
        (stream or sys.stdout).write(ReportWriter.format_report(groups))
