#!/usr/bin/env python3
"""
dupfinder CLI: command line interface for duplicate file detection.
Prints one block per group of identical files: the size, then the sorted paths.
Files are only read, never modified.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import logging
import os
import pprint
import signal
import sys
import threading
import time
from typing import List, Optional, NoReturn

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

from dupfinder.commands import DeduplicationCommand
from dupfinder.core.models import ScanParams, ScanResult, HashAlgorithmName
from dupfinder.core.reporter import ReportWriter
from dupfinder.services.root_service import RootService
from dupfinder.utils.convert_utils import ConvertUtils
from dupfinder.aliases import ALGORITHM_ALIASES, ALGORITHM_CHOICES, ALGORITHM_HELP_TEXT, EPILOG_TEXT


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self._stop_requested: bool = False

        # Paths with undecodable bytes come back from os.walk as surrogates; write them back as raw bytes
        sys.stdout.reconfigure(errors="surrogateescape")
        sys.stderr.reconfigure(errors="surrogateescape")

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="dupfinder",
            description="dupfinder: find files with identical content",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT,
            add_help=False
        )

        parser.add_argument(
            "--help", "-h", "-?",
            action="help",
            help="Show this help message and exit"
        )
        parser.add_argument(
            "dirs",
            nargs="*",
            metavar="dir",
            help="Directories to search (default: current directory)"
        )
        parser.add_argument(
            "--symlinks", "-s",
            action="store_true",
            help="Follow symbolic links. Default: disabled"
        )
        parser.add_argument(
            "--dumpinfo", "-d",
            action="store_true",
            help="Dump internal indexes after processing. Useful for debugging only"
        )
        parser.add_argument(
            "--algorithm", "-a",
            choices=ALGORITHM_CHOICES,
            default="xxhash",
            type=str,
            help=ALGORITHM_HELP_TEXT
        )
        parser.add_argument(
            "--jobs", "-j",
            default=1,
            type=int,
            metavar="N",
            help="Number of hashing threads. Default: 1"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress warnings and non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show progress, detailed statistics and debug logging"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> List[str]:
        """Validate arguments and return the normalized root list."""
        if args.jobs < 1:
            self.error_exit("--jobs must be at least 1")
        if args.verbose and args.quiet:
            self.error_exit("--verbose and --quiet cannot be used together")

        roots, problems = RootService.normalize_roots(args.dirs)
        for problem in problems:
            self.warning(problem)
        if not roots:
            self.error_exit("No directory left to scan")
        return roots

    def create_params(self, args: argparse.Namespace, roots: List[str]) -> ScanParams:
        """Create ScanParams from CLI arguments."""
        try:
            return ScanParams(
                roots=roots,
                follow_symlinks=args.symlinks,
                algorithm=ALGORITHM_ALIASES.get(args.algorithm, HashAlgorithmName.XXHASH),
                workers=args.jobs,
                keep_details=args.dumpinfo,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(
                f"\r  [{stage}] {current}/{total} ({percent:.1f}%)"
            )
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files found...")
        sys.stderr.flush()

    def stopped_flag(self) -> bool:
        """True once Ctrl+C was pressed during the scan."""
        return self._stop_requested

    def _request_stop(self, signum, frame) -> None:
        self._stop_requested = True

    def run_scan(self, params: ScanParams) -> ScanResult:
        """Execute the scan; Ctrl+C stops issuing new reads instead of killing the process."""
        command = DeduplicationCommand()
        previous_handler = None
        in_main_thread = threading.current_thread() is threading.main_thread()
        if in_main_thread:
            previous_handler = signal.signal(signal.SIGINT, self._request_stop)

        try:
            result = command.execute(
                params,
                progress_callback=self.progress_callback,
                stopped_flag=self.stopped_flag
            )
        finally:
            if in_main_thread:
                signal.signal(signal.SIGINT, previous_handler)

        if self.verbose:
            sys.stderr.write(" done!\n")
        if self._stop_requested:
            print("\n⚠️  Operation cancelled by user (Ctrl+C)", file=sys.stderr)
            sys.exit(130)
        return result

    def output_warnings(self, result: ScanResult) -> None:
        """Warnings are printed once, after progress output has finished."""
        for item in result.warnings:
            self.warning(item.describe())

    def output_results(self, result: ScanResult) -> None:
        ReportWriter.write(result.groups, sys.stdout)

    def output_summary(self, result: ScanResult) -> None:
        if not self.verbose:
            return
        wasted = sum(ConvertUtils.wasted_bytes(g.size, len(g.paths)) for g in result.groups)
        print(result.stats.print_summary(), file=sys.stderr)
        print(f"Duplicate groups: {len(result.groups)}", file=sys.stderr)
        print(f"Space taken by extra copies: {ConvertUtils.bytes_to_human(wasted)}", file=sys.stderr)

    @staticmethod
    def dump_info(result: ScanResult) -> None:
        """Print the intermediate indexes and counters."""
        print("\nDUMPING size groups")
        print(pprint.pformat({size: sorted(paths) for size, paths in result.size_groups.items()}))
        print("\nDUMPING digests")
        print(pprint.pformat(result.digests))
        print("\nDUMPING duplicate groups")
        print(pprint.pformat([(g.size, g.paths) for g in result.groups]))
        print("\nDUMPING more stats:")
        print(f"files_scanned = {result.stats.files_scanned}")
        print(f"candidates = {result.stats.candidates}")
        print(f"files_hashed = {result.stats.files_hashed}")
        print(f"files_failed = {result.stats.files_failed}")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        if self.verbose:
            logging.getLogger().setLevel(logging.DEBUG)

        roots = self.validate_args(args)
        params = self.create_params(args, roots)

        if self.verbose:
            print(f"Scanning: {', '.join(params.roots)}", file=sys.stderr)

        result = self.run_scan(params)

        self.output_warnings(result)
        self.output_results(result)
        self.output_summary(result)
        if args.dumpinfo:
            self.dump_info(result)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds", file=sys.stderr)


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
