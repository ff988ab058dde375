#!/usr/bin/env python3
"""
dupecull CLI — Command line interface for duplicate file detection and removal.
Runs in dry-run mode unless --delete-files is given.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from typing import Dict, List, Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

from dupecull.core.models import (
    DeduplicationParams, DuplicateResult, BucketSummary, Stage, DEFAULT_MIN_COUNT
)
from dupecull.commands import DeduplicationCommand
from dupecull.utils.convert_utils import ConvertUtils
from dupecull.aliases import (
    ORDER_ALIASES, ORDER_CHOICES, ORDER_HELP_TEXT,
    HASH_ALIASES, HASH_CHOICES, HASH_HELP_TEXT,
    EPILOG_TEXT
)


class CLIApplication:
    """Main CLI application controller."""

    STAGE_STEPS = {
        Stage.SIZE.value: 1,
        Stage.LAST.value: 2,
        Stage.FIRST.value: 3,
        Stage.FULL.value: 4,
    }

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: int = 0
        self.quiet: bool = False
        self.params: Optional[DeduplicationParams] = None

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="dupecull",
            description="dupecull — find byte-identical files and keep only one of each",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "paths",
            nargs="+",
            type=str,
            help="Directories to scan for duplicate files"
        )

        # Filtering options
        parser.add_argument(
            "--min-size", "-m",
            default="1",
            type=str,
            metavar='',
            help="Minimum file size (e.g., 500KB, 1MB). Default: 1"
        )
        parser.add_argument(
            "--max-size", "-M",
            default="0",
            type=str,
            metavar='',
            help="Maximum file size (e.g., 10MB, 1GB). 0 = no limit. Default: 0"
        )
        parser.add_argument(
            "--count", "-c",
            default=DEFAULT_MIN_COUNT,
            type=int,
            metavar='',
            help="Minimum count of identical files considered duplicate (min. 2). Default: 2"
        )
        parser.add_argument(
            "--scan-size", "-s",
            default="1M",
            type=str,
            metavar='',
            help="Bytes hashed at the end and at the start of each file before full hashing. Default: 1M"
        )

        parser.add_argument(
            "--order",
            choices=ORDER_CHOICES,
            default="identity",
            type=str,
            help=ORDER_HELP_TEXT
        )

        parser.add_argument(
            "--hash",
            choices=HASH_CHOICES,
            default="sha512",
            type=str,
            help=HASH_HELP_TEXT
        )

        # Actions
        parser.add_argument(
            "--delete-files",
            action="store_true",
            help="Actually delete duplicates. Without it nothing is touched (dry run)."
        )
        parser.add_argument(
            "--trash",
            action="store_true",
            help="With --delete-files: move duplicates to the system trash instead of deleting them"
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="count",
            default=0,
            help="Show statistics; -vv also enables debug logging"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.trash and not args.delete_files:
            self.error_exit("--trash can only be used with --delete-files")

        if args.count < 2:
            self.error_exit("Duplicate count must be at least 2")

        for path in args.paths:
            if not os.path.exists(path):
                self.error_exit(f"Directory not found: {path}")
            if not os.path.isdir(path):
                self.error_exit(f"Path is not a directory: {path}")

        try:
            min_size = ConvertUtils.human_to_bytes(args.min_size)
            max_size = ConvertUtils.human_to_bytes(args.max_size)
            scan_size = ConvertUtils.human_to_bytes(args.scan_size)
        except ValueError as e:
            self.error_exit(f"Invalid size format: {e}")

        if min_size < 1:
            self.error_exit("Minimum size must be at least 1 byte")
        if max_size and min_size > max_size:
            self.error_exit("Minimum size is larger than maximum size")
        if scan_size < 1:
            self.error_exit("Scan size must be at least 1 byte")

    def create_params(self, args: argparse.Namespace) -> DeduplicationParams:
        """Create DeduplicationParams from CLI arguments."""
        try:
            return DeduplicationParams.from_human_readable(
                roots=args.paths,
                min_size_str=args.min_size,
                max_size_str=args.max_size,
                min_count=args.count,
                scan_size_str=args.scan_size,
                delete_files=args.delete_files,
                use_trash=args.trash,
                order=ORDER_ALIASES[args.order],
                algorithm=HASH_ALIASES[args.hash],
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def print_header(self, params: DeduplicationParams) -> None:
        if self.quiet:
            return

        if params.delete_files:
            target = "trash" if params.use_trash else "deleted"
            print(f"WARNING: deleting files! Duplicates will be {target}.")
        else:
            print("Not deleting files (dry run), add --delete-files to actually delete files.")
        print()

        max_str = "no limit" if not params.max_size_bytes else ConvertUtils.describe_size(params.max_size_bytes)
        print(f"File sizes to scan: {ConvertUtils.describe_size(params.min_size_bytes)} - {max_str}")
        print(f"Scan size for last and first bytes of files: {ConvertUtils.describe_size(params.scan_size_bytes)}")
        print("Directories to scan:")
        for root in params.roots:
            print(f" * {root}")
        print()

    def on_stage(self, stage: str, data: Dict) -> None:
        """Stage listener: prints stage headers and candidate totals."""
        if self.quiet:
            return

        step = self.STAGE_STEPS.get(stage, 0)
        if data.get("status") == "started":
            if stage == Stage.SIZE.value:
                print(f"({step} / 6) Generating file list based on file sizes...")
            elif stage == Stage.FULL.value:
                print(f"({step} / 6) Hashing {data['files']} files with size "
                      f"{ConvertUtils.describe_size(data['size'])}...")
            else:
                which = "last" if stage == Stage.LAST.value else "first"
                print(f"({step} / 6) Eliminating candidates based on {which} "
                      f"{self.params.scan_size_bytes} bytes of files...")
            return

        print(f"  File candidates: {data['files']} Total size: {ConvertUtils.describe_size(data['bytes'])}")
        if data["files"] == 0:
            print("No files.")

    def on_group(self, result: DuplicateResult) -> None:
        if self.quiet:
            return
        print(f"(5 / 6) Deleting duplicate files with checksum: {result.checksum}")
        print(f"   +keeping: {result.survivor}")
        for path in result.removed:
            print(f"  -deleting: {path}")

    def on_bucket(self, summary: BucketSummary) -> None:
        if self.quiet:
            return
        print(f"Currently removed {summary.freed_files} files totaling "
              f"{ConvertUtils.describe_size(summary.freed_bytes)}  "
              f"Remaining: {summary.files_remaining} files, "
              f"{ConvertUtils.describe_size(summary.bytes_remaining)}")

    def run_deduplication(self, params: DeduplicationParams) -> List[DuplicateResult]:
        """Execute deduplication workflow."""
        command = DeduplicationCommand()
        try:
            results, stats = command.execute(
                params,
                stage_listener=self.on_stage,
                group_callback=self.on_group,
                bucket_callback=self.on_bucket
            )
        except Exception as e:
            ledger = command.ledger
            if ledger is not None and ledger.removed_paths:
                print(f"Removed {len(ledger.removed_paths)} files before the error:", file=sys.stderr)
                for path in ledger.removed_paths:
                    print(f"  {path}", file=sys.stderr)
            self.error_exit(f"Deduplication failed: {e}")

        if not self.quiet:
            print()
            print(f"(6 / 6) Removed {stats.freed_files} files totaling "
                  f"{ConvertUtils.describe_size(stats.freed_bytes)}")
            if not results:
                print("No duplicate groups found.")

        if self.verbose:
            print("\n" + stats.print_summary())

        return results

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"Warning: {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet

        if self.verbose >= 2:
            logging.getLogger().setLevel(logging.DEBUG)

        self.validate_args(args)
        self.params = self.create_params(args)
        if len(self.params.roots) < len(args.paths):
            self.warning("Duplicate directories were given, each is scanned once")

        self.print_header(self.params)
        self.run_deduplication(self.params)

        if self.verbose:
            elapsed = time.time() - self.start_time
            print(f"\nCompleted in {elapsed:.2f} seconds")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\nOperation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
