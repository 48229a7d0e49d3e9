import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .core.config import DEFAULT_EXCLUDES, ScanSettings
from .core.registry import load_registry
from .core.reporting import Reporter
from .core.scanner import ParserManager, configure_logging


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="basescan",
        description="Detect web-platform feature usage across React, Vue, Svelte and vanilla sources.",
    )
    sub = p.add_subparsers(dest="mode", required=True)

    # dir mode
    d = sub.add_parser("dir", help="Scan a directory recursively.")
    d.add_argument("path", type=Path, help="Directory to scan recursively.")
    d.add_argument("--out", type=Path, default=Path("./scan_output"), help="Output directory.")
    d.add_argument("--workers", type=int, default=10, help="Number of files parsed concurrently.")
    d.add_argument("--exclude", default=",".join(DEFAULT_EXCLUDES), help="Entry name globs to skip, comma-separated.")
    d.add_argument("--max-depth", type=int, default=10, help="Maximum directory depth to descend.")
    d.add_argument("--features", type=Path, default=None, help="Feature registry JSON (defaults to $BASESCAN_FEATURES, then the bundled snapshot).")
    d.add_argument("--no-progress", action="store_true", help="Disable the progress bar during directory scans.")
    d.add_argument("--verbose", action="store_true", help="Enable verbose logging output.")

    # file mode
    f = sub.add_parser("file", help="Scan a single file.")
    f.add_argument("path", type=Path, help="File to scan.")
    f.add_argument("--out", type=Path, default=Path("./scan_output"), help="Output directory.")
    f.add_argument("--features", type=Path, default=None, help="Feature registry JSON.")
    f.add_argument("--verbose", action="store_true", help="Enable verbose logging output.")

    return p


def run_dir(args: argparse.Namespace) -> int:
    if not args.path.is_dir():
        print(f"Not a directory: {args.path}", file=sys.stderr)
        return 2

    logger = configure_logging(verbose=args.verbose)
    registry = load_registry(args.features)
    settings = ScanSettings(
        concurrency=args.workers,
        max_depth=args.max_depth,
        exclude_dirs=[e.strip() for e in args.exclude.split(",") if e.strip()],
        show_progress=not args.no_progress,
    )
    manager = ParserManager(registry=registry, settings=settings, logger=logger)

    files = manager.scan_directory(args.path)
    features = manager.parse_files(files)

    summary = Reporter(args.out, registry).write_all(features, len(files))
    print(f"Scanned {summary['files']} file(s); {summary['features']} feature(s) written to {args.out}")
    return 0


def run_file(args: argparse.Namespace) -> int:
    if not args.path.is_file():
        print(f"Not a file: {args.path}", file=sys.stderr)
        return 2

    logger = configure_logging(verbose=args.verbose)
    registry = load_registry(args.features)
    manager = ParserManager(registry=registry, logger=logger)
    if not manager.can_parse_file(args.path):
        print(f"Unsupported file type: {args.path.suffix or args.path.name}", file=sys.stderr)
        return 2

    features = manager.parse_files([args.path])

    summary = Reporter(args.out, registry).write_all(features, 1)
    print(f"{summary['features']} feature(s) written to {args.out}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.mode == "dir":
        return run_dir(args)
    elif args.mode == "file":
        return run_file(args)
    else:
        parser.print_help()
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
