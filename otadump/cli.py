"""Command-line interface: list or extract partitions of an Android payload.bin"""

import argparse
import logging
import sys
import time
from pathlib import Path

from . import scheduler
from .console import (Colors, format_size, print_error, print_header, print_info,
                      print_success, print_warning)
from .errors import PayloadError
from .manifest import describe_partition
from .payload import Payload
from .pipeline import ExtractConfig
from .progress import ProgressDisplay, ProgressSink, ProgressTracker


def generate_output_path(base_dir: Path) -> Path:
    return base_dir / f"extracted_{int(time.time())}"


def split_names(values: list[str]) -> list[str]:
    """Accept both `-p boot vbmeta` and `-p boot,vbmeta`"""
    names = []
    for value in values:
        names.extend(n for n in value.split(',') if n)
    return names


def cmd_list(payload: Payload):
    """List partitions"""
    print(f"Payload: {payload.path}")
    print(f"Block size: {payload.block_size}")
    print(f"Partitions: {len(payload.index)}\n")

    print(f"{'Name':<24} {'Size':>12} {'Ops':>6}")
    print("-" * 44)
    for part in payload.partitions():
        name, size, ops = describe_partition(part)
        print(f"{name:<24} {format_size(size):>12} {ops:>6}")


def cmd_extract(payload: Payload, names: list[str], output_dir: Path, workers: int,
                tracker: ProgressTracker = None) -> bool:
    """Extract partitions"""
    names = list(dict.fromkeys(names))
    missing = [n for n in names if n not in payload.index]
    for name in missing:
        print_warning(f"'{name}' not found, skipping")
    names = [n for n in names if n not in missing]
    if not names:
        print_error(f"Nothing to extract. Available: {', '.join(payload.partition_names())}")
        return False

    output_dir.mkdir(parents=True, exist_ok=True)
    total = sum(payload.lookup(n).new_partition_info.size for n in names)
    print_info(f"Extracting {len(names)} partition(s) ({format_size(total)}) to {output_dir}")

    try:
        if tracker is not None:
            with ProgressDisplay(tracker, total):
                written = scheduler.run(payload, names, output_dir, workers)
        else:
            written = scheduler.run(payload, names, output_dir, workers)
    except PayloadError as e:
        print_error(str(e))
        return False

    print_success(f"Extracted {len(written)} partition(s) to {output_dir}")
    return True


def parse_args(argv=None):
    """Parse command line arguments"""
    ap = argparse.ArgumentParser(
        prog='otadump',
        description='Extract partition images from an Android OTA payload.bin',
        epilog="Examples:\n"
               "  %(prog)s payload.bin -l\n"
               "  %(prog)s payload.bin -p boot,init_boot\n"
               "  %(prog)s payload.bin -p boot vendor_boot -o ./out -c 8\n",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    ap.add_argument('payload', type=Path)
    ap.add_argument('-l', '--list', action='store_true', help='List partitions')
    ap.add_argument('-p', '--partitions', nargs='+', metavar='NAME', default=[],
                    help='Partition(s) to extract, space or comma separated (default: all)')
    ap.add_argument('-o', '--output', type=Path,
                    help='Output directory (default: extracted_<timestamp> next to the payload)')
    ap.add_argument('-c', '--num-threads', type=int, default=scheduler.DEFAULT_WORKERS, metavar='N',
                    help=f'Number of partitions extracted in parallel (default: {scheduler.DEFAULT_WORKERS})')
    ap.add_argument('-q', '--quiet', action='store_true', help='No header or progress output')
    ap.add_argument('--no-verify', action='store_true', help='Skip SHA256 checks of operation data')
    ap.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    args = ap.parse_args(argv)
    if args.num_threads < 1:
        ap.error('--num-threads must be at least 1')
    return args


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    if not args.payload.exists():
        print_error(f"{args.payload} not found")
        return 1

    tracker = None if args.quiet or args.list else ProgressTracker()
    config = ExtractConfig(verify=not args.no_verify, progress=tracker or ProgressSink())

    try:
        payload = Payload.open(args.payload, config)
        if not args.quiet:
            print_header(f"Payload: {payload.header}")

        if args.list:
            cmd_list(payload)
            return 0

        names = split_names(args.partitions) or payload.partition_names()
        output_dir = args.output or generate_output_path(args.payload.resolve().parent)
        ok = cmd_extract(payload, names, output_dir, args.num_threads, tracker)
        return 0 if ok else 1
    except (PayloadError, OSError) as e:
        print_error(str(e))
        return 1


def run():
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print(f"\n{Colors.WARNING}Extraction cancelled by user{Colors.ENDC}")
        sys.exit(130)


if __name__ == '__main__':
    run()
