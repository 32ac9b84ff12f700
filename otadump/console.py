"""Terminal output helpers for the command-line interface"""

import sys

# Detect if running in interactive mode (TTY)
IS_INTERACTIVE = sys.stdout.isatty()


# ANSI color codes (only when interactive)
class Colors:
    if IS_INTERACTIVE:
        HEADER = '\033[95m'
        OKBLUE = '\033[94m'
        OKGREEN = '\033[92m'
        WARNING = '\033[93m'
        FAIL = '\033[91m'
        ENDC = '\033[0m'
        BOLD = '\033[1m'
    else:
        HEADER = ''
        OKBLUE = ''
        OKGREEN = ''
        WARNING = ''
        FAIL = ''
        ENDC = ''
        BOLD = ''


def print_header(text: str):
    print(f"\n{Colors.HEADER}{Colors.BOLD}{text}{Colors.ENDC}")


def print_success(text: str):
    symbol = "✓" if IS_INTERACTIVE else "[OK]"
    print(f"{Colors.OKGREEN}{symbol} {text}{Colors.ENDC}")


def print_error(text: str):
    symbol = "✗" if IS_INTERACTIVE else "[ERROR]"
    print(f"{Colors.FAIL}{symbol} {text}{Colors.ENDC}", file=sys.stderr)


def print_info(text: str):
    symbol = "ℹ" if IS_INTERACTIVE else "[INFO]"
    print(f"{Colors.OKBLUE}{symbol} {text}{Colors.ENDC}")


def print_warning(text: str):
    symbol = "⚠" if IS_INTERACTIVE else "[WARNING]"
    print(f"{Colors.WARNING}{symbol} {text}{Colors.ENDC}")


def format_size(size: int) -> str:
    """Format byte size for display"""
    for unit in ('B', 'KB', 'MB', 'GB'):
        if size < 1024 or unit == 'GB':
            return f"{size:.2f} {unit}" if unit != 'B' else f"{size} B"
        size /= 1024


def display_progress(written: int, total: int, last_reported: float) -> float:
    """Display extraction progress. Returns updated last_reported value."""
    if total <= 0:
        return last_reported

    percent = (written / total) * 100

    if IS_INTERACTIVE:
        bar_length = 40
        filled = int(bar_length * written / total)
        bar = '█' * filled + '░' * (bar_length - filled)
        print(f"\r  [{bar}] {percent:.1f}% ({format_size(written)}/{format_size(total)})",
              end='', flush=True)
        return last_reported
    else:
        if percent - last_reported >= 10:
            print(f"  Progress: {percent:.1f}% ({format_size(written)}/{format_size(total)})")
            return percent
        return last_reported
