"""
ANSI color codes and logging utilities for EVS tools.

Warnings about deprecated input go to stderr so compiled arguments on
stdout can be piped.
"""

import sys


class Colors:
    """ANSI color escape codes for terminal output."""
    RED = "\033[0;31m"
    GREEN = "\033[0;32m"
    YELLOW = "\033[1;33m"
    CYAN = "\033[0;36m"
    NC = "\033[0m"  # Reset


def log(msg: str) -> None:
    """Log a success message in green."""
    print(f"{Colors.GREEN}[+]{Colors.NC} {msg}")


def warn(msg: str, file=None) -> None:
    """Log a warning message in yellow."""
    print(f"{Colors.YELLOW}[!]{Colors.NC} {msg}", file=file)


def error(msg: str) -> None:
    """Log an error message in red."""
    print(f"{Colors.RED}[ERROR]{Colors.NC} {msg}")


def info(msg: str) -> None:
    """Log an informational message in cyan."""
    print(f"{Colors.CYAN}[i]{Colors.NC} {msg}")


def deprecation_warning(msg: str) -> None:
    """Report use of a deprecated input format on stderr. Never fails."""
    warn(f"DEPRECATED: {msg}", file=sys.stderr)
