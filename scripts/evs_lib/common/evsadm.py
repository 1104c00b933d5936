"""
evsadm command execution utilities.

Runs compiled argument sequences against the EVS control utility.
"""

import shutil
import subprocess
from pathlib import Path
from typing import List, Tuple


EVSADM_BIN = "/usr/sbin/evsadm"
EVSADM_TIMEOUT = 30


def evsadm_available(binary: str = EVSADM_BIN) -> bool:
    """Check whether the evsadm binary is installed."""
    return Path(binary).exists() or shutil.which(binary) is not None


def evsadm_exec(argv: List[str], timeout: int = EVSADM_TIMEOUT) -> Tuple[bool, str]:
    """
    Execute an evsadm command line and capture output.

    Args:
        argv: Full command line, binary first
            (e.g., ["/usr/sbin/evsadm", "set-controlprop", "-p", "vlan-range=10-20"])
        timeout: Seconds to wait before giving up

    Returns:
        Tuple of (success: bool, output: str)
        On failure, output contains the error message.
    """
    if not argv:
        return False, "Empty command"

    if not evsadm_available(argv[0]):
        return False, f"evsadm not found: {argv[0]}"

    try:
        result = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            timeout=timeout
        )
        output = result.stdout.strip()
        if result.returncode != 0:
            return False, result.stderr.strip() or f"{argv[0]} exited with status {result.returncode}"
        return True, output
    except subprocess.TimeoutExpired:
        return False, "Command timed out"
    except OSError as e:
        return False, str(e)
