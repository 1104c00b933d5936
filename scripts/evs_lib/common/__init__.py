"""
evs_lib.common - Shared utilities for EVS tools

This module provides:
- colors: ANSI color codes and logging functions
- evsadm: evsadm command execution utilities
"""

from .colors import Colors, log, warn, error, info, deprecation_warning
from .evsadm import EVSADM_BIN, EVSADM_TIMEOUT, evsadm_available, evsadm_exec

__all__ = [
    'Colors', 'log', 'warn', 'error', 'info', 'deprecation_warning',
    'EVSADM_BIN', 'EVSADM_TIMEOUT', 'evsadm_available', 'evsadm_exec',
]
