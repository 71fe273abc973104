# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from enum import IntEnum

# ============================================================================
# CLI Names
# ============================================================================

CLI_NAME = "rustsmith"
PACKAGE_NAME = "rustsmith"

# ============================================================================
# Exit Codes (BSD sysexits.h where one applies)
# ============================================================================

EX_USAGE = 64
EX_DATAERR = 65
EX_SOFTWARE = 70
EX_CONFIG = 78


class ExitCode(IntEnum):
    SUCCESS = 0
    ERROR = 1
    USAGE = EX_USAGE
    DATAERR = EX_DATAERR
    SOFTWARE = EX_SOFTWARE
    CONFIG = EX_CONFIG
    INTERRUPTED = 130  # Standard SIGINT exit code
