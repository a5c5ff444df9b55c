# topmark:header:start
#
#   project      : TreeQ
#   file         : exit_codes.py
#   file_relpath : src/treeq/core/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes associated with TreeQ errors.

TreeQ aligns with the BSD `sysexits` convention where practical, so that a
command-line frontend can map library errors to process exit statuses that
other tooling interprets consistently. The library itself never exits.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for TreeQ errors.

    Attributes:
        SUCCESS: Successful execution with no errors.
        FAILURE: Generic failure (non-specific error). Prefer a more specific
            code if available.
        USAGE_ERROR: Invalid invocation, e.g. an unknown output format name.
            Mirrors BSD ``EX_USAGE (64)``.
        DATA_ERROR: A value cannot be represented in the requested output
            (embedded NUL in NUL-separated mode, unencodable shape, broken
            alias). Mirrors BSD ``EX_DATAERR (65)``.
        UNSUPPORTED_FORMAT: The format is registered but has no encoder
            available in this library. Mirrors BSD ``EX_UNAVAILABLE (69)``.
        IO_ERROR: Routing or writing output failed. Mirrors BSD ``EX_IOERR (74)``.
        CONFIG_ERROR: Preferences file missing/invalid/malformed. Mirrors BSD
            ``EX_CONFIG (78)``.
    """

    SUCCESS = 0
    FAILURE = 1

    USAGE_ERROR = 64  # EX_USAGE
    DATA_ERROR = 65  # EX_DATAERR
    UNSUPPORTED_FORMAT = 69  # EX_UNAVAILABLE
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG
