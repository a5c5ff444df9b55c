# topmark:header:start
#
#   project      : TreeQ
#   file         : errors.py
#   file_relpath : src/treeq/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by TreeQ.

Usage:
    Library code raises these exceptions and never prints or exits. Each class
    carries an ``exit_code`` so a command-line frontend can translate the error
    into a process status without inspecting messages.

Taxonomy:
    - configuration errors: `FormatNotFoundError`, `EncoderUnavailableError`,
      `PreferencesError`;
    - upstream errors surfaced while printing: `ExplodeError`, `EncodeError`,
      `PrinterWriterError` (``OSError`` from sinks propagates unchanged);
    - data-representation conflict: `NulSeparatorConflictError`, the only
      error the results printer originates itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from treeq.core.exit_codes import ExitCode

if TYPE_CHECKING:
    from collections.abc import Sequence


class TreeqError(Exception):
    """Base class for all TreeQ errors."""

    exit_code: ExitCode = ExitCode.FAILURE


class FormatNotFoundError(TreeqError, LookupError):
    """Unknown output format name.

    Attributes:
        name: The name that failed to resolve.
        available: The display string listing valid names (``yaml|y|json|...``).
    """

    exit_code = ExitCode.USAGE_ERROR

    def __init__(self, name: str, available: str) -> None:
        self.name: str = name
        self.available: str = available
        super().__init__(f"unknown format '{name}' please use [{available}]")


class EncoderUnavailableError(TreeqError):
    """The output format is a reserved slot without an encoder factory."""

    exit_code = ExitCode.UNSUPPORTED_FORMAT


class PreferencesError(TreeqError):
    """Error for malformed or unreadable encoder preference files."""

    exit_code = ExitCode.CONFIG_ERROR


class ExplodeError(TreeqError):
    """Alias explosion failed (unresolved alias or alias cycle)."""

    exit_code = ExitCode.DATA_ERROR


class EncodeError(TreeqError):
    """An encoder cannot represent the given node."""

    exit_code = ExitCode.DATA_ERROR


class PrinterWriterError(TreeqError):
    """A writer provider cannot route a node to a sink."""

    exit_code = ExitCode.IO_ERROR


class NulSeparatorConflictError(TreeqError):
    """A value contains a NUL byte while NUL-separated output is enabled."""

    exit_code = ExitCode.DATA_ERROR

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "Can't serialize value because it contains NUL char "
            "and you are using NUL separated output"
        )


def format_choices(names: Sequence[str]) -> str:
    """Join display names the way format listings show them (``a|b|c``)."""
    return "|".join(names)
