# topmark:header:start
#
#   project      : TreeQ
#   file         : constants.py
#   file_relpath : src/treeq/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TreeQ Constants."""

from __future__ import annotations

from typing import Final

# Leading-content prefix written by decoders when a document boundary is
# already represented in the node's own leading content.
DOC_SEPARATOR_SENTINEL: Final[str] = "$treeqDocSeparator$"

NUL_BYTE: Final[bytes] = b"\x00"

# Chunk size used when piping the appendix stream to its sink.
APPENDIX_COPY_BUFFER_SIZE: Final[int] = 64 * 1024

# Preference files
PREFERENCES_FILE_NAME: Final[str] = "treeq.toml"
PYPROJECT_TOML_NAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_TABLE: Final[tuple[str, str]] = ("tool", "treeq")

# Environment variable consulted by `treeq.config.logging.resolve_env_log_level`
LOG_LEVEL_ENV_VAR: Final[str] = "TREEQ_LOG_LEVEL"
