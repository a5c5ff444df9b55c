# topmark:header:start
#
#   project      : TreeQ
#   file         : __init__.py
#   file_relpath : src/treeq/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core TreeQ types: the matched node model, alias explosion and errors."""

from __future__ import annotations
