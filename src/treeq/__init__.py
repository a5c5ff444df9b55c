# topmark:header:start
#
#   project      : TreeQ
#   file         : __init__.py
#   file_relpath : src/treeq/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TreeQ package.

TreeQ is the result-emission stage of a structured-data query tool. It takes
the ordered nodes matched by a query and prints them through a format encoder
(YAML, JSON, properties, CSV/TSV, XML, TOML, shell variables, Lua) into one or
more destination streams, keeping document boundaries, comments and anchors
intact and optionally framing every result as a NUL-terminated record.
"""

from __future__ import annotations
