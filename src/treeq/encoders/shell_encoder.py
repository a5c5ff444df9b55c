# topmark:header:start
#
#   project      : TreeQ
#   file         : shell_encoder.py
#   file_relpath : src/treeq/encoders/shell_encoder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shell-variables encoder.

Every scalar leaf becomes one ``name=value`` assignment. The name is the leaf's
path joined with ``key_separator``; characters that are not valid in a shell
identifier are replaced by ``_`` and a leading digit gets a ``_`` prefix.
Values are quoted with `shlex.quote`, so the output can be sourced safely:

```sh
person_name='Mike Wazowski'
person_pets_0=cat
```
"""

from __future__ import annotations

import re
import shlex
from typing import TYPE_CHECKING

from treeq.core.errors import EncodeError
from treeq.core.node import Kind
from treeq.encoders.base import BaseEncoder, iter_leaf_paths, write_string

if TYPE_CHECKING:
    from treeq.config.preferences import ShellPreferences
    from treeq.core.node import CandidateNode
    from treeq.encoders.base import Writable

_INVALID_NAME_CHARS: re.Pattern[str] = re.compile(r"[^A-Za-z0-9_]")


class ShellEncoder(BaseEncoder):
    """Encoder for shell variable assignments."""

    def __init__(self, preferences: ShellPreferences) -> None:
        self.preferences: ShellPreferences = preferences

    def encode(self, sink: Writable, node: CandidateNode) -> None:
        target: CandidateNode = node.resolved()
        if target.kind is Kind.SCALAR:
            raise EncodeError("shell variables encoding requires a map or an array, got: scalar")
        for path, leaf in iter_leaf_paths(target):
            write_string(sink, f"{self.variable_name(path)}={shlex.quote(leaf.value)}\n")

    def variable_name(self, path: tuple[str | int, ...]) -> str:
        """Return the shell identifier for a leaf path."""
        joined: str = self.preferences.key_separator.join(str(part) for part in path)
        name: str = _INVALID_NAME_CHARS.sub("_", joined)
        if not name or name[0].isdigit():
            name = "_" + name
        return name
