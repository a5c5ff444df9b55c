# topmark:header:start
#
#   project      : TreeQ
#   file         : lua_encoder.py
#   file_relpath : src/treeq/encoders/lua_encoder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Lua encoder.

Each node is written as a Lua table constructor wrapped in ``doc_prefix`` and
``doc_suffix`` (``return {...};`` by default), indented with tabs:

```lua
return {
	["name"] = "Mike";
	["pets"] = {
		"cat",
	};
};
```

With ``unquoted_keys``, keys that are valid Lua names are written bare. With
``globals``, the entries of a top-level mapping are written as global
assignments instead of a returned table.
"""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING, Final, cast

from treeq.core.errors import EncodeError
from treeq.core.node import BOOL_TAG, FLOAT_TAG, INT_TAG, NULL_TAG, Kind
from treeq.encoders.base import (
    BaseEncoder,
    comment_lines,
    scalar_to_python,
    write_comment_block,
    write_string,
)

if TYPE_CHECKING:
    from treeq.config.preferences import LuaPreferences
    from treeq.core.node import CandidateNode
    from treeq.encoders.base import Writable

_LUA_KEYWORDS: Final[frozenset[str]] = frozenset(
    {
        "and",
        "break",
        "do",
        "else",
        "elseif",
        "end",
        "false",
        "for",
        "function",
        "goto",
        "if",
        "in",
        "local",
        "nil",
        "not",
        "or",
        "repeat",
        "return",
        "then",
        "true",
        "until",
        "while",
    }
)
_LUA_NAME: re.Pattern[str] = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_STRING_ESCAPES: Final[dict[str, str]] = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\v": "\\v",
}


def is_lua_name(text: str) -> bool:
    """Return True if ``text`` can be written as a bare Lua name."""
    return bool(_LUA_NAME.fullmatch(text)) and text not in _LUA_KEYWORDS


def quote_lua_string(text: str) -> str:
    """Return ``text`` as a double-quoted Lua string literal."""
    out: list[str] = []
    for char in text:
        escaped: str | None = _STRING_ESCAPES.get(char)
        if escaped is not None:
            out.append(escaped)
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            out.append(f"\\{ord(char):03d}")
        else:
            out.append(char)
    return '"' + "".join(out) + '"'


class LuaEncoder(BaseEncoder):
    """Encoder for Lua table output."""

    def __init__(self, preferences: LuaPreferences) -> None:
        self.preferences: LuaPreferences = preferences

    def print_leading_content(self, sink: Writable, content: str) -> None:
        write_comment_block(sink, content, "--")

    def encode(self, sink: Writable, node: CandidateNode) -> None:
        target: CandidateNode = node.resolved()
        if node.head_comment:
            write_comment_block(sink, node.head_comment, "--")
        if self.preferences.globals and target.kind is Kind.MAPPING:
            self._encode_globals(sink, target)
            return
        body: str = self.render(target, 0)
        write_string(sink, self.preferences.doc_prefix + body + self.preferences.doc_suffix)

    def _encode_globals(self, sink: Writable, node: CandidateNode) -> None:
        for key, value in node.pairs():
            name: str = key.resolved().value
            target: str = name if is_lua_name(name) else f"_G[{quote_lua_string(name)}]"
            rendered: str = self.render(value, 0)
            write_string(sink, f"{target} = {rendered};{_line_comment(key, value)}\n")

    def render(self, node: CandidateNode, level: int) -> str:
        """Return the Lua expression for ``node`` at nesting ``level``."""
        node = node.resolved()
        if node.kind is Kind.SCALAR:
            return self._render_scalar(node)
        if not node.content:
            return "{}"

        inner: str = "\t" * (level + 1)
        lines: list[str] = ["{"]
        if node.kind is Kind.SEQUENCE:
            for child in node.content:
                rendered: str = self.render(child, level + 1)
                lines.append(f"{inner}{rendered},{_line_comment(child)}")
        elif node.kind is Kind.MAPPING:
            for key, value in node.pairs():
                rendered = self.render(value, level + 1)
                entry: str = f"{self._render_key(key)} = {rendered};"
                lines.append(f"{inner}{entry}{_line_comment(key, value)}")
        else:
            raise EncodeError(f"Cannot encode unresolved alias '*{node.value}' as Lua")
        lines.append("\t" * level + "}")
        return "\n".join(lines)

    def _render_key(self, key: CandidateNode) -> str:
        name: str = key.resolved().value
        if self.preferences.unquoted_keys and is_lua_name(name):
            return name
        return f"[{quote_lua_string(name)}]"

    @staticmethod
    def _render_scalar(node: CandidateNode) -> str:
        if node.tag == NULL_TAG:
            return "nil"
        if node.tag == BOOL_TAG:
            return "true" if scalar_to_python(node) else "false"
        if node.tag == INT_TAG:
            return str(scalar_to_python(node))
        if node.tag == FLOAT_TAG:
            number: float = cast("float", scalar_to_python(node))
            if math.isnan(number):
                return "(0/0)"
            if math.isinf(number):
                return "(1/0)" if number > 0 else "(-1/0)"
            return repr(number)
        return quote_lua_string(node.value)


def _line_comment(*nodes: CandidateNode) -> str:
    """Return the first line comment among ``nodes`` as a trailing ``-- c``."""
    for node in nodes:
        lines: list[str] = comment_lines(node.line_comment)
        if lines:
            return " -- " + " ".join(lines)
    return ""
