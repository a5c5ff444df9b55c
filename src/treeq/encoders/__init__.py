# topmark:header:start
#
#   project      : TreeQ
#   file         : __init__.py
#   file_relpath : src/treeq/encoders/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Output encoders, one per supported format.

Encoders are normally obtained through the output format registry
(`treeq.printing.formats.construct_encoder`), which binds them to the
configured preferences.
"""

from __future__ import annotations

from treeq.encoders.base import BaseEncoder, Encoder, Sink, Writable
from treeq.encoders.csv_encoder import CsvEncoder
from treeq.encoders.json_encoder import JsonEncoder
from treeq.encoders.lua_encoder import LuaEncoder
from treeq.encoders.properties_encoder import PropertiesEncoder
from treeq.encoders.shell_encoder import ShellEncoder
from treeq.encoders.toml_encoder import TomlEncoder
from treeq.encoders.xml_encoder import XmlEncoder
from treeq.encoders.yaml_encoder import YamlEncoder

__all__ = [
    "BaseEncoder",
    "CsvEncoder",
    "Encoder",
    "JsonEncoder",
    "LuaEncoder",
    "PropertiesEncoder",
    "ShellEncoder",
    "Sink",
    "TomlEncoder",
    "Writable",
    "XmlEncoder",
    "YamlEncoder",
]
