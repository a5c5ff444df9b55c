# topmark:header:start
#
#   project      : TreeQ
#   file         : __init__.py
#   file_relpath : src/treeq/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration for TreeQ: logging setup and encoder preferences.

Exports the preference value objects and the process-wide "configured"
preferences that the output format registry bakes into its encoder factories.
"""

from __future__ import annotations

from treeq.config.preferences import (
    CsvPreferences,
    JsonPreferences,
    LuaPreferences,
    Preferences,
    PropertiesPreferences,
    ShellPreferences,
    XmlPreferences,
    YamlPreferences,
    get_configured_preferences,
    set_configured_preferences,
)

__all__ = [
    "CsvPreferences",
    "JsonPreferences",
    "LuaPreferences",
    "Preferences",
    "PropertiesPreferences",
    "ShellPreferences",
    "XmlPreferences",
    "YamlPreferences",
    "get_configured_preferences",
    "set_configured_preferences",
]
