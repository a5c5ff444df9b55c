# topmark:header:start
#
#   project      : TreeQ
#   file         : io.py
#   file_relpath : src/treeq/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load and render encoder preferences as TOML.

Preferences live either in a dedicated ``treeq.toml`` file, where each encoder
section is a top-level table, or under ``[tool.treeq]`` in ``pyproject.toml``:

```toml
[yaml]
indent = 4
unwrap_scalar = false

[csv]
separator = ";"
```

Parsing is done with `tomlkit` and returned as plain `dict` structures. Values
of the wrong type are logged and ignored (the current value is kept) so that a
typo in one key does not discard the whole file; unparsable files raise
`treeq.core.errors.PreferencesError`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields, replace
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from treeq.config.logging import get_logger
from treeq.config.preferences import Preferences
from treeq.constants import PREFERENCES_FILE_NAME, PYPROJECT_TOML_NAME, PYPROJECT_TOOL_TABLE
from treeq.core.errors import PreferencesError

if TYPE_CHECKING:
    from pathlib import Path

    from treeq.config.logging import TreeqLogger

TomlTable = dict[str, Any]

logger: TreeqLogger = get_logger(__name__)


# --- TOML file I/O ---


def load_toml_dict(path: Path) -> TomlTable:
    """Parse a TOML file into a plain dict.

    Args:
        path (Path): Path to the TOML file.

    Returns:
        TomlTable: The parsed document.

    Raises:
        PreferencesError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PreferencesError(f"Cannot read preferences file {path}: {exc}") from exc
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TomlkitParseError as exc:
        raise PreferencesError(f"Invalid TOML in {path}: {exc}") from exc
    data: Any = doc.unwrap()
    logger.debug("Loaded TOML from %s: %s", path, data)
    return cast("TomlTable", data)


def extract_preferences_table(data: TomlTable, path: Path) -> TomlTable:
    """Return the table holding TreeQ preferences within a parsed file.

    For ``pyproject.toml`` this is ``[tool.treeq]`` (empty when absent); any
    other file holds the sections at top level.
    """
    if path.name != PYPROJECT_TOML_NAME:
        return data
    table: Any = data
    for part in PYPROJECT_TOOL_TABLE:
        table = table.get(part, {}) if isinstance(table, Mapping) else {}
    if not isinstance(table, Mapping):
        logger.warning("Ignoring non-table [%s] in %s", ".".join(PYPROJECT_TOOL_TABLE), path)
        return {}
    return dict(cast("Mapping[str, Any]", table))


def discover_preferences_file(start: Path) -> Path | None:
    """Find the nearest preferences file at or above ``start``.

    In each directory, ``treeq.toml`` wins over ``pyproject.toml``; a
    ``pyproject.toml`` only counts when it has a ``[tool.treeq]`` table.

    Args:
        start (Path): Directory (or file) where the upward search begins.

    Returns:
        Path | None: The preferences file, or ``None`` if none was found.
    """
    current: Path = start.resolve()
    if current.is_file():
        current = current.parent
    for directory in (current, *current.parents):
        candidate: Path = directory / PREFERENCES_FILE_NAME
        if candidate.is_file():
            return candidate
        pyproject: Path = directory / PYPROJECT_TOML_NAME
        if pyproject.is_file() and extract_preferences_table(load_toml_dict(pyproject), pyproject):
            return pyproject
    return None


# --- Value getters ---


def get_string_value(table: Mapping[str, Any], key: str, default: str) -> str:
    """Extract a string value; wrong types are logged and ``default`` is returned."""
    value: Any = table.get(key, default)
    if isinstance(value, str):
        return value
    logger.warning("Expected a string for '%s', got %r; keeping %r", key, value, default)
    return default


def get_bool_value(table: Mapping[str, Any], key: str, default: bool) -> bool:
    """Extract a boolean value; wrong types are logged and ``default`` is returned."""
    value: Any = table.get(key, default)
    if isinstance(value, bool):
        return value
    logger.warning("Expected a boolean for '%s', got %r; keeping %r", key, value, default)
    return default


def get_int_value(table: Mapping[str, Any], key: str, default: int) -> int:
    """Extract an integer value; wrong types are logged and ``default`` is returned.

    Booleans are rejected even though ``bool`` subclasses ``int``.
    """
    value: Any = table.get(key, default)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    logger.warning("Expected an integer for '%s', got %r; keeping %r", key, value, default)
    return default


_GETTERS = {
    str: get_string_value,
    bool: get_bool_value,
    int: get_int_value,
}


# --- Preferences ---


def _apply_section(current: object, table: Mapping[str, Any], section: str) -> object:
    """Return ``current`` updated with the keys of ``table`` it knows about."""
    changes: dict[str, object] = {}
    known: set[str] = set()
    for f in fields(current):  # type: ignore[arg-type]
        known.add(f.name)
        if f.name not in table:
            continue
        default: Any = getattr(current, f.name)
        getter = _GETTERS[type(default)]
        changes[f.name] = getter(table, f.name, default)
    for key in table:
        if key not in known:
            logger.warning("Ignoring unknown key '%s' in [%s]", key, section)
    return replace(current, **changes) if changes else current  # type: ignore[type-var]


def preferences_from_dict(
    table: Mapping[str, Any],
    base: Preferences | None = None,
) -> Preferences:
    """Build preferences from a parsed TOML table.

    Args:
        table (Mapping[str, Any]): Mapping of section name to section table.
        base (Preferences | None): Preferences to start from (defaults when ``None``).

    Returns:
        Preferences: ``base`` with every recognized value applied.
    """
    prefs: Preferences = base if base is not None else Preferences()
    sections: tuple[str, ...] = Preferences.section_names()
    for name, section in table.items():
        if name not in sections:
            logger.warning("Ignoring unknown preferences section [%s]", name)
            continue
        if not isinstance(section, Mapping):
            logger.warning("Ignoring [%s]: expected a table, got %r", name, section)
            continue
        updated: object = _apply_section(
            getattr(prefs, name), cast("Mapping[str, Any]", section), name
        )
        prefs = replace(prefs, **{name: updated})
    return prefs


def load_preferences(path: Path, base: Preferences | None = None) -> Preferences:
    """Load preferences from ``treeq.toml`` or ``pyproject.toml``.

    Args:
        path (Path): The preferences file.
        base (Preferences | None): Preferences to start from (defaults when ``None``).

    Returns:
        Preferences: The loaded preferences.

    Raises:
        PreferencesError: If the file cannot be read or parsed.
    """
    data: TomlTable = load_toml_dict(path)
    return preferences_from_dict(extract_preferences_table(data, path), base)


def preferences_to_toml(preferences: Preferences) -> str:
    """Render preferences as a ``treeq.toml`` document.

    Args:
        preferences (Preferences): The preferences to render.

    Returns:
        str: The rendered TOML document.
    """
    doc: tomlkit.TOMLDocument = tomlkit.document()
    for name, section in preferences.to_dict().items():
        table = tomlkit.table()
        for key, value in section.items():
            table.add(key, value)
        doc.add(name, table)
    return tomlkit.dumps(doc)
