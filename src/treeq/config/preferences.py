# topmark:header:start
#
#   project      : TreeQ
#   file         : preferences.py
#   file_relpath : src/treeq/config/preferences.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Encoder preferences.

Each output format reads its options from an immutable preferences object.
`Preferences` aggregates one object per encoder section; the process-wide
*configured* instance is what the output format registry hands to encoder
factories (see `treeq.printing.formats`).

Sections:
    ``yaml``, ``json``, ``properties``, ``csv``, ``tsv``, ``xml``, ``lua``,
    ``shell``. The same names are used as TOML tables in preference files
    (see `treeq.config.io`).

Design notes:
    - Keep the value objects frozen; derive variants with
      `Preferences.with_overrides` instead of mutating.
    - The configured instance is global state. Tests that change it must
      restore it afterwards.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from typing import Final

from treeq.config.logging import TreeqLogger, get_logger

logger: TreeqLogger = get_logger(__name__)


@dataclass(frozen=True)
class YamlPreferences:
    """Options for the YAML encoder.

    Attributes:
        indent: Spaces per nesting level (2..9).
        colors_enabled: Color comment lines with ANSI escapes.
        print_doc_separators: Emit ``---`` between documents.
        unwrap_scalar: Print top-level scalars without quoting.
    """

    indent: int = 2
    colors_enabled: bool = False
    print_doc_separators: bool = True
    unwrap_scalar: bool = True


@dataclass(frozen=True)
class JsonPreferences:
    """Options for the JSON encoder.

    Attributes:
        indent: Spaces per nesting level; ``0`` prints compact single-line JSON.
        unwrap_scalar: Print top-level strings raw instead of as JSON strings.
    """

    indent: int = 2
    unwrap_scalar: bool = False


@dataclass(frozen=True)
class PropertiesPreferences:
    """Options for the Java-properties encoder."""

    unwrap_scalar: bool = False
    key_value_separator: str = " = "
    use_array_brackets: bool = False


@dataclass(frozen=True)
class CsvPreferences:
    """Options for the delimiter-separated encoders (CSV and TSV)."""

    separator: str = ","


@dataclass(frozen=True)
class XmlPreferences:
    """Options for the XML encoder.

    Attributes:
        indent: Spaces per nesting level; ``0`` disables pretty printing.
        attribute_prefix: Mapping keys with this prefix become attributes.
        content_name: Mapping key holding an element's text content.
    """

    indent: int = 2
    attribute_prefix: str = "+@"
    content_name: str = "+content"


@dataclass(frozen=True)
class LuaPreferences:
    """Options for the Lua encoder.

    Attributes:
        doc_prefix: Text written before each document's table literal.
        doc_suffix: Text written after each document's table literal.
        unquoted_keys: Write identifier keys bare (``key = v``) instead of ``["key"] = v``.
        globals: Write top-level mapping entries as global assignments.
    """

    doc_prefix: str = "return "
    doc_suffix: str = ";\n"
    unquoted_keys: bool = False
    globals: bool = False


@dataclass(frozen=True)
class ShellPreferences:
    """Options for the shell-variables encoder."""

    key_separator: str = "_"


@dataclass(frozen=True)
class Preferences:
    """All encoder preferences, one section per encoder family."""

    yaml: YamlPreferences = field(default_factory=YamlPreferences)
    json: JsonPreferences = field(default_factory=JsonPreferences)
    properties: PropertiesPreferences = field(default_factory=PropertiesPreferences)
    csv: CsvPreferences = field(default_factory=CsvPreferences)
    tsv: CsvPreferences = field(default_factory=lambda: CsvPreferences(separator="\t"))
    xml: XmlPreferences = field(default_factory=XmlPreferences)
    lua: LuaPreferences = field(default_factory=LuaPreferences)
    shell: ShellPreferences = field(default_factory=ShellPreferences)

    @classmethod
    def section_names(cls) -> tuple[str, ...]:
        """Return the section names in declaration order."""
        return tuple(f.name for f in fields(cls))

    def with_overrides(self, section: str, **values: object) -> Preferences:
        """Return a copy with ``values`` replaced in ``section``.

        Args:
            section (str): Section name (``yaml``, ``json``, ...).
            **values (object): Field overrides for that section.

        Returns:
            Preferences: A new preferences object.

        Raises:
            KeyError: If ``section`` is not a known section.
            TypeError: If a field name is not valid for the section.
        """
        if section not in self.section_names():
            raise KeyError(f"Unknown preferences section: {section}")
        current: object = getattr(self, section)
        updated: object = replace(current, **values)  # type: ignore[type-var]
        return replace(self, **{section: updated})

    def to_dict(self) -> dict[str, dict[str, object]]:
        """Return a plain nested dict (suitable for TOML rendering)."""
        return {name: asdict(getattr(self, name)) for name in self.section_names()}


DEFAULT_PREFERENCES: Final[Preferences] = Preferences()

_configured: Preferences = DEFAULT_PREFERENCES


def get_configured_preferences() -> Preferences:
    """Return the process-wide preferences used by registry encoder factories."""
    return _configured


def set_configured_preferences(preferences: Preferences | None) -> None:
    """Replace the process-wide preferences; ``None`` restores the defaults."""
    global _configured
    _configured = preferences if preferences is not None else DEFAULT_PREFERENCES
    logger.debug("Configured preferences: %s", _configured)
