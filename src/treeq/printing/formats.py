# topmark:header:start
#
#   project      : TreeQ
#   file         : formats.py
#   file_relpath : src/treeq/printing/formats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Output format registry.

The registry is a fixed, ordered tuple of `OutputFormat` descriptors. Each
descriptor pairs a canonical name and its aliases with an encoder factory;
factories read the configured preferences
(`treeq.config.preferences.get_configured_preferences`) at construction time.

Typical usage:
    ```python
    from treeq.printing.formats import construct_encoder, resolve_output_format

    encoder = construct_encoder(resolve_output_format("json"))
    ```

The ``base64``, ``uri`` and ``sh`` slots are reserved: their encoders belong
to the command-line frontend, so the descriptors carry no name and no factory.
They keep their place in the declaration order but never resolve.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from treeq.config.logging import get_logger
from treeq.config.preferences import get_configured_preferences
from treeq.core.errors import EncoderUnavailableError, FormatNotFoundError, format_choices
from treeq.encoders import (
    CsvEncoder,
    JsonEncoder,
    LuaEncoder,
    PropertiesEncoder,
    ShellEncoder,
    TomlEncoder,
    XmlEncoder,
    YamlEncoder,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from treeq.config.logging import TreeqLogger
    from treeq.encoders.base import Encoder

logger: TreeqLogger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class OutputFormat:
    """Descriptor of one output format.

    Attributes:
        name: Canonical name (empty for reserved slots).
        aliases: Alternative names, the first one being the short form.
        factory: Zero-argument encoder constructor, or ``None`` for reserved slots.
    """

    name: str
    aliases: tuple[str, ...] = ()
    factory: Callable[[], Encoder] | None = None

    def matches_name(self, name: str) -> bool:
        """Return True if ``name`` is the canonical name or one of the aliases.

        The empty string never matches, so reserved slots are not resolvable.
        """
        if not name:
            return False
        return name == self.name or name in self.aliases

    def get_configured_encoder(self) -> Encoder:
        """Build the encoder for this format from the configured preferences.

        Raises:
            EncoderUnavailableError: If the format has no encoder factory.
        """
        if self.factory is None:
            raise EncoderUnavailableError(
                f"output format '{self.name or '<reserved>'}' has no encoder in this package"
            )
        return self.factory()

    def display_names(self) -> tuple[str, ...]:
        """Return the names shown in format listings: canonical name and first alias."""
        shown: list[str] = []
        if self.name:
            shown.append(self.name)
        if self.aliases:
            shown.append(self.aliases[0])
        return tuple(shown)

    def __repr__(self) -> str:
        return f"OutputFormat(name={self.name!r}, aliases={self.aliases!r})"


YAML_OUTPUT_FORMAT: Final[OutputFormat] = OutputFormat(
    "yaml", ("y", "yml"), lambda: YamlEncoder(get_configured_preferences().yaml)
)
JSON_OUTPUT_FORMAT: Final[OutputFormat] = OutputFormat(
    "json", ("j",), lambda: JsonEncoder(get_configured_preferences().json)
)
PROPERTIES_OUTPUT_FORMAT: Final[OutputFormat] = OutputFormat(
    "props",
    ("p", "properties"),
    lambda: PropertiesEncoder(get_configured_preferences().properties),
)
CSV_OUTPUT_FORMAT: Final[OutputFormat] = OutputFormat(
    "csv", ("c",), lambda: CsvEncoder(get_configured_preferences().csv)
)
TSV_OUTPUT_FORMAT: Final[OutputFormat] = OutputFormat(
    "tsv", ("t",), lambda: CsvEncoder(get_configured_preferences().tsv)
)
XML_OUTPUT_FORMAT: Final[OutputFormat] = OutputFormat(
    "xml", ("x",), lambda: XmlEncoder(get_configured_preferences().xml)
)
# Reserved slots
BASE64_OUTPUT_FORMAT: Final[OutputFormat] = OutputFormat("")
URI_OUTPUT_FORMAT: Final[OutputFormat] = OutputFormat("")
SH_OUTPUT_FORMAT: Final[OutputFormat] = OutputFormat("")

TOML_OUTPUT_FORMAT: Final[OutputFormat] = OutputFormat("toml", (), TomlEncoder)
SHELL_OUTPUT_FORMAT: Final[OutputFormat] = OutputFormat(
    "shell", ("s", "sh"), lambda: ShellEncoder(get_configured_preferences().shell)
)
LUA_OUTPUT_FORMAT: Final[OutputFormat] = OutputFormat(
    "lua", ("l",), lambda: LuaEncoder(get_configured_preferences().lua)
)

OUTPUT_FORMATS: Final[tuple[OutputFormat, ...]] = (
    YAML_OUTPUT_FORMAT,
    JSON_OUTPUT_FORMAT,
    PROPERTIES_OUTPUT_FORMAT,
    CSV_OUTPUT_FORMAT,
    TSV_OUTPUT_FORMAT,
    XML_OUTPUT_FORMAT,
    BASE64_OUTPUT_FORMAT,
    URI_OUTPUT_FORMAT,
    SH_OUTPUT_FORMAT,
    TOML_OUTPUT_FORMAT,
    SHELL_OUTPUT_FORMAT,
    LUA_OUTPUT_FORMAT,
)


def describe_available_formats() -> str:
    """Return the user-facing list of format names (``yaml|y|json|j|...``)."""
    names: list[str] = []
    for fmt in OUTPUT_FORMATS:
        names.extend(fmt.display_names())
    return format_choices(names)


def resolve_output_format(name: str) -> OutputFormat:
    """Return the first registered format whose name or aliases contain ``name``.

    Args:
        name (str): Canonical name or alias, matched exactly.

    Returns:
        OutputFormat: The matching descriptor.

    Raises:
        FormatNotFoundError: If no format matches.
    """
    for fmt in OUTPUT_FORMATS:
        if fmt.matches_name(name):
            logger.debug("Resolved output format %r to %r", name, fmt)
            return fmt
    raise FormatNotFoundError(name, describe_available_formats())


def construct_encoder(fmt: OutputFormat) -> Encoder:
    """Build the encoder of ``fmt`` bound to the configured preferences.

    Raises:
        EncoderUnavailableError: If ``fmt`` is a reserved slot.
    """
    encoder: Encoder = fmt.get_configured_encoder()
    logger.debug("Constructed encoder %r for %r", encoder, fmt)
    return encoder
