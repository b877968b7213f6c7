"""Platform-dependent text substitution.

A macro block holds a flat YAML mapping from platform name to the text
rendered for that platform:

    <macro>zenn: "Like"
    qiita: "いいね"</macro>

A `default` key supplies text for platforms without their own entry. Keys
are matched case-insensitively, like the `only` header field.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

import yaml

from zeta.errors import MacroMissingPlatform, MalformedMacro, UnknownPlatform
from zeta.platform import Platform, parse_platform

MACRO_OPEN = "<macro>"
MACRO_CLOSE = "</macro>"
DEFAULT_KEY = "default"


@dataclass(frozen=True)
class Macro:
    """Parsed macro block."""

    entries: Mapping[Platform, str]
    default: str | None = None
    line: int = 1
    column: int = 1

    def resolve(self, target: Platform) -> str:
        """Return the text for a target platform.

        Args:
            target: Platform being rendered

        Returns:
            The target's entry, or the default entry

        Raises:
            MacroMissingPlatform: If neither the target nor a default entry exists
        """
        text = self.entries.get(target)
        if text is not None:
            return text
        if self.default is not None:
            return self.default
        raise MacroMissingPlatform(
            f"Macro has no entry for '{target}' and no '{DEFAULT_KEY}' entry",
            self.line,
            self.column,
        )


def parse_macro(block_text: str, *, line: int = 1, column: int = 1) -> Macro:
    """Parse the text between `<macro>` and `</macro>`.

    Args:
        block_text: YAML mapping of platform name to replacement string
        line: Source line of the `<macro>` tag
        column: Source column of the `<macro>` tag

    Returns:
        Immutable Macro

    Raises:
        MalformedMacro: If the text is not a flat string-valued mapping of known platforms
    """
    try:
        data = yaml.safe_load(block_text)
    except yaml.YAMLError as e:
        raise MalformedMacro(f"Invalid macro YAML: {e}", line, column) from e

    if not isinstance(data, dict) or not data:
        raise MalformedMacro("Macro must be a mapping of platform names to strings", line, column)

    entries: dict[Platform, str] = {}
    default: str | None = None
    for key, value in data.items():
        if not isinstance(value, str):
            raise MalformedMacro(f"Macro value for {key!r} must be a string", line, column)
        if isinstance(key, str) and key.strip().lower() == DEFAULT_KEY:
            default = value
            continue
        try:
            platform = parse_platform(key, line, column)
        except UnknownPlatform:
            raise MalformedMacro(f"Unknown platform {key!r} in macro", line, column) from None
        entries[platform] = value

    return Macro(
        entries=MappingProxyType(entries),
        default=default,
        line=line,
        column=column,
    )
