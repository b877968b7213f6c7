"""Errors raised while parsing and rendering Zeta articles.

Every error carries the 1-based line and column of the construct that
caused it, so the CLI can point the author at the offending source.
"""


class ZetaError(Exception):
    """Base class for article parse and render errors."""

    def __init__(self, message: str, line: int = 1, column: int = 1) -> None:
        """Initialize error.

        Args:
            message: Human readable description
            line: 1-based source line of the offending construct
            column: 1-based source column of the offending construct
        """
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def __str__(self) -> str:
        return f"{self.message} (line {self.line}, column {self.column})"


class MalformedFrontmatter(ZetaError):
    """Header is missing, not a YAML mapping, or lacks required fields."""


class UnknownPlatform(ZetaError):
    """Header `only` field names a platform Zeta does not support."""


class MalformedMacro(ZetaError):
    """Macro block is not a flat mapping of platform names to strings."""


class MacroMissingPlatform(ZetaError):
    """Macro block has no entry for the platform being rendered."""


class UnknownAdmonitionKind(ZetaError):
    """Admonition kind is not one of info, warn, alert."""


class UnterminatedBlock(ZetaError):
    """Opening tag has no matching closer before end of input."""

    def __init__(self, tag: str, line: int = 1, column: int = 1) -> None:
        super().__init__(f"Unterminated '{tag}' block", line, column)
        self.tag = tag


class NestingNotSupported(ZetaError):
    """Block of a kind is opened inside another block of the same kind."""

    def __init__(self, tag: str, line: int = 1, column: int = 1) -> None:
        super().__init__(f"'{tag}' cannot be nested inside another '{tag}' block", line, column)
        self.tag = tag
