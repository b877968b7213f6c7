"""Publishing platforms supported by Zeta."""

from enum import StrEnum

from zeta.errors import UnknownPlatform


class Platform(StrEnum):
    """Closed set of publishing targets.

    Adding a member requires extending every `match` over platforms
    (header schema, admonition syntax, output directory).
    """

    ZENN = "zenn"
    QIITA = "qiita"


ALL_PLATFORMS: tuple[Platform, ...] = tuple(Platform)


def parse_platform(name: object, line: int = 1, column: int = 1) -> Platform:
    """Convert a platform identifier to a Platform.

    Args:
        name: Identifier from the article source (case-insensitive)
        line: Source line used in the error
        column: Source column used in the error

    Returns:
        Matching Platform

    Raises:
        UnknownPlatform: If name is not a supported platform identifier
    """
    if isinstance(name, str):
        try:
            return Platform(name.strip().lower())
        except ValueError:
            pass
    supported = ", ".join(p.value for p in Platform)
    raise UnknownPlatform(f"Unknown platform {name!r} (supported: {supported})", line, column)
