"""Admonition (`:::message <kind>`) rendering per platform.

Source syntax:

    :::message warn
    Content here
    :::

Qiita has three native note tiers, so the kind is carried over as
`:::note <kind>`. On Zenn info and warn share the standard `:::message`
box, and alert is downgraded to that same warning-level box.
"""

import logging
from enum import StrEnum
from typing import assert_never

from zeta.errors import UnknownAdmonitionKind
from zeta.platform import Platform

logger = logging.getLogger(__name__)

MESSAGE_TAG = "message"


class AdmonitionKind(StrEnum):
    """Severity of an admonition block."""

    INFO = "info"
    WARN = "warn"
    ALERT = "alert"


def parse_admonition_kind(text: str, line: int = 1, column: int = 1) -> AdmonitionKind:
    """Convert the word after `:::message` to an AdmonitionKind.

    Raises:
        UnknownAdmonitionKind: If text is not info, warn or alert
    """
    try:
        return AdmonitionKind(text.strip())
    except ValueError:
        kinds = ", ".join(k.value for k in AdmonitionKind)
        shown = text.strip() or "(none)"
        raise UnknownAdmonitionKind(
            f"Unknown admonition kind {shown!r} (expected one of: {kinds})",
            line,
            column,
        ) from None


def render_admonition(
    kind: AdmonitionKind,
    inner_rendered: str,
    target: Platform,
    *,
    colons: int = 3,
) -> str:
    """Wrap rendered admonition content in the target's callout syntax.

    Args:
        kind: Admonition severity
        inner_rendered: Body already rendered for the target
        target: Platform being rendered
        colons: Fence length of the source block, kept on Zenn so nested
            `:::details` blocks close inside the message box

    Returns:
        Callout block text, without a trailing newline after the closer
    """
    if not isinstance(kind, AdmonitionKind):
        raise UnknownAdmonitionKind(f"Unknown admonition kind {kind!r}")

    body = inner_rendered if not inner_rendered or inner_rendered.endswith("\n") else inner_rendered + "\n"

    match target:
        case Platform.ZENN:
            if kind is AdmonitionKind.ALERT:
                logger.debug("Zenn has no alert tier, rendering alert admonition as a message box")
            fence = ":" * max(colons, 3)
            return f"{fence}{MESSAGE_TAG}\n{body}{fence}"
        case Platform.QIITA:
            return f":::note {kind.value}\n{body}:::"
        case _:
            assert_never(target)
