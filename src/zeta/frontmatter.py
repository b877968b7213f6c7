"""Article frontmatter model.

An article starts with a YAML header delimited by `---` lines:

    ---
    title: "My article"
    emoji: "📝"
    type: "tech"
    topics: ["python"]
    published: true
    only: zenn
    ---

`only` limits which platforms receive the article. `zenn:` and `qiita:`
mappings are merged into that platform's header only; any other key is
passed through to every platform's header.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

import yaml

from zeta.errors import MalformedFrontmatter
from zeta.platform import Platform, parse_platform

logger = logging.getLogger(__name__)

SEPARATOR_PATTERN = re.compile(r"^---[ \t]*$")

DEFAULT_TYPE = "tech"

_KNOWN_KEYS = frozenset({"title", "published", "only", "emoji", "type", "topics"})


@dataclass(frozen=True)
class Frontmatter:
    """Parsed article header."""

    title: str
    published: bool = True
    only: frozenset[Platform] | None = None
    emoji: str = ""
    type: str = DEFAULT_TYPE
    topics: tuple[str, ...] = ()
    platform_fields: Mapping[Platform, Mapping[str, Any]] = field(
        default_factory=lambda: MappingProxyType({}),
    )
    extra: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    line: int = 1

    def fields_for(self, target: Platform) -> Mapping[str, Any]:
        """Return the platform-specific pass-through fields for a target."""
        return self.platform_fields.get(target, MappingProxyType({}))


@dataclass(frozen=True)
class SplitSource:
    """Article source split into header and body."""

    header: str
    body: str
    header_line: int
    body_line: int


def split_source(source: str) -> SplitSource:
    """Split article source into raw YAML header and Markdown body.

    Leading blank lines and a UTF-8 BOM are tolerated before the opening
    separator. CRLF line endings are normalized to LF.

    Args:
        source: Full article text

    Returns:
        SplitSource with header text, body text and their starting lines

    Raises:
        MalformedFrontmatter: If the opening or closing separator is missing
    """
    text = source.lstrip("\ufeff").replace("\r\n", "\n")
    lines = text.split("\n")

    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1
    if start >= len(lines) or not SEPARATOR_PATTERN.match(lines[start]):
        raise MalformedFrontmatter("Article must start with a '---' frontmatter block", start + 1, 1)

    for end in range(start + 1, len(lines)):
        if SEPARATOR_PATTERN.match(lines[end]):
            return SplitSource(
                header="\n".join(lines[start + 1 : end]),
                body="\n".join(lines[end + 1 :]),
                header_line=start + 1,
                body_line=end + 2,
            )

    raise MalformedFrontmatter("Frontmatter block is not closed with '---'", start + 1, 1)


def parse_frontmatter(raw_header: str, *, line: int = 1) -> Frontmatter:
    """Parse the YAML header of an article.

    Args:
        raw_header: Text between the `---` separators
        line: Source line of the opening separator

    Returns:
        Frontmatter instance

    Raises:
        MalformedFrontmatter: If the header is not a valid mapping or a field is invalid
        UnknownPlatform: If `only` names an unsupported platform
    """
    try:
        data = yaml.safe_load(raw_header)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        err_line, err_column = line, 1
        if mark is not None:
            err_line, err_column = line + 1 + mark.line, mark.column + 1
        raise MalformedFrontmatter(f"Invalid frontmatter YAML: {e}", err_line, err_column) from e

    if not isinstance(data, dict):
        raise MalformedFrontmatter("Frontmatter must be a YAML mapping", line, 1)

    key_lines = _key_lines(raw_header, line)

    def error(key: str, message: str) -> MalformedFrontmatter:
        return MalformedFrontmatter(message, key_lines.get(key, line), 1)

    title = data.get("title")
    if title is None:
        raise MalformedFrontmatter("Frontmatter is missing required field 'title'", line, 1)
    if not isinstance(title, str) or not title.strip():
        raise error("title", "frontmatter.title must be a non-empty string")

    published = data.get("published", True)
    if not isinstance(published, bool):
        raise error("published", "frontmatter.published must be a boolean")

    emoji = data.get("emoji") or ""
    if not isinstance(emoji, str):
        raise error("emoji", "frontmatter.emoji must be a string")

    article_type = data.get("type") or DEFAULT_TYPE
    if not isinstance(article_type, str):
        raise error("type", "frontmatter.type must be a string")

    topics_raw = data.get("topics") or []
    if not isinstance(topics_raw, list) or not all(isinstance(t, str) for t in topics_raw):
        raise error("topics", "frontmatter.topics must be a list of strings")

    only = _parse_only(data.get("only"), key_lines.get("only", line))

    platform_fields: dict[Platform, Mapping[str, Any]] = {}
    extra: dict[str, Any] = {}
    for key, value in data.items():
        if key in _KNOWN_KEYS:
            continue
        platform = _platform_key(key)
        if platform is None:
            extra[str(key)] = value
            continue
        if value is None:
            continue
        if not isinstance(value, dict):
            raise error(key, f"frontmatter.{key} must be a mapping")
        platform_fields[platform] = MappingProxyType(dict(value))

    frontmatter = Frontmatter(
        title=title,
        published=published,
        only=only,
        emoji=emoji,
        type=article_type,
        topics=tuple(topics_raw),
        platform_fields=MappingProxyType(platform_fields),
        extra=MappingProxyType(extra),
        line=line,
    )
    logger.debug(f'Parsed frontmatter for "{title}" (published={published}, only={only})')
    return frontmatter


def _parse_only(value: object, line: int) -> frozenset[Platform] | None:
    """Parse the `only` field into a platform set.

    A single string or a list of strings is accepted. Absent or empty
    values mean every platform.
    """
    if value is None or value == "":
        return None
    if isinstance(value, str):
        items: list[object] = [value]
    elif isinstance(value, list):
        items = value
    else:
        raise MalformedFrontmatter("frontmatter.only must be a platform name or a list", line, 1)

    platforms = frozenset(parse_platform(item, line, 1) for item in items)
    return platforms or None


def _platform_key(key: object) -> Platform | None:
    if not isinstance(key, str):
        return None
    try:
        return Platform(key)
    except ValueError:
        return None


def _key_lines(raw_header: str, line: int) -> dict[str, int]:
    """Map top-level header keys to their source lines."""
    node = yaml.compose(raw_header, Loader=yaml.SafeLoader)
    if not isinstance(node, yaml.MappingNode):
        return {}
    return {
        str(key.value): line + 1 + key.start_mark.line
        for key, _ in node.value
        if isinstance(key, yaml.ScalarNode)
    }
