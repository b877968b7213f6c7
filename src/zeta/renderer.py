"""Per-platform Markdown rendering.

Output is the platform's YAML header followed by the rendered body:

    ---
    <header fields>
    ---
    <body>
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, assert_never

import yaml

from zeta.admonition import render_admonition
from zeta.document import Admonition, MacroBlock, Segment, Text
from zeta.frontmatter import Frontmatter
from zeta.platform import Platform

logger = logging.getLogger(__name__)

SEPARATOR = "---\n"


@dataclass(frozen=True)
class QiitaHeader:
    """Fields of a Qiita header that are assigned by Qiita, not by the author.

    The Qiita CLI writes these back into the published file; they are
    carried over so a rebuild does not detach the article from its post.
    """

    private: bool = False
    updated_at: str = ""
    id: str | None = None
    organization_url_name: str | None = None
    slide: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "QiitaHeader":
        """Create from a parsed Qiita header, ignoring unexpected types.

        Args:
            data: YAML mapping from an existing Qiita article

        Returns:
            QiitaHeader with defaults for missing or invalid fields
        """
        updated_at = data.get("updated_at")
        if hasattr(updated_at, "isoformat"):
            updated_at = updated_at.isoformat()

        private = data.get("private")
        slide = data.get("slide")
        article_id = data.get("id")
        organization = data.get("organization_url_name")
        return cls(
            private=private if isinstance(private, bool) else False,
            updated_at=updated_at if isinstance(updated_at, str) else "",
            id=str(article_id) if article_id is not None else None,
            organization_url_name=organization if isinstance(organization, str) else None,
            slide=slide if isinstance(slide, bool) else False,
        )


def render(
    segments: Iterable[Segment],
    frontmatter: Frontmatter,
    target: Platform,
    *,
    existing: QiitaHeader | None = None,
) -> str:
    """Render an article for one platform.

    Args:
        segments: Parsed article body
        frontmatter: Parsed article header
        target: Platform to render for
        existing: Qiita-assigned header fields from a previous build (Qiita only)

    Returns:
        Complete Markdown file content

    Raises:
        MacroMissingPlatform: If a macro has no entry for target
    """
    header = render_header(frontmatter, target, existing=existing)
    body = render_body(segments, target)
    logger.debug(f"Rendered {target} output: {len(header) + len(body)} characters")
    return header + body


def render_body(segments: Iterable[Segment], target: Platform) -> str:
    """Render body segments for a platform, preserving source order."""
    return "".join(_render_segment(s, target) for s in segments)


def render_header(
    frontmatter: Frontmatter,
    target: Platform,
    *,
    existing: QiitaHeader | None = None,
) -> str:
    """Render the platform's frontmatter block, including separators."""
    match target:
        case Platform.ZENN:
            fields = _zenn_fields(frontmatter)
        case Platform.QIITA:
            fields = _qiita_fields(frontmatter, existing or QiitaHeader())
        case _:
            assert_never(target)

    for key, value in frontmatter.extra.items():
        fields.setdefault(key, value)
    for key, value in frontmatter.fields_for(target).items():
        fields[str(key)] = value

    dumped = yaml.safe_dump(
        fields,
        allow_unicode=True,
        sort_keys=False,
        default_flow_style=False,
    )
    return SEPARATOR + dumped + SEPARATOR


def _zenn_fields(frontmatter: Frontmatter) -> dict[str, Any]:
    return {
        "title": frontmatter.title,
        "emoji": frontmatter.emoji,
        "type": frontmatter.type,
        "topics": list(frontmatter.topics),
        "published": frontmatter.published,
    }


def _qiita_fields(frontmatter: Frontmatter, existing: QiitaHeader) -> dict[str, Any]:
    # ignorePublish is how the Qiita CLI keeps an article as a local draft
    return {
        "title": frontmatter.title,
        "tags": list(frontmatter.topics),
        "private": existing.private,
        "updated_at": existing.updated_at,
        "id": existing.id,
        "organization_url_name": existing.organization_url_name,
        "slide": existing.slide,
        "ignorePublish": not frontmatter.published,
    }


def _render_segment(segment: Segment, target: Platform) -> str:
    match segment:
        case Text(text=text):
            return text
        case MacroBlock(macro=macro):
            return macro.resolve(target)
        case Admonition(kind=kind, body=body, colons=colons):
            return render_admonition(kind, render_body(body, target), target, colons=colons)
        case _:
            assert_never(segment)
