"""Zeta: build Zenn and Qiita articles from a single Markdown source.

This package provides the article parser, the per-platform renderer and
the build orchestrator.
"""

from .build import Article, ArticleBuilder, Artifact, BuildResult, parse_article
from .document import Admonition, MacroBlock, Segment, Text, segment
from .errors import (
    MacroMissingPlatform,
    MalformedFrontmatter,
    MalformedMacro,
    NestingNotSupported,
    UnknownAdmonitionKind,
    UnknownPlatform,
    UnterminatedBlock,
    ZetaError,
)
from .frontmatter import Frontmatter, parse_frontmatter, split_source
from .macro import Macro, parse_macro
from .platform import Platform
from .renderer import render

__all__ = [
    "Admonition",
    "Article",
    "ArticleBuilder",
    "Artifact",
    "BuildResult",
    "Frontmatter",
    "Macro",
    "MacroBlock",
    "MacroMissingPlatform",
    "MalformedFrontmatter",
    "MalformedMacro",
    "NestingNotSupported",
    "Platform",
    "Segment",
    "Text",
    "UnknownAdmonitionKind",
    "UnknownPlatform",
    "UnterminatedBlock",
    "ZetaError",
    "parse_article",
    "parse_frontmatter",
    "parse_macro",
    "render",
    "segment",
    "split_source",
]
