"""Article build orchestration.

Builds one article into one Markdown file per eligible platform:

    zeta/<name>.md  ->  articles/<name>.md   (Zenn)
                    ->  public/<name>.md     (Qiita)

All targets are rendered in memory first. Files are only written once
every target has rendered, and a failed write restores the files written
before it, so a build never leaves partial output behind.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import assert_never

import yaml

from zeta.config import Config
from zeta.document import Segment, segment
from zeta.errors import ZetaError
from zeta.frontmatter import Frontmatter, parse_frontmatter, split_source
from zeta.platform import Platform
from zeta.renderer import QiitaHeader, render

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Article:
    """Parsed source article."""

    name: str
    source_path: Path
    frontmatter: Frontmatter
    segments: tuple[Segment, ...]


@dataclass(frozen=True)
class Artifact:
    """Rendered output for one platform."""

    platform: Platform
    path: Path
    content: str


@dataclass
class BuildResult:
    """Result of building an article."""

    article: Article
    artifacts: list[Artifact]
    written: bool

    @property
    def platforms(self) -> list[Platform]:
        return [a.platform for a in self.artifacts]


class ArticleBuilder:
    """Builds articles from the configured source directory."""

    def __init__(self, config: Config) -> None:
        """Initialize builder.

        Args:
            config: Application configuration (source and output directories)
        """
        self._config = config

    def source_path(self, name: str) -> Path:
        """Resolve an article name to its source file.

        Args:
            name: Article name, without `.md` extension

        Returns:
            Path to the source Markdown file

        Raises:
            ValueError: If name is empty or not a plain file name
            FileNotFoundError: If the source file doesn't exist
        """
        if name.endswith(".md"):
            name = name[:-3]
        if not name or "/" in name or "\\" in name or name in (".", ".."):
            raise ValueError(f"Invalid article name: {name!r}")

        path = self._config.paths.source_dir / f"{name}.md"
        if not path.is_file():
            raise FileNotFoundError(f"Source file not found: {path}")
        return path

    def output_path(self, name: str, target: Platform) -> Path:
        """Return the output file for an article on a platform."""
        match target:
            case Platform.ZENN:
                directory = self._config.paths.zenn_dir
            case Platform.QIITA:
                directory = self._config.paths.qiita_dir
            case _:
                assert_never(target)
        return directory / f"{name}.md"

    def target_platforms(self, frontmatter: Frontmatter) -> list[Platform]:
        """Platforms an article is emitted to, in a stable order.

        `only` restricts the article to the listed platforms; otherwise the
        configured default platforms are used.
        """
        if frontmatter.only:
            return [p for p in Platform if p in frontmatter.only]
        return list(self._config.build.default_platforms)

    def load(self, name: str) -> Article:
        """Read and parse an article.

        Args:
            name: Article name, without `.md` extension

        Returns:
            Parsed Article

        Raises:
            ZetaError: If the frontmatter or body is invalid
        """
        path = self.source_path(name)
        logger.info(f"Loading article: {path}")
        return parse_article(path.read_text(encoding="utf-8"), name=path.stem, source_path=path)

    def render_all(self, article: Article) -> list[Artifact]:
        """Render an article for every eligible platform, in memory.

        Raises:
            ZetaError: If rendering fails for any platform
        """
        artifacts: list[Artifact] = []
        for target in self.target_platforms(article.frontmatter):
            path = self.output_path(article.name, target)
            existing = self._existing_qiita_header(path) if target is Platform.QIITA else None
            content = render(article.segments, article.frontmatter, target, existing=existing)
            artifacts.append(Artifact(platform=target, path=path, content=content))
        return artifacts

    def build(self, name: str, *, dry_run: bool = False) -> BuildResult:
        """Build an article for all eligible platforms.

        Args:
            name: Article name, without `.md` extension
            dry_run: Render but don't write any file

        Returns:
            BuildResult with the rendered artifacts

        Raises:
            ZetaError: If parsing or rendering fails; nothing is written
            OSError: If writing fails; files written so far are restored
        """
        article = self.load(name)
        artifacts = self.render_all(article)

        if not dry_run:
            commit_artifacts(artifacts)

        return BuildResult(article=article, artifacts=artifacts, written=not dry_run)

    def _existing_qiita_header(self, path: Path) -> QiitaHeader | None:
        """Read Qiita-assigned fields from a previously built Qiita file."""
        if not path.exists():
            return None

        try:
            split = split_source(path.read_text(encoding="utf-8"))
            data = yaml.safe_load(split.header)
        except (OSError, UnicodeDecodeError, ZetaError, yaml.YAMLError) as e:
            logger.warning(f"Ignoring unreadable Qiita header in {path}: {e}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Ignoring Qiita header in {path}: not a mapping")
            return None

        logger.debug(f"Reusing Qiita header fields from {path}")
        return QiitaHeader.from_dict(data)


def parse_article(source: str, *, name: str, source_path: Path) -> Article:
    """Parse article source text.

    Args:
        source: Full article text
        name: Article name
        source_path: File the text was read from

    Returns:
        Parsed Article

    Raises:
        ZetaError: If the frontmatter or body is invalid
    """
    split = split_source(source)
    frontmatter = parse_frontmatter(split.header, line=split.header_line)
    segments = segment(split.body, line=split.body_line)
    return Article(
        name=name,
        source_path=source_path,
        frontmatter=frontmatter,
        segments=segments,
    )


def commit_artifacts(artifacts: list[Artifact]) -> None:
    """Write artifacts to disk, restoring earlier files if a write fails.

    Raises:
        OSError: If any write fails
    """
    written: list[tuple[Path, str | None]] = []
    try:
        for artifact in artifacts:
            previous = (
                artifact.path.read_text(encoding="utf-8") if artifact.path.exists() else None
            )
            written.append((artifact.path, previous))
            artifact.path.parent.mkdir(parents=True, exist_ok=True)
            artifact.path.write_text(artifact.content, encoding="utf-8")
            logger.info(f"Wrote {artifact.platform} article: {artifact.path}")
    except OSError:
        logger.error("Write failed, restoring previously written files")
        _rollback(written)
        raise


def _rollback(written: list[tuple[Path, str | None]]) -> None:
    for path, previous in reversed(written):
        try:
            if previous is None:
                path.unlink(missing_ok=True)
            else:
                path.write_text(previous, encoding="utf-8")
        except OSError as e:
            logger.error(f"Could not restore {path}: {e}")
