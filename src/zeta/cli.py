"""CLI interface for Zeta.

Command-line tool for building Zenn and Qiita articles from one source.
"""

import logging
import sys
from pathlib import Path

import click

from zeta.build import ArticleBuilder
from zeta.config import Config
from zeta.errors import ZetaError


@click.group()
@click.version_option(package_name="zeta-md")
def cli() -> None:
    """Zeta - write once, publish to Zenn and Qiita."""


@cli.command()
@click.argument("article")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover Zeta.toml)",
)
@click.option(
    "--source-dir",
    "-s",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Article source directory (overrides config)",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Render all platforms without writing any file.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def build(
    article: str,
    config_path: Path | None,
    source_dir: Path | None,
    dry_run: bool,
    verbose: bool,
) -> None:
    """Build ARTICLE for every platform it is published to."""
    _configure_logging(verbose)

    try:
        config = Config.load(config_path).with_overrides(source_dir=source_dir)
        builder = ArticleBuilder(config)

        click.echo(f"Building {article}...")
        result = builder.build(article, dry_run=dry_run)
    except (ZetaError, FileNotFoundError, ValueError, OSError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    frontmatter = result.article.frontmatter
    if not frontmatter.published:
        click.echo(click.style("Draft: article is not published", fg="yellow"))

    if dry_run:
        click.echo(click.style("\n[DRY RUN] No files written.", fg="cyan", bold=True))
        for artifact in result.artifacts:
            click.echo(f"  {artifact.platform}: {artifact.path} ({len(artifact.content)} characters)")
        return

    for artifact in result.artifacts:
        click.echo(f"  {artifact.platform} -> {artifact.path}")
    click.echo(click.style("Build completed successfully!", fg="green", bold=True))


def _configure_logging(verbose: bool) -> None:
    """Configure root logging for CLI runs.

    Args:
        verbose: If True, log debug messages
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":
    cli()
