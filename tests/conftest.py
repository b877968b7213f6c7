"""Shared test fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest
from zeta.config import BuildConfig, Config, PathsConfig


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Create a test configuration with tmp_path directories.

    Creates the article source directory; output directories are left
    for the build to create.
    """
    source_dir = tmp_path / "zeta"
    source_dir.mkdir(exist_ok=True)

    return Config(
        paths=PathsConfig(
            source_dir=source_dir,
            zenn_dir=tmp_path / "articles",
            qiita_dir=tmp_path / "public",
        ),
        build=BuildConfig(),
    )


@pytest.fixture
def write_article(test_config: Config) -> Callable[[str, str], Path]:
    """Return a helper writing an article source into the source directory."""

    def _write(name: str, content: str) -> Path:
        path = test_config.paths.source_dir / f"{name}.md"
        path.write_text(content, encoding="utf-8")
        return path

    return _write
