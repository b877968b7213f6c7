"""Tests for CLI commands."""

from pathlib import Path

from click.testing import CliRunner
from zeta.cli import cli

ARTICLE = """---
title: "Hello"
topics: ["python"]
---
Press <macro>zenn: "Like"
qiita: "いいね"</macro>.
"""


def _project(tmp_path: Path, article: str = ARTICLE) -> Path:
    """Create a project with a config file and one article."""
    config_file = tmp_path / "Zeta.toml"
    config_file.write_text("")
    source_dir = tmp_path / "zeta"
    source_dir.mkdir()
    (source_dir / "hello.md").write_text(article, encoding="utf-8")
    return config_file


class TestBuildCommand:
    """Tests for the build command."""

    def test__valid_article__writes_outputs(self, tmp_path: Path) -> None:
        """Build an article for both platforms."""
        config_file = _project(tmp_path)

        runner = CliRunner()
        result = runner.invoke(cli, ["build", "hello", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "Build completed successfully" in result.output
        assert (tmp_path / "articles" / "hello.md").exists()
        assert (tmp_path / "public" / "hello.md").exists()

    def test__dry_run__writes_nothing(self, tmp_path: Path) -> None:
        """Report artifacts without writing them."""
        config_file = _project(tmp_path)

        runner = CliRunner()
        result = runner.invoke(cli, ["build", "hello", "-c", str(config_file), "--dry-run"])

        assert result.exit_code == 0
        assert "[DRY RUN]" in result.output
        assert not (tmp_path / "articles").exists()

    def test__draft__reported(self, tmp_path: Path) -> None:
        """Tell the author the article is a draft."""
        config_file = _project(tmp_path, "---\ntitle: D\npublished: false\n---\nBody\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["build", "hello", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "Draft" in result.output

    def test__parse_error__exits_non_zero(self, tmp_path: Path) -> None:
        """Exit 1 and write nothing on a malformed macro."""
        config_file = _project(tmp_path, "---\ntitle: B\n---\n<macro>zenn Like</macro>\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["build", "hello", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert not (tmp_path / "articles").exists()
        assert not (tmp_path / "public").exists()

    def test__unterminated_block__reports_line(self, tmp_path: Path) -> None:
        """Include the source line in the error message."""
        config_file = _project(tmp_path, '---\ntitle: B\n---\n<macro>zenn: "x"\n')

        runner = CliRunner()
        result = runner.invoke(cli, ["build", "hello", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "Unterminated '<macro>'" in result.output
        assert "line 4" in result.output

    def test__missing_article__exits_non_zero(self, tmp_path: Path) -> None:
        """Fail when the article doesn't exist."""
        config_file = _project(tmp_path)

        runner = CliRunner()
        result = runner.invoke(cli, ["build", "missing", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "Source file not found" in result.output

    def test__missing_config__exits_non_zero(self, tmp_path: Path) -> None:
        """Fail when the explicit config file doesn't exist."""
        runner = CliRunner()
        result = runner.invoke(
            cli, ["build", "hello", "--config", str(tmp_path / "nonexistent.toml")]
        )

        assert result.exit_code != 0

    def test__source_dir_override__used(self, tmp_path: Path) -> None:
        """Read articles from the --source-dir directory."""
        config_file = _project(tmp_path)
        drafts = tmp_path / "drafts"
        drafts.mkdir()
        (drafts / "other.md").write_text("---\ntitle: O\n---\nBody\n", encoding="utf-8")

        runner = CliRunner()
        result = runner.invoke(
            cli, ["build", "other", "-c", str(config_file), "-s", str(drafts)]
        )

        assert result.exit_code == 0
        assert (tmp_path / "articles" / "other.md").exists()
