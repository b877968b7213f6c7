"""Tests for admonition rendering."""

import pytest
from zeta.admonition import AdmonitionKind, parse_admonition_kind, render_admonition
from zeta.errors import UnknownAdmonitionKind
from zeta.platform import Platform


class TestParseAdmonitionKind:
    """Tests for parse_admonition_kind()."""

    @pytest.mark.parametrize("text", ["info", "warn", "alert", " warn "])
    def test__known_kind__parsed(self, text: str) -> None:
        """Parse each supported kind."""
        assert parse_admonition_kind(text) is AdmonitionKind(text.strip())

    def test__unknown_kind__raises_error(self) -> None:
        """Raise UnknownAdmonitionKind with the given position."""
        with pytest.raises(UnknownAdmonitionKind, match="danger") as exc_info:
            parse_admonition_kind("danger", line=8, column=1)

        assert exc_info.value.line == 8

    def test__missing_kind__raises_error(self) -> None:
        """Raise UnknownAdmonitionKind when no kind is given."""
        with pytest.raises(UnknownAdmonitionKind, match="none"):
            parse_admonition_kind("")


class TestRenderAdmonition:
    """Tests for render_admonition()."""

    @pytest.mark.parametrize("kind", list(AdmonitionKind))
    def test__qiita__native_note_per_kind(self, kind: AdmonitionKind) -> None:
        """Render each kind as a Qiita note with the same kind."""
        result = render_admonition(kind, "Body\n", Platform.QIITA)

        assert result == f":::note {kind.value}\nBody\n:::"

    @pytest.mark.parametrize("kind", [AdmonitionKind.INFO, AdmonitionKind.WARN])
    def test__zenn__message_box(self, kind: AdmonitionKind) -> None:
        """Render info and warn as Zenn's message box."""
        result = render_admonition(kind, "Body\n", Platform.ZENN)

        assert result == ":::message\nBody\n:::"

    def test__zenn_alert__downgraded_without_error(self) -> None:
        """Render alert with Zenn's warning-level box instead of passing it through."""
        result = render_admonition(AdmonitionKind.ALERT, "Careful\n", Platform.ZENN)

        assert result == ":::message\nCareful\n:::"
        assert "alert" not in result

    def test__zenn_four_colons__fence_length_kept(self) -> None:
        """Use the source fence length for both Zenn opener and closer."""
        result = render_admonition(AdmonitionKind.INFO, "Body\n", Platform.ZENN, colons=4)

        assert result == "::::message\nBody\n::::"

    def test__qiita_four_colons__three_colon_note(self) -> None:
        """Render Qiita notes with a three-colon fence regardless of source length."""
        result = render_admonition(AdmonitionKind.INFO, "Body\n", Platform.QIITA, colons=4)

        assert result == ":::note info\nBody\n:::"

    def test__body_without_trailing_newline__closer_on_own_line(self) -> None:
        """Put the closer on its own line."""
        result = render_admonition(AdmonitionKind.INFO, "Body", Platform.QIITA)

        assert result == ":::note info\nBody\n:::"

    def test__empty_body__renders_empty_block(self) -> None:
        """Render an empty admonition."""
        result = render_admonition(AdmonitionKind.WARN, "", Platform.QIITA)

        assert result == ":::note warn\n:::"

    def test__invalid_kind__raises_error(self) -> None:
        """Raise UnknownAdmonitionKind for a value outside the enumeration."""
        with pytest.raises(UnknownAdmonitionKind):
            render_admonition("danger", "Body\n", Platform.QIITA)  # type: ignore[arg-type]
