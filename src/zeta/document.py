"""Article body segmentation.

The body is split by a single forward scan into text runs, macro blocks
and admonition blocks. Everything that is not one of Zeta's extensions is
kept verbatim in text segments, so concatenating the rendered segments
rebuilds the document in source order.

Fenced code blocks and inline code spans are opaque: `<macro>` or
`:::message` inside them is plain text.
"""

import logging
import re
from dataclasses import dataclass

from zeta.admonition import MESSAGE_TAG, AdmonitionKind, parse_admonition_kind
from zeta.errors import NestingNotSupported, UnterminatedBlock
from zeta.macro import MACRO_CLOSE, MACRO_OPEN, Macro, parse_macro

logger = logging.getLogger(__name__)

ADMONITION_TAG = f":::{MESSAGE_TAG}"

# `:::message warn`, `::::message info`; the colon count must match the closer
ADMONITION_OPEN_PATTERN = re.compile(rf"([ \t]*)(:{{3,}}){MESSAGE_TAG}(?:[ \t]+(.*?))?[ \t]*")

# Any other colon directive, e.g. Zenn's `:::details Title`
DIRECTIVE_OPEN_PATTERN = re.compile(r"[ \t]*:{3,}[A-Za-z]")

DIRECTIVE_CLOSE_PATTERN = re.compile(r"[ \t]*(:{3,})[ \t]*")

CODE_FENCE_PATTERN = re.compile(r"[ \t]*(`{3,}|~{3,})")

# Characters that may start an inline construct
_INLINE_START = re.compile(r"[`<\n]")


@dataclass(frozen=True)
class Text:
    """Verbatim passthrough content."""

    text: str


@dataclass(frozen=True)
class MacroBlock:
    """Platform-dependent replacement text."""

    macro: Macro

    @property
    def line(self) -> int:
        return self.macro.line

    @property
    def column(self) -> int:
        return self.macro.column


@dataclass(frozen=True)
class Admonition:
    """Callout block with a severity and nested content.

    `colons` is the length of the opening fence; a four-colon block can
    hold three-colon directives such as `:::details`.
    """

    kind: AdmonitionKind
    body: tuple["Segment", ...]
    line: int = 1
    column: int = 1
    colons: int = 3


Segment = Text | MacroBlock | Admonition


def segment(body: str, *, line: int = 1) -> tuple[Segment, ...]:
    """Split an article body into segments.

    Args:
        body: Markdown body following the frontmatter
        line: Source line of the first body line (for error positions)

    Returns:
        Segments in source order

    Raises:
        UnterminatedBlock: If a `<macro>` or `:::message` block is not closed
        NestingNotSupported: If a macro is opened inside a macro, or an
            admonition inside an admonition
        MalformedMacro: If a macro block is not a valid platform mapping
        UnknownAdmonitionKind: If an admonition kind is not info, warn or alert
    """
    segmenter = _Segmenter(body, line)
    segments = segmenter.scan(0, len(body))
    logger.debug(f"Segmented body into {len(segments)} segments")
    return segments


class _Segmenter:
    """Forward scanner over one article body.

    All indices refer to the full body string so that nested scans of
    admonition content report positions in file coordinates.
    """

    def __init__(self, source: str, line: int) -> None:
        self._source = source
        self._line = line

    def scan(self, start: int, end: int, *, in_admonition: bool = False) -> tuple[Segment, ...]:
        """Scan source[start:end] into segments."""
        src = self._source
        segments: list[Segment] = []
        text_start = start
        i = start

        while i < end:
            if self._at_line_start(i):
                line_end = self._line_end(i, end)
                line = src[i:line_end]

                fence = CODE_FENCE_PATTERN.match(line)
                if fence:
                    i = self._skip_code_fence(line_end, end, fence.group(1))
                    continue

                opener = ADMONITION_OPEN_PATTERN.fullmatch(line)
                if opener:
                    position = self._position(i + len(opener.group(1)))
                    if in_admonition:
                        raise NestingNotSupported(ADMONITION_TAG, *position)
                    _append_text(segments, src[text_start:i])
                    admonition, i = self._admonition(i, line_end, end, opener)
                    segments.append(admonition)
                    text_start = i
                    continue

            match = _INLINE_START.search(src, i, end)
            if match is None:
                break
            i = match.start()
            char = src[i]

            if char == "\n":
                i += 1
            elif char == "`":
                i = self._skip_code_span(i, end)
            elif src.startswith(MACRO_OPEN, i, end):
                _append_text(segments, src[text_start:i])
                macro, i = self._macro(i, end)
                segments.append(MacroBlock(macro))
                text_start = i
            else:
                i += 1

        _append_text(segments, src[text_start:end])
        return tuple(segments)

    def _macro(self, start: int, end: int) -> tuple[Macro, int]:
        """Parse a macro block starting at `<macro>`.

        Returns:
            Parsed macro and the index just past `</macro>`
        """
        src = self._source
        line, column = self._position(start)
        body_start = start + len(MACRO_OPEN)

        close = src.find(MACRO_CLOSE, body_start, end)
        if close == -1:
            raise UnterminatedBlock(MACRO_OPEN, line, column)

        nested = src.find(MACRO_OPEN, body_start, close)
        if nested != -1:
            raise NestingNotSupported(MACRO_OPEN, *self._position(nested))

        macro = parse_macro(src[body_start:close], line=line, column=column)
        logger.debug(f"Macro block at line {line} for {sorted(p.value for p in macro.entries)}")
        return macro, close + len(MACRO_CLOSE)

    def _admonition(
        self,
        start: int,
        opener_end: int,
        end: int,
        opener: re.Match[str],
    ) -> tuple[Admonition, int]:
        """Parse an admonition block whose opener line spans [start, opener_end).

        The closing fence must use the same number of colons as the opener.
        Other colon directives inside the block (e.g. `:::details`) keep
        their own closers.

        Returns:
            Admonition and the index of the end of the closing fence line
        """
        src = self._source
        line, column = self._position(start + len(opener.group(1)))
        colons = opener.group(2)
        kind = parse_admonition_kind(opener.group(3) or "", line, column)

        body_start = opener_end + 1
        depth = 0
        i = body_start
        while i < end:
            line_end = self._line_end(i, end)
            text = src[i:line_end]

            fence = CODE_FENCE_PATTERN.match(text)
            if fence:
                i = self._skip_code_fence(line_end, end, fence.group(1)) + 1
                continue

            nested = ADMONITION_OPEN_PATTERN.fullmatch(text)
            if nested:
                raise NestingNotSupported(
                    ADMONITION_TAG,
                    *self._position(i + len(nested.group(1))),
                )

            if DIRECTIVE_OPEN_PATTERN.match(text):
                depth += 1
            else:
                closer = DIRECTIVE_CLOSE_PATTERN.fullmatch(text)
                if closer:
                    if depth > 0:
                        depth -= 1
                    elif closer.group(1) == colons:
                        body = self.scan(body_start, i, in_admonition=True)
                        admonition = Admonition(
                            kind=kind,
                            body=body,
                            line=line,
                            column=column,
                            colons=len(colons),
                        )
                        return admonition, line_end

            i = line_end + 1

        raise UnterminatedBlock(ADMONITION_TAG, line, column)

    def _skip_code_fence(self, opener_end: int, end: int, fence: str) -> int:
        """Skip a fenced code block.

        Returns:
            Index of the end of the closing fence line, or `end` if the
            fence is never closed
        """
        closing = re.compile(rf"[ \t]*{re.escape(fence[0])}{{{len(fence)},}}[ \t]*")
        i = opener_end + 1
        while i < end:
            line_end = self._line_end(i, end)
            if closing.fullmatch(self._source, i, line_end):
                return line_end
            i = line_end + 1
        return end

    def _skip_code_span(self, start: int, end: int) -> int:
        """Skip an inline code span starting at a backtick run.

        The span closes at a backtick run of the same length within the
        same paragraph. An unmatched run is literal text.
        """
        src = self._source
        run_end = start
        while run_end < end and src[run_end] == "`":
            run_end += 1
        length = run_end - start

        paragraph_end = src.find("\n\n", run_end, end)
        if paragraph_end == -1:
            paragraph_end = end

        closing = re.compile(rf"(?<!`)`{{{length}}}(?!`)")
        match = closing.search(src, run_end, paragraph_end)
        if match is None:
            return run_end
        return match.end()

    def _at_line_start(self, index: int) -> bool:
        return index == 0 or self._source[index - 1] == "\n"

    def _line_end(self, index: int, end: int) -> int:
        newline = self._source.find("\n", index, end)
        return end if newline == -1 else newline

    def _position(self, index: int) -> tuple[int, int]:
        """Convert a body index to a 1-based (line, column) in the file."""
        line = self._line + self._source.count("\n", 0, index)
        line_start = self._source.rfind("\n", 0, index) + 1
        return line, index - line_start + 1


def _append_text(segments: list[Segment], text: str) -> None:
    """Append text, merging with a preceding text segment."""
    if not text:
        return
    if segments and isinstance(segments[-1], Text):
        segments[-1] = Text(segments[-1].text + text)
        return
    segments.append(Text(text))
