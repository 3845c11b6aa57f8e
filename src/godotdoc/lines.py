"""Assemble physical source lines into logical statements."""

from __future__ import annotations

import io
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from .errors import UnterminatedContinuation
from .grammars import leading_keyword
from .scanner import find

SHOW_DIRECTIVE = "[Show]"
HIDE_DIRECTIVE = "[Hide]"
# Linter directives, not documentation
_IGNORED_COMMENT_PREFIX = "warning-ignore"


@dataclass
class LogicalLine:
    """One statement after joining continued lines and stripping comments."""

    text: str  # code only, leading tabs kept
    lineno: int  # 1-based line of the first physical line
    indent: int  # leading tab count
    comments: list[str] = field(default_factory=list)
    visibility: bool | None = None  # one-shot [Show]/[Hide] override

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()


def _indentation(line: str) -> int:
    return len(line) - len(line.lstrip("\t"))


def _join(left: str, right: str) -> str:
    if not left:
        return right
    if not right:
        return left
    if left[-1] in "([{" or right[0] in ")]}":
        return left + right
    return left + " " + right


class LineAssembler:
    """Iterate over the logical lines of one source file.

    A statement continues onto the next physical line when it ends in a
    backslash, or while a bracket opened by the statement is still open.
    Comments are taken off every physical line, including lines inside an
    open bracket.

    Example:
        for line in LineAssembler("player.gd", source):
            print(line.lineno, line.indent, line.text)
    """

    def __init__(self, filename: str, source: str | Iterable[str]):
        if isinstance(source, str):
            source = io.StringIO(source, newline=None)  # same line ends as open()
        self.filename = filename
        self.lineno = 0
        self._lines = iter(source)
        # Survives between statements: an enum body keeps its '{' open
        self._brackets: list[str] = []

    def __iter__(self) -> Iterator[LogicalLine]:
        while True:
            line = self.read()
            if line is None:
                return
            yield line

    def _next_physical(self) -> str | None:
        line = next(self._lines, None)
        if line is None:
            return None
        self.lineno += 1
        return line.rstrip("\r\n")

    def _opens_enum_body(self, text: str, base: int) -> bool:
        return (
            self._brackets[base:] == ["{"]
            and leading_keyword(text.strip()) == "enum"
        )

    def read(self) -> LogicalLine | None:
        """Read the next logical line, None at end of input.

        Raises:
            UnterminatedContinuation: Input ended inside a continued statement
            BracketMismatch: A closing bracket has no matching opener
        """
        physical = self._next_physical()
        if physical is None:
            return None

        line = LogicalLine(text="", lineno=self.lineno, indent=_indentation(physical))
        base = len(self._brackets)

        while True:
            while physical.endswith("\\") and "#" not in physical:
                following = self._next_physical()
                if following is None:
                    raise UnterminatedContinuation(
                        "unexpected end of file, expected a line after '\\'",
                        self.filename,
                        self.lineno,
                    )
                physical = physical[:-1] + following.strip()

            pos = find(
                physical,
                "#",
                self._brackets,
                filename=self.filename,
                lineno=self.lineno,
            )
            if pos >= 0:
                self._add_comment(line, physical[pos + 1 :].strip())
                physical = physical[:pos].rstrip()

            line.text = _join(line.text, physical)

            if len(self._brackets) <= base or self._opens_enum_body(line.text, base):
                return line

            following = self._next_physical()
            if following is None:
                raise UnterminatedContinuation(
                    f"unexpected end of file, unclosed '{self._brackets[-1]}'",
                    self.filename,
                    self.lineno,
                )
            physical = following.strip()

    def _add_comment(self, line: LogicalLine, comment: str) -> None:
        if comment == SHOW_DIRECTIVE:
            line.visibility = True
        elif comment == HIDE_DIRECTIVE:
            line.visibility = False
        elif not comment.startswith(_IGNORED_COMMENT_PREFIX):
            line.comments.append(comment)
