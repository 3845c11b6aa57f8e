"""Scope tracking parser turning GDScript source into documentation.

The parser keeps an explicit stack of open scopes: the file itself at the
bottom, then any open class bodies and at most one open enum body on top.
Each logical line is offered to the top scope; a dedent closes class scopes
one by one and the same line is retried against the new top.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO, Union

from . import grammars
from .config import Settings
from .errors import BlockIndentationError, GodotDocError, SourceReadError
from .lines import LineAssembler, LogicalLine
from .models import (
    ENTRY_ORDER,
    ClassArgs,
    DocumentationData,
    DocumentationEntry,
    EntryType,
    EnumArgs,
    EnumValue,
    Symbol,
)

log = logging.getLogger(__name__)

Source = Union[str, Iterable[str], TextIO]


@dataclass
class Frame:
    """Symbols declared directly in one scope, grouped by kind."""

    symbols: dict[EntryType, list[Symbol]] = field(
        default_factory=lambda: {kind: [] for kind in ENTRY_ORDER}
    )
    # Every constant's initializer, hidden ones included, for enum values
    constants: dict[str, str | None] = field(default_factory=dict)

    def add(self, kind: EntryType, symbol: Symbol) -> None:
        self.symbols[kind].append(symbol)

    def to_entries(self) -> list[DocumentationEntry]:
        return [
            DocumentationEntry(kind, self.symbols[kind])
            for kind in ENTRY_ORDER
            if self.symbols[kind]
        ]


@dataclass
class RootScope:
    frame: Frame = field(default_factory=Frame)
    indent: int = 0


@dataclass
class ClassScope:
    name: str
    header_indent: int
    text: list[str]
    hidden: bool = False
    indent: int | None = None  # fixed by the first body line
    frame: Frame = field(default_factory=Frame)


@dataclass
class EnumScope:
    name: str
    text: list[str]
    next_value: int = 0
    hidden: bool = False
    values: list[EnumValue] = field(default_factory=list)


Scope = Union[RootScope, ClassScope, EnumScope]


class DocumentationParser:
    """Build the documentation tree of one file from its logical lines.

    Example:
        parser = DocumentationParser("player.gd", Settings())
        for line in LineAssembler("player.gd", source):
            parser.feed(line)
        data = parser.finish()
    """

    def __init__(self, filename: str, settings: Settings):
        self.filename = filename
        self.settings = settings
        self._stack: list[Scope] = [RootScope()]
        # Comments and [Show]/[Hide] seen since the last statement
        self._comments: list[str] = []
        self._visibility: bool | None = None

    def feed(self, line: LogicalLine) -> None:
        self._comments.extend(line.comments)
        if line.visibility is not None:
            self._visibility = line.visibility
        if line.is_empty:
            return

        try:
            self._dispatch(line)
        except GodotDocError as e:
            e.locate(self.filename, line.lineno)
            raise

        self._comments.clear()
        self._visibility = None

    def finish(self) -> DocumentationData:
        """Close every open scope and return the file's documentation."""
        while len(self._stack) > 1:
            self._close_top()
        root = self._stack[0]
        log.debug("Parsed %s", self.filename)
        return DocumentationData(self.filename, root.frame.to_entries())

    def _dispatch(self, line: LogicalLine) -> None:
        while True:
            scope = self._stack[-1]

            if isinstance(scope, EnumScope):
                self._continue_enum(scope, line.text)
                return

            if isinstance(scope, ClassScope) and scope.indent is None:
                if line.indent <= scope.header_indent:
                    raise BlockIndentationError("Indented block expected")
                scope.indent = line.indent

            if line.indent < scope.indent:
                # Dedent below this class body: close it and retry the line
                self._close_top()
                continue

            if line.indent == scope.indent:
                self._parse_content(scope, line.text.strip(), line.indent)
            # Deeper lines are statement bodies
            return

    def _take_comments(self) -> list[str]:
        text = list(self._comments)
        self._comments.clear()
        return text

    def _is_visible(self, name: str) -> bool:
        if self._visibility is not None:
            return self._visibility
        return self.settings.show_prefixed or not name.startswith("_")

    def _add(self, frame: Frame, kind: EntryType, name: str, args=None) -> None:
        if self._is_visible(name):
            frame.add(kind, Symbol(name, args, self._take_comments()))

    def _resolve_constant(self, name: str) -> str | None:
        for scope in reversed(self._stack):
            if isinstance(scope, EnumScope):
                continue
            if name in scope.frame.constants:
                return scope.frame.constants[name]
        return None

    def _parse_content(
        self, scope: RootScope | ClassScope, text: str, indent: int
    ) -> None:
        keyword = grammars.leading_keyword(text)
        frame = scope.frame

        if keyword == "class":
            name = grammars.parse_class_header(text)
            hidden = not self._is_visible(name)
            self._stack.append(ClassScope(name, indent, self._take_comments(), hidden))
            log.debug("Opened class %s (hidden=%s)", name, hidden)
        elif keyword == "signal":
            self._add(frame, EntryType.SIGNAL, grammars.parse_signal(text))
        elif keyword == "func":
            self._add(frame, EntryType.FUNC, *grammars.parse_function(text))
        elif keyword == "var":
            self._add(frame, EntryType.VAR, *grammars.parse_variable(text))
        elif keyword == "const":
            name, args = grammars.parse_constant(text)
            frame.constants.setdefault(name, args.assignment)
            self._add(frame, EntryType.CONST, name, args)
        elif keyword == "export":
            self._add(frame, EntryType.EXPORT, *grammars.parse_export(text))
        elif keyword == "enum":
            self._open_enum(text)

    def _open_enum(self, text: str) -> None:
        name, body, closed = grammars.parse_enum_header(text)
        scope = EnumScope(name, self._take_comments(), hidden=not self._is_visible(name))
        self._stack.append(scope)
        self._parse_enum_values(scope, body)
        if closed:
            self._close_top()

    def _continue_enum(self, scope: EnumScope, text: str) -> None:
        body, closed = grammars.split_enum_body(text)
        self._parse_enum_values(scope, body)
        if closed:
            self._close_top()

    def _parse_enum_values(self, scope: EnumScope, body: str) -> None:
        values, scope.next_value = grammars.parse_enum_values(
            body, scope.next_value, self._resolve_constant
        )
        for name, value in values:
            if self._is_visible(name):
                scope.values.append(EnumValue(name, value, self._take_comments()))

    def _close_top(self) -> None:
        scope = self._stack.pop()
        parent = self._stack[-1]

        if isinstance(scope, ClassScope):
            log.debug("Closed class %s", scope.name)
            if not scope.hidden:
                symbol = Symbol(scope.name, ClassArgs(scope.frame.to_entries()), scope.text)
                parent.frame.add(EntryType.CLASS, symbol)
        elif isinstance(scope, EnumScope):
            if not scope.hidden:
                symbol = Symbol(scope.name, EnumArgs(scope.values), scope.text)
                parent.frame.add(EntryType.ENUM, symbol)


def parse(
    filename: str,
    source: Source,
    settings: Settings | None = None,
) -> DocumentationData:
    """Parse one GDScript file.

    Args:
        filename: Name reported in the result and in errors
        source: Source text, or any iterable of lines such as an open file
        settings: Visibility settings; defaults show everything

    Returns:
        DocumentationData for the file

    Raises:
        GodotDocError: On the first syntax error; nothing partial is returned
    """
    parser = DocumentationParser(filename, settings or Settings())
    for line in LineAssembler(filename, source):
        parser.feed(line)
    return parser.finish()


def parse_file(
    path: Path,
    settings: Settings | None = None,
    display_name: str | None = None,
) -> DocumentationData:
    """Read and parse a file as UTF-8."""
    name = display_name or path.name
    try:
        with open(path, encoding="utf-8") as f:
            return parse(name, f, settings)
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(f"Failed to read input file: {e}", name) from e
