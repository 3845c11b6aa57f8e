"""Grammars for the individual GDScript declarations.

Each function takes the stripped text of one logical line and returns the
pieces the parser needs. They know nothing about scopes, comments or
visibility, and raise without a source location; the parser adds it.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from enum import Enum, auto

from .errors import InvalidSyntax, UnresolvedConstant
from .models import ExportArgs, FunctionArgs, FunctionArgument, VariableArgs
from .scanner import find, split_top_level

KEYWORDS = frozenset({"class", "signal", "func", "var", "const", "export", "enum"})

_KEYWORD_RE = re.compile(r"[A-Za-z_]\w*")
_SETGET = " setget "
_EXPORT_VAR = " var "
_ONREADY = "onready"


def leading_keyword(line: str) -> str | None:
    """Return the declaration keyword `line` starts with, if any."""
    match = _KEYWORD_RE.match(line)
    if match and match.group() in KEYWORDS:
        return match.group()
    return None


def _invalid(line: str) -> InvalidSyntax:
    return InvalidSyntax(f"invalid syntax '{line}'")


def parse_class_header(line: str) -> str:
    """`class Name:` -> "Name" (anything up to the first ':')."""
    name = line[len("class") :].split(":", 1)[0].strip()
    if not name:
        raise _invalid(line)
    return name


def parse_signal(line: str) -> str:
    """`signal hit(damage)` -> "hit(damage)"."""
    name = line[len("signal") :].strip()
    if not name:
        raise _invalid(line)
    return name


# -----------------------------
# Function signatures


class Side(Enum):
    """Which part of the signature the next character belongs to."""

    NAME = auto()
    TYPE = auto()
    ASSIGNMENT = auto()
    INVALID = auto()


class _ArgumentBuilder:
    """Accumulates one argument while scanning an argument list."""

    def __init__(self, line: str):
        self.line = line
        self.name = ""
        self.name_ended = False  # whitespace seen after the name
        self.value_type: str | None = None
        self.default: str | None = None

    def push(self, side: Side, ch: str) -> None:
        if side is Side.NAME:
            if ch.isspace():
                self.name_ended = bool(self.name)
            elif self.name_ended:
                raise _invalid(self.line)
            else:
                self.name += ch
        elif side is Side.TYPE:
            self.value_type = (self.value_type or "") + ch
        elif side is Side.ASSIGNMENT:
            self.default = (self.default or "") + ch

    @property
    def is_empty(self) -> bool:
        return not self.name and self.value_type is None and self.default is None

    def build(self) -> FunctionArgument:
        if not self.name.isidentifier():
            raise _invalid(self.line)
        value_type = (self.value_type or "").strip() or None  # `a := 1` infers
        default = None
        if self.default is not None:
            default = self.default.strip()
            if not default:
                raise _invalid(self.line)
        return FunctionArgument(self.name, value_type, default)


def parse_function(line: str) -> tuple[str, FunctionArgs]:
    """Parse `func name(args)[.(super args)] [-> type]:`.

    The primary argument list is group 1. A second parenthesised group is only
    accepted for `_init`, after a '.', and holds the super call's arguments.
    Brackets and strings inside types and defaults are kept verbatim, so a
    ',' or ':' inside `Vector2(1, 2)` or `{"a": 1}` does not split anything.

    Returns:
        (function name, FunctionArgs)

    Raises:
        InvalidSyntax: If the signature is malformed
    """
    name = ""
    args = FunctionArgs()
    side = Side.NAME
    groups = 0  # completed parenthesised groups
    in_group = False
    super_call = False  # '.' seen after `_init(...)`
    nested: list[str] = []  # brackets inside a type or default value
    quote = None
    escaped = False
    arrow = False  # last character was '-' outside the groups
    finished = False
    current = _ArgumentBuilder(line)

    def flush(allow_empty: bool) -> None:
        nonlocal current
        if current.is_empty:
            if allow_empty:
                return
            raise _invalid(line)
        argument = current.build()
        if groups == 0:
            args.arguments.append(argument)
        else:
            if args.super_arguments is None:
                args.super_arguments = []
            args.super_arguments.append(argument)
        current = _ArgumentBuilder(line)

    for ch in line[len("func") :]:
        if finished:
            if not ch.isspace():
                raise _invalid(line)
            continue

        if quote is not None or nested:
            current.push(side, ch)
            if quote is not None:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == quote:
                    quote = None
            elif ch in "\"'":
                quote = ch
            elif ch in "([{":
                nested.append(ch)
            elif ch in ")]}":
                nested.pop()
            continue

        if in_group:
            if ch == ",":
                flush(allow_empty=False)
                side = Side.NAME
            elif ch == ")":
                flush(allow_empty=True)
                in_group = False
                groups += 1
                side = Side.INVALID
            elif ch == ":" and side is Side.NAME:
                side = Side.TYPE
                current.value_type = ""
            elif ch == "=" and side in (Side.NAME, Side.TYPE):
                side = Side.ASSIGNMENT
                current.default = ""
            elif ch in "([{\"'" and side is Side.NAME:
                raise _invalid(line)
            elif ch == ":" and side is Side.TYPE:
                raise _invalid(line)
            else:
                if ch in "\"'":
                    quote = ch
                elif ch in "([{":
                    nested.append(ch)
                current.push(side, ch)
            continue

        # Outside the argument groups
        if arrow and ch != ">":
            raise _invalid(line)
        if ch.isspace():
            continue
        if ch == "(":
            if groups == 0 or (groups == 1 and super_call):
                in_group = True
                side = Side.NAME
            else:
                raise _invalid(line)
        elif ch == ".":
            if name == "_init" and groups == 1 and not super_call:
                super_call = True
            else:
                raise _invalid(line)
        elif ch == ":":
            finished = True
        elif ch == "-":
            arrow = True
        elif ch == ">":
            if not arrow or groups == 0:
                raise _invalid(line)
            arrow = False
            side = Side.TYPE
            args.return_type = ""
        elif side is Side.NAME and groups == 0:
            name += ch
        elif side is Side.TYPE:
            args.return_type += ch
        else:
            raise _invalid(line)

    if in_group or quote is not None or nested or arrow:
        raise _invalid(line)
    if not name.isidentifier() or groups == 0 or (super_call and groups < 2):
        raise _invalid(line)
    if args.return_type is not None and not args.return_type:
        raise _invalid(line)
    return name, args


# -----------------------------
# Assignments, setget and exports


def _parse_setget(clause: str, line: str) -> tuple[str | None, str | None]:
    parts = [p.strip() for p in split_top_level(clause, ",")]
    if len(parts) == 1 and parts[0]:
        return parts[0], None
    if len(parts) == 2:
        setter, getter = parts
        if setter or getter:
            return setter or None, getter or None
    raise _invalid(line)


def parse_assignment(line: str) -> tuple[str, VariableArgs]:
    """Parse `name[: type][ = value][ setget setter[, getter]]`.

    `=`, `:` and ` setget ` are located at bracket depth 0 outside strings;
    their relative order decides how the line splits. Orders other than
    `:` < `=` < ` setget ` (with any of them absent) are rejected.

    Returns:
        (name, VariableArgs)

    Raises:
        InvalidSyntax: If the parts are out of order or the name is invalid
    """
    apos = find(line, "=", top_level=True)
    tpos = find(line, ":", top_level=True)
    spos = find(line, _SETGET, top_level=True)

    present = [p for p in (tpos, apos, spos) if p >= 0]
    if present != sorted(present):
        raise _invalid(line)

    ends = present[1:] + [len(line)]
    result = VariableArgs()
    name_end = present[0] if present else len(line)

    for pos, end in zip(present, ends):
        if pos == tpos:
            result.value_type = line[pos + 1 : end].strip() or None
        elif pos == apos:
            result.assignment = line[pos + 1 : end].strip()
            if not result.assignment:
                raise _invalid(line)
        else:
            result.setter, result.getter = _parse_setget(
                line[pos + len(_SETGET) :], line
            )

    name = line[:name_end].strip()
    if not name.isidentifier():
        raise _invalid(line)
    return name, result


def parse_variable(line: str) -> tuple[str, VariableArgs]:
    """`var ...` declaration."""
    return parse_assignment(line[len("var") :])


def parse_constant(line: str) -> tuple[str, VariableArgs]:
    """`const ...` declaration."""
    return parse_assignment(line[len("const") :])


def _parse_export_hint(head: str, line: str) -> str | None:
    """Return the text inside `export(...)`, None when there is no hint."""
    if head in ("", _ONREADY):
        return None
    if not head.startswith("("):
        raise _invalid(line)
    close = find(head[1:], ")", top_level=True)
    if close < 0:
        raise _invalid(line)
    if head[close + 2 :].strip() not in ("", _ONREADY):
        raise _invalid(line)
    return head[1 : close + 1]


def parse_export(line: str) -> tuple[str, ExportArgs]:
    """Parse `export[(type, options...)] var <assignment>`.

    The hint's type takes precedence over a type annotation on the variable.

    Raises:
        InvalidSyntax: If ` var ` is missing or the hint is malformed
    """
    pos = find(line, _EXPORT_VAR, top_level=True)
    if pos < 0:
        raise _invalid(line)

    hint = _parse_export_hint(line[len("export") : pos].strip(), line)
    hint_type = None
    options: list[str] = []
    if hint is not None:
        parts = [p.strip() for p in split_top_level(hint, ",")]
        hint_type = parts[0] or None
        options = parts[1:]

    name, variable = parse_assignment(line[pos + len(_EXPORT_VAR) :])
    return name, ExportArgs(
        value_type=hint_type or variable.value_type,
        options=options,
        assignment=variable.assignment,
        setter=variable.setter,
        getter=variable.getter,
    )


# -----------------------------
# Enumerations


def parse_enum_header(line: str) -> tuple[str, str, bool]:
    """Split `enum Name { A, B` into its name, body text and closed flag.

    The name is empty for anonymous enums.
    """
    brace = find(line, "{", top_level=True)
    if brace < 0:
        raise _invalid(line)
    name = line[len("enum") : brace].strip()
    if name and not name.isidentifier():
        raise _invalid(line)
    body, closed = split_enum_body(line[brace + 1 :])
    return name, body, closed


def split_enum_body(text: str) -> tuple[str, bool]:
    """Return the text before the closing '}' and whether it was found."""
    end = find(text, "}", top_level=True)
    if end < 0:
        return text, False
    return text[:end], True


def parse_int(raw: str) -> int | None:
    """Parse a GDScript integer literal, None if `raw` is not one."""
    for base in (10, 0):
        try:
            return int(raw, base)
        except ValueError:
            continue
    return None


def parse_enum_values(
    text: str,
    next_value: int,
    resolve: Callable[[str], str | None],
) -> tuple[list[tuple[str, int]], int]:
    """Parse comma separated `NAME` / `NAME = value` enum elements.

    Args:
        text: Body text, possibly only part of the enum
        next_value: Value of an element without an explicit value
        resolve: Returns the initializer text of a constant reachable from
            the current scope, or None

    Returns:
        ([(name, value), ...], next value to assign)

    Raises:
        InvalidSyntax: If an element is malformed
        UnresolvedConstant: If a named value is not an integer constant
    """
    values = []
    for element in split_top_level(text, ","):
        element = element.strip()
        if not element:
            continue

        eq = find(element, "=", top_level=True)
        if eq < 0:
            name, value = element, next_value
        else:
            name = element[:eq].strip()
            value = _enum_value(element[eq + 1 :].strip(), resolve, element)

        if not name.isidentifier():
            raise _invalid(element)
        values.append((name, value))
        next_value = value + 1

    return values, next_value


def _enum_value(raw: str, resolve: Callable[[str], str | None], element: str) -> int:
    if not raw:
        raise _invalid(element)
    value = parse_int(raw)
    if value is not None:
        return value

    if not raw.isidentifier():
        raise _invalid(element)
    constant = resolve(raw)
    if constant is None:
        raise UnresolvedConstant(f"'{raw}' is not a valid enum value")
    value = parse_int(constant)
    if value is None:
        raise UnresolvedConstant(
            f"Constant '{raw}' of value '{constant}' is not a valid enum value"
        )
    return value
