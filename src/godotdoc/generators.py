"""Output backends rendering parsed documentation."""

from __future__ import annotations

import json

from .errors import ConfigError
from .models import (
    ClassArgs,
    DocumentationData,
    DocumentationEntry,
    EntryType,
    EnumArgs,
    ExportArgs,
    FunctionArgs,
    Symbol,
    VariableArgs,
)

_KEYWORDS = {
    EntryType.CLASS: "class",
    EntryType.SIGNAL: "signal",
    EntryType.FUNC: "func",
    EntryType.VAR: "var",
    EntryType.CONST: "const",
    EntryType.EXPORT: "export var",
    EntryType.ENUM: "enum",
}


def _escape_cell(text: str) -> str:
    return text.replace("|", "\\|")


def _format_accessors(setter: str | None, getter: str | None) -> str:
    if setter is None and getter is None:
        return ""
    if getter is None:
        return f" setget {setter}"
    return f" setget {setter or ''}, {getter}"


def format_signature(entry_type: EntryType, symbol: Symbol) -> str:
    """Render a declaration back into a single GDScript line."""
    text = f"{_KEYWORDS[entry_type]} {symbol.name}".rstrip()
    args = symbol.args

    if isinstance(args, FunctionArgs):
        text += f"({', '.join(str(a) for a in args.arguments)})"
        if args.super_arguments is not None:
            text += f".({', '.join(str(a) for a in args.super_arguments)})"
        if args.return_type:
            text += f" -> {args.return_type}"
    elif isinstance(args, (VariableArgs, ExportArgs)):
        if args.value_type:
            text += f": {args.value_type}"
        if args.assignment is not None:
            text += f" = {args.assignment}"
        text += _format_accessors(args.setter, args.getter)

    return text


def _render_enum_values(lines: list[str], args: EnumArgs) -> None:
    if not args.values:
        return
    lines.extend(
        [
            "| Name | Value | Description |",
            "|------|-------|-------------|",
        ]
    )
    for value in args.values:
        desc = _escape_cell(" ".join(value.text))
        lines.append(f"| `{value.name}` | {value.value} | {desc} |")
    lines.append("")


def _render_symbol(
    lines: list[str], entry_type: EntryType, symbol: Symbol, level: int
) -> None:
    heading = "#" * min(level, 6)
    title = symbol.name or "(anonymous)"
    lines.extend(
        [
            f"{heading} {title}",
            "",
            "```gdscript",
            format_signature(entry_type, symbol),
            "```",
            "",
        ]
    )

    if symbol.text:
        lines.extend(symbol.text)
        lines.append("")

    args = symbol.args
    if isinstance(args, ExportArgs) and args.options:
        options = ", ".join(f"`{o}`" for o in args.options)
        lines.append(f"**Options:** {options}")
        lines.append("")
    elif isinstance(args, EnumArgs):
        _render_enum_values(lines, args)
    elif isinstance(args, ClassArgs):
        _render_entries(lines, args.entries, level + 1)


def _render_entries(
    lines: list[str], entries: list[DocumentationEntry], level: int
) -> None:
    heading = "#" * min(level, 6)
    for entry in entries:
        lines.append(f"{heading} {entry.entry_type.title}")
        lines.append("")
        for symbol in entry.symbols:
            _render_symbol(lines, entry.entry_type, symbol, level + 1)


def generate_markdown(data: DocumentationData) -> str:
    """Generate the Markdown reference page of one source file."""
    lines = [
        "<!-- AUTO-GENERATED. DO NOT EDIT. Edit the comments in the source instead. -->",
        "",
        f"# {data.source_file}",
        "",
    ]

    if not data.entries:
        lines.append("*No documented declarations.*")
        lines.append("")

    _render_entries(lines, data.entries, 2)
    return "\n".join(lines)


def generate_json(data: DocumentationData) -> str:
    return json.dumps(data.to_dict(), indent=4) + "\n"


class Backend:
    """Turns DocumentationData into the contents of one output file."""

    name = ""
    extension = ""

    def generate(self, data: DocumentationData) -> str:
        raise NotImplementedError


class MarkdownBackend(Backend):
    name = "markdown"
    extension = "md"

    def generate(self, data: DocumentationData) -> str:
        return generate_markdown(data)


class JsonBackend(Backend):
    name = "json"
    extension = "json"

    def generate(self, data: DocumentationData) -> str:
        return generate_json(data)


BACKENDS: dict[str, type[Backend]] = {
    MarkdownBackend.name: MarkdownBackend,
    JsonBackend.name: JsonBackend,
}


def get_backend(name: str | None) -> Backend:
    """Return the backend registered under `name` (Markdown if None).

    Raises:
        ConfigError: If no backend has that name
    """
    backend = BACKENDS.get(name or MarkdownBackend.name)
    if backend is None:
        raise ConfigError(f"Unsupported backend '{name}'")
    return backend()
