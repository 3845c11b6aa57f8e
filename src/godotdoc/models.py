"""Data models for extracted GDScript documentation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class EntryType(Enum):
    """Kind of declaration; the value is the section title."""

    CLASS = "Classes"
    SIGNAL = "Signals"
    FUNC = "Functions"
    VAR = "Variables"
    CONST = "Constants"
    EXPORT = "Exports"
    ENUM = "Enums"

    @property
    def title(self) -> str:
        return self.value


# Order in which entries are emitted for every scope
ENTRY_ORDER = (
    EntryType.CLASS,
    EntryType.ENUM,
    EntryType.SIGNAL,
    EntryType.EXPORT,
    EntryType.CONST,
    EntryType.FUNC,
    EntryType.VAR,
)


@dataclass
class FunctionArgument:
    """One argument of a function or of its super call."""

    name: str
    value_type: str | None = None
    default_value: str | None = None

    def __str__(self) -> str:
        text = self.name
        if self.value_type is not None:
            text += f": {self.value_type}"
        if self.default_value is not None:
            text += f" = {self.default_value}"
        return text

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.value_type,
            "default": self.default_value,
        }


@dataclass
class FunctionArgs:
    arguments: list[FunctionArgument] = field(default_factory=list)
    super_arguments: list[FunctionArgument] | None = None  # `_init(...).(...)` only
    return_type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "arguments": [a.to_dict() for a in self.arguments],
            "super_arguments": (
                None
                if self.super_arguments is None
                else [a.to_dict() for a in self.super_arguments]
            ),
            "return_type": self.return_type,
        }


@dataclass
class VariableArgs:
    """Payload of `var` and `const` declarations."""

    value_type: str | None = None
    assignment: str | None = None  # initializer text
    setter: str | None = None
    getter: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.value_type,
            "assignment": self.assignment,
            "setter": self.setter,
            "getter": self.getter,
        }


@dataclass
class ExportArgs:
    value_type: str | None = None  # export hint type, else the var annotation
    options: list[str] = field(default_factory=list)  # rest of the export hint
    assignment: str | None = None
    setter: str | None = None
    getter: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.value_type,
            "options": list(self.options),
            "assignment": self.assignment,
            "setter": self.setter,
            "getter": self.getter,
        }


@dataclass
class EnumValue:
    name: str
    value: int
    text: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value, "text": list(self.text)}


@dataclass
class EnumArgs:
    values: list[EnumValue] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"values": [v.to_dict() for v in self.values]}


@dataclass
class ClassArgs:
    """A class's own documentation tree."""

    entries: list[DocumentationEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"entries": [e.to_dict() for e in self.entries]}


SymbolArgs = Union[FunctionArgs, VariableArgs, ExportArgs, EnumArgs, ClassArgs]


@dataclass
class Symbol:
    """A documented declaration."""

    name: str
    args: SymbolArgs | None = None  # None for signals
    text: list[str] = field(default_factory=list)  # comment lines above it

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name, "text": list(self.text)}
        if self.args is not None:
            result.update(self.args.to_dict())
        return result


@dataclass
class DocumentationEntry:
    entry_type: EntryType
    symbols: list[Symbol] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.entry_type.name.lower(),
            "symbols": [s.to_dict() for s in self.symbols],
        }


@dataclass(frozen=True)
class DocumentationData:
    """Documentation of one source file."""

    source_file: str
    entries: list[DocumentationEntry]

    def entry(self, entry_type: EntryType) -> DocumentationEntry | None:
        for entry in self.entries:
            if entry.entry_type is entry_type:
                return entry
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_file": self.source_file,
            "entries": [e.to_dict() for e in self.entries],
        }


@dataclass
class ValidationResult:
    """Results from documentation validation."""

    errors: list[str] = field(default_factory=list)  # Build fails if non-empty
    warnings: list[str] = field(default_factory=list)  # Printed but allowed
