"""godotdoc - documentation extraction for GDScript sources."""

from .config import Configuration, Settings, load_configuration, resolve_settings
from .errors import (
    BlockIndentationError,
    BracketMismatch,
    ConfigError,
    GodotDocError,
    InvalidSyntax,
    SourceReadError,
    UnresolvedConstant,
    UnterminatedContinuation,
)
from .models import (
    ClassArgs,
    DocumentationData,
    DocumentationEntry,
    EntryType,
    EnumArgs,
    EnumValue,
    ExportArgs,
    FunctionArgs,
    FunctionArgument,
    Symbol,
    VariableArgs,
)
from .parser import parse, parse_file

__all__ = [
    "parse",
    "parse_file",
    "Configuration",
    "Settings",
    "load_configuration",
    "resolve_settings",
    "GodotDocError",
    "SourceReadError",
    "UnterminatedContinuation",
    "BracketMismatch",
    "InvalidSyntax",
    "BlockIndentationError",
    "UnresolvedConstant",
    "ConfigError",
    "DocumentationData",
    "DocumentationEntry",
    "EntryType",
    "Symbol",
    "FunctionArgument",
    "FunctionArgs",
    "VariableArgs",
    "ExportArgs",
    "EnumValue",
    "EnumArgs",
    "ClassArgs",
]
