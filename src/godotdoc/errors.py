"""Exceptions raised while reading, parsing and rendering GDScript sources.

Every error is fatal for the file being parsed: there is no partial output.
Location is optional because grammar helpers raise without knowing where the
text came from; the parser fills it in with ``locate`` before re-raising.
"""

from __future__ import annotations


class GodotDocError(Exception):
    """Base exception for godotdoc operations."""

    def __init__(
        self,
        message: str,
        filename: str | None = None,
        lineno: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.filename = filename
        self.lineno = lineno

    def locate(self, filename: str, lineno: int | None) -> GodotDocError:
        """Attach a source location unless one is already set."""
        if self.filename is None:
            self.filename = filename
            self.lineno = lineno
        return self

    def __str__(self) -> str:
        if self.filename is None:
            return self.message
        if self.lineno is None:
            return f"Failed to parse {self.filename}: {self.message}"
        return f"Failed to parse {self.filename}, line {self.lineno}: {self.message}"


class SourceReadError(GodotDocError):
    """Raised when an input file or directory cannot be read."""


class UnterminatedContinuation(GodotDocError):
    """Raised when input ends while a '\\' continuation or a bracket is pending."""


class BracketMismatch(GodotDocError):
    """Raised on a closing bracket without a matching opener."""


class InvalidSyntax(GodotDocError):
    """Raised when a declaration matches none of the accepted shapes."""


class BlockIndentationError(GodotDocError):
    """Raised when a class body is not indented further than its header."""


class UnresolvedConstant(GodotDocError):
    """Raised when an enum value names no reachable integer constant."""


class ConfigError(GodotDocError):
    """Raised when configuration is unreadable or invalid."""
