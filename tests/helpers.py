"""Helpers for inspecting parsed documentation in tests."""

from godotdoc import DocumentationData, EntryType


def source(*lines: str) -> str:
    """Join lines into GDScript source text."""
    return "\n".join(lines) + "\n"


def _entries(container):
    if isinstance(container, DocumentationData):
        return container.entries
    # A class symbol
    return container.args.entries


def symbols(container, kind: EntryType):
    """Symbols of one kind in a file or class, [] when the entry is absent."""
    for entry in _entries(container):
        if entry.entry_type is kind:
            return entry.symbols
    return []


def names(container, kind: EntryType) -> list[str]:
    return [s.name for s in symbols(container, kind)]


def kinds(container) -> list[EntryType]:
    return [e.entry_type for e in _entries(container)]


def find(container, kind: EntryType, name: str):
    for symbol in symbols(container, kind):
        if symbol.name == name:
            return symbol
    raise AssertionError(f"{kind.title} has no symbol {name!r}")
