"""Documentation coverage checks."""

from __future__ import annotations

from collections.abc import Iterator

from .models import (
    ClassArgs,
    DocumentationData,
    DocumentationEntry,
    EnumArgs,
    ValidationResult,
)


def _walk(
    entries: list[DocumentationEntry], prefix: str
) -> Iterator[tuple[str, bool]]:
    """Yield (qualified name, documented) for every symbol and enum value."""
    for entry in entries:
        for symbol in entry.symbols:
            name = f"{prefix}{symbol.name}"
            yield name, bool(symbol.text)
            if isinstance(symbol.args, ClassArgs):
                yield from _walk(symbol.args.entries, f"{name}.")
            elif isinstance(symbol.args, EnumArgs):
                for value in symbol.args.values:
                    yield f"{name}.{value.name}", bool(value.text)


def find_undocumented(data: DocumentationData) -> list[str]:
    """Qualified names of symbols without comment text."""
    return [name for name, documented in _walk(data.entries, "") if not documented]


def validate_docs(
    results: list[DocumentationData],
    strict: bool = False,
) -> ValidationResult:
    """Report symbols without documentation.

    Args:
        results: Parsed files
        strict: If True, missing docs are errors instead of warnings

    Returns:
        ValidationResult with errors and warnings
    """
    result = ValidationResult()
    for data in results:
        for name in find_undocumented(data):
            msg = f"{data.source_file}: {name} is undocumented"
            if strict:
                result.errors.append(msg)
            else:
                result.warnings.append(msg)
    return result


def compute_coverage(results: list[DocumentationData]) -> float:
    """Share of documented symbols (0.0 - 1.0), 1.0 when there are none."""
    total = 0
    documented = 0
    for data in results:
        for _, has_text in _walk(data.entries, ""):
            total += 1
            documented += has_text
    return documented / total if total > 0 else 1.0
