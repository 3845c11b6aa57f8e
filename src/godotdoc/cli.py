"""Documentation generator for GDScript.

Generates, for every `.gd` file below INPUT_DIR:
    OUTPUT_DIR/{relative dir}/{file}.gd.md    - Markdown reference (default)
    OUTPUT_DIR/{relative dir}/{file}.gd.json  - with --backend json
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterator
from pathlib import Path

from .config import Settings, load_configuration, resolve_settings
from .errors import GodotDocError, SourceReadError
from .generators import BACKENDS, Backend, get_backend
from .models import DocumentationData
from .parser import parse_file
from .validators import compute_coverage, validate_docs

log = logging.getLogger(__name__)

SOURCE_SUFFIX = ".gd"


def iter_sources(
    input_dir: Path, settings: Settings, relative: Path = Path()
) -> Iterator[Path]:
    """Yield `.gd` files below `input_dir` as paths relative to it.

    Entries matching an exclusion glob are skipped, directories included.
    """
    try:
        children = sorted((input_dir / relative).iterdir())
    except OSError as e:
        raise SourceReadError(f"Failed to read directory: {e}", str(input_dir / relative)) from e

    for path in children:
        rel = relative / path.name
        if settings.is_excluded(rel):
            log.debug("Skipping excluded %s", rel.as_posix())
            continue
        if path.is_dir():
            yield from iter_sources(input_dir, settings, rel)
        elif path.is_file() and path.suffix == SOURCE_SUFFIX:
            yield rel


def generate_docs(
    input_dir: Path,
    output_dir: Path,
    settings: Settings,
    backend: Backend,
) -> list[DocumentationData]:
    """Parse every source file and write one output file per source.

    Raises:
        GodotDocError: On the first file that cannot be read or parsed
    """
    results = []
    for rel in iter_sources(input_dir, settings):
        data = parse_file(input_dir / rel, settings, display_name=rel.as_posix())
        output_path = output_dir / rel.parent / f"{rel.name}.{backend.extension}"
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(backend.generate(data), encoding="utf-8")
        except OSError as e:
            raise SourceReadError(
                f"Failed to write output file: {output_path}, {e}"
            ) from e
        log.info("  %s", output_path)
        results.append(data)
    return results


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="godotdoc", description="Documentation generator for GDScript."
    )
    parser.add_argument("input", help="Directory containing .gd files")
    parser.add_argument(
        "-o", "--output", required=True, help="Directory to write documentation to"
    )
    parser.add_argument(
        "--backend",
        choices=sorted(BACKENDS),
        help="Type of files to generate (default: markdown, or the config file's)",
    )
    visibility = parser.add_mutually_exclusive_group()
    visibility.add_argument(
        "--show-prefixed",
        dest="show_prefixed",
        action="store_const",
        const=True,
        help="Show members prefixed with an '_'",
    )
    visibility.add_argument(
        "--hide-prefixed",
        dest="show_prefixed",
        action="store_const",
        const=False,
        help="Hide members prefixed with an '_'",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when a declaration has no comment text",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Generate documentation for a directory tree."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    input_dir = Path(args.input)
    output_dir = Path(args.output)

    try:
        config = load_configuration(input_dir)
        settings = resolve_settings(
            config, backend=args.backend, show_prefixed=args.show_prefixed
        )
        backend = get_backend(settings.backend)
        log.info("Generating %s documentation...", backend.name)
        results = generate_docs(input_dir, output_dir, settings, backend)
    except GodotDocError as e:
        log.error("%s", e)
        return 1

    validation = validate_docs(results, strict=args.strict)
    for warning in validation.warnings:
        log.debug("%s", warning)
    if validation.errors:
        log.error("Validation errors:")
        for err in validation.errors:
            log.error("  %s", err)
        return 1

    coverage = compute_coverage(results)
    log.info("Done! %d files, coverage %.0f%%", len(results), coverage * 100)
    return 0


if __name__ == "__main__":
    sys.exit(main())
