# File: resolvergen/cli.py
"""
NexaFlow ResolverGen - Command-Line Interface
===============================================

CLI built with the standard-library ``argparse`` module.

Usage examples::

    # Generate next to the schema file
    resolvergen schema.graphql

    # Verbose output, custom configuration
    resolvergen -vv -c resolvergen.yaml schema.graphql

    # Show what would be written without touching the disk
    python -m resolvergen --dry-run schema.graphql

Exit codes:
    0 — success (also when no schema is given: help is printed)
    1 — orphan files found, or generation aborted by an error
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional, Sequence

# ---------------------------------------------------------------------------
# Logger (configured in _setup_logging)
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("resolvergen")


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_FAILURE: int = 1


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(verbosity: int) -> None:
    """
    Configure the root resolvergen logger based on verbosity level.

    Args:
        verbosity: -1 = CRITICAL only, 0 = WARNING, 1 = INFO, 2+ = DEBUG.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    elif verbosity == 0:
        level = logging.WARNING
    else:
        level = logging.CRITICAL

    handler: logging.StreamHandler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    fmt: str = "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s"
    datefmt: str = "%H:%M:%S"
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root_logger: logging.Logger = logging.getLogger("resolvergen")
    root_logger.setLevel(level)

    # Remove existing handlers to prevent duplication
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    # Prevent propagation to root logger
    root_logger.propagate = False


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    from resolvergen import __version__

    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="resolvergen",
        description=(
            "NexaFlow ResolverGen — GraphQL resolver code generator.\n\n"
            "Reads a GraphQL schema definition and writes Flow-typed resolver "
            "signatures plus editable implementation scaffolds."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  %(prog)s schema.graphql\n"
            "  %(prog)s -v -c resolvergen.yaml schema.graphql\n"
            "  %(prog)s --dry-run schema.graphql\n"
        ),
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"NexaFlow ResolverGen v{__version__}",
    )

    parser.add_argument(
        "schema",
        nargs="?",
        default=None,
        metavar="SCHEMA",
        help="Path to the GraphQL schema definition (SDL) file.",
    )

    config_group = parser.add_argument_group("configuration")
    config_group.add_argument(
        "-c", "--config",
        type=str,
        default=None,
        metavar="PATH",
        help="YAML file with generation settings.",
    )
    config_group.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        metavar="DIR",
        help="Output root (default: the directory holding the schema).",
    )
    config_group.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        help="Run the full pipeline but don't write files to disk.",
    )

    verbosity_group = parser.add_argument_group("verbosity")
    verbosity_group.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG).",
    )
    verbosity_group.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=False,
        help="Suppress all output except critical errors.",
    )

    return parser


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


def _run_generation(schema_path: Path, args: argparse.Namespace) -> int:
    """Run the full generation pipeline and return the exit code."""
    from resolvergen.errors import CodegenError
    from resolvergen.generator import GenerationReport, ResolverGenerator, load_config

    overrides: Dict[str, Any] = {}
    if args.output is not None:
        overrides["output_dir"] = str(Path(args.output).resolve())

    try:
        config = load_config(Path(args.config) if args.config else None, overrides)
        generator: ResolverGenerator = ResolverGenerator(config, dry_run=args.dry_run)
        report: GenerationReport = asyncio.run(generator.generate_from_file(schema_path))
    except CodegenError as exc:
        logger.error("%s", exc)
        return EXIT_FAILURE
    except OSError as exc:
        logger.error("File system error: %s", exc)
        return EXIT_FAILURE

    if not args.quiet:
        print(report.summary())

    return EXIT_SUCCESS if report.success else EXIT_FAILURE


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def cli_main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """
    Main CLI entry point.

    Can be called from ``__main__.py`` or directly for testing.

    Args:
        argv: Optional argument list (defaults to sys.argv[1:]).
    """
    parser: argparse.ArgumentParser = _build_parser()
    args: argparse.Namespace = parser.parse_args(argv)

    verbosity: int = -1 if args.quiet else args.verbose
    _setup_logging(verbosity)

    # --- No schema: usage only ---
    if args.schema is None:
        parser.print_help(sys.stdout)
        sys.exit(EXIT_SUCCESS)

    schema_path: Path = Path(args.schema).resolve()
    if not schema_path.is_file():
        logger.error("Schema file not found: %s", schema_path)
        sys.exit(EXIT_FAILURE)

    logger.info("Schema:  %s", schema_path)
    logger.info("Dry run: %s", args.dry_run)

    exit_code: int = _run_generation(schema_path, args)

    if exit_code == EXIT_SUCCESS:
        logger.info("Generation completed successfully.")
    else:
        logger.error("Generation failed with exit code %d.", exit_code)

    sys.exit(exit_code)


def main() -> NoReturn:
    """Console-script entry point."""
    cli_main()


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "cli_main",
    "main",
    "EXIT_SUCCESS",
    "EXIT_FAILURE",
]

logger.debug("resolvergen.cli loaded.")
