# File: resolvergen/__init__.py
"""
NexaFlow ResolverGen — GraphQL Resolver Code Generator
========================================================

Reads a GraphQL schema definition and emits Flow-typed JavaScript: resolver
signatures for every object type, plus editable scaffolds (context, models,
custom scalars, abstract-type dispatchers, resolver stubs) that are never
overwritten once they exist.

Architecture overview::

    cli.py ──▶ generator.py ──▶ templates.py ──▶ shapes.py ──▶ typerefs.py ──▶ dispatch.py
                   │                 │
                   │                 └──▶ module_builder.py
                   ▼
             idempotency.py ──▶ exports.py, formatting.py, exporters.py

Usage::

    # As a library
    import asyncio
    from resolvergen import ResolverGenerator, load_config
    gen = ResolverGenerator(load_config())
    report = asyncio.run(gen.generate_from_file(Path("schema.graphql")))

    # From the command line
    python -m resolvergen schema.graphql --verbose

Public API:
    - ResolverGenerator         — Master orchestrator
    - GenerationConfig          — Generation settings model
    - ResolverShapeSynthesizer  — Per-type Flow definitions
    - TypeRefRenderer           — Type node → Flow type reference
    - ModuleBuilder             — Import/definition accumulator
    - IdempotencyController     — Scaffold write gating
"""

from __future__ import annotations

__version__: str = "1.0.0"
__author__: str = "NexaFlow Team"
__license__: str = "MIT"

from resolvergen.dispatch import InputKind, OutputKind, idispatch, odispatch
from resolvergen.errors import (
    CodegenError,
    ConfigError,
    ContractViolation,
    DuplicateDef,
    FormatterError,
    MalformedNullableExpr,
    MissingTypeName,
    OrphanFile,
    SchemaLoadError,
    UnhandledVariant,
    UnknownDef,
)
from resolvergen.models import (
    ArtifactCategory,
    ArtifactKind,
    FormatterKind,
    GenerationConfig,
    Ownership,
)
from resolvergen.typerefs import NULLABLE_SUFFIX, TypeRefRenderer, non_optional, nullable
from resolvergen.shapes import ResolverShapeSynthesizer, canonical_type_index
from resolvergen.module_builder import ModuleBuilder
from resolvergen.exports import ExportScanner
from resolvergen.formatting import LayoutFormatter, PrettierFormatter
from resolvergen.exporters import FileSystem
from resolvergen.idempotency import IdempotencyController
from resolvergen.templates import TemplateGenerator
from resolvergen.generator import (
    GenerationReport,
    ResolverGenerator,
    load_config,
    load_schema_file,
)

# ---------------------------------------------------------------------------
# Public API surface
# ---------------------------------------------------------------------------

__all__: list[str] = [
    # Version info
    "__version__",
    "__author__",
    "__license__",
    # Core orchestrator
    "ResolverGenerator",
    "GenerationReport",
    "load_config",
    "load_schema_file",
    # Models
    "ArtifactCategory",
    "ArtifactKind",
    "FormatterKind",
    "GenerationConfig",
    "Ownership",
    # Synthesis
    "InputKind",
    "OutputKind",
    "odispatch",
    "idispatch",
    "NULLABLE_SUFFIX",
    "nullable",
    "non_optional",
    "TypeRefRenderer",
    "ResolverShapeSynthesizer",
    "canonical_type_index",
    "ModuleBuilder",
    "TemplateGenerator",
    # Scaffold handling
    "ExportScanner",
    "FileSystem",
    "IdempotencyController",
    "LayoutFormatter",
    "PrettierFormatter",
    # Errors
    "CodegenError",
    "UnhandledVariant",
    "MalformedNullableExpr",
    "MissingTypeName",
    "DuplicateDef",
    "UnknownDef",
    "ContractViolation",
    "SchemaLoadError",
    "ConfigError",
    "FormatterError",
    "OrphanFile",
]
