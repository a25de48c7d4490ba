# File: resolvergen/generator.py
"""
NexaFlow ResolverGen - Master Generation Pipeline (Orchestrator)
==================================================================

Connects every phase together:

    Schema SDL → GraphQLSchema → six concurrent category tasks → report

Workflow::

    1. Load the configuration (optional YAML file, ``load_config``).
    2. Build the schema once with graphql-core (``load_schema_file``).
    3. Create one ``FileSystem`` and one ``IdempotencyController``.
    4. Launch the six category tasks with ``asyncio.gather``; per-type
       files inside a category are gathered the same way.
    5. Aggregate per-category results into a ``GenerationReport``.

Error handling strategy:
    - Any ``CodegenError`` or ``OSError`` raised by a task propagates out of
      ``gather`` and aborts the run.  Files already written stay on disk.
    - Orphan files are not errors: they are collected per category and flip
      that category's success flag.  Every task still runs to completion.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set

import yaml
from graphql import GraphQLError, GraphQLSchema, build_schema
from pydantic import ValidationError

from resolvergen.errors import ConfigError, OrphanFile, SchemaLoadError
from resolvergen.exporters import FileSystem, WriteMode
from resolvergen.exports import ExportScanner
from resolvergen.formatting import Formatter, make_formatter
from resolvergen.idempotency import IdempotencyController, orphan_pattern
from resolvergen.models import ArtifactCategory, ArtifactKind, GenerationConfig
from resolvergen.shapes import abstract_names, object_names, scalar_names
from resolvergen.templates import TemplateGenerator
from resolvergen.utils import Timer

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("resolvergen.generator")


# ---------------------------------------------------------------------------
# Generation report
# ---------------------------------------------------------------------------


@dataclass(frozen=False, slots=True)
class CategoryResult:
    """Timing and outcome for a single category task."""

    category: str = ""
    success: bool = True
    elapsed_seconds: float = 0.0
    orphans: List[OrphanFile] = field(default_factory=list)


@dataclass(frozen=False, slots=True)
class GenerationReport:
    """
    Report produced by ``ResolverGenerator.run()``.

    ``written``, ``appended`` and ``skipped`` hold paths relative to the
    output directory, sorted.
    """

    success: bool = False
    output_directory: str = ""
    dry_run: bool = False
    total_elapsed_seconds: float = 0.0
    total_bytes: int = 0
    total_lines: int = 0

    categories: List[CategoryResult] = field(default_factory=list)
    written: List[str] = field(default_factory=list)
    appended: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def orphans(self) -> List[OrphanFile]:
        return [orphan for result in self.categories for orphan in result.orphans]

    def summary(self) -> str:
        """Return a human-readable summary string."""
        lines: List[str] = []
        status: str = "✅ SUCCESS" if self.success else "❌ FAILED"
        lines.append(f"{'='*60}")
        lines.append("  NexaFlow ResolverGen — Generation Report")
        lines.append(f"{'='*60}")
        lines.append(f"  Status:           {status}")
        lines.append(f"  Output:           {self.output_directory}")
        if self.dry_run:
            lines.append("  Mode:             dry run (nothing written)")
        lines.append(f"  Files written:    {len(self.written)}")
        lines.append(f"  Files extended:   {len(self.appended)}")
        lines.append(f"  Files kept:       {len(self.skipped)}")
        lines.append(f"  Total lines:      {self.total_lines:,}")
        lines.append(f"  Total bytes:      {self.total_bytes:,}")
        lines.append(f"  Total time:       {self.total_elapsed_seconds:.3f}s")
        lines.append(f"{'─'*60}")

        if self.categories:
            lines.append("  Categories:")
            for result in self.categories:
                icon: str = "✓" if result.success else "✗"
                detail: str = f"{len(result.orphans)} orphan(s)" if result.orphans else ""
                lines.append(
                    f"    {icon} {result.category:<28s} "
                    f"{result.elapsed_seconds:>7.3f}s  {detail}".rstrip()
                )

        orphans: List[OrphanFile] = self.orphans
        if orphans:
            lines.append(f"{'─'*60}")
            lines.append(f"  Orphan Files ({len(orphans)}):")
            for orphan in orphans:
                lines.append(f"    ⚠ {orphan.path}")

        lines.append(f"{'='*60}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Loader helpers
# ---------------------------------------------------------------------------


def load_schema_text(text: str) -> GraphQLSchema:
    """
    Build a schema from SDL text.

    Raises:
        SchemaLoadError: If graphql-core rejects the document.
    """
    try:
        return build_schema(text)
    except (GraphQLError, TypeError) as exc:
        # Syntax errors are GraphQLErrors; SDL validation failures are TypeErrors
        raise SchemaLoadError(f"Invalid GraphQL schema: {exc}") from exc


def load_schema_file(path: Path) -> GraphQLSchema:
    """
    Read and build a schema definition file.

    Raises:
        SchemaLoadError: If the file is missing, unreadable or invalid.
    """
    if not path.is_file():
        raise SchemaLoadError(f"Schema file not found: {path}", {"path": str(path)})
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaLoadError(f"Cannot read schema file {path}: {exc}") from exc

    schema: GraphQLSchema = load_schema_text(text)
    logger.info("Loaded schema %s (%d named types).", path, len(schema.type_map))
    return schema


def load_config(
    path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> GenerationConfig:
    """
    Load a ``GenerationConfig`` from an optional YAML file.

    Raises:
        ConfigError: If the file is missing, is not a YAML mapping, or
            contains unknown keys / invalid values.
    """
    data: Dict[str, Any] = {}
    if path is not None:
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}", {"path": str(path)})
        try:
            loaded: Any = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(
                f"Expected a YAML mapping at top level of {path}, "
                f"got {type(loaded).__name__}."
            )
        data.update(loaded)

    data.update(overrides or {})

    try:
        return GenerationConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Config validation failed: {exc}") from exc


# ---------------------------------------------------------------------------
# One run
# ---------------------------------------------------------------------------


class _GenerationRun:
    """The six category tasks of one run, sharing one schema."""

    def __init__(
        self,
        schema: GraphQLSchema,
        config: GenerationConfig,
        fs: FileSystem,
        controller: IdempotencyController,
    ) -> None:
        self.schema: GraphQLSchema = schema
        self.config: GenerationConfig = config
        self.fs: FileSystem = fs
        self.controller: IdempotencyController = controller
        self.tpl: TemplateGenerator = TemplateGenerator(schema, config)
        self._ext: str = config.file_extension

    def _dir(self, category: ArtifactCategory) -> Path:
        return self.fs.path(self.config.category_dir(category))

    def _file(self, category: ArtifactCategory, stem: str) -> Path:
        return self._dir(category) / f"{stem}{self._ext}"

    async def _orphans(self, category: ArtifactCategory, intended: Set[str]) -> List[OrphanFile]:
        return await self.controller.find_orphans(
            category,
            self._dir(category),
            orphan_pattern(category, self.config),
            intended,
        )

    # -- single-file categories ---------------------------------------------

    async def types(self) -> List[OrphanFile]:
        await self.controller.emit_owned(
            self._file(ArtifactCategory.TYPES, "index"),
            ArtifactKind.TYPES_INDEX,
            str(self.tpl.types_index()),
        )
        return []

    async def context(self) -> List[OrphanFile]:
        await self.controller.emit_additive(
            self._file(ArtifactCategory.CONTEXT, "index"),
            ArtifactKind.CONTEXT,
            self.tpl.context_expected(),
            lambda names: str(self.tpl.context_scaffold(names)),
            self.tpl.context_addition,
        )
        return []

    async def models(self) -> List[OrphanFile]:
        await self.controller.emit_additive(
            self._file(ArtifactCategory.MODELS, "index"),
            ArtifactKind.MODELS,
            self.tpl.models_expected(),
            lambda names: str(self.tpl.models_scaffold(names)),
            self.tpl.models_addition,
        )
        return []

    # -- multi-file categories ----------------------------------------------

    async def scalars(self) -> List[OrphanFile]:
        names: List[str] = scalar_names(self.schema, self.config)
        await asyncio.gather(
            *(
                self.controller.emit_contract(
                    self._file(ArtifactCategory.SCALARS, name),
                    ArtifactKind.SCALAR_STUB,
                    name,
                    lambda name=name: str(self.tpl.scalar_stub(name)),
                )
                for name in names
            )
        )
        intended: Set[str] = {f"{name}{self._ext}" for name in names}

        index = self.tpl.scalars_index()
        if index is not None:
            await self.controller.emit_owned(
                self._file(ArtifactCategory.SCALARS, "index"),
                ArtifactKind.SCALARS_INDEX,
                str(index),
            )
            intended.add(f"index{self._ext}")

        return await self._orphans(ArtifactCategory.SCALARS, intended)

    async def interfaces(self) -> List[OrphanFile]:
        names: List[str] = abstract_names(self.schema, self.config)
        await asyncio.gather(
            *(
                self.controller.emit_contract(
                    self._file(ArtifactCategory.INTERFACES, name),
                    ArtifactKind.INTERFACE_STUB,
                    name,
                    lambda name=name: str(self.tpl.interface_stub(name)),
                )
                for name in names
            )
        )
        intended: Set[str] = {f"{name}{self._ext}" for name in names}
        return await self._orphans(ArtifactCategory.INTERFACES, intended)

    async def resolvers(self) -> List[OrphanFile]:
        names: List[str] = object_names(self.schema, self.config)
        await asyncio.gather(
            *(
                self.controller.emit_contract(
                    self._file(ArtifactCategory.RESOLVERS, f"{name}Resolver"),
                    ArtifactKind.RESOLVER_STUB,
                    name,
                    lambda name=name: str(self.tpl.resolver_stub(name)),
                )
                for name in names
            )
        )
        await self.controller.emit_owned(
            self._file(ArtifactCategory.RESOLVERS, "index"),
            ArtifactKind.RESOLVERS_INDEX,
            str(self.tpl.resolvers_index()),
        )
        intended: Set[str] = {f"{name}Resolver{self._ext}" for name in names}
        intended.add(f"index{self._ext}")
        return await self._orphans(ArtifactCategory.RESOLVERS, intended)


# ---------------------------------------------------------------------------
# ResolverGenerator: master orchestrator
# ---------------------------------------------------------------------------


class ResolverGenerator:
    """
    Master pipeline orchestrator.

    Usage::

        generator = ResolverGenerator(load_config(Path("resolvergen.yaml")))

        # From a file (async)
        report = await generator.generate_from_file(Path("schema.graphql"))

        # From a built schema
        report = await generator.run(schema, Path("./api"))

        print(report.summary())

    The generator is reusable: every call builds its own file system and
    idempotency controller.
    """

    def __init__(
        self,
        config: Optional[GenerationConfig] = None,
        *,
        dry_run: bool = False,
        formatter: Optional[Formatter] = None,
        scanner: Optional[ExportScanner] = None,
    ) -> None:
        self._config: GenerationConfig = config or GenerationConfig()
        self._dry_run: bool = dry_run
        self._formatter: Formatter = formatter or make_formatter(self._config)
        self._scanner: ExportScanner = scanner or ExportScanner()

        logger.debug(
            "ResolverGenerator initialised: formatter=%s, dry_run=%s.",
            self._formatter.name,
            dry_run,
        )

    @property
    def config(self) -> GenerationConfig:
        return self._config

    # -----------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------

    async def generate_from_file(
        self, schema_path: Path, output_dir: Optional[Path] = None
    ) -> GenerationReport:
        """Load *schema_path*, then run into *output_dir* (or the configured root)."""
        schema: GraphQLSchema = load_schema_file(schema_path)
        root: Path = output_dir or self._config.resolve_output_root(schema_path)
        return await self.run(schema, root)

    async def run(self, schema: GraphQLSchema, output_root: Path) -> GenerationReport:
        """
        Generate every artifact category for *schema* under *output_root*.

        Raises:
            CodegenError: The first fatal error of any task.
            OSError: If the file system refuses a read or write.
        """
        fs: FileSystem = FileSystem(output_root, dry_run=self._dry_run)
        controller: IdempotencyController = IdempotencyController(
            fs, self._formatter, self._scanner
        )
        run: _GenerationRun = _GenerationRun(schema, self._config, fs, controller)

        tasks: Dict[ArtifactCategory, Callable[[], Awaitable[List[OrphanFile]]]] = {
            ArtifactCategory.TYPES: run.types,
            ArtifactCategory.CONTEXT: run.context,
            ArtifactCategory.MODELS: run.models,
            ArtifactCategory.SCALARS: run.scalars,
            ArtifactCategory.INTERFACES: run.interfaces,
            ArtifactCategory.RESOLVERS: run.resolvers,
        }

        with Timer("generate") as total:
            results: List[CategoryResult] = list(
                await asyncio.gather(
                    *(self._timed(category, task) for category, task in tasks.items())
                )
            )

        report: GenerationReport = GenerationReport(
            success=all(result.success for result in results),
            output_directory=str(fs.root),
            dry_run=self._dry_run,
            total_elapsed_seconds=total.elapsed,
            total_bytes=sum(r.size_bytes for r in fs.records),
            total_lines=sum(r.line_count for r in fs.records),
            categories=results,
            written=sorted(r.relative_path for r in fs.records if r.mode is WriteMode.WRITE),
            appended=sorted(r.relative_path for r in fs.records if r.mode is WriteMode.APPEND),
            skipped=sorted(controller.skipped),
        )

        if report.success:
            logger.info(
                "Generation completed: %d written, %d extended, %d kept (%d lines) in %.3fs.",
                len(report.written),
                len(report.appended),
                len(report.skipped),
                report.total_lines,
                total.elapsed,
            )
        else:
            logger.error(
                "Generation finished with %d orphan file(s).", len(report.orphans)
            )
        return report

    @staticmethod
    async def _timed(
        category: ArtifactCategory,
        task: Callable[[], Awaitable[List[OrphanFile]]],
    ) -> CategoryResult:
        with Timer(category.value) as timer:
            orphans: List[OrphanFile] = await task()
        return CategoryResult(
            category=category.value,
            success=not orphans,
            elapsed_seconds=timer.elapsed,
            orphans=orphans,
        )


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "CategoryResult",
    "GenerationReport",
    "load_schema_text",
    "load_schema_file",
    "load_config",
    "ResolverGenerator",
]
