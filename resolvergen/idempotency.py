# File: resolvergen/idempotency.py
"""
NexaFlow ResolverGen - Idempotency Controller
===============================================
Decides, before anything touches the disk, what happens to each output file:

    owned      →  WRITE   (always, overwriting prior content)
    contract   →  WRITE   if the file does not exist yet
                  SKIP    if it exists and exports everything required
                  raise   ContractViolation otherwise
    additive   →  WRITE   if the file does not exist yet
                  APPEND  the expected names its exports lack
                  SKIP    if nothing is missing

Rendering stays a pure function of the schema: callers hand over *producers*
and the controller only calls the ones its decision needs.

Appends keep the existing content byte-for-byte; only the appended block is
formatted.  After a multi-file category has been written, ``find_orphans``
lists its directory and reports files the run did not intend to produce.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Set

from resolvergen.errors import ContractViolation, OrphanFile
from resolvergen.exporters import FileSystem
from resolvergen.exports import ExportScanner
from resolvergen.formatting import Formatter
from resolvergen.models import (
    OWNERSHIP,
    ArtifactCategory,
    ArtifactKind,
    GenerationConfig,
    Ownership,
)

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("resolvergen.idempotency")

ORPHAN_WARNING: str = (
    "Unexpected files found in output directory. "
    "Please rename or delete the following files:"
)


# ---------------------------------------------------------------------------
# Decisions
# ---------------------------------------------------------------------------


class Action(str, Enum):
    WRITE = "write"
    SKIP = "skip"
    APPEND = "append"


@dataclass(slots=True)
class Decision:
    """Outcome of the pre-write check for one file."""

    action: Action
    path: Path
    missing: List[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ExportRequirement:
    """One export a contract scaffold must keep providing."""

    symbol: str
    requirement: str


def contract_for(kind: ArtifactKind, type_name: str) -> List[ExportRequirement]:
    """Required exports of a contract scaffold of *kind* for *type_name*."""
    if kind is ArtifactKind.SCALAR_STUB:
        return [
            ExportRequirement(type_name, f'export a type named "{type_name}"'),
            ExportRequirement("serialize", 'export a "serialize" function'),
            ExportRequirement("decoder", f'export a "decoder" of type "Decoder<{type_name}>"'),
        ]
    if kind is ArtifactKind.INTERFACE_STUB:
        return [ExportRequirement("dispatch", 'implement a "dispatch" function')]
    if kind is ArtifactKind.RESOLVER_STUB:
        # Default export only; nothing named is required
        return []
    raise ValueError(f"{kind.value} is not a contract artifact")


def orphan_pattern(category: ArtifactCategory, config: GenerationConfig) -> re.Pattern[str]:
    """File-name pattern of the generated files of a multi-file category."""
    ext: str = re.escape(config.file_extension)
    if category is ArtifactCategory.RESOLVERS:
        return re.compile(rf"(index|.*resolver){ext}", re.IGNORECASE)
    if category in (ArtifactCategory.SCALARS, ArtifactCategory.INTERFACES):
        return re.compile(rf".*{ext}")
    raise ValueError(f"Category {category.value} has no orphan check")


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------


class IdempotencyController:
    """
    Gates every write of one run.

    One instance is shared by all generation tasks of a run; it only keeps
    append-only bookkeeping (skipped paths, orphans), never per-file state
    that two tasks could contend on.
    """

    def __init__(
        self,
        fs: FileSystem,
        formatter: Formatter,
        scanner: Optional[ExportScanner] = None,
    ) -> None:
        self._fs: FileSystem = fs
        self._formatter: Formatter = formatter
        self._scanner: ExportScanner = scanner or ExportScanner()
        self._skipped: List[str] = []
        self._orphans: List[OrphanFile] = []

    @property
    def skipped(self) -> List[str]:
        return list(self._skipped)

    @property
    def orphans(self) -> List[OrphanFile]:
        return list(self._orphans)

    # -----------------------------------------------------------------
    # Decisions
    # -----------------------------------------------------------------

    async def decide_contract(
        self, path: Path, kind: ArtifactKind, type_name: str
    ) -> Decision:
        """
        Raises:
            ContractViolation: If an existing file lacks a required export.
                The first missing export in contract order is reported.
        """
        _expect(kind, Ownership.CONTRACT)
        if not await self._fs.exists(path):
            return Decision(Action.WRITE, path)

        requirements: List[ExportRequirement] = contract_for(kind, type_name)
        if requirements:
            exports: Set[str] = await self._scanner.scan(path)
            for req in requirements:
                if req.symbol not in exports:
                    raise ContractViolation(self._fs.relative(path), req.symbol, req.requirement)
        return Decision(Action.SKIP, path)

    async def decide_additive(
        self, path: Path, kind: ArtifactKind, expected: Sequence[str]
    ) -> Decision:
        _expect(kind, Ownership.ADDITIVE)
        if not await self._fs.exists(path):
            action: Action = Action.WRITE if expected else Action.SKIP
            return Decision(action, path, list(expected))

        exports: Set[str] = await self._scanner.scan(path)
        missing: List[str] = [name for name in expected if name not in exports]
        return Decision(Action.APPEND if missing else Action.SKIP, path, missing)

    # -----------------------------------------------------------------
    # Gated writes
    # -----------------------------------------------------------------

    async def emit_owned(self, path: Path, kind: ArtifactKind, code: str) -> Decision:
        """Format and (re)write an owned file unconditionally."""
        _expect(kind, Ownership.OWNED)
        await self._fs.write(path, await self._formatter.format(code))
        return Decision(Action.WRITE, path)

    async def emit_contract(
        self,
        path: Path,
        kind: ArtifactKind,
        type_name: str,
        render: Callable[[], str],
    ) -> Decision:
        decision: Decision = await self.decide_contract(path, kind, type_name)
        if decision.action is Action.WRITE:
            await self._fs.write(path, await self._formatter.format(render()))
        else:
            self._skip(path)
        return decision

    async def emit_additive(
        self,
        path: Path,
        kind: ArtifactKind,
        expected: Sequence[str],
        render_new: Callable[[List[str]], str],
        render_addition: Callable[[List[str]], str],
    ) -> Decision:
        """
        Create the file from ``render_new(expected)``, or append
        ``render_addition(missing)`` to the existing content.
        """
        decision: Decision = await self.decide_additive(path, kind, expected)

        if decision.action is Action.WRITE:
            await self._fs.write(path, await self._formatter.format(render_new(decision.missing)))
        elif decision.action is Action.APPEND:
            original: str = await self._fs.read(path)
            addition: str = await self._formatter.format(render_addition(decision.missing))
            await self._fs.append(path, _separator(original) + addition)
            logger.info(
                "Added %s to %s", ", ".join(decision.missing), self._fs.relative(path)
            )
        else:
            self._skip(path)
        return decision

    # -----------------------------------------------------------------
    # Orphans
    # -----------------------------------------------------------------

    async def find_orphans(
        self,
        category: ArtifactCategory,
        directory: Path,
        pattern: re.Pattern[str],
        intended: Set[str],
    ) -> List[OrphanFile]:
        """Files in *directory* matching *pattern* that are not *intended*."""
        found: List[OrphanFile] = [
            OrphanFile(self._fs.relative(directory / name), category.value)
            for name in await self._fs.listdir(directory)
            if pattern.fullmatch(name) and name not in intended
        ]
        if found:
            logger.warning(ORPHAN_WARNING)
            for orphan in found:
                logger.warning("  - %s", orphan.path)
            self._orphans.extend(found)
        return found

    def _skip(self, path: Path) -> None:
        rel_path: str = self._fs.relative(path)
        self._skipped.append(rel_path)
        logger.debug("Skipped scaffold %s", rel_path)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _expect(kind: ArtifactKind, ownership: Ownership) -> None:
    if OWNERSHIP[kind] is not ownership:
        raise ValueError(
            f"{kind.value} is {OWNERSHIP[kind].value}, not {ownership.value}"
        )


def _separator(original: str) -> str:
    """Blank-line separator between existing content and an appended block."""
    if not original:
        return ""
    return ("" if original.endswith("\n") else "\n") + "\n"


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "ORPHAN_WARNING",
    "Action",
    "Decision",
    "ExportRequirement",
    "contract_for",
    "orphan_pattern",
    "IdempotencyController",
]
