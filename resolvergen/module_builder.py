# File: resolvergen/module_builder.py
"""
NexaFlow ResolverGen - Module Builder
=======================================
A ``ModuleBuilder`` is instantiated once per output file.  While generating
code, a template may need an import statement or a shared definition to make
the emitted code valid; it registers those as side effects on the builder.

Sections, in the order they are serialised::

    header comment
    <blank>
    import * as x from "..."        (namespace imports)
    import { a, b } from "..."      (named imports)
    import x from "..."             (default imports)
    import type { T } from "..."    (type imports)
    <blank>
    type definitions                (first-require order)
    <blank>
    value definitions               (first-require / emit order)

Within each import group, lines are sorted case-insensitively by their
*leading identifier*, not by module path.  Downstream lint rules sort import
lines the same way, so this tie-break must not change.

A builder is owned by exactly one generation task and serialised once.
"""

from __future__ import annotations

import json
import logging
from typing import Callable, Dict, Iterator, List, Optional, Set, Tuple, Union

from resolvergen.errors import DuplicateDef, UnknownDef

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("resolvergen.module_builder")

Producer = Callable[["ModuleBuilder"], str]

# Import group priorities
_NAMESPACE: int = 0
_NAMED: int = 1
_DEFAULT: int = 2
_TYPE: int = 3


def _sorted_identifiers(identifiers: Set[str]) -> List[str]:
    return sorted(identifiers, key=lambda name: (name.lower(), name))


class ModuleBuilder:
    """Accumulates imports and definitions for one generated module."""

    def __init__(self, comment: str = "") -> None:
        self._header_comment: str = comment

        # "import * as x from y", keyed by module
        self._namespace_imports: Dict[str, str] = {}
        # "import x from y", keyed by module
        self._default_imports: Dict[str, str] = {}
        # "import { x } from y"
        self._named_imports: Dict[str, Set[str]] = {}
        # "import type { x } from y"
        self._type_imports: Dict[str, Set[str]] = {}

        self._type_defs: Dict[str, Producer] = {}
        self._emitted_type_defs: Set[str] = set()
        self._type_def_code: List[str] = []

        self._defs: Dict[str, Producer] = {}
        self._emitted_defs: Set[str] = set()
        self._def_code: List[str] = []

        self._exports: Set[str] = set()
        self._type_exports: Set[str] = set()

    # -----------------------------------------------------------------
    # Definitions
    # -----------------------------------------------------------------

    def register_def(self, key: str, producer: Producer) -> None:
        """
        Register a producer for a value definition under a unique *key*.

        Code depending on it calls ``require(key)``; the producer then runs
        once and its output lands in the value-definition section.
        """
        if key in self._defs:
            raise DuplicateDef(key, "Def")
        self._defs[key] = producer

    def register_type_def(self, key: str, producer: Producer) -> None:
        """Like ``register_def``, but for the type-definition section."""
        if key in self._type_defs:
            raise DuplicateDef(key, "Type def")
        self._type_defs[key] = producer

    def require(self, key: str) -> None:
        if key in self._emitted_defs:
            return
        producer: Optional[Producer] = self._defs.get(key)
        if producer is None:
            raise UnknownDef(key, "def")
        self._emitted_defs.add(key)
        self._def_code.append(producer(self))

    def require_type(self, key: str) -> None:
        if key in self._emitted_type_defs:
            return
        producer: Optional[Producer] = self._type_defs.get(key)
        if producer is None:
            raise UnknownDef(key, "type def")
        self._emitted_type_defs.add(key)
        self._type_def_code.append(producer(self))

    def emit(self, code_or_producer: Union[str, Producer]) -> None:
        """Append a value definition directly, without key-based dedup."""
        code: str = (
            code_or_producer
            if isinstance(code_or_producer, str)
            else code_or_producer(self)
        )
        self._def_code.append(code)

    # -----------------------------------------------------------------
    # Imports
    # -----------------------------------------------------------------

    def add_namespace_import(self, identifier: str, from_: str) -> None:
        """``import * as identifier from "from_"`` (last binding wins)."""
        self._namespace_imports[from_] = identifier

    def add_default_import(self, identifier: str, from_: str) -> None:
        """``import identifier from "from_"``."""
        self._default_imports[from_] = identifier

    def add_named_import(self, identifier: str, from_: str) -> None:
        """``import { identifier } from "from_"``, merged per module."""
        self._named_imports.setdefault(from_, set()).add(identifier)

    def add_type_import(self, identifier: str, from_: str) -> None:
        """``import type { identifier } from "from_"``, merged per module."""
        self._type_imports.setdefault(from_, set()).add(identifier)

    # -----------------------------------------------------------------
    # Exports
    # -----------------------------------------------------------------

    def add_export(self, identifier: str) -> None:
        self._exports.add(identifier)

    def add_type_export(self, identifier: str) -> None:
        self._type_exports.add(identifier)

    def get_exports(self) -> Set[str]:
        return set(self._exports)

    def get_type_exports(self) -> Set[str]:
        return set(self._type_exports)

    # -----------------------------------------------------------------
    # Serialisation
    # -----------------------------------------------------------------

    def iter_imports(self) -> Iterator[Tuple[int, str, str]]:
        """
        Yield ``(priority, sort_key, line)`` tuples.  Lines are ordered by
        priority, then case-insensitively by sort key.
        """
        for module, identifier in self._namespace_imports.items():
            yield _NAMESPACE, identifier, f"import * as {identifier} from {json.dumps(module)};"

        for module, identifiers in self._named_imports.items():
            names: List[str] = _sorted_identifiers(identifiers)
            # Named import lines sort by their first identifier, not the module
            yield _NAMED, names[0], f"import {{ {', '.join(names)} }} from {json.dumps(module)};"

        for module, identifier in self._default_imports.items():
            yield _DEFAULT, identifier, f"import {identifier} from {json.dumps(module)};"

        for module, identifiers in self._type_imports.items():
            names = _sorted_identifiers(identifiers)
            yield _TYPE, names[0], f"import type {{ {', '.join(names)} }} from {json.dumps(module)};"

    def import_lines(self) -> List[str]:
        ordered: List[Tuple[int, str, str]] = sorted(
            self.iter_imports(), key=lambda item: (item[0], item[1].lower())
        )
        return [line for _, _, line in ordered]

    def to_string(self) -> str:
        type_def_lines: List[str] = [f"{code}\n" for code in self._type_def_code]
        def_lines: List[str] = [f"{code}\n" for code in self._def_code]
        return "\n".join(
            [
                self._header_comment,
                "",
                *self.import_lines(),
                "",
                *type_def_lines,
                "",
                *def_lines,
            ]
        )

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return (
            f"<ModuleBuilder imports={len(self.import_lines())} "
            f"type_defs={len(self._type_def_code)} defs={len(self._def_code)}>"
        )


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "ModuleBuilder",
    "Producer",
]
