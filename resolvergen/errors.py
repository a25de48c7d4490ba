# File: resolvergen/errors.py
"""
NexaFlow ResolverGen - Error Taxonomy
=======================================
Every fatal condition raised by the generation pipeline derives from
``CodegenError``.  Each subclass carries a stable ``code`` string so the
CLI and the generation report can classify failures without parsing
messages.

Non-fatal conditions (orphan files) are *records*, not exceptions: they are
collected into the owning category's result and flip its success flag.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("resolvergen.errors")


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------


class CodegenError(Exception):
    """Base class for all fatal generation errors."""

    code: str = "codegen_error"

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message: str = message
        self.context: Dict[str, Any] = context or {}

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


# ---------------------------------------------------------------------------
# Core synthesis errors
# ---------------------------------------------------------------------------


class UnhandledVariant(CodegenError):
    """A dispatch call met a node variant it has no handler (and no default) for."""

    code = "unhandled_variant"

    def __init__(self, node: Any, lattice: str) -> None:
        super().__init__(
            f'Dispatcher does not handle node of type "{node}" in {lattice} '
            "position, and also does not define a default handler",
            {"node": str(node), "lattice": lattice},
        )
        self.node: Any = node


class MalformedNullableExpr(CodegenError):
    """A rendered type reference did not end with the nullable sentinel."""

    code = "malformed_nullable_expr"

    def __init__(self, expr: str, suffix: str) -> None:
        super().__init__(
            f'Expected type to end with "{suffix}", but got: "{expr}"',
            {"expr": expr, "suffix": suffix},
        )
        self.expr: str = expr


class MissingTypeName(CodegenError):
    """An anonymous node was met where a named type reference was required."""

    code = "missing_type_name"

    def __init__(self, node: Any) -> None:
        super().__init__(f"Missing type name: {node}", {"node": str(node)})
        self.node: Any = node


# ---------------------------------------------------------------------------
# Module assembly errors
# ---------------------------------------------------------------------------


class DuplicateDef(CodegenError):
    code = "duplicate_def"

    def __init__(self, key: str, kind: str = "Def") -> None:
        super().__init__(
            f'{kind} "{key}" already registered. '
            "You can only register a definition once.",
            {"key": key, "kind": kind},
        )
        self.key: str = key


class UnknownDef(CodegenError):
    code = "unknown_def"

    def __init__(self, key: str, kind: str = "def") -> None:
        register: str = "register_type_def" if kind == "type def" else "register_def"
        super().__init__(
            f'Unknown {kind} "{key}". Please register it with {register}() '
            "before using it.",
            {"key": key, "kind": kind},
        )
        self.key: str = key


# ---------------------------------------------------------------------------
# Scaffold / IO errors
# ---------------------------------------------------------------------------


class ContractViolation(CodegenError):
    """A hand-edited scaffold file lacks an export the generated code relies on."""

    code = "contract_violation"

    def __init__(self, path: str, symbol: str, requirement: str) -> None:
        super().__init__(
            f"Error in {path}: module must {requirement}",
            {"path": path, "symbol": symbol},
        )
        self.path: str = path
        self.symbol: str = symbol


class SchemaLoadError(CodegenError):
    code = "schema_load_error"


class ConfigError(CodegenError):
    code = "config_error"


class FormatterError(CodegenError):
    code = "formatter_error"


# ---------------------------------------------------------------------------
# Non-fatal records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class OrphanFile:
    """A file found in a generated directory that the current run did not intend."""

    path: str
    category: str

    def __str__(self) -> str:
        return f"[{self.category}] {self.path}"


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
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
