# File: resolvergen/models.py
"""
NexaFlow ResolverGen - Configuration & Artifact Models
========================================================
Pydantic V2 models and fixed enumerations shared by the whole pipeline:

    GenerationConfig → renderers / shape synthesis / templates / writers

The reserved-name sets (root operation types and builtin scalars) live on the
``GenerationConfig`` instance and are handed explicitly to every component
that consults them.  Nothing in the pipeline reads them from module globals.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("resolvergen.models")

_IDENTIFIER_RE: re.Pattern[str] = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_ROOT_TYPE_NAMES: List[str] = ["Query", "Mutation"]

NULLABLE_SUFFIX: str = " | null"

# Builtin GraphQL scalars → nullable Flow primitive unions
DEFAULT_BUILTIN_SCALARS: Dict[str, str] = {
    "ID": "string | number | null",
    "String": "string | null",
    "Int": "number | null",
    "Float": "number | null",
    "Boolean": "boolean | null",
}


# ---------------------------------------------------------------------------
# Enums: fixed sets used across the entire project
# ---------------------------------------------------------------------------


class FormatterKind(str, Enum):
    """Available source formatters."""

    LAYOUT = "layout"
    PRETTIER = "prettier"


class Ownership(str, Enum):
    """Who owns a generated file after its first write."""

    OWNED = "owned"        # always regenerated verbatim
    CONTRACT = "contract"  # written once, then export-checked
    ADDITIVE = "additive"  # written once, then extended with missing names


class ArtifactCategory(str, Enum):
    """One generation task each."""

    TYPES = "types"
    CONTEXT = "context"
    MODELS = "models"
    SCALARS = "scalars"
    INTERFACES = "interfaces"
    RESOLVERS = "resolvers"


class ArtifactKind(str, Enum):
    """Kinds of generated files.  Ownership is fixed per kind."""

    TYPES_INDEX = "types_index"
    CONTEXT = "context"
    MODELS = "models"
    SCALAR_STUB = "scalar_stub"
    SCALARS_INDEX = "scalars_index"
    INTERFACE_STUB = "interface_stub"
    RESOLVER_STUB = "resolver_stub"
    RESOLVERS_INDEX = "resolvers_index"


OWNERSHIP: Dict[ArtifactKind, Ownership] = {
    ArtifactKind.TYPES_INDEX: Ownership.OWNED,
    ArtifactKind.CONTEXT: Ownership.ADDITIVE,
    ArtifactKind.MODELS: Ownership.ADDITIVE,
    ArtifactKind.SCALAR_STUB: Ownership.CONTRACT,
    ArtifactKind.SCALARS_INDEX: Ownership.OWNED,
    ArtifactKind.INTERFACE_STUB: Ownership.CONTRACT,
    ArtifactKind.RESOLVER_STUB: Ownership.CONTRACT,
    ArtifactKind.RESOLVERS_INDEX: Ownership.OWNED,
}


# ---------------------------------------------------------------------------
# Mixin: shared model configuration
# ---------------------------------------------------------------------------

_SHARED_CONFIG: ConfigDict = ConfigDict(
    strict=False,
    populate_by_name=True,
    validate_assignment=True,
    use_enum_values=True,
    frozen=False,
    extra="forbid",
)


# ---------------------------------------------------------------------------
# GenerationConfig
# ---------------------------------------------------------------------------


class GenerationConfig(BaseModel):
    """
    Master configuration for one generator run.

    A single instance of this model (combined with a built ``GraphQLSchema``)
    is all the generator needs to produce the full output.
    """

    model_config = _SHARED_CONFIG

    # -- Reserved names -----------------------------------------------------
    root_type_names: List[str] = Field(
        default_factory=lambda: list(DEFAULT_ROOT_TYPE_NAMES),
        min_length=1,
        description="Root operation types; their resolvers get a null parent.",
    )
    builtin_scalars: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_BUILTIN_SCALARS),
        description="Builtin scalar name → nullable Flow type expression.",
    )
    list_wrapper: str = Field(
        default="Array", min_length=1, description="Generic used for list types."
    )

    # -- Output layout ------------------------------------------------------
    output_dir: Optional[str] = Field(
        default=None,
        description="Output root; defaults to the schema file's directory.",
    )
    file_extension: str = Field(default=".js", description="Generated file suffix.")
    types_dir: str = Field(default="types")
    context_dir: str = Field(default="context")
    models_dir: str = Field(default="models")
    scalars_dir: str = Field(default="scalars")
    interfaces_dir: str = Field(default="interfaces")
    resolvers_dir: str = Field(default="resolvers")

    # -- Generated code -----------------------------------------------------
    regenerate_command: str = Field(
        default="resolvergen <schema>",
        description="Command quoted in the banner of owned files.",
    )
    scalar_helper_module: str = Field(
        default="lib/graphql-tools",
        description="Module providing makeScalar() for the resolver map.",
    )
    decoders_module: str = Field(
        default="decoders", description="Module providing the Decoder type."
    )

    # -- Formatting ---------------------------------------------------------
    formatter: FormatterKind = Field(
        default=FormatterKind.LAYOUT, description="Formatter applied before writing."
    )
    prettier_command: List[str] = Field(
        default_factory=lambda: [
            "prettier",
            "--parser",
            "flow",
            "--single-quote",
            "--trailing-comma",
            "all",
        ],
        min_length=1,
        description="argv of the external prettier formatter (reads stdin).",
    )

    # -- Validators ---------------------------------------------------------

    @field_validator("root_type_names")
    @classmethod
    def _valid_root_names(cls, v: List[str]) -> List[str]:
        bad: List[str] = [name for name in v if not _IDENTIFIER_RE.match(name)]
        if bad:
            raise ValueError(f"Invalid root type names: {bad}")
        return v

    @field_validator("builtin_scalars")
    @classmethod
    def _valid_builtins(cls, v: Dict[str, str]) -> Dict[str, str]:
        bad: List[str] = [name for name in v if not _IDENTIFIER_RE.match(name)]
        if bad:
            raise ValueError(f"Invalid builtin scalar names: {bad}")
        not_nullable: List[str] = [
            name for name, expr in v.items() if not expr.endswith(NULLABLE_SUFFIX)
        ]
        if not_nullable:
            raise ValueError(
                f"Builtin scalar types must end with {NULLABLE_SUFFIX!r}: {not_nullable}"
            )
        return v

    @field_validator("file_extension")
    @classmethod
    def _dotted_extension(cls, v: str) -> str:
        if not v.startswith(".") or len(v) < 2:
            raise ValueError(f"file_extension must look like '.js', got {v!r}")
        return v

    @model_validator(mode="after")
    def _distinct_directories(self) -> "GenerationConfig":
        dirs: List[str] = [self.category_dir(c) for c in ArtifactCategory]
        if len(set(dirs)) != len(dirs):
            raise ValueError(f"Category directories must be distinct, got {dirs}")
        return self

    # -- Helpers ------------------------------------------------------------

    @property
    def reserved_root_types(self) -> FrozenSet[str]:
        return frozenset(self.root_type_names)

    @property
    def builtin_scalar_names(self) -> FrozenSet[str]:
        return frozenset(self.builtin_scalars)

    def category_dir(self, category: ArtifactCategory) -> str:
        """Directory name (relative to the output root) of a category."""
        return {
            ArtifactCategory.TYPES: self.types_dir,
            ArtifactCategory.CONTEXT: self.context_dir,
            ArtifactCategory.MODELS: self.models_dir,
            ArtifactCategory.SCALARS: self.scalars_dir,
            ArtifactCategory.INTERFACES: self.interfaces_dir,
            ArtifactCategory.RESOLVERS: self.resolvers_dir,
        }[ArtifactCategory(category)]

    def resolve_output_root(self, schema_path: Path) -> Path:
        """Return the output root for a schema file."""
        if self.output_dir:
            root: Path = Path(self.output_dir)
            if not root.is_absolute():
                root = schema_path.resolve().parent / root
            return root.resolve()
        return schema_path.resolve().parent


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "DEFAULT_ROOT_TYPE_NAMES",
    "NULLABLE_SUFFIX",
    "DEFAULT_BUILTIN_SCALARS",
    "FormatterKind",
    "Ownership",
    "ArtifactCategory",
    "ArtifactKind",
    "OWNERSHIP",
    "GenerationConfig",
]
