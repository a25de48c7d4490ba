# File: resolvergen/shapes.py
"""
NexaFlow ResolverGen - Resolver Shape Synthesis
=================================================
Derives per-type Flow definitions from a built ``GraphQLSchema``:

    Object       →  export type UserResolver = {| id: Resolver<User, ...>, |};
    Enum         →  export type Color = "RED" | "GREEN";
    Interface /
    Union        →  export type Node = User | Post;
                    export type Node$typename = "User" | "Post";
    InputObject  →  type UserFilter = {| +name: string | null, |};

Everything here is a pure function of the schema and the configuration.

Ordering contract:
    The *canonical type index* (all named types minus introspection types,
    builtin scalars and root operation types, sorted by name) decides every
    emission order, including the member order of interface/union aliases.

Field merge contract (per Object type ``T``):
    1. For each interface of ``T`` in declaration order, each interface
       field is emitted once, tagged with the interface it comes from.
    2. ``T``'s own fields follow, skipping any name already emitted.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from graphql import (
    GraphQLEnumType,
    GraphQLField,
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLSchema,
    GraphQLUnionType,
)

from resolvergen.dispatch import odispatch
from resolvergen.models import GenerationConfig
from resolvergen.typerefs import TypeRefRenderer

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("resolvergen.shapes")

_INDENT: str = "  "
_NULL_PARENT: str = "null"


# ---------------------------------------------------------------------------
# Type index
# ---------------------------------------------------------------------------


def named_types(schema: GraphQLSchema, config: GenerationConfig) -> List[str]:
    """
    All named types of *schema* except introspection types and builtin
    scalars, sorted alphabetically.  Root operation types are included.
    """
    builtins = config.builtin_scalar_names
    return sorted(
        name
        for name in schema.type_map
        if not name.startswith("__") and name not in builtins
    )


def canonical_type_index(schema: GraphQLSchema, config: GenerationConfig) -> List[str]:
    """``named_types`` without the reserved root operation types."""
    roots = config.reserved_root_types
    return [name for name in named_types(schema, config) if name not in roots]


def object_names(schema: GraphQLSchema, config: GenerationConfig) -> List[str]:
    """Object types, root operation types included."""
    return [
        name
        for name in named_types(schema, config)
        if isinstance(schema.type_map[name], GraphQLObjectType)
    ]


def model_names(schema: GraphQLSchema, config: GenerationConfig) -> List[str]:
    """Object types that are not root operation types."""
    return [
        name
        for name in canonical_type_index(schema, config)
        if isinstance(schema.type_map[name], GraphQLObjectType)
    ]


def scalar_names(schema: GraphQLSchema, config: GenerationConfig) -> List[str]:
    """Custom (non-builtin) scalar types."""
    return [
        name
        for name in canonical_type_index(schema, config)
        if isinstance(schema.type_map[name], GraphQLScalarType)
    ]


def is_abstract(schema: GraphQLSchema, name: str) -> bool:
    return isinstance(schema.get_type(name), (GraphQLInterfaceType, GraphQLUnionType))


def abstract_names(schema: GraphQLSchema, config: GenerationConfig) -> List[str]:
    """Interface and union types."""
    return [name for name in canonical_type_index(schema, config) if is_abstract(schema, name)]


def input_object_names(schema: GraphQLSchema, config: GenerationConfig) -> List[str]:
    return [
        name
        for name in canonical_type_index(schema, config)
        if isinstance(schema.type_map[name], GraphQLInputObjectType)
    ]


def concrete_subtypes(
    schema: GraphQLSchema, name: str, config: GenerationConfig
) -> List[str]:
    """
    Object types that a value of the abstract type *name* can be.

    Unions list their members directly.  Interfaces have no reverse lookup,
    so every object type of the canonical index is checked for implementing
    *name*.  Both are returned in canonical index order.
    """
    abstract: Any = schema.get_type(name)
    index: List[str] = canonical_type_index(schema, config)

    if isinstance(abstract, GraphQLUnionType):
        members: List[str] = [t.name for t in abstract.types]
        member_set: Set[str] = set(members)
        ordered: List[str] = [n for n in index if n in member_set]
        # Members outside the index (root types) keep declaration order
        ordered.extend(n for n in members if n not in set(ordered))
        return ordered

    return [
        typename
        for typename in index
        if isinstance(schema.type_map[typename], GraphQLObjectType)
        and any(iface.name == name for iface in schema.type_map[typename].interfaces)
    ]


# ---------------------------------------------------------------------------
# Field merge
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ShapeEntry:
    """One field of an object's merged resolver shape."""

    name: str
    field: GraphQLField
    provenance: Optional[str] = None  # interface name, None for own fields


def merged_fields(obj: GraphQLObjectType) -> List[ShapeEntry]:
    """Interface fields first (grouped per interface), then own fields."""
    seen: Set[str] = set()
    entries: List[ShapeEntry] = []

    for iface in obj.interfaces:
        for field_name, ifield in iface.fields.items():
            if field_name in seen:
                continue
            seen.add(field_name)
            entries.append(ShapeEntry(field_name, ifield, iface.name))

    for field_name, own_field in obj.fields.items():
        if field_name not in seen:
            entries.append(ShapeEntry(field_name, own_field))

    return entries


def group_entries(entries: List[ShapeEntry]) -> List[List[ShapeEntry]]:
    """Split merged entries into per-interface sections plus own fields."""
    sections: List[List[ShapeEntry]] = []
    current: Optional[str] = None
    for entry in entries:
        if not sections or entry.provenance != current:
            sections.append([])
            current = entry.provenance
        sections[-1].append(entry)
    return sections


# ---------------------------------------------------------------------------
# Synthesizer
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class TypeDefinitions:
    """The per-type sections of the types module, in canonical order."""

    abstract_aliases: List[str] = field(default_factory=list)
    input_records: List[str] = field(default_factory=list)
    resolver_defs: List[str] = field(default_factory=list)


class ResolverShapeSynthesizer:
    """
    Renders resolver shapes and type aliases for one schema.

    Holds one output-position and one input-position ``TypeRefRenderer``;
    both are stateless, so a synthesizer may be shared across tasks.
    """

    def __init__(self, schema: GraphQLSchema, config: GenerationConfig) -> None:
        self._schema: GraphQLSchema = schema
        self._config: GenerationConfig = config
        self._roots = config.reserved_root_types
        self.output_refs: TypeRefRenderer = TypeRefRenderer.for_output(config)
        self.input_refs: TypeRefRenderer = TypeRefRenderer.for_input(config)

    @property
    def schema(self) -> GraphQLSchema:
        return self._schema

    # -- index --------------------------------------------------------------

    def canonical_index(self) -> List[str]:
        return canonical_type_index(self._schema, self._config)

    def named_types(self) -> List[str]:
        return named_types(self._schema, self._config)

    def concrete_subtypes(self, name: str) -> List[str]:
        return concrete_subtypes(self._schema, name, self._config)

    # -- signatures ---------------------------------------------------------

    def parent_type(self, obj: GraphQLObjectType) -> str:
        return _NULL_PARENT if obj.name in self._roots else obj.name

    def field_signature(self, obj: GraphQLObjectType, field_name: str, fdef: GraphQLField) -> str:
        """``name: Resolver<Parent, Output[, Args]>,``"""
        params: List[str] = [self.parent_type(obj), self.output_refs.render(fdef.type)]
        if fdef.args:
            params.append(self.input_refs.render_args(fdef.args))
        return f"{field_name}: Resolver<{', '.join(params)}>,"

    def resolver_shape(self, obj: GraphQLObjectType) -> str:
        lines: List[str] = [f"export type {obj.name}Resolver = {{|"]
        for i, section in enumerate(group_entries(merged_fields(obj))):
            if i > 0:
                lines.append("")
            if section[0].provenance is not None:
                lines.append(f"{_INDENT}// From {section[0].provenance}")
            for entry in section:
                lines.append(_INDENT + self.field_signature(obj, entry.name, entry.field))
        lines.append("|};")
        return "\n".join(lines)

    # -- aliases ------------------------------------------------------------

    @staticmethod
    def enum_alias(enum: GraphQLEnumType) -> str:
        literals: str = " | ".join(json.dumps(value) for value in enum.values)
        return f"export type {enum.name} = {literals};"

    def abstract_aliases(self, name: str) -> str:
        concretes: List[str] = self.concrete_subtypes(name)
        if not concretes:
            # No implementations yet: nothing can inhabit the type
            return f"export type {name} = empty;\nexport type {name}$typename = empty;"
        return (
            f"export type {name} = {' | '.join(concretes)};\n"
            f"export type {name}$typename = {' | '.join(json.dumps(c) for c in concretes)};"
        )

    def input_record(self, input_obj: GraphQLInputObjectType) -> str:
        lines: List[str] = [f"type {input_obj.name} = {{|"]
        for field_name, input_field in input_obj.fields.items():
            lines.append(f"{_INDENT}+{field_name}: {self.input_refs.render(input_field.type)},")
        lines.append("|};")
        return "\n".join(lines)

    def resolver_definition(self, value: Any) -> str:
        """
        Definition emitted for a named output type in the resolver section.

        Scalars, interfaces and unions have none (empty string); input
        objects are outside the output lattice and must not be passed here.
        """
        return odispatch(
            value,
            on_scalar=lambda node: "",
            on_interface=lambda node: "",
            on_union=lambda node: "",
            on_object=self.resolver_shape,
            on_enum=self.enum_alias,
        )

    # -- whole schema -------------------------------------------------------

    def type_definitions(self) -> TypeDefinitions:
        """Collect every per-type definition of the types module."""
        defs: TypeDefinitions = TypeDefinitions()
        type_map: Dict[str, Any] = self._schema.type_map

        for name in abstract_names(self._schema, self._config):
            defs.abstract_aliases.append(self.abstract_aliases(name))

        # Input objects never receive a resolver shape
        inputs: List[str] = input_object_names(self._schema, self._config)
        for name in inputs:
            defs.input_records.append(self.input_record(type_map[name]))

        for name in self.named_types():
            if name in inputs:
                continue
            definition: str = self.resolver_definition(type_map[name])
            if definition:
                defs.resolver_defs.append(definition)

        logger.debug(
            "Synthesised %d aliases, %d input records, %d resolver definitions.",
            len(defs.abstract_aliases),
            len(defs.input_records),
            len(defs.resolver_defs),
        )
        return defs


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "named_types",
    "canonical_type_index",
    "object_names",
    "model_names",
    "scalar_names",
    "abstract_names",
    "input_object_names",
    "is_abstract",
    "concrete_subtypes",
    "ShapeEntry",
    "merged_fields",
    "group_entries",
    "TypeDefinitions",
    "ResolverShapeSynthesizer",
]
