# File: resolvergen/templates.py
"""
NexaFlow ResolverGen - Code Template Engine
=============================================
Turns the schema plus a ``GenerationConfig`` into the Flow modules of every
artifact category:

    1. ``types/index.js``          resolver shapes and type aliases (owned)
    2. ``context/index.js``        request context scaffold (additive)
    3. ``models/index.js``         data model scaffold (additive)
    4. ``scalars/<Name>.js``       custom scalar stubs (contract)
       ``scalars/index.js``        scalar type re-exports (owned)
    5. ``interfaces/<Name>.js``    ``dispatch`` stubs for abstract types (contract)
    6. ``resolvers/<Name>Resolver.js``  resolver stubs (contract)
       ``resolvers/index.js``      the resolver map (owned)

Every builder is a pure function of the schema and returns either a
``ModuleBuilder`` (whole modules) or a plain string (additive blocks).  None
of them touches the file system.
"""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, List, Optional, Sequence

from graphql import GraphQLObjectType, GraphQLSchema, GraphQLUnionType

from resolvergen.models import ArtifactCategory, GenerationConfig
from resolvergen.module_builder import ModuleBuilder
from resolvergen.shapes import (
    ResolverShapeSynthesizer,
    abstract_names,
    group_entries,
    merged_fields,
    model_names,
    object_names,
    scalar_names,
)
from resolvergen.utils import (
    indent_lines,
    js_double_quoted,
    js_single_quoted,
    lower_case_first,
    safe_js_identifier,
)

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("resolvergen.templates")

SCAFFOLD_HEADER: str = "// @flow"

_OWNED_BANNER: str = """// @flow

/**
 * ----------------------- IMPORTANT -------------------------------
 *
 * The contents of this file are AUTOMATICALLY GENERATED.  Please do
 * not edit this file directly.  To modify its contents, make
 * changes to your GraphQL schema definition, and re-run:
 *
 *     $ {command}
 *
 * -----------------------------------------------------------------
 */"""

# Context scaffold: expected export → definition, in emission order
CONTEXT_DEFINITIONS: Dict[str, str] = {
    "Context": "export type Context = mixed;",
    "makeContext": (
        "export function makeContext(req: express$Request): Context {\n"
        "  // TODO: Build the context object passed to every resolver\n"
        "  return null;\n"
        "}"
    ),
}
_CONTEXT_TYPE_EXPORTS: FrozenSet[str] = frozenset({"Context"})


def owned_banner(config: GenerationConfig) -> str:
    """Header of every owned (always regenerated) module."""
    return _OWNED_BANNER.format(command=config.regenerate_command)


def model_definition(name: str) -> str:
    return f"export type {name} = TODO; // TODO: Replace this with your own data type"


def instance_name(type_name: str) -> str:
    """Parameter name of a generated field accessor: ``User`` → ``user``."""
    return safe_js_identifier(lower_case_first(type_name))


# ---------------------------------------------------------------------------
# TemplateGenerator
# ---------------------------------------------------------------------------


class TemplateGenerator:
    """
    Stateless template engine for one schema.

    Usage::

        tpl = TemplateGenerator(schema, config)
        code = str(tpl.types_index())
    """

    def __init__(
        self,
        schema: GraphQLSchema,
        config: GenerationConfig,
        synthesizer: Optional[ResolverShapeSynthesizer] = None,
    ) -> None:
        self._schema: GraphQLSchema = schema
        self._config: GenerationConfig = config
        self._synth: ResolverShapeSynthesizer = synthesizer or ResolverShapeSynthesizer(
            schema, config
        )
        self._roots = config.reserved_root_types

    @property
    def synthesizer(self) -> ResolverShapeSynthesizer:
        return self._synth

    def _sibling(self, category: ArtifactCategory, name: Optional[str] = None) -> str:
        """Import path of another category's module, seen from a category dir."""
        directory: str = self._config.category_dir(category)
        return f"../{directory}/{name}" if name else f"../{directory}"

    # =================================================================
    # 1. Type definitions (owned)
    # =================================================================

    def types_index(self) -> ModuleBuilder:
        mod: ModuleBuilder = ModuleBuilder(owned_banner(self._config))
        mod.register_type_def("Resolver", self._resolver_generic)

        for scalar in scalar_names(self._schema, self._config):
            mod.add_type_import(scalar, self._sibling(ArtifactCategory.SCALARS))
        for model in model_names(self._schema, self._config):
            mod.add_type_import(model, self._sibling(ArtifactCategory.MODELS))

        mod.require_type("Resolver")

        defs = self._synth.type_definitions()
        for code in (*defs.abstract_aliases, *defs.input_records, *defs.resolver_defs):
            mod.emit(code)
        return mod

    def _resolver_generic(self, mod: ModuleBuilder) -> str:
        mod.add_type_import("Context", self._sibling(ArtifactCategory.CONTEXT))
        mod.add_type_import("GraphQLResolveInfo", "graphql")
        return "\n".join(
            [
                "type Resolver<P, T, A = {| ...null |}> = (",
                "  parent: P,",
                "  args: A,",
                "  context: Context,",
                "  info: GraphQLResolveInfo,",
                ") => T | Promise<T>;",
            ]
        )

    # =================================================================
    # 2. / 3. Additive scaffolds
    # =================================================================

    @staticmethod
    def context_expected() -> List[str]:
        return list(CONTEXT_DEFINITIONS)

    def context_scaffold(self, names: Sequence[str]) -> ModuleBuilder:
        mod: ModuleBuilder = ModuleBuilder(SCAFFOLD_HEADER)
        for name in names:
            mod.emit(CONTEXT_DEFINITIONS[name])
            if name in _CONTEXT_TYPE_EXPORTS:
                mod.add_type_export(name)
            else:
                mod.add_export(name)
        return mod

    @staticmethod
    def context_addition(names: Sequence[str]) -> str:
        return "\n\n".join(CONTEXT_DEFINITIONS[name] for name in names)

    def models_expected(self) -> List[str]:
        return model_names(self._schema, self._config)

    def models_scaffold(self, names: Sequence[str]) -> ModuleBuilder:
        mod: ModuleBuilder = ModuleBuilder(SCAFFOLD_HEADER)
        for name in names:
            mod.emit(model_definition(name))
            mod.add_type_export(name)
        return mod

    @staticmethod
    def models_addition(names: Sequence[str]) -> str:
        return "\n\n".join(model_definition(name) for name in names)

    # =================================================================
    # 4. Scalars
    # =================================================================

    def scalar_stub(self, name: str) -> ModuleBuilder:
        decoders: str = self._config.decoders_module
        mod: ModuleBuilder = ModuleBuilder(SCAFFOLD_HEADER)
        mod.add_named_import("string", decoders)
        mod.add_type_import("Decoder", decoders)

        mod.emit(f"export type {name} = string;")
        mod.emit(f"export const serialize: ({name}) => mixed = String;")
        mod.emit(f"export const decoder: Decoder<{name}> = string;")

        mod.add_type_export(name)
        mod.add_export("serialize")
        mod.add_export("decoder")
        return mod

    def scalars_index(self) -> Optional[ModuleBuilder]:
        """Re-export every custom scalar type; None when there are none."""
        names: List[str] = scalar_names(self._schema, self._config)
        if not names:
            return None
        mod: ModuleBuilder = ModuleBuilder(owned_banner(self._config))
        for name in names:
            mod.emit(f"export type {{ {name} }} from {js_single_quoted('./' + name)};")
            mod.add_type_export(name)
        return mod

    # =================================================================
    # 5. Interfaces / unions
    # =================================================================

    def interface_stub(self, name: str) -> ModuleBuilder:
        mod: ModuleBuilder = ModuleBuilder(SCAFFOLD_HEADER)
        types_module: str = self._sibling(ArtifactCategory.TYPES)
        mod.add_type_import(name, types_module)
        mod.add_type_import(f"{name}$typename", types_module)

        kind: str = (
            "union" if isinstance(self._schema.get_type(name), GraphQLUnionType)
            else "abstract interface"
        )
        body: List[str] = ["// TODO: Return the concrete type name of the given value"]
        for concrete in self._synth.concrete_subtypes(name):
            body.extend(
                [
                    "// if (...) {",
                    f"//   return {js_double_quoted(concrete)};",
                    "// }",
                ]
            )
        body.append(
            "throw new Error("
            + js_single_quoted(f"Unknown concrete type for {kind} type {name}.")
            + ");"
        )

        mod.emit(
            "\n".join(
                [
                    f"export function dispatch(value: {name}): {name}$typename {{",
                    *indent_lines(body),
                    "}",
                ]
            )
        )
        mod.add_export("dispatch")
        return mod

    # =================================================================
    # 6. Resolvers
    # =================================================================

    def resolver_stub(self, name: str) -> ModuleBuilder:
        obj = self._schema.get_type(name)
        if not isinstance(obj, GraphQLObjectType):
            raise TypeError(f"{name} is not an object type")

        shape: str = f"{name}Resolver"
        const_name: str = lower_case_first(shape)
        is_root: bool = name in self._roots
        inst: str = instance_name(name)

        mod: ModuleBuilder = ModuleBuilder(SCAFFOLD_HEADER)
        mod.add_type_import(shape, self._sibling(ArtifactCategory.TYPES))

        body: List[str] = []
        for i, section in enumerate(group_entries(merged_fields(obj))):
            if i > 0:
                body.append("")
            if section[0].provenance is not None:
                body.append(f"// From {section[0].provenance}")
            for entry in section:
                if is_root:
                    body.extend(
                        [
                            f"{entry.name}: (_, args, context) => {{",
                            "  // TODO: Replace this with your desired implementation",
                            "},",
                        ]
                    )
                else:
                    body.append(f"{entry.name}: {inst} => {inst}.{entry.name},")

        mod.emit("\n".join([f"const {const_name}: {shape} = {{", *indent_lines(body), "};"]))
        mod.emit(f"export default {const_name};")
        return mod

    def resolvers_index(self) -> ModuleBuilder:
        mod: ModuleBuilder = ModuleBuilder(owned_banner(self._config))
        mod.register_def("resolverMap", self._resolver_map)
        mod.require("resolverMap")
        mod.emit("export default resolverMap;")
        return mod

    def _resolver_map(self, mod: ModuleBuilder) -> str:
        sections: List[List[str]] = []

        resolvers: List[str] = ["// Resolvers"]
        for name in object_names(self._schema, self._config):
            mod.add_default_import(f"{name}Resolver", f"./{name}Resolver")
            resolvers.append(f"{name}: {name}Resolver,")
        sections.append(resolvers)

        abstracts: List[str] = abstract_names(self._schema, self._config)
        if abstracts:
            interfaces: List[str] = ["// Interfaces"]
            for name in abstracts:
                mod.add_namespace_import(name, self._sibling(ArtifactCategory.INTERFACES, name))
                interfaces.append(f"{name}: {{ __resolveType: {name}.dispatch }},")
            sections.append(interfaces)

        scalar_types: List[str] = scalar_names(self._schema, self._config)
        if scalar_types:
            scalars: List[str] = ["// Scalars"]
            mod.add_named_import("makeScalar", self._config.scalar_helper_module)
            for name in scalar_types:
                mod.add_namespace_import(name, self._sibling(ArtifactCategory.SCALARS, name))
                description: Optional[str] = self._schema.type_map[name].description
                scalars.append(
                    f"{name}: makeScalar({js_single_quoted(name)}, "
                    f"{js_double_quoted(description)}, {name}.decoder, {name}.serialize),"
                )
            sections.append(scalars)

        body: List[str] = []
        for i, section in enumerate(sections):
            if i > 0:
                body.append("")
            body.extend(section)
        return "\n".join(["const resolverMap = {", *indent_lines(body), "};"])


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "SCAFFOLD_HEADER",
    "CONTEXT_DEFINITIONS",
    "owned_banner",
    "model_definition",
    "instance_name",
    "TemplateGenerator",
]
