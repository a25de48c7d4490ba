"""
tests/test_templates.py
Unit tests for resolvergen.templates.TemplateGenerator.

Tests cover:
- Owned modules: types index, scalars index, resolver map
- Scaffold modules: context, models, scalar / interface / resolver stubs
- Generated scaffolds satisfying their own export contracts
"""

from __future__ import annotations

import pytest
from graphql import GraphQLSchema

from resolvergen.exports import scan_source
from resolvergen.formatting import LayoutFormatter
from resolvergen.idempotency import contract_for
from resolvergen.models import ArtifactKind, GenerationConfig
from resolvergen.templates import (
    CONTEXT_DEFINITIONS,
    TemplateGenerator,
    instance_name,
    owned_banner,
)

_fmt = LayoutFormatter().format_sync


@pytest.fixture()
def tpl(rich_schema: GraphQLSchema, config: GenerationConfig) -> TemplateGenerator:
    return TemplateGenerator(rich_schema, config)


@pytest.fixture()
def simple_tpl(simple_schema: GraphQLSchema, config: GenerationConfig) -> TemplateGenerator:
    return TemplateGenerator(simple_schema, config)


# ===========================================================================
# Helpers
# ===========================================================================


class TestHelpers:
    def test_banner_quotes_command(self) -> None:
        banner = owned_banner(GenerationConfig(regenerate_command="make graphql"))
        assert banner.startswith("// @flow\n")
        assert "$ make graphql" in banner
        assert "AUTOMATICALLY GENERATED" in banner

    @pytest.mark.parametrize(
        "type_name, expected",
        [("User", "user"), ("URL", "uRL"), ("Default", "default_"), ("Class", "class_")],
    )
    def test_instance_name(self, type_name: str, expected: str) -> None:
        assert instance_name(type_name) == expected


# ===========================================================================
# Types index
# ===========================================================================


class TestTypesIndex:
    def test_imports(self, tpl: TemplateGenerator) -> None:
        code = str(tpl.types_index())
        assert (
            'import type { Comment, Post, User } from "../models";\n'
            'import type { Context } from "../context";\n'
            'import type { DateTime, Url } from "../scalars";\n'
            'import type { GraphQLResolveInfo } from "graphql";\n'
        ) in code

    def test_resolver_generic_before_definitions(self, tpl: TemplateGenerator) -> None:
        code = str(tpl.types_index())
        generic = code.index("type Resolver<P, T, A = {| ...null |}> = (")
        assert generic < code.index("export type Node = ")
        assert ") => T | Promise<T>;" in code

    def test_section_order(self, tpl: TemplateGenerator) -> None:
        code = str(tpl.types_index())
        assert (
            code.index("export type SearchResult = Post | User;")
            < code.index("type PostFilter = {|")
            < code.index("export type CommentResolver = {|")
            < code.index('export type Role = "ADMIN" | "EDITOR" | "VIEWER";')
            < code.index("export type UserResolver = {|")
        )

    def test_simple_schema(self, simple_tpl: TemplateGenerator) -> None:
        code = _fmt(str(simple_tpl.types_index()))
        assert "../scalars" not in code
        assert 'import type { User } from "../models";' in code
        assert code.endswith(
            "export type QueryResolver = {|\n"
            "  user: Resolver<null, User | null>,\n"
            "|};\n"
            "\n"
            "export type UserResolver = {|\n"
            "  id: Resolver<User, string | number>,\n"
            "  name: Resolver<User, string | null>,\n"
            "|};\n"
        )

    def test_deterministic(self, rich_schema: GraphQLSchema, config: GenerationConfig) -> None:
        first = str(TemplateGenerator(rich_schema, config).types_index())
        second = str(TemplateGenerator(rich_schema, config).types_index())
        assert first == second


# ===========================================================================
# Additive scaffolds
# ===========================================================================


class TestAdditiveScaffolds:
    def test_context_scaffold(self, tpl: TemplateGenerator) -> None:
        code = _fmt(str(tpl.context_scaffold(tpl.context_expected())))
        assert code == (
            "// @flow\n"
            "\n"
            "export type Context = mixed;\n"
            "\n"
            "export function makeContext(req: express$Request): Context {\n"
            "  // TODO: Build the context object passed to every resolver\n"
            "  return null;\n"
            "}\n"
        )

    def test_context_addition_only_missing(self) -> None:
        addition = TemplateGenerator.context_addition(["makeContext"])
        assert addition == CONTEXT_DEFINITIONS["makeContext"]
        assert "type Context" not in addition

    def test_models(self, tpl: TemplateGenerator) -> None:
        assert tpl.models_expected() == ["Comment", "Post", "User"]
        code = _fmt(str(tpl.models_scaffold(["Post"])))
        assert code == (
            "// @flow\n"
            "\n"
            "export type Post = TODO; // TODO: Replace this with your own data type\n"
        )
        assert TemplateGenerator.models_addition(["A", "B"]).count("export type") == 2

    def test_scaffold_exports_cover_expected(self, tpl: TemplateGenerator) -> None:
        context = str(tpl.context_scaffold(tpl.context_expected()))
        models = str(tpl.models_scaffold(tpl.models_expected()))
        assert scan_source(context) >= set(tpl.context_expected())
        assert scan_source(models) >= set(tpl.models_expected())


# ===========================================================================
# Scalars
# ===========================================================================


class TestScalars:
    def test_stub(self, tpl: TemplateGenerator) -> None:
        assert _fmt(str(tpl.scalar_stub("Url"))) == (
            "// @flow\n"
            "\n"
            'import { string } from "decoders";\n'
            'import type { Decoder } from "decoders";\n'
            "\n"
            "export type Url = string;\n"
            "\n"
            "export const serialize: (Url) => mixed = String;\n"
            "\n"
            "export const decoder: Decoder<Url> = string;\n"
        )

    def test_stub_satisfies_contract(self, tpl: TemplateGenerator) -> None:
        exports = scan_source(str(tpl.scalar_stub("DateTime")))
        for req in contract_for(ArtifactKind.SCALAR_STUB, "DateTime"):
            assert req.symbol in exports

    def test_index(self, tpl: TemplateGenerator) -> None:
        code = str(tpl.scalars_index())
        assert "export type { DateTime } from './DateTime';" in code
        assert "export type { Url } from './Url';" in code
        assert code.index("DateTime") < code.index("{ Url }")

    def test_no_index_without_scalars(self, simple_tpl: TemplateGenerator) -> None:
        assert simple_tpl.scalars_index() is None


# ===========================================================================
# Interfaces
# ===========================================================================


class TestInterfaceStubs:
    def test_interface_stub(self, tpl: TemplateGenerator) -> None:
        code = _fmt(str(tpl.interface_stub("Node")))
        assert code == (
            "// @flow\n"
            "\n"
            'import type { Node, Node$typename } from "../types";\n'
            "\n"
            "export function dispatch(value: Node): Node$typename {\n"
            "  // TODO: Return the concrete type name of the given value\n"
            "  // if (...) {\n"
            '  //   return "Comment";\n'
            "  // }\n"
            "  // if (...) {\n"
            '  //   return "Post";\n'
            "  // }\n"
            "  // if (...) {\n"
            '  //   return "User";\n'
            "  // }\n"
            "  throw new Error('Unknown concrete type for abstract interface type Node.');\n"
            "}\n"
        )

    def test_union_stub_message(self, tpl: TemplateGenerator) -> None:
        code = str(tpl.interface_stub("SearchResult"))
        assert "'Unknown concrete type for union type SearchResult.'" in code

    @pytest.mark.parametrize("name", ["Node", "SearchResult", "Timestamped"])
    def test_stub_satisfies_contract(self, tpl: TemplateGenerator, name: str) -> None:
        assert "dispatch" in scan_source(str(tpl.interface_stub(name)))


# ===========================================================================
# Resolvers
# ===========================================================================


class TestResolverStubs:
    def test_object_stub(self, tpl: TemplateGenerator) -> None:
        code = _fmt(str(tpl.resolver_stub("User")))
        assert code == (
            "// @flow\n"
            "\n"
            'import type { UserResolver } from "../types";\n'
            "\n"
            "const userResolver: UserResolver = {\n"
            "  // From Node\n"
            "  id: user => user.id,\n"
            "\n"
            "  // From Timestamped\n"
            "  createdAt: user => user.createdAt,\n"
            "\n"
            "  name: user => user.name,\n"
            "  role: user => user.role,\n"
            "  posts: user => user.posts,\n"
            "  avatar: user => user.avatar,\n"
            "};\n"
            "\n"
            "export default userResolver;\n"
        )

    def test_root_stub(self, tpl: TemplateGenerator) -> None:
        code = str(tpl.resolver_stub("Mutation"))
        assert (
            "const mutationResolver: MutationResolver = {\n"
            "  publish: (_, args, context) => {\n"
            "    // TODO: Replace this with your desired implementation\n"
            "  },\n"
            "};"
        ) in code
        assert "export default mutationResolver;" in code

    def test_non_object_rejected(self, tpl: TemplateGenerator) -> None:
        with pytest.raises(TypeError):
            tpl.resolver_stub("Node")


class TestResolverMap:
    def test_rich_map(self, tpl: TemplateGenerator) -> None:
        code = _fmt(str(tpl.resolvers_index()))
        assert (
            'import * as DateTime from "../scalars/DateTime";\n'
            'import * as Node from "../interfaces/Node";\n'
            'import * as SearchResult from "../interfaces/SearchResult";\n'
            'import * as Timestamped from "../interfaces/Timestamped";\n'
            'import * as Url from "../scalars/Url";\n'
            'import { makeScalar } from "lib/graphql-tools";\n'
            'import CommentResolver from "./CommentResolver";\n'
            'import MutationResolver from "./MutationResolver";\n'
            'import PostResolver from "./PostResolver";\n'
            'import QueryResolver from "./QueryResolver";\n'
            'import UserResolver from "./UserResolver";\n'
        ) in code
        assert code.endswith(
            "const resolverMap = {\n"
            "  // Resolvers\n"
            "  Comment: CommentResolver,\n"
            "  Mutation: MutationResolver,\n"
            "  Post: PostResolver,\n"
            "  Query: QueryResolver,\n"
            "  User: UserResolver,\n"
            "\n"
            "  // Interfaces\n"
            "  Node: { __resolveType: Node.dispatch },\n"
            "  SearchResult: { __resolveType: SearchResult.dispatch },\n"
            "  Timestamped: { __resolveType: Timestamped.dispatch },\n"
            "\n"
            "  // Scalars\n"
            "  DateTime: makeScalar('DateTime', \"An ISO-8601 timestamp\", "
            "DateTime.decoder, DateTime.serialize),\n"
            "  Url: makeScalar('Url', \"\", Url.decoder, Url.serialize),\n"
            "};\n"
            "\n"
            "export default resolverMap;\n"
        )

    def test_simple_map_has_resolvers_only(self, simple_tpl: TemplateGenerator) -> None:
        code = str(simple_tpl.resolvers_index())
        assert "// Interfaces" not in code
        assert "// Scalars" not in code
        assert "makeScalar" not in code
        assert "  Query: QueryResolver,\n  User: UserResolver,\n};" in code

    def test_helper_module_configurable(self, rich_schema: GraphQLSchema) -> None:
        config = GenerationConfig(scalar_helper_module="@acme/graphql")
        code = str(TemplateGenerator(rich_schema, config).resolvers_index())
        assert 'import { makeScalar } from "@acme/graphql";' in code
