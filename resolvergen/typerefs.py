# File: resolvergen/typerefs.py
"""
NexaFlow ResolverGen - Type Reference Rendering
=================================================
Turns a GraphQL type node into a Flow type-reference expression.

In GraphQL every type is nullable unless wrapped in ``NonNull``.  The
renderer mirrors that: every branch produces a *nullable* expression that
ends in the exact suffix ``" | null"``.  A ``NonNull`` wrapper renders its
inner type and then strips that suffix again::

    String          →  "string | null"
    String!         →  "string"
    [User!]         →  "Array<User> | null"
    [User]!         →  "Array<User | null>"

Stripping is only sound because *every* branch honours the suffix; a branch
that forgets it makes ``non_optional`` raise ``MalformedNullableExpr``
instead of emitting a silently wrong type.

Input and output positions use separate renderer instances: the variant
lattices differ (see ``resolvergen.dispatch``) and so may the alias tables.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from graphql import GraphQLArgument

from resolvergen.dispatch import idispatch, odispatch
from resolvergen.errors import MalformedNullableExpr, MissingTypeName
from resolvergen.models import NULLABLE_SUFFIX, GenerationConfig

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("resolvergen.typerefs")

OUTPUT: str = "output"
INPUT: str = "input"


# ---------------------------------------------------------------------------
# Nullability helpers
# ---------------------------------------------------------------------------


def nullable(expr: str) -> str:
    """Append the nullable sentinel to a bare type expression."""
    return f"{expr}{NULLABLE_SUFFIX}"


def non_optional(base_type_expr: str) -> str:
    """
    Turn a nullable expression into its mandatory equivalent by stripping the
    trailing ``" | null"``.

    Raises:
        MalformedNullableExpr: If *base_type_expr* does not end with the
            exact sentinel.
    """
    if not base_type_expr.endswith(NULLABLE_SUFFIX):
        raise MalformedNullableExpr(base_type_expr, NULLABLE_SUFFIX)
    return base_type_expr[: -len(NULLABLE_SUFFIX)]


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------


class TypeRefRenderer:
    """
    Pure, recursive renderer for one position (``"output"`` or ``"input"``).

    Args:
        position: Which dispatch lattice to use.
        scalars: Builtin scalar name → nullable primitive union.
        aliases: Optional named-type → rendered-name mapping, for generated
            aliases whose name differs from the schema name.
        list_wrapper: Generic used for lists (``Array`` for Flow).
    """

    def __init__(
        self,
        position: str,
        scalars: Mapping[str, str],
        *,
        aliases: Optional[Mapping[str, str]] = None,
        list_wrapper: str = "Array",
    ) -> None:
        if position not in (OUTPUT, INPUT):
            raise ValueError(f"position must be {OUTPUT!r} or {INPUT!r}, got {position!r}")
        for expr in scalars.values():
            non_optional(expr)
        self._position: str = position
        self._scalars: Dict[str, str] = dict(scalars)
        self._aliases: Dict[str, str] = dict(aliases or {})
        self._list_wrapper: str = list_wrapper

    @classmethod
    def for_output(cls, config: GenerationConfig) -> "TypeRefRenderer":
        return cls(OUTPUT, config.builtin_scalars, list_wrapper=config.list_wrapper)

    @classmethod
    def for_input(cls, config: GenerationConfig) -> "TypeRefRenderer":
        return cls(INPUT, config.builtin_scalars, list_wrapper=config.list_wrapper)

    @property
    def position(self) -> str:
        return self._position

    def render(self, value: Any) -> str:
        """Return the (nullable by default) type reference for *value*."""
        dispatch: Callable[..., str] = odispatch if self._position == OUTPUT else idispatch
        return dispatch(
            value,
            on_scalar=self._scalar,
            on_non_null=lambda node: non_optional(self.render(node.of_type)),
            on_list=lambda node: nullable(
                f"{self._list_wrapper}<{self.render(node.of_type)}>"
            ),
            default=self._named,
        )

    def render_args(self, args: Mapping[str, GraphQLArgument]) -> str:
        """Render a field's arguments as an exact, read-only record type."""
        field_exprs: str = ", ".join(
            f"+{name}: {self.render(arg.type)}" for name, arg in args.items()
        )
        return f"{{| {field_exprs} |}}"

    # -- branches -----------------------------------------------------------

    def _scalar(self, node: Any) -> str:
        builtin: Optional[str] = self._scalars.get(node.name)
        if builtin is not None:
            return builtin
        return self._named(node)

    def _named(self, node: Any) -> str:
        name: str = getattr(node, "name", None) or ""
        if not name:
            raise MissingTypeName(node)
        return nullable(self._aliases.get(name, name))


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "NULLABLE_SUFFIX",
    "nullable",
    "non_optional",
    "TypeRefRenderer",
]
