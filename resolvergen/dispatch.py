# File: resolvergen/dispatch.py
"""
NexaFlow ResolverGen - Type Variant Dispatch
==============================================
Two dispatchers over the closed set of graphql-core type classes:

* ``odispatch`` — output position: Scalar, NonNull, Object, List, Enum,
  Interface, Union.
* ``idispatch`` — input position: Scalar, Enum, InputObject, List, NonNull.

The two lattices are deliberately separate: an output field can resolve to an
interface or a union, an input argument never can, and an input object is
never a valid output type.

Each call supplies handlers for the variants it cares about as keyword
arguments, plus an optional ``default``.  The node is classified in a fixed
order; when the matching variant has no handler the ``default`` runs, and
when there is no ``default`` either, ``UnhandledVariant`` is raised.  A
variant is never skipped silently.

Usage::

    odispatch(
        field.type,
        on_scalar=lambda node: ...,
        on_non_null=lambda node: ...,
        default=lambda node: ...,
    )
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Type, TypeVar

from graphql import (
    GraphQLEnumType,
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLList,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLUnionType,
)

from resolvergen.errors import UnhandledVariant

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("resolvergen.dispatch")

T = TypeVar("T")
Handler = Callable[[Any], T]


# ---------------------------------------------------------------------------
# Variant enums
# ---------------------------------------------------------------------------


class OutputKind(str, Enum):
    """Variants of the output-position lattice."""

    SCALAR = "scalar"
    NON_NULL = "non_null"
    OBJECT = "object"
    LIST = "list"
    ENUM = "enum"
    INTERFACE = "interface"
    UNION = "union"


class InputKind(str, Enum):
    """Variants of the input-position lattice."""

    SCALAR = "scalar"
    ENUM = "enum"
    INPUT_OBJECT = "input_object"
    LIST = "list"
    NON_NULL = "non_null"


# Classification order is fixed per lattice.
_OUTPUT_CLASSIFIERS: Tuple[Tuple[OutputKind, Type[Any]], ...] = (
    (OutputKind.SCALAR, GraphQLScalarType),
    (OutputKind.NON_NULL, GraphQLNonNull),
    (OutputKind.OBJECT, GraphQLObjectType),
    (OutputKind.LIST, GraphQLList),
    (OutputKind.ENUM, GraphQLEnumType),
    (OutputKind.INTERFACE, GraphQLInterfaceType),
    (OutputKind.UNION, GraphQLUnionType),
)

_INPUT_CLASSIFIERS: Tuple[Tuple[InputKind, Type[Any]], ...] = (
    (InputKind.SCALAR, GraphQLScalarType),
    (InputKind.ENUM, GraphQLEnumType),
    (InputKind.INPUT_OBJECT, GraphQLInputObjectType),
    (InputKind.LIST, GraphQLList),
    (InputKind.NON_NULL, GraphQLNonNull),
)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def classify_output(value: Any) -> Optional[OutputKind]:
    """Return the output-lattice variant of *value*, or None if it has none."""
    for kind, cls in _OUTPUT_CLASSIFIERS:
        if isinstance(value, cls):
            return kind
    return None


def classify_input(value: Any) -> Optional[InputKind]:
    """Return the input-lattice variant of *value*, or None if it has none."""
    for kind, cls in _INPUT_CLASSIFIERS:
        if isinstance(value, cls):
            return kind
    return None


def _run(
    value: Any,
    kind: Optional[Enum],
    handlers: Dict[Enum, Optional[Handler[T]]],
    default: Optional[Handler[T]],
    lattice: str,
) -> T:
    handler: Optional[Handler[T]] = handlers.get(kind) if kind is not None else None
    if handler is not None:
        return handler(value)
    if default is None:
        raise UnhandledVariant(value, lattice)
    return default(value)


# ---------------------------------------------------------------------------
# Public dispatchers
# ---------------------------------------------------------------------------


def odispatch(
    value: Any,
    *,
    on_scalar: Optional[Handler[T]] = None,
    on_non_null: Optional[Handler[T]] = None,
    on_object: Optional[Handler[T]] = None,
    on_list: Optional[Handler[T]] = None,
    on_enum: Optional[Handler[T]] = None,
    on_interface: Optional[Handler[T]] = None,
    on_union: Optional[Handler[T]] = None,
    default: Optional[Handler[T]] = None,
) -> T:
    """
    Dispatch an output-position type node to one of the given handlers.

    All handlers must return the same shape of result.

    Raises:
        UnhandledVariant: If the node's variant has no handler and no
            ``default`` was supplied.
    """
    handlers: Dict[Enum, Optional[Handler[T]]] = {
        OutputKind.SCALAR: on_scalar,
        OutputKind.NON_NULL: on_non_null,
        OutputKind.OBJECT: on_object,
        OutputKind.LIST: on_list,
        OutputKind.ENUM: on_enum,
        OutputKind.INTERFACE: on_interface,
        OutputKind.UNION: on_union,
    }
    return _run(value, classify_output(value), handlers, default, "output")


def idispatch(
    value: Any,
    *,
    on_scalar: Optional[Handler[T]] = None,
    on_enum: Optional[Handler[T]] = None,
    on_input_object: Optional[Handler[T]] = None,
    on_list: Optional[Handler[T]] = None,
    on_non_null: Optional[Handler[T]] = None,
    default: Optional[Handler[T]] = None,
) -> T:
    """
    Dispatch an input-position type node to one of the given handlers.

    Interfaces, unions and object types are not part of this lattice; they
    only ever reach ``default``.

    Raises:
        UnhandledVariant: If the node's variant has no handler and no
            ``default`` was supplied.
    """
    handlers: Dict[Enum, Optional[Handler[T]]] = {
        InputKind.SCALAR: on_scalar,
        InputKind.ENUM: on_enum,
        InputKind.INPUT_OBJECT: on_input_object,
        InputKind.LIST: on_list,
        InputKind.NON_NULL: on_non_null,
    }
    return _run(value, classify_input(value), handlers, default, "input")


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "OutputKind",
    "InputKind",
    "classify_output",
    "classify_input",
    "odispatch",
    "idispatch",
]
