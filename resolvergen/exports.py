# File: resolvergen/exports.py
"""
NexaFlow ResolverGen - Export Scanner
=======================================
Finds the top-level exported identifiers of an existing Flow/JS module so
that hand-edited scaffold files can be checked without being re-generated.

Recognised forms::

    export const a = ...            export let / export var
    export function f() {}          export async function f() {}
    export type T = ...             export opaque type T = ...
    export interface I {}           export class C {}
    export { a, b as c }            export type { X } from './X'
    export * as ns from './m'

``export default ...`` does not contribute a name.

The source is parsed with tree-sitter (TypeScript grammar, the closest
available grammar to Flow).  Comments are dropped and string, template and
regex literals become single opaque tokens, so their contents never look
like code.  Flow-only syntax the grammar does not know (``{| |}``, ``+prop``,
``opaque type``) ends up in ERROR nodes; their leaf tokens are still walked,
so an ``export`` statement is found regardless of how the parser recovered.
"""

from __future__ import annotations

import functools
import logging
import re
from pathlib import Path
from typing import Iterator, List, Optional, Set

import aiofiles
from tree_sitter import Node, Parser
from tree_sitter_language_pack import get_parser

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("resolvergen.exports")

GRAMMAR: str = "typescript"

_IDENTIFIER_RE: re.Pattern[str] = re.compile(r"^[A-Za-z_$][\w$]*$")

_SKIPPED_NODES = frozenset({"comment", "html_comment"})
_LITERAL_NODES = frozenset({"string", "template_string", "regex"})
_LITERAL: str = "<literal>"

_VARIABLE_KEYWORDS = frozenset({"const", "let", "var"})
_NAMED_DECLARATIONS = frozenset({"function", "class", "interface", "enum"})


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=1)
def _parser() -> Parser:
    return get_parser(GRAMMAR)


def iter_tokens(source: str) -> Iterator[str]:
    """
    Yield the significant tokens of *source* in document order.

    Comments are skipped and every string/template/regex literal is yielded
    as one placeholder token.
    """
    tree = _parser().parse(source.encode("utf-8"))
    stack: List[Node] = [tree.root_node]
    while stack:
        node: Node = stack.pop()
        if node.type in _SKIPPED_NODES:
            continue
        if node.type in _LITERAL_NODES:
            yield _LITERAL
            continue
        if node.child_count == 0:
            text: str = (node.text or b"").decode("utf-8", "replace")
            if text.strip():
                yield text
            continue
        stack.extend(reversed(node.children))


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------


def _identifier(token: Optional[str]) -> Optional[str]:
    if token is not None and _IDENTIFIER_RE.match(token):
        return token
    return None


def _specifier_names(tokens: List[str], start: int) -> Set[str]:
    """Exported names of the ``{ ... }`` list opening at ``tokens[start]``."""
    names: Set[str] = set()
    group: List[str] = []
    for token in tokens[start + 1:]:
        if token in (",", "}"):
            if group and group[0] == "type" and len(group) > 1:
                group = group[1:]
            exported: Optional[str] = None
            if "as" in group[1:]:
                target: List[str] = group[group.index("as", 1) + 1:]
                exported = _identifier(target[0] if target else None)
            elif group:
                exported = _identifier(group[0])
            if exported and exported != "default":
                names.add(exported)
            group = []
            if token == "}":
                break
        else:
            group.append(token)
    return names


def _statement_names(tokens: List[str], i: int) -> Set[str]:
    """Names exported by the ``export`` token at ``tokens[i]``."""

    def at(offset: int) -> Optional[str]:
        index: int = i + offset
        return tokens[index] if index < len(tokens) else None

    head: Optional[str] = at(1)
    if head is None or head == "default":
        return set()
    if head == "{":
        return _specifier_names(tokens, i + 1)
    if head == "*":
        return {at(3)} if at(2) == "as" and _identifier(at(3)) else set()

    offset: int = 1
    if head == "declare":
        offset += 1
    if at(offset) == "async":
        offset += 1
    if at(offset) == "abstract":
        offset += 1
    if at(offset) == "opaque":
        offset += 1

    keyword: Optional[str] = at(offset)
    if keyword == "type":
        if at(offset + 1) == "{":
            return _specifier_names(tokens, i + offset + 1)
        name = _identifier(at(offset + 1))
        return {name} if name else set()
    if keyword in _VARIABLE_KEYWORDS or keyword in _NAMED_DECLARATIONS:
        offset += 1
        if keyword == "function" and at(offset) == "*":
            offset += 1
        name = _identifier(at(offset))
        return {name} if name else set()
    return set()


def scan_source(source: str) -> Set[str]:
    """Return the exported top-level identifiers of a module's source text."""
    tokens: List[str] = list(iter_tokens(source))
    names: Set[str] = set()
    depth: int = 0
    previous: Optional[str] = None

    for i, token in enumerate(tokens):
        if token == "export" and depth == 0 and previous != ".":
            names.update(_statement_names(tokens, i))
        if token != _LITERAL:
            depth = max(depth + token.count("{") - token.count("}"), 0)
        previous = token

    return names


class ExportScanner:
    """Asynchronous front-end over ``scan_source`` for files on disk."""

    async def scan(self, path: Path) -> Set[str]:
        async with aiofiles.open(path, "r", encoding="utf-8") as handle:
            source: str = await handle.read()
        names: Set[str] = scan_source(source)
        logger.debug("Scanned %s: %d export(s).", path, len(names))
        return names


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "GRAMMAR",
    "iter_tokens",
    "scan_source",
    "ExportScanner",
]
