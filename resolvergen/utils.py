# File: resolvergen/utils.py
"""
NexaFlow ResolverGen - Utility Functions & Helpers
====================================================
Small string helpers shared by the templates, plus the ``Timer`` used to
profile each generation task.
"""

from __future__ import annotations

import functools
import json
import logging
import time
from typing import FrozenSet, List, Optional, Sequence

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("resolvergen.utils")

# Reserved words that cannot be used as binding names in generated code
_JS_RESERVED: FrozenSet[str] = frozenset({
    "await", "break", "case", "catch", "class", "const", "continue",
    "debugger", "default", "delete", "do", "else", "enum", "export",
    "extends", "false", "finally", "for", "function", "if", "implements",
    "import", "in", "instanceof", "interface", "let", "new", "null",
    "package", "private", "protected", "public", "return", "static",
    "super", "switch", "this", "throw", "true", "try", "typeof", "var",
    "void", "while", "with", "yield",
})


# ---------------------------------------------------------------------------
# Cached string transformation functions
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=None)
def lower_case_first(name: str) -> str:
    """
    Lower-case the first character only.

    Examples:
        >>> lower_case_first("UserResolver")
        'userResolver'
        >>> lower_case_first("URL")
        'uRL'
    """
    if not name:
        return ""
    return name[0].lower() + name[1:]


def safe_js_identifier(name: str) -> str:
    """Append ``_`` to names that are reserved words in JS/Flow."""
    if name in _JS_RESERVED:
        return f"{name}_"
    return name


def js_single_quoted(value: str) -> str:
    """Render *value* as a single-quoted JS string literal."""
    escaped: str = value.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n")
    return f"'{escaped}'"


def js_double_quoted(value: Optional[str]) -> str:
    """Render *value* as a double-quoted JS string literal (``""`` for None)."""
    return json.dumps(value or "", ensure_ascii=False)


def indent_lines(lines: Sequence[str], level: int = 1, size: int = 2) -> List[str]:
    """Indent every non-empty line; blank lines stay empty."""
    prefix: str = " " * (level * size)
    return [f"{prefix}{line}" if line else "" for line in lines]


def count_lines(content: str) -> int:
    """Count lines in a string (a trailing newline does not add a line)."""
    if not content:
        return 0
    return content.count("\n") + (0 if content.endswith("\n") else 1)


# ---------------------------------------------------------------------------
# Performance timer
# ---------------------------------------------------------------------------


class Timer:
    """
    Simple context-manager timer for profiling generation steps.

    Usage:
        with Timer("scalars") as t:
            ...
        print(t.elapsed)
    """

    __slots__ = ("label", "start_time", "end_time", "elapsed")

    def __init__(self, label: str = "operation") -> None:
        self.label: str = label
        self.start_time: float = 0.0
        self.end_time: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[object],
    ) -> None:
        self.end_time = time.perf_counter()
        self.elapsed = self.end_time - self.start_time
        logger.debug("Timer [%s]: %.4f seconds", self.label, self.elapsed)

    def __repr__(self) -> str:
        return f"<Timer {self.label}: {self.elapsed:.4f}s>"


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "lower_case_first",
    "safe_js_identifier",
    "js_single_quoted",
    "js_double_quoted",
    "indent_lines",
    "count_lines",
    "Timer",
]
