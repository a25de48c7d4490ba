# File: resolvergen/formatting.py
"""
NexaFlow ResolverGen - Source Formatters
==========================================
Every generated module passes through a formatter before it is written.

* ``LayoutFormatter`` (default) canonicalises whitespace only.  It is
  idempotent: ``fmt(fmt(x)) == fmt(x)``, which keeps re-runs byte-identical.
* ``PrettierFormatter`` pipes the code through an external ``prettier``
  process via ``asyncio.create_subprocess_exec``.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import List, Sequence

from resolvergen.errors import FormatterError
from resolvergen.models import FormatterKind, GenerationConfig

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("resolvergen.formatting")

_TRAILING_WS_RE: re.Pattern[str] = re.compile(r"[ \t]+$", re.MULTILINE)
_BLANK_RUN_RE: re.Pattern[str] = re.compile(r"\n{3,}")


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


class Formatter:
    """Base class: ``await formatter.format(code)`` returns canonical text."""

    name: str = "identity"

    async def format(self, code: str) -> str:
        return code


class LayoutFormatter(Formatter):
    """
    Deterministic whitespace canonicalisation:

        - trailing whitespace stripped from every line
        - runs of blank lines collapsed into one
        - leading and trailing blank lines dropped
        - exactly one final newline (empty input stays empty)
    """

    name = "layout"

    def format_sync(self, code: str) -> str:
        text: str = _TRAILING_WS_RE.sub("", code.replace("\r\n", "\n"))
        text = _BLANK_RUN_RE.sub("\n\n", text).strip("\n")
        return f"{text}\n" if text else ""

    async def format(self, code: str) -> str:
        return self.format_sync(code)


class PrettierFormatter(Formatter):
    """Runs ``prettier`` on stdin and returns its stdout."""

    name = "prettier"

    def __init__(self, command: Sequence[str]) -> None:
        if not command:
            raise FormatterError("prettier command must not be empty")
        self._command: List[str] = list(command)

    async def format(self, code: str) -> str:
        try:
            process = await asyncio.create_subprocess_exec(
                *self._command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise FormatterError(
                f"Could not start formatter {self._command[0]!r}: {exc}"
            ) from exc

        stdout, stderr = await process.communicate(code.encode("utf-8"))
        if process.returncode != 0:
            raise FormatterError(
                f"Formatter {self._command[0]!r} exited with status "
                f"{process.returncode}: {stderr.decode('utf-8', 'replace').strip()}"
            )
        return stdout.decode("utf-8")


def make_formatter(config: GenerationConfig) -> Formatter:
    """Build the formatter selected by ``config.formatter``."""
    kind: FormatterKind = FormatterKind(config.formatter)
    if kind is FormatterKind.PRETTIER:
        return PrettierFormatter(config.prettier_command)
    return LayoutFormatter()


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "Formatter",
    "LayoutFormatter",
    "PrettierFormatter",
    "make_formatter",
]
