# File: resolvergen/exporters.py
"""
NexaFlow ResolverGen - File-System Collaborator
=================================================

All disk access of a generation run goes through one ``FileSystem``:

    1. Reading existing scaffold files (for contract / additive checks).
    2. Writing generated files, creating parent directories first.
    3. Appending missing names to additive scaffold files.
    4. Listing output directories for orphan detection.
    5. Recording every write in a ``FileRecord`` for the run report.

I/O is asynchronous via ``aiofiles`` so that the concurrent generation tasks
only suspend on disk access.  Files are read and written with ``newline=""``
so existing user content round-trips byte-for-byte.

With ``dry_run=True`` nothing is written; writes are logged and recorded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List

import aiofiles
import aiofiles.os

from resolvergen.utils import count_lines

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("resolvergen.exporters")


# ---------------------------------------------------------------------------
# Data classes for write results
# ---------------------------------------------------------------------------


class WriteMode(str, Enum):
    WRITE = "write"
    APPEND = "append"


@dataclass(frozen=True, slots=True)
class FileRecord:
    """Immutable record of a single write performed during a run."""

    relative_path: str
    mode: WriteMode
    size_bytes: int
    line_count: int


# ---------------------------------------------------------------------------
# FileSystem
# ---------------------------------------------------------------------------


class FileSystem:
    """
    Asynchronous file access rooted at the output directory.

    Usage::

        fs = FileSystem(Path("./api"))
        await fs.write(fs.path("types", "index.js"), code)
        print(fs.records)

    Not thread-safe; all coroutines of one run share the event loop.
    """

    def __init__(self, root: Path, *, dry_run: bool = False, encoding: str = "utf-8") -> None:
        self._root: Path = Path(root).resolve()
        self._dry_run: bool = dry_run
        self._encoding: str = encoding
        self._records: List[FileRecord] = []

        logger.debug("FileSystem initialised: root=%s, dry_run=%s.", self._root, dry_run)

    # -----------------------------------------------------------------
    # Paths
    # -----------------------------------------------------------------

    @property
    def root(self) -> Path:
        return self._root

    @property
    def dry_run(self) -> bool:
        return self._dry_run

    @property
    def records(self) -> List[FileRecord]:
        return list(self._records)

    def path(self, *parts: str) -> Path:
        return self._root.joinpath(*parts)

    def relative(self, path: Path) -> str:
        """Display path of *path* relative to the root (posix separators)."""
        try:
            return Path(path).resolve().relative_to(self._root).as_posix()
        except ValueError:
            return str(path)

    # -----------------------------------------------------------------
    # Reads
    # -----------------------------------------------------------------

    async def exists(self, path: Path) -> bool:
        return await aiofiles.os.path.exists(path)

    async def read(self, path: Path) -> str:
        async with aiofiles.open(path, "r", encoding=self._encoding, newline="") as handle:
            return await handle.read()

    async def listdir(self, path: Path) -> List[str]:
        """Entry names of directory *path*, sorted; a missing directory is empty."""
        if not await aiofiles.os.path.isdir(path):
            return []
        return sorted(await aiofiles.os.listdir(path))

    # -----------------------------------------------------------------
    # Writes
    # -----------------------------------------------------------------

    async def write(self, path: Path, content: str) -> FileRecord:
        """Write *content* to *path*, creating parent directories first."""
        return await self._put(path, content, WriteMode.WRITE)

    async def append(self, path: Path, content: str) -> FileRecord:
        """Append *content* to the end of an existing file."""
        return await self._put(path, content, WriteMode.APPEND)

    async def _put(self, path: Path, content: str, mode: WriteMode) -> FileRecord:
        rel_path: str = self.relative(path)
        record: FileRecord = FileRecord(
            relative_path=rel_path,
            mode=mode,
            size_bytes=len(content.encode(self._encoding)),
            line_count=count_lines(content),
        )

        if self._dry_run:
            logger.info("Would %s %s (dry run)", mode.value, rel_path)
        else:
            await aiofiles.os.makedirs(path.parent, exist_ok=True)
            file_mode: str = "a" if mode is WriteMode.APPEND else "w"
            async with aiofiles.open(
                path, file_mode, encoding=self._encoding, newline=""
            ) as handle:
                await handle.write(content)
            verb: str = "Appended to" if mode is WriteMode.APPEND else "Wrote"
            logger.info("%s %s", verb, rel_path)

        self._records.append(record)
        return record


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "WriteMode",
    "FileRecord",
    "FileSystem",
]
