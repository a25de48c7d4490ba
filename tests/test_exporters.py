"""
tests/test_exporters.py
Unit tests for resolvergen.exporters.FileSystem.

Real file I/O inside tmp_path; no mocking.
"""

from __future__ import annotations

import pathlib

import pytest

from resolvergen.exporters import FileSystem, WriteMode


class TestPaths:
    def test_relative_is_posix(self, tmp_path: pathlib.Path) -> None:
        fs = FileSystem(tmp_path)
        assert fs.relative(fs.path("types", "index.js")) == "types/index.js"

    def test_relative_outside_root(self, tmp_path: pathlib.Path) -> None:
        fs = FileSystem(tmp_path / "out")
        outside = tmp_path / "elsewhere.js"
        assert fs.relative(outside) == str(outside)


class TestWrites:
    @pytest.mark.asyncio
    async def test_write_creates_parents(self, tmp_path: pathlib.Path) -> None:
        fs = FileSystem(tmp_path)
        target = fs.path("a", "b", "c.js")
        record = await fs.write(target, "x\ny\n")

        assert target.read_text(encoding="utf-8") == "x\ny\n"
        assert record.relative_path == "a/b/c.js"
        assert record.mode is WriteMode.WRITE
        assert record.line_count == 2
        assert record.size_bytes == 4

    @pytest.mark.asyncio
    async def test_append_preserves_existing_bytes(self, tmp_path: pathlib.Path) -> None:
        fs = FileSystem(tmp_path)
        target = tmp_path / "m.js"
        target.write_bytes(b"keep\r\nme")
        await fs.append(target, "\n\nmore\n")
        assert target.read_bytes() == b"keep\r\nme\n\nmore\n"
        assert [r.mode for r in fs.records] == [WriteMode.APPEND]

    @pytest.mark.asyncio
    async def test_read_keeps_line_endings(self, tmp_path: pathlib.Path) -> None:
        target = tmp_path / "crlf.js"
        target.write_bytes(b"a\r\nb\r\n")
        assert await FileSystem(tmp_path).read(target) == "a\r\nb\r\n"

    @pytest.mark.asyncio
    async def test_dry_run_records_without_writing(self, tmp_path: pathlib.Path) -> None:
        fs = FileSystem(tmp_path, dry_run=True)
        target = fs.path("types", "index.js")
        await fs.write(target, "content\n")

        assert fs.dry_run is True
        assert not target.exists()
        assert not (tmp_path / "types").exists()
        assert [r.relative_path for r in fs.records] == ["types/index.js"]


class TestListing:
    @pytest.mark.asyncio
    async def test_listdir_sorted(self, tmp_path: pathlib.Path) -> None:
        for name in ("b.js", "a.js", "C.js"):
            (tmp_path / name).write_text("", encoding="utf-8")
        assert await FileSystem(tmp_path).listdir(tmp_path) == ["C.js", "a.js", "b.js"]

    @pytest.mark.asyncio
    async def test_missing_directory_is_empty(self, tmp_path: pathlib.Path) -> None:
        fs = FileSystem(tmp_path)
        assert await fs.listdir(tmp_path / "nope") == []
        assert await fs.exists(tmp_path / "nope") is False
