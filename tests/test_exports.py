"""
tests/test_exports.py
Unit tests for resolvergen.exports (parser-backed export scanning).
"""

from __future__ import annotations

import pathlib
import textwrap

import pytest

from resolvergen.exports import ExportScanner, scan_source


class TestScanSource:
    def test_declarations(self) -> None:
        source = textwrap.dedent(
            """
            export const a = 1;
            export let b = 2;
            export var c = 3;
            export function d() {}
            export async function e() {}
            export type F = string;
            export opaque type G = number;
            export class H {}
            export interface I {}
            """
        )
        assert scan_source(source) == {"a", "b", "c", "d", "e", "F", "G", "H", "I"}

    def test_specifier_lists(self) -> None:
        source = textwrap.dedent(
            """
            const x = 1, y = 2;
            export { x, y as renamed };
            export type { DateTime } from './DateTime';
            """
        )
        assert scan_source(source) == {"x", "renamed", "DateTime"}

    def test_default_export_contributes_nothing(self) -> None:
        source = "const userResolver = {};\nexport default userResolver;\n"
        assert scan_source(source) == set()

    def test_default_specifier_excluded(self) -> None:
        assert scan_source("export { thing as default, other };") == {"other"}

    def test_commented_out_exports_ignored(self) -> None:
        source = textwrap.dedent(
            """
            // export const serialize = String;
            /*
            export function dispatch() {}
            */
            export const decoder = 1; // export const hidden = 2;
            """
        )
        assert scan_source(source) == {"decoder"}

    def test_non_exported_declarations_ignored(self) -> None:
        assert scan_source("const a = 1;\nfunction b() {}\ntype C = string;\n") == set()

    def test_indented_export(self) -> None:
        assert scan_source("  export const spaced = 1;") == {"spaced"}


class TestLiteralsAndStatements:
    def test_glob_in_string_does_not_hide_exports(self) -> None:
        source = textwrap.dedent(
            """
            const PATTERN = 'assets/*.png';
            export type DateTime = string;
            export const serialize = String;
            export const decoder = string;
            /* end */
            """
        )
        assert scan_source(source) == {"DateTime", "serialize", "decoder"}

    def test_url_in_string(self) -> None:
        source = "const u = 'http://example.com';\nexport const home = u;\n"
        assert scan_source(source) == {"home"}

    def test_template_literal_is_not_code(self) -> None:
        source = "const doc = `\nexport const fake = 1;\n`;\nexport const real = doc;\n"
        assert scan_source(source) == {"real"}

    def test_two_exports_on_one_line(self) -> None:
        source = "export const serialize = String; export const decoder = string;\n"
        assert scan_source(source) == {"serialize", "decoder"}

    def test_nested_export_text_ignored(self) -> None:
        source = textwrap.dedent(
            """
            function build() {
              const o = { export: 1 };
              return o.export;
            }
            export const built = build();
            """
        )
        assert scan_source(source) == {"built"}

    def test_flow_exact_object_type(self) -> None:
        source = "export type Args = {| +id: string |};\nexport const resolve = 1;\n"
        assert scan_source(source) == {"Args", "resolve"}


class TestExportScanner:
    @pytest.mark.asyncio
    async def test_scan_file(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "Url.js"
        path.write_text(
            "export type Url = string;\n"
            "export const serialize = String;\n"
            "export const decoder = string;\n",
            encoding="utf-8",
        )
        assert await ExportScanner().scan(path) == {"Url", "serialize", "decoder"}
