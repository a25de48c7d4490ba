"""
tests/test_config.py
Unit tests for GenerationConfig validation and the YAML loader.
"""

from __future__ import annotations

import pathlib
import textwrap

import pytest
from pydantic import ValidationError

from resolvergen.errors import ConfigError
from resolvergen.generator import load_config
from resolvergen.models import (
    DEFAULT_BUILTIN_SCALARS,
    OWNERSHIP,
    ArtifactCategory,
    ArtifactKind,
    FormatterKind,
    GenerationConfig,
    Ownership,
)


class TestGenerationConfig:
    def test_defaults(self) -> None:
        config = GenerationConfig()
        assert config.reserved_root_types == frozenset({"Query", "Mutation"})
        assert config.builtin_scalar_names == frozenset(DEFAULT_BUILTIN_SCALARS)
        assert config.formatter == FormatterKind.LAYOUT.value
        assert config.file_extension == ".js"

    def test_instances_do_not_share_defaults(self) -> None:
        first = GenerationConfig()
        first.root_type_names.append("Subscription")
        assert "Subscription" not in GenerationConfig().root_type_names

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GenerationConfig(output_format="ts")

    @pytest.mark.parametrize("names", [[], ["Query", "not valid"]])
    def test_bad_root_names(self, names: list) -> None:
        with pytest.raises(ValidationError):
            GenerationConfig(root_type_names=names)

    def test_builtin_scalar_must_be_nullable(self) -> None:
        with pytest.raises(ValidationError, match="must end with"):
            GenerationConfig(builtin_scalars={"String": "string"})

    def test_custom_builtin_accepted(self) -> None:
        config = GenerationConfig(builtin_scalars={"String": "string | void | null"})
        assert config.builtin_scalars["String"] == "string | void | null"

    def test_bad_extension(self) -> None:
        with pytest.raises(ValidationError):
            GenerationConfig(file_extension="js")

    def test_directories_must_be_distinct(self) -> None:
        with pytest.raises(ValidationError):
            GenerationConfig(models_dir="types")

    def test_category_dir(self) -> None:
        config = GenerationConfig(resolvers_dir="handlers")
        assert config.category_dir(ArtifactCategory.RESOLVERS) == "handlers"
        assert config.category_dir(ArtifactCategory.TYPES) == "types"

    def test_output_root(self, tmp_path: pathlib.Path) -> None:
        schema = tmp_path / "schema.graphql"
        assert GenerationConfig().resolve_output_root(schema) == tmp_path.resolve()
        assert (
            GenerationConfig(output_dir="out").resolve_output_root(schema)
            == (tmp_path / "out").resolve()
        )
        absolute = tmp_path / "abs"
        assert (
            GenerationConfig(output_dir=str(absolute)).resolve_output_root(schema)
            == absolute.resolve()
        )

    def test_ownership_is_total(self) -> None:
        assert set(OWNERSHIP) == set(ArtifactKind)
        assert OWNERSHIP[ArtifactKind.TYPES_INDEX] is Ownership.OWNED
        assert OWNERSHIP[ArtifactKind.MODELS] is Ownership.ADDITIVE
        assert OWNERSHIP[ArtifactKind.RESOLVER_STUB] is Ownership.CONTRACT


class TestLoadConfig:
    def test_no_file(self) -> None:
        assert load_config() == GenerationConfig()

    def test_yaml_file(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "resolvergen.yaml"
        path.write_text(
            textwrap.dedent(
                """
                root_type_names: [Query, Mutation, Subscription]
                list_wrapper: $ReadOnlyArray
                regenerate_command: make graphql
                formatter: prettier
                """
            ),
            encoding="utf-8",
        )
        config = load_config(path)
        assert "Subscription" in config.reserved_root_types
        assert config.list_wrapper == "$ReadOnlyArray"
        assert config.regenerate_command == "make graphql"
        assert config.formatter == "prettier"

    def test_empty_file_gives_defaults(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == GenerationConfig()

    def test_overrides_win(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "c.yaml"
        path.write_text("output_dir: from-file\n", encoding="utf-8")
        config = load_config(path, {"output_dir": "from-cli"})
        assert config.output_dir == "from-cli"

    def test_missing_file(self, tmp_path: pathlib.Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.yaml")

    def test_not_a_mapping(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_invalid_yaml(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("root_type_names: [Query\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_unknown_key(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "c.yaml"
        path.write_text("colour: blue\n", encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.code == "config_error"

    def test_non_nullable_builtin_scalar(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "c.yaml"
        path.write_text("builtin_scalars:\n  String: string\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="must end with"):
            load_config(path)
