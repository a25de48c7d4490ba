"""
tests/conftest.py
Shared fixtures for the resolvergen test suite.

No external mocking libraries are used; real file I/O is performed inside
temporary directories managed by pytest's tmp_path fixtures.
"""

from __future__ import annotations

import logging
import pathlib
import textwrap
from typing import Iterator

import pytest
from graphql import GraphQLSchema, build_schema

from resolvergen.models import GenerationConfig


# ---------------------------------------------------------------------------
# SDL sources
# ---------------------------------------------------------------------------

SIMPLE_SDL: str = textwrap.dedent(
    """
    type Query {
      user: User
    }

    type User {
      id: ID!
      name: String
    }
    """
)

RICH_SDL: str = textwrap.dedent(
    '''
    """An ISO-8601 timestamp"""
    scalar DateTime

    scalar Url

    interface Node {
      id: ID!
    }

    interface Timestamped {
      createdAt: DateTime!
    }

    type User implements Node & Timestamped {
      id: ID!
      createdAt: DateTime!
      name: String
      role: Role!
      posts(first: Int, after: String): [Post!]!
      avatar: Url
    }

    type Post implements Node {
      id: ID!
      title: String!
      author: User
      tags: [String]
    }

    type Comment implements Node {
      id: ID!
      body: String!
    }

    union SearchResult = User | Post

    enum Role {
      ADMIN
      EDITOR
      VIEWER
    }

    input PostFilter {
      authorId: ID!
      tags: [String!]
    }

    type Query {
      node(id: ID!): Node
      search(term: String!, filter: PostFilter): [SearchResult!]!
      viewer: User
    }

    type Mutation {
      publish(title: String!): Post!
    }
    '''
)


# ---------------------------------------------------------------------------
# Schema / config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def config() -> GenerationConfig:
    """Default configuration."""
    return GenerationConfig()


@pytest.fixture(scope="session")
def simple_schema() -> GraphQLSchema:
    return build_schema(SIMPLE_SDL)


@pytest.fixture(scope="session")
def rich_schema() -> GraphQLSchema:
    return build_schema(RICH_SDL)


@pytest.fixture()
def rich_schema_path(tmp_path: pathlib.Path) -> pathlib.Path:
    """Write the rich SDL into a fresh project directory and return its path."""
    path = tmp_path / "schema.graphql"
    path.write_text(RICH_SDL, encoding="utf-8")
    return path


@pytest.fixture()
def simple_schema_path(tmp_path: pathlib.Path) -> pathlib.Path:
    path = tmp_path / "schema.graphql"
    path.write_text(SIMPLE_SDL, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_resolvergen_logger() -> Iterator[None]:
    """The CLI reconfigures the package logger; restore it after each test."""
    yield
    package_logger = logging.getLogger("resolvergen")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
