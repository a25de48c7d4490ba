# File: resolvergen/__main__.py
"""
NexaFlow ResolverGen — Module entry point.

Allows running the generator directly via::

    python -m resolvergen schema.graphql

This module simply delegates to the CLI entry point defined in ``resolvergen.cli``.
"""

from __future__ import annotations


def main() -> None:
    """Delegate to the CLI main function."""
    from resolvergen.cli import cli_main
    cli_main()


if __name__ == "__main__":
    main()
