"""
ResolverGen - GraphQL Resolver Code Generator
Install: pip install -e .
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="resolvergen",
    version="1.0.0",
    author="NexaFlow Team",
    author_email="",
    description="⚡ Generate Flow-typed GraphQL resolver signatures and scaffolds",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Code Generators",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "graphql-core>=3.2.0",
        "pydantic>=2.0.0",
        "PyYAML>=6.0",
        "aiofiles>=23.1.0",
        "tree-sitter>=0.23.0",
        "tree-sitter-language-pack>=0.7.0,<1",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "resolvergen=resolvergen.cli:main",
        ],
    },
    keywords="graphql, flow, resolvers, generator, code-generator, scaffold",
)
