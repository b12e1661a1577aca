"""Pytest configuration and fixtures for varlink Go generator tests."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from varlink_go_generator.idl_types import (
    ErrorType,
    Field,
    Interface,
    Method,
    Type,
    VarlinkKind,
    new_element,
    new_struct,
)
from varlink_go_generator.parser import parse_interface
from varlink_go_generator.writer import Writer

# Test directory structure
TESTS_DIR = Path(__file__).parent
SCHEMAS_DIR = TESTS_DIR / "schemas"

PING_SCHEMA = SCHEMAS_DIR / "org.example.ping.varlink"
MORE_SCHEMA = SCHEMAS_DIR / "org.example.more.varlink"
COMPLEX_SCHEMA = SCHEMAS_DIR / "org.example.complex.varlink"

STRING = Type(VarlinkKind.STRING)
INT = Type(VarlinkKind.INT)
BOOL = Type(VarlinkKind.BOOL)

requires_gofmt = pytest.mark.skipif(shutil.which("gofmt") is None, reason="gofmt is not installed")


def load_schema(path: Path) -> Interface:
    """Parse a schema file the same way the generator does."""
    return parse_interface(path.read_text(encoding="utf8").rstrip("\n"))


def render(interface: Interface) -> str:
    """Run the writer on an interface and return the unformatted Go source."""
    writer = Writer(interface)
    writer.generate_all()
    return writer.dumps()


@pytest.fixture
def ping_interface() -> Interface:
    """The `org.example.Ping` interface: one method, no aliases, no errors."""
    return Interface(
        name="org.example.Ping",
        description="interface org.example.Ping\n\nmethod Ping(ping: string) -> (pong: string)",
        methods=(Method("Ping", new_struct(Field("ping", STRING)), new_struct(Field("pong", STRING))),),
    )


@pytest.fixture
def ping_source(ping_interface) -> str:
    """Unformatted Go source for the Ping interface."""
    return render(ping_interface)


@pytest.fixture
def keyword_interface() -> Interface:
    """An interface whose field names are Go keywords."""
    struct_list = new_element(VarlinkKind.ARRAY, new_struct(Field("name", STRING)))
    return Interface(
        name="org.example.keywords",
        description="interface org.example.keywords",
        methods=(
            Method(
                "Lookup",
                new_struct(Field("type", STRING), Field("range", struct_list)),
                new_struct(Field("func", BOOL), Field("map", new_element(VarlinkKind.MAP, INT))),
            ),
        ),
        errors=(ErrorType("Failed", new_struct(Field("default", STRING))),),
    )


@pytest.fixture(scope="session")
def more_interface() -> Interface:
    """Parsed `org.example.more`."""
    return load_schema(MORE_SCHEMA)


@pytest.fixture(scope="session")
def complex_interface() -> Interface:
    """Parsed `org.example.complex`, which uses every type kind."""
    return load_schema(COMPLEX_SCHEMA)


@pytest.fixture(scope="session")
def complex_source(complex_interface) -> str:
    """Unformatted Go source for `org.example.complex`."""
    return render(complex_interface)
