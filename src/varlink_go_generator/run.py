"""Top-level module for binding generation."""

from __future__ import annotations

import argparse
import logging
import subprocess
import sys
from pathlib import Path

from varlink_go_generator.idl_types import Interface
from varlink_go_generator.parser import VarlinkSyntaxError, parse_interface
from varlink_go_generator.writer import Writer

logger = logging.getLogger(__name__)

GO_SUFFIX = ".go"
GOFMT = "gofmt"


class GoFormatError(Exception):
    """Raised when gofmt rejects the generated source, which points at a bug in the generator."""

    pass


def format_go_source(raw_source: str) -> str:
    """Formats Go source using gofmt.

    Args:
        raw_source (str): The unformatted source.

    Returns:
        str: The formatted source. If gofmt is not installed, the unformatted source.

    Raises:
        GoFormatError: If gofmt cannot parse the source.
    """
    try:
        result = subprocess.run(
            [GOFMT],
            input=raw_source,
            capture_output=True,
            text=True,
            check=True,
        )

    except FileNotFoundError:
        logger.warning("%s not found, skipping formatting of generated source", GOFMT)
        return raw_source

    except subprocess.CalledProcessError as e:
        logger.error("gofmt failed: %s", e.stderr)
        raise GoFormatError(f"Generated source is not valid Go:\n{e.stderr}") from e

    return result.stdout


def generate_bindings(interface: Interface, format_source: bool = True) -> tuple[str, str]:
    """Entry-point for generating Go bindings from a parsed interface.

    Args:
        interface (Interface): The interface to generate bindings for.
        format_source (bool): Whether to pass the result through gofmt.

    Returns:
        tuple[str, str]: The Go package name and the source of the generated file.
    """
    writer = Writer(interface)
    writer.generate_all()

    source = writer.dumps()
    if format_source:
        source = format_go_source(source)

    return writer.unit_name, source


def generate_template(description: str, format_source: bool = True) -> tuple[str, str]:
    """Generate Go bindings from the text of an interface description.

    Args:
        description (str): The varlink interface description.
        format_source (bool): Whether to pass the result through gofmt.

    Returns:
        tuple[str, str]: The Go package name and the source of the generated file.

    Raises:
        VarlinkSyntaxError: If the description is malformed.
        GoFormatError: If gofmt rejects the generated source.
    """
    interface = parse_interface(description.rstrip("\n"))
    return generate_bindings(interface, format_source)


def generate_file(varlink_file: str | Path, output_dir: str | Path | None = None, format_source: bool = True) -> Path:
    """Generate the Go file for one `.varlink` file.

    The output is named after the Go package, e.g. `orgexampleping.go`, and written next to the input file unless
    an output directory is given.

    Args:
        varlink_file (str | Path): The interface description to read.
        output_dir (str | Path | None): The directory to write to. Defaults to the directory of `varlink_file`.
        format_source (bool): Whether to pass the result through gofmt.

    Returns:
        Path: The path of the written file.
    """
    varlink_path = Path(varlink_file)
    unit_name, source = generate_template(varlink_path.read_text(encoding="utf8"), format_source)
    return write_bindings(unit_name, source, output_path_for(varlink_path, unit_name, output_dir))


def output_path_for(varlink_path: Path, unit_name: str, output_dir: str | Path | None = None) -> Path:
    """The path of the Go file generated for `varlink_path`."""
    output_directory = Path(output_dir) if output_dir else varlink_path.parent
    return output_directory / f"{unit_name}{GO_SUFFIX}"


def write_bindings(unit_name: str, source: str, output_path: Path) -> Path:
    """Write generated source, creating the output directory if needed."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(source, encoding="utf8")

    logger.info("Wrote bindings for package '%s' to '%s'.", unit_name, output_path)
    return output_path


def run(args: argparse.Namespace) -> int:
    """Run the generator on the file given on the command line.

    Reading, generating and writing are separate steps, so that each failure is reported with its cause.

    Args:
        args (argparse.Namespace): The arguments that were passed when calling the generator.

    Returns:
        int: The exit code; 1 if the file could not be read, parsed, formatted or written.
    """
    varlink_path = Path(args.file)
    format_source: bool = not getattr(args, "skip_gofmt", False)
    output_dir: str = getattr(args, "output_dir", "")

    try:
        description = varlink_path.read_text(encoding="utf8")
    except OSError as e:
        print(f"Error reading file '{varlink_path}': {e}", file=sys.stderr)
        return 1

    try:
        unit_name, source = generate_template(description, format_source)
    except (VarlinkSyntaxError, GoFormatError) as e:
        print(f"Error parsing file '{varlink_path}': {e}", file=sys.stderr)
        return 1

    output_path = output_path_for(varlink_path, unit_name, output_dir)
    try:
        write_bindings(unit_name, source, output_path)
    except OSError as e:
        print(f"Error writing file '{output_path}': {e}", file=sys.stderr)
        return 1

    return 0
