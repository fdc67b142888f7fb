# cli.py
from __future__ import annotations

import sys
from pathlib import Path

import click

from wheelci import __version__
from wheelci.generator import generate, write_output
from wheelci.metadata import MetadataError
from wheelci.model import DEFAULT_PLATFORMS, GenerationConfig, Platform, Provider, ToolInfo
from wheelci.settings import DEBUG, STDOUT, TOOL_NAME
from wheelci.ui.console import Console, get_console, set_console


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=DEBUG,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.version_option(__version__, prog_name=TOOL_NAME)
def cli(debug):
    """wheelci: generate CI workflows for maturin projects."""
    console = Console(debug=debug)
    set_console(console)


@cli.command("generate-ci")
@click.argument("ci", type=click.Choice([p.value for p in Provider]))
@click.option(
    "-m",
    "--manifest-path",
    default=None,
    type=click.Path(path_type=Path),
    help="Path to Cargo.toml",
)
@click.option("-o", "--output", default=STDOUT, show_default=True, help="Output path ('-' for stdout)")
@click.option(
    "--platform",
    "platforms",
    multiple=True,
    type=click.Choice([p.value for p in Platform]),
    default=[p.value for p in DEFAULT_PLATFORMS],
    show_default=True,
    help="Platform support (repeatable)",
)
@click.option("--pytest", is_flag=True, default=False, help="Enable pytest")
@click.option("--zig", is_flag=True, default=False, help="Use zig to do cross compilation")
def generate_ci(ci, manifest_path, output, platforms, pytest, zig):
    """Generate CI configuration."""
    console = get_console()

    config = GenerationConfig(
        ci=Provider(ci),
        platforms=tuple(Platform(p) for p in platforms),
        pytest=pytest,
        zig=zig,
        manifest_path=manifest_path,
        output=output,
    )
    tool = ToolInfo(name=TOOL_NAME, version=__version__, argv=tuple(sys.argv[1:]))

    try:
        conf = generate(config, tool, console)
    except MetadataError as e:
        console.print_error(
            "Failed to read project metadata",
            e.message,
            details=([f"path: {e.path}"] if e.path else []) + e.details,
            suggestion="Point at the crate manifest explicitly:\n  wheelci generate-ci github -m path/to/Cargo.toml",
        )
        sys.exit(1)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)

    try:
        write_output(conf, output)
    except OSError as e:
        console.print_error("Failed to write workflow", f"Could not write to {output}", details=[str(e)])
        sys.exit(1)

    if output != STDOUT:
        console.print_written(output)


if __name__ == "__main__":
    cli()
