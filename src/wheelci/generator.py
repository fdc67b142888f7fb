# generator.py
from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, List

from .jobs import build_jobs
from .metadata import resolve_project
from .model import Bridge, BuildContext, Document, GenerationConfig, Provider, ToolInfo
from .platforms import resolve_platforms
from .render import SingleQuoted, render_document
from .settings import STDOUT
from .ui.console import Console


def header(tool: ToolInfo) -> List[str]:
    return [
        f"This file is autogenerated by {tool.name} v{tool.version}",
        "To update, run",
        "",
        f"   {tool.command}",
        "",
    ]


def triggers() -> Dict[str, object]:
    return {
        "push": {
            "branches": ["main", "master"],
            "tags": [SingleQuoted("*")],
        },
        "pull_request": None,
        "workflow_dispatch": None,
    }


def generate_github(
    project_name: str,
    bridge: Bridge,
    sdist: bool,
    config: GenerationConfig,
    tool: ToolInfo,
) -> str:
    """
    Render the GitHub Actions workflow.

    Pure function of its arguments: identical inputs give identical text.
    """
    platforms = resolve_platforms(config.platforms, bridge)
    ctx = BuildContext(project_name=project_name, bridge=bridge, config=config, sdist=sdist)
    jobs = build_jobs(platforms, ctx)
    doc = Document(header=header(tool), triggers=triggers(), jobs=jobs)
    return render_document(doc)


def generate(config: GenerationConfig, tool: ToolInfo, console: Console | None = None) -> str:
    """Resolve project metadata, then render the workflow for `config.ci`."""
    console = console or Console()
    project = resolve_project(config.manifest_path)
    console.print_debug(f"manifest: {project.manifest_path}")
    console.print_debug(f"project: {project.name} (sdist: {project.sdist})")
    console.print_debug(f"bridge: {project.bridge!r}")
    platforms = resolve_platforms(config.platforms, project.bridge)
    console.print_debug(f"platforms: {[str(p) for p in platforms]}")
    if config.ci is Provider.GITHUB:
        return generate_github(project.name, project.bridge, project.sdist, config, tool)
    raise ValueError(f"Unknown CI provider: {config.ci!r}")


def write_output(conf: str, output: str | Path) -> None:
    """Write to stdout for `-`, otherwise to the given file."""
    if str(output) == STDOUT:
        sys.stdout.write(conf)
        sys.stdout.flush()
    else:
        Path(output).write_text(conf, encoding="utf-8", newline="")
