"""Workflow document formatter.

The document is built as ordered mappings (job -> step -> parameters) and
dumped with one `yaml.SafeDumper` subclass, so indentation, quoting and key
order are decided in exactly one place.
"""

from __future__ import annotations

import re
import textwrap
from typing import Dict

import yaml

from .model import Document, Job, Step


class SingleQuoted(str):
    """Scalar rendered as 'value'."""


class DoubleQuoted(str):
    """Scalar rendered as "value"."""


class Flow(list):
    """Sequence rendered inline as [a, b, c]."""


class WorkflowDumper(yaml.SafeDumper):
    """Dumps workflows the way they are written by hand.

    Sequences are indented under their key, `None` is an empty value and
    multi-line strings are literal blocks.
    """

    def increase_indent(self, flow=False, indentless=False):
        return super().increase_indent(flow, False)

    def ignore_aliases(self, data):
        return True


def _represent_str(dumper: WorkflowDumper, data: str) -> yaml.Node:
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_str(data)


WorkflowDumper.add_representer(str, _represent_str)
WorkflowDumper.add_representer(
    SingleQuoted, lambda d, data: d.represent_scalar("tag:yaml.org,2002:str", str(data), style="'")
)
WorkflowDumper.add_representer(
    DoubleQuoted, lambda d, data: d.represent_scalar("tag:yaml.org,2002:str", str(data), style='"')
)
WorkflowDumper.add_representer(
    Flow, lambda d, data: d.represent_sequence("tag:yaml.org,2002:seq", list(data), flow_style=True)
)
WorkflowDumper.add_representer(type(None), lambda d, data: d.represent_scalar("tag:yaml.org,2002:null", ""))

# `on` is the trigger key, not a boolean: only true/false still need quoting
_BOOL = "tag:yaml.org,2002:bool"
WorkflowDumper.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _BOOL]
    for first, resolvers in yaml.SafeDumper.yaml_implicit_resolvers.items()
}
WorkflowDumper.add_implicit_resolver(_BOOL, re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"), list("tTfF"))


def dump(data: Dict[str, object]) -> str:
    return yaml.dump(
        data,
        Dumper=WorkflowDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=float("inf"),
    )


# ---------------------------------------------------------------------
# Model -> ordered mappings
# ---------------------------------------------------------------------

def step_to_dict(step: Step) -> Dict[str, object]:
    d: Dict[str, object] = {}
    if step.name is not None:
        d["name"] = step.name
    if step.if_ is not None:
        d["if"] = step.if_
    if step.uses is not None:
        d["uses"] = step.uses
    if step.shell is not None:
        d["shell"] = step.shell
    if step.env:
        d["env"] = dict(step.env)
    if step.with_:
        d["with"] = dict(step.with_)
    if step.run is not None:
        d["run"] = step.run
    return d


def job_to_dict(job: Job) -> Dict[str, object]:
    d: Dict[str, object] = {}
    if job.display_name is not None:
        d["name"] = job.display_name
    d["runs-on"] = job.runs_on
    if job.if_ is not None:
        d["if"] = DoubleQuoted(job.if_)
    if job.needs is not None:
        d["needs"] = Flow(job.needs)
    if job.targets:
        d["strategy"] = {"matrix": {"target": Flow(job.targets)}}
    d["steps"] = [step_to_dict(s) for s in job.steps]
    return d


def render_job(job: Job) -> str:
    """One job section, indented to sit under `jobs:`."""
    return textwrap.indent(dump({job.name: job_to_dict(job)}), "  ")


def render_document(doc: Document) -> str:
    """Header comment, triggers, then job sections separated by blank lines."""
    parts = [f"# {line}".rstrip() + "\n" for line in doc.header]
    parts.append(dump({"on": doc.triggers}))
    parts.append("\njobs:\n")
    parts.append("\n".join(render_job(j) for j in doc.jobs))
    return "".join(parts)
