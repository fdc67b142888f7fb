# dsl.py
from __future__ import annotations

from typing import Dict, List, Optional

from .model import Job, Step


# ---------------------------------------------------------------------
# Step helpers
# ---------------------------------------------------------------------

def sh(
    cmd: str,
    *,
    name: str | None = None,
    shell: str | None = None,
    if_: str | None = None,
) -> Step:
    """Create a `run:` step."""
    return Step(name=name, run=cmd, shell=shell, if_=if_)


def uses(
    action: str,
    with_: Optional[Dict[str, object]] = None,
    *,
    name: str | None = None,
    if_: str | None = None,
    env: Optional[Dict[str, str]] = None,
) -> Step:
    """Create a step running a pinned action; `with_` keeps its insertion order."""
    return Step(name=name, uses=action, if_=if_, env=env or {}, with_=dict(with_ or {}))


def expr(text: str) -> str:
    """Wrap an expression in the `${{ ... }}` interpolation syntax."""
    return "${{ " + text + " }}"


def script(*lines: str) -> str:
    """Join shell lines into a multi-line `run:` block."""
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------
# Builder API
# ---------------------------------------------------------------------

class JobBuilder:
    def __init__(self, name: str, runs_on: str):
        self.name = name
        self.runs_on = runs_on
        self._display_name: str | None = None
        self._if: str | None = None
        self._needs: Optional[list[str]] = None
        self._targets: list[str] = []
        self._steps: list[Step] = []

    def titled(self, display_name: str):
        self._display_name = display_name
        return self

    def when(self, condition: str):
        self._if = condition
        return self

    def depends_on(self, *job_names: str):
        self._needs = (self._needs or []) + list(job_names)
        return self

    def matrix(self, *targets: str):
        self._targets.extend(targets)
        return self

    def step(self, step: Step):
        self._steps.append(step)
        return self

    def steps(self, steps: List[Step]):
        self._steps.extend(steps)
        return self

    def build(self) -> Job:
        if not self._steps:
            raise ValueError(f"Job '{self.name}' has no steps")

        return Job(
            name=self.name,
            runs_on=self.runs_on,
            steps=list(self._steps),
            needs=None if self._needs is None else list(self._needs),
            targets=list(self._targets),
            display_name=self._display_name,
            if_=self._if,
        )


def build(name: str, runs_on: str) -> JobBuilder:
    """Convenience: build('sdist', 'ubuntu-latest').step(...).build()"""
    return JobBuilder(name, runs_on)
