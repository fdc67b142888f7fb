# dag.py
from __future__ import annotations

from .model import Job


class NeedsGraph:
    """Names of emitted jobs, in emission order; feeds the release job's `needs`."""

    def __init__(self) -> None:
        self._names: list[str] = []

    def record(self, job: Job) -> Job:
        if job.name in self._names:
            raise ValueError(f"Job '{job.name}' emitted twice")
        self._names.append(job.name)
        return job

    def check(self, release: Job) -> Job:
        """The release job must wait on exactly the emitted jobs, in order."""
        if release.needs != self._names:
            raise ValueError(
                f"Job '{release.name}' needs {release.needs}, expected {self._names}"
            )
        return release

    @property
    def names(self) -> list[str]:
        return list(self._names)

    def __len__(self) -> int:
        return len(self._names)
