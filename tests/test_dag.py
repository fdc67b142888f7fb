from __future__ import annotations

import pytest

from wheelci.dag import NeedsGraph
from wheelci.dsl import build, sh

CHECK = sh("true")


def job(name, *needs):
    b = build(name, "ubuntu-latest").step(CHECK)
    if needs:
        b.depends_on(*needs)
    return b.build()


def test_needs_graph_keeps_emission_order():
    graph = NeedsGraph()
    for name in ("linux", "windows", "macos", "sdist"):
        graph.record(job(name))
    assert graph.names == ["linux", "windows", "macos", "sdist"]
    assert len(graph) == 4


def test_needs_graph_rejects_duplicates():
    graph = NeedsGraph()
    graph.record(job("linux"))
    with pytest.raises(ValueError, match="emitted twice"):
        graph.record(job("linux"))


def test_release_needs_match_emitted_jobs():
    graph = NeedsGraph()
    graph.record(job("linux"))
    graph.record(job("sdist"))
    release = job("release", "linux", "sdist")
    assert graph.check(release) is release


@pytest.mark.parametrize(
    "needs",
    [("linux",), ("sdist", "linux"), ("linux", "sdist", "macos")],
)
def test_release_needs_mismatch(needs):
    graph = NeedsGraph()
    graph.record(job("linux"))
    graph.record(job("sdist"))
    with pytest.raises(ValueError, match="expected \\['linux', 'sdist'\\]"):
        graph.check(job("release", *needs))


def test_release_without_emitted_jobs():
    graph = NeedsGraph()
    release = build("release", "ubuntu-latest").depends_on().step(CHECK).build()
    assert graph.check(release).needs == []


def test_job_builder_requires_steps():
    with pytest.raises(ValueError, match="has no steps"):
        build("empty", "ubuntu-latest").build()
