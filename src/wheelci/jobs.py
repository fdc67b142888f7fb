# jobs.py
from __future__ import annotations

from typing import Dict, List, Sequence

from .dag import NeedsGraph
from .dsl import build as job_builder, expr, uses
from .model import BuildContext, Job, Platform
from .step_workflows import build, toolchain
from .steps import assemble_steps

DOWNLOAD_ARTIFACT = "actions/download-artifact@v3"
GH_RELEASE = "softprops/action-gh-release@v1"

RUNNERS: Dict[Platform, str] = {
    Platform.LINUX: "ubuntu-latest",
    Platform.WINDOWS: "windows-latest",
    Platform.MACOS: "macos-latest",
    Platform.EMSCRIPTEN: "ubuntu-latest",
}

TARGETS: Dict[Platform, List[str]] = {
    Platform.LINUX: ["x86_64", "x86", "aarch64", "armv7", "s390x", "ppc64le"],
    Platform.WINDOWS: ["x64", "x86"],
    Platform.MACOS: ["x86_64", "aarch64"],
    Platform.EMSCRIPTEN: [],
}

TAG_REF = "startsWith(github.ref, 'refs/tags/')"


def platform_job(platform: Platform, ctx: BuildContext) -> Job:
    return (
        job_builder(str(platform), RUNNERS[platform])
        .matrix(*TARGETS[platform])
        .steps(assemble_steps(platform, ctx))
        .build()
    )


def sdist_job(ctx: BuildContext) -> Job:
    return (
        job_builder("sdist", "ubuntu-latest")
        .step(toolchain.checkout())
        .step(build.build_sdist(ctx))
        .step(build.upload_sdist())
        .build()
    )


def release_job(needs: Sequence[str], platforms: Sequence[Platform]) -> Job:
    """Publish on tag pushes, once every build job has finished."""
    b = (
        job_builder("release", "ubuntu-latest")
        .titled("Release")
        .when(TAG_REF)
        .depends_on(*needs)
        .step(uses(DOWNLOAD_ARTIFACT, {"name": build.WHEELS}))
        .step(
            uses(
                build.MATURIN_ACTION,
                {"command": "upload", "args": "--skip-existing *"},
                name="Publish to PyPI",
                env={"MATURIN_PYPI_TOKEN": expr("secrets.PYPI_API_TOKEN")},
            )
        )
    )
    if Platform.EMSCRIPTEN in platforms:
        b.step(uses(DOWNLOAD_ARTIFACT, {"name": build.WASM_WHEELS, "path": "wasm"}))
        b.step(
            uses(
                GH_RELEASE,
                {
                    "files": "wasm/*.whl\n",
                    "prerelease": expr("contains(github.ref, 'alpha') || contains(github.ref, 'beta')"),
                },
                name="Upload to GitHub Release",
            )
        )
    return b.build()


def build_jobs(platforms: Sequence[Platform], ctx: BuildContext) -> List[Job]:
    """Platform jobs (canonical order), the sdist job, then the release job."""
    graph = NeedsGraph()
    jobs = [graph.record(platform_job(p, ctx)) for p in platforms]
    if ctx.sdist:
        jobs.append(graph.record(sdist_job(ctx)))
    jobs.append(graph.check(release_job(graph.names, platforms)))
    return jobs
