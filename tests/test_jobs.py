from __future__ import annotations

from pathlib import Path

from wheelci.jobs import build_jobs, platform_job, release_job
from wheelci.model import Bin, Bindings, BindingsAbi3, BuildContext, GenerationConfig, Platform
from wheelci.platforms import resolve_platforms

ALL = [Platform.LINUX, Platform.WINDOWS, Platform.MACOS, Platform.EMSCRIPTEN]


def ctx(bridge=Bindings("x", 7), sdist=False, **config) -> BuildContext:
    return BuildContext(project_name="example", bridge=bridge, config=GenerationConfig(**config), sdist=sdist)


def test_runner_images_and_matrices():
    linux = platform_job(Platform.LINUX, ctx())
    assert (linux.name, linux.runs_on) == ("linux", "ubuntu-latest")
    assert linux.targets == ["x86_64", "x86", "aarch64", "armv7", "s390x", "ppc64le"]
    windows = platform_job(Platform.WINDOWS, ctx())
    assert (windows.runs_on, windows.targets) == ("windows-latest", ["x64", "x86"])
    macos = platform_job(Platform.MACOS, ctx())
    assert (macos.runs_on, macos.targets) == ("macos-latest", ["x86_64", "aarch64"])
    emscripten = platform_job(Platform.EMSCRIPTEN, ctx())
    assert (emscripten.runs_on, emscripten.targets) == ("ubuntu-latest", [])
    assert linux.needs is None


def test_scenario_bindings_with_sdist():
    c = ctx(Bindings("x", 7), sdist=True)
    jobs = build_jobs([Platform.LINUX, Platform.WINDOWS, Platform.MACOS], c)
    assert [j.name for j in jobs] == ["linux", "windows", "macos", "sdist", "release"]
    assert jobs[-1].needs == ["linux", "windows", "macos", "sdist"]
    assert not [s for j in jobs for s in j.steps if s.name == "pytest"]


def test_release_needs_follow_emitted_jobs():
    bridge = Bin()
    c = ctx(bridge, sdist=False)
    jobs = build_jobs(resolve_platforms([Platform.EMSCRIPTEN, Platform.MACOS], bridge), c)
    assert [j.name for j in jobs] == ["macos", "release"]
    assert jobs[-1].needs == ["macos"]


def test_binary_without_python_has_no_setup_python():
    jobs = build_jobs([Platform.LINUX, Platform.WINDOWS, Platform.MACOS], ctx(Bin(), sdist=True))
    for job in jobs:
        assert all(s.uses != "actions/setup-python@v4" for s in job.steps)


def test_sdist_job():
    jobs = build_jobs([Platform.LINUX], ctx(sdist=True, manifest_path=Path("py/Cargo.toml")))
    sdist = jobs[1]
    assert sdist.name == "sdist"
    assert [s.uses for s in sdist.steps] == [
        "actions/checkout@v3",
        "PyO3/maturin-action@v1",
        "actions/upload-artifact@v3",
    ]
    assert sdist.steps[1].with_ == {"command": "sdist", "args": "--out dist --manifest-path py/Cargo.toml"}
    assert sdist.steps[2].with_ == {"name": "wheels", "path": "dist"}


def test_release_job_without_emscripten():
    release = release_job(["linux"], [Platform.LINUX])
    assert release.display_name == "Release"
    assert release.if_ == "startsWith(github.ref, 'refs/tags/')"
    assert [s.name for s in release.steps] == [None, "Publish to PyPI"]
    assert release.steps[1].env == {"MATURIN_PYPI_TOKEN": "${{ secrets.PYPI_API_TOKEN }}"}


def test_release_job_with_emscripten():
    jobs = build_jobs(ALL, ctx(BindingsAbi3(3, 7)))
    release = jobs[-1]
    assert release.needs == ["linux", "windows", "macos", "emscripten"]
    assert len(release.steps) == 4
    assert release.steps[2].with_ == {"name": "wasm-wheels", "path": "wasm"}
    assert release.steps[3].uses == "softprops/action-gh-release@v1"
    assert release.steps[3].with_["files"] == "wasm/*.whl\n"
