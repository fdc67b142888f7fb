from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from conftest import body, fixture_text
from wheelci.generator import generate_github
from wheelci.model import Bin, Bindings, BindingsAbi3, GenerationConfig, Platform


@pytest.mark.parametrize(
    "fixture, bridge, sdist, config",
    [
        ("bindings_sdist.yml", Bindings("pyo3", 7), True, GenerationConfig()),
        ("abi3.yml", BindingsAbi3(3, 7), False, GenerationConfig()),
        ("bindings_zig_pytest.yml", Bindings("pyo3", 7), True, GenerationConfig(zig=True, pytest=True)),
        ("bin_sdist.yml", Bin(), True, GenerationConfig()),
        (
            "emscripten_pytest_manifest.yml",
            Bindings("pyo3", 7),
            False,
            GenerationConfig(
                platforms=(Platform.EMSCRIPTEN,),
                pytest=True,
                manifest_path=Path("crates/py/Cargo.toml"),
            ),
        ),
    ],
)
def test_matches_golden(tool, fixture, bridge, sdist, config):
    conf = generate_github("example", bridge, sdist, config, tool)
    assert body(conf) == fixture_text(fixture)


def test_header(tool):
    conf = generate_github("example", Bindings("pyo3", 7), True, GenerationConfig(), tool)
    assert conf.splitlines()[:6] == [
        "# This file is autogenerated by wheelci v0.1.0",
        "# To update, run",
        "#",
        "#    wheelci generate-ci github",
        "#",
        "on:",
    ]


def test_deterministic(tool):
    config = GenerationConfig(platforms=(Platform.ALL,), pytest=True, zig=True)
    first = generate_github("example", Bindings("pyo3", 7), True, config, tool)
    for _ in range(3):
        assert generate_github("example", Bindings("pyo3", 7), True, config, tool) == first


def test_output_is_valid_yaml(tool):
    config = GenerationConfig(platforms=(Platform.ALL,), pytest=True)
    doc = yaml.safe_load(generate_github("example", Bindings("pyo3", 7), True, config, tool))
    # PyYAML (YAML 1.1) reads the `on` key as boolean True
    assert set(doc[True]) == {"push", "pull_request", "workflow_dispatch"}
    assert list(doc["jobs"]) == ["linux", "windows", "macos", "emscripten", "sdist", "release"]
    assert doc["jobs"]["release"]["if"] == "startsWith(github.ref, 'refs/tags/')"
    assert doc["jobs"]["linux"]["steps"][1]["with"]["python-version"] == "3.10"


def test_manifest_path_with_comment_character(tool):
    config = GenerationConfig(platforms=(Platform.LINUX,), manifest_path=Path("crates/py #2/Cargo.toml"))
    doc = yaml.safe_load(generate_github("example", Bindings("pyo3", 7), True, config, tool))
    build, = [s for s in doc["jobs"]["linux"]["steps"] if s.get("name") == "Build wheels"]
    assert build["with"]["args"] == "--release --out dist --find-interpreter --manifest-path crates/py #2/Cargo.toml"
    sdist, = [s for s in doc["jobs"]["sdist"]["steps"] if s.get("name") == "Build sdist"]
    assert sdist["with"]["args"] == "--out dist --manifest-path crates/py #2/Cargo.toml"
