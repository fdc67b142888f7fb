# step_workflows/build.py
from __future__ import annotations

from typing import List

from ..dsl import expr, uses
from ..model import Bin, Bindings, BindingsAbi3, BuildContext, Cffi, Platform, Step, UniFfi
from ..settings import PYTHON_VERSION

MATURIN_ACTION = "PyO3/maturin-action@v1"
UPLOAD_ARTIFACT = "actions/upload-artifact@v3"

EMSCRIPTEN_TARGET = "wasm32-unknown-emscripten"
WHEELS = "wheels"
WASM_WHEELS = "wasm-wheels"


def interpreter_args(platform: Platform, ctx: BuildContext) -> List[str]:
    """Which Python interpreters maturin should build for."""
    bridge = ctx.bridge
    if isinstance(bridge, BindingsAbi3):
        # one wheel serves every interpreter
        return []
    if isinstance(bridge, Bin) and not ctx.setup_python:
        return []
    if isinstance(bridge, (Bin, Bindings, Cffi, UniFfi)):
        if platform is Platform.EMSCRIPTEN:
            return ["-i", PYTHON_VERSION]
        return ["--find-interpreter"]
    raise TypeError(f"Unknown bridge: {bridge!r}")


def manifest_args(ctx: BuildContext) -> List[str]:
    manifest = ctx.config.custom_manifest
    if manifest is None:
        return []
    return ["--manifest-path", manifest.as_posix()]


def maturin_args(platform: Platform, ctx: BuildContext) -> List[str]:
    args = interpreter_args(platform, ctx) + manifest_args(ctx)
    if ctx.config.zig and platform is Platform.LINUX:
        args.append("--zig")
    return args


def _args(base: str, extra: List[str]) -> str:
    return " ".join([base, *extra])


def build_wheels(platform: Platform, ctx: BuildContext) -> Step:
    target = EMSCRIPTEN_TARGET if platform is Platform.EMSCRIPTEN else expr("matrix.target")
    params: dict[str, object] = {
        "target": target,
        "args": _args("--release --out dist", maturin_args(platform, ctx)),
    }
    if platform is Platform.LINUX:
        params["manylinux"] = "auto"
    elif platform is Platform.EMSCRIPTEN:
        params["rust-toolchain"] = "nightly"
    return uses(MATURIN_ACTION, params, name="Build wheels")


def artifact_name(platform: Platform) -> str:
    return WASM_WHEELS if platform is Platform.EMSCRIPTEN else WHEELS


def upload_wheels(platform: Platform) -> Step:
    return uses(
        UPLOAD_ARTIFACT,
        {"name": artifact_name(platform), "path": "dist"},
        name="Upload wheels",
    )


def build_sdist(ctx: BuildContext) -> Step:
    return uses(
        MATURIN_ACTION,
        {"command": "sdist", "args": _args("--out dist", manifest_args(ctx))},
        name="Build sdist",
    )


def upload_sdist() -> Step:
    return uses(UPLOAD_ARTIFACT, {"name": WHEELS, "path": "dist"}, name="Upload sdist")
