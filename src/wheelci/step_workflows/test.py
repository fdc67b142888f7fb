# step_workflows/test.py
from __future__ import annotations

from typing import List

from ..dsl import expr, script, sh, uses
from ..model import BuildContext, Platform, Step
from ..render import SingleQuoted

RUN_ON_ARCH = "uraimo/run-on-arch-action@v2.5.0"
SETUP_NODE = "actions/setup-node@v3"

HOST_GUARD = "startsWith(matrix.target, 'x86_64')"
# ppc64 never appears in the linux matrix (ppc64le does); kept as-is so
# regenerated workflows stay identical to existing ones.
EMULATED_GUARD = "!startsWith(matrix.target, 'x86') && matrix.target != 'ppc64'"
NATIVE_GUARD = "!startsWith(matrix.target, 'aarch64')"


def chdir_prefix(ctx: BuildContext) -> str:
    """`cd <crate dir> && ` when the crate does not live at the repo root."""
    manifest = ctx.config.custom_manifest
    if manifest is None:
        return ""
    return f"cd {manifest.parent.as_posix()} && "


def install_wheel(ctx: BuildContext, pip: str = "pip") -> str:
    return f"{pip} install {ctx.project_name} --find-links dist --force-reinstall"


def host_pytest(ctx: BuildContext, guard: str) -> Step:
    return sh(
        script(
            "set -e",
            install_wheel(ctx),
            "pip install pytest",
            f"{chdir_prefix(ctx)}pytest",
        ),
        name="pytest",
        shell="bash",
        if_=expr(guard),
    )


def emulated_pytest(ctx: BuildContext) -> Step:
    """Run the test-suite under QEMU for the non-x86 linux targets."""
    return uses(
        RUN_ON_ARCH,
        {
            "arch": expr("matrix.target"),
            "distro": "ubuntu22.04",
            "githubToken": expr("github.token"),
            "install": script(
                "apt-get update",
                "apt-get install -y --no-install-recommends python3 python3-pip",
                "pip3 install -U pip pytest",
            ),
            "run": script(
                "set -e",
                install_wheel(ctx, pip="pip3"),
                f"{chdir_prefix(ctx)}pytest",
            ),
        },
        name="pytest",
        if_=expr(EMULATED_GUARD),
    )


def pyodide_pytest(ctx: BuildContext) -> List[Step]:
    return [
        uses(SETUP_NODE, {"node-version": SingleQuoted("18")}),
        sh(
            script(
                "set -e",
                "pyodide venv .venv",
                "source .venv/bin/activate",
                install_wheel(ctx),
                "pip install pytest",
                f"{chdir_prefix(ctx)}python -m pytest",
            ),
            name="pytest",
        ),
    ]


def pytest_steps(platform: Platform, ctx: BuildContext) -> List[Step]:
    """Test steps for one platform job; empty unless pytest is enabled."""
    if not ctx.config.pytest:
        return []
    if platform is Platform.LINUX:
        return [host_pytest(ctx, HOST_GUARD), emulated_pytest(ctx)]
    if platform is Platform.EMSCRIPTEN:
        return pyodide_pytest(ctx)
    if platform in (Platform.WINDOWS, Platform.MACOS):
        return [host_pytest(ctx, NATIVE_GUARD)]
    raise ValueError(f"Unknown platform: {platform!r}")
