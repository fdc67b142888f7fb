from __future__ import annotations

from typing import List

from .model import BuildContext, Platform, Step
from .step_workflows import build, test, toolchain


def assemble_steps(platform: Platform, ctx: BuildContext) -> List[Step]:
    """
    Ordered steps for one platform job:

    checkout, setup-python (when a Python is needed), emscripten toolchain,
    build, upload and finally the optional pytest steps.
    """
    steps: List[Step] = [toolchain.checkout()]
    if ctx.setup_python:
        steps.append(toolchain.setup_python(platform))
    if platform is Platform.EMSCRIPTEN:
        steps.extend(toolchain.emscripten_toolchain())
    steps.append(build.build_wheels(platform, ctx))
    steps.append(build.upload_wheels(platform))
    steps.extend(test.pytest_steps(platform, ctx))
    return steps
