# step_workflows/toolchain.py
from __future__ import annotations

from typing import List

from ..dsl import expr, sh, uses
from ..model import Platform, Step
from ..render import SingleQuoted
from ..settings import PYTHON_VERSION

CHECKOUT = "actions/checkout@v3"
SETUP_PYTHON = "actions/setup-python@v4"
SETUP_EMSDK = "mymindstorm/setup-emsdk@v12"


def checkout() -> Step:
    return uses(CHECKOUT)


def setup_python(platform: Platform) -> Step:
    """Install the Python used to build (and test) wheels.

    Windows runners need the interpreter architecture to match the target.
    """
    params: dict[str, object] = {"python-version": SingleQuoted(PYTHON_VERSION)}
    if platform is Platform.WINDOWS:
        params["architecture"] = expr("matrix.target")
    return uses(SETUP_PYTHON, params)


def emscripten_toolchain() -> List[Step]:
    """pyodide-build pins the emscripten version; install exactly that emsdk."""
    return [
        sh("pip install pyodide-build"),
        sh(
            "echo EMSCRIPTEN_VERSION=$(pyodide config get emscripten_version) >> $GITHUB_ENV",
            shell="bash",
        ),
        uses(
            SETUP_EMSDK,
            {
                "version": expr("env.EMSCRIPTEN_VERSION"),
                "actions-cache-folder": "emsdk-cache",
            },
        ),
    ]
