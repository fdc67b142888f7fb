# model.py
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from .settings import DEFAULT_MANIFEST, STDOUT


# ---------------------------------------------------------------------
# Bridge (how the compiled crate talks to Python)
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class Bindings:
    """pyo3 / rust-cpython bindings built against a minimum Python minor version."""
    name: str
    minor: int


@dataclass(frozen=True)
class BindingsAbi3:
    """Bindings against the stable ABI (abi3)."""
    major: int
    minor: int


@dataclass(frozen=True)
class Bin:
    """A standalone executable, optionally exposing Python bindings."""
    binding: Optional[Bindings] = None


@dataclass(frozen=True)
class Cffi:
    pass


@dataclass(frozen=True)
class UniFfi:
    pass


Bridge = Union[Bin, Bindings, BindingsAbi3, Cffi, UniFfi]


def is_bin(bridge: Bridge) -> bool:
    return isinstance(bridge, Bin)


def needs_python(bridge: Bridge) -> bool:
    """True when building or installing the artifact needs a Python interpreter."""
    if isinstance(bridge, Bin):
        return bridge.binding is not None
    if isinstance(bridge, (Bindings, BindingsAbi3, Cffi, UniFfi)):
        return True
    raise TypeError(f"Unknown bridge: {bridge!r}")


# ---------------------------------------------------------------------
# Platforms / providers
# ---------------------------------------------------------------------

class Provider(str, enum.Enum):
    GITHUB = "github"

    def __str__(self) -> str:
        return self.value


class Platform(str, enum.Enum):
    ALL = "all"
    LINUX = "linux"
    WINDOWS = "windows"
    MACOS = "macos"
    EMSCRIPTEN = "emscripten"

    def __str__(self) -> str:
        return self.value

    @property
    def rank(self) -> int:
        return _PLATFORM_ORDER.index(self)


_PLATFORM_ORDER = [
    Platform.ALL,
    Platform.LINUX,
    Platform.WINDOWS,
    Platform.MACOS,
    Platform.EMSCRIPTEN,
]

DEFAULT_PLATFORMS: Tuple[Platform, ...] = (Platform.LINUX, Platform.WINDOWS, Platform.MACOS)


# ---------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class GenerationConfig:
    """Resolved options for one `generate-ci` run."""
    ci: Provider = Provider.GITHUB
    platforms: Tuple[Platform, ...] = DEFAULT_PLATFORMS
    pytest: bool = False
    zig: bool = False
    manifest_path: Optional[Path] = None
    output: str = STDOUT

    @property
    def custom_manifest(self) -> Optional[Path]:
        """The manifest path, only when it differs from the default `Cargo.toml`."""
        if self.manifest_path is None or Path(self.manifest_path) == Path(DEFAULT_MANIFEST):
            return None
        return Path(self.manifest_path)


@dataclass(frozen=True)
class ToolInfo:
    """Who generated the document and how (rendered into the header comment)."""
    name: str
    version: str
    argv: Tuple[str, ...] = ()

    @property
    def command(self) -> str:
        return " ".join([self.name, *self.argv])


@dataclass(frozen=True)
class BuildContext:
    """Everything step assembly needs for one generation run."""
    project_name: str
    bridge: Bridge
    config: GenerationConfig
    sdist: bool = False

    @property
    def setup_python(self) -> bool:
        return self.config.pytest or needs_python(self.bridge)


# ---------------------------------------------------------------------
# Workflow document
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class Step:
    """A single step inside a workflow job."""
    name: str | None = None
    uses: str | None = None
    run: str | None = None
    shell: str | None = None
    if_: str | None = None
    with_: Dict[str, object] = field(default_factory=dict)
    env: Dict[str, str] = field(default_factory=dict)


@dataclass
class Job:
    """
    A workflow job keyed by `name` under `jobs:`.

    `display_name` is the optional human readable `name:` key.
    `needs` of None means no `needs:` key at all.
    `targets` is the architecture matrix (empty means no `strategy` block).
    """
    name: str
    runs_on: str
    steps: list[Step]
    needs: Optional[list[str]] = None
    targets: list[str] = field(default_factory=list)
    display_name: str | None = None
    if_: str | None = None


@dataclass
class Document:
    header: List[str]
    triggers: Dict[str, object]
    jobs: List[Job]
