"""Project metadata: read Cargo.toml / pyproject.toml and work out the bridge."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .model import Bin, Bindings, BindingsAbi3, Bridge, Cffi, UniFfi
from .settings import DEFAULT_MANIFEST

MINIMUM_PYTHON_MINOR = 7
PYTHON_BINDINGS = ("pyo3", "pyo3-ffi", "rust-cpython")


@dataclass
class MetadataError(Exception):
    """Project metadata could not be read or understood."""
    message: str
    path: Optional[Path] = None
    details: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        lines = [self.message]
        if self.path is not None:
            lines.append(f"path={self.path}")
        lines.extend(self.details)
        return "\n".join(lines)


# -------------------- Schemas --------------------

class CargoPackage(BaseModel):
    model_config = ConfigDict(extra="ignore")
    name: str


class CargoLib(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)
    name: Optional[str] = None
    crate_type: List[str] = Field(default_factory=list, alias="crate-type")


class CargoBin(BaseModel):
    model_config = ConfigDict(extra="ignore")
    name: Optional[str] = None


class CargoManifest(BaseModel):
    model_config = ConfigDict(extra="ignore")
    package: CargoPackage
    lib: Optional[CargoLib] = None
    bin: List[CargoBin] = Field(default_factory=list)
    dependencies: Dict[str, Any] = Field(default_factory=dict)

    def dependency_features(self, name: str) -> Optional[List[str]]:
        """Enabled features of a dependency, or None when it is not a dependency."""
        if name not in self.dependencies:
            return None
        dep = self.dependencies[name]
        if isinstance(dep, dict):
            return [str(f) for f in dep.get("features", [])]
        return []


class ProjectTable(BaseModel):
    model_config = ConfigDict(extra="ignore")
    name: Optional[str] = None


class MaturinTable(BaseModel):
    model_config = ConfigDict(extra="ignore")
    bindings: Optional[str] = None


class PyProject(BaseModel):
    model_config = ConfigDict(extra="ignore")
    project: Optional[ProjectTable] = None
    tool: Dict[str, Any] = Field(default_factory=dict)

    @property
    def maturin(self) -> MaturinTable:
        return MaturinTable.model_validate(self.tool.get("maturin") or {})


@dataclass(frozen=True)
class Project:
    """What the generator needs to know about the crate."""
    name: str
    bridge: Bridge
    sdist: bool
    manifest_path: Path


# -------------------- Loading --------------------

def _load_toml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        raise MetadataError("Manifest not found", path=path) from None
    except OSError as e:
        raise MetadataError("Could not read manifest", path=path, details=[str(e)]) from e
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise MetadataError("Invalid TOML", path=path, details=[str(e)]) from e


def _validate(schema: type[BaseModel], data: Dict[str, Any], path: Path) -> Any:
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        details = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        raise MetadataError("Unexpected manifest layout", path=path, details=details) from e


def load_cargo(path: Path) -> CargoManifest:
    return _validate(CargoManifest, _load_toml(path), path)


def load_pyproject(path: Path) -> Optional[PyProject]:
    if not path.is_file():
        return None
    return _validate(PyProject, _load_toml(path), path)


# -------------------- Bridge detection --------------------

def _has_lib(cargo: CargoManifest, root: Path) -> bool:
    return cargo.lib is not None or (root / "src" / "lib.rs").is_file()


def _has_bin(cargo: CargoManifest, root: Path) -> bool:
    return bool(cargo.bin) or (root / "src" / "main.rs").is_file()


def python_bindings(cargo: CargoManifest, only: Optional[str] = None) -> Optional[Bridge]:
    """pyo3 / rust-cpython bindings declared in `[dependencies]`, abi3 aware."""
    candidates = (only,) if only else PYTHON_BINDINGS
    for name in candidates:
        features = cargo.dependency_features(name)
        if features is None:
            continue
        minors = [
            int(f[len("abi3-py3"):])
            for f in features
            if f.startswith("abi3-py3") and f[len("abi3-py3"):].isdigit()
        ]
        if minors:
            return BindingsAbi3(3, min(minors))
        if "abi3" in features:
            return BindingsAbi3(3, MINIMUM_PYTHON_MINOR)
        return Bindings(name, MINIMUM_PYTHON_MINOR)
    return None


def _bin_binding(bindings: Optional[Bridge]) -> Optional[Bindings]:
    if isinstance(bindings, Bindings):
        return bindings
    if isinstance(bindings, BindingsAbi3):
        return Bindings("pyo3", bindings.minor)
    return None


def find_bridge(cargo: CargoManifest, bindings: Optional[str], root: Path) -> Bridge:
    """
    Work out how the crate is exposed to Python.

    An explicit `[tool.maturin] bindings` wins; otherwise the dependencies
    and targets of the crate decide.
    """
    if bindings == "cffi":
        return Cffi()
    if bindings == "uniffi":
        return UniFfi()
    if bindings == "bin":
        return Bin(_bin_binding(python_bindings(cargo)))
    if bindings in PYTHON_BINDINGS:
        found = python_bindings(cargo, only=bindings)
        if found is None:
            raise MetadataError(
                f"bindings = {bindings!r} requested but {bindings} is not a dependency",
                path=root / DEFAULT_MANIFEST,
            )
        return found
    if bindings is not None:
        raise MetadataError(
            f"Unknown bindings {bindings!r}",
            details=["Expected one of: pyo3, pyo3-ffi, rust-cpython, cffi, uniffi, bin"],
        )

    found = python_bindings(cargo)
    if found is not None:
        if _has_bin(cargo, root) and not _has_lib(cargo, root):
            return Bin(_bin_binding(found))
        return found
    if cargo.dependency_features("uniffi") is not None:
        return UniFfi()
    if cargo.lib is not None and "cdylib" in cargo.lib.crate_type:
        return Cffi()
    if _has_bin(cargo, root):
        return Bin()
    raise MetadataError(
        "Couldn't detect the binding type",
        path=root / DEFAULT_MANIFEST,
        details=["Add pyo3 or another bindings crate, a cdylib lib target, or a binary target"],
    )


def project_name(cargo: CargoManifest, pyproject: Optional[PyProject]) -> str:
    if pyproject is not None and pyproject.project is not None and pyproject.project.name:
        return pyproject.project.name
    if cargo.lib is not None and cargo.lib.name:
        return cargo.lib.name.replace("-", "_")
    return cargo.package.name.replace("-", "_")


def resolve_project(manifest_path: Optional[Path] = None) -> Project:
    """Read the crate manifest (and its sibling pyproject.toml, if any)."""
    path = Path(manifest_path) if manifest_path is not None else Path(DEFAULT_MANIFEST)
    if path.is_dir():
        path = path / DEFAULT_MANIFEST
    root = path.parent
    cargo = load_cargo(path)
    pyproject = load_pyproject(root / "pyproject.toml")
    bindings = pyproject.maturin.bindings if pyproject is not None else None
    return Project(
        name=project_name(cargo, pyproject),
        bridge=find_bridge(cargo, bindings, root),
        sdist=pyproject is not None,
        manifest_path=path,
    )
