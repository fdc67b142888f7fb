from .generator import generate, generate_github
from .model import (
    Bin,
    Bindings,
    BindingsAbi3,
    Cffi,
    GenerationConfig,
    Platform,
    Provider,
    ToolInfo,
    UniFfi,
)

__version__ = "0.1.0"

__all__ = [
    "generate",
    "generate_github",
    "Bin",
    "Bindings",
    "BindingsAbi3",
    "Cffi",
    "UniFfi",
    "GenerationConfig",
    "Platform",
    "Provider",
    "ToolInfo",
]
