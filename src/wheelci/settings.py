from __future__ import annotations
import os

TOOL_NAME = "wheelci"
DEFAULT_MANIFEST = "Cargo.toml"
STDOUT = "-"
PYTHON_VERSION = "3.10"
DEBUG = os.environ.get("WHEELCI_DEBUG", "").lower() in ("1", "true", "yes")
