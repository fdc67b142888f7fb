from __future__ import annotations

from pathlib import Path

import pytest

from wheelci.model import ToolInfo

FIXTURES = Path(__file__).parent / "fixtures"


def body(conf: str) -> str:
    """Drop the 5-line header comment (it embeds the tool version and argv)."""
    return "".join(conf.splitlines(keepends=True)[5:])


def fixture_text(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


@pytest.fixture
def tool() -> ToolInfo:
    return ToolInfo(name="wheelci", version="0.1.0", argv=("generate-ci", "github"))
