from __future__ import annotations

from typing import Iterable, List

from .model import Bridge, Platform, is_bin

CONCRETE = [Platform.LINUX, Platform.WINDOWS, Platform.MACOS, Platform.EMSCRIPTEN]
NATIVE = [Platform.LINUX, Platform.WINDOWS, Platform.MACOS]


def expand(platform: Platform, bridge: Bridge) -> List[Platform]:
    if platform is Platform.ALL:
        return list(NATIVE) if is_bin(bridge) else list(CONCRETE)
    return [platform]


def resolve_platforms(requested: Iterable[Platform], bridge: Bridge) -> List[Platform]:
    """
    Expand `all`, drop duplicates and return platforms in canonical order
    (linux, windows, macos, emscripten).

    Binaries cannot target emscripten, however it was requested.
    """
    resolved = {p for requested_platform in requested for p in expand(Platform(requested_platform), bridge)}
    if is_bin(bridge):
        resolved.discard(Platform.EMSCRIPTEN)
    return sorted(resolved, key=lambda p: p.rank)
