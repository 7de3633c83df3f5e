from __future__ import annotations

from app.core.errors import UnknownRegimeError
from app.core.regimes.base import Regime, describe_regime
from app.core.regimes.y2025 import CURRENT
from app.core.regimes.y2026 import PROJECTED

_REGISTRY: dict[str, Regime] = {}


def register_regimes(*regimes: Regime) -> None:
    for regime in regimes:
        _REGISTRY[regime.name] = regime


register_regimes(CURRENT, PROJECTED)

SUPPORTED_REGIMES: tuple[str, ...] = tuple(_REGISTRY)


def get_regime(name: str) -> Regime:
    key = name.strip().lower()
    if key in _REGISTRY:
        return _REGISTRY[key]
    for regime in _REGISTRY.values():
        if regime.label == key:
            return regime
    raise UnknownRegimeError(f"No regime registered as '{name}'")


def list_regimes() -> list[Regime]:
    return list(_REGISTRY.values())


__all__ = [
    "CURRENT",
    "PROJECTED",
    "Regime",
    "SUPPORTED_REGIMES",
    "UnknownRegimeError",
    "describe_regime",
    "get_regime",
    "list_regimes",
    "register_regimes",
]
