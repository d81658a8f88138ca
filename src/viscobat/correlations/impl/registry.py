from typing import Protocol, Union


class BlendingCorrelation(Protocol):
    """Common interface: viscosity [mm²/s] <-> blending coordinate that mixes linearly by fraction."""

    name: str

    def to_x(self, viscosity: float) -> float: ...

    def from_x(self, x: float) -> float: ...


REGISTRY = {}  # name -> factory() -> BlendingCorrelation


def register(name: str):
    def deco(fn):
        REGISTRY[name] = fn
        return fn
    return deco


def build(name: str) -> BlendingCorrelation:
    if name not in REGISTRY:
        raise KeyError(f"Correlation '{name}' not registered")
    return REGISTRY[name]()


def resolve(correlation: Union[str, BlendingCorrelation]) -> BlendingCorrelation:
    """Accept either a registered name or an already-built correlation object."""
    if isinstance(correlation, str):
        # importing the implementations triggers their registration
        from . import refutas, walther  # noqa: F401

        return build(correlation)
    return correlation
