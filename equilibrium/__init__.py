"""Equilibrium AMM - hub-and-spoke StableSwap engine."""

from equilibrium.engine import AmmEngine

__version__ = "0.1.0"
__all__ = ["AmmEngine", "__version__"]
