"""Synthetic trace generator."""

from .sim import DEMO_CAPABILITIES, ISim, Sim

__all__ = ["DEMO_CAPABILITIES", "ISim", "Sim"]
