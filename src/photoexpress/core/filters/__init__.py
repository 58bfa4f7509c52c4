"""Colour filtering for preview renders and exports.

The package keeps the maths and the execution strategy apart:
- algorithms: the per-channel response and its lookup tables
- numpy_executor: vectorised application of the tables to a pixel buffer
"""

from __future__ import annotations

from .algorithms import build_channel_luts
from .numpy_executor import apply_transform

__all__ = ["apply_transform", "build_channel_luts"]
