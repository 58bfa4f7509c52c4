"""Brightness adjustment core: colour transform, filtering and pipelines."""

from __future__ import annotations

from .capture import CapturedPhoto, CaptureSession
from .color_transform import ColorTransform, clamp_level, compute_transform
from .export import ExportPipeline, ExportResult
from .filters import apply_transform
from .pixel_buffer import PixelBuffer
from .preview import PreviewController
from .session import ExportSnapshot, SessionState

__all__ = [
    "CaptureSession",
    "CapturedPhoto",
    "ColorTransform",
    "ExportPipeline",
    "ExportResult",
    "ExportSnapshot",
    "PixelBuffer",
    "PreviewController",
    "SessionState",
    "apply_transform",
    "clamp_level",
    "compute_transform",
]
