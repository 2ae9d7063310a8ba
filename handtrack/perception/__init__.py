"""
Perception Boundary Package

Mapping of hand-landmark model output to tracker detections.
"""

from .landmarks import (
    ANCHOR_LANDMARK,
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    FrameGate,
    landmarks_to_detections,
    relabel_side,
)

__all__ = [
    "ANCHOR_LANDMARK",
    "CANVAS_HEIGHT",
    "CANVAS_WIDTH",
    "FrameGate",
    "landmarks_to_detections",
    "relabel_side",
]
