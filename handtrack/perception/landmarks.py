"""
Perception Boundary

Converts hand-landmark model output into tracker detections.

The landmark model reports, per hand, 21 normalized landmarks and a
handedness label. One anchor landmark per hand (index 9, the middle-finger
MCP joint, which moves least with finger articulation) becomes the hand's
position on the canvas.

Mirroring:
    Selfie-view frames are displayed mirrored, so x is flipped
    (x = (1 - lx) * width) and Left/Right labels are swapped. This is a
    caller-side convention; the tracker itself never mirrors.

Frame gating:
    The render loop runs faster than the camera delivers frames. FrameGate
    lets each distinct frame through once so the tracker never receives two
    ticks of detections derived from one physical frame.
"""

import logging
import math
from typing import Any, List, Optional, Sequence

import numpy as np

from handtrack.tracking.track import Detection, Side

logger = logging.getLogger(__name__)

CANVAS_WIDTH = 1280
CANVAS_HEIGHT = 720
ANCHOR_LANDMARK = 9


def relabel_side(label: Optional[str], mirrored: bool = True) -> Side:
    """
    Map a raw handedness label onto the displayed side.

    A missing or unrecognised label counts as "not Left".

    Args:
        label: Raw handedness category name
        mirrored: Whether the displayed frame is mirrored

    Returns:
        Side as seen on the canvas
    """
    is_left = label is not None and str(label).strip().lower() == "left"
    if mirrored:
        is_left = not is_left
    return Side.LEFT if is_left else Side.RIGHT


def landmarks_to_detections(
    landmark_sets: Sequence[Any],
    handedness: Sequence[Optional[str]] = (),
    width: float = CANVAS_WIDTH,
    height: float = CANVAS_HEIGHT,
    mirrored: bool = True,
    anchor_index: int = ANCHOR_LANDMARK,
) -> List[Detection]:
    """
    Build detections from per-hand landmark arrays.

    Args:
        landmark_sets: One array-like of shape (n_landmarks, >=2) per hand,
            normalized to [0, 1]
        handedness: Raw handedness label per hand (shorter lists allowed)
        width: Canvas width
        height: Canvas height
        mirrored: Flip x and swap handedness for a mirrored display
        anchor_index: Landmark used as the hand position

    Returns:
        Detections in model output order, malformed hands dropped
    """
    detections: List[Detection] = []

    for i, landmarks in enumerate(landmark_sets):
        points = np.asarray(landmarks, dtype=np.float64)
        if points.ndim != 2 or points.shape[0] <= anchor_index or points.shape[1] < 2:
            logger.debug("Dropping hand %d: landmark array shape %s", i, points.shape)
            continue

        lx, ly = float(points[anchor_index, 0]), float(points[anchor_index, 1])
        if not (math.isfinite(lx) and math.isfinite(ly)):
            logger.debug("Dropping hand %d: non-finite anchor (%s, %s)", i, lx, ly)
            continue

        x = (1.0 - lx) * width if mirrored else lx * width
        y = ly * height
        label = handedness[i] if i < len(handedness) else None
        detections.append(Detection(x=x, y=y, side=relabel_side(label, mirrored)))

    return detections


class FrameGate:
    """
    Passes each camera frame to the tracker at most once.

    Example:
        >>> gate = FrameGate()
        >>> gate.accept(0.033)
        True
        >>> gate.accept(0.033)
        False
    """

    def __init__(self) -> None:
        self.last_frame_time: Optional[float] = None

    def accept(self, frame_time: float, ready: bool = True) -> bool:
        """
        Decide whether a frame is new and ready for inference.

        Args:
            frame_time: Presentation timestamp of the current camera frame
            ready: Whether the frame has decoded data available

        Returns:
            True if inference should run on this frame
        """
        if not ready or frame_time == self.last_frame_time:
            return False
        self.last_frame_time = frame_time
        return True

    def reset(self) -> None:
        self.last_frame_time = None
