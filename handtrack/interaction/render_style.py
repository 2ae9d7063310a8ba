"""
Track Render Style

Visual parameters a renderer needs for each hand track. No drawing happens
here; the result is plain data for whichever canvas the host uses.

Opacity:
    entry   = min(1, frames_detected / fade_in_frames)
    opacity = alpha * entry

A new track fades in over its first few matches; a coasting track fades
out through alpha. Tracks at or below ``min_opacity`` are not drawn.
Coasting tracks use the degraded style (smaller glow and icon, dimmer core).
"""

from dataclasses import dataclass

from handtrack.tracking.track import Side, Track

FADE_IN_FRAMES = 4
MIN_OPACITY = 0.05


@dataclass(frozen=True)
class RenderStyle:
    """
    Display parameters for one track.

    Attributes:
        x, y: Draw position
        opacity: Final opacity in [0, 1]
        visible: False when the track should be skipped
        degraded: True while coasting
        glow_radius: Radial glow size
        icon_size: Hand glyph size
        core_intensity: Glow centre brightness
        mirrored: Draw the glyph flipped horizontally (left hands)
    """

    x: float
    y: float
    opacity: float
    visible: bool
    degraded: bool
    glow_radius: float
    icon_size: float
    core_intensity: float
    mirrored: bool


def render_style(
    track: Track,
    fade_in_frames: int = FADE_IN_FRAMES,
    min_opacity: float = MIN_OPACITY,
) -> RenderStyle:
    """
    Compute the render style of a track.

    Args:
        track: Track to draw
        fade_in_frames: Matches needed to reach full entry opacity
        min_opacity: Opacity at or below which nothing is drawn

    Returns:
        RenderStyle
    """
    entry = min(1.0, track.frames_detected / fade_in_frames)
    opacity = track.alpha * entry
    degraded = track.frames_missing > 0

    return RenderStyle(
        x=track.x,
        y=track.y,
        opacity=opacity,
        visible=opacity > min_opacity,
        degraded=degraded,
        glow_radius=50.0 if degraded else 70.0,
        icon_size=60.0 if degraded else 80.0,
        core_intensity=0.4 if degraded else 0.9,
        mirrored=track.side is Side.LEFT,
    )
