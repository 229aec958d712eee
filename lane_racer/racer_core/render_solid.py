"""
Solid Renderer
==============

Fast numpy-based renderer that draws the road, lane stripes and vehicles
as solid-color rectangles. No text; used for image observations.
"""

from __future__ import annotations

from typing import Dict, Any, Optional, List, Tuple
import numpy as np

from lane_racer.racer_core.config_loader import GameConfig, get_config


def dash_segments(
    length: float,
    dash: float,
    gap: float,
    offset: float
) -> List[Tuple[float, float]]:
    """
    Visible (start, end) spans of a dashed line of the given length.

    The dash pattern is shifted forward by offset, so a growing offset
    makes stripes appear to move down the screen.
    """
    period = dash + gap
    if period <= 0:
        return [(0.0, length)]
    y = (offset % period) - period
    segments = []
    while y < length:
        start, end = max(0.0, y), min(length, y + dash)
        if end > start:
            segments.append((start, end))
        y += period
    return segments


class SolidRenderer:
    """
    Renders the game as solid-color rectangles.

    Uses numpy for fast CPU-based rendering without pygame.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        display = config.display
        self._bg_color = np.array(display.background_color, dtype=np.uint8)
        self._road_color = np.array(display.road_color, dtype=np.uint8)
        self._stripe_color = np.array(display.stripe_color, dtype=np.uint8)
        self._player_color = np.array(display.player_color, dtype=np.uint8)
        self._obstacle_color = np.array(display.obstacle_color, dtype=np.uint8)

    def render(
        self,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> np.ndarray:
        """
        Render the game state to an RGB array.

        Args:
            render_data: Data from CoreGame.get_render_data().
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        img = np.zeros((height, width, 3), dtype=np.uint8)
        img[:] = self._bg_color

        sx = width / render_data["board_width"]
        sy = height / render_data["board_height"]

        # Road surface
        margin = int(self._config.display.road_margin * sx)
        img[:, margin:max(margin, width - margin)] = self._road_color

        # Lane stripes
        display = self._config.display
        segments = dash_segments(
            render_data["board_height"],
            display.stripe_dash,
            display.stripe_gap,
            render_data["stripe_offset"] / 2
        )
        for x in render_data["lane_separators"]:
            col = int(x * sx)
            left, right = max(0, col - 1), min(width, col + 1)
            for y0, y1 in segments:
                img[int(y0 * sy):int(y1 * sy), left:right] = self._stripe_color

        for obstacle in render_data["obstacles"]:
            self._fill_box(img, obstacle, sx, sy, self._obstacle_color)

        self._fill_box(img, render_data["player"], sx, sy, self._player_color)

        return img

    def _fill_box(
        self,
        img: np.ndarray,
        box: Dict[str, Any],
        sx: float,
        sy: float,
        color: np.ndarray
    ) -> None:
        """Fill a centred box, clipped to the image."""
        height, width = img.shape[:2]
        x0 = int((box["x"] - box["w"] / 2) * sx)
        y0 = int((box["y"] - box["h"] / 2) * sy)
        x1 = int((box["x"] + box["w"] / 2) * sx)
        y1 = int((box["y"] + box["h"] / 2) * sy)

        x0, x1 = max(0, x0), min(width, x1)
        y0, y1 = max(0, y0), min(height, y1)
        if x1 > x0 and y1 > y0:
            img[y0:y1, x0:x1] = color

    def close(self) -> None:
        """Nothing to release."""
        pass
