"""
Full Pygame Renderer
====================

Renderer using pygame: road, moving dashed lane markings, rounded vehicles
and a HUD with score, speed and high score.
Supports both display mode (human play) and headless RGB output.
"""

from __future__ import annotations

import math
from typing import Dict, Any, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

import numpy as np

from lane_racer.racer_core.config_loader import GameConfig, get_config
from lane_racer.racer_core.render_solid import dash_segments


def format_speed(speed: float) -> str:
    """Speed rounded half-up to one decimal, for the HUD."""
    return f"{math.floor(speed * 10 + 0.5) / 10:.1f}"


class PygameRenderer:
    """
    Full-featured renderer using pygame.

    Draws only; all state comes from CoreGame.get_render_data().
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameRenderer")

        if config is None:
            config = get_config()

        self._config = config

        if not pygame.get_init():
            pygame.init()

        # Display surface (created on demand)
        self._screen: Optional[pygame.Surface] = None
        self._screen_size: Optional[Tuple[int, int]] = None

        # Fonts
        pygame.font.init()
        self._font = pygame.font.Font(None, 28)
        self._font_large = pygame.font.Font(None, 56)

        display = config.display
        self._bg_color = display.background_color
        self._road_color = display.road_color
        self._stripe_color = display.stripe_color
        self._player_color = display.player_color
        self._obstacle_color = display.obstacle_color
        self._text_color = display.text_color
        self._banner_color = (0, 0, 0, 160)

    def render(
        self,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> np.ndarray:
        """
        Render to RGB array (for agent observation).

        Args:
            render_data: Data from CoreGame.get_render_data().
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        surface = pygame.Surface((width, height))
        self._render_to_surface(surface, render_data)
        array = pygame.surfarray.array3d(surface)
        return np.transpose(array, (1, 0, 2))

    def render_to_screen(self, render_data: Dict[str, Any]) -> pygame.Surface:
        """
        Render to the pygame window, sized to the board.

        Args:
            render_data: Data from CoreGame.get_render_data().

        Returns:
            The window surface (caller flips the display).
        """
        size = (int(render_data["board_width"]), int(render_data["board_height"]))
        if self._screen is None or self._screen_size != size:
            self._screen = pygame.display.set_mode(size, pygame.RESIZABLE)
            self._screen_size = size
            pygame.display.set_caption("Lane Racer")

        self._render_to_surface(self._screen, render_data)
        return self._screen

    def attach_screen(self, screen: pygame.Surface) -> None:
        """Use an existing window surface (e.g. after a fullscreen toggle)."""
        self._screen = screen
        self._screen_size = screen.get_size()

    def _render_to_surface(
        self,
        surface: pygame.Surface,
        render_data: Dict[str, Any]
    ) -> None:
        """Render game state to a pygame surface."""
        width, height = surface.get_size()
        sx = width / render_data["board_width"]
        sy = height / render_data["board_height"]

        self._draw_road(surface, render_data, sx, sy)

        for obstacle in render_data["obstacles"]:
            self._draw_vehicle(surface, obstacle, sx, sy, self._obstacle_color)

        self._draw_vehicle(surface, render_data["player"], sx, sy, self._player_color)

        self._draw_hud(surface, render_data)

        if not render_data["running"]:
            self._draw_game_over(surface, render_data)

    def _draw_road(
        self,
        surface: pygame.Surface,
        render_data: Dict[str, Any],
        sx: float,
        sy: float
    ) -> None:
        """Background, road surface and dashed lane separators."""
        width, height = surface.get_size()
        display = self._config.display

        surface.fill(self._bg_color)

        margin = int(display.road_margin * sx)
        pygame.draw.rect(surface, self._road_color, pygame.Rect(margin, 0, width - margin * 2, height))

        segments = dash_segments(
            render_data["board_height"],
            display.stripe_dash,
            display.stripe_gap,
            render_data["stripe_offset"] / 2
        )
        for x in render_data["lane_separators"]:
            screen_x = int(x * sx)
            for y0, y1 in segments:
                pygame.draw.line(
                    surface,
                    self._stripe_color,
                    (screen_x, int(y0 * sy)),
                    (screen_x, int(y1 * sy)),
                    2
                )

    def _draw_vehicle(
        self,
        surface: pygame.Surface,
        box: Dict[str, Any],
        sx: float,
        sy: float,
        color: Tuple[int, int, int]
    ) -> None:
        """Draw a centred vehicle as a rounded rectangle."""
        rect = pygame.Rect(
            int((box["x"] - box["w"] / 2) * sx),
            int((box["y"] - box["h"] / 2) * sy),
            int(box["w"] * sx),
            int(box["h"] * sy)
        )
        pygame.draw.rect(surface, color, rect, border_radius=self._config.display.corner_radius)

    def _draw_hud(self, surface: pygame.Surface, render_data: Dict[str, Any]) -> None:
        """Score, speed and high score in the top-left corner."""
        lines = (
            f"Score: {render_data['score']}",
            f"Speed: {format_speed(render_data['speed'])}",
            f"High: {render_data['high_score']}",
        )
        y = 10
        for text in lines:
            text_surface = self._font.render(text, True, self._text_color)
            surface.blit(text_surface, (10, y))
            y += text_surface.get_height() + 4

    def _draw_game_over(self, surface: pygame.Surface, render_data: Dict[str, Any]) -> None:
        """Dim the frozen frame and show a restart hint."""
        width, height = surface.get_size()
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill(self._banner_color)
        surface.blit(overlay, (0, 0))

        title = self._font_large.render("GAME OVER", True, self._text_color)
        surface.blit(title, title.get_rect(center=(width // 2, height // 2 - 30)))

        hint = self._font.render("Press R to restart", True, self._text_color)
        surface.blit(hint, hint.get_rect(center=(width // 2, height // 2 + 20)))

    def close(self) -> None:
        """Clean up pygame resources."""
        if self._screen is not None:
            self._screen = None
