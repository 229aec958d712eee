"""
Human Play Mode
================

Play Lane Racer interactively in a pygame window.

Controls:
    - Left / A: Move one lane left
    - Right / D: Move one lane right
    - R: Restart game
    - F / F11: Toggle fullscreen
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--fps FPS] [--high-score-file PATH]
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Dict, Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from lane_racer.racer_core.config_loader import load_config, GameConfig
from lane_racer.racer_core.game import CoreGame
from lane_racer.racer_core.input_control import LaneInput
from lane_racer.racer_core.persistence import JsonHighScoreStore
from lane_racer.racer_core.timing import FrameScheduler, MonotonicClock


class HumanPlayer:
    """
    Human-playable lane racer.

    The pygame main loop is the frame source: each iteration runs the
    scheduler's pending tick, flips the display and waits for the next frame.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        target_fps: Optional[int] = None,
        high_score_file: Optional[str] = None
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._seed = seed
        self._target_fps = target_fps or config.display.fps

        pygame.init()
        self._clock = pygame.time.Clock()

        from lane_racer.racer_core.render_full_pygame import PygameRenderer
        self._renderer = PygameRenderer(config)

        store = JsonHighScoreStore(high_score_file or config.persistence.high_score_path)
        self._scheduler = FrameScheduler()
        self._game = CoreGame(
            config=config,
            seed=seed,
            store=store,
            scheduler=self._scheduler,
            render_callback=self._draw
        )
        self._input = LaneInput(self._game, MonotonicClock())

        self._running = True
        self._announced_game_over = False

    def run(self) -> int:
        """Run the game loop. Returns final score."""
        print("=== Lane Racer ===")
        print("Left/Right or A/D to change lanes")
        print("R to restart, F to toggle fullscreen, ESC to quit")
        print(f"High score: {self._game.high_score}")
        print()

        self._game.restart(seed=self._seed)

        while self._running:
            self._handle_events()
            self._scheduler.run_pending()
            pygame.display.flip()
            self._report_game_over()
            self._clock.tick(self._target_fps)

        self._game.stop_loop()
        self._renderer.close()
        pygame.quit()
        return self._game.score

    def _draw(self, render_data: Dict[str, Any]) -> None:
        self._renderer.render_to_screen(render_data)

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.VIDEORESIZE:
                # Minimised windows report a zero size
                if event.w > 0 and event.h > 0:
                    self._game.resize(event.w, event.h)

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.key in (pygame.K_LEFT, pygame.K_a):
                    self._input.move_left()
                elif event.key in (pygame.K_RIGHT, pygame.K_d):
                    self._input.move_right()
                elif event.key == pygame.K_r:
                    self._restart()
                elif event.key in (pygame.K_f, pygame.K_F11):
                    self._toggle_fullscreen()

    def _restart(self) -> None:
        """Restart the game."""
        self._game.restart()
        self._input.reset()
        self._announced_game_over = False
        print("\n=== Game Restarted ===\n")

    def _toggle_fullscreen(self) -> None:
        """Window chrome only; the simulation is untouched."""
        try:
            pygame.display.toggle_fullscreen()
        except pygame.error as e:
            print(f"Warning: fullscreen toggle failed ({e})")
            return
        screen = pygame.display.get_surface()
        if screen is not None:
            self._renderer.attach_screen(screen)
            self._game.resize(*screen.get_size())

    def _report_game_over(self) -> None:
        result = self._game.last_game_over
        if result is None or self._announced_game_over:
            return
        self._announced_game_over = True
        print(f"\nGAME OVER - Score: {result.final_score}")
        if result.new_record:
            print(f"New high score: {result.high_score}")


def main():
    parser = argparse.ArgumentParser(description="Play Lane Racer interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--fps", type=int, default=None, help="Target FPS (default: from config)")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    parser.add_argument("--high-score-file", type=str, default=None,
                        help="Where to keep the high score (default: from config)")

    args = parser.parse_args()

    try:
        config = load_config(args.config)
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            target_fps=args.fps,
            high_score_file=args.high_score_file
        )
        score = player.run()
        print(f"\nFinal Score: {score}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
