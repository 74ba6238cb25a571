#!/usr/bin/env python3
"""
LEDGE_RUNNER - Terminal Side-Scroller
======================================
Run right, jump between ledges, shoot the walkers, reach the goal.

Controls:
    LEFT/RIGHT or A/D   - Move
    UP, W or SPACE      - Jump
    F                   - Fire
    R                   - Restart (after win or loss)
    Q/ESC               - Quit
"""

import argparse
import logging
import sys
import time

from blessed import Terminal

from .engine import (
    GameRenderer, GRAY_DARK, GRAY_MED,
    NEON_BLUE, NEON_CYAN, NEON_GREEN, NEON_RED, NEON_YELLOW, WHITE
)
from .errors import LedgeRunnerError
from .game import GameState, GameOutcome
from .level import default_level
from .physics import TieBreak
from .player import InputHandler

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

TARGET_FPS = 60
MIN_WIDTH = 80
MIN_HEIGHT = 26

LOSE_MESSAGE = 'YOU LOSE!'
WIN_MESSAGE = 'YOU WIN!'


# =============================================================================
# RENDERING
# =============================================================================

def render_world(game: GameState, renderer: GameRenderer):
    """Draw terrain, finish zone, enemies, bullets and the player."""
    body = game.player_body
    renderer.follow(body.rect.x)

    for plat in game.level.platforms:
        renderer.fill_world_rect(plat, '=', NEON_GREEN)

    renderer.fill_world_rect(game.level.finish, '#', NEON_RED)

    for _, enemy_body, ai in game.enemies():
        if ai.alive:
            renderer.fill_world_rect(enemy_body.rect, 'X', NEON_RED)

    for _, proj in game.bullets():
        if proj.active:
            renderer.fill_world_rect(proj.rect, '-', NEON_BLUE)

    glyph = '>' if game.player_control.facing_right else '<'
    renderer.fill_world_rect(body.rect, glyph, NEON_CYAN)


def render_ui(game: GameState, renderer: GameRenderer, fps: float = 0.0):
    """Render the HUD in the bottom rows."""
    ui_y = renderer.game_height
    width = renderer.width

    renderer.buffer.put_string(0, ui_y, '=' * width, GRAY_DARK)
    renderer.buffer.put_string(2, ui_y, ' LEDGE_RUNNER ', NEON_CYAN)

    alive = sum(1 for _, _, ai in game.enemies() if ai.alive)
    to_goal = max(0.0, game.level.finish.x - game.player_body.rect.right)
    status = f' ENEMIES:{alive}  KILLS:{game.kills}  GOAL:{to_goal:.0f} '
    renderer.buffer.put_string(width - len(status) - 1, ui_y, status, NEON_YELLOW)

    controls = 'ARROWS/AD move  W/SPACE jump  F fire  Q quit'
    renderer.buffer.put_string(2, ui_y + 1, controls, GRAY_MED)
    if fps:
        renderer.buffer.put_string(width - 12, ui_y + 1, f'FPS:{fps:>5.1f}', GRAY_MED)


def render_outcome(game: GameState, renderer: GameRenderer):
    """Overlay the win/lose message once the game has ended."""
    if game.outcome is GameOutcome.LOST:
        text, color = LOSE_MESSAGE, NEON_RED
    elif game.outcome is GameOutcome.WON:
        text, color = WIN_MESSAGE, WHITE
    else:
        return
    mid = renderer.game_height // 2
    renderer.put_centered(mid, text, color)
    renderer.put_centered(mid + 2, 'R to restart  Q to quit', GRAY_MED)


# =============================================================================
# APPLICATION
# =============================================================================

class App:
    """Terminal front-end: input, one tick per frame, render."""

    def __init__(self, term: Terminal, game: GameState):
        self.term = term
        self.game = game
        self.renderer = GameRenderer(term)
        self.input_handler = InputHandler()
        self.running = True
        self.current_fps = 0.0

    def handle_input(self):
        """Drain all pending input from the terminal."""
        key = self.term.inkey(timeout=0)
        while key:
            self.input_handler.process_key(key)
            key = self.term.inkey(timeout=0)

        if self.input_handler.consume_quit():
            self.running = False

        if self.input_handler.consume_restart() and self.game.is_over:
            logger.info('Restarting after %s', self.game.outcome.name)
            self.game.reset()
            self.input_handler.clear()

        # Edge-triggered: one bullet per press, refused once the game ends
        if self.input_handler.consume_fire():
            self.game.fire()

    def update(self):
        """Run one fixed-timestep tick."""
        self.game.tick(self.input_handler.snapshot())
        self.input_handler.update()

    def render(self):
        self.renderer.begin_frame()
        render_world(self.game, self.renderer)
        render_ui(self.game, self.renderer, self.current_fps)
        render_outcome(self.game, self.renderer)
        output = self.renderer.end_frame()
        if output:
            print(output, end='', flush=True)


def run(term: Terminal, game: GameState, fps: int = TARGET_FPS):
    """Fixed-timestep loop: one tick and one render per frame."""
    frame_time = 1.0 / fps

    with term.fullscreen(), term.cbreak(), term.hidden_cursor():
        app = App(term, game)

        fps_timer = 0.0
        fps_frame_count = 0

        # Initial clear (only time we clear the whole screen)
        print(term.home + term.clear, end='', flush=True)

        while app.running:
            start = time.perf_counter()

            app.handle_input()
            app.update()
            app.render()

            # Sleep for remaining frame time
            elapsed = time.perf_counter() - start
            sleep_time = frame_time - elapsed
            if sleep_time > 0.001:
                time.sleep(sleep_time)

            fps_frame_count += 1
            fps_timer += time.perf_counter() - start
            if fps_timer >= 0.5:
                app.current_fps = fps_frame_count / fps_timer
                fps_frame_count = 0
                fps_timer = 0.0

        # Restore terminal
        print(term.normal, end='', flush=True)

    logger.info('Session ended: outcome=%s frame=%d kills=%d shots=%d',
                game.outcome.name, game.frame, game.kills, game.shots_fired)


# =============================================================================
# ENTRY POINT
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Terminal side-scrolling platformer')
    parser.add_argument(
        '--fps', type=int, default=TARGET_FPS,
        help='Frames (and simulation ticks) per second'
    )
    parser.add_argument(
        '--tie-break', choices=[t.value for t in TieBreak], default=TieBreak.LAST.value,
        help='Platform picked when landing on several at once'
    )
    parser.add_argument(
        '--log-file', default=None,
        help='Write log records to this file (the terminal is used for the game)'
    )
    parser.add_argument(
        '--log-level', default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level for --log-file'
    )
    return parser


def configure_logging(log_file, level: str):
    """Send records to a file, or nowhere: stdout belongs to the renderer."""
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=getattr(logging, level),
            format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        )
    else:
        logging.getLogger('ledge_runner').addHandler(logging.NullHandler())


def main(argv=None):
    """Entry point. Sets up terminal and runs the game loop."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    if args.fps <= 0:
        print(f'--fps must be positive, got {args.fps}')
        sys.exit(1)

    term = Terminal()

    if term.width < MIN_WIDTH or term.height < MIN_HEIGHT:
        print(
            f'Terminal too small: {term.width}x{term.height}. '
            f'Minimum: {MIN_WIDTH}x{MIN_HEIGHT}'
        )
        sys.exit(1)

    try:
        game = GameState(default_level(), tie_break=TieBreak(args.tie_break))
    except LedgeRunnerError as exc:
        logger.error('Could not build level: %s', exc)
        print(f'ERROR: {exc}')
        sys.exit(1)

    run(term, game, args.fps)


if __name__ == '__main__':
    main()
