"""
Player Module
==============
Player entity creation, the per-tick input snapshot and keyboard
handling.
"""

from dataclasses import dataclass
from typing import Mapping

from .ecs import World
from .components import Body, PlayerControlled, PlayerTag
from .geometry import Rect


PLAYER_WIDTH = 50.0
PLAYER_HEIGHT = 50.0


def create_player(world: World, x: float, y: float) -> int:
    """Create the player entity with all required components."""
    entity_id = world.create_entity()

    # Moves with last tick's velocity, then accelerates
    world.add_component(entity_id, Body(
        rect=Rect(x, y, PLAYER_WIDTH, PLAYER_HEIGHT),
        gravity_first=False,
    ))
    world.add_component(entity_id, PlayerControlled())
    world.add_component(entity_id, PlayerTag())

    return entity_id


# =============================================================================
# INPUT
# =============================================================================

@dataclass(frozen=True)
class InputState:
    """Held movement keys, sampled once at the start of a tick."""
    left: bool = False
    right: bool = False
    jump: bool = False

    @classmethod
    def from_keys(cls, keys: Mapping[str, bool]) -> 'InputState':
        """Build from a logical key -> pressed mapping. Missing keys are up."""
        return cls(
            left=bool(keys.get('left', False)),
            right=bool(keys.get('right', False)),
            jump=bool(keys.get('jump', False)),
        )


IDLE_INPUT = InputState()


def apply_player_input(body: Body, ctrl: PlayerControlled, inputs: InputState):
    """
    Move horizontally and start a jump.

    Left and right are applied in that order, so holding both leaves
    the player in place but facing right. Jumping needs the ground
    contact from the previous tick.
    """
    if inputs.left:
        body.rect.x -= ctrl.speed
        ctrl.facing_right = False
    if inputs.right:
        body.rect.x += ctrl.speed
        ctrl.facing_right = True
    if inputs.jump and body.on_ground:
        body.vel_y = ctrl.jump_power


class InputHandler:
    """
    Handles player input with key hold detection.

    Uses frame-based timers to simulate key hold in terminals
    that don't support key-up events.
    """

    MOVE_KEYS = {
        'KEY_LEFT': 'left', 'a': 'left',
        'KEY_RIGHT': 'right', 'd': 'right',
        'KEY_UP': 'jump', 'w': 'jump', ' ': 'jump',
    }

    def __init__(self, hold_duration: int = 12, jump_hold: int = 4):
        self.keys_held: dict = {}  # logical key -> frames remaining
        self.hold_duration = hold_duration
        self.jump_hold = jump_hold

        # Actions triggered this frame (consumed on read)
        self._fire_triggered = False
        self._quit_triggered = False
        self._restart_triggered = False

    def process_key(self, key) -> None:
        """Process a single key press from blessed's inkey()."""
        if key is None or not key:
            return

        key_str = key.lower() if not key.is_sequence else ''

        # Quit
        if key_str == 'q' or key.name == 'KEY_ESCAPE':
            self._quit_triggered = True
            return

        logical = self.MOVE_KEYS.get(key.name) or self.MOVE_KEYS.get(key_str)
        if logical == 'jump':
            self.keys_held['jump'] = self.jump_hold
        elif logical is not None:
            # Cancel the opposite direction so a turn is instant
            opposite = 'right' if logical == 'left' else 'left'
            self.keys_held.pop(opposite, None)
            self.keys_held[logical] = self.hold_duration

        # Fire is edge-triggered: one bullet per key press
        elif key_str == 'f':
            self._fire_triggered = True

        elif key_str == 'r':
            self._restart_triggered = True

    def update(self) -> None:
        """Update key hold timers (call once per frame)."""
        expired = []
        for key, frames in self.keys_held.items():
            self.keys_held[key] = frames - 1
            if self.keys_held[key] <= 0:
                expired.append(key)
        for key in expired:
            del self.keys_held[key]

    def snapshot(self) -> InputState:
        """Current held keys as an immutable snapshot."""
        return InputState.from_keys({k: True for k in self.keys_held})

    def consume_fire(self) -> bool:
        """Check and consume fire trigger."""
        triggered = self._fire_triggered
        self._fire_triggered = False
        return triggered

    def consume_quit(self) -> bool:
        """Check and consume quit trigger."""
        triggered = self._quit_triggered
        self._quit_triggered = False
        return triggered

    def consume_restart(self) -> bool:
        """Check and consume restart trigger."""
        triggered = self._restart_triggered
        self._restart_triggered = False
        return triggered

    def clear(self) -> None:
        """Drop held keys and pending triggers."""
        self.keys_held.clear()
        self._fire_triggered = False
        self._restart_triggered = False
