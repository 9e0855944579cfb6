"""
CommandController - chat/link command tokens → held NES buttons.

Visitors cannot hold a key down over a chat socket, so every accepted token
presses its button(s) for a fixed hold window and the session releases them
once the window lapses. Compound tokens ("right+a") press and release both
buttons together.

Time is passed in by the caller (milliseconds, any monotonic origin), which
keeps the controller free of timers and deterministic under test.
"""

from __future__ import annotations
from typing import Dict, FrozenSet, List, Optional

from owotnes.emulator.emulator_interface import IEmulator
from owotnes.models.enums import LogCategory, NesButton
from owotnes.models.messages import normalize_token
from owotnes.utils.logger import get_logger

log = get_logger().for_category(LogCategory.INPUT)

DEFAULT_HOLD_MS = 500
MAX_COMBO = 2
COMBO_SEPARATOR = "+"

COMMAND_BUTTONS: Dict[str, NesButton] = {
    "up": NesButton.UP,
    "down": NesButton.DOWN,
    "left": NesButton.LEFT,
    "right": NesButton.RIGHT,
    "a": NesButton.A,
    "b": NesButton.B,
    "start": NesButton.START,
    "select": NesButton.SELECT,
}


def token_key(buttons: FrozenSet[NesButton]) -> str:
    """Canonical token for a button set, so "a+right" and "right+a" share one deadline."""
    return COMBO_SEPARATOR.join(sorted(b.name.lower() for b in buttons))


class CommandController:
    """
    Tracks one release deadline per active token.

    Example:
        controller = CommandController(emulator)
        controller.on_command("right+a", now_ms)     # RIGHT and A down
        controller.release_expired(now_ms + 500)     # both up
    """

    def __init__(self, emulator: IEmulator, hold_ms: int = DEFAULT_HOLD_MS):
        self.emulator = emulator
        self.hold_ms = hold_ms
        self._deadlines: Dict[str, float] = {}
        self._buttons: Dict[str, FrozenSet[NesButton]] = {}
        self.accepted = 0
        self.ignored = 0

    @staticmethod
    def parse(token: str) -> Optional[FrozenSet[NesButton]]:
        """
        Resolve a token to the buttons it presses.

        Returns:
            Buttons for "a", "right+a", ... or None for anything unknown
        """
        parts = normalize_token(token).split(COMBO_SEPARATOR)
        if not 1 <= len(parts) <= MAX_COMBO:
            return None
        buttons = []
        for part in parts:
            button = COMMAND_BUTTONS.get(part.strip())
            if button is None:
                return None
            buttons.append(button)
        return frozenset(buttons)

    def on_command(self, token: str, now_ms: float) -> bool:
        """
        Press the token's buttons and (re)arm its deadline.

        Returns:
            True if the token was recognized
        """
        key = normalize_token(token)
        buttons = self.parse(key)
        if buttons is None:
            self.ignored += 1
            log.debug("Ignoring unknown command", token=key[:32])
            return False

        key = token_key(buttons)

        for button in buttons:
            self.emulator.button_down(button)
        self._buttons[key] = buttons
        self._deadlines[key] = now_ms + self.hold_ms
        self.accepted += 1
        log.debug("Command accepted", token=key, release_at=self._deadlines[key])
        return True

    def release_expired(self, now_ms: float) -> List[str]:
        """
        Release every token whose deadline has passed.

        A button shared with a token that is still active stays down.

        Returns:
            Tokens released by this call
        """
        expired = [key for key, deadline in self._deadlines.items() if deadline <= now_ms]
        if not expired:
            return expired

        released_buttons = set()
        for key in expired:
            del self._deadlines[key]
            released_buttons.update(self._buttons.pop(key))

        for button in released_buttons:
            if not self.is_held(button):
                self.emulator.button_up(button)

        return expired

    def release_all(self) -> None:
        """Release every held button and forget all deadlines."""
        held = set()
        for buttons in self._buttons.values():
            held.update(buttons)
        self._deadlines.clear()
        self._buttons.clear()
        for button in held:
            self.emulator.button_up(button)

    def is_held(self, button: NesButton) -> bool:
        return any(button in buttons for buttons in self._buttons.values())

    @property
    def active_tokens(self) -> Dict[str, float]:
        """Active token → release deadline (ms)."""
        return dict(self._deadlines)

    def deadline(self, token: str) -> Optional[float]:
        buttons = self.parse(token)
        if buttons is None:
            return None
        return self._deadlines.get(token_key(buttons))
