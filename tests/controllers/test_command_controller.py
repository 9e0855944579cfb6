"""
Tests for command tokens → held buttons with timed release.
"""

from conftest import FakeEmulator
from owotnes.controllers.command_controller import CommandController
from owotnes.models.enums import NesButton


def make_controller():
    emulator = FakeEmulator()
    return CommandController(emulator, hold_ms=500), emulator


class TestParse:

    def test_single_and_compound(self):
        assert CommandController.parse("a") == frozenset({NesButton.A})
        assert CommandController.parse("Right+A") == frozenset({NesButton.RIGHT, NesButton.A})

    def test_rejects_unknown_and_long_combos(self):
        assert CommandController.parse("jump") is None
        assert CommandController.parse("up+down+a") is None
        assert CommandController.parse("right+") is None
        assert CommandController.parse("") is None


class TestHoldAndRelease:

    def test_compound_pressed_and_released_together(self):
        controller, emulator = make_controller()
        assert controller.on_command("right+a", 1000) is True
        assert set(emulator.pressed()) == {NesButton.RIGHT, NesButton.A}

        assert controller.release_expired(1499) == []
        assert emulator.released() == []

        assert controller.release_expired(1500) == ["a+right"]
        assert set(emulator.released()) == {NesButton.RIGHT, NesButton.A}

    def test_repeat_resets_single_deadline(self):
        controller, emulator = make_controller()
        controller.on_command("a", 1000)
        controller.on_command("a", 1300)
        assert controller.active_tokens == {"a": 1800}

        controller.release_expired(1500)
        assert emulator.released() == []
        controller.release_expired(1800)
        assert emulator.released() == [NesButton.A]

    def test_compound_order_shares_deadline(self):
        controller, _ = make_controller()
        controller.on_command("right+a", 0)
        controller.on_command("a+right", 200)
        assert controller.deadline("right+a") == 700
        assert len(controller.active_tokens) == 1

    def test_shared_button_stays_down_while_other_token_active(self):
        controller, emulator = make_controller()
        controller.on_command("right+a", 0)
        controller.on_command("a", 300)

        controller.release_expired(500)
        assert emulator.released() == [NesButton.RIGHT]
        assert controller.is_held(NesButton.A)

        controller.release_expired(800)
        assert emulator.released() == [NesButton.RIGHT, NesButton.A]

    def test_unknown_token_is_noop(self):
        controller, emulator = make_controller()
        assert controller.on_command("hello world", 0) is False
        assert emulator.events == []
        assert controller.ignored == 1

    def test_normalizes_case_and_whitespace(self):
        controller, emulator = make_controller()
        assert controller.on_command("  START ", 0) is True
        assert emulator.pressed() == [NesButton.START]

    def test_release_all(self):
        controller, emulator = make_controller()
        controller.on_command("up", 0)
        controller.on_command("b", 0)
        controller.release_all()
        assert set(emulator.released()) == {NesButton.UP, NesButton.B}
        assert controller.active_tokens == {}
