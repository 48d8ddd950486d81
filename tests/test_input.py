"""Tests for keyboard, joystick and pointer classification."""

import os
import sys

import pygame
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from tenfoot.input.controller import ControllerHandler
from tenfoot.input.key_events import EventKind, KeyEventMapper, hat_direction
from tenfoot.input.navigation import Direction
from tenfoot.input.shortcuts import parse_accelerator, try_parse_accelerator
from tenfoot.input.touch import PointerHandler
from tenfoot.services.activation import Modifiers
from tenfoot.services.scheduler import FrameScheduler


def _key(key, mod=0):
    return pygame.event.Event(pygame.KEYDOWN, key=key, mod=mod)


def _mouse(event_type, button, pos=(10, 10)):
    return pygame.event.Event(event_type, button=button, pos=pos)


# ---------------------------------------------------------------------------
# Shortcuts
# ---------------------------------------------------------------------------


def test_accelerator_matches_exact_modifiers():
    accelerator = parse_accelerator("<Super>Escape")

    assert accelerator.matches(_key(pygame.K_ESCAPE, pygame.KMOD_LGUI))
    assert not accelerator.matches(_key(pygame.K_ESCAPE))
    assert not accelerator.matches(_key(pygame.K_ESCAPE, pygame.KMOD_LGUI | pygame.KMOD_LSHIFT))


def test_accelerator_with_several_modifiers_and_letter():
    accelerator = parse_accelerator("<Control><Alt>h")

    assert accelerator.key == ord("h")
    assert accelerator.matches(_key(ord("h"), pygame.KMOD_RCTRL | pygame.KMOD_LALT))


def test_invalid_accelerators():
    with pytest.raises(ValueError):
        parse_accelerator("<Hyper>x")
    with pytest.raises(ValueError):
        parse_accelerator("<Super>")
    assert try_parse_accelerator("<Control") is None
    assert try_parse_accelerator("") is None


# ---------------------------------------------------------------------------
# Key events
# ---------------------------------------------------------------------------


def test_keyboard_classification():
    mapper = KeyEventMapper()

    assert mapper.classify(_key(pygame.K_ESCAPE)).kind == EventKind.BACK
    assert mapper.classify(_key(pygame.K_BACKSPACE)).kind == EventKind.BACK
    assert mapper.classify(_key(pygame.K_LEFT)).direction == Direction.LEFT
    assert mapper.classify(_key(pygame.K_TAB)).direction == Direction.TAB_FORWARD
    assert (
        mapper.classify(_key(pygame.K_TAB, pygame.KMOD_LSHIFT)).direction
        == Direction.TAB_BACKWARD
    )

    select = mapper.classify(_key(pygame.K_RETURN, pygame.KMOD_LCTRL))
    assert select.kind == EventKind.SELECT
    assert select.modifiers == Modifiers.CONTROL


def test_unrelated_events_are_ignored():
    mapper = KeyEventMapper()

    assert mapper.classify(_key(pygame.K_a)) is None
    assert mapper.classify(pygame.event.Event(pygame.KEYUP, key=pygame.K_ESCAPE, mod=0)) is None


def test_joystick_classification():
    mapper = KeyEventMapper(ControllerHandler({"select": 0, "back": 1}))

    hat = mapper.classify(pygame.event.Event(pygame.JOYHATMOTION, value=(0, -1), joy=0))
    assert hat.kind == EventKind.MOVEMENT
    assert hat.direction == Direction.DOWN

    button = pygame.event.Event(pygame.JOYBUTTONDOWN, button=1, joy=0)
    assert mapper.classify(button).kind == EventKind.BACK

    unmapped = pygame.event.Event(pygame.JOYBUTTONDOWN, button=9, joy=0)
    assert mapper.classify(unmapped) is None


def test_hat_direction_prefers_vertical():
    assert hat_direction((1, 1)) == Direction.UP
    assert hat_direction((-1, 0)) == Direction.LEFT
    assert hat_direction((0, 0)) is None


def test_controller_hat_mapping():
    controller = ControllerHandler({"home": ("hat", 0, 1)})
    event = pygame.event.Event(pygame.JOYHATMOTION, value=(0, 1), joy=0)

    assert controller.get_action_for_event(event) == "home"
    assert "select" in controller.get_unmapped_actions()


# ---------------------------------------------------------------------------
# Pointer
# ---------------------------------------------------------------------------


class FakeClock:
    def __init__(self):
        self.now = 0

    def __call__(self):
        return self.now


def _pointer(mods=0):
    clock = FakeClock()
    scheduler = FrameScheduler(clock)
    menus = []
    handler = PointerHandler(
        scheduler, on_context_menu=menus.append, long_press_ms=800, get_mods=lambda: mods
    )
    return handler, scheduler, clock, menus


def test_click_produces_pointer_activate():
    handler, _, _, menus = _pointer()

    assert handler.handle_event(_mouse(pygame.MOUSEBUTTONDOWN, 1)) is None
    assert handler.long_press_pending
    event = handler.handle_event(_mouse(pygame.MOUSEBUTTONUP, 1))

    assert event.kind == EventKind.POINTER_ACTIVATE
    assert event.position == (10, 10)
    assert event.modifiers == Modifiers.NONE
    assert not handler.long_press_pending
    assert menus == []


def test_middle_click_and_ctrl_click_set_modifiers():
    handler, _, _, _ = _pointer(mods=pygame.KMOD_LCTRL)

    handler.handle_event(_mouse(pygame.MOUSEBUTTONDOWN, 2))
    event = handler.handle_event(_mouse(pygame.MOUSEBUTTONUP, 2))

    assert event.modifiers == Modifiers.MIDDLE_BUTTON | Modifiers.CONTROL
    assert event.modifiers.wants_new_window


def test_long_press_opens_context_menu_once_and_swallows_release():
    handler, scheduler, clock, menus = _pointer()

    handler.handle_event(_mouse(pygame.MOUSEBUTTONDOWN, 1, pos=(5, 6)))
    clock.now = 800
    scheduler.run_frame()
    scheduler.run_frame()

    assert menus == [(5, 6)]
    assert handler.handle_event(_mouse(pygame.MOUSEBUTTONUP, 1, pos=(5, 6))) is None


def test_release_before_long_press_cancels_timer():
    handler, scheduler, clock, menus = _pointer()

    handler.handle_event(_mouse(pygame.MOUSEBUTTONDOWN, 1))
    clock.now = 500
    handler.handle_event(_mouse(pygame.MOUSEBUTTONUP, 1))
    clock.now = 2000
    scheduler.run_frame()

    assert menus == []


def test_second_press_cancels_long_press():
    handler, scheduler, clock, menus = _pointer()

    handler.handle_event(_mouse(pygame.MOUSEBUTTONDOWN, 1))
    handler.handle_event(_mouse(pygame.MOUSEBUTTONDOWN, 2))
    clock.now = 2000
    scheduler.run_frame()

    assert menus == []
    assert handler.handle_event(_mouse(pygame.MOUSEBUTTONUP, 1)) is None


def test_secondary_click_opens_context_menu_immediately():
    handler, _, _, menus = _pointer()

    handler.handle_event(_mouse(pygame.MOUSEBUTTONDOWN, 3, pos=(1, 2)))

    assert menus == [(1, 2)]
