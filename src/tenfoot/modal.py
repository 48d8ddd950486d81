"""
Modal controller for the Tenfoot overlay.

Owns the overlay's modal session: grabs input while shown, fades in and
out, routes input to the active view and hides itself while applications
are running.
"""

import traceback
from typing import Callable, List, Optional, Tuple

import pygame

from tenfoot.constants import FADE_IN_MS, FADE_OUT_MS, GRAB_FAILED_MESSAGE
from tenfoot.input.key_events import EventKind, KeyEventMapper, SemanticEvent
from tenfoot.input.shortcuts import try_parse_accelerator
from tenfoot.input.touch import PointerHandler
from tenfoot.services.activation import Modifiers
from tenfoot.services.scheduler import FrameScheduler
from tenfoot.state import FadeState, ModalSession, ModalState, ViewState
from tenfoot.ui.focus import Cell
from tenfoot.ui.screens.context_menu import ContextMenu
from tenfoot.ui.screens.view_manager import ViewStateMachine
from tenfoot.utils.logging import log_error

POINTER_EVENTS = (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP)


class ModalController:
    """
    Shows and hides the overlay and dispatches input while it is shown.

    Collaborators:
        grab: acquire() -> token or None, release(token)
        notifier: notify(message)
        feedback: on_focus_moved(), on_item_activated()
    """

    def __init__(
        self,
        views: ViewStateMachine,
        grab,
        notifier,
        scheduler: FrameScheduler,
        mapper: Optional[KeyEventMapper] = None,
        feedback=None,
        exit_shortcut: str = "",
        home_shortcut: str = "",
        fade_in_ms: int = FADE_IN_MS,
        fade_out_ms: int = FADE_OUT_MS,
        disable_animations: bool = False,
        auto_hide_when_running: bool = True,
    ):
        self.views = views
        self.grid = views.grid
        self.state = ModalState.HIDDEN
        self.session: Optional[ModalSession] = None
        self.fade = FadeState()
        self.content_rect = pygame.Rect(0, 0, 0, 0)

        self._grab = grab
        self._notifier = notifier
        self._scheduler = scheduler
        self._mapper = mapper or KeyEventMapper()
        self._feedback = feedback
        self._exit_accelerator = try_parse_accelerator(exit_shortcut) if exit_shortcut else None
        self._home_accelerator = try_parse_accelerator(home_shortcut) if home_shortcut else None
        self._fade_in_ms = fade_in_ms
        self._fade_out_ms = fade_out_ms
        self._disable_animations = disable_animations
        self._auto_hide_when_running = auto_hide_when_running
        self._visibility_listeners: List[Callable[[bool], None]] = []

        self.context_menu = ContextMenu(feedback, on_choice=self.activate_cell)
        self.pointer = PointerHandler(
            scheduler, on_hover=self._on_hover, on_context_menu=self._on_pointer_context
        )
        self.grid.on_context_menu(self.context_menu.open)

    def on_visibility_changed(self, callback: Callable[[bool], None]) -> None:
        """Register a callback told when the overlay appears or disappears."""
        self._visibility_listeners.append(callback)

    @property
    def is_visible(self) -> bool:
        return self.state != ModalState.HIDDEN

    def set_content_rect(self, rect: pygame.Rect, menu_rect: Optional[pygame.Rect] = None) -> None:
        """
        Set the on-screen area of the overlay content.

        Clicks outside it land on the lightbox and dismiss the overlay.
        """
        self.content_rect = pygame.Rect(rect)
        self.context_menu.view.set_area(menu_rect if menu_rect is not None else rect)

    # ---- Show / hide ---- #

    def show(self, skip_animation: bool = False) -> None:
        """Show the overlay and take the modal input grab."""
        if self.state in (ModalState.SHOWING, ModalState.SHOWN):
            return

        if self.session is None:
            self.session = ModalSession()
        self.state = ModalState.SHOWING

        if not self.session.has_grab:
            token = self._grab.acquire()
            if token is None:
                self._notifier.notify(GRAB_FAILED_MESSAGE)
            self.session.grab_token = token

        self.session.is_shown = True
        self.session.is_user_hidden = False

        duration = 0 if skip_animation or self._disable_animations else self._fade_in_ms
        self.fade.start(self._scheduler.now(), duration, 1.0)
        if duration == 0:
            self.state = ModalState.SHOWN

        self.views.focus_anchor()
        print("Tenfoot: interface open")
        self._notify_visibility(True)

    def hide(self, user_initiated: bool = False) -> None:
        """
        Hide the overlay.

        Pending focus retries and long-press timers are cancelled, the grab
        is released and the views return to the grid.

        Args:
            user_initiated: The user dismissed the overlay on purpose; it
                will not come back on its own
        """
        if user_initiated and self.session is not None:
            self.session.is_user_hidden = True
            self.session.is_shown = False

        if self.state in (ModalState.HIDDEN, ModalState.HIDING):
            return
        self.state = ModalState.HIDING

        self.views.cancel_pending()
        self.pointer.cancel()
        self.context_menu.close()
        self._release_grab()
        self.views.reset()

        duration = 0 if self._disable_animations else self._fade_out_ms
        self.fade.start(self._scheduler.now(), duration, 0.0)
        if duration == 0:
            self._finish_hide()

    def exit(self) -> None:
        """Dismiss the overlay and return to the grid."""
        self.hide(user_initiated=True)

    def toggle_settings(self) -> None:
        self.context_menu.close()
        self.views.toggle_settings()

    def update(self, now: int) -> None:
        """Advance the fade animation."""
        if self.state == ModalState.SHOWING:
            if self.fade.update(now):
                self.state = ModalState.SHOWN
        elif self.state == ModalState.HIDING:
            if self.fade.update(now):
                self._finish_hide()

    def _finish_hide(self) -> None:
        self.state = ModalState.HIDDEN
        self.fade.opacity = 0.0
        print("Tenfoot: interface hidden")
        self._notify_visibility(False)

    def _release_grab(self) -> None:
        if self.session is not None and self.session.has_grab:
            self._grab.release(self.session.grab_token)
            self.session.grab_token = None

    def _notify_visibility(self, visible: bool) -> None:
        for listener in list(self._visibility_listeners):
            listener(visible)

    def on_running_count_changed(self, count: int) -> None:
        """
        Hide while applications run; come back when the last one exits.

        The overlay only comes back on its own if the user did not dismiss
        it in the meantime.
        """
        if not self._auto_hide_when_running:
            return
        if count > 0:
            if self.state in (ModalState.SHOWING, ModalState.SHOWN):
                self.hide(user_initiated=False)
        elif (
            self.session is not None
            and not self.session.is_user_hidden
            and self.state in (ModalState.HIDDEN, ModalState.HIDING)
        ):
            self.show(skip_animation=True)

    def destroy(self) -> None:
        """Tear down the session and drop pending work."""
        self.views.cancel_pending()
        self.pointer.cancel()
        self.context_menu.close()
        self._release_grab()
        self.views.reset()
        self.session = None
        self.state = ModalState.HIDDEN

    # ---- Input ---- #

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Route a raw pygame event.

        Returns:
            True if the event was consumed
        """
        if self.state == ModalState.HIDDEN:
            return False

        if event.type == pygame.KEYDOWN:
            if self._exit_accelerator and self._exit_accelerator.matches(event):
                self.exit()
                return True
            if self._home_accelerator and self._home_accelerator.matches(event):
                self.toggle_settings()
                return True

        if event.type == pygame.JOYBUTTONDOWN:
            action = self._mapper.controller.get_action_for_event(event)
            if action == "home":
                self.toggle_settings()
                return True
            if action == "context":
                return self._open_focused_context_menu()

        if event.type in POINTER_EVENTS:
            semantic = self.pointer.handle_event(event)
            if semantic is None:
                return event.type != pygame.MOUSEMOTION
        else:
            semantic = self._mapper.classify(event)
            if semantic is None:
                return False

        return self.dispatch(semantic)

    def dispatch(self, event: SemanticEvent) -> bool:
        """
        Send a semantic event to the context menu or the active view.

        Returns:
            False if nothing handled it
        """
        if self.state in (ModalState.HIDDEN, ModalState.HIDING):
            return False
        if self.context_menu.is_open:
            return self._dispatch_context_menu(event)

        view = self.views.active_view

        if event.kind == EventKind.BACK:
            if not self.views.back():
                self.hide(user_initiated=True)
            return True

        if event.kind == EventKind.MOVEMENT:
            return view.handle_movement(event.direction)

        if event.kind == EventKind.SELECT:
            cell = view.cells.focused
            if cell is None:
                return False
            self.activate_cell(cell, event.modifiers)
            return True

        if event.kind == EventKind.POINTER_ACTIVATE:
            if not self.content_rect.collidepoint(event.position):
                self.hide(user_initiated=True)
                return True
            cell = view.cell_at(event.position)
            if cell is None:
                return False
            view.cells.focus(cell)
            self.activate_cell(cell, event.modifiers)
            return True

        return False

    def _dispatch_context_menu(self, event: SemanticEvent) -> bool:
        menu = self.context_menu.view

        if event.kind == EventKind.BACK:
            self.context_menu.close()
        elif event.kind == EventKind.MOVEMENT:
            menu.handle_movement(event.direction)
        elif event.kind == EventKind.SELECT:
            cell = menu.cells.focused
            if cell is not None:
                self.activate_cell(cell)
        elif event.kind == EventKind.POINTER_ACTIVATE:
            cell = menu.cell_at(event.position)
            if cell is None:
                self.context_menu.close()
            else:
                self.activate_cell(cell)
        return True

    def activate_cell(self, cell: Cell, modifiers: Modifiers = Modifiers.NONE) -> None:
        """
        Run a cell's action.

        A failing action is logged; an overlay-dismissing action still
        dismisses the overlay.
        """
        if self._feedback is not None:
            self._feedback.on_item_activated()
        try:
            cell.activate(modifiers)
        except Exception as e:
            log_error(
                f"Failed to activate {cell.label}", type(e).__name__, traceback.format_exc()
            )
        if cell.action.dismisses_overlay:
            self.hide(user_initiated=False)

    # ---- Pointer callbacks ---- #

    def _open_focused_context_menu(self) -> bool:
        if self.views.state != ViewState.GRID or self.context_menu.is_open:
            return False
        cell = self.grid.cells.focused
        if cell is None:
            return False
        self.grid.open_context_menu(cell)
        return True

    def _on_pointer_context(self, pos: Tuple[int, int]) -> None:
        if self.views.state != ViewState.GRID or self.context_menu.is_open:
            return
        cell = self.grid.cell_at(pos)
        if cell is None:
            return
        self.grid.cells.focus(cell)
        self.grid.open_context_menu(cell)

    def _on_hover(self, pos: Tuple[int, int]) -> None:
        if self.context_menu.is_open:
            view = self.context_menu.view
        else:
            view = self.views.active_view
        cell = view.cell_at(pos)
        if cell is not None and cell is not view.cells.focused:
            view.cells.focus(cell)
