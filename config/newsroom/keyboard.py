"""
Keyboard guard for rich-text editor forms.

Editor shortcuts such as Ctrl+B or Cmd+I must format text, not submit the
surrounding article form. ``FormSubmissionGuard`` suppresses any key event
carrying a Ctrl or Meta modifier; the dashboard editor template carries the
same rule for the browser via ``data-submit-guard``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable


@dataclass
class KeyEvent:
    key: str = ''
    ctrl_key: bool = False
    meta_key: bool = False
    shift_key: bool = False
    alt_key: bool = False
    default_prevented: bool = field(default=False, init=False)
    propagation_stopped: bool = field(default=False, init=False)

    @property
    def has_command_modifier(self) -> bool:
        return self.ctrl_key or self.meta_key

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


class FormSubmissionGuard:
    """Key handlers for a form wrapping a rich-text editor.

    Each handler returns ``True`` to allow the event through and ``False``
    ("do not submit") after suppressing it.
    """

    def _suppress_shortcut(self, event: KeyEvent) -> bool:
        if event.has_command_modifier:
            event.stop_propagation()
            event.prevent_default()
            return False
        return True

    def handle_key_down(self, event: KeyEvent) -> bool:
        # Ctrl/Cmd+Enter included
        return self._suppress_shortcut(event)

    def handle_key_press(self, event: KeyEvent) -> bool:
        return self._suppress_shortcut(event)

    def form_props(self) -> dict[str, Callable[[KeyEvent], bool]]:
        return {
            'on_key_down': self.handle_key_down,
            'on_key_press': self.handle_key_press,
        }


def guarded_form_attrs() -> dict[str, str]:
    """HTML attributes for a ``<form>`` whose key events are guarded client-side."""
    return {
        'data-submit-guard': 'modifier-keys',
        'data-guard-events': 'keydown keypress',
    }
