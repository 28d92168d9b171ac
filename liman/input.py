"""Keyboard and mouse state, and the per-frame input manager built on them."""

from __future__ import annotations

from liman import log

MAX_KEYS = 1024
MAX_BUTTONS = 32

RELEASE = 0
PRESS = 1
REPEAT = 2


def _in_range(index: int, limit: int) -> bool:
    return 0 <= index < limit


class KeyboardInput:
    """Tracks which keys are held and which went down this frame."""

    def __init__(self) -> None:
        self._keys = [False] * MAX_KEYS
        self._state = [False] * MAX_KEYS
        self._typed = [False] * MAX_KEYS

    def key_callback(self, key: int, action: int) -> None:
        """Record a key event; any action but release means the key is held."""
        if _in_range(key, MAX_KEYS):
            self._keys[key] = action != RELEASE

    def update(self) -> None:
        """Mark keys that went down since the previous update as typed."""
        self._typed = [held and not before for held, before in zip(self._keys, self._state)]
        self._state = list(self._keys)

    def is_key_pressed(self, keycode: int) -> bool:
        return _in_range(keycode, MAX_KEYS) and self._keys[keycode]

    def is_key_typed(self, keycode: int) -> bool:
        return _in_range(keycode, MAX_KEYS) and self._typed[keycode]


class MouseInput:
    """Tracks mouse buttons and the cursor position."""

    def __init__(self) -> None:
        self._buttons = [False] * MAX_BUTTONS
        self._state = [False] * MAX_BUTTONS
        self._clicked = [False] * MAX_BUTTONS
        self.position: tuple[float, float] = (0.0, 0.0)

    def button_callback(self, button: int, action: int) -> None:
        """Record a button event; any action but release means the button is held."""
        if _in_range(button, MAX_BUTTONS):
            self._buttons[button] = action != RELEASE

    def cursor_position_callback(self, x: float, y: float) -> None:
        self.position = (float(x), float(y))

    def update(self) -> None:
        """Mark buttons that went down since the previous update as clicked."""
        self._clicked = [held and not before for held, before in zip(self._buttons, self._state)]
        self._state = list(self._buttons)

    def is_button_pressed(self, button: int) -> bool:
        return _in_range(button, MAX_BUTTONS) and self._buttons[button]

    def is_button_clicked(self, button: int) -> bool:
        return _in_range(button, MAX_BUTTONS) and self._clicked[button]


class InputManager:
    """Samples keyboard and mouse once per frame for the keys and buttons in use."""

    def __init__(self, keyboard: KeyboardInput | None = None, mouse: MouseInput | None = None) -> None:
        self.keyboard = keyboard if keyboard is not None else KeyboardInput()
        self.mouse = mouse if mouse is not None else MouseInput()
        self._keys_used = [False] * MAX_KEYS
        self._keys_pressed = [False] * MAX_KEYS
        self._keys_clicked = [False] * MAX_KEYS
        self._buttons_used = [False] * MAX_BUTTONS
        self._buttons_pressed = [False] * MAX_BUTTONS
        self._buttons_clicked = [False] * MAX_BUTTONS

    def update(self) -> None:
        """Advance the devices by one frame and copy their state."""
        self._handle_keyboard()
        self._handle_mouse()

    def set_key(self, key: int) -> None:
        """Mark a key as used so its state is reported."""
        if not _in_range(key, MAX_KEYS):
            log.write_log("Input manager", "key out of range")
            return
        self._keys_used[key] = True

    def set_button(self, button: int) -> None:
        """Mark a mouse button as used so its state is reported."""
        if not _in_range(button, MAX_BUTTONS):
            log.write_log("Input manager", "button out of range")
            return
        self._buttons_used[button] = True

    def reset_keys(self) -> None:
        self._keys_pressed = [False] * MAX_KEYS
        self._keys_clicked = [False] * MAX_KEYS

    def reset_buttons(self) -> None:
        self._buttons_pressed = [False] * MAX_BUTTONS
        self._buttons_clicked = [False] * MAX_BUTTONS

    def _handle_keyboard(self) -> None:
        self.reset_keys()
        self.keyboard.update()
        self._keys_clicked = [self.keyboard.is_key_typed(k) for k in range(MAX_KEYS)]
        self._keys_pressed = [self.keyboard.is_key_pressed(k) for k in range(MAX_KEYS)]

    def _handle_mouse(self) -> None:
        self.reset_buttons()
        self.mouse.update()
        self._buttons_clicked = [self.mouse.is_button_clicked(b) for b in range(MAX_BUTTONS)]
        self._buttons_pressed = [self.mouse.is_button_pressed(b) for b in range(MAX_BUTTONS)]

    def _query(self, index: int, limit: int, state: list[bool], used: list[bool],
               what: str, verb: str) -> bool:
        if not _in_range(index, limit):
            log.write_log("Input manager", f"{what} out of range")
            return False
        result = state[index] and used[index]
        if result:
            log.write_log("Input manager", f"some {what} was {verb}")
        return result

    def is_key_pressed(self, key: int) -> bool:
        return self._query(key, MAX_KEYS, self._keys_pressed, self._keys_used, "key", "pressed")

    def is_key_clicked(self, key: int) -> bool:
        return self._query(key, MAX_KEYS, self._keys_clicked, self._keys_used, "key", "clicked")

    def is_button_pressed(self, button: int) -> bool:
        return self._query(
            button, MAX_BUTTONS, self._buttons_pressed, self._buttons_used, "button", "pressed"
        )

    def is_button_clicked(self, button: int) -> bool:
        return self._query(
            button, MAX_BUTTONS, self._buttons_clicked, self._buttons_used, "button", "clicked"
        )