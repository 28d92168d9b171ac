import pytest

from liman.input import (
    MAX_BUTTONS,
    MAX_KEYS,
    PRESS,
    RELEASE,
    REPEAT,
    InputManager,
    KeyboardInput,
    MouseInput,
)


def test_keyboard_press_and_release():
    kb = KeyboardInput()
    kb.key_callback(65, PRESS)
    assert kb.is_key_pressed(65) is True
    kb.key_callback(65, RELEASE)
    assert kb.is_key_pressed(65) is False


def test_repeat_counts_as_held():
    kb = KeyboardInput()
    kb.key_callback(10, REPEAT)
    assert kb.is_key_pressed(10) is True


def test_key_typed_only_on_first_update():
    kb = KeyboardInput()
    kb.key_callback(32, PRESS)
    kb.update()
    assert kb.is_key_typed(32) is True
    kb.update()
    assert kb.is_key_typed(32) is False
    assert kb.is_key_pressed(32) is True


@pytest.mark.parametrize("key", [-1, MAX_KEYS, MAX_KEYS + 5])
def test_keyboard_out_of_range(key):
    kb = KeyboardInput()
    kb.key_callback(key, PRESS)
    assert kb.is_key_pressed(key) is False
    assert kb.is_key_typed(key) is False


def test_mouse_click_and_position():
    mouse = MouseInput()
    mouse.button_callback(0, PRESS)
    mouse.update()
    assert mouse.is_button_clicked(0) is True
    assert mouse.is_button_pressed(0) is True
    mouse.update()
    assert mouse.is_button_clicked(0) is False
    mouse.cursor_position_callback(12, 34.5)
    assert mouse.position == (12.0, 34.5)


def test_mouse_out_of_range():
    mouse = MouseInput()
    mouse.button_callback(MAX_BUTTONS, PRESS)
    assert mouse.is_button_pressed(MAX_BUTTONS) is False


def test_manager_ignores_unused_keys():
    kb = KeyboardInput()
    manager = InputManager(kb, MouseInput())
    kb.key_callback(87, PRESS)
    manager.update()
    assert manager.is_key_pressed(87) is False
    manager.set_key(87)
    assert manager.is_key_pressed(87) is True


def test_manager_click_lasts_one_frame():
    kb = KeyboardInput()
    manager = InputManager(kb, MouseInput())
    manager.set_key(49)
    kb.key_callback(49, PRESS)
    manager.update()
    assert manager.is_key_clicked(49) is True
    manager.update()
    assert manager.is_key_clicked(49) is False
    assert manager.is_key_pressed(49) is True


def test_manager_buttons():
    mouse = MouseInput()
    manager = InputManager(KeyboardInput(), mouse)
    mouse.button_callback(1, PRESS)
    manager.update()
    assert manager.is_button_clicked(1) is False
    manager.set_button(1)
    assert manager.is_button_clicked(1) is True
    assert manager.is_button_pressed(1) is True


def test_manager_reset_clears_state():
    kb = KeyboardInput()
    manager = InputManager(kb, MouseInput())
    manager.set_key(5)
    kb.key_callback(5, PRESS)
    manager.update()
    manager.reset_keys()
    assert manager.is_key_pressed(5) is False


def test_manager_out_of_range_queries():
    manager = InputManager()
    manager.set_key(MAX_KEYS)
    manager.set_button(MAX_BUTTONS)
    assert manager.is_key_pressed(MAX_KEYS) is False
    assert manager.is_key_clicked(MAX_KEYS) is False
    assert manager.is_button_pressed(MAX_BUTTONS) is False
    assert manager.is_button_clicked(MAX_BUTTONS) is False