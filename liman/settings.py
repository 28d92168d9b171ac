"""Game settings with defaults, loaded from an XML file."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from enum import IntEnum

import numpy as np

from liman import log
from liman.resources import ResourceError


class KeyType(IntEnum):
    UNDEFINED_TYPE = 0
    MOVE_UP = 1
    MOVE_DOWN = 2
    MOVE_LEFT = 3
    MOVE_RIGHT = 4
    JUMP = 5
    CROUCH = 6
    SHOOT = 7
    EXIT = 20
    PAUSE = 20
    MAX_NUM_KEYS = 21


def _default_keys() -> list[str]:
    keys = [""] * KeyType.MAX_NUM_KEYS
    for key, name in (
        (KeyType.MOVE_UP, "W"),
        (KeyType.MOVE_DOWN, "S"),
        (KeyType.MOVE_LEFT, "A"),
        (KeyType.MOVE_RIGHT, "D"),
        (KeyType.JUMP, "Space"),
        (KeyType.CROUCH, "C"),
        (KeyType.EXIT, "Esc"),
    ):
        keys[key] = name
    return keys


@dataclass
class KeyboardSettings:
    keys: list[str] = field(default_factory=_default_keys)


@dataclass
class CameraSettings:
    pos: np.ndarray = field(default_factory=lambda: np.array([0.0, 0.0, 0.0]))
    forward: np.ndarray = field(default_factory=lambda: np.array([0.0, 0.0, -1.0]))
    up: np.ndarray = field(default_factory=lambda: np.array([0.0, 1.0, 0.0]))
    z_far: float = 10000.0
    z_near: float = 0.001
    fov: float = 70.0


@dataclass
class DisplaySettings:
    width: int = 800
    height: int = 600
    is_fullscreened: bool = True
    is_resizable: bool = False
    is_frames_fixed: bool = True
    max_framerate: float = 60.0
    ms_per_frame: float = 1000 / 60.0
    camera: CameraSettings = field(default_factory=CameraSettings)


@dataclass
class SoundSettings:
    music_volume: float = 1.0
    sfx_volume: float = 1.0


_INT_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _atoi(text: str | None) -> int:
    """Leading integer of ``text``, or 0 if there is none."""
    match = _INT_RE.match(text or "")
    return int(match.group(1)) if match else 0


def _stof(text: str | None) -> float:
    """Leading float of ``text``; raises ValueError if there is none."""
    match = _FLOAT_RE.match(text or "")
    if match is None:
        raise ValueError(f"not a number: {text!r}")
    return float(match.group(1))


def _attr(parent: ET.Element, child: str, name: str) -> str | None:
    node = parent.find(child)
    return None if node is None else node.get(name)


def _required(parent: ET.Element, child: str, name: str) -> str:
    value = _attr(parent, child, name)
    if value is None:
        raise ValueError(f"missing {child} attribute {name!r}")
    return value


@dataclass
class GameSettings:
    """All settings of a game, with defaults until :meth:`load` is called."""

    title: str = "New Game"
    keyboard: KeyboardSettings = field(default_factory=KeyboardSettings)
    display: DisplaySettings = field(default_factory=DisplaySettings)
    sound: SoundSettings = field(default_factory=SoundSettings)
    level: str = ""

    def load(self, xml_file) -> None:
        """Override the defaults with values found in ``xml_file``."""
        log.write_log("Info", "Loading settings")
        try:
            root = ET.parse(xml_file).getroot()
        except (OSError, ET.ParseError) as exc:
            log.write_log("File system", f"File {xml_file} was not found")
            raise ResourceError(f"File {xml_file} was not found") from exc

        node = root.find("Display")
        if node is not None:
            self._load_display(node)

        node = root.find("Sound")
        if node is not None and _attr(node, "Volume", "music") is not None:
            self.sound.music_volume = _atoi(node.get("musicVolume")) / 100.0
            self.sound.sfx_volume = _atoi(node.get("sfxVolume")) / 100.0

        node = root.find("Levels")
        if node is not None:
            name = _attr(node, "Level", "name")
            if name is not None:
                self.level = name

    def _load_display(self, node: ET.Element) -> None:
        display = self.display

        title = _attr(node, "Title", "text")
        if title is not None:
            self.title = title

        width = _attr(node, "Size", "width")
        if width is not None:
            display.width = max(_atoi(width), 800)

        height = _attr(node, "Size", "height")
        if height is not None:
            display.height = max(_atoi(height), 600)

        fullscreen = _attr(node, "Mode", "fullscreen")
        if fullscreen is not None:
            display.is_fullscreened = fullscreen == "yes"

        # The resizable flag is stored into the fullscreen setting.
        resizable = _attr(node, "Border", "resizable")
        if resizable is not None:
            display.is_fullscreened = resizable == "yes"

        fixed = _attr(node, "Framerate", "fixed")
        if fixed is not None:
            display.is_frames_fixed = fixed == "yes"

        if not display.is_frames_fixed:
            value = _attr(node, "Framerate", "value")
            if value is not None:
                display.max_framerate = max(_stof(value), 30.0)
                display.ms_per_frame = 1000 / display.max_framerate

        cam_node = node.find("Camera")
        if cam_node is not None:
            camera = display.camera
            camera.z_far = _stof(_required(cam_node, "zFar", "value"))
            camera.z_near = _stof(_required(cam_node, "zNear", "value"))
            camera.fov = _stof(_required(cam_node, "fov", "value"))
            for tag, attr in (("Position", "pos"), ("Forward", "forward"), ("Up", "up")):
                vector = np.array(
                    [_stof(_required(cam_node, tag, axis)) for axis in "xyz"]
                )
                setattr(camera, attr, vector)