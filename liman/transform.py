"""Model transforms, camera and the 4x4 matrix helpers behind them."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


def _vec3(values) -> np.ndarray:
    return np.asarray(values, dtype=float).reshape(3)


def _normalize(v: np.ndarray) -> np.ndarray:
    return v / np.linalg.norm(v)


def translation_matrix(offset) -> np.ndarray:
    """4x4 matrix translating by ``offset``."""
    m = np.identity(4)
    m[:3, 3] = _vec3(offset)
    return m


def rotation_matrix(angle: float, axis) -> np.ndarray:
    """4x4 right-handed rotation by ``angle`` radians about ``axis``."""
    a = _normalize(_vec3(axis))
    c, s = np.cos(angle), np.sin(angle)
    cross = np.array([[0.0, -a[2], a[1]], [a[2], 0.0, -a[0]], [-a[1], a[0], 0.0]])
    m = np.identity(4)
    m[:3, :3] = c * np.identity(3) + (1 - c) * np.outer(a, a) + s * cross
    return m


def scale_matrix(factors) -> np.ndarray:
    """4x4 matrix scaling by ``factors`` along each axis."""
    return np.diag([*_vec3(factors), 1.0])


def perspective(fov: float, aspect: float, z_near: float, z_far: float) -> np.ndarray:
    """Right-handed perspective projection mapping depth to [-1, 1]."""
    tan_half = np.tan(fov / 2)
    m = np.zeros((4, 4))
    m[0, 0] = 1 / (aspect * tan_half)
    m[1, 1] = 1 / tan_half
    m[2, 2] = -(z_far + z_near) / (z_far - z_near)
    m[3, 2] = -1.0
    m[2, 3] = -(2 * z_far * z_near) / (z_far - z_near)
    return m


def look_at(eye, center, up) -> np.ndarray:
    """Right-handed view matrix looking from ``eye`` towards ``center``."""
    eye = _vec3(eye)
    f = _normalize(_vec3(center) - eye)
    s = _normalize(np.cross(f, _vec3(up)))
    u = np.cross(s, f)
    m = np.identity(4)
    m[0, :3] = s
    m[1, :3] = u
    m[2, :3] = -f
    m[0, 3] = -np.dot(s, eye)
    m[1, 3] = -np.dot(u, eye)
    m[2, 3] = np.dot(f, eye)
    return m


@dataclass
class Transform:
    """Position, Euler rotation in radians, and scale of an object."""

    pos: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rot: np.ndarray = field(default_factory=lambda: np.zeros(3))
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))

    def __post_init__(self) -> None:
        self.pos = _vec3(self.pos)
        self.rot = _vec3(self.rot)
        self.scale = _vec3(self.scale)

    def model(self) -> np.ndarray:
        """Model matrix: translate, then rotate Z*Y*X, then scale."""
        rot = (
            rotation_matrix(self.rot[2], (0, 0, 1))
            @ rotation_matrix(self.rot[1], (0, 1, 0))
            @ rotation_matrix(self.rot[0], (1, 0, 0))
        )
        return translation_matrix(self.pos) @ rot @ scale_matrix(self.scale)


class Camera:
    """Perspective camera with a position and orientation."""

    def __init__(self, pos, fov, aspect, z_near, z_far, forward, up) -> None:
        self.projection = perspective(fov, aspect, z_near, z_far)
        self.position = _vec3(pos)
        self.forward = _vec3(forward)
        self.up = _vec3(up)

    def move(self, pos, forward, up) -> None:
        """Place the camera and report its new position on stdout."""
        self.position = _vec3(pos)
        self.forward = _vec3(forward)
        self.up = _vec3(up)
        x, y, z = self.position
        print(f"x: {x:g}y: {y:g}z: {z:g}")

    def view_projection(self) -> np.ndarray:
        return self.projection @ look_at(
            self.position, self.position + self.forward, self.up
        )