"""Movable component and the manager that advances movable actors."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET

from liman import log
from liman.actors import ActorComponent
from liman.components import TransformComponent
from liman.maths import Vec2f

_FLOAT_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _stof(text: str | None, what: str) -> float:
    """Leading float of ``text``; raises ValueError if there is none."""
    match = _FLOAT_RE.match(text or "")
    if match is None:
        raise ValueError(f"{what} is not a number: {text!r}")
    return float(match.group(1))


def _fmt(value: float) -> str:
    return f"{value:.8g}"


def _read_pair(node: ET.Element, tag: str) -> Vec2f:
    return Vec2f(_stof(node.get("x"), f"{tag} x"), _stof(node.get("y"), f"{tag} y"))


class Movable(ActorComponent):
    """Velocity and acceleration of an actor, optionally pulled by gravity."""

    name = "MovableComponent"
    gravity = 0.000098

    def __init__(self) -> None:
        super().__init__()
        self.velocity = Vec2f()
        self.accel = Vec2f()
        self.is_static = True
        self.is_falling = False

    def init(self, node: ET.Element) -> None:
        velocity_node = node.find("Velocity")
        if velocity_node is None:
            log.write_log("Actor Factory", "Error: Velocity was not set.\n")
            self.velocity = Vec2f()
        else:
            self.velocity = _read_pair(velocity_node, "Velocity")

        accel_node = node.find("Acceleration")
        if accel_node is None:
            log.write_log("Actor Factory", "Error: Acceleration was not set.\n")
            self.accel = Vec2f()
        else:
            self.accel = _read_pair(accel_node, "Acceleration")

        falling_node = node.find("Falling")
        if falling_node is not None:
            self.is_falling = falling_node.get("value") == "true"

        static_node = node.find("Static")
        if static_node is not None:
            self.is_static = static_node.get("value") == "true"

    def update(self, delta_ms: int) -> None:
        """Integrate velocity and position of the owner over ``delta_ms``."""
        trans = self.owner.component(TransformComponent.name) if self.owner else None
        if not isinstance(trans, TransformComponent):
            raise ValueError("Movable component has no owner with a transform")
        pos = trans.pos

        self.velocity.x += self.accel.x * delta_ms
        pull = self.gravity if self.is_falling else 0.0
        self.velocity.y += (self.accel.y - pull) * delta_ms

        trans.pos = Vec2f(pos.x + self.velocity.x * delta_ms, pos.y + self.velocity.y * delta_ms)

    def info(self) -> None:
        print(self.name)
        print(f"Velocity: {self.velocity.x:g}, {self.velocity.y:g}, ")
        print(f"Acceleration: {self.accel.x:g}, {self.accel.y:g}, ")

    def generate_xml(self) -> ET.Element:
        element = ET.Element(self.name)
        ET.SubElement(element, "Velocity", x=_fmt(self.velocity.x), y=_fmt(self.velocity.y))
        ET.SubElement(element, "Acceleration", x=_fmt(self.accel.x), y=_fmt(self.accel.y))
        ET.SubElement(element, "Falling", value="true" if self.is_falling else "false")
        ET.SubElement(element, "Static", value="true" if self.is_static else "false")
        return element

    def add_velocity(self, x: float, y: float) -> None:
        self.velocity += Vec2f(x, y)

    def add_accel(self, x: float, y: float) -> None:
        self.accel += Vec2f(x, y)


class PhysicsManager:
    """Advances every non-static movable actor of a level."""

    def update_movables(self, level_manager, delta_time: int) -> None:
        """Update movables of actors with ids from 1 below the actor count.

        The actor with the highest id is not visited; missing ids are skipped.
        """
        for actor_id in range(1, level_manager.num_actors):
            actor = level_manager.actor(actor_id)
            if actor is None:
                continue
            movable = actor.component(Movable.name)
            if isinstance(movable, Movable) and not movable.is_static:
                movable.update(int(delta_time))