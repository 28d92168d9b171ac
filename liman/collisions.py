"""Rectangular collision components and the manager that resolves collisions."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from enum import IntEnum

from liman import log
from liman.actors import Actor, ActorComponent
from liman.components import TransformComponent
from liman.maths import Vec2f
from liman.physics import Movable


class CollisionSide(IntEnum):
    """Side of contact; 12 steps make a half turn."""

    NULL_SIDE = 0
    TOP_RIGHT = 3
    RIGHT = 6
    BOTTOM_RIGHT = 9
    BOTTOM = 12
    BOTTOM_LEFT = 15
    LEFT = 18
    TOP_LEFT = 21
    TOP = 24


_SIDE_NAMES = {
    CollisionSide.TOP_RIGHT: "top right",
    CollisionSide.RIGHT: "right",
    CollisionSide.BOTTOM_RIGHT: "bottom right",
    CollisionSide.BOTTOM: "bottom",
    CollisionSide.BOTTOM_LEFT: "bottom left",
    CollisionSide.LEFT: "left",
    CollisionSide.TOP_LEFT: "top left",
    CollisionSide.TOP: "top",
}


def side_to_string(side) -> str:
    """Human-readable name of a collision side, or "no" for none."""
    return _SIDE_NAMES.get(side, "no")


class Collidable(ActorComponent):
    """Base of components that react to collisions."""

    name = "CollisionComponent"

    def collide(self, paired_actor: Actor, side: CollisionSide) -> Vec2f:
        """Stop the owner's motion and let gravity take over slightly."""
        movable = self.owner.component(Movable.name) if self.owner else None
        if isinstance(movable, Movable):
            movable.velocity = Vec2f()
            movable.add_accel(0.0, Movable.gravity * 0.0001)
        return Vec2f()


def _query_float(node: ET.Element, name: str, current: float) -> float:
    text = node.get(name)
    if text is None:
        return current
    try:
        return float(text)
    except ValueError:
        return current


class Rectangle(Collidable):
    """Axis-aligned rectangle centred on the owner's position."""

    name = "RectangleCollisionComponent"

    def __init__(self) -> None:
        super().__init__()
        self.size = Vec2f()

    def init(self, node: ET.Element) -> None:
        """Read the required Size element."""
        size_node = node.find("Size")
        if size_node is None:
            log.write_log("Rectangular", "size setting failed!")
            raise ValueError(f"{self.name} lacks a Size element")
        self.size = Vec2f(
            _query_float(size_node, "x", self.size.x),
            _query_float(size_node, "y", self.size.y),
        )

    def generate_xml(self) -> ET.Element:
        return ET.Element(self.name)

    def offset_size(self, x, y=None) -> None:
        """Grow the size by ``x`` and ``y``, or by a vector passed as ``x``."""
        if y is None:
            self.size = Vec2f(self.size.x + x.x, self.size.y + x.y)
        else:
            self.size = Vec2f(self.size.x + x, self.size.y + y)


def _bounds(actor: Actor) -> tuple[float, float, float, float]:
    trans = actor.component(TransformComponent.name)
    rect = actor.component(Rectangle.name)
    if not isinstance(trans, TransformComponent) or not isinstance(rect, Rectangle):
        raise ValueError(f"Actor {actor.id} needs transform and rectangle components")
    pos = trans.pos
    half_w = rect.size.x / 2
    half_h = rect.size.y / 2
    return pos.x - half_w, pos.x + half_w, pos.y - half_h, pos.y + half_h


def is_point_inside_actor(point: Vec2f, actor: Actor) -> bool:
    """True if ``point`` lies in the actor's rectangle, borders included."""
    left, right, bottom, top = _bounds(actor)
    return left <= point.x <= right and bottom <= point.y <= top


_TOP_RIGHT = 1
_BOTTOM_RIGHT = 2
_BOTTOM_LEFT = 4
_TOP_LEFT = 8
_ALL_CORNERS = _TOP_RIGHT | _BOTTOM_RIGHT | _BOTTOM_LEFT | _TOP_LEFT

_CORNER_SIDES = {
    _TOP_RIGHT: CollisionSide.TOP_RIGHT,
    _TOP_RIGHT | _BOTTOM_RIGHT: CollisionSide.RIGHT,
    _BOTTOM_RIGHT: CollisionSide.BOTTOM_RIGHT,
    _BOTTOM_LEFT | _BOTTOM_RIGHT: CollisionSide.BOTTOM,
    _BOTTOM_LEFT: CollisionSide.BOTTOM_LEFT,
    _BOTTOM_LEFT | _TOP_LEFT: CollisionSide.LEFT,
    _TOP_LEFT: CollisionSide.TOP_LEFT,
    _TOP_RIGHT | _TOP_LEFT: CollisionSide.TOP,
}


def compare_actors(analyzed: Actor, other: Actor) -> tuple[bool, CollisionSide]:
    """Check which corners of ``analyzed`` lie inside ``other``.

    Returns whether any corner does and the side of contact, which is
    NULL_SIDE when the corners form no single side.
    """
    left, right, bottom, top = _bounds(analyzed)
    corners = {
        _TOP_RIGHT: Vec2f(right, top),
        _TOP_LEFT: Vec2f(left, top),
        _BOTTOM_RIGHT: Vec2f(right, bottom),
        _BOTTOM_LEFT: Vec2f(left, bottom),
    }
    mask = 0
    for bit, point in corners.items():
        if is_point_inside_actor(point, other):
            mask |= bit
    if mask == _ALL_CORNERS:
        print(f"Error: penetration of actor {analyzed.id} into actor {other.id}")
    return mask != 0, _CORNER_SIDES.get(mask, CollisionSide.NULL_SIDE)


def points_to_vector(point1: Vec2f, point2: Vec2f) -> Vec2f:
    """Vector pointing from ``point2`` to ``point1``."""
    return point1 - point2


class CollisionManager:
    """Detects and resolves collisions between rectangle actors."""

    def update_collision(self, level_manager) -> None:
        """Check every pair of actors that both have a rectangle."""
        count = level_manager.num_actors
        for id1 in range(1, count + 1):
            actor1 = level_manager.actor(id1)
            if actor1 is None or actor1.component(Rectangle.name) is None:
                continue
            for id2 in range(id1 + 1, count + 1):
                actor2 = level_manager.actor(id2)
                if actor2 is None or actor2.component(Rectangle.name) is None:
                    continue
                self.check_collision(actor1, actor2)

    def check_collision(self, actor1: Actor, actor2: Actor):
        """Resolve a collision of two actors.

        Returns the sides of contact of both actors, or None without contact.
        """
        detected, side1 = compare_actors(actor1, actor2)
        if not detected:
            return None
        if side1 == CollisionSide.NULL_SIDE:
            print("Error: side not detected.")
        side2 = CollisionSide(side1 - 12 if side1 > 12 else side1 + 12)

        rect1 = actor1.component(Rectangle.name)
        rect2 = actor2.component(Rectangle.name)
        if isinstance(rect1, Rectangle) and isinstance(rect2, Rectangle):
            rect1.collide(actor2, side1)
            rect2.collide(actor1, side2)
        return side1, side2