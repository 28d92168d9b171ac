import xml.etree.ElementTree as ET

import pytest

from liman.actors import Actor
from liman.components import TransformComponent
from liman.levels import LevelManager
from liman.maths import Vec2f, Vec3f
from liman.physics import Movable, PhysicsManager


def _actor_with_movable(actor_id, pos=Vec3f(0.0, 0.0, 5.0)):
    actor = Actor(actor_id, "test")
    trans = TransformComponent()
    trans.pos = pos
    actor.add_component(trans)
    trans.owner = actor
    movable = Movable()
    actor.add_component(movable)
    movable.owner = actor
    return actor, trans, movable


def test_defaults():
    movable = Movable()
    assert movable.is_static is True
    assert movable.is_falling is False
    assert movable.velocity == Vec2f(0.0, 0.0)
    assert movable.component_id() != 0 and Movable.name == "MovableComponent"


def test_init_from_xml():
    node = ET.fromstring(
        '<MovableComponent><Velocity x="1.5" y="-2"/><Acceleration x="0.25f" y="3"/>'
        '<Falling value="true"/><Static value="false"/></MovableComponent>'
    )
    movable = Movable()
    movable.init(node)
    assert movable.velocity == Vec2f(1.5, -2.0)
    assert movable.accel == Vec2f(0.25, 3.0)
    assert movable.is_falling is True
    assert movable.is_static is False


def test_init_missing_nodes_gives_zero():
    movable = Movable()
    movable.init(ET.fromstring("<MovableComponent/>"))
    assert movable.velocity == Vec2f()
    assert movable.accel == Vec2f()
    assert movable.is_static is True


def test_init_bad_number_raises():
    movable = Movable()
    with pytest.raises(ValueError):
        movable.init(ET.fromstring('<MovableComponent><Velocity x="abc" y="1"/></MovableComponent>'))


def test_xml_round_trip():
    movable = Movable()
    movable.velocity = Vec2f(1.25, -4.0)
    movable.accel = Vec2f(0.5, 0.0)
    movable.is_falling = True
    movable.is_static = False
    copy = Movable()
    copy.init(movable.generate_xml())
    assert copy.velocity == movable.velocity
    assert copy.accel == movable.accel
    assert copy.is_falling is True
    assert copy.is_static is False


def test_update_moves_owner_and_keeps_z():
    _, trans, movable = _actor_with_movable(1)
    movable.velocity = Vec2f(1.0, 0.0)
    movable.update(10)
    assert trans.pos == Vec3f(10.0, 0.0, 5.0)


def test_update_applies_acceleration():
    _, trans, movable = _actor_with_movable(1)
    movable.accel = Vec2f(2.0, 0.0)
    movable.update(1)
    assert movable.velocity.x == pytest.approx(2.0)
    assert trans.pos.x == pytest.approx(2.0)


def test_falling_pulls_down():
    _, trans, movable = _actor_with_movable(1)
    movable.is_falling = True
    movable.update(10)
    assert movable.velocity.y == pytest.approx(-Movable.gravity * 10)
    assert trans.pos.y < 0


def test_update_without_owner_raises():
    with pytest.raises(ValueError):
        Movable().update(1)


def test_add_velocity_and_accel():
    movable = Movable()
    movable.add_velocity(1.0, 2.0)
    movable.add_velocity(1.0, 2.0)
    movable.add_accel(0.5, -0.5)
    assert movable.velocity == Vec2f(2.0, 4.0)
    assert movable.accel == Vec2f(0.5, -0.5)


def test_info_output(capsys):
    movable = Movable()
    movable.velocity = Vec2f(1.0, 2.0)
    movable.info()
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "MovableComponent"
    assert out[1] == "Velocity: 1, 2, "


def test_physics_manager_skips_static_and_last_actor():
    lm = LevelManager(None)
    a1, t1, m1 = _actor_with_movable(1)
    a2, t2, m2 = _actor_with_movable(2)
    a3, t3, m3 = _actor_with_movable(3)
    for actor in (a1, a2, a3):
        lm.insert_actor(actor)
    m1.is_static = False
    m1.velocity = Vec2f(1.0, 0.0)
    m2.velocity = Vec2f(1.0, 0.0)
    m3.is_static = False
    m3.velocity = Vec2f(1.0, 0.0)
    PhysicsManager().update_movables(lm, 10)
    assert t1.pos.x == pytest.approx(10.0)
    assert t2.pos.x == 0.0
    assert t3.pos.x == 0.0