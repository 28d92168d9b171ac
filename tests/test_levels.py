import pytest

from liman.actor_factory import ActorFactory
from liman.components import TransformComponent
from liman.levels import LevelManager
from liman.maths import Vec3f
from liman.resources import ResCache, ResourceError

TRANSFORM = (
    '<TransformComponent><Position x="1" y="2" z="3"/><Rotation x="0" y="0" z="0"/>'
    '<Scale x="1" y="1" z="1"/></TransformComponent>'
)


@pytest.fixture
def setup(tmp_path):
    cache = ResCache(1)
    cache.set_path("Assets", str(tmp_path))
    cache.set_path("Levels", "levels")
    cache.set_path("Entities", "entities")
    (tmp_path / "levels").mkdir()
    (tmp_path / "entities").mkdir()
    manager = LevelManager(cache)
    factory = ActorFactory(manager, cache)
    return tmp_path, manager, factory


def write_level(root, body, name="level.xml"):
    (root / "levels" / name).write_text(f"<World>{body}</World>")


def test_initialize_keeps_levels():
    manager = LevelManager(None)
    manager.initialize(["one.xml", "two.xml"])
    assert manager.levels == ["one.xml", "two.xml"]


def test_load_level_inline_and_resource_actors(setup):
    root, manager, factory = setup
    (root / "entities" / "box.xml").write_text(f"<Actor><Components>{TRANSFORM}</Components></Actor>")
    write_level(root, f'<Actor><Components>{TRANSFORM}</Components></Actor><Actor resource="box.xml"/>')
    manager.load_level("level.xml", factory)
    assert manager.num_actors == 2
    assert manager.actor(1).source == "level.xml"
    assert manager.actor(2).source == "box.xml"
    assert manager.actor(2).component(TransformComponent.name).pos == Vec3f(1.0, 2.0, 3.0)


def test_missing_resource_actor_is_skipped(setup):
    root, manager, factory = setup
    write_level(root, '<Actor resource="missing.xml"/>')
    manager.load_level("level.xml", factory)
    assert manager.num_actors == 0


def test_load_level_missing_file_raises(setup):
    _, manager, factory = setup
    with pytest.raises(ResourceError):
        manager.load_level("nope.xml", factory)


def test_load_level_wrong_root_raises(setup):
    root, manager, factory = setup
    (root / "levels" / "bad.xml").write_text("<Universe/>")
    with pytest.raises(ResourceError):
        manager.load_level("bad.xml", factory)


def test_load_actor_wrong_root_raises(setup):
    root, manager, factory = setup
    (root / "entities" / "bad.xml").write_text("<Thing/>")
    with pytest.raises(ResourceError):
        manager.load_actor("bad.xml", factory)


def test_load_actor_returns_inserted_actor(setup):
    root, manager, factory = setup
    (root / "entities" / "box.xml").write_text(f"<Actor><Components>{TRANSFORM}</Components></Actor>")
    actor = manager.load_actor("box.xml", factory)
    assert manager.actor(actor.id) is actor


def test_destroy_actor_keeps_count(setup):
    root, manager, factory = setup
    write_level(root, f"<Actor><Components>{TRANSFORM}</Components></Actor>")
    manager.load_level("level.xml", factory)
    manager.destroy_actor(1)
    assert manager.actor(1) is None
    assert manager.num_actors == 1


def test_unknown_actor_is_none():
    assert LevelManager(None).actor(42) is None


def test_actors_info(setup, capsys):
    root, manager, factory = setup
    write_level(root, f"<Actor><Components>{TRANSFORM}</Components></Actor>")
    manager.load_level("level.xml", factory)
    capsys.readouterr()
    manager.actors_info()
    out = capsys.readouterr().out
    assert "id: 1" in out
    assert "source: level.xml" in out
    assert "Transform Component" in out