# liman

The core of a small game engine, for the parts of a game that need no window
or graphics card: actors and components described in XML, a resource cache,
settings, keyboard and mouse state, simple physics and rectangle collisions.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `liman.maths`: mutable `Vec2f` and `Vec3f` vectors (`add`, `subtract`,
  `multiply`, `divide`, the arithmetic operators; `Vec2f` also has
  `magnitude`, `normalise`, `distance`, `dot` and `from_vec3`), plus
  `radians_to_degrees` and `degrees_to_radians`.
- `liman.strings`: `wildcard_match(pattern, string)` with `*` and `?`
  (`?` does not match a dot), and `hash_name` / `HashedString`, a
  case-insensitive 32-bit checksum of a name.
- `liman.log`: `init(name)` logs to standard error for an empty name and
  appends to that file otherwise; `write_log(tag, message)` and `destroy()`.
  `LogManager` and `LogFlag` are the pieces behind them.
- `liman.timer`: `Timer` measures milliseconds between `start()` and
  `stop()`; `HighResTimer` reports whole seconds. Both take an optional clock.
- `liman.transform`: 4x4 matrix helpers (`translation_matrix`,
  `rotation_matrix`, `scale_matrix`, `perspective`, `look_at`), a
  `Transform` with a `model()` matrix and a `Camera` with
  `view_projection()`.
- `liman.resources`: `ResCache`, a memory-budgeted cache of `ResHandle`s
  that evicts the least recently used; resource loaders (`ResourceLoader`,
  `XmlResourceLoader`), the abstract `ResourceFile` a cache reads raw bytes
  from, an asset path table (`load_paths`, `set_path`, `get_path`), and
  `load_and_return_root_xml_element`. Failures raise `ResourceError`.
- `liman.settings`: `GameSettings` with defaults (800x600, 60 frames per
  second, a default key layout) that `load(xml_file)` overrides from a
  settings file.
- `liman.mesh`: `OBJModel` reads Wavefront OBJ lines or files and builds an
  `IndexedModel` (computing smooth normals when the file has none); `Mesh`
  holds the vertex arrays as numpy arrays.
- `liman.actors`: `Actor`, the abstract `ActorComponent`,
  `ComponentFactory` and `component_id_from_name`. `Actor.to_xml()`
  describes an actor and its components.
- `liman.components`: `TransformComponent` (position, rotation, scale) and
  `Renderable` (size, texture name, mesh, shader name; without a model file
  it builds a quad around the owner's position).
- `liman.actor_factory`: `ActorFactory` creates actors with increasing ids
  from XML and inserts them into a level; failures raise
  `ActorCreationError`.
- `liman.levels`: `LevelManager` loads a `World` level file whose children
  are inline actors or `resource` references to `Actor` entity files.
- `liman.input`: `KeyboardInput` and `MouseInput` take events through
  `key_callback`, `button_callback` and `cursor_position_callback`;
  `InputManager` samples them once per frame and answers "pressed" and
  "clicked" queries for the keys and buttons marked as used.
- `liman.physics`: the `Movable` component (velocity, acceleration,
  optional gravity) and `PhysicsManager`.
- `liman.collisions`: the `Rectangle` collision component, `CollisionSide`,
  `compare_actors`, `is_point_inside_actor` and `CollisionManager`, which
  stops colliding movables.
- `liman.logic`, `liman.game`: `BaseLogic` and `BaseGameLogic` hold the
  subsystems; `Application` and `Game` run initialisation and the frame loop.

```python
from liman.maths import Vec2f
from liman.strings import wildcard_match

v = Vec2f(3.0, 4.0)
print(v.magnitude())                         # 5.0
print(wildcard_match("*.xml", "level.xml"))  # True
```

## Asset files

The game starts from a paths file:

```xml
<Paths>
    <Path name="Assets" release="Assets/"/>
    <Path name="Settings" release="Settings/"/>
    <Path name="Levels" release="Levels/"/>
    <Path name="Entities" release="Entities/"/>
</Paths>
```

`ResCache.load_paths` reads the `release` attribute unless another
configuration is given; `get_path(kind)` returns the `Assets` directory
followed by the directory of that kind. The game reads `Settings.xml` from
the `Settings` directory, takes the level from its `Levels/Level` element's
`name` attribute, and loads that level from the `Levels` directory.

## Running the game

```
liman [PATHS] [--frames N]
```

This runs `liman.game.main`. `PATHS` defaults to `Resources/Paths.xml`. It
loads the paths, settings and level, prints the actors, and runs frames of
input, collisions and physics at the configured frame rate. With `--frames N`
it stops after N frames; otherwise it runs until interrupted. It exits with
status 1 if initialisation fails.

## What it does not do

There is no window, rendering or sound. Shaders are not compiled and textures
are not decoded: a `Renderable` keeps only the texture's file path and its
mesh arrays. Keyboard and mouse events are not read from any device; the
calling code feeds them through the input callbacks. `ResCache` loads
resources only through a `ResourceFile` subclass the caller provides; the
package ships none.