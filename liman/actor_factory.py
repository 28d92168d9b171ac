"""Builds actors and their components from XML descriptions."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from liman import log
from liman.actors import Actor, ActorComponent, ComponentFactory, component_id_from_name
from liman.components import Renderable, TransformComponent
from liman.resources import ResCache, ResourceError

INVALID_ACTOR_ID = 0


class ActorCreationError(Exception):
    """Raised when an actor or one of its components cannot be built."""


class ActorFactory:
    """Creates actors with fresh identifiers and registers them with a level."""

    def __init__(self, level_manager, res_cache: ResCache | None = None) -> None:
        self.level_manager = level_manager
        self.res_cache = res_cache
        self.last_actor_id = INVALID_ACTOR_ID
        self.component_factory = ComponentFactory()
        self.component_factory.register(
            component_id_from_name(TransformComponent.name), TransformComponent
        )
        self.component_factory.register(
            component_id_from_name(Renderable.name), lambda: Renderable(self.res_cache)
        )

    def next_actor_id(self) -> int:
        self.last_actor_id += 1
        return self.last_actor_id

    def create_actor(self, actor_node: ET.Element, source_name: str) -> Actor:
        """Build an actor from its XML element and insert it into the level."""
        actor = Actor(self.next_actor_id(), source_name)

        components = actor_node.find("Components")
        if components is None:
            log.write_log("Actor Factory", "No components are specified")
        else:
            for node in components:
                try:
                    component = self.create_component(node)
                    actor.add_component(component)
                except (ActorCreationError, ValueError) as exc:
                    log.write_log("Actor Factory", "Component loading failed")
                    if isinstance(exc, ActorCreationError):
                        raise
                    raise ActorCreationError(str(exc)) from exc
                component.owner = actor

        renderable = actor.component(Renderable.name)
        if isinstance(renderable, Renderable) and renderable.mesh is None:
            renderable.update_mesh()

        self.level_manager.insert_actor(actor)
        return actor

    def create_component(self, component_node: ET.Element) -> ActorComponent:
        """Create and initialise the component named by the element's tag."""
        name = component_node.tag
        component = self.component_factory.create(component_id_from_name(name))
        if component is None:
            log.write_log("ActorFactory", f"Couldn't find component: {name}")
            raise ActorCreationError(f"Couldn't find component: {name}")
        try:
            component.init(component_node)
        except (ValueError, ResourceError, OSError) as exc:
            log.write_log("ActorFactory", f"Component failed to initialize: {name}")
            raise ActorCreationError(f"Component failed to initialize: {name}") from exc
        return component