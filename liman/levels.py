"""Loads levels and actors from XML files and keeps track of the actors."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from liman import log
from liman.actor_factory import INVALID_ACTOR_ID, ActorCreationError
from liman.actors import Actor
from liman.resources import ResCache, ResourceError


def _parse(path: str, tag: str, log_tag: str) -> ET.Element:
    try:
        root = ET.parse(path).getroot()
    except (OSError, ET.ParseError) as exc:
        log.write_log(log_tag, f"File {path} was not found")
        raise ResourceError(f"File {path} was not found") from exc
    if root.tag != tag:
        log.write_log(log_tag, "Getting root element failed")
        raise ResourceError(f"File {path} has no {tag} element")
    return root


class LevelManager:
    """Owns the actors of the current level."""

    def __init__(self, res_cache: ResCache | None) -> None:
        self.res_cache = res_cache
        self.levels: list[str] = []
        self.current_level = 0
        self.actors: dict[int, Actor] = {}
        self.player_id = INVALID_ACTOR_ID
        self._num_actors = INVALID_ACTOR_ID

    def initialize(self, levels) -> None:
        self.levels.extend(levels)

    def _asset_path(self, kind: str) -> str:
        if self.res_cache is None:
            raise ResourceError(f"No resource cache to find {kind} in")
        return self.res_cache.get_path(kind)

    def load_level(self, file_name: str, factory) -> None:
        """Create every actor of a ``<World>`` level file.

        Actors are described inline or by a ``resource`` attribute naming an
        entity file; actors that fail to load are logged and skipped.
        """
        path = self._asset_path("Levels") + file_name
        log.write_log("LevelManager", f"Loading level {file_name}")
        world = _parse(path, "World", "LevelManager")
        for node in world:
            if len(node):
                try:
                    factory.create_actor(node, file_name)
                except ActorCreationError as exc:
                    log.write_log("Level manager", f"Creating actor failed: {exc}")
                continue
            resource = node.get("resource")
            try:
                if resource is None:
                    raise ResourceError("Actor element has no resource attribute")
                self.load_actor(resource, factory)
            except (ResourceError, ActorCreationError):
                log.write_log("Level manager", f"Loading actor {resource} failed")

    def load_actor(self, file_name: str, factory) -> Actor:
        """Create an actor from an ``<Actor>`` entity file."""
        path = self._asset_path("Entities") + file_name
        log.write_log("LevelManager", f"Loading actor from file {file_name}")
        node = _parse(path, "Actor", "Level manager")
        return factory.create_actor(node, file_name)

    def insert_actor(self, actor: Actor) -> None:
        self.actors.setdefault(actor.id, actor)
        self._num_actors += 1

    def actor(self, actor_id: int) -> Actor | None:
        return self.actors.get(actor_id)

    def destroy_actor(self, actor_id: int) -> None:
        """Destroy and forget an actor; the actor count is left unchanged."""
        actor = self.actors.pop(actor_id, None)
        if actor is not None:
            actor.destroy()

    def actors_info(self) -> None:
        for actor_id in sorted(self.actors):
            actor = self.actors[actor_id]
            print("Actor")
            print(f"id: {actor.id}")
            print(f"source: {actor.source}")
            for component in actor.components.values():
                component.info()

    @property
    def num_actors(self) -> int:
        """Number of actors inserted so far."""
        return self._num_actors