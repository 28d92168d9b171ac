"""Actors and the components that give them behaviour."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from typing import Callable, ClassVar

from liman.strings import hash_name


def component_id_from_name(name: str) -> int:
    """Identifier of a component type, from its case-insensitive name."""
    return hash_name(name) & 0xFFFFFFFF


class ActorComponent(ABC):
    """A piece of behaviour attached to an actor."""

    name: ClassVar[str] = ""

    def __init__(self) -> None:
        self.owner: Actor | None = None

    @abstractmethod
    def init(self, node: ET.Element) -> None:
        """Configure the component from its XML element; raise ValueError if incomplete."""

    def update(self, delta_ms: int) -> None:
        """Advance the component by ``delta_ms`` milliseconds; the base does nothing."""

    def info(self) -> None:
        """Print a description of the component; the base prints nothing."""

    def component_id(self) -> int:
        return component_id_from_name(self.name)

    @abstractmethod
    def generate_xml(self) -> ET.Element:
        """Describe the component as an XML element."""


class Actor:
    """A game object made of components, at most one of each type."""

    def __init__(self, actor_id: int, source: str = "") -> None:
        self.id = actor_id
        self.source = source
        self._components: dict[int, ActorComponent] = {}

    @property
    def components(self) -> dict[int, ActorComponent]:
        """Components keyed and ordered by component id."""
        return dict(sorted(self._components.items()))

    def add_component(self, component: ActorComponent) -> None:
        """Attach a component; raises ValueError if one of its type is present."""
        cid = component.component_id()
        if cid in self._components:
            raise ValueError(f"Actor {self.id} already has component {component.name}")
        self._components[cid] = component

    def component(self, name: str) -> ActorComponent | None:
        """The component with the given type name, or None."""
        return self._components.get(component_id_from_name(name))

    def destroy(self) -> None:
        self._components.clear()

    def to_xml(self) -> str:
        """Indented XML document describing the actor and its components."""
        root = ET.Element("Actor", resource=self.source)
        components = ET.SubElement(root, "Components")
        for cid in sorted(self._components):
            components.append(self._components[cid].generate_xml())
        ET.indent(root, space="    ")
        return ET.tostring(root, encoding="unicode").replace(" />", "/>") + "\n"

    def __repr__(self) -> str:
        return f"Actor(id={self.id}, source={self.source!r})"


class ComponentFactory:
    """Creates components from their registered type identifiers."""

    def __init__(self) -> None:
        self._creators: dict[int, Callable[[], ActorComponent]] = {}

    def register(self, component_id: int, creator: Callable[[], ActorComponent]) -> bool:
        """Register a creator; returns False if the id is already taken."""
        if component_id in self._creators:
            return False
        self._creators[component_id] = creator
        return True

    def create(self, component_id: int) -> ActorComponent | None:
        """A new component for the id, or None if none is registered."""
        creator = self._creators.get(component_id)
        return None if creator is None else creator()