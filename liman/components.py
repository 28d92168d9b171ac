"""Transform and renderable components that actors are built from."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from liman import log
from liman.actors import ActorComponent
from liman.maths import Vec2f, Vec3f
from liman.mesh import Mesh, Vertex
from liman.resources import ResCache, ResourceError
from liman.transform import Transform

_QUAD_INDICES = (0, 1, 2, 0, 2, 3)


def _fmt(value: float) -> str:
    return f"{value:.8g}"


def _query_float(node: ET.Element, name: str, current: float) -> float:
    """Float attribute ``name`` of ``node``, or ``current`` if absent or invalid."""
    text = node.get(name)
    if text is None:
        return current
    try:
        return float(text)
    except ValueError:
        return current


def _read_vec3(node: ET.Element, current: Vec3f) -> Vec3f:
    return Vec3f(
        _query_float(node, "x", current.x),
        _query_float(node, "y", current.y),
        _query_float(node, "z", current.z),
    )


def _vec3_element(parent: ET.Element, tag: str, vector: Vec3f) -> None:
    ET.SubElement(parent, tag, x=_fmt(vector.x), y=_fmt(vector.y), z=_fmt(vector.z))


class TransformComponent(ActorComponent):
    """Position, rotation and scale of an actor."""

    name = "TransformComponent"

    def __init__(self) -> None:
        super().__init__()
        self._pos = Vec3f()
        self._rot = Vec3f()
        self._scale = Vec3f()
        self.transform = Transform()

    def init(self, node: ET.Element) -> None:
        """Read Position, Rotation and Scale; each of them is required."""
        for tag, attr in (("Position", "_pos"), ("Rotation", "_rot"), ("Scale", "_scale")):
            child = node.find(tag)
            if child is None:
                log.write_log("ActorFactory", f"{tag} loading failed")
                raise ValueError(f"{self.name} lacks a {tag} element")
            setattr(self, attr, _read_vec3(child, getattr(self, attr)))
        self.update_transform()

    def generate_xml(self) -> ET.Element:
        element = ET.Element(self.name)
        _vec3_element(element, "Position", self._pos)
        _vec3_element(element, "Rotation", self._rot)
        _vec3_element(element, "Scale", self._scale)
        return element

    def info(self) -> None:
        print("Transform Component")
        for label, v in (("Position", self._pos), ("Rotation", self._rot), ("Scale", self._scale)):
            print(f"{label}: {v.x:g}, {v.y:g}, {v.z:g}")

    def update_transform(self) -> None:
        """Copy position, rotation and scale into the model transform."""
        self.transform.pos = [self._pos.x, self._pos.y, self._pos.z]
        self.transform.rot = [self._rot.x, self._rot.y, self._rot.z]
        self.transform.scale = [self._scale.x, self._scale.y, self._scale.z]
        self.transform.__post_init__()

    @property
    def pos(self) -> Vec3f:
        return Vec3f(self._pos.x, self._pos.y, self._pos.z)

    @pos.setter
    def pos(self, value: Vec3f | Vec2f) -> None:
        """Set the position; a two-component vector keeps the current z."""
        z = value.z if isinstance(value, Vec3f) else self._pos.z
        self._pos = Vec3f(value.x, value.y, z)
        self.update_transform()

    @property
    def rot(self) -> Vec3f:
        return Vec3f(self._rot.x, self._rot.y, self._rot.z)

    @rot.setter
    def rot(self, value: Vec3f) -> None:
        self._rot = Vec3f(value.x, value.y, value.z)
        self.update_transform()

    @property
    def scale(self) -> Vec3f:
        return Vec3f(self._scale.x, self._scale.y, self._scale.z)

    @scale.setter
    def scale(self, value: Vec3f) -> None:
        self._scale = Vec3f(value.x, value.y, value.z)
        self.update_transform()


class Renderable(ActorComponent):
    """Visual part of an actor: mesh, texture, size and shader."""

    name = "RenderableComponent"

    def __init__(self, res_cache: ResCache | None = None) -> None:
        super().__init__()
        self.res_cache = res_cache
        self.texture = ""
        self.texture_file: str | None = None
        self.mesh_name = ""
        self.mesh: Mesh | None = None
        self.shader_name = ""
        self.size = Vec2f()

    def _asset_path(self, kind: str) -> str:
        if self.res_cache is None:
            raise ResourceError(f"No resource cache to find {kind} in")
        return self.res_cache.get_path(kind)

    def init(self, node: ET.Element) -> None:
        size_node = node.find("Size")
        if size_node is not None:
            self.size = Vec2f(
                _query_float(size_node, "x", self.size.x),
                _query_float(size_node, "y", self.size.y),
            )

        texture_node = node.find("Texture")
        if texture_node is not None:
            path = texture_node.get("path")
            if path is None:
                raise ValueError("Texture element lacks a path attribute")
            self.set_texture(path)

        model_node = node.find("Model")
        if model_node is not None:
            path = model_node.get("path")
            if path is None:
                raise ValueError("Model element lacks a path attribute")
            self.mesh = Mesh.from_file(self._asset_path("Models") + path)
            self.mesh_name = path
        else:
            self.update_mesh()

        shader_node = node.find("Shader")
        if shader_node is not None:
            self.shader_name = shader_node.get("name", "")

    def generate_xml(self) -> ET.Element:
        element = ET.Element(self.name)
        if self.has_texture():
            ET.SubElement(element, "Texture", path=self.texture)
        if self.mesh_name:
            ET.SubElement(element, "Model", path=self.mesh_name)
        ET.SubElement(element, "Size", x=_fmt(self.size.x), y=_fmt(self.size.y))
        ET.SubElement(element, "Shader", name=self.shader_name)
        return element

    def info(self) -> None:
        print(self.name)
        print(f"Size: {self.size.x:g}, {self.size.y:g}")
        print(f"Shader: {self.shader_name}")

    def update_mesh(self) -> None:
        """Build a quad of the component's size centred on the owner's position."""
        if self.owner is None:
            log.write_log("Renderable", "Host not found")
            return
        trans = self.owner.component(TransformComponent.name)
        if not isinstance(trans, TransformComponent):
            log.write_log("ActorFactory", "Transform component not found")
            return

        pos = trans.pos
        left = pos.x - self.size.x / 2
        right = pos.x + self.size.x / 2
        top = pos.y + self.size.y / 2
        bottom = pos.y - self.size.y / 2
        normal = (0.0, 0.0, 1.0)
        vertices = [
            Vertex((left, top, pos.z), (0.0, 0.0), normal),
            Vertex((left, bottom, pos.z), (0.0, 1.0), normal),
            Vertex((right, bottom, pos.z), (1.0, 1.0), normal),
            Vertex((right, top, pos.z), (1.0, 0.0), normal),
        ]
        self.mesh = Mesh.from_vertices(vertices, _QUAD_INDICES)

    def set_texture(self, texture_file_name: str) -> None:
        """Use a texture from the Textures asset directory."""
        self.texture = texture_file_name
        self.texture_file = self._asset_path("Textures") + texture_file_name

    def has_texture(self) -> bool:
        return self.texture != ""