"""Wavefront OBJ loading and indexed triangle meshes."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Sequence

import numpy as np

_FLOAT_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_RE = re.compile(r"\s*([+-]?\d+)")


def _atof(text: str) -> float:
    """Leading float of ``text``, or 0.0 if there is none."""
    match = _FLOAT_RE.match(text)
    return float(match.group(1)) if match else 0.0


def _atoi(text: str) -> int:
    """Leading integer of ``text``, or 0 if there is none."""
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def _lookup(items: Sequence, index: int, what: str):
    if not 0 <= index < len(items):
        raise ValueError(f"{what} index {index + 1} is out of range")
    return items[index]


@dataclass(frozen=True)
class OBJIndex:
    """Zero-based vertex, texture-coordinate and normal indices of a face corner."""

    vertex_index: int
    uv_index: int = 0
    normal_index: int = 0


@dataclass
class IndexedModel:
    """Vertex attributes and triangle indices ready for drawing."""

    positions: list[tuple[float, float, float]] = field(default_factory=list)
    tex_coords: list[tuple[float, float]] = field(default_factory=list)
    normals: list[tuple[float, float, float]] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)

    def calc_normals(self) -> None:
        """Replace normals by the normalised sum of adjacent face normals."""
        positions = np.array(self.positions, dtype=float).reshape(-1, 3)
        normals = np.array(self.normals, dtype=float).reshape(-1, 3)
        usable = len(self.indices) // 3 * 3
        triangles = np.array(self.indices[:usable], dtype=int).reshape(-1, 3)
        with np.errstate(invalid="ignore", divide="ignore"):
            for i0, i1, i2 in triangles:
                normal = np.cross(positions[i1] - positions[i0], positions[i2] - positions[i0])
                normal = normal / np.linalg.norm(normal)
                normals[i0] += normal
                normals[i1] += normal
                normals[i2] += normal
            count = len(positions)
            lengths = np.linalg.norm(normals[:count], axis=1, keepdims=True)
            normals[:count] = normals[:count] / lengths
        self.normals = [tuple(float(c) for c in n) for n in normals]


class OBJModel:
    """Geometry read from the lines of a Wavefront OBJ file."""

    def __init__(self, lines: Iterable[str] = ()) -> None:
        self.obj_indices: list[OBJIndex] = []
        self.vertices: list[tuple[float, float, float]] = []
        self.uvs: list[tuple[float, float]] = []
        self.normals: list[tuple[float, float, float]] = []
        self.has_uvs = False
        self.has_normals = False

        for raw in lines:
            line = raw.rstrip("\r\n")
            if len(line) < 2:
                continue
            kind, second = line[0], line[1]
            if kind == "v":
                if second == "t":
                    self.uvs.append(self._parse_vec(line[3:], 2))
                elif second == "n":
                    self.normals.append(self._parse_vec(line[2:], 3))
                elif second in " \t":
                    self.vertices.append(self._parse_vec(line[2:], 3))
            elif kind == "f":
                self._add_face(line)

    @classmethod
    def from_file(cls, file_name) -> OBJModel:
        """Read an OBJ file; raises OSError if it cannot be opened."""
        with open(file_name, encoding="utf-8") as handle:
            return cls(handle)

    @staticmethod
    def _parse_vec(text: str, size: int) -> tuple:
        values = [_atof(part) for part in text.split()[:size]]
        values.extend([0.0] * (size - len(values)))
        return tuple(values)

    def _parse_index(self, token: str) -> OBJIndex:
        parts = token.split("/")
        vertex = _atoi(parts[0]) - 1
        uv = normal = 0
        if len(parts) > 1 and parts[1]:
            uv = _atoi(parts[1]) - 1
            self.has_uvs = True
        if len(parts) > 2 and parts[2]:
            normal = _atoi(parts[2]) - 1
            self.has_normals = True
        return OBJIndex(vertex, uv, normal)

    def _add_face(self, line: str) -> None:
        tokens = line.split()
        if len(tokens) < 4:
            raise ValueError(f"Face needs at least three corners: {line!r}")
        corners = [self._parse_index(token) for token in tokens[1:5]]
        self.obj_indices.extend(corners[:3])
        if len(corners) > 3:
            self.obj_indices.extend((corners[0], corners[2], corners[3]))

    def to_indexed_model(self) -> IndexedModel:
        """Build an indexed model, splitting vertices with distinct attributes.

        Without normals in the file, smooth normals are computed per position.
        """
        result = IndexedModel()
        normal_model = IndexedModel()
        normal_slots: dict[int, int] = {}
        result_slots: dict[tuple, int] = {}
        index_map: dict[int, int] = {}

        for corner in self.obj_indices:
            position = _lookup(self.vertices, corner.vertex_index, "vertex")
            tex_coord = (
                _lookup(self.uvs, corner.uv_index, "texture coordinate")
                if self.has_uvs
                else (0.0, 0.0)
            )
            normal = (
                _lookup(self.normals, corner.normal_index, "normal")
                if self.has_normals
                else (0.0, 0.0, 0.0)
            )

            normal_slot = normal_slots.get(corner.vertex_index)
            if normal_slot is None:
                normal_slot = len(normal_model.positions)
                normal_slots[corner.vertex_index] = normal_slot
                normal_model.positions.append(position)
                normal_model.tex_coords.append(tex_coord)
                normal_model.normals.append(normal)

            key = (
                corner.vertex_index,
                corner.uv_index if self.has_uvs else None,
                corner.normal_index if self.has_normals else None,
            )
            result_slot = result_slots.get(key)
            if result_slot is None:
                result_slot = len(result.positions)
                result_slots[key] = result_slot
                result.positions.append(position)
                result.tex_coords.append(tex_coord)
                result.normals.append(normal)

            normal_model.indices.append(normal_slot)
            result.indices.append(result_slot)
            index_map.setdefault(result_slot, normal_slot)

        if not self.has_normals:
            normal_model.calc_normals()
            result.normals = [normal_model.normals[slot] for slot in index_map.values()]

        return result


@dataclass
class Vertex:
    """A vertex with position, texture coordinate and normal."""

    pos: tuple[float, float, float]
    tex_coord: tuple[float, float] = (0.0, 0.0)
    normal: tuple[float, float, float] = (0.0, 0.0, 0.0)


class Mesh:
    """Triangle mesh stored as packed vertex attribute arrays."""

    def __init__(self, model: IndexedModel) -> None:
        self.positions = np.asarray(model.positions, dtype=np.float32).reshape(-1, 3)
        self.tex_coords = np.asarray(model.tex_coords, dtype=np.float32).reshape(-1, 2)
        self.normals = np.asarray(model.normals, dtype=np.float32).reshape(-1, 3)
        self.indices = np.asarray(model.indices, dtype=np.uint32)

    @classmethod
    def from_file(cls, file_name) -> Mesh:
        """Load a mesh from an OBJ file."""
        return cls(OBJModel.from_file(file_name).to_indexed_model())

    @classmethod
    def from_vertices(cls, vertices: Iterable[Vertex], indices: Iterable[int]) -> Mesh:
        """Build a mesh from explicit vertices and triangle indices."""
        vertices = list(vertices)
        model = IndexedModel(
            positions=[tuple(v.pos) for v in vertices],
            tex_coords=[tuple(v.tex_coord) for v in vertices],
            normals=[tuple(v.normal) for v in vertices],
            indices=[int(i) for i in indices],
        )
        return cls(model)

    @property
    def num_indices(self) -> int:
        return int(len(self.indices))