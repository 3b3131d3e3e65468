"""Selection helpers deriving related entity sets from a given set.

Position lookups use exact coordinate equality.  Coincident but distinct
vertices are common (every extrusion creates them), so callers that need
every vertex at a location should use :func:`find_all_by_position`.

Copyright (c) 2026 yapmesh contributors
MIT License
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from yapmesh.errors import UnsupportedOperationError
from yapmesh.topology import EditableMesh, Handle, Handles
from yapmesh.vectors import to_vec3


def select_faces_from_vertices(mesh: EditableMesh, vertices: Handles) -> List[Handle]:
    """Return the faces whose every boundary vertex is in ``vertices``.

    This is an exact superset test, not "any vertex selected".  Cost is
    proportional to the face count times the polygon size.
    """
    selected = set(mesh.resolve_vertices(vertices))
    result = []
    for f in mesh.faces:
        loop = mesh.face(f).vertices
        if all(v in selected for v in loop):
            result.append(f)
    return result


def select_edges_from_vertices(mesh: EditableMesh, vertices: Handles) -> List[Handle]:
    """Return the edges whose endpoints are both in ``vertices``."""
    selected = set(mesh.resolve_vertices(vertices))
    result = set()
    for v in selected:
        for e in mesh.vertex(v).edges:
            if mesh.edge(e).other(v) in selected:
                result.add(e)
    return sorted(result)


def find_by_position(mesh: EditableMesh, position: Sequence[float]) -> Optional[Handle]:
    """Return the first vertex (creation order) exactly at ``position``, or ``None``."""
    target = to_vec3(position)
    for v in mesh.vertices:
        if mesh.vertex(v).position == target:
            return v
    return None


def find_all_by_position(mesh: EditableMesh, position: Sequence[float]) -> List[Handle]:
    """Return every vertex exactly at ``position``."""
    target = to_vec3(position)
    return [v for v in mesh.vertices if mesh.vertex(v).position == target]


def get_connected_vertices(mesh: EditableMesh, vertex: Handle) -> List[Handle]:
    return mesh.connected_vertices(vertex)


def get_faces(mesh: EditableMesh, vertex: Handle) -> List[Handle]:
    return mesh.vertex_faces(vertex)


def is_connected(mesh: EditableMesh, a: Handle, b: Handle) -> bool:
    return mesh.is_connected(a, b)


def select_more(mesh: EditableMesh, vertices: Handles) -> List[Handle]:
    """Grow a vertex selection by every vertex one edge away."""
    selected = mesh.resolve_vertices(vertices)
    result = list(selected)
    seen = set(selected)
    for v in selected:
        for other in mesh.connected_vertices(v):
            if other not in seen:
                seen.add(other)
                result.append(other)
    return result


def select_less(mesh: EditableMesh, vertices: Handles) -> List[Handle]:
    """Shrink a vertex selection to the vertices whose neighbours are all selected."""
    selected = mesh.resolve_vertices(vertices)
    members = set(selected)
    return [v for v in selected
            if all(other in members for other in mesh.connected_vertices(v))]


def select_loop(mesh: EditableMesh, vertex: Handle, starting_angle: float,
                maximum_angle: float) -> List[Handle]:
    raise UnsupportedOperationError('select_loop')


def select_shortest_path(mesh: EditableMesh, vertex1: Handle, vertex2: Handle) -> List[Handle]:
    raise UnsupportedOperationError('select_shortest_path')


def select_seam(mesh: EditableMesh, vertex: Handle, starting_angle: float,
                maximum_angle: float) -> List[Handle]:
    raise UnsupportedOperationError('select_seam')


__all__ = [
    'select_faces_from_vertices',
    'select_edges_from_vertices',
    'find_by_position',
    'find_all_by_position',
    'get_connected_vertices',
    'get_faces',
    'is_connected',
    'select_more',
    'select_less',
    'select_loop',
    'select_shortest_path',
    'select_seam',
]
