"""Ready-made meshes used as starting points and test fixtures."""

from __future__ import annotations

from typing import Optional

from yapmesh.config import MeshSettings
from yapmesh.topology import EditableMesh

# Corner order and face loops match the default cube exported by Blender,
# so the first face is the -X side.
_CUBE_CORNERS = (
    (-1, -1, 1),
    (-1, 1, 1),
    (-1, -1, -1),
    (-1, 1, -1),
    (1, -1, 1),
    (1, 1, 1),
    (1, -1, -1),
    (1, 1, -1),
)

_CUBE_FACES = (
    (0, 1, 3, 2),
    (2, 3, 7, 6),
    (6, 7, 5, 4),
    (4, 5, 1, 0),
    (2, 6, 4, 0),
    (7, 3, 1, 5),
)


def empty(settings: Optional[MeshSettings] = None) -> EditableMesh:
    return EditableMesh(settings)


def quad(settings: Optional[MeshSettings] = None) -> EditableMesh:
    """Unit square in the z=0 plane, wound counter-clockwise (normal +Z).

    Vertex order is (0,0,0), (1,0,0), (1,1,0), (0,1,0); texture coordinates
    equal the x/y position.
    """
    mesh = EditableMesh(settings)
    corners = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]
    loop = [mesh.create_vertex((x, y, 0.0), uv=(x, y)) for x, y in corners]
    mesh.create_face(loop)
    return mesh


def cube(size: float = 2.0, settings: Optional[MeshSettings] = None) -> EditableMesh:
    """Axis aligned cube centred on the origin with outward facing quads.

    The default ``size`` puts the corners at +-1.
    """
    if size <= 0:
        raise ValueError(f"cube size must be positive, got {size}")
    half = size / 2.0
    mesh = EditableMesh(settings)
    with mesh.batch():
        corners = mesh.create_vertices(
            (x * half, y * half, z * half) for x, y, z in _CUBE_CORNERS)
        for face in _CUBE_FACES:
            mesh.create_face([corners[i] for i in face])
    return mesh


def grid(nx: int, ny: int, settings: Optional[MeshSettings] = None) -> EditableMesh:
    """Flat ``nx`` by ``ny`` grid of unit quads in the z=0 plane.

    Vertices are created row by row starting at the origin; every quad is
    wound counter-clockwise and texture coordinates span [0, 1].
    """
    if nx < 1 or ny < 1:
        raise ValueError(f"grid needs at least one cell per side, got {nx}x{ny}")
    mesh = EditableMesh(settings)
    with mesh.batch():
        rows = []
        for j in range(ny + 1):
            rows.append([
                mesh.create_vertex((float(i), float(j), 0.0), uv=(i / nx, j / ny))
                for i in range(nx + 1)
            ])
        for j in range(ny):
            for i in range(nx):
                mesh.create_face([rows[j][i], rows[j][i + 1],
                                  rows[j + 1][i + 1], rows[j + 1][i]])
    return mesh


__all__ = ['empty', 'quad', 'cube', 'grid']
