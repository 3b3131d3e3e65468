"""Repositioning helpers and declared-but-unsupported editing operations."""

from __future__ import annotations

from enum import Enum
from typing import List, Sequence

from yapmesh.errors import UnsupportedOperationError
from yapmesh.topology import EditableMesh, Handle, Handles


class TransformType(Enum):
    """Pivot choice for :func:`transform_vertices`."""

    BOUNDING_BOX_CENTER = 'bounding_box_center'
    INDIVIDUAL_CENTER = 'individual_center'


def move_vertex(mesh: EditableMesh, vertex: Handle, position: Sequence[float]) -> None:
    """Move ``vertex`` to an absolute ``position``."""
    mesh.set_position(vertex, position)


def move_relative(mesh: EditableMesh, handles: Handles, delta: Sequence[float]) -> List[Handle]:
    """Offset every vertex touched by ``handles`` by ``delta``.

    Vertices shared by several selected edges or faces move once.
    """
    return mesh.translate(handles, delta)


def transform_vertices(mesh: EditableMesh, vertices: Handles, matrix,
                       pivot: TransformType = TransformType.BOUNDING_BOX_CENTER) -> None:
    raise UnsupportedOperationError('transform_vertices')


def set_face(mesh: EditableMesh, *args, **kwargs) -> None:
    raise UnsupportedOperationError('set_face')


def triangulate(mesh: EditableMesh, faces: Handles) -> List[Handle]:
    raise UnsupportedOperationError('triangulate')


__all__ = [
    'TransformType',
    'move_vertex',
    'move_relative',
    'transform_vertices',
    'set_face',
    'triangulate',
]
