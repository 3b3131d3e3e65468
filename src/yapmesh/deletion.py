"""Structural removal of mesh entities with cascade.

Deleting a face opens a hole but leaves its edges and vertices, even if
they end up isolated.  Deleting an edge removes the faces using it.
Deleting a vertex removes every edge and face incident to it.

Copyright (c) 2026 yapmesh contributors
MIT License
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from yapmesh.errors import StaleHandleError
from yapmesh.topology import EditableMesh, Handle, Handles, as_handle_list

logger = logging.getLogger(__name__)


@dataclass
class DeletionResult:
    """Handles removed by one :func:`delete_geometry` call."""

    vertices: List[Handle] = field(default_factory=list)
    edges: List[Handle] = field(default_factory=list)
    faces: List[Handle] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.vertices) + len(self.edges) + len(self.faces)


def delete_geometry(mesh: EditableMesh, handles: Handles) -> DeletionResult:
    """Delete vertices, edges and faces given as one handle or an iterable.

    Every handle is validated before anything is removed, so a stale handle
    leaves the mesh untouched.  Faces go first, then edges, then vertices;
    handles already swept away by an earlier cascade in the same call are
    skipped.

    Raises
    ------
    StaleHandleError
        If any handle is not a live entity of ``mesh``.
    """
    requested = as_handle_list(handles)
    by_kind = {'vertex': [], 'edge': [], 'face': []}
    for handle in requested:
        kind = mesh.kind(handle)
        if kind is None:
            raise StaleHandleError(handle)
        if handle not in by_kind[kind]:
            by_kind[kind].append(handle)

    result = DeletionResult()
    with mesh.batch():
        for f in by_kind['face']:
            if mesh.contains(f):
                mesh.remove_face(f)
                result.faces.append(f)
        for e in by_kind['edge']:
            if mesh.contains(e):
                result.faces.extend(mesh.remove_edge(e))
                result.edges.append(e)
        for v in by_kind['vertex']:
            if mesh.contains(v):
                edges, faces = mesh.remove_vertex(v)
                result.edges.extend(edges)
                result.faces.extend(faces)
                result.vertices.append(v)

    logger.debug(f"Deleted {len(result.vertices)} vertices, {len(result.edges)} edges, "
                 f"{len(result.faces)} faces")
    return result


__all__ = ['DeletionResult', 'delete_geometry']
