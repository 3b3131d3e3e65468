"""Dense attribute arrays for a rendering collaborator.

Handles are sparse after edits and deletions; :func:`build_buffers`
compacts the live vertices into consecutive rows and rewrites every face as
row indices.  Index buffer layout and upload are up to the consumer.

Copyright (c) 2026 yapmesh contributors
MIT License
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

import numpy as np

from yapmesh.topology import EditableMesh, Handle


@dataclass
class MeshBuffers:
    """Vertex attribute arrays plus per-face row indices.

    ``positions``, ``normals`` are ``(N, 3)`` float32, ``tangents`` is
    ``(N, 4)``, ``uvs`` is ``(N, 2)``.  ``vertex_ids[i]`` is the handle
    stored in row ``i``; ``faces[j]`` holds the rows of face
    ``face_ids[j]`` in winding order.
    """

    positions: np.ndarray
    normals: np.ndarray
    tangents: np.ndarray
    uvs: np.ndarray
    vertex_ids: np.ndarray
    faces: List[np.ndarray]
    face_ids: np.ndarray

    def row_of(self) -> Dict[Handle, int]:
        """Return a handle -> row mapping."""
        return {int(v): i for i, v in enumerate(self.vertex_ids)}

    def face_sizes(self) -> np.ndarray:
        return np.asarray([len(f) for f in self.faces], dtype=np.int64)


def build_buffers(mesh: EditableMesh) -> MeshBuffers:
    """Compact ``mesh`` into :class:`MeshBuffers`.

    Attribute values are copied as they are; run
    :func:`yapmesh.attributes.finalize` to refresh them first.
    """
    vertex_ids = mesh.vertices
    rows = {v: i for i, v in enumerate(vertex_ids)}
    records = [mesh.vertex(v) for v in vertex_ids]

    positions = np.asarray([r.position for r in records], dtype=np.float32).reshape(-1, 3)
    normals = np.asarray([r.normal for r in records], dtype=np.float32).reshape(-1, 3)
    tangents = np.asarray([r.tangent for r in records], dtype=np.float32).reshape(-1, 4)
    uvs = np.asarray([r.uv for r in records], dtype=np.float32).reshape(-1, 2)

    face_ids = mesh.faces
    faces = [
        np.asarray([rows[v] for v in mesh.face(f).vertices], dtype=np.uint32)
        for f in face_ids
    ]

    return MeshBuffers(
        positions=positions,
        normals=normals,
        tangents=tangents,
        uvs=uvs,
        vertex_ids=np.asarray(vertex_ids, dtype=np.int64),
        faces=faces,
        face_ids=np.asarray(face_ids, dtype=np.int64),
    )


__all__ = ['MeshBuffers', 'build_buffers']
