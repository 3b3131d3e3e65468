"""Per-face and per-vertex attribute recalculation.

Normals and tangents are derived data.  Structural edits leave them stale;
run :func:`finalize` (or the individual steps, in order) after a batch of
edits and before handing the mesh to a renderer:

1. :func:`recalculate_normals` - faces first, then vertices
2. :func:`recalculate_tangents` - needs current vertex normals
3. :func:`yapmesh.buffers.build_buffers` - dense arrays for upload

Copyright (c) 2026 yapmesh contributors
MIT License
"""

from __future__ import annotations

import logging
from typing import Dict

from yapmesh.topology import EditableMesh, Handle
from yapmesh.vectors import (
    Vec3,
    ZERO3,
    add,
    any_perpendicular,
    cross,
    dot,
    neg,
    normalize,
    scale3,
    sub,
)

logger = logging.getLogger(__name__)


def recalculate_face_normal(mesh: EditableMesh, face: Handle) -> Vec3:
    """Compute and store the plane normal of ``face``.

    Uses the cross product of the two loop edges meeting at the corner with
    the lexicographically smallest position.  That corner lies on the convex
    hull of the loop, so a reflex corner in a concave polygon cannot flip the
    result.  If it is degenerate (coincident neighbours) the loop is scanned
    from the first corner instead.  This is not an area weighted normal, and
    a non-planar face gets the plane of a single corner.  A fully degenerate
    face gets the zero vector.
    """
    record = mesh.face(face)
    eps = mesh.settings.normal_epsilon
    points = [mesh.vertex(v).position for v in record.vertices]
    n = len(points)

    lowest = min(range(n), key=lambda i: points[i])
    order = [lowest] + [i for i in range(n) if i != lowest]
    normal = ZERO3
    for i in order:
        a, b, c = points[i - 1], points[i], points[(i + 1) % n]
        unit = normalize(cross(sub(b, a), sub(c, b)), eps)
        if unit is not None:
            normal = unit
            break
    record.normal = normal
    return normal


def recalculate_normals(mesh: EditableMesh) -> None:
    """Recompute every face normal, then every vertex normal.

    A vertex normal is the normalized sum of the normals of the faces
    currently using the vertex, or the zero vector if there are none or
    they cancel out.
    """
    eps = mesh.settings.normal_epsilon
    for f in mesh.faces:
        recalculate_face_normal(mesh, f)

    for v in mesh.vertices:
        record = mesh.vertex(v)
        total = ZERO3
        for f in record.faces:
            total = add(total, mesh.face(f).normal)
        unit = normalize(total, eps)
        record.normal = unit if unit is not None else ZERO3


def recalculate_tangents(mesh: EditableMesh) -> None:
    """Recompute vertex tangents from texture coordinates and normals.

    Each face contributes the texture-space tangent of its first three
    corners to all of its vertices.  The accumulated tangent is then made
    orthogonal to the vertex normal (Gram-Schmidt) and stored with a
    handedness ``w`` of +1 or -1.  Where texture coordinates are degenerate
    a fixed vector perpendicular to the normal is used instead.

    Vertex normals must be current, so call :func:`recalculate_normals`
    first.
    """
    eps = mesh.settings.normal_epsilon
    tan1: Dict[Handle, Vec3] = {}
    tan2: Dict[Handle, Vec3] = {}

    for f in mesh.faces:
        loop = mesh.face(f).vertices
        v0, v1, v2 = (mesh.vertex(v) for v in loop[:3])
        e1 = sub(v1.position, v0.position)
        e2 = sub(v2.position, v0.position)
        du1, dv1 = v1.uv[0] - v0.uv[0], v1.uv[1] - v0.uv[1]
        du2, dv2 = v2.uv[0] - v0.uv[0], v2.uv[1] - v0.uv[1]
        det = du1 * dv2 - du2 * dv1
        if abs(det) <= eps:
            continue
        r = 1.0 / det
        sdir = scale3(sub(scale3(e1, dv2), scale3(e2, dv1)), r)
        tdir = scale3(sub(scale3(e2, du1), scale3(e1, du2)), r)
        for v in loop:
            tan1[v] = add(tan1.get(v, ZERO3), sdir)
            tan2[v] = add(tan2.get(v, ZERO3), tdir)

    for v in mesh.vertices:
        record = mesh.vertex(v)
        n = record.normal
        t = tan1.get(v, ZERO3)
        tangent = normalize(sub(t, scale3(n, dot(n, t))), eps)
        if tangent is None:
            if normalize(n, eps) is None:
                record.tangent = (1.0, 0.0, 0.0, 1.0)
                continue
            tangent = any_perpendicular(n)
        w = -1.0 if dot(cross(n, tangent), tan2.get(v, ZERO3)) < 0.0 else 1.0
        record.tangent = (tangent[0], tangent[1], tangent[2], w)


def flip_normals(mesh: EditableMesh) -> None:
    """Reverse every face's winding and negate face and vertex normals.

    Vertex normals are negated in place, not re-derived.
    """
    for f in mesh.faces:
        mesh.reverse_face(f)
        record = mesh.face(f)
        record.normal = neg(record.normal)
    for v in mesh.vertices:
        record = mesh.vertex(v)
        record.normal = neg(record.normal)


def finalize(mesh: EditableMesh):
    """Run the full post-edit sequence and return render buffers.

    Returns
    -------
    yapmesh.buffers.MeshBuffers
    """
    from yapmesh.buffers import build_buffers

    recalculate_normals(mesh)
    recalculate_tangents(mesh)
    buffers = build_buffers(mesh)
    logger.debug(f"Finalized mesh with {len(buffers.positions)} vertices, "
                 f"{len(buffers.faces)} faces")
    return buffers


__all__ = [
    'recalculate_face_normal',
    'recalculate_normals',
    'recalculate_tangents',
    'flip_normals',
    'finalize',
]
