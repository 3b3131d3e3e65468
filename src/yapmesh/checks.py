"""Validation helpers for editable meshes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from yapmesh.errors import TopologyError


@dataclass
class CheckResult:
    ok: bool
    warnings: List[str]

    def __bool__(self) -> bool:
        return self.ok


def check_invariants(mesh) -> CheckResult:
    """Check the structural invariants of ``mesh``.

    Covers endpoint and loop liveness, duplicate edges, polygon closure,
    dangling handles and the symmetry of vertex/edge/face records.
    """

    warnings: List[str] = []
    vertices = mesh._vertices
    edges = mesh._edges
    faces = mesh._faces

    seen_pairs = {}
    for eid, edge in edges.items():
        if edge.one not in vertices or edge.two not in vertices:
            warnings.append(f'edge {eid} references a missing vertex')
            continue
        if edge.one == edge.two:
            warnings.append(f'edge {eid} joins vertex {edge.one} to itself')
        key = edge.key
        if key in seen_pairs:
            warnings.append(f'edges {seen_pairs[key]} and {eid} share endpoints {sorted(key)}')
        seen_pairs[key] = eid
        if mesh._edge_index.get(key) != eid:
            warnings.append(f'edge {eid} is missing from the endpoint index')
        for v in (edge.one, edge.two):
            if eid not in vertices[v].edges:
                warnings.append(f'vertex {v} does not list its edge {eid}')
        for fid in edge.faces:
            if fid not in faces:
                warnings.append(f'edge {eid} lists removed face {fid}')
            elif eid not in faces[fid].edges:
                warnings.append(f'edge {eid} lists face {fid} which does not use it')

    if len(mesh._edge_index) != len(edges):
        warnings.append('endpoint index size does not match the edge count')

    for fid, face in faces.items():
        n = len(face.vertices)
        if n < 3:
            warnings.append(f'face {fid} has only {n} vertices')
        if len(face.edges) != n:
            warnings.append(f'face {fid} has {n} vertices but {len(face.edges)} edges')
            continue
        for v in face.vertices:
            if v not in vertices:
                warnings.append(f'face {fid} references missing vertex {v}')
            elif fid not in vertices[v].faces:
                warnings.append(f'vertex {v} does not list its face {fid}')
        for i, eid in enumerate(face.edges):
            edge = edges.get(eid)
            if edge is None:
                warnings.append(f'face {fid} references missing edge {eid}')
                continue
            expected = frozenset((face.vertices[i], face.vertices[(i + 1) % n]))
            if edge.key != expected:
                warnings.append(f'face {fid} edge {eid} does not join loop corners {sorted(expected)}')
            if fid not in edge.faces:
                warnings.append(f'edge {eid} does not list its face {fid}')

    for vid, vertex in vertices.items():
        for eid in vertex.edges:
            if eid not in edges or not edges[eid].has_vertex(vid):
                warnings.append(f'vertex {vid} lists foreign edge {eid}')
        for fid in vertex.faces:
            if fid not in faces or vid not in faces[fid].vertices:
                warnings.append(f'vertex {vid} lists foreign face {fid}')

    return CheckResult(not warnings, warnings)


def faces_consistent(mesh) -> CheckResult:
    """Check that faces sharing an edge traverse it in opposite directions."""

    inconsistent = []
    for eid, edge in mesh._edges.items():
        if len(edge.faces) != 2:
            continue
        f1, f2 = (mesh._faces[f] for f in sorted(edge.faces))
        if f1.traverses(edge.one, edge.two) == f2.traverses(edge.one, edge.two):
            inconsistent.append(eid)

    if inconsistent:
        return CheckResult(False, [f'inconsistent winding across edges: {inconsistent}'])
    return CheckResult(True, [])


def mesh_watertight(mesh) -> CheckResult:
    """Check that every edge is shared by exactly two faces."""

    boundary = [eid for eid, edge in mesh._edges.items() if len(edge.faces) < 2]
    invalid = [eid for eid, edge in mesh._edges.items() if len(edge.faces) > 2]

    warnings: List[str] = []
    ok = True
    if boundary:
        ok = False
        warnings.append(f'{len(boundary)} boundary edges detected')
    if invalid:
        ok = False
        warnings.append(f'edges with more than two faces: {invalid}')

    return CheckResult(ok, warnings)


def assert_valid(mesh) -> None:
    """Raise :class:`TopologyError` unless ``mesh`` passes :func:`check_invariants`."""

    result = check_invariants(mesh)
    if not result:
        raise TopologyError(f'mesh invariants violated: {result.warnings[0]}',
                            {'warnings': result.warnings})


__all__ = [
    'CheckResult',
    'check_invariants',
    'faces_consistent',
    'mesh_watertight',
    'assert_valid',
]
