"""Extrusion of vertex, edge and face selections.

The entities the caller selects become the moving *tip* of the extrusion:
they keep their handles so the caller can reposition them right away.  For
every boundary vertex of the selection a *stand-in* duplicate is created,
and all geometry outside the selected patch is rewired onto the stand-ins.
New bridging geometry joins each stand-in to its original: a swept point
becomes an edge, a swept edge becomes a quadrilateral side face.

Edges and faces resolve to the vertices they touch, so every form of
selection reduces to a vertex set ``S``.  Classification runs to completion
on the unmodified mesh before the first mutation:

- selected faces: faces whose whole loop lies in ``S``
- selected edges: edges with both endpoints in ``S``
- interior edges: selected edges with at least two faces, all selected.
  They are neither duplicated nor bridged.
- boundary edges: the other selected edges.  Each one gets a stand-in edge
  and a side face.
- interior vertices: vertices of ``S`` whose every edge is interior.  They
  are left untouched.
- boundary vertices: the rest of ``S``.  Each one gets a stand-in and a
  bridging edge.

Side face winding is taken from the pre-edit loops.  When a selected face
runs along a boundary edge from ``p`` to ``q``, the side face is
``[q, p, p', q']`` so the shared edge is traversed in the opposite
direction.  Failing that, a non-selected face running ``p -> q`` (which
will sit on the stand-in edge ``p' -> q'``) gives ``[p, q, q', p']``.  An
edge with no face at all follows ``MeshSettings.free_edge_winding``.

Copyright (c) 2026 yapmesh contributors
MIT License
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from yapmesh.topology import EditableMesh, Handle, Handles

logger = logging.getLogger(__name__)


@dataclass
class ExtrusionResult:
    """Entities created by :func:`extrude`.

    Attributes
    ----------
    standins : dict
        Boundary vertex -> its stand-in duplicate.
    bridges : dict
        Boundary vertex -> the edge joining it to its stand-in.
    edges : list
        Every edge created (stand-in edges and bridges).
    faces : list
        The side faces created, one per boundary edge.
    """

    standins: Dict[Handle, Handle] = field(default_factory=dict)
    bridges: Dict[Handle, Handle] = field(default_factory=dict)
    edges: List[Handle] = field(default_factory=list)
    faces: List[Handle] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.standins or self.edges or self.faces)

    @property
    def vertices(self) -> List[Handle]:
        """The stand-in vertices created."""
        return list(self.standins.values())

    def standin(self, vertex: Handle) -> Optional[Handle]:
        return self.standins.get(vertex)


@dataclass
class _Plan:
    selection: List[Handle]
    faces: Set[Handle]
    interior_edges: Set[Handle]
    boundary_edges: List[Handle]
    interior_vertices: Set[Handle]
    boundary_vertices: List[Handle]
    outer_edges: List[Tuple[Handle, Handle]]
    outer_faces: List[Handle]
    windings: Dict[Handle, Tuple[Handle, Handle]]


def extrude(mesh: EditableMesh, selection: Handles) -> ExtrusionResult:
    """Extrude a selection of vertices, edges and/or faces.

    Parameters
    ----------
    mesh : EditableMesh
        Mesh to edit in place.
    selection : int or iterable of int
        Any mix of live vertex, edge and face handles.

    Returns
    -------
    ExtrusionResult
        The stand-ins and bridging geometry.  Empty for an empty selection.

    Raises
    ------
    StaleHandleError
        If a handle is not live.  Nothing is modified in that case.
    """
    vertices = mesh.resolve_vertices(selection)
    if not vertices:
        return ExtrusionResult()

    plan = _classify(mesh, vertices)
    result = _apply(mesh, plan)

    logger.debug(
        f"Extruded {len(plan.selection)} vertices "
        f"({len(plan.boundary_vertices)} boundary, {len(plan.interior_vertices)} interior), "
        f"{len(plan.boundary_edges)} boundary edges, {len(plan.faces)} selected faces: "
        f"created {len(result.standins)} vertices, {len(result.edges)} edges, "
        f"{len(result.faces)} faces"
    )
    return result


def _classify(mesh: EditableMesh, vertices: List[Handle]) -> _Plan:
    members = set(vertices)

    selected_faces: Set[Handle] = set()
    for v in vertices:
        for f in mesh.vertex(v).faces:
            if f not in selected_faces and all(u in members for u in mesh.face(f).vertices):
                selected_faces.add(f)

    selected_edges: Set[Handle] = set()
    for v in vertices:
        for e in mesh.vertex(v).edges:
            if mesh.edge(e).other(v) in members:
                selected_edges.add(e)

    interior_edges = set()
    for e in selected_edges:
        faces = mesh.edge(e).faces
        if len(faces) >= 2 and faces <= selected_faces:
            interior_edges.add(e)
    boundary_edges = sorted(selected_edges - interior_edges)

    interior_vertices = set()
    boundary_vertices = []
    for v in vertices:
        edges = mesh.vertex(v).edges
        if edges and edges <= interior_edges:
            interior_vertices.add(v)
        else:
            boundary_vertices.append(v)

    outer_edges = []
    outer_faces: Set[Handle] = set()
    for v in boundary_vertices:
        record = mesh.vertex(v)
        for e in sorted(record.edges):
            if e not in selected_edges:
                outer_edges.append((e, v))
        outer_faces.update(f for f in record.faces if f not in selected_faces)

    windings = {e: _side_winding(mesh, e, selected_faces) for e in boundary_edges}

    return _Plan(
        selection=vertices,
        faces=selected_faces,
        interior_edges=interior_edges,
        boundary_edges=boundary_edges,
        interior_vertices=interior_vertices,
        boundary_vertices=boundary_vertices,
        outer_edges=outer_edges,
        outer_faces=sorted(outer_faces),
        windings=windings,
    )


def _side_winding(mesh: EditableMesh, edge: Handle,
                  selected_faces: Set[Handle]) -> Tuple[Handle, Handle]:
    """Return ``(p, q)`` such that the side face over ``edge`` is ``[q, p, p', q']``."""
    record = mesh.edge(edge)
    one, two = record.one, record.two

    tip_faces = sorted(f for f in record.faces if f in selected_faces)
    if tip_faces:
        if mesh.face(tip_faces[0]).traverses(one, two):
            return one, two
        return two, one

    if record.faces:
        if mesh.face(min(record.faces)).traverses(one, two):
            return two, one
        return one, two

    if mesh.settings.free_edge_winding == 'two_one':
        return one, two
    return two, one


def _apply(mesh: EditableMesh, plan: _Plan) -> ExtrusionResult:
    result = ExtrusionResult()
    standins = result.standins

    with mesh.batch():
        for v in plan.boundary_vertices:
            standins[v] = mesh.duplicate_vertex(v)

        for e in plan.boundary_edges:
            one, two = mesh.edge_vertices(e)
            result.edges.append(mesh.create_edge(standins.get(one, one), standins.get(two, two)))

        for e, v in plan.outer_edges:
            mesh._repoint_edge(e, v, standins[v])

        for f in plan.outer_faces:
            loop = mesh.face(f).vertices
            mesh._repoint_face(f, {v: standins[v] for v in loop if v in standins})

        for v in plan.boundary_vertices:
            bridge = mesh.create_edge(v, standins[v])
            result.bridges[v] = bridge
            result.edges.append(bridge)

        for e in plan.boundary_edges:
            p, q = plan.windings[e]
            loop = []
            for v in (q, p, standins.get(p, p), standins.get(q, q)):
                if v not in loop:
                    loop.append(v)
            if len(loop) >= 3:
                result.faces.append(mesh.create_face(loop))

    return result


__all__ = ['ExtrusionResult', 'extrude']
