"""Editable polygon mesh topology store.

This module owns the vertex / edge / face graph of an editable mesh.  The
graph is cyclic (vertices know their edges and faces, edges know their
faces, faces know their vertices and edges), so entities are held in an
arena keyed by integer handles and every cross reference is a handle, never
a nested object.

Topology hierarchy:
- Vertex: position, normal, tangent and texture coordinate, plus the sets
  of incident edge and face handles
- Edge: unordered pair of distinct endpoint vertices, plus the set of
  incident face handles
- Face: ordered loop of >= 3 distinct vertices; ``edges[i]`` joins
  ``vertices[i]`` and ``vertices[i + 1]`` (cyclically).  Winding order
  determines the outward normal.

Handles come from a single counter per mesh shared by all three kinds, so a
handle identifies exactly one entity and is never handed out twice, even
after the entity it named has been deleted.

Invariants that hold whenever a public method returns:

I1. every edge endpoint is a live vertex
I2. every face loop vertex and loop edge is live
I3. no two edges share the same unordered endpoint pair
I4. a face has as many edges as vertices
I5. removed entities are unreachable from any adjacency record

Copyright (c) 2026 yapmesh contributors
MIT License
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from numbers import Integral
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Set, Tuple, Union

from yapmesh.config import MeshSettings, load_settings
from yapmesh.errors import MeshError, StaleHandleError, TopologyError
from yapmesh.vectors import Vec2, Vec3, Vec4, ZERO2, ZERO3, add, to_vec2, to_vec3

logger = logging.getLogger(__name__)

Handle = int
Handles = Union[Handle, Iterable[Handle]]

DEFAULT_TANGENT: Vec4 = (1.0, 0.0, 0.0, 1.0)


# -----------------------------------------------------------------------------
# Entity records
# -----------------------------------------------------------------------------

@dataclass(eq=False)
class Vertex:
    """A mesh corner.

    Two vertices may share a position without being the same entity; that
    is how extrusion keeps the moved tip apart from its stand-in.
    """

    id: Handle
    position: Vec3 = ZERO3
    normal: Vec3 = ZERO3
    tangent: Vec4 = DEFAULT_TANGENT
    uv: Vec2 = ZERO2
    edges: Set[Handle] = field(default_factory=set)
    faces: Set[Handle] = field(default_factory=set)

    @property
    def degree(self) -> int:
        return len(self.edges)


@dataclass(eq=False)
class Edge:
    """An unordered vertex pair; ``one`` and ``two`` carry no direction."""

    id: Handle
    one: Handle
    two: Handle
    faces: Set[Handle] = field(default_factory=set)

    @property
    def key(self) -> FrozenSet[Handle]:
        return frozenset((self.one, self.two))

    def has_vertex(self, v: Handle) -> bool:
        return v == self.one or v == self.two

    def other(self, v: Handle) -> Handle:
        """Return the endpoint opposite ``v``."""
        if v == self.one:
            return self.two
        if v == self.two:
            return self.one
        raise TopologyError(f"vertex {v} is not an endpoint of edge {self.id}",
                            {'edge': self.id, 'vertex': v})


@dataclass(eq=False)
class Face:
    id: Handle
    vertices: List[Handle]
    edges: List[Handle]
    normal: Vec3 = ZERO3

    def __len__(self) -> int:
        return len(self.vertices)

    def traverses(self, a: Handle, b: Handle) -> bool:
        """Return True if the loop steps directly from ``a`` to ``b``."""
        n = len(self.vertices)
        for i, v in enumerate(self.vertices):
            if v == a:
                return self.vertices[(i + 1) % n] == b
        return False


def _is_handle(obj) -> bool:
    return isinstance(obj, Integral) and not isinstance(obj, bool)


def as_handle_list(handles: Handles) -> List[Handle]:
    if _is_handle(handles):
        return [int(handles)]
    return [int(h) if _is_handle(h) else h for h in handles]


# -----------------------------------------------------------------------------
# Topology store
# -----------------------------------------------------------------------------

class EditableMesh:
    """Arena owning every vertex, edge and face of one editable mesh.

    Adjacency records are only changed by methods of this class.  The
    higher level operations in :mod:`yapmesh.extrude`,
    :mod:`yapmesh.deletion` and :mod:`yapmesh.attributes` are built on the
    mutation primitives below.

    Parameters
    ----------
    settings : MeshSettings, optional
        Behavioural switches.  Defaults to :func:`yapmesh.config.load_settings`.
    """

    def __init__(self, settings: Optional[MeshSettings] = None):
        self.settings = settings if settings is not None else load_settings()
        self._vertices: Dict[Handle, Vertex] = {}
        self._edges: Dict[Handle, Edge] = {}
        self._faces: Dict[Handle, Face] = {}
        self._edge_index: Dict[FrozenSet[Handle], Handle] = {}
        self._next_id = 0
        self._batch_depth = 0

    def __repr__(self):
        return (f"EditableMesh(vertices={self.vertex_count}, "
                f"edges={self.edge_count}, faces={self.face_count})")

    # -------------------------------------------------------------------------
    # Bulk views and counts
    # -------------------------------------------------------------------------

    @property
    def vertices(self) -> List[Handle]:
        """Live vertex handles in creation order."""
        return list(self._vertices)

    @property
    def edges(self) -> List[Handle]:
        """Live edge handles in creation order."""
        return list(self._edges)

    @property
    def faces(self) -> List[Handle]:
        """Live face handles in creation order."""
        return list(self._faces)

    @property
    def vertex_count(self) -> int:
        return len(self._vertices)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    @property
    def face_count(self) -> int:
        return len(self._faces)

    def summary(self) -> Dict[str, int]:
        """Return a summary of the mesh contents."""
        return {
            'vertices': self.vertex_count,
            'edges': self.edge_count,
            'faces': self.face_count,
        }

    # -------------------------------------------------------------------------
    # Dereferencing
    # -------------------------------------------------------------------------

    def vertex(self, handle: Handle) -> Vertex:
        """Return the vertex record for ``handle``.

        Raises
        ------
        StaleHandleError
            If ``handle`` is not a live vertex of this mesh.
        """
        try:
            return self._vertices[handle]
        except (KeyError, TypeError):
            raise StaleHandleError(handle, 'vertex') from None

    def edge(self, handle: Handle) -> Edge:
        """Return the edge record for ``handle``."""
        try:
            return self._edges[handle]
        except (KeyError, TypeError):
            raise StaleHandleError(handle, 'edge') from None

    def face(self, handle: Handle) -> Face:
        """Return the face record for ``handle``."""
        try:
            return self._faces[handle]
        except (KeyError, TypeError):
            raise StaleHandleError(handle, 'face') from None

    def kind(self, handle: Handle) -> Optional[str]:
        """Return ``'vertex'``, ``'edge'``, ``'face'`` or ``None``."""
        if not _is_handle(handle):
            return None
        if handle in self._vertices:
            return 'vertex'
        if handle in self._edges:
            return 'edge'
        if handle in self._faces:
            return 'face'
        return None

    def contains(self, handle: Handle) -> bool:
        return self.kind(handle) is not None

    def __contains__(self, handle) -> bool:
        return self.contains(handle)

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    def _new_id(self) -> Handle:
        handle = self._next_id
        self._next_id += 1
        return handle

    def create_vertex(self, position: Sequence[float] = ZERO3, *,
                      uv: Sequence[float] = ZERO2,
                      selection=None) -> Handle:
        """Create an isolated vertex.

        Parameters
        ----------
        position : sequence of float, optional
            World-space position, defaults to the origin.
        uv : sequence of float, optional
            Texture coordinate.
        selection : list or set, optional
            If given, the new handle is also appended (list) or added (set).
        """
        vertex = Vertex(self._new_id(), to_vec3(position), uv=to_vec2(uv))
        self._vertices[vertex.id] = vertex
        if selection is not None:
            if hasattr(selection, 'add'):
                selection.add(vertex.id)
            else:
                selection.append(vertex.id)
        return vertex.id

    def create_vertices(self, positions: Iterable[Sequence[float]]) -> List[Handle]:
        """Create one isolated vertex per position, in order."""
        coords = [to_vec3(p) for p in positions]
        return [self.create_vertex(p) for p in coords]

    def create_vertex_connected_to(self, vertex: Handle,
                                   position: Optional[Sequence[float]] = None
                                   ) -> Tuple[Handle, Handle]:
        """Create a vertex joined to ``vertex`` by a new edge.

        The new vertex starts at ``position``, or on top of ``vertex`` when
        no position is given.

        Returns
        -------
        tuple
            ``(new_vertex, new_edge)``
        """
        source = self.vertex(vertex)
        start = source.position if position is None else position
        created = self.create_vertex(start, uv=source.uv)
        edge = self._add_edge(vertex, created)
        self._after_edit()
        return created, edge

    def create_edge(self, a: Handle, b: Handle) -> Handle:
        """Join ``a`` and ``b``, returning the existing edge if there is one."""
        self.vertex(a)
        self.vertex(b)
        existing = self.get_edge_between(a, b)
        if existing is not None:
            return existing
        edge = self._add_edge(a, b)
        self._after_edit()
        return edge

    def create_face(self, vertices: Sequence[Handle]) -> Handle:
        """Create a face from an ordered loop of existing vertices.

        Loop edges that do not exist yet are created.  The face is
        registered with every boundary vertex and edge.

        Raises
        ------
        TopologyError
            If the loop has fewer than three vertices or repeats one.
        StaleHandleError
            If any vertex is not live.
        """
        loop = as_handle_list(vertices)
        if len(loop) < 3:
            raise TopologyError(f"a face needs at least 3 vertices, got {len(loop)}",
                                {'vertices': loop})
        if len(set(loop)) != len(loop):
            raise TopologyError("a face loop may not repeat a vertex",
                                {'vertices': loop})
        for v in loop:
            self.vertex(v)

        n = len(loop)
        loop_edges = [self._ensure_edge(loop[i], loop[(i + 1) % n]) for i in range(n)]
        face = Face(self._new_id(), loop, loop_edges)
        self._faces[face.id] = face
        for e in loop_edges:
            self._edges[e].faces.add(face.id)
        for v in loop:
            self._vertices[v].faces.add(face.id)
        self._after_edit()
        return face.id

    def duplicate_vertex(self, vertex: Handle) -> Handle:
        """Create an unconnected copy of ``vertex`` with the same attributes."""
        source = self.vertex(vertex)
        copy = Vertex(self._new_id(), source.position, source.normal,
                      source.tangent, source.uv)
        self._vertices[copy.id] = copy
        return copy.id

    def _add_edge(self, a: Handle, b: Handle) -> Handle:
        if a == b:
            raise TopologyError(f"an edge needs two distinct endpoints, got {a} twice",
                                {'vertex': a})
        key = frozenset((a, b))
        if key in self._edge_index:
            raise TopologyError(f"vertices {a} and {b} are already joined",
                                {'edge': self._edge_index[key]})
        edge = Edge(self._new_id(), a, b)
        self._edges[edge.id] = edge
        self._edge_index[key] = edge.id
        self._vertices[a].edges.add(edge.id)
        self._vertices[b].edges.add(edge.id)
        return edge.id

    def _ensure_edge(self, a: Handle, b: Handle) -> Handle:
        existing = self._edge_index.get(frozenset((a, b)))
        if existing is not None:
            return existing
        return self._add_edge(a, b)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_edge_between(self, a: Handle, b: Handle) -> Optional[Handle]:
        """Return the edge joining ``a`` and ``b``, or ``None``."""
        self.vertex(a)
        self.vertex(b)
        if a == b:
            return None
        return self._edge_index.get(frozenset((a, b)))

    def is_connected(self, a: Handle, b: Handle) -> bool:
        """Return True if two vertices share an edge, or a vertex lies on a face.

        The vertex / face form accepts its arguments in either order.
        """
        kind_a, kind_b = self.kind(a), self.kind(b)
        if kind_a is None:
            raise StaleHandleError(a)
        if kind_b is None:
            raise StaleHandleError(b)
        if kind_a == 'vertex' and kind_b == 'vertex':
            return self.get_edge_between(a, b) is not None
        if kind_a == 'vertex' and kind_b == 'face':
            return b in self._vertices[a].faces
        if kind_a == 'face' and kind_b == 'vertex':
            return a in self._vertices[b].faces
        raise MeshError(f"is_connected expects vertex/vertex or vertex/face handles, "
                        f"got {kind_a}/{kind_b}", {'a': a, 'b': b})

    def position(self, vertex: Handle) -> Vec3:
        return self.vertex(vertex).position

    def vertex_edges(self, vertex: Handle) -> List[Handle]:
        return sorted(self.vertex(vertex).edges)

    def vertex_faces(self, vertex: Handle) -> List[Handle]:
        return sorted(self.vertex(vertex).faces)

    def vertex_degree(self, vertex: Handle) -> int:
        """Number of edges incident to ``vertex``."""
        return len(self.vertex(vertex).edges)

    def vertex_face_count(self, vertex: Handle) -> int:
        return len(self.vertex(vertex).faces)

    def connected_vertices(self, vertex: Handle) -> List[Handle]:
        """Return the vertices sharing an edge with ``vertex``."""
        record = self.vertex(vertex)
        return sorted(self._edges[e].other(vertex) for e in record.edges)

    def edge_vertices(self, edge: Handle) -> Tuple[Handle, Handle]:
        record = self.edge(edge)
        return record.one, record.two

    def edge_faces(self, edge: Handle) -> List[Handle]:
        return sorted(self.edge(edge).faces)

    def face_vertices(self, face: Handle) -> List[Handle]:
        return list(self.face(face).vertices)

    def face_edges(self, face: Handle) -> List[Handle]:
        return list(self.face(face).edges)

    def face_contains_vertex(self, face: Handle, vertex: Handle) -> bool:
        return vertex in self.face(face).vertices

    def resolve_vertices(self, handles: Handles) -> List[Handle]:
        """Return the vertices touched by any mix of vertex/edge/face handles.

        Order is first-seen and every vertex appears once.  All handles are
        validated before anything is returned.
        """
        resolved: List[Handle] = []
        seen: Set[Handle] = set()

        def _take(v):
            if v not in seen:
                seen.add(v)
                resolved.append(v)

        for handle in as_handle_list(handles):
            kind = self.kind(handle)
            if kind == 'vertex':
                _take(handle)
            elif kind == 'edge':
                edge = self._edges[handle]
                _take(edge.one)
                _take(edge.two)
            elif kind == 'face':
                for v in self._faces[handle].vertices:
                    _take(v)
            else:
                raise StaleHandleError(handle)
        return resolved

    # -------------------------------------------------------------------------
    # Repositioning and attributes
    # -------------------------------------------------------------------------

    def set_position(self, vertex: Handle, position: Sequence[float]) -> None:
        self.vertex(vertex).position = to_vec3(position)

    def translate(self, handles: Handles, delta: Sequence[float]) -> List[Handle]:
        """Move every vertex touched by ``handles`` by ``delta`` once.

        Returns the moved vertices.
        """
        offset = to_vec3(delta)
        moved = self.resolve_vertices(handles)
        for v in moved:
            record = self._vertices[v]
            record.position = add(record.position, offset)
        return moved

    def set_uv(self, vertex: Handle, uv: Sequence[float]) -> None:
        self.vertex(vertex).uv = to_vec2(uv)

    # -------------------------------------------------------------------------
    # Rewiring primitives
    # -------------------------------------------------------------------------
    # Only extrusion calls these, inside a batch.  Between the calls a face
    # may not match its edges.

    def _repoint_edge(self, edge: Handle, old: Handle, new: Handle) -> None:
        """Replace endpoint ``old`` of ``edge`` with vertex ``new``.

        Faces bound to the edge are left alone; callers rebind them with
        :meth:`_repoint_face`.

        Raises
        ------
        TopologyError
            If ``old`` is not an endpoint, or the result would be a loop
            edge or a second edge between the same vertices.
        """
        record = self.edge(edge)
        self.vertex(new)
        keep = record.other(old)
        if keep == new:
            raise TopologyError(f"repointing edge {edge} would join {new} to itself",
                                {'edge': edge})
        new_key = frozenset((keep, new))
        if new_key in self._edge_index:
            raise TopologyError(f"vertices {keep} and {new} are already joined",
                                {'edge': self._edge_index[new_key]})

        del self._edge_index[record.key]
        if record.one == old:
            record.one = new
        else:
            record.two = new
        self._edge_index[new_key] = edge
        self._vertices[old].edges.discard(edge)
        self._vertices[new].edges.add(edge)

    def _repoint_face(self, face: Handle, mapping: Mapping[Handle, Handle]) -> None:
        """Substitute loop vertices of ``face`` according to ``mapping``.

        The face is rebound to the edges joining the new consecutive loop
        pairs, and every one of them must already exist.
        """
        record = self.face(face)
        loop = [mapping.get(v, v) for v in record.vertices]
        if len(set(loop)) != len(loop):
            raise TopologyError(f"repointing face {face} would repeat a vertex",
                                {'face': face, 'vertices': loop})
        for v in loop:
            self.vertex(v)
        n = len(loop)
        loop_edges = []
        for i in range(n):
            e = self._edge_index.get(frozenset((loop[i], loop[(i + 1) % n])))
            if e is None:
                raise TopologyError(
                    f"face {face} needs an edge between {loop[i]} and {loop[(i + 1) % n]}",
                    {'face': face})
            loop_edges.append(e)

        for e in record.edges:
            self._edges[e].faces.discard(face)
        for v in record.vertices:
            self._vertices[v].faces.discard(face)
        record.vertices = loop
        record.edges = loop_edges
        for e in loop_edges:
            self._edges[e].faces.add(face)
        for v in loop:
            self._vertices[v].faces.add(face)

    def reverse_face(self, face: Handle) -> None:
        """Reverse the winding of ``face``."""
        record = self.face(face)
        record.vertices.reverse()
        n = len(record.vertices)
        record.edges = [
            self._edge_index[frozenset((record.vertices[i], record.vertices[(i + 1) % n]))]
            for i in range(n)
        ]

    # -------------------------------------------------------------------------
    # Removal
    # -------------------------------------------------------------------------

    def remove_face(self, face: Handle) -> None:
        """Remove ``face``; its edges and vertices stay, even if isolated."""
        record = self.face(face)
        for e in record.edges:
            self._edges[e].faces.discard(face)
        for v in record.vertices:
            self._vertices[v].faces.discard(face)
        del self._faces[face]

    def remove_edge(self, edge: Handle) -> List[Handle]:
        """Remove ``edge`` and every face using it.

        Returns the removed faces.
        """
        record = self.edge(edge)
        removed = sorted(record.faces)
        for f in removed:
            self.remove_face(f)
        self._vertices[record.one].edges.discard(edge)
        self._vertices[record.two].edges.discard(edge)
        del self._edge_index[record.key]
        del self._edges[edge]
        return removed

    def remove_vertex(self, vertex: Handle) -> Tuple[List[Handle], List[Handle]]:
        """Remove ``vertex`` with every edge and face incident to it.

        Returns
        -------
        tuple
            ``(removed_edges, removed_faces)``
        """
        record = self.vertex(vertex)
        removed_edges = sorted(record.edges)
        removed_faces: List[Handle] = []
        for e in removed_edges:
            removed_faces.extend(self.remove_edge(e))
        for f in sorted(record.faces):
            self.remove_face(f)
            removed_faces.append(f)
        del self._vertices[vertex]
        return removed_edges, removed_faces

    # -------------------------------------------------------------------------
    # Validation hook
    # -------------------------------------------------------------------------

    @contextmanager
    def batch(self):
        """Group several structural edits into one.

        Invariants may be broken between the edits made inside the block;
        the optional validation runs once when the outermost block exits
        normally.
        """
        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
        self._after_edit()

    def _after_edit(self) -> None:
        if self._batch_depth == 0 and self.settings.validate_edits:
            from yapmesh.checks import assert_valid
            assert_valid(self)


__all__ = [
    'Handle',
    'Handles',
    'as_handle_list',
    'Vertex',
    'Edge',
    'Face',
    'EditableMesh',
]
