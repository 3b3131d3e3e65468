"""Tests for normal and tangent recalculation."""

import math

import pytest

from yapmesh import primitives
from yapmesh.attributes import (
    finalize,
    flip_normals,
    recalculate_face_normal,
    recalculate_normals,
    recalculate_tangents,
)
from yapmesh.buffers import MeshBuffers
from yapmesh.extrude import extrude
from yapmesh.selection import find_by_position
from yapmesh.topology import EditableMesh
from yapmesh.vectors import dot, mag


def test_quad_normals():
    mesh = primitives.quad()
    recalculate_normals(mesh)
    assert mesh.face(mesh.faces[0]).normal == pytest.approx((0.0, 0.0, 1.0))
    for v in mesh.vertices:
        assert mesh.vertex(v).normal == pytest.approx((0.0, 0.0, 1.0))


def test_cube_corner_normal_is_diagonal():
    mesh = primitives.cube()
    recalculate_normals(mesh)
    corner = find_by_position(mesh, (1, 1, 1))
    s = 1.0 / math.sqrt(3.0)
    assert mesh.vertex(corner).normal == pytest.approx((s, s, s))


def test_cube_face_normals_point_outward():
    mesh = primitives.cube()
    recalculate_normals(mesh)
    for f in mesh.faces:
        positions = [mesh.position(v) for v in mesh.face_vertices(f)]
        centre = [sum(c) / len(positions) for c in zip(*positions)]
        assert dot(mesh.face(f).normal, centre) > 0


def test_isolated_vertex_normal_is_zero():
    mesh = primitives.quad()
    lonely = mesh.create_vertex((5, 5, 5))
    recalculate_normals(mesh)
    assert mesh.vertex(lonely).normal == (0.0, 0.0, 0.0)


def test_degenerate_face_gets_zero_normal():
    mesh = EditableMesh()
    loop = mesh.create_vertices([(0, 0, 0), (1, 0, 0), (2, 0, 0)])
    face = mesh.create_face(loop)
    assert recalculate_face_normal(mesh, face) == (0.0, 0.0, 0.0)


def test_face_normal_skips_degenerate_corner():
    mesh = EditableMesh()
    loop = mesh.create_vertices([(0, 0, 0), (1, 0, 0), (2, 0, 0), (1, 1, 0)])
    face = mesh.create_face(loop)
    assert recalculate_face_normal(mesh, face) == pytest.approx((0.0, 0.0, 1.0))


def test_face_normal_lowest_corner_degenerate():
    mesh = EditableMesh()
    loop = mesh.create_vertices([(0, 0, 0), (0, 0, 0), (1, 0, 0), (0, 1, 0)])
    face = mesh.create_face(loop)
    assert recalculate_face_normal(mesh, face) == pytest.approx((0.0, 0.0, 1.0))


def test_concave_face_starting_at_reflex_corner():
    """A counter-clockwise arrowhead whose second corner is reflex."""
    mesh = EditableMesh()
    loop = mesh.create_vertices([(4, 4, 0), (2, 1, 0), (0, 4, 0), (0, 0, 0), (4, 0, 0)])
    face = mesh.create_face(loop)
    assert recalculate_face_normal(mesh, face) == pytest.approx((0.0, 0.0, 1.0))

    mesh.reverse_face(face)
    assert recalculate_face_normal(mesh, face) == pytest.approx((0.0, 0.0, -1.0))


def test_coplanar_faces_share_plane_normal():
    mesh = primitives.grid(2, 2)
    recalculate_normals(mesh)
    centre = find_by_position(mesh, (1, 1, 0))
    assert mesh.vertex_face_count(centre) == 4
    midpoints = [find_by_position(mesh, p) for p in [(1, 0, 0), (0, 1, 0), (2, 1, 0), (1, 2, 0)]]
    for v in midpoints:
        assert mesh.vertex_face_count(v) == 2
    for v in [centre] + midpoints + mesh.vertices:
        assert mesh.vertex(v).normal == pytest.approx((0.0, 0.0, 1.0))


def test_normals_follow_extrusion():
    mesh = primitives.quad()
    face = mesh.faces[0]
    result = extrude(mesh, face)
    mesh.translate(face, (0, 0, 1))
    recalculate_normals(mesh)
    assert mesh.face(face).normal == pytest.approx((0.0, 0.0, 1.0))
    for side in result.faces:
        assert mesh.face(side).normal[2] == pytest.approx(0.0)


def test_quad_tangent_follows_u():
    mesh = primitives.quad()
    recalculate_normals(mesh)
    recalculate_tangents(mesh)
    for v in mesh.vertices:
        assert mesh.vertex(v).tangent == pytest.approx((1.0, 0.0, 0.0, 1.0))


def test_mirrored_uvs_flip_handedness():
    mesh = primitives.quad()
    for v in mesh.vertices:
        u, w = mesh.vertex(v).uv
        mesh.set_uv(v, (u, 1.0 - w))
    recalculate_normals(mesh)
    recalculate_tangents(mesh)
    for v in mesh.vertices:
        assert mesh.vertex(v).tangent == pytest.approx((1.0, 0.0, 0.0, -1.0))


def test_tangent_without_uvs_is_perpendicular():
    mesh = primitives.cube()
    recalculate_normals(mesh)
    recalculate_tangents(mesh)
    for v in mesh.vertices:
        record = mesh.vertex(v)
        tangent = record.tangent[:3]
        assert mag(tangent) == pytest.approx(1.0)
        assert dot(tangent, record.normal) == pytest.approx(0.0, abs=1e-9)
        assert record.tangent[3] in (1.0, -1.0)


def test_tangent_without_normal_is_default():
    mesh = EditableMesh()
    v = mesh.create_vertex()
    recalculate_normals(mesh)
    recalculate_tangents(mesh)
    assert mesh.vertex(v).tangent == (1.0, 0.0, 0.0, 1.0)


def test_flip_normals():
    mesh = primitives.quad()
    q0, q1, q2, q3 = mesh.vertices
    face = mesh.faces[0]
    recalculate_normals(mesh)

    flip_normals(mesh)

    assert mesh.face_vertices(face) == [q3, q2, q1, q0]
    assert mesh.face(face).normal == pytest.approx((0.0, 0.0, -1.0))
    assert mesh.vertex(q0).normal == pytest.approx((0.0, 0.0, -1.0))

    recalculate_normals(mesh)
    assert mesh.face(face).normal == pytest.approx((0.0, 0.0, -1.0))


def test_finalize_returns_buffers():
    mesh = primitives.cube()
    buffers = finalize(mesh)
    assert isinstance(buffers, MeshBuffers)
    assert buffers.positions.shape == (8, 3)
    assert buffers.tangents.shape == (8, 4)
    assert len(buffers.faces) == 6
    corner = find_by_position(mesh, (1, 1, 1))
    row = buffers.row_of()[corner]
    s = 1.0 / math.sqrt(3.0)
    assert tuple(buffers.normals[row]) == pytest.approx((s, s, s), rel=1e-6)
