import pytest

from yapmesh import primitives
from yapmesh.editing import (
    TransformType,
    move_relative,
    move_vertex,
    set_face,
    transform_vertices,
    triangulate,
)
from yapmesh.errors import UnsupportedOperationError


def test_move_vertex():
    mesh = primitives.quad()
    v = mesh.vertices[0]
    move_vertex(mesh, v, (3, 4, 5))
    assert mesh.position(v) == (3.0, 4.0, 5.0)


def test_move_relative_moves_shared_vertices_once():
    mesh = primitives.quad()
    q0, q1, q2, q3 = mesh.vertices
    e01 = mesh.get_edge_between(q0, q1)
    e12 = mesh.get_edge_between(q1, q2)
    moved = move_relative(mesh, [e01, e12, q1], (0, 0, 1))
    assert sorted(moved) == sorted([q0, q1, q2])
    assert mesh.position(q1) == (1.0, 0.0, 1.0)
    assert mesh.position(q3) == (0.0, 1.0, 0.0)


def test_transform_types():
    assert {t.name for t in TransformType} == {'BOUNDING_BOX_CENTER', 'INDIVIDUAL_CENTER'}


def test_unsupported_operations():
    mesh = primitives.quad()
    with pytest.raises(UnsupportedOperationError) as excinfo:
        transform_vertices(mesh, mesh.vertices, None, TransformType.INDIVIDUAL_CENTER)
    assert excinfo.value.operation == 'transform_vertices'
    with pytest.raises(NotImplementedError):
        set_face(mesh, mesh.faces[0])
    with pytest.raises(UnsupportedOperationError):
        triangulate(mesh, mesh.faces)
    assert mesh.face_count == 1
