import pytest

from yapmesh import primitives
from yapmesh.errors import UnsupportedOperationError
from yapmesh.extrude import extrude
from yapmesh.selection import (
    find_all_by_position,
    find_by_position,
    get_connected_vertices,
    get_faces,
    is_connected,
    select_edges_from_vertices,
    select_faces_from_vertices,
    select_less,
    select_loop,
    select_more,
    select_seam,
    select_shortest_path,
)

MINUS_X = [(-1, -1, -1), (-1, -1, 1), (-1, 1, -1), (-1, 1, 1)]


def test_select_faces_requires_every_vertex():
    mesh = primitives.cube()
    verts = [find_by_position(mesh, p) for p in MINUS_X]
    assert select_faces_from_vertices(mesh, verts) == [mesh.faces[0]]
    assert select_faces_from_vertices(mesh, verts[:3]) == []


def test_select_faces_from_all_vertices():
    mesh = primitives.cube()
    assert select_faces_from_vertices(mesh, mesh.vertices) == mesh.faces


def test_select_edges_from_vertices():
    mesh = primitives.cube()
    verts = [find_by_position(mesh, p) for p in MINUS_X]
    edges = select_edges_from_vertices(mesh, verts)
    assert len(edges) == 4
    assert sorted(edges) == sorted(mesh.face_edges(mesh.faces[0]))


def test_select_edges_ignores_unjoined_pairs():
    mesh = primitives.quad()
    q0, q1, q2, q3 = mesh.vertices
    assert select_edges_from_vertices(mesh, [q0, q2]) == []


def test_find_by_position():
    mesh = primitives.quad()
    assert find_by_position(mesh, (1, 1, 0)) == mesh.vertices[2]
    assert find_by_position(mesh, (1, 1, 0.0001)) is None


def test_find_by_position_first_in_creation_order():
    mesh = primitives.quad()
    corner = mesh.vertices[0]
    result = extrude(mesh, corner)
    assert find_by_position(mesh, (0, 0, 0)) == corner
    assert find_all_by_position(mesh, (0, 0, 0)) == [corner, result.standin(corner)]


def test_wrappers():
    mesh = primitives.quad()
    q0, q1, q2, q3 = mesh.vertices
    face = mesh.faces[0]
    assert get_connected_vertices(mesh, q0) == sorted([q1, q3])
    assert get_faces(mesh, q0) == [face]
    assert is_connected(mesh, q0, q1)
    assert not is_connected(mesh, q0, q2)
    assert is_connected(mesh, face, q2)


def test_select_more():
    mesh = primitives.quad()
    q0, q1, q2, q3 = mesh.vertices
    grown = select_more(mesh, [q0])
    assert grown[0] == q0
    assert sorted(grown) == sorted([q0, q1, q3])


def test_select_less():
    mesh = primitives.grid(2, 2)
    corner = find_by_position(mesh, (0, 0, 0))
    rest = [v for v in mesh.vertices if v != corner]
    kept = select_less(mesh, rest)
    assert len(kept) == 6
    assert find_by_position(mesh, (1, 0, 0)) not in kept
    assert find_by_position(mesh, (0, 1, 0)) not in kept


def test_select_less_of_everything_is_everything():
    mesh = primitives.cube()
    assert select_less(mesh, mesh.vertices) == mesh.vertices


@pytest.mark.parametrize('call', [
    lambda mesh: select_loop(mesh, mesh.vertices[0], 0.0, 45.0),
    lambda mesh: select_shortest_path(mesh, mesh.vertices[0], mesh.vertices[1]),
    lambda mesh: select_seam(mesh, mesh.vertices[0], 0.0, 45.0),
])
def test_unsupported_selections(call):
    mesh = primitives.quad()
    with pytest.raises(UnsupportedOperationError):
        call(mesh)
