"""Wavefront OBJ import and export for editable meshes.

Copyright (c) 2026 yapmesh contributors
MIT License
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Tuple, Union

from yapmesh.config import MeshSettings
from yapmesh.errors import ObjParseError, TopologyError
from yapmesh.topology import EditableMesh, Handle

logger = logging.getLogger(__name__)

_DEFAULT_OBJECT = 'default'

# Statements that are valid OBJ but carry nothing an editable mesh keeps
_IGNORED = frozenset({'vn', 'vp', 'mtllib', 'usemtl', 's', 'g'})


class _ObjectBuilder:
    """One ``o`` block.  OBJ indices are global, so vertices that another
    object declared are copied in on first use."""

    def __init__(self, name: str, settings: Optional[MeshSettings]):
        self.name = name
        self.mesh = EditableMesh(settings)
        self.handles: Dict[int, Handle] = {}

    def vertex(self, index: int, positions: List[Tuple[float, float, float]]) -> Handle:
        handle = self.handles.get(index)
        if handle is None:
            handle = self.mesh.create_vertex(positions[index])
            self.handles[index] = handle
        return handle


def _parse_floats(values: List[str], count: int, keyword: str, line: int) -> Tuple[float, ...]:
    if len(values) < count:
        raise ObjParseError(f"'{keyword}' needs {count} values, got {len(values)}", line)
    try:
        return tuple(float(v) for v in values[:count])
    except ValueError:
        raise ObjParseError(f"malformed number in '{keyword}' statement: {' '.join(values)}",
                            line) from None


def _resolve_index(token: str, count: int, what: str, line: int) -> int:
    """Turn a 1-based or negative OBJ index into a 0-based list index."""
    try:
        index = int(token)
    except ValueError:
        raise ObjParseError(f"malformed {what} index {token!r}", line) from None
    if index > 0:
        resolved = index - 1
    elif index < 0:
        resolved = count + index
    else:
        raise ObjParseError(f"{what} index 0 is not valid", line)
    if not 0 <= resolved < count:
        raise ObjParseError(f"{what} index {index} is out of range ({count} defined)", line)
    return resolved


def parse_obj(text: str, settings: Optional[MeshSettings] = None) -> Dict[str, EditableMesh]:
    """Parse OBJ ``text`` into one :class:`EditableMesh` per object.

    Parameters
    ----------
    text : str
        Contents of an OBJ file.
    settings : MeshSettings, optional
        Passed on to every mesh created.

    Returns
    -------
    dict
        Object name -> mesh, in file order.  Geometry that appears before
        any ``o`` statement goes to an object named ``'default'``.

    Raises
    ------
    ObjParseError
        On malformed numbers, bad indices or degenerate faces.
    """
    positions: List[Tuple[float, float, float]] = []
    uvs: List[Tuple[float, float]] = []
    objects: Dict[str, _ObjectBuilder] = {}
    current: Optional[_ObjectBuilder] = None

    def _current() -> _ObjectBuilder:
        nonlocal current
        if current is None:
            current = objects.setdefault(_DEFAULT_OBJECT,
                                         _ObjectBuilder(_DEFAULT_OBJECT, settings))
        return current

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.split('#', 1)[0].strip()
        if not line:
            continue
        keyword, *values = line.split()

        if keyword == 'o':
            name = ' '.join(values) or f"object{len(objects)}"
            if name in objects:
                logger.warning(f"Line {lineno}: object '{name}' declared twice, merging")
                current = objects[name]
            else:
                current = objects[name] = _ObjectBuilder(name, settings)
        elif keyword == 'v':
            position = _parse_floats(values, 3, keyword, lineno)
            positions.append(position)
            builder = _current()
            builder.vertex(len(positions) - 1, positions)
        elif keyword == 'vt':
            if len(values) == 1:
                values = values + ['0']
            uvs.append(_parse_floats(values, 2, keyword, lineno))
        elif keyword == 'f':
            _add_face(_current(), values, positions, uvs, lineno)
        elif keyword == 'l':
            _add_polyline(_current(), values, positions, lineno)
        elif keyword in _IGNORED:
            continue
        else:
            logger.warning(f"Line {lineno}: ignoring unsupported statement '{keyword}'")

    meshes = {name: builder.mesh for name, builder in objects.items()}
    logger.debug(f"Parsed {len(meshes)} objects, {len(positions)} positions, {len(uvs)} uvs")
    return meshes


def _add_face(builder: _ObjectBuilder, corners: List[str], positions, uvs, lineno: int) -> None:
    if len(corners) < 3:
        raise ObjParseError(f"a face needs at least 3 corners, got {len(corners)}", lineno)
    loop = []
    for corner in corners:
        parts = corner.split('/')
        index = _resolve_index(parts[0], len(positions), 'vertex', lineno)
        handle = builder.vertex(index, positions)
        if len(parts) > 1 and parts[1]:
            uv_index = _resolve_index(parts[1], len(uvs), 'texture', lineno)
            builder.mesh.set_uv(handle, uvs[uv_index])
        loop.append(handle)
    try:
        builder.mesh.create_face(loop)
    except TopologyError as exc:
        raise ObjParseError(str(exc), lineno, exc.details) from exc


def _add_polyline(builder: _ObjectBuilder, tokens: List[str], positions, lineno: int) -> None:
    if len(tokens) < 2:
        raise ObjParseError(f"a line needs at least 2 vertices, got {len(tokens)}", lineno)
    chain = [
        builder.vertex(_resolve_index(t.split('/')[0], len(positions), 'vertex', lineno), positions)
        for t in tokens
    ]
    for a, b in zip(chain, chain[1:]):
        if a == b:
            raise ObjParseError(f"line segment joins vertex {a} to itself", lineno)
        builder.mesh.create_edge(a, b)


def read_obj(path_or_file, settings: Optional[MeshSettings] = None) -> Dict[str, EditableMesh]:
    """Read an OBJ file from a path or an open text/binary stream.

    Bytes are decoded as UTF-8; invalid input raises :class:`ObjParseError`
    naming the line that holds the first bad byte.
    """
    if hasattr(path_or_file, 'read'):
        data = path_or_file.read()
    else:
        logger.info(f"Reading OBJ file {path_or_file}")
        with open(path_or_file, 'rb') as f:
            data = f.read()
    if isinstance(data, bytes):
        data = _decode(data)
    return parse_obj(data, settings)


def _decode(data: bytes) -> str:
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as e:
        lineno = data.count(b'\n', 0, e.start) + 1
        raise ObjParseError(f"invalid UTF-8 byte 0x{data[e.start]:02x}", lineno) from e


def write_obj(meshes: Union[EditableMesh, Mapping[str, EditableMesh]], path_or_file,
              *, name: str = 'yapmesh') -> None:
    """Write one mesh, or a name -> mesh mapping, as OBJ text.

    Every vertex gets one ``vt`` entry.  Edges that belong to no face are
    written as ``l`` statements so they survive a round trip.  Normals are
    not written.
    """
    if isinstance(meshes, EditableMesh):
        meshes = {name: meshes}

    close_when_done = False
    if hasattr(path_or_file, 'write'):
        stream = path_or_file
    else:
        stream = open(path_or_file, 'w', encoding='utf-8')
        close_when_done = True

    try:
        print("# yapmesh OBJ export", file=stream)
        offset = 0
        for obj_name, mesh in meshes.items():
            print(f"o {obj_name}", file=stream)
            index: Dict[Handle, int] = {}
            for i, v in enumerate(mesh.vertices, start=offset + 1):
                index[v] = i
                x, y, z = mesh.vertex(v).position
                print(f"v {x:.6f} {y:.6f} {z:.6f}", file=stream)
            for v in mesh.vertices:
                u, w = mesh.vertex(v).uv
                print(f"vt {u:.6f} {w:.6f}", file=stream)
            for f in mesh.faces:
                corners = ' '.join(f"{index[v]}/{index[v]}" for v in mesh.face(f).vertices)
                print(f"f {corners}", file=stream)
            for e in mesh.edges:
                record = mesh.edge(e)
                if not record.faces:
                    print(f"l {index[record.one]} {index[record.two]}", file=stream)
            offset += mesh.vertex_count
    finally:
        if close_when_done:
            stream.close()


__all__ = ['parse_obj', 'read_obj', 'write_obj']
