# -*- coding: utf-8 -*-
"""Editable polygon mesh topology with extrusion, selection and deletion."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("yapmesh")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

from yapmesh.errors import (
    MeshError,
    StaleHandleError,
    TopologyError,
    UnsupportedOperationError,
)
from yapmesh.topology import EditableMesh, Edge, Face, Vertex
from yapmesh.extrude import ExtrusionResult, extrude
from yapmesh.deletion import DeletionResult, delete_geometry
from yapmesh.attributes import (
    finalize,
    flip_normals,
    recalculate_normals,
    recalculate_tangents,
)

__all__ = [
    "__version__",
    "EditableMesh",
    "Vertex",
    "Edge",
    "Face",
    "MeshError",
    "StaleHandleError",
    "TopologyError",
    "UnsupportedOperationError",
    "extrude",
    "ExtrusionResult",
    "delete_geometry",
    "DeletionResult",
    "recalculate_normals",
    "recalculate_tangents",
    "flip_normals",
    "finalize",
]
