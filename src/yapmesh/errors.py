"""Exception types raised by yapmesh.

Lookups that find nothing are not errors and return ``None`` or an empty
list.  The classes below are reserved for contract violations.
"""

from __future__ import annotations


class MeshError(ValueError):
    """Base class for mesh contract violations."""

    def __init__(self, message, details=None):
        super().__init__(message)
        self.details = details or {}


class StaleHandleError(MeshError):
    """Raised when a handle is not a live entity of the expected kind."""

    def __init__(self, handle, expected=None, details=None):
        if expected:
            message = f"handle {handle!r} is not a live {expected} of this mesh"
        else:
            message = f"handle {handle!r} is not a live entity of this mesh"
        details = dict(details or {})
        details.setdefault('handle', handle)
        details.setdefault('expected', expected)
        super().__init__(message, details)
        self.handle = handle
        self.expected = expected


class TopologyError(MeshError):
    """Raised when a request would leave the mesh structurally invalid."""


class ObjParseError(MeshError):
    """Raised for malformed Wavefront OBJ input."""

    def __init__(self, message, line=None, details=None):
        details = dict(details or {})
        if line is not None:
            details['line'] = line
            message = f"line {line}: {message}"
        super().__init__(message, details)
        self.line = line


class UnsupportedOperationError(NotImplementedError):
    """Raised by operations that are declared but intentionally not implemented."""

    def __init__(self, operation):
        super().__init__(f"{operation} is not supported")
        self.operation = operation


__all__ = [
    'MeshError',
    'StaleHandleError',
    'TopologyError',
    'ObjParseError',
    'UnsupportedOperationError',
]
