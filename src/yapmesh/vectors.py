"""Small vector helpers on plain ``(x, y, z)`` tuples."""

from __future__ import annotations

from math import sqrt
from typing import Sequence, Tuple

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]
Vec4 = Tuple[float, float, float, float]

ZERO3: Vec3 = (0.0, 0.0, 0.0)
ZERO2: Vec2 = (0.0, 0.0)


def to_vec3(point_like: Sequence[float]) -> Vec3:
    """Return the XYZ components of a point-like sequence as a float tuple."""

    if len(point_like) < 3:
        raise ValueError("value must have at least three components")
    return float(point_like[0]), float(point_like[1]), float(point_like[2])


def to_vec2(uv_like: Sequence[float]) -> Vec2:
    """Return the first two components of ``uv_like`` as a float tuple."""

    if len(uv_like) < 2:
        raise ValueError("texture coordinate must have two components")
    return float(uv_like[0]), float(uv_like[1])


def add(a: Sequence[float], b: Sequence[float]) -> Vec3:
    """3 vector, ``a + b``"""
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub(a: Sequence[float], b: Sequence[float]) -> Vec3:
    """3 vector, ``a - b``"""
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale3(a: Sequence[float], c: float) -> Vec3:
    """3 vector ``a`` times scalar ``c``"""
    return (a[0] * c, a[1] * c, a[2] * c)


def neg(a: Sequence[float]) -> Vec3:
    return (-a[0], -a[1], -a[2])


def dot(a: Sequence[float], b: Sequence[float]) -> float:
    """3 vector ``a`` dot ``b``"""
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a: Sequence[float], b: Sequence[float]) -> Vec3:
    """3 vector ``a`` cross ``b``"""
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def mag(a: Sequence[float]) -> float:
    """Magnitude of 3 vector ``a``."""
    return sqrt(a[0] * a[0] + a[1] * a[1] + a[2] * a[2])


def normalize(a: Sequence[float], eps: float = 1e-12) -> Vec3 | None:
    """Return ``a`` scaled to unit length, or ``None`` if it is degenerate."""

    length = mag(a)
    if length <= eps:
        return None
    return (a[0] / length, a[1] / length, a[2] / length)


def any_perpendicular(n: Sequence[float]) -> Vec3:
    """Return a unit vector perpendicular to the unit vector ``n``.

    The result is deterministic: ``n`` is crossed with whichever world axis
    it is least aligned with.
    """

    ax, ay, az = abs(n[0]), abs(n[1]), abs(n[2])
    if ax <= ay and ax <= az:
        axis = (1.0, 0.0, 0.0)
    elif ay <= az:
        axis = (0.0, 1.0, 0.0)
    else:
        axis = (0.0, 0.0, 1.0)
    result = normalize(cross(axis, n))
    return result if result is not None else (1.0, 0.0, 0.0)


__all__ = [
    'Vec2',
    'Vec3',
    'Vec4',
    'ZERO2',
    'ZERO3',
    'to_vec2',
    'to_vec3',
    'add',
    'sub',
    'scale3',
    'neg',
    'dot',
    'cross',
    'mag',
    'normalize',
    'any_perpendicular',
]
