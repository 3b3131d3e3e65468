"""I/O utilities for yapmesh."""

from .obj import parse_obj, read_obj, write_obj

__all__ = ['parse_obj', 'read_obj', 'write_obj']
