#!/usr/bin/env python3
"""
Command line inspection of OBJ files.

Usage:
    yapmesh [-v] [--config FILE] [--log-file FILE] info FILE.obj
    yapmesh [-v] [--config FILE] [--log-file FILE] check FILE.obj

``info`` prints vertex, edge and face counts per object together with the
result of the invariant check.  ``check`` prints only problems and exits
with status 1 if any object fails.

The log level comes from the ``log_level`` setting unless ``-v`` asks for
debug output.  A settings file that cannot be read or validated is reported
on stderr with exit status 1.
"""

import argparse
import logging
import sys
from pathlib import Path

import yaml

from yapmesh.checks import check_invariants, faces_consistent, mesh_watertight
from yapmesh.config import load_settings
from yapmesh.errors import MeshError
from yapmesh.io.obj import read_obj
from yapmesh.logging_config import setup_logging


def _load(args):
    source_path = Path(args.file)
    if not source_path.exists():
        print(f"Error: File not found: {source_path}", file=sys.stderr)
        return None
    try:
        return read_obj(source_path, args.settings)
    except MeshError as e:
        print(f"Error: {e}", file=sys.stderr)
        return None


def cmd_info(args):
    """Print per-object counts and check results."""
    meshes = _load(args)
    if meshes is None:
        return 1

    print(f"{Path(args.file).name}: {len(meshes)} object(s)")
    for name, mesh in meshes.items():
        counts = mesh.summary()
        valid = check_invariants(mesh)
        closed = mesh_watertight(mesh)
        consistent = faces_consistent(mesh)
        print(f"  {name}: {counts['vertices']} vertices, {counts['edges']} edges, "
              f"{counts['faces']} faces")
        print(f"    valid: {'yes' if valid else 'no'}, "
              f"watertight: {'yes' if closed else 'no'}, "
              f"consistent winding: {'yes' if consistent else 'no'}")
        for warning in valid.warnings:
            print(f"    - {warning}")
    return 0


def cmd_check(args):
    """Exit non-zero if any object breaks a topology invariant."""
    meshes = _load(args)
    if meshes is None:
        return 1

    failed = 0
    for name, mesh in meshes.items():
        result = check_invariants(mesh)
        if not result:
            failed += 1
            print(f"{name}: {len(result.warnings)} problem(s)")
            for warning in result.warnings:
                print(f"  - {warning}")

    if failed:
        print(f"FAILED: {failed} of {len(meshes)} object(s)")
        return 1
    print(f"OK: {len(meshes)} object(s)")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='yapmesh',
        description='Inspect and validate editable meshes stored as OBJ',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    parser.add_argument('--config', metavar='FILE', help='YAML settings file')
    parser.add_argument('--log-file', metavar='FILE', help='Also write log records to FILE')

    subparsers = parser.add_subparsers(dest='action', required=True)

    info_parser = subparsers.add_parser('info', help='Show object counts and check results')
    info_parser.add_argument('file', help='OBJ file')

    check_parser = subparsers.add_parser('check', help='Validate topology invariants')
    check_parser.add_argument('file', help='OBJ file')

    args = parser.parse_args(argv)

    try:
        args.settings = load_settings(args.config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error: Cannot load settings: {e}", file=sys.stderr)
        return 1

    setup_logging(logging.DEBUG if args.verbose else args.settings.log_level, args.log_file)

    if args.action == 'info':
        return cmd_info(args)
    elif args.action == 'check':
        return cmd_check(args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
