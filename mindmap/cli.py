#!/usr/bin/env python3
"""Mind map CLI - an interactive command shell and an HTTP server."""

import argparse
import logging
import math
import sys

from pydantic import ValidationError

from .config import Settings
from .core import (
    MindMap, NodeNotFoundError,
    to_dot, save_svg,
    validate_mindmap, validation_summary, summarize_mindmap,
)


HELP_TEXT = """Commands:
  add <parent_id> <text>   - add a node under a parent
  move <node_id> <dx> <dy> - move a node by an offset
  list                     - show all nodes
  dot                      - print the map in DOT format
  svg [path]               - save the map as SVG
  stats                    - summarize the map
  validate                 - check the map's structure
  help                     - show this help
  quit                     - exit"""


class UsageError(Exception):
    """A shell command was called with missing or malformed arguments."""


def _parse_int(value: str, name: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise UsageError(f"{name} must be an integer, got {value!r}")


def _parse_float(value: str, name: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise UsageError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(number):
        raise UsageError(f"{name} must be a finite number, got {value!r}")
    return number


# ── Node commands ────────────────────────────────────────────────────────────

def cmd_add(mindmap, args, settings):
    if len(args) < 2:
        raise UsageError("usage: add <parent_id> <text>")
    parent_id = _parse_int(args[0], "parent_id")
    text = " ".join(args[1:])

    try:
        new_id = mindmap.add_node(parent_id, text)
    except NodeNotFoundError:
        print(f"Error: parent node {parent_id} does not exist")
        return
    print(f"Added node {new_id} as a child of {parent_id}")


def cmd_move(mindmap, args, settings):
    if len(args) != 3:
        raise UsageError("usage: move <node_id> <dx> <dy>")
    node_id = _parse_int(args[0], "node_id")
    dx = _parse_float(args[1], "dx")
    dy = _parse_float(args[2], "dy")

    try:
        mindmap.nudge(node_id, dx, dy)
    except NodeNotFoundError:
        print(f"Error: node {node_id} does not exist")
        return
    print(f"Moved node {node_id}")


def cmd_list(mindmap, args, settings):
    print("Nodes:")
    for node in sorted(mindmap.list_all(), key=lambda n: n.id):
        print(f"[{node.id}] {node.text} (pos: {node.x:.1f}, {node.y:.1f}) level: {node.level}")
        if node.children:
            print(f"  children: {node.children}")


# ── Export ───────────────────────────────────────────────────────────────────

def cmd_dot(mindmap, args, settings):
    print("DOT:")
    print(to_dot(mindmap))


def cmd_svg(mindmap, args, settings):
    file_path = args[0] if args else settings.svg_path
    try:
        path = save_svg(mindmap, file_path)
    except OSError as e:
        print(f"Error: failed to save {file_path}: {e}")
        return
    print(f"Saved as {path}")


# ── Analysis ─────────────────────────────────────────────────────────────────

def cmd_stats(mindmap, args, settings):
    summary = summarize_mindmap(mindmap)
    print(f"Root: {summary.root_text}")
    print(f"Nodes: {summary.total_nodes}  Edges: {summary.total_edges}  "
          f"Leaves: {summary.leaf_count}  Depth: {summary.max_depth}")
    for level, count in summary.nodes_by_level.items():
        print(f"  level {level}: {count}")
    if summary.aliased_parents:
        print(f"Overlapping siblings under: {summary.aliased_parents}")


def cmd_validate(mindmap, args, settings):
    issues = validate_mindmap(mindmap)
    summary = validation_summary(issues)
    for issue in issues:
        where = f" (node {issue.node_id})" if issue.node_id is not None else ""
        print(f"{issue.severity.value}: {issue.message}{where}")
    print("Valid" if summary["valid"] else f"Invalid: {summary['errors']} error(s)")


def cmd_help(mindmap, args, settings):
    print(HELP_TEXT)


COMMANDS = {
    "add": cmd_add,
    "move": cmd_move,
    "list": cmd_list,
    "dot": cmd_dot,
    "svg": cmd_svg,
    "stats": cmd_stats,
    "validate": cmd_validate,
    "help": cmd_help,
}

QUIT_COMMANDS = ("quit", "exit")


def run_command(mindmap: MindMap, line: str, settings: Settings) -> bool:
    """
    Execute one shell line against the map.

    Returns:
        False when the shell should exit, True otherwise
    """
    parts = line.split()
    if not parts:
        return True

    name, args = parts[0], parts[1:]
    if name in QUIT_COMMANDS:
        return False

    command = COMMANDS.get(name)
    if command is None:
        print("Unknown command, type 'help' for a list of commands")
        return True

    try:
        command(mindmap, args, settings)
    except UsageError as e:
        print(f"Error: {e}")
    return True


def shell(mindmap: MindMap, settings: Settings, stdin=None):
    """Read commands line by line until quit or end of input."""
    stdin = stdin or sys.stdin
    interactive = stdin.isatty()

    print("Mind map generator")
    print(HELP_TEXT)

    while True:
        if interactive:
            print("> ", end="", flush=True)
        line = stdin.readline()
        if not line:
            break
        if not run_command(mindmap, line, settings):
            break


# ── Main ─────────────────────────────────────────────────────────────────────

def main(argv=None):
    parser = argparse.ArgumentParser(description="Mind map tool")
    parser.add_argument("--root-text", default=None, help="Label of the root node")
    parser.add_argument("--log-level", default=None)
    sub = parser.add_subparsers(dest="command")

    p = sub.add_parser("shell", help="Interactive command shell (default)")
    p.add_argument("--svg-path", default=None)

    p = sub.add_parser("serve", help="Serve the HTTP API")
    p.add_argument("--host", default=None)
    p.add_argument("--port", type=int, default=None)
    p.add_argument("--svg-path", default=None)

    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env(
            root_text=args.root_text,
            log_level=args.log_level,
            svg_path=getattr(args, "svg_path", None),
            host=getattr(args, "host", None),
            port=getattr(args, "port", None),
        )
    except ValidationError as e:
        parser.error(f"invalid settings: {e}")

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    mindmap = MindMap(settings.root_text)

    if args.command == "serve":
        from .backend import run
        run(mindmap, settings)
    else:
        shell(mindmap, settings)


if __name__ == "__main__":
    main()
