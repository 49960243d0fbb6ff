"""Path matching and tree-wide lifecycle over ``RouteNode`` trees.

Matching walks one path segment at a time, preferring a child whose
name equals the segment over the wildcard child. ``bootstrap`` and
``shutdown`` visit nodes in pre-order (parent first, children left to
right).
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from wordchain.errors import LifecycleError, RouteConfigurationError
from wordchain.routing.node import RouteNode

logger = logging.getLogger("wordchain.routing")


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful match.

    ``segment`` is the literal path piece consumed by the final step,
    or ``None`` when the path resolved to the root.
    """

    node: RouteNode
    segment: str | None


def split_path(path: str) -> list[str]:
    """Split *path* on ``/``, dropping empty pieces (leading, trailing, doubled)."""
    return [piece for piece in path.split("/") if piece]


def match(path: str, root: RouteNode) -> RouteMatch | None:
    """Resolve *path* to the node that should handle it, or ``None``."""
    node = root
    segment: str | None = None
    for piece in split_path(path):
        if not node.children:
            return None
        exact: RouteNode | None = None
        wildcard: RouteNode | None = None
        for child in node.children:
            if child.is_wildcard:
                wildcard = child
            elif child.name == piece:
                exact = child
                break
        chosen = exact or wildcard
        if chosen is None:
            return None
        node = chosen
        segment = piece
    return RouteMatch(node=node, segment=segment)


def walk(root: RouteNode) -> Iterator[RouteNode]:
    """Yield every node in pre-order."""
    yield root
    for child in root.children:
        yield from walk(child)


def validate_tree(root: RouteNode) -> None:
    """Reject duplicate child names and multiple wildcards under one parent.

    Raises:
        RouteConfigurationError: naming the parent and the offending child.
    """
    for node in walk(root):
        seen: set[str] = set()
        for child in node.children:
            if not child.name:
                msg = f"Route under {node.name or '/'!r} has an empty name."
                raise RouteConfigurationError(msg)
            if child.name in seen:
                kind = "wildcard" if child.is_wildcard else "child"
                msg = f"Route {node.name or '/'!r} has more than one {kind} named {child.name!r}."
                raise RouteConfigurationError(msg)
            seen.add(child.name)


async def bootstrap(root: RouteNode) -> None:
    """Run every node's ``up`` hook in pre-order.

    The first failure stops the traversal; nodes already brought up are
    not rolled back.

    Raises:
        LifecycleError: wrapping the failing hook's exception.
    """
    for node in walk(root):
        try:
            await node.up()
        except Exception as exc:
            raise LifecycleError(node.name or "/", exc) from exc
        logger.debug("up: %s", node.name or "/")


async def shutdown(root: RouteNode) -> Exception | None:
    """Run every node's ``down`` hook in pre-order.

    The first failure stops the traversal, is logged, and is returned
    rather than raised.
    """
    for node in walk(root):
        try:
            await node.down()
        except Exception as exc:
            logger.exception("down hook of route %r failed", node.name or "/")
            return exc
        logger.debug("down: %s", node.name or "/")
    return None


def format_tree(root: RouteNode) -> list[str]:
    """Render the tree as indented lines of ``/path  ClassName``."""
    lines: list[str] = []

    def visit(node: RouteNode, prefix: str) -> None:
        path = prefix if node is not root else "/"
        methods = ", ".join(sorted(node.allowed_methods())) or "-"
        lines.append(f"{path:<24} {methods:<20} {type(node).__name__}")
        for child in node.children:
            visit(child, f"{prefix}/{child.name}")

    visit(root, "")
    return lines
