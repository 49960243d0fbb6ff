"""Routing: a tree of ``RouteNode`` objects with wildcard capture.

The tree is built once, validated when the app is constructed, and
treated as immutable while serving.
"""

from wordchain.routing.dispatch import (
    RouteMatch,
    bootstrap,
    format_tree,
    match,
    shutdown,
    validate_tree,
    walk,
)
from wordchain.routing.node import WILDCARD, RouteNode

__all__ = [
    "WILDCARD",
    "RouteMatch",
    "RouteNode",
    "bootstrap",
    "format_tree",
    "match",
    "shutdown",
    "validate_tree",
    "walk",
]
