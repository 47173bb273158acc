"""Topology builder: merge wired terminals into electrical nodes."""

from __future__ import annotations
import logging
from typing import Iterable

from .network import Network, Node, Connection, ComponentKind, terminal_count

logger = logging.getLogger(__name__)


class DisjointSet:
    """
    Union-find over integer slots.

    `parent` is a flat array of parent indices; a slot is a root when it is
    its own parent.
    """

    def __init__(self, size: int):
        self.parent = list(range(size))

    def add(self) -> int:
        """Allocate a new singleton slot and return its index."""
        self.parent.append(len(self.parent))
        return len(self.parent) - 1

    def find(self, i: int) -> int:
        root = i
        while self.parent[root] != root:
            root = self.parent[root]
        # Path compression
        while self.parent[i] != root:
            self.parent[i], i = root, self.parent[i]
        return root

    def union(self, a: int, b: int) -> None:
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a != root_b:
            self.parent[root_a] = root_b


def rebuild_topology(network: Network, connections: Iterable[Connection]) -> list[Node]:
    """
    Rebuild the node set from scratch and repoint every component terminal.

    One slot is allocated per terminal of every component, wired slots are
    merged, and each distinct root that a component still references becomes
    a Node. Nodes are numbered in order of first reference, so an unchanged
    circuit always yields the same numbering.

    Connections naming a removed component or an out-of-range terminal are
    skipped. Unwired terminals become single-terminal nodes.

    The first battery's terminal 1 (negative) becomes the ground node.

    All new state is computed before anything in `network` is touched, so a
    reader never sees new nodes alongside old terminal references.

    Returns:
        The new node list (also stored as `network.nodes`).
    """
    slots = DisjointSet(0)
    slot_base: dict[int, int] = {}
    for comp in network.components.values():
        slot_base[comp.id] = len(slots.parent)
        for _ in range(terminal_count(comp.kind)):
            slots.add()

    skipped = 0
    for conn in connections:
        if not (network.is_valid_terminal(conn.a) and network.is_valid_terminal(conn.b)):
            skipped += 1
            continue
        slots.union(
            slot_base[conn.a.component] + conn.a.index,
            slot_base[conn.b.component] + conn.b.index,
        )

    root_to_node: dict[int, int] = {}
    new_terminals: dict[int, list[int]] = {}
    for comp in network.components.values():
        refs = []
        for t in range(terminal_count(comp.kind)):
            root = slots.find(slot_base[comp.id] + t)
            if root not in root_to_node:
                root_to_node[root] = len(root_to_node)
            refs.append(root_to_node[root])
        new_terminals[comp.id] = refs

    nodes = [Node(id=i, name=f"node_{i}") for i in range(len(root_to_node))]

    ground = next(
        (c for c in network.components.values() if c.kind is ComponentKind.BATTERY),
        None,
    )
    if ground is not None:
        nodes[new_terminals[ground.id][1]].is_ground = True

    # Commit
    network.nodes = nodes
    for comp in network.components.values():
        comp.nodes = new_terminals[comp.id]

    logger.debug(
        "Rebuilt topology: %d terminals -> %d nodes (%d connections skipped)",
        len(slots.parent), len(nodes), skipped,
    )
    return nodes
