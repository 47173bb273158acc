"""
Test: Topology rebuild (union-find node merging).

Tests:
1. Wired terminals share a node, unwired terminals get their own
2. Invalid connections are skipped silently
3. The first battery's negative terminal is the only ground
4. Rebuilds never leave references to nodes outside the node list
"""
import pytest

from pybreadboard import (
    ComponentKind,
    Connection,
    DisjointSet,
    Network,
    Terminal,
    rebuild_topology,
    wire,
)


class TestDisjointSet:

    def test_union_merges_sets(self):
        ds = DisjointSet(4)
        ds.union(0, 1)
        ds.union(2, 3)
        assert ds.find(0) == ds.find(1)
        assert ds.find(2) == ds.find(3)
        assert ds.find(0) != ds.find(2)

        ds.union(1, 3)
        assert len({ds.find(i) for i in range(4)}) == 1

    def test_find_compresses_path(self):
        ds = DisjointSet(4)
        # Chain 0 -> 1 -> 2 -> 3
        ds.union(0, 1)
        ds.union(1, 2)
        ds.union(2, 3)
        root = ds.find(0)
        assert ds.parent[0] == root
        assert ds.parent[1] == root

    def test_add_allocates_singleton(self):
        ds = DisjointSet(0)
        a = ds.add()
        b = ds.add()
        assert (a, b) == (0, 1)
        assert ds.find(a) != ds.find(b)


class TestRebuild:

    def test_wired_terminals_share_node(self):
        net = Network()
        r1 = net.add(ComponentKind.RESISTOR)
        r2 = net.add(ComponentKind.RESISTOR)

        nodes = rebuild_topology(net, [wire(r1, 1, r2, 0)])

        assert len(nodes) == 3
        assert r1.nodes[1] == r2.nodes[0]
        assert r1.nodes[0] != r2.nodes[1]

    def test_nodes_numbered_by_first_reference(self):
        net = Network()
        r1 = net.add(ComponentKind.RESISTOR)
        r2 = net.add(ComponentKind.RESISTOR)

        nodes = rebuild_topology(net, [wire(r1, 1, r2, 0)])

        assert r1.nodes == [0, 1]
        assert r2.nodes == [1, 2]
        assert [n.name for n in nodes] == ["node_0", "node_1", "node_2"]
        assert [n.id for n in nodes] == [0, 1, 2]

    def test_unwired_terminals_are_isolated_nodes(self):
        net = Network()
        net.add(ComponentKind.RESISTOR)
        net.add(ComponentKind.LED)

        nodes = rebuild_topology(net, [])
        assert len(nodes) == 4

    def test_spdt_gets_three_terminals(self):
        net = Network()
        sw = net.add(ComponentKind.SPDT)
        rebuild_topology(net, [])
        assert len(sw.nodes) == 3
        assert len(set(sw.nodes)) == 3

    def test_invalid_connections_are_skipped(self):
        net = Network()
        r1 = net.add(ComponentKind.RESISTOR)
        r2 = net.add(ComponentKind.RESISTOR)

        edges = [
            Connection(Terminal(r1.id, 0), Terminal(999, 0)),   # no such component
            Connection(Terminal(r1.id, 5), Terminal(r2.id, 0)),  # no such terminal
            Connection(Terminal(r1.id, -1), Terminal(r2.id, 1)),
        ]
        nodes = rebuild_topology(net, edges)

        # Nothing merged
        assert len(nodes) == 4

    def test_first_battery_negative_is_ground(self):
        net = Network()
        r1 = net.add(ComponentKind.RESISTOR)
        bat1 = net.add(ComponentKind.BATTERY)
        bat2 = net.add(ComponentKind.BATTERY)

        nodes = rebuild_topology(net, [wire(r1, 0, bat1, 0)])

        grounds = [n for n in nodes if n.is_ground]
        assert len(grounds) == 1
        assert grounds[0].id == bat1.nodes[1]
        assert not nodes[bat2.nodes[1]].is_ground

    def test_no_battery_no_ground(self):
        net = Network()
        net.add(ComponentKind.RESISTOR)
        nodes = rebuild_topology(net, [])
        assert not any(n.is_ground for n in nodes)

    def test_ground_propagates_through_wires(self):
        """Anything wired to the battery's negative terminal is the ground node."""
        net = Network()
        bat = net.add(ComponentKind.BATTERY)
        r1 = net.add(ComponentKind.RESISTOR)

        nodes = rebuild_topology(net, [wire(r1, 1, bat, 1)])
        assert nodes[r1.nodes[1]].is_ground

    def test_all_references_point_into_node_list(self):
        net = Network()
        bat = net.add(ComponentKind.BATTERY)
        r1 = net.add(ComponentKind.RESISTOR)
        sw = net.add(ComponentKind.SPDT)
        edges = [wire(bat, 0, sw, 0), wire(sw, 1, r1, 0), wire(r1, 1, bat, 1)]

        nodes = rebuild_topology(net, edges)

        referenced = set()
        for comp in net.components.values():
            for node_id in comp.nodes:
                assert node_id is not None
                assert 0 <= node_id < len(nodes)
                referenced.add(node_id)
        # Every node is used by some terminal
        assert referenced == set(range(len(nodes)))

    def test_rebuild_replaces_previous_nodes(self):
        net = Network()
        r1 = net.add(ComponentKind.RESISTOR)
        r2 = net.add(ComponentKind.RESISTOR)

        first = rebuild_topology(net, [wire(r1, 1, r2, 0)])
        second = rebuild_topology(net, [])

        assert len(second) == 4
        assert net.nodes is second
        assert all(a is not b for a in first for b in second)

    def test_removed_component_edges_ignored(self):
        net = Network()
        r1 = net.add(ComponentKind.RESISTOR)
        r2 = net.add(ComponentKind.RESISTOR)
        r3 = net.add(ComponentKind.RESISTOR)
        edges = [wire(r1, 1, r2, 0), wire(r2, 1, r3, 0)]

        net.remove(r2)
        nodes = rebuild_topology(net, edges)

        assert len(nodes) == 4
        assert r1.nodes[1] != r3.nodes[0]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
