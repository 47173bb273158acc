"""Simulation: explicitly owned engine state plus the edit operations that drive it."""

from __future__ import annotations
import logging
from typing import Iterable

from .network import (
    Network,
    Node,
    Component,
    ComponentKind,
    Connection,
    Terminal,
    Handle,
    wire,
)
from .components import parse_kind, defaults_for
from . import components as editors
from .solver import SolverSettings, SolveReport, solve_network
from .topology import rebuild_topology

logger = logging.getLogger(__name__)


class Simulation:
    """
    One interactive circuit: components, wires, nodes and solver settings.

    Every call runs to completion before returning; a rebuild and the solve
    that follows it are never interleaved with other edits.

    Example:
        sim = Simulation()
        bat = sim.add_component("battery")
        r1 = sim.add_component("resistor")
        sim.connect(bat, 0, r1, 0)
        sim.connect(r1, 1, bat, 1)
        sim.rebuild()
        r1.current  # ~0.09 A
    """

    def __init__(self, settings: SolverSettings | None = None):
        self.settings = settings if settings is not None else SolverSettings()
        self.network = Network()
        self._connections: list[Connection] = []

    # --- Lifecycle ---

    def reset(self) -> None:
        """Discard every component, node and wire."""
        self.network.clear()
        self._connections = []

    # --- Entity access ---

    @property
    def components(self) -> list[Component]:
        return list(self.network.components.values())

    @property
    def nodes(self) -> list[Node]:
        return list(self.network.nodes)

    @property
    def connections(self) -> list[Connection]:
        return list(self._connections)

    def component(self, handle: Handle) -> Component:
        return self.network.component(handle)

    def node_of(self, handle: Handle, terminal: int) -> Node | None:
        return self.network.node_of(self.component(handle), terminal)

    def voltage_at(self, handle: Handle, terminal: int) -> float:
        """Voltage of the node a terminal belongs to (0 if not yet rebuilt)."""
        return self.network.terminal_voltage(self.component(handle), terminal)

    def voltage_across(self, handle: Handle) -> float:
        """Terminal 0 minus terminal 1."""
        comp = self.component(handle)
        return self.network.terminal_voltage(comp, 0) - self.network.terminal_voltage(comp, 1)

    # --- Components ---

    def add_component(self, kind: ComponentKind | str, x: float = 0.0, y: float = 0.0) -> Component:
        """
        Place a component with its kind's default values.

        Its terminals stay unconnected until the next rebuild().
        """
        kind = parse_kind(kind)
        d = defaults_for(kind)
        comp = self.network.add(
            kind, resistance=d.resistance, voltage=d.voltage, is_open=d.is_open, x=x, y=y,
        )
        logger.debug("Added %s #%d", kind.value, comp.id)
        return comp

    def remove_component(self, handle: Handle) -> Component:
        """
        Remove a component, every wire attached to it, and any joint those
        wires were holding.

        Does not rebuild; call rebuild() once the edits are done.
        """
        comp = self.network.remove(handle)
        self._connections = [
            c for c in self._connections
            if c.a.component != comp.id and c.b.component != comp.id
        ]
        self.remove_orphaned_joints()
        logger.debug("Removed %s #%d", comp.kind.value, comp.id)
        return comp

    # --- Wiring ---

    def set_connections(self, edges: Iterable[Connection]) -> None:
        """
        Replace the whole wire list used by the next rebuild().

        Edges may be Connection values or plain ((id, index), (id, index)) pairs.
        """
        self._connections = [
            Connection(Terminal(*a), Terminal(*b)) for a, b in edges
        ]

    def connect(self, a: Handle, a_index: int, b: Handle, b_index: int) -> Connection | None:
        """Add one wire. A wire from a terminal to itself is ignored."""
        edge = wire(a, a_index, b, b_index)
        if edge.a == edge.b:
            return None
        self._connections.append(edge)
        return edge

    def disconnect(self, edge: Connection) -> SolveReport:
        """Remove one wire and any joint left without wires, then rebuild."""
        self._connections.remove(edge)
        self.remove_orphaned_joints()
        return self.rebuild()

    def split_connection(self, edge: Connection, x: float = 0.0, y: float = 0.0) -> Component:
        """
        Insert a joint into an existing wire and rebuild.

        The wire a-b becomes a-joint.0 and joint.1-b.
        """
        self._connections.remove(edge)
        joint = self.add_component(ComponentKind.JOINT, x, y)
        self._connections.append(Connection(edge.a, Terminal(joint.id, 0)))
        self._connections.append(Connection(Terminal(joint.id, 1), edge.b))
        self.rebuild()
        return joint

    def remove_orphaned_joints(self) -> list[Component]:
        """Delete joints that no wire references. Returns the removed joints."""
        used = set()
        for c in self._connections:
            used.add(c.a.component)
            used.add(c.b.component)
        orphans = [
            comp for comp in self.network.components.values()
            if comp.kind is ComponentKind.JOINT and comp.id not in used
        ]
        for comp in orphans:
            self.network.remove(comp)
        return orphans

    # --- Solving ---

    def rebuild(self) -> SolveReport:
        """Recompute nodes from the wire list, then solve."""
        rebuild_topology(self.network, self._connections)
        return self.solve()

    def solve(self) -> SolveReport:
        """Re-solve with the current topology (after a property edit)."""
        return solve_network(self.network, self.settings)

    # --- Property edits (each re-solves) ---

    def toggle_switch(self, handle: Handle) -> SolveReport:
        editors.toggle_switch(self.component(handle))
        return self.solve()

    def press(self, handle: Handle) -> SolveReport:
        editors.press(self.component(handle))
        return self.solve()

    def release_all(self) -> SolveReport | None:
        """Release every held pushbutton; solves only if one was held."""
        released = [
            editors.release(c) for c in self.network.components.values()
            if c.kind is ComponentKind.PUSHBUTTON
        ]
        if any(released):
            return self.solve()
        return None

    def toggle_spdt(self, handle: Handle) -> SolveReport:
        editors.toggle_spdt(self.component(handle))
        return self.solve()

    def set_resistance(self, handle: Handle, resistance: float) -> SolveReport:
        editors.set_resistance(self.component(handle), resistance)
        return self.solve()

    def set_source_voltage(self, handle: Handle, voltage: float) -> SolveReport:
        editors.set_source_voltage(self.component(handle), voltage)
        return self.solve()

    def set_light_level(self, handle: Handle, percent: float) -> SolveReport:
        editors.set_light_level(self.component(handle), percent)
        return self.solve()

    def set_wiper(self, handle: Handle, resistance: float) -> SolveReport:
        editors.set_wiper(self.component(handle), resistance)
        return self.solve()

    def __repr__(self) -> str:
        return (f"Simulation({len(self.network.components)} components, "
                f"{len(self.network.nodes)} nodes, {len(self._connections)} wires)")
