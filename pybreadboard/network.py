"""Entity store: nodes, components and wires addressed by stable integer ids."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Union


class ComponentKind(Enum):
    """Every placeable part. Values match the names used by front-ends."""
    RESISTOR = "resistor"
    BATTERY = "battery"
    SWITCH = "switch"
    PUSHBUTTON = "pushbutton"
    BULB = "bulb"
    LED = "led"
    VOLTMETER = "voltmeter"
    AMMETER = "ammeter"
    BUZZER = "buzzer"
    LDR = "ldr"
    POTENTIOMETER = "potentiometer"
    MOTOR = "motor"
    SPDT = "spdt"
    JOINT = "joint"


def terminal_count(kind: ComponentKind) -> int:
    """Number of connection points: common + two outputs for spdt, else two."""
    return 3 if kind is ComponentKind.SPDT else 2


@dataclass(eq=False)
class Node:
    """
    An electrical node (merged set of terminals).

    Nodes are rebuilt from scratch on every topology rebuild; `id` is the
    node's index in `Network.nodes` for the current rebuild only.
    """
    id: int
    name: str
    voltage: float = 0.0
    is_ground: bool = False


@dataclass(eq=False)
class Component:
    """
    A placed part. Survives rebuilds; only `nodes` is rewritten.

    `nodes[i]` is the id of the node terminal i belongs to, or None before the
    first rebuild. Terminal 0 is the positive side for batteries and the anode
    for LEDs; for spdt, terminal 0 is common and 1/2 are the outputs.
    """
    id: int
    kind: ComponentKind
    nodes: list[int | None]
    resistance: float = 10.0
    voltage: float = 0.0       # source voltage (batteries)
    is_open: bool = False      # switches and pushbuttons
    spdt_state: int = 0        # 0 -> output 1 active, 1 -> output 2 active
    current: float = 0.0       # solver output
    effective_resistance: float = 0.0  # resistance stamped in the last pass
    # Presentation only; never read by the solver
    x: float = 0.0
    y: float = 0.0
    rotation: int = 0


class Terminal(NamedTuple):
    """A (component id, terminal index) reference."""
    component: int
    index: int


class Connection(NamedTuple):
    """A wire between two terminals."""
    a: Terminal
    b: Terminal


Handle = Union[Component, int]


def handle_id(handle: Handle) -> int:
    """Component id of a Component or a bare id."""
    return handle.id if isinstance(handle, Component) else int(handle)


def wire(a: Handle, a_index: int, b: Handle, b_index: int) -> Connection:
    """
    Build a connection between terminal `a_index` of `a` and `b_index` of `b`.

    Example:
        sim.set_connections([wire(bat, 0, r1, 0), wire(r1, 1, bat, 1)])
    """
    return Connection(Terminal(handle_id(a), a_index), Terminal(handle_id(b), b_index))


@dataclass
class Network:
    """
    Owns all components and the current node list.

    Component ids come from a counter and are never reused, so an id held by
    a caller can go stale but never alias a different component.
    """
    components: dict[int, Component] = field(default_factory=dict)
    nodes: list[Node] = field(default_factory=list)
    next_id: int = 0

    def add(self, kind: ComponentKind, **attrs) -> Component:
        """Create a component of `kind` with unset terminals and store it."""
        comp = Component(
            id=self.next_id,
            kind=kind,
            nodes=[None] * terminal_count(kind),
            **attrs,
        )
        self.components[comp.id] = comp
        self.next_id += 1
        return comp

    def remove(self, handle: Handle) -> Component:
        comp_id = handle_id(handle)
        if comp_id not in self.components:
            raise KeyError(f"Unknown component id {comp_id}")
        return self.components.pop(comp_id)

    def component(self, handle: Handle) -> Component:
        comp_id = handle_id(handle)
        if comp_id not in self.components:
            raise KeyError(f"Unknown component id {comp_id}")
        return self.components[comp_id]

    def node_of(self, comp: Component, terminal: int) -> Node | None:
        """Node a terminal currently belongs to (None if not yet rebuilt)."""
        node_id = comp.nodes[terminal]
        if node_id is None:
            return None
        return self.nodes[node_id]

    def terminal_voltage(self, comp: Component, terminal: int) -> float:
        node = self.node_of(comp, terminal)
        return node.voltage if node is not None else 0.0

    def is_valid_terminal(self, terminal: Terminal) -> bool:
        """True when the terminal names a live component and an existing slot."""
        comp = self.components.get(terminal.component)
        if comp is None:
            return False
        return 0 <= terminal.index < terminal_count(comp.kind)

    def batteries(self) -> list[Component]:
        return [c for c in self.components.values() if c.kind is ComponentKind.BATTERY]

    def clear(self) -> None:
        self.components.clear()
        self.nodes.clear()
