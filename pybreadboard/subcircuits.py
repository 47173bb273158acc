"""Reusable wiring building blocks.

Builders only place components and append wires; call sim.rebuild()
afterwards to merge nodes and solve.
"""

from __future__ import annotations
from typing import NamedTuple

from .network import Component, Connection, ComponentKind, wire


def series_loop(sim, source: Component, *elements: Component) -> list[Connection]:
    """
    Wire a source and two-terminal elements into one series loop.

    Topology:
        source(+) ──[e1]──[e2]── ... ──[eN]── source(-)

    Each element is entered at terminal 0 and left at terminal 1, so LEDs
    added here are forward biased by a battery source.

    Args:
        sim: Simulation holding the components
        source: Battery (terminal 0 positive)
        *elements: Two-terminal components in loop order

    Returns:
        The added connections (also appended to the simulation's wire list)
    """
    chain = [(source, 0)]
    for elem in elements:
        chain.append((elem, 0))
        chain.append((elem, 1))
    chain.append((source, 1))

    edges = [
        wire(chain[k][0], chain[k][1], chain[k + 1][0], chain[k + 1][1])
        for k in range(0, len(chain), 2)
    ]
    sim.set_connections(sim.connections + edges)
    return edges


class DividerRefs(NamedTuple):
    """Components of a voltage divider."""
    battery: Component
    r_top: Component
    r_bottom: Component


def voltage_divider(sim, r_top: float = 100.0, r_bottom: float = 100.0,
                    voltage: float = 9.0) -> DividerRefs:
    """
    Battery driving two resistors in series.

    Topology:
        bat(+) ──[r_top]──(mid)──[r_bottom]── bat(-)

    The midpoint is terminal 1 of r_top.
    """
    bat = sim.add_component(ComponentKind.BATTERY)
    bat.voltage = voltage
    top = sim.add_component(ComponentKind.RESISTOR)
    top.resistance = r_top
    bottom = sim.add_component(ComponentKind.RESISTOR)
    bottom.resistance = r_bottom
    series_loop(sim, bat, top, bottom)
    return DividerRefs(bat, top, bottom)


class SelectorRefs(NamedTuple):
    """Components of an spdt load selector."""
    battery: Component
    spdt: Component
    load_a: Component
    load_b: Component


def selector(sim, r_a: float = 100.0, r_b: float = 100.0) -> SelectorRefs:
    """
    Battery feeding one of two resistive loads through an spdt.

    Topology:
        bat(+) ── common ─┬─ out1 ──[load_a]──┬── bat(-)
                          └─ out2 ──[load_b]──┘

    spdt_state 0 powers load_a, state 1 powers load_b.
    """
    bat = sim.add_component(ComponentKind.BATTERY)
    sw = sim.add_component(ComponentKind.SPDT)
    load_a = sim.add_component(ComponentKind.RESISTOR)
    load_a.resistance = r_a
    load_b = sim.add_component(ComponentKind.RESISTOR)
    load_b.resistance = r_b
    sim.set_connections(sim.connections + [
        wire(bat, 0, sw, 0),
        wire(sw, 1, load_a, 0),
        wire(sw, 2, load_b, 0),
        wire(load_a, 1, bat, 1),
        wire(load_b, 1, bat, 1),
    ])
    return SelectorRefs(bat, sw, load_a, load_b)
