"""PyBreadboard - interactive DC circuit solver.

Reconstructs electrical nodes from terminal-to-terminal wires and solves
node voltages and branch currents with an iterative Modified Nodal Analysis
(MNA) engine, including ideal switches and a simplified LED model.

Usage:
    from pybreadboard import Simulation, wire

    sim = Simulation()
    bat = sim.add_component("battery")
    r1 = sim.add_component("resistor")
    sim.set_connections([wire(bat, 0, r1, 0), wire(r1, 1, bat, 1)])
    sim.rebuild()
    print(r1.current)
"""

import jax

# Pivot and leakage thresholds (1e-10, 1e-12) are below float32 resolution.
jax.config.update("jax_enable_x64", True)

from .network import (  # noqa: E402
    ComponentKind,
    Node,
    Component,
    Terminal,
    Connection,
    Network,
    terminal_count,
    wire,
)
from .solver import SolverSettings, SolveReport, solve_network  # noqa: E402
from .topology import DisjointSet, rebuild_topology  # noqa: E402
from .simulation import Simulation  # noqa: E402
from .readouts import Indicator, indicator  # noqa: E402
from .subcircuits import (  # noqa: E402
    DividerRefs,
    SelectorRefs,
    series_loop,
    voltage_divider,
    selector,
)

__version__ = "0.1.0"
__all__ = [
    # Entity store
    "ComponentKind",
    "Node",
    "Component",
    "Terminal",
    "Connection",
    "Network",
    "terminal_count",
    "wire",
    # Topology
    "DisjointSet",
    "rebuild_topology",
    # Solving
    "SolverSettings",
    "SolveReport",
    "solve_network",
    "Simulation",
    # Readouts
    "Indicator",
    "indicator",
    # Subcircuits
    "DividerRefs",
    "SelectorRefs",
    "series_loop",
    "voltage_divider",
    "selector",
    "__version__",
]
