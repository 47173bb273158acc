"""
Iterative DC solver using MNA (Modified Nodal Analysis).

Each pass assembles
    G * x = z
with one unknown per non-ground node followed by one branch-current unknown
per battery, solves it, and writes voltages and currents back into the
Node / Component records. Passes repeat so that voltage-dependent models
(the LED) can settle on the previous pass's voltages.
"""

from __future__ import annotations
import logging
from typing import Callable, NamedTuple

import jax.numpy as jnp

from .network import Network, Component, ComponentKind
from .linalg import gaussian_solve

logger = logging.getLogger(__name__)


class SolverSettings(NamedTuple):
    """Solver constants. Defaults reproduce the interactive simulator."""
    max_passes: int = 10
    tolerance: float = 1e-3          # V, largest node change to stop early
    leakage: float = 1e-12           # S, added to every node diagonal
    min_resistance: float = 1e-6     # Ω, floor before inverting
    pivot_tolerance: float = 1e-10
    closed_resistance: float = 1e-3  # Ω, closed switch / active spdt path
    open_resistance: float = 1e9     # Ω, open switch / inactive spdt path
    led_on_resistance: float = 90.0
    led_off_resistance: float = 1e7
    led_threshold: float = 0.5       # V, forward drop that turns the LED on


class SolveReport(NamedTuple):
    """Diagnostics for one solve; informational only."""
    passes: int        # 0 when the solve was skipped
    max_delta: float   # largest node voltage change in the last pass
    converged: bool
    unknowns: int


class Branch(NamedTuple):
    """A resistive path between two terminals of one component."""
    terminal_a: int
    terminal_b: int
    resistance: float


class PassContext(NamedTuple):
    network: Network
    settings: SolverSettings
    first_pass: bool


BranchModel = Callable[[Component, PassContext], tuple[Branch, ...]]


def _fixed_branch(comp: Component, ctx: PassContext) -> tuple[Branch, ...]:
    return (Branch(0, 1, comp.resistance),)


def _switch_branch(comp: Component, ctx: PassContext) -> tuple[Branch, ...]:
    s = ctx.settings
    r = s.open_resistance if comp.is_open else s.closed_resistance
    return (Branch(0, 1, r),)


def _spdt_branches(comp: Component, ctx: PassContext) -> tuple[Branch, ...]:
    s = ctx.settings
    to_out1 = s.closed_resistance if comp.spdt_state == 0 else s.open_resistance
    to_out2 = s.closed_resistance if comp.spdt_state == 1 else s.open_resistance
    return (Branch(0, 1, to_out1), Branch(0, 2, to_out2))


def _led_branch(comp: Component, ctx: PassContext) -> tuple[Branch, ...]:
    """Two-state diode: off on the first pass, then decided by the last drop."""
    s = ctx.settings
    if ctx.first_pass:
        return (Branch(0, 1, s.led_off_resistance),)
    drop = (ctx.network.terminal_voltage(comp, 0)
            - ctx.network.terminal_voltage(comp, 1))
    r = s.led_on_resistance if drop > s.led_threshold else s.led_off_resistance
    return (Branch(0, 1, r),)


BRANCH_MODELS: dict[ComponentKind, BranchModel] = {
    ComponentKind.SWITCH: _switch_branch,
    ComponentKind.PUSHBUTTON: _switch_branch,
    ComponentKind.SPDT: _spdt_branches,
    ComponentKind.LED: _led_branch,
}


def branches_for(comp: Component, ctx: PassContext) -> tuple[Branch, ...]:
    """Resistive branches of a non-source component for this pass."""
    model = BRANCH_MODELS.get(comp.kind, _fixed_branch)
    return model(comp, ctx)


def _node_index(network: Network, comp: Component, terminal: int,
                index_of: dict[int, int]) -> int:
    """MNA row of a terminal's node, or -1 for ground / unconnected."""
    node_id = comp.nodes[terminal]
    if node_id is None:
        return -1
    return index_of.get(node_id, -1)


def solve_network(network: Network, settings: SolverSettings | None = None) -> SolveReport:
    """
    Solve node voltages and component currents in place.

    Never raises for degenerate circuits: floating sections are held by the
    leakage conductance and near-singular pivots leave their unknown at 0.

    Returns:
        SolveReport (passes == 0 if there was nothing to solve)
    """
    s = settings if settings is not None else SolverSettings()

    active = [n for n in network.nodes if not n.is_ground]
    batteries = network.batteries()
    n_nodes = len(active)
    size = n_nodes + len(batteries)
    if size == 0:
        return SolveReport(passes=0, max_delta=0.0, converged=True, unknowns=0)

    index_of = {n.id: i for i, n in enumerate(active)}
    battery_row = {c.id: n_nodes + k for k, c in enumerate(batteries)}

    max_delta = 0.0
    passes = 0
    converged = False
    for pass_idx in range(s.max_passes):
        ctx = PassContext(network, s, first_pass=(pass_idx == 0))
        rows: list[int] = []
        cols: list[int] = []
        vals: list[float] = []
        z = [0.0] * size
        used: dict[int, tuple[Branch, ...]] = {}

        def stamp(r: int, c: int, v: float):
            rows.append(r)
            cols.append(c)
            vals.append(v)

        # Leakage to ground on every node
        for i in range(n_nodes):
            stamp(i, i, s.leakage)

        for comp in network.components.values():
            if comp.kind is ComponentKind.BATTERY:
                row = battery_row[comp.id]
                i = _node_index(network, comp, 0, index_of)
                j = _node_index(network, comp, 1, index_of)
                if i >= 0:
                    stamp(row, i, 1.0)
                    stamp(i, row, 1.0)
                if j >= 0:
                    stamp(row, j, -1.0)
                    stamp(j, row, -1.0)
                z[row] = comp.voltage
                continue

            branches = tuple(
                b._replace(resistance=max(b.resistance, s.min_resistance))
                for b in branches_for(comp, ctx)
            )
            used[comp.id] = branches
            for b in branches:
                g = 1.0 / b.resistance
                i = _node_index(network, comp, b.terminal_a, index_of)
                j = _node_index(network, comp, b.terminal_b, index_of)
                if i >= 0:
                    stamp(i, i, g)
                if j >= 0:
                    stamp(j, j, g)
                if i >= 0 and j >= 0:
                    stamp(i, j, -g)
                    stamp(j, i, -g)

        G = jnp.zeros((size, size)).at[
            jnp.array(rows, dtype=jnp.int32), jnp.array(cols, dtype=jnp.int32)
        ].add(jnp.array(vals, dtype=jnp.float64))
        rhs = jnp.array(z, dtype=jnp.float64)
        x = gaussian_solve(G, rhs, pivot_tolerance=s.pivot_tolerance).tolist()

        max_delta = 0.0
        for i, node in enumerate(active):
            max_delta = max(max_delta, abs(node.voltage - x[i]))
            node.voltage = x[i]
        for node in network.nodes:
            if node.is_ground:
                node.voltage = 0.0

        for comp in network.components.values():
            if comp.kind is ComponentKind.BATTERY:
                comp.current = x[battery_row[comp.id]]
                comp.effective_resistance = 0.0
                continue
            branches = used[comp.id]
            if comp.kind is ComponentKind.SPDT:
                active_branch = branches[0] if comp.spdt_state == 0 else branches[1]
                v_common = network.terminal_voltage(comp, 0)
                v_out = network.terminal_voltage(comp, active_branch.terminal_b)
                comp.current = (v_common - v_out) / s.closed_resistance
                comp.effective_resistance = active_branch.resistance
            else:
                (branch,) = branches
                drop = (network.terminal_voltage(comp, 0)
                        - network.terminal_voltage(comp, 1))
                comp.current = drop / branch.resistance
                comp.effective_resistance = branch.resistance

        passes = pass_idx + 1
        if pass_idx > 0 and max_delta < s.tolerance:
            converged = True
            break

    if converged:
        logger.debug("Solved %d unknowns in %d passes (max delta %.3g V)",
                     size, passes, max_delta)
    else:
        logger.info("No convergence after %d passes (max delta %.3g V); keeping last state",
                    passes, max_delta)
    return SolveReport(passes=passes, max_delta=max_delta, converged=converged, unknowns=size)
