"""
Indicator readouts for display: brightness, overload flags, meter readings.

Everything here is derived from the most recent solve and recomputed on every
call; nothing is latched (a bulb that drops back under 12 V reads as healthy).
"""

from __future__ import annotations
from typing import NamedTuple

from .network import ComponentKind, Handle

BULB_FULL_BRIGHTNESS_V = 9.0
BULB_OVERLOAD_V = 12.0
LED_MAX_CURRENT = 0.02   # A, full brightness and overload threshold
MIN_GLOW = 0.05          # fraction of full brightness before a lamp visibly lights
BUZZER_ON_CURRENT = 0.01
MOTOR_SPEED_PER_AMP = 0.02  # rad per frame per A


class Indicator(NamedTuple):
    """Display state of one component."""
    kind: ComponentKind
    drop: float            # terminal 0 minus terminal 1, V
    current: float         # A
    brightness: float = 0.0
    lit: bool = False
    overloaded: bool = False
    active: bool = False   # buzzer sounding
    reading: float = 0.0   # meter reading (V or A) or motor angular speed


def _clamp01(x: float) -> float:
    return min(max(x, 0.0), 1.0)


def indicator(sim, handle: Handle) -> Indicator:
    """
    Compute the display state of a component.

    Args:
        sim: Simulation holding the component
        handle: Component or component id

    Returns:
        Indicator for the component's kind; kinds without a visual effect
        only carry drop and current.
    """
    comp = sim.component(handle)
    drop = sim.voltage_across(comp)
    current = comp.current
    base = Indicator(kind=comp.kind, drop=drop, current=current)

    if comp.kind is ComponentKind.BULB:
        overloaded = abs(drop) > BULB_OVERLOAD_V
        brightness = 0.0 if overloaded else _clamp01(abs(drop) / BULB_FULL_BRIGHTNESS_V)
        return base._replace(brightness=brightness, lit=brightness > MIN_GLOW, overloaded=overloaded)

    if comp.kind is ComponentKind.LED:
        overloaded = abs(current) > LED_MAX_CURRENT
        brightness = 0.0 if overloaded else _clamp01(abs(current) / LED_MAX_CURRENT)
        lit = drop > 0 and brightness > MIN_GLOW
        return base._replace(brightness=brightness, lit=lit, overloaded=overloaded)

    if comp.kind is ComponentKind.BUZZER:
        return base._replace(active=abs(current) > BUZZER_ON_CURRENT)

    if comp.kind is ComponentKind.MOTOR:
        return base._replace(reading=current * MOTOR_SPEED_PER_AMP, active=current != 0.0)

    if comp.kind is ComponentKind.VOLTMETER:
        return base._replace(reading=drop)

    if comp.kind is ComponentKind.AMMETER:
        return base._replace(reading=current)

    return base
