"""Per-kind defaults and property editors for placed components."""

from __future__ import annotations
from typing import NamedTuple

from .network import Component, ComponentKind


class KindDefaults(NamedTuple):
    """Initial electrical state for a freshly placed component."""
    resistance: float = 10.0
    voltage: float = 0.0
    is_open: bool = False


DEFAULTS: dict[ComponentKind, KindDefaults] = {
    ComponentKind.BATTERY: KindDefaults(resistance=0.1, voltage=9.0),
    ComponentKind.BULB: KindDefaults(resistance=50.0),
    ComponentKind.SWITCH: KindDefaults(resistance=0.001, is_open=True),
    ComponentKind.RESISTOR: KindDefaults(resistance=100.0),
    ComponentKind.VOLTMETER: KindDefaults(resistance=1e9),
    ComponentKind.AMMETER: KindDefaults(resistance=0.001),
    ComponentKind.JOINT: KindDefaults(resistance=0.001),
    ComponentKind.LED: KindDefaults(resistance=10.0),
    ComponentKind.PUSHBUTTON: KindDefaults(resistance=1e9, is_open=True),
    ComponentKind.BUZZER: KindDefaults(resistance=100.0),
    ComponentKind.LDR: KindDefaults(resistance=250.0),
    ComponentKind.POTENTIOMETER: KindDefaults(resistance=250.0),
}

# Slider ranges for the adjustable resistors
LDR_MAX_RESISTANCE = 500.0
POT_MAX_RESISTANCE = 500.0
MIN_ADJUSTABLE_RESISTANCE = 0.001

PRESSED_RESISTANCE = 0.001
RELEASED_RESISTANCE = 1e9


def parse_kind(kind: ComponentKind | str) -> ComponentKind:
    """Accept a ComponentKind or its string value ("battery", "led", ...)."""
    if isinstance(kind, ComponentKind):
        return kind
    try:
        return ComponentKind(str(kind).lower())
    except ValueError:
        raise ValueError(f"Unknown component kind: {kind}") from None


def defaults_for(kind: ComponentKind) -> KindDefaults:
    """Defaults for `kind`; motor and spdt fall back to the generic 10 Ω."""
    return DEFAULTS.get(kind, KindDefaults())


def _require(comp: Component, *kinds: ComponentKind) -> None:
    if comp.kind not in kinds:
        expected = ", ".join(k.value for k in kinds)
        raise ValueError(f"Component {comp.id} is a {comp.kind.value}, expected {expected}")


def toggle_switch(comp: Component) -> None:
    _require(comp, ComponentKind.SWITCH)
    comp.is_open = not comp.is_open


def press(comp: Component) -> None:
    """Close a pushbutton (held down)."""
    _require(comp, ComponentKind.PUSHBUTTON)
    comp.is_open = False
    comp.resistance = PRESSED_RESISTANCE


def release(comp: Component) -> bool:
    """Open a pushbutton. Returns True if it was pressed."""
    _require(comp, ComponentKind.PUSHBUTTON)
    if comp.is_open:
        return False
    comp.is_open = True
    comp.resistance = RELEASED_RESISTANCE
    return True


def toggle_spdt(comp: Component) -> None:
    _require(comp, ComponentKind.SPDT)
    comp.spdt_state = 1 if comp.spdt_state == 0 else 0


def set_light_level(comp: Component, percent: float) -> None:
    """
    Set an LDR's illumination.

    0 % light is the full 500 Ω, 100 % light is (nearly) a short.
    """
    _require(comp, ComponentKind.LDR)
    percent = min(max(percent, 0.0), 100.0)
    resistance = LDR_MAX_RESISTANCE - percent * (LDR_MAX_RESISTANCE / 100.0)
    comp.resistance = max(resistance, MIN_ADJUSTABLE_RESISTANCE)


def set_wiper(comp: Component, resistance: float) -> None:
    """Set a potentiometer's resistance (0 to 500 Ω slider)."""
    _require(comp, ComponentKind.POTENTIOMETER)
    resistance = min(resistance, POT_MAX_RESISTANCE)
    comp.resistance = max(resistance, MIN_ADJUSTABLE_RESISTANCE)


def set_resistance(comp: Component, resistance: float) -> None:
    comp.resistance = float(resistance)


def set_source_voltage(comp: Component, voltage: float) -> None:
    _require(comp, ComponentKind.BATTERY)
    comp.voltage = float(voltage)
