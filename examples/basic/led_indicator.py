"""
Example: LED indicator with a switch and a selector

Circuit 1:
    bat(+) ──[switch]──[LED]──[R 1k]── bat(-)

Circuit 2 (spdt selector):
    bat(+) ── common ─┬─ out1 ──[R 100]──┬── bat(-)
                      └─ out2 ──[R 300]──┘

Components used: battery, switch, led, resistor, spdt
"""
from pybreadboard import Simulation, indicator, selector, series_loop


def led_demo():
    sim = Simulation()
    bat = sim.add_component("battery")
    sw = sim.add_component("switch")
    led = sim.add_component("led")
    r1 = sim.add_component("resistor")
    r1.resistance = 1000.0
    series_loop(sim, bat, sw, led, r1)
    sim.rebuild()

    for label in ("open", "closed"):
        ind = indicator(sim, led)
        print(f"   Switch {label:6s}: I = {ind.current * 1e3:7.3f} mA, "
              f"R_led = {led.effective_resistance:8.0f} Ω, lit = {ind.lit}, "
              f"brightness = {ind.brightness:.2f}")
        sim.toggle_switch(sw)

    print("\n   Removing the 1k resistor (LED straight across the battery):")
    sim.remove_component(r1)
    sim.connect(led, 1, bat, 1)
    sim.rebuild()
    ind = indicator(sim, led)
    print(f"   I = {ind.current * 1e3:.1f} mA, overloaded = {ind.overloaded}")


def selector_demo():
    sim = Simulation()
    refs = selector(sim, r_a=100.0, r_b=300.0)
    sim.rebuild()

    for _ in range(2):
        print(f"   state {refs.spdt.spdt_state}: "
              f"I_a = {refs.load_a.current * 1e3:7.3f} mA, "
              f"I_b = {refs.load_b.current * 1e3:7.3f} mA")
        sim.toggle_spdt(refs.spdt)


def main():
    print("=" * 60)
    print("LED Indicator Example")
    print("=" * 60)

    print("\n1. Switched LED")
    print("-" * 40)
    led_demo()

    print("\n2. SPDT load selector")
    print("-" * 40)
    selector_demo()

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
