"""
Example: Voltage Divider

Demonstrates the voltage divider rule: V_out = V_in * R2 / (R1 + R2)

Three examples:
1. Simple 2-resistor divider (50% division with equal resistors)
2. Editing a resistor and re-solving without a rebuild
3. Splitting the tap wire with a joint

Components used: battery, resistor, joint
"""
import logging

from pybreadboard import Simulation, voltage_divider, wire


def simulate_divider(V_in=9.0, R1=100.0, R2=100.0):
    """Build and solve a divider; return the tap voltage."""
    sim = Simulation()
    refs = voltage_divider(sim, r_top=R1, r_bottom=R2, voltage=V_in)
    sim.rebuild()
    return sim, refs, sim.voltage_at(refs.r_top, 1)


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    print("=" * 60)
    print("Voltage Divider Example")
    print("=" * 60)

    print("\n1. Simple Voltage Divider (R1 = R2 = 100)")
    print("-" * 40)
    sim, refs, v_out = simulate_divider()
    print(f"   Input voltage:    {refs.battery.voltage:.2f} V")
    print(f"   Output voltage:   {v_out:.4f} V")
    print(f"   Loop current:     {refs.r_top.current * 1e3:.3f} mA")

    print("\n2. Edit R2 to 200 and re-solve")
    print("-" * 40)
    sim.set_resistance(refs.r_bottom, 200.0)
    v_out = sim.voltage_at(refs.r_top, 1)
    print(f"   Output voltage:   {v_out:.4f} V (expected: {9.0 * 200 / 300:.4f})")

    print("\n3. Split the tap wire with a joint")
    print("-" * 40)
    joint = sim.split_connection(wire(refs.r_top, 1, refs.r_bottom, 0), x=40.0, y=0.0)
    print(f"   Joint current:    {joint.current * 1e3:.3f} mA")
    print(f"   {sim!r}")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
