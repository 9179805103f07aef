"""Basics -- define a machine, drive an instance, inspect history.

Demonstrates:
- Declaring a machine from rule strings
- Checking valid inputs before transitioning
- Handling a rejected input
- Bounded history with oldest-first eviction

Run: python -m examples.basics
"""

from tick_automaton import InvalidInputError, MachineInstance, define_machine

TRAFFIC_LIGHT = define_machine(
    name="TrafficLight",
    states=["Red", "Yellow", "Green"],
    inputs=["Timer", "Emergency"],
    initial="Red",
    transitions=[
        "Red + Timer => Green",
        "Green + Timer => Yellow",
        "Yellow + Timer => Red",
        "Red + Emergency => Yellow",
        "Green + Emergency => Red",
        "Yellow + Emergency => Red",
    ],
)


def main() -> None:
    print("=== Traffic Light ===\n")

    light = MachineInstance.with_max_history(TRAFFIC_LIGHT, 3)
    print(f"  start in {light.current_state}, valid inputs: {light.valid_inputs()}")

    for inp in ["Timer", "Timer", "Emergency", "Timer", "Timer"]:
        old = light.current_state
        new = light.transition(inp)
        print(f"  {old:>6} --{inp}--> {new}")

    # Only the last three transitions are kept.
    print("\n  history (oldest first):")
    for state, inp in light.history:
        print(f"    {state} + {inp}")

    try:
        light.transition("Brake")
    except InvalidInputError as exc:
        print(f"\n  rejected: {exc}")

    light.reset()
    print(f"  after reset: {light.current_state}, history={light.history_len()}")


if __name__ == "__main__":
    main()
