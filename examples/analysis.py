"""Analysis -- graph queries and generated documentation.

Demonstrates:
- Reachability, predecessors, terminal states, strong connectivity
- Shortest paths between states
- Mermaid diagram and Markdown table output (hidden inputs skipped)

Run: python -m examples.analysis
"""

from tick_automaton import (
    define_machine,
    generate_full_documentation,
    is_strongly_connected,
    reachable_states,
    shortest_path,
    states_leading_to,
    terminal_states,
)

NETWORK = define_machine(
    name="NetworkConnection",
    states=["Disconnected", "Connecting", "Connected", "Reconnecting", "Failed"],
    inputs=["Connect", "Disconnect", "Timeout", "Success", "Retry", "_Ping"],
    initial="Disconnected",
    transitions=[
        "Disconnected + Connect => Connecting",
        "Connecting + Success => Connected",
        "Connecting + Timeout => Failed",
        "Connected + Disconnect => Disconnected",
        "Connected + Timeout => Reconnecting",
        "Connected + _Ping => Connected",
        "Reconnecting + Success => Connected",
        "Reconnecting + Timeout => Failed",
        "Failed + Retry => Connecting",
    ],
)


def main() -> None:
    print("=== Network Connection Analysis ===\n")
    print(f"  reachable from Failed: {sorted(reachable_states(NETWORK, 'Failed'))}")
    print(f"  states leading to Failed: {states_leading_to(NETWORK, 'Failed')}")
    print(f"  terminal states: {terminal_states(NETWORK)}")
    print(f"  strongly connected: {is_strongly_connected(NETWORK)}")
    path = shortest_path(NETWORK, "Disconnected", "Reconnecting")
    print(f"  shortest Disconnected -> Reconnecting: {' -> '.join(path)}\n")

    print(generate_full_documentation(NETWORK))


if __name__ == "__main__":
    main()
