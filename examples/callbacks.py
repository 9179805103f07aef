"""Callbacks -- react to state entry, exit, and transitions.

Demonstrates:
- Enum states and inputs
- Specific and global callbacks, and their dispatch order
- Self-loops fire transition callbacks but not entry/exit
- Counters shared between callbacks

Run: python -m examples.callbacks
"""

import enum

from tick_automaton import MachineInstance, define_machine


class Doc(enum.Enum):
    DRAFT = "draft"
    REVIEW = "review"
    PUBLISHED = "published"


class Action(enum.Enum):
    SUBMIT = "submit"
    APPROVE = "approve"
    REJECT = "reject"
    EDIT = "edit"


WORKFLOW = define_machine(
    name="Document",
    states=Doc,
    inputs=Action,
    initial=Doc.DRAFT,
    transitions=[
        (Doc.DRAFT, Action.EDIT, Doc.DRAFT),
        (Doc.DRAFT, Action.SUBMIT, Doc.REVIEW),
        (Doc.REVIEW, Action.APPROVE, Doc.PUBLISHED),
        (Doc.REVIEW, Action.REJECT, Doc.DRAFT),
    ],
)


def main() -> None:
    print("=== Document Workflow Callbacks ===\n")

    doc = MachineInstance(WORKFLOW)
    stats = {"transitions": 0, "edits": 0}

    def count(old, inp, new):
        stats["transitions"] += 1

    doc.on_any_transition(count)
    doc.on_any_state_exit(lambda s: print(f"  exit  {s.name}"))
    doc.on_any_state_entry(lambda s: print(f"  enter {s.name}"))
    doc.on_transition(Doc.DRAFT, Action.EDIT, lambda *a: stats.__setitem__("edits", stats["edits"] + 1))
    doc.on_state_entry(Doc.PUBLISHED, lambda s: print("  ** published **"))

    for action in [Action.EDIT, Action.EDIT, Action.SUBMIT, Action.REJECT,
                   Action.SUBMIT, Action.APPROVE]:
        print(f"{action.name}:")
        doc.transition(action)

    print(f"\n{stats['transitions']} transitions, {stats['edits']} edits, "
          f"{doc.callback_count()} callbacks registered")


if __name__ == "__main__":
    main()
