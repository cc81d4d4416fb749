from __future__ import annotations

from dfa_visualizer import config
from dfa_visualizer.engine import run_animated, run_batch
from dfa_visualizer.projection import project
from dfa_visualizer.render import Visualizer, to_dot, trace_table


def test_dot_contains_nodes_and_edges(default_model) -> None:
    source = to_dot(project(default_model))

    assert source.startswith("// Deterministic Finite Automaton")
    assert "rankdir=LR" in source
    assert "doublecircle" in source
    assert '1 -> 2 [label=A]' in source
    assert "__start__ -> 1" in source


def test_frame_highlights_are_rendered(default_model, ids) -> None:
    frames = list(run_animated(default_model, "CAC0"))
    projection = frames[0].projection

    source = Visualizer(projection).render(frames[-1]).source

    assert config.ACCEPTED_NODE_COLOR in source
    assert config.ACTIVE_EDGE_COLOR in source


def test_trace_table(default_model) -> None:
    table = trace_table(default_model, run_batch(default_model, "ACA0"))

    assert list(table.columns) == ["From State", "Input", "To State"]
    assert list(table.index) == [1, 2, 3, 4]
    assert list(table["To State"]) == ["q1", "q2", "q1", "q4"]


def test_trace_table_for_empty_run(default_model) -> None:
    table = trace_table(default_model, run_batch(default_model, ""))

    assert table.empty


def test_merged_edge_label_is_quoted() -> None:
    from dfa_visualizer.model import Automaton

    model, other = Automaton.empty().add_state()
    model = model.add_transition(1, other, "A").add_transition(1, other, "C")

    assert '1 -> 2 [label="A, C"]' in to_dot(project(model))
