from __future__ import annotations

import pytest

from dfa_visualizer.model import Automaton
from dfa_visualizer.parser import parse
from dfa_visualizer.serializer import serialize


def test_default_spec_round_trips(default_model) -> None:
    assert parse(serialize(default_model)) == default_model


def test_edited_model_round_trips() -> None:
    model = Automaton.empty()
    model, q2 = model.add_state(accepting=True)
    model, q3 = model.add_state()
    model = model.add_transition(1, q2, "A")
    model = model.add_transition(1, q2, "C")
    model = model.add_transition(q2, q3, "0")
    model = model.add_transition(q3, 1, "A")
    model = model.set_accepting(1, True)

    restored = parse(serialize(model))

    assert len(restored.states) == len(model.states)
    assert {s.label for s in restored.states if s.accepting} == {"Start", "Q2"}
    assert restored.transitions == model.transitions
    assert restored == model


def test_empty_collections_are_written_as_python_literals() -> None:
    text = serialize(Automaton.empty())

    assert "'accepting_states': set()," in text
    assert "'transitions': {}" in text
    assert "'initial_state': 'Start'," in text
    assert parse(text) == Automaton.empty()


def test_layout(default_model) -> None:
    lines = serialize(default_model).splitlines()

    assert lines[0] == "SPEC_DFA = {"
    assert lines[1] == "    'alphabet': {'0', 'A', 'C'},"
    assert lines[2] == "    'states': {'q0', 'q1', 'q2', 'q3', 'q4', 'q5'},"
    assert lines[5] == "    'transitions': {"
    assert lines[6] == "        ('q0', 'C'): 'q0',"
    assert lines[-1] == "}"


@pytest.mark.parametrize("symbol", ["\\", "\t", "x\\ny", "it's", 'say "hi"', "#"])
def test_unusual_symbols_round_trip_verbatim(symbol) -> None:
    model = Automaton.empty().add_transition(1, 1, symbol)

    restored = parse(serialize(model))

    assert restored == model
    assert restored.target(1, symbol) == 1


def test_imported_backslash_label_survives_repeated_round_trips() -> None:
    text = "SPEC_DFA = {'alphabet': {'A'}, 'states': {'q\\1'}, 'initial_state': 'q\\1', 'accepting_states': {}}"
    model = parse(text)

    assert model.initial_state.label == "q\\1"
    once = parse(serialize(model))
    twice = parse(serialize(once))
    assert once == model
    assert twice.initial_state.label == "q\\1"


def test_label_with_single_quote_uses_double_quotes() -> None:
    model = parse("SPEC_DFA = {'alphabet': {'A'}, 'states': {\"q'\"}, 'initial_state': \"q'\", 'accepting_states': {}}")

    assert "'states': {\"q'\"}," in serialize(model)
    assert parse(serialize(model)) == model


@pytest.mark.parametrize("symbol", ["a\nb", "a\rb", "both'\"quotes"])
def test_unrepresentable_symbols_are_rejected(symbol) -> None:
    model = Automaton.empty()

    with pytest.raises(ValueError):
        model.add_transition(1, 1, symbol)
