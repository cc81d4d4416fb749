from __future__ import annotations

import pytest

from dfa_visualizer.errors import ConflictError, UnknownStateError
from dfa_visualizer.model import Automaton, State
from dfa_visualizer.parser import parse
from dfa_visualizer.serializer import serialize


def test_empty_automaton() -> None:
    model = Automaton.empty()

    assert model.states == (State(1, "Start", False),)
    assert model.initial == 1
    assert model.transitions == {}
    assert model.accepting_states == frozenset()
    assert model.alphabet == ("A", "C", "0")


def test_add_state_assigns_next_id_and_label() -> None:
    model, first = Automaton.empty().add_state()
    model, second = model.add_state(accepting=True)

    assert (first, second) == (2, 3)
    assert model.label(2) == "Q2"
    assert model.state(3).accepting
    assert model.accepting_states == frozenset({3})


def test_add_state_avoids_label_clash() -> None:
    model = Automaton.build(["a", "Q3"], ["A"], "a", [], [])
    model, new_id = model.add_state()

    assert new_id == 3
    assert model.label(new_id) == "Q3_1"


def test_mutations_do_not_touch_the_original() -> None:
    original = Automaton.empty()
    grown, state_id = original.add_state()
    linked = grown.add_transition(1, state_id, "A")

    assert len(original.states) == 1
    assert grown.transitions == {}
    assert linked.target(1, "A") == state_id


def test_add_transition_is_idempotent() -> None:
    model, target = Automaton.empty().add_state()
    once = model.add_transition(1, target, "A")
    twice = once.add_transition(1, target, "A")

    assert twice == once
    assert twice.transitions == {(1, "A"): target}


def test_conflicting_transition_is_rejected_and_model_unchanged() -> None:
    model, t1 = Automaton.empty().add_state()
    model, t2 = model.add_state()
    model = model.add_transition(1, t1, "A")
    snapshot = dict(model.transitions)

    with pytest.raises(ConflictError) as excinfo:
        model.add_transition(1, t2, "A")

    assert excinfo.value.source == 1
    assert excinfo.value.symbol == "A"
    assert excinfo.value.existing_target == t1
    assert "Start has a transition with value A already" in str(excinfo.value)
    assert model.transitions == snapshot


def test_determinism_holds_after_mutation_sequence() -> None:
    model = Automaton.empty()
    for _ in range(3):
        model, _ = model.add_state()
    attempts = [(1, 2, "A"), (1, 3, "A"), (2, 3, "C"), (2, 2, "C"), (3, 4, "0"), (1, 1, "C"), (4, 1, "A")]
    for source, target, symbol in attempts:
        try:
            model = model.add_transition(source, target, symbol)
        except ConflictError:
            pass

    keys = list(model.transitions)
    assert len(keys) == len(set(keys))
    assert model.transitions == {(1, "A"): 2, (2, "C"): 3, (3, "0"): 4, (1, "C"): 1, (4, "A"): 1}


def test_new_symbol_extends_alphabet() -> None:
    model = Automaton.empty().add_transition(1, 1, "B")

    assert model.alphabet == ("A", "C", "0", "B")


def test_unknown_state_is_rejected() -> None:
    with pytest.raises(UnknownStateError):
        Automaton.empty().add_transition(1, 9, "A")
    with pytest.raises(UnknownStateError):
        Automaton.empty().set_accepting(5, True)


def test_set_accepting_toggles_flag() -> None:
    model = Automaton.empty().set_accepting(1, True)

    assert model.accepting_states == frozenset({1})
    assert model.set_accepting(1, False).accepting_states == frozenset()


def test_outgoing_and_lookup(default_model, ids) -> None:
    outgoing = dict(default_model.outgoing(ids["q4"]))

    assert outgoing == {"C": ids["q5"], "0": ids["q4"], "A": ids["q1"]}
    assert default_model.state_by_label("q5").id == ids["q5"]
    assert default_model.state_by_label("nope") is None
    assert default_model.max_id == 6


def test_equal_models_hash_equal(default_model) -> None:
    copy = parse(serialize(default_model))

    assert hash(copy) == hash(default_model)
    assert {default_model, copy} == {default_model}
    assert hash(Automaton.empty()) == hash(Automaton.empty())


@pytest.mark.parametrize("symbol", ["", "a\nb", "a\r", "mixed'\"quotes"])
def test_add_transition_rejects_unquotable_symbols(symbol) -> None:
    with pytest.raises(ValueError):
        Automaton.empty().add_transition(1, 1, symbol)


def test_unquotable_state_label_is_rejected() -> None:
    with pytest.raises(ValueError):
        Automaton.empty(label="two\nlines")
