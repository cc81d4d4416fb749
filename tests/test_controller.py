from __future__ import annotations

import pytest

from dfa_visualizer.controller import DFAController
from dfa_visualizer.errors import ConflictError, ParseError, RunInProgressError
from dfa_visualizer.model import Automaton
from dfa_visualizer.parser import parse


def test_starts_with_single_start_state() -> None:
    controller = DFAController()

    assert controller.model == Automaton.empty()
    assert not controller.can_undo
    assert not controller.is_run_in_progress()


def test_failed_import_keeps_current_model(controller) -> None:
    before = controller.model

    with pytest.raises(ParseError):
        controller.import_specification("SPEC_DFA = {'alphabet': {'A'}}")

    assert controller.model is before


def test_conflicting_edit_keeps_current_model(controller) -> None:
    q0 = controller.model.state_by_label("q0").id
    q5 = controller.model.state_by_label("q5").id
    before = controller.model

    with pytest.raises(ConflictError):
        controller.add_transition(q0, q5, "A")

    assert controller.model is before


def test_export_tracks_edits(controller) -> None:
    new_id = controller.add_state(accepting=True)
    controller.add_transition(new_id, controller.model.initial, "C")

    text = controller.export_specification()

    assert f"'Q{new_id}'" in text
    assert f"('Q{new_id}', 'C'): 'q0'," in text
    assert parse(text) == controller.model


def test_reset_and_undo(controller) -> None:
    loaded = controller.model
    controller.reset_automaton()

    assert controller.model == Automaton.empty()
    assert controller.undo()
    assert controller.model == loaded


def test_undo_with_empty_history() -> None:
    assert DFAController().undo() is False


def test_make_start_accepting(controller) -> None:
    controller.make_start_accepting()

    assert controller.model.initial in controller.model.accepting_states


@pytest.mark.parametrize("text", ["CAC0", "C A C 0", "C,A,C,0"])
def test_input_forms_are_equivalent(controller, text) -> None:
    assert controller.tokenize(text) == ["C", "A", "C", "0"]
    assert controller.check_string_batch(text).accepted


def test_batch_check_example(controller) -> None:
    assert not controller.check_string_batch("ACA0").accepted
    assert controller.check_string_batch("").accepted


def test_run_lock_blocks_mutation_and_second_run(controller) -> None:
    run = controller.check_string_animated("ACA0")
    next(run)

    assert controller.is_run_in_progress()
    with pytest.raises(RunInProgressError):
        controller.add_state()
    with pytest.raises(RunInProgressError):
        controller.add_transition(1, 1, "A")
    with pytest.raises(RunInProgressError):
        controller.set_accepting(1, True)
    with pytest.raises(RunInProgressError):
        controller.reset_automaton()
    with pytest.raises(RunInProgressError):
        controller.import_specification("SPEC_DFA = {}")
    with pytest.raises(RunInProgressError):
        controller.undo()
    with pytest.raises(RunInProgressError):
        controller.check_string_animated("A")

    # batch checks are read-only and stay available
    assert controller.check_string_batch("CAC0").accepted

    list(run)
    assert not controller.is_run_in_progress()
    controller.add_state()


def test_cancel_releases_lock(controller) -> None:
    run = controller.check_string_animated("CAC0")
    next(run)
    run.cancel()

    assert not controller.is_run_in_progress()
    assert controller.check_string_animated("A") is not None


def test_closing_an_unstarted_run_releases_lock(controller) -> None:
    run = controller.check_string_animated("CAC0")
    run.close()

    assert not controller.is_run_in_progress()


def test_undo_history_keeps_only_the_most_recent_models() -> None:
    controller = DFAController(history_limit=2)
    for _ in range(3):
        controller.add_state()

    assert controller.undo()
    assert controller.undo()
    assert controller.undo() is False
    assert len(controller.model.states) == 2
