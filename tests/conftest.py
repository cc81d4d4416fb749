"""
Pytest fixtures shared by the dfa_visualizer tests.

Provides the bundled six-state example automaton and a controller loaded with it.
"""

import pytest


@pytest.fixture
def default_model():
    """
    The example DFA over {A, C, 0} with states q0..q5, accepting q3.
    """
    from dfa_visualizer import config
    from dfa_visualizer.parser import parse
    return parse(config.DEFAULT_SPEC)


@pytest.fixture
def controller():
    from dfa_visualizer.controller import DFAController
    ctrl = DFAController()
    ctrl.load_default()
    return ctrl


@pytest.fixture
def ids(default_model):
    """Map state labels of the example DFA to their ids."""
    return {state.label: state.id for state in default_model.states}
