# config.py
"""
Default behaviour of the visualizer: alphabet, labels, animation pacing,
colours and the bundled example automaton.
"""
from __future__ import annotations

import logging
import os

# Model defaults
DEFAULT_ALPHABET = ('A', 'C', '0')
START_STATE_LABEL = 'Start'
NEW_STATE_LABEL_PREFIX = 'Q'

# Verdict for an empty input string, whatever the initial state is
EMPTY_INPUT_ACCEPTED = True

# Oldest undo entries are dropped past this many
UNDO_HISTORY_LIMIT = 100

# Animation pacing, in seconds between two frames
FRAME_DELAY_SECONDS = float(os.environ.get('DFA_VISUALIZER_FRAME_DELAY', '1.0'))

# Rendering
ACCEPTING_BORDER_WIDTH = 3
DEFAULT_BORDER_WIDTH = 1
EDGE_COLOR = '#ABABAB'
NODE_COLOR = '#BBBBBB'
ACTIVE_NODE_COLOR = '#90CAF9'
ACTIVE_EDGE_COLOR = '#1E88E5'
ACCEPTED_NODE_COLOR = '#A5D6A7'
REJECTED_NODE_COLOR = '#EF9A9A'

LOG_LEVEL = os.environ.get('DFA_VISUALIZER_LOG_LEVEL', 'WARNING')
LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'

DEFAULT_SPEC = """SPEC_DFA = {
    'alphabet': {'0', 'A', 'C'},
    'states': {'q0', 'q1', 'q2', 'q3', 'q4', 'q5'},
    'initial_state': 'q0',
    'accepting_states': {'q3'},
    'transitions': {
        ('q0', 'C'): 'q0',
        ('q0', 'A'): 'q1',
        ('q0', '0'): 'q4',

        ('q1', 'C'): 'q2',
        ('q1', 'A'): 'q1',
        ('q1', '0'): 'q4',

        ('q2', 'A'): 'q1',
        ('q2', '0'): 'q3',
        ('q2', 'C'): 'q0',

        ('q3', '0'): 'q4',
        ('q3', 'A'): 'q1',
        ('q3', 'C'): 'q0',

        ('q4', 'C'): 'q5',
        ('q4', '0'): 'q4',
        ('q4', 'A'): 'q1',

        ('q5', 'C'): 'q0',
        ('q5', 'A'): 'q3',
        ('q5', '0'): 'q4',
    }
}"""


def configure_logging(level=None):
    """Install a root handler once; later calls only adjust the level."""
    level = (level or LOG_LEVEL)
    if isinstance(level, str):
        level = level.upper()
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger('dfa_visualizer').setLevel(level)
