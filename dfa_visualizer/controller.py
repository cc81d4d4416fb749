from __future__ import annotations

import logging
import re
from collections import deque
from typing import Deque, List, Optional

from . import config
from .engine import AnimatedRun, Verdict, run_batch
from .errors import RunInProgressError
from .model import Automaton
from .parser import parse
from .projection import GraphProjection, project
from .serializer import serialize

logger = logging.getLogger(__name__)

TOKEN_SPLIT_RE = re.compile(r"[\s,]+")


class DFAController:
    """Owns the current automaton, the undo history and the animation run lock.

    Structural changes are refused with ``RunInProgressError`` while an
    animated run is in flight, because the run animates a snapshot that would
    no longer match the model.
    """

    def __init__(self, model: Optional[Automaton] = None, history_limit: Optional[int] = None) -> None:
        self._model = model or Automaton.empty()
        self._history: Deque[Automaton] = deque(maxlen=history_limit or config.UNDO_HISTORY_LIMIT)
        self._active_run: Optional[AnimatedRun] = None

    @property
    def model(self) -> Automaton:
        return self._model

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    def projection(self) -> GraphProjection:
        return project(self._model)

    def is_run_in_progress(self) -> bool:
        return self._active_run is not None

    # ---------------------------------------------------------------
    def _ensure_idle(self, operation: str) -> None:
        if self._active_run is not None:
            raise RunInProgressError(f"Cannot {operation} while a string check animation is running.")

    def _commit(self, model: Automaton) -> Automaton:
        if model != self._model:
            self._history.append(self._model)
            self._model = model
        return model

    def import_specification(self, text: str) -> Automaton:
        self._ensure_idle("import a specification")
        model = parse(text)
        logger.info("Imported automaton with %d states and %d transitions", len(model.states), len(model.transitions))
        return self._commit(model)

    def load_default(self) -> Automaton:
        return self.import_specification(config.DEFAULT_SPEC)

    def export_specification(self) -> str:
        return serialize(self._model)

    def reset_automaton(self) -> Automaton:
        self._ensure_idle("reset the automaton")
        logger.info("Automaton reset")
        return self._commit(Automaton.empty())

    def add_state(self, accepting: bool = False) -> int:
        self._ensure_idle("add a state")
        model, state_id = self._model.add_state(accepting)
        self._commit(model)
        logger.debug("Added state %s (accepting=%s)", model.label(state_id), accepting)
        return state_id

    def add_transition(self, source: int, target: int, symbol: str) -> Automaton:
        self._ensure_idle("add a transition")
        try:
            model = self._model.add_transition(source, target, symbol)
        except ValueError as exc:
            logger.warning("Transition rejected: %s", exc)
            raise
        logger.debug("Added transition %s --%s--> %s", source, symbol, target)
        return self._commit(model)

    def set_accepting(self, state: int, value: bool = True) -> Automaton:
        self._ensure_idle("change accepting states")
        return self._commit(self._model.set_accepting(state, value))

    def make_start_accepting(self) -> Automaton:
        return self.set_accepting(self._model.initial, True)

    def undo(self) -> bool:
        self._ensure_idle("undo")
        if not self._history:
            return False
        self._model = self._history.pop()
        return True

    # ---------------------------------------------------------------
    def tokenize(self, text: str) -> List[str]:
        """Split user input into symbols.

        Whitespace or comma separated input is split on the separators,
        anything else is read one character per symbol.
        """
        raw = (text or "").strip()
        if not raw:
            return []
        if TOKEN_SPLIT_RE.search(raw):
            return [token for token in TOKEN_SPLIT_RE.split(raw) if token]
        return list(raw)

    def check_string_batch(self, text: str) -> Verdict:
        verdict = run_batch(self._model, self.tokenize(text))
        logger.debug("Batch check of %r: accepted=%s", text, verdict.accepted)
        return verdict

    def check_string_animated(self, text: str) -> AnimatedRun:
        self._ensure_idle("start another string check")
        run = AnimatedRun(self._model, self.tokenize(text), on_finish=self._release)
        self._active_run = run
        logger.info("Animated run started for %r", text)
        return run

    def _release(self, run: AnimatedRun) -> None:
        if self._active_run is run:
            self._active_run = None
            logger.info("Animated run finished (cancelled=%s)", run.cancelled)
