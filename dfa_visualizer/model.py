from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Iterable, Iterator, Mapping, Optional, Sequence, Tuple

from . import config
from .errors import ConflictError, UnknownStateError

TransitionKey = Tuple[int, str]


def check_text(value: str, what: str) -> str:
    """Labels and symbols are written unescaped between quotes, so they must fit on one line
    and leave at least one quote character free."""
    if not isinstance(value, str) or not value:
        raise ValueError(f"{what} must be non-empty strings.")
    if '\n' in value or '\r' in value:
        raise ValueError(f"{what} must not contain line breaks: {value!r}.")
    if "'" in value and '"' in value:
        raise ValueError(f"{what} must not contain both quote characters: {value!r}.")
    return value


@dataclass(frozen=True)
class State:
    id: int
    label: str
    accepting: bool = False


@dataclass(frozen=True)
class Automaton:
    """Immutable DFA value.

    Every mutation returns a new ``Automaton``; the receiver is never changed.
    ``transitions`` maps ``(state id, symbol)`` to a target id, so determinism
    holds by construction as long as writes go through ``add_transition``.
    """

    states: Tuple[State, ...]
    alphabet: Tuple[str, ...]
    transitions: Mapping[TransitionKey, int]
    initial: int
    _index: Dict[int, State] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.states:
            raise ValueError("An automaton needs at least one state.")
        index = {state.id: state for state in self.states}
        if len(index) != len(self.states):
            raise ValueError("State ids must be unique.")
        if self.initial not in index:
            raise UnknownStateError(self.initial)
        for state in self.states:
            check_text(state.label, "State labels")
        for symbol in self.alphabet:
            check_text(symbol, "Alphabet symbols")
        for (source, symbol), target in self.transitions.items():
            check_text(symbol, "Transition symbols")
            if source not in index:
                raise UnknownStateError(source)
            if target not in index:
                raise UnknownStateError(target)
        # frozen dataclass: the private lookup table is set once here
        object.__setattr__(self, 'transitions', dict(self.transitions))
        object.__setattr__(self, '_index', index)

    def __hash__(self) -> int:
        return hash((self.states, self.alphabet, frozenset(self.transitions.items()), self.initial))

    # ---------------------------------------------------------------
    @classmethod
    def empty(cls, label: str = config.START_STATE_LABEL) -> "Automaton":
        """A single initial, non-accepting state and no transitions."""
        return cls(
            states=(State(1, label, False),),
            alphabet=tuple(config.DEFAULT_ALPHABET),
            transitions={},
            initial=1,
        )

    @classmethod
    def build(
        cls,
        states: Sequence[str],
        alphabet: Sequence[str],
        initial_state: str,
        accepting_states: Iterable[str],
        transitions: Iterable[Tuple[Tuple[str, str], str]],
    ) -> "Automaton":
        """Build an automaton from state labels; ids follow declaration order."""
        ids = {label: idx for idx, label in enumerate(states, start=1)}
        if len(ids) != len(states):
            raise ValueError("State labels must be unique.")
        accepting = set(accepting_states)
        for label in [initial_state, *accepting]:
            if label not in ids:
                raise UnknownStateError(label)
        model = cls(
            states=tuple(State(ids[label], label, label in accepting) for label in states),
            alphabet=tuple(alphabet),
            transitions={},
            initial=ids[initial_state],
        )
        for (source, symbol), target in transitions:
            if source not in ids:
                raise UnknownStateError(source)
            if target not in ids:
                raise UnknownStateError(target)
            model = model.add_transition(ids[source], ids[target], symbol)
        return model

    # ---------------------------------------------------------------
    @property
    def accepting_states(self) -> FrozenSet[int]:
        return frozenset(state.id for state in self.states if state.accepting)

    @property
    def max_id(self) -> int:
        return max(self._index)

    @property
    def initial_state(self) -> State:
        return self._index[self.initial]

    def __contains__(self, state_id: object) -> bool:
        return state_id in self._index

    def state(self, state_id: int) -> State:
        try:
            return self._index[state_id]
        except KeyError:
            raise UnknownStateError(state_id) from None

    def label(self, state_id: int) -> str:
        return self.state(state_id).label

    def state_by_label(self, label: str) -> Optional[State]:
        for state in self.states:
            if state.label == label:
                return state
        return None

    def target(self, state_id: int, symbol: str) -> Optional[int]:
        return self.transitions.get((state_id, symbol))

    def outgoing(self, state_id: int) -> Iterator[Tuple[str, int]]:
        for (source, symbol), target in self.transitions.items():
            if source == state_id:
                yield symbol, target

    # ---------------------------------------------------------------
    def add_state(self, accepting: bool = False) -> Tuple["Automaton", int]:
        new_id = self.max_id + 1
        taken = {state.label for state in self.states}
        label = f"{config.NEW_STATE_LABEL_PREFIX}{new_id}"
        suffix = 1
        while label in taken:
            label = f"{config.NEW_STATE_LABEL_PREFIX}{new_id}_{suffix}"
            suffix += 1
        model = replace(self, states=self.states + (State(new_id, label, accepting),))
        return model, new_id

    def add_transition(self, source: int, target: int, symbol: str) -> "Automaton":
        """Install ``source --symbol--> target``.

        Re-adding an identical transition is a no-op; a different target for
        the same ``(source, symbol)`` raises ``ConflictError``.
        """
        self.state(source)
        self.state(target)
        check_text(symbol, "Transition symbols")
        existing = self.transitions.get((source, symbol))
        if existing == target:
            return self
        if existing is not None:
            raise ConflictError(
                source,
                symbol,
                existing,
                f"{self.label(source)} has a transition with value {symbol} already "
                f"(to {self.label(existing)}).",
            )
        transitions = dict(self.transitions)
        transitions[(source, symbol)] = target
        alphabet = self.alphabet if symbol in self.alphabet else self.alphabet + (symbol,)
        return replace(self, alphabet=alphabet, transitions=transitions)

    def set_accepting(self, state_id: int, value: bool = True) -> "Automaton":
        current = self.state(state_id)
        if current.accepting == value:
            return self
        states = tuple(
            replace(state, accepting=value) if state.id == state_id else state
            for state in self.states
        )
        return replace(self, states=states)
