"""Acceptance checking: a synchronous verdict and a lazily produced animation."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from . import config
from .model import Automaton
from .projection import GraphProjection, project

logger = logging.getLogger(__name__)


class RejectReason(str, Enum):
    NO_TRANSITION = "no_transition"
    NON_ACCEPTING = "non_accepting"


@dataclass(frozen=True)
class Step:
    source: int
    symbol: str
    target: int


@dataclass(frozen=True)
class Verdict:
    """Outcome of one run.

    ``state`` is where the run stopped. For a rejection, ``index`` is the
    position of the symbol that had no transition, or the input length when
    the run ended in a non-accepting state.
    """

    accepted: bool
    state: int
    steps: Tuple[Step, ...] = ()
    reason: Optional[RejectReason] = None
    index: Optional[int] = None
    symbol: Optional[str] = None

    def describe(self, model: Automaton) -> str:
        if self.accepted:
            return "String accepted"
        label = model.label(self.state)
        if self.reason is RejectReason.NO_TRANSITION:
            return f"String not accepted: no transition for {self.symbol} from state {label}"
        return f"String not accepted: finished in non-accepting state {label}"


class FrameKind(str, Enum):
    START = "start"
    EDGE = "edge"
    STATE = "state"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Highlight(str, Enum):
    ACTIVE = "active"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass(frozen=True)
class AnimationFrame:
    sequence: int
    kind: FrameKind
    state: int
    consumed: int
    symbol: Optional[str] = None
    edge: Optional[str] = None
    node_highlights: Mapping[int, Highlight] = field(default_factory=dict)
    edge_highlights: Mapping[str, Highlight] = field(default_factory=dict)
    verdict: Optional[Verdict] = None
    projection: Optional[GraphProjection] = field(default=None, repr=False, compare=False)

    @property
    def terminal(self) -> bool:
        return self.verdict is not None


def _empty_accepts(value: Optional[bool]) -> bool:
    return config.EMPTY_INPUT_ACCEPTED if value is None else value


def _final_verdict(model: Automaton, consumed: int, current: int, steps: List[Step], empty_accepts: bool) -> Verdict:
    if consumed == 0:
        if empty_accepts:
            return Verdict(True, current)
        return Verdict(False, current, (), RejectReason.NON_ACCEPTING, 0)
    if model.state(current).accepting:
        return Verdict(True, current, tuple(steps))
    return Verdict(False, current, tuple(steps), RejectReason.NON_ACCEPTING, consumed)


def run_batch(model: Automaton, symbols: Sequence[str], empty_accepts: Optional[bool] = None) -> Verdict:
    symbols = tuple(symbols)
    current = model.initial
    steps: List[Step] = []
    for index, symbol in enumerate(symbols):
        target = model.target(current, symbol)
        if target is None:
            return Verdict(False, current, tuple(steps), RejectReason.NO_TRANSITION, index, symbol)
        steps.append(Step(current, symbol, target))
        current = target
    return _final_verdict(model, len(symbols), current, steps, _empty_accepts(empty_accepts))


class AnimatedRun:
    """A single-use iterator of AnimationFrame for one input string.

    The run works on a snapshot projection taken at construction time. It
    never sleeps; a driver pulls frames and paces them. ``on_finish`` is
    called exactly once, when the terminal frame is produced or the run is
    cancelled or closed.
    """

    def __init__(
        self,
        model: Automaton,
        symbols: Sequence[str],
        on_finish: Optional[Callable[["AnimatedRun"], None]] = None,
        empty_accepts: Optional[bool] = None,
    ) -> None:
        self.model = model
        self.symbols = tuple(symbols)
        self.projection = project(model)
        self._empty_accepts = _empty_accepts(empty_accepts)
        self._on_finish = on_finish
        self._frames = self._generate()
        self._verdict: Optional[Verdict] = None
        self._finished = False
        self._cancelled = False

    def __iter__(self) -> Iterator[AnimationFrame]:
        return self

    def __next__(self) -> AnimationFrame:
        if self._finished:
            raise StopIteration
        try:
            frame = next(self._frames)
        except StopIteration:
            self._finish()
            raise
        if frame.terminal:
            self._verdict = frame.verdict
            self._finish()
        return frame

    @property
    def done(self) -> bool:
        return self._finished

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def verdict(self) -> Optional[Verdict]:
        return self._verdict

    def cancel(self) -> None:
        if self._finished:
            return
        self._cancelled = True
        logger.info("Animated run cancelled after input %r", "".join(self.symbols))
        self.close()

    def close(self) -> None:
        self._frames.close()
        self._finish()

    def _finish(self) -> None:
        if self._finished:
            return
        self._finished = True
        callback, self._on_finish = self._on_finish, None
        if callback is not None:
            callback(self)

    def _generate(self) -> Iterator[AnimationFrame]:
        model = self.model
        projection = self.projection
        nodes: Dict[int, Highlight] = {}
        edges: Dict[str, Highlight] = {}
        sequence = 0

        def frame(kind, state, consumed, symbol=None, edge=None, verdict=None):
            nonlocal sequence
            sequence += 1
            return AnimationFrame(
                sequence=sequence,
                kind=kind,
                state=state,
                consumed=consumed,
                symbol=symbol,
                edge=edge,
                node_highlights=dict(nodes),
                edge_highlights=dict(edges),
                verdict=verdict,
                projection=projection,
            )

        current = model.initial
        steps: List[Step] = []
        nodes[current] = Highlight.ACTIVE
        yield frame(FrameKind.START, current, 0)

        for index, symbol in enumerate(self.symbols):
            target = model.target(current, symbol)
            if target is None:
                verdict = Verdict(False, current, tuple(steps), RejectReason.NO_TRANSITION, index, symbol)
                nodes[current] = Highlight.REJECTED
                yield frame(FrameKind.REJECTED, current, index, symbol, verdict=verdict)
                return
            edge = projection.edge_for(current, symbol)
            edges[edge.id] = Highlight.ACTIVE
            yield frame(FrameKind.EDGE, current, index, symbol, edge.id)

            steps.append(Step(current, symbol, target))
            current = target
            nodes[current] = Highlight.ACTIVE
            yield frame(FrameKind.STATE, current, index + 1, symbol, edge.id)

        verdict = _final_verdict(model, len(self.symbols), current, steps, self._empty_accepts)
        if self.symbols:
            nodes[current] = Highlight.ACCEPTED if verdict.accepted else Highlight.REJECTED
        kind = FrameKind.ACCEPTED if verdict.accepted else FrameKind.REJECTED
        yield frame(kind, current, len(self.symbols), verdict=verdict)


def run_animated(
    model: Automaton,
    symbols: Sequence[str],
    on_finish: Optional[Callable[[AnimatedRun], None]] = None,
    empty_accepts: Optional[bool] = None,
) -> AnimatedRun:
    return AnimatedRun(model, symbols, on_finish=on_finish, empty_accepts=empty_accepts)


def drive(
    run: AnimatedRun,
    on_frame: Callable[[AnimationFrame], None],
    delay: Optional[float] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Optional[Verdict]:
    """Pull every frame of ``run`` into ``on_frame``, waiting ``delay`` seconds between frames."""
    delay = config.FRAME_DELAY_SECONDS if delay is None else delay
    try:
        for frame in run:
            if frame.sequence > 1 and delay > 0:
                sleep(delay)
            on_frame(frame)
    finally:
        run.close()
    return run.verdict
