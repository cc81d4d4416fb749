from .controller import DFAController
from .engine import AnimatedRun, AnimationFrame, Verdict, drive, run_animated, run_batch
from .errors import AutomatonError, ConflictError, ParseError, ParseErrorKind, RunInProgressError, UnknownStateError
from .model import Automaton, State
from .parser import parse
from .projection import GraphProjection, project
from .serializer import serialize

__all__ = [
    "AnimatedRun",
    "AnimationFrame",
    "Automaton",
    "AutomatonError",
    "ConflictError",
    "DFAController",
    "GraphProjection",
    "ParseError",
    "ParseErrorKind",
    "RunInProgressError",
    "State",
    "UnknownStateError",
    "Verdict",
    "drive",
    "parse",
    "project",
    "run_animated",
    "run_batch",
    "serialize",
]
