from __future__ import annotations

from enum import Enum


class AutomatonError(Exception):
    """Base class for every error raised by the automaton engine."""


class ParseErrorKind(str, Enum):
    MALFORMED_BLOCK = "MalformedBlock"
    MISSING_SECTION = "MissingSection"
    DUPLICATE_TRANSITION = "DuplicateTransition"
    SYNTAX = "Syntax"
    UNKNOWN_STATE = "UnknownState"
    UNKNOWN_SYMBOL = "UnknownSymbol"


class ParseError(AutomatonError, ValueError):
    """Raised when a specification text cannot be turned into an automaton."""

    def __init__(self, kind, message, section=None, line=None, column=None):
        self.kind = kind
        self.section = section
        self.line = line
        self.column = column
        self.detail = message
        if line is not None:
            message = f"[Line {line}, Col {column}] {message}"
        super().__init__(message)


class ConflictError(AutomatonError, ValueError):
    """Raised when a transition would break determinism."""

    def __init__(self, source: int, symbol: str, existing_target: int, message: str = ""):
        self.source = source
        self.symbol = symbol
        self.existing_target = existing_target
        super().__init__(
            message or f"State {source} already has a transition on '{symbol}' (to state {existing_target})."
        )


class UnknownStateError(AutomatonError, ValueError):
    def __init__(self, state):
        self.state = state
        super().__init__(f"State {state!r} does not exist.")


class RunInProgressError(AutomatonError, RuntimeError):
    """Raised when an operation is attempted while an animated run is active."""
