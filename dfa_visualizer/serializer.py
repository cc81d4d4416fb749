from __future__ import annotations

from typing import Iterable, List

from .model import Automaton, check_text

INDENT = '    '


def _quote(value: str) -> str:
    """Quote ``value`` verbatim, the way the lexer reads it back (no escapes)."""
    check_text(value, "Serialized values")
    if "'" in value:
        return f'"{value}"'
    return f"'{value}'"


def _set_literal(items: Iterable[str]) -> str:
    values = [_quote(item) for item in items]
    if not values:
        return 'set()'
    return '{' + ', '.join(values) + '}'


def serialize(model: Automaton) -> str:
    """Render ``model`` in the ``SPEC_DFA = {...}`` format read by ``parse``."""
    accepting = [state.label for state in model.states if state.accepting]
    lines: List[str] = ['SPEC_DFA = {']
    lines.append(f"{INDENT}'alphabet': {_set_literal(model.alphabet)},")
    lines.append(f"{INDENT}'states': {_set_literal(state.label for state in model.states)},")
    lines.append(f"{INDENT}'initial_state': {_quote(model.initial_state.label)},")
    lines.append(f"{INDENT}'accepting_states': {_set_literal(accepting)},")
    if not model.transitions:
        lines.append(f"{INDENT}'transitions': {{}}")
    else:
        lines.append(f"{INDENT}'transitions': {{")
        for (source, symbol), target in model.transitions.items():
            pair = f"({_quote(model.label(source))}, {_quote(symbol)})"
            lines.append(f"{INDENT * 2}{pair}: {_quote(model.label(target))},")
        lines.append(f"{INDENT}}}")
    lines.append('}')
    return '\n'.join(lines)
