import re
from typing import NamedTuple

from .errors import ParseError, ParseErrorKind
from .model import Automaton

REQUIRED_SECTIONS = ('alphabet', 'states', 'initial_state', 'accepting_states')
OPTIONAL_SECTIONS = ('transitions',)

TOKEN_SPECS = [
    ('COMMENT', r'#.*'),
    ('STRING', r"'[^'\n]*'|\"[^\"\n]*\""),
    ('IDENTIFIER', r'[A-Za-z_][A-Za-z0-9_]*'),
    ('EQUALS', r'='),
    ('LBRACE', r'\{'),
    ('RBRACE', r'\}'),
    ('LPAREN', r'\('),
    ('RPAREN', r'\)'),
    ('COMMA', r','),
    ('COLON', r':'),
    ('NEWLINE', r'\r?\n'),
    ('WHITESPACE', r'[ \t]+'),
    ('UNKNOWN', r'.'),
]
TOKEN_REGEX = re.compile('|'.join(f'(?P<{name}>{pattern})' for name, pattern in TOKEN_SPECS))


class Token(NamedTuple):
    type: str
    value: str
    line: int
    column: int


class Lexer:
    """Breaks a specification text into a stream of tokens."""

    def __init__(self, source_code):
        self.source_code = source_code
        self.tokens = []
        self.current_line = 1
        self.current_col = 1

    def tokenize(self):
        for match in TOKEN_REGEX.finditer(self.source_code):
            token_type = match.lastgroup
            token_value = match.group()
            if token_type == 'NEWLINE':
                self.current_line += 1
                self.current_col = 1
                continue
            token = Token(token_type, token_value, self.current_line, self.current_col)
            self.current_col += len(token_value)
            if token_type not in ('COMMENT', 'WHITESPACE'):
                self.tokens.append(token)
        return self.tokens


class Parser:
    """Builds an Automaton from the tokens of a ``SPEC_DFA = {...}`` block."""

    def __init__(self, tokens):
        self.tokens = tokens
        self.current_token_index = 0
        self.sections = {}
        self.section_tokens = {}

    def _current_token(self):
        if self.current_token_index < len(self.tokens):
            return self.tokens[self.current_token_index]
        return None

    def _error(self, kind, message, token=None, section=None):
        if token is None:
            return ParseError(kind, message, section=section)
        return ParseError(kind, message, section=section, line=token.line, column=token.column)

    def _expect(self, expected_type, section=None):
        token = self._current_token()
        if token is None:
            raise self._error(
                ParseErrorKind.MALFORMED_BLOCK,
                f"Unexpected end of specification. Expected '{expected_type}'.",
                section=section,
            )
        if token.type != expected_type:
            raise self._error(
                ParseErrorKind.SYNTAX,
                f"Expected '{expected_type}' but got '{token.type}:{token.value}'.",
                token,
                section,
            )
        self.current_token_index += 1
        return token

    def _accept(self, token_type):
        token = self._current_token()
        if token is not None and token.type == token_type:
            self.current_token_index += 1
            return token
        return None

    def _peek_type(self, offset=0):
        index = self.current_token_index + offset
        if index < len(self.tokens):
            return self.tokens[index].type
        return None

    # ---------------------------------------------------------------
    def parse(self):
        self._find_block()
        self._expect('LBRACE')
        while not self._accept('RBRACE'):
            if self._current_token() is None:
                raise self._error(ParseErrorKind.MALFORMED_BLOCK, "The SPEC_DFA block is never closed.")
            self._parse_entry()
            if not self._accept('COMMA'):
                if self._current_token() is None:
                    raise self._error(ParseErrorKind.MALFORMED_BLOCK, "The SPEC_DFA block is never closed.")
                self._expect('RBRACE')
                break
        for name in REQUIRED_SECTIONS:
            if name not in self.sections:
                raise self._error(
                    ParseErrorKind.MISSING_SECTION,
                    f"Could not find '{name}' in specification.",
                    section=name,
                )
        return self._build()

    def _find_block(self):
        # Text before the assignment is skipped.
        for index in range(len(self.tokens) - 1):
            token = self.tokens[index]
            if token.type == 'IDENTIFIER' and token.value == 'SPEC_DFA' and self.tokens[index + 1].type == 'EQUALS':
                self.current_token_index = index + 2
                if self._peek_type() != 'LBRACE':
                    break
                return
        raise self._error(
            ParseErrorKind.MALFORMED_BLOCK,
            "Invalid DFA specification format: expected 'SPEC_DFA = { ... }'.",
        )

    def _parse_entry(self):
        key_token = self._expect('STRING')
        name = key_token.value[1:-1]
        if name not in REQUIRED_SECTIONS + OPTIONAL_SECTIONS:
            raise self._error(ParseErrorKind.SYNTAX, f"Unknown section '{name}'.", key_token, name)
        if name in self.sections:
            raise self._error(ParseErrorKind.SYNTAX, f"Section '{name}' is defined twice.", key_token, name)
        self._expect('COLON', name)
        self.section_tokens[name] = key_token
        if name == 'initial_state':
            self.sections[name] = self._parse_string(name)
        elif name == 'transitions':
            self.sections[name] = self._parse_mapping(name)
        else:
            self.sections[name] = self._parse_set(name)

    def _parse_string(self, section):
        token = self._expect('STRING', section)
        if '\r' in token.value:
            raise self._error(ParseErrorKind.SYNTAX, "String literals must not contain line breaks.", token, section)
        # literals are raw: no escape sequences are decoded
        return token.value[1:-1], token

    def _parse_set(self, section):
        token = self._current_token()
        if token is not None and token.type == 'IDENTIFIER' and token.value == 'set':
            self.current_token_index += 1
            self._expect('LPAREN', section)
            self._expect('RPAREN', section)
            return []
        self._expect('LBRACE', section)
        items = []
        while not self._accept('RBRACE'):
            items.append(self._parse_string(section))
            if not self._accept('COMMA'):
                self._expect('RBRACE', section)
                break
        return items

    def _parse_mapping(self, section):
        self._expect('LBRACE', section)
        entries = []
        while not self._accept('RBRACE'):
            open_token = self._expect('LPAREN', section)
            source, _ = self._parse_string(section)
            self._expect('COMMA', section)
            symbol, _ = self._parse_string(section)
            self._expect('RPAREN', section)
            self._expect('COLON', section)
            target, _ = self._parse_string(section)
            entries.append(((source, symbol), target, open_token))
            if not self._accept('COMMA'):
                self._expect('RBRACE', section)
                break
        return entries

    # ---------------------------------------------------------------
    def _build(self):
        alphabet = []
        for symbol, token in self.sections['alphabet']:
            if not symbol:
                raise self._error(ParseErrorKind.SYNTAX, "Alphabet symbols must not be empty.", token, 'alphabet')
            if symbol not in alphabet:
                alphabet.append(symbol)

        states = []
        for name, token in self.sections['states']:
            if not name:
                raise self._error(ParseErrorKind.SYNTAX, "State names must not be empty.", token, 'states')
            if name not in states:
                states.append(name)
        if not states:
            raise self._error(
                ParseErrorKind.SYNTAX,
                "At least one state must be declared.",
                self.section_tokens['states'],
                'states',
            )
        declared = set(states)

        initial_state, token = self.sections['initial_state']
        if initial_state not in declared:
            raise self._error(
                ParseErrorKind.UNKNOWN_STATE,
                f"Initial state '{initial_state}' is not declared.",
                token,
                'initial_state',
            )

        accepting = []
        for name, token in self.sections['accepting_states']:
            if name not in declared:
                raise self._error(
                    ParseErrorKind.UNKNOWN_STATE,
                    f"Accepting state '{name}' is not declared.",
                    token,
                    'accepting_states',
                )
            accepting.append(name)

        transitions = {}
        for (source, symbol), target, token in self.sections.get('transitions', []):
            for state in (source, target):
                if state not in declared:
                    raise self._error(
                        ParseErrorKind.UNKNOWN_STATE,
                        f"Transition state '{state}' is not declared.",
                        token,
                        'transitions',
                    )
            if symbol not in alphabet:
                raise self._error(
                    ParseErrorKind.UNKNOWN_SYMBOL,
                    f"Transition symbol '{symbol}' is not in the alphabet.",
                    token,
                    'transitions',
                )
            existing = transitions.get((source, symbol))
            if existing is not None and existing != target:
                raise self._error(
                    ParseErrorKind.DUPLICATE_TRANSITION,
                    f"Transition ('{source}', '{symbol}') points to both '{existing}' and '{target}'.",
                    token,
                    'transitions',
                )
            transitions[(source, symbol)] = target

        return Automaton.build(states, alphabet, initial_state, accepting, transitions.items())


def parse(text):
    """Parse a ``SPEC_DFA = {...}`` text into an Automaton, raising ParseError."""
    if not isinstance(text, str):
        raise ParseError(ParseErrorKind.MALFORMED_BLOCK, "DFA specification must be a string.")
    tokens = Lexer(text).tokenize()
    return Parser(tokens).parse()
