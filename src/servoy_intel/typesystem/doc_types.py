"""
Parser for doc-comment type expressions (the text inside `{...}` of a tag).

Supported forms::

    string, String, java.lang.Object, db:/server/table
    *                      -> any
    ?T, !T                 -> T (nullability is not tracked)
    T=                     -> optional T
    T[], T[][]             -> array of T, depth stacks
    Array, Array<T>, Array.<T>, [T]
    Name<A, B>             -> generic application
    A|B, (A|B)             -> any (unions collapse)
    "literal"              -> type named after the literal
    function(...): R       -> Function
    {a: T}                 -> object

Anything else resolves to ``unknown`` and is logged.
"""

import logging
import re
from typing import List, Optional, Tuple

from ..models.type_info import ANY, UNKNOWN, TypeInfo

logger = logging.getLogger(__name__)

LOWERCASED_NAMES = {'string', 'number', 'boolean', 'bigint', 'undefined', 'null', 'symbol'}
DB_REF_PREFIX = 'db:/'

_TOKEN_RE = re.compile(r'''
    \s*(?:
        (?P<string>"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')
      | (?P<number>-?\d+(?:\.\d+)?)
      | (?P<punct>\.\.\.|\[\]|\.<|=>|[<>(),|=?!*{}:\[\]])
      | (?P<name>[A-Za-z_$][\w$]*(?:(?:\.|:/|/|-)[A-Za-z_$][\w$]*)*)
    )''', re.VERBOSE)

# Tokens after which a bare `?` means "unknown" rather than a nullable prefix
_TERMINATORS = {None, ')', ',', '>', '|', '=', ']', '}'}


class _TypeSyntaxError(ValueError):
    pass


def _tokenize(text: str) -> List[Tuple[str, str]]:
    tokens = []
    pos = 0
    text = text.rstrip()
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if not match or match.end() == pos:
            raise _TypeSyntaxError(f"unexpected character {text[pos]!r} at {pos}")
        kind = match.lastgroup
        tokens.append((kind, match.group(kind)))
        pos = match.end()
    return tokens


class _TypeParser:
    """Recursive descent over the token list; one instance per expression."""

    def __init__(self, tokens: List[Tuple[str, str]]):
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Optional[str]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos][1]
        return None

    def next(self) -> Tuple[str, str]:
        if self.pos >= len(self.tokens):
            raise _TypeSyntaxError("unexpected end of type expression")
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def expect(self, value: str):
        kind, text = self.next()
        if text != value:
            raise _TypeSyntaxError(f"expected {value!r}, got {text!r}")

    def parse(self) -> TypeInfo:
        result = self.parse_union()
        if self.pos != len(self.tokens):
            raise _TypeSyntaxError(f"trailing tokens after type: {self.peek()!r}")
        return result

    def parse_union(self) -> TypeInfo:
        members = [self.parse_postfix()]
        while self.peek() == '|':
            self.next()
            members.append(self.parse_postfix())
        # Unions are not modelled; any member could be passed.
        return ANY if len(members) > 1 else members[0]

    def parse_postfix(self) -> TypeInfo:
        result = self.parse_prefix()
        while self.peek() == '[]':
            self.next()
            result = result.as_array()
        if self.peek() == '=':
            self.next()
            result = result.with_optional()
        return result

    def parse_prefix(self) -> TypeInfo:
        token = self.peek()
        if token == '?':
            self.next()
            if self.peek() in _TERMINATORS:
                return UNKNOWN
            return self.parse_prefix()
        if token in ('!', '...'):
            self.next()
            return self.parse_prefix()
        return self.parse_primary()

    def parse_primary(self) -> TypeInfo:
        kind, text = self.next()

        if text == '(':
            inner = self.parse_union()
            self.expect(')')
            return inner
        if text == '*':
            return ANY
        if text == '[]':
            return UNKNOWN.as_array()
        if text == '[':
            elements = [self.parse_union()]
            while self.peek() == ',':
                self.next()
                elements.append(self.parse_union())
            self.expect(']')
            return elements[0].as_array()
        if text == '{':
            self.skip_balanced('{', '}')
            return TypeInfo('object')
        if kind == 'string':
            return TypeInfo(text[1:-1])
        if kind == 'number':
            return TypeInfo('number')
        if kind != 'name':
            raise _TypeSyntaxError(f"unexpected token {text!r}")

        if text == 'function' and self.peek() == '(':
            self.next()
            self.skip_balanced('(', ')')
            if self.peek() == ':':
                self.next()
                self.parse_postfix()
            return TypeInfo('Function')

        if self.peek() in ('<', '.<'):
            self.next()
            return self.parse_application(text)

        if text == 'Array':
            return UNKNOWN.as_array()
        if text.lower() in LOWERCASED_NAMES:
            return TypeInfo(text.lower())
        return TypeInfo(text)

    def parse_application(self, base: str) -> TypeInfo:
        args = [self.parse_union()]
        while self.peek() == ',':
            self.next()
            args.append(self.parse_union())
        self.expect('>')

        if base == 'Array':
            return args[0].as_array()

        db_ref = None
        if args[0].name.startswith(DB_REF_PREFIX):
            db_ref = args[0].name[len(DB_REF_PREFIX):]
        return TypeInfo(base, generic_args=tuple(args), db_table_ref=db_ref)

    def skip_balanced(self, opening: str, closing: str):
        """Skip tokens up to the matching closing bracket (opening already consumed)."""
        depth = 1
        while depth:
            _, text = self.next()
            if text == opening:
                depth += 1
            elif text == closing:
                depth -= 1


def parse_doc_type(expression: Optional[str]) -> TypeInfo:
    """
    Resolve a doc-comment type expression into a TypeInfo.

    Args:
        expression: Raw type text without the surrounding braces, or None

    Returns:
        The resolved type; ``unknown`` for a missing or unparseable expression
    """
    if expression is None or not expression.strip():
        return UNKNOWN

    try:
        return _TypeParser(_tokenize(expression.strip())).parse()
    except _TypeSyntaxError as e:
        logger.warning(f"Unknown doc type expression {expression!r}: {e}")
        return UNKNOWN
