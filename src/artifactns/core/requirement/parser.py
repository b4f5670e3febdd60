"""Tokenizer and recursive-descent parser for requirement strings.

Grammar, lowest precedence first::

    or_expr   := and_expr (("|" | "||" | "or") and_expr)*
    and_expr  := unary (("&" | "&&" | "and")? unary)*
    unary     := ("!" | "not") "(" or_expr ")"
               | "(" or_expr ")"
               | term
    term      := comparator? version

A missing connective between two operands is an implicit AND.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from artifactns.core.requirement.requirement import COMPARATORS, VersionRequirement
from artifactns.exceptions import InvalidVersionError, ParseError

_INVALID_CHAR_RE = re.compile(r"[^ \t()!&|A-Za-z0-9_.=<>~]")

_TOKEN_RE = re.compile(
    r"""
    (?P<space>[ \t]+)
    |(?P<lparen>\()
    |(?P<rparen>\))
    |(?P<and>&&?)
    |(?P<or>\|\|?)
    |(?P<term>(?P<cmp>[=!<>~]+)?[ \t]*(?P<ver>[A-Za-z0-9_.]+))
    |(?P<not>!)
    |(?P<junk>[=<>~]+)
    """,
    re.VERBOSE,
)


class TokenKind(Enum):
    """Lexical categories of a requirement string."""

    LPAREN = "("
    RPAREN = ")"
    AND = "&"
    OR = "|"
    NOT = "!"
    TERM = "term"
    END = "end"


_KEYWORDS = {"and": TokenKind.AND, "or": TokenKind.OR, "not": TokenKind.NOT}

_SIMPLE_KINDS = {
    "lparen": TokenKind.LPAREN,
    "rparen": TokenKind.RPAREN,
    "and": TokenKind.AND,
    "or": TokenKind.OR,
    "not": TokenKind.NOT,
}


@dataclass(frozen=True)
class Token:
    """A lexical token with its source text and position."""

    kind: TokenKind
    text: str
    pos: int
    comparator: str | None = None
    version: str | None = None


def tokenize(text: str) -> list[Token]:
    """Split a requirement string into tokens.

    Raises:
        ParseError: On characters outside the requirement alphabet or
            terms with an unknown comparator.
    """
    bad = _INVALID_CHAR_RE.search(text)
    if bad:
        raise ParseError(
            f"version string {text!r} contains invalid characters: {bad.group(0)!r}"
        )
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None or match.lastgroup == "junk":
            fragment = text[pos:].split()[0] if text[pos:].split() else text[pos:]
            raise ParseError(f"Invalid requirement string: {fragment}")
        kind = match.lastgroup
        if kind == "term":
            tokens.append(_term_token(match, pos))
        elif kind != "space":
            tokens.append(Token(_SIMPLE_KINDS[kind], match.group(0), pos))
        pos = match.end()
    tokens.append(Token(TokenKind.END, "", len(text)))
    return tokens


def _term_token(match: re.Match[str], pos: int) -> Token:
    comparator, version = match.group("cmp"), match.group("ver")
    if comparator is None and version in _KEYWORDS:
        return Token(_KEYWORDS[version], version, pos)
    if comparator is not None and comparator not in COMPARATORS:
        raise ParseError(f"Invalid requirement string: {match.group(0).strip()}")
    return Token(TokenKind.TERM, match.group(0), pos, comparator, version)


class _Parser:
    """Recursive-descent parser over a token list."""

    _OPERAND_START = (TokenKind.TERM, TokenKind.LPAREN, TokenKind.NOT)

    def __init__(self, text: str, tokens: list[Token]) -> None:
        self._text = text
        self._tokens = tokens
        self._index = 0

    def _peek(self) -> Token:
        return self._tokens[self._index]

    def _advance(self) -> Token:
        token = self._tokens[self._index]
        self._index += 1
        return token

    def _expect(self, kind: TokenKind, context: str) -> Token:
        token = self._peek()
        if token.kind is not kind:
            found = self._text[token.pos:] or "end of input"
            raise ParseError(f"Expected {kind.value!r} {context}, found {found!r}")
        return self._advance()

    def parse(self) -> VersionRequirement:
        if self._peek().kind is TokenKind.END:
            raise ParseError("Empty requirement string")
        result = self._or_expr()
        token = self._peek()
        if token.kind is not TokenKind.END:
            raise ParseError(f"Unexpected {self._text[token.pos:]!r}")
        return result

    def _or_expr(self) -> VersionRequirement:
        left = self._and_expr()
        while self._peek().kind is TokenKind.OR:
            self._advance()
            left = left | self._and_expr()
        return left

    def _and_expr(self) -> VersionRequirement:
        left = self._unary()
        while True:
            kind = self._peek().kind
            if kind is TokenKind.AND:
                self._advance()
            elif kind not in self._OPERAND_START:
                return left
            left = left & self._unary()

    def _unary(self) -> VersionRequirement:
        token = self._advance()
        if token.kind is TokenKind.NOT:
            if self._peek().kind is not TokenKind.LPAREN:
                raise ParseError(
                    f"Negation requires a parenthesised operand near "
                    f"{self._text[token.pos:]!r}"
                )
            self._advance()
            inner = self._or_expr()
            self._expect(TokenKind.RPAREN, "to close negation")
            return inner.negate()
        if token.kind is TokenKind.LPAREN:
            inner = self._or_expr()
            self._expect(TokenKind.RPAREN, "to close group")
            return inner
        if token.kind is TokenKind.TERM:
            return VersionRequirement.term(token.comparator, token.version or "")
        found = self._text[token.pos:] or "end of input"
        raise ParseError(f"Expected a version term, found {found!r}")


def parse_requirement(text: str) -> VersionRequirement:
    """Parse *text* into a ``VersionRequirement``.

    Raises:
        ParseError: Describing the offending part of *text*.
    """
    if not isinstance(text, str):
        raise ParseError(f"Requirement must be a string, got {text!r}")
    stripped = text.strip()
    try:
        return _Parser(stripped, tokenize(stripped)).parse()
    except (ParseError, InvalidVersionError) as exc:
        raise ParseError(f"Failed to parse {text!r} due to: {exc}") from exc
