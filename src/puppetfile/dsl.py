"""Reader for the subset of the Puppetfile DSL used to declare modules.

Supported statements::

    forge 'https://forgeapi.puppetlabs.com'
    moduledir 'modules'
    mod 'puppetlabs-stdlib', '6.0.0'
    mod 'puppetlabs/apache', :latest
    mod 'myorg-thing',
      :git => 'git@github.com:myorg/thing.git',
      :tag => 'v1.2.0'
    mod 'myorg-other', git: 'https://github.com/myorg/other', branch: 'main'

Statements end at a newline unless the line ends with a comma, an arrow or
a ``key:`` label, or a parenthesis is still open.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from .errors import PuppetfileSyntaxError
from .models import Directive, ForgeDirective, ModuleDeclaration

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"""
    (?P<ws>[ \t\r]+|\\\r?\n)
   |(?P<comment>\#[^\n]*)
   |(?P<newline>\n)
   |(?P<string>'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*")
   |(?P<label>[A-Za-z_]\w*:(?!:))
   |(?P<symbol>:[A-Za-z_]\w*)
   |(?P<arrow>=>)
   |(?P<comma>,)
   |(?P<semi>;)
   |(?P<lparen>\()
   |(?P<rparen>\))
   |(?P<ident>[A-Za-z_]\w*)
""", re.VERBOSE | re.DOTALL)

_CONTINUATION = ("comma", "arrow", "label")
_DOUBLE_ESCAPES = {"n": "\n", "t": "\t", "\\": "\\", '"': '"', "'": "'", "#": "#"}


class Token(NamedTuple):
    kind: str
    value: str
    lineno: int


def _unquote(literal: str) -> str:
    body = literal[1:-1]
    if literal[0] == "'":
        return re.sub(r"\\([\\'])", r"\1", body)
    return re.sub(r"\\(.)", lambda m: _DOUBLE_ESCAPES.get(m.group(1), m.group(1)), body)


def tokenize(text: str) -> List[Token]:
    """Split Puppetfile text into tokens, dropping whitespace and comments."""
    tokens = []
    pos = 0
    lineno = 1
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if not match:
            raise PuppetfileSyntaxError(f"unexpected character {text[pos]!r}", lineno)
        kind = match.lastgroup
        value = match.group()
        if kind not in ("ws", "comment"):
            tokens.append(Token(kind, value, lineno))
        lineno += value.count("\n")
        pos = match.end()
    return tokens


def _statements(tokens: List[Token]) -> List[List[Token]]:
    statements: List[List[Token]] = []
    current: List[Token] = []
    depth = 0
    for token in tokens:
        if token.kind == "lparen":
            depth += 1
        elif token.kind == "rparen":
            depth -= 1
            if depth < 0:
                raise PuppetfileSyntaxError("unbalanced ')'", token.lineno)
        if token.kind in ("newline", "semi"):
            if depth == 0 and current and (token.kind == "semi" or current[-1].kind not in _CONTINUATION):
                statements.append(current)
                current = []
            continue
        current.append(token)
    if depth:
        raise PuppetfileSyntaxError("unclosed '('", current[0].lineno if current else None)
    if current:
        statements.append(current)
    return statements


def _value(token: Token) -> Any:
    if token.kind == "string":
        return _unquote(token.value)
    if token.kind == "symbol":
        return token.value[1:]
    if token.kind == "ident" and token.value == "nil":
        return None
    raise PuppetfileSyntaxError(f"unexpected {token.value!r}", token.lineno)


def _arguments(tokens: List[Token], lineno: int) -> Tuple[List[Any], Dict[str, Any]]:
    """Parse ``a, b, :k => v, k: v`` into positional values and a hash."""
    positional: List[Any] = []
    options: Dict[str, Any] = {}
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token.kind == "label":
            key, i = token.value[:-1], i + 1
        elif token.kind in ("symbol", "string") and i + 1 < len(tokens) and tokens[i + 1].kind == "arrow":
            key, i = str(_value(token)), i + 2
        else:
            key = None
        if i >= len(tokens):
            raise PuppetfileSyntaxError("missing value", token.lineno)
        value = _value(tokens[i])
        if key is None:
            if options:
                raise PuppetfileSyntaxError("positional argument after options", token.lineno)
            positional.append(value)
        else:
            options[key] = value
        i += 1
        if i < len(tokens):
            if tokens[i].kind != "comma":
                raise PuppetfileSyntaxError(f"expected ',' before {tokens[i].value!r}", tokens[i].lineno)
            i += 1
            if i >= len(tokens):
                raise PuppetfileSyntaxError("trailing ','", lineno)
    return positional, options


def _directive(statement: List[Token]) -> Optional[Directive]:
    head = statement[0]
    if head.kind != "ident":
        raise PuppetfileSyntaxError(f"expected a directive, got {head.value!r}", head.lineno)
    rest = statement[1:]
    if rest and rest[0].kind == "lparen":
        if rest[-1].kind != "rparen":
            raise PuppetfileSyntaxError("expected ')'", rest[-1].lineno)
        rest = rest[1:-1]
    positional, options = _arguments(rest, head.lineno)

    if head.value == "mod":
        if not positional or not isinstance(positional[0], str):
            raise PuppetfileSyntaxError("mod requires a module name", head.lineno)
        if options and len(positional) != 1:
            raise PuppetfileSyntaxError("mod accepts either a version or options, not both", head.lineno)
        if len(positional) > 2:
            raise PuppetfileSyntaxError(f"too many arguments for mod {positional[0]}", head.lineno)
        args: Any = options or (positional[1] if len(positional) == 2 else None)
        return ModuleDeclaration(title=positional[0], options=args, lineno=head.lineno)

    if head.value == "forge":
        if len(positional) != 1 or options or not isinstance(positional[0], str):
            raise PuppetfileSyntaxError("forge requires exactly one location", head.lineno)
        return ForgeDirective(location=positional[0], lineno=head.lineno)

    if head.value == "moduledir":
        logger.debug("Ignoring moduledir on line %s", head.lineno)
        return None

    raise PuppetfileSyntaxError(f"unknown directive '{head.value}'", head.lineno)


def parse_puppetfile(text: str) -> List[Directive]:
    """Return the ordered module declarations and forge overrides in ``text``."""
    directives = []
    for statement in _statements(tokenize(text)):
        directive = _directive(statement)
        if directive is not None:
            directives.append(directive)
    return directives
