"""JSON-path evaluation for exclusion rules.

Supported syntax: optional ``$`` root, a bare leading name, ``.name``,
``['name']``, ``[n]``, ``[*]`` and ``[?(...)]`` filters. Filters accept
``@``-relative paths, string/number/``true``/``false``/``null`` literals,
``==`` and ``!=``, existence tests, ``!``, ``&&``, ``||`` and parentheses.

A filter applied to a list keeps the matching elements; applied to an object
it keeps the object itself when it matches. This is what lets
``target[?(@.wt == 'Lang')]`` test a single template target.
"""

from __future__ import annotations

import re
from typing import Any, ClassVar

from wikifix.exclusion.exceptions import JsonPathSyntaxError

_NAME_RE = re.compile(r"[^.\[\]\s()=!<>&|'\"@,*]+")
_INDEX_RE = re.compile(r"\d+")
_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")

_MISSING = object()


class JsonPath:
    """A compiled expression; ``find`` returns every matching value."""

    def __init__(self, expression: str) -> None:
        self.expression = expression
        self._selectors = _Parser(expression).parse()

    def find(self, document: Any) -> list[Any]:
        return _select_all(self._selectors, document)

    def __repr__(self) -> str:
        return f"JsonPath({self.expression!r})"


def _select_all(selectors: list[_Selector], document: Any) -> list[Any]:
    matches = [document]
    for selector in selectors:
        matches = [found for value in matches for found in selector.select(value)]
        if not matches:
            break
    return matches


# ----------------------------------------------------------------------
# Selectors
# ----------------------------------------------------------------------


class _Selector:
    def select(self, value: Any) -> list[Any]:
        raise NotImplementedError


class _Name(_Selector):
    def __init__(self, name: str) -> None:
        self._name = name

    def select(self, value: Any) -> list[Any]:
        if isinstance(value, dict) and self._name in value:
            return [value[self._name]]
        return []


class _Wildcard(_Selector):
    def select(self, value: Any) -> list[Any]:
        if isinstance(value, dict):
            return list(value.values())
        if isinstance(value, list):
            return list(value)
        return []


class _Index(_Selector):
    def __init__(self, index: int) -> None:
        self._index = index

    def select(self, value: Any) -> list[Any]:
        if isinstance(value, list) and self._index < len(value):
            return [value[self._index]]
        return []


class _Filter(_Selector):
    def __init__(self, predicate: _Predicate) -> None:
        self._predicate = predicate

    def select(self, value: Any) -> list[Any]:
        if isinstance(value, list):
            return [item for item in value if self._predicate.evaluate(item)]
        if isinstance(value, dict) and self._predicate.evaluate(value):
            return [value]
        return []


# ----------------------------------------------------------------------
# Filter predicates
# ----------------------------------------------------------------------


class _Operand:
    def resolve(self, current: Any) -> Any:
        raise NotImplementedError


class _Literal(_Operand):
    def __init__(self, value: Any) -> None:
        self._value = value

    def resolve(self, current: Any) -> Any:
        return self._value


class _Relative(_Operand):
    def __init__(self, selectors: list[_Selector]) -> None:
        self._selectors = selectors

    def resolve(self, current: Any) -> Any:
        matches = _select_all(self._selectors, current)
        return matches[0] if matches else _MISSING


class _Predicate:
    def evaluate(self, current: Any) -> bool:
        raise NotImplementedError


class _Exists(_Predicate):
    def __init__(self, operand: _Relative) -> None:
        self._operand = operand

    def evaluate(self, current: Any) -> bool:
        return self._operand.resolve(current) is not _MISSING


class _Comparison(_Predicate):
    _OPERATIONS: ClassVar[dict[str, Any]] = {
        "==": lambda left, right: left == right,
        "!=": lambda left, right: left != right,
    }
    OPERATORS: ClassVar[tuple[str, ...]] = tuple(_OPERATIONS)

    def __init__(self, left: _Operand, operator: str, right: _Operand) -> None:
        self._left = left
        self._operation = self._OPERATIONS[operator]
        self._right = right

    def evaluate(self, current: Any) -> bool:
        left = self._left.resolve(current)
        right = self._right.resolve(current)
        if left is _MISSING or right is _MISSING:
            return False
        return bool(self._operation(left, right))


class _Not(_Predicate):
    def __init__(self, inner: _Predicate) -> None:
        self._inner = inner

    def evaluate(self, current: Any) -> bool:
        return not self._inner.evaluate(current)


class _And(_Predicate):
    def __init__(self, left: _Predicate, right: _Predicate) -> None:
        self._left = left
        self._right = right

    def evaluate(self, current: Any) -> bool:
        return self._left.evaluate(current) and self._right.evaluate(current)


class _Or(_Predicate):
    def __init__(self, left: _Predicate, right: _Predicate) -> None:
        self._left = left
        self._right = right

    def evaluate(self, current: Any) -> bool:
        return self._left.evaluate(current) or self._right.evaluate(current)


# ----------------------------------------------------------------------
# Parser
# ----------------------------------------------------------------------


class _Parser:
    """Recursive-descent parser over a single expression string."""

    def __init__(self, expression: str) -> None:
        self._text = expression
        self._pos = 0

    def parse(self) -> list[_Selector]:
        self._skip_whitespace()
        if not self._text[self._pos:]:
            raise self._error("empty expression")

        selectors: list[_Selector] = []
        if self._peek() == "$":
            self._pos += 1
        elif self._peek() not in (".", "["):
            selectors.append(_Name(self._read_name()))
        selectors.extend(self._parse_segments())

        self._skip_whitespace()
        if self._pos != len(self._text):
            raise self._error("unexpected input")
        return selectors

    def _parse_segments(self) -> list[_Selector]:
        selectors: list[_Selector] = []
        while True:
            char = self._peek()
            if char == ".":
                self._pos += 1
                if self._peek() == ".":
                    raise self._error("deep scan is not supported")
                selectors.append(_Name(self._read_name()))
            elif char == "[":
                selectors.append(self._parse_bracket())
            else:
                return selectors

    def _parse_bracket(self) -> _Selector:
        self._expect("[")
        self._skip_whitespace()
        char = self._peek()
        selector: _Selector
        if char == "*":
            self._pos += 1
            selector = _Wildcard()
        elif char == "?":
            self._pos += 1
            self._expect("(")
            selector = _Filter(self._parse_or())
            self._expect(")")
        elif char in ("'", '"'):
            selector = _Name(self._read_string())
        else:
            match = _INDEX_RE.match(self._text, self._pos)
            if match is None:
                raise self._error("expected '*', '?', a quoted name or an index")
            self._pos = match.end()
            selector = _Index(int(match.group()))
        self._expect("]")
        return selector

    def _parse_or(self) -> _Predicate:
        predicate = self._parse_and()
        while self._consume("||"):
            predicate = _Or(predicate, self._parse_and())
        return predicate

    def _parse_and(self) -> _Predicate:
        predicate = self._parse_unary()
        while self._consume("&&"):
            predicate = _And(predicate, self._parse_unary())
        return predicate

    def _parse_unary(self) -> _Predicate:
        if self._consume("!"):
            return _Not(self._parse_unary())
        if self._consume("("):
            predicate = self._parse_or()
            self._expect(")")
            return predicate

        left = self._parse_operand()
        for operator in _Comparison.OPERATORS:
            if self._consume(operator):
                return _Comparison(left, operator, self._parse_operand())
        if not isinstance(left, _Relative):
            raise self._error("a literal needs a comparison")
        return _Exists(left)

    def _parse_operand(self) -> _Operand:
        self._skip_whitespace()
        char = self._peek()
        if char == "@":
            self._pos += 1
            return _Relative(self._parse_segments())
        if char in ("'", '"'):
            return _Literal(self._read_string())

        match = _NUMBER_RE.match(self._text, self._pos)
        if match is not None:
            self._pos = match.end()
            number = match.group()
            return _Literal(float(number) if "." in number else int(number))

        for keyword, value in (("true", True), ("false", False), ("null", None)):
            if self._text.startswith(keyword, self._pos):
                self._pos += len(keyword)
                return _Literal(value)
        raise self._error("expected '@' or a literal")

    # -- lexical helpers -------------------------------------------------

    def _peek(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else ""

    def _skip_whitespace(self) -> None:
        while self._peek().isspace():
            self._pos += 1

    def _consume(self, token: str) -> bool:
        self._skip_whitespace()
        if self._text.startswith(token, self._pos):
            self._pos += len(token)
            return True
        return False

    def _expect(self, token: str) -> None:
        if not self._consume(token):
            raise self._error(f"expected {token!r}")

    def _read_name(self) -> str:
        match = _NAME_RE.match(self._text, self._pos)
        if match is None:
            raise self._error("expected a property name")
        self._pos = match.end()
        return match.group()

    def _read_string(self) -> str:
        quote = self._peek()
        self._pos += 1
        chars: list[str] = []
        while self._pos < len(self._text):
            char = self._text[self._pos]
            self._pos += 1
            if char == "\\" and self._pos < len(self._text):
                chars.append(self._text[self._pos])
                self._pos += 1
            elif char == quote:
                return "".join(chars)
            else:
                chars.append(char)
        raise self._error("unterminated string")

    def _error(self, message: str) -> JsonPathSyntaxError:
        return JsonPathSyntaxError(
            f"Invalid JSON path {self._text!r}: {message} at position {self._pos}"
        )
