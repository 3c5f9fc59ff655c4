"""Non-executing evaluator for player configuration scripts.

VixSrc embeds its player configuration as live JavaScript::

    window.video = {"id":"230432","name":"...","quality":1080};
    const url = new URL("https://vixsrc.to/playlist/230432?b=1");
    window.masterPlaylist = {
        params: {
            'token': 'c2e1...',
            'expires': '1735686000',
        },
        url: url.toString(),
    }
    window.canPlayFHD = true

:class:`ScriptSandbox` reconstructs the object graph assigned onto a single
root object (``window``) without running anything. Only assignments of
literal values are honoured:

- ``window.a.b = <literal>`` and ``window["a"] = <literal>``
- chains of such targets, ``window.a = window.b = <literal>``
- literals: objects (quoted/unquoted keys, trailing commas), arrays,
  strings (single, double, back-quoted without ``${}``), numbers, ``true``,
  ``false``, ``null``, ``undefined``, ``NaN``, ``Infinity`` and the
  minifier forms ``!0`` / ``!1``

Any other expression (calls, ``new``, identifiers, arithmetic) evaluates to
``undefined`` (``None``); any other statement is skipped. Code inside
functions and blocks is never entered. The evaluated text cannot reach the
network, the filesystem or any Python object besides the fresh root dict.

``undefined`` and ``null`` both map to ``None``, so :func:`to_js_string`
renders either as ``"null"``. A browser's ``URLSearchParams`` would write
``"undefined"`` for the former.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any

from vixstream.domain.exceptions import ScriptSyntaxError

_MAX_DEPTH = 100

_NAME_RE = re.compile(r"[A-Za-z_$\u00c0-\uffff][\w$\u00c0-\uffff]*")
_NUMBER_RE = re.compile(
    r"0[xX][0-9a-fA-F_]+n?"
    r"|0[bB][01_]+n?"
    r"|0[oO][0-7_]+n?"
    r"|(?:\d[\d_]*\.?[\d_]*|\.\d[\d_]*)(?:[eE][+-]?\d+)?n?"
)
_PUNCT_RE = re.compile(
    r"===|!==|\*\*=|\.\.\.|>>>|=>|==|!=|<=|>=|&&|\|\||\?\?|\?\.|\+\+|--"
    r"|[+\-*/%&|^]="
    r"|."
)

_WHITESPACE = " \t\r\f\v\ufeff\xa0"
_LINE_BREAKS = "\n\u2028\u2029"

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

_KEYWORD_VALUES: dict[str, Any] = {
    "true": True,
    "false": False,
    "null": None,
    "undefined": None,
    "NaN": math.nan,
    "Infinity": math.inf,
}

# Tokens after a line break that continue the previous expression.
_CONTINUATIONS = frozenset(
    ". ?. ( [ + - * / % || && ?? ? : = == === != !== < > <= >= | & ^ ,".split()
)

_CLOSERS = frozenset({")", "]", "}"})
_OPENERS = frozenset({"(", "[", "{"})


@dataclass(frozen=True)
class _Token:
    kind: str  # "name" | "num" | "str" | "template" | "punct"
    value: Any
    newline_before: bool


class _Opaque(Exception):
    """Internal signal: the expression is not a plain literal."""


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------


def _read_string(src: str, start: int) -> tuple[str, int, bool]:
    """Read a quoted string starting at *start*.

    Returns (value, end_index, has_interpolation).
    """
    quote = src[start]
    out: list[str] = []
    interpolated = False
    i = start + 1
    n = len(src)
    while i < n:
        ch = src[i]
        if ch == quote:
            value = "".join(out)
            # Re-pair UTF-16 surrogates produced by \uXXXX escapes.
            value = value.encode("utf-16", "surrogatepass").decode("utf-16", "replace")
            return value, i + 1, interpolated
        if ch == "\\":
            i += 1
            if i >= n:
                break
            esc = src[i]
            legacy_octal = esc == "0" and src[i + 1 : i + 2].isdecimal()
            if esc in _SIMPLE_ESCAPES and not legacy_octal:
                out.append(_SIMPLE_ESCAPES[esc])
                i += 1
            elif esc == "x":
                out.append(chr(int(_hex_digits(src, i + 1, 2), 16)))
                i += 3
            elif esc == "u":
                if src[i + 1 : i + 2] == "{":
                    close = src.find("}", i + 2)
                    if close < 0:
                        raise ScriptSyntaxError("bad unicode escape")
                    out.append(chr(int(_hex_digits(src, i + 2, close - i - 2), 16)))
                    i = close + 1
                else:
                    out.append(chr(int(_hex_digits(src, i + 1, 4), 16)))
                    i += 5
            elif esc == "\r":
                i += 2 if src[i + 1 : i + 2] == "\n" else 1
            elif esc in _LINE_BREAKS:
                i += 1
            else:
                out.append(esc)
                i += 1
            continue
        if quote == "`" and ch == "$" and src[i + 1 : i + 2] == "{":
            interpolated = True
        elif quote != "`" and ch in _LINE_BREAKS:
            break
        out.append(ch)
        i += 1
    raise ScriptSyntaxError("unterminated string literal")


def _hex_digits(src: str, start: int, count: int) -> str:
    digits = src[start : start + count]
    if len(digits) != count or not all(c in "0123456789abcdefABCDEF" for c in digits):
        raise ScriptSyntaxError("bad escape sequence")
    return digits


def _parse_number(text: str) -> int | float:
    text = text.replace("_", "").removesuffix("n")
    prefix = text[:2].lower()
    try:
        if prefix == "0x":
            return int(text[2:], 16)
        if prefix == "0b":
            return int(text[2:], 2)
        if prefix == "0o":
            return int(text[2:], 8)
        if any(c in text for c in ".eE"):
            return float(text)
        return int(text)
    except ValueError as exc:
        # empty digits after a radix prefix, or past int's digit limit
        raise ScriptSyntaxError("bad number literal") from exc


def tokenize(src: str) -> list[_Token]:
    """Split script text into tokens; comments and whitespace are dropped."""
    tokens: list[_Token] = []
    i = 0
    n = len(src)
    newline = False
    while i < n:
        ch = src[i]
        if ch in _WHITESPACE:
            i += 1
            continue
        if ch in _LINE_BREAKS:
            newline = True
            i += 1
            continue
        if src.startswith("//", i) or src.startswith("<!--", i):
            end = src.find("\n", i)
            i = n if end < 0 else end
            continue
        if src.startswith("/*", i):
            end = src.find("*/", i + 2)
            if end < 0:
                raise ScriptSyntaxError("unterminated comment")
            if any(lb in src[i:end] for lb in _LINE_BREAKS):
                newline = True
            i = end + 2
            continue

        if ch in "'\"`":
            value, i, interpolated = _read_string(src, i)
            kind = "template" if interpolated else "str"
            tokens.append(_Token(kind, value, newline))
        elif ch.isdecimal() or (ch == "." and src[i + 1 : i + 2].isdecimal()):
            match = _NUMBER_RE.match(src, i)
            assert match is not None  # noqa: S101
            tokens.append(_Token("num", _parse_number(match.group(0)), newline))
            i = match.end()
        elif (match := _NAME_RE.match(src, i)) is not None:
            tokens.append(_Token("name", match.group(0), newline))
            i = match.end()
        else:
            match = _PUNCT_RE.match(src, i)
            assert match is not None  # noqa: S101
            tokens.append(_Token("punct", match.group(0), newline))
            i = match.end()
        newline = False
    return tokens


# ---------------------------------------------------------------------------
# Parser / evaluator
# ---------------------------------------------------------------------------


class _Evaluator:
    def __init__(self, tokens: list[_Token], root_name: str) -> None:
        self._tokens = tokens
        self._pos = 0
        self._root_name = root_name

    # -- token helpers -----------------------------------------------------

    def _peek(self, offset: int = 0) -> _Token | None:
        idx = self._pos + offset
        return self._tokens[idx] if idx < len(self._tokens) else None

    def _is_punct(self, token: _Token | None, *values: str) -> bool:
        return token is not None and token.kind == "punct" and token.value in values

    def _expect_punct(self, value: str) -> None:
        token = self._peek()
        if not self._is_punct(token, value):
            raise _Opaque
        self._pos += 1

    def _ends_expression(self, token: _Token | None) -> bool:
        if token is None:
            return True
        if self._is_punct(token, ",", ";", *_CLOSERS):
            return True
        return token.newline_before and not (
            token.kind == "punct" and token.value in _CONTINUATIONS
        )

    # -- statements ----------------------------------------------------------

    def run(self, root: dict[str, Any]) -> None:
        while self._pos < len(self._tokens):
            start = self._pos
            path = self._assignment_target()
            if path is None:
                self._pos = start
                self._skip_statement()
                continue
            targets = [path]
            while True:
                mark = self._pos
                chained = self._assignment_target()
                if chained is None:
                    self._pos = mark
                    break
                targets.append(chained)
            value = self._expression()
            if self._is_punct(self._peek(), ","):
                # comma operator: not a plain assignment
                self._skip_statement()
                continue
            # window.a = window.b = v assigns right to left
            for target in reversed(targets):
                _assign(root, target, value)
            if self._is_punct(self._peek(), ";"):
                self._pos += 1

    def _assignment_target(self) -> list[str] | None:
        token = self._peek()
        if token is None or token.kind != "name" or token.value != self._root_name:
            return None
        self._pos += 1
        path: list[str] = []
        while True:
            token = self._peek()
            if self._is_punct(token, "."):
                name = self._peek(1)
                if name is None or name.kind != "name":
                    return None
                path.append(name.value)
                self._pos += 2
            elif self._is_punct(token, "["):
                key = self._peek(1)
                if key is None or key.kind not in ("str", "num"):
                    return None
                if not self._is_punct(self._peek(2), "]"):
                    return None
                path.append(_js_key(key.value))
                self._pos += 3
            else:
                break
        if not path or not self._is_punct(self._peek(), "="):
            return None
        self._pos += 1
        return path

    def _skip_statement(self) -> None:
        """Advance past one statement; always consumes at least one token."""
        depth = 0
        first = True
        while (token := self._peek()) is not None:
            if not first and depth == 0 and token.newline_before:
                if not (token.kind == "punct" and token.value in _CONTINUATIONS):
                    return
            first = False
            self._pos += 1
            if token.kind != "punct":
                continue
            if token.value in _OPENERS:
                depth += 1
            elif token.value in _CLOSERS:
                depth = max(depth - 1, 0)
                if depth == 0 and token.value == "}":
                    return
            elif token.value == ";" and depth == 0:
                return

    # -- expressions ---------------------------------------------------------

    def _expression(self, depth: int = 0) -> Any:
        """Evaluate one expression; non-literals give ``None``."""
        start = self._pos
        try:
            value = self._literal(depth)
            if not self._ends_expression(self._peek()):
                raise _Opaque
            return value
        except _Opaque:
            self._pos = start
            self._skip_expression()
            return None

    def _skip_expression(self) -> None:
        depth = 0
        first = True
        while (token := self._peek()) is not None:
            if depth == 0 and not first and self._ends_expression(token):
                return
            if depth == 0 and self._is_punct(token, ",", ";", *_CLOSERS):
                return
            first = False
            self._pos += 1
            if token.kind == "punct":
                if token.value in _OPENERS:
                    depth += 1
                elif token.value in _CLOSERS:
                    depth -= 1

    def _literal(self, depth: int) -> Any:
        if depth > _MAX_DEPTH:
            raise ScriptSyntaxError("literal nesting too deep")
        token = self._peek()
        if token is None:
            raise _Opaque
        self._pos += 1

        if token.kind == "str":
            return token.value
        if token.kind == "num":
            return token.value
        if token.kind == "name":
            if token.value in _KEYWORD_VALUES:
                return _KEYWORD_VALUES[token.value]
            raise _Opaque
        if token.kind == "punct":
            if token.value == "{":
                return self._object(depth + 1)
            if token.value == "[":
                return self._array(depth + 1)
            if token.value in ("-", "+"):
                operand = self._peek()
                if operand is not None and operand.kind == "num":
                    self._pos += 1
                    return -operand.value if token.value == "-" else operand.value
            if token.value == "!":
                operand = self._peek()
                if operand is not None and operand.kind == "num":
                    self._pos += 1
                    return not operand.value
        raise _Opaque

    def _object(self, depth: int) -> dict[str, Any]:
        obj: dict[str, Any] = {}
        while True:
            token = self._peek()
            if token is None:
                raise _Opaque
            if self._is_punct(token, "}"):
                self._pos += 1
                return obj
            if token.kind in ("str", "num", "name"):
                key = _js_key(token.value)
                self._pos += 1
            else:
                raise _Opaque  # computed keys, spread, getters
            self._expect_punct(":")
            obj[key] = self._expression(depth)
            token = self._peek()
            if self._is_punct(token, ","):
                self._pos += 1
            elif not self._is_punct(token, "}"):
                raise _Opaque

    def _array(self, depth: int) -> list[Any]:
        items: list[Any] = []
        while True:
            token = self._peek()
            if token is None:
                raise _Opaque
            if self._is_punct(token, "]"):
                self._pos += 1
                return items
            if self._is_punct(token, ","):
                items.append(None)  # hole
                self._pos += 1
                continue
            items.append(self._expression(depth))
            token = self._peek()
            if self._is_punct(token, ","):
                self._pos += 1
            elif not self._is_punct(token, "]"):
                raise _Opaque


def _js_key(value: Any) -> str:
    if isinstance(value, str):
        return value
    return to_js_string(value)


def _assign(root: dict[str, Any], path: list[str], value: Any) -> None:
    target: Any = root
    for key in path[:-1]:
        target = target.get(key) if isinstance(target, dict) else None
        if not isinstance(target, dict):
            return  # TypeError in a browser; nothing to record
    target[path[-1]] = value


def to_js_string(value: Any) -> str:
    """Stringify a sandbox value the way JavaScript's ``String()`` does."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, dict):
        return "[object Object]"
    if isinstance(value, list):
        return ",".join("" if item is None else to_js_string(item) for item in value)
    return str(value)


class ScriptSandbox:
    """Evaluates configuration scripts against an isolated root object.

    Each call to :meth:`evaluate` starts from a fresh, empty root; nothing
    leaks between evaluations.
    """

    def __init__(self, root_name: str = "window") -> None:
        self._root_name = root_name

    def evaluate(self, script: str) -> dict[str, Any]:
        """Return the root object after applying the script's assignments.

        Raises:
            ScriptSyntaxError: the script cannot be tokenized (unterminated
                string or comment, bad escape, excessive nesting).
        """
        root: dict[str, Any] = {}
        _Evaluator(tokenize(script), self._root_name).run(root)
        return root
