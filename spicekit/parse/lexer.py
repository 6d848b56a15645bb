"""Low-level tokens of a netlist: names, nodes, numbers, comments and spacing.

Every parser takes the remaining text and returns ``(rest, value)``.  A parser
that does not match raises :class:`ParseError`, so alternatives may be tried;
once a statement has been recognised, later mismatches raise
:class:`ParseFailure`, which is final.
"""

from __future__ import annotations

import re
from contextlib import contextmanager
from typing import Callable, Iterator, Tuple, TypeVar

from spicekit.units import Number, Quantity, Suffix, Unit

T = TypeVar("T")
Parsed = Tuple[str, T]
Parser = Callable[[str], Parsed]


class SpiceReadError(Exception):
    """Raised when a netlist file cannot be read or parsed."""


class _ParseProblem(Exception):
    def __init__(self, remaining: str, context: str) -> None:
        preview = remaining.split("\n", 1)[0][:40]
        super().__init__(f"{context} at {preview!r}")
        self.remaining = remaining
        self.context = context


class ParseError(_ParseProblem):
    """The text does not match; another alternative may still be tried."""


class ParseFailure(_ParseProblem):
    """The text started a construct but is malformed; parsing stops here."""


@contextmanager
def _committed() -> Iterator[None]:
    """Turn any recoverable :class:`ParseError` raised inside into a failure."""
    try:
        yield
    except ParseError as exc:
        raise ParseFailure(exc.remaining, exc.context) from exc


def _starts_with_no_case(text: str, tag: str) -> bool:
    return text[: len(tag)].lower() == tag.lower()


def _tag_no_case(tag: str) -> Parser:
    def run(text: str) -> Parsed:
        if _starts_with_no_case(text, tag):
            return text[len(tag):], text[: len(tag)]
        raise ParseError(text, f"expected {tag!r}")

    return run


def _char(c: str) -> Parser:
    def run(text: str) -> Parsed:
        if text.startswith(c):
            return text[1:], c
        raise ParseError(text, f"expected {c!r}")

    return run


def _opt(parser: Parser) -> Parser:
    def run(text: str) -> Parsed:
        try:
            return parser(text)
        except ParseError:
            return text, None

    return run


def _alt(*parsers: Parser) -> Parser:
    def run(text: str) -> Parsed:
        error: ParseError | None = None
        for parser in parsers:
            try:
                return parser(text)
            except ParseError as exc:
                error = exc
        raise error if error is not None else ParseError(text, "no alternative")

    return run


def _many0(parser: Parser) -> Parser:
    def run(text: str) -> Parsed:
        items = []
        while True:
            try:
                rest, item = parser(text)
            except ParseError:
                return text, items
            if rest == text:
                raise ParseError(text, "repetition consumed nothing")
            items.append(item)
            text = rest

    return run


def _hws(parser: Parser) -> Parser:
    """Wrap ``parser`` so it skips spacing and continuation lines on both sides."""

    def run(text: str) -> Parsed:
        rest, value = parser(smart_space0(text))
        return smart_space0(rest), value

    return run


def smart_space0(text: str) -> str:
    """Skip spaces, tabs, carriage returns and ``\\n+`` continuation marks.

    A bare newline ends a statement and is not skipped.
    """
    i, n = 0, len(text)
    while i < n:
        c = text[i]
        if c in " \t\r":
            i += 1
        elif c == "\n" and text.startswith("+", i + 1):
            i += 2
            while i < n and text[i] in " \t":
                i += 1
        else:
            break
    return text[i:]


_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_.]*")
_NODE = re.compile(r"[A-Za-z0-9_.]+")
_DIGITS = re.compile(r"[0-9]+")
_DECIMAL = re.compile(r"(?:[0-9]_*)+")
_FLOAT = re.compile(r"-?(?:[0-9]_*)+(?:\.(?:(?:[0-9]_*)+)?)?")
_U32_MAX = 2**32 - 1


def _regex(pattern: re.Pattern, text: str, context: str) -> Parsed:
    match = pattern.match(text)
    if match is None:
        raise ParseError(text, context)
    return text[match.end():], match.group()


def identifier(text: str) -> Parsed:
    """A name: a letter or ``_`` followed by letters, digits, ``_`` or ``.``."""
    return _regex(_IDENTIFIER, text, "identifier")


def node(text: str) -> Parsed:
    """A node name: one or more letters, digits, ``_`` or ``.``."""
    return _regex(_NODE, text, "node")


def unsigned_int(text: str) -> Parsed:
    """A non-negative integer that fits in 32 bits."""
    rest, digits = _regex(_DIGITS, text, "unsigned_int")
    value = int(digits)
    if value > _U32_MAX:
        raise ParseError(text, "unsigned_int")
    return rest, value


def decimal(text: str) -> Parsed:
    """A run of digits, each optionally followed by underscores."""
    return _regex(_DECIMAL, text, "decimal")


def float_number(text: str) -> Parsed:
    """A signed number such as ``42``, ``-3.`` or ``1.25``; no exponent."""
    rest, literal = _regex(_FLOAT, text, "float")
    if "_" in literal:
        raise ParseError(text, "float")
    return rest, float(literal)


_PLAIN_SUFFIXES = (
    ("g", Suffix.MEGA),
    ("meg", Suffix.MEGA),
    ("k", Suffix.KILO),
    ("m", Suffix.MILLI),
    ("u", Suffix.MICRO),
    ("n", Suffix.NANO),
    ("p", Suffix.PICO),
)


def _unit_suffixes(symbol: str, bare: Suffix = Suffix.NONE):
    prefixed = tuple((tag + symbol, suffix) for tag, suffix in _PLAIN_SUFFIXES)
    return prefixed + _PLAIN_SUFFIXES + ((symbol, bare),)


_TIME_SUFFIXES = _unit_suffixes("s")
_VOLTAGE_SUFFIXES = _unit_suffixes("v")
_CURRENT_SUFFIXES = _unit_suffixes("A")
_RESISTANCE_SUFFIXES = _unit_suffixes("Ω")
_CAPACITANCE_SUFFIXES = _unit_suffixes("F")
_INDUCTANCE_SUFFIXES = _unit_suffixes("H", Suffix.PICO)


def _scaled(text: str, table, context: str) -> Parsed:
    try:
        rest, value = float_number(text)
    except ParseError:
        raise ParseError(text, context) from None
    for tag, suffix in table:
        if _starts_with_no_case(rest, tag):
            return rest[len(tag):], Number(value, suffix)
    return rest, Number(value)


def _quantity(text: str, table, unit: Unit, context: str) -> Parsed:
    rest, value = _scaled(text, table, context)
    return rest, Quantity(value, unit)


def number(text: str) -> Parsed:
    """A number with an optional engineering suffix (``k``, ``meg``, ``u``...)."""
    return _scaled(text, _PLAIN_SUFFIXES, "expect number")


def time_number(text: str) -> Parsed:
    return _quantity(text, _TIME_SUFFIXES, Unit.TIME, "expect time number")


def voltage_number(text: str) -> Parsed:
    return _quantity(text, _VOLTAGE_SUFFIXES, Unit.VOLTAGE, "expect voltage number")


def current_number(text: str) -> Parsed:
    return _quantity(text, _CURRENT_SUFFIXES, Unit.CURRENT, "expect current number")


def resistance_number(text: str) -> Parsed:
    return _quantity(
        text, _RESISTANCE_SUFFIXES, Unit.RESISTANCE, "expect resistance number"
    )


def capacitance_number(text: str) -> Parsed:
    return _quantity(
        text, _CAPACITANCE_SUFFIXES, Unit.CAPACITANCE, "expect capacitance number"
    )


def inductance_number(text: str) -> Parsed:
    return _quantity(
        text, _INDUCTANCE_SUFFIXES, Unit.INDUCTANCE, "expect inductance number"
    )


def frequency_number(text: str) -> Parsed:
    rest, value = number(text)
    return rest, Quantity(value, Unit.FREQUENCY)


def angle_number(text: str) -> Parsed:
    rest, value = number(text)
    return rest, Quantity(value, Unit.ANGLE)


def comment(text: str) -> Parsed:
    """A ``*`` or ``;`` comment up to and including the end of its line."""
    if text[:1] not in ("*", ";") or not text:
        raise ParseError(text, "comment")
    start = 1
    while start < len(text) and text[start] in " \t":
        start += 1
    ends = [i for i in (text.find("\r", start), text.find("\n", start)) if i >= 0]
    if not ends:
        return "", text[start:].rstrip()
    end = min(ends)
    if text.startswith("\r\n", end):
        rest = text[end + 2:]
    elif text[end] == "\r":
        raise ParseError(text, "comment")
    else:
        rest = text[end + 1:]
    return rest, text[start:end].rstrip()