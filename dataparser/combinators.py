"""Function-style parser combinators that operate on a DataParser."""

from __future__ import annotations

from typing import Callable, TypeVar

from .errors import DataParseError
from .parser import DataParser

A = TypeVar("A")
B = TypeVar("B")

ParserFn = Callable[[DataParser], A]


def delim_extract(expected: bytes) -> Callable[[DataParser], bytes]:
    """Build a parser that consumes exactly ``expected`` and returns it.

    The parser raises DataParseError when the bytes at the cursor differ.
    """
    tag = bytes(expected)

    def extract(parser: DataParser) -> bytes:
        actual = parser.take(len(tag))
        if actual != tag:
            raise DataParseError(
                f"Tag mismatch: expected {list(tag)}, got {list(actual)}"
            )
        return actual

    return extract


def map_parser(
    parser: Callable[[DataParser], A], f: Callable[[A], B]
) -> Callable[[DataParser], B]:
    """Build a parser that runs ``parser`` and passes its result through ``f``."""

    def mapped(p: DataParser) -> B:
        return f(parser(p))

    return mapped


def parse_between(
    parser: Callable[[DataParser], A], delim_start: int, delim_end: int
) -> Callable[[DataParser], A]:
    """Build a parser for a value framed by single start and end delimiter bytes."""

    def between(p: DataParser) -> A:
        start = p.get_byte()
        if start != delim_start:
            raise DataParseError(
                f"Expected start delimiter {delim_start}, found {start}"
            )
        value = parser(p)
        end = p.get_byte()
        if end != delim_end:
            raise DataParseError(f"Expected end delimiter {delim_end}, found {end}")
        return value

    return between