"""Forward-only tokenizer over a TSPLIB text stream."""
import re
from typing import Iterable, List

from tspkit.exceptions import MalformedInputError
from tspkit.formats import DELIMITER

_TOKEN = re.compile(r"[^\s:]+")
_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_int(token: str) -> int:
    """Decimal integer without the underscores and non-ASCII digits int() would accept."""
    if _INTEGER.fullmatch(token) is None:
        raise ValueError(f"invalid integer: {token!r}")
    return int(token)


def parse_float(token: str) -> float:
    if "_" in token or not token.isascii():
        raise ValueError(f"invalid number: {token!r}")
    return float(token)


class TokenScanner:
    """
    Split a stream of lines into tokens separated by whitespace and colons.

    Lines are pulled lazily so the scanner never reads further than the token being requested.
    A few TSPLIB keywords take the rest of their line as value (NAME, COMMENT), hence the line
    oriented helpers next to the token ones.
    """

    def __init__(self, lines: Iterable[str]):
        self._lines = iter(lines)
        self._line = ""
        self._pos = 0
        self.line_number = 0

    def _fill(self) -> bool:
        """Move to the next token, pulling lines as needed. False at end of stream."""
        while True:
            m = DELIMITER.match(self._line, self._pos)
            if m:
                self._pos = m.end()
            if self._pos < len(self._line):
                return True
            try:
                self._line = next(self._lines)
            except StopIteration:
                self._line, self._pos = "", 0
                return False
            self._pos = 0
            self.line_number += 1
            if self.line_number == 1:
                self._line = self._line.lstrip("\ufeff")

    def has_next(self) -> bool:
        return self._fill()

    def peek(self) -> str:
        if not self._fill():
            raise MalformedInputError("Unexpected end of input", self.line_number)
        return _TOKEN.match(self._line, self._pos).group()

    def next(self) -> str:
        token = self.peek()
        self._pos += len(token)
        return token

    def has_next_int(self) -> bool:
        return self._fill() and _INTEGER.fullmatch(self.peek()) is not None

    def next_int(self) -> int:
        token = self.next()
        try:
            return parse_int(token)
        except ValueError:
            raise MalformedInputError(
                f"Expected an integer, found {token!r}", self.line_number
            ) from None

    def next_float(self) -> float:
        token = self.next()
        try:
            return parse_float(token)
        except ValueError:
            raise MalformedInputError(
                f"Expected a number, found {token!r}", self.line_number
            ) from None

    def rest_of_line(self) -> str:
        """Return what is left on the current line, without leading delimiters."""
        m = DELIMITER.match(self._line, self._pos)
        start = m.end() if m else self._pos
        text = self._line[start:].strip()
        self._pos = len(self._line)
        return text

    def next_line_tokens(self) -> List[str]:
        """Return the tokens of the line holding the next token and consume that line."""
        if not self._fill():
            raise MalformedInputError("Unexpected end of input", self.line_number)
        text = self._line[self._pos:]
        self._pos = len(self._line)
        return _TOKEN.findall(text)
