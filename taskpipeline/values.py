"""Typed variable values used by pipeline expressions and conditions."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Union

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)", re.ASCII)
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:"
    r"(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
    r"|inf(?:inity)?"
    r"|nan"
    r"))",
    re.ASCII | re.IGNORECASE,
)
_POINT_PATTERN = re.compile(r"\s*(\d+)\s*,\s*(\d+)\s*", re.ASCII)
_RECT_PATTERN = re.compile(
    r"\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*", re.ASCII
)


def _parse_int(text: str) -> int:
    """Parse the leading 32-bit integer of ``text``; trailing text is ignored."""
    match = _INT_PREFIX.match(text)
    if match is None:
        raise ValueError(f"invalid integer: {text!r}")
    value = int(match.group(1))
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def _parse_float(text: str) -> float:
    """Parse the leading floating point number of ``text``; trailing text is ignored."""
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        raise ValueError(f"invalid number: {text!r}")
    return float(match.group(1))


def _format_float(value: float) -> str:
    """Format a float the way a default-precision stream does."""
    return "%g" % value


class VariableType(enum.Enum):
    """Kind of a variable; the value is the prefix letter after ``%`` in its name."""

    INTEGER = "i"
    STRING = "s"
    FLOAT = "f"
    BOOLEAN = "b"
    POINT = "p"
    RECT = "r"


def type_from_name(name: str) -> VariableType:
    """Infer a variable's type from the letter following ``%`` in its name."""
    if len(name) < 2:
        return VariableType.INTEGER
    try:
        return VariableType(name[1])
    except ValueError:
        return VariableType.INTEGER


@dataclass(frozen=True)
class Point:
    """A point given by ``x`` and ``y``."""

    x: int = 0
    y: int = 0

    @classmethod
    def from_string(cls, text: str) -> Point:
        """Parse ``"x,y"``; text holding no such pair yields the origin."""
        match = _POINT_PATTERN.search(text)
        if match is None:
            return cls()
        return cls(*(_parse_int(group) for group in match.groups()))

    def __str__(self) -> str:
        return f"{self.x},{self.y}"


@dataclass(frozen=True)
class Rect:
    """A rectangle given by two corners."""

    x1: int = 0
    y1: int = 0
    x2: int = 0
    y2: int = 0

    @classmethod
    def from_string(cls, text: str) -> Rect:
        """Parse ``"x1,y1,x2,y2"``; text holding no such quadruple yields an empty rect."""
        match = _RECT_PATTERN.search(text)
        if match is None:
            return cls()
        return cls(*(_parse_int(group) for group in match.groups()))

    def __str__(self) -> str:
        return f"{self.x1},{self.y1},{self.x2},{self.y2}"


Value = Union[int, str, float, bool, Point, Rect]

_PYTHON_TYPES: dict[VariableType, type] = {
    VariableType.INTEGER: int,
    VariableType.STRING: str,
    VariableType.FLOAT: float,
    VariableType.BOOLEAN: bool,
    VariableType.POINT: Point,
    VariableType.RECT: Rect,
}


def _default_value(var_type: VariableType) -> Value:
    return _PYTHON_TYPES[var_type]()


def _matches_type(var_type: VariableType, value: object) -> bool:
    """True when ``value`` is exactly of the Python type that ``var_type`` holds."""
    return type(value) is _PYTHON_TYPES[var_type]


@dataclass
class Variable:
    """A typed variable holding a single value."""

    type: VariableType = VariableType.INTEGER
    value: Value = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.value is None:
            self.value = _default_value(self.type)

    def parse(self, text: str) -> None:
        """Set the value from its text form; raise ``ValueError`` if it does not parse."""
        if self.type is VariableType.INTEGER:
            self.value = _parse_int(text)
        elif self.type is VariableType.STRING:
            self.value = text
        elif self.type is VariableType.FLOAT:
            self.value = _parse_float(text)
        elif self.type is VariableType.BOOLEAN:
            if text in ("true", "1"):
                self.value = True
            elif text in ("false", "0"):
                self.value = False
            else:
                raise ValueError(f"invalid boolean: {text!r}")
        elif self.type is VariableType.POINT:
            self.value = Point.from_string(text)
        else:
            self.value = Rect.from_string(text)

    def __str__(self) -> str:
        if self.type is VariableType.BOOLEAN:
            return "true" if self.value else "false"
        if self.type is VariableType.FLOAT:
            return _format_float(self.value)  # type: ignore[arg-type]
        return str(self.value)