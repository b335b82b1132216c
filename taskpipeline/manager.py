"""A registry of typed variables with conditions, assignments and log templates."""

from __future__ import annotations

import math
import operator
import re
from collections.abc import Iterable
from dataclasses import replace
from typing import Callable, Optional

from taskpipeline.values import (
    Value,
    Variable,
    VariableType,
    _matches_type,
    _parse_float,
    _parse_int,
    type_from_name,
)

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

# Searched in this order; the first operator found anywhere in the text wins.
_COMPARISON_OPERATORS = ("<=", ">=", "==", "!=", "<", ">")
_COMPARATORS: dict[str, Callable[[object, object], bool]] = {
    "<": operator.lt,
    ">": operator.gt,
    "<=": operator.le,
    ">=": operator.ge,
    "==": operator.eq,
    "!=": operator.ne,
}

_OPERATION_PATTERN = re.compile(r"\{([^{}]+)\}")
_REFERENCE_PATTERN = re.compile(r"\[(%[^\[\]]+)\]")
_ARITHMETIC_VARIABLE = re.compile(r"%[a-zA-Z0-9_]+")
_ARITHMETIC_PART = re.compile(r"[0-9.]+|[+\-*/]")
_WHITESPACE = re.compile(r"[ \t\n\v\f\r]")

_PRECEDENCE = {"+": 1, "-": 1, "*": 2, "/": 2}
_ARITHMETIC: dict[str, Callable[[float, float], float]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
}

_TRUTHY_TYPES = (
    VariableType.BOOLEAN,
    VariableType.INTEGER,
    VariableType.FLOAT,
    VariableType.STRING,
)


class VariableError(Exception):
    """A variable is unknown, badly named, or given a value it cannot hold."""


class ExpressionError(VariableError):
    """An expression cannot be evaluated."""


def _to_int(value: float) -> int:
    """Truncate toward zero into a 32-bit integer."""
    if not math.isfinite(value) or not _INT32_MIN <= int(value) <= _INT32_MAX:
        raise ExpressionError(f"value out of integer range: {value!r}")
    return int(value)


def _fixed(value: float) -> str:
    """Fixed six-decimal text form of a float."""
    return "%f" % value


def _convert(variable: Variable, expected: VariableType) -> Value:
    """Convert a variable's value to the expected type."""
    source, value = variable.type, variable.value
    if source is VariableType.INTEGER:
        if expected is VariableType.INTEGER:
            return value
        if expected is VariableType.FLOAT:
            return float(value)  # type: ignore[arg-type]
        if expected is VariableType.STRING:
            return str(value)
        if expected is VariableType.BOOLEAN:
            return value != 0
    elif source is VariableType.STRING:
        if expected is VariableType.STRING:
            return value
        if expected is VariableType.BOOLEAN:
            return bool(value)
    elif source is VariableType.FLOAT:
        if expected is VariableType.FLOAT:
            return value
        if expected is VariableType.INTEGER:
            return _to_int(value)  # type: ignore[arg-type]
        if expected is VariableType.STRING:
            return _fixed(value)  # type: ignore[arg-type]
        if expected is VariableType.BOOLEAN:
            return value != 0.0
    elif source is VariableType.BOOLEAN:
        if expected is VariableType.BOOLEAN:
            return value
        if expected is VariableType.INTEGER:
            return 1 if value else 0
        if expected is VariableType.FLOAT:
            return 1.0 if value else 0.0
        if expected is VariableType.STRING:
            return "true" if value else "false"
    raise ExpressionError("type mismatch in expression")


def _parse_constant(expression: str, expected: VariableType) -> Value:
    try:
        if expected is VariableType.INTEGER:
            return _parse_int(expression)
        if expected is VariableType.FLOAT:
            return _parse_float(expression)
    except ValueError as exc:
        raise ExpressionError(
            f"invalid {expected.name.lower()} expression: {expression}"
        ) from exc
    if expected is VariableType.STRING:
        return expression
    if expected is VariableType.BOOLEAN:
        if expression in ("true", "1"):
            return True
        if expression in ("false", "0"):
            return False
        raise ExpressionError(f"invalid boolean expression: {expression}")
    raise ExpressionError("unknown expression type")


def _evaluate_infix(expression: str) -> float:
    """Evaluate ``+ - * /`` over numbers; every other character is ignored."""
    output: list[str] = []
    pending: list[str] = []
    for part in _ARITHMETIC_PART.findall(expression):
        if part in _PRECEDENCE:
            while pending and _PRECEDENCE[pending[-1]] >= _PRECEDENCE[part]:
                output.append(pending.pop())
            pending.append(part)
        else:
            output.append(part)
    output.extend(reversed(pending))

    values: list[float] = []
    for part in output:
        if part in _PRECEDENCE:
            if len(values) < 2:
                raise ExpressionError("invalid expression: not enough operands")
            right = values.pop()
            left = values.pop()
            if part == "/" and right == 0:
                raise ExpressionError("division by zero")
            values.append(_ARITHMETIC[part](left, right))
        else:
            try:
                values.append(_parse_float(part))
            except ValueError as exc:
                raise ExpressionError(
                    f"invalid number in expression: {part}"
                ) from exc
    if len(values) != 1:
        raise ExpressionError("invalid expression: too many operands")
    return values[0]


def _compare(symbol: str, left: object, right: object) -> bool:
    compare = _COMPARATORS[symbol]
    left_type, right_type = type(left), type(right)
    if left_type is int and right_type is int:
        return compare(left, right)
    if left_type is float or right_type is float:
        numeric = (int, float)
        if left_type in numeric and right_type in numeric:
            return compare(float(left), float(right))  # type: ignore[arg-type]
        return False
    if left_type is str and right_type is str:
        return compare(left, right)
    if left_type is bool and right_type is bool:
        return symbol in ("==", "!=") and compare(left, right)
    return False


class VariableManager:
    """Holds named variables (``%`` followed by a type letter) and evaluates text against them."""

    def __init__(self) -> None:
        self._variables: dict[str, Variable] = {}

    def define(self, name: str, var_type: VariableType, value: Optional[str] = None) -> None:
        """Create or replace a variable, parsing ``value`` when one is given."""
        if not name.startswith("%"):
            raise VariableError(f"invalid variable name: {name!r}")
        variable = Variable(var_type)
        if value is not None:
            try:
                variable.parse(value)
            except ValueError as exc:
                raise VariableError(f"invalid value for {name}: {value!r}") from exc
        self._variables[name] = variable

    def get(self, name: str) -> Optional[Variable]:
        """Return a copy of the named variable, or ``None`` when it is not defined."""
        variable = self._variables.get(name)
        return None if variable is None else replace(variable)

    def set(self, name: str, value: Value) -> None:
        """Store ``value`` in an existing variable of exactly matching type."""
        variable = self._variables.get(name)
        if variable is None:
            raise VariableError(f"unknown variable: {name}")
        if not _matches_type(variable.type, value):
            raise VariableError(
                f"{name} holds {variable.type.name.lower()}, not {type(value).__name__}"
            )
        variable.value = value

    def parse_definition(self, definition: str) -> None:
        """Define a variable from ``%name`` or ``%name=value``; the type comes from the name."""
        if not definition.startswith("%"):
            raise VariableError(f"invalid variable definition: {definition!r}")
        name, equals, value = definition.partition("=")
        self.define(name, type_from_name(name), value if equals else None)

    def parse_definitions(self, definitions: Iterable[str]) -> None:
        """Apply every definition; raise afterwards if any of them failed."""
        failures: list[str] = []
        for definition in definitions:
            try:
                self.parse_definition(definition)
            except VariableError as exc:
                failures.append(str(exc))
        if failures:
            raise VariableError("; ".join(failures))

    def evaluate_condition(self, condition: str) -> bool:
        """Evaluate a comparison, a variable's truth, or a boolean expression."""
        for symbol in _COMPARISON_OPERATORS:
            position = condition.find(symbol)
            if position != -1:
                break
        else:
            return self._truth(condition)

        left = self._operand(condition[:position])
        right = self._operand(condition[position + len(symbol):])
        if left is None or right is None:
            return False
        return _compare(symbol, left, right)

    def process_log_string(self, text: str) -> str:
        """Run ``{operation}`` parts, substitute ``[%name]`` references and drop the operations."""
        for match in _OPERATION_PATTERN.finditer(text):
            try:
                self.execute_expression(match.group(1))
            except VariableError:
                pass
        result = self._replace_references(text)
        return _OPERATION_PATTERN.sub("", result)

    def execute_expression(self, expression: str) -> None:
        """Apply ``%name++``, ``%name--`` or ``%name=expression``; whitespace is ignored."""
        operation = _WHITESPACE.sub("", expression)
        if len(operation) >= 3 and operation.startswith("%"):
            for suffix, step in (("++", 1), ("--", -1)):
                if operation.endswith(suffix):
                    name = operation[: -len(suffix)]
                    variable = self._variables.get(name)
                    if variable is None or variable.type is not VariableType.INTEGER:
                        raise VariableError(f"not an integer variable: {name}")
                    variable.value += step  # type: ignore[operator]
                    return

        position = operation.find("=")
        if position <= 0:
            raise ExpressionError(f"not a variable operation: {expression!r}")
        name, source = operation[:position], operation[position + 1:]
        variable = self._variables.get(name)
        if variable is None:
            raise VariableError(f"unknown variable: {name}")
        self.set(name, self._parse_expression(source, variable.type))

    def _truth(self, condition: str) -> bool:
        if condition.startswith("%"):
            variable = self._variables.get(condition)
            if variable is not None and variable.type in _TRUTHY_TYPES:
                return bool(variable.value)
        try:
            return bool(self._parse_expression(condition, VariableType.BOOLEAN))
        except ExpressionError:
            return False

    def _operand(self, text: str) -> Optional[Value]:
        """Value of one side of a comparison; ``None`` for an unknown variable."""
        if text.startswith("%"):
            variable = self._variables.get(text)
            if variable is None:
                return None
            if variable.type in (VariableType.POINT, VariableType.RECT):
                return 0
            return variable.value
        try:
            return _parse_int(text)
        except ValueError:
            pass
        try:
            return _parse_float(text)
        except ValueError:
            return text

    def _replace_references(self, text: str) -> str:
        result = text
        for match in _REFERENCE_PATTERN.finditer(text):
            name = match.group(1)
            variable = self._variables.get(name)
            if variable is not None:
                result = result.replace(f"[{name}]", str(variable))
        return result

    def _parse_expression(self, expression: str, expected: VariableType) -> Value:
        if expression.startswith("%"):
            variable = self._variables.get(expression)
            if variable is None:
                raise ExpressionError(f"variable not found: {expression}")
            return _convert(variable, expected)
        if any(char in "+-*/" for char in expression):
            return self._evaluate_arithmetic(expression, expected)
        return _parse_constant(expression, expected)

    def _evaluate_arithmetic(self, expression: str, expected: VariableType) -> Value:
        text = expression
        while (match := _ARITHMETIC_VARIABLE.search(text)) is not None:
            name = match.group(0)
            variable = self._variables.get(name)
            if variable is None:
                raise ExpressionError(f"variable not found: {name}")
            if variable.type is VariableType.INTEGER:
                substitute = str(variable.value)
            elif variable.type is VariableType.FLOAT:
                substitute = _fixed(variable.value)  # type: ignore[arg-type]
            elif variable.type is VariableType.STRING:
                raise ExpressionError(f"string variable in arithmetic expression: {name}")
            elif variable.type is VariableType.BOOLEAN:
                substitute = "1" if variable.value else "0"
            else:
                substitute = ""
            text = text.replace(name, substitute)

        result = _evaluate_infix(text)
        if expected is VariableType.INTEGER:
            return _to_int(result)
        if expected is VariableType.FLOAT:
            return result
        if expected is VariableType.STRING:
            return _fixed(result)
        if expected is VariableType.BOOLEAN:
            return result != 0.0
        raise ExpressionError("unknown expected type")