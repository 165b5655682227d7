"""CEL predicates over object members.

An expression such as ``key == "internal" || value == null`` is compiled once
and evaluated per key/value pair with ``key`` bound to the member name and
``value`` bound to the member's JSON value.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import celpy
from celpy import celtypes
from celpy.adapter import json_to_cel
from celpy.celparser import CELParseError
from celpy.evaluation import CELEvalError

from pyjsonprop._errors import ERR_MSG_INVALID_PREDICATE, InvalidPredicateError

Predicate = Callable[[str, Any], bool]

_env = celpy.Environment()


def compile_predicate(expr: str) -> Predicate:
    """Compile a CEL expression into a ``(key, value) -> bool`` predicate.

    Evaluation errors (e.g. selecting a field of a string) and non-boolean
    results count as "no match".

    Raises:
        InvalidPredicateError: If the expression is empty or does not parse.
    """
    if not isinstance(expr, str) or not expr.strip():
        raise InvalidPredicateError(
            ERR_MSG_INVALID_PREDICATE,
            f"empty predicate expression: {expr!r}",
        )
    try:
        ast = _env.compile(expr)
    except CELParseError as exc:
        raise InvalidPredicateError(
            ERR_MSG_INVALID_PREDICATE,
            f"cannot compile {expr!r}: {exc}",
            wrapped=exc,
        ) from exc
    program = _env.program(ast)

    def predicate(key: str, value: Any) -> bool:
        activation = {"key": celtypes.StringType(key), "value": json_to_cel(value)}
        try:
            result = program.evaluate(activation)
        except CELEvalError:
            return False
        return isinstance(result, (bool, celtypes.BoolType)) and bool(result)

    return predicate


def as_predicate(predicate: Predicate | str) -> Predicate:
    if isinstance(predicate, str):
        return compile_predicate(predicate)
    if not callable(predicate):
        raise InvalidPredicateError(
            ERR_MSG_INVALID_PREDICATE,
            f"predicate must be callable or a CEL string, got {type(predicate).__name__}",
        )
    return predicate
