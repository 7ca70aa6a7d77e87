from __future__ import annotations

import logging
import secrets
import uuid
from datetime import datetime, timezone
from typing import Any, Protocol

from .errors import EvalError, EvalErrorKind, InvalidExpressionError
from .models import MAX_VALUE, DiceTerm, Expression, RollResult, Sign
from .parser import parse_expression


logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything that draws a uniform integer in ``[low, high]`` inclusive.

    ``secrets.SystemRandom`` satisfies this and is bias-free: it rejection
    samples over the OS entropy pool instead of reducing modulo ``high``.
    """

    def randint(self, low: int, high: int) -> int: ...


def _now_utc_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def _check_term(term: DiceTerm) -> None:
    if term.sign not in (Sign.POSITIVE, Sign.NEGATIVE):
        raise InvalidExpressionError(f"Dice term sign must be +1 or -1, got {term.sign!r}.")
    for name, value in (("count", term.count), ("sides", term.sides)):
        if type(value) is not int:
            raise InvalidExpressionError(f"Dice {name} must be an integer, got {value!r}.")
        if value > MAX_VALUE:
            raise InvalidExpressionError(f"Dice {name} is too large: {value} (max {MAX_VALUE}).")
    if term.count < 1:
        raise InvalidExpressionError(f"Dice count must be positive, got {term.count}.")
    if term.sides < 1:
        raise InvalidExpressionError(f"Dice must have at least one side, got {term.sides}.")


def _draw(source: RandomSource, sides: int) -> int:
    try:
        value = source.randint(1, sides)
    except Exception as e:
        logger.warning("random source failed drawing a d%d", sides, exc_info=True)
        raise EvalError(EvalErrorKind.RANDOM_SOURCE_FAILURE, f"Random source failure: {e}") from e

    if not isinstance(value, int) or not 1 <= value <= sides:
        logger.warning("random source returned %r for a d%d", value, sides)
        raise EvalError(
            EvalErrorKind.RANDOM_SOURCE_FAILURE,
            f"Random source returned {value!r}, outside [1, {sides}].",
        )
    return value


def roll(expression: Expression, source: RandomSource | None = None) -> RollResult:
    """Roll every die in ``expression`` and sum them with its modifier.

    Dice are drawn independently, in term order and then draw order. Raises
    InvalidExpressionError before any draw when the expression is malformed,
    and EvalError when the random source fails.
    """
    if not expression.terms:
        raise InvalidExpressionError("Expression must include at least one dice term.")
    for term in expression.terms:
        _check_term(term)

    rng = source if source is not None else secrets.SystemRandom()

    rolls: list[int] = []
    total = expression.modifier
    for term in expression.terms:
        for _ in range(term.count):
            value = int(term.sign) * _draw(rng, term.sides)
            rolls.append(value)
            total += value

    logger.debug("rolled %s: %s => %d", expression, rolls, total)
    return RollResult(expression=expression, rolls=tuple(rolls), total=total)


def roll_from_text(
    text: str,
    *,
    source: RandomSource | None = None,
    max_total_dice: int | None = None,
) -> dict[str, Any]:
    """Parse, validate, then roll. Raises ParseError for invalid input."""

    expression = parse_expression(text, max_total_dice=max_total_dice)
    result = roll(expression, source=source)

    payload = result.to_dict()
    payload["request_id"] = uuid.uuid4().hex
    payload["timestamp"] = _now_utc_iso()
    payload["rng"] = {
        "source": "secrets.SystemRandom" if source is None else type(source).__name__,
    }
    return payload
