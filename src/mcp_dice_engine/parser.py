"""Dice notation parser.

Grammar, a flat signed sum with no parentheses:

    expression := term { term }
    term       := [ sign ] ( dice-group | number )
    sign       := '+' | '-'
    dice-group := [ number ] ('d'|'D') number
    number     := digit { digit }          -- value in [1, 10000]

Whitespace may appear anywhere between sign, count, marker and sides.
"""

from __future__ import annotations

import logging

from .errors import ParseError, ParseErrorKind
from .models import MAX_VALUE, DiceTerm, Expression, Sign


logger = logging.getLogger(__name__)

_SIGNS = "+-"
_DIE_MARKERS = "dD"
_DIGITS = "0123456789"


def split_terms(text: str) -> list[str]:
    """Split ``text`` at every sign that does not open a fresh token.

    Each token keeps its leading sign character, so ``"2d6 - 3"`` becomes
    ``["2d6 ", "- 3"]`` and ``"-3"`` stays a single token.
    """
    tokens: list[str] = []
    current: list[str] = []

    for ch in text:
        if ch in _SIGNS and current:
            tokens.append("".join(current))
            current = []
        current.append(ch)

    if not current:
        raise ParseError(ParseErrorKind.EMPTY, "Empty input. Example: '2d6 + 3'.")
    tokens.append("".join(current))
    return tokens


def parse_number(raw: str, field: str) -> int:
    """Parse a strictly positive decimal literal no larger than MAX_VALUE."""
    value = 0
    for ch in raw:
        if ch not in _DIGITS:
            raise ParseError(
                ParseErrorKind.NON_NUMERIC,
                f"{field} must be numeric, got '{raw}'. Example: '2d6 + 3'.",
                token=raw,
                field=field,
            )
        value = value * 10 + _DIGITS.index(ch)
        if value > MAX_VALUE:
            raise ParseError(
                ParseErrorKind.TOO_LARGE,
                f"{field} is too large: '{raw}' (max {MAX_VALUE}).",
                token=raw,
                field=field,
            )
    if value <= 0:
        raise ParseError(
            ParseErrorKind.NON_POSITIVE_VALUE,
            f"{field} must be positive, got '{raw}'. Example: '2d6 + 3'.",
            token=raw,
            field=field,
        )
    return value


def _strip_sign(token: str) -> tuple[Sign, str]:
    body = token.strip()
    sign = Sign.POSITIVE
    if body and body[0] in _SIGNS:
        sign = Sign.of(body[0])
        body = body[1:].strip()
    if not body:
        raise ParseError(
            ParseErrorKind.MALFORMED_TERM,
            f"Missing term after sign in '{token.strip()}'. Example: '2d6 + 1'.",
            token=token.strip(),
        )
    return sign, body


def _find_marker(body: str) -> int:
    for idx, ch in enumerate(body):
        if ch in _DIE_MARKERS:
            return idx
    return -1


def parse_term(token: str) -> DiceTerm | int:
    """Parse one signed token into a DiceTerm, or a signed modifier value."""
    sign, body = _strip_sign(token)

    idx = _find_marker(body)
    if idx < 0:
        return int(sign) * parse_number(body, "modifier")

    count_str = body[:idx].strip()
    sides_str = body[idx + 1 :].strip()
    if not sides_str:
        raise ParseError(
            ParseErrorKind.MALFORMED_TERM,
            f"Dice group '{body}' is missing its number of sides. Example: '2d6'.",
            token=body,
            field="dice sides",
        )

    count = parse_number(count_str, "dice count") if count_str else 1
    sides = parse_number(sides_str, "dice sides")
    return DiceTerm(count=count, sides=sides, sign=sign)


def parse_expression(text: str, *, max_total_dice: int | None = None) -> Expression:
    """Parse ``text`` into an Expression. Raises ParseError for invalid input.

    ``max_total_dice`` optionally caps the number of dice summed across all
    terms; each single count and side value is always capped at MAX_VALUE.
    """
    trimmed = text.strip() if text else ""
    if not trimmed:
        raise ParseError(ParseErrorKind.EMPTY, "Empty input. Example: '2d6 + 3'.")

    terms: list[DiceTerm] = []
    modifier = 0

    try:
        for token in split_terms(trimmed):
            parsed = parse_term(token)
            if isinstance(parsed, DiceTerm):
                terms.append(parsed)
            else:
                modifier += parsed
    except ParseError as e:
        logger.debug("rejected dice expression %r: %s", trimmed, e)
        raise

    if not terms:
        logger.debug("rejected dice expression %r: no dice terms", trimmed)
        raise ParseError(
            ParseErrorKind.NO_DICE_TERMS,
            f"No dice found in '{trimmed}'. Example: 'd20' or '2d6 + 3'.",
            token=trimmed,
        )

    expression = Expression(terms=tuple(terms), modifier=modifier, source=text)

    if max_total_dice is not None and expression.dice_count > max_total_dice:
        logger.debug("rejected dice expression %r: %d dice", trimmed, expression.dice_count)
        raise ParseError(
            ParseErrorKind.TOO_LARGE,
            f"Too many dice: {expression.dice_count} (max {max_total_dice}).",
            token=trimmed,
        )

    return expression


parse = parse_expression
