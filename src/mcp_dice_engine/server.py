from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .config import settings
from .errors import EvalError, ParseError
from .parser import parse_expression
from .roller import roll_from_text


logger = logging.getLogger(__name__)

mcp = FastMCP(settings.server_name)


@mcp.tool()
def roll_dice(expression: str) -> dict[str, Any]:
    """Roll a dice expression such as '2d6 + 1d4 - 3'.

    Input: expression (string)
    Output: the signed roll of every die, the modifier and the total

    Raises a hard error (exception) on invalid input.
    """

    try:
        return roll_from_text(expression, max_total_dice=settings.total_dice_cap)
    except ParseError as e:
        raise ValueError(str(e)) from None
    except EvalError as e:
        logger.error("roll failed for %r: %s", expression, e)
        raise RuntimeError(str(e)) from None


@mcp.tool()
def parse_dice(expression: str) -> dict[str, Any]:
    """Parse a dice expression without rolling it."""

    try:
        parsed = parse_expression(expression, max_total_dice=settings.total_dice_cap)
    except ParseError as e:
        raise ValueError(str(e)) from None

    return {
        "expression": expression,
        "normalized_expression": parsed.notation(),
        "terms": [t.to_dict() for t in parsed.terms],
        "modifier": parsed.modifier,
        "dice_count": parsed.dice_count,
    }


def run() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Default transport is stdio.
    mcp.run()


if __name__ == "__main__":
    run()
