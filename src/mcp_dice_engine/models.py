from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


MAX_VALUE = 10_000


class Sign(IntEnum):
    POSITIVE = 1
    NEGATIVE = -1

    @classmethod
    def of(cls, ch: str) -> Sign:
        if ch == "+":
            return cls.POSITIVE
        if ch == "-":
            return cls.NEGATIVE
        raise ValueError(f"not a sign character: {ch!r}")

    @property
    def symbol(self) -> str:
        return "+" if self is Sign.POSITIVE else "-"


@dataclass(frozen=True)
class DiceTerm:
    count: int
    sides: int
    sign: Sign = Sign.POSITIVE

    def to_dict(self) -> dict[str, int]:
        return {"count": self.count, "sides": self.sides, "sign": int(self.sign)}

    def notation(self) -> str:
        return f"{self.count}d{self.sides}" if self.count != 1 else f"d{self.sides}"


@dataclass(frozen=True)
class Expression:
    """A flat signed sum of dice groups plus a constant modifier.

    ``source`` keeps the text the expression was parsed from and takes no
    part in equality, so parsing the same text twice compares equal.
    """

    terms: tuple[DiceTerm, ...]
    modifier: int = 0
    source: str = field(default="", compare=False)

    @property
    def dice_count(self) -> int:
        return sum(term.count for term in self.terms)

    def notation(self) -> str:
        chunks: list[str] = []

        def append_signed(piece: str, sign: Sign) -> None:
            if not chunks:
                chunks.append(f"- {piece}" if sign is Sign.NEGATIVE else piece)
                return
            chunks.append(f"{sign.symbol} {piece}")

        for term in self.terms:
            append_signed(term.notation(), Sign(term.sign))
        if self.modifier:
            append_signed(str(abs(self.modifier)), Sign.POSITIVE if self.modifier > 0 else Sign.NEGATIVE)

        return " ".join(chunks)

    def __str__(self) -> str:
        return self.notation()


@dataclass(frozen=True)
class RollResult:
    expression: Expression
    rolls: tuple[int, ...]
    total: int

    def to_dict(self) -> dict[str, Any]:
        expr = self.expression
        return {
            "expression": expr.source or expr.notation(),
            "normalized_expression": expr.notation(),
            "terms": [t.to_dict() for t in expr.terms],
            "rolls": list(self.rolls),
            "modifier": expr.modifier,
            "total": self.total,
        }
