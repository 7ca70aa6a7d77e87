from __future__ import annotations

from enum import Enum


class DiceError(Exception):
    """Base class for every dice engine failure."""


class ParseErrorKind(str, Enum):
    EMPTY = "EMPTY"
    MALFORMED_TERM = "MALFORMED_TERM"
    NON_NUMERIC = "NON_NUMERIC"
    NON_POSITIVE_VALUE = "NON_POSITIVE_VALUE"
    TOO_LARGE = "TOO_LARGE"
    NO_DICE_TERMS = "NO_DICE_TERMS"


class EvalErrorKind(str, Enum):
    RANDOM_SOURCE_FAILURE = "RANDOM_SOURCE_FAILURE"


class ParseError(DiceError, ValueError):
    """User-facing notation errors (fail-fast, no roll performed)."""

    def __init__(self, kind: ParseErrorKind, message: str, *, token: str = "", field: str = "") -> None:
        super().__init__(f"[{kind.value}] {message}")
        self.kind = kind
        self.token = token
        self.field = field


class EvalError(DiceError, RuntimeError):
    """The random source could not produce a value."""

    def __init__(self, kind: EvalErrorKind, message: str) -> None:
        super().__init__(f"[{kind.value}] {message}")
        self.kind = kind


class InvalidExpressionError(DiceError, ValueError):
    """An Expression assembled outside the parser breaks a structural invariant."""

    def __init__(self, message: str) -> None:
        super().__init__(f"[INVALID_EXPRESSION] {message}")
