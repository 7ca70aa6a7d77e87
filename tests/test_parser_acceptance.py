import pytest

from mcp_dice_engine.models import DiceTerm, Sign
from mcp_dice_engine.parser import parse_expression


POS = Sign.POSITIVE
NEG = Sign.NEGATIVE


@pytest.mark.parametrize(
    ("text", "normalized_expression", "terms", "modifier"),
    [
        ("2d6", "2d6", [DiceTerm(count=2, sides=6, sign=POS)], 0),
        ("d6", "d6", [DiceTerm(count=1, sides=6, sign=POS)], 0),
        (
            "2d6 + 1d4 - 3",
            "2d6 + d4 - 3",
            [
                DiceTerm(count=2, sides=6, sign=POS),
                DiceTerm(count=1, sides=4, sign=POS),
            ],
            -3,
        ),
        (
            "d8 - 2d4 + 5",
            "d8 - 2d4 + 5",
            [
                DiceTerm(count=1, sides=8, sign=POS),
                DiceTerm(count=2, sides=4, sign=NEG),
            ],
            5,
        ),
        ("  3D8   -   2 ", "3d8 - 2", [DiceTerm(count=3, sides=8, sign=POS)], -2),
        ("-d4", "- d4", [DiceTerm(count=1, sides=4, sign=NEG)], 0),
        ("+2 d 10", "2d10", [DiceTerm(count=2, sides=10, sign=POS)], 0),
        ("1 + d1 + 2 - 4", "d1 - 1", [DiceTerm(count=1, sides=1, sign=POS)], -1),
        ("10000d10000", "10000d10000", [DiceTerm(count=10000, sides=10000, sign=POS)], 0),
    ],
)
def test_parse_acceptance(text, normalized_expression, terms, modifier):
    parsed = parse_expression(text)
    assert list(parsed.terms) == terms
    assert parsed.modifier == modifier
    assert parsed.notation() == normalized_expression
    assert parsed.source == text


def test_term_order_is_preserved():
    parsed = parse_expression("d20 + 2d6 - d4 + 3d8")
    assert [t.sides for t in parsed.terms] == [20, 6, 4, 8]
    assert parsed.dice_count == 7


def test_total_dice_cap_allows_exact_limit():
    parsed = parse_expression("3d6 + 2d4", max_total_dice=5)
    assert parsed.dice_count == 5
