from mcp_dice_engine.parser import parse_expression
from mcp_dice_engine.roller import roll


class _CountingSource:
    def __init__(self):
        self.calls = 0

    def randint(self, low, high):
        self.calls += 1
        return low


def test_parse_is_deterministic():
    text = "d8 - 2d4 + 5"
    a = parse_expression(text)
    b = parse_expression(text)

    assert a == b
    assert a.terms == b.terms
    assert a.modifier == b.modifier
    assert a.notation() == b.notation()


def test_equality_ignores_source_text():
    assert parse_expression("3D8 - 2") == parse_expression("3d8-2")


def test_expression_is_reusable_across_rolls():
    expression = parse_expression("2d6 + 1")
    source = _CountingSource()

    first = roll(expression, source=source)
    second = roll(expression, source=source)

    assert first.expression is second.expression
    assert expression == parse_expression("2d6 + 1")
    assert source.calls == 4
