from decimal import Decimal

import pytest

from packslip.expression import evaluate, format_quantity, normalize


class TestNormalize:
    def test_multiplication_sign(self):
        assert normalize("12×2") == "12*2"

    def test_division_sign(self):
        assert normalize("10÷4") == "10/4"

    def test_leaves_plain_operators(self):
        assert normalize("1+2-3*4/5") == "1+2-3*4/5"


class TestEvaluate:
    def test_precedence_with_unicode_operators(self):
        assert evaluate("12+8×2") == 28

    def test_division_sign(self):
        assert evaluate("10÷4") == Decimal("2.5")

    def test_parentheses(self):
        assert evaluate("(12+8)×2") == 40

    def test_nested_parentheses(self):
        assert evaluate("((1+2)*(3+4))/7") == 3

    def test_spaces_allowed(self):
        assert evaluate(" 10 + 5 * 2 ") == 20

    def test_plain_number(self):
        assert evaluate("45") == 45

    def test_decimal_number(self):
        assert evaluate("12.75") == Decimal("12.75")

    def test_leading_decimal_point(self):
        assert evaluate(".5+.25") == Decimal("0.75")

    def test_unary_minus(self):
        assert evaluate("-5+10") == 5

    def test_subtraction_to_negative(self):
        assert evaluate("1000-1200") == -200

    def test_left_associative(self):
        assert evaluate("100-20-30") == 50
        assert evaluate("100/5/2") == 10

    def test_division_by_zero(self):
        assert evaluate("10÷0") == 0

    def test_zero_divided_by_zero(self):
        assert evaluate("0/0") == 0

    def test_empty(self):
        assert evaluate("") == 0

    def test_whitespace_only(self):
        assert evaluate("   ") == 0

    @pytest.mark.parametrize(
        "expression",
        ["12m", "2+x", "abc", "1,000", "2^3", "__import__('os')", "1e3", "5%2", "7\n+1"],
    )
    def test_rejects_characters_outside_whitelist(self, expression):
        assert evaluate(expression) == 0

    @pytest.mark.parametrize(
        "expression",
        ["(1+2", "1+2)", "5+", "*5", "()", "1.2.3", ".", "1 2", "3(4)"],
    )
    def test_malformed_is_zero(self, expression):
        assert evaluate(expression) == 0

    def test_rounds_to_two_places(self):
        assert evaluate("10/3") == Decimal("3.33")

    def test_rounds_half_up(self):
        assert evaluate("0.125") == Decimal("0.13")
        assert evaluate("1.005") == Decimal("1.01")
        assert evaluate("2.675") == Decimal("2.68")

    def test_rounds_negative_half_away_from_zero(self):
        assert evaluate("-0.125") == Decimal("-0.13")

    def test_tiny_result_is_zero(self):
        assert evaluate("0.001") == 0

    def test_deep_nesting_is_zero(self):
        assert evaluate("(" * 5000 + "1" + ")" * 5000) == 0

    def test_compound_balance_expression(self):
        assert evaluate("1000+50*2") == 1100

    def test_returns_decimal(self):
        assert isinstance(evaluate("1+1"), Decimal)
        assert isinstance(evaluate("bad"), Decimal)


class TestFormatQuantity:
    def test_whole_number(self):
        assert format_quantity(Decimal("28.00")) == "28"

    def test_trailing_zero_dropped(self):
        assert format_quantity(Decimal("12.50")) == "12.5"

    def test_no_exponent(self):
        assert format_quantity(Decimal("100.00")) == "100"

    def test_fraction(self):
        assert format_quantity(Decimal("0.75")) == "0.75"
