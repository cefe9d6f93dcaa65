from decimal import Decimal

import pytest

from MultiCalc import error as E
from MultiCalc import ScientificEngine as S


def call(name, *args, angle_mode="RAD"):
    return S.apply_function(name, [Decimal(str(arg)) for arg in args], angle_mode=angle_mode)


class TestTrigonometry:
    def test_degrees(self):
        assert call("sin", 30, angle_mode="DEG") == Decimal("0.5")
        assert call("cos", 60, angle_mode="DEG") == Decimal("0.5")
        assert call("sin", 180, angle_mode="DEG") == 0

    def test_gradians(self):
        assert call("sin", 100, angle_mode="GRAD") == 1

    def test_tangent_pole_is_domain_error(self):
        with pytest.raises(E.DomainError) as info:
            call("tan", 90, angle_mode="DEG")
        assert "tan(90)" in info.value.message

    def test_cosecant_of_zero_divides_by_zero(self):
        with pytest.raises(E.CalculationError) as info:
            call("csc", 0)
        assert info.value.code == E.DIVISION_BY_ZERO

    def test_inverse_results_use_angle_mode(self):
        assert call("asin", 1, angle_mode="DEG") == 90
        assert call("acot", 0, angle_mode="DEG") == 90

    def test_inverse_domain(self):
        with pytest.raises(E.DomainError):
            call("acos", 2)
        with pytest.raises(E.DomainError):
            call("asec", Decimal("0.5"))


class TestHyperbolic:
    def test_values(self):
        assert call("sinh", 0) == 0
        assert call("cosh", 0) == 1

    @pytest.mark.parametrize("name, value", [
        ("acosh", "0.5"),
        ("atanh", "1"),
        ("acoth", "0.5"),
        ("asech", "2"),
        ("acsch", "0"),
    ])
    def test_inverse_domain(self, name, value):
        with pytest.raises(E.DomainError):
            call(name, value)


class TestLogarithms:
    def test_log_of_negative_names_the_call(self):
        with pytest.raises(E.DomainError) as info:
            call("log", -5)
        assert info.value.code == E.DOMAIN_ERROR
        assert "log(-5)" in info.value.message

    def test_values(self):
        assert call("log", 100) == 2
        assert call("ln", 1) == 0
        assert call("log2", 8).quantize(Decimal("1e-20")) == 3

    def test_log_base_one(self):
        with pytest.raises(E.DomainError):
            call("log", 8, 1)


class TestRootsAndIntegers:
    def test_roots(self):
        assert call("sqrt", 16) == 4
        assert call("cbrt", 27) == 3
        assert call("cbrt", -8) == -2
        assert call("nthroot", 16, 4) == 2

    def test_root_domain(self):
        with pytest.raises(E.DomainError):
            call("sqrt", -4)
        with pytest.raises(E.DomainError):
            call("nthroot", -16, 2)

    def test_factorial(self):
        assert call("factorial", 5) == 120
        with pytest.raises(E.DomainError):
            call("factorial", 171)
        with pytest.raises(E.DomainError):
            call("factorial", "2.5")

    def test_gcd_lcm(self):
        assert call("gcd", 12, 18) == 6
        assert call("lcm", 4, 6) == 12
        with pytest.raises(E.SyntaxError):
            call("gcd", 12)

    def test_rounding(self):
        assert call("floor", "-2.5") == -3
        assert call("ceil", "2.1") == 3
        assert call("round", "2.5") == 3


def test_angle_format_round_trip():
    assert S.dms(Decimal("1.5")) == Decimal("1.3")
    assert S.deg(Decimal("1.3")) == Decimal("1.5")


def test_floored_mod_takes_divisor_sign():
    assert S.floored_mod(Decimal(-7), Decimal(3)) == 2
    assert S.floored_mod(Decimal(7), Decimal(-3)) == -2


@pytest.mark.parametrize("expr, expected", [
    ("sin⁻¹(1)", "asin(1)"),
    ("sinh⁻¹(1)", "asinh(1)"),
    ("log₂(8)", "log2(8)"),
    ("√(4)", "sqrt(4)"),
    ("|-3|", "abs(-3)"),
])
def test_normalize_expression(expr, expected):
    assert S.normalize_expression(expr) == expected
