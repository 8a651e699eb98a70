import cmath
import json
import math
from decimal import InvalidOperation, getcontext

import pytest

from Calculus import error as E
from Calculus import ExpressionTree as T
from Calculus.MathEngine import calculate, cleanup, derive, evaluate
from Calculus.Parser import parse
from Calculus.ScientificEngine import COMPLEX, REAL, get_domain


class CountingBindings(dict):
    """Records how often each variable value is read."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.reads = {}

    def __getitem__(self, key):
        self.reads[key] = self.reads.get(key, 0) + 1
        return super().__getitem__(key)


def test_basic_power():
    assert evaluate(parse("3 ^ 4"), {}) == 81


def test_arithmetic_with_bindings():
    tree = parse("x * y + 1 - z / 4")
    assert evaluate(tree, {"x": 2, "y": 3, "z": 2}) == pytest.approx(6.5)


def test_elementary_functions():
    assert evaluate(parse("sin(0)")) == 0
    assert evaluate(parse("cos(0)")) == 1
    assert evaluate(parse("ln(1)")) == 0
    assert evaluate(parse("exp(0)")) == 1
    assert evaluate(parse("sin(x)"), {"x": math.pi / 2}) == pytest.approx(1)
    assert evaluate(parse("exp(ln(x))"), {"x": 7.5}) == pytest.approx(7.5)


def test_division_by_zero():
    with pytest.raises(E.DivisionByZero) as info:
        evaluate(parse("1 / (x - x)"), {"x": 5})
    assert info.value.code == "3003"


def test_divisor_is_evaluated_once():
    bindings = CountingBindings(x=4.0)

    assert evaluate(parse("1 / x"), bindings) == 0.25
    assert bindings.reads == {"x": 1}


def test_unbound_variable():
    with pytest.raises(E.UnboundVariable) as info:
        evaluate(parse("x + 1"), {})
    assert info.value.name == "x"


def test_missing_bindings_mean_empty():
    with pytest.raises(E.UnboundVariable):
        evaluate(parse("y"))


@pytest.mark.parametrize("value", [0, -1, -0.5])
def test_real_logarithm_needs_positive_argument(value):
    with pytest.raises(E.DomainError) as info:
        evaluate(parse("ln(x)"), {"x": value})
    assert info.value.function == "ln"


def test_complex_logarithm_of_negative_number():
    result = evaluate(parse("ln(x)", domain=COMPLEX), {"x": complex(-1)}, COMPLEX)
    assert result == pytest.approx(cmath.pi * 1j)


def test_complex_logarithm_of_zero():
    with pytest.raises(E.DomainError):
        evaluate(parse("ln(x)", domain=COMPLEX), {"x": 0j}, COMPLEX)


def test_real_power_of_negative_base_with_fraction():
    with pytest.raises(E.DomainError):
        evaluate(parse("x ^ 0.5"), {"x": -4.0})


def test_complex_power_of_negative_base():
    result = evaluate(parse("x ^ 0.5", domain=COMPLEX), {"x": complex(-4)}, COMPLEX)
    assert result == pytest.approx(2j)


def test_complex_functions():
    tree = parse("exp(x) * cos(x) + sin(x)", domain=COMPLEX)
    z = complex(0.3, -1.1)
    expected = cmath.exp(z) * cmath.cos(z) + cmath.sin(z)
    assert evaluate(tree, {"x": z}, COMPLEX) == pytest.approx(expected)


def test_overflow_is_calculation_error():
    with pytest.raises(E.CalculationError) as info:
        evaluate(parse("exp(1000)"))
    assert info.value.code == "3026"


def test_evaluation_does_not_change_tree():
    tree = parse("sin(x) / (x + 1)")
    before = tree.to_text()

    evaluate(tree, {"x": 2.0})

    assert tree.to_text() == before


def test_node_evaluate_method():
    assert T.add(T.variable("a"), T.number(2)).evaluate({"a": 3}) == 5


def test_get_domain():
    assert get_domain("real") is REAL
    assert get_domain("Complex") is COMPLEX
    with pytest.raises(E.ArgumentError):
        get_domain("quaternion")


@pytest.mark.parametrize("value, places, expected", [
    (81.0, 10, ("81", False)),
    (2.5, 4, ("2.5", False)),
    (1 / 3, 4, ("0.3333", True)),
    (-2 / 3, 2, ("-0.67", True)),
    (complex(1, -2), 4, ("1 - 2j", False)),
    (complex(7, 0), 4, ("7", False)),
    (float("inf"), 4, ("inf", False)),
])
def test_cleanup(value, places, expected):
    assert cleanup(value, places) == expected


def test_cleanup_restores_precision_after_failed_rounding():
    with pytest.raises(InvalidOperation):
        cleanup(1 / 3, 200)
    assert getcontext().prec == 50


def test_calculate_formats_result():
    assert calculate("3 ^ 4") == "= 81"
    assert calculate("x / 4", {"x": 2}) == "= 0.5"
    assert calculate("1 / 3") == "≈ 0.3333333333"


def test_calculate_uses_decimal_places_setting(isolated_config):
    isolated_config.write_text(json.dumps({"decimal_places": 3}), encoding="utf-8")
    assert calculate("2 / 3") == "≈ 0.667"


def test_calculate_uses_number_domain_setting(isolated_config):
    isolated_config.write_text(json.dumps({"number_domain": "complex"}), encoding="utf-8")
    assert calculate("x ^ 0.5", {"x": complex(-9)}) == "≈ 0 + 3j"


def test_calculate_rejects_trailing_input_by_default(isolated_config):
    with pytest.raises(E.UnexpectedCharacter):
        calculate("1 + 1 garbage")

    isolated_config.write_text(json.dumps({"allow_trailing_input": True}), encoding="utf-8")
    assert calculate("1 + 1 garbage") == "= 2"


def test_calculate_attaches_equation_to_errors():
    with pytest.raises(E.DivisionByZero) as info:
        calculate("1 / 0")
    assert info.value.equation == "1 / 0"


def test_calculate_wraps_unexpected_errors():
    deep = "(" * 5000 + "1" + ")" * 5000

    with pytest.raises(E.MathError) as info:
        calculate(deep)
    assert info.value.code == "9999"
    assert info.value.equation == deep


def test_derive_returns_original_and_derivative():
    original, derivative = derive("x^y", "y")

    assert original == "(x ^ y)"
    assert derivative == "((x ^ y) * ((1 * ln(x)) + ((y * 0) / x)))"


def test_derive_attaches_equation_to_errors():
    with pytest.raises(E.ParseError) as info:
        derive("sin(x", "x")
    assert info.value.equation == "sin(x"
