import cmath

import pytest

from Calculus import ExpressionTree as T
from Calculus.Differentiator import differentiate
from Calculus.ExpressionTree import Kind
from Calculus.MathEngine import evaluate
from Calculus.Parser import parse
from Calculus.ScientificEngine import COMPLEX


def derivative_text(source, var_name="x"):
    return differentiate(parse(source), var_name).to_text()


def numeric_derivative(tree, var_name, bindings, h=1e-6):
    above = dict(bindings, **{var_name: bindings[var_name] + h})
    below = dict(bindings, **{var_name: bindings[var_name] - h})
    return (evaluate(tree, above) - evaluate(tree, below)) / (2 * h)


def test_constant_derivative_is_zero():
    derivative = differentiate(T.number(5), "x")

    assert derivative.kind == Kind.NUMBER
    assert evaluate(derivative, {}) == 0


def test_variable_derivative():
    assert differentiate(T.variable("x"), "x") == T.number(1)
    assert differentiate(T.variable("y"), "x") == T.number(0)


def test_result_is_not_simplified():
    assert derivative_text("y + z") == "(0 + 0)"
    assert derivative_text("x - 3") == "(1 - 0)"


@pytest.mark.parametrize("source, expected", [
    ("x * y", "((1 * y) + (x * 0))"),
    ("x / y", "(((1 * y) - (x * 0)) / (y ^ 2))"),
    ("sin(x)", "(cos(x) * 1)"),
    ("cos(x)", "((-1 * sin(x)) * 1)"),
    ("ln(x)", "(1 / x)"),
    ("exp(x)", "(exp(x) * 1)"),
    ("x ^ 2", "((x ^ 2) * ((0 * ln(x)) + ((2 * 1) / x)))"),
])
def test_rules(source, expected):
    assert derivative_text(source) == expected


def test_power_with_variable_exponent():
    assert derivative_text("x^y", "y") == "((x ^ y) * ((1 * ln(x)) + ((y * 0) / x)))"


def test_chain_rule_nests_inner_derivative():
    assert derivative_text("sin(x * x)") == "(cos((x * x)) * ((1 * x) + (x * 1)))"


@pytest.mark.parametrize("source", [
    "x ^ 3",
    "sin(x) * cos(x)",
    "ln(x) / x",
    "exp(2 * x)",
    "x ^ x",
    "sin(x ^ 2)",
    "(x + 1) / (x - 3)",
    "cos(exp(x) - ln(x * y))",
    "-x * y + 4",
])
def test_matches_numeric_derivative(source):
    tree = parse(source)
    bindings = {"x": 1.3, "y": 0.8}

    symbolic = evaluate(differentiate(tree, "x"), bindings)

    assert symbolic == pytest.approx(numeric_derivative(tree, "x", bindings), rel=1e-5, abs=1e-7)


def test_linearity():
    f = parse("x ^ 2 * sin(y)")
    g = parse("exp(x * y) / (x + 2)")
    bindings = {"x": 0.4, "y": -1.7}

    whole = differentiate(T.add(f, g), "x")
    parts = T.add(differentiate(f, "x"), differentiate(g, "x"))

    assert evaluate(whole, bindings) == pytest.approx(evaluate(parts, bindings))


def test_partial_derivative_by_other_variable():
    tree = parse("x ^ 2 * sin(y)")
    bindings = {"x": 1.5, "y": 0.3}

    assert evaluate(differentiate(tree, "y"), bindings) == pytest.approx(numeric_derivative(tree, "y", bindings))


def test_input_is_untouched_and_not_shared():
    tree = parse("x * sin(x) + x ^ 2 / ln(x)")
    before = tree.to_text()

    derivative = differentiate(tree, "x")

    assert tree.to_text() == before
    assert not {id(n) for n in tree.walk()} & {id(n) for n in derivative.walk()}


def test_arity_invariant_holds_for_derivatives():
    derivative = differentiate(parse("exp(sin(x) / cos(x)) ^ ln(x) - x * x"), "x")

    for node in derivative.walk():
        if node.kind in T.BINARY_KINDS:
            assert node.left is not None and node.right is not None
        elif node.kind in T.UNARY_KINDS:
            assert node.left is not None and node.right is None
        else:
            assert node.left is None and node.right is None


def test_complex_domain_derivative():
    tree = parse("exp(x) * x", domain=COMPLEX)
    z = complex(0.5, 1.0)

    derivative = differentiate(tree, "x", COMPLEX)

    assert evaluate(derivative, {"x": z}, COMPLEX) == pytest.approx(cmath.exp(z) * (1 + z))
    assert all(isinstance(n.value, complex) for n in derivative.walk() if n.kind == Kind.NUMBER)


def test_node_differentiate_method():
    assert T.sin(T.variable("t")).differentiate("t").to_text() == "(cos(t) * 1)"
