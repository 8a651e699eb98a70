# MathEngine.py
"""""
Core calculation engine.

Pipeline
--------
1) Parser: source text -> expression tree (Parser.py).
2) Evaluator: expression tree + variable bindings -> number (this module).
3) Differentiator: expression tree -> derivative tree (Differentiator.py).
4) Formatter: renders results using the user's decimal_places preference.

`calculate` and `derive` are the entry points used by the console and the
GUI; they load the settings, run the pipeline and attach the source text to
any MathError they raise.
"""""

import math
from decimal import Decimal, getcontext

from . import config_manager as config_manager
from . import error as E
from .Differentiator import differentiate
from .ExpressionTree import BINARY_KINDS, Kind
from .Parser import parse
from .ScientificEngine import REAL, format_number, get_domain



# -----------------------------
# Evaluator
# -----------------------------

def evaluate(node, bindings=None, domain=None):
    """Compute the value of `node` with variables taken from `bindings`.

    Raises UnboundVariable, DivisionByZero or DomainError. The tree is only read.
    """
    return _evaluate(node, bindings or {}, domain or REAL)


def _evaluate(node, bindings, domain):
    kind = node.kind

    if kind == Kind.NUMBER:
        return node.value

    if kind == Kind.VARIABLE:
        if node.name not in bindings:
            raise E.UnboundVariable(node.name)
        return bindings[node.name]

    if kind in (Kind.SIN, Kind.COS, Kind.LN, Kind.EXP):
        argument = _evaluate(node.left, bindings, domain)
        if kind == Kind.SIN:
            return domain.sin(argument)
        elif kind == Kind.COS:
            return domain.cos(argument)
        elif kind == Kind.LN:
            return domain.ln(argument)
        return domain.exp(argument)

    if kind not in BINARY_KINDS:
        raise E.UnsupportedOperation("Evaluation", kind)

    left_value = _evaluate(node.left, bindings, domain)
    right_value = _evaluate(node.right, bindings, domain)

    try:
        if kind == Kind.ADD:
            return left_value + right_value
        elif kind == Kind.SUB:
            return left_value - right_value
        elif kind == Kind.MUL:
            return left_value * right_value
        elif kind == Kind.DIV:
            if domain.is_zero(right_value):
                raise E.DivisionByZero()
            return left_value / right_value
        elif kind == Kind.POW:
            return domain.power(left_value, right_value)
    except OverflowError:
        raise E.CalculationError("Number too large (Arithmetic overflow).", code="3026")

    raise E.UnsupportedOperation("Evaluation", kind)


# -----------------------------
# Result formatting
# -----------------------------

def cleanup(ergebnis, decimal_places=None):
    """Round a result to `decimal_places` for display.

    Returns:
        (rendered_value, rounding_flag)
    where rounding_flag tells whether digits were dropped.
    """
    if decimal_places is None:
        decimal_places = config_manager.load_setting_value("decimal_places")

    if isinstance(ergebnis, complex):
        if ergebnis.imag == 0:
            return cleanup(ergebnis.real, decimal_places)
        real_part, real_rounded = cleanup(ergebnis.real, decimal_places)
        imag_part, imag_rounded = cleanup(abs(ergebnis.imag), decimal_places)
        sign = "-" if ergebnis.imag < 0 else "+"
        return f"{real_part} {sign} {imag_part}j", real_rounded or imag_rounded

    if isinstance(ergebnis, float) and not math.isfinite(ergebnis):
        return str(ergebnis), False

    if isinstance(ergebnis, (int, float)):
        if float(ergebnis).is_integer():
            return format_number(ergebnis), False

        # A temporary precision boost prevents Decimal.InvalidOperation in quantize()
        getcontext().prec = 128
        try:
            exact = Decimal(repr(float(ergebnis)))
            rundungs_muster = Decimal("1e-" + str(decimal_places)) if decimal_places > 0 else Decimal("1")
            gerundet = exact.quantize(rundungs_muster)
        finally:
            getcontext().prec = 50

        rounding = gerundet != exact
        return format(gerundet.normalize(), "f"), rounding

    # Fallback: unknown type, return as-is
    return str(ergebnis), False


# -----------------------------
# Public entry points
# -----------------------------

def _settings_domain(settings, domain):
    if domain is not None:
        return domain
    return get_domain(settings.get("number_domain", "real"))


def calculate(problem, bindings=None, domain=None):
    """Main API: parse -> evaluate -> format. Returns the display string ("= 81" or "≈ 0.3333")."""
    settings = config_manager.load_setting_value("all")
    try:
        domain = _settings_domain(settings, domain)
        tree = parse(problem, domain=domain, allow_trailing_input=settings["allow_trailing_input"])
        ergebnis = evaluate(tree, bindings, domain)
        ausgabe, rounding = cleanup(ergebnis, settings["decimal_places"])
        ungefaehr_zeichen = "\u2248"  # "≈"
        if rounding:
            return f"{ungefaehr_zeichen} {ausgabe}"
        return f"= {ausgabe}"

    except E.MathError as e:
        e.equation = problem
        raise e
    except OverflowError:
        raise E.CalculationError(
            message="Number too large (Arithmetic overflow).",
            code="3026",
            equation=problem
        )
    # Convert unexpected Python exceptions to our unified error type
    except Exception as e:
        raise E.MathError(message=str(e).strip(), code="9999", equation=problem)


def derive(problem, var_name, domain=None):
    """Parse `problem` and differentiate it by `var_name`.

    Returns:
        (original_text, derivative_text) both fully parenthesized.
    """
    settings = config_manager.load_setting_value("all")
    try:
        domain = _settings_domain(settings, domain)
        tree = parse(problem, domain=domain, allow_trailing_input=settings["allow_trailing_input"])
        derivative = differentiate(tree, var_name, domain)
        return tree.to_text(), derivative.to_text()

    except E.MathError as e:
        e.equation = problem
        raise e
    except Exception as e:
        raise E.MathError(message=str(e).strip(), code="9999", equation=problem)
