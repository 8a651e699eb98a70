# ScientificEngine
"""""
Numeric domains for the expression engine.

The tree logic is the same for real and complex numbers; everything that
depends on the concrete number type lives here: literal conversion, the zero
test used before a division, power, the elementary functions and the domain
rule for the logarithm, and the canonical text of a number.
"""""
import math
import cmath
from decimal import Decimal

from . import error as E


def format_number(value):
    """Canonical text of a number: integral values without a fractional part."""
    if isinstance(value, complex):
        if value.imag == 0:
            return format_number(value.real)
        return str(value)
    if isinstance(value, bool):
        value = int(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text and math.isfinite(value):
        # no exponent notation in the grammar, 1e-05 -> 0.00001
        text = format(Decimal(text), "f")
    return text


class RealNumbers:
    """Floats with the functions from `math`. The logarithm needs a positive argument."""

    name = "real"
    zero = 0.0
    one = 1.0

    def from_literal(self, text):
        return float(text)

    def from_binding(self, text):
        """Parse the value half of a `name=value` assignment."""
        return float(text)

    def is_zero(self, value):
        return value == 0

    def power(self, base, exponent):
        try:
            return math.pow(base, exponent)
        except ValueError:
            raise E.DomainError("pow", f"{format_number(base)} ^ {format_number(exponent)}")
        except OverflowError:
            raise E.CalculationError("Number too large (Arithmetic overflow).", code="3026")

    def sin(self, value):
        return math.sin(value)

    def cos(self, value):
        return math.cos(value)

    def ln(self, value):
        if value <= 0:
            raise E.DomainError("ln", format_number(value))
        return math.log(value)

    def exp(self, value):
        try:
            return math.exp(value)
        except OverflowError:
            raise E.CalculationError("Number too large (Arithmetic overflow).", code="3026")

    def __repr__(self):
        return "RealNumbers()"


class ComplexNumbers(RealNumbers):
    """Complex numbers with `cmath`. The logarithm is only undefined at zero."""

    name = "complex"
    zero = 0j
    one = 1 + 0j

    def from_literal(self, text):
        return complex(float(text))

    def from_binding(self, text):
        # complex() rejects blanks inside the literal, "1 + 2j" -> "1+2j"
        return complex(text.replace(" ", ""))

    def power(self, base, exponent):
        if base == 0 and (exponent.real < 0 or exponent.imag != 0):
            raise E.DomainError("pow", f"{format_number(base)} ^ {format_number(exponent)}")
        try:
            return complex(base) ** exponent
        except OverflowError:
            raise E.CalculationError("Number too large (Arithmetic overflow).", code="3026")

    def sin(self, value):
        return cmath.sin(value)

    def cos(self, value):
        return cmath.cos(value)

    def ln(self, value):
        if value == 0:
            raise E.DomainError("ln", format_number(value))
        return cmath.log(value)

    def exp(self, value):
        try:
            return cmath.exp(value)
        except OverflowError:
            raise E.CalculationError("Number too large (Arithmetic overflow).", code="3026")

    def __repr__(self):
        return "ComplexNumbers()"


REAL = RealNumbers()
COMPLEX = ComplexNumbers()

DOMAINS = {
    REAL.name: REAL,
    COMPLEX.name: COMPLEX,
}


def get_domain(name):
    """Return the domain registered under `name` ("real" or "complex")."""
    try:
        return DOMAINS[str(name).lower()]
    except KeyError:
        raise E.ArgumentError(f"Unknown number domain: {name}", code="3010")
