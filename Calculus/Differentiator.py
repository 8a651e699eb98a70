# Differentiator.py
"""""
Symbolic differentiation with respect to one variable.

The result is a new tree built only from the combinators in ExpressionTree;
it is not simplified, so d/dx (y + z) comes back as (0 + 0).
Every operand taken from the input is copied, the input tree is never shared
with the output.
"""""

import logging

from . import error as E
from . import ExpressionTree as T
from .ExpressionTree import Kind
from .ScientificEngine import REAL

logger = logging.getLogger(__name__)


def differentiate(node, var_name, domain=None):
    """Return d(node)/d(var_name). Constants 0, 1 and -1 are created in `domain`."""
    domain = domain or REAL
    derivative = _derive(node, var_name, domain)
    logger.debug("d/d%s %s = %s", var_name, node, derivative)
    return derivative


def _derive(node, var_name, domain):
    kind = node.kind

    if kind == Kind.NUMBER:
        return T.number(domain.zero)

    if kind == Kind.VARIABLE:
        return T.number(domain.one if node.name == var_name else domain.zero)

    if kind not in T.UNARY_KINDS and kind not in T.BINARY_KINDS:
        raise E.UnsupportedOperation("Differentiation", kind)

    u = node.left
    du = _derive(u, var_name, domain)

    if kind == Kind.SIN:
        # cos(u) * u'
        return T.mul(T.cos(u.copy()), du)

    if kind == Kind.COS:
        # -1 * sin(u) * u'
        return T.mul(T.mul(T.number(-domain.one), T.sin(u.copy())), du)

    if kind == Kind.LN:
        # u' / u
        return T.div(du, u.copy())

    if kind == Kind.EXP:
        # exp(u) * u'
        return T.mul(T.exp(u.copy()), du)

    v = node.right
    dv = _derive(v, var_name, domain)

    if kind == Kind.ADD:
        return T.add(du, dv)

    if kind == Kind.SUB:
        return T.sub(du, dv)

    if kind == Kind.MUL:
        # u'v + uv'
        return T.add(T.mul(du, v.copy()), T.mul(u.copy(), dv))

    if kind == Kind.DIV:
        # (u'v - uv') / v^2
        numerator = T.sub(T.mul(du, v.copy()), T.mul(u.copy(), dv))
        return T.div(numerator, T.pow(v.copy(), T.number(domain.one + domain.one)))

    if kind == Kind.POW:
        # u^v * (v' ln(u) + v u' / u), also valid for a variable exponent
        return T.mul(T.pow(u.copy(), v.copy()),
                     T.add(T.mul(dv, T.ln(u.copy())),
                           T.div(T.mul(v.copy(), du), u.copy())))

    raise E.UnsupportedOperation("Differentiation", kind)
