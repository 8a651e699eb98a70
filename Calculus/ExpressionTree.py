# ExpressionTree.py
"""""
Expression tree for the calculus engine.

Every element of an expression is a `Node` tagged with a `Kind`:

- leaves:  Number (numeric payload), Variable (name)
- unary:   Sin, Cos, Ln, Exp           -> only `left` is set
- binary:  Add, Sub, Mul, Div, Pow     -> `left` and `right` are set

Nodes own their children exclusively and are never changed after
construction. Operations that "change" a tree (substitute, differentiate)
build a new one. Two trees are equal when they have the same structure.
"""""

from enum import Enum

from . import error as E
from .ScientificEngine import format_number


# -----------------------------
# Node kinds
# -----------------------------

class Kind(Enum):
    NUMBER = "number"
    VARIABLE = "variable"
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"
    SIN = "sin"
    COS = "cos"
    LN = "ln"
    EXP = "exp"

    @property
    def arity(self):
        """0 for leaves, 1 for functions, 2 for operators."""
        if self in LEAF_KINDS:
            return 0
        if self in UNARY_KINDS:
            return 1
        return 2

    @property
    def symbol(self):
        """Operator symbol or function name as written in source text."""
        return self.value


LEAF_KINDS = (Kind.NUMBER, Kind.VARIABLE)
UNARY_KINDS = (Kind.SIN, Kind.COS, Kind.LN, Kind.EXP)
BINARY_KINDS = (Kind.ADD, Kind.SUB, Kind.MUL, Kind.DIV, Kind.POW)

# Reserved function names, only treated as calls when followed by '('
FUNCTIONS = {kind.symbol: kind for kind in UNARY_KINDS}


# -----------------------------
# Node
# -----------------------------

class Node:
    """One element of an expression. Use the module constructors instead of calling this directly."""

    __slots__ = ("kind", "value", "name", "left", "right")

    def __init__(self, kind, value=None, name=None, left=None, right=None):
        self.kind = kind
        self.value = value
        self.name = name
        self.left = left
        self.right = right

    # --- structure ---

    def is_leaf(self):
        return self.kind in LEAF_KINDS

    def is_unary(self):
        return self.kind in UNARY_KINDS

    def is_binary(self):
        return self.kind in BINARY_KINDS

    def children(self):
        if self.is_binary():
            return (self.left, self.right)
        if self.is_unary():
            return (self.left,)
        return ()

    def walk(self):
        """Yield this node and all descendants, parents before children."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children()))

    def variables(self):
        """Names of all variables referenced in the tree."""
        return {node.name for node in self.walk() if node.kind == Kind.VARIABLE}

    # --- operations ---

    def copy(self):
        """Deep copy: the result shares no node with this tree."""
        if self.kind == Kind.NUMBER:
            return number(self.value)
        if self.kind == Kind.VARIABLE:
            return variable(self.name)
        if self.is_unary():
            return unary(self.kind, self.left.copy())
        if self.is_binary():
            return binary(self.kind, self.left.copy(), self.right.copy())
        raise E.UnknownNodeKind(self.kind)

    def substitute(self, var_name, replacement):
        return substitute(self, var_name, replacement)

    def to_text(self):
        return to_text(self)

    def evaluate(self, bindings=None, domain=None):
        from . import MathEngine
        return MathEngine.evaluate(self, bindings, domain)

    def differentiate(self, var_name, domain=None):
        from . import Differentiator
        return Differentiator.differentiate(self, var_name, domain)

    # --- operator-style composition ---

    def __add__(self, other):
        return add(self, _as_node(other))

    def __radd__(self, other):
        return add(_as_node(other), self)

    def __sub__(self, other):
        return sub(self, _as_node(other))

    def __rsub__(self, other):
        return sub(_as_node(other), self)

    def __mul__(self, other):
        return mul(self, _as_node(other))

    def __rmul__(self, other):
        return mul(_as_node(other), self)

    def __truediv__(self, other):
        return div(self, _as_node(other))

    def __rtruediv__(self, other):
        return div(_as_node(other), self)

    def __pow__(self, other):
        return pow(self, _as_node(other))

    def __rpow__(self, other):
        return pow(_as_node(other), self)

    def __neg__(self):
        return sub(number(0), self)

    # --- comparison / display ---

    def __eq__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return (self.kind == other.kind
                and self.value == other.value
                and self.name == other.name
                and self.left == other.left
                and self.right == other.right)

    def __hash__(self):
        return hash(to_text(self))

    def __str__(self):
        return to_text(self)

    def __repr__(self):
        if self.kind == Kind.NUMBER:
            return f"Number({format_number(self.value)})"
        if self.kind == Kind.VARIABLE:
            return f"Variable('{self.name}')"
        if self.is_unary():
            return f"{self.kind.name.capitalize()}({self.left!r})"
        return f"{self.kind.name.capitalize()}(left={self.left!r}, right={self.right!r})"


def _as_node(value):
    if isinstance(value, Node):
        return value
    if isinstance(value, str):
        return variable(value)
    return number(value)


# -----------------------------
# Constructors
# -----------------------------

def number(value):
    """Leaf holding a literal value."""
    return Node(Kind.NUMBER, value=value)


def variable(name):
    """Leaf referencing a free variable."""
    return Node(Kind.VARIABLE, name=name)


def binary(kind, left, right):
    if kind not in BINARY_KINDS:
        raise E.InvalidArity(kind, kind.arity if isinstance(kind, Kind) else "?", 2)
    return Node(kind, left=left, right=right)


def unary(kind, operand):
    if kind not in UNARY_KINDS:
        raise E.InvalidArity(kind, kind.arity if isinstance(kind, Kind) else "?", 1)
    return Node(kind, left=operand)


def add(left, right):
    return binary(Kind.ADD, left, right)


def sub(left, right):
    return binary(Kind.SUB, left, right)


def mul(left, right):
    return binary(Kind.MUL, left, right)


def div(left, right):
    return binary(Kind.DIV, left, right)


def pow(left, right):
    return binary(Kind.POW, left, right)


def sin(operand):
    return unary(Kind.SIN, operand)


def cos(operand):
    return unary(Kind.COS, operand)


def ln(operand):
    return unary(Kind.LN, operand)


def exp(operand):
    return unary(Kind.EXP, operand)


# -----------------------------
# Tree operations
# -----------------------------

def substitute(node, var_name, replacement):
    """Return a new tree where every Variable `var_name` is replaced by a copy of `replacement`."""
    if node.kind == Kind.VARIABLE:
        if node.name == var_name:
            return replacement.copy()
        return variable(node.name)
    if node.kind == Kind.NUMBER:
        return number(node.value)
    if node.is_unary():
        return unary(node.kind, substitute(node.left, var_name, replacement))
    if node.is_binary():
        return binary(node.kind,
                      substitute(node.left, var_name, replacement),
                      substitute(node.right, var_name, replacement))
    raise E.UnknownNodeKind(node.kind)


def to_text(node):
    """Fully parenthesized source text; parsing it again gives an equivalent tree."""
    if node.kind == Kind.NUMBER:
        return format_number(node.value)
    if node.kind == Kind.VARIABLE:
        return node.name
    if node.is_unary():
        return f"{node.kind.symbol}({to_text(node.left)})"
    if node.is_binary():
        return f"({to_text(node.left)} {node.kind.symbol} {to_text(node.right)})"
    raise E.UnknownNodeKind(node.kind)
