# Parser.py
"""""
Recursive-descent parser: source text -> expression tree.

Grammar, lowest to highest precedence
-------------------------------------
    expression := term (("+" | "-") term)*
    term       := power (("*" | "/") power)*
    power      := factor ("^" factor)*          # left-associative: 2^3^2 == (2^3)^2
    factor     := number | identifier-or-call | "(" expression ")" | "-" factor
    number     := digits ("." digits)?
    identifier-or-call := ("sin" | "cos" | "ln" | "exp") "(" expression ")" | identifier
    identifier := [A-Za-z]+

Notes
-----
- Whitespace may appear between any two tokens.
- Unary minus is rewritten as (0 - operand); "--x" parses as (0 - (0 - x)).
- A function name that is not followed by '(' is an ordinary variable.
- Every error carries the 0-based column where the grammar was violated.
"""""

import logging
import string

from . import error as E
from . import ExpressionTree as T
from .ScientificEngine import REAL

logger = logging.getLogger(__name__)

DIGITS = "0123456789"
LETTERS = string.ascii_letters


class Parser:
    def __init__(self, text, domain=REAL, allow_trailing_input=False):
        self.text = text
        self.domain = domain
        self.allow_trailing_input = allow_trailing_input
        self.pos = 0

    # -----------------------------
    # Cursor helpers
    # -----------------------------

    @property
    def current(self):
        """Character under the cursor, None at the end of the text."""
        return self.text[self.pos] if self.pos < len(self.text) else None

    def advance(self):
        self.pos += 1

    def skip_whitespace(self):
        while self.current is not None and self.current.isspace():
            self.advance()

    def expect(self, character):
        self.skip_whitespace()
        if self.current != character:
            raise E.ExpectedCharacter(character, self.current, self.pos)
        self.advance()

    # -----------------------------
    # Grammar rules
    # -----------------------------

    def parse(self):
        """Parse the whole text and return the root node."""
        tree = self.parse_sum()
        self.skip_whitespace()
        if self.current is not None:
            if not self.allow_trailing_input:
                raise E.UnexpectedCharacter(self.current, self.pos)
            logger.debug("Ignoring trailing input at column %d: %r", self.pos, self.text[self.pos:])
        logger.debug("Final AST: %r", tree)
        return tree

    def parse_sum(self):
        """Addition and subtraction."""
        tree = self.parse_term()
        while True:
            self.skip_whitespace()
            if self.current == "+":
                self.advance()
                tree = T.add(tree, self.parse_term())
            elif self.current == "-":
                self.advance()
                tree = T.sub(tree, self.parse_term())
            else:
                return tree

    def parse_term(self):
        """Multiplication and division."""
        tree = self.parse_power()
        while True:
            self.skip_whitespace()
            if self.current == "*":
                self.advance()
                tree = T.mul(tree, self.parse_power())
            elif self.current == "/":
                self.advance()
                tree = T.div(tree, self.parse_power())
            else:
                return tree

    def parse_power(self):
        """Exponentiation, folded to the left."""
        tree = self.parse_factor()
        while True:
            self.skip_whitespace()
            if self.current == "^":
                self.advance()
                tree = T.pow(tree, self.parse_factor())
            else:
                return tree

    def parse_factor(self):
        """Numbers, variables, function calls, '(...)' and unary minus."""
        self.skip_whitespace()
        token = self.current

        if token is None:
            raise E.UnexpectedEndOfInput(self.pos)

        if token == "(":
            self.advance()
            tree = self.parse_sum()
            self.expect(")")
            return tree

        if token in DIGITS or token == ".":
            return self.parse_number()

        if token in LETTERS:
            return self.parse_identifier()

        if token == "-":
            self.advance()
            return T.sub(T.number(self.domain.from_literal("0")), self.parse_factor())

        raise E.UnexpectedCharacter(token, self.pos)

    def parse_number(self):
        start = self.pos
        while self.current is not None and (self.current in DIGITS or self.current == "."):
            self.advance()
        literal = self.text[start:self.pos]
        try:
            value = self.domain.from_literal(literal)
        except ValueError:
            raise E.InvalidNumberLiteral(literal, start)
        return T.number(value)

    def parse_identifier(self):
        start = self.pos
        while self.current is not None and self.current in LETTERS:
            self.advance()
        name = self.text[start:self.pos]

        if name in T.FUNCTIONS:
            after_name = self.pos
            self.skip_whitespace()
            if self.current == "(":
                self.advance()
                argument = self.parse_sum()
                self.expect(")")
                return T.unary(T.FUNCTIONS[name], argument)
            # Not a call, "sin" on its own is a variable
            self.pos = after_name

        return T.variable(name)


def parse(text, domain=REAL, allow_trailing_input=False):
    """Parse `text` into an expression tree with number literals of `domain`."""
    return Parser(text, domain=domain, allow_trailing_input=allow_trailing_input).parse()
