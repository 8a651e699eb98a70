

class MathError(Exception):
    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation


# -----------------------------
# Parsing
# -----------------------------

class ParseError(MathError):
    """Base for every failure while reading source text. `position` is the 0-based column."""
    def __init__(self, message, code, position=None, equation=None):
        super().__init__(message, code=code, equation=equation)
        self.position = position


class UnexpectedEndOfInput(ParseError):
    def __init__(self, position):
        super().__init__(f"Unexpected end of input at column {position}", code="3000", position=position)


class UnexpectedCharacter(ParseError):
    def __init__(self, character, position):
        super().__init__(f"Unexpected character '{character}' at column {position}", code="3001", position=position)
        self.character = character


class ExpectedCharacter(ParseError):
    def __init__(self, expected, found, position):
        found_text = "end of input" if found is None else f"'{found}'"
        super().__init__(f"Expected '{expected}' at column {position}, found {found_text}",
                         code="3002", position=position)
        self.expected = expected
        self.found = found


class InvalidNumberLiteral(ParseError):
    def __init__(self, literal, position):
        super().__init__(f"Invalid number literal '{literal}' at column {position}", code="3004", position=position)
        self.literal = literal


# -----------------------------
# Evaluation
# -----------------------------

class EvalError(MathError):
    pass


class UnboundVariable(EvalError):
    def __init__(self, name):
        super().__init__(f"No value bound to variable '{name}'", code="3005")
        self.name = name


class DivisionByZero(EvalError):
    def __init__(self):
        super().__init__("Division by zero", code="3003")


class DomainError(EvalError):
    def __init__(self, function, argument):
        super().__init__(f"{function} is undefined for {argument}", code="3006")
        self.function = function
        self.argument = argument


class CalculationError(MathError):
    pass


# -----------------------------
# Tree structure (should never happen with the closed kind set)
# -----------------------------

class UnsupportedOperation(MathError):
    def __init__(self, operation, kind):
        super().__init__(f"{operation} is not supported for {kind}", code="3007")


class InvalidArity(MathError):
    def __init__(self, kind, expected, given):
        super().__init__(f"{kind} takes {expected} operand(s), {given} given", code="3008")


class UnknownNodeKind(MathError):
    def __init__(self, kind):
        super().__init__(f"Unknown node kind: {kind}", code="3009")


class ArgumentError(MathError):
    pass










Error_Dictionary= {

    "1" : "Missing Files",
    "3" : "Calculator Error",
    "4" : "UI Error",
    "5" : "Configuration Error",
    "9" : "Unexpected Error"

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "3000" : "Unexpected end of input.",
    "3001" : "Unexpected character: ", # + character
    "3002" : "Expected character: ", # + character
    "3003" : "Division by Zero",
    "3004" : "Invalid number literal: ", # + literal
    "3005" : "Unbound variable: ", # + name
    "3006" : "Value outside the function's domain.",
    "3007" : "Unsupported operation.",
    "3008" : "Wrong number of operands for node kind.",
    "3009" : "Unknown node kind.",
    "3010" : "Unknown number domain: ", # + name
    "3011" : "Invalid variable assignment: ", # + token
    "3026" : "Number too big.",


    "4002" : "Calculation already Running!",
    "4003" : "No derivative to copy.",
    "4501" : "Not all Settings could be saved: ", # + Error raising setting


    "9999" : "Unexpected Error: " #+error
}
