# error.py
"""Error types raised by the calculation engine.

Every failure is a ``MathError`` subclass.  The facade turns the first one
raised during a call into an ``ErrorRecord`` for later inspection.
"""
from dataclasses import dataclass, field
from enum import Enum


class ErrorKind(Enum):
    PARENTHESIS = "ParenthesisError"
    OPERATOR = "OperatorError"
    DECIMAL_SYNTAX = "DecimalSyntaxError"
    INVALID_CHAR = "InvalidCharError"
    UNKNOWN_FUNCTION = "UnknownFunctionError"
    MISSING_ARGUMENT = "MissingArgumentError"
    DOMAIN = "DomainError"
    UNKNOWN_VARIABLE = "UnknownVariableError"
    INDETERMINATE_RESULT = "IndeterminateResultError"
    CONFIGURATION = "ConfigurationError"
    UNEXPECTED = "UnexpectedError"

    @property
    def family(self):
        """'syntax' for validator failures, 'execution' for evaluation failures."""
        if self in _SYNTAX_KINDS:
            return "syntax"
        if self in _EXECUTION_KINDS:
            return "execution"
        return "other"


_SYNTAX_KINDS = frozenset({
    ErrorKind.PARENTHESIS,
    ErrorKind.OPERATOR,
    ErrorKind.DECIMAL_SYNTAX,
    ErrorKind.INVALID_CHAR,
})

_EXECUTION_KINDS = frozenset({
    ErrorKind.UNKNOWN_FUNCTION,
    ErrorKind.MISSING_ARGUMENT,
    ErrorKind.DOMAIN,
    ErrorKind.UNKNOWN_VARIABLE,
    ErrorKind.INDETERMINATE_RESULT,
})


@dataclass(frozen=True)
class ErrorRecord:
    kind: ErrorKind
    detail: str
    code: str = "9999"
    equation: str = None
    fields: dict = field(default_factory=dict)

    @property
    def family(self):
        return self.kind.family


class MathError(Exception):
    kind = ErrorKind.UNEXPECTED

    def __init__(self, message, code="9999", equation=None, **fields):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation
        self.fields = fields

    def record(self):
        """Freeze this error into an ErrorRecord."""
        return ErrorRecord(
            kind=self.kind,
            detail=self.message,
            code=self.code,
            equation=self.equation,
            fields=dict(self.fields),
        )


# -----------------------------
# Syntax errors (Validator)
# -----------------------------

class SyntaxError(MathError):
    pass


class ParenthesisError(SyntaxError):
    kind = ErrorKind.PARENTHESIS

    def __init__(self, message, code="3000", equation=None, **fields):
        super().__init__(message, code=code, equation=equation, **fields)


class OperatorError(SyntaxError):
    kind = ErrorKind.OPERATOR

    def __init__(self, message, code="3001", equation=None, **fields):
        super().__init__(message, code=code, equation=equation, **fields)


class DecimalSyntaxError(SyntaxError):
    kind = ErrorKind.DECIMAL_SYNTAX

    def __init__(self, message, code="3002", equation=None, **fields):
        super().__init__(message, code=code, equation=equation, **fields)


class InvalidCharError(SyntaxError):
    kind = ErrorKind.INVALID_CHAR

    def __init__(self, message, code="3003", equation=None, **fields):
        super().__init__(message, code=code, equation=equation, **fields)


# -----------------------------
# Execution errors (Evaluator)
# -----------------------------

class CalculationError(MathError):
    pass


class UnknownFunctionError(CalculationError):
    kind = ErrorKind.UNKNOWN_FUNCTION

    def __init__(self, message, code="3100", equation=None, **fields):
        super().__init__(message, code=code, equation=equation, **fields)


class MissingArgumentError(CalculationError):
    kind = ErrorKind.MISSING_ARGUMENT

    def __init__(self, message, code="3101", equation=None, **fields):
        super().__init__(message, code=code, equation=equation, **fields)


class DomainError(CalculationError):
    kind = ErrorKind.DOMAIN

    def __init__(self, message, code="3102", equation=None, **fields):
        super().__init__(message, code=code, equation=equation, **fields)


class UnknownVariableError(CalculationError):
    kind = ErrorKind.UNKNOWN_VARIABLE

    def __init__(self, message, code="3103", equation=None, **fields):
        super().__init__(message, code=code, equation=equation, **fields)


class IndeterminateResultError(CalculationError):
    kind = ErrorKind.INDETERMINATE_RESULT

    def __init__(self, message="Undefined result.", code="3104", equation=None, **fields):
        super().__init__(message, code=code, equation=equation, **fields)


class ConfigurationError(MathError):
    kind = ErrorKind.CONFIGURATION

    def __init__(self, message, code="5000", equation=None, **fields):
        super().__init__(message, code=code, equation=equation, **fields)


Error_Dictionary = {

    "3": "Calculator Error",
    "5": "Configuration Error",
    "9": "Runtime Error",

}

# Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification (0 = syntax, 1 = execution)
# 3. and 4. Digit: Error Number

ERROR_MESSAGES = {
    "3000": "Parenthesis error: ",  # + reason
    "3001": "Operator error: ",  # + operator and neighbour
    "3002": "Decimal point error: ",  # + reason
    "3003": "Invalid character: ",  # + character

    "3100": "Unknown function: ",  # + function name
    "3101": "Missing argument for function: ",  # + function name
    "3102": "Invalid argument: ",  # + function / operator
    "3103": "Unknown variable: ",  # + variable name
    "3104": "Undefined result.",

    "5000": "Configuration could not be saved: ",  # + path

    "9999": "Unexpected Error: ",  # + error
}


def describe(code):
    """Return '<category>: <message>' for an error code."""
    category = Error_Dictionary.get(str(code)[:1], Error_Dictionary["9"])
    return f"{category}: {ERROR_MESSAGES.get(str(code), ERROR_MESSAGES['9999'])}"
