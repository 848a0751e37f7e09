"""Textual arithmetic-expression evaluator."""
from .Calculator import CallContext, Engine, Evaluation, check_syntax, default_engine, solve
from .error import (
    CalculationError,
    DecimalSyntaxError,
    DomainError,
    ErrorKind,
    ErrorRecord,
    IndeterminateResultError,
    InvalidCharError,
    MathError,
    MissingArgumentError,
    OperatorError,
    ParenthesisError,
    UnknownFunctionError,
    UnknownVariableError,
)

__all__ = [
    "CallContext",
    "Engine",
    "Evaluation",
    "check_syntax",
    "default_engine",
    "solve",
    "CalculationError",
    "DecimalSyntaxError",
    "DomainError",
    "ErrorKind",
    "ErrorRecord",
    "IndeterminateResultError",
    "InvalidCharError",
    "MathError",
    "MissingArgumentError",
    "OperatorError",
    "ParenthesisError",
    "UnknownFunctionError",
    "UnknownVariableError",
]
