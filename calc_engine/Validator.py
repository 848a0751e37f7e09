# Validator.py
"""Syntax checks run on a canonical expression.

Four independent scans in fixed order (parentheses, operators, decimal
points, characters).  The first violation raises a SyntaxError subclass.
"""
from . import error as E
from .debug import checkpoint
from .Normalizer import ROOT, isLetter, isNumber

OPERATORS = "+-*/^" + ROOT

# Operators that need an operand on their left
BINARY_ONLY = "*/^" + ROOT


def isOperator(char):
    return len(char) == 1 and char in OPERATORS


def check_parenthesis(exp):
    if exp == "":
        raise E.ParenthesisError("The expression is empty.", reason="empty")

    cont = 0
    for b, char in enumerate(exp):
        if char == "(":
            cont += 1
        elif char == ")":
            cont -= 1

        # e.g. (5+7)+3)
        if cont < 0:
            raise E.ParenthesisError("A parenthesis was closed before being opened.",
                                     reason="unopened", position=b)

    if cont != 0:
        raise E.ParenthesisError("One or more parentheses have not been closed.",
                                 reason="unclosed", depth=cont)

    if "()" in exp:
        raise E.ParenthesisError("One or more parentheses have no content.",
                                 reason="empty", position=exp.index("()"))


def check_operators(exp):
    initial_char = exp[:1]
    final_char = exp[-1:]

    if initial_char and initial_char in BINARY_ONLY:
        raise E.OperatorError(f"The expression can't start with the operator '{initial_char}'.",
                              char=initial_char, neighbor=None, position=0)

    if final_char and isOperator(final_char):
        raise E.OperatorError(f"The expression can't end with the operator '{final_char}'.",
                              char=final_char, neighbor=None, position=len(exp) - 1)

    for b in range(1, len(exp) - 1):
        prev_char = exp[b - 1]
        actual_char = exp[b]
        next_char = exp[b + 1]

        if actual_char in "+-":
            if not (isOperator(prev_char) or prev_char in "()" or isNumber(prev_char) or isLetter(prev_char)):
                raise E.OperatorError(f"Invalid character '{prev_char}' before the operator '{actual_char}'.",
                                      char=actual_char, neighbor=prev_char, position=b)
            if not (next_char == "(" or isNumber(next_char) or isLetter(next_char)):
                raise E.OperatorError(f"Invalid character '{next_char}' after the operator '{actual_char}'.",
                                      char=actual_char, neighbor=next_char, position=b)

        elif actual_char in BINARY_ONLY:
            if not (prev_char == ")" or isNumber(prev_char) or isLetter(prev_char)):
                raise E.OperatorError(f"Invalid character '{prev_char}' before the operator '{actual_char}'.",
                                      char=actual_char, neighbor=prev_char, position=b)
            if not (next_char in "+-(" or isNumber(next_char) or isLetter(next_char)):
                raise E.OperatorError(f"Invalid character '{next_char}' after the operator '{actual_char}'.",
                                      char=actual_char, neighbor=next_char, position=b)


def check_decimals(exp):
    if exp[:1] == ".":
        raise E.DecimalSyntaxError("Unexpected decimal point at the start of the expression.", position=0)
    if exp[-1:] == ".":
        raise E.DecimalSyntaxError("Unexpected decimal point at the end of the expression.",
                                   position=len(exp) - 1)

    for b in range(1, len(exp) - 1):
        if exp[b] == "." and not (isNumber(exp[b - 1]) and isNumber(exp[b + 1])):
            raise E.DecimalSyntaxError("Unexpected decimal point.", position=b)

    # Only an operator ends a value; a second point before that is an error
    hat_schon_punkt = False
    for b, char in enumerate(exp):
        if hat_schon_punkt:
            if isOperator(char):
                hat_schon_punkt = False
            elif char == ".":
                raise E.DecimalSyntaxError("More than one decimal point in one value.", position=b)
        elif char == ".":
            hat_schon_punkt = True


def check_chars(exp):
    for b, char in enumerate(exp):
        if not (char in ".()" or isNumber(char) or isLetter(char) or isOperator(char)):
            raise E.InvalidCharError(f"Invalid character '{char}'.", char=char, position=b)


def validate(exp, trace=None):
    """Raise the first syntax error found in `exp`; return None when it is valid."""
    checkpoint(trace, "starting-syntax-verification")

    check_parenthesis(exp)
    checkpoint(trace, "syntax-parenthesis")

    check_operators(exp)
    checkpoint(trace, "syntax-operators")

    check_decimals(exp)
    checkpoint(trace, "syntax-decimals")

    check_chars(exp)
    checkpoint(trace, "syntax-invalid-chars")
