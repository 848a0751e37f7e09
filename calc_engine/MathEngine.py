# MathEngine.py
"""""
Evaluator for canonical expressions.

Pipeline
--------
1) Parenthesis loop: wrap the expression in one outer pair, then repeatedly
   solve the innermost group and splice its result back in.
2) Segment solver (parenthesis-free text):
   - resolve function calls such as 'sin30' or 'log{2.5}'
   - three precedence passes, each strictly left to right:
     root/power, multiply/divide, add/subtract
3) A solved segment comes back wrapped in '{' '}' so the next outer pass
   sees a signed intermediate value as one operand.
"""""

import math
import re

from . import ScientificEngine
from . import error as E
from .debug import checkpoint
from .Normalizer import ROOT, reduce_signs

OPEN_MARK = "{"
CLOSE_MARK = "}"

_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+|Infinity)\Z")

_LETTERS = re.compile(r"[A-Za-z]+")
_ARGUMENT = re.compile(r"\{[+-]?(?:[0-9.]+|Infinity)\}|[0-9.]+")

# Operands: number, variable name or a '{...}' wrapped intermediate value.
# Only the add/subtract pass takes a sign in front of its left operand.
_LEFT = r"(?:\{[+-]?)?[0-9.A-Za-z]+\}?"
_LEFT_SIGNED = r"[+-]?" + _LEFT
_RIGHT = r"[+-]?\{?[+-]?[0-9.A-Za-z]+\}?"

PASSES = [
    ("root-power", re.compile("(" + _LEFT + ")([" + ROOT + "^])(" + _RIGHT + ")")),
    ("multiply-divide", re.compile("(" + _LEFT + r")([*/])(" + _RIGHT + ")")),
    ("add-subtract", re.compile("(" + _LEFT_SIGNED + r")([+-])(" + _RIGHT + ")")),
]


# -----------------------------
# Utilities / small helpers
# -----------------------------

def strip_marks(exp):
    return exp.replace(OPEN_MARK, "").replace(CLOSE_MARK, "")


def resolve_operand(operand, context):
    """Turn operand text into a float, looking names up in the call's variables."""
    value = reduce_signs(strip_marks(operand))

    if _NUMBER.match(value):
        return float(value)

    name = value
    sign = 1.0
    if name[:1] in ("+", "-") and len(name) > 1:
        sign = -1.0 if name[0] == "-" else 1.0
        name = name[1:]

    variables = context.variables or {}
    if name not in variables or variables[name] is None:
        raise E.UnknownVariableError(f"Variable '{value}' is not recognized.", variable=name)
    return sign * float(variables[name])


def operate(operator, operand1, operand2):
    if operator == ROOT:
        return ScientificEngine.root(operand1, operand2)
    elif operator == "^":
        return ScientificEngine.power(operand1, operand2)
    elif operator == "*":
        return operand1 * operand2
    elif operator == "/":
        return ScientificEngine.divide(operand1, operand2)
    elif operator == "+":
        return operand1 + operand2
    elif operator == "-":
        return operand1 - operand2
    raise E.CalculationError(f"Unknown operator: {operator}", code="9999", operator=operator)


# -----------------------------
# Segment solver
# -----------------------------

def solve_functions(exp, context):
    """Replace every '<name><argument>' call in a segment by its value."""
    position = 0
    while True:
        match = _LETTERS.search(exp, position)
        if match is None:
            return exp

        name = match.group()
        argument = _ARGUMENT.match(exp, match.end())

        if argument is None:
            if name in ScientificEngine.FUNCTIONS and name not in (context.variables or {}):
                raise E.MissingArgumentError(f"No value was given for the function '{name}'.",
                                             function=name)
            # Variable or Infinity, resolved as an operand later
            position = match.end()
            continue

        if name not in ScientificEngine.FUNCTIONS:
            raise E.UnknownFunctionError(f"Function '{name}' is not recognized.", function=name)

        zahl = float(strip_marks(argument.group()))
        ergebnis = ScientificEngine.apply_function(name, zahl, context.radians)

        if math.isnan(ergebnis):
            raise E.IndeterminateResultError(function=name, argument=zahl)

        exp = exp[:match.start()] + ScientificEngine.to_plain_string(ergebnis) + exp[argument.end():]
        checkpoint(context.trace, "solving-function",
                   {"function": name + argument.group(), "result": ergebnis, "exp": exp})
        position = match.start()


def solve_operations(exp, context):
    """Run the three precedence passes over a function-free segment."""
    for pass_name, pattern in PASSES:
        match = pattern.search(exp)
        while match is not None:
            operand1 = resolve_operand(match.group(1), context)
            operator = match.group(2)
            operand2 = resolve_operand(match.group(3), context)

            ergebnis = operate(operator, operand1, operand2)
            if math.isnan(ergebnis):
                raise E.IndeterminateResultError(operator=operator, left=operand1, right=operand2)

            exp = exp[:match.start()] + ScientificEngine.to_plain_string(ergebnis) + exp[match.end():]
            checkpoint(context.trace, "solving-operation", {
                "pass": pass_name,
                "leftOperand": match.group(1),
                "operator": operator,
                "rightOperand": match.group(3),
                "result": ergebnis,
                "exp": exp,
            })

            # A negative result may now sit next to another sign
            exp = reduce_signs(exp)
            match = pattern.search(exp)
    return exp


def solve_segment(exp, context):
    """Solve a parenthesis-free segment and return its value wrapped in marks."""
    checkpoint(context.trace, "operating-simple-expression", exp)

    exp = solve_functions(exp, context)
    checkpoint(context.trace, "solved-functions", exp)

    exp = solve_operations(exp, context)

    exp = reduce_signs(strip_marks(exp))
    return OPEN_MARK + exp + CLOSE_MARK


# -----------------------------
# Parenthesis loop
# -----------------------------

def solve_expression(canonical, context):
    """Evaluate a validated canonical expression and return the raw float."""
    checkpoint(context.trace, "starting-operation")

    exp = "(" + canonical + ")"

    while exp[:1] == "(" and exp[-1:] == ")":
        checkpoint(context.trace, "operating-expression", exp)

        i_right = exp.find(")")
        i_left = exp.rfind("(", 0, i_right)

        simple_exp = solve_segment(exp[i_left + 1:i_right], context)
        exp = exp[:i_left] + simple_exp + exp[i_right + 1:]

    exp = reduce_signs(strip_marks(exp))
    ergebnis = resolve_operand(exp, context)

    checkpoint(context.trace, "expression-result", ergebnis)
    return ergebnis
