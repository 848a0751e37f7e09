# ScientificEngine
"""Numeric primitives used by the evaluator.

All functions work on plain floats and follow IEEE double semantics: an
overflowing result becomes +/-inf and an undefined one becomes nan.  Callers
turn nan into an IndeterminateResultError.  Operand combinations that are
rejected outright (0^0, a zero root index, ...) raise DomainError here.
"""
import math
from decimal import Decimal

from . import error as E

# Built-in constants; the engine copies this table so callers can extend it.
CONSTANTS = {
    "e": math.e,
    "pi": math.pi,
    "π": math.pi,
    "∞": math.inf,
}

FUNCTIONS = [
    "sin", "cos", "tan", "asin", "acos", "atan", "csc", "sec", "cot",
    "exp", "log", "ln", "abs", "round", "floor", "ceil", "fact",
]

DEGREE = math.pi / 180

# Factorials from here on exceed the double range.
FACTORIAL_LIMIT = 171

FRACTION_ITERATIONS = 1000000


# -----------------------------
# Small helpers
# -----------------------------

def isInfinite(value):
    return value == math.inf or value == -math.inf


def isInteger(value):
    """True for finite whole numbers (2.0 counts, inf does not)."""
    return math.isfinite(value) and float(value).is_integer()


def isOdd(value):
    return isInteger(value) and abs(value % 2) == 1


def _call(function, value):
    """Run a math function with JavaScript-like results instead of exceptions."""
    try:
        return function(value)
    except ValueError:
        return math.nan
    except OverflowError:
        return math.inf


def _float_pow(base, exponent):
    """math.pow that overflows to +/-inf instead of raising."""
    if abs(base) == 1 and isInfinite(exponent):
        return math.nan
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and isOdd(exponent):
            return -math.inf
        return math.inf


# -----------------------------
# Arithmetic
# -----------------------------

def divide(operand1, operand2):
    if operand1 == 0 and operand2 == 0:
        return math.nan
    if isInfinite(operand1) and isInfinite(operand2):
        return math.nan
    elif isInfinite(operand1) and operand2 == 0:
        # Kept as is: an infinite numerator survives division by zero.
        return operand1
    elif isInfinite(operand2):
        return 0.0
    elif operand2 == 0:
        return math.copysign(math.inf, operand1) * math.copysign(1.0, operand2)
    return operand1 / operand2


def power(base, exponent):
    """base ^ exponent as resolved by the power pass."""
    if math.isnan(base) or math.isnan(exponent):
        return math.nan

    if base == 0 and exponent == 0:
        raise E.DomainError("A power with zero base and zero exponent can't be solved.",
                            operator="^", base=base, exponent=exponent)
    elif exponent == 0:
        return 1.0
    elif base == 0:
        if exponent > 0:
            return 0.0
        raise E.DomainError("A power with zero base can only have a positive exponent.",
                            operator="^", base=base, exponent=exponent)

    if isInteger(exponent) or isInfinite(exponent):
        return _float_pow(base, exponent)
    if base > 0:
        return _float_pow(base, exponent)
    raise E.DomainError("A power with negative base and decimal exponent can't be solved.",
                        operator="^", base=base, exponent=exponent)


def root(index, radicand):
    """index-th root of radicand, i.e. radicand ^ (1 / index)."""
    if math.isnan(index) or math.isnan(radicand):
        return math.nan

    if index == 0:
        raise E.DomainError("The index of a root can't be zero.",
                            operator="˅", index=index, radicand=radicand)
    elif radicand == 0:
        if index > 0:
            return 0.0
        raise E.DomainError("A root of zero can only have a positive index.",
                            operator="˅", index=index, radicand=radicand)

    exponent = 1 / index
    if isInteger(exponent) or isInfinite(exponent):
        return _float_pow(radicand, exponent)
    if radicand > 0:
        return _float_pow(radicand, exponent)

    # Odd roots of negative numbers stay real: ∛-8 = -2
    if isOdd(index):
        return -_float_pow(-radicand, exponent)
    raise E.DomainError("The root of a negative number can't be solved for this index.",
                        operator="˅", index=index, radicand=radicand)


def pow_signed(base, exponent):
    """Power computed as exp(exponent * ln|base|) with the sign of base restored.

    A negative base keeps its sign unless the exponent is an even integer.
    """
    magnitude = abs(base)
    logarithm = math.log(magnitude) if magnitude != 0 else -math.inf
    ergebnis = _call(math.exp, exponent * logarithm)

    if base < 0 and not (isInteger(exponent) and not isOdd(exponent)):
        return -ergebnis
    return ergebnis


def factorial(value):
    if value >= FACTORIAL_LIMIT:
        return math.inf
    elif value == 0:
        return 1.0
    elif isInteger(value) and value > 0:
        ergebnis = 1.0
        for i in range(2, int(value) + 1):
            ergebnis *= i
        return ergebnis
    raise E.DomainError("The function 'fact' can't solve a negative or decimal value.",
                        function="fact", argument=value)


def fractionate(decimal):
    """Approximate a decimal as (numerator, denominator).

    Greedy search: raise the numerator while the fraction is too small,
    otherwise take the next denominator.  Stops on an exact match or after
    FRACTION_ITERATIONS steps and returns the last candidate.
    """
    if not math.isfinite(decimal):
        raise E.DomainError("Only finite values can be converted into a fraction.",
                            function="fractionate", argument=decimal)

    decimal = math.floor(decimal * 100000000 + 0.5) / 100000000

    zaehler = math.ceil(decimal)
    nenner = 1
    fraction = zaehler / nenner
    iteration = FRACTION_ITERATIONS

    while fraction != decimal and iteration > 0:
        if fraction < decimal:
            zaehler += 1
        else:
            nenner += 1
            zaehler = int(decimal * nenner)
        fraction = zaehler / nenner
        iteration -= 1

    return zaehler, nenner


# -----------------------------
# Trigonometry
# -----------------------------

def _angle(angle, radians):
    if radians:
        return angle
    return angle * DEGREE


def sin(angle, radians=False):
    # Rounded so that sin(180°) is exactly 0 and tan stays clean.
    return round(_call(math.sin, _angle(angle, radians)), 15)


def cos(angle, radians=False):
    return round(_call(math.cos, _angle(angle, radians)), 15)


def tan(angle, radians=False):
    return divide(sin(angle, radians), cos(angle, radians))


def csc(angle, radians=False):
    return divide(1.0, sin(angle, radians))


def sec(angle, radians=False):
    return divide(1.0, cos(angle, radians))


def cot(angle, radians=False):
    return divide(1.0, tan(angle, radians))


def _inverse(function, ratio, radians):
    angle = _call(function, ratio)
    if radians:
        return angle
    return angle / DEGREE


def asin(ratio, radians=False):
    return _inverse(math.asin, ratio, radians)


def acos(ratio, radians=False):
    return _inverse(math.acos, ratio, radians)


def atan(ratio, radians=False):
    return _inverse(math.atan, ratio, radians)


# -----------------------------
# Other single-argument functions
# -----------------------------

def exp(value):
    return _call(math.exp, value)


def log(value):
    return _call(math.log10, value)


def ln(value):
    return _call(math.log, value)


def absolute(value):
    return abs(value)


def round_half_up(value):
    """Nearest integer, halves toward +inf (2.5 -> 3, -2.5 -> -2)."""
    if not math.isfinite(value):
        return value
    unten = math.floor(value)
    if value - unten >= 0.5:
        return float(unten + 1)
    return float(unten)


def floor(value):
    if not math.isfinite(value):
        return value
    return float(math.floor(value))


def ceil(value):
    if not math.isfinite(value):
        return value
    return float(math.ceil(value))


_TRIG = {
    "sin": sin, "cos": cos, "tan": tan,
    "asin": asin, "acos": acos, "atan": atan,
    "csc": csc, "sec": sec, "cot": cot,
}

_PLAIN = {
    "exp": exp, "log": log, "ln": ln, "abs": absolute,
    "round": round_half_up, "floor": floor, "ceil": ceil,
}


def apply_function(name, argument, radians=False):
    """Check the argument's domain and evaluate function `name` on it."""
    if name not in FUNCTIONS:
        raise E.UnknownFunctionError(f"Function '{name}' is not recognized.", function=name)

    if name in ("asin", "acos") and (argument < -1 or argument > 1):
        raise E.DomainError(f"Invalid argument for function '{name}': {to_plain_string(argument)}",
                            function=name, argument=argument)

    if name in ("log", "ln") and not argument > 0:
        raise E.DomainError(f"The function '{name}' can't solve a negative value or zero.",
                            function=name, argument=argument)

    if name == "fact":
        if argument == math.inf:
            return math.inf
        if not isInteger(argument) or argument < 0:
            raise E.DomainError("The function 'fact' can't solve a negative or decimal value.",
                                function=name, argument=argument)
        return factorial(argument)

    if name in _TRIG:
        return _TRIG[name](argument, radians)
    return _PLAIN[name](argument)


# -----------------------------
# Number -> text
# -----------------------------

def to_plain_string(value):
    """Render a number as plain decimal text, never in exponent notation.

    Infinity is rendered as 'Infinity' so it can be fed back into an
    expression; -0.0 becomes '0' and whole numbers lose their '.0'.
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if isInfinite(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    # repr gives the shortest round-trip digits; Decimal moves the point for us
    return format(Decimal(repr(value)).normalize(), "f")
