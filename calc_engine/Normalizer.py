# Normalizer.py
"""Rewrites a raw expression into the canonical form the validator expects.

Steps run in a fixed order, each on the output of the previous one:
constants, whitespace, scientific notation, sign runs, special operators,
implicit multiplication.
"""
import re

from . import ScientificEngine
from .debug import checkpoint

# Internal root operator: "<index>˅<radicand>"
ROOT = "˅"

DIGITS = "0123456789"
LETTERS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"

_CONSTANT_RUN = re.compile(r"[A-Za-zπ∞]+")
_SCIENTIFIC = re.compile(r"\d+(?:\.\d+)?E[+-]?\d+")


def isNumber(char):
    return len(char) == 1 and char in DIGITS


def isLetter(char):
    return len(char) == 1 and char in LETTERS


def replace_constants(exp, constants):
    """Replace every letter run that names a constant by '(<value>)'."""

    def substitute(match):
        name = match.group()
        value = constants.get(name)
        if value is None:
            return name
        return "(" + ScientificEngine.to_plain_string(value) + ")"

    return _CONSTANT_RUN.sub(substitute, exp)


def expand_scientific(exp):
    """'1.5E2' -> '150', '2E-3' -> '0.002'."""
    return _SCIENTIFIC.sub(lambda m: ScientificEngine.to_plain_string(float(m.group())), exp)


def reduce_signs(exp):
    """Collapse '--'/'++' into '+' and '-+'/'+-' into '-' until none is left."""
    b = 0
    while b < len(exp) - 1:
        fragment = exp[b:b + 2]
        if fragment == "--" or fragment == "++":
            exp = exp[:b] + "+" + exp[b + 2:]
        elif fragment == "-+" or fragment == "+-":
            exp = exp[:b] + "-" + exp[b + 2:]
        else:
            b += 1
    return exp


def replace_special_operators(exp):
    # Roots; a glyph directly followed by another root glyph is left alone
    exp = re.sub(r"˟√(?![˟√∛∜])", ROOT, exp)
    exp = re.sub(r"√(?![√∛∜])", "(2)" + ROOT, exp)
    exp = re.sub(r"∛(?![√∛∜])", "(3)" + ROOT, exp)
    exp = re.sub(r"∜(?![√∛∜])", "(4)" + ROOT, exp)

    # Powers
    exp = re.sub(r"²(?![²³])", "^(2)", exp)
    exp = re.sub(r"³(?![²³])", "^(3)", exp)

    # Inverse trigonometric notation
    exp = exp.replace("sin{-1}", "asin")
    exp = exp.replace("cos{-1}", "acos")
    exp = exp.replace("tan{-1}", "atan")
    return exp


def insert_multiplication(exp):
    """Make juxtaposed factors explicit: ')(' , '2(' , '2x' and ')2' get a '*'."""
    exp = exp.replace(")(", ")*(")

    b = 0
    while b < len(exp) - 1:
        if isNumber(exp[b]) and (exp[b + 1] == "(" or isLetter(exp[b + 1])):
            exp = exp[:b + 1] + "*" + exp[b + 1:]
            b += 1
        b += 1

    b = 0
    while b < len(exp) - 1:
        if exp[b] == ")" and isNumber(exp[b + 1]):
            exp = exp[:b + 1] + "*" + exp[b + 1:]
            b += 1
        b += 1

    return exp


def normalize(raw, constants=None, trace=None):
    """Return the canonical form of `raw`."""
    if constants is None:
        constants = ScientificEngine.CONSTANTS

    checkpoint(trace, "initial-expression", raw)

    exp = replace_constants(raw, constants)
    checkpoint(trace, "fix-replace-constant", exp)

    exp = exp.replace(" ", "")
    checkpoint(trace, "fix-white-spaces", exp)

    exp = expand_scientific(exp)
    checkpoint(trace, "fix-scientific-notation", exp)

    exp = reduce_signs(exp)
    checkpoint(trace, "fix-operators-reduction", exp)

    exp = replace_special_operators(exp)
    checkpoint(trace, "fix-replace-special-operators", exp)

    exp = insert_multiplication(exp)
    checkpoint(trace, "fix-multiplication-without-operator", exp)

    return exp
