import itertools

import pytest

from calc_engine import Validator as V
from calc_engine import error as E


@pytest.mark.parametrize("exp", ["(2+3", "2+3)", ")2(", "(2))(", "()", "2*()", ""])
def test_parenthesis_errors(exp):
    with pytest.raises(E.ParenthesisError):
        V.check_parenthesis(exp)


def test_parenthesis_error_reasons():
    with pytest.raises(E.ParenthesisError) as info:
        V.check_parenthesis("(1))")
    assert info.value.fields["reason"] == "unopened"
    assert info.value.fields["position"] == 3

    with pytest.raises(E.ParenthesisError) as info:
        V.check_parenthesis("((1)")
    assert info.value.fields["reason"] == "unclosed"


def _balanced(tokens):
    depth = 0
    for token in tokens:
        depth += 1 if token == "(1" else -1
        if depth < 0:
            return False
    return depth == 0


def test_parenthesis_check_accepts_exactly_balanced_strings():
    for length in range(1, 7):
        for tokens in itertools.product(["(1", ")"], repeat=length):
            exp = "".join(tokens)
            if _balanced(tokens):
                V.check_parenthesis(exp)
            else:
                with pytest.raises(E.ParenthesisError):
                    V.check_parenthesis(exp)


@pytest.mark.parametrize("exp, char", [
    ("*2", "*"),
    ("^2", "^"),
    ("˅2", "˅"),
    ("2+", "+"),
    ("2/", "/"),
])
def test_operator_at_the_edges(exp, char):
    with pytest.raises(E.OperatorError) as info:
        V.check_operators(exp)
    assert info.value.fields["char"] == char


@pytest.mark.parametrize("exp", ["2*/3", "2+*3", "(*3)", "2^)", "2-.5"])
def test_operator_neighbours(exp):
    with pytest.raises(E.OperatorError):
        V.check_operators(exp)


def test_operator_error_names_the_neighbour():
    with pytest.raises(E.OperatorError) as info:
        V.check_operators("2+*3")
    assert info.value.fields["char"] == "+"
    assert info.value.fields["neighbor"] == "*"


@pytest.mark.parametrize("exp", ["2*-3", "(-2)", "-2", "2^+3", "x*y", "(2)˅9", "2-(3)"])
def test_valid_operators(exp):
    V.check_operators(exp)


@pytest.mark.parametrize("exp", [".5", "5.", "1.2.3", "1.(5)", "x.5", "(1.5)*2.5.1"])
def test_decimal_errors(exp):
    with pytest.raises(E.DecimalSyntaxError):
        V.check_decimals(exp)


@pytest.mark.parametrize("exp", ["1.5+2.5", "(1.5)", "0.25*4", "3"])
def test_valid_decimals(exp):
    V.check_decimals(exp)


def test_invalid_characters():
    with pytest.raises(E.InvalidCharError) as info:
        V.check_chars("2&3")
    assert info.value.fields["char"] == "&"

    with pytest.raises(E.InvalidCharError):
        V.check_chars("2{3}")


def test_validate_reports_the_first_failure():
    with pytest.raises(E.ParenthesisError):
        V.validate("(2+&")
    with pytest.raises(E.OperatorError):
        V.validate("2+&3")
    with pytest.raises(E.InvalidCharError):
        V.validate("2&3")


def test_validate_accepts_canonical_expressions():
    for exp in ["2*(3+4)", "(2)˅9", "sin(30)", "2*(3.141592653589793)", "fact((Infinity))"]:
        V.validate(exp)


def test_validate_trace():
    stages = []
    V.validate("1+1", trace=lambda stage, value: stages.append(stage))
    assert stages == [
        "starting-syntax-verification",
        "syntax-parenthesis",
        "syntax-operators",
        "syntax-decimals",
        "syntax-invalid-chars",
    ]
