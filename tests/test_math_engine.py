import math

import pytest

from calc_engine import CallContext
from calc_engine import MathEngine as M
from calc_engine import error as E


def make_context(variables=None, radians=False, trace=None):
    return CallContext(expression="", variables=variables or {}, radians=radians, trace=trace)


def test_solve_segment_precedence():
    context = make_context()
    assert M.solve_segment("2+3*4", context) == "{14}"
    assert M.solve_segment("8/2/2", context) == "{2}"
    assert M.solve_segment("2^3^2", context) == "{64}"
    assert M.solve_segment("10-4-3", context) == "{3}"


def test_solve_segment_signs():
    context = make_context()
    assert M.solve_segment("5-3*-2", context) == "{11}"
    assert M.solve_segment("-2^2", context) == "{-4}"
    assert M.solve_segment("-3", context) == "{-3}"
    assert M.solve_segment("2*{-2}", context) == "{-4}"


def test_solve_segment_root():
    context = make_context()
    assert M.solve_segment("{2}˅9", context) == "{3}"
    assert M.solve_segment("2˅16+1", context) == "{5}"


def test_solve_functions():
    context = make_context()
    assert M.solve_functions("sin{30}", context) == "0.5"
    assert M.solve_functions("abs{-3}+floor{2.7}", context) == "3+2"
    assert M.solve_functions("2*x", context) == "2*x"
    assert M.solve_functions("{Infinity}", context) == "{Infinity}"


def test_solve_functions_errors():
    context = make_context()
    with pytest.raises(E.UnknownFunctionError) as info:
        M.solve_functions("foo{2}", context)
    assert info.value.fields["function"] == "foo"

    with pytest.raises(E.MissingArgumentError):
        M.solve_functions("sin+1", context)

    with pytest.raises(E.DomainError):
        M.solve_functions("log{-1}", context)


def test_function_name_bound_as_variable_is_not_a_missing_argument():
    context = make_context({"ln": 2})
    assert M.solve_functions("ln+1", context) == "ln+1"


def test_resolve_operand():
    context = make_context({"x": 3})
    assert M.resolve_operand("{-2}", context) == -2
    assert M.resolve_operand("2.5", context) == 2.5
    assert M.resolve_operand("x", context) == 3
    assert M.resolve_operand("-x", context) == -3
    assert M.resolve_operand("Infinity", context) == math.inf
    with pytest.raises(E.UnknownVariableError) as info:
        M.resolve_operand("y", context)
    assert info.value.fields["variable"] == "y"


def test_solve_expression():
    context = make_context({"x": 5})
    assert M.solve_expression("2*(3+4)", context) == 14
    assert M.solve_expression("2*(3-5)", context) == -4
    assert M.solve_expression("((2))", context) == 2
    assert M.solve_expression("2*x", context) == 10
    assert M.solve_expression("x", context) == 5
    assert M.solve_expression("sin((30))", context) == 0.5


def test_solve_expression_infinity():
    context = make_context()
    assert M.solve_expression("1/0", context) == math.inf
    assert M.solve_expression("(Infinity)/0", context) == math.inf
    assert M.solve_expression("fact((Infinity))", context) == math.inf


def test_indeterminate_results():
    context = make_context()
    with pytest.raises(E.IndeterminateResultError):
        M.solve_expression("0/0", context)
    with pytest.raises(E.IndeterminateResultError):
        M.solve_expression("(Infinity)-(Infinity)", context)


def test_solve_expression_trace():
    events = []
    context = make_context(trace=lambda stage, value: events.append((stage, value)))
    M.solve_expression("1+2*3", context)

    stages = [stage for stage, _ in events]
    assert stages[0] == "starting-operation"
    assert stages[-1] == "expression-result"
    assert events[-1][1] == 7

    passes = [value["pass"] for stage, value in events if stage == "solving-operation"]
    assert passes == ["multiply-divide", "add-subtract"]
